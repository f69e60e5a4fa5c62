"""Amount conversion between BTC, satoshi and the GDK display units."""

from __future__ import annotations

from decimal import Decimal

SAT_PER_BTC = Decimal(100_000_000)
SAT_PER_MBTC = Decimal(100_000)
SAT_PER_BIT = Decimal(100)


def to_decimal(amount: Decimal | float | int | str) -> Decimal:
    """Coerce a JSON amount to Decimal without binary float artefacts."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        msg = f"not an amount: {amount!r}"
        raise TypeError(msg)
    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def btc_to_sat(amount: Decimal | float | int | str) -> int:
    """Convert a BTC amount to satoshis, rounding to the nearest unit."""
    return round(to_decimal(amount) * SAT_PER_BTC)


def format_amount(value: Decimal) -> str:
    """Render a Decimal as a plain decimal string (no exponent, no trailing zeros)."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def sat_to_units(satoshi: int) -> dict[str, str]:
    """Express a satoshi amount in every GDK denomination."""
    sat = Decimal(satoshi)
    bits = format_amount(sat / SAT_PER_BIT)
    return {
        "satoshi": str(satoshi),
        "bits": bits,
        "ubtc": bits,
        "mbtc": format_amount(sat / SAT_PER_MBTC),
        "btc": format_amount(sat / SAT_PER_BTC),
    }
