"""Raw transaction codec — legacy and BIP144 (segwit) wire formats.

Only what the wallet adapter needs when it re-encodes a transaction fetched
with ``getrawtransaction``:

- decode from hex / bytes, rejecting truncated or over-long input
- encode back, with or without witness data
- txid
- BIP141 size, weight and virtual size
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from io import BytesIO

from gdk_rpc.utils.crypto import sha256d

# Sequence number of a final input that does not signal replaceability
DEFAULT_SEQUENCE = 0xFFFFFFFF

# BIP144 extended serialization: a zero "input count" marker, then the flag
SEGWIT_MARKER = 0x00
SEGWIT_FLAG = 0x01

WITNESS_SCALE_FACTOR = 4

_VARINT_PREFIXES = ((0xFD, "<H"), (0xFE, "<I"), (0xFF, "<Q"))


# ---------------------------------------------------------------------------
# Compact size integers
# ---------------------------------------------------------------------------


def encode_varint(n: int) -> bytes:
    """Encode ``n`` as a CompactSize integer (1, 3, 5 or 9 bytes)."""
    if n < 0xFD:
        return bytes([n])
    for prefix, fmt in _VARINT_PREFIXES:
        width = struct.calcsize(fmt)
        if n < 1 << (8 * width):
            return bytes([prefix]) + struct.pack(fmt, n)
    msg = f"Integer too large for a varint: {n}"
    raise ValueError(msg)


def read_varint(stream: BytesIO) -> int:
    """Decode a CompactSize integer from ``stream``.

    Raises:
        ValueError: If the stream ends early.
    """
    head = stream.read(1)
    if not head:
        msg = "Unexpected end of stream reading varint"
        raise ValueError(msg)
    for prefix, fmt in _VARINT_PREFIXES:
        if head[0] == prefix:
            return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))[0]
    return head[0]


def _read_exact(stream: BytesIO, n: int) -> bytes:
    data = stream.read(n)
    if len(data) != n:
        msg = f"Unexpected end of stream (wanted {n} bytes, got {len(data)})"
        raise ValueError(msg)
    return data


def _read_bytes(stream: BytesIO) -> bytes:
    """Read a varint length-prefixed byte string."""
    return _read_exact(stream, read_varint(stream))


def _write_bytes(out: BytesIO, data: bytes) -> None:
    out.write(encode_varint(len(data)))
    out.write(data)


def _read_uint32(stream: BytesIO) -> int:
    return struct.unpack("<I", _read_exact(stream, 4))[0]


# ---------------------------------------------------------------------------
# Inputs and outputs
# ---------------------------------------------------------------------------


@dataclass
class TxInput:
    """One spent outpoint.

    Attributes:
        prev_hash: Hash of the funding transaction, internal byte order.
        prev_index: Output index within the funding transaction.
        script_sig: Unlocking script; empty for native segwit spends.
        sequence: nSequence.
        witness: Witness stack items; empty for legacy inputs.
    """

    prev_hash: bytes
    prev_index: int
    script_sig: bytes = b""
    sequence: int = DEFAULT_SEQUENCE
    witness: list[bytes] = field(default_factory=list)

    def write(self, out: BytesIO) -> None:
        out.write(self.prev_hash)
        out.write(struct.pack("<I", self.prev_index))
        _write_bytes(out, self.script_sig)
        out.write(struct.pack("<I", self.sequence))

    def write_witness(self, out: BytesIO) -> None:
        out.write(encode_varint(len(self.witness)))
        for item in self.witness:
            _write_bytes(out, item)

    @classmethod
    def read(cls, stream: BytesIO) -> TxInput:
        prev_hash = _read_exact(stream, 32)
        prev_index = _read_uint32(stream)
        script_sig = _read_bytes(stream)
        return cls(prev_hash, prev_index, script_sig, _read_uint32(stream))


@dataclass
class TxOutput:
    """An amount locked to a script."""

    value: int
    script_pubkey: bytes

    def write(self, out: BytesIO) -> None:
        out.write(struct.pack("<q", self.value))
        _write_bytes(out, self.script_pubkey)

    @classmethod
    def read(cls, stream: BytesIO) -> TxOutput:
        value = struct.unpack("<q", _read_exact(stream, 8))[0]
        return cls(value, _read_bytes(stream))


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


@dataclass
class Transaction:
    """A decoded Bitcoin transaction.

    Usage::

        tx = Transaction.from_hex(raw_hex)
        tx.txid(), tx.weight, tx.vsize
    """

    version: int = 2
    inputs: list[TxInput] = field(default_factory=list)
    outputs: list[TxOutput] = field(default_factory=list)
    locktime: int = 0

    @property
    def has_witness(self) -> bool:
        """True if any input carries witness data."""
        return any(inp.witness for inp in self.inputs)

    # -- Encoding ----------------------------------------------------------

    def serialize(self, *, include_witness: bool = True) -> bytes:
        """Encode to wire bytes.

        The BIP144 layout is produced when ``include_witness`` is set and
        some input has a witness; otherwise the legacy layout.
        """
        segwit = include_witness and self.has_witness
        out = BytesIO()
        out.write(struct.pack("<i", self.version))
        if segwit:
            out.write(bytes([SEGWIT_MARKER, SEGWIT_FLAG]))
        out.write(encode_varint(len(self.inputs)))
        for inp in self.inputs:
            inp.write(out)
        out.write(encode_varint(len(self.outputs)))
        for txout in self.outputs:
            txout.write(out)
        if segwit:
            for inp in self.inputs:
                inp.write_witness(out)
        out.write(struct.pack("<I", self.locktime))
        return out.getvalue()

    # -- Decoding ----------------------------------------------------------

    @classmethod
    def read(cls, stream: BytesIO) -> Transaction:
        """Decode one transaction from ``stream``.

        A zero input count is taken as the segwit marker, as bitcoind does.

        Raises:
            ValueError: On truncated data or an unknown segwit flag.
        """
        version = struct.unpack("<i", _read_exact(stream, 4))[0]
        count = read_varint(stream)
        segwit = count == SEGWIT_MARKER
        if segwit:
            flag = _read_exact(stream, 1)[0]
            if flag != SEGWIT_FLAG:
                msg = f"Unsupported segwit flag: {flag:#x}"
                raise ValueError(msg)
            count = read_varint(stream)
        inputs = [TxInput.read(stream) for _ in range(count)]
        outputs = [TxOutput.read(stream) for _ in range(read_varint(stream))]
        if segwit:
            for inp in inputs:
                inp.witness = [_read_bytes(stream) for _ in range(read_varint(stream))]
        return cls(version, inputs, outputs, _read_uint32(stream))

    @classmethod
    def from_bytes(cls, data: bytes) -> Transaction:
        """Decode exactly one transaction.

        Raises:
            ValueError: If the data is truncated or has trailing bytes.
        """
        stream = BytesIO(data)
        tx = cls.read(stream)
        if stream.tell() != len(data):
            msg = "Trailing bytes after transaction"
            raise ValueError(msg)
        return tx

    @classmethod
    def from_hex(cls, hex_str: str) -> Transaction:
        """Decode a hex transaction; invalid hex raises ``ValueError``."""
        return cls.from_bytes(bytes.fromhex(hex_str))

    # -- Identity ----------------------------------------------------------

    def txid(self) -> str:
        """Transaction id: double SHA-256 of the witness-stripped encoding,
        in display (reversed) hex."""
        return sha256d(self.serialize(include_witness=False))[::-1].hex()

    # -- Size --------------------------------------------------------------

    @property
    def size(self) -> int:
        """Total encoded size in bytes, witness included."""
        return len(self.serialize())

    @property
    def base_size(self) -> int:
        """Encoded size without witness data."""
        return len(self.serialize(include_witness=False))

    @property
    def weight(self) -> int:
        """BIP141 weight: ``base_size * 3 + size``."""
        return self.base_size * (WITNESS_SCALE_FACTOR - 1) + self.size

    @property
    def vsize(self) -> int:
        """Virtual size, truncated."""
        return self.weight // WITNESS_SCALE_FACTOR

