"""HTTP surface exposing the wallet session as GDK-style JSON calls."""
