"""Error types raised for invalid endpoint input."""
from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a caller supplies a value an endpoint field cannot hold.

    Covers a missing (``None``) service name, IPv6 addresses that are not
    exactly 16 bytes, ports outside ``0..65535`` and malformed address text.
    Setters that raise leave the builder unchanged.
    """


__all__ = ["InvalidArgumentError"]
