"""IPv6 address classification and address text helpers.

RFC 4291 §2.5.5.2 defines two ways of carrying an IPv4 address inside an IPv6
address:

- IPv4-mapped: 80 zero bits, 16 one bits, then the IPv4 address
  (``::ffff:192.168.1.1``).
- IPv4-compatible (deprecated by the RFC, still seen in the wild): 96 zero
  bits followed by the IPv4 address (``::192.168.1.1``).

`classify_ipv6` decides which form (if any) a 16 byte address takes so the
endpoint builder can store the embedded address as IPv4 instead. The IPv6
loopback ``::1`` shares the IPv4-compatible prefix and is deliberately kept
as native IPv6.
"""
from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import InvalidArgumentError

BytesLike = Union[bytes, bytearray, memoryview]

IPV6_LENGTH = 16
_EMBEDDED_OFFSET = 12


class AddressKind(str, Enum):
    """Outcome of classifying a 16 byte IPv6 address."""

    IPV4_MAPPED = "ipv4-mapped"
    IPV4_COMPATIBLE = "ipv4-compatible"
    IPV6 = "ipv6"


@dataclass(frozen=True)
class Ipv6Classification:
    """Result of `classify_ipv6`.

    ``ipv4`` holds the packed embedded address for the two IPv4 kinds and is
    ``None`` for a native IPv6 address.
    """

    kind: AddressKind
    ipv4: Optional[int] = None

    @property
    def embeds_ipv4(self) -> bool:
        return self.kind is not AddressKind.IPV6


def as_ipv6_bytes(address: BytesLike) -> bytes:
    """Copy a bytes-like IPv6 address into immutable ``bytes``.

    Raises:
        InvalidArgumentError: if ``address`` is not bytes-like or is not
            exactly 16 bytes long.
    """
    if not isinstance(address, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError(
            f"ipv6 addresses are bytes, not {type(address).__name__}"
        )
    raw = bytes(address)
    if len(raw) != IPV6_LENGTH:
        raise InvalidArgumentError(f"ipv6 addresses are 16 bytes: {len(raw)}")
    return raw


def classify_ipv6(address: BytesLike) -> Ipv6Classification:
    """Classify a 16 byte address as IPv4-mapped, IPv4-compatible or IPv6.

    Both hypotheses are checked in one pass. Bytes 10 and 11 separate the two
    embedded forms (``0xff`` for mapped, zero for compatible), so at most one
    of them survives.

    Args:
        address: The raw 16 byte address, most significant byte first.

    Returns:
        The classification, carrying the packed IPv4 value when one is
        embedded.

    Raises:
        InvalidArgumentError: if ``address`` is not 16 bytes.
    """
    raw = as_ipv6_bytes(address)
    mapped = True  # 80 unset bits, then 16 set bits
    compat = True  # 96 unset bits
    for i, val in enumerate(raw):
        if i in (10, 11):
            if val == 0xFF:
                compat = False
            else:
                mapped = False
        elif i == 15 and val == 1 and not any(raw[12:15]):
            # ::1 is the IPv6 loopback, not 0.0.0.1
            compat = False
        if val == 0:
            continue
        if i < 12:
            compat = False
        if i < 10:
            mapped = False
    if mapped or compat:
        embedded = int.from_bytes(raw[_EMBEDDED_OFFSET:], "big")
        kind = AddressKind.IPV4_MAPPED if mapped else AddressKind.IPV4_COMPATIBLE
        return Ipv6Classification(kind=kind, ipv4=embedded)
    return Ipv6Classification(kind=AddressKind.IPV6)


def ipv4_to_text(ipv4: int) -> str:
    """Render a packed IPv4 address in dotted-quad form."""
    return str(ipaddress.IPv4Address(ipv4 & 0xFFFFFFFF))


def text_to_ipv4(text: str) -> int:
    """Parse dotted-quad text into a packed IPv4 address."""
    try:
        return int(ipaddress.IPv4Address(text.strip()))
    except (ipaddress.AddressValueError, AttributeError) as e:
        raise InvalidArgumentError(f"invalid ipv4 address {text!r}") from e


def ipv6_to_text(address: BytesLike) -> str:
    """Render 16 raw bytes in compressed IPv6 text form."""
    return str(ipaddress.IPv6Address(as_ipv6_bytes(address)))


def text_to_ipv6(text: str) -> bytes:
    """Parse address text into 16 raw IPv6 bytes.

    Dotted IPv4 text is accepted and returned in its IPv4-mapped form so the
    result can be fed to `classify_ipv6` either way.
    """
    try:
        parsed = ipaddress.ip_address(text.strip())
    except (ValueError, AttributeError) as e:
        raise InvalidArgumentError(f"invalid ip address {text!r}") from e
    if isinstance(parsed, ipaddress.IPv4Address):
        return ipaddress.IPv6Address(f"::ffff:{parsed}").packed
    return parsed.packed


__all__ = [
    "AddressKind",
    "Ipv6Classification",
    "IPV6_LENGTH",
    "as_ipv6_bytes",
    "classify_ipv6",
    "ipv4_to_text",
    "ipv6_to_text",
    "text_to_ipv4",
    "text_to_ipv6",
]
