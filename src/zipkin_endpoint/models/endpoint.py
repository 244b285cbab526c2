"""The Endpoint value and its builder.

An `Endpoint` is the network context of a service recording a tracing event:
its service name, IPv4 and/or IPv6 address and port. Endpoints are frozen
pydantic models so they compare structurally and can be used as dict keys or
set members when deduplicating spans by originating service.

Normalization applied at every entry point:

- ``service_name`` is lower-cased (``""`` stays ``""`` and means unknown).
- an IPv6 address that merely embeds an IPv4 address (IPv4-mapped or
  IPv4-compatible) is stored as ``ipv4`` and never as ``ipv6``.
- port ``0`` is stored as ``None`` (unknown).
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..addressing import BytesLike, as_ipv6_bytes, classify_ipv6
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)

_MAX_IPV4 = 0xFFFFFFFF
_MAX_PORT = 0xFFFF


def _coerce_ipv4(value: Any) -> int:
    """Return the unsigned 32-bit pattern of ``value``.

    Negative values in the signed 32-bit range are masked to their unsigned
    equivalent.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"ipv4 must be a packed int: {value!r}")
    if not -(1 << 31) <= value <= _MAX_IPV4:
        raise InvalidArgumentError(f"ipv4 outside 32 bits: {value}")
    return value & _MAX_IPV4


def _coerce_port(value: Any) -> Optional[int]:
    """Validate a port, mapping both ``None`` and ``0`` to ``None``."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"invalid port {value!r}")
    if not 0 <= value <= _MAX_PORT:
        raise InvalidArgumentError(f"invalid port {value}")
    return value or None


class Endpoint(BaseModel):
    """Network context of a service recording a span.

    Prefer `Endpoint.builder()`; direct keyword construction applies the same
    normalization but reports problems as `pydantic.ValidationError`.
    """

    model_config = ConfigDict(frozen=True)

    # Lower-case classifier of the service, such as "zipkin-server". This is
    # the primary key for trace lookup; "" means unknown and the span is not
    # queryable by service name.
    service_name: str
    # IPv4 address packed big-endian into 32 bits, 0 if unknown.
    # Ex. 1.2.3.4 -> (1 << 24) | (2 << 16) | (3 << 8) | 4
    ipv4: int = Field(default=0, ge=0, le=_MAX_IPV4)
    # Raw 16 byte IPv6 address, None if unknown or if it embedded an IPv4.
    ipv6: Optional[bytes] = None
    port: Optional[int] = Field(default=None, ge=1, le=_MAX_PORT)

    @model_validator(mode="before")
    @classmethod
    def _normalize_embedded_ipv6(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("ipv6") is None:
            return data
        classification = classify_ipv6(data["ipv6"])
        if classification.embeds_ipv4:
            return {**data, "ipv4": classification.ipv4, "ipv6": None}
        return {**data, "ipv6": as_ipv6_bytes(data["ipv6"])}

    @field_validator("service_name")
    @classmethod
    def _lower_service_name(cls, v: str) -> str:
        return v.lower() if v else ""

    @field_validator("ipv4", mode="before")
    @classmethod
    def _unsigned_ipv4(cls, v: Any) -> int:
        return _coerce_ipv4(v)

    @field_validator("port", mode="before")
    @classmethod
    def _zero_port_is_unknown(cls, v: Any) -> Optional[int]:
        return _coerce_port(v)

    @classmethod
    def builder(cls) -> "EndpointBuilder":
        return EndpointBuilder()

    @classmethod
    def create(
        cls, service_name: str, ipv4: int, port: Optional[int] = None
    ) -> "Endpoint":
        """Legacy factory kept for callers predating the builder.

        A ``port`` of 0 or ``None`` yields an endpoint with no port.
        """
        return (
            EndpointBuilder()
            .service_name(service_name)
            .ipv4(ipv4)
            .port(port)
            .build()
        )

    def to_builder(self) -> "EndpointBuilder":
        """Return a builder seeded with this endpoint's values."""
        return EndpointBuilder(self)

    def __str__(self) -> str:
        from ..codec import write_endpoint

        return write_endpoint(self).decode("utf-8")


class EndpointBuilder:
    """Mutable accumulator producing `Endpoint` values.

    Setters validate eagerly and return the builder. A setter that raises
    leaves every field as it was. `build` may be called repeatedly.
    """

    def __init__(self, source: Optional[Endpoint] = None) -> None:
        self._service_name: str = ""
        self._ipv4: int = 0
        self._ipv6: Optional[bytes] = None
        self._port: Optional[int] = None
        if source is not None:
            self._service_name = source.service_name
            self._ipv4 = source.ipv4
            self._ipv6 = source.ipv6
            self._port = source.port

    def service_name(self, service_name: str) -> "EndpointBuilder":
        """Set the service name; lower-casing happens in `build`."""
        if service_name is None:
            raise InvalidArgumentError("serviceName is required")
        if not isinstance(service_name, str):
            raise InvalidArgumentError(
                f"serviceName must be text, not {type(service_name).__name__}"
            )
        self._service_name = service_name
        return self

    def ipv4(self, ipv4: int) -> "EndpointBuilder":
        """Set the packed IPv4 address; 0 means unknown."""
        self._ipv4 = _coerce_ipv4(ipv4)
        return self

    def ipv6(self, ipv6: Optional[BytesLike]) -> "EndpointBuilder":
        """Set the IPv6 address unless it embeds an IPv4 address.

        ``None`` leaves the current value alone. IPv4-mapped and
        IPv4-compatible addresses (RFC 4291 §2.5.5.2) set `ipv4` to the
        embedded address instead.
        """
        if ipv6 is None:
            return self
        classification = classify_ipv6(ipv6)
        if classification.embeds_ipv4:
            logger.debug(
                "Normalized %s address to ipv4 %d",
                classification.kind.value,
                classification.ipv4,
            )
            return self.ipv4(classification.ipv4)
        self._ipv6 = as_ipv6_bytes(ipv6)
        return self

    def port(self, port: Optional[int]) -> "EndpointBuilder":
        """Set the port. ``None`` and ``0`` both mean unknown."""
        coerced = _coerce_port(port)
        if port == 0:
            logger.debug("Coerced port 0 to unknown")
        self._port = coerced
        return self

    def build(self) -> Endpoint:
        return Endpoint(
            service_name=self._service_name,
            ipv4=self._ipv4,
            ipv6=self._ipv6,
            port=self._port,
        )

    def __repr__(self) -> str:
        return (
            f"EndpointBuilder(service_name={self._service_name!r}, "
            f"ipv4={self._ipv4}, ipv6={self._ipv6!r}, port={self._port})"
        )


__all__ = ["Endpoint", "EndpointBuilder"]
