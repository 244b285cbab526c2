"""Normalized Zipkin endpoints.

An endpoint is the network identity (service name, IPv4/IPv6 address, port)
of the process that recorded a tracing event. IPv4 addresses written in IPv6
form are folded back into IPv4 so the same host always compares equal.

Typical use::

    from zipkin_endpoint import Endpoint

    endpoint = (
        Endpoint.builder()
        .service_name("Frontend")
        .ipv6(ipv6_bytes)
        .port(8080)
        .build()
    )
"""
from __future__ import annotations

from .addressing import AddressKind, Ipv6Classification, classify_ipv6
from .codec import read_endpoint, write_endpoint
from .errors import InvalidArgumentError
from .models.endpoint import Endpoint, EndpointBuilder

__all__ = [
    "AddressKind",
    "Endpoint",
    "EndpointBuilder",
    "InvalidArgumentError",
    "Ipv6Classification",
    "classify_ipv6",
    "read_endpoint",
    "write_endpoint",
]
