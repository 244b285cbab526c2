"""Map endpoints onto OpenTelemetry span attributes and resources.

A remote endpoint (the other side of an RPC) is described with the
``peer.service`` / ``network.peer.*`` attributes, a local endpoint (the
service recording the span) with ``service.name`` / ``network.local.*``.
Unknown fields are left out rather than emitted as empty values.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from opentelemetry.sdk.resources import Resource

from .addressing import ipv4_to_text, ipv6_to_text
from .models.endpoint import Endpoint

logger = logging.getLogger(__name__)

_REMOTE_KEYS = ("peer.service", "network.peer.address", "network.peer.port")
_LOCAL_KEYS = ("service.name", "network.local.address", "network.local.port")


def endpoint_attributes(endpoint: Endpoint, *, remote: bool = True) -> Dict[str, Any]:
    """Return the OpenTelemetry attributes describing ``endpoint``.

    Only one address attribute exists per side, so the IPv4 address is used
    when known and the IPv6 address otherwise.

    Args:
        endpoint: The endpoint to describe.
        remote: True for the peer of a span, False for the recording service.

    Returns:
        Attribute mapping with unknown fields omitted.
    """
    service_key, address_key, port_key = _REMOTE_KEYS if remote else _LOCAL_KEYS
    attrs: Dict[str, Any] = {}
    if endpoint.service_name:
        attrs[service_key] = endpoint.service_name
    if endpoint.ipv4 != 0:
        attrs[address_key] = ipv4_to_text(endpoint.ipv4)
    elif endpoint.ipv6 is not None:
        attrs[address_key] = ipv6_to_text(endpoint.ipv6)
    if endpoint.port is not None:
        attrs[port_key] = endpoint.port
    return attrs


def apply_endpoint_attributes(span_ot: Any, endpoint: Endpoint, *, remote: bool = True) -> None:
    """Set the attributes of ``endpoint`` on an OpenTelemetry span.

    Args:
        span_ot: Any object exposing ``set_attribute(key, value)``.
        endpoint: The endpoint to describe.
        remote: See `endpoint_attributes`.
    """
    attrs = endpoint_attributes(endpoint, remote=remote)
    for key, value in attrs.items():
        span_ot.set_attribute(key, value)
    logger.debug("Applied %d endpoint attribute(s) remote=%s", len(attrs), remote)


def endpoint_resource(endpoint: Endpoint) -> Resource:
    """Build a tracer provider `Resource` for the local ``endpoint``.

    An empty service name falls back to the SDK default
    (``unknown_service``).
    """
    return Resource.create(endpoint_attributes(endpoint, remote=False))


__all__ = ["apply_endpoint_attributes", "endpoint_attributes", "endpoint_resource"]
