"""JSON codec for endpoints.

The JSON shape matches the Zipkin v1 endpoint object::

    {"serviceName":"frontend","ipv4":"192.168.1.1","ipv6":"2001:db8::c001","port":8080}

Unknown fields are omitted on write: ``ipv4`` when 0, ``ipv6`` and ``port``
when absent. ``serviceName`` is always written, even when empty.
Reading goes through `EndpointBuilder` so the usual normalization applies.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Union

from .addressing import ipv4_to_text, ipv6_to_text, text_to_ipv4, text_to_ipv6
from .errors import InvalidArgumentError
from .models.endpoint import Endpoint


def endpoint_to_dict(endpoint: Endpoint) -> Dict[str, Any]:
    """Return the JSON-ready mapping for ``endpoint``."""
    out: Dict[str, Any] = {"serviceName": endpoint.service_name}
    if endpoint.ipv4 != 0:
        out["ipv4"] = ipv4_to_text(endpoint.ipv4)
    if endpoint.ipv6 is not None:
        out["ipv6"] = ipv6_to_text(endpoint.ipv6)
    if endpoint.port is not None:
        out["port"] = endpoint.port
    return out


def write_endpoint(endpoint: Endpoint) -> bytes:
    """Serialize ``endpoint`` to compact UTF-8 JSON."""
    return json.dumps(
        endpoint_to_dict(endpoint), separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def read_endpoint(data: Union[bytes, str]) -> Endpoint:
    """Parse an endpoint from its JSON form.

    Args:
        data: UTF-8 encoded bytes or text holding a single JSON object.

    Returns:
        The normalized endpoint. A missing ``serviceName`` reads as ``""``.

    Raises:
        InvalidArgumentError: for malformed JSON, a non-object root or field
            values of the wrong type.
    """
    try:
        raw = json.loads(data)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidArgumentError(f"malformed endpoint json: {e}") from e
    if not isinstance(raw, dict):
        raise InvalidArgumentError(
            f"endpoint json must be an object, not {type(raw).__name__}"
        )

    builder = Endpoint.builder()
    service_name = raw.get("serviceName")
    if service_name is not None:
        builder.service_name(_expect(service_name, str, "serviceName"))
    ipv4 = raw.get("ipv4")
    if ipv4 is not None:
        builder.ipv4(text_to_ipv4(_expect(ipv4, str, "ipv4")))
    ipv6 = raw.get("ipv6")
    if ipv6 is not None:
        builder.ipv6(text_to_ipv6(_expect(ipv6, str, "ipv6")))
    port = raw.get("port")
    if port is not None:
        builder.port(_expect(port, int, "port"))
    return builder.build()


def _expect(value: Any, kind: type, field: str) -> Any:
    if isinstance(value, bool) or not isinstance(value, kind):
        raise InvalidArgumentError(
            f"{field} must be {kind.__name__}, not {type(value).__name__}"
        )
    return value


__all__ = ["endpoint_to_dict", "read_endpoint", "write_endpoint"]
