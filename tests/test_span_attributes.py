from __future__ import annotations

import ipaddress

from opentelemetry.sdk.trace import TracerProvider

from zipkin_endpoint.models.endpoint import Endpoint
from zipkin_endpoint.span_attributes import (
    apply_endpoint_attributes,
    endpoint_attributes,
    endpoint_resource,
)


class DummySpan:
    def __init__(self):
        self.attributes = {}

    def set_attribute(self, key, value):  # mimic OTEL span API used
        self.attributes[key] = value


def _packed(text: str) -> int:
    return int(ipaddress.IPv4Address(text))


IPV6 = ipaddress.IPv6Address("2001:db8::c001").packed


def test_remote_endpoint_attributes():
    endpoint = Endpoint.create("backend", _packed("10.0.0.2"), 9000)
    assert endpoint_attributes(endpoint) == {
        "peer.service": "backend",
        "network.peer.address": "10.0.0.2",
        "network.peer.port": 9000,
    }


def test_local_endpoint_attributes_fall_back_to_ipv6():
    endpoint = Endpoint.builder().service_name("frontend").ipv6(IPV6).build()
    assert endpoint_attributes(endpoint, remote=False) == {
        "service.name": "frontend",
        "network.local.address": "2001:db8::c001",
    }


def test_ipv4_preferred_when_both_known():
    endpoint = Endpoint.builder().ipv4(_packed("1.2.3.4")).ipv6(IPV6).build()
    assert endpoint_attributes(endpoint)["network.peer.address"] == "1.2.3.4"


def test_unknown_fields_omitted():
    assert endpoint_attributes(Endpoint.builder().build()) == {}


def test_apply_to_dummy_span():
    dummy = DummySpan()
    apply_endpoint_attributes(dummy, Endpoint.create("db", _packed("10.1.1.1"), 5432))
    assert dummy.attributes["peer.service"] == "db"
    assert dummy.attributes["network.peer.port"] == 5432


def test_apply_to_sdk_span():
    tracer = TracerProvider().get_tracer("zipkin-endpoint-test")
    span = tracer.start_span("call")
    apply_endpoint_attributes(span, Endpoint.create("db", _packed("10.1.1.1"), 5432))
    span.end()
    assert span.attributes["peer.service"] == "db"
    assert span.attributes["network.peer.address"] == "10.1.1.1"


def test_resource_from_local_endpoint():
    resource = endpoint_resource(Endpoint.create("Frontend", _packed("192.168.1.1"), 8080))
    assert resource.attributes["service.name"] == "frontend"
    assert resource.attributes["network.local.port"] == 8080


def test_resource_without_service_name_uses_sdk_default(monkeypatch):
    monkeypatch.delenv("OTEL_SERVICE_NAME", raising=False)
    monkeypatch.delenv("OTEL_RESOURCE_ATTRIBUTES", raising=False)
    resource = endpoint_resource(Endpoint.builder().build())
    assert resource.attributes["service.name"].startswith("unknown_service")
