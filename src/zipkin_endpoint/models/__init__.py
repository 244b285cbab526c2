"""Typed value models exposed by zipkin_endpoint."""
