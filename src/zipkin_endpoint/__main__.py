"""Command-line entry point for zipkin-endpoint.

Two small developer commands built on the library:

- ``build`` assembles an endpoint from textual options and prints its JSON
  form, showing the normalization the builder applies.
- ``classify`` reports whether an IPv6 address embeds an IPv4 address.

Configuration (log level, fallback service name, JSON layout) comes from
`zipkin_endpoint.config.Settings`; a ``.env`` file is loaded first if present.
"""
from __future__ import annotations

import json
import logging
from typing import NoReturn, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from .addressing import classify_ipv6, ipv4_to_text, ipv6_to_text, text_to_ipv4, text_to_ipv6
from .codec import endpoint_to_dict
from .config import get_settings
from .errors import InvalidArgumentError
from .models.endpoint import Endpoint

app = typer.Typer(help="Zipkin endpoint normalization CLI")
logger = logging.getLogger(__name__)


@app.callback()
def main() -> None:
    """zipkin-endpoint CLI.

    Use a subcommand like 'build' or 'classify'.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    if env_file:
        logger.debug("Loaded environment from %s", env_file)


def _fail(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=2)


@app.command(help="Build an endpoint and print its JSON form.")
def build(
    service: Optional[str] = typer.Option(
        None, "--service", "-s", help="Service name (default: DEFAULT_SERVICE_NAME)"
    ),
    ipv4: Optional[str] = typer.Option(None, "--ipv4", help="Dotted IPv4 address"),
    ipv6: Optional[str] = typer.Option(
        None, "--ipv6", help="IPv6 address; IPv4-mapped/compatible forms become ipv4"
    ),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port, 0 means unknown"),
) -> None:
    settings = get_settings()
    builder = Endpoint.builder()
    try:
        builder.service_name(service if service is not None else settings.DEFAULT_SERVICE_NAME)
        if ipv4 is not None:
            builder.ipv4(text_to_ipv4(ipv4))
        if ipv6 is not None:
            builder.ipv6(text_to_ipv6(ipv6))
        builder.port(port)
    except InvalidArgumentError as e:
        _fail(str(e))
    endpoint = builder.build()
    logger.debug("Built %r", endpoint)
    indent = 2 if settings.PRETTY_JSON else None
    separators = None if indent else (",", ":")
    typer.echo(json.dumps(endpoint_to_dict(endpoint), indent=indent, separators=separators))


@app.command(help="Classify an IPv6 address as ipv4-mapped, ipv4-compatible or ipv6.")
def classify(address: str = typer.Argument(..., help="IPv6 address text")) -> None:
    try:
        raw = text_to_ipv6(address)
    except InvalidArgumentError as e:
        _fail(str(e))
    result = classify_ipv6(raw)
    if result.embeds_ipv4:
        typer.echo(f"{result.kind.value} {ipv4_to_text(result.ipv4)}")
    else:
        typer.echo(f"{result.kind.value} {ipv6_to_text(raw)}")


if __name__ == "__main__":  # pragma: no cover
    app()
