#!/usr/bin/env python3
"""CLI entrypoint: submit a payload with network tracing."""

import asyncio
import json
import sys

import click
from dotenv import load_dotenv

from .api_client import APIClient
from .config import LogConfiguration, LogLevel
from .logger import reset_shared_logger

# Load environment variables
load_dotenv()


def _parse_header(raw: str) -> tuple[str, str]:
    """Split a "Key: Value" header argument."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Invalid header '{raw}': expected 'Key: Value'", param_hint="--header")
    return name.strip(), value.strip()


def _parse_payload(raw: str | None) -> dict | None:
    """Parse the --payload argument, which must be a JSON object."""
    if raw is None:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--payload") from e
    if not isinstance(parsed, dict):
        raise click.BadParameter("Payload must be a JSON object", param_hint="--payload")
    return parsed


@click.command()
@click.argument("url")
@click.option("-p", "--payload", type=str, help="JSON object to submit")
@click.option("-H", "--header", "headers", multiple=True, help="Request header as 'Key: Value' (repeatable)")
@click.option("-d", "--debug", is_flag=True, help="Print network traces")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel], case_sensitive=False),
    help="Level of SDK events to print (default: from COLLECT_LOG_LEVEL)",
)
@click.version_option(package_name="collect-sdk-trace")
def main(
    url: str,
    payload: str | None,
    headers: tuple[str, ...],
    debug: bool,
    log_level: str | None,
) -> None:
    """
    Submit a JSON payload to URL and trace the request.

    URL: Endpoint to POST the payload to
    """
    request_headers = dict(_parse_header(h) for h in headers)
    request_payload = _parse_payload(payload)

    try:
        configuration = LogConfiguration.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if debug:
        configuration.is_network_debug_enabled = True
    if log_level:
        configuration.level = log_level

    reset_shared_logger(configuration)

    try:
        client = APIClient(url)
        response = asyncio.run(client.send_request(payload=request_payload, headers=request_headers))
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    sys.exit(0 if response.ok else 1)


if __name__ == "__main__":
    main()
