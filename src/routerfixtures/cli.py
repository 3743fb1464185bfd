"""routerfixtures CLI Entry Point.

Prints generated test certificates and router test configurations, for
use from shell-driven test harnesses.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
import typer
import yaml

from routerfixtures.certs import generate_ec_pair, generate_rsa_pair
from routerfixtures.core.exceptions import FixtureError
from routerfixtures.core.logging import configure_logging
from routerfixtures.fixtures import spec_config, spec_ssl_config

log = structlog.get_logger()

app = typer.Typer(
    name="routerfixtures",
    help="Router test fixtures: self-signed certificates and test configs",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override the configured log level"
    ),
) -> None:
    """routerfixtures CLI."""
    configure_logging(level=log_level)


@app.command()
def cert(
    common_name: str = typer.Argument("", help="Subject common name (empty for none)"),
    ec: bool = typer.Option(False, "--ec", help="Generate a P-256 key instead of RSA-2048"),
) -> None:
    """Print a private key and self-signed certificate as PEM."""
    generate = generate_ec_pair if ec else generate_rsa_pair
    try:
        key_pem, cert_pem = generate(common_name)
    except FixtureError as e:
        log.error("certificate_generation_failed", error=str(e), **e.context)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(key_pem.decode("ascii"), nl=False)
    typer.echo(cert_pem.decode("ascii"), nl=False)


@app.command()
def config(
    status_port: int = typer.Argument(..., help="Status endpoint port"),
    proxy_port: int = typer.Argument(..., help="Proxy port"),
    ssl_port: Optional[int] = typer.Option(None, "--ssl-port", help="Enable SSL on this port"),
    nats_port: List[int] = typer.Option([], "--nats-port", help="NATS port (repeatable)"),
) -> None:
    """Print the router test configuration as YAML."""
    try:
        if ssl_port is None:
            cfg = spec_config(status_port, proxy_port, *nats_port)
        else:
            cfg = spec_ssl_config(status_port, proxy_port, ssl_port, *nats_port)
    except FixtureError as e:
        log.error("config_build_failed", error=str(e), **e.context)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False), nl=False)


if __name__ == "__main__":
    app()
