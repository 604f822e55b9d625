"""Token commands for snowflake-keypair-auth CLI.

Commands:
    token       - Print a freshly signed JWT
    fingerprint - Print the public key fingerprint
    claims      - Print the claims of a freshly signed JWT
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import click

from snowflake_keypair_auth.config import KeyPairAuthConfig, create_keypair_auth, get_config_path
from snowflake_keypair_auth.exceptions import KeyPairAuthError
from snowflake_keypair_auth.security.keypair_auth import KeyPairAuth
from snowflake_keypair_auth.telemetry.system_logger import configure_logging


def _load_config(config_path: Path | None) -> KeyPairAuthConfig:
    """Load configuration from --config, the default path, or the environment.

    Returns:
        KeyPairAuthConfig instance.

    Raises:
        click.ClickException: If config not found or invalid.
    """
    if config_path is None:
        default_path = get_config_path()
        config_path = default_path if default_path.exists() else None

    try:
        if config_path is not None:
            return KeyPairAuthConfig.load_from_file(config_path)
        return KeyPairAuthConfig.from_env()
    except KeyPairAuthError as e:
        raise click.ClickException(f"Failed to load configuration: {e}") from e


def _build_auth(config_path: Path | None, log_level: str) -> KeyPairAuth:
    configure_logging(log_level)
    config = _load_config(config_path)
    try:
        return create_keypair_auth(config)
    except KeyPairAuthError as e:
        raise click.ClickException(str(e)) from e


def _common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach --config and --log-level to a command."""
    func = click.option(
        "--log-level",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
        default="WARNING",
        show_default=True,
        help="Log level for JSON logs on stderr",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Path to JSON config file",
    )(func)
    return func


@click.command()
@_common_options
def token(config_path: Path | None, log_level: str) -> None:
    """Print a freshly signed JWT to stdout.

    The token is a bearer credential. Pipe it straight into the request
    that needs it rather than storing it.
    """
    auth = _build_auth(config_path, log_level)
    click.echo(auth.get_token().get_secret_value())


@click.command()
@_common_options
def fingerprint(config_path: Path | None, log_level: str) -> None:
    """Print the public key fingerprint.

    Compare with RSA_PUBLIC_KEY_FP from DESCRIBE USER to confirm the key
    registered in Snowflake matches the configured private key.
    """
    auth = _build_auth(config_path, log_level)
    click.echo(auth.public_key_fingerprint)


@click.command()
@_common_options
def claims(config_path: Path | None, log_level: str) -> None:
    """Print the claims of a freshly signed JWT as JSON."""
    auth = _build_auth(config_path, log_level)
    click.echo(json.dumps(auth.current_claims().model_dump(), indent=2))
