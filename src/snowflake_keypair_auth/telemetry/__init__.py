"""Operational logging for snowflake-keypair-auth."""

from snowflake_keypair_auth.telemetry.system_logger import (
    JsonEventFormatter,
    configure_logging,
    get_system_logger,
)

__all__ = [
    "JsonEventFormatter",
    "configure_logging",
    "get_system_logger",
]
