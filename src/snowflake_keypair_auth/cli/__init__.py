"""Command-line interface for snowflake-keypair-auth.

Provides commands for issuing tokens and inspecting the configured key.
"""

from .main import cli, main

__all__ = ["cli", "main"]
