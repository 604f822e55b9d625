"""Main CLI entry point for snowflake-keypair-auth.

Defines the CLI group and registers all subcommands.

Commands:
    token        - Print a freshly signed JWT
    fingerprint  - Print the public key fingerprint (RSA_PUBLIC_KEY_FP)
    claims       - Print the claims a token would carry

Usage:
    snowflake-keypair-auth -h, --help      Show help message
    snowflake-keypair-auth -v, --version   Show version
    snowflake-keypair-auth token           Print a signed JWT
    snowflake-keypair-auth fingerprint     Print the key fingerprint
    snowflake-keypair-auth claims          Print the token claims as JSON

Subcommand help:
    snowflake-keypair-auth COMMAND -h      Show help for a specific command
"""

import sys

import click

from snowflake_keypair_auth import __version__

from .commands.token import claims, fingerprint, token


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Configuration:
  Commands read --config PATH, else the default config file if it exists,
  else SNOWFLAKE_ACCOUNT, SNOWFLAKE_USER and SNOWFLAKE_PRIVATE_KEY_PATH
  (or SNOWFLAKE_PRIVATE_KEY) from the environment.

Example:
  export SNOWFLAKE_ACCOUNT=xy12345.us-east-1
  export SNOWFLAKE_USER=jsmith
  export SNOWFLAKE_PRIVATE_KEY_PATH=~/.ssh/rsa_key.p8
  curl -H "Authorization: Bearer $(snowflake-keypair-auth token)" \\
       -H "X-Snowflake-Authorization-Token-Type: KEYPAIR_JWT" ...
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """snowflake-keypair-auth: JWTs for Snowflake key-pair authentication."""
    if version:
        click.echo(f"snowflake-keypair-auth {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(token)
cli.add_command(fingerprint)
cli.add_command(claims)


def main() -> None:
    """CLI entry point."""
    cli()
