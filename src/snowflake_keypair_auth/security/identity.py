"""Account identifier normalization.

Snowflake embeds the account in the JWT issuer and subject claims using its
own canonical form. The verifier compares these strings exactly, so the
normalization here must match the provider's rules:

- Standard identifiers ("xy12345.us-east-1") are cut at the first ".".
- Global identifiers ("xy12345-abc.global") are cut at the first "-".
- The result is uppercased.
"""

from __future__ import annotations

from snowflake_keypair_auth.constants import GLOBAL_ACCOUNT_MARKER


def normalize_account_identifier(raw_account: str) -> str:
    """Normalize a raw account identifier for embedding in JWT claims.

    The delimiter search runs on the raw string; uppercasing happens after.
    Identifiers without a delimiter are kept whole.

    Args:
        raw_account: Account identifier as configured.

    Returns:
        Uppercased account identifier truncated at the delimiter.
    """
    delimiter = "-" if GLOBAL_ACCOUNT_MARKER in raw_account else "."

    split_index = raw_account.find(delimiter)
    if split_index == -1:
        split_index = len(raw_account)

    return raw_account.upper()[:split_index]
