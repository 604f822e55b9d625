"""JWT claims for Snowflake key-pair authentication.

The issuer and subject are dotted strings the verifier matches exactly:

    iss = <ACCOUNT>.<USER>.<SHA256:fingerprint>
    sub = <ACCOUNT>.<USER>
"""

from __future__ import annotations

import jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from snowflake_keypair_auth.exceptions import TokenDecodeError


class JwtClaims(BaseModel):
    """Claims carried by a key-pair JWT.

    Attributes:
        iss: Issuer: account, user and public key fingerprint.
        sub: Subject: account and user.
        iat: Issued-at time (seconds since epoch).
        exp: Expiry time (seconds since epoch).
    """

    model_config = ConfigDict(frozen=True)

    iss: str
    sub: str
    iat: int
    exp: int

    @property
    def lifetime_seconds(self) -> int:
        """Validity window of the token."""
        return self.exp - self.iat


def build_claims(
    normalized_account_id: str,
    username: str,
    fingerprint: str,
    issued_at: int,
    expiry_threshold: int,
) -> JwtClaims:
    """Build the claims for a token issued at ``issued_at``.

    Args:
        normalized_account_id: Account id from normalize_account_identifier().
        username: Login name; uppercased here.
        fingerprint: Public key fingerprint ("SHA256:...").
        issued_at: Issue time in seconds since epoch.
        expiry_threshold: Validity window in seconds.

    Returns:
        JwtClaims ready for signing.
    """
    qualified_user = f"{normalized_account_id}.{username.upper()}"
    return JwtClaims(
        iss=f"{qualified_user}.{fingerprint}",
        sub=qualified_user,
        iat=issued_at,
        exp=issued_at + expiry_threshold,
    )


def decode_claims(token: str) -> JwtClaims:
    """Decode a token's claims without verifying its signature.

    Only for inspection. Snowflake, not this library, is authoritative on
    signature and expiry.

    Args:
        token: Encoded JWT.

    Returns:
        JwtClaims from the token payload.

    Raises:
        TokenDecodeError: If the token is malformed or lacks a claim.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.DecodeError as e:
        raise TokenDecodeError(f"Malformed token: {e}") from e

    try:
        return JwtClaims.model_validate(payload)
    except ValidationError as e:
        raise TokenDecodeError(f"Token claims incomplete: {e.error_count()} invalid field(s)") from e
