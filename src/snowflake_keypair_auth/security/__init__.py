"""Key-pair authentication primitives.

This module provides:
- Account identifier normalization (identity.py)
- RSA key loading and public key fingerprinting (keys.py)
- JWT claims construction and inspection (claims.py)
- The cached, self-refreshing credential holder (keypair_auth.py)
"""

from snowflake_keypair_auth.security.claims import JwtClaims, build_claims, decode_claims
from snowflake_keypair_auth.security.identity import normalize_account_identifier
from snowflake_keypair_auth.security.keypair_auth import KeyPairAuth
from snowflake_keypair_auth.security.keys import load_private_key, public_key_fingerprint

__all__ = [
    # Identity
    "normalize_account_identifier",
    # Keys
    "load_private_key",
    "public_key_fingerprint",
    # Claims
    "JwtClaims",
    "build_claims",
    "decode_claims",
    # Credential holder
    "KeyPairAuth",
]
