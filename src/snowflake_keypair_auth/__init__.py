"""snowflake-keypair-auth: cached RS256 JWTs for Snowflake key-pair authentication."""

from snowflake_keypair_auth.config import KeyPairAuthConfig, create_keypair_auth, get_config_path
from snowflake_keypair_auth.exceptions import (
    ConfigurationError,
    KeyMaterialError,
    KeyPairAuthError,
    TokenDecodeError,
    TokenSigningError,
)
from snowflake_keypair_auth.security import (
    JwtClaims,
    KeyPairAuth,
    build_claims,
    decode_claims,
    load_private_key,
    normalize_account_identifier,
    public_key_fingerprint,
)

__version__ = "0.1.0"
__all__ = [
    "KeyPairAuth",
    "KeyPairAuthConfig",
    "create_keypair_auth",
    "get_config_path",
    "JwtClaims",
    "build_claims",
    "decode_claims",
    "load_private_key",
    "normalize_account_identifier",
    "public_key_fingerprint",
    "KeyPairAuthError",
    "ConfigurationError",
    "KeyMaterialError",
    "TokenDecodeError",
    "TokenSigningError",
]
