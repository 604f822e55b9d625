"""Application-wide constants for snowflake-keypair-auth.

Constants that define library behavior.
For user-configurable settings per deployment, see config.py.
"""

# ============================================================================
# Application Identity
# ============================================================================

# Used for the platform-specific config directory and the CLI program name
APP_NAME: str = "snowflake-keypair-auth"

# Config file name inside the platform config directory
CONFIG_FILE_NAME: str = "config.json"

# ============================================================================
# JWT Lifetime
# ============================================================================

# Snowflake rejects key-pair JWTs with a lifetime above one hour
DEFAULT_EXPIRY_THRESHOLD_SECONDS: int = 3600

# Re-sign 10 minutes before the default expiry
DEFAULT_REFRESH_THRESHOLD_SECONDS: int = 3000

# Signing algorithm required by the provider (RSA + SHA-256)
JWT_ALGORITHM: str = "RS256"

# ============================================================================
# Identity Derivation
# ============================================================================

# Prefix of the public key fingerprint embedded in the issuer claim
FINGERPRINT_PREFIX: str = "SHA256:"

# Region-less account locators use "-" instead of "." as the account delimiter
GLOBAL_ACCOUNT_MARKER: str = ".global"

# ============================================================================
# Environment Variables
# ============================================================================

ENV_ACCOUNT: str = "SNOWFLAKE_ACCOUNT"
ENV_USER: str = "SNOWFLAKE_USER"
ENV_PRIVATE_KEY: str = "SNOWFLAKE_PRIVATE_KEY"
ENV_PRIVATE_KEY_PATH: str = "SNOWFLAKE_PRIVATE_KEY_PATH"
ENV_PRIVATE_KEY_PASSPHRASE: str = "SNOWFLAKE_PRIVATE_KEY_PASSPHRASE"
ENV_REFRESH_THRESHOLD: str = "SNOWFLAKE_JWT_REFRESH_THRESHOLD"
ENV_EXPIRY_THRESHOLD: str = "SNOWFLAKE_JWT_EXPIRY_THRESHOLD"
