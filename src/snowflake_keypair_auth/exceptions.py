"""Exceptions raised by snowflake-keypair-auth.

All library errors derive from KeyPairAuthError so callers can decide
process-level policy (retry provisioning, exit, alert) with a single except.
"""

from __future__ import annotations


class KeyPairAuthError(Exception):
    """Base class for all key-pair authentication errors."""


class ConfigurationError(KeyPairAuthError):
    """Configuration is missing, unreadable, or inconsistent.

    Raised for invalid thresholds (non-positive, or refresh not shorter
    than expiry) and for config files that cannot be loaded.
    """


class KeyMaterialError(KeyPairAuthError):
    """Private key material cannot be used.

    Raised at construction when the PEM cannot be decoded, the passphrase
    is wrong, the key is not RSA, or its public key cannot be DER-encoded.
    """


class TokenSigningError(KeyPairAuthError):
    """The JWT signing primitive failed.

    The previously issued token stays in place; a failed refresh never
    leaves partial state behind.
    """


class TokenDecodeError(KeyPairAuthError):
    """A token string is not a well-formed JWT with the expected claims."""
