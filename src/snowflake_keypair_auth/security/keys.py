"""RSA private key loading and public key fingerprinting.

The fingerprint binds a JWT to a registered key pair. Snowflake stores it as
RSA_PUBLIC_KEY_FP on the user and compares it with the one in the issuer claim.
"""

from __future__ import annotations

import base64
import hashlib

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from snowflake_keypair_auth.constants import FINGERPRINT_PREFIX
from snowflake_keypair_auth.exceptions import KeyMaterialError


def load_private_key(pem: str | bytes, passphrase: str | None = None) -> rsa.RSAPrivateKey:
    """Parse PEM key material into an RSA private key.

    Args:
        pem: PEM-encoded private key (PKCS8, optionally encrypted).
        passphrase: Passphrase for an encrypted key.

    Returns:
        The RSA private key.

    Raises:
        KeyMaterialError: If the PEM is malformed, the passphrase is wrong
            or missing, or the key is not an RSA key.
    """
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    password = passphrase.encode("utf-8") if passphrase else None

    try:
        private_key = serialization.load_pem_private_key(data, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        # Message from cryptography never contains key bytes
        raise KeyMaterialError(f"Cannot decode private key: {e}") from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise KeyMaterialError(
            f"Private key must be RSA, got {type(private_key).__name__}"
        )

    return private_key


def public_key_fingerprint(private_key: rsa.RSAPrivateKey) -> str:
    """Derive the SHA-256 fingerprint of the key's public half.

    Format: "SHA256:" + base64(sha256(DER SubjectPublicKeyInfo)).

    Args:
        private_key: RSA private key.

    Returns:
        Fingerprint string as expected in the issuer claim.

    Raises:
        KeyMaterialError: If the public key cannot be DER-encoded.
    """
    try:
        der = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except (ValueError, TypeError) as e:
        raise KeyMaterialError(f"Cannot DER-encode public key: {e}") from e

    digest = hashlib.sha256(der).digest()
    return FINGERPRINT_PREFIX + base64.b64encode(digest).decode("ascii")
