"""Key-pair JWT credential holder.

KeyPairAuth owns an RSA private key and the account/user identity, and keeps
a signed RS256 JWT cached until a refresh interval has elapsed:

- Normalized account id and public key fingerprint are derived once
- Construction signs the first token unconditionally
- get_token() re-signs only when refresh_threshold seconds have passed
  since the last refresh; otherwise it returns the cached token

The refresh threshold is an interval measured from the last refresh, not
time remaining before expiry. The token itself expires at
last_refreshed + expiry_threshold, which is why construction requires
refresh_threshold < expiry_threshold.

Thread-safety: a threading.Lock covers the stale check and the refresh, so
concurrent callers that all see a stale token cause exactly one signing.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import SecretStr

from snowflake_keypair_auth.constants import JWT_ALGORITHM
from snowflake_keypair_auth.exceptions import ConfigurationError, TokenSigningError
from snowflake_keypair_auth.security.claims import JwtClaims, build_claims
from snowflake_keypair_auth.security.identity import normalize_account_identifier
from snowflake_keypair_auth.security.keys import load_private_key, public_key_fingerprint
from snowflake_keypair_auth.telemetry.system_logger import get_system_logger


class KeyPairAuth:
    """Issues and caches key-pair JWTs for one account/user/key tuple.

    Create once per configured identity and share by reference; never copy
    the private key out of it.

    Usage:
        auth = KeyPairAuth(account_id, username, pem, 3000, 3600)
        headers = {"Authorization": f"Bearer {auth.get_token().get_secret_value()}"}

    Raises:
        ConfigurationError: If thresholds are invalid.
        KeyMaterialError: If the PEM cannot be used as an RSA private key.
        TokenSigningError: If the initial signing fails.
    """

    def __init__(
        self,
        account_id: str,
        username: str,
        private_key: str,
        refresh_threshold: int,
        expiry_threshold: int,
        *,
        private_key_passphrase: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Load the key, derive identity, and sign the first token.

        Args:
            account_id: Raw account identifier as configured.
            username: Snowflake login name.
            private_key: PEM-encoded PKCS8 RSA private key.
            refresh_threshold: Seconds after a refresh before re-signing.
            expiry_threshold: Validity window of each token in seconds.
            private_key_passphrase: Passphrase for an encrypted key.
            clock: Source of the current unix time (injectable for tests).
        """
        _validate_thresholds(refresh_threshold, expiry_threshold)

        self._account_id = account_id
        self._username = username
        self._refresh_threshold = refresh_threshold
        self._expiry_threshold = expiry_threshold
        self._clock = clock
        self._logger = get_system_logger()
        # Guards _last_refreshed and _current_token
        self._lock = threading.Lock()

        self._private_key: rsa.RSAPrivateKey = load_private_key(
            private_key, passphrase=private_key_passphrase
        )
        self._normalized_account_id = normalize_account_identifier(account_id)
        self._public_key_fp = public_key_fingerprint(self._private_key)

        self._last_refreshed = 0
        self._current_token: SecretStr | None = None

        with self._lock:
            self._refresh(self._now())

        self._logger.info(
            {
                "event": "keypair_auth_initialized",
                "account": self._normalized_account_id,
                "user": username,
                "public_key_fp": self._public_key_fp,
            }
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_token(self) -> SecretStr:
        """Return the current JWT, re-signing it if the refresh interval passed.

        Returns:
            Signed RS256 JWT wrapped in SecretStr.

        Raises:
            TokenSigningError: If a due refresh fails. The previous token
                is kept for the next attempt.
        """
        with self._lock:
            now = self._now()
            # A clock that went backwards keeps the condition false
            if now >= self._last_refreshed + self._refresh_threshold:
                self._refresh(now)
            assert self._current_token is not None
            return self._current_token

    def force_refresh(self) -> SecretStr:
        """Sign a new token now, regardless of the refresh interval.

        Returns:
            The newly signed token.

        Raises:
            TokenSigningError: If signing fails.
        """
        with self._lock:
            self._refresh(self._now())
            assert self._current_token is not None
            return self._current_token

    def current_claims(self) -> JwtClaims:
        """Claims of the cached token, without triggering a refresh."""
        with self._lock:
            return self._claims_at(self._last_refreshed)

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def username(self) -> str:
        return self._username

    @property
    def normalized_account_id(self) -> str:
        return self._normalized_account_id

    @property
    def public_key_fingerprint(self) -> str:
        return self._public_key_fp

    @property
    def refresh_threshold(self) -> int:
        return self._refresh_threshold

    @property
    def expiry_threshold(self) -> int:
        return self._expiry_threshold

    @property
    def last_refreshed(self) -> int:
        """Unix time of the last successful refresh."""
        return self._last_refreshed

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(account={self._normalized_account_id!r}, "
            f"user={self._username!r}, public_key_fp={self._public_key_fp!r})"
        )

    # ------------------------------------------------------------------
    # Internals (caller holds self._lock)
    # ------------------------------------------------------------------

    def _now(self) -> int:
        return int(self._clock())

    def _claims_at(self, issued_at: int) -> JwtClaims:
        return build_claims(
            self._normalized_account_id,
            self._username,
            self._public_key_fp,
            issued_at,
            self._expiry_threshold,
        )

    def _refresh(self, now: int) -> None:
        """Sign a token issued at ``now`` and make it current.

        State is replaced only after signing succeeds.
        """
        claims = self._claims_at(now)

        try:
            token = jwt.encode(claims.model_dump(), self._private_key, algorithm=JWT_ALGORITHM)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            self._logger.error(
                {
                    "event": "jwt_refresh_failed",
                    "account": self._normalized_account_id,
                    "user": self._username,
                    "error_type": type(e).__name__,
                }
            )
            raise TokenSigningError(f"Failed to sign JWT: {type(e).__name__}") from e

        self._current_token = SecretStr(token)
        self._last_refreshed = now

        self._logger.info(
            {
                "event": "jwt_refreshed",
                "account": self._normalized_account_id,
                "user": self._username,
                "iat": claims.iat,
                "exp": claims.exp,
            }
        )


def _validate_thresholds(refresh_threshold: int, expiry_threshold: int) -> None:
    """Reject thresholds that would let the cache serve expired tokens."""
    if refresh_threshold <= 0 or expiry_threshold <= 0:
        raise ConfigurationError(
            f"Thresholds must be positive (refresh={refresh_threshold}, expiry={expiry_threshold})"
        )
    if refresh_threshold >= expiry_threshold:
        raise ConfigurationError(
            f"refresh_threshold ({refresh_threshold}s) must be shorter than "
            f"expiry_threshold ({expiry_threshold}s), otherwise expired tokens are served"
        )
