"""Configuration for snowflake-keypair-auth.

Defines the configuration model for a key-pair identity. Config can come from
a JSON file (default location via platformdirs) or from environment variables.

Example usage:
    # Load from config file
    config = KeyPairAuthConfig.load_from_file(get_config_path())

    # Or from SNOWFLAKE_* environment variables
    config = KeyPairAuthConfig.from_env()

    auth = create_keypair_auth(config)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Mapping

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, SecretStr, ValidationError, model_validator

from snowflake_keypair_auth.constants import (
    APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_EXPIRY_THRESHOLD_SECONDS,
    DEFAULT_REFRESH_THRESHOLD_SECONDS,
    ENV_ACCOUNT,
    ENV_EXPIRY_THRESHOLD,
    ENV_PRIVATE_KEY,
    ENV_PRIVATE_KEY_PASSPHRASE,
    ENV_PRIVATE_KEY_PATH,
    ENV_REFRESH_THRESHOLD,
    ENV_USER,
)
from snowflake_keypair_auth.exceptions import ConfigurationError, KeyMaterialError

if TYPE_CHECKING:
    from snowflake_keypair_auth.security.keypair_auth import KeyPairAuth


class KeyPairAuthConfig(BaseModel):
    """Key-pair identity configuration.

    Exactly one of private_key (inline PEM) or private_key_path must be set.
    Secrets are SecretStr so they never appear in repr() or logs.

    Attributes:
        account_id: Raw account identifier (e.g., "xy12345.us-east-1").
        username: Snowflake login name.
        private_key: Inline PEM private key.
        private_key_path: Path to a PEM private key file.
        private_key_passphrase: Passphrase for an encrypted key.
        refresh_threshold: Seconds after a refresh before re-signing.
        expiry_threshold: Validity window of each token in seconds.
    """

    account_id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    private_key: SecretStr | None = None
    private_key_path: str | None = None
    private_key_passphrase: SecretStr | None = None
    refresh_threshold: int = Field(default=DEFAULT_REFRESH_THRESHOLD_SECONDS, gt=0)
    expiry_threshold: int = Field(default=DEFAULT_EXPIRY_THRESHOLD_SECONDS, gt=0)

    @model_validator(mode="after")
    def _check_key_source(self) -> "KeyPairAuthConfig":
        if (self.private_key is None) == (self.private_key_path is None):
            raise ValueError("exactly one of private_key or private_key_path is required")
        return self

    def resolve_private_key(self) -> SecretStr:
        """Return the PEM private key, reading it from disk if configured by path.

        Raises:
            ConfigurationError: If the key file cannot be read.
            KeyMaterialError: If the key file is not PEM text (e.g. DER).
        """
        if self.private_key is not None:
            return self.private_key

        assert self.private_key_path is not None
        path = Path(self.private_key_path).expanduser()
        try:
            return SecretStr(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read private key file {path}: {e.strerror}") from e
        except UnicodeDecodeError as e:
            raise KeyMaterialError(f"Private key file {path} is not PEM text") from e

    @classmethod
    def load_from_file(cls, path: Path) -> "KeyPairAuthConfig":
        """Load and validate configuration from a JSON file.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not JSON, or invalid.
        """
        if not path.exists():
            raise ConfigurationError(f"Configuration not found at {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e.strerror}") from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Configuration {path} is not UTF-8 text") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "KeyPairAuthConfig":
        """Build configuration from SNOWFLAKE_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests).

        Raises:
            ConfigurationError: If required variables are missing or invalid.
        """
        env = os.environ if environ is None else environ

        data: dict[str, object] = {
            "account_id": env.get(ENV_ACCOUNT, ""),
            "username": env.get(ENV_USER, ""),
            "private_key": env.get(ENV_PRIVATE_KEY) or None,
            "private_key_path": env.get(ENV_PRIVATE_KEY_PATH) or None,
            "private_key_passphrase": env.get(ENV_PRIVATE_KEY_PASSPHRASE) or None,
        }
        if env.get(ENV_REFRESH_THRESHOLD):
            data["refresh_threshold"] = env[ENV_REFRESH_THRESHOLD]
        if env.get(ENV_EXPIRY_THRESHOLD):
            data["expiry_threshold"] = env[ENV_EXPIRY_THRESHOLD]

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    def save_to_file(self, path: Path) -> None:
        """Write configuration as JSON.

        Inline keys and passphrases are never written; only
        private_key_path is persisted.

        Raises:
            ConfigurationError: If the key is configured inline.
        """
        if self.private_key_path is None:
            raise ConfigurationError("Only configurations using private_key_path can be saved")

        data = self.model_dump(exclude={"private_key", "private_key_passphrase"})
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_config_path() -> Path:
    """Platform-specific default config file location.

    - macOS: ~/Library/Application Support/snowflake-keypair-auth/config.json
    - Linux: ~/.config/snowflake-keypair-auth/config.json
    - Windows: %APPDATA%\\snowflake-keypair-auth\\config.json
    """
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILE_NAME


def create_keypair_auth(config: KeyPairAuthConfig) -> "KeyPairAuth":
    """Create a KeyPairAuth holder from configuration.

    Raises:
        ConfigurationError: If the key file cannot be read or thresholds are invalid.
        KeyMaterialError: If the key cannot be used.
        TokenSigningError: If the initial signing fails.
    """
    from snowflake_keypair_auth.security.keypair_auth import KeyPairAuth

    passphrase = config.private_key_passphrase
    return KeyPairAuth(
        account_id=config.account_id,
        username=config.username,
        private_key=config.resolve_private_key().get_secret_value(),
        refresh_threshold=config.refresh_threshold,
        expiry_threshold=config.expiry_threshold,
        private_key_passphrase=passphrase.get_secret_value() if passphrase else None,
    )
