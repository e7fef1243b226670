"""Configuration loading for Registrar."""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "REGISTRAR_"
MIN_SECRET_LENGTH = 32


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the Registrar service.

    Values come from defaults, then an optional YAML file, then
    REGISTRAR_* environment variables (e.g. REGISTRAR_DB_PATH).
    """

    db_path: str = "registrar.db"
    db_timeout_seconds: float = 5.0
    session_secret: str = field(default="", repr=False)
    session_max_age_seconds: int = 24 * 60 * 60
    cookie_secure: bool = False
    bcrypt_rounds: int = 10
    auth_max_attempts: int = 5
    auth_window_ms: int = 15 * 60 * 1000
    api_max_attempts: int = 100
    api_window_ms: int = 60 * 1000
    log_dir: str = "logs"
    log_level: str = "INFO"

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If any value is out of range.
        """
        if self.session_secret and len(self.session_secret) < MIN_SECRET_LENGTH:
            raise ConfigError(
                f"session_secret must be at least {MIN_SECRET_LENGTH} characters"
            )
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigError("bcrypt_rounds must be between 4 and 31")
        if self.session_max_age_seconds <= 0:
            raise ConfigError("session_max_age_seconds must be positive")
        if self.db_timeout_seconds <= 0:
            raise ConfigError("db_timeout_seconds must be positive")
        for name in ("auth_max_attempts", "api_max_attempts"):
            if not 1 <= getattr(self, name) <= 1000:
                raise ConfigError(f"{name} must be between 1 and 1000")
        for name in ("auth_window_ms", "api_window_ms"):
            if not 1000 <= getattr(self, name) <= 3_600_000:
                raise ConfigError(f"{name} must be between 1000 and 3600000")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a dictionary, coercing values to field types.

        Args:
            data: Mapping of setting names to raw values.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a key is unknown or a value cannot be coerced.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

        defaults = cls()
        values: dict[str, Any] = {}
        for name, raw in data.items():
            values[name] = _coerce(name, raw, type(getattr(defaults, name)))
        return replace(defaults, **values)


def _coerce(name: str, raw: Any, target: type) -> Any:
    if isinstance(raw, target) and not (target is int and isinstance(raw, bool)):
        return raw
    if target is bool:
        text = str(raw).strip().lower()
        if text in ("1", "true", "yes", "on"):
            return True
        if text in ("0", "false", "no", "off"):
            return False
        raise ConfigError(f"Invalid boolean for {name}")
    try:
        return target(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}") from e


def _read_env(environ: dict[str, str]) -> dict[str, str]:
    names = {f.name for f in fields(Settings)}
    result = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX) :].lower()
        if name in names:
            result[name] = value
    return result


def load_settings(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from an optional YAML file and the environment.

    Args:
        path: Optional YAML file. Defaults to REGISTRAR_CONFIG if set.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Validated settings. A random session secret is generated when none
        is configured, so sessions do not survive a restart.

    Raises:
        ConfigError: If the file is missing or malformed, or a value is invalid.
    """
    env = dict(os.environ if environ is None else environ)
    if path is None:
        path = env.get(f"{ENV_PREFIX}CONFIG")

    data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_path}")
        data.update(loaded or {})

    data.update(_read_env(env))
    settings = Settings.from_dict(data)

    if not settings.session_secret:
        logger.warning("No session secret configured; generating an ephemeral one")
        settings = replace(settings, session_secret=secrets.token_urlsafe(48))

    settings.validate()
    return settings
