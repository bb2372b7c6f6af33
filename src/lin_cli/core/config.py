"""lin configuration: Pydantic model, load, and save."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, SecretStr, field_validator

from lin_cli.core.constants import (
    CACHE_FILENAME,
    CONFIG_FILENAME,
    DEFAULT_API_URL,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    ISSUE_VIEW_WIDTH,
    LOG_FILENAME,
    _default_data_dir,
)
from lin_cli.core.exceptions import ConfigError, ConfigNotFoundError


def lin_dir() -> Path:
    """
    Return the lin data directory, creating it if needed.

    macOS : ~/Library/Application Support/lin
    Linux : ~/.config/lin  (or $XDG_CONFIG_HOME/lin)
    Other : ~/.lin
    """
    d = _default_data_dir()
    d.mkdir(mode=0o700, parents=True, exist_ok=True)
    return d


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class LinearConfig(BaseModel):
    api_key: SecretStr | None = None
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("api_url must be an http(s) URL")
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if not (1.0 <= v <= 300.0):
            raise ValueError("timeout_seconds must be between 1 and 300")
        return v


class CacheConfig(BaseModel):
    ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    path: str = ""  # empty → use default

    @field_validator("ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ttl_seconds must not be negative")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "text"  # "text" | "json"
    file: str = ""  # empty → <data dir>/lin.log

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v


_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


class UIConfig(BaseModel):
    accent_color: str = "#5E6AD2"
    content_width: int = ISSUE_VIEW_WIDTH

    @field_validator("accent_color")
    @classmethod
    def validate_accent(cls, v: str) -> str:
        if not _HEX_COLOR.fullmatch(v):
            raise ValueError("accent_color must be a #RRGGBB hex colour")
        return v

    @field_validator("content_width")
    @classmethod
    def validate_content_width(cls, v: int) -> int:
        if not (20 <= v <= 200):
            raise ValueError("content_width must be between 20 and 200")
        return v


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class LinConfig(BaseModel):
    """Root lin configuration model."""

    linear: LinearConfig = Field(default_factory=LinearConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @property
    def api_key(self) -> str:
        """The plain API key, or ``""`` when none is configured."""
        if self.linear.api_key is None:
            return ""
        return self.linear.api_key.get_secret_value()

    @property
    def cache_path(self) -> Path:
        if self.cache.path:
            return Path(self.cache.path).expanduser()
        return lin_dir() / CACHE_FILENAME

    @property
    def log_path(self) -> Path:
        if self.logging.file:
            return Path(self.logging.file).expanduser()
        return lin_dir() / LOG_FILENAME


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get("LIN_CONFIG"):
        return Path(env_path)
    return lin_dir() / CONFIG_FILENAME


def load_config(path: Path | str | None = None) -> LinConfig:
    """
    Load LinConfig from a TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (LIN_API_KEY, LIN_LOG_LEVEL)
      2. Config file ($LIN_CONFIG or <data dir>/config.toml)
    """
    import tomllib

    cfg_path = Path(path) if path is not None else _config_file_path()

    if not cfg_path.exists():
        raise ConfigNotFoundError(
            f"lin is not configured. Run 'lin auth' first.\n(Config file not found: {cfg_path})"
        )

    try:
        with open(cfg_path, "rb") as f:
            data = tomllib.load(f)
    except Exception as exc:
        raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc

    _resolve_keyring_placeholders(data)
    _apply_env_overrides(data)

    try:
        return LinConfig.model_validate(data)
    except Exception as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay LIN_* environment variables onto parsed TOML."""
    if api_key := os.environ.get("LIN_API_KEY", ""):
        data.setdefault("linear", {})["api_key"] = api_key
    if level := os.environ.get("LIN_LOG_LEVEL", ""):
        data.setdefault("logging", {})["level"] = level


def _resolve_keyring_placeholders(data: dict[str, Any]) -> None:
    """In-place replace a keyring placeholder API key with the stored key."""
    from lin_cli.core.keyring_store import is_api_key_placeholder, resolve_api_key

    linear = data.get("linear", {})
    val = linear.get("api_key")
    if is_api_key_placeholder(val):
        linear["api_key"] = resolve_api_key(val)


def read_config_data(path: Path | None = None) -> dict[str, Any]:
    """Return the raw TOML dict at *path*, or ``{}`` when the file does not exist."""
    import tomllib

    cfg_path = path or _config_file_path()
    if not cfg_path.exists():
        return {}
    try:
        with open(cfg_path, "rb") as f:
            return tomllib.load(f)
    except Exception as exc:
        raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc


def save_config(
    config_data: dict[str, Any],
    path: Path | None = None,
    *,
    use_keyring: bool = False,
) -> Path:
    """Write config dict to TOML file with secure permissions (0600)."""
    import copy

    import tomli_w

    cfg_path = path or _config_file_path()
    cfg_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    write_data = config_data
    if use_keyring:
        write_data = copy.deepcopy(config_data)
        _store_api_key_in_keyring(write_data)

    # Write atomically
    tmp_path = cfg_path.with_suffix(".tmp")
    try:
        with open(tmp_path, "wb") as f:
            tomli_w.dump(write_data, f)
        tmp_path.replace(cfg_path)
    except Exception as exc:
        tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Cannot write config to {cfg_path}: {exc}") from exc

    cfg_path.chmod(0o600)
    return cfg_path


def _store_api_key_in_keyring(data: dict[str, Any]) -> None:
    """Replace the raw API key with a keyring placeholder (in-place)."""
    from lin_cli.core.keyring_store import (
        is_api_key_placeholder,
        keyring_backend_usable,
        store_api_key,
    )

    if not keyring_backend_usable():
        raise ConfigError(
            "No usable keyring backend found. Install one with: pip install 'lin-cli[keyring]'"
        )

    linear = data.get("linear", {})
    token = linear.get("api_key")
    if isinstance(token, str) and token and not is_api_key_placeholder(token):
        linear["api_key"] = store_api_key(token)
