"""lin exception hierarchy."""

from __future__ import annotations


class LinError(Exception):
    """Base exception for all lin errors."""


class ConfigError(LinError):
    """Raised when the configuration is invalid or cannot be read."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class CacheError(LinError):
    """Raised when the local issue cache exists but cannot be read."""


class DataSourceError(LinError):
    """Raised when the Linear API request fails or returns an unusable payload."""


class CheckoutError(LinError):
    """Raised when a branch cannot be created or checked out."""


class UrlOpenError(LinError):
    """Raised when no browser could be launched for a URL."""


class RenderError(LinError):
    """Raised when an issue description cannot be rendered for the terminal."""
