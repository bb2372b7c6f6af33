"""Linear API key in the OS keychain.

``lin auth --keyring`` keeps the key out of ``config.toml``: the key is
saved under service ``lin``, account ``linear-api-key``, and the config
file holds :data:`API_KEY_PLACEHOLDER` instead.  Requires the
``[keyring]`` extra (``pip install 'lin-cli[keyring]'``).
"""

from __future__ import annotations

import structlog

from lin_cli.core.exceptions import ConfigError

logger = structlog.get_logger()

SERVICE_NAME = "lin"
ACCOUNT_NAME = "linear-api-key"
KEYRING_PREFIX = "keyring:"
API_KEY_PLACEHOLDER = f"{KEYRING_PREFIX}{SERVICE_NAME}:{ACCOUNT_NAME}"

_INSTALL_HINT = "Install a backend with: pip install 'lin-cli[keyring]'"


def keyring_backend_usable() -> bool:
    """True when ``keyring`` is installed and its backend can store secrets."""
    try:
        import keyring
    except ImportError:
        return False
    name = type(keyring.get_keyring()).__name__.lower()
    return "fail" not in name and "null" not in name


def is_api_key_placeholder(value: object) -> bool:
    """True if *value* points into the keychain rather than being the key itself."""
    return isinstance(value, str) and value.startswith(KEYRING_PREFIX)


def store_api_key(api_key: str) -> str:
    """Save *api_key* to the keychain and return the placeholder for ``config.toml``."""
    import keyring

    keyring.set_password(SERVICE_NAME, ACCOUNT_NAME, api_key)
    logger.info("api_key_stored", service=SERVICE_NAME)
    return API_KEY_PLACEHOLDER


def resolve_api_key(placeholder: str) -> str:
    """Look up the API key behind *placeholder*.

    Raises :class:`ConfigError` when the placeholder is not one ``lin auth``
    writes, keyring is not installed, the keychain is locked, or no key
    has been stored.
    """
    if placeholder != API_KEY_PLACEHOLDER:
        raise ConfigError(
            f"Unknown keyring placeholder {placeholder!r} for [linear].api_key. "
            "Run 'lin auth --keyring' again."
        )
    try:
        import keyring
        from keyring.errors import KeyringError
    except ImportError as exc:
        raise ConfigError(f"[linear].api_key is stored in the keyring. {_INSTALL_HINT}") from exc

    try:
        api_key = keyring.get_password(SERVICE_NAME, ACCOUNT_NAME)
    except KeyringError as exc:
        logger.warning("keyring_read_failed", service=SERVICE_NAME, error=str(exc))
        raise ConfigError(
            f"Cannot read the Linear API key from the keyring: {exc}. Is the keyring unlocked?"
        ) from exc
    if not api_key:
        raise ConfigError("No Linear API key found in the keyring. Run 'lin auth --keyring'.")
    return api_key
