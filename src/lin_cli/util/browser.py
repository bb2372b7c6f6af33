"""Open URLs in the user's browser."""

from __future__ import annotations

import webbrowser

import structlog

from lin_cli.core.exceptions import UrlOpenError

logger = structlog.get_logger()


def open_url(url: str) -> None:
    """Open *url* in a new browser tab; raise :class:`UrlOpenError` on failure."""
    if not url:
        raise UrlOpenError("No URL to open")
    try:
        opened = webbrowser.open_new_tab(url)
    except webbrowser.Error as exc:
        raise UrlOpenError(f"Cannot open {url}: {exc}") from exc
    if not opened:
        raise UrlOpenError(f"No browser available to open {url}")
    logger.debug("url_opened", url=url)
