"""Local issue cache — lets the dashboard start instantly.

The last successful fetch is written to a JSON file together with a
timestamp.  At startup ``IssueCache.load()`` returns the cached issues and
whether they are stale enough to warrant a refresh.  A missing cache is
normal (first run); an unreadable one is an error the caller must handle.
"""

from __future__ import annotations

import json
import time
from pathlib import Path

import structlog

from lin_cli.core.constants import DEFAULT_CACHE_TTL_SECONDS
from lin_cli.core.exceptions import CacheError
from lin_cli.linear.models import Issue

logger = structlog.get_logger()

CACHE_FORMAT_VERSION = 1


class IssueCache:
    """JSON file holding the most recently fetched issue collection."""

    def __init__(self, path: Path, ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS) -> None:
        self.path = path
        self.ttl_seconds = ttl_seconds

    def load(self) -> tuple[list[Issue], bool]:
        """Return ``(issues, needs_refresh)``.

        Raises :class:`CacheError` if the file exists but cannot be parsed.
        """
        if not self.path.exists():
            return [], True
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            timestamp = float(data.get("timestamp", 0))
            issues = [Issue.model_validate(raw) for raw in data.get("issues", [])]
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise CacheError(f"Cannot read issue cache {self.path}: {exc}") from exc

        age = time.time() - timestamp
        needs_refresh = age >= self.ttl_seconds or data.get("version") != CACHE_FORMAT_VERSION
        logger.debug("issue_cache_loaded", count=len(issues), age_seconds=int(age))
        return issues, needs_refresh

    def save(self, issues: list[Issue]) -> None:
        """Write *issues* to the cache file atomically."""
        payload = {
            "version": CACHE_FORMAT_VERSION,
            "timestamp": time.time(),
            "issues": [issue.model_dump(mode="json") for issue in issues],
        }
        tmp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            raise CacheError(f"Cannot write issue cache {self.path}: {exc}") from exc
