"""
Linear data access: issue models, the GraphQL client, and the local cache.

``fetch_and_cache`` is the data source the dashboard refreshes from: it
fetches the assigned issues and, on success, rewrites the cache.
"""

from __future__ import annotations

import structlog

from lin_cli.core.exceptions import CacheError
from lin_cli.linear.cache import IssueCache
from lin_cli.linear.client import LinearClient
from lin_cli.linear.models import Attachment, Issue

logger = structlog.get_logger()


def fetch_and_cache(client: LinearClient, cache: IssueCache) -> list[Issue]:
    issues = client.fetch_assigned_issues()
    try:
        cache.save(issues)
    except CacheError as exc:
        # Fetched issues stay usable without a cache write
        logger.warning("issue_cache_write_failed", error=str(exc))
    return issues


__all__ = [
    "Attachment",
    "Issue",
    "IssueCache",
    "LinearClient",
    "fetch_and_cache",
]
