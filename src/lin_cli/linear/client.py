"""
Linear GraphQL client — the dashboard's data source.

One query, one POST, no SDK: the viewer's assigned, not-yet-completed
issues with their attachments.  Raw httpx calls, synchronous, so the
dashboard can run it from a thread worker.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from lin_cli.core.constants import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, MAX_ASSIGNED_ISSUES
from lin_cli.core.exceptions import DataSourceError
from lin_cli.linear.models import Issue

logger = structlog.get_logger()

ASSIGNED_ISSUES_QUERY = """
query AssignedIssues($first: Int!) {
  viewer {
    assignedIssues(
      first: $first
      orderBy: updatedAt
      filter: { state: { type: { nin: ["completed", "canceled"] } } }
    ) {
      nodes {
        id
        identifier
        title
        description
        url
        branchName
        priorityLabel
        state { name }
        attachments { nodes { id title subtitle url } }
      }
    }
  }
}
"""


class LinearClient:
    """Fetch issues from the Linear GraphQL API."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

    def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
        }
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(
                    self._api_url,
                    json={"query": query, "variables": variables},
                    headers=headers,
                )
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise DataSourceError(
                f"Linear API returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise DataSourceError(f"Cannot reach Linear API: {exc}") from exc
        except ValueError as exc:
            raise DataSourceError(f"Linear API returned invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise DataSourceError("Linear API returned an unexpected payload")
        if errors := payload.get("errors"):
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(e.get("message", e) if isinstance(e, dict) else e) for e in errors
            )
            raise DataSourceError(f"Linear API error: {messages}")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise DataSourceError("Linear API response has no data")
        return data

    def fetch_assigned_issues(self) -> list[Issue]:
        """Return the viewer's open assigned issues, most recently updated first."""
        data = self._execute(ASSIGNED_ISSUES_QUERY, {"first": MAX_ASSIGNED_ISSUES})
        try:
            nodes = data["viewer"]["assignedIssues"]["nodes"]
            issues = [Issue.from_api(node) for node in nodes]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"Unexpected Linear API response shape: {exc}") from exc
        logger.debug("assigned_issues_fetched", count=len(issues))
        return issues
