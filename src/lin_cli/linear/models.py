"""
Linear issue models.

Issues are built once per refresh (from the API or the local cache) and
never mutated afterwards; a refresh replaces the whole collection.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Attachment(BaseModel):
    """A URL linked to an issue — usually a pull request."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    subtitle: str = ""
    url: str

    @classmethod
    def from_api(cls, node: dict[str, Any]) -> Attachment:
        return cls(
            id=node.get("id") or "",
            title=node.get("title") or "",
            subtitle=node.get("subtitle") or "",
            url=node["url"],
        )

    @property
    def label(self) -> str:
        return self.title or self.url


class Issue(BaseModel):
    """One Linear issue assigned to the viewer."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    identifier: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    branch_name: str = ""
    state_name: str = ""
    priority_label: str = ""
    attachments: tuple[Attachment, ...] = ()

    @field_validator("description", mode="before")
    @classmethod
    def none_description_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def empty(cls) -> Issue:
        """The "nothing selected" sentinel."""
        return _EMPTY_ISSUE

    @property
    def is_empty(self) -> bool:
        return not self.identifier and not self.id

    @classmethod
    def from_api(cls, node: dict[str, Any]) -> Issue:
        """Build an Issue from one ``assignedIssues.nodes`` entry."""
        attachment_nodes = (node.get("attachments") or {}).get("nodes") or []
        return cls(
            id=node["id"],
            identifier=node["identifier"],
            title=node.get("title") or "",
            description=node.get("description"),
            url=node.get("url") or "",
            branch_name=node.get("branchName") or "",
            state_name=(node.get("state") or {}).get("name") or "",
            priority_label=node.get("priorityLabel") or "",
            attachments=tuple(Attachment.from_api(a) for a in attachment_nodes),
        )


_EMPTY_ISSUE = Issue()
