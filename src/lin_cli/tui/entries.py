"""List entries — what the list browser knows about an issue."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from lin_cli.linear.models import Issue


@runtime_checkable
class Renderable(Protocol):
    """Contract for anything the list browser can draw and filter."""

    def title(self) -> str: ...

    def summary(self) -> str: ...

    def filter_key(self) -> str: ...


@dataclass(frozen=True)
class ListEntry:
    """One row of the issue list, wrapping a single :class:`Issue`."""

    issue: Issue

    def title(self) -> str:
        return self.issue.identifier

    def summary(self) -> str:
        return self.issue.title

    def filter_key(self) -> str:
        return self.title() + self.summary()


def issues_to_entries(issues: Iterable[Issue]) -> tuple[ListEntry, ...]:
    return tuple(ListEntry(issue) for issue in issues)
