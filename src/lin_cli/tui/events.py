"""
Dashboard events and side effects — plain frozen dataclasses.

Events flow into :meth:`Dashboard.dispatch`; effects flow out and are
carried out by the Textual shell.  Neither imports Textual.
"""

from __future__ import annotations

from dataclasses import dataclass

from lin_cli.linear.models import Issue

# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyPressed:
    key: str  # Textual key name: "up", "tab", "ctrl+r", "p", ...
    character: str | None = None


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class RefreshRequested:
    """Ask for a refresh outside the key table (e.g. stale cache at startup)."""


@dataclass(frozen=True)
class RefreshCompleted:
    generation: int
    issues: tuple[Issue, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class StatusReported:
    """A collaborator failure the user should see."""

    message: str


Event = KeyPressed | Resized | RefreshRequested | RefreshCompleted | StatusReported

# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class StartRefresh:
    generation: int


@dataclass(frozen=True)
class OpenUrl:
    url: str


@dataclass(frozen=True)
class CheckoutBranch:
    branch_name: str


Effect = Quit | StartRefresh | OpenUrl | CheckoutBranch

__all__ = [
    "CheckoutBranch",
    "Effect",
    "Event",
    "KeyPressed",
    "OpenUrl",
    "Quit",
    "RefreshCompleted",
    "RefreshRequested",
    "Resized",
    "StartRefresh",
    "StatusReported",
]
