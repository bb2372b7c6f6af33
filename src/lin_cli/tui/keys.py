"""
Key dispatch table.

A fixed mapping from key names to dashboard actions.  The table does not
know which pane has focus; :class:`~lin_cli.tui.state.Dashboard` decides
what an action means in the current focus/overlay/filter state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Action(Enum):
    TOGGLE_PANE = "toggle_pane"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    OPEN_LINKS = "open_links"
    CHECKOUT = "checkout"
    REFRESH = "refresh"
    OPEN_URL = "open_url"


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    action: Action
    help_key: str
    help_desc: str


KEY_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("tab",), Action.TOGGLE_PANE, "tab", "switch pane"),
    KeyBinding(("up", "k"), Action.MOVE_UP, "↑/k", "up"),
    KeyBinding(("down", "j"), Action.MOVE_DOWN, "↓/j", "down"),
    KeyBinding(("enter",), Action.OPEN_URL, "enter", "open"),
    KeyBinding(("p",), Action.OPEN_LINKS, "p", "pull requests"),
    KeyBinding(("c",), Action.CHECKOUT, "c", "checkout"),
    KeyBinding(("ctrl+r",), Action.REFRESH, "ctrl+r", "refresh"),
)

# Help entries for the list's own bindings, appended after the table
_LIST_HELP: tuple[tuple[str, str], ...] = (
    ("/", "filter"),
    ("q", "quit"),
)

_ACTIONS_BY_KEY: dict[str, Action] = {
    key: binding.action for binding in KEY_BINDINGS for key in binding.keys
}


def action_for(key: str) -> Action | None:
    """Return the action bound to *key*, or None."""
    return _ACTIONS_BY_KEY.get(key)


def short_help(separator: str = " • ") -> str:
    """One-line help text for the bottom of the screen."""
    entries = [(b.help_key, b.help_desc) for b in KEY_BINDINGS] + list(_LIST_HELP)
    return separator.join(f"{key} {desc}" for key, desc in entries)
