"""
ListBrowser — the scrollable, filterable issue list (left pane).

Immutable: every operation returns a new ``ListBrowser``.  Owns the entry
collection, the filter text and filter mode, and the cursor into the
visible (post-filter) entries.  Rendering depends only on the
:class:`~lin_cli.tui.entries.Renderable` contract.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from rich.text import Text

from lin_cli.core.constants import ENTRY_HEIGHT, ENTRY_SPACING
from lin_cli.linear.models import Issue
from lin_cli.tui.entries import ListEntry, Renderable
from lin_cli.tui.theme import Theme
from lin_cli.util.text import split_into_chunks

LIST_TITLE = "Assigned Issues"
_HEADER_ROWS = 3  # title, filter prompt (or blank), blank
_FOOTER_ROWS = 1  # paginator
_ROW_PREFIX = "  │ "


class FilterState(Enum):
    UNFILTERED = auto()
    FILTERING = auto()  # user is typing the filter text
    APPLIED = auto()  # filter accepted, list navigable


@dataclass(frozen=True)
class ListBrowser:
    entries: tuple[ListEntry, ...] = ()
    filter_text: str = ""
    filter_state: FilterState = FilterState.UNFILTERED
    cursor: int = 0
    width: int = 0
    height: int = 0

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def visible(self) -> tuple[ListEntry, ...]:
        """Entries matching the filter (all entries when unfiltered)."""
        if self.filter_state is FilterState.UNFILTERED or not self.filter_text:
            return self.entries
        needle = self.filter_text.lower()
        return tuple(e for e in self.entries if needle in e.filter_key().lower())

    @property
    def is_setting_filter(self) -> bool:
        return self.filter_state is FilterState.FILTERING

    @property
    def per_page(self) -> int:
        body = max(0, self.height - _HEADER_ROWS - _FOOTER_ROWS)
        return max(1, (body + ENTRY_SPACING) // (ENTRY_HEIGHT + ENTRY_SPACING))

    def selected_entry(self) -> ListEntry | None:
        visible = self.visible
        if not visible:
            return None
        return visible[min(self.cursor, len(visible) - 1)]

    def selected_issue(self) -> Issue:
        """The issue under the cursor, or the empty sentinel if nothing is visible."""
        entry = self.selected_entry()
        return entry.issue if entry is not None else Issue.empty()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_items(self, entries: tuple[ListEntry, ...]) -> ListBrowser:
        """Replace the whole collection; the filter survives, the cursor resets."""
        return replace(self, entries=tuple(entries), cursor=0)

    def set_size(self, width: int, height: int) -> ListBrowser:
        return replace(self, width=width, height=height)

    def select(self, index: int) -> ListBrowser:
        """Move the cursor to *index*, clamped to the visible entries."""
        count = len(self.visible)
        if count == 0:
            return replace(self, cursor=0)
        return replace(self, cursor=max(0, min(index, count - 1)))

    def move(self, delta: int) -> ListBrowser:
        """Move the cursor by *delta*; stops at the first/last entry (no wraparound)."""
        return self.select(self.cursor + delta)

    def start_filter(self) -> ListBrowser:
        return replace(self, filter_state=FilterState.FILTERING, cursor=0)

    def clear_filter(self) -> ListBrowser:
        return replace(self, filter_text="", filter_state=FilterState.UNFILTERED, cursor=0)

    def edit_filter(self, key: str, character: str | None) -> ListBrowser:
        """Apply one keystroke while the filter is being typed."""
        if key == "escape":
            return self.clear_filter()
        if key == "enter":
            if not self.filter_text:
                return self.clear_filter()
            return replace(self, filter_state=FilterState.APPLIED).select(self.cursor)
        if key in ("backspace", "ctrl+h"):
            return replace(self, filter_text=self.filter_text[:-1], cursor=0)
        if key == "ctrl+u":
            return replace(self, filter_text="", cursor=0)
        if character and character.isprintable():
            return replace(self, filter_text=self.filter_text + character, cursor=0)
        return self

    def handle_key(self, key: str, character: str | None) -> tuple[ListBrowser, bool]:
        """Handle the list's own bindings; returns ``(browser, quit_requested)``."""
        if key == "slash" or character == "/":
            return self.start_filter(), False
        if key == "q":
            return self, True
        if key == "escape":
            if self.filter_state is FilterState.APPLIED:
                return self.clear_filter(), False
            return self, True
        if key in ("home", "g"):
            return self.select(0), False
        if key in ("end", "G", "shift+g"):
            return self.select(len(self.visible) - 1), False
        if key in ("pageup", "left", "h"):
            return self.move(-self.per_page), False
        if key in ("pagedown", "right", "l"):
            return self.move(self.per_page), False
        return self, False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, theme: Theme, *, focused: bool, loading: bool = False) -> list[Text]:
        """Return exactly ``height`` lines, each at most ``width`` cells."""
        lines: list[Text] = []

        title = Text(f" {LIST_TITLE} ", style=theme.list_title)
        if loading:
            title.append(" Loading…", style=theme.entry_summary)
        lines.append(title)
        lines.append(self._render_filter_line(theme))
        lines.append(Text())

        visible = self.visible
        body_height = max(0, self.height - _HEADER_ROWS - _FOOTER_ROWS)
        body: list[Text] = []
        if not visible:
            empty = "No matches." if self.filter_text else "No issues."
            body.append(Text(f"  {empty}", style=theme.entry_summary))
        else:
            per_page = self.per_page
            start = (self.cursor // per_page) * per_page
            for index, entry in enumerate(visible[start : start + per_page], start=start):
                if index > start:
                    body.extend(Text() for _ in range(ENTRY_SPACING))
                body.extend(self._render_entry(entry, theme, index == self.cursor, focused))
        body = body[:body_height]
        body.extend(Text() for _ in range(body_height - len(body)))
        lines.extend(body)

        lines.append(self._render_paginator(theme, len(visible)))

        lines = lines[: self.height]
        for line in lines:
            line.truncate(max(0, self.width), overflow="ellipsis")
        return lines

    def _render_filter_line(self, theme: Theme) -> Text:
        if self.filter_state is FilterState.UNFILTERED:
            return Text()
        line = Text("Filter: ", style=theme.entry_summary)
        line.append(self.filter_text, style=theme.entry_title)
        if self.filter_state is FilterState.FILTERING:
            line.append("▏", style=theme.selected(True))
        return line

    def _render_entry(
        self, entry: Renderable, theme: Theme, selected: bool, focused: bool
    ) -> list[Text]:
        if selected:
            title_style = summary_style = theme.selected(focused)
        else:
            title_style, summary_style = theme.entry_title, theme.entry_summary

        rows = [Text(_ROW_PREFIX, style=title_style) + Text(entry.title(), style=title_style)]
        chunks = split_into_chunks(entry.summary(), theme.summary_width)
        for i, chunk in enumerate(chunks):
            row = Text(_ROW_PREFIX, style=summary_style) + Text(chunk, style=summary_style)
            if i >= 1 and len(chunks) > 2:
                row.append("…", style=theme.entry_summary)
                rows.append(row)
                break
            rows.append(row)
        rows.extend(Text() for _ in range(ENTRY_HEIGHT - len(rows)))
        return rows

    def _render_paginator(self, theme: Theme, count: int) -> Text:
        pages = max(1, -(-count // self.per_page))
        if pages <= 1:
            return Text()
        current = self.cursor // self.per_page
        line = Text("  ")
        for page in range(pages):
            line.append("•", style=theme.selected(True) if page == current else theme.help)
        return line
