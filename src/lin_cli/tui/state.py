"""
Dashboard state machine — pure Python, no Textual imports.

``Dashboard.dispatch(event)`` is the single entry point for key presses,
resizes and refresh completions.  It returns a new ``Dashboard`` plus an
optional side effect for the shell to carry out; the state itself never
performs I/O, so every transition can be tested without a terminal.

Input routing, in priority order:
  1. overlay active      — the overlay gets the key, nothing else does
  2. filter being typed  — the list gets the key as text; content resyncs
  3. otherwise           — the key table, interpreted against the focused pane;
                           unbound keys go to the focused pane's own bindings

Refresh is asynchronous: a refresh action marks the dashboard as loading
and emits ``StartRefresh(generation)``; the shell posts back
``RefreshCompleted`` with the same generation.  Completions for an older
generation are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

import structlog
from rich.text import Text

from lin_cli.core.constants import HELP_HEIGHT, LIST_FRAME_HEIGHT, LIST_FRAME_WIDTH
from lin_cli.core.exceptions import RenderError
from lin_cli.linear.models import Issue
from lin_cli.tui.content import ContentViewer
from lin_cli.tui.entries import issues_to_entries
from lin_cli.tui.events import (
    CheckoutBranch,
    Effect,
    Event,
    KeyPressed,
    OpenUrl,
    Quit,
    RefreshCompleted,
    RefreshRequested,
    Resized,
    StartRefresh,
    StatusReported,
)
from lin_cli.tui.keys import Action, action_for, short_help
from lin_cli.tui.list_browser import ListBrowser
from lin_cli.tui.overlay import OverlaySelector, place_overlay
from lin_cli.tui.theme import Theme

logger = structlog.get_logger()


class Pane(Enum):
    LIST = "list"
    CONTENT = "content"

    def toggled(self) -> Pane:
        return Pane.CONTENT if self is Pane.LIST else Pane.LIST


@dataclass(frozen=True)
class Dashboard:
    theme: Theme = field(default_factory=Theme)
    browser: ListBrowser = field(default_factory=ListBrowser)
    content: ContentViewer = field(default_factory=ContentViewer)
    overlay: OverlaySelector = field(default_factory=OverlaySelector)
    focus: Pane = Pane.LIST
    width: int = 0
    height: int = 0
    loading: bool = False
    generation: int = 0
    status: str = ""

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def initial(
        cls, issues: list[Issue] | tuple[Issue, ...], theme: Theme | None = None
    ) -> Dashboard:
        """Dashboard showing *issues* (e.g. from the cache), first one selected."""
        theme = theme or Theme()
        board = cls(
            theme=theme,
            content=ContentViewer(width=theme.content_width),
        )
        if issues:
            board = replace(board, browser=board.browser.set_items(issues_to_entries(issues)))
            board = board._sync_content()
        return board

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def selected_issue(self) -> Issue:
        return self.browser.selected_issue()

    @property
    def issues(self) -> tuple[Issue, ...]:
        return tuple(entry.issue for entry in self.browser.entries)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: Event) -> tuple[Dashboard, Effect | None]:
        if isinstance(event, KeyPressed):
            return self._on_key(event)
        if isinstance(event, Resized):
            return self.resize(event.width, event.height), None
        if isinstance(event, RefreshRequested):
            return self.request_refresh()
        if isinstance(event, RefreshCompleted):
            return self.complete_refresh(event), None
        if isinstance(event, StatusReported):
            return replace(self, status=event.message), None
        raise TypeError(f"Unknown dashboard event: {event!r}")

    def _on_key(self, event: KeyPressed) -> tuple[Dashboard, Effect | None]:
        key = event.key

        if self.overlay.active:
            overlay, url = self.overlay.handle_key(key)
            board = replace(self, overlay=overlay)
            return board, OpenUrl(url) if url else None

        if key == "ctrl+c":
            return self, Quit()

        if self.status:
            # A status message lasts until the next key press
            return replace(self, status="")._on_key(event)

        if self.browser.is_setting_filter:
            board = replace(self, browser=self.browser.edit_filter(key, event.character))
            return board._sync_content(), None

        action = action_for(key)
        if action is not None:
            return self._perform(action)

        if self.focus is Pane.CONTENT:
            return replace(self, content=self.content.handle_key(key)), None

        browser, quit_requested = self.browser.handle_key(key, event.character)
        if quit_requested:
            return self, Quit()
        board = replace(self, browser=browser)
        if browser.selected_issue() != self.content.issue:
            board = board._sync_content()
        return board, None

    def _perform(self, action: Action) -> tuple[Dashboard, Effect | None]:
        issue = self.selected_issue

        if action is Action.TOGGLE_PANE:
            return self.toggle_pane(), None

        if action in (Action.MOVE_UP, Action.MOVE_DOWN):
            delta = -1 if action is Action.MOVE_UP else 1
            if self.focus is Pane.CONTENT:
                return replace(self, content=self.content.scroll(delta)), None
            return self.move_selection(delta), None

        if action is Action.OPEN_LINKS:
            attachments = issue.attachments
            if len(attachments) == 1:
                return self, OpenUrl(attachments[0].url)
            if len(attachments) >= 2:
                return replace(self, overlay=self.overlay.activate(attachments)), None
            return self, None

        if action is Action.CHECKOUT:
            if issue.is_empty or not issue.branch_name:
                return self, None
            return self, CheckoutBranch(issue.branch_name)

        if action is Action.REFRESH:
            return self.request_refresh()

        if action is Action.OPEN_URL:
            if issue.is_empty or not issue.url:
                return self, None
            return self, OpenUrl(issue.url)

        raise ValueError(f"Unhandled action: {action}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def toggle_pane(self) -> Dashboard:
        """Flip focus between the list and the content pane."""
        return replace(self, focus=self.focus.toggled())

    def move_selection(self, delta: int) -> Dashboard:
        """Move the list cursor; a no-op at either end of the visible entries."""
        browser = self.browser.move(delta)
        if browser.cursor == self.browser.cursor:
            return self
        return replace(self, browser=browser)._sync_content()

    def resize(self, width: int, height: int) -> Dashboard:
        """Lay out both panes for a terminal of *width* x *height* cells."""
        content_width = self.theme.content_width
        list_width = max(HELP_HEIGHT, width - content_width - LIST_FRAME_WIDTH)
        list_height = max(HELP_HEIGHT, height - LIST_FRAME_HEIGHT - HELP_HEIGHT)
        content_height = max(HELP_HEIGHT, height - HELP_HEIGHT)
        try:
            content = self.content.set_size(content_width, content_height, self.theme)
            status = self.status
        except RenderError as exc:
            logger.warning("render_failed", issue=self.content.issue.identifier, error=str(exc))
            content = replace(
                self.content.clear(self.content.issue),
                width=content_width,
                height=content_height,
            )
            status = str(exc)
        return replace(
            self,
            width=width,
            height=height,
            browser=self.browser.set_size(list_width, list_height),
            content=content,
            status=status,
        )

    def request_refresh(self) -> tuple[Dashboard, Effect | None]:
        """Start a refresh unless one is already running."""
        if self.loading:
            return self, None
        generation = self.generation + 1
        logger.info("refresh_started", generation=generation)
        return replace(self, loading=True, generation=generation), StartRefresh(generation)

    def complete_refresh(self, event: RefreshCompleted) -> Dashboard:
        """Apply a refresh result; failures and stale results leave the list untouched."""
        if event.generation != self.generation:
            logger.debug(
                "refresh_result_dropped", generation=event.generation, current=self.generation
            )
            return self
        if event.error is not None:
            logger.warning("refresh_failed", generation=event.generation, error=event.error)
            return replace(self, loading=False, status=f"Error retrieving issues: {event.error}")

        logger.info("refresh_completed", generation=event.generation, issues=len(event.issues))
        # An open picker lists links of an issue that may no longer exist
        board = replace(
            self,
            loading=False,
            status="",
            overlay=self.overlay.deactivate(),
            browser=self.browser.set_items(issues_to_entries(event.issues)),
        )
        return board._sync_content()

    def _sync_content(self) -> Dashboard:
        """Point the content viewer at the list's selected issue."""
        issue = self.browser.selected_issue()
        try:
            return replace(self, content=self.content.set_content(issue, self.theme))
        except RenderError as exc:
            logger.warning("render_failed", issue=issue.identifier, error=str(exc))
            return replace(self, content=self.content.clear(issue), status=str(exc))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def view(self) -> list[Text]:
        """Compose the full screen: list | content, status, help, overlay on top."""
        list_lines = self.browser.render(
            self.theme, focused=self.focus is Pane.LIST, loading=self.loading
        )
        content_lines = self.content.render(self.theme, focused=self.focus is Pane.CONTENT)

        margin_x = LIST_FRAME_WIDTH // 2
        margin_y = LIST_FRAME_HEIGHT // 2
        left_width = self.browser.width + LIST_FRAME_WIDTH
        left = [Text() for _ in range(margin_y)] + list_lines

        rows = max(len(left), len(content_lines))
        lines: list[Text] = []
        for i in range(rows):
            row = Text(" " * margin_x)
            if i < len(left):
                row.append_text(left[i])
            row.truncate(left_width, pad=True)
            if i < len(content_lines):
                row.append_text(content_lines[i])
            lines.append(row)

        if self.status:
            status = Text(self.status, style=self.theme.status)
            status.truncate(max(1, self.width), overflow="ellipsis")
            lines.append(status)
        help_line = Text(short_help(), style=self.theme.help)
        help_line.truncate(max(1, self.width), overflow="ellipsis")
        lines.append(help_line)

        if self.overlay.active:
            block = self.overlay.render(self.theme, max_width=max(1, self.width))
            lines = place_overlay(0, 0, block, lines)
        return lines

    def render_text(self) -> Text:
        """:meth:`view` joined into a single Text for display."""
        return Text("\n").join(self.view())
