"""
lin dashboard — Textual application shell.

Launched by ``lin`` (no args, TTY) or ``lin ui``.

The shell holds no dashboard logic of its own.  It translates Textual key
and resize events into :mod:`lin_cli.tui.events`, feeds them to
:meth:`Dashboard.dispatch`, redraws the single ``#dashboard`` widget, and
carries out whatever effect comes back:

  Quit            — exit the app
  StartRefresh    — fetch issues in a thread worker, post RefreshCompleted
  OpenUrl         — open the system browser; failures go to the status line
  CheckoutBranch  — run git; success exits with a CheckoutOutcome
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from importlib.resources import files

import structlog
from textual import events, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static

from lin_cli import __version__
from lin_cli.core.exceptions import CheckoutError, LinError, UrlOpenError
from lin_cli.git.branch import checkout_branch
from lin_cli.linear.models import Issue
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
from lin_cli.tui.state import Dashboard
from lin_cli.tui.theme import Theme
from lin_cli.util.browser import open_url

logger = structlog.get_logger()

_CSS_TEXT: str = files("lin_cli.tui.css").joinpath("lin.tcss").read_text("utf-8")

FetchIssues = Callable[[], Sequence[Issue]]
CheckoutFn = Callable[[str], object]
OpenUrlFn = Callable[[str], object]


@dataclass(frozen=True)
class CheckoutOutcome:
    """Result of :meth:`DashboardApp.run` when the user checked out a branch."""

    branch_name: str


class DashboardScreen(Screen):
    """The whole dashboard, drawn into one Static from :meth:`Dashboard.view`."""

    def __init__(
        self,
        board: Dashboard,
        *,
        fetch_issues: FetchIssues,
        checkout: CheckoutFn = checkout_branch,
        open_url: OpenUrlFn = open_url,
        refresh_on_mount: bool = False,
    ) -> None:
        super().__init__()
        self.board = board
        self._fetch_issues = fetch_issues
        self._checkout = checkout
        self._open_url = open_url
        self._refresh_on_mount = refresh_on_mount

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    def compose(self) -> ComposeResult:
        yield Static(id="dashboard")

    def on_mount(self) -> None:
        self.apply_event(Resized(self.size.width, self.size.height))
        if self._refresh_on_mount:
            self.apply_event(RefreshRequested())

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_resize(self, event: events.Resize) -> None:
        self.apply_event(Resized(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        # Every key belongs to the dashboard; nothing bubbles to app bindings
        event.stop()
        event.prevent_default()
        self.apply_event(KeyPressed(event.key, event.character))

    def apply_event(self, event: Event) -> None:
        """Dispatch *event*, redraw, then run the resulting effect (if any)."""
        self.board, effect = self.board.dispatch(event)
        self.query_one("#dashboard", Static).update(self.board.render_text())
        if effect is not None:
            self._run_effect(effect)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, Quit):
            self.app.exit()
        elif isinstance(effect, StartRefresh):
            self._refresh(effect.generation)
        elif isinstance(effect, OpenUrl):
            self._open(effect.url)
        elif isinstance(effect, CheckoutBranch):
            self._checkout_branch(effect.branch_name)

    @work(thread=True, exclusive=True, group="refresh")
    def _refresh(self, generation: int) -> None:
        try:
            issues = tuple(self._fetch_issues())
        except LinError as exc:
            result = RefreshCompleted(generation, error=str(exc))
        else:
            result = RefreshCompleted(generation, issues=issues)
        self.app.call_from_thread(self.apply_event, result)

    def _open(self, url: str) -> None:
        try:
            self._open_url(url)
        except UrlOpenError as exc:
            logger.warning("url_open_failed", url=url, error=str(exc))
            self.apply_event(StatusReported(str(exc)))

    def _checkout_branch(self, branch_name: str) -> None:
        try:
            self._checkout(branch_name)
        except CheckoutError as exc:
            logger.warning("checkout_failed", branch=branch_name, error=str(exc))
            self.apply_event(StatusReported(str(exc)))
            return
        self.app.exit(CheckoutOutcome(branch_name))


class DashboardApp(App):  # type: ignore[type-arg]
    """lin interactive terminal dashboard."""

    TITLE = f"lin {__version__}"
    CSS = _CSS_TEXT

    BINDINGS = [
        # Textual quits on ctrl+c itself; the dashboard decides (the overlay cancels)
        Binding("ctrl+c", "forward_key('ctrl+c')", "Quit", show=False, priority=True),
        Binding("tab", "forward_key('tab')", "Switch pane", show=False, priority=True),
    ]

    def __init__(
        self,
        issues: Sequence[Issue],
        *,
        fetch_issues: FetchIssues,
        needs_refresh: bool = False,
        theme: Theme | None = None,
        checkout: CheckoutFn = checkout_branch,
        open_url: OpenUrlFn = open_url,
    ) -> None:
        super().__init__()
        self._board = Dashboard.initial(tuple(issues), theme)
        self._fetch_issues = fetch_issues
        self._needs_refresh = needs_refresh
        self._checkout = checkout
        self._open_url = open_url

    def compose(self) -> ComposeResult:
        # The dashboard screen is pushed in on_mount; compose yields nothing here.
        return iter([])

    def on_mount(self) -> None:
        self.push_screen(
            DashboardScreen(
                self._board,
                fetch_issues=self._fetch_issues,
                checkout=self._checkout,
                open_url=self._open_url,
                refresh_on_mount=self._needs_refresh,
            )
        )

    def action_forward_key(self, key: str) -> None:
        screen = self.screen
        if isinstance(screen, DashboardScreen):
            screen.apply_event(KeyPressed(key))


def run(
    issues: Sequence[Issue],
    *,
    fetch_issues: FetchIssues,
    needs_refresh: bool = False,
    theme: Theme | None = None,
) -> CheckoutOutcome | None:
    """Entry point called from the CLI; returns the checkout outcome, if any."""
    app = DashboardApp(
        issues,
        fetch_issues=fetch_issues,
        needs_refresh=needs_refresh,
        theme=theme,
    )
    return app.run()
