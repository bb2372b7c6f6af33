"""Smoke and pilot tests for the Textual dashboard shell."""

from __future__ import annotations

import httpx
import pytest

from lin_cli.core.exceptions import CheckoutError, DataSourceError, UrlOpenError
from lin_cli.linear.client import LinearClient
from lin_cli.tui.app import CheckoutOutcome, DashboardApp, DashboardScreen

SIZE = (120, 40)


class TestImports:
    def test_app_importable(self) -> None:
        from lin_cli.tui.app import run

        assert callable(run)

    def test_css_resource_loads(self) -> None:
        from importlib.resources import files

        css = files("lin_cli.tui.css").joinpath("lin.tcss").read_text("utf-8")
        assert "Screen" in css
        assert "#dashboard" in css

    def test_priority_bindings_forward_keys(self) -> None:
        keys = {binding.key: binding for binding in DashboardApp.BINDINGS}
        assert keys["ctrl+c"].priority
        assert keys["tab"].priority
        assert keys["ctrl+c"].action == "forward_key('ctrl+c')"


def _screen(app: DashboardApp) -> DashboardScreen:
    screen = app.screen
    assert isinstance(screen, DashboardScreen)
    return screen


def _no_fetch():
    raise AssertionError("no refresh expected")


@pytest.mark.asyncio
async def test_navigate_and_quit(make_issue) -> None:
    app = DashboardApp([make_issue("LIN-1"), make_issue("LIN-2")], fetch_issues=_no_fetch)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        screen = _screen(app)
        assert screen.board.width == SIZE[0]

        await pilot.press("down")
        assert screen.board.selected_issue.identifier == "LIN-2"
        assert screen.board.content.issue.identifier == "LIN-2"

        await pilot.press("tab")
        assert screen.board.focus.value == "content"

        await pilot.press("tab", "q")
    assert app.return_value is None


@pytest.mark.asyncio
async def test_ctrl_c_quits(make_issue) -> None:
    app = DashboardApp([make_issue("LIN-1")], fetch_issues=_no_fetch)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("ctrl+c")
    assert app.return_value is None


@pytest.mark.asyncio
async def test_ctrl_c_in_overlay_only_cancels(make_issue) -> None:
    issue = make_issue("LIN-1", urls=("https://gh/pr/1", "https://gh/pr/2"))
    app = DashboardApp([issue], fetch_issues=_no_fetch)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        screen = _screen(app)
        await pilot.press("p")
        assert screen.board.overlay.active

        await pilot.press("ctrl+c")
        assert not screen.board.overlay.active
        assert app.is_running


@pytest.mark.asyncio
async def test_refresh_on_mount_replaces_issues(make_issue) -> None:
    fetched = [make_issue("LIN-7"), make_issue("LIN-8")]
    app = DashboardApp([], fetch_issues=lambda: fetched, needs_refresh=True)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await app.workers.wait_for_complete()
        await pilot.pause()
        board = _screen(app).board
        assert not board.loading
        assert [i.identifier for i in board.issues] == ["LIN-7", "LIN-8"]
        assert board.content.issue.identifier == "LIN-7"


@pytest.mark.asyncio
async def test_refresh_failure_keeps_list(make_issue) -> None:
    def _fail():
        raise DataSourceError("Linear API returned HTTP 502")

    app = DashboardApp([make_issue("LIN-1")], fetch_issues=_fail)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("ctrl+r")
        await app.workers.wait_for_complete()
        await pilot.pause()
        board = _screen(app).board
        assert not board.loading
        assert [i.identifier for i in board.issues] == ["LIN-1"]
        assert "HTTP 502" in board.status


@pytest.mark.asyncio
async def test_malformed_payload_keeps_dashboard_running(make_issue) -> None:
    payload = {"data": {"viewer": {"assignedIssues": {"nodes": [None]}}}}
    client = LinearClient(
        "lin_api_test",
        api_url="https://api.linear.test/graphql",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload)),
    )
    app = DashboardApp([make_issue("LIN-1")], fetch_issues=client.fetch_assigned_issues)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("ctrl+r")
        await app.workers.wait_for_complete()
        await pilot.pause()
        board = _screen(app).board
        assert app.is_running
        assert not board.loading
        assert [i.identifier for i in board.issues] == ["LIN-1"]
        assert "Unexpected Linear API response shape" in board.status


@pytest.mark.asyncio
async def test_checkout_exits_with_outcome(make_issue) -> None:
    checked_out: list[str] = []
    app = DashboardApp(
        [make_issue("LIN-1", branch_name="feat-1"), make_issue("LIN-2", branch_name="feat-2")],
        fetch_issues=_no_fetch,
        checkout=checked_out.append,
    )
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("j", "c")
    assert checked_out == ["feat-2"]
    assert app.return_value == CheckoutOutcome("feat-2")


@pytest.mark.asyncio
async def test_checkout_failure_reports_status(make_issue) -> None:
    def _checkout(branch_name: str) -> None:
        raise CheckoutError(f"git checkout failed for '{branch_name}'")

    app = DashboardApp(
        [make_issue("LIN-1", branch_name="feat-1")],
        fetch_issues=_no_fetch,
        checkout=_checkout,
    )
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("c")
        screen = _screen(app)
        assert app.is_running
        assert "feat-1" in screen.board.status

        # Next key clears the message
        await pilot.press("j")
        assert screen.board.status == ""


@pytest.mark.asyncio
async def test_open_url_failure_reports_status(make_issue) -> None:
    opened: list[str] = []

    def _open(url: str) -> None:
        opened.append(url)
        raise UrlOpenError("No browser available")

    app = DashboardApp([make_issue("LIN-1")], fetch_issues=_no_fetch, open_url=_open)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("enter")
        assert opened == ["https://linear.app/acme/issue/LIN-1"]
        assert _screen(app).board.status == "No browser available"
        assert app.is_running


@pytest.mark.asyncio
async def test_overlay_pick_opens_url(make_issue) -> None:
    opened: list[str] = []
    issue = make_issue("LIN-1", urls=("https://gh/pr/1", "https://gh/pr/2"))
    app = DashboardApp([issue], fetch_issues=_no_fetch, open_url=opened.append)
    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("p", "down", "enter")
        assert opened == ["https://gh/pr/2"]
        assert not _screen(app).board.overlay.active
