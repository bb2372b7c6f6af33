"""Shared fixtures: an isolated data directory and an issue factory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest
import structlog

from lin_cli.linear.models import Attachment, Issue


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep config, cache and log files out of the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("LIN_CONFIG", "LIN_API_KEY", "LIN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(getattr(handler, "formatter", None), structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()


MakeIssue = Callable[..., Issue]


@pytest.fixture
def make_issue() -> MakeIssue:
    def _make(
        identifier: str,
        title: str = "",
        *,
        description: str = "",
        branch_name: str = "",
        urls: Sequence[str] = (),
    ) -> Issue:
        number = identifier.rsplit("-", 1)[-1]
        return Issue(
            id=f"id-{identifier}",
            identifier=identifier,
            title=title or f"Issue {number}",
            description=description,
            url=f"https://linear.app/acme/issue/{identifier}",
            branch_name=branch_name,
            attachments=tuple(
                Attachment(id=f"att-{i}", title=f"PR #{i + 1}", url=url)
                for i, url in enumerate(urls)
            ),
        )

    return _make
