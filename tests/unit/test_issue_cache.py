"""Unit tests for lin_cli.linear.cache — the on-disk issue cache."""

from __future__ import annotations

import json
import time
from pathlib import Path

import pytest

from lin_cli.core.exceptions import CacheError
from lin_cli.linear import fetch_and_cache
from lin_cli.linear.cache import CACHE_FORMAT_VERSION, IssueCache


class TestLoad:
    def test_missing_cache_needs_refresh(self, tmp_path: Path) -> None:
        assert IssueCache(tmp_path / "issues.json").load() == ([], True)

    def test_fresh_cache(self, tmp_path: Path, make_issue) -> None:
        cache = IssueCache(tmp_path / "issues.json", ttl_seconds=600)
        issues = [make_issue("LIN-1", urls=["https://gh/pr/1"]), make_issue("LIN-2")]
        cache.save(issues)
        loaded, needs_refresh = cache.load()
        assert loaded == issues
        assert needs_refresh is False

    def test_expired_cache_needs_refresh(self, tmp_path: Path, make_issue) -> None:
        path = tmp_path / "issues.json"
        path.write_text(
            json.dumps(
                {
                    "version": CACHE_FORMAT_VERSION,
                    "timestamp": time.time() - 3600,
                    "issues": [make_issue("LIN-1").model_dump(mode="json")],
                }
            )
        )
        loaded, needs_refresh = IssueCache(path, ttl_seconds=600).load()
        assert [i.identifier for i in loaded] == ["LIN-1"]
        assert needs_refresh is True

    def test_zero_ttl_always_refreshes(self, tmp_path: Path, make_issue) -> None:
        cache = IssueCache(tmp_path / "issues.json", ttl_seconds=0)
        cache.save([make_issue("LIN-1")])
        assert cache.load()[1] is True

    def test_old_format_needs_refresh(self, tmp_path: Path) -> None:
        path = tmp_path / "issues.json"
        path.write_text(json.dumps({"timestamp": time.time(), "issues": []}))
        assert IssueCache(path).load() == ([], True)

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            "[1, 2, 3]",
            '{"timestamp": "yesterday", "issues": []}',
            '{"version": 1, "timestamp": 0, "issues": [{"attachments": [{"title": "no url"}]}]}',
        ],
    )
    def test_corrupt_cache_raises(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "issues.json"
        path.write_text(content)
        with pytest.raises(CacheError):
            IssueCache(path).load()


class TestSave:
    def test_creates_parent_directory(self, tmp_path: Path, make_issue) -> None:
        cache = IssueCache(tmp_path / "nested" / "dir" / "issues.json")
        cache.save([make_issue("LIN-1")])
        assert cache.path.exists()
        assert not cache.path.with_suffix(".tmp").exists()

    def test_unwritable_location_raises(self, tmp_path: Path, make_issue) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(CacheError):
            IssueCache(blocker / "issues.json").save([make_issue("LIN-1")])


class _FakeClient:
    def __init__(self, issues) -> None:
        self.issues = issues

    def fetch_assigned_issues(self):
        return list(self.issues)


class TestFetchAndCache:
    def test_writes_cache(self, tmp_path: Path, make_issue) -> None:
        cache = IssueCache(tmp_path / "issues.json")
        issues = [make_issue("LIN-5")]
        assert fetch_and_cache(_FakeClient(issues), cache) == issues
        assert cache.load() == (issues, False)

    def test_cache_write_failure_still_returns_issues(self, tmp_path: Path, make_issue) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        cache = IssueCache(blocker / "issues.json")
        issues = [make_issue("LIN-5")]
        assert fetch_and_cache(_FakeClient(issues), cache) == issues
