"""lin constants: filesystem layout, API defaults, and dashboard geometry."""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from pathlib import Path

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    ENV_ERROR = 3
    NETWORK_ERROR = 4


# ---------------------------------------------------------------------------
# Platform-specific data directory
# ---------------------------------------------------------------------------


def _default_data_dir() -> Path:
    """
    Return the platform-appropriate lin data directory.

    macOS : ~/Library/Application Support/lin
    Linux : ~/.config/lin
    Other : ~/.lin
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "lin"
    if sys.platform.startswith("linux"):
        xdg = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        return xdg / "lin"
    return Path.home() / ".lin"


# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------

CONFIG_FILENAME = "config.toml"
CACHE_FILENAME = "issues.json"
LOG_FILENAME = "lin.log"

# ---------------------------------------------------------------------------
# Linear API
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CACHE_TTL_SECONDS = 600  # 10 minutes
MAX_ASSIGNED_ISSUES = 100

# ---------------------------------------------------------------------------
# Dashboard geometry
# ---------------------------------------------------------------------------

ISSUE_VIEW_WIDTH = 65  # fixed right-hand content pane width
SUMMARY_CHUNK_WIDTH = 30  # list row wrap width for issue titles
HELP_HEIGHT = 2  # help line + bottom margin
LIST_FRAME_WIDTH = 4  # list margin, left + right
LIST_FRAME_HEIGHT = 2  # list margin, top + bottom
ENTRY_HEIGHT = 3  # identifier + two summary lines
ENTRY_SPACING = 1
