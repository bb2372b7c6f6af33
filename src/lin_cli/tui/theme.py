"""
Dashboard theme — one immutable styling object.

Built once at startup (from the ``[ui]`` config section) and handed to
every renderer.  Focus changes never mutate styles; renderers pick the
active or inactive variant from the theme based on the focus they are
given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.style import Style

from lin_cli.core.constants import ISSUE_VIEW_WIDTH, SUMMARY_CHUNK_WIDTH

if TYPE_CHECKING:
    from lin_cli.core.config import UIConfig

LINEAR_PURPLE = "#5E6AD2"


@dataclass(frozen=True)
class Theme:
    accent: str = LINEAR_PURPLE
    inactive: str = "color(8)"
    text: str = "#ffffff"
    muted: str = "#808080"
    content_width: int = ISSUE_VIEW_WIDTH
    summary_width: int = SUMMARY_CHUNK_WIDTH
    code_theme: str = "dracula"

    @classmethod
    def from_config(cls, ui: UIConfig | None = None) -> Theme:
        """Build a theme from the ``[ui]`` config section (or defaults)."""
        if ui is None:
            return cls()
        return cls(accent=ui.accent_color, content_width=ui.content_width)

    # ------------------------------------------------------------------
    # Derived styles
    # ------------------------------------------------------------------

    @property
    def list_title(self) -> Style:
        return Style(color="#ffffff", bgcolor=self.accent, bold=True)

    def selected(self, focused: bool) -> Style:
        """Style of the selected list entry (accent only while the list has focus)."""
        return Style(color=self.accent if focused else self.inactive)

    @property
    def entry_title(self) -> Style:
        return Style(color=self.text)

    @property
    def entry_summary(self) -> Style:
        return Style(color=self.muted)

    def border(self, focused: bool) -> Style:
        """Border style of the content pane."""
        return Style(color=self.accent if focused else self.inactive)

    @property
    def help(self) -> Style:
        return Style(color=self.muted)

    @property
    def status(self) -> Style:
        return Style(color="#ff5555")

    @property
    def overlay(self) -> Style:
        return Style(color="#ffffff", bgcolor=self.accent)

    @property
    def overlay_cursor(self) -> Style:
        return Style(color="#ffffff", bgcolor=self.accent, bold=True, reverse=True)
