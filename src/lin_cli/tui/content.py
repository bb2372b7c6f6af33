"""
ContentViewer — the rendered issue description (right pane).

The issue is formatted as a Markdown heading plus body, rendered by rich
to styled lines at the pane's inner width, and kept in a scrollable buffer.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, replace

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text

from lin_cli.core.exceptions import RenderError
from lin_cli.linear.models import Issue
from lin_cli.tui.theme import Theme

_BORDER = box.ROUNDED
_PADDING_RIGHT = 2


def issue_markdown(issue: Issue) -> str:
    """The Markdown source shown for *issue*; empty for the sentinel."""
    if issue.is_empty:
        return ""
    return f"# {issue.title}\n\n{issue.description}"


def render_markdown(source: str, width: int, theme: Theme) -> tuple[Text, ...]:
    """Render Markdown *source* to styled lines wrapped at *width* cells.

    Raises :class:`RenderError` if rich cannot render the document.
    """
    if not source.strip():
        return ()
    console = Console(
        file=io.StringIO(),
        width=max(1, width),
        color_system="truecolor",
        force_terminal=True,
        legacy_windows=False,
    )
    try:
        markdown = Markdown(source, code_theme=theme.code_theme, hyperlinks=False)
        rendered = console.render_lines(markdown, console.options, pad=False)
    except Exception as exc:
        raise RenderError(f"Cannot render issue description: {exc}") from exc

    lines: list[Text] = []
    for segments in rendered:
        line = Text()
        for segment in segments:
            if not segment.control:
                line.append(segment.text, style=segment.style)
        line.rstrip()
        lines.append(line)
    while lines and not lines[-1].plain:
        lines.pop()
    return tuple(lines)


@dataclass(frozen=True)
class ContentViewer:
    width: int = 0
    height: int = 0
    issue: Issue = Issue.empty()
    lines: tuple[Text, ...] = ()
    offset: int = 0

    @property
    def inner_width(self) -> int:
        """Text width inside the border and right padding."""
        return max(1, self.width - 2 - _PADDING_RIGHT)

    @property
    def inner_height(self) -> int:
        return max(0, self.height - 2)

    @property
    def max_offset(self) -> int:
        return max(0, len(self.lines) - self.inner_height)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_content(self, issue: Issue, theme: Theme) -> ContentViewer:
        """Render *issue* and scroll to the top.

        Raises :class:`RenderError` when the description cannot be rendered.
        """
        lines = render_markdown(issue_markdown(issue), self.inner_width, theme)
        return replace(self, issue=issue, lines=lines, offset=0)

    def clear(self, issue: Issue) -> ContentViewer:
        """Show *issue* with an empty body (used after a render failure)."""
        return replace(self, issue=issue, lines=(), offset=0)

    def set_size(self, width: int, height: int, theme: Theme) -> ContentViewer:
        """Resize, re-rendering at the new width but keeping the scroll position."""
        resized = replace(self, width=width, height=height)
        if width != self.width and self.lines:
            lines = render_markdown(issue_markdown(self.issue), resized.inner_width, theme)
            resized = replace(resized, lines=lines)
        return resized.scroll(0)

    def scroll(self, delta: int) -> ContentViewer:
        """Move the scroll offset by *delta* lines, clamped to the buffer."""
        return replace(self, offset=max(0, min(self.offset + delta, self.max_offset)))

    def handle_key(self, key: str) -> ContentViewer:
        """Viewport bindings beyond line up/down."""
        page = max(1, self.inner_height)
        if key in ("pageup", "b"):
            return self.scroll(-page)
        if key in ("pagedown", "space", "f"):
            return self.scroll(page)
        if key in ("ctrl+u", "u"):
            return self.scroll(-(page // 2 or 1))
        if key in ("ctrl+d", "d"):
            return self.scroll(page // 2 or 1)
        if key in ("home", "g"):
            return replace(self, offset=0)
        if key in ("end", "G", "shift+g"):
            return replace(self, offset=self.max_offset)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, theme: Theme, *, focused: bool) -> list[Text]:
        """Return ``height`` lines of exactly ``width`` cells, framed by a rounded border."""
        if self.width < 2 or self.height < 2:
            return [Text(" " * max(0, self.width)) for _ in range(max(0, self.height))]

        border = theme.border(focused)
        span = self.width - 2
        lines = [Text(_BORDER.top_left + _BORDER.top * span + _BORDER.top_right, style=border)]

        visible = self.lines[self.offset : self.offset + self.inner_height]
        for i in range(self.inner_height):
            body = visible[i].copy() if i < len(visible) else Text()
            body.truncate(span, overflow="crop", pad=True)
            row = Text(_BORDER.mid_left, style=border)
            row.append_text(body)
            row.append(_BORDER.mid_right, style=border)
            lines.append(row)

        lines.append(
            Text(_BORDER.bottom_left + _BORDER.bottom * span + _BORDER.bottom_right, style=border)
        )
        return lines
