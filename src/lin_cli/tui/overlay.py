"""
OverlaySelector — modal picker for issues with several linked pull requests.

While active it receives every key.  It is drawn as a solid block and
pasted over the top-left corner of the composed screen by
:func:`place_overlay`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from rich.cells import cell_len
from rich.text import Text

from lin_cli.linear.models import Attachment
from lin_cli.tui.theme import Theme

OVERLAY_TITLE = "Select a pull request"
_PADDING = 1


@dataclass(frozen=True)
class OverlaySelector:
    candidates: tuple[Attachment, ...] = ()
    cursor: int = 0
    active: bool = False

    def activate(self, candidates: Sequence[Attachment]) -> OverlaySelector:
        """Show the picker.  A single candidate is opened directly, never picked."""
        if len(candidates) < 2:
            raise ValueError("OverlaySelector needs at least two candidates")
        return OverlaySelector(candidates=tuple(candidates), cursor=0, active=True)

    def deactivate(self) -> OverlaySelector:
        return OverlaySelector()

    @property
    def selected(self) -> Attachment | None:
        if not self.active or not self.candidates:
            return None
        return self.candidates[self.cursor]

    def handle_key(self, key: str) -> tuple[OverlaySelector, str | None]:
        """Consume one key; returns ``(selector, url_to_open)``."""
        if key in ("up", "k"):
            return replace(self, cursor=max(0, self.cursor - 1)), None
        if key in ("down", "j"):
            return replace(self, cursor=min(len(self.candidates) - 1, self.cursor + 1)), None
        if key == "enter":
            chosen = self.selected
            return self.deactivate(), chosen.url if chosen is not None else None
        if key in ("escape", "q", "ctrl+c"):
            return self.deactivate(), None
        return self, None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, theme: Theme, max_width: int) -> list[Text]:
        """Render the picker as a rectangular block (empty when inactive)."""
        if not self.active:
            return []

        rows: list[tuple[str, bool]] = [(OVERLAY_TITLE, False), ("", False)]
        for index, candidate in enumerate(self.candidates):
            marker = "›" if index == self.cursor else " "
            rows.append((f"{marker} {candidate.label}", index == self.cursor))
            rows.append((f"  {candidate.url}", False))

        inner = max(cell_len(text) for text, _ in rows)
        inner = min(inner, max(1, max_width - 2 * _PADDING))
        pad = " " * _PADDING

        block = [Text(" " * (inner + 2 * _PADDING), style=theme.overlay)]
        for text, highlighted in rows:
            body = Text(text, style=theme.overlay_cursor if highlighted else theme.overlay)
            body.truncate(inner, overflow="ellipsis", pad=True)
            line = Text(pad, style=theme.overlay)
            line.append_text(body)
            line.append(pad, style=theme.overlay)
            block.append(line)
        return block


def place_overlay(x: int, y: int, overlay: list[Text], background: list[Text]) -> list[Text]:
    """Paint *overlay* over *background* with its top-left corner at (x, y).

    Covered cells are replaced entirely; the rest of each background line
    is kept.  Background lines are padded when the overlay reaches past them.
    """
    result = [line.copy() for line in background]
    while len(result) < y + len(overlay):
        result.append(Text())

    for row, over in enumerate(overlay):
        target = result[y + row]
        width = cell_len(over.plain)
        base = target.copy()
        base.truncate(max(x + width, cell_len(base.plain)), pad=True)
        left = base.copy()
        left.truncate(x, pad=True)
        right = _crop_left(base, x + width)
        line = Text()
        line.append_text(left)
        line.append_text(over)
        line.append_text(right)
        result[y + row] = line
    return result


def _crop_left(text: Text, cells: int) -> Text:
    """Drop the first *cells* cells of *text*."""
    offset = 0
    consumed = 0
    for char in text.plain:
        if consumed >= cells:
            break
        consumed += cell_len(char)
        offset += 1
    remainder = text[offset:]
    if consumed > cells:
        # A wide character straddled the overlay edge
        remainder = Text(" " * (consumed - cells)) + remainder
    return remainder
