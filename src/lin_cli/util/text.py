"""Text helpers for the list renderer."""

from __future__ import annotations


def split_into_chunks(text: str, size: int) -> list[str]:
    """Split *text* into consecutive chunks of at most *size* characters.

    >>> split_into_chunks("abcdefg", 3)
    ['abc', 'def', 'g']
    """
    if size <= 0:
        raise ValueError("size must be positive")
    return [text[i : i + size] for i in range(0, len(text), size)]
