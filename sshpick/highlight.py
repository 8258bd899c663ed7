"""Highlighting of query occurrences inside host names."""

from __future__ import annotations

from typing import Iterator

FOREGROUND_BLACK = "\x1b[38;5;0m"
BACKGROUND_YELLOW = "\x1b[48;5;11m"
RESET_COLOR = "\x1b[0m"


def _segments(text: str, query: str) -> Iterator[str]:
    text_lower = text.lower()
    query_lower = query.lower()
    last_end = 0
    search_from = 0

    while True:
        start = text_lower.find(query_lower, search_from)
        if start < 0:
            break
        end = start + len(query)
        yield text[last_end:start]
        yield FOREGROUND_BLACK + BACKGROUND_YELLOW + text[start:end] + RESET_COLOR
        last_end = end
        search_from = start + max(len(query_lower), 1)

    yield text[last_end:]


def render_host_with_highlight(text: str, query: str) -> str:
    """Return *text* with every case-insensitive occurrence of *query* highlighted.

    Occurrences are found left to right without overlap and wrapped in
    black-on-yellow ANSI colour codes. An empty query leaves the text as is.
    """
    if not query:
        return text
    return "".join(_segments(text, query))