"""Full-screen drawing of the host selector: title, grouped host list, search bar."""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, TextIO, Union

from sshpick.filter import HostMatch
from sshpick.highlight import render_host_with_highlight

FG_CYAN = "\x1b[38;5;14m"
FG_BLUE = "\x1b[38;5;12m"
FG_WHITE = "\x1b[38;5;15m"
FG_DARK_GREY = "\x1b[38;5;8m"
FG_YELLOW = "\x1b[38;5;11m"
FG_GREEN = "\x1b[38;5;10m"
FG_RED = "\x1b[38;5;9m"
BG_BLUE = "\x1b[48;5;12m"
RESET_COLOR = "\x1b[0m"
CLEAR_ALL = "\x1b[2J"
NEXT_LINE = "\x1b[1E"

TITLE = "SSH Host Selector"
OTHER_GROUP_LABEL = "Other"
_RESERVED_LINES = 6


def _move_to(column: int, row: int) -> str:
    return f"\x1b[{row + 1};{column + 1}H"


@dataclass
class GroupedHost:
    """A section of the host list; ``group_name`` None is the "Other" section."""

    group_name: Optional[str]
    hosts: list[HostMatch] = field(default_factory=list)
    show_header: bool = True


@dataclass(frozen=True)
class GroupHeader:
    """A section header line; ``group_name`` None renders as "Other"."""

    group_name: Optional[str]


@dataclass(frozen=True)
class HostItem:
    """A host line in the list, marked when it is the current selection."""

    match: HostMatch
    is_selected: bool


RenderItem = Union[GroupHeader, HostItem]


def group_matches(matches: Iterable[HostMatch], has_any_groups: bool) -> list[GroupedHost]:
    """Group *matches* by host group for display.

    Named groups come first, in alphabetical order, always with a header.
    Ungrouped hosts follow in one final section whose "Other" header is shown
    only when *has_any_groups* is true. Order within each section is kept.
    """
    grouped: dict[str, list[HostMatch]] = {}
    ungrouped: list[HostMatch] = []

    for match in matches:
        if match.host.group is None:
            ungrouped.append(match)
        else:
            grouped.setdefault(match.host.group, []).append(match)

    result = [
        GroupedHost(group_name=name, hosts=grouped[name], show_header=True)
        for name in sorted(grouped)
    ]
    if ungrouped:
        result.append(
            GroupedHost(group_name=None, hosts=ungrouped, show_header=has_any_groups)
        )
    return result


def calculate_visible_items(
    grouped: Sequence[GroupedHost],
    selected_flat_index: int,
    max_visible_lines: int,
) -> list[RenderItem]:
    """Return the items to draw, ordered bottom line first.

    Groups are listed last-first and, within a group, hosts last-first with
    the header after them, so drawing upward puts each header above its
    hosts. When everything does not fit, the window scrolls to keep the
    selected host visible and pulls in a header sitting just above it.
    """
    groups_with_items: list[list[RenderItem]] = []
    flat_host_index = 0

    for group in grouped:
        items: list[RenderItem] = []
        if group.show_header:
            items.append(GroupHeader(group.group_name))
        for match in group.hosts:
            items.append(HostItem(match, flat_host_index == selected_flat_index))
            flat_host_index += 1
        items.reverse()
        groups_with_items.append(items)

    all_items = [item for items in reversed(groups_with_items) for item in items]

    selected_item_index = next(
        (
            position
            for position, item in enumerate(all_items)
            if isinstance(item, HostItem) and item.is_selected
        ),
        0,
    )

    total_items = len(all_items)
    if total_items <= max_visible_lines:
        return all_items
    if max_visible_lines <= 0:
        return []

    if selected_item_index >= max_visible_lines:
        start = selected_item_index - (max_visible_lines - 1)
    else:
        start = 0
    end = min(start + max_visible_lines, total_items)

    adjusted_start = start
    if (
        start > 0
        and isinstance(all_items[start], HostItem)
        and isinstance(all_items[start - 1], GroupHeader)
    ):
        adjusted_start = start - 1

    adjusted_end = max(end - 1, 0) if adjusted_start < start else end
    return all_items[adjusted_start:adjusted_end]


def _render_item(item: RenderItem, query: str) -> str:
    if isinstance(item, GroupHeader):
        label = item.group_name if item.group_name is not None else OTHER_GROUP_LABEL
        return FG_CYAN + label + RESET_COLOR
    name = render_host_with_highlight(item.match.host.name, query)
    if item.is_selected:
        return BG_BLUE + FG_WHITE + "  ▶ " + name + RESET_COLOR
    return FG_WHITE + "    " + name + RESET_COLOR


def _help_line() -> str:
    return "".join(
        (
            FG_DARK_GREY, "Use ",
            FG_GREEN, "↑/↓",
            FG_DARK_GREY, ", ",
            FG_GREEN, "type",
            FG_DARK_GREY, " to search, ",
            FG_GREEN, "Enter",
            FG_DARK_GREY, " to connect, ",
            FG_RED, "Esc",
            FG_DARK_GREY, " to quit",
            RESET_COLOR,
        )
    )


def render_ui(
    filtered_matches: Sequence[HostMatch],
    selected: int,
    query: str,
    has_any_groups: bool,
    out: Optional[TextIO] = None,
    size: Optional[tuple[int, int]] = None,
) -> None:
    """Draw the whole selector screen to *out* (standard output by default).

    *size* is the terminal's ``(columns, rows)``; it is queried when omitted.
    The host list is drawn bottom-up just above the search bar, grouped by
    host group, with the selected host marked and query matches highlighted.
    Raises ValueError when the terminal has fewer than two rows.
    """
    stream = sys.stdout if out is None else out
    if size is None:
        terminal = shutil.get_terminal_size()
        size = (terminal.columns, terminal.lines)
    width, height = size
    if height < 2:
        raise ValueError(f"terminal height {height} is too small; at least 2 rows needed")
    width = max(width, 0)

    parts: list[str] = [CLEAR_ALL, _move_to(0, 0)]
    parts += [FG_CYAN, TITLE, RESET_COLOR, NEXT_LINE]
    parts += [FG_BLUE, "─" * width, RESET_COLOR, NEXT_LINE]

    grouped = group_matches(filtered_matches, has_any_groups)
    max_visible = max(height - _RESERVED_LINES, 0)
    visible_items = calculate_visible_items(grouped, selected, max_visible)

    search_bar_line = height - 2
    current_line = max(search_bar_line - 1, 0)

    blank = " " * width
    for line in range(2, search_bar_line):
        parts += [_move_to(0, line), blank]

    for item in visible_items:
        parts += [_move_to(0, current_line), _render_item(item, query)]
        current_line = max(current_line - 1, 0)

    parts += [_move_to(0, search_bar_line), FG_CYAN, "Search: "]
    if query:
        parts += [RESET_COLOR, FG_YELLOW, query, "_", RESET_COLOR]
    else:
        parts += [FG_DARK_GREY, "___", RESET_COLOR]

    parts += [_move_to(0, height - 1), _help_line()]

    stream.write("".join(parts))
    stream.flush()