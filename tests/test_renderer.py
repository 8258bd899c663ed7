import io

import pytest

from sshpick.config import SshHost
from sshpick.filter import HostMatch
from sshpick.renderer import (
    GroupedHost,
    GroupHeader,
    HostItem,
    calculate_visible_items,
    group_matches,
    render_ui,
)


def _match(name, group=None, score=100):
    return HostMatch(SshHost(name, group), score)


def _render(matches, selected=0, query="", has_any_groups=False, size=(40, 10)):
    out = io.StringIO()
    render_ui(matches, selected, query, has_any_groups, out, size)
    return out.getvalue()


def test_group_matches_hides_other_header_when_no_groups():
    matches = [_match("server1"), _match("server2")]
    grouped = group_matches(matches, False)
    assert len(grouped) == 1
    assert grouped[0].show_header is False
    assert len(grouped[0].hosts) == 2


def test_group_matches_shows_other_header_when_groups_exist():
    matches = [_match("prod-server", "production"), _match("ungrouped-server")]
    grouped = group_matches(matches, True)
    assert len(grouped) == 2
    assert grouped[0].group_name == "production"
    assert grouped[0].show_header is True
    assert grouped[1].group_name is None
    assert grouped[1].show_header is True


def test_group_matches_all_grouped_no_other_section():
    matches = [_match("prod-server", "production"), _match("dev-server", "development")]
    grouped = group_matches(matches, True)
    assert len(grouped) == 2
    assert grouped[0].group_name is not None
    assert grouped[1].group_name is not None


def test_group_matches_orders_groups_alphabetically_and_keeps_host_order():
    matches = [
        _match("z1", "zeta"),
        _match("a1", "alpha"),
        _match("z2", "zeta"),
    ]
    grouped = group_matches(matches, True)
    assert [g.group_name for g in grouped] == ["alpha", "zeta"]
    assert [m.host.name for m in grouped[1].hosts] == ["z1", "z2"]


def test_group_matches_empty():
    assert group_matches([], True) == []


def test_visible_items_all_fit_bottom_up_order():
    a, b, c = _match("a", "prod"), _match("b", "prod"), _match("c")
    grouped = group_matches([a, b, c], True)
    items = calculate_visible_items(grouped, 0, 20)
    assert items == [
        HostItem(c, False),
        GroupHeader(None),
        HostItem(b, False),
        HostItem(a, True),
        GroupHeader("prod"),
    ]


def test_visible_items_without_headers():
    hosts = [_match(f"h{i}") for i in range(3)]
    grouped = [GroupedHost(None, hosts, show_header=False)]
    items = calculate_visible_items(grouped, 2, 10)
    assert items == [HostItem(hosts[2], True), HostItem(hosts[1], False), HostItem(hosts[0], False)]


def test_visible_items_scroll_keeps_selection_visible():
    hosts = [_match(f"h{i}") for i in range(10)]
    grouped = [GroupedHost(None, hosts, show_header=False)]
    items = calculate_visible_items(grouped, 0, 3)
    assert [item.match.host.name for item in items] == ["h2", "h1", "h0"]
    assert items[-1].is_selected is True


def test_visible_items_scroll_at_bottom_of_list():
    hosts = [_match(f"h{i}") for i in range(10)]
    grouped = [GroupedHost(None, hosts, show_header=False)]
    items = calculate_visible_items(grouped, 9, 3)
    assert [item.match.host.name for item in items] == ["h9", "h8", "h7"]
    assert items[0].is_selected is True


def _two_groups():
    a0 = _match("a0", "alpha")
    bs = [_match(f"b{i}", "beta") for i in range(3)]
    return a0, bs, group_matches([a0, *bs], True)


def test_visible_items_window_starting_on_header():
    a0, _, grouped = _two_groups()
    items = calculate_visible_items(grouped, 0, 2)
    assert items == [GroupHeader("beta"), HostItem(a0, True)]


def test_visible_items_pulls_in_header_above_first_host():
    _, _, grouped = _two_groups()
    items = calculate_visible_items(grouped, 0, 1)
    assert items == [GroupHeader("beta")]


def test_visible_items_zero_lines():
    hosts = [_match("h0")]
    grouped = [GroupedHost(None, hosts, show_header=False)]
    assert calculate_visible_items(grouped, 0, 0) == []


def test_render_ui_draws_title_separator_and_help():
    output = _render([_match("a"), _match("b")])
    assert output.startswith("\x1b[2J\x1b[1;1H")
    assert "SSH Host Selector" in output
    assert "─" * 40 in output
    assert "Search: \x1b[38;5;8m___" in output
    assert "Enter" in output and " to quit" in output


def test_render_ui_places_hosts_bottom_up_above_search_bar():
    output = _render([_match("a"), _match("b")], selected=0, size=(40, 10))
    assert "\x1b[8;1H\x1b[38;5;15m    b\x1b[0m" in output
    assert "\x1b[7;1H\x1b[48;5;12m\x1b[38;5;15m  ▶ a\x1b[0m" in output
    assert "\x1b[9;1H\x1b[38;5;14mSearch: " in output


def test_render_ui_shows_query_and_highlight():
    output = _render([_match("prod-web")], query="web")
    assert "\x1b[38;5;11mweb_\x1b[0m" in output
    assert "prod-\x1b[38;5;0m\x1b[48;5;11mweb\x1b[0m" in output


def test_render_ui_group_headers():
    matches = [_match("p1", "production"), _match("loose")]
    output = _render(matches, has_any_groups=True)
    assert "\x1b[38;5;14mproduction\x1b[0m" in output
    assert "\x1b[38;5;14mOther\x1b[0m" in output


def test_render_ui_no_other_header_without_groups():
    output = _render([_match("loose")], has_any_groups=False)
    assert "Other" not in output


def test_render_ui_rejects_tiny_terminal():
    with pytest.raises(ValueError):
        _render([_match("a")], size=(40, 1))