from sshpick.highlight import (
    BACKGROUND_YELLOW,
    FOREGROUND_BLACK,
    RESET_COLOR,
    render_host_with_highlight,
)


def _strip(rendered):
    for code in (FOREGROUND_BLACK, BACKGROUND_YELLOW, RESET_COLOR):
        rendered = rendered.replace(code, "")
    return rendered


def test_empty_query_returns_plain_text():
    assert render_host_with_highlight("production-server", "") == "production-server"


def test_no_match_returns_plain_text():
    assert render_host_with_highlight("production-server", "xyz") == "production-server"


def test_match_contains_query_text():
    assert "prod" in render_host_with_highlight("production-server", "prod")


def test_case_insensitive_match():
    assert "Prod" in render_host_with_highlight("Production-Server", "prod")


def test_multiple_matches():
    result = render_host_with_highlight("server-server", "server")
    assert result.count("server") == 2
    assert result.count(BACKGROUND_YELLOW) == 2


def test_exact_escape_sequence_output():
    result = render_host_with_highlight("my-prod-box", "prod")
    assert result == "my-\x1b[38;5;0m\x1b[48;5;11mprod\x1b[0m-box"


def test_original_case_preserved_in_highlight():
    result = render_host_with_highlight("Production-Server", "PROD")
    assert FOREGROUND_BLACK + BACKGROUND_YELLOW + "Prod" + RESET_COLOR in result


def test_stripping_codes_restores_text():
    text = "Web-web-WEB-01"
    result = render_host_with_highlight(text, "web")
    assert _strip(result) == text
    assert result.count(RESET_COLOR) == 3


def test_non_overlapping_matches():
    result = render_host_with_highlight("aaaa", "aa")
    assert result.count(BACKGROUND_YELLOW) == 2
    assert _strip(result) == "aaaa"