"""Fuzzy filtering and ranking of SSH hosts against a search query."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence

from sshpick.config import SshHost

SCORE_MATCH = 16
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_BOUNDARY_WHITE = BONUS_BOUNDARY + 2
BONUS_BOUNDARY_DELIMITER = BONUS_BOUNDARY + 1
BONUS_NON_WORD = BONUS_BOUNDARY
BONUS_CAMEL = BONUS_BOUNDARY - PENALTY_GAP_EXTENSION
BONUS_CONSECUTIVE = PENALTY_GAP_START + PENALTY_GAP_EXTENSION
BONUS_FIRST_CHAR_MULTIPLIER = 2

_DELIMITERS = frozenset("/,:;|")


class _CharClass(IntEnum):
    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


def _classify(char: Optional[str]) -> _CharClass:
    if char is None or char.isspace():
        return _CharClass.WHITE
    if char in _DELIMITERS:
        return _CharClass.DELIMITER
    if char.islower():
        return _CharClass.LOWER
    if char.isupper():
        return _CharClass.UPPER
    if char.isdigit():
        return _CharClass.NUMBER
    if char.isalpha():
        return _CharClass.LETTER
    return _CharClass.NON_WORD


def _is_word(cls: _CharClass) -> bool:
    return cls >= _CharClass.LOWER


def _bonus(previous: Optional[str], current: str) -> int:
    prev_cls = _classify(previous)
    cls = _classify(current)

    if _is_word(cls) and not _is_word(prev_cls):
        if prev_cls is _CharClass.WHITE:
            return BONUS_BOUNDARY_WHITE
        if prev_cls is _CharClass.DELIMITER:
            return BONUS_BOUNDARY_DELIMITER
        return BONUS_BOUNDARY

    if (prev_cls is _CharClass.LOWER and cls is _CharClass.UPPER) or (
        prev_cls is not _CharClass.NUMBER and cls is _CharClass.NUMBER
    ):
        return BONUS_CAMEL

    if cls in (_CharClass.NON_WORD, _CharClass.DELIMITER):
        return BONUS_NON_WORD
    if cls is _CharClass.WHITE:
        return BONUS_BOUNDARY_WHITE
    return 0


def fuzzy_score(haystack: str, needle: str) -> Optional[int]:
    """Score *needle* as an ordered subsequence of *haystack*.

    Returns None when *needle* does not occur as a subsequence. Matches at
    word boundaries, at the start of the text and in consecutive runs score
    higher; gaps between matched characters are penalised. Comparison is
    case-sensitive.
    """
    if not needle:
        return 0
    if len(needle) > len(haystack):
        return None

    bonuses = [_bonus(prev, cur) for prev, cur in zip((None, *haystack), haystack)]
    previous: list[Optional[int]] = []

    for row, needle_char in enumerate(needle):
        current: list[Optional[int]] = [None] * len(haystack)
        gap_best: Optional[int] = None

        for col, hay_char in enumerate(haystack):
            if gap_best is not None:
                gap_best -= PENALTY_GAP_EXTENSION
            if row > 0 and col >= 2 and previous[col - 2] is not None:
                candidate = previous[col - 2] - PENALTY_GAP_START
                if gap_best is None or candidate > gap_best:
                    gap_best = candidate

            if hay_char != needle_char:
                continue

            if row == 0:
                current[col] = SCORE_MATCH + bonuses[col] * BONUS_FIRST_CHAR_MULTIPLIER
                continue

            options = []
            if col >= 1 and previous[col - 1] is not None:
                options.append(
                    previous[col - 1] + SCORE_MATCH + max(bonuses[col], BONUS_CONSECUTIVE)
                )
            if gap_best is not None:
                options.append(gap_best + SCORE_MATCH + bonuses[col])
            if options:
                current[col] = max(options)

        previous = current

    scores = [score for score in previous if score is not None]
    if not scores:
        return None
    return max(max(scores), 0)


@dataclass(frozen=True)
class HostMatch:
    """A host paired with its relevance score for the current query."""

    host: SshHost
    score: int


def filter_and_rank_hosts(hosts: Iterable[SshHost], query: str) -> list[HostMatch]:
    """Filter *hosts* by fuzzy-matching *query* and rank the results.

    An empty query keeps every host, sorted case-insensitively by name with
    score 0. Otherwise only matching hosts are kept, ordered by score
    (highest first) and then case-insensitively by name. Matching ignores case.
    """
    host_list: Sequence[SshHost] = list(hosts)

    if not query:
        return sorted(
            (HostMatch(host, 0) for host in host_list),
            key=lambda match: match.host.name.lower(),
        )

    query_lower = query.lower()
    matches = []
    for host in host_list:
        score = fuzzy_score(host.name.lower(), query_lower)
        if score is not None:
            matches.append(HostMatch(host, score))

    matches.sort(key=lambda match: (-match.score, match.host.name.lower()))
    return matches