"""
Fuzzy ranking of task names.

A query matches a name when its characters appear in order (not
necessarily adjacent). Among all alignments the best-scoring one is kept:
matches earn points, matches on word boundaries, camelCase humps and the
first query character earn bonuses, consecutive runs are rewarded and gaps
cost a little. Matching is case-insensitive unless the query contains an
uppercase letter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1
BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_CAMEL = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

_NONWORD, _LOWER, _UPPER, _LETTER, _DIGIT = range(5)
_UNMATCHED = float("-inf")


@dataclass(frozen=True)
class Match:
    """A ranked candidate: its text, original index, score and matched positions."""

    text: str
    index: int
    score: int
    positions: tuple[int, ...] = ()


def _char_class(c: str) -> int:
    if c.islower():
        return _LOWER
    if c.isupper():
        return _UPPER
    if c.isdigit():
        return _DIGIT
    if c.isalpha():
        return _LETTER
    return _NONWORD


def _bonus(prev_class: int, cls: int) -> int:
    if cls == _NONWORD:
        return 0
    if prev_class == _NONWORD:
        return BONUS_BOUNDARY
    if (prev_class == _LOWER and cls == _UPPER) or (
        prev_class != _DIGIT and cls == _DIGIT
    ):
        return BONUS_CAMEL
    return 0


def _boundary_bonuses(text: str) -> list[int]:
    bonuses = []
    prev = _NONWORD
    for c in text:
        cls = _char_class(c)
        bonuses.append(_bonus(prev, cls))
        prev = cls
    return bonuses


def _is_subsequence(query: str, text: str) -> bool:
    it = iter(text)
    return all(c in it for c in query)


def fuzzy_match(query: str, text: str) -> tuple[int, tuple[int, ...]] | None:
    """Score ``text`` against ``query``.

    Returns ``(score, positions)`` for the best alignment, or None when the
    query is not a subsequence of the text. An empty query matches
    everything with score 0.
    """
    if not query:
        return 0, ()

    if not any(c.isupper() for c in query):
        folded_query = query.lower()
        folded_text = "".join(c.lower() if len(c.lower()) == 1 else c for c in text)
    else:
        folded_query, folded_text = query, text

    if not _is_subsequence(folded_query, folded_text):
        return None

    n, m = len(folded_query), len(folded_text)
    bonuses = _boundary_bonuses(text)

    # scores[i][j]: best score with query[i] matched at text[j]
    scores = [[_UNMATCHED] * m for _ in range(n)]
    # back[i][j]: text index of query[i - 1] on that best path
    back = [[-1] * m for _ in range(n)]

    for j in range(m):
        if folded_text[j] == folded_query[0]:
            scores[0][j] = SCORE_MATCH + bonuses[j] * BONUS_FIRST_CHAR_MULTIPLIER

    for i in range(1, n):
        prev_row = scores[i - 1]
        row = scores[i]
        gap_best = _UNMATCHED
        gap_from = -1
        for j in range(i, m):
            # extend the best gapped predecessor ending at or before j - 2
            if j >= 2:
                extended = gap_best + SCORE_GAP_EXTENSION
                opened = prev_row[j - 2] + SCORE_GAP_START
                if opened >= extended:
                    gap_best, gap_from = opened, j - 2
                else:
                    gap_best = extended
            if folded_text[j] != folded_query[i]:
                continue
            consecutive = prev_row[j - 1] + max(bonuses[j], BONUS_CONSECUTIVE)
            gapped = gap_best + bonuses[j]
            if consecutive >= gapped and consecutive != _UNMATCHED:
                row[j] = SCORE_MATCH + consecutive
                back[i][j] = j - 1
            elif gapped != _UNMATCHED:
                row[j] = SCORE_MATCH + gapped
                back[i][j] = gap_from

    last = scores[n - 1]
    end = max(range(m), key=lambda j: (last[j], -j))
    if last[end] == _UNMATCHED:
        return None

    positions = [end]
    for i in range(n - 1, 0, -1):
        positions.append(back[i][positions[-1]])
    positions.reverse()
    return int(last[end]), tuple(positions)


def rank(query: str, candidates: Iterable[tuple[int, str]]) -> list[Match]:
    """Rank ``(index, name)`` candidates by descending score.

    Non-matching candidates are dropped. Ties keep the candidates' input
    order, so an empty query returns every candidate in index order.
    """
    matches = []
    for index, text in candidates:
        result = fuzzy_match(query, text)
        if result is None:
            continue
        score, positions = result
        matches.append(Match(text=text, index=index, score=score, positions=positions))
    matches.sort(key=lambda m: -m.score)
    return matches
