"""
Proportional substring matcher shared by the router and the Physics agent.
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import re

DEFAULT_THRESHOLD = 0.3

_NON_ALNUM = re.compile(r"[^0-9a-z]+")


@dataclass(frozen=True)
class Match:
    """Best accepted key and its score."""

    key: str
    score: float


def _compact(text: str) -> str:
    return _NON_ALNUM.sub("", text)


class FuzzyMatcher:
    """
    Scores a query against a vocabulary of keys.

    A key matches when the lowercased query contains it or it contains the
    query (whitespace and punctuation are ignored for this test, so
    "speed of light" matches "speedOfLight"). The score is
    len(query) / len(key) and must exceed the threshold.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold

    def score(self, query: str, key: str) -> Optional[float]:
        """Return the score for a matching pair, or None if they don't overlap."""
        normalized_query = query.lower()
        normalized_key = key.lower()

        compact_query = _compact(normalized_query)
        compact_key = _compact(normalized_key)
        if not compact_query or not compact_key:
            return None

        if compact_key in compact_query or compact_query in compact_key:
            return len(normalized_query) / len(key)
        return None

    def accepts(self, score: Optional[float]) -> bool:
        return score is not None and score > self.threshold

    def best_match(self, query: str, keys: Iterable[str]) -> Optional[Match]:
        """Return the highest-scoring accepted key; earlier keys win ties."""
        best: Optional[Match] = None
        for key in keys:
            score = self.score(query, key)
            if not self.accepts(score):
                continue
            if best is None or score > best.score:
                best = Match(key=key, score=score)
        return best
