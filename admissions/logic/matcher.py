"""
Fuzzy Matcher

Approximate search over catalog program names.

A name becomes a candidate when the query aligns with part of it closely
enough: alignment error plus how far into the name the alignment starts
(relative to the positional tolerance) must stay within the threshold.
Candidates are then scored on whole-string dissimilarity, so a query that
only covers part of a long name scores worse than one that covers it all.
"""

from typing import List, Optional, Sequence

from rapidfuzz import fuzz, utils

from .catalog import ProgramCatalog
from .constants import DEFAULT_SEARCH_RESULTS, FUZZY_MATCH_DISTANCE, FUZZY_MATCH_THRESHOLD
from .contracts import FuzzyMatch


class FuzzyMatcher:
    """Pure, stateless search over the catalog's program names."""

    def __init__(
        self,
        catalog: ProgramCatalog,
        threshold: float = FUZZY_MATCH_THRESHOLD,
        distance: int = FUZZY_MATCH_DISTANCE,
    ):
        self.catalog = catalog
        self.threshold = threshold
        self.distance = distance
        self._names: Sequence[str] = tuple(catalog.names)
        self._choices: Sequence[str] = tuple(utils.default_process(n) for n in self._names)

    def _candidate_error(self, query: str, choice: str) -> Optional[float]:
        alignment = fuzz.partial_ratio_alignment(query, choice)
        if alignment is None:
            return None
        return (1 - alignment.score / 100) + alignment.dest_start / self.distance

    def search(self, query: str, max_results: int = DEFAULT_SEARCH_RESULTS) -> List[FuzzyMatch]:
        """
        Rank program names against `query`, best first.

        Args:
            query: Free text, usually the whole user message
            max_results: Maximum matches to return

        Returns:
            List of FuzzyMatch ordered by ascending score; empty when nothing
            clears the threshold.
        """
        processed = utils.default_process(query or "")
        if not processed or max_results <= 0:
            return []

        matches: List[FuzzyMatch] = []
        for name, choice in zip(self._names, self._choices):
            error = self._candidate_error(processed, choice)
            if error is None or error > self.threshold:
                continue
            score = 1 - fuzz.ratio(processed, choice) / 100
            matches.append(FuzzyMatch(program=name, score=round(score, 4)))

        # sorted() is stable, so ties keep catalog order
        matches = sorted(matches, key=lambda m: m.score)
        return matches[:max_results]

    def best(self, query: str) -> Optional[FuzzyMatch]:
        results = self.search(query, 1)
        return results[0] if results else None
