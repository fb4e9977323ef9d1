"""
Dataset Guard Rail

Post-processing filter for LLM answers. Keeps outbound text inside the KNUST
catalog:
1. Blacklisted institutions are replaced with a generic placeholder.
2. Degree-named spans ("BSc X", "Doctor of X", "LLB") that don't correspond
   to a catalog program are replaced with the nearest catalog name, or with a
   "please specify" placeholder when nothing is close.

Applying the filter twice gives the same text as applying it once.
"""

import logging
import re
from typing import Mapping, Optional, Sequence

from .catalog import ProgramCatalog
from .constants import DEGREE_PREFIXES, GUARD_RAIL_BLACKLIST, UNKNOWN_PROGRAM_PLACEHOLDER
from .matcher import FuzzyMatcher

logger = logging.getLogger(__name__)


def _degree_span_pattern(prefixes: Sequence[str]) -> "re.Pattern":
    # Prefixes in any case ("Bsc", "bsc"); the subject stays capitalised words
    # joined by spaces/tabs only, so a span never crosses a line
    alternatives = "|".join(
        re.escape(p).replace(r"\ ", r"[ \t]+")
        for p in sorted(prefixes, key=len, reverse=True)
    )
    return re.compile(
        rf"\b(?:(?i:LLB)\b|(?i:{alternatives})[ \t]+[A-Z][\w&]*(?:[ \t]+[A-Z][\w&]*)*)"
    )


class DatasetGuardRail:
    """Rewrites text so it only names catalog programs."""

    def __init__(
        self,
        catalog: ProgramCatalog,
        matcher: FuzzyMatcher,
        blacklist: Mapping[str, str] = GUARD_RAIL_BLACKLIST,
        degree_prefixes: Sequence[str] = DEGREE_PREFIXES,
        placeholder: str = UNKNOWN_PROGRAM_PLACEHOLDER,
    ):
        self.catalog = catalog
        self.matcher = matcher
        self.placeholder = placeholder
        self._blacklist = [
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in blacklist.items()
        ]
        self._span_pattern = _degree_span_pattern(degree_prefixes)
        self._lower_names = [name.lower() for name in catalog.names]

    def _is_known(self, span: str) -> bool:
        lowered = span.lower()
        return any(lowered in name or name in lowered for name in self._lower_names)

    def _replacement_for(self, span: str) -> str:
        best = self.matcher.best(span)
        return best.program if best is not None else self.placeholder

    def filter_non_knust_programs(self, text: Optional[str]) -> Optional[str]:
        """
        Strip out-of-catalog institutions and programs from `text`.

        Args:
            text: Outbound answer, typically LLM output

        Returns:
            Filtered text; None and empty strings pass through unchanged
        """
        if not text:
            return text

        filtered = text
        for pattern, replacement in self._blacklist:
            filtered = pattern.sub(replacement, filtered)

        def substitute(match: "re.Match") -> str:
            span = match.group(0)
            if self._is_known(span):
                return span
            replacement = self._replacement_for(span)
            logger.info(f"Guard rail replaced '{span}' with '{replacement}'")
            return replacement

        return self._span_pattern.sub(substitute, filtered)
