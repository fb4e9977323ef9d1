"""
Program Extractor

Resolves a free-text message to at most one canonical program name.

Resolution order (first hit wins):
1. Special-case overrides
2. Direct containment of a catalog name
3. Containment of a catalog name without its degree qualifier
4. Fuzzy fallback, trusted only below the strict acceptance threshold
"""

import re
from typing import List, Optional, Sequence, Tuple

from .catalog import ProgramCatalog
from .constants import (
    DEFAULT_MAX_SUGGESTIONS,
    DEGREE_PREFIXES,
    FUZZY_ACCEPT_THRESHOLD,
    FUZZY_SUGGEST_THRESHOLD,
    SPECIAL_CASE_RULES,
)
from .contracts import Program
from .matcher import FuzzyMatcher


def _strip_qualifier(name: str) -> Optional[str]:
    """Name without its degree qualifier ("BSc", "Doctor of"), if multi-word."""
    parts = name.split(" ")
    if len(parts) < 2:
        return None
    for prefix in DEGREE_PREFIXES:
        if name.startswith(prefix + " "):
            return name[len(prefix) + 1:]
    return " ".join(parts[1:])


class ProgramExtractor:
    """Message → program name resolution over one catalog."""

    def __init__(
        self,
        catalog: ProgramCatalog,
        matcher: FuzzyMatcher,
        special_cases: Sequence[Tuple[Tuple[str, ...], str]] = SPECIAL_CASE_RULES,
        accept_threshold: float = FUZZY_ACCEPT_THRESHOLD,
        suggest_threshold: float = FUZZY_SUGGEST_THRESHOLD,
    ):
        self.catalog = catalog
        self.matcher = matcher
        self.accept_threshold = accept_threshold
        self.suggest_threshold = suggest_threshold
        # Rules naming a program the catalog lacks are dropped
        self._special_cases = [
            ([re.compile(p) for p in patterns], catalog.get(target).name)
            for patterns, target in special_cases
            if catalog.get(target) is not None
        ]
        self._stripped: List[Tuple[str, str]] = []
        for program in catalog:
            stripped = _strip_qualifier(program.name)
            if stripped:
                self._stripped.append((program.name, stripped.lower()))
        # Longest first so "veterinary medicine" wins over "medicine"
        self._stripped.sort(key=lambda item: len(item[1]), reverse=True)

    def handle_special_cases(self, message: str) -> Optional[str]:
        lowered = (message or "").lower()
        for patterns, target in self._special_cases:
            if all(pattern.search(lowered) for pattern in patterns):
                return target
        return None

    def extract_program_name(self, message: str) -> Optional[str]:
        """
        Resolve `message` to a catalog program name.

        Returns:
            Canonical program name, or None when nothing resolves. Never raises.
        """
        if not message or not message.strip():
            return None

        special = self.handle_special_cases(message)
        if special:
            return special

        lowered = message.lower()
        for name in self.catalog.names:
            if name.lower() in lowered:
                return name

        for name, stripped in self._stripped:
            if stripped in lowered:
                return name

        best = self.matcher.best(message)
        if best is not None and best.score < self.accept_threshold:
            return best.program

        return None

    def suggest_program_matches(self, message: str, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS) -> List[str]:
        """
        Candidate names for a disambiguation prompt.

        Returns:
            Up to `max_suggestions` names scoring below the suggestion
            threshold, or an empty list when fewer than two qualify.
        """
        results = self.matcher.search(message, max_suggestions * 2)

        suggestions: List[str] = []
        for match in results:
            if match.score < self.suggest_threshold and match.program not in suggestions:
                suggestions.append(match.program)

        if len(suggestions) < 2:
            return []
        return suggestions[:max_suggestions]

    def get_program(self, name: Optional[str]) -> Optional[Program]:
        """Look up a program by exact, case-insensitive or unqualified name."""
        if not name:
            return None

        special = self.handle_special_cases(name)
        if special:
            name = special

        program = self.catalog.get(name)
        if program is not None:
            return program

        lowered = name.strip().lower()
        for canonical, stripped in self._stripped:
            if lowered == stripped:
                return self.catalog.get(canonical)
        return None
