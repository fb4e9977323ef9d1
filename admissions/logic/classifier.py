"""
Query Classifier

Classifies a raw chat message along two independent axes:
- Canned non-admission query (identity questions, greetings)
- Admission-related vs career/academic intent

Career/academic intent always wins: a message with career keywords is never
admission-related, even when it also mentions cut-offs or fees.
"""

import re
from typing import Dict, Iterable, List, Optional, Sequence

from .constants import (
    ADMISSION_KEYWORDS,
    CAREER_ACADEMIC_KEYWORDS,
    DEGREE_PREFIXES,
    NON_ADMISSION_QUERIES,
    SUBJECT_WORD_MIN_LENGTH,
)


def catalog_subject_words(program_names: Iterable[str]) -> List[str]:
    """
    Subject words of every program name, degree qualifier removed.

    "BSc Computer Science" gives "computer" and "science"; "LLB" gives nothing.
    """
    words: List[str] = []
    for name in program_names:
        for prefix in DEGREE_PREFIXES:
            if name.startswith(prefix + " "):
                name = name[len(prefix) + 1:]
                break
        else:
            continue
        for word in re.findall(r"[a-z]+", name.lower()):
            if len(word) >= SUBJECT_WORD_MIN_LENGTH and word not in words:
                words.append(word)
    return words


class QueryClassifier:
    """Keyword- and pattern-driven message classification."""

    def __init__(
        self,
        admission_keywords: Sequence[str] = ADMISSION_KEYWORDS,
        career_keywords: Sequence[str] = CAREER_ACADEMIC_KEYWORDS,
        canned_queries: Sequence[Dict] = NON_ADMISSION_QUERIES,
        subject_words: Sequence[str] = (),
    ):
        self.admission_keywords = tuple(k.lower() for k in admission_keywords)
        self.career_keywords = tuple(k.lower() for k in career_keywords)
        self._canned: List[tuple] = [
            ([re.compile(p, re.IGNORECASE) for p in entry["patterns"]], entry["response"])
            for entry in canned_queries
        ]
        # Whole words only, so "art" never fires inside "start"
        self._subject_pattern = (
            re.compile(r"\b(?:" + "|".join(re.escape(w.lower()) for w in subject_words) + r")\b")
            if subject_words else None
        )

    def is_career_academic_query(self, message: str) -> bool:
        lowered = (message or "").lower()
        return any(keyword in lowered for keyword in self.career_keywords)

    def mentions_subject(self, message: str) -> bool:
        if self._subject_pattern is None:
            return False
        return self._subject_pattern.search((message or "").lower()) is not None

    def is_admission_query(self, message: str) -> bool:
        """
        Admission keywords or a catalog subject word present, and no
        career/academic intent.

        The career check runs first and suppresses the admission result.
        """
        if self.is_career_academic_query(message):
            return False
        lowered = (message or "").lower()
        if any(keyword in lowered for keyword in self.admission_keywords):
            return True
        return self.mentions_subject(lowered)

    def check_non_admission_query(self, message: str) -> Optional[str]:
        """Canned response for the first matching pattern, or None."""
        text = message or ""
        for patterns, response in self._canned:
            if any(pattern.search(text) for pattern in patterns):
                return response
        return None
