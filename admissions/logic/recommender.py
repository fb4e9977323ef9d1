"""
Aggregate Recommender

WASSCE aggregate calculation and grade-based program recommendations.

The aggregate is the sum of the best six grade values across the three core
subjects and the electives (lower is better). A program is recommended when
the student's aggregate is within its cut-off and the student's electives
cover every requirement entry.
"""

import logging
from typing import List, Optional, Sequence

from .catalog import ProgramCatalog
from .constants import (
    AGGREGATE_SUBJECT_COUNT,
    MAX_RECOMMENDATIONS,
    MISSING_CUTOFF_WARNING,
    WASSCE_GRADE_VALUES,
)
from .contracts import Program, ProgramRecommendation, RecommendationResult, WassceGrades

logger = logging.getLogger(__name__)

# Sort key for programs without a numeric cut-off in the top-up list
_UNRANKED_CUTOFF = 999


def _grade_value(grade: Optional[str]) -> Optional[int]:
    if not grade:
        return None
    return WASSCE_GRADE_VALUES.get(grade.strip().upper())


def calculate_aggregate(grades: WassceGrades) -> int:
    """
    Sum of the best six WASSCE grade values.

    Args:
        grades: Core grades plus electives; missing or unknown grades are skipped

    Returns:
        Aggregate (6 is the best possible with six valid grades)
    """
    raw = [grades.english, grades.math, grades.integrated_science]
    raw += [elective.grade for elective in grades.electives]

    values = sorted(v for v in (_grade_value(g) for g in raw) if v is not None)
    return sum(values[:AGGREGATE_SUBJECT_COUNT])


def matches_electives(user_electives: Sequence[str], program: Program) -> bool:
    """
    True when every requirement entry is covered by the student's electives.

    Single subjects and choice-group options match by case-insensitive
    containment in an elective name. Programs without requirements match.
    """
    offered = [subject.lower() for subject in user_electives if subject]

    def offered_subject(required: str) -> bool:
        if required.lower() == "any":
            return True
        return any(required.lower() in subject for subject in offered)

    for entry in program.elective_requirements or ():
        options = (entry,) if isinstance(entry, str) else entry
        if not any(offered_subject(option) for option in options):
            return False
    return True


def _cutoff_for(program: Program, gender: Optional[str]):
    """Cut-off that applies to the student: a gendered value for pairs."""
    cutoff = program.cutoff
    if not isinstance(cutoff, dict):
        return cutoff
    if gender:
        return cutoff.get(gender.lower(), "N/A")
    female = cutoff.get("female", "N/A")
    return female if female != "N/A" else cutoff.get("male", "N/A")


def _is_numeric(cutoff) -> bool:
    return isinstance(cutoff, int) and not isinstance(cutoff, bool)


def _open_to(program: Program, gender: Optional[str]) -> bool:
    # Gendered pairs with "N/A" for one gender exclude that gender
    if gender and isinstance(program.cutoff, dict):
        return program.cutoff.get(gender.lower(), "N/A") != "N/A"
    return True


def _as_recommendation(program: Program, cutoff) -> ProgramRecommendation:
    return ProgramRecommendation(
        name=program.name,
        college=program.college,
        cutoff=cutoff,
        elective_requirements=list(program.elective_requirements or ()),
        fees=program.fees,
    )


def recommend_programs(
    catalog: ProgramCatalog,
    grades: WassceGrades,
    gender: Optional[str] = None,
    limit: int = MAX_RECOMMENDATIONS,
) -> RecommendationResult:
    """
    Programs the student is competitive for, closest cut-off first.

    When fewer than `limit` programs qualify on cut-off, the list is topped
    up with programs whose electives match, lowest cut-off first.
    """
    aggregate = calculate_aggregate(grades)
    electives = [e.subject for e in grades.electives]

    eligible = [
        p for p in catalog
        if _open_to(p, gender) and matches_electives(electives, p)
    ]

    qualified = []
    for program in eligible:
        cutoff = _cutoff_for(program, gender)
        if _is_numeric(cutoff) and aggregate <= cutoff:
            qualified.append((program, cutoff))
    qualified.sort(key=lambda item: abs(item[1] - aggregate))

    chosen = qualified[:limit]
    if len(chosen) < limit:
        names = {p.name for p, _ in chosen}
        extra = [(p, _cutoff_for(p, gender)) for p in eligible if p.name not in names]
        extra.sort(key=lambda item: item[1] if _is_numeric(item[1]) else _UNRANKED_CUTOFF)
        chosen += extra[:limit - len(chosen)]

    recommendations = [_as_recommendation(p, cutoff) for p, cutoff in chosen]

    warnings: List[str] = []
    if any(not _is_numeric(r.cutoff) for r in recommendations):
        warnings.append(MISSING_CUTOFF_WARNING)

    logger.info(
        f"Recommended {len(recommendations)} programs for aggregate {aggregate} "
        f"({len(qualified)} met the cut-off)"
    )
    return RecommendationResult(aggregate=aggregate, recommendations=recommendations, warnings=warnings)
