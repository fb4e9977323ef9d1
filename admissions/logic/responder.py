"""
Response Generator

Deterministic, template-based answers rendered straight from the catalog.
Nothing in this module calls the LLM.

Template precedence for a program question:
1. Cut-off / aggregate  -> cut-off, college and required subjects
2. Fees                 -> fee breakdown
3. Requirements         -> cut-off and required subjects
4. Anything else        -> everything the catalog knows
"""

import re
from typing import List, Optional, Sequence

from .catalog import ProgramCatalog
from .constants import (
    BACKGROUND_STOPWORDS,
    CURRENCY,
    CUTOFF_KEYWORDS,
    FEE_KEYWORDS,
    MAX_SIMILAR_PROGRAMS,
    NO_REQUIREMENTS_NOTE,
    REQUIREMENT_KEYWORDS,
    SIMILARITY_TOLERANCE,
)
from .contracts import EligibilityResult, Program


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _money(amount: float) -> str:
    return f"{CURRENCY} {amount:,.2f}"


def format_cutoff(cutoff) -> Optional[str]:
    """Human-readable cut-off, or None when the dataset has no entry."""
    if cutoff is None:
        return None
    if isinstance(cutoff, dict):
        male = cutoff.get("male", "N/A")
        female = cutoff.get("female", "N/A")
        return f"Male: {male}, Female: {female}"
    return str(cutoff)


def format_requirements(program: Program) -> List[str]:
    """Bullet lines for the program's SHS elective requirements."""
    lines: List[str] = []
    for entry in program.elective_requirements or ():
        if isinstance(entry, str):
            lines.append(f"• {entry}")
        else:
            lines.append(f"• Choose one: {' OR '.join(entry)}")
    return lines


class ResponseGenerator:
    """Renders dataset answers for one catalog."""

    def __init__(self, catalog: ProgramCatalog):
        self.catalog = catalog

    # -------------------------------------------------------------------------
    # Template sections
    # -------------------------------------------------------------------------

    def _cutoff_line(self, program: Program) -> List[str]:
        cutoff = format_cutoff(program.cutoff)
        return [f"🎯 **Cut-off Point:** {cutoff}"] if cutoff else []

    def _college_line(self, program: Program) -> List[str]:
        return [f"🏫 **College:** {program.college}"]

    def _requirements_block(self, program: Program) -> List[str]:
        lines = format_requirements(program)
        if not lines:
            return []
        return ["", "📚 **Required SHS Subjects:**", *lines]

    def _fees_block(self, program: Program, heading: bool = True) -> List[str]:
        if not program.fees:
            return []
        fees = program.fees
        lines = ["", "💰 **Fees:**"] if heading else []
        lines += [
            f"• Regular Freshers: {_money(fees.regular)}",
            f"• Fee-Paying Freshers: {_money(fees.fee_paying)}",
            f"• Residential Freshers: {_money(fees.residential)}",
        ]
        return lines

    @staticmethod
    def _render(lines: List[str]) -> str:
        return "\n".join(lines).strip() + "\n"

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def generate_dataset_response(self, message: str, program: Program) -> str:
        """
        Render the template matching the question's intent.

        Sections the dataset lacks (no fees, no cut-off, no requirements) are
        left out rather than printed as empty values.
        """
        lowered = (message or "").lower()

        if _contains_any(lowered, CUTOFF_KEYWORDS):
            return self._render(
                [f"**{program.name}**", ""]
                + self._cutoff_line(program)
                + self._college_line(program)
                + self._requirements_block(program)
            )

        if _contains_any(lowered, FEE_KEYWORDS) and program.fees:
            return self._render(
                [f"**{program.name} - Fees**", ""]
                + self._fees_block(program, heading=False)
            )

        if _contains_any(lowered, REQUIREMENT_KEYWORDS):
            details = self._cutoff_line(program) + self._requirements_block(program)
            return self._render(
                [f"**{program.name} - Admission Requirements**", ""]
                + (details or [NO_REQUIREMENTS_NOTE])
            )

        return self._render(
            [f"**{program.name}**", ""]
            + self._cutoff_line(program)
            + self._college_line(program)
            + self._fees_block(program)
            + self._requirements_block(program)
        )

    def find_similar_programs(
        self,
        target_cutoff: Optional[int],
        tolerance: int = SIMILARITY_TOLERANCE,
        max_results: int = MAX_SIMILAR_PROGRAMS,
        exclude_program: Optional[str] = None,
    ) -> List[str]:
        """
        Programs whose numeric cut-off is within `tolerance` of the target.

        Pairs, "N/A" and missing cut-offs never qualify. Sorted by absolute
        difference; ties keep catalog order.
        """
        if not isinstance(target_cutoff, int) or isinstance(target_cutoff, bool):
            return []

        similar = []
        for program in self.catalog:
            cutoff = program.numeric_cutoff
            if cutoff is None or program.name == exclude_program:
                continue
            difference = abs(cutoff - target_cutoff)
            if difference <= tolerance:
                similar.append((difference, program.name))

        similar.sort(key=lambda item: item[0])
        return [name for _, name in similar[:max_results]]

    def check_eligibility_by_background(self, background: str, program: Program) -> Optional[EligibilityResult]:
        """
        Match a free-text SHS background against the program's electives.

        A requirement entry is satisfied when any background token appears in
        the subject (or in any option of a choice group). Eligible means at
        least one entry is satisfied.

        Returns:
            EligibilityResult, or None when the program has no requirements
        """
        requirements = program.elective_requirements
        if not requirements:
            return None

        tokens = [
            token for token in re.findall(r"[a-z]+", (background or "").lower())
            if len(token) > 2 and token not in BACKGROUND_STOPWORDS
        ]

        def satisfied_by(subject: str) -> bool:
            lowered = subject.lower()
            return any(token in lowered for token in tokens)

        matched: List[str] = []
        for entry in requirements:
            options = (entry,) if isinstance(entry, str) else entry
            for subject in options:
                if satisfied_by(subject) and subject not in matched:
                    matched.append(subject)

        return EligibilityResult(
            eligible=bool(matched),
            matched_subjects=matched,
            requirements=list(requirements),
        )

    def append_admission_requirements(self, response: str, program: Optional[Program]) -> str:
        """Append cut-off, college, subjects and fees unless a cut-off is already mentioned."""
        if program is None:
            return response

        lowered = response.lower()
        if "cut-off" in lowered or "cutoff" in lowered:
            return response

        lines = ["", "", f"📋 **{program.name} - Admission Details:**"]
        lines += self._cutoff_line(program)
        lines += self._college_line(program)
        lines += self._requirements_block(program)
        if program.fees:
            lines += [
                "",
                "💰 **Fees:**",
                f"• Regular Freshers: {_money(program.fees.regular)}",
                f"• Fee-Paying Freshers: {_money(program.fees.fee_paying)}",
            ]
        return response + "\n".join(lines) + "\n"

    def format_similar_programs(self, names: List[str]) -> str:
        lines = ["", "🔎 **Programs with similar cut-offs:**"]
        for name in names:
            program = self.catalog.get(name)
            cutoff = format_cutoff(program.cutoff) if program else None
            lines.append(f"• {name} (cut-off: {cutoff})" if cutoff else f"• {name}")
        return "\n".join(lines) + "\n"

    def format_eligibility(self, program: Program, background: str, result: EligibilityResult) -> str:
        if result.eligible:
            subjects = ", ".join(result.matched_subjects)
            verdict = (
                f"✅ Based on your background ({background.strip()}), you meet these "
                f"{program.name} requirements: {subjects}."
            )
        else:
            verdict = (
                f"⚠️ Your background ({background.strip()}) doesn't appear to match the "
                f"required subjects for {program.name}."
            )
        note = "Check every required subject above and your aggregate against the cut-off."
        return "\n".join(["", "🧾 **Eligibility:**", verdict, note]) + "\n"
