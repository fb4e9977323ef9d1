"""
Data Contracts for the Chat Engine

Defines the Pydantic models passed between the catalog, the matcher, the
classifier and the orchestrator. Program is an immutable value object; every
other contract is created and discarded within a single request.
"""

from typing import Dict, List, Optional, Tuple, Union
from pydantic import BaseModel, Field

from .constants import ChatPath


# =============================================================================
# CATALOG CONTRACTS
# =============================================================================

RequirementEntry = Union[str, Tuple[str, ...]]


class FeeSchedule(BaseModel):
    """Fresher fees for a college, in GHS."""
    regular: float
    fee_paying: float
    residential: float

    class Config:
        frozen = True


class Program(BaseModel):
    """
    A single catalog program.

    `cutoff` is an int aggregate, a {"male", "female"} pair, the "N/A"
    sentinel, or None when the dataset has no entry.
    """
    name: str
    college: str
    cutoff: Optional[Union[int, str, Dict[str, Union[int, str]]]] = None
    fees: Optional[FeeSchedule] = None
    elective_requirements: Optional[Tuple[RequirementEntry, ...]] = None

    class Config:
        frozen = True

    @property
    def numeric_cutoff(self) -> Optional[int]:
        """Single-number cut-off, or None for pairs, "N/A" and missing data."""
        if isinstance(self.cutoff, int) and not isinstance(self.cutoff, bool):
            return self.cutoff
        return None


# =============================================================================
# MATCHING / CLASSIFICATION CONTRACTS
# =============================================================================

class FuzzyMatch(BaseModel):
    """Fuzzy search hit. Lower score is better; 0 is a perfect match."""
    program: str
    score: float = Field(ge=0.0)


class ClassificationResult(BaseModel):
    """Per-message classification, recomputed for every request."""
    is_non_admission_canned: bool = False
    is_career_academic: bool = False
    is_admission_related: bool = False
    extracted_program: Optional[Program] = None
    canned_response: Optional[str] = None


class EligibilityResult(BaseModel):
    """Outcome of matching a student's background against a program."""
    eligible: bool
    matched_subjects: List[str] = Field(default_factory=list)
    requirements: List[RequirementEntry] = Field(default_factory=list)


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class ChatReply(BaseModel):
    """Answer produced for one chat message."""
    response: str
    path: ChatPath
    status_code: int = 200

    class Config:
        use_enum_values = True

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class ProgramRecommendation(BaseModel):
    """Program suggested from a student's WASSCE grades."""
    name: str
    college: str
    cutoff: Optional[Union[int, str]] = None
    elective_requirements: List[RequirementEntry] = Field(default_factory=list)
    fees: Optional[FeeSchedule] = None


class RecommendationResult(BaseModel):
    """Grade-based recommendation output."""
    aggregate: int
    recommendations: List[ProgramRecommendation] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# GRADE CONTRACTS
# =============================================================================

class ElectiveGrade(BaseModel):
    """One WASSCE elective subject and the grade obtained."""
    subject: str
    grade: str


class WassceGrades(BaseModel):
    """
    A student's WASSCE results. Core subjects are optional so partial sheets
    can still be scored; unknown grades are ignored.
    """
    english: Optional[str] = None
    math: Optional[str] = None
    integrated_science: Optional[str] = Field(default=None, alias="integratedScience")
    electives: List[ElectiveGrade] = Field(default_factory=list)

    class Config:
        populate_by_name = True
