"""
Admissions Chat Logic Module

Provides the catalog-scoped classification and response engine behind the
KNUST admissions chatbot, plus the grade-based program recommender.
"""

from .catalog import ProgramCatalog
from .classifier import QueryClassifier
from .constants import ChatPath
from .contracts import (
    ChatReply,
    ClassificationResult,
    EligibilityResult,
    FeeSchedule,
    FuzzyMatch,
    Program,
    ProgramRecommendation,
    RecommendationResult,
    WassceGrades,
)
from .engine import ChatOrchestrator, build_chat_orchestrator
from .errors import InvalidChatInput, UpstreamFailure
from .extractor import ProgramExtractor
from .guard_rail import DatasetGuardRail
from .matcher import FuzzyMatcher
from .recommender import calculate_aggregate, matches_electives, recommend_programs
from .responder import ResponseGenerator

__all__ = [
    # Main engine
    "ChatOrchestrator",
    "build_chat_orchestrator",

    # Components
    "ProgramCatalog",
    "FuzzyMatcher",
    "QueryClassifier",
    "ProgramExtractor",
    "ResponseGenerator",
    "DatasetGuardRail",

    # Recommendations
    "calculate_aggregate",
    "matches_electives",
    "recommend_programs",

    # Contracts
    "ChatReply",
    "ClassificationResult",
    "EligibilityResult",
    "FeeSchedule",
    "FuzzyMatch",
    "Program",
    "ProgramRecommendation",
    "RecommendationResult",
    "WassceGrades",

    # Enums / errors
    "ChatPath",
    "InvalidChatInput",
    "UpstreamFailure",
]
