"""
Chat Engine Constants

Keyword tables, canned responses, thresholds and fixed reply texts used by the
classification and response engine. Everything here is plain data so the
tables can be swapped or extended without touching control flow.
"""

from enum import Enum
from typing import Dict, List, Tuple


# =============================================================================
# QUERY CLASSIFICATION KEYWORDS
# =============================================================================

# Substring matches, case-insensitive. No tokenization: "fee" also matches
# "coffee" and "ba" matches "bachelor".
ADMISSION_KEYWORDS: Tuple[str, ...] = (
    "cut off", "cutoff", "cut-off", "aggregate", "requirements", "admission", "fees", "fee",
    "college of science", "college of engineering", "college of agriculture", "college of health",
    "college of humanities", "college of art", "bsc", "ba", "llb", "pharmd", "dvm", "bds",
    "bhm", "bfa", "bed", "mbchb", "doctor of", "electives", "subjects", "shs", "wassce", "novdec",
    "entry", "apply", "application", "qualify", "eligible", "eligibility",
)

# A bare catalog subject word ("computer", "nursing") also signals admission
# intent. Shorter words are too common to count.
SUBJECT_WORD_MIN_LENGTH = 4

CAREER_ACADEMIC_KEYWORDS: Tuple[str, ...] = (
    "career", "careers", "job", "jobs", "employment", "work", "profession", "professional",
    "opportunities", "opportunity", "future", "prospects", "salary", "income", "earning",
    "what can i do with", "what can you do with", "field", "industry", "sector",
    "graduate", "after graduation", "course content", "curriculum", "modules", "subjects covered",
    "learn", "study", "taught", "skills", "knowledge", "about the program", "about the course",
    "tell me about", "describe", "explain", "overview", "introduction to",
)

# Ordered: the first table entry with a matching pattern wins.
NON_ADMISSION_QUERIES: List[Dict] = [
    {
        "patterns": [r"who created you", r"who made you", r"who built you", r"who developed you"],
        "response": "I was created by Rockson Agyamaku to assist with KNUST admission information.",
    },
    {
        "patterns": [r"\bwhat are you\b", r"\bwho are you\b"],
        "response": (
            "I am a KNUST Admission Bot created by Rockson Agyamaku to help prospective students "
            "with admission information, program details, and requirements."
        ),
    },
    {
        "patterns": [
            r"\bhello\b", r"\bhi\b", r"\bhey\b",
            r"\bgood morning\b", r"\bgood afternoon\b", r"\bgood evening\b",
        ],
        "response": (
            "Hello! I'm here to help you with KNUST admission information. You can ask me about "
            "program cut-offs, fees, admission requirements, or any other admission-related questions."
        ),
    },
]


# =============================================================================
# PROGRAM EXTRACTION
# =============================================================================

# Hand-authored overrides checked before any matching. Every regex in a rule
# must match the lowercased message.
SPECIAL_CASE_RULES: List[Tuple[Tuple[str, ...], str]] = [
    ((r"computer", r"science"), "BSc Computer Science"),
    ((r"computer", r"program"), "BSc Computer Science"),
    ((r"\blaw\b",), "LLB"),
]

# Fuzzy search configuration
FUZZY_MATCH_THRESHOLD = 0.4       # candidate sensitivity, 0 (exact) .. 1
FUZZY_MATCH_DISTANCE = 100        # characters into a name before a match stops counting
FUZZY_ACCEPT_THRESHOLD = 0.3      # top-1 trusted as the program
FUZZY_SUGGEST_THRESHOLD = 0.6     # good enough to offer as a suggestion

DEFAULT_SEARCH_RESULTS = 5
DEFAULT_MAX_SUGGESTIONS = 3


# =============================================================================
# DATASET RESPONSES
# =============================================================================

CUTOFF_KEYWORDS: Tuple[str, ...] = ("cut off", "cutoff", "cut-off", "aggregate")
FEE_KEYWORDS: Tuple[str, ...] = ("fee",)
REQUIREMENT_KEYWORDS: Tuple[str, ...] = ("requirement", "subject", "elective")

SIMILAR_PROGRAM_KEYWORDS: Tuple[str, ...] = ("similar", "recommend", "like")
ELIGIBILITY_KEYWORDS: Tuple[str, ...] = ("can i pursue", "eligible")
ELIGIBILITY_STYLE_KEYWORDS: Tuple[str, ...] = (
    "can i pursue", "eligible", "eligibility", "qualify", "can i study", "can i apply",
)

# Phrases that introduce the subjects a student offered at SHS.
BACKGROUND_PATTERNS: Tuple[str, ...] = (
    r"\bi (?:offered|studied|did|took|read|have|am offering)\s+(?P<background>[^.?!]+)",
    r"\bmy background is (?:in\s+)?(?P<background>[^.?!]+)",
    r"\bwith (?:a )?background in\s+(?P<background>[^.?!]+)",
    r"\bas an? (?P<background>[^.?!]+?) student\b",
)

# Where a captured background stops: the question that follows it.
BACKGROUND_TERMINATOR = r",?\s*\b(?:can|could|am|will|would|is|eligible|qualify|to pursue|to study)\b"

BACKGROUND_STOPWORDS = frozenset({
    "and", "the", "with", "for", "from", "can", "pursue", "eligible", "am", "was",
    "science", "arts", "elective", "electives", "subjects", "shs", "student", "course",
})

SIMILARITY_TOLERANCE = 3
MAX_SIMILAR_PROGRAMS = 4

CURRENCY = "GHS"

NO_REQUIREMENTS_NOTE = (
    "No published cut-off or subject requirements for this program. "
    "Contact KNUST admissions for the current entry requirements."
)


# =============================================================================
# GUARD RAIL
# =============================================================================

# Known-wrong institution/program names an LLM tends to volunteer.
GUARD_RAIL_BLACKLIST: Dict[str, str] = {
    r"\bUniversity of Ghana\b": "another institution",
    r"\bUniversity of Cape Coast\b": "another institution",
    r"\bUniversity of Education,? Winneba\b": "another institution",
    r"\bUniversity for Development Studies\b": "another institution",
    r"\bAshesi University\b": "another institution",
    r"\bGhana Institute of Management and Public Administration\b": "another institution",
    r"\bLegon\b": "another institution",
    r"\bUCC\b": "another institution",
    r"\bUEW\b": "another institution",
    r"\bUDS\b": "another institution",
    r"\bGIMPA\b": "another institution",
}

DEGREE_PREFIXES: Tuple[str, ...] = (
    "BSc", "BA", "BFA", "BEd", "BHM", "BDS", "MBChB", "PharmD", "DVM", "Doctor of",
)

UNKNOWN_PROGRAM_PLACEHOLDER = "[please specify a valid KNUST program]"


# =============================================================================
# ORCHESTRATION
# =============================================================================

class ChatPath(str, Enum):
    """Terminal state reached while answering a message."""
    CANNED = "canned"
    CAREER = "career"
    DATASET = "dataset"
    DISAMBIGUATION = "disambiguation"
    GENERAL_ADMISSION = "general_admission"
    GENERAL_FALLBACK = "general_fallback"
    UPSTREAM_FAILURE = "upstream_failure"


GENERAL_GUIDANCE_RESPONSE = (
    "I'm here to help with KNUST admissions. You can ask me about:\n"
    "• Program cut-off points (e.g. \"BSc Computer Science cut off\")\n"
    "• Fees for a program or college\n"
    "• Required SHS elective subjects\n"
    "• Whether your background makes you eligible for a program\n"
    "• Career prospects of a KNUST program"
)

UPSTREAM_FAILURE_RESPONSE = (
    "Sorry, I couldn't process your question right now. Please try again in a moment "
    "or contact the KNUST admissions office."
)

DISAMBIGUATION_INTRO = "I found a few KNUST programs that could match your question. Did you mean:"
DISAMBIGUATION_OUTRO = "Please reply with the full program name so I can give you accurate details."

# LLM call settings
CAREER_TEMPERATURE = 0.7
CAREER_MAX_TOKENS = 600
ADMISSION_TEMPERATURE = 0.3
ADMISSION_MAX_TOKENS = 500

CHAT_HISTORY_COLLECTION = "chat_history"
FAQ_COLLECTION = "faqs"
RECOMMENDATION_COLLECTION = "recommendations"


# =============================================================================
# AGGREGATE / RECOMMENDATIONS
# =============================================================================

WASSCE_GRADE_VALUES: Dict[str, int] = {
    "A1": 1, "B2": 2, "B3": 3, "C4": 4, "C5": 4, "C6": 4, "D7": 7, "E8": 8, "F9": 9,
}

AGGREGATE_SUBJECT_COUNT = 6
MAX_RECOMMENDATIONS = 4
MISSING_CUTOFF_WARNING = (
    "Some programs have no specified cut-off for 2024/2025. "
    "Contact KNUST admissions for official cut-offs."
)
