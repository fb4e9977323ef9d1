"""
Static KNUST admissions dataset (2024/2025 freshers).

Loaded once into a ProgramCatalog at process start. Cut-offs are either a
single aggregate, a male/female pair, or "N/A" when not published.
Requirement entries are a subject name or a tuple meaning "choose one of".
"""

from typing import Dict, List, Tuple, Union

Cutoff = Union[int, str, Dict[str, Union[int, str]]]
RequirementEntry = Union[str, Tuple[str, ...]]

NOT_PUBLISHED = "N/A"

COLLEGE_OF_SCIENCE = "College of Science"
COLLEGE_OF_ENGINEERING = "College of Engineering"
COLLEGE_OF_HEALTH_SCIENCES = "College of Health Sciences"
COLLEGE_OF_AGRICULTURE = "College of Agriculture and Natural Resources"
COLLEGE_OF_HUMANITIES = "College of Humanities and Social Sciences"
COLLEGE_OF_ART = "College of Art and Built Environment"

# Catalog order matters: direct containment returns the first hit.
VALID_PROGRAMS: List[str] = [
    # College of Science
    "BSc Computer Science",
    "BSc Actuarial Science",
    "BSc Mathematics",
    "BSc Statistics",
    "BSc Physics",
    "BSc Chemistry",
    "BSc Biochemistry",
    "BSc Biological Sciences",
    "BSc Meteorology and Climate Science",
    "BSc Environmental Science",
    "BSc Food Science and Technology",
    "Doctor of Optometry",
    # College of Engineering
    "BSc Computer Engineering",
    "BSc Civil Engineering",
    "BSc Mechanical Engineering",
    "BSc Electrical and Electronic Engineering",
    "BSc Chemical Engineering",
    "BSc Petroleum Engineering",
    "BSc Aerospace Engineering",
    "BSc Biomedical Engineering",
    "BSc Geological Engineering",
    "BSc Telecommunication Engineering",
    # College of Health Sciences
    "MBChB Medicine",
    "BDS Dental Surgery",
    "Doctor of Pharmacy",
    "Doctor of Veterinary Medicine",
    "BSc Nursing",
    "BSc Midwifery",
    "BSc Medical Laboratory Science",
    "BSc Sports and Exercise Science",
    # College of Agriculture and Natural Resources
    "BSc Agriculture",
    "BSc Agribusiness Management",
    "BSc Agricultural Biotechnology",
    "BSc Natural Resources Management",
    "BSc Forest Resources Technology",
    # College of Humanities and Social Sciences
    "LLB",
    "BA Economics",
    "BA Political Studies",
    "BA Sociology",
    "BA English",
    "BA French",
    "BA Akan Language and Culture",
    "BA Religious Studies",
    "BSc Business Administration",
    # College of Art and Built Environment
    "BSc Architecture",
    "BSc Quantity Surveying and Construction Economics",
    "BSc Land Economy",
    "BSc Human Settlement Planning",
    "BSc Construction Technology and Management",
    "BFA Painting and Sculpture",
    "BA Communication Design",
]

_COLLEGE_MEMBERS: Dict[str, List[str]] = {
    COLLEGE_OF_SCIENCE: VALID_PROGRAMS[0:12],
    COLLEGE_OF_ENGINEERING: VALID_PROGRAMS[12:22],
    COLLEGE_OF_HEALTH_SCIENCES: VALID_PROGRAMS[22:30],
    COLLEGE_OF_AGRICULTURE: VALID_PROGRAMS[30:35],
    COLLEGE_OF_HUMANITIES: VALID_PROGRAMS[35:44],
    COLLEGE_OF_ART: VALID_PROGRAMS[44:],
}

PROGRAM_TO_COLLEGE: Dict[str, str] = {
    program: college
    for college, programs in _COLLEGE_MEMBERS.items()
    for program in programs
}

CUTOFF_AGGREGATES: Dict[str, Cutoff] = {
    "BSc Computer Science": 8,
    "BSc Actuarial Science": 10,
    "BSc Mathematics": 14,
    "BSc Statistics": 14,
    "BSc Physics": 20,
    "BSc Chemistry": 18,
    "BSc Biochemistry": 12,
    "BSc Biological Sciences": 16,
    "BSc Meteorology and Climate Science": 22,
    "BSc Environmental Science": 18,
    "BSc Food Science and Technology": 16,
    "Doctor of Optometry": 8,
    "BSc Computer Engineering": 8,
    "BSc Civil Engineering": 10,
    "BSc Mechanical Engineering": 12,
    "BSc Electrical and Electronic Engineering": 9,
    "BSc Chemical Engineering": 12,
    "BSc Petroleum Engineering": 8,
    "BSc Aerospace Engineering": 12,
    "BSc Biomedical Engineering": 9,
    "BSc Geological Engineering": 16,
    "BSc Telecommunication Engineering": 10,
    "MBChB Medicine": {"male": 6, "female": 7},
    "BDS Dental Surgery": {"male": 7, "female": 8},
    "Doctor of Pharmacy": 6,
    "Doctor of Veterinary Medicine": 12,
    "BSc Nursing": 12,
    "BSc Midwifery": {"male": NOT_PUBLISHED, "female": 14},
    "BSc Medical Laboratory Science": 10,
    "BSc Sports and Exercise Science": NOT_PUBLISHED,
    "BSc Agriculture": 24,
    "BSc Agribusiness Management": 20,
    "BSc Agricultural Biotechnology": 22,
    "BSc Natural Resources Management": NOT_PUBLISHED,
    "BSc Forest Resources Technology": 24,
    "LLB": 6,
    "BA Economics": 10,
    "BA Political Studies": 14,
    "BA Sociology": 16,
    "BA English": 16,
    "BA French": 22,
    "BA Akan Language and Culture": 24,
    "BA Religious Studies": 24,
    "BSc Business Administration": 10,
    "BSc Architecture": 10,
    "BSc Quantity Surveying and Construction Economics": 12,
    "BSc Land Economy": 14,
    "BSc Human Settlement Planning": 20,
    "BSc Construction Technology and Management": 18,
    "BFA Painting and Sculpture": 24,
    # "BA Communication Design" has no published aggregate entry at all.
}

COLLEGE_FEES: Dict[str, Dict[str, float]] = {
    COLLEGE_OF_SCIENCE: {"regular": 2312.50, "fee_paying": 8980.00, "residential": 2167.80},
    COLLEGE_OF_ENGINEERING: {"regular": 2480.00, "fee_paying": 9850.00, "residential": 2167.80},
    COLLEGE_OF_HEALTH_SCIENCES: {"regular": 2745.00, "fee_paying": 12480.00, "residential": 2167.80},
    COLLEGE_OF_AGRICULTURE: {"regular": 2105.00, "fee_paying": 6420.00, "residential": 2167.80},
    COLLEGE_OF_HUMANITIES: {"regular": 2060.00, "fee_paying": 7150.00, "residential": 2167.80},
    # College of Art and Built Environment falls back to DEFAULT_FEES.
}

DEFAULT_FEES: Dict[str, float] = {"regular": 2000.00, "fee_paying": 2000.00, "residential": 2167.80}

_SCIENCE_CORE: Tuple[str, ...] = ("Physics", "Chemistry", "Biology")

ELECTIVE_REQUIREMENTS: Dict[str, List[RequirementEntry]] = {
    "BSc Computer Science": ["Elective Mathematics", ("Physics", "Chemistry", "Economics")],
    "BSc Actuarial Science": ["Elective Mathematics", ("Physics", "Economics", "Chemistry")],
    "BSc Mathematics": ["Elective Mathematics", ("Physics", "Chemistry", "Economics")],
    "BSc Statistics": ["Elective Mathematics", ("Physics", "Economics", "Geography")],
    "BSc Physics": ["Physics", "Elective Mathematics", ("Chemistry", "Biology")],
    "BSc Chemistry": ["Chemistry", ("Physics", "Biology"), "Elective Mathematics"],
    "BSc Biochemistry": ["Chemistry", "Biology", ("Physics", "Elective Mathematics")],
    "BSc Biological Sciences": ["Biology", "Chemistry", ("Physics", "Elective Mathematics")],
    "BSc Meteorology and Climate Science": ["Physics", "Elective Mathematics", ("Chemistry", "Geography")],
    "BSc Environmental Science": ["Chemistry", ("Biology", "Physics"), ("Elective Mathematics", "Geography")],
    "BSc Food Science and Technology": ["Chemistry", ("Biology", "Physics"), ("Elective Mathematics", "General Agriculture")],
    "Doctor of Optometry": ["Physics", "Chemistry", "Biology"],
    "BSc Computer Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Civil Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Mechanical Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Electrical and Electronic Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Chemical Engineering": ["Chemistry", "Physics", "Elective Mathematics"],
    "BSc Petroleum Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Aerospace Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "BSc Biomedical Engineering": ["Physics", "Elective Mathematics", ("Chemistry", "Biology")],
    "BSc Geological Engineering": ["Physics", "Elective Mathematics", ("Chemistry", "Geography")],
    "BSc Telecommunication Engineering": ["Physics", "Elective Mathematics", "Chemistry"],
    "MBChB Medicine": list(_SCIENCE_CORE),
    "BDS Dental Surgery": list(_SCIENCE_CORE),
    "Doctor of Pharmacy": ["Chemistry", "Biology", ("Physics", "Elective Mathematics")],
    "Doctor of Veterinary Medicine": ["Chemistry", "Biology", ("Physics", "Elective Mathematics", "General Agriculture")],
    "BSc Nursing": ["Biology", "Chemistry", ("Physics", "Elective Mathematics")],
    "BSc Midwifery": ["Biology", "Chemistry", ("Physics", "Elective Mathematics")],
    "BSc Medical Laboratory Science": ["Biology", "Chemistry", ("Physics", "Elective Mathematics")],
    "BSc Agriculture": [("General Agriculture", "Chemistry"), ("Biology", "Physics", "Elective Mathematics")],
    "BSc Agribusiness Management": [("General Agriculture", "Economics"), ("Elective Mathematics", "Business Management")],
    "BSc Agricultural Biotechnology": ["Chemistry", "Biology", ("General Agriculture", "Physics")],
    "BSc Forest Resources Technology": ["Biology", ("Chemistry", "General Agriculture", "Geography")],
    "LLB": [("Literature in English", "Government", "Economics", "History", "Elective Mathematics")],
    "BA Economics": ["Economics", ("Elective Mathematics", "Geography", "Government")],
    "BA Political Studies": [("Government", "History"), ("Economics", "Geography", "Literature in English")],
    "BA Sociology": [("Government", "Economics", "History", "Geography")],
    "BA English": ["Literature in English", ("History", "Government", "Christian Religious Studies")],
    "BA French": ["French", ("Literature in English", "History", "Government")],
    "BA Akan Language and Culture": ["Akan", ("Literature in English", "History", "Christian Religious Studies")],
    "BA Religious Studies": [("Christian Religious Studies", "Islamic Religious Studies"), ("History", "Government")],
    "BSc Business Administration": [("Economics", "Business Management", "Financial Accounting"), ("Elective Mathematics", "Cost Accounting")],
    "BSc Architecture": ["Elective Mathematics", "Physics", ("Technical Drawing", "Graphic Design", "Chemistry")],
    "BSc Quantity Surveying and Construction Economics": ["Elective Mathematics", ("Physics", "Economics", "Technical Drawing")],
    "BSc Land Economy": ["Elective Mathematics", ("Economics", "Geography", "Physics")],
    "BSc Human Settlement Planning": [("Geography", "Economics"), ("Elective Mathematics", "Physics")],
    "BSc Construction Technology and Management": ["Elective Mathematics", ("Physics", "Technical Drawing", "Building Construction")],
    "BFA Painting and Sculpture": [("Picture Making", "Sculpture", "Graphic Design"), ("General Knowledge in Art", "Textiles")],
    # Missing requirement entries: BSc Sports and Exercise Science,
    # BSc Natural Resources Management, BA Communication Design.
}

ADMISSION_DEADLINES: Dict[str, str] = {
    "regular": "31st December, 2024",
    "extension": "28th February, 2025",
}
