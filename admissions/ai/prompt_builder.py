from typing import Any, Dict, Iterable, Tuple

from .safety_rules import ADMISSION_ROLE_DEFINITION, CAREER_ROLE_DEFINITION, SAFETY_RULES


def _system_prompt(role_definition: str) -> str:
    rules_str = "\n".join([f"- {rule}" for rule in SAFETY_RULES])

    return f"""{role_definition}
SAFETY RULES (NON-NEGOTIABLE):
{rules_str}
"""


def build_career_prompt(program: Any, message: str) -> Tuple[str, str]:
    """
    Constructs the (system, user) prompt pair for a career/academic question
    about a single KNUST program.
    """
    user_content = f"""
PROGRAM: {program.name}
COLLEGE: {program.college}

STUDENT QUESTION:
{message}

TASK:
Explain what {program.name} at KNUST involves and the career paths it opens up.
Do not mention any other program unless it is listed in the KNUST catalog.
"""
    return _system_prompt(CAREER_ROLE_DEFINITION), user_content


def build_admission_prompt(message: str, programs: Iterable[Any], deadlines: Dict[str, str]) -> Tuple[str, str]:
    """
    Constructs the strict (system, user) prompt pair for a general admission
    question. The full program list is included so the model can only name
    catalog programs.
    """
    programs_str = "\n".join([f"- {p.name} ({p.college})" for p in programs])

    user_content = f"""
VALID KNUST PROGRAMS:
{programs_str}

DEADLINES:
- Regular: {deadlines.get("regular", "N/A")}
- Extension: {deadlines.get("extension", "N/A")}

STUDENT QUESTION:
{message}

TASK:
Answer using only the programs listed above. Do not infer cut-offs or fees that are not provided.
"""
    return _system_prompt(ADMISSION_ROLE_DEFINITION), user_content
