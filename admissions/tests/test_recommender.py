"""
Test the WASSCE aggregate calculator and grade-based recommendations.
"""

from admissions.logic import WassceGrades, calculate_aggregate, matches_electives, recommend_programs
from admissions.logic.constants import MISSING_CUTOFF_WARNING


def _grades(core="A1", electives=None):
    return WassceGrades(
        english=core,
        math=core,
        integratedScience=core,
        electives=[{"subject": s, "grade": g} for s, g in (electives or [])],
    )


SCIENCE_ELECTIVES = [
    ("Elective Mathematics", "A1"),
    ("Physics", "A1"),
    ("Chemistry", "A1"),
    ("Biology", "A1"),
]


def test_aggregate_uses_best_six_grades():
    grades = WassceGrades(
        english="A1",
        math="B2",
        integratedScience="B3",
        electives=[
            {"subject": "Physics", "grade": "A1"},
            {"subject": "Chemistry", "grade": "C6"},
            {"subject": "Elective Mathematics", "grade": "B2"},
            {"subject": "Economics", "grade": "F9"},
        ],
    )
    # 1 + 1 + 2 + 2 + 3 + 4, the F9 is dropped
    assert calculate_aggregate(grades) == 13


def test_aggregate_credit_grades_are_equal():
    for grade in ("C4", "C5", "C6"):
        assert calculate_aggregate(WassceGrades(english=grade)) == 4


def test_aggregate_ignores_unknown_and_missing_grades():
    grades = WassceGrades(english="a1", math="Z1", electives=[{"subject": "Physics", "grade": " b2 "}])
    assert calculate_aggregate(grades) == 3
    assert calculate_aggregate(WassceGrades()) == 0


def test_grades_accept_field_name_or_alias():
    assert WassceGrades(integrated_science="A1").integrated_science == "A1"
    assert WassceGrades(integratedScience="A1").integrated_science == "A1"


def test_matches_electives(catalog):
    computer_science = catalog.get("BSc Computer Science")

    assert matches_electives(["Elective Mathematics", "Physics"], computer_science)
    assert matches_electives(["elective mathematics", "economics"], computer_science)
    assert not matches_electives(["Elective Mathematics", "Biology"], computer_science)
    assert not matches_electives([], computer_science)

    # No requirements means nothing to miss
    assert matches_electives([], catalog.get("BSc Sports and Exercise Science"))


def test_recommendations_closest_cutoff_first(catalog):
    result = recommend_programs(catalog, _grades(electives=SCIENCE_ELECTIVES))

    assert result.aggregate == 6
    assert [r.name for r in result.recommendations] == [
        "Doctor of Pharmacy",
        "LLB",
        "MBChB Medicine",
        "BSc Computer Science",
    ]
    assert result.recommendations[2].cutoff == 7
    assert result.warnings == []


def test_recommendations_use_gendered_cutoffs(catalog):
    result = recommend_programs(catalog, _grades(electives=SCIENCE_ELECTIVES), gender="male")

    assert [r.name for r in result.recommendations] == [
        "MBChB Medicine",
        "Doctor of Pharmacy",
        "LLB",
        "BDS Dental Surgery",
    ]
    assert result.recommendations[0].cutoff == 6


def test_recommendations_exclude_programs_closed_to_gender(catalog):
    grades = _grades(core="C6", electives=[("Biology", "C6"), ("Chemistry", "C6"), ("Physics", "C6")])
    result = recommend_programs(catalog, grades, gender="male", limit=60)

    assert "BSc Midwifery" not in [r.name for r in result.recommendations]


def test_recommendations_top_up_and_warn(catalog):
    # Without electives only programs with no listed requirements match
    result = recommend_programs(catalog, _grades(core="F9"))

    assert result.aggregate == 27
    assert [r.name for r in result.recommendations] == [
        "BSc Sports and Exercise Science",
        "BSc Natural Resources Management",
        "BA Communication Design",
    ]
    assert result.warnings == [MISSING_CUTOFF_WARNING]
