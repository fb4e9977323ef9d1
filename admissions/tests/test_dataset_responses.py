"""
Test deterministic dataset responses and the guard rail.
"""

import pytest

from admissions.logic import DatasetGuardRail, FuzzyMatcher, ResponseGenerator
from admissions.logic.constants import NO_REQUIREMENTS_NOTE, UNKNOWN_PROGRAM_PLACEHOLDER


@pytest.fixture
def responder(catalog):
    return ResponseGenerator(catalog)


@pytest.fixture
def guard_rail(catalog):
    return DatasetGuardRail(catalog, FuzzyMatcher(catalog))


class NoMatch:
    """Matcher that never finds anything."""

    def best(self, query):
        return None


# =============================================================================
# TEMPLATES
# =============================================================================

def test_cutoff_template(catalog, responder):
    response = responder.generate_dataset_response("BSc Computer Science cut off", catalog.get("BSc Computer Science"))

    assert response.startswith("**BSc Computer Science**")
    assert "🎯 **Cut-off Point:** 8" in response
    assert "🏫 **College:** College of Science" in response
    assert "• Elective Mathematics" in response
    assert "• Choose one: Physics OR Chemistry OR Economics" in response
    assert "Fees" not in response


def test_pair_cutoff_is_rendered_per_gender(catalog, responder):
    response = responder.generate_dataset_response("medicine aggregate", catalog.get("MBChB Medicine"))
    assert "Male: 6, Female: 7" in response


def test_fee_template(catalog, responder):
    response = responder.generate_dataset_response("how much are the fees", catalog.get("BSc Computer Science"))

    assert response.startswith("**BSc Computer Science - Fees**")
    assert "GHS 2,312.50" in response
    assert "GHS 8,980.00" in response
    assert "GHS 2,167.80" in response
    assert "Cut-off" not in response


def test_requirements_template(catalog, responder):
    response = responder.generate_dataset_response("what subjects do I need", catalog.get("LLB"))

    assert response.startswith("**LLB - Admission Requirements**")
    assert "🎯 **Cut-off Point:** 6" in response
    assert "Choose one: Literature in English OR Government" in response


def test_requirements_template_without_published_requirements(catalog, responder):
    response = responder.generate_dataset_response(
        "requirements for BA Communication Design", catalog.get("BA Communication Design")
    )

    assert response.startswith("**BA Communication Design - Admission Requirements**")
    assert NO_REQUIREMENTS_NOTE in response


def test_combined_template_omits_missing_sections(catalog, responder):
    response = responder.generate_dataset_response("tell me everything", catalog.get("BA Communication Design"))

    assert "Cut-off Point" not in response
    assert "Required SHS Subjects" not in response
    assert "🏫 **College:** College of Art and Built Environment" in response
    assert "GHS 2,000.00" in response


# =============================================================================
# SIMILAR PROGRAMS / ELIGIBILITY
# =============================================================================

def test_similar_programs(responder):
    similar = responder.find_similar_programs(8, exclude_program="BSc Computer Science")

    assert similar == [
        "Doctor of Optometry",
        "BSc Computer Engineering",
        "BSc Petroleum Engineering",
        "BSc Electrical and Electronic Engineering",
    ]


def test_similar_programs_never_include_excluded_or_unpublished(catalog, responder):
    for program in catalog:
        target = program.numeric_cutoff
        similar = responder.find_similar_programs(target, exclude_program=program.name)
        assert program.name not in similar
        for name in similar:
            cutoff = catalog.get(name).numeric_cutoff
            assert cutoff is not None
            assert abs(cutoff - target) <= 3


def test_similar_programs_without_numeric_target(responder):
    assert responder.find_similar_programs(None) == []
    assert responder.find_similar_programs("N/A") == []


def test_eligibility_matches_background(catalog, responder):
    result = responder.check_eligibility_by_background("physics and chemistry", catalog.get("BSc Computer Science"))

    assert result.eligible
    assert result.matched_subjects == ["Physics", "Chemistry"]


def test_eligibility_without_matching_background(catalog, responder):
    result = responder.check_eligibility_by_background("literature and history", catalog.get("BSc Computer Science"))

    assert not result.eligible
    assert result.matched_subjects == []


def test_eligibility_for_program_without_requirements(catalog, responder):
    assert responder.check_eligibility_by_background("physics", catalog.get("BSc Sports and Exercise Science")) is None


def test_append_admission_requirements(catalog, responder):
    nursing = catalog.get("BSc Nursing")

    appended = responder.append_admission_requirements("You could consider nursing.", nursing)
    assert "📋 **BSc Nursing - Admission Details:**" in appended
    assert "🎯 **Cut-off Point:** 12" in appended

    already = "The cut-off for BSc Nursing is 12."
    assert responder.append_admission_requirements(already, nursing) == already
    assert responder.append_admission_requirements(already, None) == already


# =============================================================================
# GUARD RAIL
# =============================================================================

def test_guard_rail_keeps_catalog_programs(guard_rail):
    text = "BSc Computer Science and BSc Computer Engineering are popular.\nLLB is also competitive."
    assert guard_rail.filter_non_knust_programs(text) == text


def test_guard_rail_replaces_blacklisted_institutions(guard_rail):
    filtered = guard_rail.filter_non_knust_programs("You could also apply to the University of Ghana or UCC.")

    assert "University of Ghana" not in filtered
    assert "UCC" not in filtered
    assert filtered.count("another institution") == 2


def test_guard_rail_replaces_unknown_programs(guard_rail):
    filtered = guard_rail.filter_non_knust_programs("Consider BSc Quantum Basket Weaving instead.")
    assert "Quantum Basket Weaving" not in filtered


def test_guard_rail_placeholder_without_close_match(catalog):
    guard_rail = DatasetGuardRail(catalog, NoMatch())
    filtered = guard_rail.filter_non_knust_programs("Consider BSc Quantum Basket Weaving instead.")
    assert filtered == f"Consider {UNKNOWN_PROGRAM_PLACEHOLDER} instead."


def test_guard_rail_catches_any_prefix_casing(catalog):
    guard_rail = DatasetGuardRail(catalog, NoMatch())
    filtered = guard_rail.filter_non_knust_programs("You can do a Bsc Quantum Weaving or bsc Astrology.")
    assert filtered == f"You can do a {UNKNOWN_PROGRAM_PLACEHOLDER} or {UNKNOWN_PROGRAM_PLACEHOLDER}."


def test_guard_rail_keeps_lowercase_catalog_names(guard_rail):
    text = "Apply for bsc Computer Science or a bsc degree in general."
    assert guard_rail.filter_non_knust_programs(text) == text


@pytest.mark.parametrize("text", [
    "Consider BSc Quantum Basket Weaving at University of Cape Coast.",
    "Doctor of Dentistry Studies is offered at Legon.",
    "BA Film Studies\nBSc Computer Science\nLLB",
    "You can do a Bsc Quantum Weaving or bsc Astrology.",
    "DOCTOR OF Dentistry Studies or ba Film Studies.",
    "Plain text without any programs.",
    "",
])
def test_guard_rail_is_idempotent(guard_rail, text):
    once = guard_rail.filter_non_knust_programs(text)
    assert guard_rail.filter_non_knust_programs(once) == once
