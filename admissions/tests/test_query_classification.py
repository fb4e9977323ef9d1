"""
Test query classification and program extraction.

Covers:
1. Canned greetings / identity questions
2. Career intent dominating admission intent
3. Message -> program resolution (special cases, containment, fuzzy)
4. Disambiguation suggestions
"""

import pytest

from admissions.logic import FuzzyMatcher, ProgramExtractor, QueryClassifier
from admissions.logic.classifier import catalog_subject_words
from admissions.logic.catalog_data import VALID_PROGRAMS


@pytest.fixture
def classifier():
    return QueryClassifier()


@pytest.fixture
def extractor(catalog):
    return ProgramExtractor(catalog, FuzzyMatcher(catalog))


# =============================================================================
# CLASSIFIER
# =============================================================================

def test_greeting_gets_canned_response(classifier):
    response = classifier.check_non_admission_query("Hello")
    assert response is not None
    assert response.startswith("Hello!")


def test_creator_question_gets_canned_response(classifier):
    assert "Rockson Agyamaku" in classifier.check_non_admission_query("Who created you?")


def test_canned_patterns_respect_word_boundaries(classifier):
    assert classifier.check_non_admission_query("Which program has the lowest cut off?") is None
    assert classifier.check_non_admission_query("What are your fees for nursing?") is None


def test_admission_query(classifier):
    assert classifier.is_admission_query("What is the cut off for BSc Nursing?")
    assert classifier.is_admission_query("How much are the FEES?")
    assert not classifier.is_admission_query("Tell me a joke")


def test_career_intent_dominates(classifier):
    message = "What career opportunities are there after the BSc Computer Science cut off?"
    assert classifier.is_career_academic_query(message)
    assert not classifier.is_admission_query(message)


def test_substring_keywords_match_inside_words(classifier):
    # Known false positive: "fee" is found inside "coffee"
    assert classifier.is_admission_query("coffee")


def test_catalog_subject_words():
    words = catalog_subject_words(VALID_PROGRAMS)

    assert {"computer", "engineering", "nursing", "optometry", "medicine"} <= set(words)
    assert "bsc" not in words
    assert "llb" not in words
    assert "and" not in words
    assert len(words) == len(set(words))


def test_bare_subject_word_is_admission_intent():
    classifier = QueryClassifier(subject_words=catalog_subject_words(VALID_PROGRAMS))

    assert classifier.is_admission_query("computer")
    assert classifier.is_admission_query("Nursing?")
    assert not classifier.is_admission_query("Tell me a joke")
    # Whole words only
    assert not classifier.is_admission_query("supercomputers")
    # Career intent still wins
    assert not classifier.is_admission_query("What career can computer give me?")


# =============================================================================
# EXTRACTOR
# =============================================================================

def test_every_catalog_name_extracts_to_itself(extractor):
    for name in VALID_PROGRAMS:
        assert extractor.extract_program_name(name) == name


def test_extraction_inside_a_sentence(extractor):
    assert extractor.extract_program_name("What is the cut off for bsc nursing?") == "BSc Nursing"


def test_special_cases(extractor):
    assert extractor.extract_program_name("computer science fees") == "BSc Computer Science"
    assert extractor.extract_program_name("I want to study law") == "LLB"
    assert extractor.extract_program_name("Is there a computer program at KNUST?") == "BSc Computer Science"
    assert extractor.handle_special_cases("lawn tennis") is None


def test_prefix_stripped_match_prefers_longest_name(extractor):
    assert extractor.extract_program_name("veterinary medicine fees") == "Doctor of Veterinary Medicine"
    assert extractor.extract_program_name("medicine cut off") == "MBChB Medicine"


def test_ambiguous_query_does_not_resolve(extractor):
    assert extractor.extract_program_name("computer fees") is None


def test_empty_message_does_not_resolve(extractor):
    assert extractor.extract_program_name("") is None
    assert extractor.extract_program_name("   ") is None
    assert extractor.extract_program_name(None) is None


def test_suggestions_for_ambiguous_query(extractor):
    suggestions = extractor.suggest_program_matches("computer fees")
    assert suggestions[:2] == ["BSc Computer Science", "BSc Computer Engineering"]
    assert len(suggestions) <= 3
    assert len(suggestions) == len(set(suggestions))


def test_fewer_than_two_suggestions_returns_empty(extractor):
    assert extractor.suggest_program_matches("") == []
    assert extractor.suggest_program_matches("zzzz") == []


def test_get_program_accepts_unqualified_names(extractor):
    assert extractor.get_program("computer science").name == "BSc Computer Science"
    assert extractor.get_program("Nursing").name == "BSc Nursing"
    assert extractor.get_program("LLB").name == "LLB"
    assert extractor.get_program("Astrophysics") is None
    assert extractor.get_program(None) is None
