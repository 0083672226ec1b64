"""
Tests for hard/soft skill classification of extracted terms.
"""

from fastresume.core.skill_classifier import classify_skills


def test_hard_skills_from_patterns_and_lexicon():
    result = classify_skills(["google ads", "python"])
    assert result.hard == ["google ads", "python"]
    assert result.soft == []


def test_soft_skills_canonical_labels():
    result = classify_skills(["customerservice", "teamwork"])
    assert result.soft == ["customer service", "teamwork"]
    assert result.hard == []


def test_places_and_numbers_dropped():
    result = classify_skills(["melbourne", "2023"])
    assert result.hard == []
    assert result.soft == []


def test_role_and_org_fragments_dropped():
    result = classify_skills(["crew member", "acme group", "during peak"])
    assert result.hard == []
    assert result.soft == []


def test_unknown_terms_default_to_soft():
    result = classify_skills(["inquiries"])
    assert result.soft == ["inquiries"]


def test_buckets_are_disjoint_and_deduplicated():
    result = classify_skills(["social media", "social media management", "python", "Python"])
    assert result.hard == ["social media", "python"]
    assert not set(result.hard) & set(result.soft)


def test_blank_terms_ignored():
    result = classify_skills(["", "   "])
    assert result.hard == [] and result.soft == []


def test_generic_time_words_are_not_soft_skills():
    result = classify_skills(["part time", "sydney time", "full-time"])
    assert result.soft == []
    assert result.hard == []


def test_soft_phrases_kept_whole():
    result = classify_skills(["attention to detail", "time management", "positive attitude"])
    assert result.soft == ["attention to detail", "time management", "positive attitude"]
