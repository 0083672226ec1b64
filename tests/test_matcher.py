"""
Tests for requirement matching and category coverage scoring.
"""

import pytest
from fastresume.core.experience_parser import parse_work_experience
from fastresume.core.matcher import (
    compute_coverage,
    coverage_percent,
    match_requirements,
    normalized_overlap,
)
from fastresume.core.requirements_extractor import extract_requirements
from fastresume.core.schemas import RequirementMatch, WorkEntry
from fastresume.core.text_normalization import top_terms


def _coverage_by_key(items):
    return {item.key: item for item in items}


# ===== OVERLAP PRIMITIVE =====

def test_overlap_identity_and_disjoint():
    assert normalized_overlap(["a", "b"], ["b", "a"]) == 1.0
    assert normalized_overlap(["a", "b"], ["c", "d"]) == 0.0


def test_overlap_uses_larger_set():
    assert normalized_overlap(["a", "b"], ["a"]) == 0.5


def test_overlap_empty_side():
    assert normalized_overlap([], ["a"]) == 0.0
    assert normalized_overlap(["a"], []) == 0.0


# ===== REQUIREMENT MATCHING =====

def test_identical_bullet_scores_one():
    jd = "Handle enquiries and quotes via email and phone"
    resume = (
        "Customer Service Manager | Bright Stores | Jan 2022 - Present\n"
        "- Handle enquiries and quotes via email and phone\n"
        "- Trained 5 new staff on POS and cash handling"
    )
    entries = parse_work_experience(resume)
    matches = match_requirements(extract_requirements(jd), entries, top_terms(jd))
    assert len(matches) == 1
    assert matches[0].score == pytest.approx(1.0)
    assert matches[0].bullets[0] == "Handle enquiries and quotes via email and phone"


def test_unrelated_requirement_has_no_bullets():
    entries = [WorkEntry(role="Barista", company="Cafe Uno", bullets=["Prepared coffee for busy morning service"])]
    matches = match_requirements(["Maintain accurate inventory records in SAP"], entries)
    assert matches[0].bullets == []
    assert matches[0].score < 0.2


def test_no_entries():
    matches = match_requirements(["Answer phone calls"], [])
    assert matches[0].score == 0.0
    assert matches[0].bullets == []


def test_coverage_percent_rounding():
    matches = [
        RequirementMatch(requirement="a", score=0.5),
        RequirementMatch(requirement="b", score=1.0),
    ]
    assert coverage_percent(matches) == 75
    assert coverage_percent([RequirementMatch(requirement="c", score=0.125)]) == 13
    assert coverage_percent([]) == 0


# ===== CATEGORY COVERAGE =====

def test_role_context_covers_category():
    jd = "Handle enquiries and quotes via email and phone"
    entries = parse_work_experience(
        "Customer Service Manager | Bright Stores | Jan 2022 - Present\n"
        "- Handle enquiries and quotes via email and phone"
    )
    coverage = _coverage_by_key(compute_coverage(entries, jd))
    item = coverage["customer_service"]
    assert item.covered is True
    assert item.evidence.work_index == 0
    assert item.evidence.bullet == "Handle enquiries and quotes via email and phone"
    assert item.evidence.score == pytest.approx(0.5)
    assert item.label_zh == "客户服务"


def test_category_without_support_is_not_covered():
    jd = "Experience with inventory management and stock control is essential."
    entries = [WorkEntry(role="Barista", company="Cafe Uno", bullets=["Prepared coffee for busy morning service"])]
    coverage = _coverage_by_key(compute_coverage(entries, jd))
    assert coverage["inventory"].covered is False
    assert coverage["inventory"].evidence is None


def test_only_categories_in_jd_are_listed():
    jd = "Maintain stock levels and process orders"
    keys = [item.key for item in compute_coverage([], jd)]
    assert "inventory" in keys
    assert "orders" in keys
    assert "marketing" not in keys


def test_adding_keyword_bullet_never_lowers_score():
    jd = "Manage inventory across two stores"
    before = [WorkEntry(role="Cashier", company="Market Hub", bullets=["Answered phone calls from customers"])]
    after = [before[0].model_copy(update={"bullets": before[0].bullets + ["Managed inventory and restocked shelves"]})]

    def best(entries):
        item = _coverage_by_key(compute_coverage(entries, jd))["inventory"]
        return item.evidence.score if item.evidence else 0.0

    assert best(after) >= best(before)
    assert _coverage_by_key(compute_coverage(after, jd))["inventory"].covered is True


def test_context_only_entry_covers_category():
    jd = "Reception duties at the front desk"
    entries = [WorkEntry(role="Reception Officer", company="Harbour Clinic")]
    item = _coverage_by_key(compute_coverage(entries, jd))["reception"]
    assert item.covered is True
    assert item.evidence.bullet is None


def test_empty_jd_gives_no_coverage():
    entries = [WorkEntry(role="Barista", company="Cafe Uno", bullets=["Prepared coffee"])]
    assert compute_coverage(entries, "") == []
