"""
Tests for education entry extraction.

Tests section classification, degree normalization, field of study and
the windowed entry assembly.
"""

import pytest
from fastresume.core.education_parser import (
    detect_section_type,
    extract_degree_from_text,
    extract_education,
    extract_field_of_study_from_degree_line,
    extract_institution,
    has_degree_keyword,
)


# ===== SECTION DETECTION TESTS =====

def test_education_section_header_detection():
    """Test detection of education section headers."""
    assert detect_section_type("EDUCATION") == "education"
    assert detect_section_type("  Education:  ") == "education"
    assert detect_section_type("Education & Training") == "education"
    assert detect_section_type("教育背景") == "education"


def test_experience_section_header_detection():
    assert detect_section_type("Work Experience") == "experience"
    assert detect_section_type("VOLUNTEER EXPERIENCE") == "experience"


def test_other_and_non_headers():
    assert detect_section_type("Skills") == "other"
    assert detect_section_type("Jane Doe") is None
    assert detect_section_type("") is None


# ===== DEGREE TESTS =====

@pytest.mark.parametrize("text,level", [
    ("Bachelor of Science in Computer Science", "Bachelor"),
    ("M.B.A., Finance", "MBA"),
    ("Master of Business Administration", "MBA"),
    ("Master of Marketing", "Master"),
    ("PhD in Linguistics", "PhD"),
    ("Diploma of Hospitality", "Diploma"),
    ("Certificate III in Retail", "Certificate"),
    ("硕士 市场营销", "Master"),
    ("本科 会计", "Bachelor"),
])
def test_degree_levels(text, level):
    assert extract_degree_from_text(text) == level


def test_no_degree_keyword():
    assert not has_degree_keyword("Senior Associate at Bright Stores")
    assert not has_degree_keyword("Customer Service Manager")


# ===== FIELD / SCHOOL TESTS =====

def test_field_of_study_variants():
    assert extract_field_of_study_from_degree_line("Bachelor of Science in Computer Science") == "Computer Science"
    assert extract_field_of_study_from_degree_line("Bachelor of Commerce (Marketing)") == "Marketing"
    assert extract_field_of_study_from_degree_line("Master of Business Administration") == "Business Administration"


def test_institution_segment():
    assert extract_institution("Monash University | 2015 - 2018") == "Monash University"
    assert extract_institution("Bachelor of Arts, University of Melbourne, 2016 - 2019") == "University of Melbourne"
    assert extract_institution("Bright Stores") is None


# ===== ENTRY ASSEMBLY =====

def test_entry_under_education_header():
    text = """
EXPERIENCE
Sales Assistant | Market Hub | 2019 - 2021

EDUCATION
Bachelor of Commerce (Marketing)
Monash University | 2015 - 2018
""".strip()
    entries = extract_education(text)
    assert len(entries) == 1
    entry = entries[0]
    assert entry.school == "Monash University"
    assert entry.degree == "Bachelor"
    assert entry.field_of_study == "Marketing"
    assert entry.period == "2015 - 2018"


def test_degree_line_without_header():
    entries = extract_education("Bachelor of Arts, University of Melbourne, 2016 - 2019")
    assert len(entries) == 1
    assert entries[0].school == "University of Melbourne"
    assert entries[0].degree == "Bachelor"
    assert entries[0].field_of_study == "Arts"
    assert entries[0].period == "2016 - 2019"


def test_duplicates_removed_and_capped_at_two():
    text = """
Bachelor of Arts, University of Melbourne, 2016 - 2019
Bachelor of Arts, University of Melbourne, 2016 - 2019
Master of Marketing, Monash University, 2020 - 2021
Diploma of Hospitality, William Angliss Institute, 2014 - 2015
""".strip()
    entries = extract_education(text)
    assert len(entries) == 2
    assert [e.degree for e in entries] == ["Bachelor", "Master"]


def test_empty_text():
    assert extract_education("") == []
