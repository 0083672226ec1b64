"""
Tests for contact extraction: email, phone, profile links and name.
"""

from fastresume.core.contact_parser import (
    extract_contact_info,
    extract_links,
    extract_phone,
    name_from_profile_url,
)


# ===== PHONE =====

def test_phone_found():
    assert extract_phone("Mobile: 0412 345 678") == "0412 345 678"


def test_date_range_is_not_a_phone():
    assert extract_phone("2021 - 2023") is None


def test_short_numbers_ignored():
    assert extract_phone("Served 50+ families") is None


# ===== PROFILE LINKS =====

def test_name_from_linkedin_slug():
    assert name_from_profile_url("https://www.linkedin.com/in/jane-doe-8a1b2c3") == "Jane Doe"
    assert name_from_profile_url("linkedin.com/in/jane-doe-marketing") == "Jane Doe"


def test_single_word_slug_gives_no_name():
    assert name_from_profile_url("github.com/janedoe") is None


def test_links_deduplicated():
    links = extract_links("https://linkedin.com/in/jane-doe and www.linkedin.com/in/jane-doe/")
    assert len(links) == 1


# ===== FULL CONTACT BLOCK =====

def test_all_caps_name_above_email():
    text = "SARAH CHEN\nsarah.chen@email.com\n(555) 123-4567\nSeattle, Washington"
    contact = extract_contact_info(text)
    assert contact.name == "Sarah Chen"
    assert contact.email == "sarah.chen@email.com"
    assert contact.phone == "(555) 123-4567"


def test_headline_is_not_a_name():
    text = "Customer Service Representative\nJane Doe\njane@example.com"
    contact = extract_contact_info(text)
    assert contact.name == "Jane Doe"


def test_section_header_is_not_a_name():
    text = "PROFESSIONAL SUMMARY\nFriendly and reliable retail worker\njohn@example.com"
    contact = extract_contact_info(text)
    assert contact.name is None


def test_name_falls_back_to_profile_slug():
    text = "resume\njohn.smith@mail.com\nlinkedin.com/in/john-smith-resume"
    contact = extract_contact_info(text)
    assert contact.name == "John Smith"
    assert contact.links == ["linkedin.com/in/john-smith-resume"]


def test_empty_text():
    contact = extract_contact_info("")
    assert contact.name is None
    assert contact.email is None
    assert contact.phone is None
    assert contact.links == []
