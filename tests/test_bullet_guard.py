"""
Test suite for lines that start with a bullet glyph or list number.
A glyph in front of a full "Role | Company | Dates" header must still open
a new entry, while ordinary achievement bullets stay with the open entry.
"""

from fastapi.testclient import TestClient
from fastresume.main import app

client = TestClient(app)


def test_header_behind_glyph_opens_entry():
    """
    Regression test: a bullet carrying a full role/company/period starts
    the next entry instead of being stored as a bullet.
    """

    resume_text = """
SARAH CHEN
sarah.chen@email.com
(555) 123-4567

EXPERIENCE
CSM | Bright Stores | Jan 2022 - Present
- Handle enquiries and quotes via email and phone
- Sales Assistant | Market Hub | 2019 - 2021
- Processed customer orders and restocked shelves
""".strip()

    response = client.post(
        "/analyze/file",
        files={"file": ("resume.txt", resume_text.encode(), "text/plain")}
    )

    assert response.status_code == 200
    entries = response.json()["work_entries"]
    assert [(e["role"], e["company"], e["period"]) for e in entries] == [
        ("CSM", "Bright Stores", "Jan 2022 - Present"),
        ("Sales Assistant", "Market Hub", "2019 - 2021"),
    ]
    assert entries[0]["bullets"] == ["Handle enquiries and quotes via email and phone"]
    assert entries[1]["bullets"] == ["Processed customer orders and restocked shelves"]

    all_bullets = [b for e in entries for b in e["bullets"]]
    assert not any("|" in b for b in all_bullets), "Header line was kept as a bullet"


def test_numbered_header_opens_entry():
    """Numbered list items ("1.", "2)") are read the same way."""

    resume_text = """
Barista | Cafe Uno | 2020 - 2022
1. Lead Barista | Cafe Duo | 2019 - 2020
2) Trained new starters on espresso machines
""".strip()

    response = client.post("/analyze", json={"resume_text": resume_text})

    assert response.status_code == 200
    entries = response.json()["work_entries"]
    assert [e["role"] for e in entries] == ["Barista", "Lead Barista"]
    assert entries[0]["bullets"] == []
    assert entries[1]["company"] == "Cafe Duo"
    assert entries[1]["bullets"] == ["Trained new starters on espresso machines"]


def test_achievement_bullets_stay_bullets():
    """Sentences with dates or role words never start entries."""

    resume_text = """
Sales Assistant | Market Hub | 2021 - 2023
- Increased weekend sales by 20% 2022 - 2023
- Met weekly sales targets across two stores
- Customer service award for outstanding feedback
""".strip()

    response = client.post("/analyze", json={"resume_text": resume_text})

    assert response.status_code == 200
    entries = response.json()["work_entries"]
    assert len(entries) == 1
    assert len(entries[0]["bullets"]) == 3
