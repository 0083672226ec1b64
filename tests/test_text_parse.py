"""
End-to-end tests for the analysis endpoints.
"""

from fastapi.testclient import TestClient
from fastresume.core.analyzer import analyze, analyze_cached
from fastresume.main import app

client = TestClient(app)


RESUME = """
Jane Doe
jane.doe@example.com | +61 412 345 678
linkedin.com/in/jane-doe-8a1b2c3

EXPERIENCE
Customer Service Manager | Bright Stores | Jan 2022 - Present
- Handle enquiries and quotes via email and phone
- Trained 5 new staff on POS and cash handling
Sales Assistant | Market Hub | 2019 - 2021
- Processed customer orders and restocked shelves
- Met weekly sales targets

VOLUNTEER EXPERIENCE
Bethel Bread of Life Church Jan 2023 – Present
- Served meals to 50+ families every week

EDUCATION
Bachelor of Commerce (Marketing)
Monash University | 2015 - 2018
""".strip()

JD = """
Responsibilities:
• Handle enquiries and quotes via email and phone
• Process customer orders and maintain stock levels
• Provide friendly customer service at the front desk
""".strip()


def test_health_and_root():
    assert client.get("/health").json() == {"status": "ok"}
    root = client.get("/").json()
    assert root["service"] == "fastresume"
    assert root["status"] == "running"


def test_openapi_lists_analysis_routes():
    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "FastResume analysis API"
    assert "/analyze" in schema["paths"]
    assert {t["name"] for t in schema["tags"]} == {"analysis", "health"}


def test_analyze_text():
    response = client.post("/analyze", json={"resume_text": RESUME, "jd_text": JD})
    assert response.status_code == 200
    data = response.json()

    assert data["contact"]["name"] == "Jane Doe"
    assert data["contact"]["email"] == "jane.doe@example.com"
    assert data["contact"]["phone"] == "+61 412 345 678"

    assert [e["role"] for e in data["work_entries"]] == ["Customer Service Manager", "Sales Assistant", "Volunteer"]
    assert data["education"][0]["school"] == "Monash University"
    assert data["education"][0]["degree"] == "Bachelor"

    assert "Handle enquiries and quotes via email and phone" in data["requirements"]
    match = next(m for m in data["matches"] if m["requirement"].startswith("Handle enquiries"))
    assert abs(match["score"] - 1.0) < 1e-6
    assert 0 <= data["coverage_pct"] <= 100

    coverage = {c["key"]: c for c in data["coverage"]}
    assert coverage["customer_service"]["covered"] is True
    assert len(data["selection"]["primary"]) <= 2
    assert len(data["selection"]["additional"]) <= 1
    assert data["warnings"] == []


def test_analyze_without_jd_warns():
    response = client.post("/analyze", json={"resume_text": RESUME})
    assert response.status_code == 200
    data = response.json()
    assert data["requirements"] == []
    assert data["coverage"] == []
    assert data["coverage_pct"] == 0
    assert any("Job description is empty" in w for w in data["warnings"])


def test_analyze_rejects_short_text():
    response = client.post("/analyze", json={"resume_text": "  hi  "})
    assert response.status_code == 400


def test_analyze_file_txt():
    response = client.post(
        "/analyze/file",
        files={"file": ("resume.txt", RESUME.encode(), "text/plain")},
        data={"jd": JD},
    )
    assert response.status_code == 200
    assert len(response.json()["work_entries"]) == 3


def test_pasted_text_preferred_over_file():
    response = client.post(
        "/analyze/file",
        files={"file": ("other.txt", b"Barista | Cafe Uno | 2020 - 2021", "text/plain")},
        data={"text": RESUME},
    )
    assert response.status_code == 200
    assert len(response.json()["work_entries"]) == 3


def test_analyze_file_rejects_pdf():
    response = client.post(
        "/analyze/file",
        files={"file": ("resume.pdf", b"%PDF-1.4 binary", "application/pdf")},
    )
    assert response.status_code == 415


def test_analyze_file_rejects_unreadable_bytes():
    garbage = b"\x00\x01\x02\xff\xfe" * 200 + b"abc"
    response = client.post(
        "/analyze/file",
        files={"file": ("resume.txt", garbage, "text/plain")},
    )
    assert response.status_code == 422


def test_analyze_file_requires_input():
    response = client.post("/analyze/file", data={"jd": JD})
    assert response.status_code == 400


def test_analyze_file_empty_upload():
    response = client.post(
        "/analyze/file",
        files={"file": ("resume.txt", b"", "text/plain")},
    )
    assert response.status_code == 400


def test_batch_keeps_order():
    second = "Barista | Cafe Uno | 2020 - 2021\n- Prepared coffee for busy morning service"
    response = client.post("/analyze/batch", json={"resumes": [RESUME, second], "jd_text": JD})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert len(data[0]["work_entries"]) == 3
    assert data[1]["work_entries"][0]["role"] == "Barista"


def test_cached_results_are_independent_copies():
    first = analyze_cached(RESUME, JD)
    first.work_entries[0].bullets.clear()
    second = analyze_cached(RESUME, JD)
    assert len(second.work_entries[0].bullets) == 2


def test_analyze_never_raises_on_empty_input():
    result = analyze("", "")
    assert result.work_entries == []
    assert result.contact.name is None
    assert "No work experience entries detected" in result.warnings
