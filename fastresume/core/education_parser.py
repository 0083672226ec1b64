"""
Education section parsing.

Handles:
- Section detection (EDUCATION / 教育背景 vs experience and other headers)
- Degree normalization to a fixed set of levels (EN/ZH)
- Field of study ("in X", "of X", parenthetical)
- Institution and period extraction from a short window of lines
"""

import logging
import re
from typing import List, Literal, Optional, Tuple

from fastresume.core.lexicons import OTHER_SECTION_HEADERS
from fastresume.core.periods import extract_period, strip_period
from fastresume.core.schemas import EducationEntry

logger = logging.getLogger(__name__)


# ===== SECTION DETECTION KEYWORDS =====

EDUCATION_SECTION_HEADERS = {
    "education",
    "academic background",
    "education & training",
    "education and training",
    "academic",
    "qualifications",
    "academic experience",
    "教育",
    "教育背景",
    "教育经历",
    "学历",
}

EXPERIENCE_SECTION_HEADERS = {
    "experience",
    "professional experience",
    "work experience",
    "employment",
    "work history",
    "career",
    "volunteer experience",
    "volunteering",
    "工作经历",
    "工作经验",
    "实习经历",
    "志愿者经历",
}

# ===== DEGREE LEVELS (Strong Signal) =====
# Checked in order; the first level that matches wins.

DEGREE_LEVELS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("PhD", re.compile(r"(?<![A-Za-z])(ph\.?\s?d\.?|doctor\s+of\s+philosophy|doctorate|doctoral)(?![A-Za-z])|博士", re.I)),
    ("MBA", re.compile(r"(?<![A-Za-z])(m\.?b\.?a\.?|master\s+of\s+business\s+administration)(?![A-Za-z])", re.I)),
    ("Master", re.compile(r"(?<![A-Za-z])(master'?s?|m\.s\.|m\.a\.|m\.?sc\.?|postgraduate|graduate\s+degree)(?![A-Za-z])|硕士|研究生", re.I)),
    ("Bachelor", re.compile(r"(?<![A-Za-z])(bachelor'?s?|b\.s\.|b\.a\.|b\.?sc\.?|undergraduate)(?![A-Za-z])|本科|学士", re.I)),
    ("Associate", re.compile(r"(?<![A-Za-z])associate'?s?\s+(degree|of)(?![A-Za-z])|大专|专科", re.I)),
    ("Diploma", re.compile(r"(?<![A-Za-z])(advanced\s+)?diploma(?![A-Za-z])|文凭", re.I)),
    ("Certificate", re.compile(r"(?<![A-Za-z])certificate(?![A-Za-z])|证书", re.I)),
)

# ===== INSTITUTION KEYWORDS =====

INSTITUTION_RE = re.compile(
    r"\b(university|college|institute|school|academy|polytechnic|tafe|conservatory)\b|大学|学院|学校",
    re.I,
)

SEGMENT_SPLIT_RE = re.compile(r"\s*[|｜,，;]\s*|\s+[-–—]\s+|\s+at\s+")
FIELD_IN_RE = re.compile(r"\bin\s+([A-Za-z][A-Za-z\s&/\-]+?)\s*(?:[,(|]|$)", re.I)
FIELD_OF_RE = re.compile(
    r"\b(?:bachelor|master|associate|doctor|diploma|certificate)(?:'s)?(?:\s+degree)?\s+of\s+([A-Za-z][A-Za-z\s&/\-]+?)\s*(?:[,(|]|\bin\b|$)",
    re.I,
)
FIELD_PAREN_RE = re.compile(r"[(（]\s*([^()（）]{2,60}?)\s*[)）]")
BULLET_RE = re.compile(r"^[\s•●▪◦·\-*>+]+")

WINDOW_SIZE = 3
MAX_EDUCATION = 2


def detect_section_type(line: str) -> Optional[Literal["education", "experience", "other"]]:
    """
    Detect if a line is a section header and return the section type.

    Args:
        line: Text to check (typically a header line)

    Returns:
        "education", "experience", "other", or None if not a section header
    """
    normalized = re.sub(r"[:：]+$", "", line.strip())
    normalized = re.sub(r"\s+", " ", normalized).lower()

    if normalized in EDUCATION_SECTION_HEADERS:
        return "education"
    if normalized in EXPERIENCE_SECTION_HEADERS:
        return "experience"
    if normalized in OTHER_SECTION_HEADERS:
        return "other"
    return None


def extract_degree_from_text(text: str) -> Optional[str]:
    """
    Normalized degree level mentioned in text.

    Examples:
        "Bachelor of Science in Computer Science" -> "Bachelor"
        "M.B.A., Finance" -> "MBA"
        "硕士 市场营销" -> "Master"
    """
    for level, pattern in DEGREE_LEVELS:
        if pattern.search(text or ""):
            return level
    return None


def has_degree_keyword(text: str) -> bool:
    """
    Check if text contains degree keywords.
    This is a STRONG signal that a line is education, not experience.
    """
    return extract_degree_from_text(text) is not None


def extract_field_of_study_from_degree_line(text: str) -> Optional[str]:
    """
    Extract field of study from a degree line.

    Examples:
        "Bachelor of Science in Computer Science" -> "Computer Science"
        "Bachelor of Commerce (Marketing)" -> "Marketing"
        "Master of Business Administration" -> "Business Administration"
    """
    text = strip_period(text or "")

    m = FIELD_IN_RE.search(text)
    if m:
        field = m.group(1).strip()
        # Avoid capturing location keywords (City, Country)
        if len(field) > 2 and field.lower() not in {"states", "united states"}:
            return field

    m = FIELD_PAREN_RE.search(text)
    if m and not INSTITUTION_RE.search(m.group(1)):
        return m.group(1).strip()

    m = FIELD_OF_RE.search(text)
    if m:
        field = m.group(1).strip()
        if len(field) > 2:
            return field

    return None


def extract_institution(text: str) -> Optional[str]:
    """The delimiter-separated segment of a line that names an institution."""
    body = strip_period(BULLET_RE.sub("", text or "").strip())
    for segment in SEGMENT_SPLIT_RE.split(body):
        segment = segment.strip(" .,;")
        if segment and INSTITUTION_RE.search(segment) and not has_degree_keyword(segment):
            return segment
    return None


def _parse_window(lines: List[str], start: int) -> Tuple[EducationEntry, List[int]]:
    entry = EducationEntry()
    used: List[int] = []
    for j in range(start, min(start + WINDOW_SIZE, len(lines))):
        line = lines[j]
        if j > start and detect_section_type(line):
            break
        school = extract_institution(line)
        degree = extract_degree_from_text(line)
        # A second school or degree starts the next entry
        if j > start and ((school and entry.school) or (degree and entry.degree)):
            break

        contributed = False
        if school and not entry.school:
            entry.school = school
            contributed = True
        if degree and not entry.degree:
            entry.degree = degree
            entry.field_of_study = extract_field_of_study_from_degree_line(line)
            contributed = True
        if not entry.period:
            period = extract_period(line)
            if period:
                entry.period = period
                contributed = True
        if contributed:
            used.append(j)
    return entry, used


def _field_count(entry: EducationEntry) -> int:
    return sum(1 for v in (entry.school, entry.degree, entry.field_of_study, entry.period) if v)


def extract_education(text: Optional[str]) -> List[EducationEntry]:
    """
    Extract up to two education entries.

    Lines are scanned when they sit under an education header or carry a
    degree keyword. An entry needs two of school/degree/field/period, or
    one under an explicit education header. Deduplicated by
    (school, degree, period).
    """
    if not text or not text.strip():
        return []

    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    results: List[EducationEntry] = []
    seen = set()
    consumed = set()
    in_education = False

    for idx, line in enumerate(lines):
        section = detect_section_type(line)
        if section:
            in_education = section == "education"
            continue
        if idx in consumed:
            continue
        if not (in_education or has_degree_keyword(line)):
            continue

        entry, used = _parse_window(lines, idx)
        if not used:
            continue
        needed = 1 if in_education else 2
        if _field_count(entry) < needed:
            continue

        consumed.update(used)
        key = ((entry.school or "").lower(), entry.degree or "", (entry.period or "").lower())
        if key in seen:
            continue
        seen.add(key)
        results.append(entry)
        logger.debug(f"Education entry from line {idx}: {entry.school!r} / {entry.degree!r} / {entry.period!r}")
        if len(results) >= MAX_EDUCATION:
            break

    return results
