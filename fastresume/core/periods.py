"""
Date-range detection for résumé lines.

A period is a start date, a range separator and an end date (or an
open end such as "Present"/"至今"). Periods are stored as plain strings
in the form "start - end" and ranked by their end date.
"""

import re
from typing import Optional, Tuple

MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

OPEN_END_WORDS = {"present", "now", "current", "today", "至今", "现在"}

# Sort key for open-ended periods; above any real year*12+month
PRESENT_KEY = 10 ** 6
NO_PERIOD_KEY = -1

_MON = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
_DATE = (
    rf"(?:{_MON}\.?\s*,?\s*\d{{4}}"
    r"|\d{1,2}\s*/\s*\d{4}"
    r"|\d{4}\s*[./]\s*\d{1,2}(?!\d)"
    r"|\d{4}\s*年(?:\s*\d{1,2}\s*月)?"
    r"|(?:19|20)\d{2})"
)
_OPEN_END = r"(?:present|now|current|today|至今|现在)"
_SEP = r"\s*(?:[-–—−~]+|to|至)\s*"

PERIOD_RE = re.compile(
    rf"(?<![A-Za-z0-9])(?P<start>{_DATE}){_SEP}(?P<end>{_DATE}|{_OPEN_END})(?![A-Za-z0-9])",
    re.IGNORECASE,
)

YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")
NUMERIC_MONTH_RE = re.compile(r"(?<!\d)(\d{1,2})\s*/\s*\d{4}|\d{4}\s*[./]\s*(\d{1,2})(?!\d)|\d{4}\s*年\s*(\d{1,2})\s*月")
MONTH_NAME_RE = re.compile(rf"\b({_MON})\b", re.IGNORECASE)
WS_RE = re.compile(r"\s+")


def find_period(text: str) -> Optional["re.Match[str]"]:
    if not text:
        return None
    return PERIOD_RE.search(text)


def format_period(match: "re.Match[str]") -> str:
    """Render a period match as "start - end"."""
    start = WS_RE.sub(" ", match.group("start")).strip()
    end = WS_RE.sub(" ", match.group("end")).strip()
    if end.lower() in OPEN_END_WORDS and end.isascii():
        end = "Present"
    return f"{start} - {end}"


def extract_period(text: str) -> Optional[str]:
    """
    Find the first date range in `text`.

    Examples:
        "Sales Assistant | Market Hub | 2021 - 2023" -> "2021 - 2023"
        "Jan 2023 – present" -> "Jan 2023 - Present"
        "2020年9月 - 至今" -> "2020年9月 - 至今"
    """
    m = find_period(text)
    return format_period(m) if m else None


def strip_period(text: str) -> str:
    """Remove the first date range and any separator left dangling around it."""
    m = find_period(text)
    if not m:
        return (text or "").strip()
    rest = (text[:m.start()] + " " + text[m.end():]).strip()
    rest = re.sub(r"[\s|,;:()\[\]–—-]+$", "", rest)
    rest = re.sub(r"\(\s*\)", "", rest)
    return WS_RE.sub(" ", rest).strip()


def is_period_only(text: str) -> bool:
    """True for lines such as "Jan 2023 - Present" or "(2021 – 2023)"."""
    core = (text or "").strip(" \t|,;:()[]")
    if not core:
        return False
    m = PERIOD_RE.fullmatch(core)
    return m is not None


def split_period(period: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    if not period:
        return None, None
    m = find_period(period)
    if not m:
        return None, None
    return m.group("start").strip(), m.group("end").strip()


def _date_to_months(date_str: str) -> int:
    """
    Convert a date string to total months from year 0.

    Year is required; month defaults to January when missing.
    """
    year_match = YEAR_RE.search(date_str)
    if not year_match:
        return NO_PERIOD_KEY
    year = int(year_match.group(1))

    month = 1
    m = MONTH_NAME_RE.search(date_str)
    if m:
        month = MONTHS.get(m.group(1).lower().rstrip("."), 1)
    else:
        n = NUMERIC_MONTH_RE.search(date_str)
        if n:
            num = next(g for g in n.groups() if g)
            if 1 <= int(num) <= 12:
                month = int(num)
    return year * 12 + month


def period_end_key(period: Optional[str]) -> int:
    """
    Recency sort key for a period string.

    Open-ended periods rank highest, entries without a parseable period
    rank lowest (-1).
    """
    _, end = split_period(period)
    if end is None:
        return NO_PERIOD_KEY
    if end.lower() in OPEN_END_WORDS:
        return PRESENT_KEY
    return _date_to_months(end)
