"""
Contact details from the top of a résumé: email, phone, profile links and name.
"""

import logging
import re
from typing import List, Optional

from fastresume.core.lexicons import (
    NAME_BANNED_TOKENS,
    NAME_HEADER_EN_RE,
    NAME_HEADER_ZH_RE,
    ROLE_NOUN_RE,
    SLUG_DESCRIPTOR_WORDS,
)
from fastresume.core.periods import find_period
from fastresume.core.schemas import ContactInfo
from fastresume.core.text_normalization import extract_email_flexible

logger = logging.getLogger(__name__)


PHONE_CANDIDATE_RE = re.compile(r"\+?\(?\d[\d\s().\-]{6,}\d")
URL_RE = re.compile(r"\bhttps?://[^\s)>\]]+\b", re.IGNORECASE)
LINKEDIN_RE = re.compile(r"\b(?:https?://)?(?:www\.)?linkedin\.com/[^\s)>\]]+\b", re.IGNORECASE)
GITHUB_RE = re.compile(r"\b(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9_.-]+\b", re.IGNORECASE)
LINKEDIN_SLUG_RE = re.compile(r"linkedin\.com/(?:in|pub)/([A-Za-z0-9_%\-]+)", re.IGNORECASE)
GITHUB_SLUG_RE = re.compile(r"github\.com/([A-Za-z0-9_.\-]+)", re.IGNORECASE)

TITLE_WORD_RE = re.compile(r"^[A-Z][a-z][A-Za-z'-]*$")
CAPS_WORD_RE = re.compile(r"^[A-Z][A-Z'-]+$")

MIN_PHONE_DIGITS = 8
MAX_NAME_LEN = 40
NAME_WINDOW = 3
TOP_LINES = 8


def extract_phone(text: str) -> Optional[str]:
    """
    First phone-like run with at least 8 digits that is not a date range.

    "2021 - 2023" has 8 digits but is rejected; "+61 412 345 678" is kept.
    """
    for m in PHONE_CANDIDATE_RE.finditer(text or ""):
        candidate = m.group(0).strip()
        digits = sum(c.isdigit() for c in candidate)
        if digits < MIN_PHONE_DIGITS:
            continue
        if find_period(candidate):
            continue
        return candidate
    return None


def _normalize_name(name: str) -> str:
    """
    Normalize display name.
    If it's all-caps, convert to Title Case.
    """
    t = name.strip()
    if t.isupper():
        return t.title()
    return t


def _looks_like_name(line: str) -> bool:
    if not line or len(line) > MAX_NAME_LEN:
        return False
    if NAME_HEADER_EN_RE.search(line) or NAME_HEADER_ZH_RE.search(line):
        return False
    if "@" in line or re.search(r"\d", line):
        return False
    words = line.split()
    if len(words) < 2 or len(words) > 4:
        return False
    lowered = [re.sub(r"[^A-Za-z'-]", "", w).lower() for w in words]
    if any(w in NAME_BANNED_TOKENS for w in lowered if w):
        return False
    # Headlines such as "Customer Service Representative" end in a role noun
    if ROLE_NOUN_RE.fullmatch(words[-1]):
        return False
    title_case = all(TITLE_WORD_RE.match(w) for w in words)
    all_caps = all(CAPS_WORD_RE.match(w) for w in words)
    return title_case or all_caps


def name_from_profile_url(url: str) -> Optional[str]:
    """
    Derive a display name from a LinkedIn/GitHub profile slug.

    Examples:
        "linkedin.com/in/jane-doe-8a1b2c3" -> "Jane Doe"
        "linkedin.com/in/jane-doe-marketing" -> "Jane Doe"
        "github.com/janedoe" -> None (single word)
    """
    m = LINKEDIN_SLUG_RE.search(url) or GITHUB_SLUG_RE.search(url)
    if not m:
        return None
    parts = [p for p in re.split(r"[-_.]+", m.group(1)) if p]
    parts = [p for p in parts if not re.search(r"\d", p)]
    while parts and parts[-1].lower() in SLUG_DESCRIPTOR_WORDS:
        parts.pop()
    if len(parts) < 2:
        return None
    return " ".join(p.capitalize() for p in parts[:4])


def _link_key(url: str) -> str:
    key = re.sub(r"^https?://", "", url.lower())
    key = re.sub(r"^www\.", "", key)
    return key.rstrip("/")


def extract_links(text: str) -> List[str]:
    """LinkedIn, GitHub and other http(s) links in first-seen order."""
    links: List[str] = []
    seen = set()
    for line in (text or "").splitlines():
        for rx in (LINKEDIN_RE, GITHUB_RE, URL_RE):
            for m in rx.finditer(line):
                url = m.group(0)
                key = _link_key(url)
                if key not in seen:
                    seen.add(key)
                    links.append(url)
    return links


def extract_contact_info(text: Optional[str]) -> ContactInfo:
    """
    Extract name, email, phone and profile links from résumé text.

    Name candidates are the three lines above the first email line, the
    three lines above the first phone line, then the first eight lines.
    When no line qualifies, the name falls back to a profile-URL slug.
    """
    contact = ContactInfo()
    if not text or not text.strip():
        return contact

    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]

    # --- 1) Email / phone ---
    email_idx = None
    for idx, line in enumerate(lines):
        email = extract_email_flexible(line) if "@" in line else None
        if email:
            contact.email = email
            email_idx = idx
            break

    phone_idx = None
    for idx, line in enumerate(lines):
        phone = extract_phone(line)
        if phone:
            contact.phone = phone
            phone_idx = idx
            break

    # --- 2) Links ---
    contact.links = extract_links(text)

    # --- 3) Name ---
    candidate_idx: List[int] = []

    def push_range(start: int, end: int) -> None:
        for i in range(max(0, start), min(end, len(lines))):
            if i not in candidate_idx:
                candidate_idx.append(i)

    if email_idx is not None:
        push_range(email_idx - NAME_WINDOW, email_idx)
    if phone_idx is not None:
        push_range(phone_idx - NAME_WINDOW, phone_idx)
    push_range(0, TOP_LINES)

    for i in candidate_idx:
        if _looks_like_name(lines[i]):
            contact.name = _normalize_name(lines[i])
            break

    if not contact.name:
        for link in contact.links:
            slug_name = name_from_profile_url(link)
            if slug_name:
                logger.debug(f"Name derived from profile link {link!r}")
                contact.name = slug_name
                break

    logger.debug(f"Contact: name={contact.name!r} email={contact.email!r} phone={contact.phone!r}")
    return contact
