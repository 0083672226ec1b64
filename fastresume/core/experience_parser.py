"""
Work-experience parser.

Walks résumé lines top to bottom with a small state machine:
- section headings switch between experience, volunteer and ignored sections
- header detectors (tried in order) open a new entry
- every other line is handled as a bullet of the open entry

A bullet glyph or list number in front of a line only opens an entry when
the rest is a complete title-case header with a date range.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from fastresume.core.lexicons import (
    ACTION_VERB_RE,
    BAD_COMPANY_RE,
    COMPANY_SUFFIX_RE,
    EMPLOYMENT_TYPE_RE,
    EXPERIENCE_SECTION_RE,
    LOCATION_RE,
    MONTHS_RE,
    NON_TITLE_PREPOSITION_RE,
    OTHER_SECTION_HEADERS,
    PLATFORM_BRAND_RE,
    ROLE_NOUN_RE,
    ROLE_NOUN_ZH_RE,
    SECTION_WORD_RE,
    VOLUNTEER_ORG_RE,
    VOLUNTEER_SECTION_RE,
    VOLUNTEER_SIGNAL_RE,
)
from fastresume.core.periods import (
    extract_period,
    find_period,
    format_period,
    is_period_only,
    strip_period,
)
from fastresume.core.schemas import WorkEntry
from fastresume.core.text_normalization import split_camel

logger = logging.getLogger(__name__)


BULLET_RE = re.compile(r"^(?:[\s•●▪◦·○■□➢➤►✓✔\-–—*>+]+|\(?\d{1,2}[.)]\s+)")
HEADER_DELIM_RE = re.compile(r"\s*[|｜@]\s*|\s+at\s+|\s+[-–—]\s+")
SEGMENT_SPLIT_RE = re.compile(HEADER_DELIM_RE.pattern + r"|\s*[,，]\s*")
COLUMN_SPLIT_RE = re.compile(r"\s{2,}|\t+")
WS_RE = re.compile(r"\s+")
TRAILING_SEP_RE = re.compile(r"[\s/@|｜,\-–—]+$")

TITLE_CASE_RE = re.compile(r"^[A-Z][A-Za-z&/\-]+(?:\s+[A-Z][A-Za-z&/\-]+){0,6}$")
COMPANY_SHAPE_RE = re.compile(r"^[A-Z0-9][A-Za-z0-9 &'’.,\-()]+$")
CJK_START_RE = re.compile(r"^[一-鿿]")
HAS_LETTER_RE = re.compile(r"[A-Za-z一-鿿]")
PROPER_TOKEN_RE = re.compile(r"^[A-Z][A-Za-z0-9'’.&\-]*$")
# Every word capitalized, allowing a few joiners ("Bread of Life", "Johnson & Johnson")
NEXT_LINE_COMPANY_RE = re.compile(r"^[A-Z0-9][\w&'’.\-]*(?:\s+(?:[A-Z0-9][\w&'’.\-]*|&|of|and|the|de))*$")
DATE_CELL_RE = re.compile(r"\b(?:19|20)\d{2}\b|\b(?:present|current|now)\b", re.I)
LOCATION_REST_RE = re.compile(r"[\s\d,;|/()\-–—.]+")
EMPLOYMENT_REST_RE = re.compile(r"[\s,;|/()\-–—.]+")
NOISE_PREFIX_RE = re.compile(r"^(?:" + SECTION_WORD_RE.pattern + r")\s*[:：]", re.I)

MAX_ROLE_WORDS = 8
MAX_COMPANY_WORDS = 3
RECLAIM_WINDOW = 3
MIN_BULLET_LEN = 8
MIN_CJK_BULLET_LEN = 4


@dataclass
class HeaderMatch:
    role: Optional[str]
    company: Optional[str] = None
    period: Optional[str] = None
    consumed: int = 0  # following lines absorbed into this header
    tier: str = ""


@dataclass
class ParseContext:
    lines: Sequence[str]
    index: int
    in_volunteer_section: bool = False

    @property
    def next_line(self) -> str:
        nxt = self.index + 1
        return self.lines[nxt].strip() if nxt < len(self.lines) else ""


# ============================================================================
# Field validators
# ============================================================================

def _has_role_noun(text: str) -> bool:
    return bool(ROLE_NOUN_RE.search(text) or ROLE_NOUN_ZH_RE.search(text))


def _is_location_only(text: str) -> bool:
    """True for "Melbourne, VIC" or "Sydney NSW 2000", False for "Bright Stores Sydney"."""
    if not text or not LOCATION_RE.search(text):
        return False
    rest = LOCATION_RE.sub("", text)
    return not LOCATION_REST_RE.sub("", rest)


def _is_employment_type(text: str) -> bool:
    if not text or not EMPLOYMENT_TYPE_RE.search(text):
        return False
    rest = EMPLOYMENT_TYPE_RE.sub("", text)
    return not EMPLOYMENT_REST_RE.sub("", rest)


def _is_valid_role(role: Optional[str]) -> bool:
    """
    Role titles: Title-Case or carrying a role noun, short, no colon,
    no leading lowercase, no section words and no "for/with/to/..." phrasing.
    A leading action verb marks a sentence, not a title.
    """
    if not role:
        return False
    role = role.strip()
    if len(role) < 2 or ":" in role or "：" in role:
        return False
    if role[0].islower() or role[0].isdigit():
        return False
    if len(role.split()) > MAX_ROLE_WORDS:
        return False
    has_noun = _has_role_noun(role)
    if ACTION_VERB_RE.match(role) and not ROLE_NOUN_RE.match(role):
        return False
    if ACTION_VERB_RE.search(role) and not has_noun:
        return False
    if NON_TITLE_PREPOSITION_RE.search(role) or SECTION_WORD_RE.search(role):
        return False
    if _is_location_only(role) or MONTHS_RE.fullmatch(role) or "@" in role:
        return False
    return bool(TITLE_CASE_RE.match(role)) or has_noun


def _is_valid_company(company: Optional[str]) -> bool:
    if not company:
        return False
    c = company.strip()
    if len(c) < 2 or len(c) > 60 or not HAS_LETTER_RE.search(c):
        return False
    if not (COMPANY_SHAPE_RE.match(c) or CJK_START_RE.match(c) or COMPANY_SUFFIX_RE.search(c)):
        return False
    if "@" in c or "http" in c.lower() or find_period(c):
        return False
    if MONTHS_RE.search(c) or _is_location_only(c) or _is_employment_type(c):
        return False
    if PLATFORM_BRAND_RE.search(c) or BAD_COMPANY_RE.search(c):
        return False
    return True


def _strip_location_suffix(text: str) -> str:
    """ "Bright Stores, Melbourne VIC" -> "Bright Stores" """
    parts = re.split(r"\s*[,，]\s*|\s+[-–—]\s+", text)
    while len(parts) > 1 and _is_location_only(parts[-1]):
        parts.pop()
    return ", ".join(p for p in parts if p) if len(parts) > 1 else parts[0]


def _clean_company(raw: Optional[str]) -> str:
    if not raw:
        return ""
    c = WS_RE.sub(" ", raw).strip(" .,;:|｜")
    c = _strip_location_suffix(c)
    return c.strip(" .,;:")


# ============================================================================
# Role/company splitting
# ============================================================================

def derive_role_part(role_text: str, company: Optional[str] = None) -> str:
    """
    Strip a trailing company name (and the separator before it) off a role string.

    Examples:
        ("Sales AssistantMarket Hub", "Market Hub") -> "Sales Assistant"
        ("Barista @ Cafe Uno", "Cafe Uno") -> "Barista"
    """
    role = WS_RE.sub(" ", split_camel(role_text or "")).strip()
    if company and company.strip():
        esc = re.escape(WS_RE.sub(" ", split_camel(company.strip())))
        role = re.sub(rf"(?:\s*(?:@|\||｜|-|–|—|/|\bat\b)?)\s*{esc}[.,;]?$", "", role).strip()
    return TRAILING_SEP_RE.sub("", role).strip()


def trailing_company(text: str) -> Optional[str]:
    """
    Collect up to three trailing proper-case words as a company name,
    stopping at the first role noun, month or lowercase word.

    Examples:
        "Crew MemberPopSushi" -> "Pop Sushi"
        "Sales Assistant Market Hub" -> "Market Hub"
        "Customer Service Representative" -> None
    """
    norm = WS_RE.sub(" ", split_camel(text or "")).strip()
    tokens = norm.split(" ") if norm else []
    picked: List[str] = []
    for tok in reversed(tokens):
        if len(picked) >= MAX_COMPANY_WORDS:
            break
        word = tok.rstrip(".,;")
        if word != "&" and not PROPER_TOKEN_RE.match(word):
            break
        if ROLE_NOUN_RE.search(word) or MONTHS_RE.fullmatch(word):
            break
        picked.insert(0, word)

    while picked and picked[0] == "&":
        picked.pop(0)
    if not picked or len(picked) == len(tokens):
        return None
    company = " ".join(picked)
    if not _is_valid_company(company) or _has_role_noun(company):
        return None
    return company


def _with_employment_type(role: str, types: List[str]) -> str:
    extra = [t for t in types if t.lower() not in role.lower()]
    return f"{role} ({', '.join(extra)})" if extra else role


# ============================================================================
# Header detectors, tried in order
# ============================================================================

def _detect_delimited_header(line: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """role (@|at|-|'|') company (period?)"""
    m = find_period(line)
    text = strip_period(line) if m else line
    parts = [p.strip(" .,;") for p in HEADER_DELIM_RE.split(text)]
    parts = [p for p in parts if p]
    if len(parts) < 2:
        return None
    period = format_period(m) if m else None

    role = derive_role_part(parts[0])
    # Without dates, "Jane Doe | Retail Professional" must not read as a header
    if not m and not _has_role_noun(role):
        return None
    if not _is_valid_role(role):
        # Company-first layout, only trusted when a period anchors the line
        swapped_company = _clean_company(parts[0])
        if m and _is_valid_role(parts[1]) and _is_valid_company(swapped_company):
            return HeaderMatch(role=derive_role_part(parts[1]), company=swapped_company, period=period, tier="delimiter")
        return None

    employment: List[str] = []
    for raw in parts[1:]:
        company = _clean_company(raw)
        if _is_employment_type(company):
            employment.append(company)
            continue
        if _is_valid_company(company):
            return HeaderMatch(
                role=_with_employment_type(role, employment), company=company, period=period, tier="delimiter"
            )
        if _is_location_only(company):
            continue
        break

    # Company slot is unusable: trailing proper run of the whole text, then of the role itself
    candidate = trailing_company(text)
    if candidate and candidate not in role:
        return HeaderMatch(
            role=_with_employment_type(role, employment), company=candidate, period=period, tier="delimiter-tail"
        )
    from_role = trailing_company(parts[0])
    if from_role:
        role_part = derive_role_part(parts[0], from_role)
        if _is_valid_role(role_part):
            return HeaderMatch(
                role=_with_employment_type(role_part, employment), company=from_role, period=period, tier="delimiter-role"
            )
    if employment:
        return HeaderMatch(role=_with_employment_type(role, employment), period=period, tier="delimiter-employment")
    return None


def _header_segments(text: str) -> List[str]:
    """Split a header remainder on delimiters and commas, dropping location-only segments."""
    segments = [s.strip(" .,;") for s in SEGMENT_SPLIT_RE.split(text)]
    segments = [s for s in segments if s]
    kept = [s for s in segments if not _is_location_only(s)]
    return kept or segments


def _looks_like_org_name(text: str) -> bool:
    """ "Salvation Army", "红十字会": every word capitalized, no verbs, no role nouns."""
    if not _is_valid_company(text) or _has_role_noun(text) or ACTION_VERB_RE.search(text):
        return False
    return bool(NEXT_LINE_COMPANY_RE.match(text) or CJK_START_RE.match(text))


def _detect_period_anchored_header(line: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """Line carries a date range: split it off and read role/company from the rest."""
    m = find_period(line)
    if not m:
        return None
    before = strip_period(line)
    if not before:
        return None
    period = format_period(m)
    segments = _header_segments(before)
    if not segments:
        return None

    # "Sales Assistant, Market Hub, Melbourne": the last segment is the company
    company = None
    role_seed = " ".join(segments)
    if len(segments) >= 2:
        seg_company = _clean_company(segments[-1])
        if _is_valid_company(seg_company):
            company = seg_company
            role_seed = " ".join(segments[:-1])
    if not company:
        company = trailing_company(role_seed)
    if company:
        role = derive_role_part(role_seed, company)
        if _is_valid_role(role):
            return HeaderMatch(role=role, company=company, period=period, tier="period")

    # Role-only header: "Marketing Intern Jan 2023 - Mar 2023"
    role = derive_role_part(segments[0])
    if _is_valid_role(role) and _has_role_noun(role):
        return HeaderMatch(role=role, period=period, tier="period-role")

    # Organisation-only header: "Salvation Army Jan 2021 - Present"
    org = _clean_company(" ".join(segments))
    if _looks_like_org_name(org):
        return HeaderMatch(role=None, company=org, period=period, tier="period-company")
    return None


def _detect_no_period_header(line: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """ "Sales Assistant Market Hub": role followed by a proper-case company, no dates."""
    if find_period(line):
        return None
    norm = WS_RE.sub(" ", split_camel(line)).strip()
    company = trailing_company(norm)
    if not company:
        return None
    role = derive_role_part(norm, company)
    if not (_is_valid_role(role) and _has_role_noun(role)):
        return None
    return HeaderMatch(role=role, company=company, tier="no-period")


def _looks_like_date_cell(text: str) -> bool:
    return bool(MONTHS_RE.search(text) or DATE_CELL_RE.search(text))


def _detect_column_header(line: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """Table layouts: role, company [, start, end] separated by 2+ spaces or tabs."""
    parts = [p.strip() for p in COLUMN_SPLIT_RE.split(split_camel(line)) if p.strip()]
    if len(parts) < 2:
        return None
    company = _clean_company(parts[1])
    role = derive_role_part(parts[0], company)
    if not (_is_valid_role(role) and _is_valid_company(company)):
        return None
    period = None
    if len(parts) >= 4 and _looks_like_date_cell(parts[2]) and _looks_like_date_cell(parts[3]):
        period = f"{parts[2]} - {parts[3]}"
    if not period:
        period = extract_period(line)
    return HeaderMatch(role=role, company=company, period=period, tier="column")


HEADER_DETECTORS: Sequence[Callable[[str, ParseContext], Optional[HeaderMatch]]] = (
    _detect_delimited_header,
    _detect_period_anchored_header,
    _detect_no_period_header,
    _detect_column_header,
)


def detect_header(line: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """Run the header detectors in order; bullet lines never qualify."""
    if not line or BULLET_RE.match(line) or is_period_only(line):
        return None
    for detector in HEADER_DETECTORS:
        match = detector(line, ctx)
        if match:
            logger.debug(f"Header ({match.tier}) at line {ctx.index}: {match.role!r} / {match.company!r} / {match.period!r}")
            return match
    return None


def _detect_next_line_header(body: str, ctx: ParseContext, strict: bool = False) -> Optional[HeaderMatch]:
    """
    Unlabeled header: a role-like line whose next line is a period or a company.

        Customer Service Representative
        Bright Stores

    With `strict` (bullet lines) the role must also be title-shaped.
    """
    if find_period(body):
        return None
    role = derive_role_part(body)
    if not (_is_valid_role(role) and _has_role_noun(role)):
        return None
    if strict and not _is_title_shaped(role):
        return None

    nxt = ctx.next_line
    if not nxt or BULLET_RE.match(nxt) or _section_heading(nxt):
        return None
    if is_period_only(nxt):
        return HeaderMatch(role=role, period=extract_period(nxt), consumed=1, tier="next-line-period")
    company = _clean_company(nxt)
    if NEXT_LINE_COMPANY_RE.match(company) and _is_valid_company(company) and not _has_role_noun(company):
        return HeaderMatch(role=role, company=company, consumed=1, tier="next-line-company")
    return None


def _is_title_shaped(role: Optional[str]) -> bool:
    return bool(role and (TITLE_CASE_RE.match(role) or CJK_START_RE.match(role)))


def _detect_bulleted_header(body: str, ctx: ParseContext) -> Optional[HeaderMatch]:
    """ "• Sales Assistant | Market Hub | 2019 - 2021": a dated header behind a bullet glyph."""
    for detector in (_detect_delimited_header, _detect_period_anchored_header):
        match = detector(body, ctx)
        if match and (match.role is None or _is_title_shaped(match.role)):
            logger.debug(f"Bulleted header ({match.tier}) at line {ctx.index}: {match.role!r} / {match.company!r}")
            return match
    return None


# ============================================================================
# Section headings
# ============================================================================

def _section_heading(line: str) -> Optional[str]:
    """Return "volunteer", "experience", "other" or None."""
    if not line or BULLET_RE.match(line):
        return None
    raw = re.sub(r"[:：]+$", "", line).strip()
    key = WS_RE.sub(" ", raw).lower()
    if not key or len(key) > 40:
        return None
    if VOLUNTEER_SECTION_RE.match(key):
        # A bare "Volunteer" line is a role unless set as a heading
        if key == "volunteer" and not raw.isupper():
            return None
        return "volunteer"
    if EXPERIENCE_SECTION_RE.match(key):
        return "experience"
    if key in OTHER_SECTION_HEADERS:
        return "other"
    return None


# ============================================================================
# Bullet handling
# ============================================================================

def _strip_bullet(line: str) -> str:
    return BULLET_RE.sub("", line).strip().rstrip(" .;:,").strip()


def _is_noise_line(body: str) -> bool:
    """ "Skills: ..." style lines and bare platform lists."""
    if NOISE_PREFIX_RE.match(body) or SECTION_WORD_RE.fullmatch(body):
        return True
    platforms = PLATFORM_BRAND_RE.findall(body)
    return len(platforms) >= 2 and not ACTION_VERB_RE.search(body)


def _looks_like_volunteer_org(text: str) -> bool:
    return (
        bool(text)
        and bool(VOLUNTEER_ORG_RE.search(text))
        and not ACTION_VERB_RE.search(text)
        and not text[0].islower()
        and len(text.split()) <= MAX_ROLE_WORDS
    )


def _reclaim_volunteer(
    entries: List[WorkEntry], current: Optional[WorkEntry], org: str, period: str
) -> WorkEntry:
    """
    Open (or reuse) a Volunteer entry for `org`, moving the trailing
    volunteer-signal bullets of the open entry into it.
    """
    moved: List[str] = []
    if current is not None and current.bullets:
        start = max(0, len(current.bullets) - RECLAIM_WINDOW)
        kept = current.bullets[:start]
        for bullet in current.bullets[start:]:
            (moved if VOLUNTEER_SIGNAL_RE.search(bullet) else kept).append(bullet)
        current.bullets = kept

    key_company = org.rstrip(".,; ").lower()
    for existing in entries:
        if (
            (existing.role or "").lower() == "volunteer"
            and (existing.company or "").rstrip(".,; ").lower() == key_company
            and (existing.period or "").lower() == period.lower()
        ):
            seen = {b.lower() for b in existing.bullets}
            for bullet in moved:
                if bullet.lower() not in seen:
                    existing.bullets.append(bullet)
                    seen.add(bullet.lower())
            existing.is_volunteer = True
            logger.debug(f"Volunteer reclaim merged into {org!r}: {len(moved)} bullets")
            return existing

    entry = WorkEntry(role="Volunteer", company=org, period=period, bullets=moved, is_volunteer=True)
    entries.append(entry)
    logger.debug(f"Volunteer reclaim opened {org!r} with {len(moved)} bullets")
    return entry


def _open_entry(entries: List[WorkEntry], match: HeaderMatch, in_volunteer_section: bool) -> WorkEntry:
    role = match.role or None
    company = match.company.rstrip(".,;") if match.company else None
    is_volunteer = (
        in_volunteer_section
        or bool(role and re.search(r"volunteer", role, re.I))
        or bool(company and VOLUNTEER_ORG_RE.search(company))
    )
    if role is None and is_volunteer:
        role = "Volunteer"
    entry = WorkEntry(role=role, company=company, period=match.period, is_volunteer=is_volunteer)
    entries.append(entry)
    return entry


# ============================================================================
# Public API
# ============================================================================

def parse_work_experience(text: Optional[str]) -> List[WorkEntry]:
    """
    Parse free-form résumé text into work/volunteer entries.

    Never raises: unrecognized lines are skipped and an empty list is
    returned for empty input. Entries sharing role|company|period are
    merged (see merge_entries).
    """
    if not text or not text.strip():
        return []

    lines = [ln.strip() for ln in text.splitlines()]
    entries: List[WorkEntry] = []
    current: Optional[WorkEntry] = None
    in_volunteer_section = False
    section: Optional[str] = None
    needs_role = False

    i = 0
    while i < len(lines):
        line = lines[i]
        idx = i
        i += 1
        if not line:
            continue

        heading = _section_heading(line)
        if heading:
            section = heading
            in_volunteer_section = heading == "volunteer"
            current = None
            needs_role = False
            logger.debug(f"Section '{heading}' at line {idx}")
            continue
        if section == "other":
            continue

        ctx = ParseContext(lines=lines, index=idx, in_volunteer_section=in_volunteer_section)
        is_bullet = bool(BULLET_RE.match(line))

        match = detect_header(line, ctx)
        if match:
            if (
                match.tier == "period-company"
                and not in_volunteer_section
                and _looks_like_volunteer_org(match.company)
            ):
                current = _reclaim_volunteer(entries, current, match.company, match.period)
                needs_role = False
            else:
                current = _open_entry(entries, match, in_volunteer_section)
                needs_role = match.role is None
            i += match.consumed
            continue

        body = _strip_bullet(line)
        if not body or _is_location_only(body):
            continue
        if is_period_only(body):
            if current is not None and not current.period:
                current.period = extract_period(body)
            continue
        min_len = MIN_CJK_BULLET_LEN if CJK_START_RE.match(body) else MIN_BULLET_LEN
        if _is_noise_line(body) or len(body) <= min_len:
            continue

        m = find_period(body)
        if m:
            org = strip_period(body)
            if _looks_like_volunteer_org(org):
                current = _reclaim_volunteer(entries, current, org, format_period(m))
                needs_role = False
                continue

        if is_bullet and m:
            match = _detect_bulleted_header(body, ctx)
        else:
            match = _detect_next_line_header(body, ctx, strict=is_bullet)
        if match:
            current = _open_entry(entries, match, in_volunteer_section)
            needs_role = match.role is None
            i += match.consumed
            continue

        if current is None:
            continue
        # "Bright Stores Jan 2020 - Dec 2021" followed by "Sales Assistant"
        if needs_role and not is_bullet and not m and not current.bullets and _is_valid_role(body) and _has_role_noun(body):
            current.role = body
            needs_role = False
            continue
        if in_volunteer_section or VOLUNTEER_SIGNAL_RE.search(body) or VOLUNTEER_ORG_RE.search(body):
            current.is_volunteer = True
        current.bullets.append(body)

    merged = merge_entries(entries)
    logger.debug(f"parse_work_experience: {len(entries)} raw entries -> {len(merged)} merged")
    return merged


def _merge_key_part(value: Optional[str]) -> str:
    return re.sub(r"[.,;\s]+$", "", value or "").strip().lower()


def entry_key(entry: WorkEntry) -> str:
    return "|".join(_merge_key_part(v) for v in (entry.role, entry.company, entry.period))


def merge_entries(entries: List[WorkEntry]) -> List[WorkEntry]:
    """
    Merge entries sharing the normalized role|company|period key.

    Bullets are unioned case-insensitively in first-seen order, volunteer
    flags are OR'd and missing fields are backfilled. Idempotent; the
    input entries are left untouched.
    """
    by_key = {}
    merged: List[WorkEntry] = []
    for entry in entries:
        key = entry_key(entry)
        target = by_key.get(key)
        if target is None:
            target = entry.model_copy(update={"bullets": []}, deep=True)
            by_key[key] = target
            merged.append(target)
        seen = {b.lower() for b in target.bullets}
        for bullet in entry.bullets:
            if bullet.lower() not in seen:
                target.bullets.append(bullet)
                seen.add(bullet.lower())
        target.is_volunteer = target.is_volunteer or entry.is_volunteer or _merge_key_part(entry.role) == "volunteer"
        if not target.company and entry.company:
            target.company = entry.company
        if not target.period and entry.period:
            target.period = entry.period
    return merged
