"""
Requirement extraction from job-description text.

Bullet glyphs and semicolons are turned into line breaks, then each line is
kept when it reads like a duty (action verb, number or duties heading) and
is not culture copy.
"""

import logging
import re
from typing import List, Optional

from fastresume.core.lexicons import JD_ACTION_VERB_RE, JD_CULTURE_PATTERNS, JD_HEADER_HINT_RE

logger = logging.getLogger(__name__)


BULLET_GLYPH_RE = re.compile(r"[•·▪◦●—–]+")
SEMICOLON_RE = re.compile(r"[；;]+")
BULLET_PREFIX_RE = re.compile(r"^\s*(?:[-*•·▪◦●—–]|\d+[.)])\s*")
SENTENCE_SPLIT_RE = re.compile(r"[。！？；.!?]+")
DIGIT_RE = re.compile(r"\d")

MAX_REQUIREMENTS = 20
MIN_LINE_LEN = 10
MIN_SENTENCE_LEN = 20


def _is_culture(text: str) -> bool:
    return any(p.search(text) for p in JD_CULTURE_PATTERNS)


def _is_requirement_line(text: str) -> bool:
    return bool(JD_ACTION_VERB_RE.search(text) or DIGIT_RE.search(text) or JD_HEADER_HINT_RE.search(text))


def extract_requirements(jd_text: Optional[str]) -> List[str]:
    """
    Pull requirement lines out of a job description.

    Bullet glyphs become line breaks; a line qualifies when it is at least
    10 chars, mentions an action verb, a digit or a duties/requirements
    hint, and is not culture copy. Prose JDs with no qualifying line fall
    back to sentences of 20+ chars. At most 20, in document order.
    """
    if not jd_text or not jd_text.strip():
        return []

    normalized = BULLET_GLYPH_RE.sub("\n", jd_text)
    normalized = SEMICOLON_RE.sub("；", normalized)

    requirements: List[str] = []
    for raw in normalized.splitlines():
        line = BULLET_PREFIX_RE.sub("", raw.strip()).strip()
        if len(line) < MIN_LINE_LEN or _is_culture(line):
            continue
        if _is_requirement_line(line):
            requirements.append(line)
        if len(requirements) >= MAX_REQUIREMENTS:
            break

    if requirements:
        return requirements

    logger.warning("No requirement lines found in JD, falling back to sentence split")
    for part in SENTENCE_SPLIT_RE.split(normalized):
        sentence = re.sub(r"\s+", " ", part).strip()
        if len(sentence) < MIN_SENTENCE_LEN or _is_culture(sentence):
            continue
        requirements.append(sentence)
        if len(requirements) >= MAX_REQUIREMENTS:
            break
    return requirements
