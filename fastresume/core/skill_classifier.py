"""
Hard/soft skill classification of extracted terms.

Hard skills are tools, platforms and technical crafts; soft skills are
everything else that survives the non-skill filters (interpersonal
traits, service skills, generic competencies).
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from fastresume.core.lexicons import (
    CANONICAL_SKILL_PATTERNS,
    EMPLOYMENT_TYPE_RE,
    HARD_PHRASES,
    HARD_SKILLS,
    NON_SKILL_PARTS,
    ORG_FRAGMENT_RE,
    SKILL_LOCATION_RE,
    SKILL_ROLE_RE,
    SOFT_SKILL_HINTS,
    SOFT_SKILL_PHRASES,
)
from fastresume.core.schemas import SkillClassification

logger = logging.getLogger(__name__)

PART_SPLIT_RE = re.compile(r"[\s-]+")
DURING_RE = re.compile(r"^\s*during\b", re.I)
DIGIT_RE = re.compile(r"\d")


def _canonical_label(term: str) -> Optional[Tuple[str, str]]:
    for pattern, label, kind in CANONICAL_SKILL_PATTERNS:
        if pattern.search(term):
            return label, kind
    return None


def _is_hard(parts: List[str]) -> bool:
    return " ".join(parts) in HARD_PHRASES or any(p in HARD_SKILLS for p in parts)


def _is_soft_hint(parts: List[str]) -> bool:
    return " ".join(parts) in SOFT_SKILL_PHRASES or any(p in SOFT_SKILL_HINTS for p in parts)


def _looks_like_non_skill(term: str, parts: List[str]) -> bool:
    """Digits, org names, places, role nouns, employment types and known noise fragments."""
    return (
        bool(DIGIT_RE.search(term))
        or bool(EMPLOYMENT_TYPE_RE.search(term))
        or any(p in NON_SKILL_PARTS for p in parts)
        or bool(ORG_FRAGMENT_RE.search(term))
        or bool(SKILL_LOCATION_RE.search(term))
        or bool(SKILL_ROLE_RE.search(term))
        or bool(DURING_RE.search(term))
    )


def classify_skills(terms: Iterable[str]) -> SkillClassification:
    """
    Split terms into hard and soft skills.

    Order of checks per term: canonical phrase patterns, hard lexicon,
    soft hints, non-skill filters, then the soft bucket by default.
    Labels are deduplicated across both buckets in first-seen order.

    Examples:
        ["google ads", "python"] -> hard ["google ads", "python"]
        ["customerservice", "teamwork"] -> soft ["customer service", "teamwork"]
        ["melbourne", "2023"] -> dropped
    """
    hard: List[str] = []
    soft: List[str] = []
    seen = set()

    def _add(label: str, kind: str) -> None:
        if not label or label in seen:
            return
        seen.add(label)
        (hard if kind == "hard" else soft).append(label)

    for term in terms:
        if not term or not term.strip():
            continue
        parts = [p for p in PART_SPLIT_RE.split(term.strip().lower()) if p]
        label = " ".join(parts)

        mapped = _canonical_label(term)
        if mapped:
            _add(*mapped)
            continue

        if _is_hard(parts):
            _add(label, "hard")
            continue

        if _is_soft_hint(parts):
            _add(label, "soft")
            continue

        if _looks_like_non_skill(term, parts):
            logger.debug(f"classify_skills: dropped non-skill term {term!r}")
            continue

        _add(label, "soft")

    return SkillClassification(hard=hard, soft=soft)
