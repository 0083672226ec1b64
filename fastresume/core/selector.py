"""
Primary and additional experience selection.

Entries are ranked by their best coverage evidence, falling back to JD
overlap, and the best-matching bullet is moved to the front of each entry.
"""

import logging
from typing import Dict, List, Optional, Sequence

from fastresume.core.matcher import normalized_overlap
from fastresume.core.periods import period_end_key
from fastresume.core.schemas import CoverageItem, SelectionOptions, SelectionResult, WorkEntry
from fastresume.core.text_normalization import ngrams, stem_tokens

logger = logging.getLogger(__name__)


def _dedupe(bullets: Sequence[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for b in bullets:
        key = b.strip().lower()
        if key and key not in seen:
            seen.add(key)
            out.append(b)
    return out


def _jd_overlap(text: str, jd_stems: List[str], jd_bigrams: List[str], token_w: float, bigram_w: float) -> float:
    stems = stem_tokens(text)
    return normalized_overlap(jd_stems, stems) * token_w + normalized_overlap(jd_bigrams, ngrams(stems, 2)) * bigram_w


def _overlap_scores(entries: Sequence[WorkEntry], jd_text: str) -> Dict[int, float]:
    """Per-entry score from whole-JD overlap with bullets and role/company."""
    jd_stems = stem_tokens(jd_text)
    jd_bigrams = ngrams(jd_stems, 2)
    scores: Dict[int, float] = {}
    if not jd_stems:
        return {i: 0.0 for i in range(len(entries))}
    for i, entry in enumerate(entries):
        best = 0.0
        for bullet in entry.bullets:
            best = max(best, _jd_overlap(bullet, jd_stems, jd_bigrams, 0.6, 0.4))
        ctx = " ".join(p for p in (entry.role, entry.company) if p)
        if ctx:
            best = max(best, _jd_overlap(ctx, jd_stems, jd_bigrams, 0.5, 0.5))
        scores[i] = best
    return scores


def _best_bullet_by_overlap(entry: WorkEntry, jd_text: str) -> Optional[str]:
    jd_stems = stem_tokens(jd_text)
    if not jd_stems or not entry.bullets:
        return None
    jd_bigrams = ngrams(jd_stems, 2)
    best, best_score = None, 0.0
    for bullet in entry.bullets:
        score = _jd_overlap(bullet, jd_stems, jd_bigrams, 0.6, 0.4)
        if score > best_score:
            best, best_score = bullet, score
    return best


def _present(indices: Sequence[int], entries: Sequence[WorkEntry], bullets_by_idx: Dict[int, List[str]]) -> List[WorkEntry]:
    # Most recent end date first; ties keep original order
    ordered = sorted(indices, key=lambda i: (-period_end_key(entries[i].period), i))
    return [entries[i].model_copy(update={"bullets": bullets_by_idx[i]}, deep=True) for i in ordered]


def select_experiences(
    entries: Sequence[WorkEntry],
    coverage: Sequence[CoverageItem],
    jd_text: Optional[str] = "",
    options: Optional[SelectionOptions] = None,
) -> SelectionResult:
    """
    Partition entries into primary and additional experience.

    Entries are ranked by their best coverage evidence. When no entry has
    evidence, whole-JD overlap is used instead; when that is zero too,
    non-volunteer entries keep their original order. Primary entries get
    their best-matching bullet moved to the front; additional entries are
    picked non-volunteer first, then by bullet count, with bullets capped.
    Inputs are never mutated.
    """
    opts = options or SelectionOptions()
    jd_text = jd_text or ""
    if not entries:
        return SelectionResult()

    scores: Dict[int, float] = {i: 0.0 for i in range(len(entries))}
    best_bullet: Dict[int, Optional[str]] = {}
    for item in coverage:
        ev = item.evidence
        if ev is None or not (0 <= ev.work_index < len(entries)):
            continue
        if ev.score > scores[ev.work_index]:
            scores[ev.work_index] = ev.score
            if ev.bullet:
                best_bullet[ev.work_index] = ev.bullet

    if any(s > 0 for s in scores.values()):
        ranking = sorted(range(len(entries)), key=lambda i: -scores[i])
    else:
        scores = _overlap_scores(entries, jd_text)
        if any(s > 0 for s in scores.values()):
            logger.debug("select_experiences: no coverage evidence, ranking by JD overlap")
            ranking = sorted(range(len(entries)), key=lambda i: -scores[i])
        else:
            logger.debug("select_experiences: no JD signal, keeping original order")
            ranking = [i for i, e in enumerate(entries) if not e.is_volunteer] or list(range(len(entries)))

    primary_idx = ranking[:opts.min_primary]
    rest = ranking[opts.min_primary:]
    additional_idx = sorted(rest, key=lambda i: (entries[i].is_volunteer, -len(entries[i].bullets), i))[:opts.add_count]

    bullets_by_idx: Dict[int, List[str]] = {}
    for i in primary_idx:
        lead = best_bullet.get(i) or _best_bullet_by_overlap(entries[i], jd_text)
        bullets = list(entries[i].bullets)
        if lead:
            bullets = [lead] + [b for b in bullets if b != lead]
        bullets_by_idx[i] = _dedupe(bullets)
    for i in additional_idx:
        bullets_by_idx[i] = _dedupe(entries[i].bullets)[:opts.bullet_cap]

    return SelectionResult(
        primary=_present(primary_idx, entries, bullets_by_idx),
        additional=_present(additional_idx, entries, bullets_by_idx),
    )
