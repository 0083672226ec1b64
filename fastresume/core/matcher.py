"""
Requirement matching and category coverage.

All scores live in [0, 1] and come from set overlap of canonical
(stemmed) tokens and bigrams; there are no embeddings involved.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from fastresume.core.lexicons import CATEGORIES
from fastresume.core.schemas import Category, CoverageItem, Evidence, RequirementMatch, WorkEntry
from fastresume.core.text_normalization import ngrams, normalize_text, stem, stem_tokens, tokenize

logger = logging.getLogger(__name__)


# Requirement matching weights
BULLET_TOKEN_WEIGHT = 0.6
BULLET_BIGRAM_WEIGHT = 0.4
CONTEXT_TOKEN_WEIGHT = 0.5
CONTEXT_BIGRAM_WEIGHT = 0.5
MIN_BULLET_SCORE = 0.2
MAX_MATCH_BULLETS = 4

# Coverage scoring
CONCEPT_SCORE = 0.5
PHRASE_SCORE = 0.2
HINT_SCORE = 0.2
CONTEXT_CONCEPT_SCORE = 0.5
CONTEXT_HINT_SCORE = 0.2
COVERED_BULLET_THRESHOLD = 0.5
COVERED_CONTEXT_THRESHOLD = 0.3

CJK_RE = re.compile(r"[一-鿿]")
TERM_PART_RE = re.compile(r"[\s-]+")


def normalized_overlap(a: Iterable[str], b: Iterable[str]) -> float:
    """
    |A ∩ B| / max(|A|, |B|) over sets; 0 when either side is empty.
    """
    set_a, set_b = set(a), set(b)
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / max(len(set_a), len(set_b))


@dataclass
class _TextFeatures:
    text: str
    raw_tokens: List[str]
    stems: List[str]
    bigrams: List[str]

    @classmethod
    def of(cls, text: str) -> "_TextFeatures":
        raw = tokenize(text)
        stems = [stem(t) for t in raw]
        return cls(text=text, raw_tokens=raw, stems=stems, bigrams=ngrams(stems, 2))


def _context_text(entry: WorkEntry) -> str:
    return " ".join(part for part in (entry.role, entry.company) if part)


def match_requirements(
    requirements: Sequence[str],
    entries: Sequence[WorkEntry],
    jd_terms: Sequence[str] = (),
) -> List[RequirementMatch]:
    """
    Score every requirement against résumé bullets and role/company context.

    bullet score  = max(token, keyword) * 0.6 + bigram * 0.4
    context score = max(token, keyword) * 0.5 + bigram * 0.5

    `keyword` is the overlap of the JD term words with the raw tokens.
    Up to four candidates scoring >= 0.2 are kept; the requirement score
    is the best candidate score.
    """
    jd_kw_tokens = [p for term in jd_terms for p in TERM_PART_RE.split(term) if p]
    bullet_pool = [_TextFeatures.of(b) for entry in entries for b in entry.bullets]
    context_pool = [_TextFeatures.of(ctx) for ctx in map(_context_text, entries) if ctx]

    matches: List[RequirementMatch] = []
    for requirement in requirements:
        tokens = stem_tokens(requirement)
        grams = ngrams(tokens, 2)
        scored: List[Tuple[str, float]] = []

        for feats in bullet_pool:
            lexical = max(normalized_overlap(tokens, feats.stems), normalized_overlap(jd_kw_tokens, feats.raw_tokens))
            score = lexical * BULLET_TOKEN_WEIGHT + normalized_overlap(grams, feats.bigrams) * BULLET_BIGRAM_WEIGHT
            scored.append((feats.text, score))

        for feats in context_pool:
            lexical = max(normalized_overlap(tokens, feats.stems), normalized_overlap(jd_kw_tokens, feats.raw_tokens))
            score = lexical * CONTEXT_TOKEN_WEIGHT + normalized_overlap(grams, feats.bigrams) * CONTEXT_BIGRAM_WEIGHT
            scored.append((feats.text, score))

        # sorted() is stable: equal scores keep pool order
        scored.sort(key=lambda item: item[1], reverse=True)
        picked: List[str] = []
        for text, score in scored[:MAX_MATCH_BULLETS]:
            if score >= MIN_BULLET_SCORE and text not in picked:
                picked.append(text)
        best = min(1.0, max(0.0, scored[0][1])) if scored else 0.0
        matches.append(RequirementMatch(requirement=requirement, bullets=picked, score=round(best, 3)))

    logger.debug(f"match_requirements: {len(requirements)} requirements x {len(bullet_pool)} bullets")
    return matches


def coverage_percent(matches: Sequence[RequirementMatch]) -> int:
    """Mean requirement score as a 0-100 integer, rounded half up."""
    if not matches:
        return 0
    mean = sum(m.score for m in matches) / len(matches)
    return max(0, min(100, int(mean * 100 + 0.5)))


# ============================================================================
# Category coverage
# ============================================================================

@dataclass(frozen=True)
class _CategoryMatcher:
    category: Category
    token_stem: str
    phrase_hints: Tuple["re.Pattern[str]", ...] = field(default_factory=tuple)
    word_hints: frozenset = frozenset()
    cjk_hints: Tuple[str, ...] = ()

    @classmethod
    def build(cls, category: Category) -> "_CategoryMatcher":
        phrases, words, cjk = [], set(), []
        for hint in category.hints:
            norm = normalize_text(hint)
            if CJK_RE.search(norm):
                cjk.append(norm)
            elif " " in norm:
                phrases.append(re.compile(rf"(?<![a-z0-9]){re.escape(norm)}(?![a-z0-9])"))
            elif norm:
                words.add(stem(norm))
        return cls(
            category=category,
            token_stem=stem(category.token),
            phrase_hints=tuple(phrases),
            word_hints=frozenset(words),
            cjk_hints=tuple(cjk),
        )

    def concept_hit(self, stems: Sequence[str]) -> bool:
        return self.token_stem in stems

    def phrase_hit(self, canonical: str) -> bool:
        return any(p.search(canonical) for p in self.phrase_hints)

    def hint_hit(self, canonical: str, stems: Sequence[str]) -> bool:
        return any(s in self.word_hints for s in stems) or any(h in canonical for h in self.cjk_hints)

    def mentioned_in(self, canonical: str, stems: Sequence[str]) -> bool:
        return self.concept_hit(stems) or self.phrase_hit(canonical) or self.hint_hit(canonical, stems)


CATEGORY_MATCHERS: Tuple[_CategoryMatcher, ...] = tuple(_CategoryMatcher.build(c) for c in CATEGORIES)


def _context_baseline(matcher: _CategoryMatcher, entry: WorkEntry) -> float:
    ctx = _context_text(entry)
    if not ctx:
        return 0.0
    canonical = normalize_text(ctx)
    stems = stem_tokens(ctx)
    score = CONTEXT_CONCEPT_SCORE if matcher.concept_hit(stems) else 0.0
    if matcher.phrase_hit(canonical) or matcher.hint_hit(canonical, stems):
        score += CONTEXT_HINT_SCORE
    return score


def _score_category(matcher: _CategoryMatcher, entries: Sequence[WorkEntry]) -> CoverageItem:
    cat = matcher.category
    best: Optional[Evidence] = None
    best_bullet_score = 0.0
    best_context_only = 0.0

    for idx, entry in enumerate(entries):
        baseline = _context_baseline(matcher, entry)
        candidates: List[Tuple[Optional[str], float]] = []
        if entry.bullets:
            for bullet in entry.bullets:
                canonical = normalize_text(bullet)
                stems = stem_tokens(bullet)
                score = (
                    (CONCEPT_SCORE if matcher.concept_hit(stems) else 0.0)
                    + (PHRASE_SCORE if matcher.phrase_hit(canonical) else 0.0)
                    + max(baseline, HINT_SCORE if matcher.hint_hit(canonical, stems) else 0.0)
                )
                score = min(1.0, score)
                best_bullet_score = max(best_bullet_score, score)
                candidates.append((bullet, score))
        else:
            score = min(1.0, baseline)
            best_context_only = max(best_context_only, score)
            candidates.append((None, score))

        for bullet, score in candidates:
            if score > 0 and (best is None or score > best.score):
                best = Evidence(
                    work_index=idx,
                    role=entry.role,
                    company=entry.company,
                    bullet=bullet,
                    score=round(score, 3),
                )

    covered = best_bullet_score >= COVERED_BULLET_THRESHOLD or best_context_only >= COVERED_CONTEXT_THRESHOLD
    return CoverageItem(key=cat.key, label_en=cat.label_en, label_zh=cat.label_zh, covered=covered, evidence=best)


def compute_coverage(entries: Sequence[WorkEntry], jd_text: Optional[str]) -> List[CoverageItem]:
    """
    Coverage of every category the JD mentions.

    A category is mentioned when its token or one of its hints appears in
    the canonical JD. Each (entry, bullet) pair is scored as
    concept(0.5) + phrase(0.2) + max(context baseline, hint(0.2)), clamped
    to 1.0; bullet-less entries contribute their context score alone.
    The highest-scoring pair becomes the evidence whenever it is above 0.
    """
    if not jd_text or not jd_text.strip():
        return []
    canonical_jd = normalize_text(jd_text)
    jd_stems = stem_tokens(jd_text)

    items: List[CoverageItem] = []
    for matcher in CATEGORY_MATCHERS:
        if not matcher.mentioned_in(canonical_jd, jd_stems):
            continue
        item = _score_category(matcher, entries)
        logger.debug(f"Coverage {item.key}: covered={item.covered} score={item.evidence.score if item.evidence else 0}")
        items.append(item)
    return items
