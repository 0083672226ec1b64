"""
Résumé/JD analysis pipeline.

One pure function, `analyze()`, shared by the interactive endpoint and
batch runs. No state is kept between calls.
"""

import logging
from functools import lru_cache
from typing import List, Optional, Sequence

from fastresume.core.contact_parser import extract_contact_info
from fastresume.core.education_parser import extract_education
from fastresume.core.experience_parser import parse_work_experience
from fastresume.core.matcher import compute_coverage, coverage_percent, match_requirements
from fastresume.core.requirements_extractor import extract_requirements
from fastresume.core.schemas import AnalysisResponse, SelectionOptions
from fastresume.core.selector import select_experiences
from fastresume.core.skill_classifier import classify_skills
from fastresume.core.text_normalization import top_terms

logger = logging.getLogger(__name__)

TERM_LIMITS = (18, 10, 6)  # words, bigrams, trigrams
HIGHLIGHT_JD_TERMS = 20
HIGHLIGHT_RESUME_TERMS = 10
CACHE_SIZE = 128


def analyze(
    resume_text: str,
    jd_text: Optional[str] = "",
    options: Optional[SelectionOptions] = None,
) -> AnalysisResponse:
    """
    Run the full pipeline over one résumé and an optional JD.

    Never raises on malformed text; empty inputs produce empty sections
    and a warning.
    """
    opts = options or SelectionOptions()
    resume_text = resume_text or ""
    jd_text = jd_text or ""
    warnings: List[str] = []

    contact = extract_contact_info(resume_text)
    education = extract_education(resume_text)
    entries = parse_work_experience(resume_text)
    if not entries:
        warnings.append("No work experience entries detected")

    resume_terms = top_terms(resume_text, *TERM_LIMITS)
    jd_terms = top_terms(jd_text, *TERM_LIMITS)
    resume_skills = classify_skills(resume_terms)
    jd_skills = classify_skills(jd_terms)

    resume_term_set = set(resume_terms)
    jd_matched_skills = [t for t in jd_terms if t in resume_term_set]

    if not jd_text.strip():
        warnings.append("Job description is empty; requirement matching and coverage skipped")
    requirements = extract_requirements(jd_text)
    matches = match_requirements(requirements, entries, jd_terms)
    coverage = compute_coverage(entries, jd_text)
    selection = select_experiences(entries, coverage, jd_text, opts)

    highlight_terms = list(dict.fromkeys(jd_terms[:HIGHLIGHT_JD_TERMS] + resume_terms[:HIGHLIGHT_RESUME_TERMS]))

    logger.info(
        f"Analyzed résumé: {len(entries)} entries, {len(requirements)} requirements, "
        f"{sum(1 for c in coverage if c.covered)}/{len(coverage)} categories covered"
    )

    return AnalysisResponse(
        contact=contact,
        education=education,
        work_entries=entries,
        resume_terms=resume_terms,
        jd_terms=jd_terms,
        resume_skills=resume_skills,
        jd_skills=jd_skills,
        jd_matched_skills=jd_matched_skills,
        requirements=requirements,
        matches=matches,
        coverage_pct=coverage_percent(matches),
        coverage=coverage,
        selection=selection,
        highlight_terms=highlight_terms,
        warnings=warnings,
    )


@lru_cache(maxsize=CACHE_SIZE)
def _analyze_memo(resume_text: str, jd_text: str, options: SelectionOptions) -> AnalysisResponse:
    return analyze(resume_text, jd_text, options)


def analyze_cached(
    resume_text: str,
    jd_text: Optional[str] = "",
    options: Optional[SelectionOptions] = None,
) -> AnalysisResponse:
    """Memoized analyze(); callers get a deep copy they may mutate freely."""
    result = _analyze_memo(resume_text or "", jd_text or "", options or SelectionOptions())
    return result.model_copy(deep=True)


def analyze_batch(
    resumes: Sequence[str],
    jd_text: Optional[str] = "",
    options: Optional[SelectionOptions] = None,
) -> List[AnalysisResponse]:
    """Analyze independent résumés against one JD, in input order."""
    return [analyze_cached(resume, jd_text, options) for resume in resumes]
