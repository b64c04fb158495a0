"""
Local heuristic analysis.

Scores a résumé against a job description by plain keyword overlap.
No network access and no model are involved, so the result is fully
deterministic.  The orchestrator uses it when the remote language
model refuses service because the quota is exhausted.
"""

from __future__ import annotations

import logging
from typing import List

from .schema import AnalysisResult
from .tokenize import tokenize

logger = logging.getLogger(__name__)

HEURISTIC_SUGGESTIONS = (
    "Highlight more of the required keywords from the job description in your resume.",
    "Add concrete project examples showing how you used the matched skills.",
    "Consider learning or mentioning missing skills if they are important for this role.",
)


def overlap_score(matched: int, total: int) -> int:
    """Percentage of ``matched`` over ``total`` rounded half up; 0 when ``total`` is 0."""
    if total <= 0:
        return 0
    return (200 * matched + total) // (2 * total)


def analyze_locally(resume_text: str, job_description_text: str) -> AnalysisResult:
    """Compare the keyword sets of both texts.

    Every job description token is classified as matched when the
    résumé contains it and as missing otherwise; both lists keep the
    job description order.

    Args:
        resume_text: Plain résumé text.
        job_description_text: Plain job description text.

    Returns:
        An `AnalysisResult` with the overlap score and three fixed
        suggestions.
    """
    resume_tokens = set(tokenize(resume_text))
    jd_tokens = tokenize(job_description_text)
    matched: List[str] = []
    missing: List[str] = []
    for token in jd_tokens:
        if token in resume_tokens:
            matched.append(token)
        else:
            missing.append(token)
    score = overlap_score(len(matched), len(jd_tokens))
    logger.debug("Heuristic overlap: %d of %d job tokens matched (score %d)", len(matched), len(jd_tokens), score)
    return AnalysisResult(
        match_score=score,
        matched_skills=matched,
        missing_skills=missing,
        suggestions=list(HEURISTIC_SUGGESTIONS),
    )
