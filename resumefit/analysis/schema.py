"""
Analysis result schema.

Defines the dataclass returned by every analyzer.  Each
`AnalysisResult` holds an integer match score between 0 and 100, the
job description keywords found and not found in the résumé, and a
list of human readable suggestions.  The wire form (``to_dict`` /
``from_dict``) uses the camelCase keys the language model is asked
to produce.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

MIN_SCORE = 0
MAX_SCORE = 100


def coerce_score(value: object) -> int:
    """Convert a loosely typed score into an int clamped to [0, 100].

    Integers are used as is, floats are truncated and numeric strings
    are parsed.  Anything else (including booleans) counts as 0.
    """
    if isinstance(value, bool):
        score = 0
    elif isinstance(value, int):
        score = value
    elif isinstance(value, float):
        score = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        try:
            score = int(float(value.strip()))
        except (ValueError, OverflowError):
            score = 0
    else:
        score = 0
    return max(MIN_SCORE, min(MAX_SCORE, score))


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def coerce_text_list(value: object) -> List[str]:
    """Return the textual form of each element of ``value``.

    Non-list values yield an empty list and ``None`` elements are
    dropped.
    """
    if not isinstance(value, list):
        return []
    texts = (_as_text(item) for item in value)
    return [text for text in texts if text is not None]


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


@dataclass(frozen=True)
class AnalysisResult:
    """Compatibility assessment of a résumé against a job description."""

    match_score: int
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.match_score, bool) or not isinstance(self.match_score, int):
            raise TypeError("match_score must be an int")
        if not MIN_SCORE <= self.match_score <= MAX_SCORE:
            raise ValueError(f"match_score must be between {MIN_SCORE} and {MAX_SCORE}, got {self.match_score}")

    def with_leading_suggestion(self, suggestion: str) -> "AnalysisResult":
        """Return a copy with ``suggestion`` placed before the existing ones."""
        return AnalysisResult(
            match_score=self.match_score,
            matched_skills=list(self.matched_skills),
            missing_skills=list(self.missing_skills),
            suggestions=[suggestion, *self.suggestions],
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "matchScore": self.match_score,
            "matchedSkills": list(self.matched_skills),
            "missingSkills": list(self.missing_skills),
            "suggestions": list(self.suggestions),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "AnalysisResult":
        """Build a result from the camelCase mapping produced by the model.

        Missing or ill-typed fields fall back to a score of 0 and empty
        lists.  Matched and missing skills are de-duplicated and any
        missing skill that is also listed as matched is dropped.
        """
        matched = _unique(coerce_text_list(data.get("matchedSkills")))
        matched_set = set(matched)
        missing = [s for s in _unique(coerce_text_list(data.get("missingSkills"))) if s not in matched_set]
        return cls(
            match_score=coerce_score(data.get("matchScore")),
            matched_skills=matched,
            missing_skills=missing,
            suggestions=coerce_text_list(data.get("suggestions")),
        )
