"""
Analysis orchestration.

The orchestrator is the public entry point of the engine.  It asks the
remote language model for an analysis and, when that fails, recovers
so the caller always receives a well formed `AnalysisResult`:

* quota exhaustion → local heuristic analysis, prefixed with a note
  saying the offline analysis was used;
* any other failure → a zero score with the failure message as the
  only suggestion.

`get_default_analyzer` picks the analyzer from configuration.  When no
API key is configured the heuristic analyzer is used directly.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Tuple

from ..config import AnalyzerSettings, DEFAULT_QUOTA_CODES, DEFAULT_QUOTA_SIGNATURE, load_settings
from .heuristic import analyze_locally
from .remote import RemoteAnalysisClient, RemoteAnalysisError
from .schema import AnalysisResult

logger = logging.getLogger(__name__)

QUOTA_FALLBACK_NOTE = "(Using offline heuristic analysis because the remote analysis quota is exceeded.)"
FAILURE_PREFIX = "AI analysis failed: "


class AnalysisOutcome(enum.Enum):
    SUCCESS = "success"
    QUOTA_FALLBACK = "quota_fallback"
    GENERIC_FALLBACK = "generic_fallback"


class ResumeAnalyzer(ABC):
    """Abstract base class for résumé analyzers."""

    @abstractmethod
    def analyze(self, resume_text: str, job_description_text: str) -> AnalysisResult:
        """Compare a résumé with a job description.

        Args:
            resume_text: Plain résumé text.
            job_description_text: Plain job description text.

        Returns:
            The compatibility assessment.
        """
        raise NotImplementedError


class HeuristicAnalyzer(ResumeAnalyzer):
    """Analyzer that never calls an external API."""

    def analyze(self, resume_text: str, job_description_text: str) -> AnalysisResult:
        return analyze_locally(resume_text, job_description_text)


class AnalysisOrchestrator(ResumeAnalyzer):
    """Remote analysis with local recovery.

    Args:
        remote: Object exposing ``analyze(resume_text, job_description_text)``
            that raises `RemoteAnalysisError` on failure, normally a
            `RemoteAnalysisClient`.
        quota_signature: Substring of an upstream error message that
            marks quota exhaustion.  Used when the provider sends no
            structured code.
        quota_codes: Structured upstream error codes that mark quota
            exhaustion.
    """

    def __init__(
        self,
        remote,
        quota_signature: str = DEFAULT_QUOTA_SIGNATURE,
        quota_codes: Iterable[str] = DEFAULT_QUOTA_CODES,
    ) -> None:
        self.remote = remote
        self.quota_signature = quota_signature
        self.quota_codes = frozenset(quota_codes)

    def is_quota_exhausted(self, error: Exception) -> bool:
        code = getattr(error, "code", None)
        if code is not None and code in self.quota_codes:
            return True
        return bool(self.quota_signature) and self.quota_signature in str(error)

    def analyze_with_outcome(self, resume_text: str, job_description_text: str) -> Tuple[AnalysisResult, AnalysisOutcome]:
        """Like :meth:`analyze` but also report which path produced the result."""
        try:
            result = self.remote.analyze(resume_text, job_description_text)
        except Exception as exc:  # noqa: BLE001
            if self.is_quota_exhausted(exc):
                logger.warning("Remote analysis quota exhausted; using heuristic analysis: %s", exc)
                fallback = analyze_locally(resume_text, job_description_text)
                return fallback.with_leading_suggestion(QUOTA_FALLBACK_NOTE), AnalysisOutcome.QUOTA_FALLBACK
            if isinstance(exc, RemoteAnalysisError):
                logger.exception("Remote analysis failed (%s): %s", exc.kind.name, exc)
            else:
                logger.exception("Remote analysis raised an unexpected error: %s", exc)
            return failure_result(str(exc)), AnalysisOutcome.GENERIC_FALLBACK
        return result, AnalysisOutcome.SUCCESS

    def analyze(self, resume_text: str, job_description_text: str) -> AnalysisResult:
        result, outcome = self.analyze_with_outcome(resume_text, job_description_text)
        logger.debug("Analysis finished via %s (score %d)", outcome.value, result.match_score)
        return result


def failure_result(message: str) -> AnalysisResult:
    return AnalysisResult(match_score=0, suggestions=[FAILURE_PREFIX + message])


def get_default_analyzer(settings: Optional[AnalyzerSettings] = None) -> ResumeAnalyzer:
    """Return a `ResumeAnalyzer` for the given or loaded settings.

    An `AnalysisOrchestrator` around a `RemoteAnalysisClient` is built
    when an API key is configured; otherwise the heuristic analyzer is
    returned.
    """
    settings = settings or load_settings()
    if not settings.api_key:
        logger.info("No OPENAI_API_KEY configured; using heuristic analyzer")
        return HeuristicAnalyzer()
    client = RemoteAnalysisClient(
        api_url=settings.api_url,
        api_key=settings.api_key,
        model=settings.model,
        timeout=settings.timeout,
        temperature=settings.temperature,
    )
    return AnalysisOrchestrator(
        client,
        quota_signature=settings.quota_signature,
        quota_codes=settings.quota_codes,
    )
