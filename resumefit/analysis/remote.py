"""
Remote language model analysis.

This module talks to a chat-completions style HTTP endpoint (OpenAI
or any compatible server) and asks the model to compare a résumé with
a job description.  The model answers with a JSON document embedded
as a string inside the completion envelope, so the response is
parsed in two stages:

1. the envelope, which may carry an ``error`` object or a list of
   ``choices``;
2. the message content of the first choice, which must itself be a
   JSON object with ``matchScore``, ``matchedSkills``,
   ``missingSkills`` and ``suggestions``.

Every problem is reported as a `RemoteAnalysisError` whose ``kind``
says which stage failed.  The client performs a single attempt; retry
and fallback decisions belong to the caller.
"""

from __future__ import annotations

import enum
import json
import logging
import math
from http.cookiejar import DefaultCookiePolicy
from typing import Dict, List, Optional

import requests

from .schema import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

SYSTEM_PROMPT = """You are an ATS-style resume analyzer.
Compare the RESUME with the JOB DESCRIPTION.
Respond ONLY with valid JSON in this exact structure:
{
  "matchScore": <0-100>,
  "matchedSkills": ["Java", "Spring Boot", ...],
  "missingSkills": ["Docker", "Kubernetes", ...],
  "suggestions": ["sentence1", "sentence2", ...]
}
"""


class RemoteErrorKind(enum.Enum):
    TRANSPORT_ERROR = "transport_error"
    UPSTREAM_ERROR = "upstream_error"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"


class RemoteAnalysisError(Exception):
    """Raised when the remote analysis cannot produce a result.

    Attributes:
        kind: Which part of the exchange failed.
        message: Human readable description, usually the upstream text.
        code: Structured error code sent by the provider, if any
            (e.g. ``"insufficient_quota"``).
    """

    def __init__(self, kind: RemoteErrorKind, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"RemoteAnalysisError(kind={self.kind.name}, message={self.message!r}, code={self.code!r})"


def build_user_message(resume_text: str, job_description_text: str) -> str:
    return f"JOB DESCRIPTION:\n{job_description_text or ''}\n\nRESUME:\n{resume_text or ''}"


def _strip_code_fence(content: str) -> str:
    text = content.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_envelope(status_code: int, body: str) -> str:
    """Extract the first choice's message content from a completion body.

    Args:
        status_code: HTTP status of the response.
        body: Raw response body.

    Returns:
        The message content string, still JSON encoded.

    Raises:
        RemoteAnalysisError: When the body is an error envelope, has no
            choices or cannot be decoded.
    """
    ok = 200 <= status_code < 300
    try:
        root = json.loads(body)
    except (TypeError, ValueError) as exc:
        if not ok:
            raise RemoteAnalysisError(
                RemoteErrorKind.TRANSPORT_ERROR, f"HTTP {status_code} from analysis endpoint"
            ) from exc
        raise RemoteAnalysisError(
            RemoteErrorKind.MALFORMED_RESPONSE, f"Response body is not valid JSON: {exc}"
        ) from exc
    if not isinstance(root, dict):
        if not ok:
            raise RemoteAnalysisError(RemoteErrorKind.TRANSPORT_ERROR, f"HTTP {status_code} from analysis endpoint")
        raise RemoteAnalysisError(RemoteErrorKind.MALFORMED_RESPONSE, "Response body is not a JSON object")

    error = root.get("error")
    if error is not None:
        if isinstance(error, dict):
            message = error.get("message") or "Unknown error"
            code = error.get("code") or error.get("type")
        else:
            message = str(error) if error else "Unknown error"
            code = None
        raise RemoteAnalysisError(
            RemoteErrorKind.UPSTREAM_ERROR,
            f"OpenAI API error: {message}",
            code=str(code) if code is not None else None,
        )
    if not ok:
        raise RemoteAnalysisError(RemoteErrorKind.TRANSPORT_ERROR, f"HTTP {status_code} from analysis endpoint")

    choices = root.get("choices")
    if not isinstance(choices, list) or not choices:
        raise RemoteAnalysisError(RemoteErrorKind.EMPTY_RESPONSE, "No choices in OpenAI response")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise RemoteAnalysisError(RemoteErrorKind.MALFORMED_RESPONSE, "First choice has no message content")
    return content


def parse_content(content: str) -> AnalysisResult:
    """Decode the model's JSON answer into an `AnalysisResult`.

    A surrounding Markdown code fence is tolerated.  Absent fields
    default to a score of 0 and empty lists, but an answer without any
    suggestion is rejected.

    Raises:
        RemoteAnalysisError: With kind ``MALFORMED_RESPONSE`` when the
            content is not a JSON object or carries no suggestions.
    """
    try:
        data = json.loads(_strip_code_fence(content))
    except ValueError as exc:
        raise RemoteAnalysisError(
            RemoteErrorKind.MALFORMED_RESPONSE, f"Model content is not valid JSON: {exc}"
        ) from exc
    if not isinstance(data, dict):
        raise RemoteAnalysisError(RemoteErrorKind.MALFORMED_RESPONSE, "Model content is not a JSON object")
    result = AnalysisResult.from_dict(data)
    if not result.suggestions:
        raise RemoteAnalysisError(RemoteErrorKind.MALFORMED_RESPONSE, "Model content has no suggestions")
    return result


class RemoteAnalysisClient:
    """Client for a chat-completions endpoint that performs the analysis.

    The client keeps only its configuration and an HTTP session that
    refuses cookies, so one instance can serve many requests.  Call
    :meth:`close` (or use the client as a context manager) to release
    the session; closing it from another thread abandons an in-flight
    request.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str,
        timeout: float = DEFAULT_TIMEOUT,
        temperature: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_url:
            raise ValueError("api_url not provided")
        if not api_key:
            raise ValueError("api_key not provided")
        if not model:
            raise ValueError("model not provided")
        if timeout is None or not math.isfinite(timeout) or timeout <= 0:
            raise ValueError(f"timeout must be a positive finite number, got {timeout!r}")
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        if session is None:
            session = requests.Session()
            # responses must not leave cookies behind for later requests
            session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.session = session

    def __enter__(self) -> "RemoteAnalysisClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def build_payload(self, resume_text: str, job_description_text: str) -> Dict[str, object]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_message(resume_text, job_description_text)},
        ]
        payload: Dict[str, object] = {"model": self.model, "messages": messages}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload

    def analyze(self, resume_text: str, job_description_text: str) -> AnalysisResult:
        """Run one remote analysis.

        Raises:
            RemoteAnalysisError: On transport failure, upstream error,
                empty or malformed response.
        """
        payload = self.build_payload(resume_text, job_description_text)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("Sending analysis request to %s (model %s): %s", self.api_url, self.model, payload["messages"][1]["content"][:200])
        try:
            response = self.session.post(
                self.api_url,
                data=json.dumps(payload),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise RemoteAnalysisError(
                RemoteErrorKind.TRANSPORT_ERROR, f"Request timed out after {self.timeout}s: {exc}"
            ) from exc
        except requests.RequestException as exc:
            raise RemoteAnalysisError(RemoteErrorKind.TRANSPORT_ERROR, f"Request failed: {exc}") from exc

        try:
            content = parse_envelope(response.status_code, response.text)
        except RemoteAnalysisError as exc:
            logger.warning("Analysis endpoint returned %s (HTTP %s): %s", exc.kind.name, response.status_code, exc.message)
            raise
        return parse_content(content)
