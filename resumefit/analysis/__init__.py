"""
Analysis engine for Resumefit.

The `analysis` package turns a résumé and a job description into an
`AnalysisResult`.  The pieces are:

* `tokenize` – Normalizes free text into an ordered set of keywords.
* `heuristic` – Deterministic keyword overlap scoring.
* `remote` – Calls a chat-completions endpoint and parses its JSON.
* `orchestrator` – Tries the remote model and falls back to the
  heuristic or a failure note so callers always get a result.
"""

from .schema import AnalysisResult  # noqa: F401
from .tokenize import tokenize  # noqa: F401
from .heuristic import analyze_locally  # noqa: F401
from .remote import RemoteAnalysisClient, RemoteAnalysisError, RemoteErrorKind  # noqa: F401
from .orchestrator import (  # noqa: F401
    AnalysisOrchestrator,
    AnalysisOutcome,
    HeuristicAnalyzer,
    ResumeAnalyzer,
    get_default_analyzer,
)
