"""
Resumefit: résumé versus job description compatibility analysis.

The package turns two plain-text documents, a résumé and a job
description, into a structured assessment: a 0–100 match score, the
job keywords the résumé covers and misses, and a short list of
improvement suggestions.

The high‑level flow is:

1. **analysis.remote** – Ask a chat-completions style language model
   endpoint to compare the documents and return strict JSON.
2. **analysis.heuristic** – Deterministic keyword overlap scoring,
   used when the remote model cannot be reached or the quota is spent.
3. **analysis.orchestrator** – Public entry point that tries the
   remote model first and falls back to the heuristic, annotating the
   result so the reader knows which path produced it.
4. **cli** – Command line entry point that reads text files and prints
   a report.

Text extraction from PDF or Word documents is not part of this
package; callers pass in text that has already been extracted.
"""

__version__ = "0.1.0"
