"""
Command line interface for Resumefit.

The ``analyze`` subcommand reads a résumé and a job description from
plain-text files, runs the configured analyzer and prints a report.
The remote model is used when ``OPENAI_API_KEY`` is available (from
the environment, a ``.env`` file or the YAML config); ``--offline``
forces the local heuristic.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

import yaml

from .analysis.orchestrator import HeuristicAnalyzer, ResumeAnalyzer, get_default_analyzer
from .analysis.schema import AnalysisResult
from .config import load_settings

logger = logging.getLogger("resumefit.cli")

PREVIEW_CHARS = 1200


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def truncate(text: str, limit: int = PREVIEW_CHARS) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_report(result: AnalysisResult) -> str:
    lines = [f"Match score: {result.match_score}/100", ""]
    lines.append("Matched skills: " + (", ".join(result.matched_skills) or "(none)"))
    lines.append("Missing skills: " + (", ".join(result.missing_skills) or "(none)"))
    lines.append("")
    lines.append("Suggestions:")
    for i, suggestion in enumerate(result.suggestions, 1):
        lines.append(f"  {i}. {suggestion}")
    return "\n".join(lines)


def _build_analyzer(args: argparse.Namespace) -> ResumeAnalyzer:
    if args.offline:
        logger.info("Offline mode; using heuristic analyzer")
        return HeuristicAnalyzer()
    return get_default_analyzer(load_settings(args.config))


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze a résumé against a job description and print the result."""
    try:
        resume_text = _read_text(args.resume)
        job_text = _read_text(args.job)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read input: %s", exc)
        return 2

    try:
        analyzer = _build_analyzer(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Could not load configuration: %s", exc)
        return 2
    result = analyzer.analyze(resume_text, job_text)

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Analysis written to %s", args.out)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        if args.preview:
            print("--- Resume ---")
            print(truncate(resume_text))
            print()
            print("--- Job description ---")
            print(truncate(job_text))
            print()
        print(format_report(result))
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="resumefit", description="Resume / job description match analysis")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_cmd = subparsers.add_parser("analyze", help="Analyze a résumé against a job description")
    analyze_cmd.add_argument("--resume", required=True, help="Path to résumé text file")
    analyze_cmd.add_argument("--job", required=True, help="Path to job description text file")
    analyze_cmd.add_argument("--config", help="YAML config file with an 'openai' section")
    analyze_cmd.add_argument("--offline", action="store_true", help="Skip the remote model and use the heuristic")
    analyze_cmd.add_argument("--json", action="store_true", help="Print the result as JSON")
    analyze_cmd.add_argument("--preview", action="store_true", help="Print the start of both inputs before the report")
    analyze_cmd.add_argument("--out", help="Also write the JSON result to this path")
    analyze_cmd.set_defaults(func=cmd_analyze)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="[%(levelname)s] %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
