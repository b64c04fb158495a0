"""Tests for the local heuristic analyzer."""

from __future__ import annotations

import pytest  # type: ignore

from resumefit.analysis.heuristic import HEURISTIC_SUGGESTIONS, analyze_locally, overlap_score
from resumefit.analysis.tokenize import tokenize


def test_java_docker_scenario() -> None:
    result = analyze_locally(
        "Experienced Java and Spring Boot developer",
        "Looking for Java, Docker, Kubernetes expert",
    )
    assert result.matched_skills == ["java"]
    assert result.missing_skills == ["looking", "docker", "kubernetes", "expert"]
    assert result.match_score == 20
    assert result.suggestions == list(HEURISTIC_SUGGESTIONS)


@pytest.mark.parametrize(
    "matched,total,expected",
    [(0, 0, 0), (0, 5, 0), (1, 8, 13), (1, 3, 33), (2, 3, 67), (5, 200, 3), (4, 4, 100)],
)
def test_overlap_score_rounds_half_up(matched: int, total: int, expected: int) -> None:
    assert overlap_score(matched, total) == expected


def test_empty_job_description() -> None:
    result = analyze_locally("Python developer", "")
    assert result.match_score == 0
    assert result.matched_skills == []
    assert result.missing_skills == []
    assert len(result.suggestions) == 3


def test_none_inputs_do_not_fail() -> None:
    result = analyze_locally(None, None)  # type: ignore[arg-type]
    assert result.match_score == 0
    assert len(result.suggestions) == 3


def test_partition_of_job_tokens() -> None:
    resume = "Built REST APIs in Python and Go; deployed on AWS with Terraform and Docker."
    job = "We need Python, Rust, AWS, Kubernetes and Terraform experience. Docker is a plus."
    result = analyze_locally(resume, job)
    jd_tokens = tokenize(job)
    assert set(result.matched_skills) | set(result.missing_skills) == set(jd_tokens)
    assert not set(result.matched_skills) & set(result.missing_skills)
    # Both lists keep job description order.
    assert result.matched_skills == [t for t in jd_tokens if t in result.matched_skills]
    assert result.missing_skills == [t for t in jd_tokens if t in result.missing_skills]
    assert result.match_score == overlap_score(len(result.matched_skills), len(jd_tokens))


def test_identical_texts_score_full_marks() -> None:
    text = "Kotlin Android Jetpack Compose"
    assert analyze_locally(text, text).match_score == 100
