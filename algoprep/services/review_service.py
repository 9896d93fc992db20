"""
Code review for a submitted solution.

- quick review: rough score and complexity estimate
- full review: approach, performance, best practices, improvements
- results are cached for 30 minutes per (problem title, code)
"""
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from algoprep.schemas.review import FullReview, QuickReview, ReviewProblem, ReviewSubmission
from algoprep.services import llm_client
from algoprep.services.review_cache import ReviewCache, cache_key, review_cache

logger = logging.getLogger(__name__)


class ReviewGenerationError(RuntimeError):
    pass


QUICK_SYSTEM = (
    "You are a code reviewer. Respond with a JSON object with keys "
    '"score" (number 0-100), "initialFeedback" (string), '
    '"timeComplexity" (string) and "spaceComplexity" (string).'
)

FULL_SYSTEM = (
    "You are an expert code reviewer. Respond with a JSON object with keys "
    '"score" (number 0-100), '
    '"approach" {"rating": "good"|"fair"|"poor", "feedback", "details"}, '
    '"performance" {"time", "space", "feedback", "analysis"}, '
    '"bestPractices" {"pros": [string, ...], "cons": [string, ...], "details"}, '
    '"improvements" [string, ...] and "overallFeedback" (string).'
)


def _quick_prompt(problem: ReviewProblem, submission: ReviewSubmission) -> str:
    return f"""
Analyze this code solution quickly:

Problem: {problem.title}
Code ({submission.language}):
{submission.code}

Provide a quick assessment with:
1. An approximate score (0-100)
2. Brief initial feedback (1-2 sentences)
3. Estimated time complexity
4. Estimated space complexity"""


def _full_prompt(problem: ReviewProblem, submission: ReviewSubmission) -> str:
    desc = problem.description[:300] + ("..." if len(problem.description) > 300 else "")

    constraints = ""
    if problem.constraints:
        constraints = "Key constraints: " + ", ".join(problem.constraints[:2])
        if len(problem.constraints) > 2:
            constraints += "..."

    expected = ""
    if problem.expectedComplexity:
        expected = (
            f"Expected complexity: Time: {problem.expectedComplexity.time}, "
            f"Space: {problem.expectedComplexity.space}"
        )

    return f"""
You are an expert code reviewer analyzing a solution for a coding problem.
Analyze the following code submission efficiently and accurately.

PROBLEM:
Title: {problem.title}
{desc}
{constraints}
{expected}

CODE ({submission.language}):
{submission.code}

Provide a structured review focusing on:
1. Correctness and algorithm approach
2. Time/space complexity analysis
3. Code quality assessment
4. Key improvements needed

Your analysis should be thorough but focused on the most important aspects only."""


def problem_slug(title: str) -> str:
    return re.sub(r"\s+", "-", title.lower())


def _generate(problem: ReviewProblem, submission: ReviewSubmission) -> Dict[str, Any]:
    started = time.monotonic()
    try:
        quick_raw = llm_client.complete_json(
            [
                {"role": "system", "content": QUICK_SYSTEM},
                {"role": "user", "content": _quick_prompt(problem, submission)},
            ],
            temperature=0.3,
            max_tokens=300,
        )
        quick = QuickReview.model_validate(quick_raw)
        logger.info("[REVIEW] quick review done in %.2fs", time.monotonic() - started)

        full_raw = llm_client.complete_json(
            [
                {"role": "system", "content": FULL_SYSTEM},
                {"role": "user", "content": _full_prompt(problem, submission)},
            ],
            temperature=0.7,
            max_tokens=1000,
        )
        full = FullReview.model_validate(full_raw)
        logger.info("[REVIEW] full review done in %.2fs", time.monotonic() - started)
    except (ValidationError, llm_client.LLMResponseError) as e:
        logger.error("[REVIEW] model output did not match the review schema: %s", e)
        raise ReviewGenerationError("Failed to generate review") from e
    except Exception as e:
        logger.exception("[REVIEW] generation failed: %r", e)
        raise ReviewGenerationError("Failed to generate review") from e

    review = full.model_dump()
    review["metadata"] = {
        "problemId": problem_slug(problem.title),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "executionTime": "1s",
    }
    review["submission"] = {"code": submission.code, "language": submission.language}
    review["quickReview"] = quick.model_dump()
    return review


def review_code(
    problem: ReviewProblem,
    submission: ReviewSubmission,
    cache: Optional[ReviewCache] = None,
) -> Dict[str, Any]:
    """Cached review of `submission`; raises ReviewGenerationError when the LLM fails."""
    cache = cache if cache is not None else review_cache
    key = cache_key(problem.title, submission.code)

    cached = cache.get(key)
    if cached is not None:
        logger.info("[REVIEW] cache hit key=%s", key)
        return cached

    # concurrent misses may both generate; the later put wins
    review = _generate(problem, submission)
    cache.put(key, review)
    return review
