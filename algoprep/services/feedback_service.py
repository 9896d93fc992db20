# algoprep/services/feedback_service.py
# Threshold rules that turn an interview's submissions into a feedback report.
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

GOOD_SCORE = 80
PASSING_OVERALL = 70
TIME_BUDGET_RATIO = 0.8


@dataclass
class SubmissionView:
    """What the rules need from one submission, stored or client-kept."""
    problem_id: str
    title: str
    submitted_at: Optional[datetime]
    status: Optional[str] = None
    score: Optional[float] = None
    feedback: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)
    time_complexity: Optional[str] = None
    space_complexity: Optional[str] = None


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def minutes_between(start: Optional[datetime], end: Optional[datetime]) -> int:
    if start is None or end is None:
        return 0
    delta = _as_utc(end) - _as_utc(start)
    return round_half_up(delta.total_seconds() / 60)


def _question_feedback(s: SubmissionView, start_time: Optional[datetime]) -> Dict[str, Any]:
    return {
        "id": s.problem_id,
        "title": s.title,
        "status": s.status or "pending",
        "timeSpent": minutes_between(start_time, s.submitted_at),
        "feedback": s.feedback or "Review pending",
        "suggestions": list(s.suggestions or []),
        "complexity": {
            "time": s.time_complexity or "N/A",
            "space": s.space_complexity or "N/A",
        },
        "score": s.score or 0,
    }


def _is_optimal(q: Dict[str, Any]) -> bool:
    t = q["complexity"]["time"]
    return t != "N/A" and "suboptimal" not in t


def synthesize_feedback(
    submissions: Sequence[SubmissionView],
    start_time: Optional[datetime],
    duration: int,
) -> Dict[str, Any]:
    """
    Report shape:
      overallScore, timeSpent, questionFeedback, strengths, improvements, recommendations
    """
    questions = [_question_feedback(s, start_time) for s in submissions]
    n = len(questions)

    overall = round_half_up(sum(q["score"] for q in questions) / n) if n else 0
    total_time = sum(q["timeSpent"] for q in questions)

    strengths: List[str] = []
    improvements: List[str] = []

    # time budget
    if total_time <= duration * TIME_BUDGET_RATIO:
        strengths.append("Good time management - completed within allocated time")
    elif total_time > duration:
        improvements.append("Work on time management - exceeded allocated time")

    # solution quality
    good = sum(1 for q in questions if q["score"] >= GOOD_SCORE)
    if n and good == n:
        strengths.append("Consistently high-quality solutions across all problems")
    elif good == 0:
        improvements.append("Focus on improving solution quality and correctness")

    # complexity
    optimal = sum(1 for q in questions if _is_optimal(q))
    if n and optimal == n:
        strengths.append("Optimal time and space complexity in solutions")
    else:
        improvements.append("Work on optimizing solution complexity")

    recommendations: List[str] = []
    if overall < PASSING_OVERALL:
        recommendations.append("Practice more problems in similar difficulty level")
        recommendations.append("Review fundamental data structures and algorithms")
    if total_time > duration:
        recommendations.append("Practice solving problems under time constraints")
    if not n or optimal < n:
        recommendations.append("Study common optimization techniques and patterns")

    return {
        "overallScore": overall,
        "timeSpent": total_time,
        "questionFeedback": questions,
        "strengths": strengths,
        "improvements": improvements,
        "recommendations": recommendations,
    }
