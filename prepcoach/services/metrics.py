"""Score statistics and per-interview performance metrics.

Pure functions only. Rounding is half-up so that scores land on the same
values the web client computes.
"""

import math
from typing import Any, Dict, Iterable, List

DIFFICULTY_MULTIPLIERS = {
    "easy": 0.8,
    "medium": 1.0,
    "hard": 1.3,
    "expert": 1.5,
}

# (minimum weighted score, grade), checked top to bottom
GRADE_THRESHOLDS = (
    (90, "A+"),
    (85, "A"),
    (80, "B+"),
    (75, "B"),
    (70, "C+"),
    (65, "C"),
    (60, "D"),
)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` with ties going towards +infinity."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def _valid_numbers(values: Iterable[Any]) -> List[float]:
    if values is None:
        return []
    return [
        v for v in values
        if isinstance(v, (int, float)) and not isinstance(v, bool) and not math.isnan(v)
    ]


def average_score(scores: Iterable[Any]) -> float:
    """Mean of the numeric entries of ``scores`` to 2 dp, 0 when there are none."""
    valid = _valid_numbers(scores)
    if not valid:
        return 0
    return round_half_up(sum(valid) / len(valid), 2)


def percentile(score: float, population: Iterable[Any]) -> int:
    """Share of ``population`` strictly below ``score``, as an integer percentage."""
    valid = _valid_numbers(population)
    if not valid:
        return 0
    below = sum(1 for s in valid if s < score)
    return int(round_half_up(below / len(valid) * 100))


def standard_deviation(values: Iterable[Any]) -> float:
    """Population standard deviation to 2 dp, 0 when there are no numbers."""
    valid = _valid_numbers(values)
    if not valid:
        return 0
    mean = sum(valid) / len(valid)
    variance = sum((v - mean) ** 2 for v in valid) / len(valid)
    return round_half_up(math.sqrt(variance), 2)


def letter_grade(weighted_score: float) -> str:
    for minimum, grade in GRADE_THRESHOLDS:
        if weighted_score >= minimum:
            return grade
    return "F"


def interview_metrics(
    total_questions: int = 0,
    correct_answers: int = 0,
    duration_seconds: float = 0,
    scores: Iterable[Any] = (),
    difficulty: str = "medium",
) -> Dict[str, Any]:
    """
    Compute performance metrics for one interview.

    Args:
        total_questions: Number of questions asked
        correct_answers: Number of answers counted as correct
        duration_seconds: Interview length in seconds
        scores: Per-question scores (0-100)
        difficulty: easy, medium, hard or expert

    Returns:
        Dictionary with accuracy, average/weighted score, pace and letter grade
    """
    accuracy = (
        int(round_half_up(correct_answers / total_questions * 100))
        if total_questions > 0
        else 0
    )
    avg = average_score(scores)
    questions_per_minute = (
        round_half_up(total_questions / (duration_seconds / 60), 2)
        if duration_seconds > 0
        else 0
    )

    difficulty = (difficulty or "medium").lower()
    multiplier = DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0)
    weighted = round_half_up(avg * multiplier, 2)

    return {
        "accuracy": accuracy,
        "average_score": avg,
        "weighted_score": weighted,
        "questions_per_minute": questions_per_minute,
        "grade": letter_grade(weighted),
        "total_questions": total_questions,
        "correct_answers": correct_answers,
        "duration_seconds": duration_seconds,
        "difficulty": difficulty,
    }
