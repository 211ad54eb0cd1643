"""Progress, readiness and skill-gap summaries over a user's interview history."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from prepcoach.models.interview import as_utc
from prepcoach.services.metrics import average_score, round_half_up, standard_deviation

READINESS_WEIGHTS = {
    "practice_frequency": 0.2,
    "average_score": 0.3,
    "consistency": 0.15,
    "skill_coverage": 0.2,
    "recent_improvement": 0.15,
}

READINESS_LEVELS = (
    (85, "Excellent"),
    (70, "Good"),
    (55, "Moderate"),
    (40, "Needs Work"),
)

TARGET_SKILL_COUNT = 10
PRACTICE_WINDOW_DAYS = 30
TREND_THRESHOLD = 5


@dataclass
class ScoredInterview:
    """The slice of an interview record the aggregations need."""

    created_at: datetime
    score: Optional[float] = None
    skills: List[str] = field(default_factory=list)
    duration_seconds: float = 0


def _practice_streak(interviews: Iterable[ScoredInterview], today: date) -> int:
    practice_days = {as_utc(i.created_at).date() for i in interviews}
    streak = 0
    while today - timedelta(days=streak) in practice_days:
        streak += 1
    return streak


def skill_averages(interviews: Iterable[ScoredInterview]) -> List[Dict[str, Any]]:
    skill_scores: Dict[str, List[float]] = defaultdict(list)
    for interview in interviews:
        for skill in interview.skills or []:
            skill_scores[skill].append(interview.score or 0)

    averages = [
        {"skill": skill, "average": average_score(scores), "count": len(scores)}
        for skill, scores in skill_scores.items()
    ]
    averages.sort(key=lambda s: s["average"], reverse=True)
    return averages


def progress_analytics(
    interviews: Sequence[ScoredInterview], today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Summarize a user's progress over time.

    Args:
        interviews: Completed interviews, in any order
        today: Reference day for the practice streak (defaults to today, UTC)

    Returns:
        Dictionary with average, improvement, consistency, trend, streak and
        per-skill strengths and weak areas
    """
    if not interviews:
        return {
            "total_interviews": 0,
            "average_score": 0,
            "improvement": 0,
            "consistency": 0,
            "streak": 0,
            "top_skills": [],
            "weak_areas": [],
            "trend": "neutral",
            "recent_scores": [],
            "first_score": 0,
            "latest_score": 0,
        }

    ordered = sorted(interviews, key=lambda i: as_utc(i.created_at))
    scores = [i.score or 0 for i in ordered]

    avg = average_score(scores)
    consistency = 100 - standard_deviation(scores)

    midpoint = len(scores) // 2
    improvement = round_half_up(
        average_score(scores[midpoint:]) - average_score(scores[:midpoint]), 2
    )

    trend = "neutral"
    if improvement > TREND_THRESHOLD:
        trend = "improving"
    elif improvement < -TREND_THRESHOLD:
        trend = "declining"

    today = today or datetime.now(timezone.utc).date()
    skill_levels = skill_averages(ordered)

    return {
        "total_interviews": len(ordered),
        "average_score": avg,
        "improvement": improvement,
        "consistency": round_half_up(consistency, 2),
        "streak": _practice_streak(ordered, today),
        "top_skills": skill_levels[:5],
        "weak_areas": sorted(skill_levels, key=lambda s: s["average"])[:5],
        "trend": trend,
        "recent_scores": scores[-10:],
        "first_score": scores[0],
        "latest_score": scores[-1],
    }


def _readiness_recommendations(components: Dict[str, float]) -> List[str]:
    recommendations = []
    if components["practice_frequency"] < 50:
        recommendations.append(
            "Increase your practice frequency - aim for at least 3-4 mock interviews per week"
        )
    if components["average_score"] < 70:
        recommendations.append(
            "Focus on improving your answer quality - review feedback from past interviews"
        )
    if components["consistency"] < 60:
        recommendations.append(
            "Work on consistency - your scores vary significantly between interviews"
        )
    if components["skill_coverage"] < 70:
        recommendations.append(
            "Expand your skill set - practice interviews covering different technical areas"
        )
    if components["recent_improvement"] < 50:
        recommendations.append(
            "Your recent performance has declined - review fundamentals and take breaks to avoid burnout"
        )

    if not recommendations:
        recommendations.append(
            "Great job! Keep up the consistent practice and you'll be interview-ready soon"
        )
    return recommendations


def readiness_level(score: float) -> str:
    for minimum, level in READINESS_LEVELS:
        if score >= minimum:
            return level
    return "Not Ready"


def readiness_score(
    interviews: Sequence[ScoredInterview],
    skills: Sequence[str] = (),
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Blend practice, score, consistency, coverage and improvement into one 0-100 score.

    Args:
        interviews: Completed interviews
        skills: Skills on the user's profile
        now: Reference time for the practice window (defaults to now, UTC)

    Returns:
        Dictionary with the score, its level label, the component breakdown
        and textual recommendations
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    today = now.date()
    progress = progress_analytics(interviews, today=today)

    window_start = now - timedelta(days=PRACTICE_WINDOW_DAYS)
    recent_count = sum(1 for i in interviews if as_utc(i.created_at) >= window_start)

    components = {
        "practice_frequency": min(recent_count * 10, 100),
        "average_score": progress["average_score"],
        "consistency": progress["consistency"],
        "skill_coverage": min(len(skills) / TARGET_SKILL_COUNT * 100, 100),
        "recent_improvement": min(max(50 + progress["improvement"], 0), 100),
    }

    score = int(round_half_up(
        sum(components[name] * weight for name, weight in READINESS_WEIGHTS.items())
    ))

    return {
        "readiness_score": score,
        "readiness_level": readiness_level(score),
        "breakdown": {
            name: int(round_half_up(value)) for name, value in components.items()
        },
        "recommendations": _readiness_recommendations(components),
    }


def _period_key(moment: datetime, group_by: str) -> str:
    day = as_utc(moment).date()
    if group_by == "week":
        # weeks start on Sunday
        return (day - timedelta(days=(day.weekday() + 1) % 7)).isoformat()
    if group_by == "month":
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def time_based_analytics(
    interviews: Sequence[ScoredInterview], group_by: str = "day"
) -> List[Dict[str, Any]]:
    """Bucket interviews by day, week or month with per-bucket averages."""
    buckets: Dict[str, Dict[str, Any]] = {}
    for interview in interviews:
        key = _period_key(interview.created_at, group_by)
        bucket = buckets.setdefault(
            key, {"period": key, "count": 0, "scores": [], "total_duration": 0}
        )
        bucket["count"] += 1
        if interview.score is not None:
            bucket["scores"].append(interview.score)
        bucket["total_duration"] += interview.duration_seconds or 0

    return [
        {
            "period": bucket["period"],
            "count": bucket["count"],
            "average_score": average_score(bucket["scores"]),
            "total_duration": bucket["total_duration"],
            "average_duration": int(round_half_up(bucket["total_duration"] / bucket["count"])),
        }
        for bucket in sorted(buckets.values(), key=lambda b: b["period"])
    ]


def _gap_priority(gap: float) -> str:
    if gap > 30:
        return "high"
    if gap > 15:
        return "medium"
    return "low"


def skill_gap(
    user_skills: Dict[str, float], target_skills: Dict[str, float]
) -> Dict[str, Any]:
    """Compare current skill levels against a role's target levels."""
    gaps = []
    strengths = []

    for skill, target_level in target_skills.items():
        current_level = user_skills.get(skill, 0)
        gap = target_level - current_level
        if gap > 0:
            gaps.append({
                "skill": skill,
                "current_level": current_level,
                "target_level": target_level,
                "gap": gap,
                "priority": _gap_priority(gap),
            })
        else:
            strengths.append({
                "skill": skill,
                "current_level": current_level,
                "target_level": target_level,
                "surplus": abs(gap),
            })

    gaps.sort(key=lambda g: g["gap"], reverse=True)
    strengths.sort(key=lambda s: s["surplus"], reverse=True)

    required = len(target_skills)
    high_priority = sum(1 for g in gaps if g["priority"] == "high")
    readiness = int(round_half_up((required - high_priority) / required * 100)) if required else 0

    return {
        "gaps": gaps,
        "strengths": strengths,
        "readiness_score": readiness,
        "total_skills_required": required,
        "skills_met": len(strengths),
        "skills_to_improve": len(gaps),
        "recommendations": [
            {
                "skill": g["skill"],
                "suggestion": f"Focus on improving {g['skill']} - current gap is {g['gap']} points",
            }
            for g in gaps[:3]
        ],
    }
