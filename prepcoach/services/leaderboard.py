"""Leaderboard ranking over per-user interview scores."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from prepcoach.services.metrics import average_score, percentile, round_half_up, standard_deviation

# Composite score: 60% average score + 25% consistency + 15% activity
AVERAGE_WEIGHT = 0.6
CONSISTENCY_WEIGHT = 0.25
ACTIVITY_WEIGHT = 0.15


@dataclass
class LeaderboardCandidate:
    user_id: str
    scores: List[float] = field(default_factory=list)
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    badges: List[str] = field(default_factory=list)


def composite_score(scores: Sequence[float]) -> int:
    average = average_score(scores)
    consistency = 100 - standard_deviation(scores)
    activity = min(len(scores) * 2, 100)
    return int(round_half_up(
        average * AVERAGE_WEIGHT
        + consistency * CONSISTENCY_WEIGHT
        + activity * ACTIVITY_WEIGHT
    ))


def rank_leaderboard(candidates: Sequence[LeaderboardCandidate]) -> List[Dict[str, Any]]:
    """
    Rank users by composite score, highest first.

    Ties keep their input order and still get distinct, consecutive ranks.
    Percentiles are computed against every composite score in the roster.
    """
    entries = []
    for candidate in candidates:
        consistency = 100 - standard_deviation(candidate.scores)
        entries.append({
            "user_id": candidate.user_id,
            "name": candidate.name,
            "avatar_url": candidate.avatar_url,
            "badges": list(candidate.badges or []),
            "total_interviews": len(candidate.scores),
            "average_score": average_score(candidate.scores),
            "consistency": int(round_half_up(consistency)),
            "composite_score": composite_score(candidate.scores),
        })

    entries.sort(key=lambda e: e["composite_score"], reverse=True)
    population = [e["composite_score"] for e in entries]

    for index, entry in enumerate(entries):
        entry["rank"] = index + 1
        entry["percentile"] = percentile(entry["composite_score"], population)
    return entries
