"""Aggregate analysis over a user's sleep logs.

All functions are pure and work on logs already loaded from the database,
in ascending date order. Anything with ``date``, ``bedtime``, ``wake_time``,
``quality`` and ``factors`` attributes is accepted.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional, Protocol, Sequence

from sleeptrack.services.sleep_metrics import (
    SleepDuration,
    calculate_duration,
    calculate_sleep_score,
    minutes_since_midnight,
    round_half_up,
)

DEFAULT_DEBT_WINDOW = 7
WEEKLY_OVERVIEW_DAYS = 7

# Bedtimes before noon are plotted after midnight of the previous evening
_NOON_MINUTES = 12 * 60
_DAY_MINUTES = 24 * 60


class LogLike(Protocol):
    date: date
    bedtime: str
    wake_time: str
    quality: int
    factors: Optional[list[str]]


@dataclass
class ScoredLog:
    """A log with its derived duration and score."""

    id: Optional[int]
    date: date
    bedtime: str
    wake_time: str
    quality: int
    factors: list[str]
    notes: Optional[str]
    duration: SleepDuration
    score: int

    @property
    def duration_minutes(self) -> int:
        return self.duration.total_minutes

    @property
    def duration_hours(self) -> float:
        return self.duration.total_hours


@dataclass
class FactorImpact:
    """Average sleep score on nights tagged with a factor."""

    name: str
    avg_score: int
    count: int

    def to_dict(self) -> dict:
        return {"name": self.name, "avg_score": self.avg_score, "count": self.count}


@dataclass
class AnalysisReport:
    """Everything the analysis view needs."""

    log_count: int
    average_duration_hours: float
    factor_impact: list[FactorImpact] = field(default_factory=list)
    best_factor: Optional[FactorImpact] = None
    worst_factor: Optional[FactorImpact] = None
    trends: list[dict[str, Any]] = field(default_factory=list)
    sleep_debt_hours: float = 0.0
    goal_hours: float = 8.0
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "log_count": self.log_count,
            "average_duration_hours": round(self.average_duration_hours, 2),
            "factor_impact": [f.to_dict() for f in self.factor_impact],
            "best_factor": self.best_factor.to_dict() if self.best_factor else None,
            "worst_factor": self.worst_factor.to_dict() if self.worst_factor else None,
            "trends": self.trends,
            "sleep_debt_hours": round(self.sleep_debt_hours, 2),
            "goal_hours": self.goal_hours,
            "insights": self.insights,
        }


def score_log(log: LogLike) -> ScoredLog:
    duration = calculate_duration(log.bedtime, log.wake_time)
    return ScoredLog(
        id=getattr(log, "id", None),
        date=log.date,
        bedtime=log.bedtime,
        wake_time=log.wake_time,
        quality=log.quality,
        factors=list(log.factors or []),
        notes=getattr(log, "notes", None),
        duration=duration,
        score=calculate_sleep_score(duration.total_minutes, log.quality),
    )


def score_logs(logs: Iterable[LogLike]) -> list[ScoredLog]:
    return [score_log(log) for log in logs]


def factor_impact(scored: Sequence[ScoredLog]) -> list[FactorImpact]:
    """Average score per factor, in order of first appearance.

    A factor listed twice on the same log counts twice.
    """
    totals: dict[str, list[int]] = {}
    for log in scored:
        for factor in log.factors:
            stats = totals.setdefault(factor, [0, 0])
            stats[0] += log.score
            stats[1] += 1

    return [
        FactorImpact(name=name, avg_score=round_half_up(total / count), count=count)
        for name, (total, count) in totals.items()
    ]


def best_factor(impacts: Sequence[FactorImpact]) -> Optional[FactorImpact]:
    """Factor with the highest average. Ties keep the first one seen."""
    best = None
    for impact in impacts:
        if best is None or impact.avg_score > best.avg_score:
            best = impact
    return best


def worst_factor(impacts: Sequence[FactorImpact]) -> Optional[FactorImpact]:
    """Factor with the lowest average. Ties keep the first one seen."""
    worst = None
    for impact in impacts:
        if worst is None or impact.avg_score < worst.avg_score:
            worst = impact
    return worst


def average_duration_hours(scored: Sequence[ScoredLog]) -> float:
    if not scored:
        return 0.0
    return sum(log.duration_hours for log in scored) / len(scored)


def sleep_debt(
    scored: Sequence[ScoredLog],
    goal_hours: float,
    window: int = DEFAULT_DEBT_WINDOW,
) -> float:
    """Hours of sleep missed against the goal over the most recent nights.

    Nights above the goal count as zero and never offset short nights.
    """
    recent = scored[-window:] if window > 0 else []
    return sum(max(goal_hours - log.duration_hours, 0.0) for log in recent)


def sleep_trends(scored: Sequence[ScoredLog]) -> list[dict[str, Any]]:
    """Bedtime and wake-up series, in minutes since midnight."""
    trends = []
    for log in scored:
        bedtime_minutes = minutes_since_midnight(log.bedtime)
        if bedtime_minutes < _NOON_MINUTES:
            bedtime_minutes += _DAY_MINUTES
        trends.append(
            {
                "date": log.date.isoformat(),
                "label": f"{log.date:%b} {log.date.day}",
                "bedtime_minutes": bedtime_minutes,
                "wake_minutes": minutes_since_midnight(log.wake_time),
                "duration_hours": round(log.duration_hours, 2),
                "score": log.score,
            }
        )
    return trends


def weekly_overview(scored: Sequence[ScoredLog], goal_hours: float) -> list[dict[str, Any]]:
    """The last seven logs against the goal."""
    return [
        {
            "label": log.date.strftime("%a"),
            "date": log.date.isoformat(),
            "duration_hours": round(log.duration_hours, 2),
            "goal_hours": goal_hours,
        }
        for log in scored[-WEEKLY_OVERVIEW_DAYS:]
    ]


def build_insights(
    avg_hours: float,
    best: Optional[FactorImpact],
    worst: Optional[FactorImpact],
) -> list[str]:
    insights = [f"Your average sleep duration is {avg_hours:.1f} hours."]
    if best:
        insights.append(
            f"You seem to get the best sleep on days you {best.name.lower()}, "
            f"with an average score of {best.avg_score}."
        )
    if worst:
        insights.append(
            f"{worst.name} seems to negatively impact your sleep the most, "
            f"with an average score of {worst.avg_score}."
        )
    return insights


def analyze(
    logs: Iterable[LogLike],
    goal_hours: float,
    debt_window: int = DEFAULT_DEBT_WINDOW,
) -> AnalysisReport:
    """Run every aggregation over ``logs``."""
    scored = score_logs(logs)
    impacts = factor_impact(scored)
    best = best_factor(impacts)
    worst = worst_factor(impacts)
    avg_hours = average_duration_hours(scored)

    return AnalysisReport(
        log_count=len(scored),
        average_duration_hours=avg_hours,
        factor_impact=impacts,
        best_factor=best,
        worst_factor=worst,
        trends=sleep_trends(scored),
        sleep_debt_hours=sleep_debt(scored, goal_hours, debt_window),
        goal_hours=goal_hours,
        insights=build_insights(avg_hours, best, worst),
    )
