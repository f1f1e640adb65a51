"""
Analytics Service

Learning analytics computed from a user's daily activity log.

Every function is a pure function of the activity map (and the cumulative
counters already stored on the analytics document). Empty input degrades
to zero or neutral values; no ratio ever divides by zero.
"""

import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional

from app.core.dates import utc_now
from app.models.analytics import DailyActivity, UserAnalytics
from app.schemas.analytics import LearningInsights, PeakHours, WeeklyAverage


ActivityLog = Mapping[date, DailyActivity]

VELOCITY_WINDOW_DAYS = 7

# Weight per engagement component; each component caps at 100
ENGAGEMENT_WEIGHTS = {
    "consistency": 0.30,
    "study_hours": 0.25,
    "courses_completed": 0.20,
    "lessons_completed": 0.15,
    "learning_streak": 0.10,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding up (36.5 -> 37)."""
    # Trim float noise first so 36.4999999... still rounds up
    return int(math.floor(round(value, 9) + 0.5))


def today_utc() -> date:
    return utc_now().date()


def _active_days(activity: ActivityLog) -> List[DailyActivity]:
    return [day for day in activity.values() if day.study_time > 0]


def current_streak(activity: ActivityLog, today: Optional[date] = None) -> int:
    """
    Count consecutive active days ending today.

    Walks backward from ``today``; a day missing from the log counts as
    empty and ends the streak.
    """
    day = today or today_utc()
    streak = 0
    while True:
        entry = activity.get(day)
        if entry is None or not entry.has_activity:
            return streak
        streak += 1
        day -= timedelta(days=1)


def longest_streak(activity: ActivityLog) -> int:
    """
    Longest run of consecutive recorded dates anywhere in the log.

    Example:
        dates 2024-01-01, 2024-01-02, 2024-01-04 -> 2
    """
    dates = sorted(activity)
    if not dates:
        return 0

    longest = running = 1
    for previous, current in zip(dates, dates[1:]):
        if (current - previous).days == 1:
            running += 1
        else:
            running = 1
        longest = max(longest, running)
    return longest


def consistency(activity: ActivityLog) -> int:
    """Percentage of recorded days with study time, rounded."""
    total_days = len(activity)
    if total_days == 0:
        return 0
    return round_half_up(len(_active_days(activity)) / total_days * 100)


def average_study_time(activity: ActivityLog) -> float:
    """Average seconds studied per active day."""
    active = _active_days(activity)
    if not active:
        return 0.0
    return sum(day.study_time for day in active) / len(active)


def _average_daily_time(days: List[DailyActivity]) -> float:
    if not days:
        return 0.0
    return sum(day.study_time for day in days) / len(days)


def learning_velocity(activity: ActivityLog) -> int:
    """
    Percent change in average daily study time, first week vs last week.

    Uses the first and last seven recorded dates; with fewer than fourteen
    dates the two windows overlap. Growth from a zero first week is 100.
    """
    if not activity:
        return 0
    ordered = [activity[day] for day in sorted(activity)]
    first = _average_daily_time(ordered[:VELOCITY_WINDOW_DAYS])
    last = _average_daily_time(ordered[-VELOCITY_WINDOW_DAYS:])
    if first == 0:
        return 100 if last > 0 else 0
    return round_half_up((last - first) / first * 100)


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def weekly_averages(activity: ActivityLog) -> List[WeeklyAverage]:
    """Group the log into Sunday-start weeks, oldest first."""
    weeks: Dict[date, List[DailyActivity]] = defaultdict(list)
    for day, entry in activity.items():
        weeks[week_start(day)].append(entry)

    result = []
    for start in sorted(weeks):
        entries = weeks[start]
        active = [entry for entry in entries if entry.study_time > 0]
        total_time = sum(entry.study_time for entry in entries)
        result.append(
            WeeklyAverage(
                week_start=start,
                active_days=len(active),
                total_study_time=total_time,
                total_lessons=sum(entry.lessons_completed for entry in entries),
                average_study_time=total_time / len(active) if active else 0.0,
            )
        )
    return result


def peak_hours(activity: ActivityLog) -> PeakHours:
    """
    Split study time across morning, afternoon and evening.

    Only daily totals are stored, so each active day is divided into
    three equal portions. Evening takes the rounding remainder.
    """
    portions = {"morning": 0.0, "afternoon": 0.0, "evening": 0.0}
    for entry in _active_days(activity):
        share = entry.study_time / 3
        for period in portions:
            portions[period] += share

    total = sum(portions.values())
    if total == 0:
        return PeakHours(morning=33, afternoon=33, evening=34)

    morning = round_half_up(portions["morning"] / total * 100)
    afternoon = round_half_up(portions["afternoon"] / total * 100)
    return PeakHours(morning=morning, afternoon=afternoon, evening=100 - morning - afternoon)


def engagement_score(analytics: Optional[UserAnalytics]) -> int:
    """
    Weighted 0-100 engagement composite.

    consistency*0.30 + min(100, hours*2)*0.25 + min(100, courses*10)*0.20
    + min(100, lessons*2)*0.15 + min(100, streak*5)*0.10, rounded half up.
    """
    if analytics is None:
        return 0

    components = {
        "consistency": consistency(analytics.daily_activity),
        "study_hours": min(100.0, analytics.total_study_time / 3600 * 2),
        "courses_completed": min(100, analytics.courses_completed * 10),
        "lessons_completed": min(100, analytics.lessons_completed * 2),
        "learning_streak": min(100, analytics.learning_streak * 5),
    }
    score = sum(components[name] * weight for name, weight in ENGAGEMENT_WEIGHTS.items())
    return round_half_up(score)


def build_insights(
    analytics: Optional[UserAnalytics],
    today: Optional[date] = None,
) -> LearningInsights:
    """
    Compute every learning metric for one user.

    A user without an analytics document gets all-zero insights.
    """
    analytics = analytics or UserAnalytics()
    activity = analytics.daily_activity

    return LearningInsights(
        total_study_time=analytics.total_study_time,
        lessons_completed=analytics.lessons_completed,
        courses_completed=analytics.courses_completed,
        total_days=len(activity),
        active_days=len(_active_days(activity)),
        consistency=consistency(activity),
        average_study_time=average_study_time(activity),
        current_streak=current_streak(activity, today),
        longest_streak=longest_streak(activity),
        learning_velocity=learning_velocity(activity),
        weekly_averages=weekly_averages(activity),
        peak_hours=peak_hours(activity),
        engagement_score=engagement_score(analytics),
    )
