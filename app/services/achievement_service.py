"""
Achievement Service

Default achievements and the earned check against user analytics.
"""

from typing import List, Optional

from app.models.analytics import UserAnalytics
from app.schemas.analytics import Achievement


DEFAULT_ACHIEVEMENTS: List[Achievement] = [
    Achievement(
        id="first_course",
        name="First Steps",
        description="Complete your first course",
        icon="beginner",
        criteria={"coursesCompleted": 1},
    ),
    Achievement(
        id="five_courses",
        name="Learning Enthusiast",
        description="Complete 5 courses",
        icon="enthusiast",
        criteria={"coursesCompleted": 5},
    ),
    Achievement(
        id="ten_courses",
        name="Knowledge Seeker",
        description="Complete 10 courses",
        icon="seeker",
        criteria={"coursesCompleted": 10},
    ),
    Achievement(
        id="streak_7",
        name="Week Warrior",
        description="Maintain a 7-day learning streak",
        icon="warrior",
        criteria={"learningStreak": 7},
    ),
    Achievement(
        id="streak_30",
        name="Month Master",
        description="Maintain a 30-day learning streak",
        icon="master",
        criteria={"learningStreak": 30},
    ),
    Achievement(
        id="study_10_hours",
        name="Dedicated Learner",
        description="Study for 10 hours total",
        icon="dedicated",
        criteria={"totalStudyTime": 36000},
    ),
]


def is_earned(achievement: Achievement, analytics: Optional[UserAnalytics]) -> bool:
    """
    Check whether ``analytics`` meets the achievement threshold.

    Args:
        achievement: Achievement with a single criterion.
        analytics: User analytics, or None for a new user.

    Returns:
        True if the criterion is met.
    """
    if analytics is None:
        return False

    criteria = achievement.criteria
    if criteria.get("coursesCompleted"):
        return analytics.courses_completed >= criteria["coursesCompleted"]
    if criteria.get("learningStreak"):
        return analytics.learning_streak >= criteria["learningStreak"]
    if criteria.get("totalStudyTime"):
        return analytics.total_study_time >= criteria["totalStudyTime"]
    return False


def user_achievements(analytics: Optional[UserAnalytics]) -> List[Achievement]:
    """Return every default achievement flagged with ``earned``."""
    return [
        achievement.model_copy(update={"earned": is_earned(achievement, analytics)})
        for achievement in DEFAULT_ACHIEVEMENTS
    ]
