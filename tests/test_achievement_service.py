"""
Achievement Service Unit Tests
"""

from app.models.analytics import UserAnalytics
from app.services.achievement_service import DEFAULT_ACHIEVEMENTS, is_earned, user_achievements


def _earned_ids(analytics):
    return {a.id for a in user_achievements(analytics) if a.earned}


class TestAchievements:
    """Tests for the earned predicate."""

    def test_six_default_achievements(self):
        assert len(DEFAULT_ACHIEVEMENTS) == 6
        assert all(a.earned is None for a in DEFAULT_ACHIEVEMENTS)

    def test_new_user_has_none(self):
        assert _earned_ids(None) == set()
        assert _earned_ids(UserAnalytics()) == set()

    def test_course_thresholds(self):
        assert _earned_ids(UserAnalytics(coursesCompleted=5)) == {"first_course", "five_courses"}

    def test_streak_and_study_time(self):
        analytics = UserAnalytics(learningStreak=7, totalStudyTime=36000)

        assert _earned_ids(analytics) == {"streak_7", "study_10_hours"}

    def test_is_earned_uses_single_criterion(self):
        achievement = DEFAULT_ACHIEVEMENTS[3]

        assert is_earned(achievement, UserAnalytics(learningStreak=6)) is False
        assert is_earned(achievement, UserAnalytics(learningStreak=7)) is True

    def test_defaults_are_not_modified(self):
        user_achievements(UserAnalytics(coursesCompleted=10))

        assert all(a.earned is None for a in DEFAULT_ACHIEVEMENTS)
