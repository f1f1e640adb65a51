"""
User Analytics Model

Per-user learning analytics document with its daily activity series.
"""

from datetime import date
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from app.core.dates import parse_day
from app.models.base import Document, as_count, as_number, as_text


class DailyActivity(Document):
    """
    One day of activity at ``userAnalytics/{uid}/dailyActivity/{YYYY-MM-DD}``.

    Attributes:
        study_time: Seconds studied that day (never negative).
        lessons_completed: Lessons completed that day (never negative).
    """

    study_time: float = Field(default=0.0, alias="studyTime")
    lessons_completed: int = Field(default=0, alias="lessonsCompleted")

    @field_validator("study_time", mode="before")
    @classmethod
    def _study_time(cls, value: Any) -> float:
        return max(0.0, as_number(value))

    @field_validator("lessons_completed", mode="before")
    @classmethod
    def _lessons_completed(cls, value: Any) -> int:
        return as_count(value)

    @property
    def has_activity(self) -> bool:
        """True when any study time or completed lesson was recorded."""
        return self.study_time > 0 or self.lessons_completed > 0


class UserAnalytics(Document):
    """
    Analytics document at ``userAnalytics/{uid}``.

    Cumulative counters are maintained by the write paths; streaks are
    derived from ``daily_activity`` and cached back onto the document.
    Missing dates in ``daily_activity`` mean no activity.
    """

    total_study_time: float = Field(default=0.0, alias="totalStudyTime")
    lessons_completed: int = Field(default=0, alias="lessonsCompleted")
    courses_completed: int = Field(default=0, alias="coursesCompleted")
    daily_activity: Dict[date, DailyActivity] = Field(default_factory=dict, alias="dailyActivity")
    learning_streak: int = Field(default=0, alias="learningStreak")
    longest_learning_streak: int = Field(default=0, alias="longestLearningStreak")
    favorite_categories: Dict[str, int] = Field(default_factory=dict, alias="favoriteCategories")
    last_active_date: Optional[str] = Field(default=None, alias="lastActiveDate")
    learning_velocity: float = Field(default=0.0, alias="learningVelocity")

    @field_validator("total_study_time", "learning_velocity", mode="before")
    @classmethod
    def _number(cls, value: Any) -> float:
        return as_number(value)

    @field_validator(
        "lessons_completed",
        "courses_completed",
        "learning_streak",
        "longest_learning_streak",
        mode="before",
    )
    @classmethod
    def _count(cls, value: Any) -> int:
        return as_count(value)

    @field_validator("daily_activity", mode="before")
    @classmethod
    def _daily_activity(cls, value: Any) -> Dict[date, Any]:
        if not isinstance(value, dict):
            return {}
        activity: Dict[date, Any] = {}
        for key, day in value.items():
            parsed = key if isinstance(key, date) else parse_day(key)
            if parsed is None:
                continue
            if isinstance(day, DailyActivity):
                activity[parsed] = day
            elif isinstance(day, dict):
                activity[parsed] = DailyActivity.model_validate(day)
        return activity

    @field_validator("favorite_categories", mode="before")
    @classmethod
    def _favorite_categories(cls, value: Any) -> Dict[str, int]:
        if not isinstance(value, dict):
            return {}
        return {str(key): as_count(count) for key, count in value.items()}

    @field_validator("last_active_date", mode="before")
    @classmethod
    def _last_active_date(cls, value: Any) -> Optional[str]:
        return as_text(value)
