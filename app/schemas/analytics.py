"""
Analytics Schemas

Pydantic models for learning insights and analytics writes.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class WeeklyAverage(BaseModel):
    """Activity totals for one Sunday-start calendar week."""

    week_start: date = Field(..., description="Sunday that starts the week")
    active_days: int = Field(..., description="Days with study time")
    total_study_time: float = Field(..., description="Seconds studied in the week")
    total_lessons: int = Field(..., description="Lessons completed in the week")
    average_study_time: float = Field(..., description="Seconds per active day")


class PeakHours(BaseModel):
    """Share of study time per part of the day, in percent."""

    morning: int
    afternoon: int
    evening: int


class LearningInsights(BaseModel):
    """Schema for the aggregated learning analytics of one user."""

    total_study_time: float = Field(..., description="Cumulative seconds studied")
    lessons_completed: int
    courses_completed: int
    total_days: int = Field(..., description="Days present in the activity log")
    active_days: int = Field(..., description="Days with study time")
    consistency: int = Field(..., description="Active days as a percentage of recorded days")
    average_study_time: float = Field(..., description="Seconds per active day")
    current_streak: int
    longest_streak: int
    learning_velocity: int = Field(..., description="Percent change of daily study time, first vs last week")
    weekly_averages: List[WeeklyAverage]
    peak_hours: PeakHours
    engagement_score: int = Field(..., description="Weighted 0-100 engagement composite")


class LessonActivityCreate(BaseModel):
    """Schema for recording time spent in a lesson."""

    course_id: str = Field(..., description="Course containing the lesson")
    lesson_id: str = Field(..., description="Lesson that was studied")
    time_spent: float = Field(..., ge=0, description="Seconds spent in this session")
    completed: bool = Field(default=False, description="Whether the lesson was completed")


class StreakResponse(BaseModel):
    """Schema for recomputed streaks."""

    learning_streak: int
    longest_learning_streak: int


class Achievement(BaseModel):
    """Schema for an achievement and whether the user earned it."""

    id: str
    name: str
    description: str
    icon: str
    criteria: dict = Field(..., description="Single threshold, e.g. {'coursesCompleted': 1}")
    earned: Optional[bool] = None
