"""
Dashboard Service

Builds the student dashboard from already-fetched courses, enrollments
and categories.
"""

import math
from collections import Counter
from typing import List, Sequence

from app.core.dates import EPOCH
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.schemas.dashboard import (
    CategoryShare,
    DashboardResponse,
    DashboardStats,
    DonutSegment,
    EnrolledCourse,
    ProgressDistribution,
)
from app.services.catalog_service import CategoryLookup


TOP_CATEGORIES = 5
MIN_BAR_HEIGHT = 20.0
GENERAL_CATEGORY = "General"


def dashboard_stats(enrollments: Sequence[Enrollment]) -> DashboardStats:
    """Count enrolled, completed and in-progress courses."""
    completed = sum(1 for e in enrollments if e.is_completed)
    return DashboardStats(
        enrolled=len(enrollments),
        completed=completed,
        in_progress=sum(1 for e in enrollments if e.is_in_progress),
        certificates=completed,
    )


def donut_segment_clip_path(start_percent: float, end_percent: float) -> str:
    """
    CSS clip-path for a donut segment between two percentages.

    Angles start at 12 o'clock and run clockwise on a 100x100 box.
    Empty and full segments use ``inset(0)``.
    """
    if start_percent >= end_percent:
        return "inset(0)"

    start_angle = start_percent / 100 * 360
    end_angle = end_percent / 100 * 360
    if end_angle - start_angle >= 360:
        return "inset(0)"

    center, radius = 50.0, 50.0
    start_rad = math.radians(start_angle - 90)
    end_rad = math.radians(end_angle - 90)
    start_x = center + radius * math.cos(start_rad)
    start_y = center + radius * math.sin(start_rad)
    end_x = center + radius * math.cos(end_rad)
    end_y = center + radius * math.sin(end_rad)
    large_arc = 1 if end_angle - start_angle > 180 else 0

    return (
        f'path("M {center:g},{center:g} L {start_x:.2f},{start_y:.2f} '
        f'A {radius:g},{radius:g} 0 {large_arc},1 {end_x:.2f},{end_y:.2f} Z")'
    )


def progress_distribution(enrollments: Sequence[Enrollment]) -> ProgressDistribution:
    """Group enrollments by progress state with donut chart segments."""
    not_started = sum(1 for e in enrollments if e.is_not_started)
    in_progress = sum(1 for e in enrollments if e.is_in_progress)
    completed = sum(1 for e in enrollments if e.is_completed)
    total = len(enrollments)
    denominator = max(1, total)

    segments = []
    start = 0.0
    for label, count in (
        ("Not Started", not_started),
        ("In Progress", in_progress),
        ("Completed", completed),
    ):
        end = start + count / denominator * 100
        segments.append(
            DonutSegment(
                label=label,
                count=count,
                start_percent=round(start, 2),
                end_percent=round(end, 2),
                clip_path=donut_segment_clip_path(start, end),
            )
        )
        start = end

    return ProgressDistribution(
        not_started=not_started,
        in_progress=in_progress,
        completed=completed,
        total=total,
        segments=segments,
    )


def category_distribution(
    enrollments: Sequence[Enrollment],
    courses: Sequence[Course],
    lookup: CategoryLookup,
) -> List[CategoryShare]:
    """Top categories among enrolled courses, with bar heights."""
    by_id = {course.id: course for course in courses}
    counts: Counter = Counter()
    for enrollment in enrollments:
        course = by_id.get(enrollment.course_id)
        if course and course.category:
            counts[lookup.name_for(course.category)] += 1

    top = counts.most_common(TOP_CATEGORIES)
    if not top:
        return []

    max_count = top[0][1]
    return [
        CategoryShare(
            category=name,
            count=count,
            height_percent=round(max(MIN_BAR_HEIGHT, count / max_count * 100), 2),
        )
        for name, count in top
    ]


def enrolled_courses(
    enrollments: Sequence[Enrollment],
    courses: Sequence[Course],
    lookup: CategoryLookup,
) -> List[EnrolledCourse]:
    """Join enrollments to courses, most recently accessed first."""
    by_id = {course.id: course for course in courses}
    joined = [
        EnrolledCourse(
            enrollment=enrollment,
            course=by_id[enrollment.course_id],
            category_name=lookup.name_for(by_id[enrollment.course_id].category) or GENERAL_CATEGORY,
        )
        for enrollment in enrollments
        if enrollment.course_id in by_id
    ]
    joined.sort(key=lambda item: item.enrollment.last_accessed or EPOCH, reverse=True)
    return joined


def build_dashboard(
    enrollments: Sequence[Enrollment],
    courses: Sequence[Course],
    lookup: CategoryLookup,
) -> DashboardResponse:
    """Assemble the complete dashboard payload."""
    return DashboardResponse(
        stats=dashboard_stats(enrollments),
        progress=progress_distribution(enrollments),
        categories=category_distribution(enrollments, courses, lookup),
        courses=enrolled_courses(enrollments, courses, lookup),
    )
