"""
Catalog Service

Filtering and sorting of the course catalog.

All functions here are pure: they work on an already-fetched list of
courses and never mutate it.
"""

import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from app.models.course import Category, Course
from app.models.enums import DurationBucket, PriceFilter, SortKey
from app.schemas.course import ALL, CategoryFilterOption, CourseQuery


SHORT_MAX_MINUTES = 120
MEDIUM_MAX_MINUTES = 360

_HOURS_MINUTES = re.compile(r"^\s*(\d+):(\d{1,2})\s*$")


class CategoryLookup:
    """
    Read-only category id to name table.

    An id without a known name is used verbatim as its name.
    """

    def __init__(self, names: Optional[Mapping[str, str]] = None):
        self._names = MappingProxyType(dict(names or {}))

    @classmethod
    def from_categories(cls, categories: Iterable[Category]) -> "CategoryLookup":
        return cls({category.id: category.display_name for category in categories})

    def name_for(self, category: Optional[str]) -> Optional[str]:
        """Map a category id to its name; None when there is no category."""
        if not category:
            return None
        return self._names.get(category, category)

    def __len__(self) -> int:
        return len(self._names)


def duration_minutes(duration: Union[str, float, None]) -> Optional[float]:
    """
    Convert a course duration to minutes.

    Numbers are minutes; ``"H:MM"`` strings are ``hours * 60 + minutes``.
    Returns None for anything else.
    """
    if duration is None or isinstance(duration, bool):
        return None
    if isinstance(duration, (int, float)):
        return float(duration)
    match = _HOURS_MINUTES.match(duration)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))
    try:
        return float(duration)
    except ValueError:
        return None


def duration_bucket(duration: Union[str, float, None]) -> DurationBucket:
    """
    Bucket a course duration.

    Example:
        "1:30" -> SHORT, "5:00" -> MEDIUM, "7:00" -> LONG

    Unparseable or missing durations are SHORT.
    """
    minutes = duration_minutes(duration)
    if minutes is None or minutes <= SHORT_MAX_MINUTES:
        return DurationBucket.SHORT
    if minutes <= MEDIUM_MAX_MINUTES:
        return DurationBucket.MEDIUM
    return DurationBucket.LONG


def _is_active(facet: Optional[str]) -> bool:
    return bool(facet) and facet != ALL


def matches_search(course: Course, term: str, lookup: CategoryLookup) -> bool:
    """True if ``term`` (lowercase) occurs in any searchable course field."""
    fields = (
        course.title,
        course.description,
        course.instructor,
        lookup.name_for(course.category),
        course.language,
    )
    return any(term in field.lower() for field in fields if field)


def matches_query(course: Course, query: CourseQuery, lookup: CategoryLookup) -> bool:
    """Check one course against every active facet of ``query``."""
    term = query.normalized_search
    if term and not matches_search(course, term, lookup):
        return False

    if _is_active(query.category) and lookup.name_for(course.category) != query.category:
        return False

    if _is_active(query.difficulty):
        if (course.difficulty or "").lower() != query.difficulty.lower():
            return False

    if _is_active(query.duration) and duration_bucket(course.duration).value != query.duration:
        return False

    if _is_active(query.instructor) and course.instructor != query.instructor:
        return False

    if query.price == PriceFilter.FREE.value and not course.is_free:
        return False
    if query.price == PriceFilter.PAID.value and course.is_free:
        return False

    return True


def filter_courses(
    courses: Sequence[Course],
    query: CourseQuery,
    lookup: Optional[CategoryLookup] = None,
) -> List[Course]:
    """
    Return the subsequence of ``courses`` matching ``query``.

    Facets are AND-combined; ``"all"`` disables a facet. Filtering an
    already-filtered list with the same query returns the same list.
    """
    lookup = lookup or CategoryLookup()
    return [course for course in courses if matches_query(course, query, lookup)]


def sort_courses(courses: Sequence[Course], key: Union[str, SortKey, None]) -> List[Course]:
    """
    Return a sorted copy of ``courses``.

    The sort is stable. Missing numbers sort as 0 and unknown keys sort
    by NEWEST.
    """
    sort_key = SortKey.parse(key)

    if sort_key == SortKey.OLDEST:
        return sorted(courses, key=lambda c: c.created_at)
    if sort_key == SortKey.ENROLLMENT_ASC:
        return sorted(courses, key=lambda c: c.enrollment_count or 0)
    if sort_key == SortKey.ENROLLMENT_DESC:
        return sorted(courses, key=lambda c: c.enrollment_count or 0, reverse=True)
    if sort_key == SortKey.RATING_DESC:
        return sorted(courses, key=lambda c: c.rating or 0, reverse=True)
    if sort_key == SortKey.PRICE_ASC:
        return sorted(courses, key=lambda c: c.price or 0)
    if sort_key == SortKey.PRICE_DESC:
        return sorted(courses, key=lambda c: c.price or 0, reverse=True)
    return sorted(courses, key=lambda c: c.created_at, reverse=True)


def apply_query(
    courses: Sequence[Course],
    query: CourseQuery,
    lookup: Optional[CategoryLookup] = None,
) -> List[Course]:
    """Filter then sort ``courses`` by ``query``."""
    return sort_courses(filter_courses(courses, query, lookup), query.sort)


def category_options(
    courses: Sequence[Course],
    lookup: Optional[CategoryLookup] = None,
) -> List[CategoryFilterOption]:
    """
    Build the category filter bar.

    Starts with "All Courses", then each distinct mapped category name in
    the order it first appears in ``courses``.
    """
    lookup = lookup or CategoryLookup()
    options = [CategoryFilterOption(value=ALL, label="All Courses")]
    seen = set()
    for course in courses:
        name = lookup.name_for(course.category)
        if name and name not in seen:
            seen.add(name)
            options.append(CategoryFilterOption(value=name, label=name))
    return options
