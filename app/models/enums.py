"""
Catalog and Progress Enums

String enums shared by documents, queries and responses.
"""

import enum


class DurationBucket(str, enum.Enum):
    """Course length buckets used by the catalog filter."""
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class PriceFilter(str, enum.Enum):
    """Price facet values."""
    ALL = "all"
    FREE = "free"
    PAID = "paid"


class SortKey(str, enum.Enum):
    """Catalog sort orders."""
    NEWEST = "newest"
    OLDEST = "oldest"
    ENROLLMENT_ASC = "enrollmentAsc"
    ENROLLMENT_DESC = "enrollmentDesc"
    RATING_DESC = "ratingDesc"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"

    @classmethod
    def parse(cls, value: "str | SortKey | None") -> "SortKey":
        """Map a raw sort value to a key, falling back to NEWEST."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


class InteractionAction(str, enum.Enum):
    """Recommendation interaction kinds."""
    VIEW = "view"
    CLICK = "click"
    ENROLL = "enroll"


class SubscriptionStatus(str, enum.Enum):
    """Newsletter subscription status."""
    ACTIVE = "active"
