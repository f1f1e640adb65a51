"""
Date Normalization

Turns the date shapes found in realtime database documents into one
comparable, timezone-aware UTC instant.

Documents are schema-less, so creation dates arrive as Firestore-style
``{"_seconds": ...}`` objects, unix numbers in seconds or milliseconds,
ISO or browser-style date strings, or already-parsed values. Each raw
value is classified once into a tagged value, then resolved to an
instant. Unrecognized shapes resolve to the epoch so that such records
sort as the oldest.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Iterable, Mapping, Optional, Union


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Second-precision unix times stay below this until the year 2286
MILLISECONDS_THRESHOLD = 10_000_000_000

CREATED_AT_KEYS = ("createdAt", "created", "date", "timestamp")

# Non-ISO layouts written by browsers and admin tools
DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


@dataclass(frozen=True)
class EpochSeconds:
    """Unix time in seconds."""
    value: float


@dataclass(frozen=True)
class EpochMillis:
    """Unix time in milliseconds."""
    value: float


@dataclass(frozen=True)
class IsoString:
    """A date string, parsed lazily."""
    value: str


@dataclass(frozen=True)
class Preparsed:
    """An already-parsed datetime."""
    value: datetime


@dataclass(frozen=True)
class Missing:
    """No usable date."""


TaggedDate = Union[EpochSeconds, EpochMillis, IsoString, Preparsed, Missing]


def classify(value: Any) -> TaggedDate:
    """
    Classify a raw date value without resolving it.

    Args:
        value: Anything read from a document.

    Returns:
        The tagged representation of the value.
    """
    if not value:
        return Missing()

    if isinstance(value, Mapping):
        for key in ("_seconds", "seconds"):
            seconds = _as_seconds(value.get(key))
            if seconds is not None:
                return EpochMillis(seconds * 1000)
        return Missing()

    # bool is an int subclass but never a date
    if isinstance(value, bool):
        return Missing()

    if isinstance(value, (int, float)):
        if abs(value) > MILLISECONDS_THRESHOLD:
            return EpochMillis(value)
        return EpochSeconds(value)

    if isinstance(value, str):
        return IsoString(value.strip())

    if isinstance(value, datetime):
        return Preparsed(value)

    if isinstance(value, date):
        return Preparsed(datetime(value.year, value.month, value.day))

    return Missing()


def _as_seconds(value: Any) -> Optional[float]:
    # Numeric strings count, as they do in the web client
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _from_timestamp(seconds: float) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return EPOCH


def parse_iso(text: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 string into an aware UTC datetime.

    Accepts a trailing ``Z``. Naive values are taken as UTC.
    Returns None when the string is not a date.
    """
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(parsed: datetime) -> datetime:
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date_string(text: str) -> Optional[datetime]:
    """
    Parse a date string in any of the layouts stored by clients.

    Tries ISO-8601 first, then RFC 2822 (``Mon, 15 Jan 2024 10:00:00 GMT``),
    then the slash and month-name layouts in ``DATE_FORMATS``.
    Naive values are taken as UTC. Returns None when nothing matches.
    """
    parsed = parse_iso(text)
    if parsed is not None or not text:
        return parsed

    try:
        return _as_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    for layout in DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, layout))
        except ValueError:
            continue
    return None


def to_instant(tagged: TaggedDate) -> datetime:
    """Resolve a tagged date to an aware UTC instant."""
    if isinstance(tagged, EpochSeconds):
        return _from_timestamp(tagged.value)
    if isinstance(tagged, EpochMillis):
        return _from_timestamp(tagged.value / 1000)
    if isinstance(tagged, IsoString):
        return parse_date_string(tagged.value) or EPOCH
    if isinstance(tagged, Preparsed):
        if tagged.value.tzinfo is None:
            return tagged.value.replace(tzinfo=timezone.utc)
        return tagged.value
    return EPOCH


def normalize(value: Any) -> datetime:
    """
    Normalize any date representation to an instant.

    Never raises; unusable input yields the epoch.

    Example:
        normalize(1700000000) == normalize(1700000000000)
    """
    return to_instant(classify(value))


def first_present(record: Mapping[str, Any], keys: Iterable[str] = CREATED_AT_KEYS) -> Any:
    """Return the first truthy value among ``keys`` in ``record``."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def parse_day(text: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` activity key; None if it is not one."""
    if not isinstance(text, str):
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def utc_now() -> datetime:
    """Current aware UTC time."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time in the ISO format stored in documents."""
    return utc_now().isoformat().replace("+00:00", "Z")
