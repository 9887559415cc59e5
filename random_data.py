"""
Bounded random primitives used by the product generators.

Numbers, strings and choices draw from the module-level ``random`` source;
dates and barcodes come from a shared ``Faker`` instance. Seeding both
(``random.seed`` and ``Faker.seed``) makes a whole generated payload
reproducible.
"""
import random
import string
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, TypeVar

from faker import Faker

from exceptions import InvalidArgument

T = TypeVar("T")

fake = Faker()

ALPHANUMERIC = string.ascii_uppercase + string.ascii_lowercase + string.digits
MAX_STRING_LENGTH = 100
DEFAULT_DATE_WINDOW = timedelta(days=365)


def random_string(length: int = 10) -> str:
    """Alphanumeric string of exactly ``length`` characters (0 gives "")."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgument(f"Length must be an integer, got {length!r}")
    if length < 0 or length > MAX_STRING_LENGTH:
        raise InvalidArgument(
            f"Length must be between 0 and {MAX_STRING_LENGTH} characters, got {length}"
        )
    return "".join(random.choice(ALPHANUMERIC) for _ in range(length))


def random_letters(length: int = 3) -> str:
    return "".join(random.choice(string.ascii_uppercase) for _ in range(length))


def random_ean13() -> str:
    """13 digit EAN barcode with a valid check digit."""
    return fake.ean13()


def random_int(minimum: int, maximum: int) -> int:
    if minimum > maximum:
        raise InvalidArgument(f"minimum ({minimum}) must not exceed maximum ({maximum})")
    return random.randint(minimum, maximum)


def random_float(minimum: float, maximum: float, decimals: Optional[int] = 2) -> float:
    """
    Uniform float in [minimum, maximum].

    With ``decimals`` set (currency, ratings) the value is rounded and then
    clamped, so rounding never pushes it outside the requested range.
    """
    if minimum > maximum:
        raise InvalidArgument(f"minimum ({minimum}) must not exceed maximum ({maximum})")
    value = random.uniform(minimum, maximum)
    if decimals is None:
        return value
    return min(max(round(value, decimals), minimum), maximum)


def random_choice(options: Sequence[T]) -> T:
    if not options:
        raise InvalidArgument("Cannot choose from an empty set of options")
    return random.choice(options)


def random_sample(options: Sequence[T], count: int) -> list[T]:
    if count < 0 or count > len(options):
        raise InvalidArgument(f"Cannot pick {count} distinct values out of {len(options)}")
    return random.sample(list(options), count)


def random_date(start: Optional[datetime] = None, end: Optional[datetime] = None) -> datetime:
    """Random instant between ``start`` and ``end`` inclusive.

    Defaults to the one-year window that ends now. Naive datetimes are taken
    as UTC; the result is always UTC-aware.
    """
    end = _as_utc(end) if end else datetime.now(timezone.utc)
    start = _as_utc(start) if start else end - DEFAULT_DATE_WINDOW
    if start > end:
        raise InvalidArgument(f"start ({start.isoformat()}) is after end ({end.isoformat()})")
    moment = fake.date_time_between(start_date=start, end_date=end, tzinfo=timezone.utc)
    # Faker works on whole-second timestamps
    return min(max(moment, start), end).astimezone(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_iso(moment: datetime) -> str:
    # 2024-05-23T08:56:21.618Z, same shape the service returns
    return _as_utc(moment).astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
