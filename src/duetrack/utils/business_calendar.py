"""Business calendar helpers.

The domain layer never reads the clock. The host resolves "today" once per
command, in a single fixed time zone, and passes it down explicitly.
"""

from datetime import date, datetime
from typing import Optional

from dateutil import tz

DEFAULT_TIMEZONE = "America/Sao_Paulo"


def get_business_timezone(name: Optional[str] = None):
    """Return the tzinfo of the business calendar.

    Raises:
        ValueError: If the time zone name is unknown
    """
    zone_name = name or DEFAULT_TIMEZONE
    zone = tz.gettz(zone_name)
    if zone is None:
        raise ValueError(f"Unknown time zone '{zone_name}'")
    return zone


def business_today(
    timezone_name: Optional[str] = None, now: Optional[datetime] = None
) -> date:
    """Return the current calendar date in the business time zone.

    Args:
        timezone_name: IANA zone name (defaults to DEFAULT_TIMEZONE)
        now: Instant to convert; naive values are taken as UTC

    Returns:
        Calendar date of ``now`` in the business time zone
    """
    zone = get_business_timezone(timezone_name)
    if now is None:
        return datetime.now(zone).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz.UTC)
    return now.astimezone(zone).date()


def to_business_date(value: datetime, timezone_name: Optional[str] = None) -> date:
    """Reduce an instant to its calendar date in the business time zone.

    Naive datetimes and plain dates are already calendar values and are only
    truncated.
    """
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(get_business_timezone(timezone_name)).date()
