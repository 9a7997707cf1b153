"""
Recurrence expansion for service schedules.

Pure date arithmetic with no database access: turns a customer's frequency
policy and an anchor date into the list of dates that should carry a job.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from dateutil.relativedelta import relativedelta

from ...models import FrequencyType

QUARTERLY_INTERVAL_DAYS = 91  # ~3 months
SEMIANNUAL_INTERVAL_DAYS = 182  # ~6 months
DEFAULT_CUSTOM_INTERVAL_DAYS = 90

SATURDAY = 5
SUNDAY = 6


def normalize_date(value: Union[date, datetime]) -> date:
    """Drop any time-of-day component"""
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_interval_days(
    frequency_type: Optional[str], custom_interval_days: Optional[int] = None
) -> int:
    """
    Number of days between consecutive services.

    Unknown frequency types are treated as quarterly and a missing or
    non-positive custom interval falls back to 90 days.
    """
    frequency = (frequency_type or "").strip().upper()

    if frequency == FrequencyType.SEMIANNUAL:
        return SEMIANNUAL_INTERVAL_DAYS
    if frequency == FrequencyType.CUSTOM:
        if (
            isinstance(custom_interval_days, int)
            and not isinstance(custom_interval_days, bool)
            and custom_interval_days > 0
        ):
            return custom_interval_days
        return DEFAULT_CUSTOM_INTERVAL_DAYS
    return QUARTERLY_INTERVAL_DAYS


def horizon_end(start_date: Union[date, datetime], horizon_months: int) -> date:
    """Anchor advanced by whole calendar months (clamped to month end)"""
    return normalize_date(start_date) + relativedelta(months=horizon_months)


def shift_to_weekday(day: date) -> date:
    """Move a Saturday or Sunday to the following Monday"""
    if day.weekday() == SATURDAY:
        return day + timedelta(days=2)
    if day.weekday() == SUNDAY:
        return day + timedelta(days=1)
    return day


def compute_schedule_dates(
    start_date: Union[date, datetime],
    frequency_type: Optional[str],
    custom_interval_days: Optional[int] = None,
    horizon_months: int = 12,
    occupied: Iterable[Union[date, datetime]] = (),
    shift_weekends: bool = False,
) -> List[date]:
    """
    Dates on which a new job should be created, in increasing order.

    Candidates start at the anchor and step by the resolved interval while
    they are on or before the horizon end. Dates in ``occupied`` are skipped.
    When ``shift_weekends`` is set each weekend candidate moves to Monday;
    the recurrence itself keeps stepping from the unshifted date.
    """
    start = normalize_date(start_date)
    end = horizon_end(start, horizon_months)
    step = timedelta(days=resolve_interval_days(frequency_type, custom_interval_days))

    taken = {normalize_date(d) for d in occupied}
    dates: List[date] = []

    current = start
    while current <= end:
        candidate = shift_to_weekday(current) if shift_weekends else current
        if candidate <= end and candidate not in taken:
            dates.append(candidate)
            taken.add(candidate)
        current += step

    return dates
