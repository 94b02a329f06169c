"""
Time-Window Resolver - rolling date windows anchored to an explicit "now".

Windows are rolling, not calendar aligned: a week is the 7 days ending on
the anchor day and a month is the 30 days ending on it. Offsets move the
anchor by whole windows (1, 7 or 30 days), so consecutive offsets tile the
timeline without overlap.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Optional, Union

from ..models.analytics import DateWindow, OffsetRange
from ..models.enums import TimePeriod

logger = logging.getLogger(__name__)

END_OF_DAY = timedelta(days=1) - timedelta(milliseconds=1)  # 23:59:59.999

PERIOD_DAYS: Dict[TimePeriod, int] = {
    TimePeriod.DAY: 1,
    TimePeriod.WEEK: 7,
    TimePeriod.MONTH: 30,
}

LOOKAHEAD: Dict[TimePeriod, int] = {
    TimePeriod.DAY: 3,
    TimePeriod.WEEK: 4,
    TimePeriod.MONTH: 3,
}

_UNIT_NAMES: Dict[TimePeriod, str] = {
    TimePeriod.DAY: "day",
    TimePeriod.WEEK: "week",
    TimePeriod.MONTH: "month",
}


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the moment's day, keeping its tzinfo."""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def resolve_window(period: TimePeriod, offset: int, now: datetime) -> DateWindow:
    """
    Inclusive [start, end] range for `period` shifted `offset` windows from now.

    Args:
        period: day, week or month
        offset: 0 for the current window, negative for the past
        now: Reference time; the window's last day is now's day + offset windows

    Returns:
        DateWindow whose end is 23:59:59.999 on the anchor day
    """
    period = TimePeriod(period)
    span = PERIOD_DAYS[period]
    anchor = start_of_day(now) + timedelta(days=offset * span)
    end = anchor + END_OF_DAY
    start = anchor - timedelta(days=span - 1)
    logger.debug(f"Resolved {period.value} window offset={offset}: {start.isoformat()} .. {end.isoformat()}")
    return DateWindow(start=start, end=end)


def relative_label(period: TimePeriod, offset: int) -> str:
    """Human label such as "today", "last week" or "3 months ago"."""
    period = TimePeriod(period)
    if offset == 0:
        return "today" if period is TimePeriod.DAY else f"this {_UNIT_NAMES[period]}"
    if offset == -1:
        return "yesterday" if period is TimePeriod.DAY else f"last {_UNIT_NAMES[period]}"

    count = abs(offset)
    unit = _UNIT_NAMES[period] + ("s" if count != 1 else "")
    if offset < 0:
        return f"{count} {unit} ago"
    return f"in {count} {unit}"


def offset_for(period: TimePeriod, moment: Union[date, datetime], now: datetime) -> int:
    """Offset of the window that contains `moment`."""
    day = moment.date() if isinstance(moment, datetime) else moment
    days = (day - now.date()).days
    span = PERIOD_DAYS[TimePeriod(period)]
    # ceil(days / span): window k covers anchor days (k-1)*span+1 .. k*span
    return -((-days) // span)


def offset_range(
    period: TimePeriod,
    earliest: Optional[Union[date, datetime]],
    now: datetime
) -> OffsetRange:
    """
    Scrollable offsets: back to the window holding the earliest record, and a
    fixed lookahead forward. With no records the earliest date is today.
    """
    period = TimePeriod(period)
    lower = offset_for(period, earliest, now) if earliest is not None else 0
    return OffsetRange(lower=min(lower, 0), upper=LOOKAHEAD[period])


def bucket_unit(period: TimePeriod) -> str:
    """Chart bucket granularity: hourly bars for a day, daily otherwise."""
    return "hour" if TimePeriod(period) is TimePeriod.DAY else "day"


def bucket_start(moment: datetime, unit: str) -> datetime:
    """Truncate a timestamp to the start of its hour or day bucket."""
    if unit == "hour":
        return moment.replace(minute=0, second=0, microsecond=0)
    if unit == "day":
        return start_of_day(moment)
    raise ValueError(f"Unsupported bucket unit: {unit}")
