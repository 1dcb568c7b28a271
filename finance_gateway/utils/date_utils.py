"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time
from typing import Tuple
from zoneinfo import ZoneInfo


def local_now(tz: ZoneInfo) -> datetime:
    """Current wall-clock time in ``tz`` as a naive datetime (storage format)"""
    return datetime.now(tz).replace(tzinfo=None)


def month_bounds(moment: datetime) -> Tuple[datetime, datetime]:
    """First instant and last instant (inclusive) of the month containing ``moment``"""
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    start = datetime(moment.year, moment.month, 1)
    end = datetime.combine(date(moment.year, moment.month, last_day), time.max)
    return start, end


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def day_end(day: date) -> datetime:
    return datetime.combine(day, time.max)
