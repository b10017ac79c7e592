"""
Calendar-day helpers shared by the schemas and the services.

Scheduled dates are compared by calendar day only.  Callers may pass
either a ``date`` or a ``datetime`` wherever a day is expected; the
time of day is dropped.
"""

import datetime as dt
from typing import Optional, Union

DateLike = Union[dt.date, dt.datetime]


def calendar_day(value: DateLike) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def local_today(today: Optional[DateLike] = None) -> dt.date:
    """Return ``today`` as a calendar day, defaulting to the local date."""
    return calendar_day(today or dt.date.today())
