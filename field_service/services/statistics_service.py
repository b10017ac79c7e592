"""
Service layer for order statistics.

The counters feed the dashboard cards: total orders, one count per
status and the number of orders due today.  "Due today" compares only
the calendar day of the scheduled date with the caller's current day;
it does not look at the status, so an order completed this morning is
still due today.

The module also exposes the calendar helpers used by the dashboard
(``is_same_day``, ``is_today``, ``is_future_date``).  They accept
either ``date`` or ``datetime`` values and ignore the time of day.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.dates import DateLike, calendar_day, local_today
from ..schemas.service_order import ServiceOrder, ServiceStatus
from ..schemas.statistics import ServiceBoard, ServiceOrderStats


def is_same_day(first: DateLike, second: DateLike) -> bool:
    """True when both values fall on the same year, month and day."""
    return calendar_day(first) == calendar_day(second)


def is_today(value: DateLike, today: Optional[DateLike] = None) -> bool:
    return calendar_day(value) == local_today(today)


def is_future_date(value: DateLike, today: Optional[DateLike] = None) -> bool:
    """True when ``value`` is on a later calendar day than ``today``."""
    return calendar_day(value) > local_today(today)


class StatisticsService:
    """Aggregated counters and dashboard grouping for service orders."""

    @classmethod
    def compute_stats(
        cls,
        orders: Sequence[ServiceOrder],
        today: Optional[DateLike] = None,
    ) -> ServiceOrderStats:
        """Count orders by status and by "due today".

        Parameters
        ----------
        orders : Sequence[ServiceOrder]
            Orders to aggregate.
        today : date | datetime, optional
            The caller's current day.  Defaults to the local date.

        Returns
        -------
        ServiceOrderStats
            ``total``, one count per status and ``due_today_count``.
        """
        today = local_today(today)
        by_status = {status: 0 for status in ServiceStatus}
        due_today = 0
        for order in orders:
            by_status[order.status] += 1
            if is_same_day(order.date, today):
                due_today += 1

        stats = ServiceOrderStats(
            total=len(orders),
            waiting_count=by_status[ServiceStatus.WAITING],
            in_progress_count=by_status[ServiceStatus.IN_PROGRESS],
            completed_count=by_status[ServiceStatus.COMPLETED],
            due_today_count=due_today,
        )
        logging.getLogger(__name__).debug("Computed stats for %s: %s", today, stats)
        return stats

    @classmethod
    def board(
        cls,
        orders: Sequence[ServiceOrder],
        today: Optional[DateLike] = None,
    ) -> ServiceBoard:
        """Group orders into the dashboard columns, keeping input order."""
        today = local_today(today)
        board = ServiceBoard()
        for order in orders:
            if order.status == ServiceStatus.IN_PROGRESS:
                board.in_progress.append(order)
            elif order.status == ServiceStatus.COMPLETED:
                board.completed.append(order)
            elif is_same_day(order.date, today):
                board.waiting_today.append(order)
            elif is_future_date(order.date, today):
                board.scheduled_future.append(order)
        return board
