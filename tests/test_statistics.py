import datetime as dt

from field_service.schemas.service_order import ServiceStatus
from field_service.services.statistics_service import (
    StatisticsService,
    is_future_date,
    is_same_day,
    is_today,
)


def test_three_orders_one_per_status(clients, order_factory, today):
    orders = [
        order_factory("OS-100001", clients[0], status=ServiceStatus.WAITING, day=today + dt.timedelta(days=2)),
        order_factory("OS-100002", clients[1], status=ServiceStatus.IN_PROGRESS, day=today - dt.timedelta(days=1)),
        order_factory("OS-100003", clients[2], status=ServiceStatus.COMPLETED, day=today),
    ]
    stats = StatisticsService.compute_stats(orders, today)
    assert stats.total == 3
    assert stats.waiting_count == 1
    assert stats.in_progress_count == 1
    assert stats.completed_count == 1
    # completed but scheduled today still counts
    assert stats.due_today_count == 1


def test_stats_over_fixture_orders(orders, today):
    stats = StatisticsService.compute_stats(orders, today)
    assert stats.model_dump() == {
        "total": 4,
        "waiting_count": 2,
        "in_progress_count": 1,
        "completed_count": 1,
        "due_today_count": 2,
    }


def test_today_may_be_a_datetime(orders, today):
    late_evening = dt.datetime.combine(today, dt.time(23, 59), tzinfo=dt.timezone(dt.timedelta(hours=-3)))
    assert StatisticsService.compute_stats(orders, late_evening).due_today_count == 2


def test_empty_collection():
    stats = StatisticsService.compute_stats([], dt.date(2025, 1, 1))
    assert stats.total == 0
    assert stats.due_today_count == 0


def test_board_columns(orders, order_factory, clients, today):
    overdue = order_factory("OS-100009", clients[1], day=today - dt.timedelta(days=3))
    board = StatisticsService.board([*orders, overdue], today)
    assert [o.id for o in board.waiting_today] == ["OS-284719"]
    assert [o.id for o in board.in_progress] == ["OS-518294"]
    assert [o.id for o in board.completed] == ["OS-508283"]
    assert [o.id for o in board.scheduled_future] == ["OS-730516"]


def test_calendar_helpers(today):
    morning = dt.datetime.combine(today, dt.time(8, 0))
    night = dt.datetime.combine(today, dt.time(22, 30))
    assert is_same_day(morning, night)
    assert is_same_day(morning, today)
    assert not is_same_day(today, today + dt.timedelta(days=1))
    assert is_today(night, today)
    assert is_future_date(today + dt.timedelta(days=1), today)
    assert not is_future_date(night, today)
