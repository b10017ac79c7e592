"""
Pydantic models for order statistics and the dashboard board.
"""

from typing import List

from pydantic import BaseModel, Field

from .service_order import ServiceOrder


class ServiceOrderStats(BaseModel):
    """Counts derived from a collection of service orders.

    ``due_today_count`` ignores status: a completed order scheduled
    for today is still due today.
    """

    total: int = 0
    waiting_count: int = 0
    in_progress_count: int = 0
    completed_count: int = 0
    due_today_count: int = 0


class ServiceBoard(BaseModel):
    """Orders grouped into the four dashboard columns.

    * ``waiting_today``: Waiting and scheduled for today.
    * ``in_progress``: In progress, any date.
    * ``completed``: Completed, any date.
    * ``scheduled_future``: Waiting and scheduled after today.

    Waiting orders scheduled in the past appear in none of the
    columns.
    """

    waiting_today: List[ServiceOrder] = Field(default_factory=list)
    in_progress: List[ServiceOrder] = Field(default_factory=list)
    completed: List[ServiceOrder] = Field(default_factory=list)
    scheduled_future: List[ServiceOrder] = Field(default_factory=list)
