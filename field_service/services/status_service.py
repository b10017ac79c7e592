"""
Status workflow for service orders.

The workflow has three states (Waiting, In progress, Completed) and is
deliberately non-strict: any state can be requested from any other.
What a transition does to the execution timestamps depends only on
the target state:

* -> In progress: record ``actual_start_time`` unless already recorded.
* -> Completed: record ``actual_end_time`` unless already recorded.
* -> Waiting: clear both timestamps (the order is treated as never
  having run).

``StatusWorkflow.transition`` computes those effects without touching
any record; ``apply_status_change`` applies them and returns a new
order.  Permission rules such as "completed orders are read-only" are
not checked here; they belong to the caller.
"""

import datetime as dt
import logging
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from ..schemas.service_order import ServiceOrder, ServiceStatus


class TimestampEffect(str, Enum):
    SET_START_IF_ABSENT = "set_start_if_absent"
    SET_END_IF_ABSENT = "set_end_if_absent"
    CLEAR_EXECUTION_TIMES = "clear_execution_times"


class StatusTransition(NamedTuple):
    prior: ServiceStatus
    target: ServiceStatus
    effects: Tuple[TimestampEffect, ...]


_EFFECTS_BY_TARGET = {
    ServiceStatus.WAITING: (TimestampEffect.CLEAR_EXECUTION_TIMES,),
    ServiceStatus.IN_PROGRESS: (TimestampEffect.SET_START_IF_ABSENT,),
    ServiceStatus.COMPLETED: (TimestampEffect.SET_END_IF_ABSENT,),
}


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class StatusWorkflow:
    """State machine governing a service order's lifecycle."""

    initial_status = ServiceStatus.WAITING

    @classmethod
    def transition(cls, prior: ServiceStatus, target: ServiceStatus) -> StatusTransition:
        """Describe the move from ``prior`` to ``target``.

        Every pair is allowed.  The prior state is carried for logging
        and auditing only; the effects depend on the target alone.
        """
        prior = ServiceStatus(prior)
        target = ServiceStatus(target)
        return StatusTransition(prior, target, _EFFECTS_BY_TARGET[target])

    @classmethod
    def apply_status_change(
        cls,
        order: ServiceOrder,
        target: ServiceStatus,
        now: Optional[dt.datetime] = None,
    ) -> ServiceOrder:
        """Return a copy of ``order`` moved to ``target``.

        Fields other than ``status`` and the two execution timestamps
        are passed through unchanged.  Applying the same target twice
        leaves the timestamps of the first application in place.

        Parameters
        ----------
        order : ServiceOrder
            Current record; it is not modified.
        target : ServiceStatus
            Requested status.
        now : datetime, optional
            Instant recorded by the "set" effects.  Defaults to the
            current UTC time.
        """
        logger = logging.getLogger(__name__)
        step = cls.transition(order.status, target)
        now = now or utc_now()

        start = order.actual_start_time
        end = order.actual_end_time
        for effect in step.effects:
            if effect is TimestampEffect.SET_START_IF_ABSENT:
                if start is None:
                    start = now
            elif effect is TimestampEffect.SET_END_IF_ABSENT:
                if end is None:
                    end = now
            elif effect is TimestampEffect.CLEAR_EXECUTION_TIMES:
                start = None
                end = None

        logger.info(
            "Service order %s: %s -> %s",
            order.id,
            step.prior.value,
            step.target.value,
        )
        return order.model_copy(
            update={
                "status": step.target,
                "actual_start_time": start,
                "actual_end_time": end,
            }
        )

    @classmethod
    def start(cls, order: ServiceOrder, now: Optional[dt.datetime] = None) -> ServiceOrder:
        return cls.apply_status_change(order, ServiceStatus.IN_PROGRESS, now)

    @classmethod
    def complete(cls, order: ServiceOrder, now: Optional[dt.datetime] = None) -> ServiceOrder:
        return cls.apply_status_change(order, ServiceStatus.COMPLETED, now)

    @classmethod
    def reset(cls, order: ServiceOrder) -> ServiceOrder:
        return cls.apply_status_change(order, ServiceStatus.WAITING)
