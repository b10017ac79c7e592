"""
Pydantic models for service orders ("OS").

A service order references its client by ``client_id`` and keeps a
copy of the client's name taken when the order was created.  The copy
is never refreshed: renaming a client later does not rewrite existing
orders.

Dates follow two conventions:

* ``date`` is a calendar day (``datetime.date``).  A ``datetime`` is
  accepted and truncated to its day.
* ``created_at``, ``actual_start_time`` and ``actual_end_time`` are
  instants (``datetime``).
"""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from ..core.dates import calendar_day
from .validation import ValidationResult


class ServiceStatus(str, Enum):
    """Lifecycle states of a service order."""

    WAITING = "aguardando"
    IN_PROGRESS = "em_andamento"
    COMPLETED = "concluido"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ServiceOrderForm(BaseModel):
    """Payload of the "new service order" dialog.

    ``status`` defaults to Waiting; the dialog lets the operator pick
    another initial status, which ``ServiceOrderService`` applies
    through the status workflow after creation.
    """

    client_id: Optional[str] = None
    type: str = ""
    description: str = ""
    date: Optional[dt.date] = None
    scheduled_time: Optional[str] = Field(None, description="Time of day, HH:MM")
    status: ServiceStatus = ServiceStatus.WAITING

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("date", mode="before")
    @classmethod
    def truncate_to_day(cls, value):
        return calendar_day(value)

    @field_validator("client_id", "scheduled_time", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class ServiceOrderUpdate(BaseModel):
    """Edit of an existing order.

    Fields left as ``None`` keep their current value, except
    ``scheduled_time``: when it is sent at all, blank or ``None`` clears
    the time, as emptying the time input does in the dialog.
    ``note`` is not stored on its own; it is appended to the
    description with the current date.
    """

    type: Optional[str] = None
    description: Optional[str] = None
    scheduled_time: Optional[str] = None
    status: Optional[ServiceStatus] = None
    note: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("scheduled_time", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class ServiceOrder(BaseModel):
    """Stored service order record."""

    id: str = Field(..., description="Tag plus six digits, e.g. OS-457892")
    client_id: str
    client_name: str
    type: str
    description: str
    date: dt.date
    scheduled_time: Optional[str] = None
    actual_start_time: Optional[dt.datetime] = None
    actual_end_time: Optional[dt.datetime] = None
    status: ServiceStatus = ServiceStatus.WAITING
    created_at: dt.datetime

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @field_validator("date", mode="before")
    @classmethod
    def truncate_to_day(cls, value):
        return calendar_day(value)


class ServiceOrderSubmission(BaseModel):
    """Outcome of submitting the service order form.

    Mirrors ``ClientSubmission``: on validation failure the collection
    is returned unchanged and ``order`` is ``None``.
    """

    validation: ValidationResult
    orders: List[ServiceOrder]
    order: Optional[ServiceOrder] = None
