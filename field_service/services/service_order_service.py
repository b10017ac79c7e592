"""
Business logic for service orders.

Orders are created from the "new order" form, edited from the detail
dialog and moved through the status workflow from the order cards.
As with clients, every operation returns new records and collections;
inputs are never modified.

Creating an order copies the client's current name into
``client_name``.  The copy is not refreshed when the client is later
renamed.

Field edits on a completed order are refused (completed orders are
read-only in the detail dialog).  Plain status changes through
``change_status`` are always allowed, including reopening a completed
order.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence

from ..core.dates import DateLike, local_today
from ..schemas.client import Client
from ..schemas.validation import ValidationResult
from ..schemas.service_order import (
    ServiceOrder,
    ServiceOrderForm,
    ServiceOrderSubmission,
    ServiceOrderUpdate,
    ServiceStatus,
)
from .identifier_service import IdentifierGenerator
from .search_service import SearchService
from .status_service import StatusWorkflow, utc_now
from .validation_service import ValidationService

NOTE_MARKER = "\U0001F4DD"  # memo emoji prefixed to appended notes


class ServiceOrderService:
    """Service for creating, editing and transitioning service orders."""

    @classmethod
    def create_service_order(
        cls,
        form: ServiceOrderForm,
        client: Client,
        ids: IdentifierGenerator,
        now: Optional[dt.datetime] = None,
    ) -> ServiceOrder:
        """Build a new order for ``client`` from a validated form.

        The order starts in the workflow's initial state.  If the form
        asks for another status, that status is then applied through
        ``StatusWorkflow`` so the execution timestamps are consistent
        with it.
        """
        now = now or utc_now()
        order = ServiceOrder(
            id=ids.new_service_order_id(),
            client_id=client.id,
            client_name=client.name,
            type=form.type,
            description=form.description,
            date=form.date,
            scheduled_time=form.scheduled_time,
            status=StatusWorkflow.initial_status,
            created_at=now,
        )
        if form.status != StatusWorkflow.initial_status:
            order = StatusWorkflow.apply_status_change(order, form.status, now)
        logging.getLogger(__name__).info(
            "Created service order %s for client %s (%s)", order.id, client.id, order.type
        )
        return order

    @classmethod
    def submit(
        cls,
        orders: Sequence[ServiceOrder],
        clients: Sequence[Client],
        form: ServiceOrderForm,
        ids: IdentifierGenerator,
        today: Optional[DateLike] = None,
        now: Optional[dt.datetime] = None,
        service_types: Optional[Iterable[str]] = None,
    ) -> ServiceOrderSubmission:
        """Validate the order form and append the new order.

        A ``client_id`` that does not resolve to a client in ``clients``
        is reported as a ``client`` error, the same as no selection.
        """
        validation = ValidationService.validate_service_order(form, today, service_types)
        client = SearchService.find_client(clients, form.client_id) if form.client_id else None
        if validation.is_valid and client is None:
            validation = ValidationResult.from_errors({"client": "Selecione um cliente"})
        if not validation.is_valid:
            return ServiceOrderSubmission(validation=validation, orders=list(orders))

        order = cls.create_service_order(form, client, ids, now)
        return ServiceOrderSubmission(validation=validation, orders=[*orders, order], order=order)

    @classmethod
    def apply_edit(
        cls,
        order: ServiceOrder,
        update: ServiceOrderUpdate,
        now: Optional[dt.datetime] = None,
        today: Optional[DateLike] = None,
    ) -> ServiceOrder:
        """Apply a field edit, optionally combined with a status change.

        ``note`` is appended to the description as a line stamped with
        ``today`` (the local date unless given).  When ``update.status``
        is given, the status workflow runs after the field changes, in
        the same commit, with ``now`` as the transition instant.  The
        update should have passed
        ``ValidationService.validate_service_order_edit``.

        Raises
        ------
        ValueError
            If the order is completed.
        """
        if order.status == ServiceStatus.COMPLETED:
            raise ValueError(f"Service order {order.id} is completed and cannot be edited")

        changes = {
            field: value
            for field, value in (("type", update.type), ("description", update.description))
            if value is not None
        }
        if "scheduled_time" in update.model_fields_set:
            changes["scheduled_time"] = update.scheduled_time
        if update.note and update.note.strip():
            description = changes.get("description", order.description)
            stamp = local_today(today).strftime("%d/%m/%Y")
            changes["description"] = f"{description}\n\n{NOTE_MARKER} {stamp}: {update.note.strip()}"

        edited = order.model_copy(update=changes)
        if update.status is not None:
            edited = StatusWorkflow.apply_status_change(edited, update.status, now)
        logging.getLogger(__name__).info("Edited service order %s (%s)", order.id, sorted(changes))
        return edited

    @classmethod
    def replace(cls, orders: Sequence[ServiceOrder], order: ServiceOrder) -> List[ServiceOrder]:
        """Swap the record with ``order.id`` for ``order``, keeping positions."""
        if not any(existing.id == order.id for existing in orders):
            raise ValueError(f"Service order {order.id} not found")
        return [order if existing.id == order.id else existing for existing in orders]

    @classmethod
    def change_status(
        cls,
        orders: Sequence[ServiceOrder],
        order_id: str,
        target: ServiceStatus,
        now: Optional[dt.datetime] = None,
    ) -> List[ServiceOrder]:
        """Run the status workflow on one order of the collection."""
        for order in orders:
            if order.id == order_id:
                return cls.replace(orders, StatusWorkflow.apply_status_change(order, target, now))
        raise ValueError(f"Service order {order_id} not found")
