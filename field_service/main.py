"""
Main entrypoint for the field-service core.

``create_core`` assembles the pieces a host application needs:
logging, the identifier generator and the configured service catalog
and client deletion policy.  It returns a ``FieldServiceCore`` whose
methods forward to the services with that configuration applied, e.g.::

    core = create_core()
    submission = core.submit_client(clients, ClientForm(...))
    if submission.validation.is_valid:
        clients = submission.clients

Hosts that prefer to call the services directly can do so; the facade
only saves them from passing the generator and settings around.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .core.config import Settings, settings as default_settings
from .core.dates import DateLike
from .core.logging_config import setup_logging
from .schemas.client import Client, ClientForm, ClientSubmission
from .schemas.service_order import (
    ServiceOrder,
    ServiceOrderForm,
    ServiceOrderSubmission,
    ServiceOrderUpdate,
    ServiceStatus,
)
from .schemas.statistics import ServiceBoard, ServiceOrderStats
from .schemas.validation import ValidationResult
from .services.client_service import ClientDeletePolicy, ClientService
from .services.identifier_service import EntityKind, IdentifierGenerator
from .services.search_service import SearchService
from .services.service_order_service import ServiceOrderService
from .services.statistics_service import StatisticsService
from .services.status_service import StatusWorkflow
from .services.validation_service import ValidationService


class FieldServiceCore:
    """Configured access point to the core operations."""

    def __init__(self, config: Settings, ids: IdentifierGenerator):
        self.settings = config
        self.ids = ids
        self.service_types: Tuple[str, ...] = tuple(config.service_types)
        self.delete_policy = ClientDeletePolicy(config.client_delete_policy)

    def load(self, clients: Iterable[Client] = (), orders: Iterable[ServiceOrder] = ()) -> None:
        """Register identifiers of records created outside this process."""
        self.ids.register(EntityKind.CLIENT, (client.id for client in clients))
        self.ids.register(EntityKind.SERVICE_ORDER, (order.id for order in orders))

    # Clients

    def validate_client(self, form: ClientForm) -> ValidationResult:
        return ValidationService.validate_client(form)

    def submit_client(
        self,
        clients: Sequence[Client],
        form: ClientForm,
        editing_id: Optional[str] = None,
        now: Optional[dt.datetime] = None,
    ) -> ClientSubmission:
        return ClientService.submit(clients, form, self.ids, editing_id=editing_id, now=now)

    def delete_client(
        self,
        clients: Sequence[Client],
        client_id: str,
        orders: Sequence[ServiceOrder] = (),
    ) -> Tuple[List[Client], List[ServiceOrder]]:
        return ClientService.delete_client(clients, client_id, orders, self.delete_policy)

    def search_clients(self, clients: Sequence[Client], query: str) -> List[Client]:
        return SearchService.search_clients(clients, query)

    # Service orders

    def validate_service_order(
        self, form: ServiceOrderForm, today: Optional[DateLike] = None
    ) -> ValidationResult:
        return ValidationService.validate_service_order(form, today, self.service_types)

    def validate_service_order_edit(self, update: ServiceOrderUpdate) -> ValidationResult:
        return ValidationService.validate_service_order_edit(update, self.service_types)

    def submit_service_order(
        self,
        orders: Sequence[ServiceOrder],
        clients: Sequence[Client],
        form: ServiceOrderForm,
        today: Optional[DateLike] = None,
        now: Optional[dt.datetime] = None,
    ) -> ServiceOrderSubmission:
        return ServiceOrderService.submit(
            orders, clients, form, self.ids, today=today, now=now, service_types=self.service_types
        )

    def edit_service_order(
        self,
        orders: Sequence[ServiceOrder],
        order_id: str,
        update: ServiceOrderUpdate,
        now: Optional[dt.datetime] = None,
        today: Optional[DateLike] = None,
    ) -> Tuple[ValidationResult, List[ServiceOrder]]:
        """Validate and apply an edit; the collection is unchanged on failure."""
        validation = self.validate_service_order_edit(update)
        if not validation.is_valid:
            return validation, list(orders)
        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            raise ValueError(f"Service order {order_id} not found")
        edited = ServiceOrderService.apply_edit(order, update, now, today)
        return validation, ServiceOrderService.replace(orders, edited)

    def apply_status_change(
        self, order: ServiceOrder, target: ServiceStatus, now: Optional[dt.datetime] = None
    ) -> ServiceOrder:
        return StatusWorkflow.apply_status_change(order, target, now)

    def change_status(
        self,
        orders: Sequence[ServiceOrder],
        order_id: str,
        target: ServiceStatus,
        now: Optional[dt.datetime] = None,
    ) -> List[ServiceOrder]:
        return ServiceOrderService.change_status(orders, order_id, target, now)

    def search_service_orders(
        self,
        orders: Sequence[ServiceOrder],
        query: str,
        clients: Optional[Sequence[Client]] = None,
        status: Optional[ServiceStatus] = None,
    ) -> List[ServiceOrder]:
        return SearchService.search_service_orders(orders, query, clients, status)

    # Statistics

    def compute_stats(
        self, orders: Sequence[ServiceOrder], today: Optional[DateLike] = None
    ) -> ServiceOrderStats:
        return StatisticsService.compute_stats(orders, today)

    def board(self, orders: Sequence[ServiceOrder], today: Optional[DateLike] = None) -> ServiceBoard:
        return StatisticsService.board(orders, today)


def create_core(config: Optional[Settings] = None, ids: Optional[IdentifierGenerator] = None) -> FieldServiceCore:
    """Create and configure a ``FieldServiceCore``.

    Logging is set up first so that everything below can log.  A new
    ``IdentifierGenerator`` is built unless one is supplied, so two
    cores never share registries by accident.

    Parameters
    ----------
    config : Settings, optional
        Configuration; defaults to the environment-derived settings.
    ids : IdentifierGenerator, optional
        Generator to reuse, e.g. one shared by several cores in the same
        process.
    """
    config = config or default_settings
    setup_logging(config.log_level, config.log_file or None)
    core = FieldServiceCore(config, ids or IdentifierGenerator(config))
    logging.getLogger(__name__).info(
        "%s ready: %s service types, client delete policy %s",
        config.project_name,
        len(core.service_types),
        core.delete_policy.value,
    )
    return core
