"""
Business logic for client records.

The presentation layer owns the list of clients and replaces it with
whatever these functions return; nothing here mutates its inputs.
Creating and editing go through ``submit``, which validates the form
first and leaves the collection untouched when validation fails.

Deleting a client that still has service orders is governed by
``ClientDeletePolicy``:

* ``ORPHAN``: remove the client only.  Its orders keep a ``client_id``
  that no longer resolves (and still show the client's name, which was
  copied into each order when it was created).
* ``CASCADE``: remove the client's orders as well.
* ``BLOCK``: refuse the deletion with ``ValueError``.
"""

import datetime as dt
import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..schemas.client import Client, ClientForm, ClientSubmission
from ..schemas.service_order import ServiceOrder
from .identifier_service import IdentifierGenerator
from .search_service import SearchService
from .status_service import utc_now
from .validation_service import ValidationService


class ClientDeletePolicy(str, Enum):
    ORPHAN = "orphan"
    CASCADE = "cascade"
    BLOCK = "block"


class ClientService:
    """Service for creating, editing and deleting clients."""

    @classmethod
    def create_client(
        cls,
        form: ClientForm,
        ids: IdentifierGenerator,
        now: Optional[dt.datetime] = None,
    ) -> Client:
        """Build a new client record from an already validated form."""
        client = Client(
            id=ids.new_client_id(),
            created_at=now or utc_now(),
            **form.model_dump(),
        )
        logging.getLogger(__name__).info("Created client %s (%s)", client.id, client.name)
        return client

    @classmethod
    def update_client(
        cls,
        clients: Sequence[Client],
        client_id: str,
        form: ClientForm,
    ) -> List[Client]:
        """Replace the editable fields of one client.

        ``id`` and ``created_at`` are kept.  Raises ``ValueError`` if the
        client does not exist.
        """
        if SearchService.find_client(clients, client_id) is None:
            raise ValueError(f"Client {client_id} not found")
        changes = form.model_dump()
        updated = [
            client.model_copy(update=changes) if client.id == client_id else client
            for client in clients
        ]
        logging.getLogger(__name__).info("Updated client %s", client_id)
        return updated

    @classmethod
    def submit(
        cls,
        clients: Sequence[Client],
        form: ClientForm,
        ids: IdentifierGenerator,
        editing_id: Optional[str] = None,
        now: Optional[dt.datetime] = None,
    ) -> ClientSubmission:
        """Validate the client form and create or edit a client.

        Parameters
        ----------
        clients : Sequence[Client]
            Current collection.
        form : ClientForm
            Submitted form.
        ids : IdentifierGenerator
            Issues the identifier of a new client.
        editing_id : str, optional
            Identifier of the client being edited; ``None`` creates a
            new client appended at the end of the collection.
        now : datetime, optional
            Creation instant for new clients.

        Returns
        -------
        ClientSubmission
            Validation result, resulting collection and the created or
            edited client (``None`` when validation failed).
        """
        validation = ValidationService.validate_client(form)
        if not validation.is_valid:
            return ClientSubmission(validation=validation, clients=list(clients))

        if editing_id is not None:
            updated = cls.update_client(clients, editing_id, form)
            client = SearchService.find_client(updated, editing_id)
            return ClientSubmission(validation=validation, clients=updated, client=client)

        client = cls.create_client(form, ids, now)
        return ClientSubmission(validation=validation, clients=[*clients, client], client=client)

    @classmethod
    def delete_client(
        cls,
        clients: Sequence[Client],
        client_id: str,
        orders: Sequence[ServiceOrder] = (),
        policy: ClientDeletePolicy = ClientDeletePolicy.ORPHAN,
    ) -> Tuple[List[Client], List[ServiceOrder]]:
        """Remove a client and apply ``policy`` to its service orders.

        Returns the new client and order collections.  Raises
        ``ValueError`` if the client does not exist, or if ``policy`` is
        ``BLOCK`` and orders still reference the client.
        """
        logger = logging.getLogger(__name__)
        policy = ClientDeletePolicy(policy)
        if SearchService.find_client(clients, client_id) is None:
            raise ValueError(f"Client {client_id} not found")

        linked = SearchService.orders_for_client(orders, client_id)
        if linked and policy is ClientDeletePolicy.BLOCK:
            raise ValueError(f"Client {client_id} has {len(linked)} service order(s) and cannot be deleted")

        remaining_clients = [client for client in clients if client.id != client_id]
        if policy is ClientDeletePolicy.CASCADE:
            remaining_orders = [order for order in orders if order.client_id != client_id]
            logger.info("Deleted client %s and %s service order(s)", client_id, len(linked))
        else:
            remaining_orders = list(orders)
            if linked:
                logger.warning(
                    "Deleted client %s; %s service order(s) keep a dangling reference",
                    client_id,
                    len(linked),
                )
            else:
                logger.info("Deleted client %s", client_id)
        return remaining_clients, remaining_orders
