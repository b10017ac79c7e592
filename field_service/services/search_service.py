"""
Free-text search over clients and service orders.

A single query box is matched against several fields at once:

* text fields (names, email, address, type, description) match
  case-insensitively on the trimmed query;
* identifiers match as case-insensitive substrings, so ``"os-12"``
  finds ``"OS-123456"`` and a partial client number finds the client;
* phone and tax id (CPF/CNPJ) compare digits only, so ``"11999887766"``
  finds ``"(11) 99988-7766"`` and ``"12345678900"`` finds
  ``"123.456.789-00"``.  The digit comparison is skipped when the
  query has no digits at all.

A record matches when any field matches.  There is no ranking: the
result keeps the input order.  A blank query returns every record.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..schemas.client import Client
from ..schemas.service_order import ServiceOrder, ServiceStatus
from .validation_service import digits_only


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


class SearchService:
    """Search and lookup helpers used by the client and order lists."""

    @classmethod
    def client_matches(cls, client: Client, query: str) -> bool:
        """Return True if ``client`` matches a non-blank ``query``."""
        text = query.strip().lower()
        digits = digits_only(query)
        return (
            _contains(client.name, text)
            or _contains(client.id, text)
            or _contains(client.email, text)
            or _contains(client.address, text)
            or (bool(digits) and digits in digits_only(client.cpf))
            or (bool(digits) and digits in digits_only(client.phone))
        )

    @classmethod
    def search_clients(cls, clients: Sequence[Client], query: str) -> List[Client]:
        """Filter ``clients`` by ``query`` preserving their order.

        Parameters
        ----------
        clients : Sequence[Client]
            Records to search.
        query : str
            Text typed by the user.  Blank means "no filter".

        Returns
        -------
        List[Client]
            Matching clients, in input order.
        """
        if not query or not query.strip():
            return list(clients)
        found = [client for client in clients if cls.client_matches(client, query)]
        logging.getLogger(__name__).debug(
            "Client search %r matched %s of %s", query, len(found), len(clients)
        )
        return found

    @classmethod
    def service_order_matches(
        cls,
        order: ServiceOrder,
        query: str,
        client_tax_ids: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Return True if ``order`` matches a non-blank ``query``.

        ``client_tax_ids`` maps client ids to their CPF/CNPJ so that an
        order can be found by its client's tax id.
        """
        text = query.strip().lower()
        digits = digits_only(query)
        tax_id = (client_tax_ids or {}).get(order.client_id, "")
        return (
            _contains(order.client_name, text)
            or _contains(order.type, text)
            or _contains(order.description, text)
            or _contains(order.client_id, text)
            or _contains(order.id, text)
            or (bool(digits) and digits in digits_only(tax_id))
        )

    @classmethod
    def search_service_orders(
        cls,
        orders: Sequence[ServiceOrder],
        query: str,
        clients: Optional[Sequence[Client]] = None,
        status: Optional[ServiceStatus] = None,
    ) -> List[ServiceOrder]:
        """Filter service orders by text and, optionally, by status.

        The status filter (``None`` means all statuses) is combined with
        the text match; a blank query only applies the status filter.
        """
        if status is not None:
            status = ServiceStatus(status)
        tax_ids = {client.id: client.cpf for client in clients or ()}
        blank = not query or not query.strip()

        found = [
            order
            for order in orders
            if (status is None or order.status == status)
            and (blank or cls.service_order_matches(order, query, tax_ids))
        ]
        logging.getLogger(__name__).debug(
            "Service order search %r (status=%s) matched %s of %s",
            query,
            status.value if status else "all",
            len(found),
            len(orders),
        )
        return found

    @classmethod
    def find_client(cls, clients: Sequence[Client], client_id: str) -> Optional[Client]:
        for client in clients:
            if client.id == client_id:
                return client
        return None

    @classmethod
    def orders_for_client(cls, orders: Sequence[ServiceOrder], client_id: str) -> List[ServiceOrder]:
        return [order for order in orders if order.client_id == client_id]
