"""
Identifier generation for clients and service orders.

Client identifiers are six random ASCII digits (``"457892"``); service
order identifiers prefix the same six digits with a short tag
(``"OS-457892"``).  Each entity kind keeps its own registry of issued
values, so ``"457892"`` and ``"OS-457892"`` may coexist.

The generator is an explicit object owned by the caller rather than
module state, so tests can build a fresh one (or call ``reset``).  The
check-then-insert step runs under a lock, which keeps identifiers
unique when several threads submit forms at the same time.
"""

import logging
import random
import threading
from enum import Enum
from typing import Iterable, Optional, Set

from ..core.config import Settings, settings as default_settings


class EntityKind(str, Enum):
    CLIENT = "client"
    SERVICE_ORDER = "service_order"


class IdentifierSpaceExhausted(RuntimeError):
    """Raised when every value of an entity kind's identifier space is taken."""

    def __init__(self, kind: EntityKind, capacity: int):
        self.kind = kind
        self.capacity = capacity
        super().__init__(f"All {capacity} {kind.value} identifiers have been issued")


class IdentifierGenerator:
    """Issues unique identifiers per entity kind.

    Parameters
    ----------
    config : Settings, optional
        Supplies the numeric range, the service order tag and the
        number of random draws tried before picking from the free
        values directly.  Defaults to the module level settings.
    rng : random.Random, optional
        Source of randomness; pass a seeded instance for reproducible
        sequences.
    """

    def __init__(self, config: Optional[Settings] = None, rng: Optional[random.Random] = None):
        config = config or default_settings
        if config.id_min > config.id_max:
            raise ValueError("id_min must not be greater than id_max")
        self._low = config.id_min
        self._high = config.id_max
        self._prefix = config.service_order_id_prefix
        self._max_attempts = max(1, config.id_max_attempts)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()
        self._issued = {kind: set() for kind in EntityKind}

    @property
    def capacity(self) -> int:
        """Number of distinct identifiers available per entity kind."""
        return self._high - self._low + 1

    def new_client_id(self) -> str:
        return self._issue(EntityKind.CLIENT)

    def new_service_order_id(self) -> str:
        return self._issue(EntityKind.SERVICE_ORDER)

    def format(self, kind: EntityKind, number: int) -> str:
        if kind is EntityKind.SERVICE_ORDER:
            return f"{self._prefix}{number}"
        return str(number)

    def register(self, kind: EntityKind, identifiers: Iterable[str]) -> None:
        """Mark identifiers of existing records as already issued.

        Used when the host loads records that were created elsewhere,
        so newly generated values never collide with them.
        """
        with self._lock:
            self._issued[kind].update(identifiers)

    def is_issued(self, kind: EntityKind, identifier: str) -> bool:
        with self._lock:
            return identifier in self._issued[kind]

    def issued_count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._issued[kind])

    def reset(self) -> None:
        """Forget every issued identifier."""
        with self._lock:
            for registry in self._issued.values():
                registry.clear()

    def _issue(self, kind: EntityKind) -> str:
        logger = logging.getLogger(__name__)
        with self._lock:
            registry = self._issued[kind]
            if self._in_range_count(kind, registry) >= self.capacity:
                logger.error("Identifier space for %s exhausted (%s issued)", kind.value, len(registry))
                raise IdentifierSpaceExhausted(kind, self.capacity)

            for attempt in range(self._max_attempts):
                candidate = self.format(kind, self._rng.randint(self._low, self._high))
                if candidate not in registry:
                    registry.add(candidate)
                    return candidate
                logger.debug("Identifier %s already issued (attempt %s)", candidate, attempt + 1)

            logger.warning(
                "No free %s identifier after %s random draws; drawing from remaining values",
                kind.value,
                self._max_attempts,
            )
            free = [
                number
                for number in range(self._low, self._high + 1)
                if self.format(kind, number) not in registry
            ]
            candidate = self.format(kind, self._rng.choice(free))
            registry.add(candidate)
            return candidate

    def _in_range_count(self, kind: EntityKind, registry: Set[str]) -> int:
        # Registered identifiers may come from elsewhere and fall outside
        # the configured range; only in-range ones consume capacity.
        if len(registry) < self.capacity:
            return len(registry)
        return sum(
            1
            for number in range(self._low, self._high + 1)
            if self.format(kind, number) in registry
        )
