"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields and
mirror the reference deployment (a Brazilian HVAC/refrigeration
field-service shop).  Hosts embedding the core may also build their
own ``Settings`` instance and pass it to ``create_core``.
"""

import os
from dataclasses import dataclass
from typing import Tuple


DEFAULT_SERVICE_TYPES: Tuple[str, ...] = (
    "Manutenção Preventiva",
    "Manutenção Corretiva",
    "Instalação",
    "Reparo",
    "Reparo Urgente",
    "Limpeza",
    "Recarga de Gás",
)


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass
class Settings:
    """Core settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Field Service Core")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Closed catalog of service categories.  Override with a
    # comma‑separated list, e.g. SERVICE_TYPES="Instalação,Reparo".
    service_types: Tuple[str, ...] = (
        _split_csv(os.getenv("SERVICE_TYPES", "")) or DEFAULT_SERVICE_TYPES
    )

    # Service orders are tagged "OS-" + six digits; clients get the
    # bare six digits.
    service_order_id_prefix: str = os.getenv("SERVICE_ORDER_ID_PREFIX", "OS-")
    id_min: int = 100000
    id_max: int = 999999

    # Random draws allowed per identifier before falling back to a
    # draw from the explicit set of free values.
    id_max_attempts: int = int(os.getenv("ID_MAX_ATTEMPTS", "1000"))

    # One of ``orphan``, ``cascade`` or ``block``.  See
    # ``ClientDeletePolicy`` in ``services.client_service``.
    client_delete_policy: str = os.getenv("CLIENT_DELETE_POLICY", "orphan")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
