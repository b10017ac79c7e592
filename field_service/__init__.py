"""
Top‑level package for the field-service core.

The package holds the non-visual domain logic of a field-service
management tool: client and service-order ("OS") records, identifier
generation, form validation, the order status workflow, multi-field
search and order statistics.  Every operation is a synchronous
function over caller-supplied collections; the presentation layer
keeps the authoritative lists and replaces them with the results.

``create_core`` in ``field_service.main`` wires everything together.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .main import FieldServiceCore, create_core  # noqa: E402,F401

__all__ = ["FieldServiceCore", "create_core"]
