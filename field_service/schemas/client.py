"""
Pydantic models for client data.

``ClientForm`` carries what the user typed in the client dialog and
is deliberately permissive: every field is a plain string so that
``ValidationService.validate_client`` can report all problems at once
instead of pydantic rejecting the payload on the first one.
``Client`` is the stored record; it is frozen, so edits always produce
a new instance.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .validation import ValidationResult


class ClientForm(BaseModel):
    name: str = Field("", description="Full name or company name")
    phone: str = Field("", description="Phone with or without mask, e.g. (11) 99999-1234")
    email: str = ""
    cpf: str = Field("", description="CPF (11 digits) or CNPJ (14 digits), masked or not")
    address: str = ""
    notes: Optional[str] = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class Client(ClientForm):
    """Stored client record.

    ``id`` is six ASCII digits issued by ``IdentifierGenerator`` and
    never changes after creation.
    """

    id: str
    created_at: datetime

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class ClientSubmission(BaseModel):
    """Outcome of submitting the client form.

    When ``validation.is_valid`` is false, ``clients`` is the input
    collection unchanged and ``client`` is ``None``.
    """

    validation: ValidationResult
    clients: List[Client]
    client: Optional[Client] = None
