"""
Form validation rules for clients and service orders.

Every rule runs independently and all failures are collected, so the
form can highlight each bad field at once.  Failures are returned as a
``ValidationResult`` (field name -> message) and never raised; the
caller decides whether to block the submission.  Messages are in
Portuguese because they are shown verbatim in the forms.
"""

import logging
import re
from typing import Dict, Iterable, Optional

from ..core.config import settings
from ..core.dates import DateLike, local_today
from ..schemas.client import ClientForm
from ..schemas.service_order import ServiceOrderForm, ServiceOrderUpdate
from ..schemas.validation import ValidationResult

NAME_MIN_LENGTH = 3
ADDRESS_MIN_LENGTH = 10
DESCRIPTION_MIN_LENGTH = 10
PHONE_DIGIT_COUNTS = (10, 11)  # landline / mobile, area code included
TAX_ID_DIGIT_COUNTS = (11, 14)  # CPF / CNPJ

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_OF_DAY_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
_NON_DIGITS_RE = re.compile(r"[^0-9]")


def digits_only(value: Optional[str]) -> str:
    """Strip everything but ASCII digits: ``"(11) 9999-1234"`` -> ``"1199991234"``."""
    if not value:
        return ""
    return _NON_DIGITS_RE.sub("", value)


class ValidationService:
    """Validation rules for the client and service order forms."""

    @classmethod
    def validate_client(cls, form: ClientForm) -> ValidationResult:
        """Validate the client form.

        Rules
        -----
        * name: required, at least 3 characters after trimming
        * phone: 10 or 11 digits once the mask is removed
        * email: required, ``local@domain.tld`` without whitespace
        * cpf: 11 digits (CPF) or 14 digits (CNPJ) once unmasked
        * address: required, at least 10 characters after trimming
        """
        errors: Dict[str, str] = {}

        name = form.name.strip()
        if not name:
            errors["name"] = "Nome é obrigatório"
        elif len(name) < NAME_MIN_LENGTH:
            errors["name"] = f"Nome deve ter pelo menos {NAME_MIN_LENGTH} caracteres"

        phone = digits_only(form.phone)
        if not phone:
            errors["phone"] = "Telefone é obrigatório"
        elif len(phone) not in PHONE_DIGIT_COUNTS:
            errors["phone"] = "Telefone deve ter 10 ou 11 dígitos"

        if not form.email.strip():
            errors["email"] = "E-mail é obrigatório"
        elif not EMAIL_RE.fullmatch(form.email):
            errors["email"] = "E-mail inválido"

        tax_id = digits_only(form.cpf)
        if not tax_id:
            errors["cpf"] = "CPF/CNPJ é obrigatório"
        elif len(tax_id) not in TAX_ID_DIGIT_COUNTS:
            errors["cpf"] = "CPF deve ter 11 dígitos ou CNPJ 14 dígitos"

        address = form.address.strip()
        if not address:
            errors["address"] = "Endereço é obrigatório"
        elif len(address) < ADDRESS_MIN_LENGTH:
            errors["address"] = f"Endereço deve ter pelo menos {ADDRESS_MIN_LENGTH} caracteres"

        if errors:
            logging.getLogger(__name__).debug("Client form rejected: %s", sorted(errors))
        return ValidationResult.from_errors(errors)

    @classmethod
    def validate_service_order(
        cls,
        form: ServiceOrderForm,
        today: Optional[DateLike] = None,
        service_types: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """Validate the new service order form.

        A client must be selected, the type must belong to the catalog,
        the date may not be before ``today`` (calendar days, time of day
        ignored) and the description needs at least 10 characters.  An
        optional ``scheduled_time`` must look like ``HH:MM``.

        Parameters
        ----------
        form : ServiceOrderForm
            Submitted form.
        today : date | datetime, optional
            Reference day; a datetime counts as its calendar day.
            Defaults to the local current date.
        service_types : Iterable[str], optional
            Allowed categories; defaults to ``settings.service_types``.
        """
        today = local_today(today)
        catalog = tuple(service_types) if service_types is not None else settings.service_types
        errors: Dict[str, str] = {}

        if not form.client_id:
            errors["client"] = "Selecione um cliente"

        if not form.type:
            errors["type"] = "Selecione o tipo de serviço"
        elif form.type not in catalog:
            errors["type"] = "Tipo de serviço inválido"

        if form.date is None:
            errors["date"] = "Data é obrigatória"
        elif form.date < today:
            errors["date"] = "Data não pode ser no passado"

        description = form.description.strip()
        if not description:
            errors["description"] = "Descrição é obrigatória"
        elif len(description) < DESCRIPTION_MIN_LENGTH:
            errors["description"] = f"Descrição deve ter pelo menos {DESCRIPTION_MIN_LENGTH} caracteres"

        time_error = cls._check_time_of_day(form.scheduled_time)
        if time_error:
            errors["scheduled_time"] = time_error

        return ValidationResult.from_errors(errors)

    @classmethod
    def validate_service_order_edit(
        cls,
        update: ServiceOrderUpdate,
        service_types: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """Validate an edit of an existing order.

        Only fields present in ``update`` are checked.  The date is not
        editable, so there is no past-date rule here.
        """
        catalog = tuple(service_types) if service_types is not None else settings.service_types
        errors: Dict[str, str] = {}

        if update.type is not None:
            if not update.type.strip():
                errors["type"] = "Tipo de serviço é obrigatório"
            elif update.type not in catalog:
                errors["type"] = "Tipo de serviço inválido"

        if update.description is not None and not update.description.strip():
            errors["description"] = "Descrição é obrigatória"

        time_error = cls._check_time_of_day(update.scheduled_time)
        if time_error:
            errors["scheduled_time"] = time_error

        return ValidationResult.from_errors(errors)

    @staticmethod
    def _check_time_of_day(value: Optional[str]) -> Optional[str]:
        if value and not TIME_OF_DAY_RE.fullmatch(value):
            return "Horário inválido (HH:mm)"
        return None
