import datetime as dt

import pytest

from field_service.schemas.client import ClientForm
from field_service.schemas.service_order import ServiceOrderForm, ServiceOrderUpdate
from field_service.services.validation_service import ValidationService, digits_only


def test_valid_client_form_passes_every_time(client_form):
    first = ValidationService.validate_client(client_form)
    second = ValidationService.validate_client(client_form)
    assert first.is_valid and second.is_valid
    assert first.errors == {} and second.errors == {}


def test_every_bad_client_field_is_reported():
    form = ClientForm(name="Jo", phone="123", email="bad", cpf="1", address="short")
    result = ValidationService.validate_client(form)
    assert not result.is_valid
    assert set(result.errors) == {"name", "phone", "email", "cpf", "address"}
    assert result.errors["name"] == "Nome deve ter pelo menos 3 caracteres"
    assert result.errors["phone"] == "Telefone deve ter 10 ou 11 dígitos"
    assert result.errors["email"] == "E-mail inválido"
    assert result.errors["cpf"] == "CPF deve ter 11 dígitos ou CNPJ 14 dígitos"
    assert result.errors["address"] == "Endereço deve ter pelo menos 10 caracteres"


def test_blank_client_form_reports_required_fields():
    result = ValidationService.validate_client(ClientForm(name="   "))
    assert result.errors == {
        "name": "Nome é obrigatório",
        "phone": "Telefone é obrigatório",
        "email": "E-mail é obrigatório",
        "cpf": "CPF/CNPJ é obrigatório",
        "address": "Endereço é obrigatório",
    }


@pytest.mark.parametrize("phone", ["(11) 3333-9999", "11999887766", "(11) 9 9988-7766"])
def test_phone_accepts_ten_or_eleven_digits(client_form, phone):
    form = client_form.model_copy(update={"phone": phone})
    assert "phone" not in ValidationService.validate_client(form).errors


def test_phone_with_country_code_is_too_long(client_form):
    form = client_form.model_copy(update={"phone": "+55 (11) 99988-7766"})
    assert "phone" in ValidationService.validate_client(form).errors


@pytest.mark.parametrize("cpf", ["123.456.789-00", "12345678900", "12.345.678/0001-90"])
def test_cpf_and_cnpj_lengths(client_form, cpf):
    form = client_form.model_copy(update={"cpf": cpf})
    assert "cpf" not in ValidationService.validate_client(form).errors


def test_twelve_digit_tax_id_is_rejected(client_form):
    form = client_form.model_copy(update={"cpf": "123456789012"})
    assert "cpf" in ValidationService.validate_client(form).errors


@pytest.mark.parametrize(
    "email",
    ["no-at-sign.com", "two@@signs.com", "user@nodot", "with space@mail.com", "user@mail.com\n"],
)
def test_malformed_emails(client_form, email):
    form = client_form.model_copy(update={"email": email})
    assert ValidationService.validate_client(form).errors["email"] == "E-mail inválido"


def test_name_and_address_are_trimmed(client_form):
    form = client_form.model_copy(update={"name": "  Al  ", "address": "   Rua A, 1   "})
    errors = ValidationService.validate_client(form).errors
    assert "name" in errors
    assert "address" in errors


def test_digits_only():
    assert digits_only("(11) 99988-7766") == "11999887766"
    assert digits_only("12.345.678/0001-90") == "12345678000190"
    assert digits_only("") == ""
    assert digits_only(None) == ""


def test_valid_order_form(order_form, today):
    assert ValidationService.validate_service_order(order_form, today).is_valid


def test_empty_order_form_reports_everything(today):
    result = ValidationService.validate_service_order(ServiceOrderForm(), today)
    assert result.errors == {
        "client": "Selecione um cliente",
        "type": "Selecione o tipo de serviço",
        "date": "Data é obrigatória",
        "description": "Descrição é obrigatória",
    }


def test_order_date_in_the_past_is_rejected(order_form, today):
    form = order_form.model_copy(update={"date": today - dt.timedelta(days=1)})
    result = ValidationService.validate_service_order(form, today)
    assert result.errors == {"date": "Data não pode ser no passado"}


def test_order_date_today_ignores_time_of_day(order_form, today):
    form = ServiceOrderForm(
        **{**order_form.model_dump(), "date": dt.datetime.combine(today, dt.time(0, 0))}
    )
    assert form.date == today
    assert ValidationService.validate_service_order(form, today).is_valid


def test_order_type_outside_catalog(order_form, today):
    form = order_form.model_copy(update={"type": "Pintura"})
    result = ValidationService.validate_service_order(form, today)
    assert result.errors == {"type": "Tipo de serviço inválido"}


def test_order_catalog_can_be_overridden(order_form, today):
    form = order_form.model_copy(update={"type": "Pintura"})
    assert ValidationService.validate_service_order(form, today, service_types=["Pintura"]).is_valid


def test_short_description(order_form, today):
    form = order_form.model_copy(update={"description": "  curta   "})
    result = ValidationService.validate_service_order(form, today)
    assert result.errors == {"description": "Descrição deve ter pelo menos 10 caracteres"}


@pytest.mark.parametrize("value", ["24:00", "12:60", "9h30", "12:5"])
def test_bad_scheduled_time(order_form, today, value):
    form = order_form.model_copy(update={"scheduled_time": value})
    assert ValidationService.validate_service_order(form, today).errors == {
        "scheduled_time": "Horário inválido (HH:mm)"
    }


def test_blank_scheduled_time_is_unset(order_form, today):
    form = ServiceOrderForm(**{**order_form.model_dump(), "scheduled_time": "  "})
    assert form.scheduled_time is None
    assert ValidationService.validate_service_order(form, today).is_valid


def test_edit_validation_checks_only_given_fields():
    assert ValidationService.validate_service_order_edit(ServiceOrderUpdate()).is_valid
    result = ValidationService.validate_service_order_edit(
        ServiceOrderUpdate(type=" ", description="", scheduled_time="7:5")
    )
    assert result.errors == {
        "type": "Tipo de serviço é obrigatório",
        "description": "Descrição é obrigatória",
        "scheduled_time": "Horário inválido (HH:mm)",
    }


def test_edit_accepts_single_digit_hour():
    result = ValidationService.validate_service_order_edit(
        ServiceOrderUpdate(type="Reparo", description="ok", scheduled_time="7:05")
    )
    assert result.is_valid


def test_order_validation_accepts_datetime_as_today(order_form, today):
    late_evening = dt.datetime.combine(today, dt.time(23, 59), tzinfo=dt.timezone.utc)
    assert ValidationService.validate_service_order(order_form, late_evening).is_valid

    form = order_form.model_copy(update={"date": today - dt.timedelta(days=1)})
    result = ValidationService.validate_service_order(form, late_evening)
    assert result.errors == {"date": "Data não pode ser no passado"}


def test_edit_blank_scheduled_time_becomes_none():
    update = ServiceOrderUpdate(scheduled_time="   ")
    assert update.scheduled_time is None
    assert "scheduled_time" in update.model_fields_set
    assert ValidationService.validate_service_order_edit(update).is_valid
