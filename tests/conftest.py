import datetime as dt
import random

import pytest

from field_service.core.config import Settings
from field_service.schemas.client import Client, ClientForm
from field_service.schemas.service_order import ServiceOrder, ServiceOrderForm, ServiceStatus
from field_service.services.identifier_service import IdentifierGenerator

TODAY = dt.date(2025, 3, 14)
NOW = dt.datetime(2025, 3, 14, 9, 30, tzinfo=dt.timezone.utc)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return Settings(log_level="DEBUG", log_file="", client_delete_policy="orphan")


@pytest.fixture
def ids(config):
    return IdentifierGenerator(config, rng=random.Random(1234))


@pytest.fixture
def client_form():
    return ClientForm(
        name="Carla Mendes",
        phone="(11) 98765-4321",
        email="carla.mendes@email.com",
        cpf="321.654.987-00",
        address="Rua Augusta, 1500 - Consolação, São Paulo - SP",
    )


@pytest.fixture
def clients():
    created = dt.datetime(2024, 1, 15, tzinfo=dt.timezone.utc)
    return [
        Client(
            id="847291",
            name="João Silva",
            phone="(11) 99999-1234",
            email="joao.silva@email.com",
            cpf="123.456.789-00",
            address="Rua das Flores, 123 - Centro, São Paulo - SP",
            notes="Cliente preferencial",
            created_at=created,
        ),
        Client(
            id="523816",
            name="Maria Oliveira",
            phone="(11) 98888-5678",
            email="maria.oliveira@email.com",
            cpf="987.654.321-00",
            address="Av. Brasil, 456 - Jardim América, São Paulo - SP",
            created_at=created,
        ),
        Client(
            id="164739",
            name="Restaurante Bom Sabor",
            phone="(11) 3333-9999",
            email="contato@bomsabor.com.br",
            cpf="12.345.678/0001-90",
            address="Rua da Gastronomia, 789 - Vila Nova, São Paulo - SP",
            created_at=created,
        ),
    ]


def make_order(order_id, client, status=ServiceStatus.WAITING, day=TODAY, **extra):
    fields = dict(
        id=order_id,
        client_id=client.id,
        client_name=client.name,
        type="Manutenção Preventiva",
        description="Limpeza de filtros e verificação de gás",
        date=day,
        scheduled_time="09:00",
        status=status,
        created_at=NOW,
    )
    fields.update(extra)
    return ServiceOrder(**fields)


@pytest.fixture
def orders(clients):
    joao, maria, restaurante = clients
    return [
        make_order("OS-284719", joao),
        make_order(
            "OS-518294",
            restaurante,
            status=ServiceStatus.IN_PROGRESS,
            type="Reparo Urgente",
            description="Câmara frigorífica principal não está gelando",
            actual_start_time=NOW,
        ),
        make_order(
            "OS-730516",
            maria,
            day=TODAY + dt.timedelta(days=1),
            type="Instalação",
            description="Instalação de ar-condicionado split 12000 BTUs",
        ),
        make_order(
            "OS-508283",
            joao,
            status=ServiceStatus.COMPLETED,
            day=TODAY - dt.timedelta(days=1),
            description="Revisão semestral completa do sistema",
            actual_start_time=NOW - dt.timedelta(days=1),
            actual_end_time=NOW - dt.timedelta(days=1, hours=-2),
        ),
    ]


@pytest.fixture
def order_form(clients):
    return ServiceOrderForm(
        client_id=clients[0].id,
        type="Limpeza",
        description="Higienização completa dos equipamentos",
        date=TODAY,
        scheduled_time="14:00",
    )


@pytest.fixture
def order_factory():
    return make_order
