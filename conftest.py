"""Configuração do pytest do VentusHub: inicializa o Django e fornece fixtures comuns."""

# ruff: noqa: I001  # django.setup precisa rodar antes dos imports de modelos

from __future__ import annotations

import os
from decimal import Decimal

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ventushub.settings")
os.environ.setdefault("DJANGO_TESTING", "True")

import django
import pytest

django.setup()

from django.contrib.auth import get_user_model  # noqa: E402
from rest_framework.test import APIClient  # noqa: E402

User = get_user_model()


@pytest.fixture
def user(db):
    return User.objects.create_user(username="corretor@ventushub.com", email="corretor@ventushub.com", password="x")  # noqa: S106


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="outro@ventushub.com", email="outro@ventushub.com", password="x")  # noqa: S106


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="admin@ventushub.com",
        email="admin@ventushub.com",
        password="x",  # noqa: S106
        is_staff=True,
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def property_factory(user):
    from imoveis.models import Property

    def factory(owner=None, **overrides):
        dados = {
            "user": owner or user,
            "type": "apartamento",
            "street": "Rua das Laranjeiras",
            "number": "100",
            "neighborhood": "Laranjeiras",
            "city": "Rio de Janeiro",
            "state": "RJ",
            "cep": "22240-003",
            "value": Decimal("850000.00"),
        }
        dados.update(overrides)
        return Property.objects.create(**dados)

    return factory
