"""Testes do provisionamento de usuários B2B (serviço e API)."""

import pytest
from django.contrib.auth import get_user_model
from django.core import mail
from django.urls import reverse
from rest_framework.test import APIClient

from core.models import B2BUserProfile
from core.services.b2b import B2BUserService, gerar_senha_temporaria
from shared.exceptions import ConflitoCadastroError, RecursoNaoEncontradoError

User = get_user_model()

DADOS = {
    "email": "Parceiro@Imob.com",
    "name": "Maria da Silva",
    "user_type": "IMOBILIARIA",
    "business_name": "Imobiliária Centro",
    "document": "12345678000199",
}


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


def test_senha_temporaria_tem_tamanho_pedido():
    senha = gerar_senha_temporaria(16)
    assert len(senha) == 16
    assert senha != gerar_senha_temporaria(16)


@pytest.mark.django_db
def test_criar_b2b_cria_usuario_perfil_e_envia_email():
    resultado = B2BUserService.criar(dict(DADOS))
    user = resultado.user
    assert user.email == "parceiro@imob.com"
    assert user.user_type == "B2B"
    assert user.first_name == "Maria"
    assert user.last_name == "da Silva"
    assert user.check_password(resultado.temp_password)
    assert resultado.profile.business_name == "Imobiliária Centro"
    assert len(mail.outbox) == 1
    assert resultado.temp_password in mail.outbox[0].body


@pytest.mark.django_db
def test_criar_b2b_email_duplicado_falha_sem_criar_nada():
    B2BUserService.criar(dict(DADOS))
    with pytest.raises(ConflitoCadastroError):
        B2BUserService.criar({**DADOS, "email": "PARCEIRO@imob.com"})
    assert User.objects.filter(user_type="B2B").count() == 1
    assert B2BUserProfile.objects.count() == 1


@pytest.mark.django_db
def test_desativar_preserva_registro():
    resultado = B2BUserService.criar(dict(DADOS))
    B2BUserService.desativar(resultado.user.pk)
    resultado.user.refresh_from_db()
    resultado.profile.refresh_from_db()
    assert resultado.user.is_active is False
    assert resultado.profile.is_active is False


@pytest.mark.django_db
def test_atualizar_devolve_perfil_gravado_e_limpa_opcionais():
    resultado = B2BUserService.criar({**DADOS, "creci": "12345-J", "trade_name": "Centro Imóveis"})
    user = B2BUserService.atualizar(resultado.user.pk, {"phone": "21999990000", "creci": "", "trade_name": None})
    assert user.b2b_profile.phone == "21999990000"
    assert user.b2b_profile.creci == ""
    assert user.b2b_profile.trade_name == "Centro Imóveis"

    perfil = B2BUserProfile.objects.get(user=user)
    assert (perfil.phone, perfil.creci, perfil.trade_name) == ("21999990000", "", "Centro Imóveis")
    assert perfil.business_name == "Imobiliária Centro"


@pytest.mark.django_db
def test_obter_usuario_comum_responde_nao_encontrado(user):
    with pytest.raises(RecursoNaoEncontradoError):
        B2BUserService.obter(user.pk)


@pytest.mark.django_db
def test_api_b2b_exige_staff(api_client):
    resp = api_client.get(reverse("core_api:b2b-user-list"))
    assert resp.status_code == 403


@pytest.mark.django_db
def test_api_b2b_fluxo_completo(staff_client):
    url = reverse("core_api:b2b-user-list")
    resp = staff_client.post(url, {**DADOS, "document": "12.345.678/0001-99"}, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.data["temp_password"]
    assert resp.data["b2b_profile"]["document"] == "12345678000199"
    user_id = resp.data["id"]

    dup = staff_client.post(url, DADOS, format="json")
    assert dup.status_code == 400
    assert dup.data["code"] == "DUPLICATE"

    detalhe = reverse("core_api:b2b-user-detail", args=[user_id])
    resp = staff_client.patch(detalhe, {"phone": "21999990000"}, format="json")
    assert resp.status_code == 200
    assert resp.data["b2b_profile"]["phone"] == "21999990000"
    assert "temp_password" not in resp.data

    assert staff_client.delete(detalhe).status_code == 204
    assert User.objects.get(pk=user_id).is_active is False


@pytest.mark.django_db
def test_api_b2b_documento_invalido(staff_client):
    resp = staff_client.post(reverse("core_api:b2b-user-list"), {**DADOS, "document": "123"}, format="json")
    assert resp.status_code == 400
    assert "document" in resp.data
