"""Testes do cadastro de imóveis: sequência, escopo por usuário e coleções aninhadas."""

from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from imoveis.services import PropertyService
from imoveis.stages import nome_do_estagio, slug_do_estagio, validar_estagio_numero
from shared.exceptions import RecursoNaoEncontradoError, TransicaoInvalidaError

PAYLOAD = {
    "type": "casa",
    "street": "Rua Voluntários da Pátria",
    "number": "45",
    "neighborhood": "Botafogo",
    "city": "Rio de Janeiro",
    "state": "rj",
    "cep": "22270-000",
    "value": "1200000.00",
}


def test_estagios_mapeiam_numero_slug_e_nome():
    assert slug_do_estagio(1) == "captacao"
    assert nome_do_estagio(4) == "Propostas"
    assert slug_do_estagio(8) == "concluido"
    for invalido in (0, 9, "3", True, None):
        with pytest.raises(TransicaoInvalidaError):
            validar_estagio_numero(invalido)


@pytest.mark.django_db
def test_sequence_number_derivado_do_id(property_factory):
    imovel = property_factory()
    imovel.refresh_from_db()
    assert imovel.sequence_number == f"#{imovel.pk:05d}"
    assert imovel.current_stage == 1
    assert imovel.status == "captacao"
    assert imovel.stage_name == "Captação"


@pytest.mark.django_db
def test_imovel_de_outro_usuario_responde_404(property_factory, other_user, user):
    alheio = property_factory(owner=other_user)
    with pytest.raises(RecursoNaoEncontradoError):
        PropertyService.obter_do_usuario(user, alheio.pk)
    assert PropertyService.obter_do_usuario(other_user, alheio.pk) == alheio


@pytest.mark.django_db
def test_api_cria_e_lista_somente_imoveis_do_usuario(api_client, property_factory, other_user):
    property_factory(owner=other_user)
    resp = api_client.post(reverse("imoveis:property-list"), PAYLOAD, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.data["state"] == "RJ"
    assert resp.data["sequence_number"].startswith("#")
    assert resp.data["current_stage"] == 1

    lista = api_client.get(reverse("imoveis:property-list"))
    assert lista.status_code == 200
    assert [item["id"] for item in lista.data["results"]] == [resp.data["id"]]


@pytest.mark.django_db
def test_api_estagio_nao_e_editavel_diretamente(api_client, property_factory):
    imovel = property_factory()
    url = reverse("imoveis:property-detail", args=[imovel.pk])
    resp = api_client.patch(url, {"current_stage": 5, "status": "contrato", "value": "900000.00"}, format="json")
    assert resp.status_code == 200
    imovel.refresh_from_db()
    assert imovel.current_stage == 1
    assert imovel.value == Decimal("900000.00")


@pytest.mark.django_db
def test_api_detalhe_de_outro_usuario(property_factory, other_user):
    imovel = property_factory()
    client = APIClient()
    client.force_authenticate(user=other_user)
    resp = client.get(reverse("imoveis:property-detail", args=[imovel.pk]))
    assert resp.status_code == 404


@pytest.mark.django_db
def test_api_colecoes_aninhadas(api_client, property_factory):
    imovel = property_factory()
    owners_url = reverse("imoveis:property-owners", args=[imovel.pk])
    resp = api_client.post(
        owners_url, {"full_name": "João Souza", "cpf": "529.982.247-25", "phone": "21988887777"}, format="json"
    )
    assert resp.status_code == 201, resp.content
    assert len(api_client.get(owners_url).data) == 1

    proposta = api_client.post(
        reverse("imoveis:property-proposals", args=[imovel.pk]),
        {"buyer_name": "Ana", "value": "800000.00"},
        format="json",
    )
    assert proposta.status_code == 201

    outro = property_factory()
    contrato = api_client.post(
        reverse("imoveis:property-contracts", args=[outro.pk]),
        {"value": "800000.00", "proposal": proposta.data["id"]},
        format="json",
    )
    assert contrato.status_code == 400
    assert "proposal" in contrato.data

    detalhe = reverse("imoveis:property-owner-detail", args=[imovel.pk, resp.data["id"]])
    assert api_client.delete(detalhe).status_code == 204
    assert api_client.get(owners_url).data == []
