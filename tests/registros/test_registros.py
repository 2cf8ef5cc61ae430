"""Testes de cartórios e registros: taxas, envio simulado, status e tempo limite."""

from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from registros import simulacao
from registros.gateway import CartorioGateway
from registros.models import Cartorio, Registro
from registros.services import CartorioService, RegistroService
from shared.exceptions import NegocioError, RecursoNaoEncontradoError, TimeoutArmazenamentoError
from shared.timeouts import executar_com_timeout

LENTO = {"STORAGE_CALL_TIMEOUT_SECONDS": 0.05, "CARTORIO_MOCK_DELAY_MS": 500}


@pytest.fixture
def cartorio(db):
    return Cartorio.objects.create(numero="5º", nome="5º RGI", nome_completo="5º Registro Geral de Imóveis")


def test_calculo_de_taxas():
    taxas = simulacao.consultar_taxas("5º RGI", Decimal("850.00"), Decimal("850000.00"))
    assert taxas["detalhamento"] == {"itbi": 17000.0, "registro": 3400.0, "certidoes": 150.0, "emolumentos": 280.0}
    assert taxas["totalTaxas"] == 20830.0
    assert taxas["valorImovel"] == 850000.0
    assert taxas["validadeConsulta"]


def test_protocolo_tem_nove_digitos():
    protocolo = simulacao.gerar_protocolo()
    assert len(protocolo) == 9
    assert protocolo.isdigit()


@pytest.mark.parametrize(
    ("protocolo", "esperado"),
    [
        ("123456705", "pronto_para_registro"),
        ("123456735", "em_analise"),
        ("123456765", "em_registro"),
        ("123456785", "registrado"),
        ("123456795", "exigencia"),
    ],
)
def test_status_consultado_deriva_do_protocolo(protocolo, esperado):
    assert simulacao.consultar_status(protocolo)["status"] == esperado


def test_executar_com_timeout():
    assert executar_com_timeout("soma", lambda: 1 + 1, timeout=1) == 2
    with pytest.raises(TimeoutArmazenamentoError) as excinfo:
        executar_com_timeout("lento", lambda: simulacao.consultar_status("1", atraso_ms=300), timeout=0.02)
    assert excinfo.value.status_code == 503
    assert excinfo.value.code == "DB_TIMEOUT"


@pytest.mark.django_db
@override_settings(CARTORIO_MOCK_FALLBACK=True, **LENTO)
def test_gateway_usa_simulacao_em_timeout_quando_fallback_ligado(cartorio):
    taxas = CartorioGateway.consultar_taxas(cartorio, Decimal("500000"))
    assert taxas["fallback"] is True
    assert taxas["totalTaxas"] > 0


@pytest.mark.django_db
@override_settings(CARTORIO_MOCK_FALLBACK=False, **LENTO)
def test_api_responde_503_em_timeout_sem_fallback(api_client, cartorio):
    with pytest.raises(TimeoutArmazenamentoError):
        CartorioGateway.consultar_status("123456789")
    resp = api_client.post(
        reverse("registros:cartorio-consultar-taxas"),
        {"cartorioId": cartorio.pk, "valorImovel": "500000.00"},
        format="json",
    )
    assert resp.status_code == 503
    assert resp.data["code"] == "DB_TIMEOUT"


@pytest.mark.django_db
def test_localizar_cartorio(cartorio):
    assert CartorioService.localizar(cartorio_id=cartorio.pk) == cartorio
    assert CartorioService.localizar(cartorio_nome="5º rgi") == cartorio
    Cartorio.objects.filter(pk=cartorio.pk).update(ativo=False)
    with pytest.raises(RecursoNaoEncontradoError):
        CartorioService.localizar(cartorio_id=cartorio.pk)


@pytest.mark.django_db
def test_api_consultar_taxas(api_client, cartorio):
    url = reverse("registros:cartorio-consultar-taxas")
    resp = api_client.post(url, {"cartorioNome": "5º RGI", "valorImovel": "850000.00"}, format="json")
    assert resp.status_code == 200
    assert resp.data["totalTaxas"] == 20830.0
    assert api_client.post(url, {"valorImovel": "1000"}, format="json").status_code == 400
    assert api_client.post(url, {"cartorioId": 999, "valorImovel": "1000"}, format="json").status_code == 404


@pytest.mark.django_db
def test_api_cartorios_leitura_e_escrita(api_client, staff_user, cartorio):
    Cartorio.objects.create(numero="9º", nome="9º RGI", nome_completo="9º RGI", ativo=False)
    lista = api_client.get(reverse("registros:cartorio-list"))
    assert [c["nome"] for c in lista.data["results"]] == ["5º RGI"]

    novo = {"numero": "13º", "nome": "13º RGI", "nome_completo": "13º Registro Geral de Imóveis"}
    assert api_client.post(reverse("registros:cartorio-list"), novo, format="json").status_code == 403

    staff = APIClient()
    staff.force_authenticate(user=staff_user)
    assert staff.post(reverse("registros:cartorio-list"), novo, format="json").status_code == 201


@pytest.mark.django_db
def test_criar_registro_em_analise_simula_envio(property_factory, user, cartorio):
    imovel = property_factory()
    registro = RegistroService.criar(
        user, {"property_id": imovel.pk, "cartorio_id": cartorio.pk, "status": "em_analise"}
    )
    assert registro.protocolo == registro.mock_status["protocolo"]
    assert registro.valor_taxas == Decimal("3400.00")
    assert 10 <= registro.prazo_estimado <= 30
    assert registro.data_envio is not None
    assert registro.observacoes


@pytest.mark.django_db
def test_criar_registro_pronto_nao_simula(property_factory, user, cartorio):
    imovel = property_factory()
    registro = RegistroService.criar(user, {"property_id": imovel.pk, "cartorio_id": cartorio.pk})
    assert registro.status == "pronto_para_registro"
    assert registro.mock_status is None
    assert len(registro.protocolo) == 9


@pytest.mark.django_db
def test_criar_registro_valida_imovel_e_cartorio(property_factory, user, other_user, cartorio):
    alheio = property_factory(owner=other_user)
    with pytest.raises(RecursoNaoEncontradoError):
        RegistroService.criar(user, {"property_id": alheio.pk, "cartorio_id": cartorio.pk})
    imovel = property_factory()
    with pytest.raises(NegocioError):
        RegistroService.criar(user, {"property_id": imovel.pk, "cartorio_id": 999})
    assert not Registro.objects.exists()


@pytest.mark.django_db
def test_api_registro_fluxo(api_client, property_factory, cartorio):
    imovel = property_factory()
    resp = api_client.post(
        reverse("registros:registro-list"),
        {"property": imovel.pk, "cartorio": cartorio.pk, "status": "em_analise", "protocolo": "000111222"},
        format="json",
    )
    assert resp.status_code == 201, resp.content
    assert resp.data["protocolo"] == "000111222"
    assert resp.data["cartorio_nome"] == "5º RGI"
    registro_id = resp.data["id"]

    consulta = api_client.get(reverse("registros:registro-consultar-status", args=[registro_id]))
    assert consulta.status_code == 200
    assert consulta.data["statusAtual"] == "em_analise"
    assert consulta.data["statusConsultado"]["status"] == "em_analise"
    assert Registro.objects.get(pk=registro_id).mock_status["protocolo"] == "000111222"

    atualiza = api_client.post(
        reverse("registros:registro-update-status", args=[registro_id]), {"novoStatus": "registrado"}, format="json"
    )
    assert atualiza.status_code == 200
    assert atualiza.data["registro"]["status"] == "registrado"
    assert atualiza.data["mockData"]["atualizacaoManual"] is True
    invalido = api_client.post(
        reverse("registros:registro-update-status", args=[registro_id]), {"novoStatus": "aprovado"}, format="json"
    )
    assert invalido.status_code == 400

    do_imovel = api_client.get(reverse("registros:property-registros", args=[imovel.pk]))
    assert [r["id"] for r in do_imovel.data] == [registro_id]

    dup = api_client.post(
        reverse("registros:registro-list"),
        {"property": imovel.pk, "cartorio": cartorio.pk, "protocolo": "000111222"},
        format="json",
    )
    assert dup.status_code == 400
    assert "protocolo" in dup.data


@pytest.mark.django_db
def test_seed_cartorios_idempotente():
    out = StringIO()
    call_command("seed_cartorios", "--dry-run", stdout=out)
    assert "criados=12" in out.getvalue()
    assert Cartorio.objects.count() == 0

    call_command("seed_cartorios", stdout=StringIO())
    call_command("seed_cartorios", stdout=StringIO())
    assert Cartorio.objects.count() == 12
    assert Cartorio.objects.filter(cidade="Rio de Janeiro", ativo=True).count() == 12
