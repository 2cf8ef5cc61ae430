"""Testes das notificações de pendência, notificações gerais e do broadcast em tempo real."""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.urls import reverse
from django.utils import timezone

from notifications.consumers import grupo_do_usuario
from notifications.models import Notification, PendencyNotification
from notifications.services import NotificationService, PendencyNotificationService
from pendencias.models import PropertyRequirement, StageRequirement
from pendencias.services import PendencyService


@pytest.fixture
def requisito(db):
    return StageRequirement.objects.create(
        stage=1,
        requirement_key="IPTU_QUITADO",
        requirement_name="IPTU quitado",
        category="payment",
        priority="critical",
    )


@pytest.mark.django_db
def test_criar_gera_notificacao_geral(property_factory, user):
    imovel = property_factory()
    aviso = PendencyNotificationService.notificar_documento_faltante(imovel, "MATRICULA")
    assert aviso.user == user
    assert aviso.severity == "HIGH"
    assert aviso.notification.category == "property"
    assert aviso.notification.type == "warning"
    assert aviso.notification.related_id == imovel.pk


@pytest.mark.django_db
def test_deduplica_por_requisito_em_aberto(property_factory, requisito):
    imovel = property_factory()
    primeira = PendencyNotificationService.notificar_pendencias_criticas(imovel)
    segunda = PendencyNotificationService.notificar_pendencias_criticas(imovel)
    assert len(primeira) == len(segunda) == 1
    assert primeira[0].pk == segunda[0].pk
    assert PendencyNotification.objects.filter(notification_type="CRITICAL_PENDENCY").count() == 1
    assert Notification.objects.filter(related_type="property").count() == 1


@pytest.mark.django_db
def test_sem_requisito_nao_deduplica(property_factory):
    imovel = property_factory()
    PendencyNotificationService.notificar_estagio_bloqueado(imovel, 1, [{"requirementKey": "X"}])
    PendencyNotificationService.notificar_estagio_bloqueado(imovel, 1, [{"requirementKey": "X"}])
    assert PendencyNotification.objects.filter(notification_type="STAGE_BLOCKED").count() == 2


@pytest.mark.django_db
def test_concluir_requisito_resolve_notificacoes(property_factory, requisito):
    imovel = property_factory()
    PendencyNotificationService.notificar_pendencias_criticas(imovel)
    pr = PropertyRequirement.objects.get(property=imovel, requirement=requisito)
    PendencyService.atualizar_requisito(imovel, pr.pk, status="completed")
    assert not PendencyNotification.objects.filter(property=imovel, is_resolved=False).exists()
    assert PendencyNotificationService.notificar_pendencias_criticas(imovel) == []


@pytest.mark.django_db
def test_bloquear_critico_notifica_validacao_falhou(property_factory, requisito):
    imovel = property_factory()
    pr = PropertyRequirement.objects.get(property=imovel, requirement=requisito)
    PendencyService.atualizar_requisito(imovel, pr.pk, status="blocked", notes="Débito em aberto")
    aviso = PendencyNotification.objects.get(property=imovel, notification_type="VALIDATION_FAILED")
    assert aviso.requirement == requisito
    assert "Débito em aberto" in aviso.message


@pytest.mark.django_db
def test_resolver_expiradas(property_factory):
    imovel = property_factory()
    aviso = PendencyNotificationService.notificar_estagio_avancado(imovel, 1, 2)
    assert PendencyNotificationService.resolver_expiradas() == 0
    assert PendencyNotificationService.resolver_expiradas(now=timezone.now() + timedelta(hours=25)) == 1
    aviso.refresh_from_db()
    assert aviso.is_resolved is True


@pytest.mark.django_db
def test_ordenacao_por_severidade(property_factory):
    imovel = property_factory()
    baixa = PendencyNotificationService.notificar_estagio_avancado(imovel, 1, 2)
    alta = PendencyNotificationService.notificar_documento_faltante(imovel, "IPTU")
    media = PendencyNotificationService.notificar_documento_faltante(imovel, "PLANTA", obrigatorio=False)
    ordenadas = PendencyNotificationService.ordenar_por_severidade([baixa, media, alta])
    assert [n.severity for n in ordenadas] == ["HIGH", "MEDIUM", "LOW"]


@pytest.mark.django_db
def test_api_pendencias_ordena_resolve_e_filtra(api_client, property_factory):
    imovel = property_factory()
    PendencyNotificationService.notificar_estagio_avancado(imovel, 1, 2)
    alta = PendencyNotificationService.notificar_documento_faltante(imovel, "IPTU")

    url = reverse("notifications:pendency-notification-list")
    resp = api_client.get(url, {"property": imovel.pk})
    assert [item["severity"] for item in resp.data["results"]] == ["HIGH", "LOW"]

    resolve = reverse("notifications:pendency-notification-resolve", args=[alta.pk])
    assert api_client.post(resolve).data["is_resolved"] is True
    assert len(api_client.get(url).data["results"]) == 1
    assert len(api_client.get(url, {"include_resolved": "1"}).data["results"]) == 2


@pytest.mark.django_db
def test_api_notificacoes_gerais(api_client, user, other_user):
    NotificationService.criar(user, "Primeira", "msg")
    segunda = NotificationService.criar(user, "Segunda", "msg")
    alheia = NotificationService.criar(other_user, "Alheia", "msg")

    url = reverse("notifications:notification-list")
    assert len(api_client.get(url).data["results"]) == 2

    lida = api_client.post(reverse("notifications:notification-read", args=[segunda.pk]))
    assert lida.data["is_read"] is True
    assert [n["title"] for n in api_client.get(url, {"unread": "1"}).data["results"]] == ["Primeira"]
    assert api_client.post(reverse("notifications:notification-read", args=[alheia.pk])).status_code == 404

    assert api_client.post(reverse("notifications:notification-read-all")).data == {"updated": 1}
    assert not Notification.objects.filter(user=user, is_read=False).exists()


@pytest.mark.django_db
def test_nova_notificacao_e_publicada_no_grupo_do_usuario(user):
    layer = get_channel_layer()
    assert grupo_do_usuario(user.pk) == f"notificacoes_user_{user.pk}"
    async_to_sync(layer.flush)()
    async_to_sync(layer.group_add)(grupo_do_usuario(user.pk), "teste-notificacoes")

    notification = NotificationService.criar(user, "Proposta recebida", "Nova proposta", category="property")

    mensagem = async_to_sync(layer.receive)("teste-notificacoes")
    assert mensagem["type"] == "notifications_update"
    assert mensagem["event"] == "notification_created"
    assert mensagem["notification_id"] == notification.pk
    assert mensagem["unread_count"] == 1
    assert mensagem["category"] == "property"
    async_to_sync(layer.flush)()
