"""Testes dos modelos de notificação, regras por evento, preferências do usuário e endpoints de resumo."""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone

from clientes.models import Client, ClientNote
from imoveis.models import PropertyDocument
from notifications.models import (
    Notification,
    NotificationPreference,
    NotificationRule,
    NotificationSubscription,
    NotificationTemplate,
    PendencyNotification,
    ScheduledNotification,
)
from notifications.services import (
    NotificationService,
    NotificationTemplateService,
    PendencyNotificationService,
    ScheduledNotificationService,
)
from shared.exceptions import RecursoNaoEncontradoError


@pytest.fixture
def regras(db):
    call_command("seed_notification_templates", stdout=StringIO())


@pytest.fixture
def cliente(user):
    return Client.objects.create(
        user=user,
        full_name="Fernanda Lima",
        cpf="52998224725",
        email="fernanda@email.com",
        phone_primary="21999990000",
    )


# --- modelos -----------------------------------------------------------------


@pytest.mark.django_db
def test_monta_texto_a_partir_do_catalogo():
    campos = NotificationTemplateService.montar("client_created", {"client_name": "Ana Souza"})

    assert campos["title"] == "Novo cliente: Ana Souza"
    assert campos["message"] == "O cliente Ana Souza foi cadastrado com sucesso no sistema."
    assert (campos["category"], campos["subcategory"], campos["priority"]) == ("crm", "new_client", 3)
    assert campos["expires_at"] is None


@pytest.mark.django_db
def test_modelo_com_expiracao_define_expires_at():
    antes = timezone.now()
    campos = NotificationTemplateService.montar("pendency_critical", {"sequence_number": "#00001"})

    assert antes + timedelta(days=7) <= campos["expires_at"] <= timezone.now() + timedelta(days=7)


@pytest.mark.django_db
def test_chave_desconhecida_gera_erro():
    with pytest.raises(RecursoNaoEncontradoError):
        NotificationTemplateService.obter("nao_existe")


def test_modelo_no_banco_substitui_o_padrao(property_factory):
    imovel = property_factory()
    modelo = NotificationTemplate.objects.create(
        template_key="pendency_stage_blocked",
        name="Bloqueio",
        category="property",
        subcategory="pendency",
        title_template="Atenção {{ sequence_number }}",
        message_template="{{ blocking_count }} bloqueio(s) em {{ stage_name }}",
    )

    aviso = PendencyNotificationService.notificar_estagio_bloqueado(imovel, 2, [{"requirementKey": "x"}])
    assert aviso.title == f"Atenção {imovel.sequence_number}"
    assert aviso.message == "1 bloqueio(s) em Due Diligence"

    modelo.is_active = False
    modelo.save()
    aviso = PendencyNotificationService.notificar_estagio_bloqueado(imovel, 2, [])
    assert aviso.title == f"Estágio Bloqueado - {imovel.sequence_number}"


def test_pendencia_propaga_prioridade_e_subcategoria(property_factory):
    imovel = property_factory()

    aviso = PendencyNotificationService.notificar_estagio_avancado(imovel, 1, 2, overridden=True)

    assert aviso.message == "Propriedade avançada com override de Captação para Due Diligence"
    assert aviso.notification.subcategory == "stage_advance"
    assert aviso.notification.priority == 3
    assert aviso.notification.expires_at is not None


# --- preferências ------------------------------------------------------------


def test_preferencia_desligada_bloqueia_notificacao(user):
    NotificationPreference.objects.create(user=user, enable_in_app=False)

    assert NotificationService.criar(user, "Aviso", "Texto") is None
    assert not Notification.objects.filter(user=user).exists()


def test_limite_de_prioridade(user):
    NotificationPreference.objects.create(user=user, in_app_priority_threshold=2)

    assert NotificationService.criar(user, "Rotina", "Texto", priority=3) is None
    assert NotificationService.criar(user, "Urgente", "Texto", priority=1) is not None


def test_inscricao_desligada_vale_so_para_a_subcategoria(user):
    NotificationSubscription.objects.create(user=user, category="crm", subcategory="call", enable_in_app=False)

    assert NotificationService.criar(user, "Ligação", "Texto", category="crm", subcategory="call") is None
    assert NotificationService.criar(user, "Reunião", "Texto", category="crm", subcategory="meeting") is not None


def test_pendencia_bloqueada_nao_gera_notificacao_geral(property_factory, user):
    NotificationPreference.objects.create(user=user, enable_in_app=False)
    imovel = property_factory()

    aviso = PendencyNotificationService.notificar_documento_faltante(imovel, "IPTU")

    assert isinstance(aviso, PendencyNotification)
    assert aviso.notification is None


def test_agendada_bloqueada_pelas_preferencias_vira_cancelada(user):
    NotificationPreference.objects.create(user=user, enable_in_app=False)
    agendada = ScheduledNotificationService.agendar(
        user=user,
        related_type="client_note",
        related_id=1,
        title="Lembrete",
        message="",
        scheduled_for=timezone.now() - timedelta(minutes=1),
    )

    totais = ScheduledNotificationService.processar_pendentes()

    assert totais == {"processed": 1, "sent": 0, "failed": 0}
    agendada.refresh_from_db()
    assert agendada.status == "cancelled"
    assert agendada.failure_reason == "Bloqueada pelas preferências do usuário"
    assert not Notification.objects.filter(user=user).exists()


# --- regras por evento -------------------------------------------------------


def test_seed_e_idempotente(db):
    out = StringIO()
    call_command("seed_notification_templates", "--dry-run", stdout=out)
    assert "[dry-run]" in out.getvalue()
    assert not NotificationTemplate.objects.exists()

    call_command("seed_notification_templates", stdout=StringIO())
    total_modelos, total_regras = NotificationTemplate.objects.count(), NotificationRule.objects.count()
    assert total_regras == 5

    out = StringIO()
    call_command("seed_notification_templates", stdout=out)
    assert "modelos=0 regras=0" in out.getvalue()
    assert NotificationTemplate.objects.count() == total_modelos


def test_cadastro_de_imovel_dispara_regra(regras, property_factory, user):
    imovel = property_factory()

    notificacao = Notification.objects.get(user=user, subcategory="new_property")
    assert notificacao.title == "Novo imóvel cadastrado"
    assert notificacao.message.endswith(f"Código: #{imovel.pk:05d}")
    assert notificacao.related_type == "property"
    assert notificacao.action_url == f"/property/{imovel.pk}"
    assert NotificationRule.objects.get(rule_key="property_created_rule").trigger_count == 1


def test_sem_regras_cadastradas_nada_e_gerado(property_factory, user):
    property_factory()

    assert not Notification.objects.filter(user=user).exists()


def test_documento_enviado_notifica_dono_do_imovel(regras, property_factory, user):
    imovel = property_factory()
    PropertyDocument.objects.create(property=imovel, name="matricula.pdf", type="MATRICULA", url="https://x.com/m.pdf")

    notificacao = Notification.objects.get(user=user, category="document")
    assert notificacao.title == "Documento enviado: matricula.pdf"


def test_regra_de_ligacao_respeita_intervalo_minimo(regras, cliente, user):
    for _ in range(2):
        ClientNote.objects.create(
            client=cliente, user=user, title="Retorno", type="call", duration=12, call_result="no_answer"
        )

    ligacoes = Notification.objects.filter(user=user, subcategory="call")
    assert ligacoes.count() == 1
    assert ligacoes.get().message == (
        "Ligação de 12 minutos registrada para Fernanda Lima. Resultado: Não atendeu"
    )
    assert NotificationRule.objects.get(rule_key="client_call_rule").trigger_count == 1


def test_nota_comum_nao_dispara_regra(regras, cliente, user):
    ClientNote.objects.create(client=cliente, user=user, title="Anotação", type="note")

    assert not Notification.objects.filter(user=user, category="crm").exclude(subcategory="new_client").exists()


def test_regra_com_atraso_agenda_a_notificacao(regras, user):
    NotificationRule.objects.filter(rule_key="client_created_rule").update(delay_minutes=30)

    Client.objects.create(
        user=user, full_name="Bruno Reis", cpf="11144477735", email="bruno@email.com", phone_primary="21988887777"
    )

    assert not Notification.objects.filter(user=user, subcategory="new_client").exists()
    agendada = ScheduledNotification.objects.get(user=user, related_type="notification_rule")
    assert agendada.title == "Novo cliente: Bruno Reis"

    ScheduledNotificationService.processar_pendentes(now=timezone.now() + timedelta(minutes=31))

    entregue = Notification.objects.get(user=user, subcategory="new_client")
    assert entregue.category == "crm"
    assert entregue.source_id == agendada.pk


def test_modelo_com_erro_nao_impede_o_cadastro(regras, property_factory, user):
    NotificationTemplate.objects.filter(template_key="property_created").update(message_template="{% if %}")

    imovel = property_factory()

    assert imovel.pk is not None
    assert not Notification.objects.filter(user=user, subcategory="new_property").exists()
    assert NotificationRule.objects.get(rule_key="property_created_rule").trigger_count == 0


# --- API ---------------------------------------------------------------------


def _notificacao(user, **extra):
    dados = {"user": user, "title": "Aviso", "message": "Texto", "category": "crm"}
    dados.update(extra)
    return Notification.objects.create(**dados)


def test_resumo_de_notificacoes(api_client, user, other_user):
    _notificacao(user, category="property", priority=1)
    _notificacao(user, is_read=True)
    _notificacao(user, expires_at=timezone.now() - timedelta(hours=1))
    _notificacao(user, category="property", is_archived=True)
    _notificacao(other_user, priority=1)

    resp = api_client.get(reverse("notifications:notification-summary"))

    assert resp.status_code == 200
    assert resp.data["totals"] == {"total": 3, "unread": 1, "urgent": 1}
    assert resp.data["byCategory"] == [
        {"category": "crm", "total": 2, "unread": 0},
        {"category": "property", "total": 1, "unread": 1},
    ]


def test_excluir_notificacao_arquiva(api_client, user, other_user):
    propria = _notificacao(user)
    alheia = _notificacao(other_user)

    resp = api_client.delete(reverse("notifications:notification-detail", args=[propria.pk]))
    assert resp.status_code == 204
    propria.refresh_from_db()
    assert propria.is_archived is True

    lista = api_client.get(reverse("notifications:notification-list"))
    assert [item["id"] for item in lista.data["results"]] == []

    resp = api_client.delete(reverse("notifications:notification-detail", args=[alheia.pk]))
    assert resp.status_code == 404
    alheia.refresh_from_db()
    assert alheia.is_archived is False


def test_preferencias_do_usuario(api_client, user):
    url = reverse("notifications:user-preferences-notifications")

    resp = api_client.get(url)
    assert resp.status_code == 200
    assert resp.data["preferences"]["enable_in_app"] is True
    assert resp.data["preferences"]["in_app_priority_threshold"] == 5
    assert resp.data["subscriptions"] == []

    resp = api_client.put(url, {"in_app_priority_threshold": 2}, format="json")
    assert resp.status_code == 200
    assert NotificationPreference.objects.get(user=user).in_app_priority_threshold == 2

    resp = api_client.put(url, {"in_app_priority_threshold": 9}, format="json")
    assert resp.status_code == 400


def test_inscricoes_do_usuario(api_client, user):
    url = reverse("notifications:user-preferences-subscriptions")

    resp = api_client.post(url, {"category": "crm", "subcategory": "call", "enable_in_app": False}, format="json")
    assert resp.status_code == 201
    inscricao_id = resp.data["id"]

    # Mesma categoria/subcategoria atualiza a inscrição existente
    resp = api_client.post(url, {"category": "crm", "subcategory": "call", "enable_in_app": True}, format="json")
    assert resp.data["id"] == inscricao_id
    assert NotificationSubscription.objects.get(pk=inscricao_id).enable_in_app is True

    assert api_client.post(url, {"category": "inexistente"}, format="json").status_code == 400

    remover = reverse("notifications:user-preferences-remove-subscription", args=[inscricao_id])
    assert api_client.delete(remover).status_code == 204
    assert api_client.get(url).data == []
    assert api_client.delete(remover).status_code == 404


def test_categorias_disponiveis(api_client):
    resp = api_client.get(reverse("notifications:user-preferences-categories"))

    assert resp.status_code == 200
    chaves = [item["category"] for item in resp.data]
    assert "crm" in chaves
    crm = next(item for item in resp.data if item["category"] == "crm")
    assert {"key": "call", "name": "Ligações"} in crm["subcategories"]
