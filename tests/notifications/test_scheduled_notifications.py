"""Testes da varredura de notificações agendadas, cancelamento e agendador em processo."""

import threading
from datetime import timedelta
from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone

from notifications.models import Notification, ScheduledNotification
from notifications.scheduler import NotificationScheduler, get_scheduler
from notifications.services import ScheduledNotificationService
from notifications.tasks import processar_notificacoes_agendadas
from shared.exceptions import RecursoNaoEncontradoError, TransicaoInvalidaError


def _agendar(user, minutos=-5, **extra):
    dados = {
        "user": user,
        "related_type": "client_note",
        "related_id": 1,
        "title": "Ligar para cliente",
        "message": "Retorno sobre proposta",
        "scheduled_for": timezone.now() + timedelta(minutes=minutos),
    }
    dados.update(extra)
    return ScheduledNotificationService.agendar(**dados)


@pytest.mark.django_db
def test_varredura_entrega_somente_vencidas(user):
    vencida = _agendar(user)
    futura = _agendar(user, minutos=60)

    totais = ScheduledNotificationService.processar_pendentes()
    assert totais == {"processed": 1, "sent": 1, "failed": 0}

    vencida.refresh_from_db()
    futura.refresh_from_db()
    assert vencida.status == "sent"
    assert vencida.sent_at is not None
    assert futura.status == "pending"

    entregue = Notification.objects.get(source=vencida)
    assert entregue.user == user
    assert entregue.category == "crm"
    assert entregue.title == "Ligar para cliente"


@pytest.mark.django_db
def test_varredura_repetida_nao_duplica_notificacao(user):
    agendada = _agendar(user)
    ScheduledNotificationService.processar_pendentes()
    assert ScheduledNotificationService.processar_pendentes() == {"processed": 0, "sent": 0, "failed": 0}
    assert Notification.objects.filter(source=agendada).count() == 1


@pytest.mark.django_db
def test_varredura_respeita_tamanho_do_lote(user):
    for i in range(3):
        _agendar(user, minutos=-10 + i)
    assert ScheduledNotificationService.processar_pendentes(batch_size=2)["processed"] == 2
    assert ScheduledNotification.objects.filter(status="pending").count() == 1


@pytest.mark.django_db
def test_falha_na_entrega_marca_failed_e_reprocessa(user):
    agendada = _agendar(user)
    with mock.patch(
        "notifications.services.NotificationService.criar", side_effect=RuntimeError("canal indisponível")
    ):
        totais = ScheduledNotificationService.processar_pendentes()
    assert totais == {"processed": 1, "sent": 0, "failed": 1}

    agendada.refresh_from_db()
    assert agendada.status == "failed"
    assert agendada.retry_count == 1
    assert "canal indisponível" in agendada.failure_reason
    assert not Notification.objects.filter(source=agendada).exists()

    assert ScheduledNotificationService.processar_pendentes()["sent"] == 1
    agendada.refresh_from_db()
    assert agendada.status == "sent"
    assert agendada.failure_reason == ""
    assert agendada.retry_count == 1


@pytest.mark.django_db
def test_cancelar_regras(user, other_user):
    pendente = _agendar(user, minutos=30)
    with pytest.raises(RecursoNaoEncontradoError):
        ScheduledNotificationService.cancelar(pendente.pk, other_user)

    cancelada = ScheduledNotificationService.cancelar(pendente.pk, user)
    assert cancelada.status == "cancelled"
    with pytest.raises(TransicaoInvalidaError):
        ScheduledNotificationService.cancelar(pendente.pk, user)

    enviada = _agendar(user)
    ScheduledNotificationService.processar_pendentes()
    with pytest.raises(TransicaoInvalidaError):
        ScheduledNotificationService.cancelar(enviada.pk, user)

    falha = _agendar(user, minutos=30)
    ScheduledNotification.objects.filter(pk=falha.pk).update(status="failed")
    assert ScheduledNotificationService.cancelar(falha.pk, user).status == "cancelled"


@pytest.mark.django_db
def test_cancelada_nao_e_entregue(user):
    agendada = _agendar(user)
    assert ScheduledNotificationService.cancelar_por_origem("client_note", 1) == 1
    assert ScheduledNotificationService.processar_pendentes()["processed"] == 0
    agendada.refresh_from_db()
    assert agendada.status == "cancelled"


@pytest.mark.django_db
def test_api_agendadas_lista_e_cancela(api_client, user, other_user):
    minha = _agendar(user, minutos=30)
    alheia = _agendar(other_user, minutos=30)
    resp = api_client.get(reverse("notifications:scheduled-notification-list"))
    assert [item["id"] for item in resp.data["results"]] == [minha.pk]

    url = reverse("notifications:scheduled-notification-cancel", args=[minha.pk])
    assert api_client.post(url).data["status"] == "cancelled"
    assert api_client.post(url).status_code == 400
    outra = reverse("notifications:scheduled-notification-cancel", args=[alheia.pk])
    assert api_client.post(outra).status_code == 404


@pytest.mark.django_db
def test_comando_e_task_de_varredura(user):
    _agendar(user)
    out = StringIO()
    call_command("process_scheduled_notifications", "--dry-run", stdout=out)
    assert "1 notificação(ões)" in out.getvalue()
    assert ScheduledNotification.objects.filter(status="pending").count() == 1

    assert processar_notificacoes_agendadas.apply().get() == {"processed": 1, "sent": 1, "failed": 0}


@pytest.mark.django_db
def test_scheduler_run_once_usa_lote_configurado():
    chamadas = []

    def sweep(batch_size):
        chamadas.append(batch_size)
        return {"processed": 0, "sent": 0, "failed": 0}

    scheduler = NotificationScheduler(interval_seconds=60, batch_size=7, sweep=sweep)
    assert scheduler.run_once() == {"processed": 0, "sent": 0, "failed": 0}
    assert chamadas == [7]
    assert scheduler.cycles == 1
    assert scheduler.last_result["processed"] == 0


@pytest.mark.django_db
def test_scheduler_start_stop():
    executou = threading.Event()

    def sweep(batch_size):
        executou.set()
        return {"processed": 0, "sent": 0, "failed": 0}

    scheduler = NotificationScheduler(interval_seconds=3600, sweep=sweep)
    assert scheduler.stop() is False
    assert scheduler.start() is True
    try:
        assert scheduler.start() is False
        assert executou.wait(5)
        assert scheduler.is_running
    finally:
        assert scheduler.stop(timeout=5) is True
    assert scheduler.is_running is False


@pytest.mark.django_db
def test_scheduler_sobrevive_a_erro_na_varredura():
    falhou = threading.Event()

    def sweep(batch_size):
        falhou.set()
        raise RuntimeError("banco fora do ar")

    scheduler = NotificationScheduler(interval_seconds=3600, sweep=sweep)
    scheduler.start()
    try:
        assert falhou.wait(5)
        assert scheduler.is_running
    finally:
        scheduler.stop(timeout=5)
    assert scheduler.cycles == 0


@pytest.mark.django_db
def test_scheduler_nao_reativa_thread_presa_em_varredura_lenta():
    entrou = threading.Event()
    liberar = threading.Event()

    def sweep(batch_size):
        entrou.set()
        liberar.wait(5)
        return {"processed": 0, "sent": 0, "failed": 0}

    scheduler = NotificationScheduler(interval_seconds=3600, sweep=sweep)
    scheduler.start()
    try:
        assert entrou.wait(5)
        assert scheduler.stop(timeout=0.01) is False
        assert scheduler.is_running
        assert scheduler.start() is False
        vivas = [t for t in threading.enumerate() if t.name == "notification-scheduler"]
        assert len(vivas) == 1
    finally:
        liberar.set()
    assert scheduler.stop(timeout=5) is True
    assert scheduler.is_running is False
    assert scheduler.cycles == 1

    entrou.clear()
    assert scheduler.start() is True
    try:
        assert entrou.wait(5)
    finally:
        assert scheduler.stop(timeout=5) is True


def test_get_scheduler_e_unico():
    assert get_scheduler() is get_scheduler()
