"""Testes de clientes e do CRM: validação de CPF, notas auditadas, lembretes e estatísticas.

CPFs válidos usados: 529.982.247-25, 111.444.777-35 e 123.456.789-09.
"""

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from clientes.models import Client, ClientNote, ClientNoteAuditLog
from clientes.services import ClientService, CRMService
from clientes.validators import cpf_valido
from notifications.models import ScheduledNotification


@pytest.fixture
def cliente(user):
    return Client.objects.create(
        user=user,
        full_name="Fernanda Lima",
        cpf="52998224725",
        email="fernanda@email.com",
        phone_primary="21999990000",
        city="Rio de Janeiro",
        marital_status="Casado",
    )


def test_cpf_valido():
    assert cpf_valido("529.982.247-25") is True
    assert cpf_valido("11144477735") is True
    assert cpf_valido("52998224724") is False
    assert cpf_valido("111.111.111-11") is False
    assert cpf_valido("123") is False
    assert cpf_valido(None) is False


@pytest.mark.django_db
def test_validar_cpf_e_email(cliente):
    assert ClientService.validar_cpf("000.000.000-00") == {"isValid": False, "message": "CPF inválido"}
    assert ClientService.validar_cpf("529.982.247-25") == {"isValid": False, "message": "CPF já cadastrado"}
    assert ClientService.validar_cpf("52998224725", exclude_id=cliente.pk)["isValid"] is True
    assert ClientService.validar_cpf("11144477735") == {"isValid": True, "message": "CPF disponível"}

    assert ClientService.validar_email("FERNANDA@email.com")["message"] == "Email já cadastrado"
    assert ClientService.validar_email("fernanda@email.com", exclude_id=cliente.pk)["isValid"] is True


@pytest.mark.django_db
def test_api_clientes_crud_e_unicidade(api_client, cliente):
    url = reverse("clientes:client-list")
    payload = {
        "full_name": "Ricardo Alves",
        "cpf": "111.444.777-35",
        "email": "Ricardo@Email.com",
        "phone_primary": "21988887777",
        "state": "rj",
    }
    resp = api_client.post(url, payload, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.data["cpf"] == "11144477735"
    assert resp.data["email"] == "ricardo@email.com"
    assert resp.data["state"] == "RJ"

    dup = api_client.post(url, {**payload, "email": "outro@email.com"}, format="json")
    assert dup.status_code == 400
    assert dup.data["cpf"] == ["CPF já cadastrado"]

    invalido = api_client.post(url, {**payload, "cpf": "12345678900", "email": "x@email.com"}, format="json")
    assert invalido.data["cpf"] == ["CPF inválido"]

    detalhe = reverse("clientes:client-detail", args=[cliente.pk])
    assert api_client.patch(detalhe, {"profession": "Engenheira"}, format="json").status_code == 200


@pytest.mark.django_db
def test_api_clientes_de_outro_usuario(cliente, other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    assert client.get(reverse("clientes:client-detail", args=[cliente.pk])).status_code == 404
    assert client.get(reverse("clientes:client-list")).data["results"] == []


@pytest.mark.django_db
def test_api_stats_recent_e_validacoes(api_client, cliente):
    stats = api_client.get(reverse("clientes:client-stats")).data
    assert stats["total"] == 1
    assert stats["thisMonth"] == 1
    assert stats["byMaritalStatus"] == [{"maritalStatus": "Casado", "count": 1}]
    assert stats["byCity"] == [{"city": "Rio de Janeiro", "count": 1}]

    recentes = api_client.get(reverse("clientes:client-recent"), {"limit": 5}).data
    assert [c["id"] for c in recentes] == [cliente.pk]

    resp = api_client.post(reverse("clientes:client-validate-cpf"), {"cpf": "123.456.789-09"}, format="json")
    assert resp.data == {"isValid": True, "message": "CPF disponível"}
    resp = api_client.post(
        reverse("clientes:client-validate-email"),
        {"email": "fernanda@email.com", "excludeId": cliente.pk},
        format="json",
    )
    assert resp.data["isValid"] is True


@pytest.mark.django_db
def test_nota_com_lembrete_agenda_notificacao(cliente, user):
    quando = timezone.now() + timedelta(days=2)
    note = CRMService.criar_nota(
        cliente, user, {"title": "Visita ao imóvel", "type": "reminder", "reminder_date": quando}
    )
    agendada = ScheduledNotification.objects.get(related_type="client_note", related_id=note.pk)
    assert agendada.scheduled_for == quando
    assert agendada.title == "Lembrete: Visita ao imóvel"
    assert agendada.user == user

    criada = ClientNoteAuditLog.objects.get(note=note)
    assert criada.action == "created"
    assert criada.metadata == {"type": "reminder", "priority": "normal"}


@pytest.mark.django_db
def test_alterar_lembrete_cancela_e_reagenda(cliente, user):
    note = CRMService.criar_nota(cliente, user, {"title": "Retorno", "reminder_date": timezone.now() + timedelta(days=1)})
    novo = timezone.now() + timedelta(days=5)
    CRMService.atualizar_nota(note, user, {"reminder_date": novo})

    agendadas = ScheduledNotification.objects.filter(related_id=note.pk).order_by("id")
    assert [a.status for a in agendadas] == ["cancelled", "pending"]
    assert agendadas.last().scheduled_for == novo

    CRMService.atualizar_nota(note, user, {"reminder_date": None})
    assert not ScheduledNotification.objects.filter(related_id=note.pk, status="pending").exists()


@pytest.mark.django_db
def test_editar_titulo_reescreve_lembrete_pendente(cliente, user):
    quando = timezone.now() + timedelta(days=3)
    note = CRMService.criar_nota(cliente, user, {"title": "Visita", "content": "Levar chaves", "reminder_date": quando})
    CRMService.atualizar_nota(note, user, {"title": "Visita ao apartamento", "content": "Levar chaves e planta"})

    agendada = ScheduledNotification.objects.get(related_type="client_note", related_id=note.pk)
    assert agendada.status == "pending"
    assert agendada.scheduled_for == quando
    assert agendada.title == "Lembrete: Visita ao apartamento"
    assert agendada.message == "Levar chaves e planta"


@pytest.mark.django_db
def test_auditoria_uma_linha_por_campo_alterado(cliente, user):
    note = CRMService.criar_nota(cliente, user, {"title": "Primeiro contato", "priority": "normal"})
    CRMService.atualizar_nota(note, user, {"title": "Primeiro contato feito", "priority": "high"}, reason="Ajuste")

    linhas = ClientNoteAuditLog.objects.filter(note=note, action="updated")
    assert {(linha.field, linha.old_value, linha.new_value) for linha in linhas} == {
        ("title", "Primeiro contato", "Primeiro contato feito"),
        ("priority", "normal", "high"),
    }
    assert all(linha.reason == "Ajuste" for linha in linhas)

    CRMService.atualizar_nota(note, user, {"title": "Primeiro contato feito"})
    assert ClientNoteAuditLog.objects.filter(note=note).count() == 3


@pytest.mark.django_db
def test_concluir_e_cancelar_nota(cliente, user):
    note = CRMService.criar_nota(cliente, user, {"title": "Enviar proposta"})
    note = CRMService.atualizar_nota(note, user, {"is_completed": True})
    assert note.status == "completed"
    assert note.completed_by == user
    assert note.completed_at is not None
    acoes = set(ClientNoteAuditLog.objects.filter(note=note).values_list("action", flat=True))
    assert {"created", "updated", "status_changed", "completed"} <= acoes

    note = CRMService.atualizar_nota(note, user, {"is_completed": False, "status": "cancelled"})
    assert note.completed_at is None
    assert note.completed_by is None
    assert ClientNoteAuditLog.objects.filter(note=note, action="cancelled").count() == 1


@pytest.mark.django_db
def test_auditoria_e_somente_inclusao(cliente, user):
    note = CRMService.criar_nota(cliente, user, {"title": "Nota"})
    linha = note.audit_logs.get()
    linha.reason = "alterado"
    with pytest.raises(ValueError, match="não pode ser alterado"):
        linha.save()


@pytest.mark.django_db
def test_excluir_nota_cancela_lembretes(cliente, user):
    note = CRMService.criar_nota(cliente, user, {"title": "Ligar", "reminder_date": timezone.now() + timedelta(hours=3)})
    note_id = note.pk
    CRMService.excluir_nota(note)
    assert not ClientNote.objects.filter(pk=note_id).exists()
    assert ScheduledNotification.objects.get(related_id=note_id).status == "cancelled"


@pytest.mark.django_db
def test_estatisticas_crm(cliente, user):
    CRMService.criar_nota(cliente, user, {"title": "Ligação 1", "type": "call", "duration": 10, "call_result": "success"})
    CRMService.criar_nota(cliente, user, {"title": "Ligação 2", "type": "call", "duration": 15, "call_result": "busy"})
    CRMService.criar_nota(cliente, user, {"title": "Ligação 3", "type": "call", "call_result": "no_answer"})
    CRMService.criar_nota(
        cliente, user, {"title": "Reunião", "type": "meeting", "priority": "urgent", "status": "in_progress"}
    )
    CRMService.criar_nota(
        cliente,
        user,
        {"title": "Lembrete", "type": "reminder", "reminder_date": timezone.now() + timedelta(days=1)},
    )
    CRMService.criar_nota(cliente, user, {"title": "Feito", "is_completed": True})

    stats = CRMService.estatisticas(cliente, user)
    assert stats["total"] == 6
    assert stats["completed"] == 1
    assert stats["inProgress"] == 1
    assert stats["pending"] == 4
    assert stats["byType"] == {"notes": 1, "reminders": 1, "meetings": 1, "calls": 3, "followUps": 0}
    assert stats["byPriority"]["urgent"] == 1
    assert stats["byPriority"]["normal"] == 5
    assert stats["recentActivity"] == {"lastWeek": 6, "lastMonth": 6}
    assert stats["upcomingReminders"] == 1
    # (10 + 15) / 2 = 12.5 arredonda para 13
    assert stats["callMetrics"] == {"totalCalls": 3, "successfulCalls": 1, "averageDuration": 13}


@pytest.mark.django_db
def test_api_notas_e_auditoria(api_client, cliente):
    notas_url = reverse("clientes:client-notes", args=[cliente.pk])
    resp = api_client.post(notas_url, {"title": "Primeira visita", "type": "meeting", "reason": "Agenda"}, format="json")
    assert resp.status_code == 201, resp.content
    assert "reason" not in resp.data
    note_id = resp.data["id"]

    detalhe = reverse("clientes:client-note-detail", args=[cliente.pk, note_id])
    assert api_client.patch(detalhe, {"location": "Leblon"}, format="json").data["location"] == "Leblon"

    auditoria = api_client.get(reverse("clientes:client-note-audit", args=[cliente.pk, note_id])).data
    assert [linha["action"] for linha in auditoria] == ["updated", "created"]
    assert auditoria[1]["reason"] == "Agenda"

    stats = api_client.get(reverse("clientes:client-crm-stats", args=[cliente.pk])).data
    assert stats["byType"]["meetings"] == 1

    assert api_client.delete(detalhe).status_code == 204
    assert api_client.get(detalhe).status_code == 404
