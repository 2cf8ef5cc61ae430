"""Serviços de clientes e do CRM (notas com auditoria e lembretes)."""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from notifications.services import ScheduledNotificationService
from shared.exceptions import RecursoNaoEncontradoError

from .models import Client, ClientNote, ClientNoteAuditLog
from .validators import cpf_valido, somente_digitos

logger = logging.getLogger(__name__)

RECENTES_PADRAO = 10
RECENTES_MAXIMO = 50

# Campos cuja alteração gera linha de auditoria
CAMPOS_AUDITADOS = (
    "title",
    "content",
    "type",
    "priority",
    "status",
    "is_completed",
    "reminder_date",
    "location",
    "participants",
    "duration",
    "call_result",
    "next_steps",
)


def _texto(valor: Any) -> str:
    if valor is None:
        return ""
    if isinstance(valor, bool):
        return "true" if valor else "false"
    if hasattr(valor, "isoformat"):
        return valor.isoformat()
    return str(valor)


class ClientService:
    @staticmethod
    def do_usuario(user):
        return Client.objects.filter(user=user)

    @staticmethod
    def obter_do_usuario(user, client_id) -> Client:
        try:
            return Client.objects.get(pk=int(client_id), user=user)
        except (Client.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Cliente não encontrado") from exc

    @staticmethod
    def recentes(user, limit: int | None = None):
        limite = min(limit or RECENTES_PADRAO, RECENTES_MAXIMO)
        return ClientService.do_usuario(user).order_by("-created_at", "-id")[:limite]

    @staticmethod
    def estatisticas(user) -> dict[str, Any]:
        qs = ClientService.do_usuario(user)
        inicio_mes = timezone.now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        por_estado_civil = qs.values("marital_status").annotate(count=Count("id")).order_by("marital_status")
        por_cidade = qs.exclude(city="").values("city").annotate(count=Count("id")).order_by("-count", "city")[:10]
        return {
            "total": qs.count(),
            "thisMonth": qs.filter(created_at__gte=inicio_mes).count(),
            "byMaritalStatus": [
                {"maritalStatus": item["marital_status"] or None, "count": item["count"]} for item in por_estado_civil
            ],
            "byCity": [{"city": item["city"], "count": item["count"]} for item in por_cidade],
        }

    @staticmethod
    def validar_cpf(cpf: str, exclude_id: int | None = None) -> dict[str, Any]:
        digitos = somente_digitos(cpf)
        if not cpf_valido(digitos):
            return {"isValid": False, "message": "CPF inválido"}
        existente = Client.objects.filter(cpf=digitos)
        if exclude_id:
            existente = existente.exclude(pk=exclude_id)
        if existente.exists():
            return {"isValid": False, "message": "CPF já cadastrado"}
        return {"isValid": True, "message": "CPF disponível"}

    @staticmethod
    def validar_email(email: str, exclude_id: int | None = None) -> dict[str, Any]:
        existente = Client.objects.filter(email__iexact=email.strip())
        if exclude_id:
            existente = existente.exclude(pk=exclude_id)
        if existente.exists():
            return {"isValid": False, "message": "Email já cadastrado"}
        return {"isValid": True, "message": "Email disponível"}


class CRMService:
    @staticmethod
    def _auditar(note: ClientNote, user, action: str, reason: str, **extra) -> ClientNoteAuditLog:
        return ClientNoteAuditLog.objects.create(note=note, user=user, action=action, reason=reason or "", **extra)

    @staticmethod
    def _conteudo_lembrete(note: ClientNote) -> dict[str, Any]:
        return {
            "title": f"Lembrete: {note.title}",
            "message": note.content or "",
            "metadata": {"type": note.type, "priority": note.priority, "clientId": note.client_id},
        }

    @staticmethod
    def _agendar_lembrete(note: ClientNote, user):
        return ScheduledNotificationService.agendar(
            user=user,
            related_type="client_note",
            related_id=note.pk,
            scheduled_for=note.reminder_date,
            **CRMService._conteudo_lembrete(note),
        )

    @staticmethod
    def obter_nota(client: Client, note_id) -> ClientNote:
        try:
            return client.client_notes.get(pk=int(note_id))
        except (ClientNote.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Nota não encontrada") from exc

    @staticmethod
    def criar_nota(client: Client, user, dados: dict[str, Any], reason: str | None = None) -> ClientNote:
        with transaction.atomic():
            note = ClientNote(client=client, user=user, **dados)
            if note.is_completed:
                note.status = "completed"
                note.completed_at = timezone.now()
                note.completed_by = user
            note.save()
            CRMService._auditar(
                note,
                user,
                "created",
                reason or "Nota criada",
                metadata={"type": note.type, "priority": note.priority},
            )
            if note.reminder_date:
                CRMService._agendar_lembrete(note, user)
        logger.info("Nota %s criada para o cliente %s", note.pk, client.pk)
        return note

    @staticmethod
    def atualizar_nota(note: ClientNote, user, dados: dict[str, Any], reason: str | None = None) -> ClientNote:
        """Aplica as alterações e grava uma linha de auditoria por campo alterado.

        Marcar ``is_completed`` preenche ``completed_at``/``completed_by`` e leva
        o status a ``completed``. Mudar ``reminder_date`` cancela os lembretes
        pendentes da nota e agenda um novo (se a data não foi removida); editar
        título ou conteúdo reescreve o lembrete ainda pendente.
        """
        motivo = reason or "Atualização"
        with transaction.atomic():
            note = ClientNote.objects.select_for_update().get(pk=note.pk)
            anteriores = {campo: getattr(note, campo) for campo in CAMPOS_AUDITADOS}

            for campo, valor in dados.items():
                setattr(note, campo, valor)

            concluiu = note.is_completed and not anteriores["is_completed"]
            if concluiu:
                note.status = "completed"
                note.completed_at = timezone.now()
                note.completed_by = user
            elif not note.is_completed and anteriores["is_completed"]:
                note.completed_at = None
                note.completed_by = None
            note.save()

            for campo in CAMPOS_AUDITADOS:
                antes, depois = anteriores[campo], getattr(note, campo)
                if antes == depois:
                    continue
                CRMService._auditar(
                    note,
                    user,
                    "status_changed" if campo == "status" else "updated",
                    motivo,
                    field=campo,
                    old_value=_texto(antes),
                    new_value=_texto(depois),
                )
            if concluiu:
                CRMService._auditar(
                    note,
                    user,
                    "completed",
                    reason or "Marcado como completo",
                    field="is_completed",
                    old_value="false",
                    new_value="true",
                )
            if note.status == "cancelled" and anteriores["status"] != "cancelled":
                CRMService._auditar(
                    note,
                    user,
                    "cancelled",
                    reason or "Nota cancelada",
                    field="status",
                    old_value=anteriores["status"],
                    new_value="cancelled",
                )

            if anteriores["reminder_date"] != note.reminder_date:
                ScheduledNotificationService.cancelar_por_origem("client_note", note.pk)
                if note.reminder_date:
                    CRMService._agendar_lembrete(note, user)
            elif note.reminder_date and any(
                anteriores[campo] != getattr(note, campo) for campo in ("title", "content", "type", "priority")
            ):
                ScheduledNotificationService.atualizar_por_origem(
                    "client_note", note.pk, **CRMService._conteudo_lembrete(note)
                )
        return note

    @staticmethod
    def excluir_nota(note: ClientNote) -> None:
        with transaction.atomic():
            ScheduledNotificationService.cancelar_por_origem("client_note", note.pk)
            note.delete()

    @staticmethod
    def estatisticas(client: Client, user) -> dict[str, Any]:
        now = timezone.now()
        notas = ClientNote.objects.filter(client=client, user=user)
        chamadas = Q(type="call")
        agg = notas.aggregate(
            total=Count("id"),
            pending=Count("id", filter=Q(is_completed=False, status="pending")),
            in_progress=Count("id", filter=Q(is_completed=False, status="in_progress")),
            completed=Count("id", filter=Q(is_completed=True)),
            cancelled=Count("id", filter=Q(status="cancelled")),
            notes=Count("id", filter=Q(type="note")),
            reminders=Count("id", filter=Q(type="reminder")),
            meetings=Count("id", filter=Q(type="meeting")),
            calls=Count("id", filter=chamadas),
            follow_ups=Count("id", filter=Q(type="follow_up")),
            low=Count("id", filter=Q(priority="low")),
            normal=Count("id", filter=Q(priority="normal")),
            high=Count("id", filter=Q(priority="high")),
            urgent=Count("id", filter=Q(priority="urgent")),
            last_week=Count("id", filter=Q(created_at__gte=now - timedelta(days=7))),
            last_month=Count("id", filter=Q(created_at__gte=now - timedelta(days=30))),
            upcoming=Count("id", filter=Q(is_completed=False, reminder_date__gt=now)),
            successful_calls=Count("id", filter=chamadas & Q(call_result="success")),
            timed_calls=Count("id", filter=chamadas & Q(duration__gt=0)),
            call_minutes=Sum("duration", filter=chamadas & Q(duration__gt=0)),
        )
        media = 0
        if agg["timed_calls"]:
            media = int(
                (Decimal(agg["call_minutes"]) / agg["timed_calls"]).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            )
        return {
            "total": agg["total"],
            "pending": agg["pending"],
            "inProgress": agg["in_progress"],
            "completed": agg["completed"],
            "cancelled": agg["cancelled"],
            "byType": {
                "notes": agg["notes"],
                "reminders": agg["reminders"],
                "meetings": agg["meetings"],
                "calls": agg["calls"],
                "followUps": agg["follow_ups"],
            },
            "byPriority": {
                "low": agg["low"],
                "normal": agg["normal"],
                "high": agg["high"],
                "urgent": agg["urgent"],
            },
            "recentActivity": {"lastWeek": agg["last_week"], "lastMonth": agg["last_month"]},
            "upcomingReminders": agg["upcoming"],
            "callMetrics": {
                "totalCalls": agg["calls"],
                "successfulCalls": agg["successful_calls"],
                "averageDuration": media,
            },
        }
