"""Provisionamento de usuários parceiros (B2B).

Cria o usuário e o perfil numa única transação, gera uma senha temporária e
envia o e-mail de boas-vindas. Falha no envio do e-mail é registrada em log
mas não desfaz o cadastro.
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction

from core.models import B2BUserProfile
from shared.exceptions import ConflitoCadastroError, RecursoNaoEncontradoError

logger = logging.getLogger(__name__)

User = get_user_model()

CAMPOS_USUARIO = ("name", "email")
CAMPOS_PERFIL = ("user_type", "business_name", "document", "creci", "trade_name", "phone")


def gerar_senha_temporaria(length: int = 12) -> str:
    """Gera uma senha aleatória forte com letras, dígitos e símbolos."""
    alphabet = string.ascii_letters + string.digits + "!@#$%"
    return "".join(secrets.choice(alphabet) for _ in range(length))


@dataclass
class B2BProvisionado:
    user: Any
    profile: B2BUserProfile
    temp_password: str


def _dividir_nome(nome: str) -> tuple[str, str]:
    partes = (nome or "").strip().split(" ", 1)
    return partes[0], (partes[1] if len(partes) > 1 else "")


def _email_em_uso(email: str, exclude_pk: int | None = None) -> bool:
    qs = User.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


class B2BUserService:
    @staticmethod
    def criar(dados: dict[str, Any], criado_por=None) -> B2BProvisionado:
        email = dados["email"].strip().lower()
        if _email_em_uso(email):
            raise ConflitoCadastroError("Usuário já existe com este email")

        temp_password = gerar_senha_temporaria()
        first_name, last_name = _dividir_nome(dados["name"])
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=temp_password,
                first_name=first_name,
                last_name=last_name,
                user_type="B2B",
            )
            profile = B2BUserProfile.objects.create(
                user=user,
                user_type=dados["user_type"],
                business_name=dados["business_name"],
                document=dados["document"],
                creci=dados.get("creci") or "",
                trade_name=dados.get("trade_name") or "",
                phone=dados.get("phone") or "",
                created_by=criado_por if getattr(criado_por, "pk", None) else None,
            )

        B2BUserService._enviar_boas_vindas(user, profile, temp_password)
        logger.info("Usuário B2B %s provisionado (%s)", user.email, profile.user_type)
        return B2BProvisionado(user=user, profile=profile, temp_password=temp_password)

    @staticmethod
    def _enviar_boas_vindas(user, profile: B2BUserProfile, temp_password: str) -> bool:
        login_url = getattr(settings, "B2B_LOGIN_URL", "")
        corpo = (
            f"Olá {user.get_full_name() or user.email},\n\n"
            f"Seu acesso de parceiro ({profile.get_user_type_display()}) para {profile.business_name} foi criado.\n\n"
            f"E-mail: {user.email}\n"
            f"Senha temporária: {temp_password}\n\n"
            f"Acesse: {login_url}\n"
            "Recomendamos trocar a senha no primeiro acesso."
        )
        try:
            send_mail(
                "Bem-vindo ao VentusHub - Credenciais de acesso",
                corpo,
                settings.DEFAULT_FROM_EMAIL,
                [user.email],
                fail_silently=False,
            )
        except Exception:  # noqa: BLE001 - cadastro permanece válido sem o e-mail
            logger.exception("Falha ao enviar credenciais B2B para %s", user.email)
            return False
        return True

    @staticmethod
    def listar():
        return (
            User.objects.filter(user_type="B2B")
            .select_related("b2b_profile")
            .order_by("-date_joined")
        )

    @staticmethod
    def obter(user_id: int):
        try:
            return User.objects.select_related("b2b_profile").get(pk=int(user_id), user_type="B2B")
        except (User.DoesNotExist, TypeError, ValueError) as exc:
            raise RecursoNaoEncontradoError("Usuário não encontrado") from exc

    @staticmethod
    def atualizar(user_id: int, dados: dict[str, Any]):
        user = B2BUserService.obter(user_id)
        email = dados.get("email")
        if email:
            email = email.strip().lower()
            if _email_em_uso(email, exclude_pk=user.pk):
                raise ConflitoCadastroError("Usuário já existe com este email")

        with transaction.atomic():
            if dados.get("name"):
                user.first_name, user.last_name = _dividir_nome(dados["name"])
            if email:
                user.email = email
                user.username = email
            user.save()

            profile, _ = B2BUserProfile.objects.get_or_create(
                user=user,
                defaults={
                    "user_type": dados.get("user_type") or "CORRETOR_AUTONOMO",
                    "business_name": dados.get("business_name") or user.get_full_name(),
                    "document": dados.get("document") or "",
                },
            )
            # "" limpa os campos opcionais; ausente ou None mantém o valor atual
            alterados = [campo for campo in CAMPOS_PERFIL if dados.get(campo) is not None]
            for campo in alterados:
                setattr(profile, campo, dados[campo])
            if alterados:
                profile.save()
        user.b2b_profile = profile
        logger.info("Usuário B2B %s atualizado", user.pk)
        return user

    @staticmethod
    def desativar(user_id: int):
        """Desativação lógica: o histórico do parceiro é preservado."""
        user = B2BUserService.obter(user_id)
        with transaction.atomic():
            user.is_active = False
            user.save(update_fields=["is_active"])
            B2BUserProfile.objects.filter(user=user).update(is_active=False)
        logger.info("Usuário B2B %s desativado", user.pk)
        return user
