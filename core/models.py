"""Modelos centrais do VentusHub: base com timestamps, usuário e perfil B2B."""

import logging
from typing import ClassVar

from django.conf import settings
from django.contrib.auth.models import AbstractUser, Group, Permission
from django.db import models
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

# ============================================================================
# MODELO BASE PARA TIMESTAMPS
# ============================================================================


class TimestampedModel(models.Model):
    """Modelo abstrato base que adiciona campos de timestamp a todos os modelos."""

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("Data de criação"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("Data de atualização"))

    class Meta:
        """Opções Meta para TimestampedModel."""

        abstract = True


# ============================================================================
# USUÁRIOS
# ============================================================================


class CustomUser(AbstractUser):
    """Modelo de usuário customizado."""

    phone = models.CharField(max_length=20, blank=True, verbose_name=_("Telefone"))
    # Distingue corretores internos de parceiros B2B
    USER_TYPE_CHOICES: ClassVar[list[tuple[str, str]]] = [
        ("INTERNAL", "Interno"),
        ("B2B", "Parceiro B2B"),
    ]
    user_type = models.CharField(
        max_length=20,
        choices=USER_TYPE_CHOICES,
        default="INTERNAL",
        db_index=True,
        verbose_name=_("Tipo de Usuário"),
    )
    groups = models.ManyToManyField(
        Group,
        verbose_name=_("groups"),
        blank=True,
        help_text=_(
            "The groups this user belongs to. A user will get all permissions granted to each of their groups.",
        ),
        related_name="customuser_groups",
        related_query_name="customuser",
    )
    user_permissions = models.ManyToManyField(
        Permission,
        verbose_name=_("user permissions"),
        blank=True,
        help_text=_("Specific permissions for this user."),
        related_name="customuser_permissions",
        related_query_name="customuser",
    )

    class Meta:
        """Opções Meta para CustomUser."""

        verbose_name = _("usuário")
        verbose_name_plural = _("usuários")

    def __str__(self) -> str:
        return self.get_full_name() or self.username

    @property
    def is_b2b(self) -> bool:
        return self.user_type == "B2B"


class B2BUserProfile(TimestampedModel):
    """Perfil de parceiro B2B (corretor autônomo ou imobiliária)."""

    TIPO_CHOICES: ClassVar[list[tuple[str, str]]] = [
        ("CORRETOR_AUTONOMO", "Corretor Autônomo"),
        ("IMOBILIARIA", "Imobiliária"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="b2b_profile",
        verbose_name=_("Usuário"),
    )
    user_type = models.CharField(max_length=20, choices=TIPO_CHOICES, verbose_name=_("Tipo de parceiro"))
    business_name = models.CharField(max_length=255, verbose_name=_("Razão social / Nome"))
    document = models.CharField(max_length=14, verbose_name=_("CPF/CNPJ"), help_text=_("Somente dígitos"))
    creci = models.CharField(max_length=20, blank=True, default="", verbose_name=_("CRECI"))
    trade_name = models.CharField(max_length=255, blank=True, default="", verbose_name=_("Nome fantasia"))
    phone = models.CharField(max_length=20, blank=True, default="", verbose_name=_("Telefone"))
    is_active = models.BooleanField(default=True, verbose_name=_("Ativo"))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="b2b_profiles_criados",
        verbose_name=_("Criado por"),
    )

    class Meta:
        verbose_name = _("perfil B2B")
        verbose_name_plural = _("perfis B2B")
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.business_name} ({self.get_user_type_display()})"
