"""Cartórios de registro de imóveis e os registros enviados a eles."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimestampedModel

from .simulacao import gerar_protocolo

PROTOCOLO_TENTATIVAS = 5


class Cartorio(TimestampedModel):
    numero = models.CharField(max_length=10, unique=True, verbose_name="Número")
    nome = models.CharField(max_length=100, verbose_name="Nome")
    nome_completo = models.CharField(max_length=255, verbose_name="Nome completo")
    cidade = models.CharField(max_length=100, default="Rio de Janeiro", verbose_name="Cidade")
    estado = models.CharField(max_length=2, default="RJ", verbose_name="Estado (UF)")
    endereco = models.CharField(max_length=255, blank=True, default="", verbose_name="Endereço")
    cep = models.CharField(max_length=10, blank=True, default="", verbose_name="CEP")
    telefone = models.CharField(max_length=20, blank=True, default="", verbose_name="Telefone")
    email = models.EmailField(blank=True, default="", verbose_name="E-mail")
    site = models.URLField(blank=True, default="", verbose_name="Site")
    ativo = models.BooleanField(default=True, db_index=True, verbose_name="Ativo")
    permite_consulta_online = models.BooleanField(default=True, verbose_name="Permite consulta online")
    horario_funcionamento = models.CharField(max_length=100, blank=True, default="", verbose_name="Horário")
    observacoes = models.TextField(blank=True, default="", verbose_name="Observações")
    taxa_base = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("850.00"),
        validators=[MinValueValidator(0)],
        verbose_name="Taxa base",
    )

    class Meta:
        verbose_name = "Cartório"
        verbose_name_plural = "Cartórios"
        ordering = ["id"]

    def __str__(self):
        return self.nome


class Registro(TimestampedModel):
    STATUS_CHOICES = [
        ("pronto_para_registro", "Pronto para registro"),
        ("em_analise", "Em análise"),
        ("em_registro", "Em registro"),
        ("exigencia", "Exigência"),
        ("registrado", "Registrado"),
    ]

    property = models.ForeignKey(
        "imoveis.Property", on_delete=models.CASCADE, related_name="registros", verbose_name="Imóvel"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="registros", verbose_name="Usuário"
    )
    protocolo = models.CharField(max_length=30, unique=True, blank=True, verbose_name="Protocolo")
    cartorio = models.ForeignKey(Cartorio, on_delete=models.PROTECT, related_name="registros", verbose_name="Cartório")
    data_envio = models.DateTimeField(null=True, blank=True, verbose_name="Data de envio")
    status = models.CharField(
        max_length=25, choices=STATUS_CHOICES, default="pronto_para_registro", db_index=True, verbose_name="Status"
    )
    observacoes = models.TextField(blank=True, default="", verbose_name="Observações")
    valor_taxas = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True, verbose_name="Valor das taxas"
    )
    prazo_estimado = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(365)],
        verbose_name="Prazo estimado (dias)",
    )
    mock_status = models.JSONField(null=True, blank=True, verbose_name="Última resposta do cartório")

    class Meta:
        verbose_name = "Registro"
        verbose_name_plural = "Registros"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.protocolo} ({self.get_status_display()})"

    def save(self, *args, **kwargs):
        if not self.protocolo:
            for _ in range(PROTOCOLO_TENTATIVAS):
                candidato = gerar_protocolo()
                if not Registro.objects.filter(protocolo=candidato).exists():
                    break
            self.protocolo = candidato
        super().save(*args, **kwargs)
