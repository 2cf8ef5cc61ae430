# imoveis/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import TimestampedModel

from .stages import ESTAGIO_FINAL, ESTAGIO_INICIAL, STATUS_CHOICES, nome_do_estagio


class Property(TimestampedModel):
    # --- Identificação ---
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
        verbose_name="Corretor responsável",
    )
    # Preenchido logo após o primeiro INSERT a partir do id (#00001)
    sequence_number = models.CharField(max_length=12, unique=True, null=True, blank=True, verbose_name="Sequência")
    TIPO_CHOICES = [
        ("apartamento", "Apartamento"),
        ("casa", "Casa"),
        ("cobertura", "Cobertura"),
        ("terreno", "Terreno"),
    ]
    type = models.CharField(max_length=20, choices=TIPO_CHOICES, verbose_name="Tipo")

    # --- Endereço ---
    street = models.CharField(max_length=255, verbose_name="Logradouro")
    number = models.CharField(max_length=20, verbose_name="Número")
    complement = models.CharField(max_length=100, blank=True, default="", verbose_name="Complemento")
    neighborhood = models.CharField(max_length=100, verbose_name="Bairro")
    city = models.CharField(max_length=100, verbose_name="Cidade")
    state = models.CharField(max_length=2, verbose_name="UF")
    cep = models.CharField(max_length=9, verbose_name="CEP")

    value = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(0)], verbose_name="Valor"
    )

    # --- Documentação ---
    registration_number = models.CharField(max_length=50, blank=True, default="", verbose_name="Matrícula")
    municipal_registration = models.CharField(
        max_length=50, blank=True, default="", verbose_name="Inscrição municipal (IPTU)"
    )

    # --- Funil ---
    # Alterados apenas pelo fluxo de avanço de estágio (pendencias.services)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="captacao", verbose_name="Status")
    current_stage = models.PositiveSmallIntegerField(
        default=ESTAGIO_INICIAL,
        validators=[MinValueValidator(ESTAGIO_INICIAL), MaxValueValidator(ESTAGIO_FINAL)],
        verbose_name="Estágio atual",
    )

    class Meta:
        verbose_name = "Imóvel"
        verbose_name_plural = "Imóveis"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(current_stage__gte=ESTAGIO_INICIAL, current_stage__lte=ESTAGIO_FINAL),
                name="property_current_stage_range",
            ),
        ]

    def __str__(self):
        return f"{self.sequence_number or '#-----'} {self.street}, {self.number}"

    def save(self, *args, **kwargs):
        is_new = self.pk is None
        super().save(*args, **kwargs)
        if is_new and not self.sequence_number:
            self.sequence_number = f"#{self.pk:05d}"
            Property.objects.filter(pk=self.pk).update(sequence_number=self.sequence_number)

    @property
    def stage_name(self) -> str:
        return nome_do_estagio(self.current_stage)

    @property
    def endereco_completo(self) -> str:
        partes = [f"{self.street}, {self.number}"]
        if self.complement:
            partes.append(self.complement)
        partes.append(f"{self.neighborhood} - {self.city}/{self.state}")
        return " ".join(partes)


class PropertyOwner(TimestampedModel):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="owners", verbose_name="Imóvel")
    full_name = models.CharField(max_length=200, verbose_name="Nome completo")
    cpf = models.CharField(max_length=14, verbose_name="CPF")
    rg = models.CharField(max_length=20, blank=True, default="", verbose_name="RG")
    birth_date = models.DateField(null=True, blank=True, verbose_name="Data de nascimento")
    marital_status = models.CharField(max_length=20, blank=True, default="", verbose_name="Estado civil")
    father_name = models.CharField(max_length=200, blank=True, default="", verbose_name="Nome do pai")
    mother_name = models.CharField(max_length=200, blank=True, default="", verbose_name="Nome da mãe")
    phone = models.CharField(max_length=20, verbose_name="Telefone")
    email = models.EmailField(blank=True, default="", verbose_name="E-mail")

    class Meta:
        verbose_name = "Proprietário"
        verbose_name_plural = "Proprietários"
        ordering = ["id"]

    def __str__(self):
        return self.full_name


class PropertyDocument(models.Model):
    TIPO_CHOICES = [
        ("MATRICULA", "Matrícula"),
        ("IPTU", "IPTU"),
        ("CERTIDAO_NEGATIVA", "Certidão Negativa"),
        ("ESCRITURA", "Escritura"),
        ("PLANTA", "Planta"),
        ("OUTROS", "Outros"),
    ]
    STATUS_CHOICES = [
        ("pending", "Pendente"),
        ("approved", "Aprovado"),
        ("rejected", "Rejeitado"),
    ]
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="documents", verbose_name="Imóvel")
    name = models.CharField(max_length=255, verbose_name="Nome")
    type = models.CharField(max_length=30, choices=TIPO_CHOICES, verbose_name="Tipo")
    url = models.URLField(max_length=500, verbose_name="URL")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", verbose_name="Status")
    uploaded_at = models.DateTimeField(auto_now_add=True, verbose_name="Enviado em")

    class Meta:
        verbose_name = "Documento do imóvel"
        verbose_name_plural = "Documentos do imóvel"
        ordering = ["-uploaded_at"]

    def __str__(self):
        return f"{self.get_type_display()} - {self.name}"


class Proposal(TimestampedModel):
    STATUS_CHOICES = [
        ("pending", "Pendente"),
        ("accepted", "Aceita"),
        ("rejected", "Rejeitada"),
        ("countered", "Contraproposta"),
    ]
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="proposals", verbose_name="Imóvel")
    buyer_name = models.CharField(max_length=200, verbose_name="Comprador")
    buyer_cpf = models.CharField(max_length=14, blank=True, default="", verbose_name="CPF do comprador")
    buyer_phone = models.CharField(max_length=20, blank=True, default="", verbose_name="Telefone do comprador")
    value = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(0)], verbose_name="Valor proposto"
    )
    payment_method = models.CharField(max_length=50, blank=True, default="", verbose_name="Forma de pagamento")
    terms = models.TextField(blank=True, default="", verbose_name="Condições")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", verbose_name="Status")

    class Meta:
        verbose_name = "Proposta"
        verbose_name_plural = "Propostas"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.buyer_name} - R$ {self.value}"


class Contract(TimestampedModel):
    STATUS_CHOICES = [
        ("draft", "Rascunho"),
        ("active", "Ativo"),
        ("signed", "Assinado"),
        ("cancelled", "Cancelado"),
    ]
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="contracts", verbose_name="Imóvel")
    proposal = models.ForeignKey(
        Proposal,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contracts",
        verbose_name="Proposta",
    )
    type = models.CharField(max_length=50, default="compra_venda", verbose_name="Tipo")
    value = models.DecimalField(
        max_digits=15, decimal_places=2, validators=[MinValueValidator(0)], verbose_name="Valor"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="draft", verbose_name="Status")
    contract_data = models.JSONField(default=dict, blank=True, verbose_name="Dados do contrato")
    signed_at = models.DateTimeField(null=True, blank=True, verbose_name="Assinado em")

    class Meta:
        verbose_name = "Contrato"
        verbose_name_plural = "Contratos"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Contrato {self.pk} - {self.get_status_display()}"
