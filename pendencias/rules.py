"""Regras de validação automática dos requisitos.

Cada regra é um dicionário com ``type`` e parâmetros próprios:

* ``required_field`` (``field``)
* ``document_uploaded`` (``document_type``)
* ``min_value`` / ``max_value`` (``field``, ``value``)
* ``dependent_stage`` (``stage``)
* ``custom_function`` (``validator``)

Apenas validadores customizados pré-definidos podem ser usados.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from imoveis.models import Property

# Relações do imóvel acessíveis por nome em ``required_field``
RELACOES = ("owners", "documents", "proposals", "contracts")


@dataclass
class ValidationContext:
    property: Property
    owners: list = field(default_factory=list)
    documents: list = field(default_factory=list)
    proposals: list = field(default_factory=list)
    contracts: list = field(default_factory=list)

    @classmethod
    def carregar(cls, imovel: Property) -> ValidationContext:
        return cls(
            property=imovel,
            owners=list(imovel.owners.all()),
            documents=list(imovel.documents.all()),
            proposals=list(imovel.proposals.all()),
            contracts=list(imovel.contracts.all()),
        )

    def valor(self, campo: str) -> Any:
        if campo in RELACOES:
            return getattr(self, campo)
        return getattr(self.property, campo, None)


@dataclass
class RuleResult:
    rule: dict
    passed: bool
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "passed": self.passed, "message": self.message}


def _vazio(valor: Any) -> bool:
    if valor is None:
        return True
    if isinstance(valor, str):
        return valor.strip() == ""
    if isinstance(valor, (list, tuple)):
        return len(valor) == 0
    return False


def _decimal(valor: Any) -> Decimal | None:
    try:
        return Decimal(str(valor))
    except (InvalidOperation, TypeError, ValueError):
        return None


CUSTOM_VALIDATORS: dict[str, Callable[[ValidationContext], bool]] = {
    "hasOwnerDocuments": lambda ctx: bool(ctx.owners) and bool(ctx.documents),
    "hasAcceptedProposal": lambda ctx: any(p.status == "accepted" for p in ctx.proposals),
    "hasSignedContract": lambda ctx: any(c.status in ("active", "signed") for c in ctx.contracts),
    "valueAbove100k": lambda ctx: (_decimal(ctx.property.value) or Decimal(0)) > Decimal(100000),
}


def _required_field(rule: dict, ctx: ValidationContext) -> RuleResult:
    campo = rule.get("field", "")
    passed = not _vazio(ctx.valor(campo))
    msg = f"Campo {campo} preenchido" if passed else f"Campo {campo} é obrigatório"
    return RuleResult(rule, passed, msg)


def _document_uploaded(rule: dict, ctx: ValidationContext) -> RuleResult:
    tipo = rule.get("document_type", "")
    passed = any(doc.type == tipo for doc in ctx.documents)
    msg = f"Documento {tipo} encontrado" if passed else f"Documento {tipo} é obrigatório"
    return RuleResult(rule, passed, msg)


def _comparacao(rule: dict, ctx: ValidationContext, minimo: bool) -> RuleResult:
    campo = rule.get("field", "")
    atual = _decimal(ctx.valor(campo))
    limite = _decimal(rule.get("value"))
    if atual is None or limite is None:
        return RuleResult(rule, False, f"Valor de {campo} ausente ou inválido")
    if minimo:
        passed = atual >= limite
        msg = f"{campo} atende o mínimo" if passed else f"{campo} deve ser no mínimo {limite}"
    else:
        passed = atual <= limite
        msg = f"{campo} dentro do máximo" if passed else f"{campo} não pode exceder {limite}"
    return RuleResult(rule, passed, msg)


def _dependent_stage(rule: dict, ctx: ValidationContext) -> RuleResult:
    estagio = int(rule.get("stage", 1))
    passed = ctx.property.current_stage >= estagio
    msg = f"Estágio {estagio} alcançado" if passed else f"Estágio {estagio} precisa ser concluído antes"
    return RuleResult(rule, passed, msg)


def _custom_function(rule: dict, ctx: ValidationContext) -> RuleResult:
    nome = rule.get("validator", "")
    validador = CUSTOM_VALIDATORS.get(nome)
    if validador is None:
        return RuleResult(rule, False, f"Validador desconhecido: {nome}")
    passed = validador(ctx)
    return RuleResult(rule, passed, "Validação customizada aprovada" if passed else "Validação customizada falhou")


_APLICADORES: dict[str, Callable[[dict, ValidationContext], RuleResult]] = {
    "required_field": _required_field,
    "document_uploaded": _document_uploaded,
    "min_value": lambda rule, ctx: _comparacao(rule, ctx, minimo=True),
    "max_value": lambda rule, ctx: _comparacao(rule, ctx, minimo=False),
    "dependent_stage": _dependent_stage,
    "custom_function": _custom_function,
}


def aplicar_regra(rule: dict, ctx: ValidationContext) -> RuleResult:
    aplicador = _APLICADORES.get(rule.get("type", ""))
    if aplicador is None:
        return RuleResult(rule, False, f"Tipo de regra desconhecido: {rule.get('type')}")
    result = aplicador(rule, ctx)
    if not result.passed and rule.get("message"):
        result.message = rule["message"]
    return result


def avaliar_regras(rules: list[dict], ctx: ValidationContext) -> list[RuleResult]:
    return [aplicar_regra(rule, ctx) for rule in rules or []]
