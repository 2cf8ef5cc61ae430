"""Erros de domínio compartilhados entre os apps do VentusHub."""

from __future__ import annotations

from typing import Any


class NegocioError(Exception):
    """Erro de regra de negócio genérico."""

    status_code = 400
    code = "BUSINESS_ERROR"

    def payload(self) -> dict[str, Any]:
        return {"message": str(self), "code": self.code}


class RecursoNaoEncontradoError(NegocioError):
    """Recurso inexistente ou pertencente a outro usuário."""

    status_code = 404
    code = "NOT_FOUND"


class TransicaoInvalidaError(NegocioError):
    status_code = 400
    code = "INVALID_TRANSITION"


class ConflitoCadastroError(NegocioError):
    status_code = 400
    code = "DUPLICATE"


class PendenciasBloqueantesError(NegocioError):
    """Avanço de estágio barrado por pendências críticas."""

    status_code = 409
    code = "BLOCKING_PENDENCIES"

    def __init__(self, blocking: list[dict[str, Any]], stage: int | None = None):
        self.blocking = blocking
        self.stage = stage
        super().__init__(
            f"Não é possível avançar: {len(blocking)} pendência(s) crítica(s) em aberto",
        )

    def payload(self) -> dict[str, Any]:
        return {"message": str(self), "code": self.code, "blockingPendencies": self.blocking}


class TimeoutArmazenamentoError(NegocioError):
    """Chamada ao armazenamento/integração excedeu o tempo limite."""

    status_code = 503
    code = "DB_TIMEOUT"

    def __init__(self, operacao: str, timeout: float):
        self.operacao = operacao
        self.timeout = timeout
        super().__init__(f"Tempo limite excedido em {operacao} ({timeout}s)")
