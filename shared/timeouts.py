"""Execução de chamadas externas com tempo limite."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import TypeVar

from django.conf import settings

from .exceptions import TimeoutArmazenamentoError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="ventushub-timeout")


def executar_com_timeout(operacao: str, func: Callable[[], T], timeout: float | None = None) -> T:
    """Executa ``func`` e levanta ``TimeoutArmazenamentoError`` se passar do limite.

    O limite padrão vem de ``STORAGE_CALL_TIMEOUT_SECONDS``. A thread da chamada
    expirada não é interrompida; apenas o resultado é descartado.
    """
    limite = timeout if timeout is not None else float(getattr(settings, "STORAGE_CALL_TIMEOUT_SECONDS", 8))
    future = _executor.submit(func)
    try:
        return future.result(timeout=limite)
    except FuturesTimeout as exc:
        future.cancel()
        logger.warning("Timeout em %s após %ss", operacao, limite)
        raise TimeoutArmazenamentoError(operacao, limite) from exc
