"""
DagFlow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payload de erro do DagFlow.
Erros registrados em rastreabilidade (Manifest) devem ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

O payload nunca carrega stack trace cru: apenas tipo estável, mensagem,
detalhes estruturados e uma dica de correção.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    AmbiguousPortError,
    ContextKeyError,
    DagFlowException,
    ExecutionStateError,
    GraphConfigurationError,
    PortNotFoundError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlowErrorPayload:
    """
    Payload canônico de erro do DagFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Grafo
GRAPH_CONFIGURATION_ERROR = "GRAPH_CONFIGURATION_ERROR"

# Streams
PORT_NOT_FOUND = "PORT_NOT_FOUND"
PORT_AMBIGUOUS = "PORT_AMBIGUOUS"

# Contexto / Engine
CONTEXT_KEY_MISSING = "CONTEXT_KEY_MISSING"
ENGINE_STATE_ERROR = "ENGINE_STATE_ERROR"
PROCESS_EXECUTION_ERROR = "PROCESS_EXECUTION_ERROR"


_CODES = (
    (GraphConfigurationError, GRAPH_CONFIGURATION_ERROR),
    (PortNotFoundError, PORT_NOT_FOUND),
    (AmbiguousPortError, PORT_AMBIGUOUS),
    (ContextKeyError, CONTEXT_KEY_MISSING),
    (ExecutionStateError, ENGINE_STATE_ERROR),
)


def error_code_for(exc: BaseException) -> str:
    """Resolve o código estável associado a uma exceção."""
    for exc_type, code in _CODES:
        if isinstance(exc, exc_type):
            return code
    return PROCESS_EXECUTION_ERROR


def exception_to_error(exc: BaseException) -> FlowErrorPayload:
    """Converte exceções em FlowErrorPayload (serializável, acionável).

    Regras:
    - DagFlowException: já vem com message/details/hint.
    - Outras exceções: encapsular como PROCESS_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, DagFlowException):
        details = dict(exc.details or {})
        details.setdefault("exception_class", exc.__class__.__name__)
        return FlowErrorPayload(
            type=error_code_for(exc),
            message=exc.message or "Erro de execução",
            details=details,
            hint=exc.hint,
        )

    return FlowErrorPayload(
        type=PROCESS_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        details={
            "exception_class": exc.__class__.__name__,
        },
        hint="Verifique o log técnico do Process que falhou",
    )
