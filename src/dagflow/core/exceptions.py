"""
DagFlow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do DagFlow.

Objetivo:
- Permitir que o grafo, os streams e o engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para FlowErrorPayload
- Evitar ValueError/KeyError genéricos em guardrails críticos

Regras:
- Não contém lógica de domínio específica de dataset.
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Falhas levantadas por Processes NÃO são encapsuladas: propagam como foram levantadas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class DagFlowException(Exception):
    """Base class para exceções internas do DagFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Grafo / Configuração estrutural
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class GraphConfigurationError(DagFlowException):
    """Definição de Flow inválida ou inconsistente (detectada antes da execução)."""


@dataclass(frozen=True, eq=False)
class InvalidProcessNameError(GraphConfigurationError):
    """Nome de Process vazio ou não-string em `Flow.add_process`."""


@dataclass(frozen=True, eq=False)
class InvalidProcessDefinitionError(GraphConfigurationError):
    """Process construído com parâmetros incompatíveis (ex.: sem origem de caminho)."""


@dataclass(frozen=True, eq=False)
class PendingArrowError(GraphConfigurationError):
    """`Path.to` chamado sem nenhuma Arrow iniciada por `from_`/`start`."""


@dataclass(frozen=True, eq=False)
class ArrowPortConflictError(GraphConfigurationError):
    """`Path.to` tenta renomear uma porta de saída já definida na Arrow pendente."""


@dataclass(frozen=True, eq=False)
class UnboundArrowError(GraphConfigurationError):
    """Arrow sem destino (`process_to`) no momento da análise."""


@dataclass(frozen=True, eq=False)
class UnknownProcessError(GraphConfigurationError):
    """Arrow (ou consulta) referencia um Process não registrado no Flow."""


@dataclass(frozen=True, eq=False)
class DuplicateInputPortError(GraphConfigurationError):
    """Duas Arrows chegam ao mesmo Process pela mesma porta de entrada."""


@dataclass(frozen=True, eq=False)
class CycleDetectedError(GraphConfigurationError):
    """O conjunto de Arrows forma um ciclo; o Flow não é um DAG."""


# ---------------------------------------------------------------------------
# Streams / Portas
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class PortNotFoundError(DagFlowException):
    """Leitura de uma porta (bundle) que nenhum upstream escreveu."""


@dataclass(frozen=True, eq=False)
class AmbiguousPortError(DagFlowException):
    """Leitura sem porta explícita com mais de uma porta de entrada ligada."""


# ---------------------------------------------------------------------------
# Contexto / Execução
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ContextKeyError(DagFlowException):
    """Chave obrigatória ausente em toda a cadeia de contextos."""


@dataclass(frozen=True, eq=False)
class ExecutionStateError(DagFlowException):
    """Operação inválida para o estado atual de uma FlowExecution."""
