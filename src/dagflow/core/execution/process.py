# src/dagflow/core/execution/process.py
"""
Contrato canônico de Process do DagFlow e tipos de resultado de execução.

Um Process é a menor unidade executável de um Flow: lê zero ou mais
portas de entrada, escreve zero ou mais portas de saída e resolve
configuração herdada (runner → flow → process) pelo contexto recebido.

Ciclo de vida garantido pelo engine:
    1. `initialize(flow_ctx)` é chamado uma vez para **todos** os Processes
       do Flow antes que qualquer um execute
    2. `perform(in_, out, pec)` é chamado no máximo uma vez por execução,
       somente após todos os upstreams terem concluído

Princípios fundamentais:
    - Processes não conhecem o engine nem a travessia
    - Processes não controlam ordem de execução
    - O dataset trocado entre Processes é opaco para o core
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define retry nem tratamento de exceções
    - Não registra eventos de rastreabilidade diretamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .context import FlowExecutionContext, ProcessExecutionContext
    from .streams import ProcessInputStream, ProcessOutputStream


@runtime_checkable
class Process(Protocol):
    """
    Contrato mínimo de um Process.

    Classes podem herdar explicitamente deste protocolo (herdando o
    `initialize` vazio) ou apenas satisfazê-lo estruturalmente.
    """

    def initialize(self, ctx: "FlowExecutionContext") -> None:
        """Preparação única, com acesso ao contexto da FlowExecution."""
        return None

    def perform(
        self,
        in_: "ProcessInputStream",
        out: "ProcessOutputStream",
        pec: "ProcessExecutionContext",
    ) -> None:
        """Executa o Process lendo `in_` e escrevendo `out`."""
        ...


class ProcessStatus(str, Enum):
    """
    Estados finais possíveis da execução de um Process.

    Os valores são strings para facilitar serialização em JSON e
    persistência no Manifest. Estados intermediários (ex.: running)
    pertencem ao Manifest, não a este enum.
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ProcessResult:
    """
    Resultado imutável da execução de um Process.

    A falha é representada como valor (`status=FAILED`, `error=exc`);
    cabe ao engine decidir interromper a run a partir dele.
    """
    process_name: str
    execution_id: str
    status: ProcessStatus
    started_at: datetime
    finished_at: datetime
    output: Optional["ProcessOutputStream"] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.status is ProcessStatus.SUCCESS

    @property
    def duration_ms(self) -> int:
        return max(0, int((self.finished_at - self.started_at).total_seconds() * 1000))


@dataclass(frozen=True)
class FlowResult:
    """Resultado agregado de uma FlowExecution concluída com sucesso."""

    execution_id: str
    flow_name: str
    processes: Dict[str, ProcessResult] = field(default_factory=dict)

    def order(self) -> List[str]:
        """Processes na ordem em que concluíram."""
        return list(self.processes)

    def output(self, process_name: str) -> "ProcessOutputStream":
        return self.processes[process_name].output  # type: ignore[return-value]
