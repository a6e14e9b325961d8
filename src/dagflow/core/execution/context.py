# src/dagflow/core/execution/context.py
"""
Contextos de execução de Flow e de Process.

Ambos os contextos **embutem** um `CascadeContext` (composição) e expõem
a mesma superfície de leitura/escrita (`get`, `put`, `contains`,
`require`, `get_typed`, `put_typed`):

    runner context  ←  FlowExecutionContext.context  ←  ProcessExecutionContext.context

Além do armazenamento chave-valor, os contextos carregam a identidade da
execução (Flow/FlowExecution, ProcessExecution), os streams do Process e
um log estruturado de eventos compartilhado pela FlowExecution.

Invariantes:
    - `put` em um contexto de Process nunca altera o contexto de Flow
    - Eventos de log sempre incluem `flow_execution_id` e `timestamp`
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..context import CascadeContext, Context, ContextAccessMixin
from ..logging import resolve_level
from .streams import ProcessInputStream, ProcessOutputStream

if TYPE_CHECKING:
    from ..graph.flow import Flow
    from .engine import FlowExecution, ProcessExecution

logger = logging.getLogger(__name__)

# Chaves canônicas publicadas pelo Runner/engine no contexto.
CONFIG_KEY = "dagflow.config"
CONFIG_HASH_KEY = "dagflow.config_hash"


class _EmbeddedContext(ContextAccessMixin):
    context: CascadeContext

    def get(self, key: str, default: Any = None) -> Any:
        return self.context.get(key, default)

    def put(self, key: str, value: Any):
        self.context.put(key, value)
        return self

    def contains(self, key: str) -> bool:
        return self.context.contains(key)


class FlowExecutionContext(_EmbeddedContext):
    """Contexto de uma FlowExecution (pai: contexto do Runner)."""

    def __init__(self, flow_execution: "FlowExecution", parent: Optional[Context] = None) -> None:
        self.context = CascadeContext(parent)
        self._flow_execution = flow_execution
        self.events: List[Dict[str, Any]] = []

    @property
    def flow(self) -> "Flow":
        return self._flow_execution.flow

    @property
    def flow_execution(self) -> "FlowExecution":
        return self._flow_execution

    def log(self, *, level: str, message: str, process_name: Optional[str] = None, **extra: Any) -> None:
        event: Dict[str, Any] = {
            "flow_execution_id": self._flow_execution.execution_id,
            "process": process_name,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        prefix = f"{self._flow_execution.execution_id}/{process_name}" if process_name else self._flow_execution.execution_id
        logger.log(resolve_level(level), "[%s] %s %s", prefix, message, extra or "")


class ProcessExecutionContext(_EmbeddedContext):
    """Contexto de uma ProcessExecution (pai: contexto da FlowExecution)."""

    def __init__(self, process_execution: "ProcessExecution", flow_context: FlowExecutionContext) -> None:
        self.context = CascadeContext(flow_context.context)
        self.flow_context = flow_context
        self._process_execution = process_execution
        self.input_stream = ProcessInputStream(process_execution.process_name)
        self.output_stream = ProcessOutputStream(process_execution.process_name)
        # Preenchido pelo engine antes de notificar on_process_failed.
        self.error: Optional[BaseException] = None

    @property
    def process_execution(self) -> "ProcessExecution":
        return self._process_execution

    @property
    def process_name(self) -> str:
        return self._process_execution.process_name

    def log(self, *, level: str, message: str, **extra: Any) -> None:
        self.flow_context.log(level=level, message=message, process_name=self.process_name, **extra)
