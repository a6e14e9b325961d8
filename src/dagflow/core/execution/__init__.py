"""
Execução de Flows do DagFlow.

Componentes:
    - process  → protocolo `Process`, `ProcessStatus`, `ProcessResult`, `FlowResult`
    - streams  → `ProcessInputStream` / `ProcessOutputStream`
    - context  → `FlowExecutionContext` / `ProcessExecutionContext`
    - listener → `FlowExecutionListener` / `FlowExecutionLogger`
    - engine   → `FlowExecution` / `ProcessExecution`
    - runner   → `Runner` (contexto raiz + configuração)

Invariantes:
    - Todos os Processes são inicializados antes de qualquer execução
    - Cada Process executa no máximo uma vez por FlowExecution
    - A primeira falha de Process encerra a run
"""

from .context import CONFIG_HASH_KEY, CONFIG_KEY, FlowExecutionContext, ProcessExecutionContext
from .engine import FlowExecution, ProcessExecution
from .listener import FlowExecutionListener, FlowExecutionLogger
from .process import FlowResult, Process, ProcessResult, ProcessStatus
from .runner import Runner
from .streams import ProcessInputStream, ProcessOutputStream

__all__ = [
    "CONFIG_HASH_KEY",
    "CONFIG_KEY",
    "FlowExecutionContext",
    "ProcessExecutionContext",
    "FlowExecution",
    "ProcessExecution",
    "FlowExecutionListener",
    "FlowExecutionLogger",
    "FlowResult",
    "Process",
    "ProcessResult",
    "ProcessStatus",
    "Runner",
    "ProcessInputStream",
    "ProcessOutputStream",
]
