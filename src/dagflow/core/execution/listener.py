# src/dagflow/core/execution/listener.py
"""
Notificações de ciclo de vida de uma FlowExecution.

Pontos de notificação (nesta ordem típica):
    - on_flow_started        → antes da inicialização dos Processes
    - on_process_initialized → após `initialize` de cada Process
    - on_process_started     → imediatamente antes de `perform`
    - on_process_completed   → após `perform` retornar normalmente
    - on_process_failed      → após `perform` levantar (antes da propagação)
    - on_flow_shutdown       → após a travessia concluir com sucesso
                               (e em falhas, se `engine.shutdown_on_failure`)

Listeners são chamados na ordem de registro. Uma exceção levantada por um
listener é registrada em log e não impede os demais de serem notificados.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import FlowExecutionContext, ProcessExecutionContext

logger = logging.getLogger(__name__)


class FlowExecutionListener:
    """Listener base: todos os pontos de notificação são no-op."""

    def on_flow_started(self, ctx: "FlowExecutionContext") -> None:
        pass

    def on_flow_shutdown(self, ctx: "FlowExecutionContext") -> None:
        pass

    def on_process_initialized(self, ctx: "ProcessExecutionContext") -> None:
        pass

    def on_process_started(self, ctx: "ProcessExecutionContext") -> None:
        pass

    def on_process_completed(self, ctx: "ProcessExecutionContext") -> None:
        pass

    def on_process_failed(self, ctx: "ProcessExecutionContext") -> None:
        pass


class FlowExecutionLogger(FlowExecutionListener):
    """Listener default: uma linha de log em DEBUG por evento."""

    def on_flow_started(self, ctx: "FlowExecutionContext") -> None:
        logger.debug("flow started: %s (%s)", ctx.flow, ctx.flow_execution.execution_id)

    def on_flow_shutdown(self, ctx: "FlowExecutionContext") -> None:
        logger.debug("flow shutdown: %s (%s)", ctx.flow, ctx.flow_execution.execution_id)

    def on_process_initialized(self, ctx: "ProcessExecutionContext") -> None:
        logger.debug("process initialized: %s", ctx.process_name)

    def on_process_started(self, ctx: "ProcessExecutionContext") -> None:
        logger.debug("process started: %s", ctx.process_name)

    def on_process_completed(self, ctx: "ProcessExecutionContext") -> None:
        logger.debug("process completed: %s", ctx.process_name)

    def on_process_failed(self, ctx: "ProcessExecutionContext") -> None:
        logger.debug("process failed: %s (%r)", ctx.process_name, ctx.error)
