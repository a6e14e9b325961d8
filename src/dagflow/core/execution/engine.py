# src/dagflow/core/execution/engine.py
"""
Engine de execução de Flows do DagFlow.

Uma `FlowExecution` representa uma única invocação de um Flow. `start()`:

    1. analisa o Flow (validação estrutural: portas, referências, ciclos)
    2. notifica `on_flow_started`
    3. inicializa **todos** os Processes declarados, criando uma
       `ProcessExecution` (com contexto filho) para cada um, e notifica
       `on_process_initialized`
    4. percorre o grafo via `AnalyzedFlowGraph.visit`; para cada Process:
       liga as entradas, notifica `on_process_started`, executa `perform`
       e notifica `on_process_completed` ou `on_process_failed`
    5. notifica `on_flow_shutdown` e retorna um `FlowResult`

Política de falha:
    - A falha de um Process é primeiro materializada como valor
      (`ProcessResult` com status FAILED)
    - O engine então notifica `on_process_failed` e relança a exceção
      original, abortando a travessia: uma falha encerra a run inteira
    - `on_flow_shutdown` só é notificado em runs com falha quando
      `engine.shutdown_on_failure` está habilitado

Invariantes:
    - Cada Process executa no máximo uma vez por FlowExecution
    - Nenhum Process executa antes de todos os seus upstreams
    - Todos os Processes são inicializados antes de qualquer `perform`
    - Uma FlowExecution não pode ser iniciada duas vezes

Limites explícitos:
    - Sem retry, sem execução paralela, sem persistência de datasets
    - Não encapsula exceções de Processes
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..config.options import EngineOptions
from ..context import Context
from ..exceptions import ExecutionStateError, UnknownProcessError
from ..graph.analysis import AnalyzedFlowGraph
from ..graph.flow import Flow
from ..ids import new_execution_id
from .context import CONFIG_HASH_KEY, FlowExecutionContext, ProcessExecutionContext
from .listener import FlowExecutionListener, FlowExecutionLogger
from .process import FlowResult, Process, ProcessResult, ProcessStatus
from .streams import ProcessOutputStream

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessExecution:
    """Uma invocação de um Process dentro de uma FlowExecution."""

    def __init__(self, process_name: str, process: Process, flow_context: FlowExecutionContext) -> None:
        self.execution_id = new_execution_id("process_execution")
        self.process_name = process_name
        self.process = process
        self.context = ProcessExecutionContext(self, flow_context)

    def perform(self) -> ProcessResult:
        """Executa o Process e devolve o resultado como valor (sucesso ou falha)."""
        pec = self.context
        started_at = _now()
        try:
            self.process.perform(pec.input_stream, pec.output_stream, pec)
        except Exception as exc:
            pec.error = exc
            return ProcessResult(
                process_name=self.process_name,
                execution_id=self.execution_id,
                status=ProcessStatus.FAILED,
                started_at=started_at,
                finished_at=_now(),
                output=pec.output_stream,
                error=exc,
            )

        return ProcessResult(
            process_name=self.process_name,
            execution_id=self.execution_id,
            status=ProcessStatus.SUCCESS,
            started_at=started_at,
            finished_at=_now(),
            output=pec.output_stream,
        )

    def __repr__(self) -> str:
        return f"ProcessExecution(id={self.execution_id!r}, process={self.process_name!r})"


class FlowExecution:
    """Uma invocação de um Flow (run)."""

    def __init__(
        self,
        flow: Flow,
        runner_context: Optional[Context] = None,
        *,
        options: Optional[EngineOptions] = None,
        config_hash: Optional[str] = None,
    ) -> None:
        self.execution_id = new_execution_id("flow_execution")
        self.flow = flow
        self.options = options or EngineOptions()
        self.context = FlowExecutionContext(self, runner_context)
        if config_hash is not None:
            self.context.put(CONFIG_HASH_KEY, config_hash)

        self._listeners: List[Any] = [FlowExecutionLogger()] if self.options.default_logger else []
        self._process_executions: Dict[str, ProcessExecution] = {}
        self._started = False
        self.failed_process: Optional[str] = None

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: FlowExecutionListener) -> "FlowExecution":
        self._listeners.append(listener)
        return self

    def listeners(self) -> List[Any]:
        return list(self._listeners)

    def _notify(self, event: str, ctx: Any) -> None:
        for listener in list(self._listeners):
            callback = getattr(listener, event, None)
            if callback is None:
                continue
            try:
                callback(ctx)
            except Exception:
                # Um listener com defeito não pode silenciar os demais nem abortar a run.
                logger.exception("listener %r failed on %s", listener, event)

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def process_execution(self, name: str) -> ProcessExecution:
        try:
            return self._process_executions[name]
        except KeyError:
            raise UnknownProcessError(
                f"No process execution for '{name}'",
                details={"process": name, "flow_execution_id": self.execution_id},
                hint="ProcessExecutions só existem após start()",
            ) from None

    def _initialize_processes(self) -> None:
        for name in self.flow.process_names():
            process = self.flow.get_process(name)
            process.initialize(self.context)

            pe = ProcessExecution(name, process, self.context)
            self._process_executions[name] = pe
            self._notify("on_process_initialized", pe.context)

    def _run_process(
        self,
        analyzed: AnalyzedFlowGraph,
        name: str,
        inputs: Mapping[str, ProcessOutputStream],
        results: Dict[str, ProcessResult],
    ) -> ProcessOutputStream:
        pe = self._process_executions[name]
        for arrow in analyzed.previous_arrows(name):
            pe.context.input_stream.attach(
                arrow.bundle_in,
                inputs[arrow.bundle_in],
                arrow.bundle_out,
                process_from=arrow.process_from,
            )

        self._notify("on_process_started", pe.context)
        result = pe.perform()
        results[name] = result

        if result.status is ProcessStatus.FAILED:
            self.failed_process = name
            logger.debug("flow execution %s aborted by process '%s'", self.execution_id, name)
            self._notify("on_process_failed", pe.context)
            if self.options.shutdown_on_failure:
                self._notify("on_flow_shutdown", self.context)
            raise result.error  # type: ignore[misc]

        self._notify("on_process_completed", pe.context)
        return result.output  # type: ignore[return-value]

    def start(self) -> FlowResult:
        """
        Executa o Flow até a conclusão.

        Returns:
            FlowResult: Resultados por Process, na ordem de conclusão.

        Raises:
            ExecutionStateError: Se a execução já foi iniciada.
            GraphConfigurationError: Se o Flow não for um DAG válido.
            Exception: A exceção original do primeiro Process que falhar.
        """
        if self._started:
            raise ExecutionStateError(
                f"Flow execution {self.execution_id} was already started",
                details={"flow_execution_id": self.execution_id},
                hint="Crie uma nova execução com Runner.run(flow)",
            )
        self._started = True

        analyzed = self.flow.analyze()

        self._notify("on_flow_started", self.context)
        self._initialize_processes()

        results: Dict[str, ProcessResult] = {}
        analyzed.visit(lambda name, inputs: self._run_process(analyzed, name, inputs, results))

        self._notify("on_flow_shutdown", self.context)
        return FlowResult(execution_id=self.execution_id, flow_name=self.flow.name, processes=results)

    def __repr__(self) -> str:
        return f"FlowExecution(id={self.execution_id!r}, flow={self.flow.name!r})"
