# tests/core/execution/test_flow_execution_lifecycle.py
"""
Testes do ciclo de vida de uma FlowExecution (caminho feliz).

Este módulo valida a ordem de notificações e chamadas garantida pelo
engine quando todos os Processes concluem com sucesso.

Os testes asseguram que:
- `on_flow_started` precede a inicialização de qualquer Process
- todos os Processes são inicializados antes de qualquer `perform`
- `on_process_started` ocorre imediatamente antes de `perform`
- `on_process_completed` ocorre após `perform` retornar
- `on_flow_shutdown` é a última notificação da run
- cada Process executa exatamente uma vez (inclusive em diamantes)
- as saídas dos upstreams chegam por identidade aos downstreams

Decisões arquiteturais:
    - Processes e listeners compartilham um journal para que a ordem
      relativa entre chamadas e notificações seja observável

Invariantes:
    - A ordem das notificações é determinística para a mesma definição

Limites explícitos:
    - Não valida falhas (ver test_flow_execution_failure.py)
    - Não valida o Manifest
"""

import pytest

try:
    from dagflow.core.exceptions import ExecutionStateError, UnknownProcessError
    from dagflow.core.execution import (
        FlowExecution,
        FlowExecutionListener,
        FlowExecutionLogger,
        FlowResult,
        ProcessStatus,
    )
    from dagflow.core.graph import Flow, Path
except Exception as e:  # noqa: BLE001
    FlowExecution = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o engine e o modelo de grafo estejam disponíveis.

    Falha imediatamente (em vez de um NameError indireto) quando
    `dagflow.core.execution` ou `dagflow.core.graph` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing engine/graph modules. Implement:\n"
            "- src/dagflow/core/execution/engine.py (FlowExecution)\n"
            "- src/dagflow/core/graph/flow.py (Flow, Path)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_lifecycle_notification_order(runner, journal, recording_process, recording_listener):
    """
    Verifica a sequência completa de chamadas e notificações em a → b.

    Invariantes:
        - flow_started é a primeira entrada do journal
        - initialize de ambos os Processes precede qualquer perform
        - started → perform → completed, por Process
        - flow_shutdown é a última entrada do journal
    """
    _require_imports()
    flow = (
        Flow("lifecycle")
        .add_process("a", recording_process("a", writes={"default": 1}))
        .add_process("b", recording_process("b", reads=[None]))
        .add_path(Path.from_("a").to("b"))
    )

    runner.run(flow).add_listener(recording_listener).start()

    assert journal == [
        ("flow_started", "lifecycle"),
        ("initialize", "a"),
        ("process_initialized", "a"),
        ("initialize", "b"),
        ("process_initialized", "b"),
        ("process_started", "a"),
        ("perform", "a"),
        ("process_completed", "a"),
        ("process_started", "b"),
        ("perform", "b"),
        ("process_completed", "b"),
        ("flow_shutdown", "lifecycle"),
    ]


def test_diamond_runs_each_process_once(runner, journal, recording_process, recording_listener):
    _require_imports()
    flow = (
        Flow("diamond")
        .add_process("a", recording_process("a", writes={"default": "A"}))
        .add_process("b", recording_process("b", reads=[None], writes={"default": "B"}))
        .add_process("c", recording_process("c", reads=[None], writes={"default": "C"}))
        .add_process("d", recording_process("d", reads=["left", "right"]))
        .add_path(Path.from_("a").to("b").to("d", bundle_in="left"))
        .add_path(Path.from_("a").to("c").to("d", bundle_in="right"))
    )

    result = runner.run(flow).add_listener(recording_listener).start()

    performed = [name for event, name in journal if event == "perform"]
    assert performed == ["a", "b", "c", "d"]
    assert recording_listener.names("process_started") == performed
    assert flow.get_process("d").received == {"left": "B", "right": "C"}
    assert result.order() == ["a", "b", "c", "d"]


def test_outputs_flow_by_identity_through_named_ports(runner, recording_process):
    _require_imports()
    payload = object()
    consumer = recording_process("consumer", reads=["in"])
    flow = (
        Flow("identity")
        .add_process("producer", recording_process("producer", writes={"out": payload}))
        .add_process("consumer", consumer)
        .add_path(Path.from_("producer", bundle_out="out").to("consumer", bundle_in="in"))
    )

    runner.run(flow).start()

    assert consumer.received["in"] is payload


def test_default_port_delivers_the_written_object_itself(runner, recording_process):
    _require_imports()
    payload = object()
    y = recording_process("y", reads=[None, "default"])
    flow = (
        Flow("default-identity")
        .add_process("x", recording_process("x", writes={"default": payload}))
        .add_process("y", y)
        .add_path(Path.from_("x").to("y"))
    )

    runner.run(flow).start()

    assert y.received[None] is payload
    assert y.received["default"] is payload


def test_flow_result_exposes_process_results(runner, recording_process):
    _require_imports()
    flow = Flow("result").add_process("only", recording_process("only", writes={"default": 7}))

    execution = runner.run(flow)
    result = execution.start()

    assert isinstance(result, FlowResult)
    assert result.execution_id == execution.execution_id
    assert result.flow_name == "result"
    process_result = result.processes["only"]
    assert process_result.status is ProcessStatus.SUCCESS
    assert process_result.succeeded is True
    assert process_result.error is None
    assert process_result.duration_ms >= 0
    assert result.output("only").read() == 7


def test_initialize_receives_flow_execution_context(runner, recording_process):
    _require_imports()
    proc = recording_process("p")
    execution = runner.run(Flow("init").add_process("p", proc))

    execution.start()

    assert proc.initialized_with is execution.context
    assert proc.initialized_with.flow_execution is execution


def test_process_execution_identity_round_trip(runner, recording_process):
    """
    Verifica que o contexto de cada Process devolve a própria ProcessExecution
    e que o contexto de Flow devolve a própria FlowExecution.
    """
    _require_imports()
    captured = {}

    class Capture(FlowExecutionListener):
        def on_process_started(self, ctx):
            captured[ctx.process_name] = ctx

    flow = Flow("ids").add_process("a", recording_process("a")).add_process("b", recording_process("b"))
    execution = runner.run(flow).add_listener(Capture())
    execution.start()

    for name in ("a", "b"):
        pe = execution.process_execution(name)
        assert captured[name].process_execution is pe
        assert pe.context is captured[name]
        assert captured[name].flow_context.flow_execution is execution

    assert execution.process_execution("a").execution_id != execution.process_execution("b").execution_id


def test_process_execution_lookup_unknown_name_raises(runner, recording_process):
    _require_imports()
    execution = runner.run(Flow().add_process("a", recording_process("a")))
    execution.start()

    with pytest.raises(UnknownProcessError):
        execution.process_execution("ghost")


def test_start_twice_raises(runner, recording_process):
    _require_imports()
    execution = runner.run(Flow().add_process("a", recording_process("a")))
    execution.start()

    with pytest.raises(ExecutionStateError):
        execution.start()


def test_execution_ids_are_unique_per_run(runner, recording_process):
    _require_imports()
    flow = Flow().add_process("a", recording_process("a"))

    first = runner.run(flow)
    second = runner.run(flow)

    assert first.execution_id != second.execution_id
    assert first.execution_id.startswith("flow_execution_")


def test_default_logger_is_registered_unless_disabled(recording_process):
    _require_imports()
    flow = Flow().add_process("a", recording_process("a"))

    with_logger = FlowExecution(flow)
    assert any(isinstance(l, FlowExecutionLogger) for l in with_logger.listeners())

    from dagflow.core.config.options import EngineOptions

    without_logger = FlowExecution(flow, options=EngineOptions(default_logger=False))
    assert without_logger.listeners() == []


def test_add_listener_preserves_registration_order(runner, recording_process):
    _require_imports()
    first, second = FlowExecutionListener(), FlowExecutionListener()
    execution = runner.run(Flow().add_process("a", recording_process("a")))

    assert execution.add_listener(first).add_listener(second) is execution
    assert execution.listeners() == [first, second]


def test_invalid_graph_fails_before_any_notification(runner, recording_process, recording_listener, journal):
    _require_imports()
    from dagflow.core.exceptions import CycleDetectedError

    flow = (
        Flow("cyclic")
        .add_process("a", recording_process("a"))
        .add_process("b", recording_process("b"))
        .add_path(Path.from_("a").to("b").to("a"))
    )

    with pytest.raises(CycleDetectedError):
        runner.run(flow).add_listener(recording_listener).start()

    assert journal == []
