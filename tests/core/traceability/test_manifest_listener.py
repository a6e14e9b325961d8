# tests/core/traceability/test_manifest_listener.py
"""
Testes do ManifestListener acoplado a uma FlowExecution real.

Os testes asseguram que:
- o Manifest é criado em `on_flow_started` com id, flow, versão e config hash
- cada notificação do engine vira um evento, na ordem real
- em sucesso, o Manifest é fechado com status "success" e persistido
- em falha, o Manifest registra o erro canônico e é persistido mesmo
  sem `on_flow_shutdown`
"""

from pathlib import Path

import pytest

from dagflow import __version__
from dagflow.core.execution import Runner
from dagflow.core.graph import Flow, Path as FlowPath
from dagflow.core.traceability import ManifestListener, load_manifest


def _chain(recording_process):
    return (
        Flow("etl")
        .add_process("a", recording_process("a", writes={"default": 1, "stats": 2}))
        .add_process("b", recording_process("b", reads=[None]))
        .add_path(FlowPath.from_("a").to("b"))
    )


def test_manifest_follows_successful_run(runner, recording_process, fixed_clock, tmp_path: Path):
    path = tmp_path / "manifest.json"
    listener = ManifestListener(path, clock=fixed_clock)
    execution = runner.run(_chain(recording_process)).add_listener(listener)

    execution.start()

    m = listener.manifest
    assert m.execution["flow_execution_id"] == execution.execution_id
    assert m.execution["flow"] == "etl"
    assert m.execution["dagflow_version"] == __version__
    assert m.execution["status"] == "success"
    assert m.inputs["config_hash"] == runner.config_hash()
    assert [(e["event_type"], e.get("process")) for e in m.events] == [
        ("flow_started", None),
        ("process_initialized", "a"),
        ("process_initialized", "b"),
        ("process_started", "a"),
        ("process_finished", "a"),
        ("process_started", "b"),
        ("process_finished", "b"),
        ("flow_finished", None),
    ]
    assert m.processes["a"]["outputs"] == ["default", "stats"]
    assert m.processes["a"]["duration_ms"] == 1000
    assert m.processes["a"]["execution_id"] == execution.process_execution("a").execution_id
    assert load_manifest(path).to_dict() == m.to_dict()


def test_manifest_records_failure_and_is_saved(recording_process, failing_process, fixed_clock, tmp_path: Path):
    """
    Verifica o Manifest de uma run com falha (shutdown_on_failure desabilitado).

    Invariantes:
        - status "failed" e `failed_process` preenchidos
        - o erro é o payload canônico (PROCESS_EXECUTION_ERROR)
        - nenhum evento flow_finished é registrado
        - o arquivo é persistido no momento da falha
    """
    runner = Runner({"engine": {"default_logger": False}})
    flow = (
        Flow("etl")
        .add_process("a", recording_process("a", writes={"default": 1}))
        .add_process("b", failing_process(RuntimeError("bad input")))
        .add_path(FlowPath.from_("a").to("b"))
    )
    path = tmp_path / "runs" / "failed.json"
    listener = ManifestListener(path, clock=fixed_clock)

    with pytest.raises(RuntimeError):
        runner.run(flow).add_listener(listener).start()

    saved = load_manifest(path)
    assert saved.execution["status"] == "failed"
    assert saved.execution["failed_process"] == "b"
    error = saved.processes["b"]["error"]
    assert error["type"] == "PROCESS_EXECUTION_ERROR"
    assert error["message"] == "bad input"
    assert error["details"] == {"exception_class": "RuntimeError"}
    assert "flow_finished" not in [e["event_type"] for e in saved.events]


def test_manifest_closed_as_failed_when_shutdown_on_failure(recording_process, failing_process, fixed_clock):
    runner = Runner({"engine": {"default_logger": False, "shutdown_on_failure": True}})
    flow = Flow("etl").add_process("b", failing_process(RuntimeError("x")))
    listener = ManifestListener(clock=fixed_clock)

    with pytest.raises(RuntimeError):
        runner.run(flow).add_listener(listener).start()

    assert listener.manifest.execution["status"] == "failed"
    assert listener.manifest.events[-1]["event_type"] == "flow_finished"
    assert listener.manifest.events[-1]["payload"] == {"status": "failed"}


def test_manifest_without_path_is_kept_in_memory(runner, recording_process, fixed_clock):
    listener = ManifestListener(clock=fixed_clock)

    runner.run(Flow("mem").add_process("a", recording_process("a"))).add_listener(listener).start()

    assert listener.path is None
    assert listener.manifest.execution["status"] == "success"
