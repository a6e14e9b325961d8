# src/dagflow/core/traceability/manifest.py
"""
Manifest v1 — rastreabilidade de execuções no DagFlow.

O Manifest consolida, de forma determinística e auditável:
    - metadados da FlowExecution (id, flow, versão, timestamps, status)
    - hash da configuração efetiva
    - estado incremental de cada Process
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - Toda mutação ocorre por chamadas explícitas da API
    - A ordem do Event Log reflete a ordem real de chamada
    - O Manifest é serializável e reconstruível (round-trip JSON)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - Timestamps são sempre fornecidos pelo chamador (nunca inferidos aqui)

Limites explícitos:
    - Não executa Flows
    - Não decide políticas de execução
    - Não realiza migração de versões de schema
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza timestamps para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    delta = _ensure_tzaware_utc(end) - _ensure_tzaware_utc(start)
    return max(0, int(delta.total_seconds() * 1000))


@dataclass
class FlowManifest:
    """
    Estrutura canônica do Manifest de uma FlowExecution.

    Campos:
        - execution: metadados da execução (flow_execution_id, flow, started_at, ...)
        - inputs: hashes das entradas (config_hash)
        - processes: estado por nome de Process
        - events: Event Log ordenado
    """

    execution: Dict[str, Any]
    inputs: Dict[str, Any]
    processes: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "execution": dict(self.execution),
            "inputs": dict(self.inputs),
            "processes": {k: dict(v) for k, v in self.processes.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowManifest":
        return cls(
            execution=dict(data.get("execution", {})),
            inputs=dict(data.get("inputs", {})),
            processes={k: dict(v) for k, v in (data.get("processes", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    flow_execution_id: str,
    flow_name: str,
    started_at: datetime,
    dagflow_version: str,
    config_hash: str,
) -> FlowManifest:
    """
    Cria o Manifest inicial de uma FlowExecution.

    O Event Log inicia vazio e só é preenchido por chamadas explícitas a
    `add_event`, `process_started`, `process_finished`, `process_failed` ou
    `flow_finished`.
    """
    return FlowManifest(
        execution={
            "flow_execution_id": flow_execution_id,
            "flow": flow_name,
            "started_at": _iso(started_at),
            "dagflow_version": dagflow_version,
            "status": "running",
        },
        inputs={"config_hash": config_hash},
    )


def add_event(
    manifest: FlowManifest,
    *,
    event_type: str,
    ts: datetime,
    process: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """Adiciona um evento ao Event Log, preservando a ordem de chamada."""
    event: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if process is not None:
        event["process"] = process
    if payload is not None:
        event["payload"] = payload
    manifest.events.append(event)


def process_started(
    manifest: FlowManifest,
    *,
    process: str,
    execution_id: str,
    ts: datetime,
) -> None:
    """Marca um Process como `running` e registra o evento `process_started`."""
    state = manifest.processes.setdefault(process, {})
    state.update(
        {
            "process": process,
            "execution_id": execution_id,
            "status": "running",
            "started_at": _iso(ts),
        }
    )
    add_event(manifest, event_type="process_started", ts=ts, process=process)


def process_finished(
    manifest: FlowManifest,
    *,
    process: str,
    ts: datetime,
    outputs: Optional[List[str]] = None,
) -> None:
    """Registra a conclusão com sucesso de um Process (status, duração, portas escritas)."""
    state = manifest.processes.setdefault(process, {"process": process})
    started_iso = state.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts

    state.update(
        {
            "status": "success",
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "outputs": list(outputs or []),
        }
    )
    add_event(
        manifest,
        event_type="process_finished",
        ts=ts,
        process=process,
        payload={"duration_ms": state["duration_ms"]},
    )


def process_failed(
    manifest: FlowManifest,
    *,
    process: str,
    ts: datetime,
    error: Dict[str, Any],
) -> None:
    """Registra a falha de um Process com o payload de erro serializável."""
    state = manifest.processes.setdefault(process, {"process": process})
    state.update(
        {
            "status": "failed",
            "finished_at": _iso(ts),
            "error": dict(error),
        }
    )
    manifest.execution["status"] = "failed"
    manifest.execution["failed_process"] = process
    add_event(manifest, event_type="process_failed", ts=ts, process=process, payload={"error": dict(error)})


def flow_finished(manifest: FlowManifest, *, ts: datetime, status: str) -> None:
    """Fecha o Manifest com o status final da FlowExecution."""
    manifest.execution["status"] = status
    manifest.execution["finished_at"] = _iso(ts)
    add_event(manifest, event_type="flow_finished", ts=ts, payload={"status": status})


def save_manifest(manifest: FlowManifest, path: Path) -> None:
    """Persiste o Manifest em JSON (chaves ordenadas, UTF-8)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> FlowManifest:
    """Restaura um Manifest salvo por `save_manifest`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return FlowManifest.from_dict(data)
