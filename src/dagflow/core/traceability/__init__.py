"""
Pacote de rastreabilidade (traceability) do DagFlow — Manifest v1.

API pública exposta:
    - FlowManifest      → estrutura canônica do Manifest
    - create_manifest   → criação explícita do Manifest
    - add_event         → registro explícito de eventos no Event Log
    - process_started   → marca início de execução de um Process
    - process_finished  → registra conclusão bem-sucedida de um Process
    - process_failed    → registra falha de um Process
    - flow_finished     → fecha o Manifest com o status final
    - save_manifest     → persistência do Manifest em JSON
    - load_manifest     → restauração determinística do Manifest
    - ManifestListener  → listener que alimenta o Manifest durante a run

Invariantes:
    - O Manifest inicia com `processes` e `events` vazios
    - Eventos nunca são reordenados automaticamente
"""

from .listener import ManifestListener
from .manifest import (
    FlowManifest,
    add_event,
    create_manifest,
    flow_finished,
    load_manifest,
    process_failed,
    process_finished,
    process_started,
    save_manifest,
)

__all__ = [
    "FlowManifest",
    "create_manifest",
    "add_event",
    "process_started",
    "process_finished",
    "process_failed",
    "flow_finished",
    "save_manifest",
    "load_manifest",
    "ManifestListener",
]
