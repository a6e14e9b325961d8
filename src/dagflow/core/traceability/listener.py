# src/dagflow/core/traceability/listener.py
"""
Listener que mantém um FlowManifest atualizado durante uma FlowExecution.

O Manifest é criado em `on_flow_started` e atualizado a cada notificação.
Quando `path` é informado, o Manifest é persistido ao final da run e
também imediatamente após uma falha de Process (já que, por padrão,
`on_flow_shutdown` não é notificado em runs com falha).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from ..errors import exception_to_error
from ..execution.context import CONFIG_HASH_KEY, FlowExecutionContext, ProcessExecutionContext
from ..execution.listener import FlowExecutionListener
from .manifest import (
    FlowManifest,
    add_event,
    create_manifest,
    flow_finished,
    process_failed,
    process_finished,
    process_started,
    save_manifest,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ManifestListener(FlowExecutionListener):
    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.clock = clock
        self.manifest: Optional[FlowManifest] = None

    def _save(self) -> None:
        if self.path is not None and self.manifest is not None:
            save_manifest(self.manifest, self.path)
            logger.debug("manifest saved: %s", self.path)

    def on_flow_started(self, ctx: FlowExecutionContext) -> None:
        from ... import __version__

        ts = self.clock()
        self.manifest = create_manifest(
            flow_execution_id=ctx.flow_execution.execution_id,
            flow_name=ctx.flow.name,
            started_at=ts,
            dagflow_version=__version__,
            config_hash=ctx.get(CONFIG_HASH_KEY, ""),
        )
        add_event(self.manifest, event_type="flow_started", ts=ts)

    def on_process_initialized(self, ctx: ProcessExecutionContext) -> None:
        add_event(self.manifest, event_type="process_initialized", ts=self.clock(), process=ctx.process_name)

    def on_process_started(self, ctx: ProcessExecutionContext) -> None:
        process_started(
            self.manifest,
            process=ctx.process_name,
            execution_id=ctx.process_execution.execution_id,
            ts=self.clock(),
        )

    def on_process_completed(self, ctx: ProcessExecutionContext) -> None:
        process_finished(
            self.manifest,
            process=ctx.process_name,
            ts=self.clock(),
            outputs=ctx.output_stream.bundles(),
        )

    def on_process_failed(self, ctx: ProcessExecutionContext) -> None:
        error = exception_to_error(ctx.error) if ctx.error is not None else None
        process_failed(
            self.manifest,
            process=ctx.process_name,
            ts=self.clock(),
            error=error.to_dict() if error is not None else {},
        )
        self._save()

    def on_flow_shutdown(self, ctx: FlowExecutionContext) -> None:
        status = "failed" if ctx.flow_execution.failed_process else "success"
        flow_finished(self.manifest, ts=self.clock(), status=status)
        self._save()
