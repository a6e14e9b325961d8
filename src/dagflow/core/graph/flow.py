# src/dagflow/core/graph/flow.py
"""
Definição estática de um Flow.

Um `Flow` agrega Processes nomeados e o conjunto de Arrows que os liga.
Ele é uma definição declarativa: não executa nada, apenas descreve o grafo
que o engine vai percorrer.

Decisões arquiteturais:
    - Registrar um nome já existente substitui o Process anterior
      (last write wins), com aviso em log
    - Arrows de vários Paths são simplesmente concatenadas
    - Validação estrutural ocorre em `analyze()`, nunca no registro

Invariantes:
    - `process_names()` reflete a ordem de registro
    - `analyze()` não muta o Flow e pode ser chamado repetidamente
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

from ..exceptions import InvalidProcessNameError, UnknownProcessError
from .analysis import AnalyzedFlowGraph, analyze_flow
from .arrow import Arrow, Path

if TYPE_CHECKING:
    from ..execution.process import Process

logger = logging.getLogger(__name__)


class Flow:
    """Processes nomeados + Arrows."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or "flow"
        self._processes: Dict[str, "Process"] = {}
        self._arrows: List[Arrow] = []

    def add_process(self, name: str, process: "Process") -> "Flow":
        if not isinstance(name, str) or not name.strip():
            raise InvalidProcessNameError(
                f"Invalid process name: {name!r}",
                details={"name": name, "flow": self.name},
                hint="Use uma string não vazia como nome do Process",
            )
        if name in self._processes:
            logger.warning("flow '%s': process '%s' replaced", self.name, name)
        self._processes[name] = process
        return self

    def add_path(self, path: Path) -> "Flow":
        self._arrows.extend(path.to_arrow_seq())
        return self

    def process_names(self) -> List[str]:
        return list(self._processes)

    def has_process(self, name: str) -> bool:
        return name in self._processes

    def get_process(self, name: str) -> "Process":
        try:
            return self._processes[name]
        except KeyError:
            raise UnknownProcessError(
                f"Unknown process: {name}",
                details={"process": name, "flow": self.name},
            ) from None

    def arrows(self) -> List[Arrow]:
        return list(self._arrows)

    def describe(self) -> List[str]:
        """Uma linha por Arrow, na ordem de declaração."""
        return [str(arrow) for arrow in self._arrows]

    def analyze(self) -> AnalyzedFlowGraph:
        return analyze_flow(self)

    def __repr__(self) -> str:
        return f"Flow(name={self.name!r}, processes={len(self._processes)}, arrows={len(self._arrows)})"

    def __str__(self) -> str:
        return self.name
