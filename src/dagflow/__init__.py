# src/dagflow/__init__.py
"""
DagFlow — orquestração de grafos dirigidos de Processes de dados.

Um Flow é um grafo nomeado de Processes ligados por Arrows com portas
nomeadas. Cada execução (FlowExecution) inicializa todos os Processes,
percorre o grafo a partir dos sinks e executa cada Process exatamente uma
vez, entregando a ele as saídas de seus upstreams.

Uso mínimo:

    from dagflow import Flow, Path, Runner

    flow = (
        Flow("etl")
        .add_process("read", CsvSource("in.csv"))
        .add_process("write", CsvSink("out.csv"))
        .add_path(Path.from_("read").to("write"))
    )
    result = Runner().run(flow).start()

Arquitetura em alto nível:
    - dagflow.core       → grafo, engine, contexto, config, rastreabilidade
    - dagflow.processes  → Processes prontos baseados em pandas
"""

import logging

__version__ = "0.1.0"

from .core.context import CascadeContext
from .core.execution import (
    FlowExecution,
    FlowExecutionListener,
    FlowExecutionLogger,
    FlowResult,
    Process,
    ProcessInputStream,
    ProcessOutputStream,
    Runner,
)
from .core.graph import Arrow, Flow, Path

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "CascadeContext",
    "FlowExecution",
    "FlowExecutionListener",
    "FlowExecutionLogger",
    "FlowResult",
    "Process",
    "ProcessInputStream",
    "ProcessOutputStream",
    "Runner",
    "Arrow",
    "Flow",
    "Path",
]
