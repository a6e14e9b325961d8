"""
Modelo de grafo do DagFlow.

Componentes:
    - arrow    → `Arrow` (aresta com portas) e `Path` (builder fluente)
    - flow     → `Flow` (Processes nomeados + Arrows)
    - analysis → `AnalyzedFlowGraph` (adjacência, validação, travessia memoizada)

Invariantes:
    - Um Flow só é executável se `analyze()` o aceitar como DAG válido
    - Cada Process é avaliado no máximo uma vez por travessia
"""

from .analysis import AnalyzedFlowGraph, analyze_flow
from .arrow import DEFAULT_BUNDLE, Arrow, Path, normalize_bundle
from .flow import Flow

__all__ = [
    "AnalyzedFlowGraph",
    "analyze_flow",
    "Arrow",
    "Path",
    "DEFAULT_BUNDLE",
    "normalize_bundle",
    "Flow",
]
