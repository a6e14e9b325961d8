# src/dagflow/core/graph/analysis.py
"""
Análise estrutural e travessia memoizada de um Flow.

Este módulo compila o conjunto de Arrows de um Flow em listas de
adjacência (entrada e saída por Process), valida a estrutura do grafo e
expõe a primitiva central de travessia: `AnalyzedFlowGraph.visit`.

A travessia parte dos Processes "sink" (sem Arrow de saída) e, para
avaliar um Process, avalia antes todos os seus upstreams, memoizando o
resultado de cada Process. Assim, dependências em diamante executam o
ancestral comum uma única vez.

Princípios fundamentais:
    - O Flow deve formar um DAG válido
    - Validação estrutural ocorre antes de qualquer execução
    - A ordem de travessia é determinística para a mesma definição

Decisões arquiteturais:
    - Sinks são visitados na ordem de registro dos Processes
    - Upstreams são avaliados na ordem de declaração das Arrows
    - A travessia é iterativa (pilha explícita), sem limite de profundidade
      imposto pela recursão do interpretador
    - A detecção de ciclos usa Kahn determinístico, como o planner

Invariantes:
    - Cada Process alcançável é avaliado exatamente uma vez por `visit`
    - Nenhum Process é avaliado antes de todos os seus upstreams
    - A tabela de memo é local a cada chamada de `visit`

Limites explícitos:
    - Não executa Processes (o operador recebido decide o que fazer)
    - Não interage com contextos nem listeners
    - Não paraleliza ramos independentes
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Sequence, Set, Tuple, TypeVar

from ..exceptions import (
    CycleDetectedError,
    DuplicateInputPortError,
    UnboundArrowError,
    UnknownProcessError,
)
from .arrow import Arrow, normalize_bundle

if TYPE_CHECKING:
    from .flow import Flow

T = TypeVar("T")

Operator = Callable[[str, Dict[str, T]], T]


class AnalyzedFlowGraph:
    """
    Visão derivada e somente-leitura de um Flow.

    Construída uma vez por chamada de `Flow.analyze()`; alterações
    posteriores no Flow não são refletidas em visões já construídas.
    """

    def __init__(
        self,
        process_names: Sequence[str],
        previous_arrows: Mapping[str, List[Arrow]],
        next_arrows: Mapping[str, List[Arrow]],
        order: Sequence[str],
    ) -> None:
        self._process_names: Tuple[str, ...] = tuple(process_names)
        self._previous: Dict[str, Tuple[Arrow, ...]] = {k: tuple(v) for k, v in previous_arrows.items()}
        self._next: Dict[str, Tuple[Arrow, ...]] = {k: tuple(v) for k, v in next_arrows.items()}
        self._order: Tuple[str, ...] = tuple(order)

    def process_names(self) -> List[str]:
        return list(self._process_names)

    def previous_arrows(self, name: str) -> List[Arrow]:
        """Arrows que terminam em `name` (suas entradas)."""
        return list(self._previous.get(name, ()))

    def next_arrows(self, name: str) -> List[Arrow]:
        """Arrows que partem de `name` (suas saídas)."""
        return list(self._next.get(name, ()))

    def sinks(self) -> List[str]:
        return [name for name in self._process_names if name not in self._next]

    def topological_order(self) -> List[str]:
        """Ordem topológica determinística calculada durante a validação."""
        return list(self._order)

    def visit(self, op: Operator) -> Dict[str, T]:
        """
        Percorre o grafo a partir dos sinks, avaliando cada Process uma vez.

        Para avaliar `P`, todos os upstreams de `P` são avaliados antes e seus
        resultados são entregues a `op(P, inputs)`, onde `inputs` mapeia a
        porta de entrada (`arrow.bundle_in`) ao resultado do upstream.

        Exceções levantadas por `op` interrompem a travessia imediatamente.

        Args:
            op: Operador `(process_name, inputs_by_port) -> result`.

        Returns:
            Dict[str, T]: Resultados por Process, na ordem de avaliação.
        """
        memo: Dict[str, T] = {}

        for sink in self.sinks():
            stack: List[Tuple[str, bool]] = [(sink, False)]
            while stack:
                name, expanded = stack.pop()
                if name in memo:
                    continue

                upstream = self._previous.get(name, ())
                if not expanded:
                    stack.append((name, True))
                    for arrow in reversed(upstream):
                        if arrow.process_from not in memo:
                            stack.append((arrow.process_from, False))
                    continue

                inputs = {arrow.bundle_in: memo[arrow.process_from] for arrow in upstream}
                memo[name] = op(name, inputs)

        return memo


def _find_cycle(remaining: Set[str], previous: Mapping[str, List[Arrow]]) -> List[str]:
    # Todo nó restante após Kahn tem ao menos um upstream também restante;
    # caminhar para trás até repetir um nó fecha um ciclo.
    start = sorted(remaining)[0]
    path: List[str] = []
    seen: Dict[str, int] = {}
    current = start
    while current not in seen:
        seen[current] = len(path)
        path.append(current)
        current = next(
            arrow.process_from
            for arrow in previous.get(current, [])
            if arrow.process_from in remaining
        )
    cycle = path[seen[current]:]
    cycle.reverse()
    return cycle + [cycle[0]]


def analyze_flow(flow: "Flow") -> AnalyzedFlowGraph:
    """
    Valida um Flow e produz sua visão analisada.

    Validações (nesta ordem):
        1. toda Arrow possui destino ligado
        2. toda extremidade referencia um Process registrado
        3. nenhum Process recebe duas Arrows na mesma porta de entrada
        4. o grafo é acíclico

    Raises:
        UnboundArrowError: Arrow sem `process_to`.
        UnknownProcessError: Arrow referencia Process inexistente.
        DuplicateInputPortError: Porta de entrada ligada mais de uma vez.
        CycleDetectedError: O grafo contém um ciclo.
    """
    names = flow.process_names()
    registered = set(names)

    previous: Dict[str, List[Arrow]] = {}
    following: Dict[str, List[Arrow]] = {}
    bound_ports: Dict[Tuple[str, str], Arrow] = {}

    for arrow in flow.arrows():
        if not arrow.is_bound:
            raise UnboundArrowError(
                f"Arrow from '{arrow.process_from}' has no destination",
                details={"arrow": str(arrow)},
                hint="Complete o caminho com .to(...)",
            )

        for endpoint in (arrow.process_from, arrow.process_to):
            if endpoint not in registered:
                raise UnknownProcessError(
                    f"Arrow {arrow} references unknown process '{endpoint}'",
                    details={"arrow": str(arrow), "process": endpoint},
                    hint="Registre o Process com Flow.add_process(...)",
                )

        port = (arrow.process_to, normalize_bundle(arrow.bundle_in))
        if port in bound_ports:
            raise DuplicateInputPortError(
                f"Process '{arrow.process_to}' receives two arrows on input port '{port[1]}'",
                details={
                    "process": arrow.process_to,
                    "bundle_in": port[1],
                    "arrows": [str(bound_ports[port]), str(arrow)],
                },
                hint="Nomeie as portas de entrada com .to(name, bundle_in=...)",
            )
        bound_ports[port] = arrow

        previous.setdefault(arrow.process_to, []).append(arrow)  # type: ignore[arg-type]
        following.setdefault(arrow.process_from, []).append(arrow)

    # Kahn (determinístico, empates pela ordem de registro)
    position = {name: i for i, name in enumerate(names)}
    incoming = {name: len(previous.get(name, [])) for name in names}
    ready = [name for name in names if incoming[name] == 0]
    order: List[str] = []

    while ready:
        name = ready.pop(0)
        order.append(name)
        for arrow in following.get(name, []):
            child = arrow.process_to
            incoming[child] -= 1  # type: ignore[index]
            if incoming[child] == 0:  # type: ignore[index]
                ready.append(child)  # type: ignore[arg-type]
                ready.sort(key=position.__getitem__)

    if len(order) != len(names):
        remaining = registered - set(order)
        cycle = _find_cycle(remaining, previous)
        raise CycleDetectedError(
            "Cycle detected in flow graph: " + " -> ".join(cycle),
            details={"cycle": cycle, "processes": sorted(remaining)},
        )

    return AnalyzedFlowGraph(names, previous, following, order)
