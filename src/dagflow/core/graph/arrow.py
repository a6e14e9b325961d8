# src/dagflow/core/graph/arrow.py
"""
Arestas do grafo (Arrow) e o builder fluente de caminhos (Path).

Uma `Arrow` liga a porta de saída (`bundle_out`) de um Process à porta de
entrada (`bundle_in`) de outro. O `Path` acumula Arrows na ordem de
declaração:

    Path.from_("read").to("clean").to("write")
    # [read]-()-()-[clean], [clean]-()-()-[write]

    Path.from_("left", bundle_out="rows").to("join", bundle_in="left")

Decisões arquiteturais:
    - `process_to` permanece `None` até ser ligado por `Path.to`
    - Portas vazias ("") designam a porta default
    - Nenhuma validação de existência de Processes ocorre aqui; ela é
      responsabilidade de `Flow.analyze()`

Invariantes:
    - `Path.to` sem Arrow iniciada levanta PendingArrowError
    - `bundle_out` nunca é descartado: ou nomeia a porta, ou é conflito explícito
    - `to_arrow_seq()` preserva a ordem de inserção
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..exceptions import ArrowPortConflictError, PendingArrowError

DEFAULT_BUNDLE = "default"


def normalize_bundle(bundle: Optional[str]) -> str:
    """Porta vazia ("") ou None designa a porta default."""
    return bundle or DEFAULT_BUNDLE


@dataclass(eq=False)
class Arrow:
    """Aresta dirigida e qualificada por portas entre dois Processes."""

    process_from: str
    process_to: Optional[str] = None
    bundle_out: str = ""
    bundle_in: str = ""

    @property
    def is_bound(self) -> bool:
        return self.process_to is not None

    def __str__(self) -> str:
        return f"[{self.process_from}]-({self.bundle_out})-({self.bundle_in})-[{self.process_to}]"


class Path:
    """Builder fluente de uma sequência de Arrows."""

    def __init__(self) -> None:
        self._arrows: List[Arrow] = []

    @classmethod
    def from_(cls, process_from: str, bundle_out: str = "") -> "Path":
        """Inicia um caminho com uma Arrow pendente a partir de `process_from`."""
        return cls().start(process_from, bundle_out=bundle_out)

    def start(self, process_from: str, bundle_out: str = "") -> "Path":
        """Abre uma nova Arrow pendente neste caminho."""
        self._arrows.append(Arrow(process_from, None, bundle_out, ""))
        return self

    def to(self, process_to: str, bundle_in: str = "", bundle_out: str = "") -> "Path":
        """
        Liga o destino da Arrow pendente mais recente.

        Quando a última Arrow já está ligada, encadeia uma nova Arrow a partir
        do último destino (`bundle_out` nomeia a porta de saída desse elo).
        Quando a Arrow ainda está pendente, um `bundle_out` não vazio nomeia
        a sua porta de saída, desde que `from_`/`start` não tenha nomeado outra.

        Raises:
            PendingArrowError: Se o caminho ainda não possui nenhuma Arrow.
            ArrowPortConflictError: Se `bundle_out` diverge da porta já definida.
        """
        if not self._arrows:
            raise PendingArrowError(
                f"Path.to('{process_to}') called before any arrow was started",
                details={"process_to": process_to},
                hint="Inicie o caminho com Path.from_(...) ou path.start(...)",
            )

        last = self._arrows[-1]
        if last.is_bound:
            last = Arrow(last.process_to, None, bundle_out, "")  # type: ignore[arg-type]
            self._arrows.append(last)
        elif bundle_out:
            if last.bundle_out and last.bundle_out != bundle_out:
                raise ArrowPortConflictError(
                    f"Arrow from '{last.process_from}' already leaves by port "
                    f"'{last.bundle_out}', not '{bundle_out}'",
                    details={
                        "process_from": last.process_from,
                        "bundle_out": last.bundle_out,
                        "requested": bundle_out,
                    },
                    hint="Declare a porta de saída em um único lugar: from_(...) ou to(...)",
                )
            last.bundle_out = bundle_out

        last.process_to = process_to
        last.bundle_in = bundle_in
        return self

    def to_arrow_seq(self) -> List[Arrow]:
        return list(self._arrows)

    def __repr__(self) -> str:
        return f"Path({', '.join(str(a) for a in self._arrows)})"
