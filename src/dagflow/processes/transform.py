"""
Processes de transformação de DataFrames (pandas).

Todos produzem um **novo** DataFrame na porta default; nenhum muta o
DataFrame recebido, já que o mesmo objeto pode ser lido por vários
downstreams.

- SelectColumns → projeção de colunas (colunas ausentes são erro explícito)
- FilterRows    → filtro via `DataFrame.query`
- ConcatFrames  → concatenação vertical de várias portas de entrada
- JoinFrames    → junção (`pandas.merge`) de duas portas de entrada
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import pandas as pd

from ..core.exceptions import InvalidProcessDefinitionError
from ..core.execution.context import ProcessExecutionContext
from ..core.execution.process import Process
from ..core.execution.streams import ProcessInputStream, ProcessOutputStream


def _require_frame(value, process: str) -> pd.DataFrame:
    if not isinstance(value, pd.DataFrame):
        raise TypeError(f"{process} expects a DataFrame, got {type(value).__name__}")
    return value


class SelectColumns(Process):
    def __init__(self, columns: Sequence[str], *, bundle: Optional[str] = None):
        if not columns:
            raise InvalidProcessDefinitionError(
                "SelectColumns requires at least one column",
                details={"process": "SelectColumns"},
            )
        self.columns: List[str] = list(columns)
        self.bundle = bundle

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        df = _require_frame(in_.read(self.bundle), "SelectColumns")

        missing = [c for c in self.columns if c not in df.columns]
        if missing:
            raise KeyError(f"columns not found: {missing}")

        out.write(df.loc[:, self.columns].copy())


class FilterRows(Process):
    def __init__(self, query: str, *, bundle: Optional[str] = None):
        self.query = query
        self.bundle = bundle

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        df = _require_frame(in_.read(self.bundle), "FilterRows")
        filtered = df.query(self.query)
        out.write(filtered)
        pec.log(level="debug", message="rows filtered", before=int(len(df)), after=int(len(filtered)))


class ConcatFrames(Process):
    """Concatena as portas `bundles` (ou todas as portas ligadas, em ordem alfabética)."""

    def __init__(self, bundles: Optional[Sequence[str]] = None, *, ignore_index: bool = True):
        self.bundles = list(bundles) if bundles is not None else None
        self.ignore_index = ignore_index

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        bundles = self.bundles if self.bundles is not None else sorted(in_.ports())
        frames = [_require_frame(in_.read(b), "ConcatFrames") for b in bundles]
        if not frames:
            raise ValueError("ConcatFrames has no input to concatenate")
        out.write(pd.concat(frames, ignore_index=self.ignore_index))


class JoinFrames(Process):
    def __init__(
        self,
        on: Union[str, Sequence[str]],
        *,
        how: str = "inner",
        left: str = "left",
        right: str = "right",
    ):
        self.on = on
        self.how = how
        self.left = left
        self.right = right

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        left = _require_frame(in_.read(self.left), "JoinFrames")
        right = _require_frame(in_.read(self.right), "JoinFrames")
        out.write(pd.merge(left, right, on=self.on, how=self.how))
