"""
Processes de entrada/saída baseados em CSV (pandas).

- `CsvSource` lê um arquivo CSV e escreve o DataFrame na porta default.
- `CsvSink` lê a porta de entrada, grava o CSV e repassa o DataFrame na
  porta default (útil para inspeção via FlowResult).

O caminho pode ser fixo (`path=...`) ou resolvido pelo contexto em
`initialize` (`path_key=...`), permitindo que o Runner injete o caminho
via `bind` ou pela seção `bindings` da configuração.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

from ..core.exceptions import InvalidProcessDefinitionError
from ..core.execution.context import FlowExecutionContext, ProcessExecutionContext
from ..core.execution.process import Process
from ..core.execution.streams import ProcessInputStream, ProcessOutputStream

PathLike = Union[str, Path]


def _check_path_source(owner: str, path: Optional[PathLike], path_key: Optional[str]) -> None:
    if path is None and not path_key:
        raise InvalidProcessDefinitionError(
            f"{owner} requires path or path_key",
            details={"process": owner},
            hint="Informe path=... ou path_key=... (chave resolvida no contexto)",
        )


def _resolve_path(path: Optional[PathLike], path_key: Optional[str], ctx: FlowExecutionContext) -> Path:
    if path is not None:
        return Path(path)
    return Path(ctx.require(path_key))  # type: ignore[arg-type]


class CsvSource(Process):
    def __init__(self, path: Optional[PathLike] = None, *, path_key: Optional[str] = None, **read_kwargs: Any):
        _check_path_source("CsvSource", path, path_key)
        self.path = path
        self.path_key = path_key
        self.read_kwargs: Dict[str, Any] = dict(read_kwargs)
        self._resolved: Optional[Path] = None

    def initialize(self, ctx: FlowExecutionContext) -> None:
        self._resolved = _resolve_path(self.path, self.path_key, ctx)

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        if self._resolved is None or not self._resolved.exists():
            raise FileNotFoundError(f"CSV source not found: {self._resolved}")

        df = pd.read_csv(self._resolved, **self.read_kwargs)
        out.write(df)
        pec.log(level="info", message="csv loaded", path=str(self._resolved), rows=int(len(df)))


class CsvSink(Process):
    def __init__(
        self,
        path: Optional[PathLike] = None,
        *,
        path_key: Optional[str] = None,
        bundle: Optional[str] = None,
        index: bool = False,
    ):
        _check_path_source("CsvSink", path, path_key)
        self.path = path
        self.path_key = path_key
        self.bundle = bundle
        self.index = index
        self._resolved: Optional[Path] = None

    def initialize(self, ctx: FlowExecutionContext) -> None:
        self._resolved = _resolve_path(self.path, self.path_key, ctx)

    def perform(self, in_: ProcessInputStream, out: ProcessOutputStream, pec: ProcessExecutionContext) -> None:
        df = in_.read(self.bundle)
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"CsvSink expects a DataFrame, got {type(df).__name__}")

        self._resolved.parent.mkdir(parents=True, exist_ok=True)  # type: ignore[union-attr]
        df.to_csv(self._resolved, index=self.index)
        out.write(df)
        pec.log(level="info", message="csv written", path=str(self._resolved), rows=int(len(df)))
