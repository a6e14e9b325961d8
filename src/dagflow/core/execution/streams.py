# src/dagflow/core/execution/streams.py
"""
Streams de entrada e saída de uma ProcessExecution.

- `ProcessOutputStream`: mapa porta → dataset, escrito pelo Process.
- `ProcessInputStream`: mapa porta de entrada → (output stream do upstream,
  porta de saída do upstream), montado pelo engine a partir das Arrows.

Decisões arquiteturais:
    - Datasets trafegam por identidade: o core nunca copia, converte ou
      inspeciona o payload
    - "" e "default" designam a mesma porta
    - Leitura de porta inexistente é erro explícito (PortNotFoundError),
      nunca `None` silencioso
    - Leitura sem porta com várias portas ligadas é erro explícito
      (AmbiguousPortError), exceto quando a porta default está ligada
"""

from __future__ import annotations

from typing import Any, Dict, List, NamedTuple, Optional

from ..exceptions import AmbiguousPortError, PortNotFoundError
from ..graph.arrow import DEFAULT_BUNDLE, normalize_bundle


class ProcessOutputStream:
    """Portas de saída de um Process."""

    def __init__(self, process_name: Optional[str] = None) -> None:
        self.process_name = process_name
        self._data: Dict[str, Any] = {}

    def write(self, data: Any, bundle: str = DEFAULT_BUNDLE) -> None:
        self._data[normalize_bundle(bundle)] = data

    def write_bundle(self, bundle: str, data: Any) -> None:
        self.write(data, bundle)

    def read(self, bundle: str = DEFAULT_BUNDLE) -> Any:
        key = normalize_bundle(bundle)
        if key not in self._data:
            raise PortNotFoundError(
                f"Process '{self.process_name}' wrote nothing on port '{key}'",
                details={"process": self.process_name, "bundle": key, "written": self.bundles()},
            )
        return self._data[key]

    def has(self, bundle: str = DEFAULT_BUNDLE) -> bool:
        return normalize_bundle(bundle) in self._data

    def bundles(self) -> List[str]:
        return list(self._data)

    def is_empty(self) -> bool:
        return not self._data

    def __repr__(self) -> str:
        return f"ProcessOutputStream(process={self.process_name!r}, bundles={self.bundles()!r})"


class _Binding(NamedTuple):
    upstream: ProcessOutputStream
    bundle_out: str
    process_from: Optional[str]


class ProcessInputStream:
    """Portas de entrada de um Process, ligadas às saídas dos upstreams."""

    def __init__(self, process_name: Optional[str] = None) -> None:
        self.process_name = process_name
        self._bindings: Dict[str, _Binding] = {}

    def attach(
        self,
        bundle_in: str,
        upstream: ProcessOutputStream,
        bundle_out: str = "",
        process_from: Optional[str] = None,
    ) -> None:
        self._bindings[normalize_bundle(bundle_in)] = _Binding(
            upstream, normalize_bundle(bundle_out), process_from or upstream.process_name
        )

    def ports(self) -> List[str]:
        return list(self._bindings)

    def is_empty(self) -> bool:
        return not self._bindings

    def read(self, bundle: Optional[str] = None) -> Any:
        """
        Lê o dataset ligado a uma porta de entrada.

        Sem `bundle`: lê a porta default se ligada; senão a única porta ligada.

        Raises:
            PortNotFoundError: Porta não ligada, ou upstream não escreveu a porta de saída.
            AmbiguousPortError: `bundle` omitido com várias portas ligadas e nenhuma default.
        """
        if bundle is None:
            key = self._default_port()
        else:
            key = normalize_bundle(bundle)

        binding = self._bindings.get(key)
        if binding is None:
            raise PortNotFoundError(
                f"Process '{self.process_name}' has no input on port '{key}'",
                details={"process": self.process_name, "bundle": key, "ports": self.ports()},
                hint="Ligue a porta com Path.from_(...).to(process, bundle_in=...)",
            )
        return binding.upstream.read(binding.bundle_out)

    def _default_port(self) -> str:
        if DEFAULT_BUNDLE in self._bindings or not self._bindings:
            return DEFAULT_BUNDLE
        if len(self._bindings) == 1:
            return next(iter(self._bindings))
        raise AmbiguousPortError(
            f"Process '{self.process_name}' has several input ports; name one of them",
            details={"process": self.process_name, "ports": self.ports()},
            hint="Use in_.read(bundle)",
        )

    def __repr__(self) -> str:
        return f"ProcessInputStream(process={self.process_name!r}, ports={self.ports()!r})"
