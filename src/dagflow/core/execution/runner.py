# src/dagflow/core/execution/runner.py
"""
Runner: ponto de entrada para executar Flows.

O Runner é dono do contexto raiz (runner context). Valores vinculados
nele (via `bind`, `bind_typed` ou a seção `bindings` da configuração)
ficam visíveis para toda FlowExecution e todo Process criados a partir
deste Runner, sem precisarem ser repassados explicitamente.

Exemplo:

    runner = Runner.from_files("config/dagflow.defaults.yaml", "config/dagflow.local.yaml")
    execution = runner.bind("input.path", "data.csv").run(flow)
    execution.add_listener(ManifestListener(path=Path("runs/manifest.json")))
    result = execution.start()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config.hashing import compute_config_hash
from ..config.loader import PathLike, load_config
from ..config.options import EngineOptions, bindings_from_config
from ..context import CascadeContext
from ..graph.flow import Flow
from ..logging import setup_logging
from .context import CONFIG_KEY
from .engine import FlowExecution

logger = logging.getLogger(__name__)


class Runner:
    """Contexto raiz + opções do engine + fábrica de FlowExecutions."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.context = CascadeContext()
        self.options = EngineOptions()
        self._config: Dict[str, Any] = {}
        if config is not None:
            self.configure(config)

    @classmethod
    def from_files(cls, defaults_path: PathLike, local_path: Optional[PathLike] = None) -> "Runner":
        return cls(load_config(defaults_path=defaults_path, local_path=local_path))

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    def configure(self, config: Dict[str, Any]) -> "Runner":
        """
        Aplica uma configuração resolvida.

        - `engine`   → EngineOptions (tipos e nível de log validados)
        - `bindings` → semeados no contexto do Runner

        Toda validação ocorre antes de qualquer escrita: uma configuração
        inválida deixa o Runner intacto.
        """
        options = EngineOptions.from_config(config)
        bindings = bindings_from_config(config)

        for key, value in bindings.items():
            self.context.put(key, value)

        self._config = dict(config)
        self.options = options
        self.context.put(CONFIG_KEY, self.config)

        if options.log_level:
            setup_logging(options.log_level)

        logger.debug("runner configured (%d bindings)", len(bindings))
        return self

    def bind(self, key: str, value: Any) -> "Runner":
        self.context.put(key, value)
        return self

    def bind_typed(self, value: Any, cls: Optional[type] = None) -> "Runner":
        self.context.put_typed(value, cls)
        return self

    def config_hash(self) -> str:
        return compute_config_hash(self._config)

    def run(self, flow: Flow) -> FlowExecution:
        return FlowExecution(
            flow,
            self.context,
            options=self.options,
            config_hash=self.config_hash(),
        )
