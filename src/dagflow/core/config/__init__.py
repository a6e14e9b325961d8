# src/dagflow/core/config/__init__.py

"""
Camada de configuração do DagFlow.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar a configuração de execução
usada pelo Runner.

A configuração no DagFlow é:
    - declarativa
    - determinística
    - explicitamente versionável

Responsabilidades do pacote:
    - Carregamento de arquivos (defaults + overrides locais) em YAML ou JSON
    - Resolução de configuração final via deep-merge determinístico
    - Interpretação e validação das seções `engine` (EngineOptions) e `bindings`
    - Geração de hash canônico para rastreabilidade

Seções reconhecidas:
    - engine   → opções do engine (log_level, default_logger, shutdown_on_failure)
    - bindings → pares chave/valor semeados no contexto do Runner

Limites explícitos:
    - Não executa Flows
    - Não interage com Processes diretamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidBindingsError,
    InvalidConfigRootTypeError,
    InvalidEngineOptionError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .options import EngineOptions, bindings_from_config, validate_config

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidBindingsError",
    "InvalidConfigRootTypeError",
    "InvalidEngineOptionError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "EngineOptions",
    "bindings_from_config",
    "validate_config",
]
