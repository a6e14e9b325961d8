# src/dagflow/core/config/options.py
"""
Interpretação das seções da configuração efetiva consumidas pelo DagFlow.

Seções reconhecidas:

    engine:
      log_level: INFO            # opcional; nome de nível do `logging`
      default_logger: true       # registra FlowExecutionLogger por padrão
      shutdown_on_failure: false # dispara on_flow_shutdown também em runs com falha
    bindings:                    # pares chave/valor semeados no contexto do Runner
      input.path: data/in.csv

Decisões arquiteturais:
    - Ausência da seção (ou de uma chave) equivale ao default documentado
    - Tipos inválidos são erro explícito (sem coerção de "yes"/"no")
    - `log_level` é validado aqui, antes de qualquer efeito colateral no Runner
    - Seções desconhecidas são toleradas, com aviso em log

Invariantes:
    - `EngineOptions.from_config` e `bindings_from_config` nunca mutam a configuração
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..logging import resolve_level
from .errors import InvalidBindingsError, InvalidEngineOptionError

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("engine", "bindings")


def _bool_option(section: Mapping[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise InvalidEngineOptionError(
            f"engine.{key} deve ser bool, recebido: {type(value).__name__}"
        )
    return value


def _level_option(section: Mapping[str, Any]) -> Optional[str]:
    level = section.get("log_level")
    if level is None:
        return None
    if not isinstance(level, str):
        raise InvalidEngineOptionError(
            f"engine.log_level deve ser str, recebido: {type(level).__name__}"
        )
    try:
        resolve_level(level)
    except ValueError:
        raise InvalidEngineOptionError(f"engine.log_level desconhecido: {level!r}") from None
    return level


@dataclass(frozen=True)
class EngineOptions:
    """Opções imutáveis consumidas por FlowExecution e Runner."""

    default_logger: bool = True
    shutdown_on_failure: bool = False
    log_level: Optional[str] = None

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "EngineOptions":
        engine_cfg = (config or {}).get("engine") or {}
        if not isinstance(engine_cfg, dict):
            raise InvalidEngineOptionError(
                f"engine deve ser dict, recebido: {type(engine_cfg).__name__}"
            )

        unknown = sorted(set(engine_cfg) - {"default_logger", "shutdown_on_failure", "log_level"})
        if unknown:
            logger.warning("unknown engine options ignored: %s", unknown)

        return cls(
            default_logger=_bool_option(engine_cfg, "default_logger", True),
            shutdown_on_failure=_bool_option(engine_cfg, "shutdown_on_failure", False),
            log_level=_level_option(engine_cfg),
        )


def bindings_from_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Extrai a seção `bindings` como um novo dicionário.

    Raises:
        InvalidBindingsError: Se a seção não for um mapeamento de chaves string.
    """
    bindings = (config or {}).get("bindings") or {}
    if not isinstance(bindings, dict):
        raise InvalidBindingsError(
            f"bindings deve ser dict, recebido: {type(bindings).__name__}"
        )

    bad_keys = [key for key in bindings if not isinstance(key, str) or not key]
    if bad_keys:
        raise InvalidBindingsError(f"chaves de bindings devem ser strings não vazias: {bad_keys!r}")
    return dict(bindings)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Valida as seções conhecidas de uma configuração resolvida e a devolve."""
    EngineOptions.from_config(config)
    bindings_from_config(config)

    unknown = sorted(str(key) for key in config if key not in KNOWN_SECTIONS)
    if unknown:
        logger.warning("unknown config sections ignored: %s", unknown)
    return config
