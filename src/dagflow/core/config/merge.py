# src/dagflow/core/config/merge.py
"""
Deep-merge de configuração (defaults + overrides locais).

Regras por valor, aplicadas chave a chave:

    base \\ override   | dict        | list       | None       | escalar
    -------------------+-------------+------------+------------+-----------
    dict               | recursivo   | substitui  | substitui  | conflito
    None / ausente     | substitui   | substitui  | substitui  | substitui
    escalar            | conflito    | substitui  | substitui  | mesmo tipo

Números (`int`/`float`) são intercambiáveis entre si; `bool` não é número.
Um `None` no override desliga o valor base (ex.: `engine.log_level: null`),
e um `None` na base é um "buraco" que qualquer override preenche (ex.:
`bindings.input.path: null` nos defaults, preenchido pelo arquivo local).

Invariantes:
    - Nenhum input é mutado; o resultado não compartilha objetos com eles
    - Conflitos levantam ConfigTypeConflictError com o caminho pontuado da chave
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError

_ABSENT = object()


def _kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def _merge_value(current: Any, incoming: Any, dotted: str) -> Any:
    if current is _ABSENT or current is None or incoming is None or isinstance(incoming, list):
        return deepcopy(incoming)

    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mapping(current, incoming, dotted)

    if _kind(current) != _kind(incoming):
        raise ConfigTypeConflictError(
            f"Conflito de tipo em '{dotted}': {type(current).__name__} vs {type(incoming).__name__}"
        )
    return deepcopy(incoming)


def _merge_mapping(base: Dict[str, Any], override: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, incoming in override.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        merged[key] = _merge_value(merged.get(key, _ABSENT), incoming, dotted)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `override` sobre `base` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: Raiz não-dict ou conflito de tipo em alguma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_mapping(base, override, "")
