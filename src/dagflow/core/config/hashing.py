# src/dagflow/core/config/hashing.py
"""
Hashing canônico de configuração do DagFlow.

O hash representa a identidade estrutural da configuração efetiva de uma
execução e é copiado para o contexto da FlowExecution e para o Manifest.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256 (64 caracteres hexadecimais)

Valores não serializáveis em JSON (ex.: objetos vinculados ao runner)
são representados pelo seu `repr`, para que o hash seja sempre calculável.
"""

import hashlib
import json
from typing import Any, Dict


def canonical_json(config: Dict[str, Any]) -> str:
    return json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=repr,
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva.

    Invariantes:
        - Configurações estruturalmente equivalentes produzem o mesmo hash
        - A ordem original das chaves não influencia o resultado

    Args:
        config (Dict[str, Any]): Configuração efetiva resolvida.

    Returns:
        str: Hash SHA-256 hexadecimal.
    """
    if not isinstance(config, dict):
        raise TypeError(f"config must be a dict, got {type(config).__name__}")

    payload = canonical_json(config).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()
