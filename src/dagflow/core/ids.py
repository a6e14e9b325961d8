"""
Serviço de identificadores de execução.

Gera identificadores únicos e legíveis para instâncias de execução
(FlowExecution, ProcessExecution), no formato `<prefixo>_<n>`, onde `n`
é um contador monotônico por tipo de execução.

Invariantes:
    - Identificadores nunca se repetem dentro do mesmo processo Python
    - Cada tipo (kind) possui seu próprio contador, iniciando em 1
    - Unicidade é o contrato; o formato é apenas legível

Limites explícitos:
    - Não garante unicidade entre processos ou máquinas
    - Não persiste contadores
"""

from __future__ import annotations

import itertools
import threading
from typing import Dict, Iterator


_lock = threading.Lock()
_counters: Dict[str, Iterator[int]] = {}


def next_id(kind: str) -> int:
    """Retorna o próximo valor do contador associado a `kind`."""
    with _lock:
        counter = _counters.get(kind)
        if counter is None:
            counter = itertools.count(1)
            _counters[kind] = counter
        return next(counter)


def new_execution_id(kind: str) -> str:
    """Gera um id de execução no formato `<kind>_<n>`."""
    return f"{kind}_{next_id(kind)}"
