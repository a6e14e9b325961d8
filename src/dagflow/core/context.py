"""
Contexto em camadas (cascade) do DagFlow.

Este módulo define o `CascadeContext`, o armazenamento chave-valor usado
para propagar configuração e objetos compartilhados através dos escopos
de uma execução:

    runner context → flow execution context → process execution context

Cada camada possui seu próprio mapa local e uma referência opcional ao
contexto pai. Leituras caem para o pai quando a chave não existe
localmente; escritas sempre atingem apenas a camada local.

Princípios fundamentais:
    - Visibilidade apenas descendente (o filho vê o pai, nunca o contrário)
    - Um filho nunca muta entradas do pai
    - Ausência não é exceção em `get` (retorna o default)

Decisões arquiteturais:
    - Contextos de Flow e de Process são compostos (embutem um
      CascadeContext) em vez de herdar dele
    - O acesso "por tipo" é açúcar sobre uma chave string estável
      (`<module>.<qualname>`), sem reflexão em tempo de leitura

Limites explícitos:
    - Não há remoção de chaves
    - Não há iteração sobre o conteúdo
    - Não é seguro para escrita concorrente entre threads
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Type, TypeVar, runtime_checkable

from .exceptions import ContextKeyError

T = TypeVar("T")

_MISSING = object()


def type_key(cls: type) -> str:
    """Chave string estável usada para registrar singletons por tipo."""
    return f"{cls.__module__}.{cls.__qualname__}"


@runtime_checkable
class Context(Protocol):
    """Contrato mínimo de leitura/escrita de um contexto."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def put(self, key: str, value: Any) -> "Context":
        ...

    def contains(self, key: str) -> bool:
        ...


class ContextAccessMixin:
    """Operações derivadas (require, acesso por tipo) sobre `get`/`put`/`contains`."""

    def require(self, key: str) -> Any:
        """Retorna o valor de `key` ou levanta ContextKeyError se ausente na cadeia."""
        if not self.contains(key):  # type: ignore[attr-defined]
            raise ContextKeyError(
                f"Context key not found: {key}",
                details={"key": key},
                hint="Registre a chave via Runner.bind(...) ou ctx.put(...)",
            )
        return self.get(key)  # type: ignore[attr-defined]

    def put_typed(self, value: Any, cls: Optional[type] = None):
        """Registra `value` sob a chave do seu tipo (ou de `cls`, quando informado)."""
        key_cls = cls if cls is not None else type(value)
        return self.put(type_key(key_cls), value)  # type: ignore[attr-defined]

    def get_typed(self, cls: Type[T], default: Any = None) -> T:
        return self.get(type_key(cls), default)  # type: ignore[attr-defined]


class CascadeContext(ContextAccessMixin):
    """
    Camada de contexto com fallback para o pai.

    Invariantes:
        - `put` escreve somente no mapa local e retorna a própria instância
        - `get` consulta o mapa local, depois a cadeia de pais
        - Um valor `None` armazenado explicitamente é considerado presente
    """

    def __init__(self, parent: Optional[Context] = None):
        self._parent = parent
        self._values: Dict[str, Any] = {}

    @property
    def parent(self) -> Optional[Context]:
        return self._parent

    def get(self, key: str, default: Any = None) -> Any:
        value = self._values.get(key, _MISSING)
        if value is not _MISSING:
            return value
        if self._parent is not None:
            return self._parent.get(key, default)
        return default

    def put(self, key: str, value: Any) -> "CascadeContext":
        self._values[key] = value
        return self

    def contains(self, key: str) -> bool:
        if key in self._values:
            return True
        return self._parent is not None and self._parent.contains(key)

    def __repr__(self) -> str:
        return f"CascadeContext(keys={sorted(self._values)!r}, has_parent={self._parent is not None})"
