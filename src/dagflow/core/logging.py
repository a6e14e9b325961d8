"""
Configuração do log sink do DagFlow.

O DagFlow emite logs via `logging` da biblioteca padrão, sempre por
loggers de módulo (`logging.getLogger(__name__)`) abaixo do namespace
`dagflow`. O pacote raiz instala um `NullHandler`, de modo que a ausência
de um sink configurado nunca quebra nem polui a execução.

Este módulo oferece apenas o atalho para aplicações que desejam
visualizar esses logs no terminal.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_handler: Optional[logging.Handler] = None


def resolve_level(level: Union[int, str]) -> int:
    """Converte nomes de nível ("DEBUG", "info", ...) para o valor numérico."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Setup basic logging for the `dagflow` namespace.

    Idempotente: chamadas repetidas apenas ajustam o nível, sem duplicar handlers.
    """
    global _handler

    logger = logging.getLogger("dagflow")
    logger.setLevel(resolve_level(level))

    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)

    return logger
