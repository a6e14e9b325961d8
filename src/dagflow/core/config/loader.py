# src/dagflow/core/config/loader.py
"""
Resolução da configuração de execução do DagFlow a partir de arquivos.

Uma configuração efetiva nasce de dois arquivos:

    config/dagflow.defaults.yaml   (obrigatório, versionado)
    config/dagflow.local.yaml      (opcional, fora do controle de versão)

O arquivo local é aplicado sobre os defaults via `deep_merge` e o
resultado é validado pelas mesmas regras que o Runner aplica em
`configure` (seções `engine` e `bindings`). Assim, um arquivo inválido
falha no carregamento, com o caminho do arquivo na mensagem, e não mais
tarde no meio da configuração do Runner.

Formatos: YAML (`.yaml`, `.yml`, via PyYAML) e JSON (`.json`).
Um arquivo vazio equivale a `{}`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .options import validate_config

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": lambda text: json.loads(text) if text.strip() else None,
}


def _parse(path: Path) -> Dict[str, Any]:
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise UnsupportedConfigFormatError(
            f"Formato não suportado: {path.suffix or '(sem extensão)'} em {path}"
        )

    data = parser(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{path}: config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega defaults (+ overrides locais) e valida as seções do DagFlow.

    Raises:
        DefaultsNotFoundError: Arquivo de defaults inexistente.
        UnsupportedConfigFormatError: Extensão não suportada.
        InvalidConfigRootTypeError: Raiz do arquivo não é um mapeamento.
        ConfigTypeConflictError: Override incompatível com os defaults.
        InvalidEngineOptionError: Seção `engine` inválida.
        InvalidBindingsError: Seção `bindings` inválida.
    """
    defaults_file = Path(defaults_path)
    if not defaults_file.is_file():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {defaults_file}")
    config = _parse(defaults_file)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.is_file():
            config = deep_merge(config, _parse(local_file))
            logger.debug("config resolved from %s + %s", defaults_file, local_file)
        else:
            logger.debug("local config not found, using defaults only: %s", local_file)

    return validate_config(config)
