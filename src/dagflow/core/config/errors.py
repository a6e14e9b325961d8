# src/dagflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do DagFlow.

As exceções aqui definidas representam violações estruturais explícitas
da configuração de execução, e não erros de execução de Processes.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de domínio ou falha de Process

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine, Flow ou Runner
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do DagFlow.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e resolução de configuração herdam desta classe, permitindo captura
    genérica e distinção clara entre falhas de configuração e falhas de
    execução.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    O arquivo de defaults é obrigatório; sem ele não existe configuração
    efetiva válida.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"shutdown_on_failure": false}}
        - override: {"engine": "DEBUG"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidEngineOptionError(ConfigError):
    """
    Exceção levantada quando uma opção da seção `engine` possui tipo ou
    valor inválido (ex.: `shutdown_on_failure: "yes"`, `log_level: LOUD`).

    Opções do engine não sofrem coerção implícita.
    """


class InvalidBindingsError(ConfigError):
    """
    Exceção levantada quando a seção `bindings` não é um mapeamento de
    chaves string não vazias para valores.

    Bindings são semeados no contexto raiz do Runner; chaves não string
    tornariam os valores inalcançáveis via `ctx.get(...)`.
    """
