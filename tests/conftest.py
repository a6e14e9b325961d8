# tests/conftest.py
"""
Fixtures compartilhados para testes do DagFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas (YAML como string)
- um Runner sem listener default (saída de log previsível)
- um journal compartilhado entre Processes e listeners de teste
- fábricas de Processes de teste (registro de chamadas, falha deliberada)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Processes de teste utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa um Flow
    - Nenhuma fixture realiza I/O
    - Dados retornados são determinísticos e isolados por teste

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

from datetime import datetime, timedelta, timezone

import pytest

from tests.fixtures.processes.recording import FailingProcess, RecordingListener, RecordingProcess


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante a `config/dagflow.defaults.yaml`.

    Decisões arquiteturais:
        - Configuração fornecida como string para evitar I/O implícito
        - Defaults sempre representam a base completa e estável

    Invariantes:
        - YAML sintaticamente válido
        - Contém as seções `engine` e `bindings`
    """
    return """\
engine:
  default_logger: true
  shutdown_on_failure: false
  log_level: INFO
bindings:
  input.path: data/input.csv
  sample.rows: 100
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (subconjunto dos defaults)."""
    return """\
engine:
  shutdown_on_failure: true
bindings:
  input.path: /tmp/override.csv
"""


# =====================================================
# Engine fixtures
# =====================================================

@pytest.fixture
def runner():
    """
    Runner sem `FlowExecutionLogger` registrado por padrão.

    Testes que precisam observar listeners registram os seus próprios;
    assim, `FlowExecution.listeners()` contém somente o que o teste adicionou.
    """
    from dagflow.core.execution.runner import Runner

    return Runner({"engine": {"default_logger": False}})


@pytest.fixture
def journal():
    """Lista compartilhada de `(evento, nome)` em ordem de chamada."""
    return []


@pytest.fixture
def recording_process(journal):
    def _make(name, **kwargs):
        return RecordingProcess(name, journal, **kwargs)

    return _make


@pytest.fixture
def failing_process():
    def _make(exc=None):
        return FailingProcess(exc if exc is not None else RuntimeError("boom"))

    return _make


@pytest.fixture
def recording_listener(journal):
    return RecordingListener(journal)


@pytest.fixture
def fixed_clock():
    """
    Relógio determinístico: cada chamada avança 1 segundo a partir de 2024-01-01T00:00:00Z.
    """
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = {"n": 0}

    def _clock():
        value = base + timedelta(seconds=ticks["n"])
        ticks["n"] += 1
        return value

    return _clock
