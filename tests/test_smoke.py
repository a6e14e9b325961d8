# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do DagFlow.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote pode ser importado sem falhas estruturais
- a API pública de topo está exposta
- o ambiente de testes (pytest) está funcional

Invariantes:
    - Estes testes devem sempre passar em um setup correto
    - Não dependem de configuração, filesystem ou I/O

Limites explícitos:
    - Não testar fluxo de execução
    - Não acumular asserts funcionais
"""


def test_smoke():
    import dagflow

    assert dagflow.__version__
    for name in ("Flow", "Path", "Arrow", "Runner", "FlowExecution", "CascadeContext", "Process"):
        assert hasattr(dagflow, name), name


def test_minimal_flow_runs():
    from dagflow import Flow, Runner

    class Hello:
        def initialize(self, ctx):
            pass

        def perform(self, in_, out, pec):
            out.write("hello")

    result = Runner().run(Flow("smoke").add_process("hello", Hello())).start()

    assert result.output("hello").read() == "hello"
