# src/dagflow/core/__init__.py
"""
Core do DagFlow.

Este pacote contém a implementação canônica do DagFlow: construção do
grafo de Processes, travessia memoizada em ordem de dependência e o
engine que conduz cada Process por `initialize`/`perform`, propagando um
contexto de configuração em camadas e emitindo notificações de ciclo de
vida.

Componentes principais:
    - context      → contexto chave-valor em camadas (runner → flow → process)
    - graph        → Arrow, Path, Flow e AnalyzedFlowGraph
    - execution    → Process, streams, FlowExecution, listeners e Runner
    - config       → carregamento, merge e hashing da configuração de execução
    - traceability → Manifest e Event Log
    - exceptions / errors → exceções tipadas e payload de erro serializável

Princípios fundamentais:
    - Cada Process executa exatamente uma vez por run, após seus upstreams
    - Uma falha de Process encerra a run inteira, sem retry
    - Erros estruturais do grafo são detectados antes de qualquer execução

Limites explícitos:
    - Não inspeciona o payload trocado entre Processes
    - Não executa ramos em paralelo nem em múltiplas máquinas
    - Não persiste resultados intermediários
"""
