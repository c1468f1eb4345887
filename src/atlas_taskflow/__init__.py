# src/atlas_taskflow/__init__.py
"""
Atlas TaskFlow — Tasks, Results e Workflows com rastreabilidade de falhas.

Uma unidade de trabalho de negócio é expressa como uma Task, que produz
exatamente um Result com duas dimensões: o `state` da execução e o
`status` de negócio. Tasks são compostas em Workflows, cujo Pipeline
executa grupos ordenados sequencialmente ou em paralelo, podendo
interromper e adotar o desfecho de um membro (breakpoints).

Arquitetura em alto nível:
    - core.task         → Task, Result, Run, Context, callbacks e validação de atributos
    - core.middleware   → cadeia de middlewares (Correlate, Timeout, Runtime)
    - core.engine       → Workflow, planner de grupos e Pipeline
    - core.correlator   → identificador de correlação por thread
    - core.config       → settings efetivos (YAML/JSON + deep-merge)
    - core.traceability → serialização e emissão de Results

Limites explícitos:
    - Não executa de forma distribuída
    - Não persiste estado de execução entre processos
    - Não faz retry nem agendamento
"""

from atlas_taskflow.core import correlator
from atlas_taskflow.core.engine import ExecutionGroup, Pipeline, Workflow
from atlas_taskflow.core.exceptions import (
    AtlasException,
    Failed,
    Fault,
    InvalidTransitionError,
    PipelineConfigurationError,
    Skipped,
    TimeoutExceeded,
    UndefinedWorkError,
    UnknownCallbackError,
)
from atlas_taskflow.core.middleware import Correlate, Middleware, Runtime, Timeout
from atlas_taskflow.core.task import (
    AttributeValidator,
    CallbackRegistry,
    Context,
    RequiredKeys,
    Result,
    ResultState,
    ResultStatus,
    Run,
    Task,
)

__version__ = "0.1.0"

__all__ = [
    "correlator",
    "Task",
    "Result",
    "ResultState",
    "ResultStatus",
    "Run",
    "Context",
    "AttributeValidator",
    "RequiredKeys",
    "CallbackRegistry",
    "Workflow",
    "Pipeline",
    "ExecutionGroup",
    "Middleware",
    "Correlate",
    "Timeout",
    "Runtime",
    "AtlasException",
    "Fault",
    "Skipped",
    "Failed",
    "InvalidTransitionError",
    "PipelineConfigurationError",
    "TimeoutExceeded",
    "UndefinedWorkError",
    "UnknownCallbackError",
]
