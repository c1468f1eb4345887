# src/atlas_taskflow/core/middleware/correlate.py
"""
Correlate — executa a Task sob um identificador de correlação.

O identificador é escolhido pela ordem canônica do Correlator:
    1. `id` declarado no middleware (literal, nome de método da Task ou callable),
       ou o `correlation_id` passado na construção da Task
    2. identificador ativo na thread
    3. id do Run da Task
    4. identificador recém-gerado

O identificador anterior é restaurado ao final, mesmo sob exceção.
"""

from __future__ import annotations

from typing import Any, Optional

from atlas_taskflow.core import correlator
from atlas_taskflow.core.evaluation import resolve_value
from atlas_taskflow.core.middleware.base import Middleware, NextCallable


class Correlate(Middleware):

    def __init__(self, id: Any = None, *, if_: Any = None, unless: Any = None) -> None:
        super().__init__(if_=if_, unless=unless)
        self.id = id

    def explicit_id(self, task: Any) -> Optional[str]:
        value = resolve_value(task, self.id)
        if value is None or value == "":
            value = getattr(task, "correlation_id", None)
        return str(value) if value not in (None, "") else None

    def call(self, task: Any, next_callable: NextCallable) -> Any:
        if not self.enabled(task):
            return next_callable(task)

        correlation_id = correlator.resolve(self.explicit_id(task), getattr(task, "run", None))
        with correlator.use(correlation_id):
            return next_callable(task)
