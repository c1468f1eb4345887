# src/atlas_taskflow/core/task/callbacks.py
"""
Callbacks de ciclo de vida de uma Task.

Callbacks são disparados em pontos fixos da execução:

    before_validation → validação → after_validation
    before_execution  → `executing` → on_executing → work()
    (após o assentamento)
    on_<state>, on_executed, on_<status>, on_good | on_bad, after_execution

Cada registro guarda (callables, condição). Um callable pode ser:
    - nome de método da Task (chamado sem argumentos)
    - callable que recebe a Task

Decisões arquiteturais:
    - Condições `if_`/`unless` passam por `core/evaluation.py`
    - Subclasses de Task herdam uma cópia do registro da classe mãe
    - Tipos desconhecidos são rejeitados já no registro

Limites explícitos:
    - Não captura exceções; quem dispara decide o que fazer com elas
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from atlas_taskflow.core.evaluation import evaluate_conditional
from atlas_taskflow.core.exceptions import UnknownCallbackError
from atlas_taskflow.core.task.types import ResultState, ResultStatus


CALLBACK_TYPES: Tuple[str, ...] = (
    "before_validation",
    "after_validation",
    "before_execution",
    "after_execution",
    "on_executed",
    "on_good",
    "on_bad",
    *(f"on_{status.value}" for status in ResultStatus),
    *(f"on_{state.value}" for state in ResultState),
)

Entry = Tuple[Tuple[Any, ...], Dict[str, Any]]


def _check_type(kind: str) -> None:
    if kind not in CALLBACK_TYPES:
        raise UnknownCallbackError(
            f"unknown callback {kind!r}",
            details={"callback": kind, "allowed": list(CALLBACK_TYPES)},
        )


class CallbackRegistry:
    """Callbacks registrados em uma classe de Task, por tipo e em ordem de registro."""

    def __init__(self, entries: Optional[Dict[str, List[Entry]]] = None) -> None:
        self._entries: Dict[str, List[Entry]] = {
            kind: list(items) for kind, items in (entries or {}).items()
        }

    def copy(self) -> "CallbackRegistry":
        return CallbackRegistry(self._entries)

    def register(self, kind: str, *callables: Any, if_: Any = None, unless: Any = None) -> "CallbackRegistry":
        _check_type(kind)
        if not callables:
            raise TypeError(f"{kind} requires at least one callback")
        for callback in callables:
            if not (isinstance(callback, str) or callable(callback)):
                raise TypeError(f"{callback!r} is not a method name or callable")

        self._entries.setdefault(kind, []).append((tuple(callables), {"if_": if_, "unless": unless}))
        return self

    def registered(self, kind: str) -> List[Entry]:
        _check_type(kind)
        return list(self._entries.get(kind, []))

    def call(self, kind: str, task: Any) -> None:
        for callables, conditional in self.registered(kind):
            if not evaluate_conditional(task, conditional):
                continue
            for callback in callables:
                if isinstance(callback, str):
                    getattr(task, callback)()
                else:
                    callback(task)

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())
