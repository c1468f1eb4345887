# src/atlas_taskflow/core/middleware/base.py
"""
Contrato e registro de middlewares de Task.

Um middleware envolve a execução de uma Task no estilo "cebola":

    call(task, next_callable) -> Result

e decide se (e como) invoca `next_callable(task)`, que representa o
restante da cadeia até a execução em si.

Decisões arquiteturais:
    - O primeiro middleware registrado é o mais externo
    - O registro guarda (middleware, opções); instâncias são construídas
      a cada execução, então middlewares não compartilham estado entre chamadas
    - Subclasses de Task herdam uma cópia do registro da classe mãe

Invariantes:
    - A ordem de registro é preservada
    - Registro vazio equivale a executar a Task diretamente

Limites explícitos:
    - Não captura exceções; cada middleware decide o que tratar
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from atlas_taskflow.core.evaluation import evaluate_conditional

NextCallable = Callable[[Any], Any]


class Middleware:
    """
    Base opcional para middlewares com condições `if_`/`unless`.

    Subclasses implementam `call(task, next_callable)` e consultam
    `enabled(task)` para decidir se aplicam o próprio comportamento.
    """

    def __init__(self, *, if_: Any = None, unless: Any = None) -> None:
        self.conditional: Dict[str, Any] = {"if_": if_, "unless": unless}

    def enabled(self, task: Any) -> bool:
        return evaluate_conditional(task, self.conditional)

    def call(self, task: Any, next_callable: NextCallable) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement call(task, next_callable)")


class MiddlewareRegistry:
    """Lista ordenada de middlewares registrados em uma classe de Task."""

    def __init__(self, entries: Optional[List[Tuple[Any, Dict[str, Any]]]] = None) -> None:
        self._entries: List[Tuple[Any, Dict[str, Any]]] = list(entries or [])

    def copy(self) -> "MiddlewareRegistry":
        return MiddlewareRegistry([(mw, dict(opts)) for mw, opts in self._entries])

    def register(self, middleware: Any, **options: Any) -> "MiddlewareRegistry":
        if isinstance(middleware, type):
            if not callable(getattr(middleware, "call", None)):
                raise TypeError(f"{middleware.__name__} does not define call(task, next_callable)")
        elif options:
            raise TypeError("options can only be given when registering a middleware class")
        elif not (callable(getattr(middleware, "call", None)) or callable(middleware)):
            raise TypeError(f"{middleware!r} is not a middleware")

        self._entries.append((middleware, options))
        return self

    def __iter__(self) -> Iterator[Tuple[Any, Dict[str, Any]]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def call(self, task: Any, core: NextCallable) -> Any:
        """Compõe a cadeia (primeiro registrado = mais externo) e a executa."""
        chain = core
        for middleware, options in reversed(self._entries):
            chain = _link(middleware, options, chain)
        return chain(task)


def _link(middleware: Any, options: Dict[str, Any], next_callable: NextCallable) -> NextCallable:
    def step(task: Any) -> Any:
        instance = middleware(**options) if isinstance(middleware, type) else middleware
        handler = getattr(instance, "call", None)
        if callable(handler):
            return handler(task, next_callable)
        return instance(task, next_callable)

    return step
