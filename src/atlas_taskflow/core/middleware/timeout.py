# src/atlas_taskflow/core/middleware/timeout.py
"""
Timeout — limita o tempo de execução de uma Task.

O restante da cadeia roda em uma thread auxiliar (daemon) enquanto a thread
chamadora aguarda até `seconds`. Na expiração, o Result da Task é marcado
como `failed` com:

    - reason             = "[TimeoutExceeded] execution exceeded N seconds"
    - original_exception = TimeoutExceeded(N)
    - seconds            = N

e esse Result é devolvido.

Decisões arquiteturais:
    - A thread auxiliar restabelece o Run corrente e o identificador de
      correlação da thread chamadora
    - Python não interrompe threads: o trabalho expirado é abandonado e
      continua até terminar sozinho; seus efeitos tardios não alteram o
      Result já assentado (transições posteriores são rejeitadas)
    - Exceções que não são de timeout atravessam o middleware inalteradas

Resolução de `seconds`:
    número, nome de método da Task ou callable; qualquer resolução inválida
    (None, não numérica, não positiva) usa o teto configurado em
    `timeout.seconds` (padrão DEFAULT_TIMEOUT_SECONDS).
"""

from __future__ import annotations

import threading
from contextlib import ExitStack
from typing import Any, Dict

from atlas_taskflow.core import correlator
from atlas_taskflow.core.config.settings import DEFAULT_SETTINGS, default_timeout_seconds
from atlas_taskflow.core.evaluation import resolve_value
from atlas_taskflow.core.exceptions import InvalidTransitionError, TimeoutExceeded
from atlas_taskflow.core.middleware.base import Middleware, NextCallable
from atlas_taskflow.core.task.run import Run


DEFAULT_TIMEOUT_SECONDS = DEFAULT_SETTINGS["timeout"]["seconds"]


class Timeout(Middleware):

    def __init__(self, seconds: Any = None, *, if_: Any = None, unless: Any = None) -> None:
        super().__init__(if_=if_, unless=unless)
        self.seconds = seconds

    def limit(self, task: Any) -> float:
        value = resolve_value(task, self.seconds)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            return default_timeout_seconds()
        return value

    def call(self, task: Any, next_callable: NextCallable) -> Any:
        if not self.enabled(task):
            return next_callable(task)

        seconds = self.limit(task)
        try:
            return self._call_with_limit(task, next_callable, seconds)
        except TimeoutExceeded as exc:
            result = task.result
            if not result.success:
                return result
            try:
                result.fail(
                    f"[{type(exc).__name__}] {exc}",
                    original_exception=exc,
                    seconds=seconds,
                )
            except InvalidTransitionError:
                # assentado pelo trabalho no mesmo instante da expiração
                pass
            return result

    @staticmethod
    def _call_with_limit(task: Any, next_callable: NextCallable, seconds: float) -> Any:
        run = Run.current()
        correlation_id = correlator.current()
        outcome: Dict[str, Any] = {}
        finished = threading.Event()

        def target() -> None:
            try:
                with ExitStack() as stack:
                    if run is not None:
                        stack.enter_context(Run.use(run))
                    if correlation_id:
                        stack.enter_context(correlator.use(correlation_id))
                    outcome["value"] = next_callable(task)
            except BaseException as exc:
                outcome["error"] = exc
            finally:
                finished.set()

        helper = threading.Thread(
            target=target,
            name=f"atlas-timeout-{type(task).__name__}",
            daemon=True,
        )
        helper.start()

        if not finished.wait(seconds):
            raise TimeoutExceeded(seconds)
        if "error" in outcome:
            raise outcome["error"]
        return outcome.get("value")
