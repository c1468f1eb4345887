# src/atlas_taskflow/core/middleware/runtime.py
"""Runtime — registra a duração da execução (ms, relógio monotônico) em `metadata["runtime"]`."""

from __future__ import annotations

import time
from typing import Any

from atlas_taskflow.core.middleware.base import Middleware, NextCallable


class Runtime(Middleware):

    def call(self, task: Any, next_callable: NextCallable) -> Any:
        if not self.enabled(task):
            return next_callable(task)

        started = time.monotonic()
        result = next_callable(task)
        task.result.metadata["runtime"] = round((time.monotonic() - started) * 1000, 3)
        return result
