# src/atlas_taskflow/core/task/run.py
"""
Run — árvore de invocação compartilhada de uma chamada raiz.

O Run agrupa, em ordem de anexação, todos os Results produzidos por uma
chamada raiz e por todas as chamadas aninhadas (incluindo as despachadas
por grupos paralelos).

Responsabilidades:
    - atribuir `index` estritamente crescente a cada Result anexado
    - expor o desfecho agregado (delegado ao Result raiz)
    - manter o log estruturado de eventos da execução
    - oferecer o "Run corrente" da thread, com escopo (`Run.use`)

Invariantes:
    - Anexação é protegida por lock: índices únicos mesmo sob threads
    - O primeiro Result anexado é o Result raiz
    - Threads novas não herdam o Run corrente implicitamente

Limites explícitos:
    - Não persiste estado
    - Não conhece Pipeline nem middlewares
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from atlas_taskflow.core import correlator
from atlas_taskflow.core.task.result import Result


_current = threading.local()


class Run:
    """Sequência append-only de Results de uma mesma árvore de invocação."""

    def __init__(self, id: Optional[str] = None) -> None:
        self.id = id or correlator.generate()
        self.created_at = datetime.now(timezone.utc).isoformat()
        self.events: List[Dict[str, Any]] = []
        self._results: List[Result] = []
        self._lock = threading.Lock()

    # -----------------------------
    # Results
    # -----------------------------
    def append(self, result: Result) -> int:
        with self._lock:
            index = len(self._results)
            self._results.append(result)
        result.index = index
        result.run = self
        return index

    def index(self, result: Result) -> int:
        with self._lock:
            for position, item in enumerate(self._results):
                if item is result:
                    return position
        raise ValueError("result does not belong to this run")

    @property
    def results(self) -> List[Result]:
        with self._lock:
            return list(self._results)

    @property
    def root(self) -> Optional[Result]:
        with self._lock:
            return self._results[0] if self._results else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    # -----------------------------
    # Desfecho agregado (Result raiz)
    # -----------------------------
    @property
    def state(self) -> Optional[str]:
        root = self.root
        return str(root.state) if root is not None else None

    @property
    def status(self) -> Optional[str]:
        root = self.root
        return str(root.status) if root is not None else None

    @property
    def outcome(self) -> Optional[str]:
        root = self.root
        return root.outcome if root is not None else None

    @property
    def runtime(self) -> Optional[float]:
        root = self.root
        return root.runtime if root is not None else None

    # -----------------------------
    # Log estruturado
    # -----------------------------
    def log(self, *, task: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.id,
            "task": task,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def to_dict(self) -> Dict[str, Any]:
        from atlas_taskflow.core.traceability.serializer import run_to_dict

        return run_to_dict(self)

    # -----------------------------
    # Run corrente (thread-local)
    # -----------------------------
    @staticmethod
    def current() -> Optional["Run"]:
        return getattr(_current, "run", None)

    @staticmethod
    @contextmanager
    def use(run: "Run") -> Iterator["Run"]:
        """Define `run` como Run corrente da thread durante o bloco."""
        if not isinstance(run, Run):
            raise TypeError(f"expected a Run, got {type(run).__name__}")

        previous = Run.current()
        _current.run = run
        try:
            yield run
        finally:
            _current.run = previous

    def __repr__(self) -> str:
        return f"<Run id={self.id} results={len(self)}>"
