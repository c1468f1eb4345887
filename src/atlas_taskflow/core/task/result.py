# src/atlas_taskflow/core/task/result.py
"""
Result — desfecho canônico de uma execução de Task.

Todo Task produz exatamente um Result, que carrega duas dimensões
independentes:

    - state  → ciclo de vida da execução (initialized → executing → complete|interrupted)
    - status → desfecho de negócio (success → skipped|failed)

Além disso, o Result mantém a cadeia de falhas entre chamadas aninhadas:

    - caused_failure → o Result folha que originou a falha (nunca reescrito)
    - threw_failure  → o Result filho adotado neste salto (reescrito a cada salto)

Decisões arquiteturais:
    - Transições ilegais levantam `InvalidTransitionError`; nunca são ignoradas
    - `fail`/`skip` do Result não interrompem o fluxo do chamador; quem interrompe
      `work()` é a Task (via Fault)
    - Transições são serializadas por um lock interno, pois o middleware Timeout
      pode assentar o Result enquanto o trabalho abandonado ainda roda

Invariantes:
    - `state` e `status` são monotônicos
    - `complete` exige status `success`
    - `caused_failure`, uma vez definido, não muda
    - Depois de `freeze()` (fim de `Task.execute`), `metadata` é somente
      leitura e atributos não podem ser reatribuídos

Limites explícitos:
    - Não executa lógica de negócio
    - Não registra logs (ver `core/traceability`)
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from atlas_taskflow.core.exceptions import InvalidTransitionError
from atlas_taskflow.core.task.types import TERMINAL_STATES, ResultState, ResultStatus

if TYPE_CHECKING:
    from atlas_taskflow.core.task.run import Run


Handler = Callable[["Result"], Any]


class Result:
    """
    Resultado de uma única execução de Task.

    Campos canônicos:
        - task: instância da Task dona do Result
        - run: Run ao qual o Result foi anexado
        - index: posição do Result no Run (atribuída em `Run.append`)
        - metadata: dados abertos (reason, original_exception, seconds, runtime, errors)
    """

    def __init__(self, task: Any = None) -> None:
        self.task = task
        self.run: Optional["Run"] = None
        self.index: Optional[int] = None
        self.metadata: Dict[str, Any] = {}

        self._state = ResultState.INITIALIZED
        self._status = ResultStatus.SUCCESS
        self._caused_failure: Optional[Result] = None
        self._threw_failure: Optional[Result] = None
        self._lock = threading.RLock()
        self._frozen = False

    # -----------------------------
    # Leitura
    # -----------------------------
    @property
    def state(self) -> ResultState:
        return self._state

    @property
    def status(self) -> ResultStatus:
        return self._status

    @property
    def caused_failure(self) -> Optional["Result"]:
        return self._caused_failure

    @property
    def threw_failure(self) -> Optional["Result"]:
        return self._threw_failure

    @property
    def runtime(self) -> Optional[float]:
        return self.metadata.get("runtime")

    @property
    def reason(self) -> Optional[str]:
        return self.metadata.get("reason")

    # status
    @property
    def success(self) -> bool:
        return self._status is ResultStatus.SUCCESS

    @property
    def skipped(self) -> bool:
        return self._status is ResultStatus.SKIPPED

    @property
    def failed(self) -> bool:
        return self._status is ResultStatus.FAILED

    @property
    def good(self) -> bool:
        return not self.failed

    @property
    def bad(self) -> bool:
        return not self.success

    # state
    @property
    def initialized(self) -> bool:
        return self._state is ResultState.INITIALIZED

    @property
    def executing(self) -> bool:
        return self._state is ResultState.EXECUTING

    @property
    def complete(self) -> bool:
        return self._state is ResultState.COMPLETE

    @property
    def interrupted(self) -> bool:
        return self._state is ResultState.INTERRUPTED

    @property
    def executed(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def thrown(self) -> bool:
        """True quando o desfecho foi adotado de outro Result (e não causado aqui)."""
        return self._threw_failure is not None

    @property
    def outcome(self) -> str:
        """
        Desfecho reportado: o status, exceto enquanto o Result ainda está
        `initialized` ou quando a falha foi adotada de outra Task, casos em
        que o state é reportado.
        """
        if self.initialized or (self.failed and self.thrown):
            return str(self._state)
        return str(self._status)

    # -----------------------------
    # Imutabilidade
    # -----------------------------
    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Result":
        """Congela o Result: `metadata` vira somente leitura e atributos não mudam mais."""
        with self._lock:
            if not self._frozen:
                object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
                object.__setattr__(self, "_frozen", True)
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"cannot set {name!r} on a frozen result")
        object.__setattr__(self, name, value)

    # -----------------------------
    # Transições de state
    # -----------------------------
    def mark_executing(self) -> "Result":
        with self._lock:
            if self.executing:
                return self
            if not self.initialized:
                raise self._illegal("state", ResultState.EXECUTING)
            self._state = ResultState.EXECUTING
        return self

    def mark_complete(self) -> "Result":
        with self._lock:
            if self.complete:
                return self
            if not self.executing or not self.success:
                raise self._illegal("state", ResultState.COMPLETE)
            self._state = ResultState.COMPLETE
        return self

    def mark_interrupted(self) -> "Result":
        with self._lock:
            if self.interrupted:
                return self
            if self.complete:
                raise self._illegal("state", ResultState.INTERRUPTED)
            self._state = ResultState.INTERRUPTED
        return self

    def mark_executed(self) -> "Result":
        """Assenta o state a partir do status: success → complete; demais → interrupted."""
        if self.success:
            return self.mark_complete()
        return self.mark_interrupted()

    # -----------------------------
    # Transições de status
    # -----------------------------
    def fail(self, reason: Optional[str] = None, **metadata: Any) -> "Result":
        return self._settle(ResultStatus.FAILED, reason, metadata)

    def skip(self, reason: Optional[str] = None, **metadata: Any) -> "Result":
        return self._settle(ResultStatus.SKIPPED, reason, metadata)

    def throw(self, other: "Result", **local_metadata: Any) -> "Result":
        """
        Adota o desfecho de outro Result (skipped ou failed).

        Args:
            other: Result filho a adotar
            **local_metadata: metadados locais mesclados sobre os do filho

        Returns:
            Result: o próprio Result

        Raises:
            TypeError: se `other` não for um Result
            InvalidTransitionError: se este Result já não for `success`
        """
        if not isinstance(other, Result):
            raise TypeError(f"can only throw a Result, got {type(other).__name__}")
        if other is self:
            raise InvalidTransitionError("a result cannot adopt itself")
        if other.success:
            return self

        metadata = dict(other.metadata)
        metadata.update(local_metadata)
        with self._lock:
            self._settle(other.status, metadata.pop("reason", None), metadata)
            self._threw_failure = other
            if self._caused_failure is None:
                self._caused_failure = other.caused_failure or other
        return self

    def _settle(self, status: ResultStatus, reason: Optional[str], metadata: Dict[str, Any]) -> "Result":
        with self._lock:
            if not self.success:
                raise self._illegal("status", status)
            if self.complete:
                raise self._illegal("state", ResultState.INTERRUPTED)

            self._status = status
            if reason is not None:
                self.metadata["reason"] = reason
            self.metadata.update(metadata)
            self.mark_interrupted()
        return self

    def _illegal(self, field_name: str, target: Any) -> InvalidTransitionError:
        current = self._state if field_name == "state" else self._status
        return InvalidTransitionError(
            f"cannot transition {field_name} from {current} to {target}",
            details={
                "field": field_name,
                "from": str(current),
                "to": str(target),
                "index": self.index,
            },
        )

    # -----------------------------
    # Handlers encadeáveis
    # -----------------------------
    def _handle(self, matches: bool, callback: Handler) -> "Result":
        if not callable(callback):
            raise TypeError("handler callback must be callable")
        if matches:
            callback(self)
        return self

    def handle_success(self, callback: Handler) -> "Result":
        return self._handle(self.success, callback)

    def handle_skipped(self, callback: Handler) -> "Result":
        return self._handle(self.skipped, callback)

    def handle_failed(self, callback: Handler) -> "Result":
        return self._handle(self.failed, callback)

    def handle_good(self, callback: Handler) -> "Result":
        return self._handle(self.good, callback)

    def handle_bad(self, callback: Handler) -> "Result":
        return self._handle(self.bad, callback)

    def handle_complete(self, callback: Handler) -> "Result":
        return self._handle(self.complete, callback)

    def handle_interrupted(self, callback: Handler) -> "Result":
        return self._handle(self.interrupted, callback)

    def handle_executed(self, callback: Handler) -> "Result":
        return self._handle(self.executed, callback)

    # -----------------------------
    # Serialização
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        from atlas_taskflow.core.traceability.serializer import result_to_dict

        return result_to_dict(self)

    def __repr__(self) -> str:
        task_name = type(self.task).__name__ if self.task is not None else None
        return (
            f"<Result task={task_name} index={self.index} "
            f"state={self._state} status={self._status}>"
        )
