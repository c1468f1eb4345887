# src/atlas_taskflow/core/task/task.py
"""
Task — unidade executável de trabalho de negócio.

Uma Task encapsula a lógica de negócio em `work()` e produz exatamente um
Result. A execução passa pela cadeia de middlewares da classe e segue o
protocolo:

    1. Result anexado ao Run na construção (`initialized`)
    2. before_validation → validação de atributos pelo `validator` da classe
       → after_validation; erros viram `failed` com reason "Invalid" e
       `work()` não roda
    3. before_execution → `executing` → on_executing → `work()`
    4. state assentado a partir do status (`complete` ou `interrupted`)
    5. callbacks on_<state>, on_executed, on_<status>, on_good|on_bad,
       after_execution
    6. Result emitido no log do Run e no `logging`, e congelado

Modos de chamada:
    - `call`        → seguro: falhas de negócio e exceções (inclusive de
                      middlewares) viram Result `failed`; erros de callbacks
                      posteriores ao assentamento ficam em
                      `metadata["callback_errors"]`
    - `call_strict` → estrito: re-levanta exceções inesperadas e levanta
                      `Fault` quando o status está nos breakpoints da Task

Decisões arquiteturais:
    - `fail`/`skip`/`throw` dentro de `work()` interrompem o trabalho com um
      Fault que a própria Task captura
    - Um Fault vindo de uma chamada estrita aninhada é adotado (`throw`),
      preservando a cadeia de falhas
    - Sinais que não são Exception (ex.: TimeoutExceeded) não são capturados
      pela Task; pertencem aos middlewares
    - Erros de definição (`UndefinedWorkError`, `PipelineConfigurationError`)
      são fatais e atravessam também o modo seguro; o Result fica
      `interrupted` com o motivo registrado em `reason`
    - O breakpoint do modo estrito é verificado depois da cadeia de
      middlewares, então Results assentados por middlewares (Timeout) também
      levantam Fault

Limites explícitos:
    - Não declara nem converte parâmetros (ver `AttributeValidator`)
    - Não faz retry
"""

from __future__ import annotations

from contextlib import ExitStack
from typing import Any, ClassVar, List, Optional

from atlas_taskflow.core import correlator
from atlas_taskflow.core.config.settings import breakpoints_for
from atlas_taskflow.core.exceptions import (
    Fault,
    PipelineConfigurationError,
    UndefinedWorkError,
)
from atlas_taskflow.core.middleware.base import MiddlewareRegistry
from atlas_taskflow.core.task.callbacks import CallbackRegistry
from atlas_taskflow.core.task.context import Context
from atlas_taskflow.core.task.result import Result
from atlas_taskflow.core.task.run import Run
from atlas_taskflow.core.task.validation import AttributeValidator, full_message
from atlas_taskflow.core.traceability.logger import log_result


def normalize_breakpoints(values: Any) -> List[str]:
    """Normaliza breakpoints para lista de strings sem duplicatas (ordem preservada)."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    normalized: List[str] = []
    for value in values:
        text = str(value)
        if text not in normalized:
            normalized.append(text)
    return normalized


class Task:
    """
    Base de todas as Tasks.

    Atributos de classe:
        - middlewares: registro de middlewares (herdado por cópia)
        - callbacks: registro de callbacks de ciclo de vida (herdado por cópia)
        - validator: AttributeValidator opcional
        - breakpoints: status que fazem `call_strict` levantar Fault
          (None → `task.breakpoints` da configuração)
    """

    middlewares: ClassVar[MiddlewareRegistry] = MiddlewareRegistry()
    callbacks: ClassVar[CallbackRegistry] = CallbackRegistry()
    validator: ClassVar[Optional[AttributeValidator]] = None
    breakpoints: ClassVar[Optional[List[str]]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.middlewares = cls.middlewares.copy()
        cls.callbacks = cls.callbacks.copy()

    @classmethod
    def use(cls, middleware: Any, **options: Any) -> type:
        """Registra um middleware na classe; retorna a classe para encadeamento."""
        cls.middlewares.register(middleware, **options)
        return cls

    @classmethod
    def on(cls, kind: str, *callables: Any, if_: Any = None, unless: Any = None) -> type:
        """Registra callbacks de ciclo de vida (ex.: `on("on_failed", "notify")`)."""
        cls.callbacks.register(kind, *callables, if_=if_, unless=unless)
        return cls

    def __init__(
        self,
        context: Any = None,
        *,
        run: Optional[Run] = None,
        correlation_id: Optional[str] = None,
        **values: Any,
    ) -> None:
        parent_run: Optional[Run] = None
        if isinstance(context, Task):
            parent_run = context.run
            context = context.context

        self.context = Context.build(context)
        self.context.update(values)
        self.id = correlator.generate()
        self.correlation_id = correlation_id

        self.run = run or parent_run or Run.current() or Run(id=correlator.resolve(correlation_id))
        self.result = Result(self)
        self.run.append(self.result)

    # -----------------------------
    # Entradas públicas
    # -----------------------------
    @classmethod
    def call(cls, context: Any = None, **kwargs: Any) -> Result:
        """Executa em modo seguro e retorna o Result."""
        task = cls(context, **kwargs)
        return task.execute(strict=False)

    @classmethod
    def call_strict(cls, context: Any = None, **kwargs: Any) -> Result:
        """Executa em modo estrito; falhas nos breakpoints levantam Fault."""
        task = cls(context, **kwargs)
        return task.execute(strict=True)

    def work(self) -> Any:
        raise UndefinedWorkError(
            f"{type(self).__name__} must implement work()",
            details={"task": type(self).__name__},
        )

    # -----------------------------
    # Controle de fluxo dentro de work()
    # -----------------------------
    def fail(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.result.fail(reason, **metadata)
        raise Fault.build(self.result)

    def skip(self, reason: Optional[str] = None, **metadata: Any) -> None:
        self.result.skip(reason, **metadata)
        raise Fault.build(self.result)

    def throw(self, result: Result, **metadata: Any) -> None:
        """Adota um Result ruim de outra Task e interrompe `work()`; success é ignorado."""
        self.result.throw(result, **metadata)
        if self.result.bad:
            raise Fault.build(self.result)

    # -----------------------------
    # Execução
    # -----------------------------
    def execute(self, *, strict: bool = False) -> Result:
        result = self.result
        with ExitStack() as stack:
            if Run.current() is not self.run:
                stack.enter_context(Run.use(self.run))
            try:
                error = self._run_chain(strict)
                self._settle()
                self._after_callbacks(strict)
            except BaseException:
                self._settle(aborted=True)
                raise
            finally:
                log_result(result)
                result.freeze()

        if error is not None:
            raise error
        if strict and result.bad and self.halts_on(result):
            raise Fault.build(result)
        return result

    def attribute_errors(self) -> dict:
        if self.validator is None:
            return {}
        return dict(self.validator.validate(self) or {})

    def halts_on(self, result: Result) -> bool:
        bps = self.breakpoints if self.breakpoints is not None else breakpoints_for("task")
        return str(result.status) in normalize_breakpoints(bps)

    def _run_chain(self, strict: bool) -> Optional[Exception]:
        """Executa a cadeia de middlewares; devolve a exceção a re-levantar no modo estrito."""
        try:
            self.middlewares.call(self, lambda task: task._perform(strict))
        except (UndefinedWorkError, PipelineConfigurationError) as exc:
            self.result.metadata.setdefault("reason", f"[{type(exc).__name__}] {exc}")
            raise
        except Exception as exc:
            # exceções de middlewares (ou re-levantadas por `_perform` no modo estrito)
            if self.result.success:
                self.result.fail(f"[{type(exc).__name__}] {exc}", original_exception=exc)
            if strict:
                return exc
        return None

    def _perform(self, strict: bool) -> Result:
        result = self.result
        try:
            self.callbacks.call("before_validation", self)
            errors = self.attribute_errors()
            if errors:
                result.fail(
                    "Invalid",
                    errors={"full_message": full_message(errors), "messages": errors},
                )
            self.callbacks.call("after_validation", self)

            if not errors:
                self.callbacks.call("before_execution", self)
                result.mark_executing()
                self.callbacks.call("on_executing", self)
                self.work()
        except (UndefinedWorkError, PipelineConfigurationError):
            raise
        except Fault as fault:
            if fault.result is not result:
                result.throw(fault.result)
            if strict and self.halts_on(result):
                if fault.result is result:
                    raise
                raise Fault.build(result) from fault
            return result
        except Exception as exc:
            if result.success:
                result.fail(f"[{type(exc).__name__}] {exc}", original_exception=exc)
            if strict:
                raise
        return result

    def _after_callbacks(self, strict: bool) -> None:
        result = self.result
        kinds = [f"on_{result.state}", "on_executed", f"on_{result.status}"]
        if result.good:
            kinds.append("on_good")
        if result.bad:
            kinds.append("on_bad")
        kinds.append("after_execution")

        for kind in kinds:
            try:
                self.callbacks.call(kind, self)
            except Exception as exc:
                if strict:
                    raise
                # o Result já está assentado; o erro fica registrado no próprio Result
                errors = result.metadata.setdefault("callback_errors", [])
                errors.append({"callback": kind, "error": f"[{type(exc).__name__}] {exc}"})

    def _settle(self, aborted: bool = False) -> None:
        result = self.result
        if result.executed:
            return
        if aborted:
            result.mark_interrupted()
            return
        if result.initialized and result.success:
            result.mark_executing()
        result.mark_executed()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} run={self.run.id}>"
