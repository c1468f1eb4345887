"""
Atlas TaskFlow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Atlas TaskFlow.

Objetivo:
- Permitir que Tasks/Pipeline levantem exceções semânticas tipadas
- Separar erros de configuração (fatais) de falhas de negócio (Results)
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções carregam apenas dados estruturados em `details`.
- `Fault` nunca é o mecanismo primário de controle de fluxo para o chamador:
  ele só atravessa a fronteira de uma Task em modo estrito.
- `TimeoutExceeded` herda de BaseException para que `except Exception`
  em código de Task nunca o engula; apenas o middleware Timeout o trata.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from atlas_taskflow.core.task.result import Result


class AtlasException(Exception):
    """Base class para exceções internas do Atlas TaskFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Result / máquina de estados
# ---------------------------------------------------------------------------

class InvalidTransitionError(AtlasException):
    """Transição de `state` ou `status` proibida pelo lattice do Result."""


class UndefinedWorkError(AtlasException):
    """Task concreta não implementou `work()`."""


class UnknownCallbackError(AtlasException):
    """Callback registrado (ou disparado) com um tipo fora de CALLBACK_TYPES."""


# ---------------------------------------------------------------------------
# Pipeline / Configuração
# ---------------------------------------------------------------------------

class PipelineConfigurationError(AtlasException):
    """Configuração inválida de um ExecutionGroup (ex.: strategy desconhecida)."""


# ---------------------------------------------------------------------------
# Faults — propagação de resultados ruins entre Tasks
# ---------------------------------------------------------------------------

class Fault(AtlasException):
    """Carrega um Result `skipped` ou `failed` através da fronteira de uma Task.

    Levantado por `Task.fail/skip/throw` para interromper `work()` (e capturado
    pela própria Task), e em modo estrito quando o status do Result está nos
    breakpoints da Task.
    """

    def __init__(self, result: "Result") -> None:
        reason = result.metadata.get("reason") or "no reason given"
        super().__init__(
            str(reason),
            details={"status": str(result.status), "index": result.index},
        )
        self.result = result

    @property
    def task(self) -> Any:
        return self.result.task

    @property
    def run(self) -> Any:
        return self.result.run

    @classmethod
    def build(cls, result: "Result") -> "Fault":
        """Instancia a subclasse correspondente ao status do Result."""
        if result.skipped:
            return Skipped(result)
        if result.failed:
            return Failed(result)
        raise InvalidTransitionError(
            "cannot build a fault from a successful result",
            details={"status": str(result.status)},
        )


class Skipped(Fault):
    """Fault de um Result com status `skipped`."""


class Failed(Fault):
    """Fault de um Result com status `failed`."""


# ---------------------------------------------------------------------------
# Timeout
# ---------------------------------------------------------------------------

class TimeoutExceeded(BaseException):
    """Sinal de expiração do middleware Timeout.

    Não herda de Exception: o sinal deve atravessar o `except Exception`
    da Task até a fronteira do middleware.
    """

    def __init__(self, seconds: float) -> None:
        super().__init__(f"execution exceeded {seconds} seconds")
        self.seconds = seconds

    def __reduce__(self):
        return (type(self), (self.seconds,))
