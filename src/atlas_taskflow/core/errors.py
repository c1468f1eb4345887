"""
Atlas TaskFlow — Canonical Failure Structures (v1)

Este módulo define o padrão canônico de classificação de falhas do Atlas TaskFlow.
Falhas são artefatos de domínio: um Result `failed` ou `skipped` é sempre
classificado em um código estável, serializável e acionável.

Taxonomia:
- VALIDATION_FAILURE   → erros de atributos reportados pelo validador externo
- BUSINESS_FAILURE     → chamada explícita a `fail()` na lógica da Task
- SKIPPED              → chamada explícita a `skip()` (não é erro)
- TIMEOUT_FAILURE      → expiração convertida pelo middleware Timeout
- UNEXPECTED_EXCEPTION → qualquer outra exceção capturada
- THROWN_FAILURE       → resultado adotado de outra Task (nested / breakpoint)

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import TYPE_CHECKING, Any, Dict, Optional

from .exceptions import TimeoutExceeded

if TYPE_CHECKING:
    from atlas_taskflow.core.task.result import Result


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FailurePayload:
    """
    Payload canônico de falha do Atlas TaskFlow.

    Campos:
    - type: código estável da falha (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável da falha."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos (v1)
# ---------------------------------------------------------------------------

VALIDATION_FAILURE = "VALIDATION_FAILURE"
BUSINESS_FAILURE = "BUSINESS_FAILURE"
SKIPPED = "SKIPPED"
TIMEOUT_FAILURE = "TIMEOUT_FAILURE"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
THROWN_FAILURE = "THROWN_FAILURE"

# Configuração (fatal, nunca vira Result)
PIPELINE_CONFIGURATION_ERROR = "PIPELINE_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def validation_failure(*, errors: Dict[str, Any], message: str = "Invalid") -> FailurePayload:
    return FailurePayload(
        type=VALIDATION_FAILURE,
        message=message,
        details={"errors": errors},
        hint="Corrija os atributos inválidos antes de reexecutar a Task.",
    )


def business_failure(*, reason: Optional[str]) -> FailurePayload:
    return FailurePayload(
        type=BUSINESS_FAILURE,
        message=reason or "no reason given",
        details={},
    )


def skipped(*, reason: Optional[str]) -> FailurePayload:
    return FailurePayload(
        type=SKIPPED,
        message=reason or "no reason given",
        details={},
    )


def timeout_failure(*, seconds: Any, reason: Optional[str] = None) -> FailurePayload:
    return FailurePayload(
        type=TIMEOUT_FAILURE,
        message=reason or f"execution exceeded {seconds} seconds",
        details={"seconds": seconds},
        hint="Aumente o limite do middleware Timeout ou reduza o trabalho da Task.",
    )


def unexpected_exception(*, exc: BaseException) -> FailurePayload:
    return FailurePayload(
        type=UNEXPECTED_EXCEPTION,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log técnico da Task que originou a falha.",
    )


def thrown_failure(*, result: "Result") -> FailurePayload:
    caused = result.caused_failure
    threw = result.threw_failure
    return FailurePayload(
        type=THROWN_FAILURE,
        message=str(result.metadata.get("reason") or "no reason given"),
        details={
            "caused_failure_index": caused.index if caused is not None else None,
            "threw_failure_index": threw.index if threw is not None else None,
        },
    )


def pipeline_configuration_error(*, message: str, details: Optional[Dict[str, Any]] = None) -> FailurePayload:
    return FailurePayload(
        type=PIPELINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint="Revise a declaração dos grupos do Workflow (strategy, breakpoints, hints).",
    )


def classify_failure(result: "Result") -> Optional[FailurePayload]:
    """Converte um Result ruim em FailurePayload.

    Regras (ordem importa):
    - success → None
    - skipped → SKIPPED
    - failed adotado de outra Task → THROWN_FAILURE
    - failed com `errors` → VALIDATION_FAILURE
    - failed por TimeoutExceeded → TIMEOUT_FAILURE
    - failed com `original_exception` → UNEXPECTED_EXCEPTION
    - demais → BUSINESS_FAILURE
    """
    if result.success:
        return None

    reason = result.metadata.get("reason")
    if result.skipped:
        return skipped(reason=reason)

    if result.threw_failure is not None:
        return thrown_failure(result=result)

    if "errors" in result.metadata:
        return validation_failure(errors=result.metadata["errors"], message=reason or "Invalid")

    exc = result.metadata.get("original_exception")
    if isinstance(exc, TimeoutExceeded):
        return timeout_failure(seconds=result.metadata.get("seconds", exc.seconds), reason=reason)
    if isinstance(exc, BaseException):
        return unexpected_exception(exc=exc)

    return business_failure(reason=reason)
