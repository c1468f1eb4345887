"""Task, Result, Run e Context — o modelo de execução do Atlas TaskFlow."""

from .callbacks import CALLBACK_TYPES, CallbackRegistry
from .context import Context
from .result import Result
from .run import Run
from .task import Task, normalize_breakpoints
from .types import ResultState, ResultStatus
from .validation import AttributeValidator, RequiredKeys

__all__ = [
    "CALLBACK_TYPES",
    "CallbackRegistry",
    "Context",
    "Result",
    "Run",
    "Task",
    "normalize_breakpoints",
    "ResultState",
    "ResultStatus",
    "AttributeValidator",
    "RequiredKeys",
]
