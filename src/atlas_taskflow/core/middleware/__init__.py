"""
Middlewares de Task do Atlas TaskFlow.

- Correlate → identificador de correlação durante a execução
- Timeout   → limite de tempo com conversão da expiração em falha
- Runtime   → duração da execução em `metadata["runtime"]`
"""

from .base import Middleware, MiddlewareRegistry
from .correlate import Correlate
from .runtime import Runtime
from .timeout import DEFAULT_TIMEOUT_SECONDS, Timeout

__all__ = [
    "Middleware",
    "MiddlewareRegistry",
    "Correlate",
    "Timeout",
    "Runtime",
    "DEFAULT_TIMEOUT_SECONDS",
]
