# src/atlas_taskflow/core/config/__init__.py

"""
Camada de configuração do Atlas TaskFlow.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Manutenção dos settings efetivos do processo (breakpoints, timeout, logging)

Limites explícitos:
    - Não executa Tasks nem Workflows
    - Não valida atributos de Tasks
"""

from .settings import (
    DEFAULT_SETTINGS,
    breakpoints_for,
    configure,
    configure_from_files,
    default_timeout_seconds,
    get_settings,
    reset_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "breakpoints_for",
    "configure",
    "configure_from_files",
    "default_timeout_seconds",
    "get_settings",
    "reset_settings",
]
