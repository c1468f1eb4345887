# src/atlas_taskflow/core/config/settings.py
"""
Settings efetivos do processo.

Este módulo mantém a configuração resolvida consumida por Tasks, Workflows
e middlewares quando nenhuma opção explícita é declarada:

    - task.breakpoints      → status que fazem `call_strict` levantar Fault
    - workflow.breakpoints  → status que fazem o Workflow adotar o Result
    - timeout.seconds       → teto padrão do middleware Timeout
    - logging.level/logger  → emissão dos Results via `logging`

Os settings são sempre derivados de DEFAULT_SETTINGS por deep-merge;
`reset_settings()` restaura o estado inicial (útil em testes).
"""

from __future__ import annotations

import threading
from copy import deepcopy
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .loader import load_config
from .merge import deep_merge


DEFAULT_SETTINGS: Dict[str, Any] = {
    "task": {"breakpoints": ["failed"]},
    "workflow": {"breakpoints": ["failed"]},
    "timeout": {"seconds": 3},
    "logging": {"level": "INFO", "logger": "atlas_taskflow"},
}

_LOCK = threading.Lock()
_settings: Dict[str, Any] = deepcopy(DEFAULT_SETTINGS)


def _validate(settings: Dict[str, Any]) -> None:
    for section in ("task", "workflow"):
        bps = settings.get(section, {}).get("breakpoints")
        if not isinstance(bps, list):
            raise ConfigError(f"{section}.breakpoints deve ser lista, recebido: {type(bps).__name__}")

    seconds = settings.get("timeout", {}).get("seconds")
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)) or seconds <= 0:
        raise ConfigError(f"timeout.seconds deve ser número positivo, recebido: {seconds!r}")


def get_settings() -> Dict[str, Any]:
    """Retorna uma cópia dos settings efetivos."""
    with _LOCK:
        return deepcopy(_settings)


def configure(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica overrides sobre DEFAULT_SETTINGS e os torna efetivos."""
    global _settings
    merged = deep_merge(DEFAULT_SETTINGS, overrides or {})
    _validate(merged)
    with _LOCK:
        _settings = merged
    return deepcopy(merged)


def configure_from_files(*, defaults_path: str, local_path: Optional[str] = None) -> Dict[str, Any]:
    return configure(load_config(defaults_path=defaults_path, local_path=local_path))


def reset_settings() -> None:
    global _settings
    with _LOCK:
        _settings = deepcopy(DEFAULT_SETTINGS)


def breakpoints_for(section: str) -> List[str]:
    return list(get_settings()[section]["breakpoints"])


def default_timeout_seconds() -> float:
    return get_settings()["timeout"]["seconds"]
