"""
Correlator — identificador de correlação ativo por thread.

Este módulo mantém um único identificador de correlação por thread e
oferece o uso com escopo (`use`) que restaura o valor anterior ao final
do bloco, mesmo quando o bloco levanta exceção.

Ordem de resolução (maior precedência primeiro), aplicada por `resolve`:
    1. identificador explícito fornecido pelo chamador
    2. identificador ativo na thread corrente
    3. id do Run já estabelecido
    4. identificador recém-gerado

Invariantes:
    - O estado é local à thread: threads novas começam sem identificador
    - `use` sempre restaura (ou limpa) o valor anterior

Limites explícitos:
    - Não propaga o identificador para outras threads; quem despacha
      trabalho concorrente deve reaplicar `use` explicitamente
"""

from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional


_state = threading.local()


def generate() -> str:
    return str(uuid.uuid4())


def current() -> Optional[str]:
    return getattr(_state, "correlation_id", None)


def set_current(value: Optional[str]) -> None:
    _state.correlation_id = value


def clear() -> None:
    _state.correlation_id = None


@contextmanager
def use(value: str) -> Iterator[str]:
    """Define `value` como identificador ativo durante o bloco."""
    if not isinstance(value, str) or not value.strip():
        raise TypeError("correlation id must be a non-empty string")

    previous = current()
    set_current(value)
    try:
        yield value
    finally:
        if previous is None:
            clear()
        else:
            set_current(previous)


def resolve(explicit: Optional[str] = None, run: Any = None) -> str:
    if explicit:
        return explicit

    active = current()
    if active:
        return active

    run_id = getattr(run, "id", None)
    if run_id:
        return run_id

    return generate()
