# src/atlas_taskflow/core/task/types.py
"""
Tipos canônicos do ciclo de vida de um Result.

Componentes:
    - ResultState  → lattice de execução (initialized → executing → complete|interrupted)
    - ResultStatus → lattice de desfecho de negócio (success → skipped|failed)

Os valores são strings para facilitar serialização e a comparação com
breakpoints, que é sempre feita contra a forma textual (`str(status)`).
"""

from __future__ import annotations

from enum import Enum


class ResultState(str, Enum):
    """
    Estado de execução de um Result.

    Invariantes:
        - `complete` e `interrupted` são terminais
        - `complete` só é alcançado a partir de `executing`
    """
    INITIALIZED = "initialized"
    EXECUTING = "executing"
    COMPLETE = "complete"
    INTERRUPTED = "interrupted"

    def __str__(self) -> str:
        return self.value


class ResultStatus(str, Enum):
    """
    Desfecho de negócio de um Result.

    `success` é o status inicial; `skipped` e `failed` são finais.
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES = frozenset({ResultState.COMPLETE, ResultState.INTERRUPTED})
