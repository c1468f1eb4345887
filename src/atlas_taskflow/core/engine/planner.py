# src/atlas_taskflow/core/engine/planner.py
"""
Planejador de grupos de execução do Workflow.

Este módulo valida a declaração dos grupos de um Workflow e produz o plano
de execução consumido pelo Pipeline, antes que qualquer Task seja executada.

Cada grupo (`ExecutionGroup`) declara:
    - tasks: classes de Task em ordem de declaração
    - strategy: "sequential" ou "parallel"
    - if_/unless: condição avaliada contra o Workflow
    - breakpoints: status que fazem o Workflow adotar um Result do grupo
    - in_threads / in_processes: dicas de concorrência da estratégia paralela

Decisões arquiteturais:
    - A validação é estrutural e ocorre para todos os grupos antes da execução
    - Estratégia desconhecida é erro de configuração fatal
      (`PipelineConfigurationError`), nunca uma falha de Result
    - Breakpoints são normalizados para lista de strings sem duplicatas

Invariantes:
    - A ordem dos grupos e das Tasks é exatamente a de declaração
    - Nenhum grupo inválido chega ao Pipeline

Limites explícitos:
    - Não executa Tasks
    - Não avalia condições (isso depende do Workflow em execução)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from atlas_taskflow.core.errors import pipeline_configuration_error
from atlas_taskflow.core.exceptions import PipelineConfigurationError


SEQUENTIAL = "sequential"
PARALLEL = "parallel"
STRATEGIES = (SEQUENTIAL, PARALLEL)


@dataclass(frozen=True)
class ExecutionGroup:
    """Grupo declarado de Tasks com estratégia, condição e breakpoints próprios."""

    tasks: Tuple[type, ...]
    strategy: Any = SEQUENTIAL
    if_: Any = None
    unless: Any = None
    breakpoints: Optional[Tuple[str, ...]] = None
    in_threads: Optional[int] = None
    in_processes: Optional[int] = None

    @property
    def conditional(self) -> Dict[str, Any]:
        return {"if_": self.if_, "unless": self.unless}

    @property
    def uses_processes(self) -> bool:
        return self.in_processes is not None


def _configuration_error(message: str, **details: Any) -> PipelineConfigurationError:
    payload = pipeline_configuration_error(message=message, details=details)
    return PipelineConfigurationError(payload.message, details=payload.details, hint=payload.hint)


def _validate_hint(name: str, value: Any, position: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise _configuration_error(
            f"{name} must be a positive integer",
            group=position,
            **{name: value},
        )


def validate_group(group: ExecutionGroup, position: int = 0) -> ExecutionGroup:
    """
    Valida um único grupo.

    Raises:
        PipelineConfigurationError: estratégia desconhecida ou dicas inválidas.
        TypeError: membro que não é classe de Task.
    """
    from atlas_taskflow.core.task.task import Task

    if group.strategy not in STRATEGIES:
        raise _configuration_error(
            f"unknown execution strategy: {group.strategy!r}",
            group=position,
            strategy=repr(group.strategy),
            allowed=list(STRATEGIES),
        )

    for task in group.tasks:
        if not (isinstance(task, type) and issubclass(task, Task)):
            raise TypeError(f"{task!r} is not a Task class")

    _validate_hint("in_threads", group.in_threads, position)
    _validate_hint("in_processes", group.in_processes, position)
    return group


def plan_groups(groups: Iterable[ExecutionGroup]) -> List[ExecutionGroup]:
    """Valida todos os grupos e retorna o plano em ordem de declaração."""
    return [validate_group(group, position) for position, group in enumerate(groups)]
