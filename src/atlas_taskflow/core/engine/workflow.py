# src/atlas_taskflow/core/engine/workflow.py
"""
Workflow — Task composta por grupos ordenados de Tasks.

Exemplo:

    class Checkout(Workflow):
        pass

    Checkout.process(ReserveStock, ChargeCard)
    Checkout.process(SendEmail, SendSms, strategy="parallel", breakpoints=[])

`Workflow.call(context)` executa os grupos via `Pipeline` e devolve o
Result do Workflow, que adota o Result da primeira Task cujo status
coincidir com os breakpoints do grupo.
"""

from __future__ import annotations

from typing import Any, ClassVar, List, Optional

from atlas_taskflow.core.engine.pipeline import Pipeline
from atlas_taskflow.core.engine.planner import SEQUENTIAL, ExecutionGroup
from atlas_taskflow.core.task.task import Task


class Workflow(Task):

    groups: ClassVar[List[ExecutionGroup]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.groups = list(cls.groups)

    @classmethod
    def process(
        cls,
        *tasks: Any,
        strategy: Any = SEQUENTIAL,
        if_: Any = None,
        unless: Any = None,
        breakpoints: Any = None,
        in_threads: Optional[int] = None,
        in_processes: Optional[int] = None,
    ) -> ExecutionGroup:
        """
        Declara um grupo de execução.

        Args:
            *tasks: classes de Task (listas/tuplas são achatadas)
            strategy: "sequential" (padrão) ou "parallel"
            if_/unless: condição avaliada contra o Workflow
            breakpoints: status que interrompem o Workflow (None → herdado)
            in_threads/in_processes: dicas da estratégia paralela

        Returns:
            ExecutionGroup: o grupo registrado

        Raises:
            ValueError: se nenhuma Task for informada
        """
        flat: List[Any] = []
        for task in tasks:
            if isinstance(task, (list, tuple)):
                flat.extend(task)
            else:
                flat.append(task)
        if not flat:
            raise ValueError("process() requires at least one task")

        if breakpoints is not None:
            breakpoints = tuple(str(bp) for bp in ([breakpoints] if isinstance(breakpoints, str) else breakpoints))

        group = ExecutionGroup(
            tasks=tuple(flat),
            strategy=strategy,
            if_=if_,
            unless=unless,
            breakpoints=breakpoints,
            in_threads=in_threads,
            in_processes=in_processes,
        )
        cls.groups.append(group)
        return group

    def work(self) -> None:
        Pipeline(self).execute()
