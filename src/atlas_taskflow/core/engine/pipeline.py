# src/atlas_taskflow/core/engine/pipeline.py
"""
Pipeline — executor dos grupos de um Workflow.

Fluxo por grupo (em ordem de declaração):
    1. condição `if_`/`unless` avaliada contra o Workflow; falsa → grupo pulado
       (nenhuma Task roda, nenhum Result é produzido)
    2. breakpoints resolvidos: grupo > Workflow > configuração
    3. Tasks despachadas pela estratégia do grupo
    4. o status de cada Result é comparado com os breakpoints; na primeira
       coincidência o Workflow adota o Result (`throw`), o que interrompe
       o restante do Workflow

Estratégias:
    - sequential → thread chamadora, uma Task por vez, na ordem declarada
    - parallel   → ThreadPoolExecutor (`in_threads`, padrão: nº de Tasks) ou
                   ProcessPoolExecutor (`in_processes`, prevalece quando ambos
                   são informados)

Decisões arquiteturais:
    - Workers em thread restabelecem o Run e o identificador de correlação
      antes de executar
    - Na coincidência de breakpoint em grupo paralelo, futures ainda não
      iniciadas são canceladas (melhor esforço) e o primeiro Result
      coincidente, em ordem de conclusão, é adotado
    - Workers em processo executam a Task em um Run filho com o mesmo id e
      devolvem um snapshot picklable; o processo pai registra o desfecho no
      Run compartilhado e mescla as chaves do contexto (último a escrever vence)

Limites explícitos:
    - Não faz retry nem agenda execuções
    - Results aninhados produzidos dentro de um processo filho não são
      copiados para o Run do pai
"""

from __future__ import annotations

from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from atlas_taskflow.core import correlator
from atlas_taskflow.core.config.settings import breakpoints_for
from atlas_taskflow.core.engine.planner import PARALLEL, ExecutionGroup, plan_groups
from atlas_taskflow.core.evaluation import evaluate_conditional
from atlas_taskflow.core.task.result import Result
from atlas_taskflow.core.task.run import Run
from atlas_taskflow.core.task.task import normalize_breakpoints
from atlas_taskflow.core.traceability.logger import log_result


# ---------------------------------------------------------------------------
# Workers em processo
# ---------------------------------------------------------------------------

@dataclass
class RemoteOutcome:
    """Snapshot picklable do desfecho de uma Task executada em processo filho."""

    status: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)


def _process_worker(task_cls: type, context: Dict[str, Any], run_id: str, correlation_id: str) -> RemoteOutcome:
    run = Run(id=run_id)
    with Run.use(run), correlator.use(correlation_id):
        result = task_cls.call(dict(context), run=run)

    metadata = {
        key: value for key, value in result.metadata.items()
        if not isinstance(value, Result)
    }
    return RemoteOutcome(
        status=str(result.status),
        metadata=metadata,
        context=result.task.context.to_dict(),
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class Pipeline:
    """Executa os grupos declarados de um Workflow em execução."""

    def __init__(self, workflow: Any) -> None:
        self.workflow = workflow

    def execute(self) -> None:
        groups = plan_groups(type(self.workflow).groups)

        for position, group in enumerate(groups):
            if not evaluate_conditional(self.workflow, group.conditional):
                self.workflow.run.log(
                    task=type(self.workflow).__name__,
                    level="INFO",
                    message="group skipped by condition",
                    group=position,
                )
                continue

            matched = self._execute_group(group)
            if matched is not None:
                # interrompe o Workflow (Fault capturado pela própria Task)
                self.workflow.throw(matched)

    def breakpoints(self, group: ExecutionGroup) -> List[str]:
        if group.breakpoints is not None:
            return normalize_breakpoints(group.breakpoints)
        declared = getattr(type(self.workflow), "breakpoints", None)
        if declared is not None:
            return normalize_breakpoints(declared)
        return normalize_breakpoints(breakpoints_for("workflow"))

    def _execute_group(self, group: ExecutionGroup) -> Optional[Result]:
        breakpoints = self.breakpoints(group)
        if group.strategy == PARALLEL:
            if group.uses_processes:
                return self._execute_in_processes(group, breakpoints)
            return self._execute_in_threads(group, breakpoints)
        return self._execute_sequentially(group, breakpoints)

    # -----------------------------
    # Estratégias
    # -----------------------------
    def _execute_sequentially(self, group: ExecutionGroup, breakpoints: List[str]) -> Optional[Result]:
        for task_cls in group.tasks:
            result = task_cls.call(self.workflow)
            if str(result.status) in breakpoints:
                return result
        return None

    def _execute_in_threads(self, group: ExecutionGroup, breakpoints: List[str]) -> Optional[Result]:
        run: Run = self.workflow.run
        context = self.workflow.context
        correlation_id = correlator.current() or run.id

        def worker(task_cls: type) -> Result:
            with Run.use(run), correlator.use(correlation_id):
                return task_cls.call(context, run=run)

        workers = group.in_threads or len(group.tasks)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="atlas-pipeline") as pool:
            futures = [pool.submit(worker, task_cls) for task_cls in group.tasks]
            return self._first_match(futures, breakpoints, lambda future: future.result())

    def _execute_in_processes(self, group: ExecutionGroup, breakpoints: List[str]) -> Optional[Result]:
        run: Run = self.workflow.run
        context = self.workflow.context
        correlation_id = correlator.current() or run.id
        snapshot = context.to_dict()

        with ProcessPoolExecutor(max_workers=group.in_processes) as pool:
            futures = {
                pool.submit(_process_worker, task_cls, snapshot, run.id, correlation_id): task_cls
                for task_cls in group.tasks
            }
            return self._first_match(
                list(futures),
                breakpoints,
                lambda future: self._record_remote(futures[future], future.result()),
            )

    @staticmethod
    def _first_match(futures: List[Future], breakpoints: List[str], collect: Any) -> Optional[Result]:
        for future in as_completed(futures):
            result = collect(future)
            if str(result.status) in breakpoints:
                for pending in futures:
                    pending.cancel()
                return result
        return None

    def _record_remote(self, task_cls: type, outcome: RemoteOutcome) -> Result:
        """Registra no Run compartilhado o desfecho de uma Task executada em processo."""
        context = self.workflow.context
        context.update(outcome.context)

        task = task_cls(context, run=self.workflow.run)
        result = task.result
        result.mark_executing()
        metadata = dict(outcome.metadata)
        if outcome.status == "failed":
            result.fail(**metadata)
        elif outcome.status == "skipped":
            result.skip(**metadata)
        else:
            result.metadata.update(metadata)
        result.mark_executed()
        log_result(result)
        return result.freeze()
