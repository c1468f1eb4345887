# tests/core/engine/test_pipeline_sequential.py
"""
Testes da estratégia sequencial do Pipeline.

Este módulo valida:
- execução em ordem de declaração, compartilhando Context e Run
- adoção do Result coincidente com os breakpoints (`throw`) e interrupção
  das Tasks restantes e dos grupos seguintes
- resolução de breakpoints: grupo > Workflow > configuração
- grupos pulados por condição não produzem Results

Invariantes:
    - Cada Result é assentado antes da próxima Task começar
    - Um Workflow que adota uma falha reporta `outcome` = interrupted
"""

import pytest

try:
    from atlas_taskflow.core.config.settings import configure
    from atlas_taskflow.core.engine.workflow import Workflow
    from atlas_taskflow.core.exceptions import Failed
except Exception as e:  # noqa: BLE001
    Workflow = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None

from tests.fixtures.tasks import FailingStep, SkippingStep, StepOne, StepThree, StepTwo


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing Workflow engine. Implement:\n"
            "- src/atlas_taskflow/core/engine/workflow.py (Workflow)\n"
            "- src/atlas_taskflow/core/engine/pipeline.py (Pipeline)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _names(run):
    return [type(r.task).__name__ for r in run.results]


def test_groups_run_in_declaration_order():
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(StepOne, StepTwo)
    Flow.process(StepThree)

    result = Flow.call()
    assert result.success and result.complete
    assert result.task.context.trail == ["StepOne", "StepTwo", "StepThree"]
    assert _names(result.run) == ["Flow", "StepOne", "StepTwo", "StepThree"]
    assert all(r.run is result.run for r in result.run.results)


def test_breakpoint_match_is_adopted_and_halts_everything_after_it():
    """
    Cenário: [StepOne, FailingStep, StepTwo] + grupo [StepThree].

    Invariantes:
        - StepTwo e StepThree nunca rodam
        - o Workflow é failed com threw_failure = Result de FailingStep
    """
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(StepOne, FailingStep, StepTwo)
    Flow.process(StepThree)

    result = Flow.call()
    assert result.task.context.trail == ["StepOne", "FailingStep"]
    assert result.failed and result.interrupted
    assert result.reason == "card declined"
    assert result.metadata["code"] == 402
    assert type(result.threw_failure.task) is FailingStep
    assert result.caused_failure is result.threw_failure
    assert result.outcome == "interrupted"


def test_skipped_results_do_not_halt_with_default_breakpoints():
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(SkippingStep, StepOne)

    result = Flow.call()
    assert result.success
    assert result.task.context.trail == ["SkippingStep", "StepOne"]


def test_group_breakpoints_override_default():
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(SkippingStep, StepOne, breakpoints=["skipped"])

    result = Flow.call()
    assert result.skipped
    assert result.task.context.trail == ["SkippingStep"]


def test_empty_group_breakpoints_never_halt():
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(FailingStep, StepOne, breakpoints=[])

    result = Flow.call()
    assert result.success
    assert result.task.context.trail == ["FailingStep", "StepOne"]


def test_workflow_breakpoints_apply_to_every_group():
    _require_imports()

    class Flow(Workflow):
        breakpoints = ["skipped", "failed", "skipped"]

    Flow.process(StepOne)
    Flow.process(SkippingStep, StepTwo)

    result = Flow.call()
    assert result.skipped
    assert result.task.context.trail == ["StepOne", "SkippingStep"]


def test_configured_workflow_breakpoints_are_the_fallback():
    _require_imports()
    configure({"workflow": {"breakpoints": []}})

    class Flow(Workflow):
        pass

    Flow.process(FailingStep, StepOne)
    result = Flow.call()
    assert result.success
    assert result.task.context.trail == ["FailingStep", "StepOne"]


def test_false_condition_skips_group_without_results():
    _require_imports()

    class Flow(Workflow):
        def premium(self):
            return self.context.get("plan") == "premium"

    Flow.process(StepOne)
    Flow.process(StepTwo, if_="premium")
    Flow.process(StepThree, unless=lambda wf: wf.context.get("plan") == "free")

    free = Flow.call(plan="free")
    assert free.task.context.trail == ["StepOne"]
    assert _names(free.run) == ["Flow", "StepOne"]

    premium = Flow.call(plan="premium")
    assert premium.task.context.trail == ["StepOne", "StepTwo", "StepThree"]


def test_strict_workflow_raises_on_adopted_failure():
    _require_imports()

    class Flow(Workflow):
        pass

    Flow.process(FailingStep)

    with pytest.raises(Failed) as exc:
        Flow.call_strict()
    assert type(exc.value.task) is Flow


def test_nested_workflow_failure_chain():
    _require_imports()

    class Inner(Workflow):
        pass

    Inner.process(StepOne, FailingStep)

    class Outer(Workflow):
        pass

    Outer.process(Inner, StepTwo)

    result = Outer.call()
    inner_result = result.threw_failure
    assert type(inner_result.task) is Inner
    assert type(result.caused_failure.task) is FailingStep
    assert result.task.context.trail == ["StepOne", "FailingStep"]


def test_groups_are_not_shared_between_workflows():
    _require_imports()

    class A(Workflow):
        pass

    class B(Workflow):
        pass

    A.process(StepOne)
    assert len(A.groups) == 1
    assert B.groups == []
    assert Workflow.groups == []
