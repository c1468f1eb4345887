# tests/core/task/test_run_and_context.py
"""
Testes do Run (índices, Run corrente, log de eventos) e do Context.

Invariantes:
    - Índices são únicos e estritamente crescentes, mesmo sob threads
    - O Run corrente é local à thread e restaurado ao final de `Run.use`
    - O desfecho do Run é o do Result raiz
"""

import threading

import pytest

from atlas_taskflow.core.task.context import Context
from atlas_taskflow.core.task.result import Result
from atlas_taskflow.core.task.run import Run
from tests.fixtures.tasks import StepOne


def test_append_assigns_increasing_indexes():
    run = Run()
    results = [Result() for _ in range(3)]
    assert [run.append(r) for r in results] == [0, 1, 2]
    assert [r.index for r in results] == [0, 1, 2]
    assert all(r.run is run for r in results)
    assert run.index(results[1]) == 1


def test_concurrent_appends_produce_unique_indexes():
    run = Run()
    results = [Result() for _ in range(200)]
    barrier = threading.Barrier(8)

    def worker(chunk):
        barrier.wait()
        for r in chunk:
            run.append(r)

    threads = [threading.Thread(target=worker, args=(results[i::8],)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(r.index for r in results) == list(range(200))
    assert len(run) == 200


def test_run_id_is_generated_when_absent():
    assert Run().id != Run().id
    assert Run(id="fixed").id == "fixed"


def test_current_run_is_scoped_and_thread_local():
    run = Run()
    seen_in_thread = []

    assert Run.current() is None
    with Run.use(run):
        assert Run.current() is run
        t = threading.Thread(target=lambda: seen_in_thread.append(Run.current()))
        t.start()
        t.join()
    assert Run.current() is None
    assert seen_in_thread == [None]


def test_current_run_restored_on_raise():
    outer, inner = Run(), Run()
    with Run.use(outer):
        with pytest.raises(RuntimeError):
            with Run.use(inner):
                raise RuntimeError("boom")
        assert Run.current() is outer


def test_run_outcome_delegates_to_root_result():
    result = StepOne.call()
    run = result.run
    assert run.root is result
    assert run.state == "complete"
    assert run.status == "success"
    assert run.outcome == "success"


def test_run_log_records_settled_results():
    result = StepOne.call()
    events = result.run.events
    assert events[-1]["task"] == "StepOne"
    assert events[-1]["status"] == "success"
    assert events[-1]["run_id"] == result.run.id


def test_context_supports_keys_and_attributes():
    ctx = Context({"a": 1}, b=2)
    ctx.c = 3
    ctx["d"] = 4
    assert ctx.a == 1 and ctx["b"] == 2
    assert ctx.to_dict() == {"a": 1, "b": 2, "c": 3, "d": 4}
    with pytest.raises(AttributeError):
        ctx.missing
    del ctx.c
    assert "c" not in ctx


def test_context_build_reuses_instances():
    ctx = Context()
    assert Context.build(ctx) is ctx
    assert Context.build({"x": 1}).x == 1
    assert len(Context.build(None)) == 0
    with pytest.raises(TypeError):
        Context.build(42)
