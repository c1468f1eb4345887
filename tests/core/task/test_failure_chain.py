# tests/core/task/test_failure_chain.py
"""
Testes da cadeia de falhas entre chamadas estritas aninhadas.

Cenário canônico:
    Checkout chama Payment (estrito); Payment chama Gateway (estrito);
    Gateway falha.

Invariantes:
    - Checkout.threw_failure é o Result de Payment (salto imediato)
    - Checkout.caused_failure é o Result de Gateway (folha)
    - Payment.threw_failure e Payment.caused_failure são o Result de Gateway
    - Results adotados reportam `outcome` = state (interrupted)
"""

import pytest

from atlas_taskflow.core.errors import THROWN_FAILURE, classify_failure
from atlas_taskflow.core.exceptions import Failed
from atlas_taskflow.core.task.task import Task


class Gateway(Task):
    def work(self):
        self.fail("gateway timeout", provider="acme")


class Payment(Task):
    def work(self):
        Gateway.call_strict(self)


class Checkout(Task):
    def work(self):
        Payment.call_strict(self)


def _results_by_task(run):
    return {type(r.task).__name__: r for r in run.results}


def test_failure_chain_across_three_levels():
    checkout = Checkout.call()
    by_task = _results_by_task(checkout.run)
    payment, gateway = by_task["Payment"], by_task["Gateway"]

    assert checkout.failed and payment.failed and gateway.failed

    assert checkout.threw_failure is payment
    assert checkout.caused_failure is gateway
    assert payment.threw_failure is gateway
    assert payment.caused_failure is gateway
    assert gateway.threw_failure is None
    assert gateway.caused_failure is None

    assert checkout.metadata["reason"] == "gateway timeout"
    assert checkout.metadata["provider"] == "acme"


def test_indexes_follow_invocation_order():
    checkout = Checkout.call()
    names = [type(r.task).__name__ for r in checkout.run.results]
    assert names == ["Checkout", "Payment", "Gateway"]
    assert [r.index for r in checkout.run.results] == [0, 1, 2]


def test_outcome_reports_state_for_thrown_failures():
    checkout = Checkout.call()
    by_task = _results_by_task(checkout.run)
    assert by_task["Gateway"].outcome == "failed"
    assert by_task["Payment"].outcome == "interrupted"
    assert checkout.outcome == "interrupted"
    assert checkout.run.outcome == "interrupted"


def test_thrown_failures_are_classified():
    checkout = Checkout.call()
    payload = classify_failure(checkout)
    assert payload.type == THROWN_FAILURE
    assert payload.message == "gateway timeout"
    assert payload.details == {"caused_failure_index": 2, "threw_failure_index": 1}


def test_strict_root_raises_fault_chained_to_nested_fault():
    with pytest.raises(Failed) as exc:
        Checkout.call_strict()

    fault = exc.value
    assert type(fault.task).__name__ == "Checkout"
    assert isinstance(fault.__cause__, Failed)
    assert type(fault.__cause__.task).__name__ == "Payment"
    assert fault.result.caused_failure is fault.__cause__.result.caused_failure


def test_safe_nested_call_does_not_propagate():
    class Lenient(Task):
        def work(self):
            self.context.inner = Gateway.call(self)

    result = Lenient.call()
    assert result.success
    assert result.task.context.inner.failed


def test_explicit_throw_adopts_child_result():
    class Wrapper(Task):
        def work(self):
            self.throw(Gateway.call(self), wrapped=True)

    result = Wrapper.call()
    assert result.failed
    assert result.metadata["wrapped"] is True
    assert type(result.threw_failure.task).__name__ == "Gateway"


def test_throwing_a_success_continues_work():
    class Ok(Task):
        def work(self):
            pass

    class Wrapper(Task):
        def work(self):
            self.throw(Ok.call(self))
            self.context.after = True

    result = Wrapper.call()
    assert result.success
    assert result.task.context.after is True
