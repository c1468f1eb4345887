# src/atlas_taskflow/core/traceability/serializer.py
"""
Serialização canônica de Results e Runs.

Este módulo define a representação "logável" de um Result e de um Run:
dicionários compostos apenas por tipos JSON (str, int, float, bool, None,
listas e dicionários), independentemente do que a Task tenha colocado em
`metadata`.

Decisões arquiteturais:
    - Exceções são representadas por `"[Classe] mensagem"`
    - Referências a outros Results (cadeia de falhas) viram resumos com
      `index`, `task`, `status` e `reason`, nunca o Result inteiro
    - Falhas são classificadas via `classify_failure` e embutidas em `failure`
    - Persistência em JSON com chaves ordenadas (determinística)

Invariantes:
    - `json.dumps(result_to_dict(r))` nunca falha
    - A serialização não altera o Result

Limites explícitos:
    - Não há desserialização: a representação é de leitura/auditoria
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from atlas_taskflow.core.errors import classify_failure


def json_safe(value: Any) -> Any:
    """Converte recursivamente um valor arbitrário para tipos JSON."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, BaseException):
        return f"[{type(value).__name__}] {value}"
    if isinstance(value, Mapping):
        return {str(k): json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [json_safe(v) for v in value]
    if _is_result(value):
        return _result_summary(value)
    if callable(getattr(value, "to_dict", None)):
        return json_safe(value.to_dict())
    return repr(value)


def _is_result(value: Any) -> bool:
    from atlas_taskflow.core.task.result import Result

    return isinstance(value, Result)


def _task_name(result: Any) -> Optional[str]:
    task = getattr(result, "task", None)
    return type(task).__name__ if task is not None else None


def _result_summary(result: Any) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "index": result.index,
        "task": _task_name(result),
        "status": str(result.status),
        "reason": json_safe(result.metadata.get("reason")),
    }


def result_to_dict(result: Any) -> Dict[str, Any]:
    """
    Representação canônica de um Result.

    Campos:
        - index, run_id, task, task_id, kind ("workflow" | "task")
        - state, status, outcome
        - metadata (JSON-safe) e runtime (ms, quando registrado)
        - caused_failure / threw_failure (resumos)
        - failure (FailurePayload serializado, ou None para success)
    """
    task = result.task
    failure = classify_failure(result)
    run = result.run

    return {
        "index": result.index,
        "run_id": run.id if run is not None else None,
        "task": _task_name(result),
        "task_id": getattr(task, "id", None),
        "kind": "workflow" if getattr(task, "groups", None) is not None else "task",
        "state": str(result.state),
        "status": str(result.status),
        "outcome": result.outcome,
        "metadata": json_safe(result.metadata),
        "runtime": result.runtime,
        "caused_failure": _result_summary(result.caused_failure),
        "threw_failure": _result_summary(result.threw_failure),
        "failure": failure.to_dict() if failure is not None else None,
    }


def run_to_dict(run: Any) -> Dict[str, Any]:
    return {
        "id": run.id,
        "created_at": run.created_at,
        "state": run.state,
        "status": run.status,
        "outcome": run.outcome,
        "runtime": run.runtime,
        "results": [result_to_dict(r) for r in run.results],
    }


def save_run(run: Any, path: Path) -> None:
    """
    Persiste um Run (Results + eventos) em JSON determinístico.

    Diretórios intermediários são criados automaticamente.

    Raises:
        OSError: Em caso de falha ao criar diretórios ou escrever o arquivo.
    """
    data = run_to_dict(run)
    data["events"] = json_safe(list(run.events))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
