# src/atlas_taskflow/core/traceability/logger.py
"""
Emissão de Results assentados.

Cada Result assentado é registrado em dois destinos:
    - o log estruturado do Run (`run.log`), para inspeção programática
    - o módulo `logging`, no logger e nível configurados em `logging.*`

Results ruins (skipped/failed) são emitidos no nível WARNING quando o
nível configurado é menor que WARNING.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from atlas_taskflow.core.config.settings import get_settings
from atlas_taskflow.core.traceability.serializer import result_to_dict


def _level(name: Any) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def log_result(result: Any) -> None:
    config = get_settings()["logging"]
    logger = logging.getLogger(config["logger"])
    level = _level(config["level"])
    if result.bad:
        level = max(level, logging.WARNING)

    payload = result_to_dict(result)
    task_name = payload["task"] or "<anonymous>"

    if result.run is not None:
        result.run.log(
            task=task_name,
            level=logging.getLevelName(level),
            message=f"{task_name} {payload['outcome']}",
            index=payload["index"],
            state=payload["state"],
            status=payload["status"],
            failure=payload["failure"],
        )

    if logger.isEnabledFor(level):
        logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True))
