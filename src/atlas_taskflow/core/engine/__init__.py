"""
Engine de Workflows do Atlas TaskFlow.

- planner  → validação estrutural dos grupos (ExecutionGroup)
- pipeline → execução sequencial/paralela com breakpoints
- workflow → Task composta que declara grupos via `process`
"""

from .pipeline import Pipeline
from .planner import PARALLEL, SEQUENTIAL, ExecutionGroup, plan_groups
from .workflow import Workflow

__all__ = ["Pipeline", "ExecutionGroup", "plan_groups", "Workflow", "SEQUENTIAL", "PARALLEL"]
