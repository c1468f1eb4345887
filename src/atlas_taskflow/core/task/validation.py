# src/atlas_taskflow/core/task/validation.py
"""
Contrato do validador de atributos consumido pela Task.

A declaração, coerção e validação de parâmetros ficam fora do núcleo; a
Task só precisa de "dada uma instância, produza seus erros de atributo".
Um mapeamento vazio significa instância válida.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class AttributeValidator(Protocol):
    def validate(self, task: Any) -> Dict[str, List[str]]:
        """Retorna `{atributo: [mensagens]}` para a instância informada."""
        ...


class RequiredKeys:
    """Exige que as chaves informadas estejam presentes (e não None) no contexto da Task."""

    def __init__(self, *keys: str) -> None:
        if not keys:
            raise ValueError("RequiredKeys needs at least one key")
        self.keys = tuple(keys)

    def validate(self, task: Any) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for key in self.keys:
            if task.context.get(key) is None:
                errors.setdefault(key, []).append(f"{key} is required")
        return errors


def full_message(errors: Dict[str, List[str]]) -> str:
    """Concatena as mensagens de erro em uma única frase por mensagem."""
    return " ".join(f"{message}." for messages in errors.values() for message in messages)
