"""
Avaliação uniforme de condições e valores declarativos.

Opções declarativas (condições `if_`/`unless` de grupos e middlewares,
`seconds` do Timeout, `id` do Correlate) aceitam as mesmas variantes:

    - None / bool        → valor literal
    - str                → nome de método (ou atributo, só em condições) do alvo;
                           em `resolve_value`, apenas métodos
    - callable           → chamado com o alvo; se não aceitar argumentos,
                           é chamado sem argumentos
    - qualquer outro     → valor literal (apenas em `resolve_value`)

Toda avaliação passa por este módulo; nenhum ponto de chamada inspeciona
tipos por conta própria.
"""

from __future__ import annotations

import inspect
from typing import Any, Mapping, Optional


def _call(target: Any, fn: Any) -> Any:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return fn(target)

    params = [
        p for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    if not params:
        return fn()
    return fn(target)


def _named(target: Any, name: str) -> Any:
    if not hasattr(target, name):
        raise AttributeError(f"{type(target).__name__} has no attribute {name!r}")
    member = getattr(target, name)
    return member() if callable(member) else member


def resolve_value(target: Any, value: Any) -> Any:
    """
    Resolve um valor declarativo contra o alvo.

    Uma string só é tratada como nome quando nomeia um método do alvo;
    atributos comuns (ex.: `run`, `context`) não são lidos, e a string
    é devolvida como literal.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        member = getattr(target, value, None)
        return member() if callable(member) else value
    if callable(value):
        return _call(target, value)
    return value


def evaluate(target: Any, condition: Any) -> bool:
    """Avalia uma única condição contra o alvo."""
    if condition is None or isinstance(condition, bool):
        return bool(condition)
    if isinstance(condition, str):
        return bool(_named(target, condition))
    if callable(condition):
        return bool(_call(target, condition))
    raise TypeError(f"cannot evaluate condition {condition!r}")


def evaluate_conditional(target: Any, options: Optional[Mapping[str, Any]]) -> bool:
    """Combina `if_` e `unless`; uma condição None é tratada como não declarada."""
    options = options or {}
    if_cond = options.get("if_")
    unless_cond = options.get("unless")

    if if_cond is not None and not evaluate(target, if_cond):
        return False
    if unless_cond is not None and evaluate(target, unless_cond):
        return False
    return True
