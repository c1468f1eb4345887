# src/atlas_taskflow/core/task/context.py
"""
Context — saco de dados compartilhado entre as Tasks de uma execução.

Acessível por chave (`ctx["total"]`) e por atributo (`ctx.total`). O mesmo
objeto é passado por referência a todas as Tasks de um Workflow e às
chamadas aninhadas.

Limites explícitos:
    - Não é thread-safe para operações compostas (ler-modificar-escrever);
      Tasks paralelas que compartilham contadores devem sincronizar por conta própria
    - Valores precisam ser picklable para grupos em processos
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional


class Context(MutableMapping):

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **values: Any) -> None:
        object.__setattr__(self, "_data", {})
        if data:
            self._data.update(data)
        self._data.update(values)

    @classmethod
    def build(cls, value: Any = None) -> "Context":
        """Reaproveita um Context existente ou constrói um novo a partir de um mapeamento."""
        if isinstance(value, Context):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls(value)
        raise TypeError(f"cannot build a Context from {type(value).__name__}")

    # mapping
    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    # atributos
    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"Context({self._data!r})"
