"""Type stores: interning of types behind stable identifiers."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Type

_store_ids = itertools.count()


@dataclass(frozen=True)
class TypeId:
    """Identifier of a type inside a particular store."""

    store_id: int
    type_id: int

    def __str__(self) -> str:
        return f"type({self.store_id})"


class TypeStore(ABC):
    """Something that interns types and hands out their identifiers."""

    @abstractmethod
    def add(self, type_: Type) -> TypeId:
        """Intern ``type_`` and return its identifier."""

    @abstractmethod
    def get(self, type_id: TypeId) -> Type:
        """Return the type registered under ``type_id``."""


class SingleStore(TypeStore):
    """A store with its own unique store id; equal types share one id."""

    def __init__(self) -> None:
        self.store_id: int = next(_store_ids)
        self._items: dict[TypeId, Type] = {}
        self._ids: dict[Type, TypeId] = {}
        self._current_id = 0

    def _next_id(self) -> TypeId:
        self._current_id += 1
        return TypeId(self.store_id, self._current_id)

    def add(self, type_: Type) -> TypeId:
        existing = self._ids.get(type_)
        if existing is not None:
            return existing
        new_id = self._next_id()
        self._items[new_id] = type_
        self._ids[type_] = new_id
        return new_id

    def get(self, type_id: TypeId) -> Type:
        if type_id.store_id != self.store_id:
            raise ValueError(f"{type_id.store_id} {self.store_id}")
        return self._items[type_id]

    def copy(self) -> SingleStore:
        """Return an independent copy that keeps the same store id."""
        clone = SingleStore.__new__(SingleStore)
        clone.store_id = self.store_id
        clone._items = dict(self._items)
        clone._ids = dict(self._ids)
        clone._current_id = self._current_id
        return clone

    def __len__(self) -> int:
        return len(self._items)


class MultiStore(TypeStore):
    """A default store plus read-only secondary stores merged in from elsewhere."""

    def __init__(self, default: SingleStore | None = None) -> None:
        self.default = default if default is not None else SingleStore()
        self.secondary: dict[int, SingleStore] = {}

    def merge_with(self, other: MultiStore) -> None:
        """Make every type known to ``other`` resolvable through this store."""
        if self.default.store_id != other.default.store_id:
            self.secondary[other.default.store_id] = other.default
        self.secondary.update(other.secondary)

    def add(self, type_: Type) -> TypeId:
        return self.default.add(type_)

    def get(self, type_id: TypeId) -> Type:
        if type_id.store_id == self.default.store_id:
            return self.default.get(type_id)
        try:
            store = self.secondary[type_id.store_id]
        except KeyError:
            raise KeyError(f"unknown type store {type_id.store_id}") from None
        return store.get(type_id)

    def copy(self) -> MultiStore:
        """Return an independent copy sharing the same store ids."""
        clone = MultiStore(self.default.copy())
        clone.secondary = {key: store.copy() for key, store in self.secondary.items()}
        return clone