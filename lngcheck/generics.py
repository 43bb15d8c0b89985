"""Generic type parameters and their bound values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from .store import TypeId


@dataclass(frozen=True)
class TypeArgument:
    """A named type parameter, optionally bound to a type."""

    name: str
    value: TypeId | None = None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TypeArguments:
    """An ordered list of type parameters."""

    arguments: tuple[TypeArgument, ...] = ()

    def with_values(self, argument_values: Iterable[TypeId]) -> TypeArguments:
        """Bind values to the parameters in order, returning a new instance."""
        arguments = list(self.arguments)
        for index, value in enumerate(argument_values):
            if index >= len(arguments):
                raise IndexError(
                    f"{index + 1} type argument values given for "
                    f"{len(arguments)} parameters"
                )
            arguments[index] = replace(arguments[index], value=value)
        return TypeArguments(tuple(arguments))

    def values(self) -> list[TypeId | None]:
        return [argument.value for argument in self.arguments]

    def __iter__(self) -> Iterator[TypeArgument]:
        return iter(self.arguments)

    def __len__(self) -> int:
        return len(self.arguments)

    def __str__(self) -> str:
        return ",".join(str(argument) for argument in self.arguments)