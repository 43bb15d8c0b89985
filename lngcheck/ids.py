"""Identifiers of modules, structs, functions and interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field

from .generics import TypeArguments
from .store import TypeId


@dataclass(frozen=True)
class ModuleId:
    """A module named by its dotted, fully qualified name."""

    name: str

    @classmethod
    def parse(cls, text: str) -> ModuleId:
        return cls(text)

    def depth(self) -> int:
        """Number of dotted parts in the name."""
        return len(self.name.split("."))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StructId:
    """A struct declared in a module."""

    module: ModuleId
    name: str

    def __str__(self) -> str:
        return f"struct({self.module}, {self.name})"


@dataclass(frozen=True)
class FunctionId:
    """A function declared either in a module or in a struct's impl block."""

    owner: ModuleId | StructId
    name: str

    @classmethod
    def in_module(cls, module: ModuleId, name: str) -> FunctionId:
        return cls(module, name)

    @classmethod
    def in_struct(cls, struct: StructId, name: str) -> FunctionId:
        return cls(struct, name)

    def local(self) -> str:
        return self.name

    def __str__(self) -> str:
        kind = "InStruct" if isinstance(self.owner, StructId) else "InModule"
        return f"{kind}({self.owner}, {self.name})"


@dataclass(frozen=True)
class InterfaceId:
    """An interface declared in a module."""

    module: ModuleId
    name: str

    def __str__(self) -> str:
        return f"interface({self.module}, {self.name})"


@dataclass(frozen=True)
class InstantiatedStructId:
    id: StructId
    arguments: TypeArguments = field(default_factory=TypeArguments)

    def argument_values(self) -> list[TypeId | None]:
        return self.arguments.values()

    def __str__(self) -> str:
        return f"{self.id}{self.arguments}"


@dataclass(frozen=True)
class InstantiatedInterfaceId:
    id: InterfaceId
    arguments: TypeArguments = field(default_factory=TypeArguments)

    def __str__(self) -> str:
        return f"{self.id}{self.arguments}"


@dataclass(frozen=True)
class InstantiatedFunctionId:
    id: FunctionId
    arguments: TypeArguments = field(default_factory=TypeArguments)

    def argument_values(self) -> list[TypeId | None]:
        return self.arguments.values()

    def __str__(self) -> str:
        return f"{self.id}{self.arguments}"