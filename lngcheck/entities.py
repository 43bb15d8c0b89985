"""Checked program entities: structs, functions, interfaces and modules."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Union

from .core import Statement, Visibility
from .ids import FunctionId, InterfaceId, ModuleId, StructId
from .store import MultiStore, TypeId, TypeStore


@dataclass(frozen=True)
class StructField:
    struct_id: StructId
    name: str
    type_id: TypeId
    static: bool = False


@dataclass
class Struct:
    id: StructId
    fields: list[StructField]
    impls: list[FunctionId]
    type_id: TypeId
    instance_type: TypeId
    implemented_interfaces: dict[InterfaceId, dict[str, FunctionId]] = field(
        default_factory=dict
    )

    def field_type(self, field_name: str) -> TypeId:
        """Type of the first field named ``field_name``."""
        for struct_field in self.fields:
            if struct_field.name == field_name:
                return struct_field.type_id
        raise KeyError(f"{self.id} has no field {field_name}")

    def implements(self, interface_id: InterfaceId) -> bool:
        return interface_id in self.implemented_interfaces

    def with_type_arguments(self, argument_values, types: TypeStore) -> Struct:
        values = list(argument_values)
        return Struct(
            id=self.id,
            fields=list(self.fields),
            impls=list(self.impls),
            type_id=types.add(types.get(self.type_id).with_type_arguments(values)),
            instance_type=types.add(
                types.get(self.instance_type).with_type_arguments(values)
            ),
            implemented_interfaces=copy.deepcopy(self.implemented_interfaces),
        )

    def copy(self) -> Struct:
        """Return a copy whose lists and mappings can be changed independently."""
        return replace(
            self,
            fields=list(self.fields),
            impls=list(self.impls),
            implemented_interfaces={
                key: dict(value) for key, value in self.implemented_interfaces.items()
            },
        )


@dataclass(frozen=True)
class Argument:
    name: str
    type_id: TypeId
    position: Any

    def __str__(self) -> str:
        return f"{self.name}: {self.type_id}"


@dataclass(frozen=True)
class ExternBody:
    """A body provided by a foreign symbol."""

    name: str


@dataclass(frozen=True)
class StatementsBody:
    statements: tuple[Statement, ...] = ()


FunctionBody = Union[ExternBody, StatementsBody]


@dataclass(frozen=True)
class Function:
    id: FunctionId
    module_name: ModuleId
    arguments: tuple[Argument, ...]
    return_type: TypeId
    body: FunctionBody
    position: Any
    visibility: Visibility
    type_id: TypeId

    def with_type_arguments(self, argument_values, types: TypeStore) -> Function:
        new_type = types.get(self.type_id).with_type_arguments(list(argument_values))
        return replace(self, type_id=types.add(new_type))


@dataclass(frozen=True)
class FunctionDeclaration:
    """A function signature declared by an interface."""

    type_id: TypeId
    return_type: TypeId
    arguments: tuple[Argument, ...] = ()


@dataclass
class Interface:
    id: InterfaceId
    type_id: TypeId
    functions: dict[str, FunctionDeclaration] = field(default_factory=dict)


@dataclass(frozen=True)
class Module:
    id: ModuleId

    def __repr__(self) -> str:
        return "module"


@dataclass
class RootModule:
    """A fully checked program: an application when it has a main function."""

    modules: dict[ModuleId, Module]
    structs: dict[StructId, Struct]
    functions: dict[FunctionId, Function]
    types: MultiStore
    main: FunctionId | None = None

    @classmethod
    def new_app(cls, main, modules, structs, functions, types) -> RootModule:
        return cls(modules, structs, functions, types, main)

    @classmethod
    def new_library(cls, modules, structs, functions, types) -> RootModule:
        return cls(modules, structs, functions, types)

    @property
    def is_app(self) -> bool:
        return self.main is not None