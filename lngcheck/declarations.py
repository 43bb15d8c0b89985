"""Declared items of a program being checked, and resolution of type names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from . import syntax
from .core import (
    Array,
    Callable,
    InterfaceObject,
    Object,
    Type,
    Visibility,
    u64_type,
    unit_type,
)
from .entities import Argument, Function, Interface, Module, Struct
from .ids import (
    FunctionId,
    InstantiatedInterfaceId,
    InstantiatedStructId,
    InterfaceId,
    ModuleId,
    StructId,
)
from .store import TypeId, TypeStore


@dataclass(frozen=True)
class DeclaredFunction:
    """A function whose signature is known but whose body is not yet checked."""

    id: FunctionId
    type_id: TypeId
    module_name: ModuleId
    arguments: tuple[Argument, ...]
    return_type: TypeId
    ast: syntax.Function
    position: syntax.SourceSpan
    visibility: Visibility


@dataclass(frozen=True)
class DeclaredStructField:
    type_id: TypeId
    static: bool


DeclaredItem = Union[DeclaredFunction, Function, Struct, Interface]


@dataclass
class DeclaredRootModule:
    """Everything declared so far, including items from a predeclared library."""

    structs: dict[StructId, Struct] = field(default_factory=dict)
    functions: dict[FunctionId, DeclaredFunction] = field(default_factory=dict)
    predeclared_functions: dict[FunctionId, Function] = field(default_factory=dict)
    modules: dict[ModuleId, Module] = field(default_factory=dict)
    imports: dict[tuple[ModuleId, str], tuple[ModuleId, str]] = field(
        default_factory=dict
    )
    interfaces: dict[InterfaceId, Interface] = field(default_factory=dict)

    @classmethod
    def from_predeclared(cls, modules, structs, functions) -> DeclaredRootModule:
        """Start from an already checked library; its structs are copied."""
        return cls(
            structs={key: struct.copy() for key, struct in structs.items()},
            predeclared_functions=dict(functions),
            modules=dict(modules),
        )

    def declare_module(self, module_path: ModuleId, module: Module) -> None:
        if module_path in self.modules:
            raise ValueError(f"module {module_path} is already declared")
        self.modules[module_path] = module

    def import_item(
        self, alias: tuple[ModuleId, str], item: tuple[ModuleId, str]
    ) -> None:
        """Make ``item`` visible under ``alias`` (a module and a local name)."""
        if alias in self.imports:
            module, name = alias
            raise ValueError(f"{name} is already imported into {module}")
        self.imports[alias] = item

    def resolve_import(self, module_id: ModuleId, name: str) -> tuple[ModuleId, str]:
        """Follow an import, or return the name unchanged if it is not imported."""
        return self.imports.get((module_id, name), (module_id, name))

    def get_item(self, module_id: ModuleId, name: str) -> DeclaredItem | None:
        """Look a name up among functions, predeclared functions, structs, interfaces."""
        function_id = FunctionId.in_module(module_id, name)
        for candidate in (
            self.functions.get(function_id),
            self.predeclared_functions.get(function_id),
            self.structs.get(StructId(module_id, name)),
            self.interfaces.get(InterfaceId(module_id, name)),
        ):
            if candidate is not None:
                return candidate
        return None

    def get_item_id(self, module_id: ModuleId, name: str) -> TypeId | None:
        item = self.get_item(module_id, name)
        return None if item is None else item.type_id

    def __str__(self) -> str:
        lines = ["structs"]
        lines.extend(f"    {struct_id}" for struct_id in self.structs)
        lines.append("functions")
        lines.extend(f"    {function_id}" for function_id in self.functions)
        lines.append("predeclared_functions")
        lines.extend(f"    {function_id}" for function_id in self.predeclared_functions)
        return "\n".join(lines) + "\n"


def item_type(item: DeclaredItem, types: TypeStore) -> Type:
    """The type a value named by ``item`` has."""
    if isinstance(item, Struct):
        return Type(
            Object(InstantiatedStructId(item.id)),
            types.get(item.type_id).arguments,
        )
    if isinstance(item, DeclaredFunction):
        return Type(Callable(item.id))
    if isinstance(item, Function):
        return Type(Callable(item.id), types.get(item.type_id).arguments)
    if isinstance(item, Interface):
        return Type(
            InterfaceObject(InstantiatedInterfaceId(item.id)),
            types.get(item.type_id).arguments,
        )
    raise TypeError(f"not a declared item: {item!r}")


def resolve_type(
    root_module: DeclaredRootModule,
    current_module: ModuleId,
    type_description: syntax.TypeDescription,
    types: TypeStore,
) -> Type:
    """Turn a written type into a checked type, following imports."""
    if isinstance(type_description, syntax.ArrayType):
        element = resolve_type(
            root_module, current_module, type_description.element, types
        )
        return Type(Array(types.add(element)))
    name = type_description.name
    if name == "()":
        return unit_type()
    if name == "u64":
        return u64_type()
    module, local_name = root_module.resolve_import(current_module, name)
    item = root_module.get_item(module, local_name)
    if item is None:
        raise KeyError(f"unknown type {local_name} in module {module}")
    return item_type(item, types)