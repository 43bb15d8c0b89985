"""Checked types, expressions and statements."""

from __future__ import annotations

import enum
from collections.abc import Callable as CallableABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from .generics import TypeArgument, TypeArguments
from .ids import (
    FunctionId,
    InstantiatedInterfaceId,
    InstantiatedStructId,
    InterfaceId,
    ModuleId,
    StructId,
)
from .store import TypeId

if TYPE_CHECKING:
    from .entities import Struct


@dataclass(frozen=True)
class Unit:
    pass


@dataclass(frozen=True)
class Object:
    """An instance of a struct."""

    struct: InstantiatedStructId


@dataclass(frozen=True)
class Array:
    element: TypeId


@dataclass(frozen=True)
class Callable:
    function: FunctionId


@dataclass(frozen=True)
class U64:
    pass


@dataclass(frozen=True)
class U8:
    pass


@dataclass(frozen=True)
class Pointer:
    target: Type


@dataclass(frozen=True)
class StructType:
    """The struct itself, as a value (used for construction and static access)."""

    struct: InstantiatedStructId


@dataclass(frozen=True)
class IndirectCallable:
    """A function reached through an interface."""

    interface: InstantiatedInterfaceId
    name: str


@dataclass(frozen=True)
class InterfaceObject:
    """A value known only by the interface it implements."""

    interface: InstantiatedInterfaceId


@dataclass(frozen=True)
class Generic:
    argument: TypeArgument


@dataclass(frozen=True)
class InterfaceType:
    interface: InterfaceId


TypeKind = Union[
    Unit,
    Object,
    Array,
    Callable,
    U64,
    U8,
    Pointer,
    StructType,
    IndirectCallable,
    InterfaceObject,
    Generic,
    InterfaceType,
]


@dataclass(frozen=True)
class Type:
    kind: TypeKind
    arguments: TypeArguments = field(default_factory=TypeArguments)

    def with_type_arguments(self, argument_values) -> Type:
        return Type(self.kind, self.arguments.with_values(argument_values))

    def can_assign_to(
        self,
        other: Type,
        lookup_struct: CallableABC[[StructId], Struct | None],
    ) -> bool:
        """Whether a value of type ``other`` may be stored in a slot of this type.

        An interface slot accepts any object whose struct implements the
        interface; other kinds must match exactly.
        """
        mine, theirs = self.kind, other.kind
        if isinstance(mine, InterfaceObject) and isinstance(theirs, Object):
            struct = lookup_struct(theirs.struct.id)
            if struct is None:
                raise KeyError(f"unknown struct {theirs.struct.id}")
            return struct.implements(mine.interface.id)
        return mine == theirs

    def __str__(self) -> str:
        kind = self.kind
        if isinstance(kind, Unit):
            return "()"
        if isinstance(kind, Object):
            return f"{kind.struct.id}<{kind.struct.arguments}>"
        if isinstance(kind, Array):
            return f"{kind.element}[]"
        if isinstance(kind, Callable):
            return f"callable<{kind.function}>"
        if isinstance(kind, U64):
            return "u64"
        if isinstance(kind, U8):
            return "u8"
        if isinstance(kind, Pointer):
            return f"{kind.target}*"
        if isinstance(kind, StructType):
            return str(kind.struct)
        if isinstance(kind, IndirectCallable):
            return f"callable<{kind.interface}.{kind.name}>"
        if isinstance(kind, InterfaceObject):
            return f"{kind.interface.id}<{kind.interface.arguments}>"
        if isinstance(kind, Generic):
            return str(kind.argument)
        return str(kind.interface)


def unit_type() -> Type:
    return Type(Unit())


def u8_type() -> Type:
    return Type(U8())


def u64_type() -> Type:
    return Type(U64())


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class IntegerLiteral:
    value: int


@dataclass(frozen=True)
class Call:
    target: Expression
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class LiteralValue:
    literal: StringLiteral | IntegerLiteral


@dataclass(frozen=True)
class LocalVariableAccess:
    name: str


@dataclass(frozen=True)
class GlobalVariableAccess:
    module: ModuleId
    name: str


@dataclass(frozen=True)
class StructConstructor:
    target: Expression
    field_values: tuple[FieldValue, ...] = ()


@dataclass(frozen=True)
class FieldAccess:
    target: Expression
    field: str


@dataclass(frozen=True)
class SelfAccess:
    pass


ExpressionKind = Union[
    Call,
    LiteralValue,
    LocalVariableAccess,
    GlobalVariableAccess,
    StructConstructor,
    FieldAccess,
    SelfAccess,
]


@dataclass(frozen=True)
class Expression:
    position: Any
    type_id: TypeId
    kind: ExpressionKind


@dataclass(frozen=True)
class FieldValue:
    name: str
    value: Expression


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression


@dataclass(frozen=True)
class LetStatement:
    binding: str
    value: Expression


@dataclass(frozen=True)
class ReturnStatement:
    expression: Expression


Statement = Union[ExpressionStatement, LetStatement, ReturnStatement]


class Visibility(enum.Enum):
    EXPORT = "export"
    INTERNAL = "internal"