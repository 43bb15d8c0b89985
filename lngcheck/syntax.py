"""Syntax tree of parsed source files, as consumed by the type checker."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar, Union

_node = dataclass(frozen=True)


@_node
class SourceSpan:
    """A range of characters in a named source file."""

    start: int = 0
    end: int = 0
    file: str = ""

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def __str__(self) -> str:
        span = f"{self.start}..{self.end}"
        return f"{self.file}:{span}" if self.file else span


_NO_SPAN = SourceSpan()


class Visibility(enum.Enum):
    EXPORT = "export"
    INTERNAL = "internal"


@_node
class NamedType:
    """A type written by name, such as ``u64``, ``()`` or a struct name."""

    name: str


@_node
class ArrayType:
    element: TypeDescription


TypeDescription = Union[NamedType, ArrayType]


@_node
class StringLit:
    value: str


@_node
class IntegerLit:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < 2**64:
            raise ValueError(f"integer literal {self.value} does not fit in u64")


@_node
class CallExpr:
    target: Expression
    arguments: tuple[Expression, ...] = ()


@_node
class VariableRef:
    name: str


@_node
class FieldInit:
    name: str
    value: Expression


@_node
class StructConstructorExpr:
    target: Expression
    fields: tuple[FieldInit, ...] = ()


@_node
class FieldAccessExpr:
    target: Expression
    field_name: str


ExpressionKind = Union[
    StringLit,
    IntegerLit,
    CallExpr,
    VariableRef,
    StructConstructorExpr,
    FieldAccessExpr,
]


@_node
class Expression:
    kind: ExpressionKind
    position: SourceSpan = _NO_SPAN


@_node
class ExpressionStatement:
    expression: Expression


@_node
class LetStatement:
    name: str
    type_: TypeDescription
    value: Expression


@_node
class ReturnStatement:
    expression: Expression


Statement = Union[ExpressionStatement, LetStatement, ReturnStatement]


@_node
class Argument:
    name: str
    type_: TypeDescription
    position: SourceSpan = _NO_SPAN


@_node
class StatementsBody:
    statements: tuple[Statement, ...] = ()
    position: SourceSpan = _NO_SPAN


@_node
class ExternBody:
    """A body implemented by the foreign symbol ``name``."""

    name: str
    position: SourceSpan = _NO_SPAN


FunctionBody = Union[StatementsBody, ExternBody]


@_node
class Function:
    name: str
    arguments: tuple[Argument, ...]
    return_type: TypeDescription
    body: FunctionBody
    visibility: Visibility = Visibility.INTERNAL

    @property
    def is_extern(self) -> bool:
        return isinstance(self.body, ExternBody)


@_node
class FunctionSignature:
    """A function declared by an interface, without a body."""

    name: str
    arguments: tuple[Argument, ...]
    return_type: TypeDescription


@_node
class Interface:
    name: str
    declarations: tuple[FunctionSignature, ...] = ()


@_node
class StructFieldDecl:
    name: str
    type_: TypeDescription


@_node
class Struct:
    name: str
    fields: tuple[StructFieldDecl, ...] = ()


@_node
class Impl:
    """Functions attached to a struct, optionally implementing an interface."""

    struct_name: str
    functions: tuple[Function, ...] = ()
    interface_name: str | None = None


DeclarationKind = Union[Interface, Struct, Impl, Function]


@_node
class Declaration:
    kind: DeclarationKind
    position: SourceSpan = _NO_SPAN


@_node
class Import:
    """``import a, (b as c) from path``: items are ``(name, alias)`` pairs."""

    path: str
    items: tuple[tuple[str, str], ...] = ()


_K = TypeVar("_K")


@_node
class SourceFile:
    name: str
    imports: tuple[Import, ...] = ()
    declarations: tuple[Declaration, ...] = ()

    def of_kind(self, kind: type[_K]) -> Iterator[tuple[_K, SourceSpan]]:
        """Yield each declaration of the given kind with its position, in order."""
        for declaration in self.declarations:
            if isinstance(declaration.kind, kind):
                yield declaration.kind, declaration.position