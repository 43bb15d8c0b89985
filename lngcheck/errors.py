"""Errors reported by the type checker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .core import Type
from .ids import StructId
from .store import TypeId


class TypeCheckError(Exception):
    """A type error found at a location in the source."""

    def __init__(self, description: ErrorDescription, location: Any) -> None:
        super().__init__(description, location)
        self.description = description
        self.location = location

    def __str__(self) -> str:
        return f"Error {self.description} at {self.location}"


class ErrorDescription:
    """What went wrong, independent of where."""

    def at(self, location: Any) -> TypeCheckError:
        return TypeCheckError(self, location)


@dataclass(frozen=True)
class UnexpectedArgumentTypeInCall(ErrorDescription):
    target: TypeId
    argument_name: str
    expected_type: TypeId
    actual_type: TypeId

    def __str__(self) -> str:
        return (
            f"Incorrect argument type {self.actual_type} for argument "
            f"{self.argument_name} of type {self.expected_type} "
            f"in a call to {self.target}"
        )


@dataclass(frozen=True)
class IncorrectNumberOfArgumentsPassed(ErrorDescription):
    target: TypeId

    def __str__(self) -> str:
        return f"Incorrect number of arguments passed to {self.target}"


@dataclass(frozen=True)
class FunctionArgumentCannotBeVoid(ErrorDescription):
    argument_name: str

    def __str__(self) -> str:
        return f"Argument {self.argument_name} cannot be of type void"


@dataclass(frozen=True)
class ModuleDoesNotExist(ErrorDescription):
    module_path: str

    def __str__(self) -> str:
        return f"Module {self.module_path} does not exist"


@dataclass(frozen=True)
class StructDoesNotExist(ErrorDescription):
    struct_id: StructId

    def __str__(self) -> str:
        return f"Item {self.struct_id} does not exist"


@dataclass(frozen=True)
class ItemNotExported(ErrorDescription):
    module_path: str
    identifier: str

    def __str__(self) -> str:
        return (
            f"Item {self.identifier} exists in module {self.module_path}, "
            "but is not exported"
        )


@dataclass(frozen=True)
class UndeclaredVariable(ErrorDescription):
    name: str

    def __str__(self) -> str:
        return f"Variable {self.name} does not exist"


@dataclass(frozen=True)
class ImplNotOnStruct(ErrorDescription):
    name: str

    def __str__(self) -> str:
        return f"{self.name} is not a struct, impl is not allowed"


@dataclass(frozen=True)
class MismatchedAssignmentType(ErrorDescription):
    target_variable: str
    variable_type: Type
    assigned_type: TypeId

    def __str__(self) -> str:
        return (
            f"Cannot assign value of type {self.assigned_type} to variiable "
            f"{self.target_variable} of typee {self.variable_type}"
        )


@dataclass(frozen=True)
class CallingNotCallableItem(ErrorDescription):
    type_: Type

    def __str__(self) -> str:
        return f"{self.type_} cannot be called"


@dataclass(frozen=True)
class MismatchedReturnType(ErrorDescription):
    actual: TypeId
    expected: TypeId

    def __str__(self) -> str:
        return (
            f"Function was expected to return {self.expected}, "
            f"but returns {self.actual}"
        )