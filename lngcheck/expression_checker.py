"""Type checking of expressions inside function bodies."""

from __future__ import annotations

from collections.abc import Sequence

from . import syntax
from .core import (
    U64,
    Call,
    Callable,
    Expression,
    FieldAccess,
    FieldValue,
    GlobalVariableAccess,
    IndirectCallable,
    IntegerLiteral,
    InterfaceObject,
    LiteralValue,
    LocalVariableAccess,
    Object,
    SelfAccess,
    StringLiteral,
    StructConstructor,
    StructType,
    Type,
    u64_type,
)
from .declarations import DeclaredRootModule
from .entities import Argument
from .errors import (
    CallingNotCallableItem,
    IncorrectNumberOfArgumentsPassed,
    UndeclaredVariable,
    UnexpectedArgumentTypeInCall,
)
from .ids import InstantiatedStructId, ModuleId, StructId
from .store import TypeId, TypeStore

STRING_STRUCT_ID = StructId(ModuleId("std"), "string")
U64_STRUCT_ID = StructId(ModuleId("std"), "u64")


class Locals:
    """Types of the arguments and local variables visible in a function body."""

    def __init__(self) -> None:
        self._values: dict[str, TypeId] = {}

    def push_arguments(self, arguments: Sequence[Argument]) -> None:
        for argument in arguments:
            self._values[argument.name] = argument.type_id

    def push_variable(self, name: str, type_id: TypeId) -> None:
        self._values[name] = type_id

    def get(self, name: str) -> TypeId | None:
        return self._values.get(name)


class ExpressionChecker:
    """Checks expressions against the declarations of a program."""

    def __init__(
        self, root_module_declaration: DeclaredRootModule, types: TypeStore
    ) -> None:
        self._root = root_module_declaration
        self._types = types
        self._string_type_id = types.add(
            Type(Object(InstantiatedStructId(STRING_STRUCT_ID)))
        )
        self._u64_type_id = types.add(u64_type())

    def type_check_expression(
        self,
        expression: syntax.Expression,
        locals: Locals,
        module_path: ModuleId,
    ) -> Expression:
        """Return the checked form of ``expression`` with its type."""
        kind = expression.kind
        position = expression.position

        if isinstance(kind, syntax.CallExpr):
            return self._check_call(kind, locals, module_path, position)
        if isinstance(kind, syntax.StringLit):
            return Expression(
                position,
                self._string_type_id,
                LiteralValue(StringLiteral(kind.value)),
            )
        if isinstance(kind, syntax.IntegerLit):
            return Expression(
                position,
                self._u64_type_id,
                LiteralValue(IntegerLiteral(kind.value)),
            )
        if isinstance(kind, syntax.VariableRef):
            return self._check_variable_reference(
                kind.name, locals, module_path, position
            )
        if isinstance(kind, syntax.StructConstructorExpr):
            return self._check_struct_constructor(kind, locals, module_path, position)
        if isinstance(kind, syntax.FieldAccessExpr):
            target = self.type_check_expression(kind.target, locals, module_path)
            return Expression(
                position,
                self._field_type(target.type_id, kind.field_name),
                FieldAccess(target, kind.field_name),
            )
        raise TypeError(f"unknown expression kind {kind!r}")

    def _check_struct_constructor(
        self,
        constructor: syntax.StructConstructorExpr,
        locals: Locals,
        module_path: ModuleId,
        position: syntax.SourceSpan,
    ) -> Expression:
        target = self.type_check_expression(constructor.target, locals, module_path)
        target_type = self._types.get(target.type_id)
        if not isinstance(target_type.kind, StructType):
            raise TypeError(f"{target_type} is not a struct and cannot be constructed")

        struct = self._root.structs[target_type.kind.struct.id]
        field_values = tuple(
            FieldValue(
                field_init.name,
                self.type_check_expression(field_init.value, locals, module_path),
            )
            for field_init in constructor.fields
        )
        return Expression(
            position, struct.instance_type, StructConstructor(target, field_values)
        )

    def _check_call(
        self,
        call: syntax.CallExpr,
        locals: Locals,
        module_path: ModuleId,
        position: syntax.SourceSpan,
    ) -> Expression:
        checked_target = self.type_check_expression(call.target, locals, module_path)
        callable_arguments, return_type = self._callable_info(checked_target, position)

        expected = list(callable_arguments)
        self_argument = expected[0] if expected and expected[0].name == "self" else None

        if len(call.arguments) + (self_argument is not None) != len(expected):
            raise IncorrectNumberOfArgumentsPassed(checked_target.type_id).at(position)

        checked_arguments: list[Expression] = []
        if self_argument is not None:
            expected = expected[1:]
            checked_arguments.append(
                Expression(self_argument.position, self_argument.type_id, SelfAccess())
            )

        for passed, declared in zip(call.arguments, expected):
            checked = self.type_check_expression(passed, locals, module_path)
            if checked.type_id != declared.type_id:
                raise UnexpectedArgumentTypeInCall(
                    target=checked_target.type_id,
                    argument_name=declared.name,
                    expected_type=declared.type_id,
                    actual_type=checked.type_id,
                ).at(position)
            checked_arguments.append(checked)

        return Expression(
            position, return_type, Call(checked_target, tuple(checked_arguments))
        )

    def _callable_info(
        self, target: Expression, position: syntax.SourceSpan
    ) -> tuple[Sequence[Argument], TypeId]:
        target_type = self._types.get(target.type_id)
        kind = target_type.kind

        if isinstance(kind, Callable):
            declared = self._root.functions.get(kind.function)
            if declared is not None:
                return declared.arguments, declared.return_type
            predeclared = self._root.predeclared_functions.get(kind.function)
            if predeclared is not None:
                return predeclared.arguments, predeclared.return_type
            raise KeyError(f"calling unknown function: {kind.function}")

        if isinstance(kind, IndirectCallable):
            declaration = self._root.interfaces[kind.interface.id].functions[kind.name]
            return declaration.arguments, declaration.return_type

        raise CallingNotCallableItem(target_type).at(position)

    def _check_variable_reference(
        self,
        name: str,
        locals: Locals,
        module_path: ModuleId,
        position: syntax.SourceSpan,
    ) -> Expression:
        local_type = locals.get(name)
        if local_type is not None:
            return Expression(position, local_type, LocalVariableAccess(name))

        module, resolved_name = self._root.resolve_import(module_path, name)
        global_type = self._root.get_item_id(module, resolved_name)
        if global_type is None:
            raise UndeclaredVariable(resolved_name).at(position)
        return Expression(
            position, global_type, GlobalVariableAccess(module, resolved_name)
        )

    def _field_type(self, type_id: TypeId, field_name: str) -> TypeId:
        owner_type = self._types.get(type_id)
        kind = owner_type.kind

        if isinstance(kind, (Object, StructType)):
            return self._root.structs[kind.struct.id].field_type(field_name)
        if isinstance(kind, U64):
            return self._root.structs[U64_STRUCT_ID].field_type(field_name)
        if isinstance(kind, InterfaceObject):
            interface = self._root.interfaces[kind.interface.id]
            return interface.functions[field_name].type_id
        raise TypeError(f"{owner_type} has no fields")