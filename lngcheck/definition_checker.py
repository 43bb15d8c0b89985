"""Checking of function bodies once every declaration is known."""

from __future__ import annotations

from . import syntax
from .core import ExpressionStatement, LetStatement, ReturnStatement, Statement
from .declarations import DeclaredFunction, DeclaredRootModule, resolve_type
from .entities import ExternBody, Function, RootModule, StatementsBody, StructField
from .errors import MismatchedAssignmentType, MismatchedReturnType
from .expression_checker import ExpressionChecker, Locals
from .ids import FunctionId, StructId
from .store import MultiStore


class DefinitionChecker:
    """Checks the bodies of all declared functions and builds the root module."""

    def __init__(
        self,
        root_module_declaration: DeclaredRootModule,
        declared_impls: dict[StructId, list[FunctionId]],
        main: FunctionId | None,
        types: MultiStore,
    ) -> None:
        self._root = root_module_declaration
        self._declared_impls = declared_impls
        self._main = main
        self._types = types
        self._functions: dict[FunctionId, Function] = {}

    def check(self) -> RootModule:
        """Check every definition; the result is an app when a main was found."""
        self._check_definitions()

        functions = dict(self._functions)
        functions.update(self._root.predeclared_functions)

        if self._main is not None:
            return RootModule.new_app(
                self._main,
                self._root.modules,
                self._root.structs,
                functions,
                self._types,
            )
        return RootModule.new_library(
            self._root.modules, self._root.structs, functions, self._types
        )

    def _check_definitions(self) -> None:
        impls = self._check_associated_functions()

        for function_id, declared in self._root.functions.items():
            self._functions[function_id] = self._check_function(declared)

        for struct_id in list(self._root.structs):
            self._attach_impls(struct_id, impls.pop(struct_id, {}))

    def _check_associated_functions(
        self,
    ) -> dict[StructId, dict[FunctionId, Function]]:
        impls: dict[StructId, dict[FunctionId, Function]] = {}
        for struct_id, function_ids in self._declared_impls.items():
            for function_id in function_ids:
                function = self._check_function(self._root.functions[function_id])
                impls.setdefault(struct_id, {})[function_id] = function
                self._functions[function_id] = function
        return impls

    def _attach_impls(
        self, struct_id: StructId, impls: dict[FunctionId, Function]
    ) -> None:
        struct = self._root.structs[struct_id]
        for function_id, function in impls.items():
            struct.fields.append(
                StructField(struct.id, function_id.local(), function.type_id, True)
            )
            struct.impls.append(function_id)

    def _check_function(self, declared: DeclaredFunction) -> Function:
        locals = Locals()
        locals.push_arguments(declared.arguments)
        expression_checker = ExpressionChecker(self._root, self._types)

        ast_body = declared.ast.body
        if isinstance(ast_body, syntax.ExternBody):
            body = ExternBody(ast_body.name)
        else:
            body = StatementsBody(
                tuple(
                    self._check_statement(
                        declared, locals, statement, expression_checker
                    )
                    for statement in ast_body.statements
                )
            )

        return Function(
            id=declared.id,
            module_name=declared.module_name,
            arguments=tuple(declared.arguments),
            return_type=declared.return_type,
            body=body,
            position=declared.position,
            visibility=declared.visibility,
            type_id=declared.type_id,
        )

    def _check_statement(
        self,
        declared: DeclaredFunction,
        locals: Locals,
        statement: syntax.Statement,
        expression_checker: ExpressionChecker,
    ) -> Statement:
        module = declared.module_name

        if isinstance(statement, syntax.ExpressionStatement):
            return ExpressionStatement(
                expression_checker.type_check_expression(
                    statement.expression, locals, module
                )
            )

        if isinstance(statement, syntax.LetStatement):
            checked = expression_checker.type_check_expression(
                statement.value, locals, module
            )
            variable_type = resolve_type(self._root, module, statement.type_, self._types)
            if not variable_type.can_assign_to(
                self._types.get(checked.type_id), self._root.structs.get
            ):
                raise MismatchedAssignmentType(
                    target_variable=statement.name,
                    variable_type=variable_type,
                    assigned_type=checked.type_id,
                ).at(statement.value.position)
            locals.push_variable(statement.name, self._types.add(variable_type))
            return LetStatement(statement.name, checked)

        if isinstance(statement, syntax.ReturnStatement):
            checked = expression_checker.type_check_expression(
                statement.expression, locals, module
            )
            if checked.type_id != declared.return_type:
                raise MismatchedReturnType(
                    actual=checked.type_id, expected=declared.return_type
                ).at(statement.expression.position)
            return ReturnStatement(checked)

        raise TypeError(f"unknown statement {statement!r}")