"""First pass of type checking: declare modules, imports, types and signatures."""

from __future__ import annotations

from collections.abc import Iterable

from . import syntax
from .core import (
    Array,
    Callable,
    IndirectCallable,
    InterfaceType,
    Object,
    StructType,
    Type,
    Visibility,
)
from .declarations import (
    DeclaredFunction,
    DeclaredRootModule,
    DeclaredStructField,
    resolve_type,
)
from .definition_checker import DefinitionChecker
from .entities import Argument, FunctionDeclaration, Interface, Module, Struct, StructField
from .errors import StructDoesNotExist
from .expression_checker import STRING_STRUCT_ID
from .ids import (
    FunctionId,
    InstantiatedInterfaceId,
    InstantiatedStructId,
    InterfaceId,
    ModuleId,
    StructId,
)
from .store import MultiStore, TypeId


class DeclarationChecker:
    """Collects every declaration of a program before any body is checked."""

    def __init__(
        self, root_module_declaration: DeclaredRootModule, types: MultiStore
    ) -> None:
        self._root = root_module_declaration
        self._types = types
        self._declared_impls: dict[StructId, list[FunctionId]] = {}
        self._main: FunctionId | None = None

    def check(self, program: Iterable[syntax.SourceFile]) -> DefinitionChecker:
        """Declare everything in ``program`` and hand over to the body checker."""
        files = list(program)
        self._declare_modules(files)
        self._declare_imports(files)
        self._check_declarations(files)
        self._check_impl_declarations(files)
        return DefinitionChecker(
            self._root, self._declared_impls, self._main, self._types
        )

    def _declare_modules(self, files: list[syntax.SourceFile]) -> None:
        # Fewer name parts means higher in the hierarchy, so parents come first.
        module_ids = sorted(
            (ModuleId.parse(file.name) for file in files), key=ModuleId.depth
        )
        for module_id in module_ids:
            self._root.declare_module(module_id, Module(module_id))

    def _declare_imports(self, files: list[syntax.SourceFile]) -> None:
        for file in files:
            importing = ModuleId.parse(file.name)
            for import_ in file.imports:
                exporting = ModuleId.parse(import_.path)
                for name, alias in import_.items:
                    self._root.import_item((importing, alias), (exporting, name))

    def _check_declarations(self, files: list[syntax.SourceFile]) -> None:
        for file in files:
            module = ModuleId.parse(file.name)
            for interface, _ in file.of_kind(syntax.Interface):
                self._check_interface(module, interface)

        for file in files:
            module = ModuleId.parse(file.name)
            for struct, _ in file.of_kind(syntax.Struct):
                self._check_struct(module, struct)

        for file in files:
            module = ModuleId.parse(file.name)
            for function, position in file.of_kind(syntax.Function):
                declared = self._declare_function(
                    function,
                    FunctionId.in_module(module, function.name),
                    module,
                    position,
                )
                self._detect_entrypoint(function.visibility, declared)
                self._root.functions[declared.id] = declared

        # Every struct is known by now, so field types can be checked once more.
        for file in files:
            module = ModuleId.parse(file.name)
            for struct, _ in file.of_kind(syntax.Struct):
                for struct_field in struct.fields:
                    resolve_type(self._root, module, struct_field.type_, self._types)

    def _check_impl_declarations(self, files: list[syntax.SourceFile]) -> None:
        for file in files:
            module = ModuleId.parse(file.name)
            for impl, position in file.of_kind(syntax.Impl):
                self._check_impl(module, impl, position)

    def _check_impl(
        self, module: ModuleId, impl: syntax.Impl, position: syntax.SourceSpan
    ) -> None:
        struct_id = StructId(module, impl.struct_name)
        functions = [
            self._declare_function(
                function, FunctionId.in_struct(struct_id, function.name), module, position
            )
            for function in impl.functions
        ]

        static_fields: dict[str, DeclaredStructField] = {}
        for function in functions:
            static_fields[function.ast.name] = DeclaredStructField(
                type_id=self._types.add(Type(Callable(function.id))), static=True
            )
            self._declared_impls.setdefault(struct_id, []).append(function.id)
            self._root.functions[function.id] = function

        interface_id = (
            None
            if impl.interface_name is None
            else self._implemented_interface(module, impl.interface_name)
        )

        struct = self._root.structs.get(struct_id)
        if struct is None:
            raise StructDoesNotExist(struct_id).at(position)

        struct.fields.extend(
            StructField(struct_id, name, declared.type_id, declared.static)
            for name, declared in static_fields.items()
        )
        if interface_id is not None:
            struct.implemented_interfaces[interface_id] = {
                function.ast.name: function.id for function in functions
            }

    def _implemented_interface(self, module: ModuleId, name: str) -> InterfaceId:
        resolved_module, resolved_name = self._root.resolve_import(module, name)
        item = self._root.get_item(resolved_module, resolved_name)
        if item is None:
            raise KeyError(f"unknown interface {resolved_name} in {resolved_module}")
        if not isinstance(item, Interface):
            raise TypeError(f"{resolved_name} is not an interface")
        return item.id

    def _check_interface(self, module: ModuleId, interface: syntax.Interface) -> None:
        interface_id = InterfaceId(module, interface.name)
        functions: dict[str, FunctionDeclaration] = {}

        for signature in interface.declarations:
            return_type = resolve_type(
                self._root, module, signature.return_type, self._types
            )
            type_id = self._types.add(
                Type(
                    IndirectCallable(
                        InstantiatedInterfaceId(interface_id), signature.name
                    )
                )
            )
            functions[signature.name] = FunctionDeclaration(
                type_id=type_id,
                return_type=self._types.add(return_type),
                arguments=tuple(
                    self._argument(argument, module) for argument in signature.arguments
                ),
            )

        self._root.interfaces[interface_id] = Interface(
            id=interface_id,
            type_id=self._types.add(Type(InterfaceType(interface_id))),
            functions=functions,
        )

    def _check_struct(self, module: ModuleId, struct: syntax.Struct) -> None:
        struct_id = StructId(module, struct.name)
        fields = [
            StructField(
                struct_id, struct_field.name, self._resolve(module, struct_field.type_)
            )
            for struct_field in struct.fields
        ]
        self._root.structs[struct_id] = Struct(
            id=struct_id,
            fields=fields,
            impls=[],
            type_id=self._types.add(Type(StructType(InstantiatedStructId(struct_id)))),
            instance_type=self._types.add(
                Type(Object(InstantiatedStructId(struct_id)))
            ),
        )

    def _detect_entrypoint(
        self, visibility: syntax.Visibility, declared: DeclaredFunction
    ) -> None:
        if declared.ast.name != "main" or visibility is not syntax.Visibility.EXPORT:
            return
        if not declared.arguments:
            self._main = declared.id
            return
        if len(declared.arguments) != 1:
            return

        kind = self._types.get(declared.arguments[0].type_id).kind
        if not isinstance(kind, Array):
            return
        element = self._types.get(kind.element).kind
        if isinstance(element, Object) and element.struct.id == STRING_STRUCT_ID:
            if self._main is not None:
                raise ValueError(f"main is already defined as {self._main}")
            self._main = declared.id

    def _declare_function(
        self,
        function: syntax.Function,
        function_id: FunctionId,
        module: ModuleId,
        position: syntax.SourceSpan,
    ) -> DeclaredFunction:
        arguments = tuple(self._argument(argument, module) for argument in function.arguments)
        return_type = resolve_type(self._root, module, function.return_type, self._types)
        return DeclaredFunction(
            id=function_id,
            type_id=self._types.add(Type(Callable(function_id))),
            module_name=module,
            arguments=arguments,
            return_type=self._types.add(return_type),
            ast=function,
            position=position,
            visibility=Visibility(function.visibility.value),
        )

    def _argument(self, argument: syntax.Argument, module: ModuleId) -> Argument:
        return Argument(
            argument.name, self._resolve(module, argument.type_), argument.position
        )

    def _resolve(self, module: ModuleId, description: syntax.TypeDescription) -> TypeId:
        return self._types.add(
            resolve_type(self._root, module, description, self._types)
        )