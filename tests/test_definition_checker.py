import pytest

from lngcheck import syntax
from lngcheck.core import (
    Callable,
    InterfaceType,
    LetStatement,
    LocalVariableAccess,
    Object,
    ReturnStatement,
    StructType,
    Type,
    Visibility,
    u64_type,
    unit_type,
)
from lngcheck.declarations import DeclaredFunction, DeclaredRootModule
from lngcheck.definition_checker import DefinitionChecker
from lngcheck.entities import Argument, ExternBody, Function, Interface, StatementsBody, Struct
from lngcheck.errors import (
    MismatchedAssignmentType,
    MismatchedReturnType,
    TypeCheckError,
)
from lngcheck.ids import FunctionId, InstantiatedStructId, InterfaceId, ModuleId, StructId
from lngcheck.store import MultiStore

STD = ModuleId("std")
MAIN = ModuleId("main")
SPAN = syntax.SourceSpan(1, 4, "main")


def expr(kind, position=SPAN):
    return syntax.Expression(kind, position)


def add_struct(root, store, struct_id):
    struct = Struct(
        struct_id,
        [],
        [],
        store.add(Type(StructType(InstantiatedStructId(struct_id)))),
        store.add(Type(Object(InstantiatedStructId(struct_id)))),
    )
    root.structs[struct_id] = struct
    return struct


@pytest.fixture
def env():
    store = MultiStore()
    root = DeclaredRootModule()
    string = add_struct(root, store, StructId(STD, "string"))
    root.import_item((MAIN, "string"), (STD, "string"))
    return store, root, string.instance_type


def declare(root, store, function_id, body, return_type, arguments=()):
    ast = syntax.Function(
        function_id.local(), (), syntax.NamedType("()"), body, syntax.Visibility.EXPORT
    )
    declared = DeclaredFunction(
        function_id,
        store.add(Type(Callable(function_id))),
        MAIN,
        tuple(arguments),
        return_type,
        ast,
        SPAN,
        Visibility.EXPORT,
    )
    root.functions[function_id] = declared
    return declared


def body(*statements):
    return syntax.StatementsBody(tuple(statements))


def test_return_of_matching_type(env):
    store, root, string_tid = env
    fid = FunctionId.in_module(MAIN, "name")
    declare(
        root,
        store,
        fid,
        body(syntax.ReturnStatement(expr(syntax.StringLit("hi")))),
        string_tid,
    )
    result = DefinitionChecker(root, {}, None, store).check()
    assert result.main is None
    statement = result.functions[fid].body.statements[0]
    assert isinstance(statement, ReturnStatement)
    assert statement.expression.type_id == string_tid


def test_mismatched_return_type(env):
    store, root, string_tid = env
    position = syntax.SourceSpan(7, 8, "main")
    declare(
        root,
        store,
        FunctionId.in_module(MAIN, "name"),
        body(syntax.ReturnStatement(expr(syntax.IntegerLit(5), position))),
        string_tid,
    )
    with pytest.raises(TypeCheckError) as info:
        DefinitionChecker(root, {}, None, store).check()
    assert info.value.description == MismatchedReturnType(
        actual=store.add(u64_type()), expected=string_tid
    )
    assert info.value.location == position


def test_let_binds_local(env):
    store, root, string_tid = env
    fid = FunctionId.in_module(MAIN, "name")
    declare(
        root,
        store,
        fid,
        body(
            syntax.LetStatement(
                "s", syntax.NamedType("string"), expr(syntax.StringLit("hi"))
            ),
            syntax.ReturnStatement(expr(syntax.VariableRef("s"))),
        ),
        string_tid,
    )
    result = DefinitionChecker(root, {}, None, store).check()
    let, ret = result.functions[fid].body.statements
    assert isinstance(let, LetStatement)
    assert let.binding == "s"
    assert ret.expression.kind == LocalVariableAccess("s")
    assert ret.expression.type_id == string_tid


def test_let_with_mismatched_type(env):
    store, root, _ = env
    add_struct(root, store, StructId(MAIN, "Greeter"))
    declare(
        root,
        store,
        FunctionId.in_module(MAIN, "main"),
        body(
            syntax.LetStatement(
                "g", syntax.NamedType("Greeter"), expr(syntax.StringLit("x"))
            )
        ),
        store.add(unit_type()),
    )
    with pytest.raises(TypeCheckError) as info:
        DefinitionChecker(root, {}, None, store).check()
    assert isinstance(info.value.description, MismatchedAssignmentType)
    assert info.value.description.target_variable == "g"


def test_arguments_are_visible_in_body(env):
    store, root, string_tid = env
    fid = FunctionId.in_module(MAIN, "echo")
    declare(
        root,
        store,
        fid,
        body(syntax.ReturnStatement(expr(syntax.VariableRef("whom")))),
        string_tid,
        [Argument("whom", string_tid, SPAN)],
    )
    result = DefinitionChecker(root, {}, None, store).check()
    function = result.functions[fid]
    assert function.arguments == (Argument("whom", string_tid, SPAN),)
    assert function.body.statements[0].expression.kind == LocalVariableAccess("whom")


def test_main_makes_an_app(env):
    store, root, _ = env
    fid = FunctionId.in_module(MAIN, "main")
    declare(root, store, fid, body(), store.add(unit_type()))
    result = DefinitionChecker(root, {}, fid, store).check()
    assert result.is_app
    assert result.main == fid
    assert result.functions[fid].body == StatementsBody(())


def test_extern_body(env):
    store, root, _ = env
    fid = FunctionId.in_module(MAIN, "println")
    declare(
        root, store, fid, syntax.ExternBody("println_impl"), store.add(unit_type())
    )
    result = DefinitionChecker(root, {}, None, store).check()
    assert result.functions[fid].body == ExternBody("println_impl")


def test_predeclared_functions_are_kept(env):
    store, root, _ = env
    pid = FunctionId.in_module(STD, "println")
    predeclared = Function(
        pid,
        STD,
        (),
        store.add(unit_type()),
        ExternBody("println_impl"),
        SPAN,
        Visibility.EXPORT,
        store.add(Type(Callable(pid))),
    )
    root.predeclared_functions[pid] = predeclared
    result = DefinitionChecker(root, {}, None, store).check()
    assert result.functions[pid] == predeclared


def test_impls_are_attached_to_struct(env):
    store, root, _ = env
    greeter_id = StructId(MAIN, "Greeter")
    add_struct(root, store, greeter_id)
    fid = FunctionId.in_struct(greeter_id, "greet")
    declared = declare(root, store, fid, body(), store.add(unit_type()))
    result = DefinitionChecker(root, {greeter_id: [fid]}, None, store).check()
    struct = result.structs[greeter_id]
    assert struct.impls == [fid]
    [field] = struct.fields
    assert field.name == "greet"
    assert field.static
    assert field.type_id == declared.type_id
    assert fid in result.functions


def test_interface_assignment(env):
    store, root, _ = env
    interface_id = InterfaceId(MAIN, "Named")
    root.interfaces[interface_id] = Interface(
        interface_id, store.add(Type(InterfaceType(interface_id))), {}
    )
    implementing = add_struct(root, store, StructId(MAIN, "A"))
    implementing.implemented_interfaces[interface_id] = {}
    add_struct(root, store, StructId(MAIN, "B"))

    def let_of(struct_name):
        return syntax.LetStatement(
            "a",
            syntax.NamedType("Named"),
            expr(syntax.StructConstructorExpr(expr(syntax.VariableRef(struct_name)))),
        )

    ok = FunctionId.in_module(MAIN, "ok")
    declare(root, store, ok, body(let_of("A")), store.add(unit_type()))
    result = DefinitionChecker(root, {}, None, store).check()
    assert result.functions[ok].body.statements[0].value.type_id == (
        implementing.instance_type
    )

    bad = FunctionId.in_module(MAIN, "bad")
    declare(root, store, bad, body(let_of("B")), store.add(unit_type()))
    with pytest.raises(TypeCheckError) as info:
        DefinitionChecker(root, {}, None, store).check()
    assert isinstance(info.value.description, MismatchedAssignmentType)