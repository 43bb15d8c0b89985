import pytest

from lngcheck.syntax import (
    Argument,
    ArrayType,
    Declaration,
    ExternBody,
    Function,
    Impl,
    Import,
    IntegerLit,
    Interface,
    NamedType,
    SourceFile,
    SourceSpan,
    StatementsBody,
    Struct,
    Visibility,
)


def _function(name, body=None):
    return Function(
        name=name,
        arguments=(Argument("x", NamedType("u64")),),
        return_type=NamedType("()"),
        body=body if body is not None else StatementsBody(),
        visibility=Visibility.EXPORT,
    )


def test_span_str_with_file():
    assert str(SourceSpan(3, 7, "main")) == "main:3..7"


def test_span_str_without_file_omits_prefix():
    assert ":" not in str(SourceSpan(1, 2))


def test_span_rejects_reversed_range():
    with pytest.raises(ValueError):
        SourceSpan(5, 2)


def test_integer_literal_rejects_out_of_range():
    with pytest.raises(ValueError):
        IntegerLit(2**64)
    with pytest.raises(ValueError):
        IntegerLit(-1)


def test_integer_literal_accepts_max():
    assert IntegerLit(2**64 - 1).value == 2**64 - 1


def test_of_kind_filters_and_keeps_order():
    first = _function("a")
    second = _function("b")
    struct = Struct("S")
    source = SourceFile(
        "main",
        declarations=(
            Declaration(first, SourceSpan(0, 1)),
            Declaration(struct, SourceSpan(2, 3)),
            Declaration(second, SourceSpan(4, 5)),
        ),
    )
    assert list(source.of_kind(Function)) == [
        (first, SourceSpan(0, 1)),
        (second, SourceSpan(4, 5)),
    ]
    assert list(source.of_kind(Struct)) == [(struct, SourceSpan(2, 3))]
    assert list(source.of_kind(Interface)) == []


def test_is_extern():
    assert _function("f", ExternBody("f_impl")).is_extern
    assert not _function("g").is_extern


def test_nodes_are_hashable_and_equal_by_value():
    left = ArrayType(NamedType("string"))
    right = ArrayType(NamedType("string"))
    assert left == right
    assert len({left, right}) == 1


def test_impl_defaults_to_no_interface():
    impl = Impl("A", (_function("f"),))
    assert impl.interface_name is None
    assert impl.functions[0].name == "f"


def test_import_items_pairs():
    imp = Import("main.test", (("my_println", "just_println"),))
    assert dict(imp.items) == {"my_println": "just_println"}