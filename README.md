# lngcheck

`lngcheck` is the type-checking stage of a compiler for a small, statically
typed language. The language has:

- modules and imports, including aliased imports;
- structs with fields;
- `impl` blocks with associated functions and methods;
- interfaces;
- `u64` and `string` values.

The checker takes parsed source files as a syntax tree built from the classes
in `lngcheck.syntax`. It first collects every declaration: modules, imports,
interfaces, structs, functions and impls. It then checks every function body
and returns a `RootModule` with fully typed expressions.

The result is an application (`RootModule.is_app` is true and
`RootModule.main` is set) when a module exports a function named `main` in
one of two forms:

- with no arguments;
- with a single argument that is an array of `std.string`.

Otherwise the result is a library.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Overview

`lngcheck.checker.type_check(program, std=None)` is the entry point.

- `program` is an iterable of `lngcheck.syntax.SourceFile`.
- `std` is an optional, already checked `RootModule`. Its modules, structs and
  functions become visible to the program. Its type store is copied, so the
  library result is not changed.

The other modules:

- `lngcheck.syntax` holds the input tree: `SourceFile`, `Import`,
  `Declaration`, `Function`, `FunctionSignature`, `Struct`, `StructFieldDecl`,
  `Impl` and `Interface`. It also holds:
  - the statements `ExpressionStatement`, `LetStatement` and `ReturnStatement`;
  - the expressions `StringLit`, `IntegerLit`, `CallExpr`, `VariableRef`,
    `StructConstructorExpr` and `FieldAccessExpr`;
  - the type descriptions `NamedType` and `ArrayType`;
  - `SourceSpan` for positions.
- `lngcheck.core` holds the checked output:
  - `Type`, with kinds such as `Object`, `StructType`, `Callable`,
    `IndirectCallable` and `InterfaceObject`;
  - typed `Expression` values, with kinds such as `Call`, `FieldAccess`,
    `StructConstructor` and `SelfAccess`;
  - the checked statements.
- `lngcheck.entities` holds checked declarations: `Struct`, `Function`,
  `Interface`, `Module` and `RootModule`.
- `lngcheck.ids` holds identifiers: `ModuleId`, `StructId`, `FunctionId`,
  `InterfaceId` and their instantiated forms.
- `lngcheck.store` interns types. `SingleStore` and `MultiStore` give identical
  types the same `TypeId`.
- `lngcheck.declarations`, `lngcheck.declaration_checker`,
  `lngcheck.definition_checker` and `lngcheck.expression_checker` carry out the
  two checking passes.
- `lngcheck.errors` holds the errors. A failed check raises `TypeCheckError`,
  which carries an `ErrorDescription` (such as `UndeclaredVariable` or
  `MismatchedReturnType`) and the source location.

Some inputs fail with plain Python exceptions rather than a `TypeCheckError`:

- a type name that cannot be resolved raises `KeyError`;
- constructing something that is not a struct raises `TypeError`;
- a module declared twice, or a name imported twice into the same module,
  raises `ValueError`.

## Example

```python
from lngcheck import syntax
from lngcheck.checker import type_check
from lngcheck.errors import TypeCheckError

main_file = syntax.SourceFile(
    name="main",
    declarations=(
        syntax.Declaration(
            syntax.Function(
                name="main",
                arguments=(),
                return_type=syntax.NamedType("()"),
                body=syntax.StatementsBody(()),
                visibility=syntax.Visibility.EXPORT,
            )
        ),
    ),
)

root = type_check([main_file])
print(root.is_app)  # True

broken = syntax.SourceFile(
    name="main",
    declarations=(
        syntax.Declaration(
            syntax.Function(
                name="f",
                arguments=(),
                return_type=syntax.NamedType("()"),
                body=syntax.StatementsBody(
                    (
                        syntax.ExpressionStatement(
                            syntax.Expression(
                                syntax.VariableRef("x"),
                                syntax.SourceSpan(10, 11, "main"),
                            )
                        ),
                    )
                ),
            )
        ),
    ),
)

try:
    type_check([broken])
except TypeCheckError as error:
    print(error)  # Error Variable x does not exist at main:10..11
```

## What this package does not do

- It does not read source text. There is no parser: programs must be given as
  `lngcheck.syntax` trees.
- It does not generate code or run programs. Functions with an `ExternBody`
  are recorded by their foreign name only.
- It has no command-line tool.