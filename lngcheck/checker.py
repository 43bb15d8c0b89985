"""Entry point of the type checker."""

from __future__ import annotations

from collections.abc import Iterable

from . import syntax
from .declaration_checker import DeclarationChecker
from .declarations import DeclaredRootModule
from .entities import RootModule
from .store import MultiStore


def type_check(
    program: Iterable[syntax.SourceFile], std: RootModule | None = None
) -> RootModule:
    """Check ``program``, optionally on top of an already checked library."""
    if std is None:
        root = DeclaredRootModule()
        types = MultiStore()
    else:
        root = DeclaredRootModule.from_predeclared(
            std.modules, std.structs, std.functions
        )
        types = std.types.copy()

    return DeclarationChecker(root, types).check(program).check()