"""Tests for the in-memory symbol table."""

import pytest
from trees import body, fn, ident

from octdepends.analyzers.errors import AdapterError
from octdepends.analyzers.resolver import NOT_FOUND, Builtin, Scope, UserDefined
from octdepends.analyzers.symbols import SymbolTable
from octdepends.models.ast import FunctionDef, Statement, StatementList, UserFunction, UserScript


def _with_nested(name: str, nested: UserFunction) -> UserFunction:
    return UserFunction(name, body=StatementList((Statement(command=FunctionDef(nested)),)))


class TestLookupOrder:
    """Tests for Octave-style lookup precedence."""

    def test_unknown_name(self) -> None:
        assert SymbolTable().lookup("nothing") is NOT_FOUND

    def test_builtin(self) -> None:
        table = SymbolTable(builtins=["disp"])

        assert table.lookup("disp") == Builtin("disp")

    def test_path_function_shadows_builtin(self) -> None:
        table = SymbolTable(builtins=["plot"])
        table.add_file("/src/plot.m", [fn("plot")])

        result = table.lookup("plot")

        assert isinstance(result, UserDefined)
        assert result.source_path == "/src/plot.m"

    def test_subfunction_shadows_path_function(self) -> None:
        table = SymbolTable()
        table.add_file("/src/helper.m", [fn("helper")])
        main = table.add_file("/src/main.m", [fn("main"), fn("helper")])

        result = table.lookup("helper", main.scope)

        assert isinstance(result, UserDefined)
        assert result.source_path == "/src/main.m"
        assert table.lookup("helper").source_path == "/src/helper.m"

    def test_subfunction_hidden_from_top_level(self) -> None:
        table = SymbolTable()
        table.add_file("/src/main.m", [fn("main"), fn("local")])

        assert table.lookup("local") is NOT_FOUND

    def test_nested_function_visible_from_parent_only(self) -> None:
        table = SymbolTable()
        outer = table.add_file("/src/outer.m", [_with_nested("outer", fn("inner")), fn("sibling")])
        sibling = table.lookup("sibling", outer.scope)

        assert isinstance(table.lookup("inner", outer.scope), UserDefined)
        assert table.lookup("inner", sibling.scope) is NOT_FOUND

    def test_private_functions(self) -> None:
        """private/ functions are visible to the parent directory and each other."""
        table = SymbolTable()
        caller = table.add_file("/pkg/caller.m", [fn("caller")])
        priv = table.add_file("/pkg/private/secret.m", [fn("secret")])
        table.add_file("/pkg/private/other.m", [fn("other")])
        outsider = table.add_file("/elsewhere/outsider.m", [fn("outsider")])

        assert table.lookup("secret", caller.scope).source_path == "/pkg/private/secret.m"
        assert table.lookup("other", priv.scope).source_path == "/pkg/private/other.m"
        assert table.lookup("secret", outsider.scope) is NOT_FOUND
        assert table.lookup("secret") is NOT_FOUND

    def test_first_path_definition_wins(self) -> None:
        table = SymbolTable()
        table.add_file("/a/f.m", [fn("f")])
        table.add_file("/b/f.m", [fn("f")])

        assert table.lookup("f").source_path == "/a/f.m"

    def test_script_on_path(self) -> None:
        table = SymbolTable()
        script = UserScript("setup", body(ident("x")))
        entry = table.add_script("/src/setup.m", script)

        result = table.lookup("setup")

        assert result is entry
        assert result.definition is script


class TestScopeHandles:
    """Tests for scope handle validation."""

    def test_foreign_scope_rejected(self) -> None:
        table = SymbolTable()

        with pytest.raises(AdapterError, match="Unknown scope"):
            table.lookup("f", Scope("forged"))

    def test_scope_from_other_table_rejected(self) -> None:
        first = SymbolTable()
        entry = first.add_file("/src/f.m", [fn("f")])

        with pytest.raises(AdapterError):
            SymbolTable().lookup("f", entry.scope)

    def test_top_level_scope_accepted(self) -> None:
        table = SymbolTable(builtins=["disp"])

        assert table.lookup("disp", table.top_level) == Builtin("disp")


class TestRegistration:
    """Tests for adding files."""

    def test_empty_file_rejected(self) -> None:
        with pytest.raises(ValueError):
            SymbolTable().add_file("/src/empty.m", [])

    def test_add_builtin(self) -> None:
        table = SymbolTable()
        table.add_builtin("numel")

        assert "numel" in table.builtins
