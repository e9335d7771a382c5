"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from trees import call, fn, ident, marker

from octdepends.analyzers.symbols import SymbolTable


@pytest.fixture
def main_program() -> SymbolTable:
    """main calls helper1 and helper2; helper1 calls helper2; helper2 is builtin."""
    table = SymbolTable(builtins=["helper2", "disp"])
    table.add_file("/src/main.m", [fn("main", call("helper1", ident("x")), call("helper2"))])
    table.add_file("/src/helper1.m", [fn("helper1", call("helper2", ident("y")))])
    return table


@pytest.fixture
def cyclic_program() -> SymbolTable:
    """A and B call each other."""
    table = SymbolTable()
    table.add_file("/src/A.m", [fn("A", call("B"))])
    table.add_file("/src/B.m", [fn("B", call("A"))])
    return table


@pytest.fixture
def marker_program() -> SymbolTable:
    """F calls the marker function, which lists two data files and an empty string."""
    table = SymbolTable()
    table.add_file("/src/F.m", [fn("F", call("__depends_extra_files__"))])
    table.add_file(
        "/src/__depends_extra_files__.m",
        [marker("data1.dat", "data2.dat", "")],
    )
    return table


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_program_path(fixtures_dir: Path) -> Path:
    """Return path to the sample JSON program document."""
    return fixtures_dir / "sample_program.json"
