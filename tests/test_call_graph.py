"""Tests for call graph construction."""

import networkx as nx
from trees import call, fn

from octdepends.analyzers.call_graph import build_call_graph, find_call_cycles
from octdepends.analyzers.depends import walk_dependencies
from octdepends.analyzers.symbols import SymbolTable


class TestBuildCallGraph:
    """Tests for converting walker output to NetworkX."""

    def test_nodes_carry_file(self) -> None:
        G = build_call_graph({"main": "/src/main.m", "helper": "/src/helper.m"}, [("main", "helper")])

        assert isinstance(G, nx.DiGraph)
        assert G.nodes["main"]["file"] == "/src/main.m"
        assert G.edges["main", "helper"]["type"] == "calls"

    def test_edges_to_unknown_functions_dropped(self) -> None:
        G = build_call_graph({"main": "/src/main.m"}, [("main", "ghost")])

        assert G.number_of_edges() == 0
        assert "ghost" not in G

    def test_from_walker(self, main_program: SymbolTable) -> None:
        walker = walk_dependencies(main_program, ["main"])

        G = build_call_graph(walker.functions, walker.edges)

        assert set(G.nodes) == {"main", "helper1"}
        assert list(G.edges) == [("main", "helper1")]


class TestFindCallCycles:
    """Tests for recursive cycle detection."""

    def test_mutual_recursion(self, cyclic_program: SymbolTable) -> None:
        walker = walk_dependencies(cyclic_program, ["A"])

        cycles = find_call_cycles(build_call_graph(walker.functions, walker.edges))

        assert cycles == [["A", "B"]]

    def test_self_recursion(self) -> None:
        table = SymbolTable()
        table.add_file("/src/fact.m", [fn("fact", call("fact"))])
        walker = walk_dependencies(table, ["fact"])

        cycles = find_call_cycles(build_call_graph(walker.functions, walker.edges))

        assert cycles == [["fact"]]

    def test_acyclic(self, main_program: SymbolTable) -> None:
        walker = walk_dependencies(main_program, ["main"])

        assert find_call_cycles(build_call_graph(walker.functions, walker.edges)) == []
