"""Call graph over resolved dependencies.

Builds a NetworkX DiGraph from the walker's output so the usual graph
queries (cycles, reachability) can be run on it.
"""

from collections.abc import Iterable, Mapping

import networkx as nx


def build_call_graph(
    functions: Mapping[str, str],
    edges: Iterable[tuple[str, str]],
) -> nx.DiGraph:
    """Convert resolved functions and call edges to a NetworkX graph.

    Args:
        functions: Function name -> defining file, from resolve_dependencies.
        edges: (caller, callee) pairs. Pairs naming an unknown function are
            dropped.

    Returns:
        DiGraph with one node per function (``file`` attribute) and one
        ``calls`` edge per pair.
    """
    G = nx.DiGraph()

    for name, file_path in functions.items():
        G.add_node(name, file=file_path)

    for caller, callee in edges:
        if caller in functions and callee in functions:
            G.add_edge(caller, callee, type="calls")

    return G


def find_call_cycles(G: nx.DiGraph) -> list[list[str]]:
    """Find groups of functions that call each other recursively.

    Self-recursive functions form single-element cycles.

    Args:
        G: Graph from build_call_graph.

    Returns:
        List of cycles, each a list of function names, sorted for stable output.
    """
    cycles = []
    for component in nx.strongly_connected_components(G):
        members = sorted(component)
        if len(members) > 1 or G.has_edge(members[0], members[0]):
            cycles.append(members)
    cycles.sort()
    return cycles
