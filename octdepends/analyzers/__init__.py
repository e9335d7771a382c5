"""Analyzers for Octave function dependencies."""

from octdepends.analyzers.call_graph import build_call_graph, find_call_cycles
from octdepends.analyzers.depends import resolve_dependencies, walk_dependencies
from octdepends.analyzers.errors import (
    AdapterError,
    DependencyError,
    InvalidArgumentError,
    MarkerEvaluationError,
    ResolutionDepthError,
)
from octdepends.analyzers.evaluate import evaluate_marker
from octdepends.analyzers.resolver import (
    NOT_FOUND,
    Builtin,
    NameResolver,
    NotFound,
    Scope,
    UserDefined,
)
from octdepends.analyzers.symbols import SymbolTable
from octdepends.analyzers.walker import MARKER_FUNCTION, DependencyWalker

__all__ = [
    "MARKER_FUNCTION",
    "NOT_FOUND",
    "AdapterError",
    "Builtin",
    "DependencyError",
    "DependencyWalker",
    "InvalidArgumentError",
    "MarkerEvaluationError",
    "NameResolver",
    "NotFound",
    "ResolutionDepthError",
    "Scope",
    "SymbolTable",
    "UserDefined",
    "build_call_graph",
    "evaluate_marker",
    "find_call_cycles",
    "resolve_dependencies",
    "walk_dependencies",
]
