"""Dependency resolution entry point.

``resolve_dependencies`` is the Python counterpart of Octave's
``[deps, extras] = depends(exclude, name, ...)``: it returns the user
functions needed to run the named functions together with the extra data
files they declare.
"""

import sys
from collections.abc import Sequence
from contextlib import contextmanager

from octdepends.analyzers.errors import InvalidArgumentError, ResolutionDepthError
from octdepends.analyzers.resolver import NameResolver
from octdepends.analyzers.walker import DependencyWalker
from octdepends.config import DEFAULT_MAX_DEPTH
from octdepends.logging import log_operation


# Python frames used per nested function body, including statement nesting
FRAMES_PER_LEVEL = 40


@contextmanager
def _recursion_limit(max_depth: int):
    """Raise the interpreter recursion limit so max_depth levels fit."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(old + max_depth * FRAMES_PER_LEVEL)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


def _validate(names: Sequence[str], exclude: Sequence[str]) -> None:
    if isinstance(names, str):
        raise InvalidArgumentError("names must be a sequence of strings, not a string")
    if not isinstance(names, Sequence):
        raise InvalidArgumentError(f"names must be a sequence of strings, not {type(names).__name__}")
    if len(names) == 0:
        raise InvalidArgumentError("at least one function name is required")
    for i, name in enumerate(names):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"argument #{i + 1} is not a non-empty string: {name!r}")

    if isinstance(exclude, str):
        raise InvalidArgumentError("exclude must be a sequence of strings, not a string")
    if not isinstance(exclude, Sequence):
        raise InvalidArgumentError(
            f"exclude must be a sequence of strings, not {type(exclude).__name__}"
        )
    for i, prefix in enumerate(exclude):
        if not isinstance(prefix, str):
            raise InvalidArgumentError(f"exclude entry #{i + 1} is not a string: {prefix!r}")


def walk_dependencies(
    resolver: NameResolver,
    names: Sequence[str],
    exclude: Sequence[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> DependencyWalker:
    """Validate input and run a walker over every root name.

    Returns the finished walker so callers can read its call edges as well
    as the function map and extra files.

    Raises:
        InvalidArgumentError: If ``names`` or ``exclude`` is malformed.
        AdapterError: If the resolver fails; no partial result is returned.
    """
    _validate(names, exclude)

    walker = DependencyWalker(resolver, exclude=exclude, max_depth=max_depth)
    details = {"roots": ",".join(names), "exclude": len(exclude)}
    with log_operation("resolve_dependencies", details), _recursion_limit(max_depth):
        try:
            for name in names:
                walker.walk_function(name)
        except RecursionError as e:
            raise ResolutionDepthError(
                "Parse tree too deep to walk",
                chain=[f.name for f in walker.stack],
            ) from e
    return walker


def resolve_dependencies(
    resolver: NameResolver,
    names: Sequence[str],
    exclude: Sequence[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[dict[str, str], list[str]]:
    """Find the user functions and extra files needed by ``names``.

    Functions are resolved through ``resolver`` starting in its top-level
    scope. Builtins and functions whose file path starts with one of the
    ``exclude`` prefixes are left out, and nothing reachable only through
    them is visited.

    Args:
        resolver: Symbol table of the program being analysed.
        names: Root function names, walked in order.
        exclude: File path prefixes to skip (plain string prefixes).
        max_depth: Maximum number of nested function bodies.

    Returns:
        Tuple of (function name -> file path, sorted extra file names).

    Raises:
        InvalidArgumentError: If ``names`` is empty or holds a non-string or
            empty entry, or ``exclude`` holds a non-string entry.
        AdapterError: If the resolver fails or the nesting is too deep.

    Example:
        >>> deps, extras = resolve_dependencies(table, ["main"], ["/usr/share/octave"])
    """
    walker = walk_dependencies(resolver, names, exclude, max_depth)
    return dict(walker.functions), sorted(walker.extra_files)
