"""Name resolver interface consumed by the dependency walker.

A resolver answers one question: what does ``name`` refer to when looked
up from ``scope``? The walker only distinguishes three answers, modelled
here as small frozen dataclasses.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from octdepends.models.ast import UserFunction, UserScript


@dataclass(eq=False)
class Scope:
    """A lexical scope handle.

    Scopes compare by identity; a resolver only accepts handles it created.
    """

    name: str
    parent: Scope | None = None
    directory: str | None = None
    functions: dict[str, UserDefined] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class NotFound:
    """The name is not a function (variable, unknown symbol, ...)."""


@dataclass(frozen=True)
class Builtin:
    """The name is a builtin or compiled function with no walkable source."""

    name: str


@dataclass(frozen=True)
class UserDefined:
    """The name is a user function or script with source on disk."""

    name: str
    scope: Scope
    source_path: str
    definition: UserFunction | UserScript


NOT_FOUND = NotFound()

Resolution = NotFound | Builtin | UserDefined


class NameResolver(Protocol):
    """Lookup service backed by a program's symbol table."""

    def lookup(self, name: str, scope: Scope | None = None) -> Resolution:
        """Resolve ``name`` from ``scope`` (None means the top-level scope).

        Raises:
            AdapterError: If ``scope`` is not a handle from this resolver.
        """
        ...

    def evaluate_marker(self, definition: UserFunction) -> Sequence[str]:
        """Call a marker function with no arguments and return its outputs.

        Raises:
            AdapterError: If the function cannot be evaluated.
        """
        ...
