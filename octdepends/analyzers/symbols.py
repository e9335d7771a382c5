"""In-memory symbol table implementing the NameResolver interface.

Lookup follows Octave's function precedence, from a function's own scope
outwards:

1. Nested functions of the enclosing function chain.
2. Subfunctions of the defining file.
3. Private functions of the defining directory (``<dir>/private/*.m``).
4. Functions and scripts on the load path.
5. Builtins.

Variables never appear in the table, so a variable name resolves to
NotFound just like an unknown symbol.
"""

import posixpath
from collections.abc import Iterable, Sequence

from octdepends.analyzers.errors import AdapterError
from octdepends.analyzers.evaluate import evaluate_marker
from octdepends.analyzers.resolver import (
    NOT_FOUND,
    Builtin,
    Resolution,
    Scope,
    UserDefined,
)
from octdepends.logging import logger
from octdepends.models.ast import FunctionDef, UserFunction, UserScript

PRIVATE_DIR = "private"


def _private_owner(path: str) -> str | None:
    """Return the directory whose functions may call the private file at ``path``."""
    directory = posixpath.dirname(path)
    if posixpath.basename(directory) == PRIVATE_DIR:
        return posixpath.dirname(directory)
    return None


class SymbolTable:
    """Program-wide function table.

    Example:
        table = SymbolTable(builtins=["disp", "numel"])
        table.add_file("/src/main.m", [main_fn, local_helper_fn])
        table.lookup("main")  # UserDefined(...)
    """

    def __init__(self, builtins: Iterable[str] = ()):
        self._top = Scope("<top-level>")
        self._scopes: set[Scope] = {self._top}
        self._path: dict[str, UserDefined] = {}
        self._private: dict[str, dict[str, UserDefined]] = {}
        self._builtins: set[str] = set(builtins)

    @property
    def top_level(self) -> Scope:
        return self._top

    @property
    def builtins(self) -> frozenset[str]:
        return frozenset(self._builtins)

    def add_builtin(self, name: str) -> None:
        self._builtins.add(name)

    def add_file(self, path: str, functions: Sequence[UserFunction]) -> UserDefined:
        """Register a function file.

        The first function is the primary function, visible on the load path
        (or only to the parent directory when the file lives in ``private/``).
        The rest are subfunctions, visible only from inside the file.

        Args:
            path: Source file path.
            functions: Functions defined in the file, primary first.

        Returns:
            The entry for the primary function.

        Raises:
            ValueError: If ``functions`` is empty.
        """
        if not functions:
            raise ValueError(f"{path}: a function file needs at least one function")

        directory = posixpath.dirname(path)
        file_scope = self._new_scope(path, None, directory)
        entries = [self._register(fn, path, file_scope) for fn in functions]
        primary = entries[0]

        owner = _private_owner(path)
        if owner is not None:
            self._publish(self._private.setdefault(owner, {}), primary)
        else:
            self._publish(self._path, primary)
        return primary

    def add_script(self, path: str, script: UserScript) -> UserDefined:
        """Register a script file on the load path."""
        scope = self._new_scope(path, None, posixpath.dirname(path))
        entry = UserDefined(script.name, scope, path, script)
        self._publish(self._path, entry)
        return entry

    def lookup(self, name: str, scope: Scope | None = None) -> Resolution:
        """Resolve a name as seen from ``scope``.

        Args:
            name: Identifier to resolve.
            scope: Scope handle from a previous UserDefined result, or None
                for the top-level scope.

        Returns:
            UserDefined, Builtin or NOT_FOUND.

        Raises:
            AdapterError: If ``scope`` was not created by this table.
        """
        if scope is None:
            scope = self._top
        elif scope not in self._scopes:
            raise AdapterError(f"Unknown scope handle: {scope.name!r}")

        current: Scope | None = scope
        while current is not None:
            if name in current.functions:
                return current.functions[name]
            current = current.parent

        for owner in self._private_owners(scope.directory):
            entry = self._private.get(owner, {}).get(name)
            if entry is not None:
                return entry

        if name in self._path:
            return self._path[name]
        if name in self._builtins:
            return Builtin(name)
        return NOT_FOUND

    def evaluate_marker(self, definition: UserFunction) -> list[str]:
        return evaluate_marker(definition)

    def _new_scope(self, name: str, parent: Scope | None, directory: str | None) -> Scope:
        scope = Scope(name, parent, directory)
        self._scopes.add(scope)
        return scope

    def _register(self, fn: UserFunction, path: str, parent: Scope) -> UserDefined:
        """Create ``fn``'s scope, register it in ``parent`` and recurse into nested definitions."""
        scope = self._new_scope(fn.name, parent, parent.directory)
        entry = UserDefined(fn.name, scope, path, fn)
        if fn.name in parent.functions:
            logger.warning("  %s: duplicate definition of %s ignored", path, fn.name)
        else:
            parent.functions[fn.name] = entry

        statements = fn.body.statements if fn.body else ()
        for stmt in statements:
            command = stmt.command if stmt is not None else None
            if isinstance(command, FunctionDef) and command.function is not None:
                self._register(command.function, path, scope)
        return entry

    def _publish(self, table: dict[str, UserDefined], entry: UserDefined) -> None:
        existing = table.get(entry.name)
        if existing is not None:
            logger.warning(
                "  %s shadowed by earlier definition in %s, ignoring %s",
                entry.name,
                existing.source_path,
                entry.source_path,
            )
            return
        table[entry.name] = entry

    @staticmethod
    def _private_owners(directory: str | None) -> list[str]:
        if directory is None:
            return []
        owners = [directory]
        if posixpath.basename(directory) == PRIVATE_DIR:
            # private functions may call their siblings
            owners.append(posixpath.dirname(directory))
        return owners
