"""Static evaluation of marker functions.

Marker functions only return literal file names, so instead of running an
interpreter we fold the handful of statement forms they use:

    function varargout = __depends_extra_files__()
      varargout = {"data1.dat", "data2.dat"};
    endfunction

    function [a, b] = __depends_extra_files__()
      a = "table.txt";
      b = ["prefix", "-", "suffix.txt"];
    endfunction

Supported: simple assignments to names or to ``name{k}`` with a numeric
constant ``k``, string/number constants, cell literals, char and cell
concatenation with ``[...]``, and references to names assigned earlier.
Anything else raises MarkerEvaluationError.
"""

from typing import Any

from octdepends.analyzers.errors import MarkerEvaluationError
from octdepends.models.ast import (
    ArgumentList,
    Cell,
    Constant,
    DeclElt,
    Identifier,
    IndexExpression,
    Matrix,
    Node,
    NoOpCommand,
    ReturnCommand,
    SimpleAssignment,
    Statement,
    UserFunction,
    kind_of,
)


class _Return(Exception):
    pass


def evaluate_marker(function: UserFunction) -> list[str]:
    """Evaluate a zero-argument function and return its string outputs.

    Outputs are produced in return-list order. A trailing ``varargout`` is
    expanded into its elements. Outputs that were never assigned are
    omitted.

    Args:
        function: The marker function definition.

    Returns:
        List of output strings, possibly empty, possibly containing "".

    Raises:
        MarkerEvaluationError: If the body uses an unsupported construct or
            an output is not a string.
    """
    env: dict[str, Any] = {}
    statements = function.body.statements if function.body else ()

    try:
        for stmt in statements:
            if stmt is not None:
                _execute(stmt, env, function.name)
    except _Return:
        pass

    outputs: list[Any] = []
    items = function.return_list.items if function.return_list else ()
    for i, item in enumerate(items):
        name = _output_name(item, function.name)
        if name is None or name not in env:
            continue
        if name == "varargout" and i == len(items) - 1:
            if not isinstance(env[name], list):
                raise MarkerEvaluationError(
                    f"{function.name}: varargout must be a cell array"
                )
            outputs.extend(env[name])
        else:
            outputs.append(env[name])

    for value in outputs:
        if not isinstance(value, str):
            raise MarkerEvaluationError(
                f"{function.name}: output {value!r} is not a string"
            )
    return outputs


def _output_name(item: Node | None, where: str) -> str | None:
    if item is None:
        return None
    if isinstance(item, Identifier):
        return item.name
    if isinstance(item, DeclElt) and item.ident is not None:
        return item.ident.name
    raise MarkerEvaluationError(f"{where}: unsupported output {kind_of(item)}")


def _execute(stmt: Statement, env: dict[str, Any], where: str) -> None:
    node = stmt.expression if stmt.expression is not None else stmt.command
    if node is None or isinstance(node, NoOpCommand):
        return
    if isinstance(node, ReturnCommand):
        raise _Return()
    if not isinstance(node, SimpleAssignment) or node.op != "=":
        raise MarkerEvaluationError(f"{where}: cannot evaluate {kind_of(node)}")

    value = _value(node.rhs, env, where)
    lhs = node.lhs
    if isinstance(lhs, Identifier):
        # value semantics: later element stores must not alias the source
        env[lhs.name] = list(value) if isinstance(value, list) else value
    elif (
        isinstance(lhs, IndexExpression)
        and isinstance(lhs.expression, Identifier)
        and lhs.type_tags == "{"
    ):
        _store_cell_element(env, lhs.expression.name, lhs.arg_lists[0], value, where)
    else:
        raise MarkerEvaluationError(
            f"{where}: cannot assign to {kind_of(lhs) if lhs else 'nothing'}"
        )


def _store_cell_element(
    env: dict[str, Any],
    name: str,
    index: ArgumentList | str | None,
    value: Any,
    where: str,
) -> None:
    if not isinstance(index, ArgumentList) or len(index.items) != 1:
        raise MarkerEvaluationError(f"{where}: {name}{{...}} needs a single index")
    position = _value(index.items[0], env, where)
    if isinstance(position, bool) or not isinstance(position, (int, float)) or position < 1:
        raise MarkerEvaluationError(f"{where}: bad cell index {position!r}")
    if int(position) != position:
        raise MarkerEvaluationError(f"{where}: bad cell index {position!r}")

    cell = env.setdefault(name, [])
    if not isinstance(cell, list):
        raise MarkerEvaluationError(f"{where}: {name} is not a cell array")
    k = int(position)
    while len(cell) < k:
        cell.append([])
    cell[k - 1] = value


def _value(node: Node | None, env: dict[str, Any], where: str) -> Any:
    if isinstance(node, Constant):
        return node.value
    if isinstance(node, Identifier):
        if node.name not in env:
            raise MarkerEvaluationError(f"{where}: '{node.name}' undefined")
        return env[node.name]
    if isinstance(node, Cell):
        return [_value(item, env, where) for item in _elements(node.rows)]
    if isinstance(node, Matrix):
        return _concatenate([_value(item, env, where) for item in _elements(node.rows)], where)
    raise MarkerEvaluationError(
        f"{where}: cannot evaluate {kind_of(node) if node else 'empty expression'}"
    )


def _elements(rows: tuple[ArgumentList | None, ...]) -> list[Node | None]:
    return [item for row in rows if row is not None for item in row.items]


def _concatenate(values: list[Any], where: str) -> Any:
    """Octave [...] concatenation for strings or cells."""
    if not values:
        return []
    if all(isinstance(v, str) for v in values):
        return "".join(values)
    if all(isinstance(v, list) for v in values):
        return [item for v in values for item in v]
    raise MarkerEvaluationError(f"{where}: cannot concatenate mixed values")
