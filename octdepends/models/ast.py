"""Octave parse tree node definitions.

One frozen dataclass per syntactic form. Trees are built by a loader (see
``octdepends.serialize``) or by hand in tests, and are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Node:
    """Base for all parse tree nodes."""


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Identifier(Node):
    """A bare name: variable, function call without parens, or command word."""

    name: str


@dataclass(frozen=True)
class FcnHandle(Node):
    """@name."""

    name: str


@dataclass(frozen=True)
class Funcall(Node):
    """Call to a function known by name at parse time."""

    name: str
    arguments: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Constant(Node):
    """Literal number, string or boolean."""

    value: Any


@dataclass(frozen=True)
class ArgumentList(Node):
    """Comma separated expressions: call arguments, matrix rows, lhs lists."""

    items: tuple[Node | None, ...] = ()


@dataclass(frozen=True)
class ParameterList(Node):
    """Formal parameters of a function or anonymous function."""

    items: tuple[Node | None, ...] = ()
    varargs: bool = False


@dataclass(frozen=True)
class ReturnList(Node):
    """Output names of a function."""

    items: tuple[Node | None, ...] = ()
    varargs: bool = False


@dataclass(frozen=True)
class AnonFcnHandle(Node):
    """@(params) body."""

    parameter_list: ParameterList | None = None
    body: Node | None = None


@dataclass(frozen=True)
class BinaryExpression(Node):
    """lhs op rhs for arithmetic and comparison operators."""

    op: str
    lhs: Node | None = None
    rhs: Node | None = None


@dataclass(frozen=True)
class BooleanExpression(Node):
    """Short-circuit && and ||."""

    op: str
    lhs: Node | None = None
    rhs: Node | None = None


@dataclass(frozen=True)
class PrefixExpression(Node):
    """Unary op applied before the operand (-x, !x, ++x)."""

    op: str
    operand: Node | None = None


@dataclass(frozen=True)
class PostfixExpression(Node):
    """Unary op applied after the operand (x', x++)."""

    op: str
    operand: Node | None = None


@dataclass(frozen=True)
class ColonExpression(Node):
    """base:limit or base:increment:limit."""

    base: Node | None = None
    increment: Node | None = None
    limit: Node | None = None


@dataclass(frozen=True)
class IndexExpression(Node):
    """expr(...){...}.field chain.

    ``type_tags`` holds one character per entry of ``arg_lists``: ``(``
    for paren indexing or calls, ``{`` for cell indexing, ``.`` for field
    access. For ``.`` entries the matching ``arg_lists`` item is the field
    name (or None for a dynamic field).
    """

    expression: Node | None = None
    arg_lists: tuple[ArgumentList | str | None, ...] = ()
    type_tags: str = ""

    def __post_init__(self) -> None:
        if len(self.arg_lists) != len(self.type_tags):
            raise ValueError(
                f"IndexExpression has {len(self.arg_lists)} argument lists "
                f"but {len(self.type_tags)} type tags"
            )


@dataclass(frozen=True)
class Matrix(Node):
    """[a, b; c, d]; each row is an ArgumentList."""

    rows: tuple[ArgumentList | None, ...] = ()


@dataclass(frozen=True)
class Cell(Node):
    """{a, b; c, d}; each row is an ArgumentList."""

    rows: tuple[ArgumentList | None, ...] = ()


# ============================================================
# ASSIGNMENTS
# ============================================================


@dataclass(frozen=True)
class SimpleAssignment(Node):
    """lhs = rhs, also op= forms."""

    lhs: Node | None = None
    rhs: Node | None = None
    op: str = "="


@dataclass(frozen=True)
class MultiAssignment(Node):
    """[a, b] = rhs."""

    lhs: ArgumentList | None = None
    rhs: Node | None = None


# ============================================================
# DECLARATIONS
# ============================================================


@dataclass(frozen=True)
class DeclElt(Node):
    """One declared name with an optional initializer."""

    ident: Identifier | None = None
    expression: Node | None = None


@dataclass(frozen=True)
class DeclInitList(Node):
    items: tuple[DeclElt | None, ...] = ()


@dataclass(frozen=True)
class DeclCommand(Node):
    """global or persistent declaration."""

    kind: str
    initializer_list: DeclInitList | None = None


# ============================================================
# COMMANDS
# ============================================================


@dataclass(frozen=True)
class NoOpCommand(Node):
    """Empty statement or a comment-only line."""


@dataclass(frozen=True)
class BreakCommand(Node):
    pass


@dataclass(frozen=True)
class ContinueCommand(Node):
    pass


@dataclass(frozen=True)
class ReturnCommand(Node):
    pass


@dataclass(frozen=True)
class SimpleForCommand(Node):
    """for lhs = expr ... end (also parfor)."""

    left_hand_side: Node | None = None
    control_expr: Node | None = None
    body: StatementList | None = None


@dataclass(frozen=True)
class ComplexForCommand(Node):
    """for [val, key] = struct ... end."""

    left_hand_side: ArgumentList | None = None
    control_expr: Node | None = None
    body: StatementList | None = None


@dataclass(frozen=True)
class WhileCommand(Node):
    condition: Node | None = None
    body: StatementList | None = None


@dataclass(frozen=True)
class DoUntilCommand(Node):
    condition: Node | None = None
    body: StatementList | None = None


@dataclass(frozen=True)
class IfClause(Node):
    """One if/elseif/else arm; ``condition`` is None for else."""

    condition: Node | None = None
    commands: StatementList | None = None


@dataclass(frozen=True)
class IfCommandList(Node):
    clauses: tuple[IfClause | None, ...] = ()


@dataclass(frozen=True)
class IfCommand(Node):
    cmd_list: IfCommandList | None = None


@dataclass(frozen=True)
class SwitchCase(Node):
    """One case arm; ``case_label`` is None for otherwise."""

    case_label: Node | None = None
    commands: StatementList | None = None


@dataclass(frozen=True)
class SwitchCaseList(Node):
    cases: tuple[SwitchCase | None, ...] = ()


@dataclass(frozen=True)
class SwitchCommand(Node):
    switch_value: Node | None = None
    case_list: SwitchCaseList | None = None


@dataclass(frozen=True)
class TryCatchCommand(Node):
    """try body catch [ident] cleanup end."""

    body: StatementList | None = None
    cleanup: StatementList | None = None
    identifier: Identifier | None = None


@dataclass(frozen=True)
class UnwindProtectCommand(Node):
    body: StatementList | None = None
    cleanup: StatementList | None = None


# ============================================================
# STATEMENTS AND DEFINITIONS
# ============================================================


@dataclass(frozen=True)
class Statement(Node):
    """Holds either a command or an expression."""

    command: Node | None = None
    expression: Node | None = None


@dataclass(frozen=True)
class StatementList(Node):
    statements: tuple[Statement | None, ...] = ()


@dataclass(frozen=True)
class UserFunction(Node):
    """A function defined in an m-file, as a subfunction or nested."""

    name: str
    parameter_list: ParameterList | None = None
    return_list: ReturnList | None = None
    body: StatementList | None = None


@dataclass(frozen=True)
class UserScript(Node):
    """A script file: a statement list run in the caller's workspace."""

    name: str
    body: StatementList | None = None


@dataclass(frozen=True)
class FunctionDef(Node):
    """A function definition appearing as a statement (nested function)."""

    function: UserFunction | None = None


def _kind(cls: type[Node]) -> str:
    out = []
    for i, ch in enumerate(cls.__name__):
        if ch.isupper() and i > 0:
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


# snake_case kind name -> node class, e.g. "index_expression" -> IndexExpression
NODE_TYPES: dict[str, type[Node]] = {
    _kind(cls): cls
    for cls in (
        Identifier,
        FcnHandle,
        Funcall,
        Constant,
        ArgumentList,
        ParameterList,
        ReturnList,
        AnonFcnHandle,
        BinaryExpression,
        BooleanExpression,
        PrefixExpression,
        PostfixExpression,
        ColonExpression,
        IndexExpression,
        Matrix,
        Cell,
        SimpleAssignment,
        MultiAssignment,
        DeclElt,
        DeclInitList,
        DeclCommand,
        NoOpCommand,
        BreakCommand,
        ContinueCommand,
        ReturnCommand,
        SimpleForCommand,
        ComplexForCommand,
        WhileCommand,
        DoUntilCommand,
        IfClause,
        IfCommandList,
        IfCommand,
        SwitchCase,
        SwitchCaseList,
        SwitchCommand,
        TryCatchCommand,
        UnwindProtectCommand,
        Statement,
        StatementList,
        UserFunction,
        UserScript,
        FunctionDef,
    )
}


def kind_of(node: Node) -> str:
    """Return the snake_case kind name of a node."""
    return _kind(type(node))
