"""Parse tree walker that collects the functions a piece of code depends on.

The walker starts from a name, resolves it through a NameResolver and, if
it is a user function outside the excluded prefixes, records it and walks
its body. Every identifier met on the way is treated the same, so the
result is the transitive closure of referenced user functions.

Functions named ``__depends_extra_files__`` act as a side channel: their
return values are file names that the calling code needs at run time.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from octdepends.analyzers.errors import ResolutionDepthError
from octdepends.analyzers.resolver import Builtin, NameResolver, UserDefined
from octdepends.config import DEFAULT_MAX_DEPTH
from octdepends.logging import logger
from octdepends.models.ast import (
    AnonFcnHandle,
    ArgumentList,
    BinaryExpression,
    BooleanExpression,
    BreakCommand,
    Cell,
    ColonExpression,
    ComplexForCommand,
    Constant,
    ContinueCommand,
    DeclCommand,
    DeclElt,
    DeclInitList,
    DoUntilCommand,
    FcnHandle,
    Funcall,
    FunctionDef,
    Identifier,
    IfClause,
    IfCommand,
    IfCommandList,
    IndexExpression,
    Matrix,
    MultiAssignment,
    Node,
    NoOpCommand,
    ParameterList,
    PostfixExpression,
    PrefixExpression,
    ReturnCommand,
    ReturnList,
    SimpleAssignment,
    SimpleForCommand,
    Statement,
    StatementList,
    SwitchCase,
    SwitchCaseList,
    SwitchCommand,
    TryCatchCommand,
    UnwindProtectCommand,
    UserFunction,
    UserScript,
    WhileCommand,
)

# Reserved name of the function whose outputs list extra data files
MARKER_FUNCTION = "__depends_extra_files__"

# Index type tags whose argument lists are walked; "." (field access) is not
CALL_TAGS = frozenset("({")


class DependencyWalker:
    """Collects user function dependencies reachable from given names.

    Attributes:
        functions: Function name -> defining file, in discovery order.
        extra_files: Non-empty strings returned by marker functions.
        edges: (caller, callee) pairs between recorded functions.
        stack: Functions whose bodies are currently being walked.

    Names are not told apart from variables: any identifier spelled like an
    already recorded function adds an edge to it, so a local variable that
    shares a function's name shows up as a call in ``edges``.
    """

    def __init__(
        self,
        resolver: NameResolver,
        exclude: Iterable[str] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.resolver = resolver
        self.exclude = tuple(exclude)
        self.max_depth = max_depth
        self.functions: dict[str, str] = {}
        self.extra_files: set[str] = set()
        self.edges: dict[tuple[str, str], None] = {}
        self.stack: list[UserDefined] = []

    def walk_function(self, name: str) -> None:
        """Resolve ``name`` and, if it is a new user function, walk it.

        Args:
            name: Identifier to resolve in the innermost active scope.
        """
        if name in self.functions:
            self._add_edge(name)
            return

        scope = self.stack[-1].scope if self.stack else None
        resolution = self.resolver.lookup(name, scope)

        match resolution:
            case UserDefined(source_path=source_path):
                pass
            case Builtin():
                logger.debug("  %s: builtin, skipped", name)
                return
            case _:
                return

        if self.is_excluded(source_path):
            logger.debug("  %s: excluded (%s)", name, source_path)
            return

        self.functions[name] = source_path
        self._add_edge(name)
        logger.debug("  %s -> %s", name, source_path)

        with self._entered(resolution):
            try:
                self.visit(resolution.definition)
            except RecursionError as e:
                # Capture the chain here; the stack is empty once unwound
                raise ResolutionDepthError(
                    f"Parse tree too deep to walk at {name}",
                    chain=[f.name for f in self.stack],
                ) from e

    def is_excluded(self, source_path: str) -> bool:
        # Plain string prefix: "/lib" also excludes "/library/x.m"
        return any(source_path.startswith(prefix) for prefix in self.exclude)

    @contextmanager
    def _entered(self, function: UserDefined) -> Iterator[None]:
        if len(self.stack) >= self.max_depth:
            raise ResolutionDepthError(
                f"Function nesting exceeds {self.max_depth} levels at {function.name}",
                chain=[f.name for f in self.stack] + [function.name],
            )
        self.stack.append(function)
        try:
            yield
        finally:
            self.stack.pop()

    def _add_edge(self, callee: str) -> None:
        if self.stack:
            self.edges[(self.stack[-1].name, callee)] = None

    def visit(self, node: Node | None) -> None:
        """Walk ``node`` and all of its children, depth first, in order."""
        match node:
            case None | Constant() | NoOpCommand() | BreakCommand() | ContinueCommand() | ReturnCommand():
                pass

            case Identifier(name=name) | FcnHandle(name=name):
                self.walk_function(name)

            case Funcall(name=name, arguments=arguments):
                self.walk_function(name)
                self._visit_all(arguments)

            case AnonFcnHandle(parameter_list=parameter_list, body=body):
                self.visit(parameter_list)
                self.visit(body)

            case (
                ArgumentList(items=items)
                | ParameterList(items=items)
                | ReturnList(items=items)
                | DeclInitList(items=items)
            ):
                self._visit_all(items)

            case BinaryExpression(lhs=lhs, rhs=rhs) | BooleanExpression(lhs=lhs, rhs=rhs):
                self.visit(lhs)
                self.visit(rhs)

            case PrefixExpression(operand=operand) | PostfixExpression(operand=operand):
                self.visit(operand)

            case ColonExpression(base=base, increment=increment, limit=limit):
                self.visit(base)
                self.visit(increment)
                self.visit(limit)

            case IndexExpression():
                self._visit_index(node)

            case Matrix(rows=rows) | Cell(rows=rows):
                self._visit_all(rows)

            case SimpleAssignment(lhs=lhs, rhs=rhs) | MultiAssignment(lhs=lhs, rhs=rhs):
                self.visit(lhs)
                self.visit(rhs)

            case DeclElt(ident=ident, expression=expression):
                self.visit(ident)
                self.visit(expression)

            case DeclCommand(initializer_list=initializer_list):
                self.visit(initializer_list)

            case (
                SimpleForCommand(left_hand_side=lhs, control_expr=control, body=body)
                | ComplexForCommand(left_hand_side=lhs, control_expr=control, body=body)
            ):
                self.visit(lhs)
                self.visit(control)
                self.visit(body)

            case WhileCommand(condition=condition, body=body) | DoUntilCommand(
                condition=condition, body=body
            ):
                self.visit(condition)
                self.visit(body)

            case IfClause(condition=condition, commands=commands):
                self.visit(condition)
                self.visit(commands)

            case IfCommandList(clauses=clauses):
                self._visit_all(clauses)

            case IfCommand(cmd_list=cmd_list):
                self.visit(cmd_list)

            case SwitchCase(case_label=label, commands=commands):
                self.visit(label)
                self.visit(commands)

            case SwitchCaseList(cases=cases):
                self._visit_all(cases)

            case SwitchCommand(switch_value=value, case_list=case_list):
                self.visit(value)
                self.visit(case_list)

            case TryCatchCommand(body=body, cleanup=cleanup) | UnwindProtectCommand(
                body=body, cleanup=cleanup
            ):
                self.visit(body)
                self.visit(cleanup)

            case Statement(command=command, expression=expression):
                self.visit(command)
                self.visit(expression)

            case StatementList(statements=statements):
                self._visit_all(statements)

            case UserFunction():
                self._visit_user_function(node)

            case UserScript(body=body):
                self.visit(body)

            case FunctionDef(function=function):
                # nested definition: walked in place, in the enclosing scope
                self.visit(function)

            case _:
                raise TypeError(f"Unhandled parse tree node: {type(node).__name__}")

    def _visit_all(self, nodes: Iterable[Node | None]) -> None:
        for child in nodes:
            self.visit(child)

    def _visit_index(self, node: IndexExpression) -> None:
        self.visit(node.expression)
        for tag, arg_list in zip(node.type_tags, node.arg_lists, strict=True):
            if tag in CALL_TAGS and isinstance(arg_list, ArgumentList):
                self.visit(arg_list)

    def _visit_user_function(self, function: UserFunction) -> None:
        if function.name == MARKER_FUNCTION:
            for file_name in self.resolver.evaluate_marker(function):
                if file_name:
                    self.extra_files.add(file_name)
        self.visit(function.body)
