"""Shorthand constructors for parse trees used across the tests."""

from octdepends.models.ast import (
    ArgumentList,
    Cell,
    Constant,
    Identifier,
    IndexExpression,
    Node,
    ReturnList,
    SimpleAssignment,
    Statement,
    StatementList,
    UserFunction,
)


def ident(name: str) -> Identifier:
    return Identifier(name)


def args(*items: Node) -> ArgumentList:
    return ArgumentList(tuple(items))


def call(name: str, *items: Node) -> IndexExpression:
    """name(items...)"""
    return IndexExpression(Identifier(name), (args(*items),), "(")


def stmt(node: Node) -> Statement:
    return Statement(expression=node)


def body(*nodes: Node) -> StatementList:
    return StatementList(tuple(stmt(n) for n in nodes))


def fn(name: str, *nodes: Node, outputs: tuple[str, ...] = ()) -> UserFunction:
    return_list = ReturnList(tuple(Identifier(o) for o in outputs)) if outputs else None
    return UserFunction(name, return_list=return_list, body=body(*nodes))


def assign(name: str, value: Node) -> SimpleAssignment:
    return SimpleAssignment(Identifier(name), value)


def cell(*values: str) -> Cell:
    return Cell((args(*(Constant(v) for v in values)),))


def marker(*files: str) -> UserFunction:
    """function varargout = __depends_extra_files__() varargout = {files...}; end"""
    return fn(
        "__depends_extra_files__",
        assign("varargout", cell(*files)),
        outputs=("varargout",),
    )
