"""Loading of pre-parsed programs from JSON or MessagePack.

Parse tree nodes are encoded as dicts with a ``kind`` key naming the node
class in snake_case and one key per node field:

    {"kind": "index_expression",
     "expression": {"kind": "identifier", "name": "load_table"},
     "arg_lists": [{"kind": "argument_list",
                    "items": [{"kind": "constant", "value": "x.txt"}]}],
     "type_tags": "("}

Lists decode to tuples. Fields left out take the node's default.
"""

import dataclasses
import json
from pathlib import Path
from typing import Any

import msgpack
from pydantic import ValidationError

from octdepends.analyzers.symbols import SymbolTable
from octdepends.logging import logger
from octdepends.models.ast import NODE_TYPES, Constant, Node, UserFunction, UserScript, kind_of
from octdepends.models.program import ProgramDocument

JSON_EXTENSIONS = frozenset({".json"})
MSGPACK_EXTENSIONS = frozenset({".msgpack", ".mpk"})


class ProgramFormatError(ValueError):
    """Raised when a program document cannot be decoded."""

    pass


def load_node(data: Any) -> Node:
    """Decode one encoded parse tree node.

    Args:
        data: Dict with a ``kind`` key.

    Returns:
        The decoded node.

    Raises:
        ProgramFormatError: On unknown kinds, unknown fields or bad values.
    """
    if not isinstance(data, dict) or "kind" not in data:
        raise ProgramFormatError(f"Expected a node dict with 'kind', got {data!r}")

    kind = data["kind"]
    cls = NODE_TYPES.get(kind)
    if cls is None:
        raise ProgramFormatError(f"Unknown node kind: {kind!r}")

    field_names = {f.name for f in dataclasses.fields(cls)}
    unknown = set(data) - field_names - {"kind"}
    if unknown:
        raise ProgramFormatError(f"{kind}: unknown fields {sorted(unknown)}")

    kwargs = {}
    for name in field_names & set(data):
        value = data[name]
        # constant payloads are plain values, never nodes
        kwargs[name] = value if cls is Constant else _decode_value(value)

    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise ProgramFormatError(f"{kind}: {e}") from e


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        return load_node(value)
    if isinstance(value, list):
        return tuple(_decode_value(v) for v in value)
    return value


def dump_node(node: Node) -> dict[str, Any]:
    """Encode a parse tree node; the inverse of load_node."""
    data: dict[str, Any] = {"kind": kind_of(node)}
    for f in dataclasses.fields(node):
        value = getattr(node, f.name)
        if f.default is not dataclasses.MISSING and value == f.default:
            continue
        data[f.name] = _encode_value(value)
    return data


def _encode_value(value: Any) -> Any:
    if isinstance(value, Node):
        return dump_node(value)
    if isinstance(value, tuple):
        return [_encode_value(v) for v in value]
    return value


def _expect(node: Node, cls: type[Node], where: str) -> Any:
    if not isinstance(node, cls):
        raise ProgramFormatError(f"{where}: expected {cls.__name__}, got {kind_of(node)}")
    return node


def program_from_dict(data: dict[str, Any]) -> SymbolTable:
    """Build a SymbolTable from a decoded program document.

    Raises:
        ProgramFormatError: If the document does not match ProgramDocument
            or holds malformed parse trees.
    """
    try:
        document = ProgramDocument.model_validate(data)
    except ValidationError as e:
        raise ProgramFormatError(f"Invalid program document: {e}") from e

    table = SymbolTable(builtins=document.builtins)

    for program_file in document.files:
        functions = [
            _expect(load_node(fn), UserFunction, program_file.path)
            for fn in program_file.functions
        ]
        table.add_file(program_file.path, functions)

    for program_script in document.scripts:
        script = _expect(load_node(program_script.script), UserScript, program_script.path)
        table.add_script(program_script.path, script)

    logger.info(
        "  Loaded program: %d files, %d scripts, %d builtins",
        len(document.files),
        len(document.scripts),
        len(document.builtins),
    )
    return table


def load_program(path: str | Path) -> SymbolTable:
    """Load a program document from a .json or .msgpack file.

    Args:
        path: Document path.

    Returns:
        SymbolTable for the program.

    Raises:
        ProgramFormatError: If the file type is unsupported or the content
            cannot be decoded.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in JSON_EXTENSIONS:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ProgramFormatError(f"{path}: invalid JSON: {e}") from e
    elif suffix in MSGPACK_EXTENSIONS:
        try:
            with path.open("rb") as f:
                data = msgpack.unpack(f, raw=False)
        except (msgpack.UnpackException, msgpack.ExtraData, ValueError) as e:
            raise ProgramFormatError(f"{path}: invalid MessagePack: {e}") from e
    else:
        raise ProgramFormatError(f"{path}: unsupported program format {suffix!r}")

    if not isinstance(data, dict):
        raise ProgramFormatError(f"{path}: top level must be a mapping")
    return program_from_dict(data)
