"""Pydantic models for pre-parsed program documents.

A program document is what a front end (an Octave session dumping its
parse trees, or a test fixture) hands to octdepends. Parse trees stay as
plain dicts here; ``octdepends.serialize`` turns them into AST nodes.
"""

from typing import Any

from pydantic import BaseModel, Field


class ProgramFile(BaseModel):
    """A function file: primary function first, then subfunctions."""

    path: str = Field(description="Source file path (e.g., '/src/main.m')")
    functions: list[dict[str, Any]] = Field(
        min_length=1, description="user_function parse trees, primary first"
    )


class ProgramScript(BaseModel):
    """A script file."""

    path: str = Field(description="Source file path")
    script: dict[str, Any] = Field(description="user_script parse tree")


class ProgramDocument(BaseModel):
    """Everything a symbol table needs: builtins, function files, scripts."""

    builtins: list[str] = Field(default_factory=list, description="Builtin function names")
    files: list[ProgramFile] = Field(default_factory=list, description="Function files")
    scripts: list[ProgramScript] = Field(default_factory=list, description="Script files")
