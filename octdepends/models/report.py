"""Report models for dependency resolution output."""

from datetime import datetime

from pydantic import BaseModel, Field


class CallEdge(BaseModel):
    """A reference from one recorded function to another."""

    source: str = Field(alias="from", description="Calling function")
    target: str = Field(alias="to", description="Called function")

    model_config = {"populate_by_name": True}


class ReportMetadata(BaseModel):
    """Metadata about a resolution run."""

    roots: list[str] = Field(description="Root function names, in order")
    exclude: list[str] = Field(default_factory=list, description="Exclusion prefixes")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=None), description="When the report was generated"
    )
    version: str = Field(description="octdepends version")


class DependencyReport(BaseModel):
    """Functions and extra files needed by a set of root functions."""

    functions: dict[str, str] = Field(
        default_factory=dict, description="Function name -> defining file"
    )
    extra_files: list[str] = Field(
        default_factory=list, description="Data files declared by marker functions, sorted"
    )
    edges: list[CallEdge] = Field(default_factory=list, description="Call edges")
    metadata: ReportMetadata = Field(description="Run metadata")


class CycleSummary(BaseModel):
    """A group of mutually recursive functions."""

    length: int = Field(description="Number of functions in the cycle")
    files: list[str] = Field(description="Files the functions are defined in, sorted")
    functions: list[str] = Field(description="Function names, sorted")


class CallGraphSummary(BaseModel):
    """Shape of the call graph between resolved functions."""

    node_count: int
    edge_count: int
    roots: list[str] = Field(description="Root names that resolved to recorded functions")
    leaves: list[str] = Field(description="Recorded functions that call no other recorded function")
    cycles: list[CycleSummary] = Field(default_factory=list)
