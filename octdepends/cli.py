"""CLI interface for octdepends.

Resolves function dependencies in a pre-parsed program document and
prints the result as JSON.
"""

import json
import sys

import click
from dotenv import load_dotenv

# Load .env before importing other octdepends modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from octdepends import __version__  # noqa: E402


@click.group()
@click.version_option(version=__version__, prog_name="octdepends")
@click.option("--log-level", default=None, help="Logger level (default: $OCTDEPENDS_LOG_LEVEL or INFO)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """octdepends - find the Octave functions and data files a program needs."""
    from pydantic import ValidationError

    from octdepends.config import load_settings
    from octdepends.logging import set_log_level

    try:
        settings = load_settings()
    except ValidationError as e:
        click.echo(f"Invalid OCTDEPENDS_* setting: {e}", err=True)
        sys.exit(1)

    set_log_level(log_level or settings.log_level)
    ctx.obj = settings


_program_argument = click.argument(
    "program", type=click.Path(exists=True, dir_okay=False, resolve_path=True)
)
_names_argument = click.argument("names", nargs=-1, required=True)
_exclude_option = click.option(
    "--exclude",
    "-x",
    multiple=True,
    help="Skip functions whose file path starts with PREFIX (repeatable; "
    "default: $OCTDEPENDS_EXCLUDE)",
    metavar="PREFIX",
)
_max_depth_option = click.option(
    "--max-depth", type=int, default=None, help="Maximum function nesting (default: 256)"
)


def _walk(
    ctx: click.Context,
    program: str,
    names: tuple[str, ...],
    exclude: tuple[str, ...],
    max_depth: int | None,
):
    """Load PROGRAM and walk NAMES, exiting with status 1 on failure."""
    from octdepends.analyzers import DependencyError, walk_dependencies
    from octdepends.serialize import ProgramFormatError, load_program

    settings = ctx.obj
    prefixes = list(exclude) if exclude else list(settings.exclude)
    try:
        table = load_program(program)
        walker = walk_dependencies(
            table, list(names), prefixes, max_depth=max_depth or settings.max_depth
        )
    except (DependencyError, ProgramFormatError, OSError) as e:
        click.echo(f"Dependency resolution failed: {e}", err=True)
        sys.exit(1)
    return walker, prefixes


@cli.command()
@_program_argument
@_names_argument
@_exclude_option
@_max_depth_option
@click.pass_context
def resolve(
    ctx: click.Context,
    program: str,
    names: tuple[str, ...],
    exclude: tuple[str, ...],
    max_depth: int | None,
) -> None:
    """Print the functions and extra files needed by NAMES.

    PROGRAM: Program document (.json or .msgpack).
    NAMES: Root function names.
    """
    from octdepends.models.report import CallEdge, DependencyReport, ReportMetadata

    walker, prefixes = _walk(ctx, program, names, exclude, max_depth)

    report = DependencyReport(
        functions=dict(walker.functions),
        extra_files=sorted(walker.extra_files),
        edges=[CallEdge(source=caller, target=callee) for caller, callee in walker.edges],
        metadata=ReportMetadata(roots=list(names), exclude=prefixes, version=__version__),
    )
    click.echo(report.model_dump_json(indent=2, by_alias=True))


@cli.command()
@_program_argument
@_names_argument
@_exclude_option
@_max_depth_option
@click.pass_context
def graph(
    ctx: click.Context,
    program: str,
    names: tuple[str, ...],
    exclude: tuple[str, ...],
    max_depth: int | None,
) -> None:
    """Summarise the call graph between the functions NAMES depend on.

    PROGRAM: Program document (.json or .msgpack).
    NAMES: Root function names.
    """
    from octdepends.analyzers import build_call_graph, find_call_cycles
    from octdepends.models.report import CallGraphSummary, CycleSummary

    walker, _ = _walk(ctx, program, names, exclude, max_depth)

    G = build_call_graph(walker.functions, walker.edges)
    cycles = [
        CycleSummary(
            length=len(cycle),
            files=sorted({G.nodes[name]["file"] for name in cycle}),
            functions=cycle,
        )
        for cycle in find_call_cycles(G)
    ]
    summary = CallGraphSummary(
        node_count=G.number_of_nodes(),
        edge_count=G.number_of_edges(),
        roots=[name for name in dict.fromkeys(names) if name in G],
        leaves=sorted(n for n in G.nodes if G.out_degree(n) == 0),
        cycles=cycles,
    )
    click.echo(json.dumps(summary.model_dump(), indent=2))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
