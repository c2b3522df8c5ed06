import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from arithgraph._arith import OverflowPolicy
from arithgraph._builder import Builder
from arithgraph._errors import GraphError

from .config import ConfigError, get_config
from .render import render_constraint_report, render_graph_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

OverflowOption = Annotated[
    OverflowPolicy | None,
    typer.Option("--overflow", help="Overflow policy; defaults to the pyproject.toml setting, else wrap"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Arithgraph debug CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _resolve_overflow(overflow: OverflowPolicy | None) -> OverflowPolicy:
    """Pick the overflow policy from the CLI option or the project config."""
    if overflow is not None:
        return overflow
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug("Using overflow policy from config: %s", config.overflow)
    return config.overflow


@app.command()
def sqrt(
    *,
    x: Annotated[int, typer.Option("--x", help="Value of the input node x")] = 9,
    hint: Annotated[int, typer.Option("--hint", help="Claimed square root of x + 7")] = 4,
    overflow: OverflowOption = None,
) -> None:
    """Hint the square root of x + 7 and check it against the graph."""
    builder = Builder(overflow=_resolve_overflow(overflow))

    try:
        x_node = builder.init()
        seven = builder.constant(7)
        x_plus_seven = builder.add(x_node, seven)
        root = builder.hint(hint, x_plus_seven)
        computed_sq = builder.mul(root, root)

        render_graph_table(builder.nodes, out_console, title="Before filling")
        builder.fill_nodes(x_node, x)
        render_graph_table(builder.nodes, out_console, title="After filling")

        report = builder.check_constraints()
        literal = builder.assert_equal(root, computed_sq)
        linked = builder.assert_hint(root, computed_sq)
    except GraphError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_constraint_report(report, out_console)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Comparison")
    table.add_column("Result", justify="center")
    table.add_row(f"hint ({root}) == hint * hint ({computed_sq})", _format_bool(literal))
    table.add_row(f"x + 7 ({x_plus_seven}) == hint * hint ({computed_sq})", _format_bool(linked))
    out_console.print(Panel(table, title="[bold]Hint Checks[/bold]", border_style="cyan"))

    if not (report.success and linked):
        raise typer.Exit(code=1)


@app.command()
def polynomial(
    *,
    x: Annotated[int, typer.Option("--x", help="Value of the input node x")] = 6,
    overflow: OverflowOption = None,
) -> None:
    """Evaluate x^2 + x + 5."""
    builder = Builder(overflow=_resolve_overflow(overflow))

    try:
        x_node = builder.init()
        x_squared = builder.mul(x_node, x_node)
        five = builder.constant(5)
        x_squared_plus_5 = builder.add(x_squared, five)
        y = builder.add(x_squared_plus_5, x_node)
        builder.fill_nodes(x_node, x)
    except GraphError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_graph_table(builder.nodes, out_console)
    out_console.print(f"[bold]x^2 + x + 5[/bold] at x = {x}: [green]{builder.get(y).output}[/green]")


def _format_bool(value: bool) -> str:  # noqa: FBT001
    return "[green]✓ PASS[/green]" if value else "[red]✗ FAIL[/red]"


def main() -> None:
    app()
