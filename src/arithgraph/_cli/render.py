"""Rich rendering utilities for graph inspection commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from arithgraph._node import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from arithgraph._eval import ConstraintReport
    from arithgraph._node import Node


def _get_kind_style(kind: NodeKind) -> str:
    """Get the Rich style for a node kind."""
    match kind:
        case NodeKind.INPUT:
            return "blue"
        case NodeKind.CONSTANT:
            return "magenta"
        case NodeKind.HINT:
            return "yellow"
        case NodeKind.ADD | NodeKind.MUL:
            return "green"
        case _:
            return "white"


def _format_operands(node: Node) -> str:
    lhs, rhs = node.inputs
    if lhs is not None and rhs is not None:
        return f"{lhs}, {rhs}"
    if node.hint_target is not None:
        return f"-> {node.hint_target}"
    return ""


def render_graph_table(nodes: tuple[Node, ...], console: Console, *, title: str | None = None) -> None:
    """Render graph nodes as a Rich table.

    Args:
        nodes: Node snapshots in index order.
        console: Rich Console to output to.
        title: Optional table title.

    """
    table = Table(show_header=True, header_style="bold cyan", title=title)
    table.add_column("Id", justify="right")
    table.add_column("Kind")
    table.add_column("Operands", style="dim")
    table.add_column("Output", justify="right")

    for node in nodes:
        kind_style = _get_kind_style(node.kind)
        output = "[dim]-[/dim]" if node.output is None else str(node.output)
        table.add_row(
            str(node.id),
            f"[{kind_style}]{node.kind.upper()}[/{kind_style}]",
            _format_operands(node),
            output,
        )

    console.print(table)


def render_constraint_report(report: ConstraintReport, console: Console) -> None:
    """Render the result of ``check_constraints``.

    Args:
        report: The report to render.
        console: Rich Console to output to.

    """
    if report.success:
        console.print("[green]✓ All resolved operation nodes are consistent[/green]")
    else:
        console.print(f"[red]✗ {len(report.violations)} inconsistent operation node(s):[/red]")
        for violation in report.violations:
            expected = "overflow" if violation.expected is None else str(violation.expected)
            console.print(f"  [red]•[/red] node {violation.node_id}: expected {expected}, found {violation.actual}")

    if not report.complete:
        unresolved = ", ".join(str(i) for i in report.unresolved)
        console.print(f"[yellow]⚠ Unresolved operation nodes: {unresolved}[/yellow]")
