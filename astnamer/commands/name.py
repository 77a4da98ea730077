"""Resolve every node that starts at a given source position."""

import json
import sys

import click
from rich.table import Table

from astnamer.config_runtime import load_runtime_config
from astnamer.loader import load_tree
from astnamer.report import describe_node, find_nodes_at
from astnamer.ui import console, err_console
from astnamer.utils.error_handler import handle_exceptions
from astnamer.utils.exit_codes import ExitCodes


def _show(value) -> str:
    if value is None:
        return "-"
    if value == "":
        return '""'
    return str(value)


@click.command()
@click.argument("ast_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--line", required=True, type=int, help="1-based line number")
@click.option("--column", default=None, type=int, help="0-based column (default: any)")
@click.option(
    "--format",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    help="Output format: table (human), json (machine)",
)
@handle_exceptions
def name(ast_file: str, line: int, column: int | None, output_format: str):
    """Show identifier, full, partial and enclosing names for nodes at a position.

    Exits with code 3 when no node starts at the position.
    """
    global_name = load_runtime_config()["report"]["global_name"]
    nodes = find_nodes_at(load_tree(ast_file), line, column)

    if not nodes:
        where = f"{line}:{column}" if column is not None else str(line)
        err_console.print(
            f"[warning]No node starts at {where}: {ExitCodes.get_description(ExitCodes.NO_MATCH)}[/warning]",
            highlight=False,
        )
        sys.exit(ExitCodes.NO_MATCH)

    records = [describe_node(node, global_name) for node in nodes]

    if output_format == "json":
        console.print(json.dumps(records, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    table = Table(title=f"Nodes at {ast_file}:{line}")
    table.add_column("Col", justify="right")
    table.add_column("Type")
    table.add_column("Identifier")
    table.add_column("Node name")
    table.add_column("Full name", style="name")
    table.add_column("Partial")
    table.add_column("Function")
    for record in records:
        table.add_row(
            str(record["column"]),
            record["type"],
            _show(record["identifier"]),
            _show(record["node_name"]),
            _show(record["full_name"]),
            _show(record["partial_name"]),
            record["in_function"],
        )
    console.print(table)
