"""List every call site in an ESTree document with its resolved names."""

import json

import click
from rich.table import Table

from astnamer.config_runtime import load_runtime_config
from astnamer.loader import load_tree
from astnamer.report import collect_calls
from astnamer.ui import console
from astnamer.utils.error_handler import handle_exceptions
from astnamer.utils.logging import logger


def _format_arguments(arguments: list[dict]) -> str:
    parts = []
    for arg in arguments:
        label = arg["name"] or f"<{arg['type']}>"
        if not arg["operand"]:
            label += " (not operand)"
        parts.append(label)
    return ", ".join(parts)


@click.command()
@click.argument("ast_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    help="Output format: table (human), json (machine)",
)
@click.option("--limit", default=None, type=int, help="Max rows (default from config report.max_rows)")
@handle_exceptions
def calls(ast_file: str, output_format: str, limit: int | None):
    """List call expressions with full, partial and enclosing function names.

    \b
    Example:
      astnamer calls server.ast.json
      astnamer calls server.ast.json --format json
    """
    config = load_runtime_config()
    if limit is None:
        limit = config["report"]["max_rows"]

    root = load_tree(ast_file)
    records = collect_calls(root, config)
    logger.debug("Found {count} calls in {path}", count=len(records), path=ast_file)

    shown = records[:limit]
    if output_format == "json":
        console.print(json.dumps(shown, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    table = Table(title=f"Calls in {ast_file}")
    table.add_column("Line", justify="right")
    table.add_column("Full name", style="name")
    table.add_column("Partial")
    table.add_column("Function")
    table.add_column("Arguments")
    for record in shown:
        table.add_row(
            str(record["line"]),
            record["full_name"] or "-",
            record["partial_name"] if record["partial_name"] is not None else "-",
            record["in_function"],
            _format_arguments(record["arguments"]),
        )
    console.print(table)

    if len(records) > limit:
        console.print(f"[dim]... {len(records) - limit} more (use --limit)[/dim]")
