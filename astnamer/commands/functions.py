"""List functions in an ESTree document with the names they are known by."""

import json

import click
from rich.table import Table

from astnamer.config_runtime import load_runtime_config
from astnamer.loader import load_tree
from astnamer.report import collect_functions
from astnamer.ui import console
from astnamer.utils.error_handler import handle_exceptions


@click.command()
@click.argument("ast_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    default="table",
    type=click.Choice(["table", "json"]),
    help="Output format: table (human), json (machine)",
)
@handle_exceptions
def functions(ast_file: str, output_format: str):
    """List function declarations, expressions and arrows.

    Anonymous functions are named after the variable or assignment target
    they are bound to, e.g. `var bar = function () {}` is listed as bar.
    """
    config = load_runtime_config()
    records = collect_functions(load_tree(ast_file), config)

    if output_format == "json":
        console.print(json.dumps(records, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    table = Table(title=f"Functions in {ast_file}")
    table.add_column("Line", justify="right")
    table.add_column("Kind")
    table.add_column("Name", style="name")
    table.add_column("Params", justify="right")
    table.add_column("Inside")
    for record in records:
        table.add_row(
            str(record["line"]),
            record["kind"],
            record["name"],
            str(record["params"]),
            record["in_function"],
        )
    console.print(table)
