"""astnamer CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

from pathlib import Path

import click

from astnamer import __version__
from astnamer.utils.logging import configure_file_logging, logger


@click.group()
@click.version_option(version=__version__, prog_name="astnamer")
@click.help_option("-h", "--help")
@click.option(
    "--log-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Also write DEBUG logs to DIR/astnamer.log",
)
@click.pass_context
def cli(ctx, log_dir):
    """astnamer - resolve names in ESTree syntax trees

    \b
    Input is ESTree JSON as produced by espree/ESLint, acorn or esprima,
    either bare or wrapped as {"type": "eslint_ast", "tree": ...}.

    \b
    QUICK START:
      astnamer calls app.ast.json              # Every call with its names
      astnamer functions app.ast.json          # Every function and its name
      astnamer name app.ast.json --line 12     # Resolve nodes at a position

    \b
    ENVIRONMENT:
      ASTNAMER_LOG_LEVEL=DEBUG                 # Verbose logging
      ASTNAMER_LIMITS_MAX_DEPTH=2000           # Deeper trees
    """
    if log_dir:
        handler_id = configure_file_logging(Path(log_dir))
        ctx.call_on_close(lambda: logger.remove(handler_id))


from astnamer.commands.calls import calls
from astnamer.commands.functions import functions
from astnamer.commands.name import name

cli.add_command(calls)
cli.add_command(functions)
cli.add_command(name)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
