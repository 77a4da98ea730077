"""Central UI handler for astnamer.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.
"""

import sys

from rich.console import Console
from rich.theme import Theme

ASTNAMER_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "name": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=ASTNAMER_THEME,
    force_terminal=sys.stdout.isatty(),
)

err_console = Console(
    theme=ASTNAMER_THEME,
    stderr=True,
    force_terminal=sys.stderr.isatty(),
)
