"""Rich console utilities for notice-file-generator.

This module provides a shared Rich Console instance and the summary output
printed at the end of a run.
"""

import os

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from .models import GenerationResult

IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)

def print_summary(result: GenerationResult) -> None:
    """Print the outcome of a notice generation run."""
    table = Table(title="NOTICE Summary", show_header=True, header_style="bold")
    table.add_column("Source", style="cyan")
    table.add_column("Dependencies", justify="right")

    table.add_row("Reused from previous notice", str(len(result.reused)))
    table.add_row("Newly generated", str(len(result.generated)))
    if result.failed:
        table.add_row("[warning]Resolution failed[/warning]", f"[warning]{len(result.failed)}[/warning]")
    table.add_row("[bold]Total[/bold]", f"[bold]{result.total}[/bold]")

    console.print(table)

    if result.failed:
        console.print(
            f"[warning]Warning:[/warning] metadata could not be resolved for: {', '.join(sorted(result.failed))}"
        )
    console.print(f"[success]✓ Wrote {result.output_path}[/success]")
