"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from timeblock_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Typer group that offers close matches for a mistyped subcommand.

    ``timeblock tasks lsit`` prints "Did you mean this? list" and exits 2
    instead of Click's bare usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            attempted = args[0]
            visible = [
                name for name, command in self.commands.items() if not command.hidden
            ]
            suggestions = get_close_matches(attempted, visible, n=3, cutoff=0.6)
            if not suggestions:
                raise

            console = get_console(highlight=False)
            console.print(
                f'[bold red]Error:[/bold red] unknown command "{attempted}" '
                f'for "{ctx.command_path}"'
            )
            label = "this" if len(suggestions) == 1 else "one of these"
            console.print(f"[yellow]Did you mean {label}?[/yellow]")
            for suggestion in suggestions:
                console.print(f"    {suggestion}")
            raise typer.Exit(2) from e
