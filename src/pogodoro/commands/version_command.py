"""Command 'version' of pogodoro"""

import typer

from pogodoro import __version__
from pogodoro.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(f"pogodoro {__version__}")
