"""CLI color utilities built on rich."""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Initialize rich console with custom theme
custom_theme = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "dim": "dim white",
    "highlight": "bold cyan",
    "command": "bold magenta",
    "target": "bold blue",
    "created": "green",
    "updated": "cyan",
    "deleted": "red",
})

console = Console(theme=custom_theme, highlight=False)


def print_error(text: str):
    """Print error message."""
    console.print(f"[error][X][/error] {escape(text)}")


def print_warning(text: str):
    """Print warning message."""
    console.print(f"[warning][!][/warning] {escape(text)}")


def print_info(text: str):
    """Print info message."""
    console.print(f"[info]\\[i][/info] {escape(text)}")


def print_command(text: str):
    """Print command example."""
    console.print(f"[command]$[/command] [dim]{escape(text)}[/dim]")
