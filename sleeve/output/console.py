# Sleeve Console Output
# Rich-based console output for user-friendly display

from collections.abc import Mapping, Sequence
from pathlib import Path

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table

from sleeve.utils.platform import HostPlatform


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for CLI commands and the process runner.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_command(self, cmd: Sequence[str]) -> None:
        """Echo a command line before it runs."""
        self._console.print(f"[dim]{escape(' '.join(cmd))}[/dim]")

    def print_raw(self, text: str) -> None:
        """Print text without markup or highlighting."""
        self._console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def print_platform(self, host: HostPlatform) -> None:
        """
        Print host platform details.

        Args:
            host: Detected host platform.
        """
        table = Table(title="Host Platform", show_header=True, header_style="bold")
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        table.add_row("Host OS", escape(host.host_os))
        table.add_row("Platform", host.name)
        table.add_row("Windows family", "[green]yes[/green]" if host.windows else "[dim]no[/dim]")
        table.add_row("JVM hosted", "[green]yes[/green]" if host.java else "[dim]no[/dim]")

        self._console.print(table)

    def print_properties(self, properties: Mapping[str, str], *, title: str = "Properties") -> None:
        """
        Print a property map as a table, sorted by key.

        Args:
            properties: Keys and values to show.
            title: Table title.
        """
        if not properties:
            self.print_info("No properties")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for key in sorted(properties):
            table.add_row(escape(key), escape(properties[key]))

        self._console.print(table)

    def print_paths(self, paths: Sequence[Path]) -> None:
        """Print one path per line."""
        for path in paths:
            self.print_raw(str(path))


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
