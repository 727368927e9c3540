# Tests for sleeve.output.console
# Rich-based console output

from io import StringIO
from pathlib import Path

from rich.console import Console as RichConsole

from sleeve.output.console import Console, create_console
from sleeve.utils.platform import HostPlatform


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, width=120)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print(self):
        c = _make_console()
        c.print("hello world")
        assert "hello world" in _get_output(c)

    def test_print_error(self):
        c = _make_console()
        c.print_error("something failed")
        output = _get_output(c)
        assert "Error:" in output
        assert "something failed" in output

    def test_print_error_keeps_brackets(self):
        c = _make_console()
        c.print_error("Command python failed with status (1): [python x.py]")
        assert "[python x.py]" in _get_output(c)

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        output = _get_output(c)
        assert "Warning:" in output
        assert "be careful" in output

    def test_print_success(self):
        c = _make_console()
        c.print_success("all good")
        assert "all good" in _get_output(c)

    def test_print_info(self):
        c = _make_console()
        c.print_info("fyi")
        assert "fyi" in _get_output(c)

    def test_print_command(self):
        c = _make_console()
        c.print_command(["python", "-m", "pip"])
        assert "python -m pip" in _get_output(c)

    def test_print_raw_no_markup(self):
        c = _make_console()
        c.print_raw("[bold]k=v[/bold]")
        assert _get_output(c) == "[bold]k=v[/bold]\n"


class TestConsoleTables:
    """Tests for table output."""

    def test_print_platform(self):
        c = _make_console()
        c.print_platform(HostPlatform(host_os="CYGWIN_NT-10.0", name="cygwin_nt-10.0", windows=True))
        output = _get_output(c)
        assert "Host Platform" in output
        assert "CYGWIN_NT-10.0" in output
        assert "yes" in output

    def test_print_properties_sorted(self):
        c = _make_console()
        c.print_properties({"zeta": "1", "alpha": "2"})
        output = _get_output(c)
        assert output.index("alpha") < output.index("zeta")

    def test_print_properties_empty(self):
        c = _make_console()
        c.print_properties({})
        assert "No properties" in _get_output(c)

    def test_print_paths(self):
        c = _make_console()
        c.print_paths([Path("a/b"), Path("c")])
        assert _get_output(c).splitlines() == [str(Path("a/b")), "c"]


class TestCreateConsole:
    """Tests for create_console."""

    def test_defaults(self):
        c = create_console()
        assert isinstance(c, Console)
        assert c.verbose is False

    def test_verbose(self):
        assert create_console(verbose=True).verbose is True
