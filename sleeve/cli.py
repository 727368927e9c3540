"""Click-based CLI for sleeve - build-tool helpers around Java properties."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional, TextIO

import click
import yaml
from pydantic import ValidationError

from sleeve import __version__
from sleeve.config import (
    SleeveConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from sleeve.output import Console, create_console
from sleeve.properties import ParseError, dump_properties, load_properties, to_properties
from sleeve.runner import CommandError, run_python
from sleeve.utils.mapping import exclude, only
from sleeve.utils.paths import normalize_path, recursive_with_dot_files, relative_path, replace_extension
from sleeve.utils.platform import current_host

# Keys are written unescaped, so nothing the parser treats specially may appear in them
_UNSAFE_KEY = re.compile(r"[=:\s\\]|^[#!]")


def _get_config(ctx: click.Context) -> SleeveConfig:
    """Load configuration once per invocation, exiting on errors."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = load_config(obj.get("config_path"))
        except (FileNotFoundError, ValueError, ValidationError) as e:
            create_console().print_error(str(e))
            sys.exit(1)
    return obj["config"]


def _get_console(ctx: click.Context, verbose: bool = False) -> Console:
    config = _get_config(ctx)
    return create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)


def _scalar_text(value: object) -> str:
    """Render a YAML scalar the way Java properties spell it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@click.group()
@click.version_option(version=__version__, prog_name="sleeve")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.config/sleeve/config.yaml or $SLEEVE_CONFIG)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """sleeve - build-tool helpers around Java properties files.

    \b
    Properties: sleeve props encode|decode
    Paths:      sleeve path normalize|relative|ext|files
    Python:     sleeve run
    """
    ctx.ensure_object(dict)["config_path"] = config_path


@cli.command("platform")
@click.pass_context
def show_platform(ctx: click.Context) -> None:
    """Show the detected host platform."""
    _get_console(ctx).print_platform(current_host())


# =============================================================================
# Properties
# =============================================================================


@cli.group()
def props() -> None:
    """Convert between YAML mappings and Java properties files."""
    pass


@props.command("encode")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the properties file here instead of stdout",
)
@click.pass_context
def props_encode(ctx: click.Context, source: TextIO, output: Optional[Path]) -> None:
    """Encode a flat YAML mapping as Java properties.

    Keys are written in sorted order. Use - to read from stdin.
    Keys may not contain =, :, whitespace or backslashes, nor start
    with # or !.

    \b
    Example:
        sleeve props encode build.yaml -o build.properties
    """
    config = _get_config(ctx)
    console = _get_console(ctx)

    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        console.print_error(f"Invalid YAML: {e}")
        sys.exit(1)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        console.print_error("Input must be a YAML mapping")
        sys.exit(1)

    nested = sorted(str(key) for key, value in data.items() if isinstance(value, (dict, list)))
    if nested:
        console.print_error(f"Nested values are not supported: {', '.join(nested)}")
        sys.exit(1)

    unsafe = sorted(str(key) for key in data if _UNSAFE_KEY.search(str(key)))
    if unsafe:
        console.print_error(f"Keys would not survive unescaped: {', '.join(map(repr, unsafe))}")
        sys.exit(1)

    mapping = {str(key): _scalar_text(value) for key, value in data.items()}

    if output:
        dump_properties(mapping, output, encoding=config.properties.encoding)
        console.print_success(f"Wrote {len(mapping)} properties to {output}")
    else:
        console.print_raw(to_properties(mapping))


@props.command("decode")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--only", "only_keys", multiple=True, help="Keep only this key (repeatable)")
@click.option("--exclude", "exclude_keys", multiple=True, help="Drop this key (repeatable)")
@click.option("--table", "as_table", is_flag=True, help="Show a table instead of YAML")
@click.pass_context
def props_decode(
    ctx: click.Context,
    source: Path,
    only_keys: tuple[str, ...],
    exclude_keys: tuple[str, ...],
    as_table: bool,
) -> None:
    """Decode a Java properties file and print it as YAML."""
    config = _get_config(ctx)
    console = _get_console(ctx)

    try:
        properties = load_properties(source, encoding=config.properties.encoding)
    except ParseError as e:
        console.print_error(f"{source}: {e}")
        sys.exit(1)
    except UnicodeDecodeError as e:
        console.print_error(f"{source}: not valid {config.properties.encoding}: {e.reason}")
        sys.exit(1)

    if only_keys:
        properties = only(properties, *only_keys)
    if exclude_keys:
        properties = exclude(properties, *exclude_keys)

    if as_table:
        console.print_properties(properties, title=source.name)
    elif properties:
        console.print_raw(yaml.dump(properties, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip("\n"))


# =============================================================================
# Paths
# =============================================================================


@cli.group()
def path() -> None:
    """Path helpers."""
    pass


@path.command("normalize")
@click.argument("target")
@click.argument("dirs", nargs=-1)
@click.pass_context
def path_normalize(ctx: click.Context, target: str, dirs: tuple[str, ...]) -> None:
    """Print TARGET as an absolute path, resolved against DIRS."""
    _get_console(ctx).print_raw(normalize_path(target, *dirs))


@path.command("relative")
@click.argument("to")
@click.argument("start", required=False, default=".")
@click.pass_context
def path_relative(ctx: click.Context, to: str, start: str) -> None:
    """Print the path to TO starting from START."""
    _get_console(ctx).print_raw(relative_path(to, start))


@path.command("ext")
@click.argument("filename")
@click.argument("extension")
@click.pass_context
def path_ext(ctx: click.Context, filename: str, extension: str) -> None:
    """Print FILENAME with its extension replaced by EXTENSION."""
    _get_console(ctx).print_raw(replace_extension(filename, extension))


@path.command("files")
@click.argument("dirs", nargs=-1, required=True, type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def path_files(ctx: click.Context, dirs: tuple[Path, ...]) -> None:
    """List everything below DIRS, dotfiles included."""
    _get_console(ctx).print_paths(recursive_with_dot_files(*dirs))


# =============================================================================
# Python runner
# =============================================================================


@cli.command("run", context_settings={"ignore_unknown_options": True})
@click.option("--module", "-m", help="Run a library module as a script")
@click.option("--sudo/--no-sudo", default=None, help="Run as the interpreter's owner when needed")
@click.option("--verbose", "-v", is_flag=True, help="Echo the command before running it")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, module: Optional[str], sudo: Optional[bool], verbose: bool, args: tuple[str, ...]) -> None:
    """Run the Python interpreter with ARGS.

    \b
    Example:
        sleeve run -m pip -- install -e .
    """
    config = _get_config(ctx)
    console = _get_console(ctx, verbose)

    try:
        run_python(
            *args,
            module=module,
            sudo=config.runner.sudo if sudo is None else sudo,
            verbose=verbose or config.runner.verbose,
            interpreter=config.runner.interpreter,
            console=console,
        )
    except CommandError as e:
        console.print_error(e.message)
        # Signal deaths (negative codes) and unknown status map to 1
        sys.exit(e.returncode if e.returncode and e.returncode > 0 else 1)


# =============================================================================
# Configuration
# =============================================================================


@cli.group()
def config() -> None:
    """Manage sleeve configuration."""
    pass


@config.command("init")
@click.pass_context
def config_init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    console = create_console()
    config_path, created = ensure_config_exists(ctx.obj.get("config_path"))
    if created:
        console.print_success(f"Created configuration: {config_path}")
    else:
        console.print_warning(f"Configuration already exists: {config_path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    cfg = _get_config(ctx)
    _get_console(ctx).print_raw(
        yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False, sort_keys=False).rstrip("\n")
    )


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    console = create_console()
    config_path = ctx.obj.get("config_path") or get_config_path()
    valid, errors = validate_config_file(config_path)
    if valid:
        console.print_success(f"Configuration is valid: {config_path}")
        return

    for error in errors:
        console.print_error(error)
    sys.exit(1)


@config.command("path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file location."""
    create_console().print_raw(str(ctx.obj.get("config_path") or get_config_path()))


if __name__ == "__main__":
    cli()
