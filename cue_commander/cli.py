"""Command-line interface for cue-commander."""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from pathlib import Path

import click

from cue_commander import __version__
from cue_commander.config import Config, load_config
from cue_commander.cue.strictness import Strictness
from cue_commander.utils.output import (
    configure_logging,
    error,
    set_color,
    set_verbosity,
    warning,
)

STRICTNESS_CHOICE = click.Choice([level.value for level in Strictness], case_sensitive=False)


@dataclass
class Context:
    """State shared by every command of one invocation."""

    config: Config | None = None
    verbose: bool = False
    debug: bool = False
    quiet: bool = False

    def get_config(self) -> Config:
        """Return the loaded config, or defaults when run without the root group."""
        if self.config is None:
            self.config = Config()
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def _color_wanted(no_color: bool, config: Config | None) -> bool:
    if no_color or "NO_COLOR" in os.environ:
        return False
    return config is None or config.colored_output


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    help="Config file to use (default: ~/.config/cue-commander/config.toml)",
)
@click.option(
    "--strictness",
    "-s",
    type=STRICTNESS_CHOICE,
    default=None,
    help="How to treat unknown types, ids over 99 and unrecognised lines (overrides config)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Show per-file progress")
@click.option("--debug", is_flag=True, help="Show parser diagnostics (implies --verbose)")
@click.option("--quiet", "-q", is_flag=True, help="Only print errors")
@click.version_option(version=__version__, prog_name="cue-commander")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    strictness: str | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """cue-commander: Read, write and combine CUE sheets for disc images.

    Parses FILE / TRACK / INDEX records of .cue files, converts between
    MM:SS:FF timestamps and byte offsets, and merges multi-FILE sheets
    into a single FILE.

    Settings are read from ~/.config/cue-commander/config.toml unless
    --config names another file.

    Examples:

        # Show the tracks of a cue sheet
        cue-commander cue show game.cue

        # Merge a multi-bin cue sheet into one
        cue-commander cue combine game.cue merged.cue
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    set_verbosity(verbose=verbose, debug=debug)
    configure_logging(quiet=quiet)
    set_color(_color_wanted(no_color, None))

    try:
        config, config_warnings = load_config(config_path)
    except Exception as e:
        error(str(e))
        ctx.exit(1)
        return

    if strictness is not None:
        config.strictness = Strictness.from_name(strictness)
    app_ctx.config = config
    set_color(_color_wanted(no_color, config))

    if quiet:
        return
    for message in config_warnings:
        warning(message)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command, e.g. `help cue combine`."""
    target: click.Command = cli
    for name in command:
        sub = target.get_command(ctx, name) if isinstance(target, click.Group) else None
        if sub is None:
            error(f"Unknown command: {' '.join(command)}")
            ctx.exit(1)
            return
        target = sub
    click.echo(target.get_help(ctx))


COMMAND_MODULES = ("cue", "init_config")


def register_commands() -> None:
    """Attach the ``cli`` of each command module to the top-level group.

    A module still being imported (it imported this one first) has no
    ``cli`` yet and is skipped.
    """
    for name in COMMAND_MODULES:
        module = importlib.import_module(f"cue_commander.commands.{name}")
        command = getattr(module, "cli", None)
        if isinstance(command, click.Command):
            cli.add_command(command)


register_commands()
