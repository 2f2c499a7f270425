"""init-config command: write a starter configuration file."""

from __future__ import annotations

from pathlib import Path

import click

from cue_commander.cli import STRICTNESS_CHOICE, Context, pass_context
from cue_commander.config import Config, get_default_config_path, save_config
from cue_commander.cue.strictness import Strictness
from cue_commander.utils.fileops import secure_mkdir
from cue_commander.utils.output import error, info, success


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, help="Replace an existing config file")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (default: ~/.config/cue-commander/config.toml)",
)
@click.option(
    "--strictness",
    type=STRICTNESS_CHOICE,
    default=Strictness.WARN.value,
    show_default=True,
    help="Strictness level to store",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None, strictness: str) -> None:
    """Write a config file holding the default settings.

    \b
    Examples:
      # Default location
      cue-commander init-config

    \b
      # Abort on any questionable record, config kept next to the project
      cue-commander init-config --strictness strict --output ./cue.toml
    """
    target = (output or get_default_config_path()).expanduser().resolve()

    if target.exists() and not force:
        error(f"{target} already exists", hint="Pass --force to replace it")
        raise SystemExit(1)

    # Only directories created here are made owner-only
    if not target.parent.exists():
        secure_mkdir(target.parent)

    try:
        save_config(Config(strictness=Strictness.from_name(strictness)), target)
    except OSError as e:
        error(f"Cannot write {target}: {e}")
        raise SystemExit(1) from e

    success(f"Wrote {target}")
    info("Edit it to change strictness, size limit, encoding or colors.")
