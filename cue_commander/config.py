"""Configuration for cue-commander.

Settings live in a TOML file::

    [cue]
    strictness = "warn"     # silent | warn | strict
    max_bytes = 102400      # largest .cue file that will be read
    encoding = "utf-8"      # omit to auto-detect

    [display]
    colored_output = true
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from cue_commander.cue.strictness import Strictness
from cue_commander.exceptions import ConfigParseError, ConfigValidationError
from cue_commander.utils.linestore import DEFAULT_MAX_BYTES

# Above this, max_bytes is almost certainly a typo
_LARGE_MAX_BYTES = 16 * 1024 * 1024


def get_default_config_path() -> Path:
    return Path.home() / ".config" / "cue-commander" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        strictness: How unknown kinds, out-of-range ids and unrecognised
            lines are handled.
        max_bytes: Largest .cue file that will be read.
        encoding: Character encoding of .cue files (None = auto-detect).
        colored_output: Whether console output uses color.
        config_path: File the settings were read from (None for defaults).
    """

    strictness: Strictness = Strictness.WARN
    max_bytes: int = DEFAULT_MAX_BYTES
    encoding: str | None = None
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Check value ranges.

        Returns:
            Warnings about suspicious but usable values.

        Raises:
            ConfigValidationError: If a value cannot be used at all.
        """
        if self.max_bytes <= 0:
            raise ConfigValidationError("cue.max_bytes", self.max_bytes, "must be positive")

        if self.max_bytes > _LARGE_MAX_BYTES:
            return [f"cue.max_bytes={self.max_bytes} is unusually large for a cue sheet"]
        return []


def _strictness(value: Any) -> Strictness:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    return Strictness.from_name(value)


def _integer(value: Any) -> int:
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError("must be an integer")
    return value


def _optional_string(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError("must be a string")
    return value


def _boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError("must be a boolean")
    return value


# (section, key) -> (Config attribute, converter)
_KEYS: dict[tuple[str, str], tuple[str, Callable[[Any], Any]]] = {
    ("cue", "strictness"): ("strictness", _strictness),
    ("cue", "max_bytes"): ("max_bytes", _integer),
    ("cue", "encoding"): ("encoding", _optional_string),
    ("display", "colored_output"): ("colored_output", _boolean),
}


def _config_from_dict(data: dict[str, Any], config_path: Path) -> Config:
    config = Config(config_path=config_path)
    for (section, key), (attribute, convert) in _KEYS.items():
        table = data.get(section, {})
        if key not in table:
            continue
        try:
            setattr(config, attribute, convert(table[key]))
        except ValueError as e:
            raise ConfigValidationError(f"{section}.{key}", table[key], str(e)) from e
    return config


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load settings from *config_path*, or the default location.

    A missing file is not an error: defaults are used.

    Returns:
        The config and a list of warning messages.

    Raises:
        ConfigParseError: If the file is not valid TOML.
        ConfigValidationError: If a value has the wrong type or range.
    """
    path = (config_path or get_default_config_path()).expanduser().resolve()

    if not path.exists():
        config = Config()
        return config, config.validate()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(path, str(e)) from e

    config = _config_from_dict(data, path)
    return config, config.validate()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Write *config* as TOML.

    Writes to *config_path*, else to where the config was loaded from,
    else to the default location. An unset encoding is left out.
    """
    path = (config_path or config.config_path or get_default_config_path()).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    cue: dict[str, Any] = {
        "strictness": config.strictness.value,
        "max_bytes": config.max_bytes,
    }
    if config.encoding is not None:
        cue["encoding"] = config.encoding

    document = {"cue": cue, "display": {"colored_output": config.colored_output}}
    path.write_text(tomli_w.dumps(document), encoding="utf-8")
