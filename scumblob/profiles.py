"""Key presets: named lists of property keys stored in the TOML config."""
from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

import click

from scumblob.config import get_config_path
from scumblob.extractors import BASE_ATTRIBUTE_KEYS, BODY_SIMULATION_KEYS

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_PRESET_NAME_RE = re.compile(r"^[a-zA-Z0-9_-]+$")

BUILTIN_PRESETS: dict[str, list[str]] = {
    "body_simulation": list(BODY_SIMULATION_KEYS),
    "base_attributes": list(BASE_ATTRIBUTE_KEYS),
}


@dataclass
class Preset:
    name: str
    keys: list[str]
    builtin: bool = False


@dataclass
class Config:
    default_preset: str | None = None
    presets: dict[str, Preset] = field(default_factory=dict)

    def all_presets(self) -> dict[str, Preset]:
        """Built-in presets followed by user presets."""
        merged = {
            name: Preset(name=name, keys=list(keys), builtin=True)
            for name, keys in BUILTIN_PRESETS.items()
        }
        merged.update(self.presets)
        return merged


def load_config(path: Path | None = None) -> Config:
    """Read TOML config. Returns empty Config if file missing."""
    path = path or get_config_path()
    if not path.exists():
        return Config()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise click.ClickException(f"Invalid config file {path}: {e}") from e

    config = Config(default_preset=data.get("default_preset"))
    for name, info in data.get("presets", {}).items():
        keys = info.get("keys", [])
        if not isinstance(keys, list) or not all(isinstance(k, str) and k for k in keys):
            raise click.ClickException(
                f"Invalid config file {path}: presets.{name}.keys must be a list of non-empty strings"
            )
        config.presets[name] = Preset(name=name, keys=keys)
    return config


def _toml_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write user presets to TOML. Built-in presets are never written."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    if config.default_preset:
        lines.append(f"default_preset = {_toml_string(config.default_preset)}")
    lines.append("")

    for name, preset in config.presets.items():
        lines.append(f"[presets.{_toml_string(name)}]")
        lines.append("keys = [" + ", ".join(_toml_string(k) for k in preset.keys) + "]")
        lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def validate_preset_name(name: str) -> bool:
    """Check that a preset name is a valid TOML bare key."""
    return bool(_PRESET_NAME_RE.match(name))


def resolve_keys(keys: tuple[str, ...] | list[str], preset_name: str | None,
                 config: Config | None = None) -> list[str]:
    """Resolve keys to decode: --key > --preset > default preset.

    Raises click.UsageError with a helpful message if nothing resolves.
    """
    if keys:
        return list(keys)

    config = config if config is not None else load_config()
    presets = config.all_presets()

    name = preset_name or config.default_preset
    if name is None:
        raise click.UsageError(
            "No keys provided. Either:\n"
            "  1. Pass one or more --key <name>\n"
            "  2. Pass --preset <name> (see 'scumblob preset list')\n"
            "  3. Set a default with 'scumblob preset add <name> <keys...> --default'"
        )

    preset = presets.get(name)
    if preset is None:
        available = ", ".join(presets) or "(none)"
        raise click.UsageError(
            f"Preset '{name}' not found. Available presets: {available}"
        )
    return list(preset.keys)
