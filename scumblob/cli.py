"""Click CLI for decoding property blobs from SCUM save databases."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import BinaryIO, Optional

import click

from scumblob.config import MAX_BLOB_SIZE, OUTPUT_FORMATS, get_config_path
from scumblob.profiles import (
    Config,
    Preset,
    load_config,
    resolve_keys,
    save_config,
    validate_preset_name,
)

logger = logging.getLogger(__name__)

_HEX_WRAPPER_RE = re.compile(r"^[xX]'(.*)'$", re.DOTALL)


class Context:
    """Holds the config path and lazily loaded config."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or get_config_path()
        self._config: Config | None = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config


pass_ctx = click.make_pass_decorator(Context)


def parse_hex(text: str) -> bytes:
    """Parse hex text as printed by SELECT hex(col), with optional 0x / X'..' wrapper."""
    text = text.strip()
    m = _HEX_WRAPPER_RE.match(text)
    if m:
        text = m.group(1)
    if text[:2].lower() == "0x":
        text = text[2:]
    text = "".join(text.split())
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise click.UsageError(f"Input is not valid hex: {e}") from e


def load_blob(source: BinaryIO, hex_input: bool) -> bytes:
    """Read a blob from an open file, enforcing MAX_BLOB_SIZE."""
    data = source.read(MAX_BLOB_SIZE + 1)
    if len(data) > MAX_BLOB_SIZE:
        raise click.UsageError(
            f"Blob is larger than {MAX_BLOB_SIZE // (1024 * 1024)} MB; refusing to decode"
        )
    if hex_input:
        data = parse_hex(data.decode("ascii", errors="replace"))
    logger.debug("Loaded %d byte blob from %s", len(data), getattr(source, "name", "?"))
    return data


def format_value(value) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def emit(output: str, output_path: Optional[str]):
    if output_path:
        Path(output_path).write_text(output, encoding="utf-8")
        click.echo(f"Output written to {output_path}")
    else:
        click.echo(output, nl=not output.endswith("\n"))


_blob_argument = click.argument("blob", type=click.File("rb"))
_hex_option = click.option(
    "--hex", "hex_input", is_flag=True,
    help="Treat input as hex text (e.g. output of SELECT hex(column))",
)
_format_option = click.option(
    "--format", "fmt", type=click.Choice(OUTPUT_FORMATS), default="text",
)
_output_option = click.option(
    "--output", "-o", "output_path", type=click.Path(), default=None,
    help="Write output to a file instead of stdout",
)


@click.group()
@click.option(
    "--config", "config_path", default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to config.toml (default: per-user app dir)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log decoder details to stderr")
@click.version_option(package_name="scumblob")
@click.pass_context
def cli(ctx, config_path: Optional[Path], verbose: bool):
    """scumblob - SCUM save database property blob decoder.

    Locates named scalar properties inside serialized-object blobs
    (body simulation, vehicle ownership) and prints their values.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] - %(message)s",
    )
    ctx.obj = Context(config_path=config_path)


@cli.command()
@_blob_argument
@click.option("--key", "-k", "keys", multiple=True, help="Property key to decode (repeatable)")
@click.option("--preset", "-p", "preset_name", default=None, help="Named key preset")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any key did not decode")
@_hex_option
@_format_option
@_output_option
@pass_ctx
def decode(ctx: Context, blob: BinaryIO, keys: tuple[str, ...], preset_name: Optional[str],
           strict: bool, hex_input: bool, fmt: str, output_path: Optional[str]):
    """Decode the first occurrence of each key in BLOB (file path or -)."""
    from scumblob.blob.decoder import decode_properties
    from scumblob.blob.errors import InvalidInputError

    key_list = resolve_keys(keys, preset_name, ctx.config)
    data = load_blob(blob, hex_input)

    try:
        result = decode_properties(data, key_list)
    except InvalidInputError as e:
        raise click.UsageError(str(e)) from e

    if fmt == "json":
        from scumblob.export.json_export import export_json
        output = export_json(result)
    elif fmt == "csv":
        from scumblob.export.csv_export import export_csv
        output = export_csv(result)
    else:
        lines = [f"{'Key':<32}  {'Value':>24}", "-" * 58]
        for key, value in result.values.items():
            lines.append(f"{key:<32}  {format_value(value):>24}")
        if result.warnings:
            lines.append("")
            lines.append(f"Warnings ({len(result.warnings)}):")
            for w in result.warnings:
                lines.append(f"  {w}")
        output = "\n".join(lines)

    emit(output, output_path)

    if strict and result.warnings:
        raise click.exceptions.Exit(1)


@cli.command()
@_blob_argument
@click.argument("key")
@_hex_option
@_format_option
@_output_option
def occurrences(blob: BinaryIO, key: str, hex_input: bool, fmt: str, output_path: Optional[str]):
    """Decode every occurrence of KEY in BLOB."""
    from scumblob.blob.decoder import decode_all_occurrences
    from scumblob.blob.errors import InvalidInputError

    data = load_blob(blob, hex_input)
    try:
        found = decode_all_occurrences(data, key)
    except InvalidInputError as e:
        raise click.UsageError(str(e)) from e

    if fmt == "json":
        from scumblob.export.json_export import export_occurrences_json
        output = export_occurrences_json(key, found)
    elif fmt == "csv":
        from scumblob.export.csv_export import export_occurrences_csv
        output = export_occurrences_csv(found)
    else:
        if not found:
            output = f"No decodable occurrences of {key}."
        else:
            lines = [f"{'Offset':>10}  {'Type':<16}  {'Value':>24}", "-" * 54]
            for o in found:
                lines.append(f"0x{o.offset:08X}  {o.type_tag:<16}  {format_value(o.value):>24}")
            lines.append(f"\n{len(found)} occurrence(s)")
            output = "\n".join(lines)

    emit(output, output_path)


@cli.command()
@_blob_argument
@click.argument("marker")
@click.argument("key")
@_hex_option
def scoped(blob: BinaryIO, marker: str, key: str, hex_input: bool):
    """Decode KEY from the bytes following MARKER in BLOB."""
    from scumblob.blob.decoder import decode_after_marker
    from scumblob.blob.errors import InvalidInputError

    data = load_blob(blob, hex_input)
    try:
        value = decode_after_marker(data, marker, key)
    except InvalidInputError as e:
        raise click.UsageError(str(e)) from e

    if value is None:
        click.echo(f"{key} not found after {marker}", err=True)
        raise click.exceptions.Exit(1)
    click.echo(format_value(value))


@cli.command("types")
def list_types():
    """List the property type tags the decoder understands."""
    from scumblob.blob.types import supported_tags

    click.echo(f"{'Tag':<18}  {'Width':>5}  {'Rule':<8}")
    click.echo("-" * 35)
    for t in supported_tags():
        click.echo(f"{t.tag:<18}  {t.width:>5}  {t.rule.name:<8}")


@cli.group()
def preset():
    """Manage named key presets."""


@preset.command("list")
@pass_ctx
def preset_list(ctx: Context):
    """Show built-in and configured presets."""
    config = ctx.config
    for name, p in config.all_presets().items():
        markers = []
        if p.builtin:
            markers.append("built-in")
        if name == config.default_preset:
            markers.append("default")
        suffix = f" ({', '.join(markers)})" if markers else ""
        click.echo(f"{name}{suffix}: {', '.join(p.keys)}")


@preset.command("add")
@click.argument("name")
@click.argument("keys", nargs=-1, required=True)
@click.option("--default", "make_default", is_flag=True, help="Use this preset when no keys are given")
@pass_ctx
def preset_add(ctx: Context, name: str, keys: tuple[str, ...], make_default: bool):
    """Create or replace preset NAME with KEYS."""
    from scumblob.profiles import BUILTIN_PRESETS

    if not validate_preset_name(name):
        raise click.UsageError(
            f"Invalid preset name '{name}'. Use letters, digits, hyphens, underscores."
        )
    if name in BUILTIN_PRESETS:
        raise click.UsageError(f"'{name}' is a built-in preset and cannot be replaced.")
    if any(not k for k in keys):
        raise click.UsageError("Keys must not be empty.")

    config = ctx.config
    config.presets[name] = Preset(name=name, keys=list(keys))
    if make_default:
        config.default_preset = name
    saved_path = save_config(config, ctx.config_path)
    click.echo(f"Preset '{name}' saved to {saved_path}")


@preset.command("remove")
@click.argument("name")
@pass_ctx
def preset_remove(ctx: Context, name: str):
    """Delete preset NAME."""
    config = ctx.config
    if name not in config.presets:
        raise click.UsageError(f"Preset '{name}' not found.")
    del config.presets[name]
    if config.default_preset == name:
        config.default_preset = None
    saved_path = save_config(config, ctx.config_path)
    click.echo(f"Preset '{name}' removed from {saved_path}")


def main():
    cli()


if __name__ == "__main__":
    main()
