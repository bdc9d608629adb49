"""Default paths and limits for the blob decoder CLI."""
from pathlib import Path

import click

APP_NAME = "scumblob"
CONFIG_FILENAME = "config.toml"

OUTPUT_FORMATS = ("text", "json", "csv")

# Largest blob accepted from a file or stdin
MAX_BLOB_SIZE = 64 * 1024 * 1024


def get_config_path() -> Path:
    """Return the TOML config file path via click.get_app_dir."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME
