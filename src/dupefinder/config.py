"""Configuration loading, merging, and interactive creation for the CLI."""

from __future__ import annotations

import logging
import os
import pathlib
import tomllib

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"

_DEFAULTS: dict[str, object] = {
    "recursive": False,
    "skip_empty": False,
    "progress": True,
    "workers": 1,
    "chunk_size": 64 * 1024,
}

_BOOL_KEYS = {"recursive", "skip_empty", "progress"}
_INT_KEYS = {"workers", "chunk_size"}


def _config_dir() -> pathlib.Path:
    """Return the dupefinder config directory."""
    base = pathlib.Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
    return base / "dupefinder"


def load_config(config_dir: pathlib.Path | None = None) -> dict:
    """Load config.toml and return its contents as a dict.

    Returns {} if no file exists or on parse error.
    """
    if config_dir is None:
        config_dir = _config_dir()
    path = config_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"ignoring unreadable config {path}: {e}")
        return {}


def merge_config_into_args(args, config: dict) -> None:
    """Three-layer merge: CLI > config > hardcoded defaults.

    Options left unset on the command line are None on *args*.
    Mutates *args* in place.
    """
    for key in _BOOL_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        if isinstance(cfg_val, bool):
            setattr(args, key, cfg_val)
        else:
            setattr(args, key, _DEFAULTS[key])

    for key in _INT_KEYS:
        if getattr(args, key, None) is not None:
            continue
        cfg_val = config.get(key)
        # bool is an int subclass; "workers = true" is not a count
        if isinstance(cfg_val, int) and not isinstance(cfg_val, bool) and cfg_val >= 1:
            setattr(args, key, cfg_val)
            continue
        if cfg_val is not None:
            logger.warning(f"invalid value for {key!r} in config: {cfg_val!r}, using {_DEFAULTS[key]}")
        setattr(args, key, _DEFAULTS[key])


def create_config_interactive(
    config_dir: pathlib.Path | None = None,
    input_fn=input,
    print_fn=print,
) -> pathlib.Path:
    """Interactively create or update config.toml.

    Returns the path to the written config file.
    """
    if config_dir is None:
        config_dir = _config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    existing = load_config(config_dir)

    settings: list[tuple[str, str]] = [
        ("recursive", "Scan subdirectories (true/false)"),
        ("skip_empty", "Ignore empty files (true/false)"),
        ("progress", "Show progress bar (true/false)"),
        ("workers", "Hashing threads"),
        ("chunk_size", "Read chunk size in bytes"),
    ]

    result: dict[str, object] = {}

    for key, label in settings:
        default = existing.get(key, _DEFAULTS[key])
        shown = str(default).lower() if isinstance(default, bool) else str(default)
        value = input_fn(f"  {label} [{shown}]: ").strip()
        if not value:
            result[key] = default
        elif key in _BOOL_KEYS:
            result[key] = value.lower() in ("true", "1", "yes")
        else:
            try:
                result[key] = max(1, int(value))
            except ValueError:
                print_fn(f"  Not a number: {value!r}, keeping {shown}")
                result[key] = default

    path = config_dir / CONFIG_FILENAME
    path.write_text(_to_toml(result))
    print_fn(f"Configuration saved to {path}")
    return path


def _to_toml(data: dict) -> str:
    """Serialize a flat dict of bools and ints to TOML format."""
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, bool):
            lines.append(f"{key} = {str(value).lower()}")
        elif value is None:
            continue
        else:
            lines.append(f"{key} = {value}")
    return "\n".join(lines) + "\n" if lines else ""
