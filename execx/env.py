"""
Environment variable utilities for execx.

Environments are plain ``Dict[str, str]`` mappings. This module snapshots
the current process environment, converts between mappings and the
``KEY=VALUE`` sequences subprocess APIs use, and renders mappings for
extended error output.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from .utils.logging import log_warning

EnvMap = Dict[str, str]


def _split_pair(pair: str) -> Optional[Tuple[str, str]]:
    """Split KEY=VALUE on the first '=', or return None if there is no '='."""
    if "=" not in pair:
        return None
    key, value = pair.split("=", 1)
    return key, value


def variables() -> EnvMap:
    """Return a snapshot of the current process environment."""
    return dict(os.environ)


def parse(*pairs: str) -> EnvMap:
    """Parse KEY=VALUE strings into a mapping.

    Entries without '=' are ignored. When a key repeats, the last
    occurrence wins, matching how the child process would see it.
    """
    env_vars: EnvMap = {}
    for pair in pairs:
        split = _split_pair(pair)
        if split is not None:
            env_vars[split[0]] = split[1]
    return env_vars


def merge(*maps: Mapping[str, str]) -> EnvMap:
    """Merge mappings left to right; later entries override earlier ones."""
    merged: EnvMap = {}
    for m in maps:
        merged.update(m)
    return merged


def encode(env_vars: Mapping[str, str]) -> List[str]:
    """Encode a mapping as a sorted list of KEY=VALUE strings."""
    return [f"{key}={env_vars[key]}" for key in sorted(env_vars)]


def format_detail(env_vars: Mapping[str, str]) -> str:
    """Render a mapping one variable per line, sorted by name."""
    if not env_vars:
        return "(empty environment)\n"
    return "".join(f"{line}\n" for line in encode(env_vars))


def load_env_file(env_path: Path) -> EnvMap:
    """Load and parse a .env file.

    Parses a .env file with the following rules:
    - Lines starting with # are comments (ignored)
    - Empty lines are ignored
    - Lines with format KEY=VALUE are parsed
    - Whitespace around keys and values is stripped
    - Lines without = are ignored

    Args:
        env_path: Path to .env file

    Returns:
        Dictionary of key-value pairs from .env file, or empty dict if file
        doesn't exist or can't be read
    """
    env_vars: EnvMap = {}

    if not env_path.exists():
        return env_vars

    try:
        with open(env_path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (IOError, OSError, UnicodeDecodeError) as e:
        log_warning(f"Failed to read .env file at {env_path}: {e}")
        return {}

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        split = _split_pair(line)
        if split is None:
            continue
        key, value = split[0].strip(), split[1].strip()
        if key:
            env_vars[key] = value

    return env_vars
