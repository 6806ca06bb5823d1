# -------------------------------------
# token sources
# -------------------------------------
"""
Load raw class tokens from files.

Two sources are supported:
  - YAML config files with a "classes:" mapping of named class sets
  - plain text files, one token per line ("#" comments, blank lines skipped)
"""
from pathlib import Path
from typing import Any

import yaml

from .expander import expand


class ConfigError(ValueError):
    pass


# Module-level cache for loaded config files
_CONFIG_CACHE: dict[str, dict[str, Any]] = {}


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML config file and return the parsed data.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML data as a dict (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the file is not valid YAML or not a mapping
    """
    path = Path(path)
    path_str = str(path.resolve())

    if path_str in _CONFIG_CACHE:
        return _CONFIG_CACHE[path_str]

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in '{path}': {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file '{path}' must contain a mapping")

    _CONFIG_CACHE[path_str] = data
    return data


def clear_cache():
    """Clear the config file cache."""
    _CONFIG_CACHE.clear()


def class_sets(path: str | Path) -> dict[str, list[str]]:
    """
    Return the "classes:" section as {set name: [raw token, ...]}.

    A set given as a single string is a one-token set.
    """
    data = load_config(path)
    section = data.get("classes")
    if not isinstance(section, dict):
        raise ConfigError(f"'{path}' has no 'classes' mapping")

    out: dict[str, list[str]] = {}
    for name, value in section.items():
        if isinstance(value, str):
            out[str(name)] = [value]
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            out[str(name)] = list(value)
        else:
            raise ConfigError(f"class set '{name}' must be a string or a list of strings")
    return out


def get_class_set(path: str | Path, name: str) -> list[str]:
    """Raw tokens of one named class set."""
    sets = class_sets(path)
    if name not in sets:
        raise KeyError(f"no class set named '{name}' in '{path}'")
    return sets[name]


def expand_class_sets(path: str | Path) -> dict[str, list[str]]:
    """Expand every class set in a config file, keeping file order."""
    return {name: expand(tokens) for name, tokens in class_sets(path).items()}


def read_tokens(path: str | Path) -> list[str]:
    """Read raw tokens from a text file, one per line."""
    tokens: list[str] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            tokens.append(line)
    return tokens
