"""YAML configuration loading with include directive support."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic_settings import BaseSettings, YamlConfigSettingsSource

from skillcoach.core.log import logger

DEFAULTS_FILE = Path(__file__).parent.parent / "defaults" / "default.yaml"


def cli_includes(argv: list[str] | None = None) -> list[str]:
    """Collect `--include FILE` values from the command line."""
    argv = sys.argv if argv is None else argv
    includes = []
    i = 1
    while i < len(argv):
        if argv[i] == "--include" and i + 1 < len(argv):
            includes.append(argv[i + 1])
            i += 1
        i += 1
    return includes


class YamlWithIncludesSettingsSource(YamlConfigSettingsSource):
    """YAML settings source layering several config files.

    Deep merges, lowest priority first:
        package defaults < user config < project config < --include files

    Any file may pull in others with an `include:` key.
    """

    def __init__(self, settings_cls: type[BaseSettings], yaml_file=None):
        includes = cli_includes()
        base = yaml_file or settings_cls.model_config.get("yaml_file")
        if base and includes:
            yaml_file = ([base] if isinstance(base, (str, os.PathLike)) else list(base)) + includes
        elif includes:
            yaml_file = includes
        else:
            yaml_file = base
        super().__init__(settings_cls, yaml_file)

    def _read_files(self, files, *args, **kwargs):  # noqa: ARG002
        files_to_load = [
            DEFAULTS_FILE,
            Path(user_config_dir("skillcoach", appauthor=False)) / "skillcoach.yaml",
        ]
        if files:
            if isinstance(files, (str, os.PathLike)):
                files = [files]
            files_to_load.extend(Path(f).expanduser() for f in files)

        result: dict = {}
        for file_path in files_to_load:
            if file_path.is_file():
                logger.debug("Loading configuration", file=str(file_path))
                data = self._load_file_recursive(file_path, set())
                result = deep_merge(result, data)
            else:
                logger.spew("Configuration file not found (skipping)", file=str(file_path))
        return result

    def _load_file_recursive(self, filepath: Path, visited: set[Path]) -> dict:
        """Load one file, resolving its include: directives first.

        Raises:
            ValueError: If an include cycle is found
        """
        filepath = filepath.resolve()
        if filepath in visited:
            raise ValueError(f"Circular include: {filepath}")
        visited.add(filepath)

        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if "include" in data:
            includes = data.pop("include")
            if isinstance(includes, str):
                includes = [includes]
            for inc in includes:
                inc_path = Path(inc)
                if not inc_path.is_absolute():
                    inc_path = (filepath.parent / inc_path).resolve()
                included = self._load_file_recursive(inc_path, visited.copy())
                # Including file wins over what it includes
                data = deep_merge(included, data)

        return data


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base; override wins."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
