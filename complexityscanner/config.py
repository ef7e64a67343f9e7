"""
Configuration system for the complexity scanner.

Supports YAML and JSON configuration files. Values given on the command
line take precedence over values read from a file.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from complexityscanner.core.errors import ConfigError
from complexityscanner.utils.files import DEFAULT_EXCLUDED_DIRS


# Configuration file names searched for, nearest directory first
CONFIG_FILE_NAMES = [
    ".complexityscanner.yaml",
    ".complexityscanner.yml",
    ".complexityscanner.json",
]

OUTPUT_FORMATS = ("table", "json")


@dataclass
class ScanConfig:
    """
    Settings for a complexity scan.

    Example YAML config:

    ```yaml
    scan:
      threshold: 12
      exclude:
        - build
        - .tox
      fail_fast: false
      strict_parsing: false
      jobs: 4

    output:
      format: table
      summary: true
      color: true
    ```
    """
    threshold: int = 10
    output_format: str = "table"  # table, json
    summary: bool = False
    color: bool = True

    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    extra_exclude_dirs: List[str] = field(default_factory=list)

    fail_fast: bool = False
    strict_parsing: bool = False
    max_workers: int = 1

    def excluded_dirs(self) -> List[str]:
        return list(dict.fromkeys(self.exclude_dirs + self.extra_exclude_dirs))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanConfig":
        """Create a config from a dictionary, accepting the file layout shown above."""
        data = dict(data)

        if isinstance(data.get("scan"), dict):
            data.update(data.pop("scan"))
        if isinstance(data.get("output"), dict):
            output = data.pop("output")
            if "format" in output:
                data["output_format"] = output["format"]
            for key in ("summary", "color"):
                if key in output:
                    data[key] = output[key]

        # Map some common alternative names
        if "exclude" in data:
            data["extra_exclude_dirs"] = data.pop("exclude")
        if "jobs" in data:
            data["max_workers"] = data.pop("jobs")
        if "format" in data:
            data["output_format"] = data.pop("format")

        known_fields = {f.name: f for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}
        _validate(filtered_data)
        return cls(**filtered_data)


def _validate(data: Dict[str, Any]) -> None:
    for key in ("threshold", "max_workers"):
        if key in data and (not isinstance(data[key], int) or isinstance(data[key], bool)):
            raise ConfigError(f"'{key}' must be an integer", details={"value": repr(data[key])})
    if data.get("max_workers", 1) < 1:
        raise ConfigError("'max_workers' must be at least 1")
    for key in ("summary", "color", "fail_fast", "strict_parsing"):
        if key in data and not isinstance(data[key], bool):
            raise ConfigError(f"'{key}' must be a boolean", details={"value": repr(data[key])})
    for key in ("exclude_dirs", "extra_exclude_dirs"):
        if key in data and not isinstance(data[key], list):
            raise ConfigError(f"'{key}' must be a list of directory names")
    if "output_format" in data and not isinstance(data["output_format"], str):
        raise ConfigError("'output_format' must be a string")


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration data from a file.

    YAML is used for .yaml/.yml files, JSON for .json; other suffixes are
    tried as JSON first and then as YAML.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file: {config_path}", details={"reason": str(e)}) from e

    try:
        if config_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif config_path.suffix == ".json":
            data = json.loads(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid configuration file: {config_path}", details={"reason": str(e)}) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {config_path}")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_scan_config(path: Optional[str] = None, start_dir: str = ".") -> ScanConfig:
    """
    Load a ScanConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ScanConfig()

    return ScanConfig.from_dict(load_config(path))
