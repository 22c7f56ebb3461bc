# src/rbisort/core/config.py
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel

CONFIG_FILENAME = ".rbisort.yaml"


class Config(BaseModel):
    """Configuration for an rbisort run."""

    check: bool = False
    diff: bool = False
    atomic: bool = False
    quiet: bool = False
    verbose: bool = False
    debug: bool = False
    log_dir: Optional[str] = None
    skip_file_scan_lines: int = 50
    extensions: List[str] = [".rb"]
    exclude: List[str] = [".git", "vendor", "node_modules"]
    extra_stdlib_modules: List[str] = []
    extra_stdlib_mixins: List[str] = []
    ruby: str = "ruby"

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
            return cls(**data)


def get_default_config() -> Config:
    """Get default configuration with environment variable overrides."""
    overrides = {}
    log_dir = os.environ.get("RBISORT_LOG_DIR")
    if log_dir:
        overrides["log_dir"] = log_dir
    ruby = os.environ.get("RBISORT_RUBY")
    if ruby:
        overrides["ruby"] = ruby

    return Config(**overrides)


def find_config(start: Path) -> Optional[Path]:
    """Find the nearest config file in ``start`` or its parents."""
    start = Path(start).resolve()
    if start.is_file():
        start = start.parent

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path) -> Config:
    """Load configuration from a YAML file, on top of the defaults."""
    with open(config_path, "r") as f:
        config_data = yaml.safe_load(f) or {}

    base = get_default_config().model_dump()
    base.update(config_data)
    return Config(**base)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to a YAML file."""
    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f)
