"""
Configuration loading for the synteny remapping pipeline.
"""

import copy
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file. Fails if file does not exist."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(config_path)

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Invalid YAML format in {config_path}")

    # user files only need the sections they change
    if Path(config_path).resolve() != DEFAULT_CONFIG_PATH.resolve():
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            defaults = yaml.safe_load(f)
        config = apply_overrides(defaults, config)

    config['_source'] = str(Path(config_path).resolve())
    return config


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge ``overrides`` into a copy of ``config`` one section at a time."""
    merged = copy.deepcopy(config)
    if not overrides:
        return merged

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class ExtensionOptions:
    """
    Settings handed to the synteny processor on every flush.

    These mirror the switches of the downstream extension stage; the
    remapping engine itself only passes them along.
    """
    break_length: int = 200
    banding: int = 0
    do_delta: bool = True
    do_extend: bool = True
    to_seq_end: bool = False
    do_shadows: bool = False

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ExtensionOptions':
        section = config.get('extension', {}) or {}
        known = {k: section[k] for k in cls.__dataclass_fields__ if k in section}
        options = cls(**known)
        if options.break_length < 0:
            raise ValueError(f"extension.break_length must be >= 0, got {options.break_length}")
        if options.banding < 0:
            raise ValueError(f"extension.banding must be >= 0, got {options.banding}")
        return options

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
