"""Generator configuration loading and validation."""

import tomllib
from typing import Any

from .types import UINT16_MAX, GenConfig, PythonOutConfig
from .util import to_camel_case

DEFAULT_CONFIG_FILE = "link.toml"


class ConfigError(RuntimeError):
    """Raised when the configuration is missing or invalid."""


def validate_config(config: GenConfig) -> PythonOutConfig:
    """Validate a parsed configuration and return its Python output settings."""
    if config.out is None or config.out.python is None:
        raise ConfigError("missing [out.python] section")
    if not config.out.python.filename.endswith(".py"):
        raise ConfigError(
            f"out.python.filename must end in .py, got {config.out.python.filename}"
        )

    seen: set[str] = set()
    constants: dict[str, str] = {}
    for group in config.groups:
        if not group.name:
            raise ConfigError("group name must not be empty")
        if group.name in seen:
            raise ConfigError(f"group {group.name} is declared more than once")
        seen.add(group.name)

        suffix = to_camel_case(group.name)
        if suffix in constants:
            raise ConfigError(
                f"groups {constants[suffix]} and {group.name} both map to MsgGroupMin_{suffix}"
            )
        constants[suffix] = group.name

        for bound in (group.min, group.max):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise ConfigError(f"group {group.name}: bounds must be integers, got {bound!r}")
            if not 0 <= bound <= UINT16_MAX:
                raise ConfigError(f"group {group.name}: {bound} is outside 0..{UINT16_MAX}")
        if group.min > group.max:
            raise ConfigError(
                f"group {group.name}: min {group.min} is greater than max {group.max}"
            )

    return config.out.python


def parse_config(data: dict[str, Any]) -> GenConfig:
    """Build and validate a configuration from already-decoded data."""
    try:
        config = GenConfig.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"invalid configuration: {e}") from e

    validate_config(config)
    return config


def read_config(path: str) -> GenConfig:
    """Read a TOML configuration file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e

    return parse_config(data)
