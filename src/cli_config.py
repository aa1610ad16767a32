"""Runtime settings: defaults, config file, environment and CLI overrides.

Precedence, highest first: CLI flags, PLUGVEND_* environment variables,
the config file, then the defaults on ``Constants``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants
from resolution.constraints import numeric_version
from resolution.errors import EvaluationError
from resolution.models import ResolverConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Configuration could not be loaded or holds an invalid value."""


@dataclass(frozen=True)
class Settings:
    """Effective configuration for one CLI invocation."""
    runtime_version: str = Constants.DEFAULT_RUNTIME_VERSION
    platform: str = Constants.DEFAULT_PLATFORM
    index_url: str = Constants.REGISTRY_URL_PYPI
    vendor_root: str = Constants.DEFAULT_VENDOR_ROOT

    def resolver_config(self) -> ResolverConfig:
        return ResolverConfig(runtime_version=self.runtime_version, platform=self.platform)


# (settings field, CLI attribute, environment variable, config file key)
_SOURCES = (
    ("runtime_version", "RUNTIME_VERSION", Constants.ENV_RUNTIME_VERSION, "runtime_version"),
    ("platform", "PLATFORM", Constants.ENV_PLATFORM, "platform"),
    ("index_url", "INDEX_URL", Constants.ENV_INDEX_URL, "index_url"),
    ("vendor_root", "VENDOR_ROOT", Constants.ENV_VENDOR_ROOT, "vendor_root"),
)


def load_config_file(path: str) -> Dict[str, Any]:
    """Load a YAML (or JSON) config file.

    Settings may sit at the top level or under a ``plugvend:`` section.

    Raises:
        ConfigError: missing file, parse error or non-mapping content.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{Constants.CONFIG_SECTION}' section in {path} must be a mapping")
    return section


def load_settings(args: Any = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Merge every configuration source into a Settings value.

    Raises:
        ConfigError: unreadable config file or invalid runtime version.
    """
    environ = os.environ if environ is None else environ
    config_path = getattr(args, "CONFIG", None)
    file_values = load_config_file(config_path) if config_path else {}

    values: Dict[str, str] = {}
    for field_name, cli_attr, env_var, file_key in _SOURCES:
        cli_value = getattr(args, cli_attr, None)
        if cli_value:
            values[field_name] = str(cli_value)
        elif environ.get(env_var):
            values[field_name] = environ[env_var]
        elif file_values.get(file_key) is not None:
            raw = file_values[file_key]
            # YAML reads an unquoted 3.10 as the float 3.1
            if not isinstance(raw, str):
                raise ConfigError(f"'{file_key}' must be a quoted string in the config file")
            values[field_name] = raw

    settings = Settings(**values)
    try:
        numeric_version(settings.runtime_version)
    except EvaluationError as e:
        raise ConfigError(f"Invalid runtime version {settings.runtime_version!r}") from e

    logger.debug(
        "Effective settings: python %s, platform %s, index %s, vendor root %s",
        settings.runtime_version,
        settings.platform,
        settings.index_url,
        settings.vendor_root,
    )
    return settings
