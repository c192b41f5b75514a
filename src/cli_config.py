"""Configuration loading for the fftwprobe CLI.

Precedence, highest first: CLI flags, environment, YAML config file,
``Constants`` defaults. The config file is optional.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("pkg_config", "precision", "min_version", "build_command")


class _TextScalarLoader(yaml.SafeLoader):  # pylint: disable=too-many-ancestors
    """SafeLoader that keeps unquoted decimals as text.

    ``min_version: 3.10`` must stay "3.10"; read as a float it would become 3.1.
    """


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [r for r in resolvers if r[0] != "tag:yaml.org,2002:float"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class ConfigError(Exception):
    """The config file exists but cannot be used."""


@dataclass
class ProbeConfig:
    """Effective settings after merging every source."""

    pkg_config: Optional[str] = None
    precision: Optional[str] = None
    min_version: Optional[str] = None
    build_command: Optional[str] = None


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML (or JSON) config file.

    A missing file is logged and treated as empty.

    Raises:
        ConfigError: the file cannot be parsed or is not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.load(f, Loader=_TextScalarLoader)  # noqa: S506
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")

    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return {k: data[k] for k in CONFIG_KEYS if data.get(k) is not None}


def build_config(args) -> ProbeConfig:
    """Merge the config file, environment and CLI arguments."""
    file_cfg = load_config_file(getattr(args, "CONFIG", None))
    cfg = ProbeConfig(**{k: str(v) for k, v in file_cfg.items()})

    env_tool = (
        os.environ.get(Constants.ENV_PKG_CONFIG)
        or os.environ.get(Constants.ENV_PKG_CONFIG_FALLBACK)
    )
    if env_tool:
        cfg.pkg_config = env_tool

    if getattr(args, "PKG_CONFIG", None):
        cfg.pkg_config = args.PKG_CONFIG
    if getattr(args, "PRECISION", None):
        cfg.precision = args.PRECISION
    if getattr(args, "BUILD_COMMAND", None):
        cfg.build_command = args.BUILD_COMMAND
    return cfg


def run_build_command(command: str) -> None:
    """Run the source-build fallback command through the shell.

    A nonzero exit is logged; whether the build succeeded is decided by
    re-probing pkg-config afterwards.
    """
    logger.info("Running build command: %s", command)
    result = subprocess.run(command, shell=True, check=False)  # noqa: S602
    if result.returncode != 0:
        logger.warning("Build command exited with status %s", result.returncode)
