"""Resolve search settings from a YAML file and the command line.

Precedence: an option given on the command line, then the YAML file, then
the parser default. The resolved settings always hold `piles` as a tuple
of ints and `seed` as an int or None.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from nimsearch.config import parse_piles, parse_seed

logger = logging.getLogger(__name__)


def load_yaml_config(file_path: str) -> Dict[str, Any]:
    """Read a YAML mapping of settings; an empty file gives {}.

    Raises:
        FileNotFoundError: If file_path does not exist.
        yaml.YAMLError: If the file is not valid YAML or not a mapping.
    """
    text = Path(file_path).read_text()
    try:
        config = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML file {file_path}: {e}")
        raise
    if not isinstance(config, dict):
        raise yaml.YAMLError(f"{file_path} must contain a mapping of settings")
    return config


def _given_on_command_line(action: argparse.Action, value: Any, default: Any) -> bool:
    if isinstance(action, argparse._StoreTrueAction):
        return value is True
    return value != default


def merge_configs(
    yaml_config: Dict[str, Any],
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> Dict[str, Any]:
    """Overlay command-line options on the YAML settings.

    Args:
        yaml_config: Settings loaded from the YAML file.
        args: Parsed command-line arguments namespace.
        parser: The ArgumentParser instance used to parse args.

    Returns:
        The merged, not yet validated, settings.
    """
    merged_config = dict(yaml_config)
    for action in parser._actions:
        name = action.dest
        if name in ("help", "config_file"):
            continue
        value = getattr(args, name, None)
        default = parser.get_default(name)
        if _given_on_command_line(action, value, default):
            merged_config[name] = value
            logger.debug(f"Using CLI value for {name}: {value}")
        else:
            merged_config.setdefault(name, default)
    return merged_config


def resolve_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Validate the Nim settings and convert them to their final types.

    Raises:
        ValueError: If `piles` or `seed` is malformed
    """
    settings = dict(config)
    if "piles" in settings:
        settings["piles"] = parse_piles(settings["piles"])
    settings["seed"] = parse_seed(settings.get("seed"))
    return settings


def load_and_merge_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> Dict[str, Any]:
    """Load the YAML file named by args.config_file, if any, merge and validate.

    Raises:
        FileNotFoundError: If the specified config_file does not exist.
        yaml.YAMLError: If the YAML file cannot be parsed.
        ValueError: If a Nim setting is malformed.
    """
    yaml_config = {}
    config_file_path = getattr(args, "config_file", None)
    if config_file_path:
        logger.info(f"Loading configuration from: {config_file_path}")
        yaml_config = load_yaml_config(config_file_path)

    settings = resolve_settings(merge_configs(yaml_config, args, parser))
    logger.debug(f"Resolved settings: {settings}")
    return settings
