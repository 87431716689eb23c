"""Configuration loader for the Teams target with YAML support.

A configuration file holds the target settings at its top level, a
``variables`` section with the variable table, and an optional
``environments`` section with per-environment overrides::

    url: https://example.webhook.office.com/webhookb2/...
    application_name: ${var:app}
    environment: production
    variables:
      app: Billing (${logger})
    environments:
      staging:
        environment: staging
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

from .errors import ConfigurationError
from .models import TargetConfig
from .variables import VariableTable


logger = logging.getLogger(__name__)

ENVIRONMENT_VARIABLE = "MSTEAMS_TARGET_ENV"


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""
    pass


def load_target_config(
    config_path: Union[str, Path],
    environment: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> TargetConfig:
    """Load TargetConfig from a YAML file with environment overrides.

    Args:
        config_path: Path to YAML config file
        environment: Environment name for override selection. If None, uses ENV var.
        overrides: Additional configuration overrides to apply.

    Returns:
        Validated TargetConfig instance.

    Raises:
        ConfigLoadError: If configuration loading or validation fails.
    """
    config_data = _read_yaml(config_path)

    if environment is None:
        environment = os.getenv(ENVIRONMENT_VARIABLE, "production")

    environments = config_data.pop("environments", None) or {}
    if environment in environments:
        config_data = _deep_merge(config_data, environments[environment])
        logger.info(f"Applied environment overrides for: {environment}")

    # Variables are loaded separately
    config_data.pop("variables", None)

    if overrides:
        config_data = _deep_merge(config_data, overrides)
        logger.debug("Applied additional configuration overrides")

    try:
        return TargetConfig(**config_data)
    except Exception as e:
        raise ConfigLoadError(f"Failed to create TargetConfig: {e}") from e


def load_variable_table(config_path: Union[str, Path]) -> VariableTable:
    """Load the ``variables`` section of a YAML file into a VariableTable."""
    variables = _read_yaml(config_path).get("variables") or {}

    if not isinstance(variables, dict):
        raise ConfigLoadError("'variables' must be a YAML dictionary")

    # Blank entries stay undefined
    return VariableTable({
        str(name): str(value) for name, value in variables.items()
        if value is not None
    })


def _read_yaml(config_path: Union[str, Path]) -> Dict[str, Any]:
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse YAML config: {e}") from e
    except IOError as e:
        raise ConfigLoadError(f"Failed to read config file: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigLoadError("Config file must contain a YAML dictionary")

    return config_data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
