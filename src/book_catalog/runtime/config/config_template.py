"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic_core import ValidationError

from src.book_catalog.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """

    def replacer(match: re.Match) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = os.getenv(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def apply_environment_overrides(env_mode: str) -> dict[str, str]:
    """Promote ``<ENV>_``-prefixed variables over their unprefixed names.

    With ``APP_ENVIRONMENT=production``, ``PRODUCTION_MONGO_URL`` becomes
    ``MONGO_URL`` before the template is rendered.

    Returns:
        Mapping of the promoted variable names to their source names.
    """
    prefix = f"{env_mode.upper()}_"
    promoted = {}
    for var_name, var_value in list(os.environ.items()):
        if var_name.startswith(prefix) and len(var_name) > len(prefix):
            target = var_name[len(prefix):]
            os.environ[target] = var_value
            promoted[target] = var_name
            logger.debug("Set environment variable {} from {}", target, var_name)
    return promoted


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the
            rendered YAML is not a valid configuration
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    load_dotenv()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    # Only names are logged; values may be secrets
    promoted = apply_environment_overrides(env_mode)
    if promoted:
        logger.info("Applied environment-specific overrides: {}", sorted(promoted))

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config = ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if config.app.environment == "production" and config.mongo.has_inline_credentials:
        logger.warning(
            "MongoDB URL contains a password in production mode; "
            "supply it through a secrets file or environment variable instead."
        )

    return config


def load_config(file_path: Path | None = None) -> ConfigData:
    """Load the configuration file named by ``APP_CONFIG_FILE`` (default config.yaml).

    A missing file is not an error: the model defaults are used instead.
    """
    path = file_path or Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        return ConfigData()
    return load_templated_yaml(path)
