"""
Configuration Management

Handles loading configuration files and environment overrides for the PIM Request tool.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from decouple import config, UndefinedValueError

from .constants import AzureCLIConstants, ErrorMessages, FileConstants, PIMConstants
from .exceptions import ConfigurationError
from .utils import parse_bool, parse_timeout

logger = logging.getLogger(__name__)


@dataclass
class RuntimeSettings:
    """Effective settings after merging CLI flags, environment and configuration file"""
    cli_path: str = AzureCLIConstants.DEFAULT_CLI_PATH
    token_resource: Optional[str] = None
    api_url: str = PIMConstants.DEFAULT_API_URL
    timeout: Optional[float] = None
    insecure: bool = False
    verbose: bool = False


class ConfigManager:
    """Manages configuration loading, validation and merging"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'azure': {
            'type': dict,
            'fields': {
                'cli_path': {'type': str},
                'token_resource': {'type': str},
            }
        },
        'pim': {
            'type': dict,
            'fields': {
                'api_url': {'type': str},
                'timeout': {'type': (int, float)},
            }
        },
        'network': {
            'type': dict,
            'fields': {
                'insecure': {'type': bool},
            }
        },
        'logging': {
            'type': dict,
            'fields': {
                'verbose': {'type': bool},
            }
        },
    }

    # Environment variables consulted through python-decouple
    ENV_OVERRIDES = {
        'AZ_CLI_PATH': 'azure.cli_path',
        'PIM_TOKEN_RESOURCE': 'azure.token_resource',
        'PIM_API_URL': 'pim.api_url',
        'PIM_REQUEST_TIMEOUT': 'pim.timeout',
    }

    def __init__(self, custom_config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            custom_config_path: Optional path given with --config
        """
        self.custom_config_path = custom_config_path
        self.config_data: Dict[str, Any] = {}
        self.config_file_used: Optional[str] = None

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from the first configuration file found

        Returns:
            Dict containing configuration data, empty if no file exists

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        config_path = self._find_config_file()

        if not config_path:
            logger.debug("No configuration file found")
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {config_path}: {e}")

        # Expand environment variables in config content
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                ErrorMessages.ConfigError.INVALID_YAML.format(config_path=config_path, error=e)
            )

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping")

        self._validate_against_schema(data, self.CONFIG_SCHEMA)

        self.config_data = data
        self.config_file_used = config_path
        logger.info(f"Loaded configuration from: {config_path}")
        return self.config_data

    def _find_config_file(self) -> Optional[str]:
        """
        Find the configuration file to use

        Returns:
            Path to config file or None if not found

        Raises:
            ConfigurationError: If --config points at a missing file
        """
        if self.custom_config_path:
            custom_path = os.path.expanduser(self.custom_config_path)
            if not os.path.isfile(custom_path):
                raise ConfigurationError(
                    ErrorMessages.ConfigError.FILE_NOT_FOUND.format(config_path=custom_path)
                )
            return custom_path

        for location in FileConstants.DEFAULT_CONFIG_LOCATIONS:
            expanded_path = os.path.expanduser(location)
            if os.path.isfile(expanded_path):
                return expanded_path

        return None

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigurationError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            if key not in data:
                continue

            current_path = f"{path}.{key}" if path else key
            value = data[key]

            # Unset optional values are allowed
            if value is None:
                continue

            expected_type = field_schema['type']
            # bool is an int subclass, don't accept it for numeric fields
            if not isinstance(value, expected_type) or (isinstance(value, bool) and expected_type is not bool):
                type_name = expected_type.__name__ if isinstance(expected_type, type) else 'number'
                raise ConfigurationError(
                    ErrorMessages.ConfigError.INVALID_TYPE.format(path=current_path, type_name=type_name)
                )

            if expected_type is dict and 'fields' in field_schema:
                self._validate_against_schema(value, field_schema['fields'], current_path)

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key

        Args:
            key: Configuration key (supports dot notation like 'pim.api_url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config_data

        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default

        return default if value is None else value

    def get_env_value(self, name: str) -> Optional[str]:
        """Get an environment override, None when unset or empty"""
        try:
            value = config(name)
        except UndefinedValueError:
            return None
        return value or None

    def resolve_settings(self, verbose: bool = False, insecure: bool = False) -> RuntimeSettings:
        """
        Merge configuration sources into runtime settings.

        Precedence is CLI flag, then environment, then configuration file,
        then built-in default. CLI flags are switches, so they can only
        turn options on.

        Args:
            verbose: --verbose flag
            insecure: --insecure flag

        Returns:
            RuntimeSettings with every value resolved
        """
        values = {}
        for env_name, key in self.ENV_OVERRIDES.items():
            env_value = self.get_env_value(env_name)
            values[key] = env_value if env_value is not None else self.get_value(key)

        return RuntimeSettings(
            cli_path=values['azure.cli_path'] or AzureCLIConstants.DEFAULT_CLI_PATH,
            token_resource=values['azure.token_resource'],
            api_url=(values['pim.api_url'] or PIMConstants.DEFAULT_API_URL).rstrip('/'),
            timeout=parse_timeout(values['pim.timeout']),
            insecure=insecure or parse_bool(self.get_value('network.insecure', False)),
            verbose=verbose or parse_bool(self.get_value('logging.verbose', False)),
        )

    def get_config_info(self) -> Dict[str, Any]:
        """
        Get information about the loaded configuration

        Returns:
            Dictionary with config file path and loaded settings
        """
        return {
            'config_file': self.config_file_used,
            'config_data': self.config_data,
            'has_config': bool(self.config_file_used)
        }


def create_sample_config() -> str:
    """
    Create a sample configuration file content.

    Returns:
        Sample YAML configuration as string
    """
    return f"""# PIM Request Configuration File
# Place this file at ~/.pim-request.yaml or ~/.config/pim-request.yaml
# Environment variables are expanded, e.g. ${{PIM_TOKEN_RESOURCE}}

azure:
  cli_path: {AzureCLIConstants.DEFAULT_CLI_PATH}
  # token_resource: {PIMConstants.DEFAULT_API_URL}  # Audience passed to 'az account get-access-token --resource'

pim:
  api_url: {PIMConstants.DEFAULT_API_URL}
  # timeout: 30  # Seconds, no timeout when unset

network:
  insecure: false

logging:
  verbose: false
"""


def generate_sample_config_file(output_path: Optional[str] = None) -> str:
    """
    Generate a sample configuration file.

    Args:
        output_path: Path where to write the config file. If None, uses ~/.config/pim-request.yaml

    Returns:
        Path to the created configuration file

    Raises:
        ConfigurationError: If the file cannot be written
    """
    if output_path:
        config_file = Path(output_path).expanduser()
    else:
        config_file = Path("~/.config").expanduser() / FileConstants.DEFAULT_CONFIG_FILE

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(create_sample_config(), encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Failed to write configuration file {config_file}: {e}")

    logger.info(f"Sample configuration file created: {config_file}")
    return str(config_file)
