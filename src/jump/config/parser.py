"""
YAML configuration parser for jump.

This module provides functionality to load, parse, validate and save the YAML
configuration file. A missing or empty file is replaced with the defaults and
written back; a file that exists but does not parse or validate is an error,
never silently ignored.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
import logging

from pydantic import ValidationError

from ..models.config import JumpConfig


logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration parsing, validation or saving fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    This class handles loading the YAML configuration file, validating its
    contents, converting them to JumpConfig objects and writing them back.
    """

    HEADER_LINES = [
        "# jump configuration",
        "# command: name of the shell function defined by `jump shell`",
    ]

    def __init__(self):
        """Initialize the configuration parser."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Union[str, Path]) -> JumpConfig:
        """
        Load and parse configuration, creating the default file when missing.

        Args:
            config_path: Path to configuration file

        Returns:
            The parsed JumpConfig

        Raises:
            ConfigurationError: If the file cannot be read, is not valid YAML,
                or does not describe a valid configuration
        """
        config_path = Path(config_path)
        config_data = self._load_yaml_file(config_path)

        if config_data is None:
            config = JumpConfig()
            try:
                self.save_config(config, config_path)
            except ConfigurationError as e:
                self.logger.warning(f"Failed to write default configuration: {e}")
            return config

        config = self._validate_config_data(config_data, config_path)
        self.logger.debug(f"Configuration loaded from {config_path}")
        return config

    def _load_yaml_file(self, file_path: Path) -> Union[Dict[str, Any], None]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary, or None if the file is missing or empty

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            self.logger.info(f"No configuration file at {file_path}, using defaults")
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        # Handle empty files
        if not content.strip():
            self.logger.info(f"Configuration file is empty: {file_path}")
            return None

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e

        # A file holding only comments parses to None
        if data is None:
            return None

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

        return data

    def _validate_config_data(self, config_data: Dict[str, Any], config_path: Path) -> JumpConfig:
        """
        Validate configuration data and build a JumpConfig.

        Args:
            config_data: Raw configuration data from YAML
            config_path: Path the data was read from, for error messages

        Returns:
            Validated JumpConfig

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return JumpConfig.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed for {config_path}: {e}") from e

    def save_config(self, config: JumpConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration to save
            output_path: Path where to save the configuration

        Raises:
            ConfigurationError: If file cannot be written
        """
        output_path = Path(output_path)
        yaml_content = self._generate_yaml_with_comments(config.to_dict())

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(yaml_content)
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e

        self.logger.debug(f"Configuration saved to {output_path}")

    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """
        Generate YAML content with a comment header.

        Args:
            config_dict: Configuration dictionary

        Returns:
            YAML content with comments
        """
        body = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
        return "\n".join(self.HEADER_LINES + ["", body])

    def dump_config(self, config: JumpConfig) -> str:
        """
        Render a configuration as YAML for display.

        Args:
            config: Configuration to render

        Returns:
            YAML text without the comment header
        """
        return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False).rstrip()

    def set_value(self, config: JumpConfig, assignment: str) -> JumpConfig:
        """
        Apply a ``key=value`` assignment to a configuration.

        Everything after the first ``=`` is the value, so values may
        themselves contain ``=``.

        Args:
            config: Configuration to update
            assignment: Assignment in ``key=value`` form

        Returns:
            A new JumpConfig with the assignment applied

        Raises:
            ConfigurationError: If the assignment is malformed, names an
                unknown key, or the value does not validate
        """
        if '=' not in assignment:
            raise ConfigurationError(f"Expected key=value, got '{assignment}'")

        key, value = assignment.split('=', 1)
        key = key.strip()

        if key not in JumpConfig.settable_keys():
            known = ', '.join(JumpConfig.settable_keys())
            raise ConfigurationError(f"Unknown configuration key '{key}' (known keys: {known})")

        updated = config.model_copy()
        try:
            setattr(updated, key, value)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for '{key}': {e}") from e

        return updated


def load_config(config_path: Union[str, Path]) -> JumpConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        The parsed JumpConfig

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser()
    return parser.load_config(config_path)


def save_config(config_path: Union[str, Path], config: JumpConfig) -> None:
    """
    Convenience function to save configuration.

    Args:
        config_path: Path to configuration file
        config: Configuration to save

    Raises:
        ConfigurationError: If the file cannot be written
    """
    parser = ConfigParser()
    parser.save_config(config, config_path)
