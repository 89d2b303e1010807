"""Simple YAML configuration loader for filescribe."""

import os
import importlib
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_SECONDS = 1.5


class FileScribeConfig:
    """filescribe configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, uses filescribe.yaml
                        in the current directory.
        """
        self.config_file = Path(config_path or "filescribe.yaml")

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not config:
            raise ValueError("Configuration file is empty")
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        # Resolve data directory
        if 'storage' in config and 'data_directory' in config['storage']:
            data_dir = config['storage']['data_directory']
            if not os.path.isabs(data_dir):
                config['storage']['data_directory'] = str(config_dir / data_dir)

        # Resolve log file path
        if 'logging' in config and 'file_path' in config['logging']:
            log_path = config['logging']['file_path']
            if not os.path.isabs(log_path):
                config['logging']['file_path'] = str(config_dir / log_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'pipeline.settle_seconds').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_data_directory(self) -> str:
        """Get data directory path."""
        data_dir = self.get('storage.data_directory', 'data')
        return str(Path(data_dir).absolute())

    def get_settle_seconds(self) -> float:
        """How long the completed phase stays visible before going idle."""
        value = float(self.get('pipeline.settle_seconds', DEFAULT_SETTLE_SECONDS))
        if value < 0:
            raise ValueError(f"pipeline.settle_seconds must not be negative: {value}")
        return value

    def is_formatting_enabled(self) -> bool:
        return bool(self.get('text.formatting_enabled', False))

    def get_word_replacements(self) -> Dict[str, str]:
        replacements = self.get('text.word_replacements', {}) or {}
        if not isinstance(replacements, dict):
            raise ValueError("text.word_replacements must be a mapping")
        return {str(k): str(v) for k, v in replacements.items()}

    def get_collaborator(self, key: str) -> Any:
        """Import a collaborator named by a 'module:attribute' path.

        Args:
            key: Key under 'collaborators' (e.g. 'decoder')

        Returns:
            The imported attribute, usually a class or factory
        """
        import_path = self.get(f'collaborators.{key}')
        if not import_path:
            raise ValueError(f"collaborators.{key} not configured")

        module_name, _, attribute = import_path.partition(':')
        if not attribute:
            raise ValueError(f"collaborators.{key} must look like 'module:attribute', got {import_path!r}")

        module = importlib.import_module(module_name)
        try:
            return getattr(module, attribute)
        except AttributeError:
            raise ValueError(f"{module_name} has no attribute {attribute!r}")
