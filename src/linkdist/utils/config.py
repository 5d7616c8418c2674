# src/linkdist/utils/config.py
import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config:
    """Configuration manager for linkdist runs"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration

        Args:
            config_path: Path to config YAML file (optional)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = {}

        self._load_default_config()

        if config_path:
            self._load_from_file(config_path)

        self._load_from_env()

    def _load_default_config(self) -> None:
        """Load default configuration"""
        self.config = {
            "input": {
                "delimiter": "\t",
                "has_header": False,
                "encoding": "utf-8"
            },
            "output": {
                "dir": ".",
                "degree_file": "degree_distribution.png",
                "distance2_file": "distance2_distribution.png"
            },
            "plots": {
                # Axes are cut off to keep the long tails readable
                "degree": {
                    "title": "Degree Distribution",
                    "x_limit": 100,
                    "y_limit": 0,
                    "log_y": True
                },
                "distance2": {
                    "title": "Distance-2 Distribution",
                    "x_limit": 500,
                    "y_limit": 500,
                    "log_y": False
                }
            },
            "logging": {
                "level": "INFO",
                "file": None
            },
            "progress": {
                "enabled": True
            },
            "analysis": {
                "top_n": 5
            }
        }

    def _load_from_file(self, config_path: str) -> None:
        """Merge a YAML file over the defaults

        Unreadable files and files whose top level is not a mapping are
        logged and ignored.

        Args:
            config_path: Path to config YAML file
        """
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.logger.error(f"Error loading config from {config_path}: {str(e)}")
            return

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            self.logger.error(
                f"Ignoring config {config_path}: expected a mapping at top level, "
                f"got {type(file_config).__name__}"
            )
            return

        self._merge(self.config, file_config, prefix="")
        self.logger.info(f"Loaded configuration from {config_path}")

    def _load_from_env(self) -> None:
        """Load configuration from LINKDIST_* environment variables"""
        if os.environ.get('LINKDIST_OUTPUT_DIR'):
            self.config['output']['dir'] = os.environ.get('LINKDIST_OUTPUT_DIR')

        if os.environ.get('LINKDIST_LOG_LEVEL'):
            self.config['logging']['level'] = os.environ.get('LINKDIST_LOG_LEVEL')

        if os.environ.get('LINKDIST_LOG_FILE'):
            self.config['logging']['file'] = os.environ.get('LINKDIST_LOG_FILE')

        if os.environ.get('LINKDIST_HAS_HEADER'):
            self.config['input']['has_header'] = os.environ.get('LINKDIST_HAS_HEADER').lower() in _TRUE_VALUES

        if os.environ.get('LINKDIST_SHOW_PROGRESS'):
            self.config['progress']['enabled'] = os.environ.get('LINKDIST_SHOW_PROGRESS').lower() in _TRUE_VALUES

    def _merge(self, defaults: Dict, overrides: Dict, prefix: str) -> None:
        # A section that is a mapping in the defaults stays a mapping
        for k, v in overrides.items():
            key = f"{prefix}{k}"
            current = defaults.get(k)
            if isinstance(current, dict):
                if isinstance(v, dict):
                    self._merge(current, v, prefix=f"{key}.")
                else:
                    self.logger.warning(f"Ignoring config key '{key}': expected a section, got {v!r}")
            elif current is not None and isinstance(v, dict):
                self.logger.warning(f"Ignoring config key '{key}': expected a single value, got a section")
            else:
                defaults[k] = v

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dot-separated key such as "plots.degree.x_limit"

        Returns ``default`` when any part of the key is missing.
        """
        node = self.config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_int(self, key: str) -> int:
        """Look up an integer setting

        Raises:
            ValueError: the value is missing or not a whole number
        """
        value = self.get(key)
        if isinstance(value, bool):
            raise ValueError(f"Config key '{key}' must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Config key '{key}' must be an integer, got {value!r}") from e

    def set(self, key: str, value: Any) -> None:
        """Assign a dot-separated key, creating intermediate sections"""
        *parents, leaf = key.split('.')
        node = self.config
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

    def get_path(self, key: str, create: bool = False) -> Path:
        """Return the setting under ``key`` as a directory Path

        Args:
            key: Configuration key for the directory
            create: Create the directory (and parents) when missing

        Raises:
            ValueError: the key is unset or empty
        """
        value = self.get(key)
        if not value:
            raise ValueError(f"No path configured for key: {key}")

        path = Path(value)
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def save(self, config_path: str) -> None:
        """Write the effective configuration as YAML"""
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.config, f, default_flow_style=False)

        self.logger.info(f"Saved configuration to {config_path}")
