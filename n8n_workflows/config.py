# n8n_workflows/config.py
"""
Configuration management for the n8n workflow tools.
Uses TOML format for configuration files.
"""
import os
import sys
from pathlib import Path
from typing import Optional

# --- TOML Library Handling ---

# Reader (tomllib for >= 3.11, tomli for < 3.11)
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# --- Pydantic and Environment Handling ---
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from dotenv import load_dotenv

from n8n_workflows.constants import (
    CONFIG_DIR,
    CONFIG_FILE_NAME,
    LOG_DIR_NAME,
    DEFAULT_WORKFLOWS_DIR,
    DEFAULT_CLONED_DIR,
    DEFAULT_N8N_URL,
    REQUEST_TIMEOUT,
)
from n8n_workflows.utils.logging import get_logger

logger = get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}

# --- Configuration Models ---

class StoreConfig(BaseModel):
    """Where each tool keeps its workflow files."""
    workflows_dir: Path = Field(DEFAULT_WORKFLOWS_DIR, description="Store directory of the workflow manager")
    cloned_dir: Path = Field(DEFAULT_CLONED_DIR, description="Store directory of the workflow cloner")


class NetworkConfig(BaseModel):
    """Settings for fetching remote workflows."""
    timeout: float = Field(REQUEST_TIMEOUT, gt=0, description="HTTP request timeout in seconds")
    n8n_url: str = Field(DEFAULT_N8N_URL, description="Base URL of the local n8n instance")


class LoggingConfig(BaseModel):
    """Logging settings."""
    file_enabled: bool = Field(True, description="Write a rotating log file under the config directory")


class AppConfig(BaseModel):
    """Application configuration settings."""
    store: StoreConfig = Field(default_factory=StoreConfig, description="Store configuration")
    network: NetworkConfig = Field(default_factory=NetworkConfig, description="Network configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    debug: bool = Field(False, description="Enable debug mode")


# --- Configuration Manager ---

class ConfigManager:
    """Loads the tools' configuration from TOML and the environment."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir is not None else CONFIG_DIR
        self._config: AppConfig = AppConfig()
        self._logger = logger

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def log_dir(self) -> Path:
        return self.config_dir / LOG_DIR_NAME

    def load_config(self) -> AppConfig:
        """Loads configuration from the TOML file, then applies environment overrides."""
        self._config = AppConfig()

        if self.config_file.exists():
            self._load_file()
        else:
            self._logger.debug(f"Configuration file not found at '{self.config_file}'. Using defaults.")

        self._load_environment()
        return self._config

    def _load_file(self) -> None:
        try:
            self._logger.debug(f"Loading configuration from: {self.config_file}")
            with open(self.config_file, "rb") as f:  # TOML requires binary read mode
                config_data = tomllib.load(f)

            self._config = AppConfig(**config_data)

        except tomllib.TOMLDecodeError as e:
            self._logger.error(f"Error decoding TOML configuration file ({self.config_file}): {e}")
            self._logger.error("Using default configuration and environment variables.")
            self._config = AppConfig()
        except PydanticValidationError as e:
            self._logger.error(f"Invalid configuration in {self.config_file}: {e}")
            self._logger.error("Using default configuration and environment variables.")
            self._config = AppConfig()
        except OSError as e:
            self._logger.error(f"I/O error accessing configuration file: {e}")
            self._logger.error("Using default configuration and environment variables.")
            self._config = AppConfig()

    def _load_environment(self) -> None:
        """Applies overrides from environment variables and a .env file."""
        load_dotenv()  # Load .env file if present

        workflows_dir = os.getenv("N8N_WORKFLOWS_DIR")
        if workflows_dir:
            self._config.store.workflows_dir = Path(workflows_dir)

        cloned_dir = os.getenv("N8N_CLONED_DIR")
        if cloned_dir:
            self._config.store.cloned_dir = Path(cloned_dir)

        n8n_url = os.getenv("N8N_URL")
        if n8n_url:
            self._config.network.n8n_url = n8n_url

        debug = os.getenv("N8N_WORKFLOWS_DEBUG")
        if debug:
            self._config.debug = debug.strip().lower() in _TRUE_VALUES

    @property
    def config(self) -> AppConfig:
        """Provides read-only access to the current application configuration."""
        return self._config


# --- Global Instance ---

config_manager = ConfigManager()
