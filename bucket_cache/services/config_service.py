"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..api.exceptions import ConfigError
from ..constants import (
    ENV_BOS_ACCESS_KEY,
    ENV_BOS_ENDPOINT,
    ENV_BOS_SECRET_KEY,
    ENV_S3_ACCESS_KEY,
    ENV_S3_ENDPOINT,
    ENV_S3_REGION,
    ENV_S3_SECRET_KEY,
    INPUT_BUCKET,
    INPUT_COMPRESSION_METHOD,
    INPUT_ENDPOINT,
    INPUT_KEY,
    INPUT_KEY_FILE_NAME,
    INPUT_PATH,
    INPUT_REGION,
    INPUT_RESTORE_KEYS,
    INPUT_STORAGE_TYPE,
    StorageType,
)
from ..core.action_io import get_input, get_list_input
from ..models.config import CacheConfig

logger = logging.getLogger(__name__)

ACTION_INPUTS = [
    INPUT_BUCKET,
    INPUT_PATH,
    INPUT_KEY,
    INPUT_RESTORE_KEYS,
    INPUT_KEY_FILE_NAME,
    INPUT_COMPRESSION_METHOD,
    INPUT_STORAGE_TYPE,
    INPUT_ENDPOINT,
    INPUT_REGION,
    "fail-on-cache-miss",
    "working-dir",
]

# Inputs holding several values, with their separators
LIST_INPUTS = {
    INPUT_PATH: "\n",
    INPUT_RESTORE_KEYS: ",",
}

CREDENTIAL_ENV = {
    StorageType.S3: {
        "access_key": ENV_S3_ACCESS_KEY,
        "secret_key": ENV_S3_SECRET_KEY,
        "region": ENV_S3_REGION,
        "endpoint": ENV_S3_ENDPOINT,
    },
    StorageType.BOS: {
        "access_key": ENV_BOS_ACCESS_KEY,
        "secret_key": ENV_BOS_SECRET_KEY,
        "endpoint": ENV_BOS_ENDPOINT,
    },
}


class ConfigService:
    """
    Builds a CacheConfig from layered sources

    Later layers win: YAML file, then action inputs from the environment,
    then explicit overrides (CLI options). Storage credentials fall back to
    the SDKs' usual environment variables.
    """

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        """Initialize config service

        Args:
            env: Environment mapping, defaults to os.environ
        """
        self.env = os.environ if env is None else env

    def load_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a YAML configuration file

        Args:
            config_path: Path to the YAML file

        Returns:
            Raw configuration dictionary
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {config_path}")

        logger.debug("Loaded configuration file %s", config_path)
        return data

    def load_inputs(self) -> Dict[str, Any]:
        """Collect action inputs that are set in the environment"""
        inputs = {}
        for name in ACTION_INPUTS:
            if name in LIST_INPUTS:
                value = get_list_input(name, LIST_INPUTS[name], self.env)
            else:
                value = get_input(name, self.env)
            if value:
                inputs[name] = value
        return inputs

    def load(self,
             config_path: Optional[Union[str, Path]] = None,
             overrides: Optional[Dict[str, Any]] = None) -> CacheConfig:
        """Build the effective configuration

        Args:
            config_path: Optional YAML configuration file
            overrides: Values that take precedence over every other source

        Returns:
            Validated cache configuration
        """
        data: Dict[str, Any] = {}

        if config_path:
            data.update(self._normalize(self.load_file(config_path)))

        data.update(self._normalize(self.load_inputs()))

        if overrides:
            data.update(self._normalize({k: v for k, v in overrides.items()
                                         if v is not None and v != () and v != []}))

        self._apply_credential_env(data)

        config = CacheConfig.from_dict(data)
        logger.debug("Effective configuration: %s", config.to_dict())
        return config

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
        normalized = {k.replace("-", "_"): v for k, v in data.items()}
        if "path" in normalized:
            normalized["paths"] = normalized.pop("path")
        return normalized

    def _apply_credential_env(self, data: Dict[str, Any]) -> None:
        try:
            storage_type = StorageType(data.get("storage_type") or StorageType.S3.value)
        except ValueError:
            return

        for field_name, env_name in CREDENTIAL_ENV.get(storage_type, {}).items():
            if not data.get(field_name) and self.env.get(env_name):
                data[field_name] = self.env[env_name]
