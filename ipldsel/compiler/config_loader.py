"""Configuration loader for ipldsel.

Parses configuration into kernel config models. Supports two config sources:

1. **kind: Config YAML** (or a plain TOML file), loaded via explicit path or
   ``IPLDSEL_CONFIG_PATH`` env var.
2. **pyproject.toml [tool.ipldsel]**, auto-discovered in the working
   directory and its parents.

Environment variables override file values; when nothing is found the
defaults are used.
"""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, cast

import yaml

from ipldsel.kernel.config.models import IpldSelConfig, LoggingConfig, StoreConfig
from ipldsel.kernel.exceptions import ConfigurationError
from ipldsel.kernel.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Parse boolean from environment variable value.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string
    """
    normalized = value.lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> IpldSelConfig:
    """Cached configuration loader."""
    loader = ConfigLoader()
    return loader._load_and_parse(Path(path_str))


def clear_config_cache() -> None:
    """Forget previously loaded configuration files."""
    _load_and_parse_cached.cache_clear()


def get_default_config() -> IpldSelConfig:
    """Defaults with environment overrides applied."""
    return ConfigLoader()._parse_config({})


class ConfigLoader:
    """Loads and processes ipldsel configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> IpldSelConfig:
        """Load configuration from YAML or TOML.

        Parameters
        ----------
        path : str | Path | None
            Path to config file. If None, searches using discovery order.

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        """
        config_path = self._find_config_file(path)
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> IpldSelConfig:
        logger.info("Loading configuration from {path}", path=config_path)

        if config_path.suffix in (".yaml", ".yml"):
            return self._load_yaml_config(config_path)
        return self._load_toml_config(config_path)

    def _load_yaml_config(self, config_path: Path) -> IpldSelConfig:
        """Load and parse a kind: Config YAML file.

        Raises
        ------
        ConfigurationError
            If the YAML file is not a valid kind: Config manifest
        """
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                str(config_path), f"expected a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind")
        if kind != "Config":
            raise ConfigurationError(
                str(config_path), f"YAML config must use 'kind: Config', got 'kind: {kind}'"
            )

        spec = data.get("spec", {})
        if not isinstance(spec, dict):
            raise ConfigurationError(str(config_path), "'spec' must be a mapping")

        return self._parse_config(self._substitute_env_vars(spec))

    def _load_toml_config(self, config_path: Path) -> IpldSelConfig:
        with config_path.open("rb") as f:
            data = tomllib.load(f)

        if "tool" in data and "ipldsel" in data.get("tool", {}):
            section = data["tool"]["ipldsel"]
        elif config_path.name == "pyproject.toml":
            logger.warning("No [tool.ipldsel] section found in pyproject.toml, using defaults")
            section = {}
        else:
            section = data

        return self._parse_config(self._substitute_env_vars(section))

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``IPLDSEL_CONFIG_PATH`` env var
        3. ``pyproject.toml`` with ``[tool.ipldsel]`` in CWD or a parent
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("IPLDSEL_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from IPLDSEL_CONFIG_PATH: {}", config_path)
                return config_path
            logger.warning("IPLDSEL_CONFIG_PATH set but file not found: {}", config_path)

        current = Path.cwd()
        for directory in (current, *current.parents):
            pyproject = directory / "pyproject.toml"
            if pyproject.exists():
                with pyproject.open("rb") as f:
                    data = tomllib.load(f)
                if "ipldsel" in data.get("tool", {}):
                    return pyproject

        raise FileNotFoundError(
            "No configuration file found. Provide a kind: Config YAML path, "
            "set IPLDSEL_CONFIG_PATH, or add [tool.ipldsel] to pyproject.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute ``${VAR}`` references in configuration."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name = match.group(1)
                value = os.environ.get(var_name)
                if value is None:
                    logger.debug(
                        "Environment variable ${{{var_name}}} not found, keeping placeholder",
                        var_name=var_name,
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any]) -> IpldSelConfig:
        """Parse format-agnostic configuration data."""
        config = IpldSelConfig()

        if "codecs" in data:
            codecs = data["codecs"]
            if not isinstance(codecs, list) or not all(isinstance(c, str) for c in codecs):
                raise ConfigurationError("codecs", "must be a list of codec names")
            config.codecs = codecs

        config.store = self._parse_store_config(data.get("store", {}))
        config.logging = self._parse_logging_config(data.get("logging", {}))
        return config

    def _parse_store_config(self, store_data: dict[str, Any]) -> StoreConfig:
        """Parse block store configuration.

        Environment variables take precedence over config file values:
        - IPLDSEL_STORE_ADAPTER: Adapter alias (flatfs, memory)
        - IPLDSEL_STORE_PATH: Block directory for the flatfs adapter
        """
        if not isinstance(store_data, dict):
            raise ConfigurationError("store", "must be a mapping")

        adapter = store_data.get("adapter", "flatfs")
        path = store_data.get("path")
        options = store_data.get("options", {})

        if env_adapter := os.getenv("IPLDSEL_STORE_ADAPTER"):
            adapter = env_adapter
            logger.debug("Overriding store adapter from env: {}", adapter)

        if env_path := os.getenv("IPLDSEL_STORE_PATH"):
            path = env_path
            logger.debug("Overriding store path from env: {}", path)

        return StoreConfig(adapter=adapter, path=path, options=dict(options))

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging configuration with environment variable overrides.

        - IPLDSEL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - IPLDSEL_LOG_FORMAT: Output format (console, json, structured, rich)
        - IPLDSEL_LOG_FILE: Optional file path for log output
        - IPLDSEL_LOG_COLOR: Use color output (true/false)
        - IPLDSEL_LOG_TIMESTAMP: Include timestamp (true/false)
        """
        level = logging_data.get("level", "WARNING")
        format_type = logging_data.get("format", "structured")
        output_file = logging_data.get("output_file")
        use_color = logging_data.get("use_color", True)
        include_timestamp = logging_data.get("include_timestamp", True)

        if env_level := os.getenv("IPLDSEL_LOG_LEVEL"):
            level = env_level.upper()
            logger.debug("Overriding log level from env: {}", level)

        if env_format := os.getenv("IPLDSEL_LOG_FORMAT"):
            format_type = env_format.lower()
            logger.debug("Overriding log format from env: {}", format_type)

        if env_file := os.getenv("IPLDSEL_LOG_FILE"):
            output_file = env_file
            logger.debug("Overriding log file from env: {}", output_file)

        if env_color := os.getenv("IPLDSEL_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(env_color)
            except ValueError as e:
                logger.warning("Invalid IPLDSEL_LOG_COLOR value: {}", e)

        if env_timestamp := os.getenv("IPLDSEL_LOG_TIMESTAMP"):
            try:
                include_timestamp = _parse_bool_env(env_timestamp)
            except ValueError as e:
                logger.warning("Invalid IPLDSEL_LOG_TIMESTAMP value: {}", e)

        return LoggingConfig(
            level=cast("Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']", level),
            format=cast("Literal['console', 'json', 'structured', 'rich']", format_type),
            output_file=output_file,
            use_color=use_color,
            include_timestamp=include_timestamp,
        )


def load_config(path: str | Path | None = None) -> IpldSelConfig:
    """Load configuration from file or return defaults.

    An explicit ``path`` that does not exist is an error; failing discovery
    falls back to defaults.
    """
    loader = ConfigLoader()
    try:
        return loader.load_config_file(path)
    except FileNotFoundError:
        if path:
            raise
        logger.info("No configuration file found, using defaults")
        return get_default_config()
