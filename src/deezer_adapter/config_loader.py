"""
ConfigLoader module for loading and validating client configuration
"""

import logging
import os
import tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Mapping, Optional


DEFAULT_BASE_URL = "https://api.deezer.com"
PACKAGE_LOGGER_NAME = "deezer_adapter"
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


@dataclass
class RateLimitSettings:
    """Sliding window quota enforced before every request"""
    max_requests: int = 50
    window_seconds: float = 5.0


@dataclass
class RetrySettings:
    """Exponential backoff settings for retryable failures"""
    max_attempts: int = 3
    base_delay_seconds: float = 2.0


@dataclass
class ClientConfig:
    """Configuration data class for the Deezer client"""
    base_url: str = DEFAULT_BASE_URL
    headers: Dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 10.0
    rate_limits: RateLimitSettings = field(default_factory=RateLimitSettings)
    retries: RetrySettings = field(default_factory=RetrySettings)
    logging: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """Loads and validates client configuration from TOML files or the environment"""

    # Required configuration sections and their mandatory keys
    REQUIRED_SECTIONS = {
        'api': ['base_url'],
    }

    # Optional sections that can have default empty values
    OPTIONAL_SECTIONS = [
        'headers',
        'rate_limits',
        'retries',
        'logging'
    ]

    ENVIRONMENT_VARIABLES = {
        'base_url': 'DEEZER_BASE_URL',
        'accept_language': 'DEEZER_ACCEPT_LANGUAGE',
        'timeout_seconds': 'DEEZER_TIMEOUT',
        'max_attempts': 'DEEZER_MAX_RETRIES',
    }

    @staticmethod
    def default_config() -> ClientConfig:
        """Return the configuration matching the public service contract"""
        return ClientConfig()

    @staticmethod
    def load_toml_config(config_path: Path) -> ClientConfig:
        """
        Load client configuration from TOML file

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            ClientConfig object with all configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file is not valid TOML or required configuration is missing
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'rb') as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}") from e

        ConfigLoader._validate_required_sections(config_data)

        api_section = config_data['api']
        rate_limits = config_data.get('rate_limits', {})
        retries = config_data.get('retries', {})

        return ClientConfig(
            base_url=ConfigLoader._normalise_base_url(api_section['base_url']),
            headers={str(k): str(v) for k, v in config_data.get('headers', {}).items()},
            timeout_seconds=ConfigLoader._positive_number(
                api_section.get('timeout_seconds', 10.0), 'api.timeout_seconds'),
            rate_limits=RateLimitSettings(
                max_requests=int(ConfigLoader._positive_number(
                    rate_limits.get('max_requests', 50), 'rate_limits.max_requests')),
                window_seconds=ConfigLoader._positive_number(
                    rate_limits.get('window_seconds', 5.0), 'rate_limits.window_seconds'),
            ),
            retries=RetrySettings(
                max_attempts=int(ConfigLoader._positive_number(
                    retries.get('max_attempts', 3), 'retries.max_attempts')),
                base_delay_seconds=ConfigLoader._non_negative_number(
                    retries.get('base_delay_seconds', 2.0), 'retries.base_delay_seconds'),
            ),
            logging=config_data.get('logging', {})
        )

    @staticmethod
    def load_environment_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Build client configuration from DEEZER_* environment variables

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            ClientConfig with environment overrides applied to the defaults

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        names = ConfigLoader.ENVIRONMENT_VARIABLES
        config = ConfigLoader.default_config()

        base_url = environ.get(names['base_url'])
        if base_url:
            config.base_url = ConfigLoader._normalise_base_url(base_url)

        language = environ.get(names['accept_language'])
        if language:
            config.headers['Accept-Language'] = language

        timeout = environ.get(names['timeout_seconds'])
        if timeout:
            config.timeout_seconds = ConfigLoader._positive_number(timeout, names['timeout_seconds'])

        max_attempts = environ.get(names['max_attempts'])
        if max_attempts:
            config.retries.max_attempts = int(
                ConfigLoader._positive_number(max_attempts, names['max_attempts']))

        return config

    @staticmethod
    def _validate_required_sections(config_data: Dict[str, Any]) -> None:
        """
        Validate that all required configuration sections and keys are present

        Args:
            config_data: Parsed TOML configuration data

        Raises:
            ConfigurationError: If any required section or key is missing
        """
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_SECTIONS.items():
            if section_name not in config_data:
                missing_items.append(f"Section [{section_name}]")
            else:
                section_data = config_data[section_name]
                for key in required_keys:
                    if key not in section_data:
                        missing_items.append(f"Key '{key}' in section [{section_name}]")

        for section_name in ConfigLoader.OPTIONAL_SECTIONS:
            if section_name in config_data and not isinstance(config_data[section_name], dict):
                missing_items.append(f"Section [{section_name}] must be a table")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def _normalise_base_url(base_url: str) -> str:
        return str(base_url).rstrip('/')

    @staticmethod
    def _positive_number(value: Any, name: str) -> float:
        number = ConfigLoader._non_negative_number(value, name)
        if number == 0:
            raise ConfigurationError(f"'{name}' must be greater than zero")
        return number

    @staticmethod
    def _non_negative_number(value: Any, name: str) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"'{name}' must be a number, got {value!r}")
        if number < 0:
            raise ConfigurationError(f"'{name}' must not be negative")
        return number


def configure_logging(settings: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Attach handlers to the package logger from a [logging] settings table

    Args:
        settings: Mapping with optional 'level', 'format' and 'file' keys

    Returns:
        The configured package logger
    """
    settings = settings or {}
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    level = logging.getLevelName(str(settings.get('level', 'INFO')).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown logging level: {settings.get('level')}")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(settings.get('format', DEFAULT_LOG_FORMAT))
    handlers = [logging.StreamHandler()]
    if settings.get('file'):
        log_file = Path(settings['file'])
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
