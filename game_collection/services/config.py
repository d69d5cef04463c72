"""Configuration service for managing application settings."""

import json
from pathlib import Path

import structlog

from ..errors import ConfigurationError
from ..models import AppConfig

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "game-collection" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self.get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self.get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self.get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ConfigurationError: If the configuration is invalid
            OSError: If the file cannot be written
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                current_value=validation_result.errors,
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self._config_to_dict(config), f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully", config_path=str(self.config_path))

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.data_directory, Path):
            errors.append("data_directory must be a Path object")

        for name, value in (("games_file", config.games_file), ("profile_file", config.profile_file)):
            if not isinstance(value, str) or not value.strip():
                errors.append(f"{name} cannot be empty")
            elif "/" in value or "\\" in value or value in (".", ".."):
                errors.append(f"{name} must be a plain file name")

        if config.games_file == config.profile_file:
            errors.append("games_file and profile_file must be different")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if not isinstance(config.default_username, str) or not config.default_username.strip():
            errors.append("default_username cannot be empty")

        return ValidationResult(len(errors) == 0, errors)

    def get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig(
            data_directory=Path.home() / ".game-collection",
            games_file="gamedata.json",
            profile_file="profiledata.json",
            log_level="INFO",
            default_username="Guest",
        )

    def _config_to_dict(self, config: AppConfig) -> dict[str, str]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "data_directory": str(config.data_directory),
            "games_file": config.games_file,
            "profile_file": config.profile_file,
            "log_level": config.log_level,
            "default_username": config.default_username,
        }

    def _dict_to_config(self, data: dict[str, str]) -> AppConfig:
        """Convert dictionary to AppConfig, filling missing keys with defaults."""
        defaults = self.get_default_config()

        log_level_raw = data.get("log_level", defaults.log_level)
        log_level = log_level_raw.upper() if isinstance(log_level_raw, str) else defaults.log_level

        return AppConfig(
            data_directory=Path(str(data["data_directory"])).expanduser(),
            games_file=str(data.get("games_file", defaults.games_file)),
            profile_file=str(data.get("profile_file", defaults.profile_file)),
            log_level=log_level,
            default_username=str(data.get("default_username", defaults.default_username)),
        )
