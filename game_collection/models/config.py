"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    data_directory: Path
    games_file: str = "gamedata.json"
    profile_file: str = "profiledata.json"
    log_level: str = "INFO"
    default_username: str = "Guest"

    @property
    def games_path(self) -> Path:
        return self.data_directory / self.games_file

    @property
    def profile_path(self) -> Path:
        return self.data_directory / self.profile_file
