"""Data models for the game collection application."""

from .config import AppConfig
from .enums import GameGenre, GameMode, GamePlatform
from .game import (
    Game,
    GameDetails,
    MultiplayerProgress,
    Progress,
    ProgressTracker,
    SinglePlayerProgress,
)
from .library import GameLibrary
from .profile import MAX_RATING, MIN_RATING, UserProfile

__all__ = [
    "AppConfig",
    "Game",
    "GameDetails",
    "GameGenre",
    "GameLibrary",
    "GameMode",
    "GamePlatform",
    "MAX_RATING",
    "MIN_RATING",
    "MultiplayerProgress",
    "Progress",
    "ProgressTracker",
    "SinglePlayerProgress",
    "UserProfile",
]
