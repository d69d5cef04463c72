"""Closed value sets for game classification."""

from enum import Enum
from typing import Self


class _DisplayNameEnum(Enum):
    """Enum whose value is a human-readable display name."""

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, name: str | None) -> Self:
        """Find a member by display name (case-insensitive), defaulting to OTHER."""
        if name is not None:
            wanted = name.strip().casefold()
            for member in cls:
                if member.value.casefold() == wanted:
                    return member
        return cls["OTHER"]

    @classmethod
    def display_names(cls) -> list[str]:
        return [member.value for member in cls]

    def __str__(self) -> str:
        return self.value


class GameGenre(_DisplayNameEnum):
    """Video game genres."""
    ACTION = "Action"
    ADVENTURE = "Adventure"
    ACTION_ADVENTURE = "Action-Adventure"
    ROLE_PLAYING = "Role-Playing"
    SIMULATION = "Simulation"
    STRATEGY = "Strategy"
    SPORTS = "Sports"
    PUZZLE = "Puzzle"
    IDLE = "Idle"
    BATTLE_ROYALE = "Battle Royale"
    SHOOTER = "Shooter"
    RACING = "Racing"
    FIGHTING = "Fighting"
    HORROR = "Horror"
    PLATFORMER = "Platformer"
    OPEN_WORLD = "Open World"
    SURVIVAL = "Survival"
    MMORPG = "MMORPG"
    OTHER = "Other"


class GamePlatform(_DisplayNameEnum):
    """Gaming platforms."""
    PC = "PC"
    PLAYSTATION_4 = "PlayStation 4"
    PLAYSTATION_5 = "PlayStation 5"
    XBOX_ONE = "Xbox One"
    XBOX_SERIES_X = "Xbox Series X"
    NINTENDO_SWITCH = "Nintendo Switch"
    MOBILE = "Mobile"
    MULTIPLE = "Multiple Platforms"
    OTHER = "Other"


class GameMode(Enum):
    """Progress-tracking variant of a game."""
    SINGLE_PLAYER = "single_player"
    MULTIPLAYER = "multiplayer"

    @property
    def label(self) -> str:
        return "Single Player" if self is GameMode.SINGLE_PLAYER else "Multiplayer"
