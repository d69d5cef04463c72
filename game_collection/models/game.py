"""Game entity with single-player and multiplayer progress tracking."""

import itertools
from dataclasses import dataclass
from typing import Protocol

from ..errors import FormatError, ValidationError
from .enums import GameGenre, GameMode, GamePlatform

MIN_RELEASE_YEAR = 1950
MAX_RELEASE_YEAR = 2100

_id_counter = itertools.count(1)


def next_game_id() -> int:
    """Allocate a new, never-before-used game id."""
    return next(_id_counter)


def reserve_game_ids(highest: int) -> None:
    """Advance the id counter so later games are numbered after ``highest``."""
    global _id_counter
    upcoming = next(_id_counter)
    _id_counter = itertools.count(max(upcoming, highest + 1))


def _parse_int(text: str, field: str) -> int:
    try:
        return int(text.strip())
    except (AttributeError, ValueError) as e:
        raise FormatError(f"{field} must be a valid integer", field=field, value=text) from e


@dataclass(frozen=True)
class GameDetails:
    """Descriptive fields shared by every game."""
    title: str
    genre: GameGenre
    platform: GamePlatform
    release_year: int
    developer: str

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Title cannot be empty", field="title", value=self.title)
        if self.genre is None:
            raise ValidationError("Genre cannot be empty", field="genre")
        if not isinstance(self.genre, GameGenre):
            raise ValidationError("Genre must be one of the known genres", field="genre", value=self.genre)
        if self.platform is None:
            raise ValidationError("Platform cannot be empty", field="platform")
        if not isinstance(self.platform, GamePlatform):
            raise ValidationError("Platform must be one of the known platforms", field="platform", value=self.platform)
        if isinstance(self.release_year, bool) or not isinstance(self.release_year, int):
            raise ValidationError("Release year must be a whole number", field="release_year", value=self.release_year)
        if not MIN_RELEASE_YEAR <= self.release_year <= MAX_RELEASE_YEAR:
            raise ValidationError(
                f"Release year must be between {MIN_RELEASE_YEAR} and {MAX_RELEASE_YEAR}",
                field="release_year",
                value=self.release_year,
                constraints=[f"{MIN_RELEASE_YEAR} <= year <= {MAX_RELEASE_YEAR}"],
            )
        if not isinstance(self.developer, str) or not self.developer.strip():
            raise ValidationError("Developer cannot be empty", field="developer", value=self.developer)


class ProgressTracker(Protocol):
    """Capabilities every progress payload provides."""

    mode: GameMode

    def update(self, data: str) -> None: ...

    def describe(self) -> str: ...

    def completion_percentage(self) -> float: ...


class SinglePlayerProgress:
    """Level-based progress. ``total_levels`` is fixed at creation."""

    mode = GameMode.SINGLE_PLAYER

    def __init__(self, total_levels: int, levels_completed: int = 0) -> None:
        if total_levels <= 0:
            raise ValidationError(
                "Total levels must be greater than zero",
                field="total_levels",
                value=total_levels,
            )
        if not 0 <= levels_completed <= total_levels:
            raise ValidationError(
                "Completed levels must be between 0 and total levels",
                field="levels_completed",
                value=levels_completed,
            )
        self._total_levels = total_levels
        self.levels_completed = levels_completed

    @property
    def total_levels(self) -> int:
        return self._total_levels

    def update(self, data: str) -> None:
        """Replace the completed level count with the integer in ``data``."""
        levels = _parse_int(data, "levels_completed")
        if levels < 0:
            raise ValidationError("Completed levels cannot be negative", field="levels_completed", value=levels)
        if levels > self._total_levels:
            raise ValidationError(
                "Completed levels cannot exceed total levels",
                field="levels_completed",
                value=levels,
                constraints=[f"levels <= {self._total_levels}"],
            )
        self.levels_completed = levels

    def describe(self) -> str:
        return f"{self.levels_completed}/{self._total_levels} Levels completed"

    def completion_percentage(self) -> float:
        return self.levels_completed / self._total_levels * 100.0


class MultiplayerProgress:
    """Win/loss record."""

    mode = GameMode.MULTIPLAYER

    def __init__(self, wins: int = 0, losses: int = 0) -> None:
        if wins < 0 or losses < 0:
            raise ValidationError("Wins and losses cannot be negative", field="wins/losses", value=f"{wins}/{losses}")
        self.wins = wins
        self.losses = losses

    def update(self, data: str) -> None:
        """Replace the record with ``"<wins>/<losses>"``."""
        parts = data.split("/") if isinstance(data, str) else []
        if len(parts) != 2:
            raise ValidationError(
                "Progress data must be in format 'wins/losses'",
                field="wins/losses",
                value=data,
            )
        wins = _parse_int(parts[0], "wins")
        losses = _parse_int(parts[1], "losses")
        if wins < 0 or losses < 0:
            raise ValidationError("Wins and losses cannot be negative", field="wins/losses", value=data)
        self.wins = wins
        self.losses = losses

    def describe(self) -> str:
        return f"W/L: {self.wins}/{self.losses}"

    def win_rate(self) -> float:
        total = self.wins + self.losses
        if total == 0:
            return 0.0
        return self.wins / total * 100.0

    def completion_percentage(self) -> float:
        return self.win_rate()


Progress = SinglePlayerProgress | MultiplayerProgress


class Game:
    """A game in the collection.

    Equality and hashing are by identity: two games with identical details
    are still different entries. ``game_id`` is the stable key used for
    ratings, reviews and persistence.
    """

    def __init__(self, details: GameDetails, progress: Progress, game_id: int | None = None) -> None:
        self._details = details
        self._progress = progress
        if game_id is None:
            game_id = next_game_id()
        else:
            reserve_game_ids(game_id)
        self._game_id = game_id

    @classmethod
    def single_player(
        cls,
        title: str,
        genre: GameGenre | str | None,
        platform: GamePlatform | str | None,
        release_year: int,
        developer: str,
        total_levels: int,
    ) -> "Game":
        details = GameDetails(title, _genre(genre), _platform(platform), release_year, developer)
        return cls(details, SinglePlayerProgress(total_levels))

    @classmethod
    def multiplayer(
        cls,
        title: str,
        genre: GameGenre | str | None,
        platform: GamePlatform | str | None,
        release_year: int,
        developer: str,
    ) -> "Game":
        details = GameDetails(title, _genre(genre), _platform(platform), release_year, developer)
        return cls(details, MultiplayerProgress())

    @property
    def game_id(self) -> int:
        return self._game_id

    @property
    def details(self) -> GameDetails:
        return self._details

    @property
    def title(self) -> str:
        return self._details.title

    @property
    def genre(self) -> GameGenre:
        return self._details.genre

    @property
    def platform(self) -> GamePlatform:
        return self._details.platform

    @property
    def release_year(self) -> int:
        return self._details.release_year

    @property
    def developer(self) -> str:
        return self._details.developer

    @property
    def mode(self) -> GameMode:
        return self._progress.mode

    @property
    def progress_state(self) -> Progress:
        return self._progress

    def update_progress(self, data: str) -> None:
        """Parse ``data`` for this game's mode and replace its progress.

        Raises:
            FormatError: If a number in ``data`` cannot be parsed
            ValidationError: If the values are out of range or malformed
        """
        self._progress.update(data)

    def get_progress(self) -> str:
        return self._progress.describe()

    def completion_percentage(self) -> float:
        return self._progress.completion_percentage()

    def __str__(self) -> str:
        return (
            f"Game: {self.title} ({self.release_year}) by {self.developer}"
            f" - Genre: {self.genre}, Platform: {self.platform}"
            f" - {self.mode.label} - {self.get_progress()}"
        )

    def __repr__(self) -> str:
        return f"Game(game_id={self._game_id}, title={self.title!r}, mode={self.mode.value})"


def _genre(value: GameGenre | str | None) -> GameGenre | None:
    if isinstance(value, str):
        return GameGenre.from_string(value)
    return value


def _platform(value: GamePlatform | str | None) -> GamePlatform | None:
    if isinstance(value, str):
        return GamePlatform.from_string(value)
    return value
