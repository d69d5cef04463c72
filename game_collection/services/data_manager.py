"""Persistence gateway for the game library and user profile."""

from pathlib import Path
from typing import Any

import structlog

from ..errors import AppError, PersistenceError
from ..models import (
    AppConfig,
    Game,
    GameDetails,
    GameGenre,
    GameMode,
    GamePlatform,
    MultiplayerProgress,
    SinglePlayerProgress,
    UserProfile,
)
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

RECORD_VERSION = 1

# Everything a corrupt or unreadable record can raise while being decoded.
_LOAD_ERRORS = (OSError, ValueError, KeyError, TypeError, AttributeError, AppError)


class DataManager:
    """Saves and loads the catalog and profile as two independent JSON records.

    ``save`` and ``delete_all`` report failure through their return value and
    ``load`` falls back to defaults, so storage problems never reach the
    caller as exceptions. The most recent failure is kept in ``last_error``.
    """

    def __init__(self, config: AppConfig, filesystem: FileSystemService | None = None) -> None:
        self.config = config
        self.filesystem = filesystem or FileSystemService(base_path=config.data_directory)
        self.last_error: PersistenceError | None = None

    @property
    def games_path(self) -> Path:
        return self.config.games_path

    @property
    def profile_path(self) -> Path:
        return self.config.profile_path

    def default_profile(self) -> UserProfile:
        return UserProfile(self.config.default_username, GamePlatform.OTHER)

    def save(self, games: list[Game], profile: UserProfile) -> bool:
        """Write both records; a failure in one still attempts the other.

        Returns:
            True only if both records were written
        """
        self.last_error = None
        games_saved = self._write(
            "games",
            self.games_path,
            {"version": RECORD_VERSION, "games": [self._game_to_dict(game) for game in games]},
        )
        profile_saved = self._write("profile", self.profile_path, self._profile_to_dict(profile))

        if games_saved and profile_saved:
            log.info("Collection saved", games=len(games), username=profile.username)
        return games_saved and profile_saved

    def load(self) -> tuple[list[Game], UserProfile]:
        """Return the last saved catalog and profile.

        A missing or unreadable record is replaced by its default (an empty
        catalog, or the default profile) without raising.
        """
        self.last_error = None
        games = self._load_games()
        profile = self._load_profile(games)

        log.info(
            "Collection loaded",
            games=len(games),
            username=profile.username,
            games_owned=len(profile.games_owned),
        )
        return games, profile

    def delete_all(self) -> bool:
        """Delete both records. Records that do not exist are not failures."""
        self.last_error = None
        success = True
        for name, path in (("games", self.games_path), ("profile", self.profile_path)):
            try:
                self.filesystem.delete_file(path, missing_ok=True)
            except OSError as e:
                self._record_failure(f"Failed to delete {name} data", e, path, "delete")
                success = False
        return success

    def _write(self, name: str, path: Path, data: dict[str, Any]) -> bool:
        try:
            self.filesystem.save_json(data, path)
            return True
        except (OSError, ValueError) as e:
            self._record_failure(f"Failed to save {name} data", e, path, "save")
            return False

    def _load_games(self) -> list[Game]:
        try:
            data = self.filesystem.load_json(self.games_path)
        except FileNotFoundError:
            log.info("Game file not found, starting with an empty library", path=str(self.games_path))
            return []
        except _LOAD_ERRORS as e:
            self._record_failure("Failed to load games", e, self.games_path, "load")
            return []

        try:
            return self._dict_to_games(data["games"])
        except _LOAD_ERRORS as e:
            self._record_failure("Failed to decode games", e, self.games_path, "load")
            return []

    def _load_profile(self, catalog: list[Game]) -> UserProfile:
        try:
            data = self.filesystem.load_json(self.profile_path)
        except FileNotFoundError:
            log.info("Profile file not found, starting with the default profile", path=str(self.profile_path))
            return self.default_profile()
        except _LOAD_ERRORS as e:
            self._record_failure("Failed to load profile", e, self.profile_path, "load")
            return self.default_profile()

        try:
            return self._dict_to_profile(data, catalog)
        except _LOAD_ERRORS as e:
            self._record_failure("Failed to decode profile", e, self.profile_path, "load")
            return self.default_profile()

    def _record_failure(self, message: str, error: Exception, path: Path, operation: str) -> None:
        self.last_error = PersistenceError(message, original_error=error, path=str(path), operation=operation)
        log.error(
            message,
            path=str(path),
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
        )

    @staticmethod
    def _game_to_dict(game: Game) -> dict[str, Any]:
        """Convert a Game to a JSON-serializable dictionary."""
        progress = game.progress_state
        if isinstance(progress, SinglePlayerProgress):
            progress_data = {
                "total_levels": progress.total_levels,
                "levels_completed": progress.levels_completed,
            }
        else:
            progress_data = {"wins": progress.wins, "losses": progress.losses}

        return {
            "id": game.game_id,
            "mode": game.mode.value,
            "title": game.title,
            "genre": game.genre.display_name,
            "platform": game.platform.display_name,
            "release_year": game.release_year,
            "developer": game.developer,
            "progress": progress_data,
        }

    @staticmethod
    def _dict_to_game(data: dict[str, Any]) -> Game:
        """Convert a dictionary back to a Game, keeping its id."""
        details = GameDetails(
            title=data["title"],
            genre=GameGenre.from_string(data["genre"]),
            platform=GamePlatform.from_string(data["platform"]),
            release_year=int(data["release_year"]),
            developer=data["developer"],
        )
        progress_data = data["progress"]
        mode = GameMode(data["mode"])
        if mode is GameMode.SINGLE_PLAYER:
            progress = SinglePlayerProgress(
                total_levels=int(progress_data["total_levels"]),
                levels_completed=int(progress_data["levels_completed"]),
            )
        else:
            progress = MultiplayerProgress(
                wins=int(progress_data["wins"]),
                losses=int(progress_data["losses"]),
            )
        return Game(details, progress, game_id=int(data["id"]))

    def _dict_to_games(self, entries: list[dict[str, Any]], known: dict[int, Game] | None = None) -> list[Game]:
        """Rebuild games, giving every entry with the same id the same instance."""
        by_id = {} if known is None else known
        games = []
        for entry in entries:
            game_id = int(entry["id"])
            game = by_id.get(game_id)
            if game is None:
                game = self._dict_to_game(entry)
                by_id[game_id] = game
            games.append(game)
        return games

    def _profile_to_dict(self, profile: UserProfile) -> dict[str, Any]:
        return {
            "version": RECORD_VERSION,
            "username": profile.username,
            "preferred_platform": profile.preferred_platform.display_name,
            "games": [self._game_to_dict(game) for game in profile.games_owned],
            "ratings": {str(game_id): rating for game_id, rating in profile.game_ratings.items()},
            "reviews": {str(game_id): review for game_id, review in profile.game_reviews.items()},
        }

    def _dict_to_profile(self, data: dict[str, Any], catalog: list[Game]) -> UserProfile:
        """Rebuild a profile, re-linking owned games to their catalog instances."""
        profile = UserProfile(data["username"], GamePlatform.from_string(data["preferred_platform"]))

        catalog_by_id = {game.game_id: game for game in catalog}
        for game in self._dict_to_games(data["games"], catalog_by_id):
            profile.add_game(game)

        profile.restore_ratings(
            {int(game_id): int(rating) for game_id, rating in data.get("ratings", {}).items()},
            {int(game_id): review for game_id, review in data.get("reviews", {}).items()},
        )
        return profile
