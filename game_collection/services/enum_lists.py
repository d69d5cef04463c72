"""Persistence for the genre and platform name lists."""

from pathlib import Path

import structlog

from ..models import GameGenre, GamePlatform
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

GENRE_FILE = "genres.txt"
PLATFORM_FILE = "platforms.txt"


class EnumListService:
    """Saves and loads the display-name lists offered when adding a game.

    Loading falls back to the built-in enum names when a list has never been
    saved or cannot be read.
    """

    def __init__(self, data_directory: Path, filesystem: FileSystemService | None = None) -> None:
        self.data_directory = data_directory
        self.filesystem = filesystem or FileSystemService(base_path=data_directory)

    @property
    def genre_path(self) -> Path:
        return self.data_directory / GENRE_FILE

    @property
    def platform_path(self) -> Path:
        return self.data_directory / PLATFORM_FILE

    def save_genres(self, genres: list[str]) -> bool:
        return self._save(genres, self.genre_path, "genres")

    def load_genres(self) -> list[str]:
        return self._load(self.genre_path, GameGenre.display_names(), "genres")

    def save_platforms(self, platforms: list[str]) -> bool:
        return self._save(platforms, self.platform_path, "platforms")

    def load_platforms(self) -> list[str]:
        return self._load(self.platform_path, GamePlatform.display_names(), "platforms")

    def delete_enum_files(self) -> bool:
        """Delete both list files. Returns False if either deletion failed."""
        success = True
        for path in (self.genre_path, self.platform_path):
            try:
                self.filesystem.delete_file(path, missing_ok=True)
            except OSError as e:
                log.warning("Failed to delete list file", path=str(path), error=str(e))
                success = False
        return success

    def _save(self, items: list[str], path: Path, item_type: str) -> bool:
        try:
            self.filesystem.save_lines(items, path)
        except OSError as e:
            log.error("Failed to save list", item_type=item_type, path=str(path), error=str(e))
            return False
        log.info("List saved", item_type=item_type, count=len(items), path=str(path))
        return True

    def _load(self, path: Path, defaults: list[str], item_type: str) -> list[str]:
        try:
            items = self.filesystem.load_lines(path)
        except FileNotFoundError:
            log.info("List file not found, using defaults", item_type=item_type)
            return defaults
        except (OSError, UnicodeDecodeError) as e:
            log.error("Failed to load list, using defaults", item_type=item_type, path=str(path), error=str(e))
            return defaults
        log.info("List loaded", item_type=item_type, count=len(items), path=str(path))
        return items
