"""Catalog of every game known to the application."""

from collections.abc import Iterable, Iterator

import structlog

from .game import Game

log = structlog.stdlib.get_logger()


class GameLibrary:
    """Ordered registry of all known games, independent of ownership.

    One instance is created at startup and handed to whatever needs it.
    Not thread-safe: mutation from more than one thread needs external locking.
    """

    def __init__(self, games: Iterable[Game] | None = None) -> None:
        self._games: list[Game] = list(games) if games is not None else []

    def add(self, game: Game) -> None:
        """Append a game. Duplicates are allowed at this level."""
        self._games.append(game)
        log.debug("Game added to library", game_id=game.game_id, title=game.title)

    def get_all(self) -> list[Game]:
        """Snapshot of the catalog in insertion order."""
        return list(self._games)

    def replace_all(self, games: Iterable[Game]) -> None:
        """Replace the whole catalog. Used when loading saved data."""
        self._games = list(games)
        log.debug("Library replaced", count=len(self._games))

    def remove(self, game: Game) -> None:
        """Remove ``game`` by identity; does nothing if it is not present."""
        for index, candidate in enumerate(self._games):
            if candidate is game:
                del self._games[index]
                log.debug("Game removed from library", game_id=game.game_id)
                return

    def find_by_id(self, game_id: int) -> Game | None:
        for game in self._games:
            if game.game_id == game_id:
                return game
        return None

    def __len__(self) -> int:
        return len(self._games)

    def __iter__(self) -> Iterator[Game]:
        return iter(self.get_all())
