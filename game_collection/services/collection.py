"""Collection service tying the library, the profile and persistence together."""

import structlog

from ..models import Game, GameGenre, GameLibrary, GamePlatform, UserProfile
from .data_manager import DataManager

log = structlog.stdlib.get_logger()


class CollectionService:
    """Operations the console shell performs on the user's collection.

    The library and profile are owned by this service for the length of a
    session: loaded at startup, mutated in place, saved on exit.
    """

    def __init__(self, library: GameLibrary, profile: UserProfile, data_manager: DataManager) -> None:
        self.library = library
        self.profile = profile
        self.data_manager = data_manager

    @classmethod
    def load(cls, data_manager: DataManager) -> "CollectionService":
        """Create a service from the last saved collection (or defaults)."""
        games, profile = data_manager.load()
        return cls(GameLibrary(games), profile, data_manager)

    def add_game(self, game: Game, save: bool = True) -> bool:
        """Add a game to the library and the profile.

        Returns:
            The save result when ``save`` is set, otherwise True
        """
        self.library.add(game)
        self.profile.add_game(game)
        log.info("Game added", game_id=game.game_id, title=game.title, mode=game.mode.value)
        if save:
            return self.save()
        return True

    def remove_game(self, game: Game) -> bool:
        """Remove a game from the profile; the library keeps its entry."""
        removed = self.profile.remove_game(game)
        if removed:
            log.info("Game removed", game_id=game.game_id, title=game.title)
        return removed

    def find_owned(self, title: str) -> list[Game]:
        return self.profile.search_by_title(title)

    def update_progress(self, game: Game, data: str) -> str:
        """Update a game's progress and return the new progress text.

        Raises:
            FormatError: If ``data`` is not numeric where a number is expected
            ValidationError: If the values are out of range or malformed
        """
        game.update_progress(data)
        progress = game.get_progress()
        log.info("Progress updated", game_id=game.game_id, progress=progress)
        return progress

    def add_sample_games(self) -> list[Game]:
        """Seed the collection with a few well-known games (not saved)."""
        samples = [
            Game.single_player(
                "The Legend of Zelda: Breath of the Wild",
                GameGenre.ACTION_ADVENTURE,
                GamePlatform.NINTENDO_SWITCH,
                2017,
                "Nintendo",
                120,
            ),
            Game.single_player(
                "God of War",
                GameGenre.ACTION_ADVENTURE,
                GamePlatform.PLAYSTATION_4,
                2018,
                "Santa Monica Studio",
                26,
            ),
            Game.multiplayer(
                "Fortnite",
                GameGenre.BATTLE_ROYALE,
                GamePlatform.MULTIPLE,
                2017,
                "Epic Games",
            ),
            Game.multiplayer(
                "Call of Duty: Warzone",
                GameGenre.BATTLE_ROYALE,
                GamePlatform.MULTIPLE,
                2020,
                "Infinity Ward",
            ),
        ]
        for game in samples:
            self.add_game(game, save=False)
        return samples

    def save(self) -> bool:
        return self.data_manager.save(self.library.get_all(), self.profile)

    def reset(self) -> bool:
        """Delete every saved record and start over with an empty collection.

        In-memory state is only reset when the records were deleted.
        """
        if not self.data_manager.delete_all():
            log.warning("Reset aborted, saved data could not be deleted")
            return False
        self.library.replace_all([])
        self.profile = self.data_manager.default_profile()
        log.info("Collection reset")
        return True
