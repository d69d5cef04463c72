"""User profile: owned games, ratings and reviews."""

import structlog

from ..errors import ValidationError
from .enums import GameGenre, GamePlatform
from .game import Game

log = structlog.stdlib.get_logger()

MIN_RATING = 1
MAX_RATING = 5


class UserProfile:
    """A user's owned subset of the catalog plus their ratings and reviews.

    Ratings and reviews are keyed by ``Game.game_id`` and only exist for games
    that are currently owned. Every collection returned by this class is a
    copy. Not thread-safe.
    """

    def __init__(self, username: str, preferred_platform: GamePlatform | str | None = GamePlatform.OTHER) -> None:
        self._username = self._validate_username(username)
        self._preferred_platform = self._coerce_platform(preferred_platform)
        self._games_owned: list[Game] = []
        self._game_ratings: dict[int, int] = {}
        self._game_reviews: dict[int, str] = {}

    @staticmethod
    def _validate_username(username: str) -> str:
        if not isinstance(username, str) or not username.strip():
            raise ValidationError("Username cannot be empty", field="username", value=username)
        return username

    @staticmethod
    def _coerce_platform(platform: GamePlatform | str | None) -> GamePlatform:
        if isinstance(platform, GamePlatform):
            return platform
        return GamePlatform.from_string(platform)

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        self._username = self._validate_username(value)

    @property
    def preferred_platform(self) -> GamePlatform:
        return self._preferred_platform

    @preferred_platform.setter
    def preferred_platform(self, value: GamePlatform | str | None) -> None:
        self._preferred_platform = self._coerce_platform(value)

    @property
    def games_owned(self) -> list[Game]:
        return list(self._games_owned)

    @property
    def game_ratings(self) -> dict[int, int]:
        return dict(self._game_ratings)

    @property
    def game_reviews(self) -> dict[int, str]:
        return dict(self._game_reviews)

    def owns(self, game: Game | None) -> bool:
        if game is None:
            return False
        return any(owned is game for owned in self._games_owned)

    def add_game(self, game: Game | None) -> None:
        """Add a game to the collection. Adding an owned game again is a no-op."""
        if game is None:
            raise ValidationError("Game cannot be empty", field="game")
        if self.owns(game):
            return
        self._games_owned.append(game)
        log.debug("Game added to profile", username=self._username, game_id=game.game_id)

    def remove_game(self, game: Game | None) -> bool:
        """Remove a game along with its rating and review.

        Returns:
            True if the game was owned and has been removed
        """
        if not self.owns(game):
            return False
        self._games_owned = [owned for owned in self._games_owned if owned is not game]
        self._game_ratings.pop(game.game_id, None)
        self._game_reviews.pop(game.game_id, None)
        log.debug("Game removed from profile", username=self._username, game_id=game.game_id)
        return True

    def rate_game(self, game: Game | None, rating: int) -> None:
        """Add or replace the 1-5 rating of an owned game."""
        if game is None:
            raise ValidationError("Game cannot be empty", field="game")
        if not self.owns(game):
            raise ValidationError("You can only rate games you own", field="game", value=game.title)
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                field="rating",
                value=rating,
                constraints=[f"{MIN_RATING} <= rating <= {MAX_RATING}"],
            )
        self._game_ratings[game.game_id] = rating

    def review_game(self, game: Game | None, review: str) -> None:
        """Add or replace the review of an owned game."""
        if game is None:
            raise ValidationError("Game cannot be empty", field="game")
        if not isinstance(review, str) or not review.strip():
            raise ValidationError("Review cannot be empty", field="review", value=review)
        if not self.owns(game):
            raise ValidationError("You can only review games you own", field="game", value=game.title)
        self._game_reviews[game.game_id] = review

    def get_game_rating(self, game: Game | None) -> int | None:
        if game is None:
            return None
        return self._game_ratings.get(game.game_id)

    def get_game_review(self, game: Game | None) -> str | None:
        if game is None:
            return None
        return self._game_reviews.get(game.game_id)

    def search_by_title(self, query: str | None) -> list[Game]:
        """Case-insensitive substring search. A blank query matches nothing."""
        if not query or not query.strip():
            return []
        needle = query.lower()
        return [game for game in self._games_owned if needle in game.title.lower()]

    def search_by_genre(self, genre: GameGenre | None) -> list[Game]:
        if genre is None:
            return []
        return [game for game in self._games_owned if game.genre is genre]

    def search_by_platform(self, platform: GamePlatform | None) -> list[Game]:
        if platform is None:
            return []
        return [game for game in self._games_owned if game.platform is platform]

    def sorted_by_title(self, ascending: bool = True) -> list[Game]:
        return sorted(self._games_owned, key=lambda game: game.title, reverse=not ascending)

    def sorted_by_release_year(self, ascending: bool = True) -> list[Game]:
        return sorted(self._games_owned, key=lambda game: game.release_year, reverse=not ascending)

    def sorted_by_rating(self, ascending: bool = True) -> list[Game]:
        """Sort by rating; unrated games always come last, in owned order."""
        rated = [game for game in self._games_owned if game.game_id in self._game_ratings]
        unrated = [game for game in self._games_owned if game.game_id not in self._game_ratings]
        rated.sort(key=lambda game: self._game_ratings[game.game_id], reverse=not ascending)
        return rated + unrated

    def average_rating(self) -> float:
        if not self._game_ratings:
            return 0.0
        return sum(self._game_ratings.values()) / len(self._game_ratings)

    def restore_ratings(self, ratings: dict[int, int], reviews: dict[int, str]) -> None:
        """Re-apply saved ratings and reviews, skipping games no longer owned."""
        by_id = {game.game_id: game for game in self._games_owned}
        for game_id, rating in ratings.items():
            if game_id in by_id:
                self.rate_game(by_id[game_id], rating)
        for game_id, review in reviews.items():
            if game_id in by_id:
                self.review_game(by_id[game_id], review)

    def __str__(self) -> str:
        return (
            f"UserProfile(username='{self._username}', preferred_platform='{self._preferred_platform}', "
            f"games_owned={len(self._games_owned)}, reviews={len(self._game_reviews)}, "
            f"ratings={len(self._game_ratings)})"
        )
