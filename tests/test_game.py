"""Tests for the game entity and its progress tracking."""

import pytest
from hypothesis import given, strategies as st

from game_collection.errors import FormatError, ValidationError
from game_collection.models import (
    Game,
    GameDetails,
    GameGenre,
    GameMode,
    GamePlatform,
    MultiplayerProgress,
    SinglePlayerProgress,
)


valid_text = st.text(
    min_size=1,
    max_size=50,
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd", "Zs")),
).filter(lambda x: x.strip())

valid_years = st.integers(min_value=1950, max_value=2100)
valid_genres = st.sampled_from(list(GameGenre))
valid_platforms = st.sampled_from(list(GamePlatform))


def make_single_player(total_levels: int = 10) -> Game:
    return Game.single_player("Celeste", GameGenre.PLATFORMER, GamePlatform.PC, 2018, "Maddy Makes Games", total_levels)


def make_multiplayer() -> Game:
    return Game.multiplayer("Rocket League", GameGenre.SPORTS, GamePlatform.PC, 2015, "Psyonix")


@given(
    title=valid_text,
    genre=valid_genres,
    platform=valid_platforms,
    release_year=valid_years,
    developer=valid_text,
    total_levels=st.integers(min_value=1, max_value=1000),
)
def test_single_player_accessors_return_inputs(
    title: str,
    genre: GameGenre,
    platform: GamePlatform,
    release_year: int,
    developer: str,
    total_levels: int,
) -> None:
    """For any valid construction, every accessor returns what was passed in."""
    game = Game.single_player(title, genre, platform, release_year, developer, total_levels)

    assert game.title == title
    assert game.genre is genre
    assert game.platform is platform
    assert game.release_year == release_year
    assert game.developer == developer
    assert game.mode is GameMode.SINGLE_PLAYER
    assert game.progress_state.total_levels == total_levels
    assert game.progress_state.levels_completed == 0


@given(
    title=valid_text,
    genre=valid_genres,
    platform=valid_platforms,
    release_year=valid_years,
    developer=valid_text,
)
def test_multiplayer_accessors_return_inputs(
    title: str,
    genre: GameGenre,
    platform: GamePlatform,
    release_year: int,
    developer: str,
) -> None:
    game = Game.multiplayer(title, genre, platform, release_year, developer)

    assert game.title == title
    assert game.genre is genre
    assert game.platform is platform
    assert game.release_year == release_year
    assert game.developer == developer
    assert game.mode is GameMode.MULTIPLAYER
    assert game.progress_state.wins == 0
    assert game.progress_state.losses == 0


class TestConstructionValidation:
    """Invalid descriptive fields are rejected with ValidationError."""

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_empty_title(self, title: str) -> None:
        with pytest.raises(ValidationError):
            Game.multiplayer(title, GameGenre.ACTION, GamePlatform.PC, 2000, "Dev")

    @pytest.mark.parametrize("developer", ["", "   "])
    def test_empty_developer(self, developer: str) -> None:
        with pytest.raises(ValidationError):
            Game.multiplayer("Title", GameGenre.ACTION, GamePlatform.PC, 2000, developer)

    def test_missing_genre(self) -> None:
        with pytest.raises(ValidationError):
            Game.multiplayer("Title", None, GamePlatform.PC, 2000, "Dev")

    def test_missing_platform(self) -> None:
        with pytest.raises(ValidationError):
            Game.multiplayer("Title", GameGenre.ACTION, None, 2000, "Dev")

    @pytest.mark.parametrize("year", [1949, 2101, 0, -5])
    def test_year_out_of_range(self, year: int) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Game.single_player("Title", GameGenre.ACTION, GamePlatform.PC, year, "Dev", 5)
        assert exc_info.value.field == "release_year"

    @pytest.mark.parametrize("year", ["2017", 2017.0, True, None])
    def test_year_must_be_an_integer(self, year: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GameDetails("Title", GameGenre.ACTION, GamePlatform.PC, year, "Dev")  # type: ignore[arg-type]
        assert exc_info.value.field == "release_year"

    @pytest.mark.parametrize("genre", [3, "Action", GamePlatform.PC])
    def test_genre_must_be_a_genre(self, genre: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GameDetails("Title", genre, GamePlatform.PC, 2000, "Dev")  # type: ignore[arg-type]
        assert exc_info.value.field == "genre"

    @pytest.mark.parametrize("platform", [7, "PC", GameGenre.ACTION])
    def test_platform_must_be_a_platform(self, platform: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GameDetails("Title", GameGenre.ACTION, platform, 2000, "Dev")  # type: ignore[arg-type]
        assert exc_info.value.field == "platform"

    @pytest.mark.parametrize("year", [1950, 2100])
    def test_year_bounds_are_inclusive(self, year: int) -> None:
        game = Game.multiplayer("Title", GameGenre.ACTION, GamePlatform.PC, year, "Dev")
        assert game.release_year == year

    @pytest.mark.parametrize("total_levels", [0, -1])
    def test_single_player_needs_levels(self, total_levels: int) -> None:
        with pytest.raises(ValidationError):
            Game.single_player("Title", GameGenre.ACTION, GamePlatform.PC, 2000, "Dev", total_levels)

    def test_details_are_immutable(self) -> None:
        details = GameDetails("Title", GameGenre.ACTION, GamePlatform.PC, 2000, "Dev")
        with pytest.raises(AttributeError):
            details.title = "Other"  # type: ignore[misc]

    def test_genre_and_platform_text_is_resolved(self) -> None:
        game = Game.multiplayer("Title", "battle royale", "nintendo switch", 2019, "Dev")
        assert game.genre is GameGenre.BATTLE_ROYALE
        assert game.platform is GamePlatform.NINTENDO_SWITCH

    def test_unknown_genre_text_defaults_to_other(self) -> None:
        game = Game.multiplayer("Title", "Visual Novel", "Dreamcast", 1999, "Dev")
        assert game.genre is GameGenre.OTHER
        assert game.platform is GamePlatform.OTHER


class TestSinglePlayerProgress:

    def test_update_replaces_levels(self) -> None:
        game = make_single_player(10)

        game.update_progress("5")

        assert game.progress_state.levels_completed == 5
        assert game.get_progress() == "5/10 Levels completed"
        assert game.completion_percentage() == 50.0

    def test_update_is_not_cumulative(self) -> None:
        game = make_single_player(10)
        game.update_progress("5")
        game.update_progress("3")
        assert game.progress_state.levels_completed == 3

    @pytest.mark.parametrize("data", ["-1", "11"])
    def test_out_of_range_is_validation_error(self, data: str) -> None:
        game = make_single_player(10)
        with pytest.raises(ValidationError):
            game.update_progress(data)

    @pytest.mark.parametrize("data", ["abc", "", "5.5", "five"])
    def test_not_a_number_is_format_error(self, data: str) -> None:
        game = make_single_player(10)
        with pytest.raises(FormatError):
            game.update_progress(data)

    def test_failed_update_keeps_previous_state(self) -> None:
        game = make_single_player(10)
        game.update_progress("4")
        with pytest.raises(ValidationError):
            game.update_progress("11")
        with pytest.raises(FormatError):
            game.update_progress("x")
        assert game.progress_state.levels_completed == 4

    def test_surrounding_whitespace_is_accepted(self) -> None:
        game = make_single_player(10)
        game.update_progress(" 7 ")
        assert game.progress_state.levels_completed == 7

    def test_bounds_are_inclusive(self) -> None:
        game = make_single_player(10)
        game.update_progress("10")
        assert game.completion_percentage() == 100.0
        game.update_progress("0")
        assert game.completion_percentage() == 0.0

    def test_total_levels_cannot_be_reassigned(self) -> None:
        progress = SinglePlayerProgress(10)
        with pytest.raises(AttributeError):
            progress.total_levels = 20  # type: ignore[misc]

    @given(total=st.integers(min_value=1, max_value=500), data=st.data())
    def test_completion_percentage_matches_ratio(self, total: int, data: st.DataObject) -> None:
        completed = data.draw(st.integers(min_value=0, max_value=total))
        game = make_single_player(total)

        game.update_progress(str(completed))

        assert game.completion_percentage() == pytest.approx(completed / total * 100)
        assert 0.0 <= game.completion_percentage() <= 100.0


class TestMultiplayerProgress:

    def test_update_replaces_record(self) -> None:
        game = make_multiplayer()

        game.update_progress("10/5")

        assert game.progress_state.wins == 10
        assert game.progress_state.losses == 5
        assert game.get_progress() == "W/L: 10/5"
        assert game.progress_state.win_rate() == pytest.approx(66.67, abs=0.01)
        assert game.completion_percentage() == pytest.approx(66.67, abs=0.01)

    def test_update_is_not_cumulative(self) -> None:
        game = make_multiplayer()
        game.update_progress("10/5")
        game.update_progress("1/1")
        assert game.get_progress() == "W/L: 1/1"

    @pytest.mark.parametrize("data", ["-1/5", "10/-5", "10", "1/2/3", ""])
    def test_bad_shape_or_negative_is_validation_error(self, data: str) -> None:
        game = make_multiplayer()
        with pytest.raises(ValidationError):
            game.update_progress(data)

    @pytest.mark.parametrize("data", ["abc/def", "10/x", "/5"])
    def test_non_integer_part_is_format_error(self, data: str) -> None:
        game = make_multiplayer()
        with pytest.raises(FormatError):
            game.update_progress(data)

    def test_no_matches_played_is_zero_percent(self) -> None:
        progress = MultiplayerProgress()
        assert progress.win_rate() == 0.0
        assert progress.completion_percentage() == 0.0

    @given(wins=st.integers(min_value=0, max_value=10_000), losses=st.integers(min_value=0, max_value=10_000))
    def test_win_rate_is_a_percentage(self, wins: int, losses: int) -> None:
        game = make_multiplayer()
        game.update_progress(f"{wins}/{losses}")
        assert 0.0 <= game.completion_percentage() <= 100.0
        assert game.get_progress() == f"W/L: {wins}/{losses}"


class TestIdentity:

    def test_equal_fields_are_distinct_games(self) -> None:
        first = make_multiplayer()
        second = make_multiplayer()

        assert first != second
        assert first.game_id != second.game_id
        assert len({first, second}) == 2

    def test_ids_increase(self) -> None:
        first = make_single_player()
        second = make_single_player()
        assert second.game_id > first.game_id

    def test_explicit_id_is_never_reissued(self) -> None:
        high = make_single_player().game_id + 500
        restored = Game(GameDetails("Title", GameGenre.ACTION, GamePlatform.PC, 2000, "Dev"), MultiplayerProgress(), game_id=high)

        assert restored.game_id == high
        assert make_multiplayer().game_id > high

    def test_explicit_low_id_does_not_rewind_counter(self) -> None:
        latest = make_multiplayer().game_id
        Game(GameDetails("Title", GameGenre.ACTION, GamePlatform.PC, 2000, "Dev"), MultiplayerProgress(), game_id=1)

        assert make_multiplayer().game_id > latest

    def test_progress_update_does_not_change_identity(self) -> None:
        game = make_single_player()
        game_id = game.game_id
        game.update_progress("3")
        assert game.game_id == game_id

    def test_str_describes_game(self) -> None:
        game = make_multiplayer()
        game.update_progress("3/1")
        assert str(game) == (
            "Game: Rocket League (2015) by Psyonix - Genre: Sports, Platform: PC"
            " - Multiplayer - W/L: 3/1"
        )


class TestEnums:

    @pytest.mark.parametrize("genre", list(GameGenre))
    def test_genre_round_trip_by_display_name(self, genre: GameGenre) -> None:
        assert GameGenre.from_string(str(genre)) is genre
        assert GameGenre.from_string(genre.display_name.upper()) is genre
        assert GameGenre.from_string(genre.display_name.lower()) is genre

    @pytest.mark.parametrize("platform", list(GamePlatform))
    def test_platform_round_trip_by_display_name(self, platform: GamePlatform) -> None:
        assert GamePlatform.from_string(str(platform)) is platform
        assert GamePlatform.from_string(f"  {platform.display_name.swapcase()} ") is platform

    @pytest.mark.parametrize("name", [None, "", "Unknown", "ACTION_ADVENTURE"])
    def test_unmatched_defaults_to_other(self, name: str | None) -> None:
        assert GameGenre.from_string(name) is GameGenre.OTHER
        assert GamePlatform.from_string(name) is GamePlatform.OTHER

    def test_display_names_in_declaration_order(self) -> None:
        assert GamePlatform.display_names()[0] == "PC"
        assert GamePlatform.display_names()[-1] == "Other"
        assert "Multiple Platforms" in GamePlatform.display_names()
        assert len(GameGenre.display_names()) == 19
