"""Main entry point for the game collection application.

This module provides the application entry point with:
- Command-line argument parsing
- Application initialization and dependency injection
- Load at startup and save on exit
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

import structlog

from . import __version__
from .models import AppConfig
from .services import (
    CollectionService,
    ConfigurationService,
    DataManager,
    EnumListService,
    FileSystemService,
    get_error_service,
)
from .services.logging import configure_logging

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services and state.

    Services are created lazily so that the collection is only loaded when
    something asks for it.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        data_dir: Path | None = None,
    ) -> None:
        self._config_path: Path | None = config_path
        self._data_dir: Path | None = data_dir

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._data_manager: DataManager | None = None
        self._enum_lists: EnumListService | None = None
        self._collection: CollectionService | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Current configuration, with the data directory override applied."""
        if self._config is None:
            config = self.config_service.load_config()
            if self._data_dir is not None:
                config = replace(config, data_directory=self._data_dir)
            self._config = config
        return self._config

    @property
    def data_manager(self) -> DataManager:
        if self._data_manager is None:
            self._data_manager = DataManager(
                config=self.config,
                filesystem=FileSystemService(base_path=self.config.data_directory),
            )
        return self._data_manager

    @property
    def enum_lists(self) -> EnumListService:
        if self._enum_lists is None:
            self._enum_lists = EnumListService(self.config.data_directory)
        return self._enum_lists

    @property
    def collection(self) -> CollectionService:
        """The user's collection, loaded from disk on first access."""
        if self._collection is None:
            self._collection = CollectionService.load(self.data_manager)
        return self._collection

    def shutdown(self) -> bool:
        """Persist the collection if it was loaded. Returns the save result."""
        if self._collection is None:
            return True
        log.info("Saving collection before exit")
        return self._collection.save()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        log_level: str,
        log_dir: Path | None,
        data_dir: Path | None,
        add_samples: bool,
        reset: bool,
        list_genres: bool = False,
        list_platforms: bool = False,
    ) -> None:
        self.config: Path | None = config
        self.log_level: str = log_level
        self.log_dir: Path | None = log_dir
        self.data_dir: Path | None = data_dir
        self.add_samples: bool = add_samples
        self.reset: bool = reset
        self.list_genres: bool = list_genres
        self.list_platforms: bool = list_platforms


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="game-collection",
        description="Keep track of the video games you own, your progress and your ratings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  game-collection                       Show your collection
  game-collection --add-samples         Add a few sample games
  game-collection --data-dir ./data     Keep saved data in ./data
  game-collection --reset               Delete all saved data
  game-collection --list-genres         Show the genre names
        """,
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/game-collection/config.json)",
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from configuration)",
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)",
    )

    _ = parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for saved collection data (default: from configuration)",
    )

    _ = parser.add_argument(
        "--add-samples",
        action="store_true",
        help="Add sample games to the collection",
    )

    _ = parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all saved data and start with an empty collection",
    )

    _ = parser.add_argument(
        "--list-genres",
        action="store_true",
        help="Print the genre names offered when adding a game",
    )

    _ = parser.add_argument(
        "--list-platforms",
        action="store_true",
        help="Print the platform names offered when adding a game",
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        config=ns.config,
        log_level=ns.log_level or "",
        log_dir=ns.log_dir,
        data_dir=ns.data_dir,
        add_samples=bool(ns.add_samples),
        reset=bool(ns.reset),
        list_genres=bool(ns.list_genres),
        list_platforms=bool(ns.list_platforms),
    )


def format_summary(collection: CollectionService) -> str:
    """Render the profile and owned games for the console."""
    profile = collection.profile
    lines = [
        f"User: {profile.username} (preferred platform: {profile.preferred_platform})",
        f"Games in library: {len(collection.library)}",
        f"Games owned: {len(profile.games_owned)}",
        f"Average rating: {profile.average_rating():.1f}",
    ]
    for index, game in enumerate(profile.sorted_by_title(), start=1):
        rating = profile.get_game_rating(game)
        stars = f" [{rating}/5]" if rating is not None else ""
        lines.append(f"  {index}. {game}{stars} ({game.completion_percentage():.0f}%)")
    return "\n".join(lines)


def list_names(enum_lists: EnumListService, genres: bool, platforms: bool) -> int:
    """Print the saved genre and/or platform names, saving the defaults on first use."""
    exit_code = 0
    sections = []
    if genres:
        sections.append(("Genres", enum_lists.genre_path, enum_lists.load_genres, enum_lists.save_genres))
    if platforms:
        sections.append(("Platforms", enum_lists.platform_path, enum_lists.load_platforms, enum_lists.save_platforms))

    for heading, path, load, save in sections:
        names = load()
        if not path.exists() and not save(names):
            exit_code = 1
        print(f"{heading}:")
        for name in names:
            print(f"  {name}")
    return exit_code


def report_failure(error: Exception | None, operation: str) -> None:
    if error is None:
        return
    error_service = get_error_service()
    friendly = error_service.handle_error(error, operation, "main")
    print(error_service.create_user_message(friendly), file=sys.stderr)


def run(args: ParsedArgs) -> int:
    """Run one session: load, apply the requested changes, print, save.

    Returns:
        Exit code (0 for success, 1 when saving failed or on fatal errors)
    """
    context = ApplicationContext(config_path=args.config, data_dir=args.data_dir)

    _ = configure_logging(
        log_level=args.log_level or context.config.log_level,
        log_dir=args.log_dir,
        console=args.log_dir is None,
    )

    log.info(
        "Starting game collection",
        version=__version__,
        config_path=str(context.config_service.config_path),
        data_directory=str(context.config.data_directory),
    )

    try:
        if args.list_genres or args.list_platforms:
            return list_names(context.enum_lists, args.list_genres, args.list_platforms)

        collection = context.collection

        if args.reset:
            if not collection.reset():
                report_failure(context.data_manager.last_error, "reset")
                return 1
            if not context.enum_lists.delete_enum_files():
                print("Saved genre and platform lists could not be deleted.", file=sys.stderr)
                return 1
            print("All data deleted successfully.")
            if not args.add_samples:
                print(format_summary(collection))
                return 0

        if args.add_samples:
            samples = collection.add_sample_games()
            print(f"Added {len(samples)} sample games to your library.")

        print(format_summary(collection))

        if not context.shutdown():
            report_failure(context.data_manager.last_error, "save")
            return 1
        return 0

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        return 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    """Console script entry point."""
    exit_code = run(parse_arguments())
    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
