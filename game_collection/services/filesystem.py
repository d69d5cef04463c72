"""File system service for data persistence and file management."""

import json
from pathlib import Path
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class FileSystemService:
    """Service for file system operations with error handling and validation."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Initialize the file system service.

        Args:
            base_path: Base directory for operations (defaults to current working directory)
        """
        self.base_path = base_path or Path.cwd()
        log.debug("File system service initialized", base_path=str(self.base_path))

    def resolve(self, path: Path | str) -> Path:
        """Resolve ``path`` against the base directory unless it is absolute."""
        path = Path(path)
        return path if path.is_absolute() else self.base_path / path

    def save_json(self, data: dict[str, Any], path: Path) -> None:
        """Save data as JSON to the specified path.

        The data is written to a temporary sibling file which then replaces
        the target, so a failed write never leaves a truncated file behind.

        Args:
            data: Dictionary to save as JSON
            path: Path to save the file

        Raises:
            OSError: If file cannot be written
            ValueError: If data cannot be serialized to JSON
        """
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            self.ensure_directory(path.parent)

            log.debug("Saving JSON data", path=str(path), temp_path=str(temp_path))

            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=True)

            temp_path.replace(path)

            log.info("JSON data saved successfully", path=str(path), size=path.stat().st_size)

        except OSError as e:
            log.error("Failed to save JSON data", path=str(path), error=str(e))
            self._discard(temp_path)
            raise
        except (TypeError, ValueError) as e:
            log.error("Failed to serialize data to JSON", path=str(path), error=str(e))
            self._discard(temp_path)
            raise ValueError(f"Cannot serialize data to JSON: {e}") from e

    def load_json(self, path: Path) -> dict[str, Any]:
        """Load JSON data from the specified path.

        Args:
            path: Path to load the file from

        Returns:
            Dictionary loaded from JSON

        Raises:
            FileNotFoundError: If file does not exist
            OSError: If file cannot be read
            ValueError: If file contains invalid JSON or is not a JSON object
        """
        try:
            log.debug("Loading JSON data", path=str(path))

            if not path.exists():
                log.info("JSON file not found", path=str(path))
                raise FileNotFoundError(f"File not found: {path}")

            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

        except json.JSONDecodeError as e:
            log.error("Invalid JSON in file", path=str(path), error=str(e))
            raise ValueError(f"Invalid JSON in file {path}: {e}") from e
        except FileNotFoundError:
            raise
        except OSError as e:
            log.error("Failed to read JSON file", path=str(path), error=str(e))
            raise

        if not isinstance(data, dict):
            log.error("Unexpected JSON document", path=str(path), type=type(data).__name__)
            raise ValueError(f"Expected JSON object (dict), got {type(data).__name__}")

        log.debug("JSON data loaded successfully", path=str(path), keys=list(data.keys()))
        return data

    def save_lines(self, lines: list[str], path: Path) -> None:
        """Write one entry per line.

        Raises:
            OSError: If file cannot be written
        """
        try:
            self.ensure_directory(path.parent)
            with open(path, 'w', encoding='utf-8') as f:
                for line in lines:
                    f.write(f"{line}\n")
            log.debug("Lines saved", path=str(path), count=len(lines))
        except OSError as e:
            log.error("Failed to save lines", path=str(path), error=str(e))
            raise

    def load_lines(self, path: Path) -> list[str]:
        """Read non-blank lines, stripped of surrounding whitespace.

        Raises:
            FileNotFoundError: If file does not exist
            OSError: If file cannot be read
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = [line.strip() for line in f if line.strip()]
            log.debug("Lines loaded", path=str(path), count=len(lines))
            return lines
        except FileNotFoundError:
            raise
        except OSError as e:
            log.error("Failed to read lines", path=str(path), error=str(e))
            raise

    def ensure_directory(self, path: Path) -> None:
        """Ensure that a directory exists, creating it if necessary.

        Raises:
            OSError: If the path is a file or the directory cannot be created
        """
        try:
            if path.exists():
                if not path.is_dir():
                    log.error("Path exists but is not a directory", path=str(path))
                    raise OSError(f"Path exists but is not a directory: {path}")
                return

            log.debug("Creating directory", path=str(path))
            path.mkdir(parents=True, exist_ok=True)
            log.info("Directory created successfully", path=str(path))

        except OSError as e:
            log.error("Failed to create directory", path=str(path), error=str(e))
            raise

    def delete_file(self, path: Path, missing_ok: bool = False) -> bool:
        """Delete a file safely.

        Args:
            path: Path to the file to delete
            missing_ok: Return False instead of raising when the file is absent

        Returns:
            True if a file was deleted

        Raises:
            FileNotFoundError: If file does not exist and ``missing_ok`` is False
            OSError: If file cannot be deleted
        """
        try:
            if not path.exists():
                if missing_ok:
                    return False
                log.warning("Attempted to delete non-existent file", path=str(path))
                raise FileNotFoundError(f"File not found: {path}")

            if not path.is_file():
                log.error("Attempted to delete non-file", path=str(path))
                raise OSError(f"Path is not a file: {path}")

            path.unlink()
            log.info("File deleted successfully", path=str(path))
            return True

        except OSError as e:
            log.error("Failed to delete file", path=str(path), error=str(e))
            raise

    @staticmethod
    def _discard(temp_path: Path) -> None:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError as e:
                log.warning("Failed to remove temporary file", path=str(temp_path), error=str(e))
