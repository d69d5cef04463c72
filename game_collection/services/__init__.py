"""Service layer: persistence, configuration, logging and collection workflows."""

from ..errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FormatError,
    PersistenceError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .collection import CollectionService
from .config import ConfigurationService, ValidationResult
from .data_manager import DataManager
from .enum_lists import EnumListService
from .filesystem import FileSystemService

__all__ = [
    "AppError",
    "CollectionService",
    "ConfigurationError",
    "ConfigurationService",
    "DataManager",
    "EnumListService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileSystemService",
    "FormatError",
    "PersistenceError",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "get_error_service",
    "handle_error",
]
