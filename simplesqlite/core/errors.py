"""
Error Definitions

Exception classes raised by the library itself. Failures coming from SQLite
or SQLAlchemy (``sqlalchemy.exc.*``) are never wrapped and reach the caller
unchanged.
"""

from typing import Any, Optional


class SimpleSQLiteError(Exception):
    """
    Library Base Exception

    Base class for all custom exceptions, containing error message, code and details.
    """

    def __init__(
        self,
        message: str,
        code: str = "simplesqlite_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format (for logging or API responses)

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class ConfigurationError(SimpleSQLiteError):
    """Raised when the library is pointed at an unusable location or setting."""

    def __init__(
        self,
        message: str,
        code: str = "configuration_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, code=code, details=details)


class DatabaseDirectoryNotFoundError(ConfigurationError):
    """
    The directory that should contain the database file does not exist.

    Raised before any connection is attempted.
    """

    def __init__(self, db_path: str, directory: str):
        super().__init__(
            message=f"The directory for the database does not exist: {directory}",
            code="database_directory_not_found",
            details={"db_path": db_path, "directory": directory},
        )
        self.db_path = db_path
        self.directory = directory


class InvalidModelError(SimpleSQLiteError):
    """The given class or instance is not mapped by SQLAlchemy."""

    def __init__(self, target: Any):
        name = getattr(target, "__name__", type(target).__name__)
        super().__init__(
            message=f"{name} is not a mapped SQLAlchemy model",
            code="invalid_model",
            details={"model": name},
        )
