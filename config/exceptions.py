"""Custom exception hierarchy for the novel site data layer."""

from typing import Optional


class NovelShelfError(Exception):
    """Base exception for all novelshelf errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- Data Source Errors ----

class DataSourceError(NovelShelfError):
    """A repository could not reach or use its backing store."""


class RemoteServiceError(DataSourceError):
    """The remote table service failed or rejected a request."""

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        details = {}
        if code is not None:
            details["code"] = code
        if status is not None:
            details["status"] = status
        super().__init__(message, details)
        self.code = code
        self.status = status


class RowNotFoundError(RemoteServiceError):
    """A single-row request matched no rows."""

    def __init__(self, message: str = "No rows found", status: Optional[int] = None):
        super().__init__(message, code="PGRST116", status=status)


# ---- Import Errors ----

class DocumentExtractionError(NovelShelfError):
    """Text could not be extracted from an uploaded document."""

    def __init__(self, file_name: str, message: str = ""):
        msg = message or f"Failed to extract text from {file_name}"
        super().__init__(msg, {"file": file_name})
        self.file_name = file_name


# ---- Validation Errors ----

class ValidationError(NovelShelfError):
    """Input validation failed."""
