"""Exception types raised by the analytics engine."""


class FolioscopeError(Exception):
    """Base class for folioscope errors."""


class InvalidInputError(FolioscopeError, ValueError):
    """Raised when a mandatory input is empty, mismatched or out of range.

    Short-but-valid inputs never raise; indicators fall back to their
    neutral values instead.

    Attributes:
        field: Name of the offending argument, when known.
        message: Human-readable error description.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message: str = message
        self.field: str | None = field
        super().__init__(message)

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class StatementError(FolioscopeError):
    """Raised when a broker statement cannot be imported at all."""
