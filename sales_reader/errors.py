from __future__ import annotations


class SalesSourceNotFoundError(FileNotFoundError):
    """The sales file is missing or has no content."""


class SalesParseError(ValueError):
    """A row (or the file layout) could not be converted into sale records."""

    def __init__(self, message: str, *, row: int | None = None) -> None:
        self.row = row
        if row is not None:
            message = f"row {row}: {message}"
        super().__init__(message)


class NoCancelledSalesError(LookupError):
    pass
