class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class FileFormatError(DomainError):
    """Raised when an uploaded file cannot be read as an attendance sheet.

    File-level: the file is skipped, the rest of the batch continues.
    """


class RowParseError(DomainError):
    """Raised for a single malformed spreadsheet row.

    Row-level: counted as a failed record, parsing continues.
    """

    def __init__(self, row_number: int, message: str):
        super().__init__(f"Row {row_number}: {message}")
        self.row_number = row_number
