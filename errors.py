"""Errors raised by the book ledger core."""

from __future__ import annotations


class LedgerError(Exception):
    """Base error for this package."""


class ParseError(LedgerError):
    """Raised when a line of the data file cannot be decoded into a Book."""

    def __init__(self, message: str, line: str = "", line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        prefix = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{prefix}{message}")


class StorageError(LedgerError, OSError):
    """Raised when the data file cannot be written."""


class DuplicateCodeError(LedgerError, ValueError):
    """Raised when a book code is already used by another book."""

    def __init__(self, book_code: int) -> None:
        self.book_code = book_code
        super().__init__(f"Book Code {book_code} already exists.")


class BookNotFoundError(LedgerError, LookupError):
    """Raised when no book carries the requested book code."""

    def __init__(self, book_code: int) -> None:
        self.book_code = book_code
        super().__init__(f"Book with Code {book_code} not found.")
