"""Flat-file persistence for the book collection.

The data file starts with a fixed header row followed by one encoded book per
line. New books are appended; deletes and modifications rewrite the file.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from book import Book
from codec import HEADER, decode_line, encode_line
from config import settings
from errors import ParseError, StorageError

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Books read from the data file plus the lines that had to be skipped."""

    books: List[Book] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)

    def __iter__(self) -> Iterator[Book]:
        return iter(self.books)

    def __len__(self) -> int:
        return len(self.books)


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)


def load_all(path: str) -> LoadResult:
    """Read every book from the data file, in file order.

    A missing or unreadable file is an empty store, not an error. Lines that
    fail to decode, including bytes that are not valid text, are logged and
    skipped.
    """
    result = LoadResult()
    try:
        with open(path, "rb") as f:
            # First line is always the header
            f.readline()
            for line_number, raw in enumerate(f, start=2):
                try:
                    line = raw.decode(settings.data_encoding)
                except UnicodeDecodeError as e:
                    err = ParseError(
                        f"not valid {settings.data_encoding} text ({e.reason})",
                        line=raw.decode(settings.data_encoding, errors="replace").rstrip("\r\n"),
                        line_number=line_number,
                    )
                    logger.warning(f"Skipping malformed line in {path}: {err}")
                    result.errors.append(err)
                    continue
                if not line.strip():
                    continue
                try:
                    result.books.append(decode_line(line, line_number=line_number))
                except ParseError as e:
                    logger.warning(f"Skipping malformed line in {path}: {e}")
                    result.errors.append(e)
    except FileNotFoundError:
        logger.info(f"No existing library data found at {path}. Starting with an empty library.")
        return result
    except OSError as e:
        logger.warning(f"Could not read {path}, starting with an empty library: {e}")
        return LoadResult()

    logger.info(f"Loaded {len(result.books)} books from {path} ({len(result.errors)} skipped)")
    return result


def _ends_without_newline(path: str) -> bool:
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        return False
    with open(path, "rb") as f:
        f.seek(-1, os.SEEK_END)
        return f.read(1) != b"\n"


def append_one(book: Book, path: str) -> None:
    """Append a single new book, writing the header first if the file is empty."""
    try:
        _ensure_parent_dir(path)
        missing_newline = _ends_without_newline(path)
        with open(path, "a", encoding=settings.data_encoding, newline="") as f:
            if f.tell() == 0:
                f.write(HEADER + "\n")
            elif missing_newline:
                # Last line was left unterminated, e.g. by a hand edit
                f.write("\n")
            f.write(encode_line(book) + "\n")
    except OSError as e:
        logger.error(f"Could not open {path} for appending: {e}")
        raise StorageError(f"Could not open file {path} for appending: {e}") from e
    logger.debug(f"Appended book code {book.book_code} to {path}")


def rewrite_all(books: Iterable[Book], path: str) -> None:
    """Replace the data file with the header and the given books, in order.

    The new content goes to a temporary file in the same directory which then
    replaces the original, so a failed write leaves the old file intact.
    """
    temp_path = None
    try:
        _ensure_parent_dir(path)
        directory = os.path.dirname(os.path.abspath(path))
        fd, temp_path = tempfile.mkstemp(prefix=".ledger-", suffix=".tmp", dir=directory)
        count = 0
        with os.fdopen(fd, "w", encoding=settings.data_encoding, newline="") as f:
            f.write(HEADER + "\n")
            for book in books:
                f.write(encode_line(book) + "\n")
                count += 1
        if os.path.exists(path):
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
        temp_path = None
    except OSError as e:
        logger.error(f"Could not open {path} for writing: {e}")
        raise StorageError(f"Could not open file {path} for writing: {e}") from e
    finally:
        if temp_path and os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_path}: {e}")
    logger.info(f"Rewrote {path} with {count} books")
