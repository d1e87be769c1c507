import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

import storage
from book import Book
from config import settings
from errors import BookNotFoundError, DuplicateCodeError, ParseError

logger = logging.getLogger(__name__)


class Library:
    """Manages the collection of books and its data file."""

    def __init__(self, data_file: Optional[str] = None) -> None:
        self.data_file: str = data_file or settings.data_file
        result = storage.load_all(self.data_file)
        self.books: List[Book] = list(result.books)
        self.skipped_lines: List[ParseError] = list(result.errors)
        # Serial numbers are never reused, even across restarts
        self.next_serial: int = max((b.serial_number for b in self.books), default=0) + 1

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str, book_code: int, cost: int, qty: int) -> Book:
        """Create a new Book with the next serial number and append it to the data file."""
        self._check_code_available(book_code)
        book = Book(
            serial_number=self.next_serial,
            book_code=book_code,
            title=title,
            author=author,
            cost=cost,
            qty=qty,
        )
        # Nothing changes in memory unless the append succeeded
        storage.append_one(book, self.data_file)
        self.books.append(book)
        self.next_serial += 1
        logger.info(f"Added book code {book.book_code} with serial number {book.serial_number}")
        return book

    def delete_book(self, book_code: int) -> List[Book]:
        """Remove every book with the given code. Returns the removed books."""
        removed = [b for b in self.books if b.book_code == book_code]
        if not removed:
            raise BookNotFoundError(book_code)

        remaining = [b for b in self.books if b.book_code != book_code]
        storage.rewrite_all(remaining, self.data_file)
        self.books = remaining
        logger.info(f"Deleted book code {book_code}")
        return removed

    def modify_book(
        self,
        book_code: int,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        new_code: Optional[int] = None,
        cost: Optional[int] = None,
        qty: Optional[int] = None,
    ) -> Book:
        """Replace the details of the book with `book_code`. The serial number is kept.

        Fields left as None keep their current value.
        """
        index = self._index_of(book_code)
        if index is None:
            raise BookNotFoundError(book_code)
        current = self.books[index]

        target_code = current.book_code if new_code is None else new_code
        self._check_code_available(target_code, exclude_serial=current.serial_number)

        updated = replace(
            current,
            book_code=target_code,
            title=current.title if title is None else title,
            author=current.author if author is None else author,
            cost=current.cost if cost is None else cost,
            qty=current.qty if qty is None else qty,
        )

        books = list(self.books)
        books[index] = updated
        storage.rewrite_all(books, self.data_file)
        self.books = books
        logger.info(f"Modified book code {book_code} (serial number {updated.serial_number})")
        return updated

    def search_by_author(self, name: str) -> List[Book]:
        """Books whose author matches `name` exactly (case-sensitive), in collection order."""
        return [b for b in self.books if b.author == name]

    def list_books(self) -> List[Book]:
        return list(self.books)

    def find_book(self, book_code: int) -> Optional[Book]:
        index = self._index_of(book_code)
        return self.books[index] if index is not None else None

    def is_empty(self) -> bool:
        return not self.books

    def __len__(self) -> int:
        return len(self.books)

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        return {
            "total_books": len(self.books),
            "unique_authors": len({b.author for b in self.books}),
            "total_copies": sum(b.qty for b in self.books),
            "inventory_value": sum(b.total_cost for b in self.books),
        }

    # ------------------------- Utilities ------------------------- #
    def _index_of(self, book_code: int) -> Optional[int]:
        for i, book in enumerate(self.books):
            if book.book_code == book_code:
                return i
        return None

    def _check_code_available(self, book_code: int, exclude_serial: Optional[int] = None) -> None:
        for book in self.books:
            if book.serial_number != exclude_serial and book.book_code == book_code:
                raise DuplicateCodeError(book_code)
