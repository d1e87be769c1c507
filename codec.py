"""Line codec for the book data file.

Each book is one line of seven comma separated fields:

    serial_number,book_code,title,author,cost,qty,total_cost

Text fields are written as-is. A title or author containing a comma shifts
the columns and the line is rejected when the file is read back.
"""

import logging
from typing import Optional

from book import Book
from errors import ParseError

logger = logging.getLogger(__name__)

DELIMITER = ","
HEADER = "Internal Serial No,Book Code,Book Name,Author Name,Cost,Qty,Total Cost"
FIELD_NAMES = ("serial_number", "book_code", "title", "author", "cost", "qty", "total_cost")


def encode_line(book: Book) -> str:
    """Render a Book as one data line (without the line terminator)."""
    return DELIMITER.join(
        str(value)
        for value in (
            book.serial_number,
            book.book_code,
            book.title,
            book.author,
            book.cost,
            book.qty,
            book.total_cost,
        )
    )


def _parse_int(name: str, raw: str, line: str, line_number: Optional[int]) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ParseError(f"invalid {name}: {raw!r}", line=line, line_number=line_number) from exc


def decode_line(line: str, line_number: Optional[int] = None) -> Book:
    """Parse one data line into a Book.

    Raises:
        ParseError: if the field count is wrong or a numeric field is not an integer.
    """
    raw = line.rstrip("\r\n")
    parts = raw.split(DELIMITER)
    if len(parts) != len(FIELD_NAMES):
        raise ParseError(
            f"expected {len(FIELD_NAMES)} fields, got {len(parts)}", line=raw, line_number=line_number
        )

    serial_raw, code_raw, title, author, cost_raw, qty_raw, total_raw = parts
    serial_number = _parse_int("serial number", serial_raw, raw, line_number)
    book_code = _parse_int("book code", code_raw, raw, line_number)
    cost = _parse_int("cost", cost_raw, raw, line_number)
    qty = _parse_int("qty", qty_raw, raw, line_number)
    stored_total = _parse_int("total cost", total_raw, raw, line_number)

    book = Book(
        serial_number=serial_number,
        book_code=book_code,
        title=title,
        author=author,
        cost=cost,
        qty=qty,
    )
    if book.total_cost != stored_total:
        logger.warning(
            f"Stored total cost {stored_total} for book code {book_code} does not match "
            f"{cost} x {qty}; using {book.total_cost}"
        )
    return book
