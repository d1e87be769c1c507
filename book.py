from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Book:
    """A single entry of the book inventory."""

    serial_number: int
    book_code: int
    title: str
    author: str
    cost: int
    qty: int
    total_cost: int = field(init=False)

    def __post_init__(self) -> None:
        self.title = self.title.strip()
        self.author = self.author.strip()
        self.recalculate_total()

    def recalculate_total(self) -> int:
        self.total_cost = self.cost * self.qty
        return self.total_cost

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (Code: {self.book_code})"

    def to_dict(self) -> dict:
        return {
            "serial_number": self.serial_number,
            "book_code": self.book_code,
            "title": self.title,
            "author": self.author,
            "cost": self.cost,
            "qty": self.qty,
            "total_cost": self.total_cost,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # total_cost is derived, any stored value is ignored
        return Book(
            serial_number=int(data["serial_number"]),
            book_code=int(data["book_code"]),
            title=data["title"],
            author=data["author"],
            cost=int(data["cost"]),
            qty=int(data["qty"]),
        )
