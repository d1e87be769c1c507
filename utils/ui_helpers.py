import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from config import settings

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()

def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()

def print_book_details(book: Any, list_number: int = 0) -> None:
    """Print one book as a block of labelled lines."""
    print("\n----Book Details----")
    if list_number > 0:
        print(f"List Serial No: {list_number}")
    print(f"Internal Serial No: {book.serial_number}")
    print(f"Book Code: {book.book_code}")
    print(f"Book Name: {book.title}")
    print(f"Author Name: {book.author}")
    print(f"Book Cost: {book.cost}")
    print(f"Books Purchased: {book.qty}")
    print(f"Total Price: {book.total_cost}")
    print("--------------------")

def print_list_result(books: List[Any], empty_message: str = "Library is currently empty.") -> None:
    """Print books according to the current output mode.
    - plain: one detail block per book, or `empty_message`
    - json: JSON array of book dicts
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
        return

    if not books:
        print(empty_message)
        return

    if mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Serial", style="magenta", justify="right")
        table.add_column("Code", style="magenta", justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Cost", justify="right")
        table.add_column("Qty", justify="right")
        table.add_column("Total", style="green", justify="right")
        for i, b in enumerate(books, 1):
            table.add_row(
                str(i), str(b.serial_number), str(b.book_code), b.title, b.author,
                str(b.cost), str(b.qty), str(b.total_cost),
            )
        _console.print(table)
    else:
        for i, b in enumerate(books, 1):
            print_book_details(b, i)

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics according to the current output mode."""
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    authors = stats.get("unique_authors", 0)
    copies = stats.get("total_copies", 0)
    value = stats.get("inventory_value", 0)

    if mode == "json":
        print(json.dumps(
            {"total_books": total, "unique_authors": authors, "total_copies": copies, "inventory_value": value},
            ensure_ascii=False,
        ))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n[bold]Unique Authors:[/] {authors}\n"
            f"[bold]Total Copies:[/] {copies}\n[bold]Inventory Value:[/] {value}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Unique Authors: {authors}")
        print(f"Total Copies: {copies}")
        print(f"Inventory Value: {value}")
