import csv
import json
import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

from config import settings
from errors import BookNotFoundError, DuplicateCodeError, StorageError
from library import Library
from utils.ui_helpers import (
    OUTPUT_MODES,
    get_output_mode,
    print_book_details,
    print_list_result,
    print_stats_result,
    set_output_mode,
)
from utils.validators import TextValidator

console = Console()


class LibraryManager:
    """Holds the Library for the data file selected on the command line."""

    _instance: Optional[Library] = None
    _data_file: Optional[str] = None

    @classmethod
    def configure(cls, data_file: Optional[str]) -> None:
        cls._data_file = data_file or settings.data_file
        cls._instance = None

    @classmethod
    def get_instance(cls) -> Library:
        if cls._instance is None:
            cls._instance = Library(cls._data_file or settings.data_file)
            skipped = cls._instance.skipped_lines
            if skipped:
                typer.echo(
                    f"Warning: skipped {len(skipped)} malformed line(s) in {cls._instance.data_file}",
                    err=True,
                )
                for err in skipped:
                    typer.echo(f"  {err}", err=True)
        return cls._instance


def _configure_logging() -> None:
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        print(f"{settings.app_name} {settings.app_version}")
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    print(message)
    raise typer.Exit(code=1)


def _check_text(label: str, value: Optional[str]) -> None:
    if value is None:
        return
    problem = TextValidator.validate_text(value)
    if problem:
        _fail(f"Error: {label}: {problem}")


# --- Typer CLI Application ---
app = typer.Typer(help=settings.app_name)


@app.callback()
def _global_options(
    data_file: Optional[str] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="Path of the CSV data file (default: LIBRARY_DATA_FILE or LibraryManagement.csv)",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the application name and version and exit.",
    ),
):
    """Global options for the CLI (data file, output mode)."""
    _configure_logging()
    if output and not set_output_mode(output):
        raise typer.BadParameter(f"must be one of {', '.join(sorted(OUTPUT_MODES))}", param_hint="--output")
    LibraryManager.configure(data_file)


@app.command("list")
def cli_list():
    """Display all books in collection order."""
    lib = LibraryManager.get_instance()
    print_list_result(lib.list_books())


@app.command("add")
def cli_add(
    title: str = typer.Argument(..., help="Book name"),
    author: str = typer.Argument(..., help="Author name"),
    book_code: int = typer.Argument(..., help="Unique book code"),
    cost: int = typer.Argument(..., help="Price per book"),
    qty: int = typer.Argument(..., help="Number of books purchased"),
):
    """Add a new book. The internal serial number is assigned automatically."""
    _check_text("Book Name", title)
    _check_text("Author Name", author)
    lib = LibraryManager.get_instance()
    try:
        book = lib.add_book(title, author, book_code, cost, qty)
    except DuplicateCodeError as e:
        _fail(f"Error: {e}")
    except StorageError as e:
        _fail(f"Error: {e}")
    print(f"Book added successfully with Internal Serial Number: {book.serial_number}")
    print(f"Calculated Total Price: {book.total_cost}")


@app.command("delete")
def cli_delete(book_code: int = typer.Argument(..., help="Book code of the book to delete")):
    """Delete a book by its book code."""
    lib = LibraryManager.get_instance()
    if lib.is_empty():
        _fail("Library is empty. No books to delete.")
    try:
        lib.delete_book(book_code)
    except BookNotFoundError:
        _fail(f"Book with Code {book_code} not found.")
    except StorageError as e:
        _fail(f"Error: {e}")
    print(f"Book with Code {book_code} deleted successfully!")


@app.command("modify")
def cli_modify(
    book_code: int = typer.Argument(..., help="Book code of the book to modify"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New book name"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="New author name"),
    new_code: Optional[int] = typer.Option(None, "--code", "-c", help="New book code"),
    cost: Optional[int] = typer.Option(None, "--cost", help="New price per book"),
    qty: Optional[int] = typer.Option(None, "--qty", "-q", help="New number of books"),
):
    """Modify the details of a book. Options left out keep their current value."""
    _check_text("Book Name", title)
    _check_text("Author Name", author)
    lib = LibraryManager.get_instance()
    if lib.is_empty():
        _fail("Library is empty. No books to modify.")
    try:
        book = lib.modify_book(book_code, title=title, author=author, new_code=new_code, cost=cost, qty=qty)
    except BookNotFoundError:
        _fail(f"Book with Code {book_code} not found.")
    except (DuplicateCodeError, StorageError) as e:
        _fail(f"Error: {e}")
    print(f"Book with Code {book_code} modified successfully!")
    print(f"Calculated Total Price: {book.total_cost}")


@app.command("search")
def cli_search(author: str = typer.Argument(..., help="Author name (exact, case-sensitive)")):
    """Search books by author name."""
    lib = LibraryManager.get_instance()
    if lib.is_empty():
        print("Library is empty. No books to search.")
        return
    books = lib.search_by_author(author)
    if not books and get_output_mode() != "json":
        print(f"No books are available for this author: {author}")
        return
    print_list_result(books)


@app.command("stats")
def cli_stats():
    """Show library statistics."""
    print_stats_result(LibraryManager.get_instance().get_statistics())


@app.command("export")
def cli_export(
    export_format: str = typer.Option("csv", "--format", "-f", help="csv | json | txt"),
    output: str = typer.Option("library_export", "--output-file", help="Output file name without extension"),
):
    """Export the library to a file (csv, json, txt formats)."""
    books = LibraryManager.get_instance().list_books()
    if not books:
        print("No books to export.")
        return

    fmt = export_format.lower()
    if fmt == "csv":
        filename = f"{output}.csv"
        with open(filename, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(["Internal Serial No", "Book Code", "Book Name", "Author Name", "Cost", "Qty", "Total Cost"])
            for book in books:
                writer.writerow([
                    book.serial_number, book.book_code, book.title, book.author,
                    book.cost, book.qty, book.total_cost,
                ])
    elif fmt == "json":
        filename = f"{output}.json"
        with open(filename, "w", encoding="utf-8") as jsonfile:
            json.dump([book.to_dict() for book in books], jsonfile, indent=2, ensure_ascii=False)
    elif fmt == "txt":
        filename = f"{output}.txt"
        with open(filename, "w", encoding="utf-8") as txtfile:
            for book in books:
                txtfile.write(f"{book.book_code} - {book.title} by {book.author} ({book.qty} x {book.cost})\n")
    else:
        _fail(f"Unsupported format: {export_format}. Use csv, json or txt.")
    print(f"Exported {len(books)} books to {filename}")


# ------------------------- Interactive menu ------------------------- #
def _ask_text(label: str, default: Optional[str] = None) -> str:
    while True:
        if default is None:
            value = Prompt.ask(label, console=console)
        else:
            value = Prompt.ask(label, default=default, console=console)
        problem = TextValidator.validate_text(value)
        if problem is None:
            return value.strip()
        console.print(f"[red]{problem}[/] Please try again.")


def _ask_int(label: str, default: Optional[int] = None) -> int:
    # IntPrompt re-asks on non-numeric input
    if default is None:
        return IntPrompt.ask(label, console=console)
    return IntPrompt.ask(label, default=default, console=console)


def _menu_add(lib: Library) -> None:
    console.print("\n--- Adding New Book ---")
    console.print(f"Assigned Internal Serial Number: {lib.next_serial}")
    title = _ask_text("Book Name")
    author = _ask_text("Author Name")
    book_code = _ask_int("Book Code")
    cost = _ask_int("Price per book")
    qty = _ask_int("Number of books purchased")
    while True:
        try:
            book = lib.add_book(title, author, book_code, cost, qty)
            break
        except DuplicateCodeError:
            console.print(f"[red]Error: Book Code {book_code} already exists.[/]")
            book_code = _ask_int("Please enter a unique Book Code")
    console.print(f"Calculated Total Price: {book.total_cost}")
    console.print(f"\n[green]Book added successfully with Internal Serial Number: {book.serial_number}[/]")


def _menu_delete(lib: Library) -> None:
    if lib.is_empty():
        console.print("\nLibrary is empty. No books to delete.")
        return
    book_code = _ask_int("\nEnter Book Code of the book to delete")
    try:
        lib.delete_book(book_code)
    except BookNotFoundError:
        console.print(f"\nBook with Code {book_code} not found.")
        return
    console.print(f"\n[green]Book with Code {book_code} deleted successfully![/]")


def _menu_modify(lib: Library) -> None:
    if lib.is_empty():
        console.print("\nLibrary is empty. No books to modify.")
        return
    book_code = _ask_int("\nEnter Book Code of the book to modify")
    current = lib.find_book(book_code)
    if current is None:
        console.print(f"\nBook with Code {book_code} not found.")
        return

    console.print(f"\nBook found. Enter new details for Book Code {book_code}:")
    title = _ask_text("Book Name", default=current.title)
    author = _ask_text("Author Name", default=current.author)
    new_code = _ask_int("Book Code", default=current.book_code)
    cost = _ask_int("Price per book", default=current.cost)
    qty = _ask_int("Number of books purchased", default=current.qty)
    while True:
        try:
            book = lib.modify_book(book_code, title=title, author=author, new_code=new_code, cost=cost, qty=qty)
            break
        except DuplicateCodeError:
            console.print(f"[red]Error: Book Code {new_code} already exists.[/]")
            new_code = _ask_int("Please enter a unique Book Code")
    console.print(f"Calculated Total Price: {book.total_cost}")
    console.print(f"\n[green]Book with Code {book_code} modified successfully![/]")


def _menu_search(lib: Library) -> None:
    if lib.is_empty():
        console.print("\nLibrary is empty. No books to search.")
        return
    author = Prompt.ask("\nEnter Author Name to search", console=console)
    console.print(f"\n--- Search Results for Author: {escape(author)} ---")
    books = lib.search_by_author(author)
    if not books:
        console.print(f"No books are available for this author: {escape(author)}")
    for i, book in enumerate(books, 1):
        print_book_details(book, i)
    console.print("-----------------------------------------------")


def _menu_display(lib: Library) -> None:
    if lib.is_empty():
        console.print("\nLibrary is currently empty.")
        return
    console.print("\n--- All Books in Library ---")
    for i, book in enumerate(lib.list_books(), 1):
        print_book_details(book, i)


MENU_ACTIONS = {
    1: _menu_add,
    2: _menu_delete,
    3: _menu_modify,
    4: _menu_search,
    5: _menu_display,
}


@app.command("menu")
def cli_menu():
    """Run the interactive numbered menu."""
    lib = LibraryManager.get_instance()
    while True:
        console.print(f"\n[bold]--- {settings.app_name} ---[/]")
        console.print("1. Add New Book")
        console.print("2. Delete Book")
        console.print("3. Modify Book Details")
        console.print("4. Search Books by Author")
        console.print("5. Display All Books")
        console.print("6. Exit")
        choice = _ask_int("Enter your choice")
        if choice == 6:
            console.print(f"\nExiting {settings.app_name}. Goodbye!")
            return
        action = MENU_ACTIONS.get(choice)
        if action is None:
            console.print("\nInvalid choice. Please enter a number between 1 and 6.")
            continue
        try:
            action(lib)
        except StorageError as e:
            console.print(f"[bold red]Error: {escape(str(e))}[/]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
