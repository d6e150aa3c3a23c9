"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from epub_editor.core.errors import LoadError
from epub_editor.core.reader_factory import ReaderFactory

app = typer.Typer(
    name="epub-editor",
    help="Browse and edit the content and metadata of EPUB books.",
    add_completion=False,
)

console = Console()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool, log_file: Path | None, tui: bool) -> None:
    """Route log records to Textual's devtools console (TUI) or rich (CLI)."""
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = []

    if tui:
        from textual.logging import TextualHandler

        handlers.append(TextualHandler())
    else:
        handlers.append(RichHandler(console=Console(stderr=True), show_path=False))

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Browse and edit the content and metadata of EPUB books.

    Run without arguments to start the editor.
    """
    if ctx.invoked_subcommand is None:
        edit(book_path=None)


@app.command()
def edit(
    book_path: Annotated[
        Optional[Path],
        typer.Argument(
            help="EPUB file to open. If omitted, start with an empty editor.",
        ),
    ] = None,
    markdown: Annotated[
        bool,
        typer.Option(
            "--markdown", "-m",
            help="Start in Markdown mode with the live preview shown",
        ),
    ] = False,
    start_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--dir", "-d",
            help="Directory listed by the open dialog (default: current directory)",
            file_okay=False,
        ),
    ] = None,
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write log records to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug messages"),
    ] = False,
) -> None:
    """Open the interactive editor.

    Edits are committed to memory only; the EPUB file is never modified.
    """
    from epub_editor.core.session import EditorMode
    from epub_editor.tui import EditorConfig, EpubEditorApp

    if book_path is not None:
        if not book_path.exists():
            console.print(f"[red]File not found: {book_path}[/]")
            raise typer.Exit(1)
        if not ReaderFactory.is_supported(book_path):
            console.print(f"[red]Unsupported file format: {book_path.suffix}[/]")
            console.print("[dim]Supported formats: .epub[/]")
            raise typer.Exit(1)
        book_path = book_path.resolve()

    configure_logging(verbose, log_file, tui=True)

    config = EditorConfig(
        start_dir=start_dir or (book_path.parent if book_path else Path(".")),
        initial_path=book_path,
        mode=EditorMode.MARKDOWN if markdown else EditorMode.RICH_TEXT,
    )
    EpubEditorApp(config=config).run()


@app.command()
def info(
    book_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug messages"),
    ] = False,
) -> None:
    """Display book metadata and the reading order."""
    from epub_editor.core.content_utils import count_words, display_title

    configure_logging(verbose, None, tui=False)

    try:
        reader = ReaderFactory.create(book_path)
        document = reader.read(book_path)
    except LoadError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    metadata = document.metadata
    info_lines = [
        f"[bold]{metadata.title}[/]",
        "",
        f"[dim]Author:[/] {metadata.author}",
        f"[dim]Language:[/] {metadata.language}",
        f"[dim]Spine Items:[/] {len(document.spine)}",
    ]

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )

    console.print()
    table = Table(title="Reading Order", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Id", style="white")
    table.add_column("Title", style="white")
    table.add_column("Href", style="dim")
    table.add_column("Media Type", style="dim")
    table.add_column("Words", justify="right", style="green")

    for position, item in enumerate(document.items_in_reading_order(), start=1):
        table.add_row(
            str(position),
            item.id,
            display_title(item.id, item.content),
            item.href,
            item.media_type or "-",
            f"{count_words(item.content):,}",
        )

    console.print(table)
