"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from folio.config.exceptions import ConfigError, InvalidDateFormatError, SiteStructureError
from folio.corpus.exceptions import (
    CorpusError,
    DocumentNotFoundError,
    DraftExistsError,
    FilesystemOperationError,
    MissingMetadataError,
)
from folio.exceptions import FolioError
from folio.markdown.exceptions import FrontmatterParsingError

console = Console()


def _fail(label: str, error: Exception) -> None:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(error))}")


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except InvalidDateFormatError as e:
        if debug:
            raise
        _fail("📅 Invalid Date", e)
        raise typer.Exit(2) from e
    except SiteStructureError as e:
        if debug:
            raise
        _fail("🏗️ Site Structure Error", e)
        raise typer.Exit(1) from e
    except ConfigError as e:
        if debug:
            raise
        _fail("⚙️ Configuration Error", e)
        raise typer.Exit(1) from e
    except DocumentNotFoundError as e:
        if debug:
            raise
        _fail("🔍 Not Found", e)
        raise typer.Exit(1) from e
    except (DraftExistsError, MissingMetadataError) as e:
        if debug:
            raise
        _fail("📝 Cannot Continue", e)
        raise typer.Exit(1) from e
    except FrontmatterParsingError as e:
        if debug:
            raise
        _fail("🧾 Front Matter Error", e)
        raise typer.Exit(1) from e
    except FilesystemOperationError as e:
        if debug:
            raise
        _fail("💾 Filesystem Error", e)
        raise typer.Exit(1) from e
    except (CorpusError, FolioError) as e:
        if debug:
            raise
        _fail("🚨 Error", e)
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        _fail("💥 An unexpected error occurred", e)
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
