"""Decorators for gistfs CLI commands."""

import functools
import logging
from typing import Any, Callable

import typer
from rich.console import Console

from gistfs.client import GistFetchError, GistNotFoundError
from gistfs.vfs.errors import (
    ClosedError,
    IsADirectoryError,
    NotADirectoryError,
    NotFoundError,
    NotLoadedError,
)

logger = logging.getLogger(__name__)
console = Console(stderr=True)


def handle_gist_errors(func: Callable) -> Callable:
    """
    Decorator to handle common gist operation errors.

    Centralizes error handling for:
    - GistNotFoundError / GistFetchError: GitHub could not deliver the gist
    - NotFoundError: No file with that name in the gist
    - IsADirectoryError / NotADirectoryError: Wrong kind of path
    - NotLoadedError / ClosedError: Filesystem misuse
    - General exceptions: Unexpected errors
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except GistNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] Gist not found: {e.gist_id}")
            console.print("[yellow]Tip: Private gists need a token (gistfs config --github-token ...)[/yellow]")
            raise typer.Exit(code=1)
        except GistFetchError as e:
            console.print(f"[bold red]Error:[/bold red] Could not fetch gist: {e}")
            raise typer.Exit(code=1)
        except NotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] No such file: {e.path}")
            raise typer.Exit(code=1)
        except (IsADirectoryError, NotADirectoryError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except (NotLoadedError, ClosedError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
