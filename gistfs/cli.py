import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import decorators
from .decorators import handle_gist_errors
from .vfs import GistFS

# Initialize Rich Console
console = Console()
log_console = Console(stderr=True)

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, console=log_console)]
)
logger = logging.getLogger("gistfs")

# Main app
app = typer.Typer(help="Browse GitHub gists as a read-only filesystem")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    gistfs - read-only filesystem view of GitHub gists.

    Every file of a gist appears in a single root directory.
    """
    from gistfs.config import load_config

    cfg = load_config()
    for c in (console, log_console, decorators.console):
        c.no_color = not cfg.cli.color

    if verbose or cfg.cli.verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


def open_gist(gist_id: str, timeout: Optional[float] = None) -> GistFS:
    """Create a GistFS from the user configuration and load it."""
    from gistfs.config import load_config

    config = load_config()
    fs = GistFS.with_client(config.github.create_client(), gist_id)
    fs.load(timeout=timeout)
    return fs


@app.command()
@handle_gist_errors
def ls(
    gist_id: str = typer.Argument(..., help="Gist identifier"),
    long: bool = typer.Option(False, "--long", "-l", help="Show size, mode and modification time"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Read the listing N entries at a time"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Fetch timeout in seconds"),
):
    """List the files of a gist.

    Examples:
        gistfs ls ded2f6727d98e6b0095e62a7813aa7cf
        gistfs ls ded2f6727d98e6b0095e62a7813aa7cf --long
        gistfs ls ded2f6727d98e6b0095e62a7813aa7cf --page-size 10
    """
    from gistfs.config import load_config

    fs = open_gist(gist_id, timeout=timeout)
    if page_size is None:
        page_size = load_config().cli.page_size

    root = fs.open(".")
    entries = []
    while True:
        batch = root.read_dir(page_size)
        if not batch:
            break
        logger.debug(f"Read {len(batch)} entries")
        entries.extend(batch)
        if page_size <= 0:
            break

    if not long:
        for entry in entries:
            console.print(entry.name, markup=False, highlight=False)
        return

    table = Table(title=f"Gist {fs.gist_id}")
    table.add_column("Mode", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Name", style="cyan")

    for entry in entries:
        info = entry.get_info()
        table.add_row(info["mode"], str(info["size"]), info["modified"], info["name"])

    console.print(table)


@app.command()
@handle_gist_errors
def cat(
    gist_id: str = typer.Argument(..., help="Gist identifier"),
    name: str = typer.Argument(..., help="File name inside the gist"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Fetch timeout in seconds"),
):
    """Print a file of a gist.

    Examples:
        gistfs cat ded2f6727d98e6b0095e62a7813aa7cf test1.txt
    """
    fs = open_gist(gist_id, timeout=timeout)
    content = fs.read_file(name)

    out = sys.stdout.buffer if hasattr(sys.stdout, "buffer") else None
    if out is not None:
        out.write(content)
        out.flush()
    else:
        sys.stdout.write(content.decode("utf-8", errors="replace"))


@app.command()
@handle_gist_errors
def stat(
    gist_id: str = typer.Argument(..., help="Gist identifier"),
    name: str = typer.Argument(".", help="File name, or . for the root directory"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Fetch timeout in seconds"),
):
    """Show metadata of a file or of the root directory.

    Examples:
        gistfs stat ded2f6727d98e6b0095e62a7813aa7cf
        gistfs stat ded2f6727d98e6b0095e62a7813aa7cf test1.txt
    """
    fs = open_gist(gist_id, timeout=timeout)
    info = fs.stat(name).to_dict()

    console.print(f"  Name:     {info['name']}", markup=False, highlight=False)
    console.print(f"  Size:     {info['size']}")
    console.print(f"  Mode:     {info['mode']}")
    console.print(f"  Modified: {info['modified']}")
    console.print(f"  Type:     {'directory' if info['is_dir'] else 'file'}")


@app.command()
@handle_gist_errors
def serve(
    gist_id: str = typer.Argument(..., help="Gist identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind to (defaults from config)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to bind to (defaults from config)"),
):
    """
    Serve the files of a gist over HTTP.

    Configuration:
        Default server settings are loaded from ~/.config/gistfs/config.json
        Command-line options override config file values.

    Examples:
        gistfs serve ded2f6727d98e6b0095e62a7813aa7cf
        gistfs serve ded2f6727d98e6b0095e62a7813aa7cf --port 8080
    """
    import uvicorn

    from gistfs.config import load_config
    from gistfs.server import create_app

    config = load_config()
    server_host = host if host is not None else config.server.host
    server_port = port if port is not None else config.server.port

    fs = open_gist(gist_id)

    console.print(f"[blue]Serving gist {gist_id}[/blue]")
    console.print(f"[green]Server running at http://{server_host}:{server_port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    uvicorn.run(
        create_app(fs),
        host=server_host,
        port=server_port,
        log_level="info",
    )


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Initialize config file with defaults"),
    # GitHub settings
    set_api_url: Optional[str] = typer.Option(None, "--github-api-url", help="Set GitHub API base URL"),
    set_token: Optional[str] = typer.Option(None, "--github-token", help="Set GitHub token"),
    set_timeout: Optional[float] = typer.Option(None, "--github-timeout", help="Set request timeout in seconds"),
    # Server settings
    set_server_host: Optional[str] = typer.Option(None, "--server-host", help="Set web server host"),
    set_server_port: Optional[int] = typer.Option(None, "--server-port", help="Set web server port"),
    # CLI settings
    set_verbose: Optional[bool] = typer.Option(None, "--cli-verbose/--no-cli-verbose", help="Enable verbose output by default"),
    set_color: Optional[bool] = typer.Option(None, "--cli-color/--no-cli-color", help="Enable colored output"),
    set_page_size: Optional[int] = typer.Option(None, "--cli-page-size", help="Default page size for ls (0 = all at once)"),
):
    """
    View or edit gistfs configuration.

    Configuration is stored at ~/.config/gistfs/config.json (or ~/.gistfs/config.json).

    Examples:
        gistfs config --show
        gistfs config --init
        gistfs config --github-token ghp_xxx
        gistfs config --server-port 9000
    """
    from gistfs.config import ensure_config_exists, get_config_path, load_config, update_config

    if init:
        config_path = ensure_config_exists()
        console.print(f"[green]Configuration initialized at {config_path}[/green]")
        return

    has_settings = any([
        set_api_url, set_token, set_timeout is not None,
        set_server_host, set_server_port is not None,
        set_verbose is not None, set_color is not None,
        set_page_size is not None,
    ])

    if show or not has_settings:
        cfg = load_config()

        console.print("\n[bold]gistfs Configuration[/bold]")
        console.print(f"[dim]Location: {get_config_path()}[/dim]\n")

        console.print("[bold cyan]GitHub Settings:[/bold cyan]")
        console.print(f"  API URL:     {cfg.github.api_url}")
        console.print(f"  Timeout:     {cfg.github.timeout}")
        if cfg.github.token:
            masked = f"{cfg.github.token[:4]}...{cfg.github.token[-4:]}"
            console.print(f"  Token:       {masked}")
        else:
            console.print("  Token:       [dim]not set[/dim]")

        console.print("\n[bold cyan]Server Settings:[/bold cyan]")
        console.print(f"  Host:        {cfg.server.host}")
        console.print(f"  Port:        {cfg.server.port}")

        console.print("\n[bold cyan]CLI Settings:[/bold cyan]")
        console.print(f"  Verbose:     {cfg.cli.verbose}")
        console.print(f"  Color:       {cfg.cli.color}")
        console.print(f"  Page Size:   {cfg.cli.page_size}")
        return

    changes = []
    if set_api_url is not None:
        changes.append(f"GitHub API URL: {set_api_url}")
    if set_token is not None:
        changes.append("GitHub token: ****")
    if set_timeout is not None:
        changes.append(f"GitHub timeout: {set_timeout}")
    if set_server_host is not None:
        changes.append(f"Server host: {set_server_host}")
    if set_server_port is not None:
        changes.append(f"Server port: {set_server_port}")
    if set_verbose is not None:
        changes.append(f"CLI verbose: {set_verbose}")
    if set_color is not None:
        changes.append(f"CLI color: {set_color}")
    if set_page_size is not None:
        changes.append(f"CLI page size: {set_page_size}")

    update_config(
        github_api_url=set_api_url,
        github_token=set_token,
        github_timeout=set_timeout,
        server_host=set_server_host,
        server_port=set_server_port,
        cli_verbose=set_verbose,
        cli_color=set_color,
        cli_page_size=set_page_size,
    )

    console.print("[green]Configuration updated:[/green]")
    for change in changes:
        console.print(f"  {change}")


if __name__ == "__main__":
    app()
