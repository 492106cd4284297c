"""
Asset Storage CLI Tool

Command-line administration of tenant asset storage.

Usage:
    assets list --tenant acme        - List stored assets
    assets mkdir posts --tenant acme - Create a folder
    assets rmdir posts --tenant acme - Delete a folder
    assets rm data/acme/cat.png      - Delete a file
    assets upload ./cat.png          - Store a local file
    assets fetch URL                 - Download a remote file
    assets themes                    - List installed themes
    assets serve                     - Start the API server
"""
import asyncio
import sys
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from app import __version__
from app.config import Settings
from app.storage import AssetStorageService, Pager, StorageConfig

# Load environment variables
load_dotenv()

console = Console()


class LocalUpload:
    """Upload source reading a local file."""

    def __init__(self, path: Path):
        self.filename = path.name
        self._stream = path.open("rb")

    async def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def close(self):
        self._stream.close()


def build_service(tenant: str) -> AssetStorageService:
    """Create a storage service for a tenant from environment settings."""
    try:
        return AssetStorageService.from_config(StorageConfig.from_settings(Settings()), tenant_slug=tenant)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)


def print_asset(item) -> None:
    console.print(f"[green]✓[/green] Stored [cyan]{item.title}[/cyan]")
    console.print(f"URL: [cyan]{item.url}[/cyan]")


tenant_option = click.option("--tenant", default="", help="Tenant slug (empty for the shared root)")


@click.group()
@click.version_option(version=__version__, prog_name="Asset Storage")
def main():
    """
    Asset Storage - per-tenant upload storage administration.
    """
    pass


@main.command(name="list")
@click.option("--path", default="", help="Folder relative to the tenant root")
@click.option("--page", default=1, type=click.IntRange(min=1), help="Page number")
@click.option("--page-size", default=20, type=click.IntRange(min=1, max=100), help="Assets per page")
@click.option("--filter", "text", default=None, help="Title substring filter")
@tenant_option
def list_assets(path: str, page: int, page_size: int, text: str | None, tenant: str):
    """
    List stored assets.

    Example:
        assets list --tenant acme --page 2
    """
    service = build_service(tenant)
    pager = Pager(current_page=page, items_per_page=page_size)
    predicate = (lambda item: text.lower() in item.title.lower()) if text else None

    items = asyncio.run(service.find(predicate, pager, path))

    if not items:
        console.print("[yellow]No assets found.[/yellow]")
        return

    table = Table(
        title=f"Assets ({pager.total} total, page {pager.current_page}/{pager.last_page})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Title", style="cyan")
    table.add_column("URL")
    table.add_column("Preview", style="dim")

    for item in items:
        table.add_row(item.title, item.url, item.image)

    console.print(table)


@main.command()
@click.argument("path")
@tenant_option
def mkdir(path: str, tenant: str):
    """
    Create a folder under the tenant root.

    Example:
        assets mkdir posts/2024 --tenant acme
    """
    asyncio.run(build_service(tenant).create_folder(path))
    console.print(f"[green]✓[/green] Folder ready: [cyan]{path}[/cyan]")


@main.command()
@click.argument("path")
@tenant_option
def rmdir(path: str, tenant: str):
    """
    Delete a folder and its contents.

    Example:
        assets rmdir posts/2024 --tenant acme
    """
    asyncio.run(build_service(tenant).delete_folder(path))
    console.print(f"[green]✓[/green] Folder removed: [cyan]{path}[/cyan]")


@main.command()
@click.argument("path")
@tenant_option
def rm(path: str, tenant: str):
    """
    Delete a stored file.

    Example:
        assets rm data/acme/posts/cat.png --tenant acme
    """
    try:
        asyncio.run(build_service(tenant).delete_file(path))
    except (OSError, ValueError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Deleted [cyan]{path}[/cyan]")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--path", default="", help="Target folder relative to the tenant root")
@tenant_option
def upload(file: Path, path: str, tenant: str):
    """
    Store a local file.

    Example:
        assets upload ./cat.png --path posts --tenant acme
    """
    service = build_service(tenant)
    source = LocalUpload(file)
    try:
        item = asyncio.run(service.upload_form_file(source, "", path))
    except (OSError, ValueError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)
    finally:
        source.close()
    print_asset(item)


@main.command()
@click.argument("url")
@click.option("--path", default="", help="Target folder relative to the tenant root")
@tenant_option
def fetch(url: str, path: str, tenant: str):
    """
    Download a remote file into storage.

    Example:
        assets fetch https://example.com/cat.png --tenant acme
    """
    service = build_service(tenant)
    try:
        item = asyncio.run(service.upload_from_web(url, "", path))
    except (httpx.HTTPError, OSError, ValueError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)
    print_asset(item)


@main.command()
def themes():
    """
    List installed themes.
    """
    names = asyncio.run(build_service("").get_themes())
    if not names:
        console.print("[yellow]No themes installed.[/yellow]")
        return
    for name in names:
        console.print(f"• [cyan]{name}[/cyan]")


@main.command()
@click.option("--port", default=8000, help="Port to run server on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(port: int, reload: bool):
    """
    Start the asset storage API server.

    Example:
        assets serve --port 8000
    """
    import uvicorn

    console.print(f"[bold green]Starting Asset Storage[/bold green] on [cyan]http://localhost:{port}[/cyan]")
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=reload)


if __name__ == "__main__":
    main()
