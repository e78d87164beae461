import asyncio
import json
import logging
import sys
if sys.platform == "win32":
    # asyncpg не работает с ProactorEventLoop
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import typer

from file_record_client import create_file_record_service
from file_record_client import logging as record_logging
from file_record_client.config import get_settings
from file_record_client.db.base import create_engine_from_config, create_tables
from file_record_client.exceptions import FileRecordClientError, StoreError, ValidationError
from file_record_client.models.file_record import FileKey
from file_record_client.utils.cli_utils import get_rich_console


app = typer.Typer(help="CLI for file-record-client management.")
logger = logging.getLogger(__name__)
console = get_rich_console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="JSON logs at LOG_LEVEL.")):
    if verbose:
        record_logging.configure()


@app.command()
def init():
    """Creates the file records table."""
    console.rule("[bold cyan]Store Initialization[/bold cyan]")

    async def _create_tables():
        engine = create_engine_from_config(get_settings().postgres)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    with console.status("Creating tables...", spinner="dots"):
        try:
            asyncio.run(_create_tables())
        except Exception as e:
            console.print(f"[bold red]✖[/bold red] Database initialization FAILED: {e}")
            raise typer.Exit(code=1)
    console.print("[bold green]✔[/bold green] Database tables created successfully.")


@app.command()
def check():
    """Checks connectivity to the record store."""
    console.rule("[bold cyan]Connection Check[/bold cyan]")

    async def _check():
        service = create_file_record_service()
        try:
            return await service.check_connections()
        finally:
            await service.aclose()

    status = asyncio.run(_check()).get("postgres", "unknown error")
    if status == "ok":
        console.print("[bold green]✔[/bold green] Store connection: OK")
    else:
        console.print(f"[bold red]✖[/bold red] Store connection: FAILED ({status})")
        raise typer.Exit(code=1)


@app.command()
def put(
    checksum: str = typer.Option(..., help="Content hash of the file."),
    format: str = typer.Option(..., "--format", help="File format, e.g. pdf."),
    created_at: int = typer.Option(..., help="Creation time, epoch milliseconds."),
    expires: int = typer.Option(..., help="Expiration time, epoch milliseconds."),
    path: str = typer.Option(..., help="Storage path of the file."),
    update: bool = typer.Option(False, "--update", help="Replace an existing record."),
):
    """Creates (or with --update replaces) a file record."""
    candidate = {
        "checksum": checksum,
        "format": format,
        "createdAt": created_at,
        "expires": expires,
        "path": path,
    }

    async def _put():
        service = create_file_record_service()
        try:
            if update:
                return await service.update(candidate)
            return await service.create(candidate)
        finally:
            await service.aclose()

    try:
        record = asyncio.run(_put())
    except ValidationError as e:
        console.print(f"[bold red]✖[/bold red] Invalid record: {e.rule.value}")
        raise typer.Exit(code=1)
    except StoreError as e:
        console.print(f"[bold red]✖[/bold red] Store error: {e}")
        raise typer.Exit(code=1)
    console.print(f"[bold green]✔[/bold green] Saved {record.checksum}/{record.format}")


@app.command()
def show(checksum: str, format: str):
    """Prints a file record as JSON."""

    async def _get():
        service = create_file_record_service()
        try:
            return await service.get(FileKey(checksum, format))
        finally:
            await service.aclose()

    try:
        record = asyncio.run(_get())
    except FileRecordClientError as e:
        console.print(f"[bold red]✖[/bold red] {e}")
        raise typer.Exit(code=1)
    if record is None:
        console.print(f"Record {checksum}/{format} not found.")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(record.to_wire(), ensure_ascii=False))


@app.command()
def delete(checksum: str, format: str):
    """Deletes a file record; absent records are not an error."""

    async def _delete():
        service = create_file_record_service()
        try:
            return await service.destroy(FileKey(checksum, format))
        finally:
            await service.aclose()

    try:
        removed = asyncio.run(_delete())
    except FileRecordClientError as e:
        console.print(f"[bold red]✖[/bold red] {e}")
        raise typer.Exit(code=1)
    if removed:
        console.print(f"[bold green]✔[/bold green] Deleted {checksum}/{format}")
    else:
        console.print(f"Record {checksum}/{format} was already absent.")


if __name__ == "__main__":
    app()
