"""memzip CLI application with Typer."""

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated
from zipfile import BadZipFile

import typer

from memzip import __version__
from memzip.app.ports import ArchiveEntryInfo, CompressionLevel, TreeWalkMode
from memzip.bootstrap import ApplicationContainer, bootstrap_application
from memzip.config import get_settings, set_settings
from memzip.utils.cancellation import OperationCancelledError
from memzip.utils.cli_output import json_response

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="memzip",
    help="Build ZIP archives in memory from files and directory trees",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"memzip version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    level: Annotated[
        CompressionLevel | None,
        typer.Option("--level", "-l", help="Compression level for every entry"),
    ] = None,
    mode: Annotated[
        TreeWalkMode | None,
        typer.Option("--mode", help="Directory walk mode"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.0, help="Cancel the build after this many seconds"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """memzip - in-memory ZIP archive builder."""
    # Update settings with CLI flags
    settings = get_settings()
    if level is not None:
        settings.compression_level = level
    if mode is not None:
        settings.tree_walk_mode = mode
    if timeout is not None:
        settings.timeout_seconds = timeout
    if verbose:
        settings.log_level = "DEBUG"
    set_settings(settings)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def _archive_errors() -> Iterator[None]:
    try:
        yield
    except OperationCancelledError as exc:
        typer.secho(f"Error: {exc.reason}. No archive written.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=130) from exc
    except (OSError, BadZipFile) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _report(
    container: ApplicationContainer,
    output: Path,
    entries: list[ArchiveEntryInfo],
    *,
    json_output: bool,
) -> None:
    if json_output:
        typer.echo(
            json_response(
                "archive_build",
                1,
                output=str(output),
                compression_level=container.settings.compression_level.value,
                entry_count=len(entries),
                entries=[entry.model_dump() for entry in entries],
            )
        )
        return

    typer.secho(
        f"✅ Wrote {len(entries)} entries to {output}",
        fg=typer.colors.GREEN,
    )


def _report_empty(kind: str, *, json_output: bool) -> None:
    if json_output:
        typer.echo(json_response("archive_build", 1, output=None, entry_count=0, entries=[]))
        return
    typer.secho(f"No existing {kind} to archive; nothing written.", fg=typer.colors.YELLOW)


@app.command("files")
def files_command(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files to add as top-level entries"),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Destination .zip file"),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Archive FILES, each stored under its base name."""

    container = bootstrap_application()
    service = container.archive_service

    with _archive_errors():
        data = service.build_zip_bytes(paths, container.new_token())

    if not data:
        _report_empty("files", json_output=json_output)
        return

    output = output.expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    logger.info("Archive written to %s", output)

    _report(container, output, service.list_entries(data), json_output=json_output)


@app.command("dirs")
def dirs_command(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Directories to archive, each rooted at its own name"),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Destination .zip file"),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Archive directory trees."""

    container = bootstrap_application()
    service = container.archive_service

    with _archive_errors():
        stream = service.build_tree_stream(paths, container.new_token())

    with stream:
        entries = service.list_entries(stream)
        if not entries:
            _report_empty("directories", json_output=json_output)
            return

        output = output.expanduser().resolve()
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("wb") as handle:
            shutil.copyfileobj(stream, handle)
        logger.info("Archive written to %s", output)

    _report(container, output, entries, json_output=json_output)


@app.command("list")
def list_command(
    archive: Annotated[
        Path,
        typer.Argument(help="ZIP archive to inspect", exists=True, dir_okay=False),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """List the entries of an archive."""

    container = bootstrap_application()

    with _archive_errors(), archive.open("rb") as handle:
        entries = container.archive_service.list_entries(handle)

    if json_output:
        typer.echo(
            json_response(
                "archive_entries",
                1,
                archive=str(archive),
                entries=[entry.model_dump() for entry in entries],
            )
        )
        return

    for entry in entries:
        typer.echo(f"{entry.size:>10}  {entry.compressed_size:>10}  {entry.path}")
    typer.secho(f"{len(entries)} entries", fg=typer.colors.CYAN)


if __name__ == "__main__":
    app()
