"""CLI for hatchpack."""

from __future__ import annotations

from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from hatchpack.config import load_app_config
from hatchpack.constants import PACKAGE_VERSION
from hatchpack.errors import PackagerError
from hatchpack.ignore.templates import TEMPLATES, write_template
from hatchpack.observability import configure_logging
from hatchpack.packager import Artifact, build_artifact
from hatchpack.schemas.artifact_models import ArchiveEntry, ArtifactMetadata
from hatchpack.schemas.enums import normalize_runtime
from hatchpack.security.path_validator import PathValidator
from hatchpack.security.redaction import redact_mapping, redact_text

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="hatchpack secure deploy-artifact packager.",
)
console = Console()


@app.command()
def version() -> None:
    """Print the hatchpack version."""
    typer.echo(PACKAGE_VERSION)


@app.command("validate-config")
def validate_config(
    config: Path | None = typer.Option(
        None, "--config", help="Path to settings.yaml override."
    ),
) -> None:
    """Validate configuration and print the effective settings."""
    try:
        config_model = load_app_config(config)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Configuration validation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Effective Settings")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("ignore_filename", config_model.packaging.ignore_filename)
    table.add_row("compression_level", str(config_model.packaging.compression_level))
    table.add_row("output_path", config_model.packaging.output_path)
    table.add_row("log_level", config_model.logging.level)
    console.print(table)


@app.command("check-path")
def check_path(
    path: str = typer.Argument(..., help="Path to validate."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Check a path against traversal and restricted-directory rules."""
    result = PathValidator().check(path)
    if as_json:
        typer.echo(orjson.dumps(result.model_dump(mode="json")).decode("utf-8"))
    elif result.accepted:
        console.print(f"[green]OK[/green] {result.resolved_path}")
    else:
        console.print(f"[red]Rejected ({result.reason.value}):[/red] {result.message}")
    if not result.accepted:
        raise typer.Exit(code=1)


@app.command("pack")
def pack(
    directory: Path = typer.Argument(Path("."), help="Project directory to package."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Where to write the .tar.gz artifact."
    ),
    runtime: str | None = typer.Option(
        None, "--runtime", help="Target runtime recorded in artifact metadata."
    ),
    start_command: str | None = typer.Option(
        None, "--start-command", help="Start command recorded in artifact metadata."
    ),
    build_command: str | None = typer.Option(
        None, "--build-command", help="Build command recorded in artifact metadata."
    ),
    metadata_path: Path | None = typer.Option(
        None, "--metadata", help="Write artifact metadata JSON to this path."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List archived entries."),
    config: Path | None = typer.Option(None, "--config", help="Path to settings.yaml override."),
) -> None:
    """Build a size-capped tar.gz artifact from a project directory."""
    try:
        cfg = load_app_config(
            config,
            cli_overrides={
                "output_path": output,
                "log_level": "DEBUG" if verbose else None,
            },
        )
        configure_logging(cfg.logging.level)
        metadata = _build_metadata(runtime, start_command, build_command, directory)
        output_path = Path(cfg.packaging.output_path)
        metadata_target = metadata_path or output_path.with_name(output_path.name + ".json")
        # Outputs may live inside the packaged directory; keep them out of the walk.
        skip_paths = [output_path] if metadata is None else [output_path, metadata_target]
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Creating artifact", total=None)
            artifact = build_artifact(
                directory,
                ignore_filename=cfg.packaging.ignore_filename,
                compression_level=cfg.packaging.compression_level,
                on_entry=_print_entry if verbose else None,
                skip_paths=skip_paths,
            )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(artifact.data)
        if metadata is not None:
            payload = metadata.model_dump(mode="json", exclude_none=True)
            metadata_target.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
            console.print(f"Metadata written to {metadata_target}: {redact_mapping(payload)}")
        _render_artifact_summary(artifact, output_path)
    except typer.Exit:
        raise
    except (PackagerError, OSError, ValueError) as exc:
        console.print(f"[red]Packaging failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc


@app.command("init-ignore")
def init_ignore(
    directory: Path = typer.Argument(Path("."), help="Project directory."),
    runtime: str | None = typer.Option(
        None,
        "--runtime",
        help=f"Runtime template ({', '.join(r.value for r in TEMPLATES)}).",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to settings.yaml override."),
) -> None:
    """Generate a starter ignore file based on the project's runtime."""
    try:
        cfg = load_app_config(config)
        PathValidator().validate(directory)
        selected = normalize_runtime(runtime) if runtime else None
        path, chosen = write_template(
            directory, selected, filename=cfg.packaging.ignore_filename
        )
    except (PackagerError, OSError, ValueError) as exc:
        console.print(f"[red]init-ignore failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Created {path.name} for {chosen.value} runtime[/green]")
    console.print("Review and customize it, then run 'hatchpack pack'")


def _build_metadata(
    runtime: str | None,
    start_command: str | None,
    build_command: str | None,
    directory: Path,
) -> ArtifactMetadata | None:
    if runtime is None:
        if start_command or build_command:
            raise typer.BadParameter("--runtime is required when recording commands.")
        return None
    return ArtifactMetadata(
        runtime=runtime,
        start_command=start_command,
        build_command=build_command,
        output_dir=str(directory),
    )


def _print_entry(entry: ArchiveEntry) -> None:
    suffix = f" -> {entry.linkname}" if entry.linkname else ""
    console.print(f"  {entry.kind.value:<9} {entry.size:>10}  {entry.name}{suffix}")


def _render_artifact_summary(artifact: Artifact, output_path: Path) -> None:
    stats = artifact.stats
    panel = Panel.fit(
        f"artifact: [bold]{output_path}[/bold]\n"
        f"size: {artifact.size_mb:.2f} MB\n"
        f"files: {stats.files}  directories: {stats.directories}  "
        f"symlinks: {stats.symlinks}\n"
        f"excluded: {stats.excluded}  skipped symlinks: {stats.skipped_symlinks}",
        title="Artifact Created",
    )
    console.print(panel)
