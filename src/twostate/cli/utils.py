"""
twostate CLI Utilities.

Shared helpers used across CLI commands.
"""

import logging
import os
import platform
from pathlib import Path

import typer

from twostate._version import get_version
from twostate.core.errors import TwoStateError
from twostate.core.fileset import discover_declaration_files
from twostate.core.manifest import ProjectManifest, find_manifest, load_manifest


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"twostate version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send twostate logs to stderr; DEBUG with --verbose, else LOG_LEVEL or WARNING."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("twostate").setLevel(level)


def resolve_manifest(manifest: str | None) -> ProjectManifest | None:
    """
    Load the manifest named on the command line, or the nearest twostate.toml.

    Raises:
        ManifestError: If the manifest exists but cannot be loaded
        typer.Exit: If an explicitly named manifest does not exist
    """
    if manifest is not None:
        path = Path(manifest).resolve()
        if not path.is_file():
            typer.echo(f"Manifest not found: {manifest}", err=True)
            raise typer.Exit(code=1)
        return load_manifest(path)

    found = find_manifest(Path.cwd())
    return load_manifest(found) if found else None


def resolve_inputs(files: list[Path] | None, project: ProjectManifest | None) -> list[Path]:
    """Declaration files from the command line, else from the manifest's module paths."""
    if files:
        return [f.resolve() for f in files]
    if project is None:
        typer.echo("No declaration files given and no twostate.toml found.", err=True)
        raise typer.Exit(code=1)
    discovered = discover_declaration_files(project.project_root, project)
    if not discovered:
        typer.echo(f"No declaration files found under {project.project_root}", err=True)
        raise typer.Exit(code=1)
    return discovered


def print_human_errors(errors: list[TwoStateError]) -> None:
    """Print errors in human-readable format."""
    for error in errors:
        typer.echo(f"ERROR: {error}\n", err=True)


def print_vscode_error(error: TwoStateError, root: Path) -> None:
    """Print an error in VS Code format: file:line:col: error: message"""
    message = " ".join(line.strip() for line in error.message.splitlines() if line.strip())
    if error.context:
        try:
            rel_path = Path(error.context.file).relative_to(root)
        except ValueError:
            rel_path = Path(error.context.file)

        line = error.context.line or 1
        col = error.context.column or 1
        typer.echo(f"{rel_path}:{line}:{col}: error: {message}", err=True)
    else:
        typer.echo(f"::error: {message}", err=True)
