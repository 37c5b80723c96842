"""
Declaration commands for twostate CLI.

Commands for generating, checking and inspecting declaration files.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from twostate.codegen import UnitResult, expand_file
from twostate.core import ir
from twostate.core.errors import ManifestError
from twostate.core.manifest import OUTPUT_SUFFIX, GeneratorConfig

from .utils import (
    print_human_errors,
    print_vscode_error,
    resolve_inputs,
    resolve_manifest,
)

logger = logging.getLogger(__name__)


def generate_command(
    files: list[Path] | None = typer.Argument(
        None, help="Declaration files (default: every .tsd under the manifest's module paths)"
    ),
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help="Path to twostate.toml (default: nearest one)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output directory (default: manifest output_dir)"
    ),
    stdout: bool = typer.Option(False, "--stdout", help="Print modules instead of writing them"),
) -> None:
    """
    Expand declaration files into Python modules.

    Each FILE is written to <stem>_twostate.py. A file with any failed
    declaration is reported and not written.
    """
    try:
        project = resolve_manifest(manifest)
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    config = project.generator if project else GeneratorConfig()
    inputs = resolve_inputs(files, project)
    if output is not None:
        out_dir = output
    elif project is not None:
        out_dir = project.output_path
    else:
        out_dir = None

    failed = 0
    for path in inputs:
        result = _expand(path, config)
        if result is None or not result.success:
            failed += 1
            if result is not None:
                typer.echo(f"{path.name}: {len(result.errors)} error(s), not written", err=True)
                print_human_errors(result.errors)
            continue

        if stdout:
            typer.echo(result.module_source, nl=False)
            continue

        target_dir = out_dir if out_dir is not None else path.parent
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / f"{path.stem}{OUTPUT_SUFFIX}"
        logger.debug("Writing %s", target)
        target.write_text(result.module_source, encoding="utf-8")
        typer.echo(f"Wrote {target} ({', '.join(result.type_names) or 'no types'})")

    if failed:
        typer.echo(f"{failed} of {len(inputs)} file(s) failed.", err=True)
        raise typer.Exit(code=1)


def check_command(
    files: list[Path] | None = typer.Argument(
        None, help="Declaration files (default: every .tsd under the manifest's module paths)"
    ),
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help="Path to twostate.toml (default: nearest one)"
    ),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
) -> None:
    """
    Parse and validate declaration files without writing anything.
    """
    try:
        project = resolve_manifest(manifest)
    except ManifestError as e:
        if format == "vscode":
            print_vscode_error(e, Path.cwd())
        else:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    config = project.generator if project else GeneratorConfig()
    inputs = resolve_inputs(files, project)
    root = project.project_root if project else Path.cwd()

    failed = False
    declarations = 0
    for path in inputs:
        result = _expand(path, config)
        if result is None:
            failed = True
            continue
        declarations += len(result.outcomes)
        if result.success:
            continue
        failed = True
        if format == "vscode":
            for error in result.errors:
                print_vscode_error(error, root)
        else:
            print_human_errors(result.errors)

    if failed:
        raise typer.Exit(code=1)

    if format == "vscode":
        typer.echo("::notice: Validation successful")
    else:
        typer.echo(f"OK: {declarations} declaration(s) in {len(inputs)} file(s).")


def show_command(
    file: Path = typer.Argument(..., help="Declaration file to inspect"),
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help="Path to twostate.toml (default: nearest one)"
    ),
) -> None:
    """
    Show the declarations in a file and what each one generates.
    """
    try:
        project = resolve_manifest(manifest)
    except ManifestError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    config = project.generator if project else GeneratorConfig()
    result = _expand(file.resolve(), config)
    if result is None:
        raise typer.Exit(code=1)

    console = Console()

    if not result.outcomes:
        console.print(f"No declarations in {file.name}")
        return

    table = Table(title=f"Declarations in {file.name}")
    table.add_column("Type", style="cyan")
    table.add_column("Variants")
    table.add_column("Discriminants")
    table.add_column("Conversion")
    table.add_column("Default")
    table.add_column("Status")

    for outcome in result.outcomes:
        declaration = outcome.declaration
        if declaration is None:
            table.add_row(
                escape(outcome.type_name or "?"), "-", "-", "-", "-", "[red]failed[/red]"
            )
            continue

        variants = ", ".join(v.identifier for v in declaration.variants)
        pinned = [
            f"{v.identifier}={v.discriminant.value}"
            for v in declaration.variants
            if v.discriminant != ir.Discriminant.UNSET
        ]
        if outcome.emitted:
            conversion = "yes" if outcome.mapping is not None else "no"
            status = "[green]ok[/green]"
        else:
            conversion = "-"
            status = "[red]failed[/red]"
        table.add_row(
            declaration.type_name,
            variants,
            ", ".join(pinned) or "-",
            conversion,
            escape(declaration.default_clause or "-"),
            status,
        )

    console.print(table)

    if not result.success:
        print_human_errors(result.errors)
        raise typer.Exit(code=1)


def _expand(path: Path, config: GeneratorConfig) -> UnitResult | None:
    """Expand one file, reporting unreadable files instead of raising."""
    try:
        return expand_file(path, config)
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"Cannot read {path}: {e}", err=True)
        return None
