"""
twostate CLI application.

    twostate generate [FILES...]     expand declarations into modules
    twostate check [FILES...]        parse and validate only
    twostate show FILE               tabulate what a file declares
"""

import typer

from .commands import check_command, generate_command, show_command
from .utils import configure_logging, version_callback

app = typer.Typer(
    help="""twostate - named two-state types instead of bare bools

Declaration files (*.tsd) hold one or more declarations:

    pub enum ClearFirst;

    pub enum Overwrite { Replace = true, Keep = false, default = Self::Keep }
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """twostate CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="generate")(generate_command)
app.command(name="check")(check_command)
app.command(name="show")(show_command)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
