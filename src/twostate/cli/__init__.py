"""
twostate CLI Package.

- app.py: typer application and entry point
- commands.py: generate, check and show commands
- utils.py: shared utilities (version, logging, manifest lookup, diagnostics)
"""

from twostate.cli.app import app, main
from twostate.cli.utils import version_callback

__all__ = [
    "app",
    "main",
    "version_callback",
]
