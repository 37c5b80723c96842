"""
twostate - named two-state types generated from terse declarations.

    pub enum ClearFirst;

expands to an enum.Enum with members Yes/No, is_yes()/is_no() predicates,
and a bool conversion, so call sites read `ClearFirst.Yes` instead of `True`.
"""

from __future__ import annotations

from ._version import get_version
from .codegen import (
    TwoStateGenerator,
    UnitResult,
    custom_bool,
    define,
    expand,
    expand_file,
    expand_unit,
    yes_no,
)
from .core import ir
from .core.errors import (
    EmissionError,
    GrammarError,
    InconsistentDiscriminantError,
    ManifestError,
    TwoStateError,
)
from .core.manifest import GeneratorConfig
from .core.strings import accessor_name

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Expansion
    "expand",
    "expand_unit",
    "expand_file",
    "define",
    "yes_no",
    "custom_bool",
    "TwoStateGenerator",
    "UnitResult",
    "GeneratorConfig",
    "accessor_name",
    # Errors
    "TwoStateError",
    "GrammarError",
    "InconsistentDiscriminantError",
    "EmissionError",
    "ManifestError",
]
