"""
twostate Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .declarations import (
    DeclarationForm,
    DeclarationSpec,
    Discriminant,
    ExtensionClause,
    VariantSpec,
    yes_no_variants,
)
from .generation import (
    BoolMapping,
    GenerationState,
)

__all__ = [
    # Declarations
    "DeclarationForm",
    "DeclarationSpec",
    "Discriminant",
    "ExtensionClause",
    "VariantSpec",
    "yes_no_variants",
    # Generation
    "BoolMapping",
    "GenerationState",
]
