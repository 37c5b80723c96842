"""
Conversion consistency validation for twostate declarations.

Decides, from the discriminants of the two variants, whether a type gets a
bool conversion:

    both unset                 -> no conversion
    one true, one false        -> BoolMapping
    anything else              -> InconsistentDiscriminantError
"""

from __future__ import annotations

from . import ir
from .errors import make_discriminant_error

DISCRIMINANT_HINT = """\
when assigning discriminants you must use `true` and `false` exactly once each, \
or leave both variants unassigned, example:

    enum What {
        NuhUh = false,
        YuhHuh = true,
    }"""


def classify_discriminants(declaration: ir.DeclarationSpec) -> ir.BoolMapping | None:
    """
    Classify the discriminant assignment of a declaration.

    Args:
        declaration: Parsed declaration

    Returns:
        BoolMapping when exactly one variant is `true` and the other `false`,
        None when neither variant is assigned

    Raises:
        InconsistentDiscriminantError: For any other combination
    """
    first, second = declaration.variants
    pair = (first.discriminant, second.discriminant)

    if pair == (ir.Discriminant.UNSET, ir.Discriminant.UNSET):
        return None
    if pair == (ir.Discriminant.TRUE, ir.Discriminant.FALSE):
        return ir.BoolMapping(true_variant=first.identifier, false_variant=second.identifier)
    if pair == (ir.Discriminant.FALSE, ir.Discriminant.TRUE):
        return ir.BoolMapping(true_variant=second.identifier, false_variant=first.identifier)

    found = ", ".join(f"{v.identifier} = {v.discriminant.value}" for v in declaration.variants)
    raise make_discriminant_error(
        f"Inconsistent discriminants ({found}); {DISCRIMINANT_HINT}",
        file=declaration.file,
        line=second.line or declaration.line,
        column=second.column or declaration.column,
        declaration=declaration.type_name,
    )
