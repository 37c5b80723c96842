"""
Code generation for twostate declarations.

- TwoStateGenerator: emits the class source for one declaration
- expand_unit / expand / expand_file: drive a whole generation unit
- define / yes_no / custom_bool: expand and execute in-process
"""

from twostate.codegen.generator import EmittedType, TwoStateGenerator
from twostate.codegen.results import DeclarationOutcome, UnitResult
from twostate.codegen.runtime import custom_bool, define, execute, yes_no
from twostate.codegen.unit import expand, expand_declarations, expand_file, expand_unit

__all__ = [
    "TwoStateGenerator",
    "EmittedType",
    "DeclarationOutcome",
    "UnitResult",
    "expand",
    "expand_declarations",
    "expand_file",
    "expand_unit",
    "define",
    "execute",
    "yes_no",
    "custom_bool",
]
