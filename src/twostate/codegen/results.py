"""
Result types for a generation unit.

A generation unit is one declaration file (or string). Each declaration in
it ends in exactly one outcome; a failed declaration contributes nothing to
the generated module, and does not stop the others.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from twostate.core import ir
from twostate.core.errors import TwoStateError


@dataclass
class DeclarationOutcome:
    """
    Where one declaration ended up.

    Attributes:
        state: EMITTED or FAILED once processing is done
        declaration: The parsed declaration (None if parsing failed)
        source: Generated class source (EMITTED only)
        mapping: Bool mapping of the emitted type, if it has one
        error: The error that failed the declaration (FAILED only)
    """

    state: ir.GenerationState = ir.GenerationState.RECEIVED
    declaration: ir.DeclarationSpec | None = None
    source: str | None = None
    mapping: ir.BoolMapping | None = None
    error: TwoStateError | None = None

    @property
    def type_name(self) -> str | None:
        if self.declaration is not None:
            return self.declaration.type_name
        if self.error is not None and self.error.context is not None:
            return self.error.context.declaration
        return None

    @property
    def emitted(self) -> bool:
        return self.state == ir.GenerationState.EMITTED

    def advance(self, state: ir.GenerationState) -> None:
        """Move to the next state; terminal states are final."""
        if self.state.is_terminal:
            raise RuntimeError(f"Declaration already {self.state.value}")
        self.state = state

    def fail(self, error: TwoStateError) -> None:
        self.advance(ir.GenerationState.FAILED)
        self.error = error


@dataclass
class UnitResult:
    """
    Result of expanding one generation unit.

    Attributes:
        file: Source file of the unit
        outcomes: One outcome per declaration, in source order
        module_source: Generated module containing every emitted type
    """

    file: Path
    outcomes: list[DeclarationOutcome] = field(default_factory=list)
    module_source: str = ""

    @property
    def success(self) -> bool:
        """Whether every declaration was emitted."""
        return all(outcome.emitted for outcome in self.outcomes)

    @property
    def errors(self) -> list[TwoStateError]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def emitted(self) -> list[DeclarationOutcome]:
        return [o for o in self.outcomes if o.emitted]

    @property
    def type_names(self) -> list[str]:
        return [o.declaration.type_name for o in self.emitted if o.declaration is not None]
