"""
Generation-stage IR types for twostate.

Tracks where a declaration is in its expansion:

    received -> parsed -> validated -> emitted
         \\          \\          \\
          failed      failed      failed
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class GenerationState(StrEnum):
    """Expansion state of a single declaration."""

    RECEIVED = "received"
    PARSED = "parsed"
    VALIDATED = "validated"
    EMITTED = "emitted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationState.EMITTED, GenerationState.FAILED)


class BoolMapping(BaseModel):
    """
    The bijection between a type's variants and `True`/`False`.

    Attributes:
        true_variant: Identifier of the variant pinned to `true`
        false_variant: Identifier of the variant pinned to `false`
    """

    true_variant: str
    false_variant: str

    model_config = ConfigDict(frozen=True)

    def to_bool(self, identifier: str) -> bool:
        if identifier == self.true_variant:
            return True
        if identifier == self.false_variant:
            return False
        raise KeyError(identifier)

    def from_bool(self, value: bool) -> str:
        return self.true_variant if value else self.false_variant
