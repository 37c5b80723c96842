"""
Declaration IR types for twostate.

A DeclarationSpec is the normalized result of parsing one `enum`
declaration, in either surface form:

    pub enum ClearFirst;

    @enum.unique
    pub enum Overwrite {
        Replace = true,
        Keep = false,
        default = Self::Keep,
    }
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Discriminant(StrEnum):
    """Whether and how a variant is pinned to a boolean literal."""

    UNSET = "unset"
    TRUE = "true"
    FALSE = "false"


class DeclarationForm(StrEnum):
    """Surface form a declaration was written in."""

    TERSE = "terse"  # enum Name;  /  enum Name { default = ... }
    EXPLICIT = "explicit"  # enum Name { A [= bool], B [= bool], ... }


class VariantSpec(BaseModel):
    """
    One of the two closed states of a generated type.

    Attributes:
        identifier: Variant name (e.g. Yes, No, Replace)
        attributes: Opaque attribute text, forwarded verbatim
        discriminant: Boolean literal pinning, if any
        line: Source line of the identifier
        column: Source column of the identifier
    """

    identifier: str
    attributes: tuple[str, ...] = ()
    discriminant: Discriminant = Discriminant.UNSET
    line: int = 0
    column: int = 0

    model_config = ConfigDict(frozen=True)


class ExtensionClause(BaseModel):
    """A `key = expression` entry following the variants."""

    key: str
    expression: str
    line: int = 0
    column: int = 0

    model_config = ConfigDict(frozen=True)


class DeclarationSpec(BaseModel):
    """
    A parsed two-state type declaration.

    Attributes:
        type_name: Identifier of the generated type
        visibility: Opaque visibility text ("" when omitted)
        attributes: Opaque attribute text for the type, in order
        variants: Exactly two variants, in declaration order
        default_clause: Normalized Python expression for default(), if any
        form: Surface form the declaration was written in
        file: Source file
        line: Source line of the `enum` keyword
        column: Source column of the `enum` keyword
    """

    type_name: str
    visibility: str = ""
    attributes: tuple[str, ...] = ()
    variants: tuple[VariantSpec, VariantSpec]
    default_clause: str | None = None
    form: DeclarationForm = DeclarationForm.EXPLICIT
    file: Path = Field(default_factory=lambda: Path("<string>"))
    line: int = 0
    column: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_public(self) -> bool:
        return bool(self.visibility)

    @property
    def first(self) -> VariantSpec:
        return self.variants[0]

    @property
    def second(self) -> VariantSpec:
        return self.variants[1]

    def variant(self, identifier: str) -> VariantSpec | None:
        """Return the variant with the given identifier, if declared."""
        for variant in self.variants:
            if variant.identifier == identifier:
                return variant
        return None


def yes_no_variants() -> tuple[VariantSpec, VariantSpec]:
    """The canonical variants of the terse form: Yes = true, No = false."""
    return (
        VariantSpec(identifier="Yes", discriminant=Discriminant.TRUE),
        VariantSpec(identifier="No", discriminant=Discriminant.FALSE),
    )
