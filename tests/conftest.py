"""Shared pytest fixtures for twostate tests."""

from pathlib import Path

import pytest

from twostate import define
from twostate.core import ir


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def flags_file(fixtures_dir: Path) -> Path:
    """Return path to the sample declaration file."""
    return fixtures_dir / "flags.tsd"


@pytest.fixture
def clear_first() -> type:
    """A terse Yes/No type."""
    return define("pub enum ClearFirst;")["ClearFirst"]


@pytest.fixture
def answer() -> type:
    """Caller-named variants, true variant declared second, computed default."""
    return define(
        """
        pub enum Answer {
            NuhUh = false,
            YuhHuh = true,
            default = (3 < 4),
        }
        """
    )["Answer"]


@pytest.fixture
def overwrite() -> type:
    """Caller-named variants without discriminants."""
    return define("pub enum Overwrite { Replace, Keep, default = Self::Keep }")["Overwrite"]


@pytest.fixture
def simple_declaration() -> ir.DeclarationSpec:
    """Return an explicit declaration built directly from IR types."""
    return ir.DeclarationSpec(
        type_name="Answer",
        visibility="pub",
        variants=(
            ir.VariantSpec(identifier="NuhUh", discriminant=ir.Discriminant.FALSE, line=2, column=5),
            ir.VariantSpec(identifier="YuhHuh", discriminant=ir.Discriminant.TRUE, line=3, column=5),
        ),
        file=Path("answer.tsd"),
        line=1,
        column=5,
    )
