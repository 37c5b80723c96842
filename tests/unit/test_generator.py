"""Tests for TwoStateGenerator source emission."""

import ast
from pathlib import Path

import pytest

from twostate.codegen import TwoStateGenerator
from twostate.core import ir
from twostate.core.errors import EmissionError, InconsistentDiscriminantError
from twostate.core.parser_impl import parse_declarations


def _parse(text: str) -> ir.DeclarationSpec:
    (item,) = parse_declarations(text, Path("gen.tsd"))
    assert isinstance(item, ir.DeclarationSpec), item
    return item


def _emit(text: str) -> str:
    return TwoStateGenerator().emit(_parse(text)).source


class TestEmit:
    """Tests for the generated class source."""

    def test_class_and_members(self):
        source = _emit("pub enum ClearFirst;")
        assert "class ClearFirst(enum.Enum):" in source
        assert '    Yes = "Yes"\n    No = "No"\n' in source

    def test_predicates(self):
        source = _emit("enum Answer { NuhUh = false, YuhHuh = true }")
        assert "def is_nuh_uh(self) -> bool:\n        return self is Answer.NuhUh" in source
        assert "def is_yuh_huh(self) -> bool:\n        return self is Answer.YuhHuh" in source

    def test_conversions(self):
        source = _emit("enum Answer { NuhUh = false, YuhHuh = true }")
        assert "def to_bool(self) -> bool:\n        return self is Answer.YuhHuh" in source
        assert "def __bool__(self) -> bool:" in source
        assert "return cls.YuhHuh if value else cls.NuhUh" in source

    def test_no_conversions_without_discriminants(self):
        source = _emit("enum Overwrite { Replace, Keep }")
        assert "to_bool" not in source
        assert "from_bool" not in source
        assert "__bool__" not in source

    def test_default_only_when_declared(self):
        assert "def default(cls)" not in _emit("enum X;")
        source = _emit("enum X { default = true }")
        assert "def default(cls) -> X:\n        value = True" in source
        assert "return cls.from_bool(value)" in source

    def test_default_without_conversion_checks_member(self):
        source = _emit("enum O { Replace, Keep, default = Self::Keep }")
        assert "value = O.Keep" in source
        assert "from_bool" not in source
        assert "raise TypeError(" in source

    def test_type_attributes_are_decorators(self):
        source = _emit("@enum.unique\n@register('flags')\nenum X;")
        assert source.startswith("@enum.unique\n@register('flags')\nclass X(enum.Enum):")

    def test_variant_attributes_are_comments(self):
        source = _emit('enum X { @deprecated("old") A = true, B = false }')
        assert '    # @deprecated("old")\n    A = "A"' in source

    def test_docstring_names_mapping(self):
        assert '"""Two-state type: YuhHuh (True) / NuhUh (False)."""' in _emit(
            "enum Answer { NuhUh = false, YuhHuh = true }"
        )
        assert '"""Two-state type: Replace / Keep."""' in _emit("enum O { Replace, Keep }")

    def test_source_is_valid_python(self):
        source = _emit("enum Answer { NuhUh = false, YuhHuh = true, default = (3 < 4) }")
        tree = ast.parse(source)
        (cls,) = tree.body
        assert isinstance(cls, ast.ClassDef)
        methods = [n.name for n in cls.body if isinstance(n, ast.FunctionDef)]
        assert methods == [
            "is_nuh_uh",
            "is_yuh_huh",
            "to_bool",
            "__bool__",
            "from_bool",
            "default",
        ]

    def test_deterministic(self):
        text = "enum Answer { NuhUh = false, YuhHuh = true, default = true }"
        assert _emit(text) == _emit(text)

    def test_emitted_type(self):
        emitted = TwoStateGenerator().emit(_parse("enum Answer { NuhUh = false, YuhHuh = true }"))
        assert emitted.type_name == "Answer"
        assert emitted.accessors == ("is_nuh_uh", "is_yuh_huh")
        assert emitted.mapping.true_variant == "YuhHuh"


class TestValidate:
    """Generation-time checks raise before any source is produced."""

    def test_inconsistent_discriminants(self):
        with pytest.raises(InconsistentDiscriminantError):
            TwoStateGenerator().emit(_parse("enum X { A = true, B = true }"))

    @pytest.mark.parametrize(
        "text,fragment",
        [
            ("enum X { A, A }", "declared twice"),
            ("enum X { Yes, YES }", "both produce the accessor 'is_yes'"),
            ("enum X { to_bool, B }", "collides with a generated method"),
            ("enum X { A, value }", "collides with a generated method"),
            ("enum X { is_b, B }", "collides with a generated accessor"),
            ("enum X { _A, B }", "cannot start with '_'"),
            ("enum X { A, B, default = Self::C }", "not a member of X"),
            ("enum X { A, B, default = true }", "needs a bool conversion"),
        ],
    )
    def test_emission_errors(self, text, fragment):
        with pytest.raises(EmissionError) as exc_info:
            TwoStateGenerator().validate(_parse(text))
        assert fragment in exc_info.value.message
        assert exc_info.value.context.declaration == "X"
        assert exc_info.value.context.file == Path("gen.tsd")

    @pytest.mark.parametrize("name", ["bool", "isinstance", "type", "TypeError"])
    def test_type_name_shadowing_a_builtin(self, name):
        with pytest.raises(EmissionError) as exc_info:
            TwoStateGenerator().validate(_parse(f"pub enum {name};"))
        assert f"Type name {name!r} would shadow" in exc_info.value.message
        assert (exc_info.value.context.line, exc_info.value.context.column) == (1, 5)

    def test_collision_points_at_second_variant(self):
        with pytest.raises(EmissionError) as exc_info:
            TwoStateGenerator().validate(_parse("enum X {\n    A,\n    A,\n}"))
        assert (exc_info.value.context.line, exc_info.value.context.column) == (3, 5)

    def test_member_default_without_conversion_is_valid(self):
        decl = _parse("enum X { A, B, default = Self::B }")
        assert TwoStateGenerator().validate(decl) is None
