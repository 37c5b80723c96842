"""Tests for the twostate declaration parser."""

from pathlib import Path

import pytest

from twostate.core import ir
from twostate.core.errors import GrammarError
from twostate.core.parser_impl import parse_declarations


def parse_one(text: str, **kwargs) -> ir.DeclarationSpec:
    items = parse_declarations(text, Path("test.tsd"), **kwargs)
    assert len(items) == 1
    item = items[0]
    if isinstance(item, GrammarError):
        raise item
    return item


def parse_error(text: str) -> GrammarError:
    items = parse_declarations(text, Path("test.tsd"))
    assert len(items) == 1
    assert isinstance(items[0], GrammarError), items[0]
    return items[0]


class TestTerseForm:
    """Tests for `enum Name;`."""

    def test_yes_no_variants(self):
        decl = parse_one("pub enum ClearFirst;")
        assert decl.type_name == "ClearFirst"
        assert decl.form == ir.DeclarationForm.TERSE
        assert [(v.identifier, v.discriminant) for v in decl.variants] == [
            ("Yes", ir.Discriminant.TRUE),
            ("No", ir.Discriminant.FALSE),
        ]
        assert decl.default_clause is None

    def test_visibility(self):
        assert parse_one("pub enum X;").visibility == "pub"
        assert parse_one("pub(crate) enum X;").visibility == "pub(crate)"
        decl = parse_one("enum X;")
        assert decl.visibility == ""
        assert not decl.is_public

    def test_attributes_forwarded_verbatim(self):
        decl = parse_one('@enum.unique\n@register("flags", strict=True)\npub enum X;')
        assert decl.attributes == ("enum.unique", 'register("flags", strict=True)')

    def test_empty_body_is_terse(self):
        decl = parse_one("enum X {}")
        assert decl.form == ir.DeclarationForm.TERSE
        assert decl.variants == ir.yes_no_variants()

    def test_body_with_only_default(self):
        decl = parse_one("enum X { default = true }")
        assert decl.form == ir.DeclarationForm.TERSE
        assert decl.first.identifier == "Yes"
        assert decl.default_clause == "True"

    def test_location(self):
        decl = parse_one("\n\n  pub enum X;")
        assert decl.file == Path("test.tsd")
        assert (decl.line, decl.column) == (3, 7)


class TestSynthesizedDefault:
    """Tests for the synthesize_terse_default option."""

    def test_terse_gets_no_default(self):
        decl = parse_one("enum X;", synthesize_terse_default=True)
        assert decl.default_clause == "False"

    def test_explicit_default_wins(self):
        decl = parse_one("enum X { default = true }", synthesize_terse_default=True)
        assert decl.default_clause == "True"

    def test_explicit_form_unaffected(self):
        decl = parse_one("enum X { A, B }", synthesize_terse_default=True)
        assert decl.default_clause is None


class TestExplicitForm:
    """Tests for `enum Name { A [= bool], B [= bool], ... }`."""

    def test_discriminants(self):
        decl = parse_one(
            """
            pub enum Answer {
                NuhUh = false,
                YuhHuh = true,
            }
            """
        )
        assert decl.form == ir.DeclarationForm.EXPLICIT
        assert decl.first.identifier == "NuhUh"
        assert decl.first.discriminant == ir.Discriminant.FALSE
        assert decl.second.identifier == "YuhHuh"
        assert decl.second.discriminant == ir.Discriminant.TRUE
        assert (decl.first.line, decl.first.column) == (3, 17)

    def test_without_discriminants(self):
        decl = parse_one("enum Overwrite { Replace, Keep }")
        assert [v.discriminant for v in decl.variants] == [
            ir.Discriminant.UNSET,
            ir.Discriminant.UNSET,
        ]

    def test_variant_attributes(self):
        decl = parse_one('enum X { @deprecated("old") @alias A = true, B = false }')
        assert decl.first.attributes == ('deprecated("old")', "alias")
        assert decl.second.attributes == ()

    def test_keyword_attribute_segment(self):
        decl = parse_one("@enum.unique enum X { A, B }")
        assert decl.attributes == ("enum.unique",)

    def test_variant_lookup(self):
        decl = parse_one("enum X { A, B }")
        assert decl.variant("B") is decl.second
        assert decl.variant("C") is None


class TestDefaultClause:
    """Tests for `default = expression`."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("true", "True"),
            ("false", "False"),
            ("Self::Keep", "O.Keep"),
            ("O::Keep", "O.Keep"),
            ("Self.Keep", "O.Keep"),
            ("(3 < 4)", "3 < 4"),
            ("flags.get('overwrite', false)", "flags.get('overwrite', False)"),
        ],
    )
    def test_normalized(self, source, expected):
        decl = parse_one(f"enum O {{ Replace = true, Keep = false, default = {source} }}")
        assert decl.default_clause == expected

    def test_multiline_expression(self):
        decl = parse_one("enum O { A = true, B = false, default = (\n    1 +\n    1 == 2\n), }")
        assert decl.default_clause == "1 + 1 == 2"

    def test_top_level_comma_ends_expression(self):
        decl = parse_one("enum O { A = true, B = false, default = max(1, 2) > 1, }")
        assert decl.default_clause == "max(1, 2) > 1"


class TestGrammarErrors:
    """Malformed declarations produce GrammarError with location."""

    def test_three_variants(self):
        error = parse_error("enum X { A, B, C }")
        assert "exactly two variants" in error.message
        assert (error.context.line, error.context.column) == (1, 16)

    def test_one_variant(self):
        error = parse_error("enum X { A }")
        assert "found one" in error.message

    def test_bad_discriminant(self):
        error = parse_error("enum X { A = 1, B = false }")
        assert "must be `true` or `false`" in error.message
        assert "'1'" in error.message

    def test_unknown_clause(self):
        error = parse_error("enum X { A, B, frobnicate = 1 }")
        assert "Unrecognized extension clause 'frobnicate'" in error.message

    @pytest.mark.parametrize(
        "text",
        ["enum X { foo = 1 }", "enum X { foo = bar(), }", "enum X { foo = 1, default = true }"],
    )
    def test_unknown_clause_without_variants(self, text):
        error = parse_error(text)
        assert "Unrecognized extension clause 'foo'" in error.message
        assert (error.context.line, error.context.column) == (1, 10)

    def test_bad_first_discriminant_before_variant(self):
        error = parse_error("enum X { A = yes, B = false }")
        assert "Discriminant of variant 'A'" in error.message

    def test_duplicate_default(self):
        error = parse_error("enum X { A, B, default = A, default = B }")
        assert "Duplicate 'default' clause" in error.message

    def test_variant_after_clause(self):
        error = parse_error("enum X { default = true, A, B }")
        assert "before extension clauses" in error.message

    def test_missing_terminator(self):
        error = parse_error("enum X")
        assert "Expected ';' or '{'" in error.message
        assert error.context.declaration == "X"

    def test_keyword_type_name(self):
        error = parse_error("enum default;")
        assert "reserved keyword" in error.message

    def test_python_keyword_type_name(self):
        error = parse_error("enum class;")
        assert "cannot be used as a type name" in error.message

    def test_empty_default(self):
        error = parse_error("enum X { A, B, default = }")
        assert "Expected expression" in error.message

    def test_invalid_default_expression(self):
        error = parse_error("enum X { A, B, default = 3 + }")
        assert "Invalid default expression '3 +'" in error.message

    def test_unexpected_character(self):
        error = parse_error("enum X$;")
        assert "got unexpected character: '$'" in error.message

    def test_error_renders_snippet(self):
        error = parse_error("enum X { A = maybe, B }")
        rendered = str(error)
        assert rendered.startswith("test.tsd:1:14 in enum X")
        assert "enum X { A = maybe, B }" in rendered
        assert "^^^" in rendered


class TestRecovery:
    """A bad declaration does not stop the ones after it."""

    def test_multiple_declarations(self):
        items = parse_declarations("enum A;\nenum B { X, Y }\n", Path("test.tsd"))
        assert [i.type_name for i in items] == ["A", "B"]

    def test_continues_after_error(self):
        items = parse_declarations(
            "enum A;\nenum B { X, Y, Z }\nenum C;\n", Path("test.tsd")
        )
        assert isinstance(items[0], ir.DeclarationSpec)
        assert isinstance(items[1], GrammarError)
        assert isinstance(items[2], ir.DeclarationSpec)
        assert items[2].type_name == "C"

    def test_missing_semicolon(self):
        items = parse_declarations("enum A\nenum B;", Path("test.tsd"))
        assert isinstance(items[0], GrammarError)
        assert items[1].type_name == "B"

    def test_unclosed_body(self):
        items = parse_declarations(
            'enum A { X, Y, default = "oops }\nenum B;\n', Path("test.tsd")
        )
        assert len(items) == 2
        assert "Unterminated string literal" in items[0].message
        assert items[1].type_name == "B"

    def test_attribute_error_yields_one_error(self):
        items = parse_declarations("@enum.unique\n@alias\nenum A { X }\nenum B;", Path("test.tsd"))
        assert len(items) == 2
        assert isinstance(items[0], GrammarError)
        assert items[1].type_name == "B"
