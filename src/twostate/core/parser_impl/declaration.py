"""
Declaration parser mixin for twostate.

Parses both surface forms of a two-state type declaration.

Terse form:

    pub enum ClearFirst;

Explicit form:

    @enum.unique
    pub enum Answer {
        @deprecated("use Yuh")
        NuhUh = false,
        YuhHuh = true,
        default = (3 < 4),
    }

A brace body without variants (`enum Name {}` or `enum Name { default = ... }`)
is the terse form with extension clauses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..expressions import normalize_expression
from ..lexer import Token, TokenType
from ..strings import is_valid_identifier

# Canonical "No" state returned by a synthesized terse-form default
TERSE_DEFAULT_EXPRESSION = "False"


class DeclarationParserMixin:
    """Parser mixin for `enum` declarations."""

    if TYPE_CHECKING:
        advance: Any
        match: Any
        expect: Any
        expect_identifier: Any
        current_token: Any
        peek_token: Any
        error: Any
        describe: Any
        file: Any
        current_declaration: Any
        synthesize_terse_default: bool
        parse_attributes: Any
        parse_visibility: Any
        at_extension_clause: Any
        parse_extension_clause: Any

    def parse_declaration(self) -> ir.DeclarationSpec:
        """
        Parse one declaration.

        Grammar:
            ATTRIBUTES VISIBILITY ENUM IDENTIFIER (SEMICOLON | LBRACE BODY RBRACE)

        Returns:
            DeclarationSpec for the declaration
        """
        self.current_declaration = None
        attributes = self.parse_attributes()
        visibility = self.parse_visibility()
        enum_token = self.expect(TokenType.ENUM, "'enum'")
        name_token = self._parse_type_name()
        self.current_declaration = name_token.value

        if self.match(TokenType.SEMICOLON):
            self.advance()
            variants = ir.yes_no_variants()
            clauses: list[ir.ExtensionClause] = []
            form = ir.DeclarationForm.TERSE
        elif self.match(TokenType.LBRACE):
            self.advance()
            parsed, clauses = self._parse_body()
            self.expect(TokenType.RBRACE, "'}'")
            if parsed:
                variants = (parsed[0], parsed[1])
                form = ir.DeclarationForm.EXPLICIT
            else:
                variants = ir.yes_no_variants()
                form = ir.DeclarationForm.TERSE
        else:
            raise self.error(
                f"Expected ';' or '{{' after 'enum {name_token.value}', "
                f"got {self.describe(self.current_token())}"
            )

        default_clause = self._default_expression(clauses, name_token.value)
        if default_clause is None and form == ir.DeclarationForm.TERSE:
            if self.synthesize_terse_default:
                default_clause = TERSE_DEFAULT_EXPRESSION

        return ir.DeclarationSpec(
            type_name=name_token.value,
            visibility=visibility,
            attributes=attributes,
            variants=variants,
            default_clause=default_clause,
            form=form,
            file=self.file,
            line=enum_token.line,
            column=enum_token.column,
        )

    def _parse_type_name(self) -> Token:
        token = self.expect_identifier("a type name")
        if not is_valid_identifier(token.value):
            raise self.error(f"{token.value!r} cannot be used as a type name", token)
        return token

    def _parse_body(self) -> tuple[list[ir.VariantSpec], list[ir.ExtensionClause]]:
        """
        Parse the items between the braces.

        Grammar:
            [VARIANT COMMA VARIANT] (COMMA CLAUSE)* [COMMA]

        Variants must come before clauses. Exactly zero or two variants.
        """
        variants: list[ir.VariantSpec] = []
        clauses: list[ir.ExtensionClause] = []

        while not self.match(TokenType.RBRACE, TokenType.EOF):
            if self.at_extension_clause(len(variants)):
                clause = self.parse_extension_clause()
                if any(existing.key == clause.key for existing in clauses):
                    raise self.error(
                        f"Duplicate {clause.key!r} clause; it may be given only once",
                        _clause_token(clause),
                    )
                clauses.append(clause)
            else:
                start = self.current_token()
                if clauses:
                    raise self.error("Variants must be declared before extension clauses", start)
                if len(variants) == 2:
                    raise self.error(
                        "A two-state type has exactly two variants; found a third", start
                    )
                variants.append(self.parse_variant())

            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACE):
                raise self.error(
                    f"Expected ',' or '}}', got {self.describe(self.current_token())}"
                )

        if len(variants) == 1:
            raise self.error(
                "A two-state type has exactly two variants; found one "
                "(omit both to get Yes/No)",
                self.current_token(),
            )
        return variants, clauses

    def parse_variant(self) -> ir.VariantSpec:
        """
        Parse one variant.

        Grammar:
            ATTRIBUTES IDENTIFIER [EQUALS (TRUE | FALSE)]
        """
        attributes = self.parse_attributes()
        name_token = self.expect_identifier("a variant name")
        if not is_valid_identifier(name_token.value):
            raise self.error(f"{name_token.value!r} cannot be used as a variant name", name_token)

        discriminant = ir.Discriminant.UNSET
        if self.match(TokenType.EQUALS):
            self.advance()
            discriminant = self.parse_discriminant(name_token)

        return ir.VariantSpec(
            identifier=name_token.value,
            attributes=attributes,
            discriminant=discriminant,
            line=name_token.line,
            column=name_token.column,
        )

    def parse_discriminant(self, variant: Token) -> ir.Discriminant:
        """Parse a `true` or `false` discriminant literal."""
        token = self.current_token()
        if token.type == TokenType.TRUE:
            self.advance()
            return ir.Discriminant.TRUE
        if token.type == TokenType.FALSE:
            self.advance()
            return ir.Discriminant.FALSE
        raise self.error(
            f"Discriminant of variant {variant.value!r} must be `true` or `false`, "
            f"got {self.describe(token)}",
            token,
        )

    def _default_expression(
        self, clauses: list[ir.ExtensionClause], type_name: str
    ) -> str | None:
        for clause in clauses:
            if clause.key != "default":
                continue
            try:
                return normalize_expression(clause.expression, type_name)
            except SyntaxError as e:
                raise self.error(
                    f"Invalid default expression {clause.expression.strip()!r}: {e.msg}",
                    _clause_token(clause),
                ) from e
        return None


def _clause_token(clause: ir.ExtensionClause) -> Token:
    return Token(TokenType.DEFAULT, clause.key, clause.line, clause.column)
