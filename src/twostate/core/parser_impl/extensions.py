"""
Extension clause parser mixin for twostate declarations.

Extension clauses follow the variants inside the braces:

    enum Overwrite {
        Replace = true,
        Keep = false,
        default = Self::Keep,
    }

Only `default` is currently recognized.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import CLOSING, OPENING, Token, TokenType

RECOGNIZED_CLAUSE_KEYS = ("default",)

BOOL_LITERALS = (TokenType.TRUE, TokenType.FALSE)


class ExtensionClauseParserMixin:
    """Parser mixin for `key = expression` clauses."""

    if TYPE_CHECKING:
        advance: Any
        match: Any
        expect: Any
        expect_name: Any
        current_token: Any
        peek_token: Any
        error: Any
        describe: Any
        text: Any

    def at_extension_clause(self, variants_seen: int) -> bool:
        """
        Whether the current token starts an extension clause.

        `default` always does. Any other `name =` does once both variants have
        been read, so that unknown keys are reported as such rather than as a
        third variant. Before any variant, `name = value` with a non-bool value
        is a clause unless a variant follows it.
        """
        if self.match(TokenType.DEFAULT):
            return True
        if not (self.match(TokenType.IDENTIFIER) and self.peek_token().type == TokenType.EQUALS):
            return False
        if variants_seen >= 2:
            return True
        if variants_seen == 0 and self.peek_token(2).type not in BOOL_LITERALS:
            return not self._variant_follows()
        return False

    def _variant_follows(self) -> bool:
        """Whether the item after the current `name = value` looks like a variant."""
        offset = 2
        depth = 0
        while True:
            token = self.peek_token(offset)
            if token.type in (TokenType.EOF, TokenType.ERROR):
                return False
            if depth == 0 and token.type == TokenType.COMMA:
                break
            if token.type in OPENING:
                depth += 1
            elif token.type in CLOSING:
                if depth == 0:
                    return False
                depth -= 1
            offset += 1

        following = self.peek_token(offset + 1)
        if following.type == TokenType.AT:
            return True
        if following.type != TokenType.IDENTIFIER:
            return False
        if self.peek_token(offset + 2).type != TokenType.EQUALS:
            return True
        return self.peek_token(offset + 3).type in BOOL_LITERALS

    def parse_extension_clause(self) -> ir.ExtensionClause:
        """
        Parse one extension clause.

        Grammar:
            NAME EQUALS EXPRESSION

        Raises:
            GrammarError: If the key is not recognized or the expression is empty
        """
        key_token = self.expect_name()
        if key_token.value not in RECOGNIZED_CLAUSE_KEYS:
            supported = ", ".join(repr(k) for k in RECOGNIZED_CLAUSE_KEYS)
            raise self.error(
                f"Unrecognized extension clause {key_token.value!r}; supported: {supported}",
                key_token,
            )
        self.expect(TokenType.EQUALS, f"'=' after {key_token.value!r}")
        expression = self.capture_expression(key_token)
        return ir.ExtensionClause(
            key=key_token.value,
            expression=expression,
            line=key_token.line,
            column=key_token.column,
        )

    def capture_expression(self, owner: Token) -> str:
        """
        Capture an opaque expression up to the next top-level ',' or '}'.

        `::` path separators are rewritten to '.'; everything else is kept
        verbatim, comments and line breaks included.
        """
        tokens: list[Token] = []
        depth = 0
        while True:
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error(f"Unterminated expression for {owner.value!r}", owner)
            if depth == 0 and token.type in (TokenType.COMMA, TokenType.RBRACE):
                break
            if token.type in OPENING:
                depth += 1
            elif token.type in CLOSING:
                if depth == 0:
                    raise self.error(f"Unbalanced {token.value!r} in expression", token)
                depth -= 1
            tokens.append(self.advance())

        if not tokens:
            raise self.error(
                f"Expected expression after '{owner.value} =', got "
                f"{self.describe(self.current_token())}"
            )

        pieces: list[str] = []
        cursor = tokens[0].start
        for token in tokens:
            if token.type == TokenType.DOUBLE_COLON:
                pieces.append(self.text[cursor : token.start])
                pieces.append(".")
                cursor = token.end
        pieces.append(self.text[cursor : tokens[-1].end])
        return "".join(pieces)
