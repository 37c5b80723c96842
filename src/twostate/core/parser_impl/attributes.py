"""
Attribute and visibility parser mixin for twostate declarations.

Both are opaque: the parser only finds where they end and forwards the
source text verbatim.

Syntax:

    @enum.unique
    @register("flags")
    pub(crate) enum ClearFirst;
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..lexer import TokenType


class AttributeParserMixin:
    """Parser mixin for `@attribute` lists and visibility tokens."""

    if TYPE_CHECKING:
        advance: Any
        match: Any
        expect_name: Any
        current_token: Any
        skip_balanced: Any
        span: Any
        tokens: Any
        pos: Any

    def parse_attributes(self) -> tuple[str, ...]:
        """
        Parse zero or more attributes.

        Grammar:
            (AT NAME (DOT NAME)* [LPAREN ... RPAREN])*

        Returns:
            Attribute text without the leading '@', in declaration order
        """
        attributes: list[str] = []
        while self.match(TokenType.AT):
            self.advance()
            first = self.expect_name()
            last = first
            while self.match(TokenType.DOT):
                self.advance()
                last = self.expect_name()
            if self.match(TokenType.LPAREN):
                last = self.skip_balanced()
            attributes.append(self.span(first, last))
        return tuple(attributes)

    def parse_visibility(self) -> str:
        """
        Parse an optional visibility token.

        Grammar:
            [PUB [LPAREN ... RPAREN]]

        Returns:
            Visibility text verbatim, or "" when omitted
        """
        if not self.match(TokenType.PUB):
            return ""
        first = self.advance()
        last = first
        if self.match(TokenType.LPAREN):
            last = self.skip_balanced()
        return self.span(first, last)
