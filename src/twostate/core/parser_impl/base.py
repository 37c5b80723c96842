"""
Base parser class for twostate declarations.

Provides common token manipulation and utility methods used by all parser mixins.
"""

from pathlib import Path

from ..errors import GrammarError, make_grammar_error, source_line
from ..lexer import CLOSING, KEYWORDS, OPENING, Token, TokenType

# Keyword tokens that may still appear as name segments (e.g. @enum.unique)
NAME_TOKEN_TYPES = (TokenType.IDENTIFIER,) + tuple(TokenType(k) for k in sorted(KEYWORDS))

_MATCHING = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text the tokens were read from
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0
        self.current_declaration: str | None = None

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type == TokenType.ERROR:
            raise self.error(token.value, token)
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def error(self, message: str, token: Token | None = None) -> GrammarError:
        """Build a GrammarError located at token (default: current token)."""
        token = token or self.current_token()
        return make_grammar_error(
            message,
            self.file,
            token.line,
            token.column,
            snippet=source_line(self.text, token.line),
            declaration=self.current_declaration,
        )

    def describe(self, token: Token) -> str:
        """Human-readable description of a token for diagnostics."""
        if token.type == TokenType.EOF:
            return "end of input"
        if token.type == TokenType.ERROR:
            return token.value[0].lower() + token.value[1:]
        return repr(token.value)

    def expect(self, token_type: TokenType, what: str | None = None) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            GrammarError: If token doesn't match
        """
        token = self.current_token()
        if token.type == TokenType.ERROR:
            raise self.error(token.value, token)
        if token.type != token_type:
            expected = what or repr(token_type.value)
            raise self.error(f"Expected {expected}, got {self.describe(token)}", token)
        return self.advance()

    def expect_identifier(self, what: str = "identifier") -> Token:
        """Expect a plain identifier (keywords are not accepted)."""
        token = self.current_token()
        if token.type in NAME_TOKEN_TYPES and token.type != TokenType.IDENTIFIER:
            raise self.error(
                f"'{token.value}' is a reserved keyword and cannot be used as {what}",
                token,
            )
        return self.expect(TokenType.IDENTIFIER, what)

    def expect_name(self) -> Token:
        """Expect an identifier or accept a keyword as a name segment."""
        token = self.current_token()
        if token.type in NAME_TOKEN_TYPES:
            return self.advance()
        raise self.error(f"Expected name, got {self.describe(token)}", token)

    def skip_balanced(self) -> Token:
        """
        Consume a bracketed group starting at the current opening token.

        Returns:
            The matching closing token
        """
        opener = self.current_token()
        if opener.type not in OPENING:
            raise self.error(f"Expected '(', '[' or '{{', got {self.describe(opener)}", opener)

        stack = [_MATCHING[opener.type]]
        self.advance()
        while stack:
            token = self.current_token()
            if token.type == TokenType.EOF:
                raise self.error(f"Unclosed {opener.value!r}", opener)
            if token.type in OPENING:
                stack.append(_MATCHING[token.type])
            elif token.type in CLOSING:
                if token.type != stack[-1]:
                    raise self.error(f"Mismatched {token.value!r}", token)
                stack.pop()
            self.advance()
        return self.tokens[self.pos - 1]

    def span(self, first: Token, last: Token) -> str:
        """Source text from the start of first to the end of last, verbatim."""
        return self.text[first.start : last.end]
