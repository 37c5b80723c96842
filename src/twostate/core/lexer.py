"""
Lexer/Tokenizer for twostate declarations.

Converts raw declaration text into a stream of tokens with source location
tracking. Whitespace and newlines are insignificant; blocks are delimited by
braces. Every token records its character offsets so the parser can forward
opaque spans (attributes, visibility, default expressions) verbatim.

Malformed input does not stop tokenization: it becomes an ERROR token whose
value is the diagnostic, and the parser fails only the declaration that
contains it.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class TokenType(Enum):
    """Token types in the declaration language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    ENUM = "enum"
    PUB = "pub"
    TRUE = "true"
    FALSE = "false"
    DEFAULT = "default"

    # Delimiters
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    SEMICOLON = ";"
    COMMA = ","
    EQUALS = "="
    AT = "@"
    DOT = "."
    COLON = ":"
    DOUBLE_COLON = "::"

    # Any other operator inside an expression (<, >=, +, ...)
    OP = "OP"

    # Special
    ERROR = "ERROR"
    EOF = "EOF"


KEYWORDS = {
    "enum",
    "pub",
    "true",
    "false",
    "default",
}

OPENING = {TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE}
CLOSING = {TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE}

_SINGLE_CHAR_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "@": TokenType.AT,
    ".": TokenType.DOT,
}

_TWO_CHAR_OPS = {"==", "!=", "<=", ">=", "**", "//", "<<", ">>", "->"}
_OP_CHARS = set("<>+-*/%!&|^~")


@dataclass
class Token:
    """
    A single token in a declaration.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        start: Offset of the first character in the source text
        end: Offset one past the last character
    """

    type: TokenType
    value: str
    line: int
    column: int
    start: int = 0
    end: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for twostate declarations.

    Converts source text into a flat stream of tokens.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, newlines included."""
        while self.current_char() in (" ", "\t", "\r", "\n"):
            self.advance()

    def skip_comment(self) -> None:
        """Skip comment (from # to end of line)."""
        if self.current_char() == "#":
            while self.current_char() and self.current_char() != "\n":
                self.advance()

    def read_string(self) -> str | None:
        """Read a quoted string. Returns None if it is not terminated on its line."""
        quote = self.current_char()  # " or '
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if not current or current == quote or current == "\n":
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != quote:
            return None

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read a numeric literal (ints, floats, 0x.., 1_000, 1e3)."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current in "._"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def _emit(self, token_type: TokenType, value: str, line: int, column: int, start: int) -> None:
        self.tokens.append(Token(token_type, value, line, column, start, self.pos))

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF
        """
        while True:
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column
            start = self.pos

            if ch == "#":
                self.skip_comment()

            elif ch in ('"', "'"):
                value = self.read_string()
                if value is None:
                    self._emit(
                        TokenType.ERROR, "Unterminated string literal", token_line, token_col, start
                    )
                else:
                    self._emit(TokenType.STRING, value, token_line, token_col, start)

            elif ch.isdigit():
                value = self.read_number()
                self._emit(TokenType.NUMBER, value, token_line, token_col, start)

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                token_type = TokenType(value) if value in KEYWORDS else TokenType.IDENTIFIER
                self._emit(token_type, value, token_line, token_col, start)

            elif ch == ":":
                if self.peek_char() == ":":
                    self.advance()
                    self.advance()
                    self._emit(TokenType.DOUBLE_COLON, "::", token_line, token_col, start)
                else:
                    self.advance()
                    self._emit(TokenType.COLON, ":", token_line, token_col, start)

            elif ch == "=":
                if self.peek_char() == "=":
                    self.advance()
                    self.advance()
                    self._emit(TokenType.OP, "==", token_line, token_col, start)
                else:
                    self.advance()
                    self._emit(TokenType.EQUALS, "=", token_line, token_col, start)

            elif ch in _SINGLE_CHAR_TOKENS:
                self.advance()
                self._emit(_SINGLE_CHAR_TOKENS[ch], ch, token_line, token_col, start)

            elif ch in _OP_CHARS:
                pair = ch + (self.peek_char() or "")
                if pair in _TWO_CHAR_OPS:
                    self.advance()
                    self.advance()
                    self._emit(TokenType.OP, pair, token_line, token_col, start)
                else:
                    self.advance()
                    self._emit(TokenType.OP, ch, token_line, token_col, start)

            else:
                self.advance()
                self._emit(
                    TokenType.ERROR, f"Unexpected character: {ch!r}", token_line, token_col, start
                )

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column, self.pos, self.pos))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize declaration text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
