"""
twostate Declaration Parser Package.

The parser is built from mixins that separate parsing logic by construct:

- AttributeParserMixin: `@attribute` lists and visibility
- DeclarationParserMixin: `enum` declarations, variants, discriminants
- ExtensionClauseParserMixin: `key = expression` clauses

Usage:
    from twostate.core.parser_impl import parse_declarations

    items = parse_declarations(text, Path("flags.tsd"))
"""

from pathlib import Path

from .. import ir
from ..errors import GrammarError
from ..lexer import TokenType, tokenize
from .attributes import AttributeParserMixin
from .base import BaseParser
from .declaration import DeclarationParserMixin
from .extensions import ExtensionClauseParserMixin

# Tokens that can begin a declaration
_DECLARATION_START = (TokenType.AT, TokenType.PUB, TokenType.ENUM)


class Parser(
    BaseParser,
    AttributeParserMixin,
    ExtensionClauseParserMixin,
    DeclarationParserMixin,
):
    """
    Complete twostate declaration parser.

    A generation unit may hold any number of declarations. A grammar error
    fails only the declaration it occurs in: the parser records it, skips to
    the end of that declaration and carries on.
    """

    def __init__(self, tokens, file: Path, text: str, synthesize_terse_default: bool = False):
        super().__init__(tokens, file, text)
        self.synthesize_terse_default = synthesize_terse_default

    def parse(self) -> list[ir.DeclarationSpec | GrammarError]:
        """
        Parse every declaration in the unit.

        Returns:
            One entry per declaration, in source order: the DeclarationSpec,
            or the GrammarError that failed it
        """
        items: list[ir.DeclarationSpec | GrammarError] = []
        while not self.match(TokenType.EOF):
            start = self.pos
            try:
                items.append(self.parse_declaration())
            except GrammarError as e:
                items.append(e)
                self.synchronize(start)
        return items

    def synchronize(self, start: int) -> None:
        """
        Skip past the declaration that began at token index start.

        Stops after a top-level ';' or the '}' closing the body, or before
        the next declaration's first token. Inside a body that is never
        closed, an `enum` or `pub` beginning a line starts the next
        declaration.
        """
        self.pos = start
        depth = 0
        seen_enum = False
        while True:
            token = self.tokens[self.pos]
            if token.type == TokenType.EOF:
                return
            if self.pos > start and self._at_declaration_start(depth, seen_enum):
                return
            if token.type == TokenType.ENUM and not self._follows_attribute_name():
                seen_enum = True
            elif token.type == TokenType.LBRACE:
                depth += 1
            elif token.type == TokenType.RBRACE:
                depth -= 1
                if depth <= 0:
                    self.pos += 1
                    return
            elif token.type == TokenType.SEMICOLON and depth == 0:
                self.pos += 1
                return
            self.pos += 1

    def _at_declaration_start(self, depth: int, seen_enum: bool) -> bool:
        token = self.tokens[self.pos]
        if token.type not in _DECLARATION_START or self._follows_attribute_name():
            return False
        if depth == 0:
            return seen_enum
        previous = self.tokens[self.pos - 1]
        return token.type in (TokenType.ENUM, TokenType.PUB) and previous.line < token.line

    def _follows_attribute_name(self) -> bool:
        # `enum` in `@enum.unique` is a name segment, not a keyword
        return self.pos > 0 and self.tokens[self.pos - 1].type in (TokenType.AT, TokenType.DOT)


def parse_declarations(
    text: str,
    file: Path,
    synthesize_terse_default: bool = False,
) -> list[ir.DeclarationSpec | GrammarError]:
    """
    Parse declaration text into DeclarationSpecs.

    Args:
        text: Declaration source text
        file: Source file path (for error reporting)
        synthesize_terse_default: Give terse declarations a default() returning No

    Returns:
        One DeclarationSpec or GrammarError per declaration, in source order
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, text, synthesize_terse_default)
    return parser.parse()


__all__ = [
    "Parser",
    "parse_declarations",
]
