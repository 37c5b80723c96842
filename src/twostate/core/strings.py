"""
String utility functions for twostate.

Identifier casing used to derive generated method names from variant names.
"""

from __future__ import annotations

import keyword
import re

# Boundary between an acronym and a following word: HTTPServer -> HTTP_Server
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# Boundary between a lowercase letter or digit and an uppercase letter: NuhUh -> Nuh_Uh
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

ACCESSOR_PREFIX = "is_"


def to_snake_case(name: str) -> str:
    """
    Convert an identifier to lower snake_case.

    Examples:
        >>> to_snake_case("Yes")
        'yes'
        >>> to_snake_case("YuhHuh")
        'yuh_huh'
        >>> to_snake_case("HTTPServer")
        'http_server'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    if not name:
        return name

    result = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    result = _WORD_BOUNDARY.sub(r"\1_\2", result)
    result = re.sub(r"_+", "_", result)
    return result.lower()


def accessor_name(variant_identifier: str) -> str:
    """
    Name of the predicate accessor for a variant.

    Examples:
        >>> accessor_name("Yes")
        'is_yes'
        >>> accessor_name("NuhUh")
        'is_nuh_uh'
    """
    return ACCESSOR_PREFIX + to_snake_case(variant_identifier).strip("_")


def is_valid_identifier(name: str) -> bool:
    """Whether name can be used as a Python class or member name."""
    return name.isidentifier() and not keyword.iskeyword(name)
