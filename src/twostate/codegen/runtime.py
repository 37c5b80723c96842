"""
In-process expansion.

Instead of writing a module to disk, execute the generated source and hand
back the classes. This is what a library uses at import time:

    from twostate import yes_no

    ClearFirst = yes_no("ClearFirst")

    def add_zeros(n: int, clear_first: ClearFirst, values: list[int]) -> None:
        if clear_first.is_yes():
            values.clear()
        values.extend([0] * n)

Generated code sees only the builtins, `enum` and the configured imports.
Pass `namespace=globals()` to let defaults and attributes use the caller's names.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from twostate.core import ir
from twostate.core.errors import make_grammar_error
from twostate.core.expressions import normalize_expression
from twostate.core.manifest import GeneratorConfig
from twostate.core.strings import is_valid_identifier

from .unit import STRING_SOURCE, expand_declarations, expand_unit

logger = logging.getLogger(__name__)

DEFAULT_MODULE = "twostate.generated"


def execute(
    source: str,
    module: str = DEFAULT_MODULE,
    file: Path = STRING_SOURCE,
    namespace: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Execute generated module source and return its globals.

    Args:
        source: Module source from expand_unit()
        module: Value of __name__ while executing
        file: Filename shown in tracebacks
        namespace: Names visible to decorators and default expressions.
            Copied, so later rebinding in the caller is not seen.
    """
    module_globals: dict[str, Any] = {**(namespace or {}), "__name__": module}
    code = compile(source, str(file), "exec")
    exec(code, module_globals)
    return module_globals


def define(
    text: str,
    module: str = DEFAULT_MODULE,
    config: GeneratorConfig | None = None,
    namespace: Mapping[str, Any] | None = None,
) -> dict[str, type]:
    """
    Expand declarations and return the generated classes by name.

    Args:
        text: Declaration source text
        module: Value of __module__ for the generated classes
        config: Generator options
        namespace: Names the generated code may refer to, e.g. globals()

    Returns:
        Mapping of type name to class, in declaration order

    Raises:
        GrammarError, InconsistentDiscriminantError, EmissionError
    """
    result = expand_unit(text, config=config)
    if result.errors:
        raise result.errors[0]
    module_globals = execute(result.module_source, module, namespace=namespace)
    return {name: module_globals[name] for name in result.type_names}


def yes_no(
    name: str,
    *,
    default: bool | str | None = None,
    visibility: str = "pub",
    module: str = DEFAULT_MODULE,
    namespace: Mapping[str, Any] | None = None,
) -> type:
    """
    Build a Yes/No type without writing declaration text.

    Equivalent to `pub enum <name>;` (with `default = ...` when given).

    Args:
        name: Type name
        default: True/False, an expression string, or None for no default()
        visibility: Visibility text; "" keeps the type out of __all__
        module: Value of __module__ for the generated class
        namespace: Names a default expression may refer to
    """
    _require_identifier(name, "type name")
    declaration = ir.DeclarationSpec(
        type_name=name,
        visibility=visibility,
        variants=ir.yes_no_variants(),
        default_clause=_default_clause(default, name),
        form=ir.DeclarationForm.TERSE,
    )
    return _build(declaration, module, namespace)


def custom_bool(
    name: str,
    first: str,
    second: str,
    *,
    true: str | None = None,
    default: bool | str | None = None,
    visibility: str = "pub",
    module: str = DEFAULT_MODULE,
    namespace: Mapping[str, Any] | None = None,
) -> type:
    """
    Build a two-state type with caller-named variants.

    Args:
        name: Type name
        first: First variant
        second: Second variant
        true: Which variant converts to True; None for no bool conversion
        default: True/False, an expression string, or None for no default()
        visibility: Visibility text; "" keeps the type out of __all__
        module: Value of __module__ for the generated class
        namespace: Names a default expression may refer to
    """
    _require_identifier(name, "type name")
    _require_identifier(first, "variant name")
    _require_identifier(second, "variant name")
    if true is not None and true not in (first, second):
        raise ValueError(f"true={true!r} must name one of the variants {first!r}, {second!r}")

    def discriminant(identifier: str) -> ir.Discriminant:
        if true is None:
            return ir.Discriminant.UNSET
        return ir.Discriminant.TRUE if identifier == true else ir.Discriminant.FALSE

    declaration = ir.DeclarationSpec(
        type_name=name,
        visibility=visibility,
        variants=(
            ir.VariantSpec(identifier=first, discriminant=discriminant(first)),
            ir.VariantSpec(identifier=second, discriminant=discriminant(second)),
        ),
        default_clause=_default_clause(default, name),
    )
    return _build(declaration, module, namespace)


def _build(
    declaration: ir.DeclarationSpec, module: str, namespace: Mapping[str, Any] | None
) -> type:
    result = expand_declarations([declaration])
    if result.errors:
        raise result.errors[0]
    module_globals = execute(result.module_source, module, namespace=namespace)
    logger.debug("Defined %s in %s", declaration.type_name, module)
    return module_globals[declaration.type_name]


def _default_clause(default: bool | str | None, type_name: str) -> str | None:
    if default is None:
        return None
    if isinstance(default, bool):
        return repr(default)
    try:
        return normalize_expression(default, type_name)
    except SyntaxError as e:
        raise make_grammar_error(
            f"Invalid default expression {default.strip()!r}: {e.msg}",
            STRING_SOURCE,
            1,
            1,
            snippet=default,
            declaration=type_name,
        ) from e


def _require_identifier(value: str, what: str) -> None:
    if not is_valid_identifier(value):
        raise ValueError(f"{value!r} is not a valid {what}")
