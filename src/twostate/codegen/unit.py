"""
Generation unit driver.

Runs every declaration of a unit through

    received -> parsed -> validated -> emitted

and assembles the emitted classes into one Python module.
"""

from __future__ import annotations

import logging
from pathlib import Path

from twostate._version import get_version
from twostate.core import ir
from twostate.core.errors import GrammarError, TwoStateError, make_emission_error
from twostate.core.manifest import GeneratorConfig
from twostate.core.parser_impl import parse_declarations

from .generator import TwoStateGenerator
from .results import DeclarationOutcome, UnitResult

logger = logging.getLogger(__name__)

STRING_SOURCE = Path("<string>")


def expand_unit(
    text: str,
    file: Path = STRING_SOURCE,
    config: GeneratorConfig | None = None,
) -> UnitResult:
    """
    Expand every declaration in text.

    Failed declarations are recorded in the result and left out of the
    module; the remaining declarations are still emitted.

    Args:
        text: Declaration source text
        file: Source file (for diagnostics and the module header)
        config: Generator options

    Returns:
        UnitResult with one outcome per declaration and the module source
    """
    config = config or GeneratorConfig()
    items = parse_declarations(
        text, file, synthesize_terse_default=config.synthesize_default_for_terse_form
    )
    return expand_declarations(items, file, config)


def expand_declarations(
    items: list[ir.DeclarationSpec | GrammarError] | list[ir.DeclarationSpec],
    file: Path = STRING_SOURCE,
    config: GeneratorConfig | None = None,
) -> UnitResult:
    """
    Validate and emit already-parsed declarations as one unit.

    Args:
        items: Declarations, or the parser's mix of declarations and grammar errors
        file: Source file (for the module header)
        config: Generator options

    Returns:
        UnitResult with one outcome per item
    """
    config = config or GeneratorConfig()
    generator = TwoStateGenerator(config)
    result = UnitResult(file=file)
    seen: dict[str, ir.DeclarationSpec] = {}

    for item in items:
        outcome = DeclarationOutcome()
        result.outcomes.append(outcome)

        if isinstance(item, GrammarError):
            logger.debug("Grammar error in %s: %s", file, item.message)
            outcome.fail(item)
            continue

        outcome.declaration = item
        outcome.advance(ir.GenerationState.PARSED)
        try:
            _check_unique(item, seen)
            mapping = generator.validate(item)
            outcome.advance(ir.GenerationState.VALIDATED)
            emitted = generator.emit(item, mapping)
        except TwoStateError as e:
            logger.debug("%s failed: %s", item.type_name, e.message)
            outcome.fail(e)
            continue

        seen[item.type_name] = item
        outcome.source = emitted.source
        outcome.mapping = emitted.mapping
        outcome.advance(ir.GenerationState.EMITTED)

    result.module_source = render_module(result, config)
    logger.info(
        "Expanded %s: %d emitted, %d failed",
        file,
        len(result.emitted),
        len(result.errors),
    )
    return result


def expand(
    text: str,
    file: Path = STRING_SOURCE,
    config: GeneratorConfig | None = None,
) -> str:
    """
    Expand declarations into a Python module, failing on the first error.

    Raises:
        GrammarError, InconsistentDiscriminantError, EmissionError
    """
    result = expand_unit(text, file, config)
    if result.errors:
        raise result.errors[0]
    return result.module_source


def expand_file(path: Path, config: GeneratorConfig | None = None) -> UnitResult:
    """Expand a declaration file."""
    text = path.read_text(encoding="utf-8")
    return expand_unit(text, path, config)


def render_module(result: UnitResult, config: GeneratorConfig) -> str:
    """Assemble the emitted classes of a unit into module source."""
    lines: list[str] = []
    if config.header:
        lines.append(
            f"# Generated by twostate {get_version()} from {result.file.name}. Do not edit."
        )
    lines.extend(["from __future__ import annotations", "", "import enum"])
    lines.extend(config.imports)
    lines.append("")

    public = [
        o.declaration.type_name
        for o in result.emitted
        if o.declaration is not None and o.declaration.is_public
    ]
    if public:
        lines.append("__all__ = [")
        lines.extend(f'    "{name}",' for name in public)
        lines.append("]")
    else:
        lines.append("__all__: list[str] = []")

    module = "\n".join(lines) + "\n"
    for outcome in result.emitted:
        module += "\n\n" + (outcome.source or "")
    return module


def _check_unique(declaration: ir.DeclarationSpec, seen: dict[str, ir.DeclarationSpec]) -> None:
    previous = seen.get(declaration.type_name)
    if previous is None:
        return
    raise make_emission_error(
        f"Type {declaration.type_name!r} is already declared at line {previous.line}",
        file=declaration.file,
        line=declaration.line,
        column=declaration.column,
        declaration=declaration.type_name,
    )
