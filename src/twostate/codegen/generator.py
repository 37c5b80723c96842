"""
Python source generator for twostate declarations.

Turns one validated DeclarationSpec into the source of an `enum.Enum`
subclass carrying:

1. the two members, in declaration order
2. one `is_<variant>()` predicate per member
3. `to_bool()`, `__bool__()` and `from_bool()` when discriminants are pinned
4. `default()` when the declaration has a default clause

Emission is all-or-nothing: every check runs before any text is produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from twostate.core import ir
from twostate.core.errors import make_emission_error
from twostate.core.expressions import is_bool_literal, is_member_reference
from twostate.core.manifest import GeneratorConfig
from twostate.core.strings import accessor_name
from twostate.core.validator import classify_discriminants

logger = logging.getLogger(__name__)

INDENT = "    "

# Names the generated class defines besides the predicates, plus Enum's own
GENERATED_METHODS = frozenset({"to_bool", "from_bool", "default", "name", "value"})

# Module-level names the generated methods look up; a type must not rebind them
REFERENCED_GLOBALS = frozenset({"enum", "bool", "isinstance", "type", "TypeError"})


@dataclass(frozen=True)
class EmittedType:
    """Source and shape of one generated type."""

    declaration: ir.DeclarationSpec
    mapping: ir.BoolMapping | None
    source: str

    @property
    def type_name(self) -> str:
        return self.declaration.type_name

    @property
    def accessors(self) -> tuple[str, str]:
        first, second = self.declaration.variants
        return accessor_name(first.identifier), accessor_name(second.identifier)


class TwoStateGenerator:
    """
    Generate Python source for two-state declarations.

    The generator is stateless apart from its configuration, so one instance
    can emit any number of declarations in any order.
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    def validate(self, declaration: ir.DeclarationSpec) -> ir.BoolMapping | None:
        """
        Run every generation-time check on a declaration.

        Returns:
            The bool mapping, or None when the type has no conversion

        Raises:
            InconsistentDiscriminantError: If discriminants are inconsistent
            EmissionError: If generated names would collide
        """
        mapping = classify_discriminants(declaration)
        self._check_names(declaration)
        self._check_default(declaration, mapping)
        return mapping

    def emit(
        self, declaration: ir.DeclarationSpec, mapping: ir.BoolMapping | None = None
    ) -> EmittedType:
        """
        Generate the class source for a declaration.

        Args:
            declaration: Parsed declaration
            mapping: Result of validate(); computed here when omitted

        Returns:
            EmittedType with the class source
        """
        if mapping is None:
            mapping = self.validate(declaration)

        parts = [
            self._generate_class_header(declaration, mapping),
            self._generate_members(declaration),
            self._generate_predicates(declaration),
        ]
        if mapping is not None:
            parts.append(self._generate_conversions(declaration, mapping))
        if declaration.default_clause is not None:
            parts.append(self._generate_default(declaration, mapping))

        source = "\n".join(parts)
        logger.debug(
            "Emitted %s (conversion=%s, default=%s)",
            declaration.type_name,
            mapping is not None,
            declaration.default_clause is not None,
        )
        return EmittedType(declaration=declaration, mapping=mapping, source=source)

    # === Checks ===

    def _check_names(self, declaration: ir.DeclarationSpec) -> None:
        first, second = declaration.variants

        if declaration.type_name in REFERENCED_GLOBALS:
            raise make_emission_error(
                f"Type name {declaration.type_name!r} would shadow a global "
                "the generated methods rely on",
                file=declaration.file,
                line=declaration.line,
                column=declaration.column,
                declaration=declaration.type_name,
            )

        if first.identifier == second.identifier:
            raise self._collision(
                declaration, second, f"Variant {second.identifier!r} is declared twice"
            )

        for variant in declaration.variants:
            if variant.identifier.startswith("_"):
                raise self._collision(
                    declaration,
                    variant,
                    f"Variant {variant.identifier!r} cannot start with '_' "
                    "(enum.Enum does not treat such names as members)",
                )
            if variant.identifier in GENERATED_METHODS:
                raise self._collision(
                    declaration,
                    variant,
                    f"Variant {variant.identifier!r} collides with a generated method",
                )

        first_accessor = accessor_name(first.identifier)
        second_accessor = accessor_name(second.identifier)
        if first_accessor == second_accessor:
            raise self._collision(
                declaration,
                second,
                f"Variants {first.identifier!r} and {second.identifier!r} "
                f"both produce the accessor {first_accessor!r}",
            )

        accessors = {first_accessor, second_accessor}
        for variant in declaration.variants:
            if variant.identifier in accessors:
                raise self._collision(
                    declaration,
                    variant,
                    f"Variant {variant.identifier!r} collides with a generated accessor",
                )

    def _check_default(
        self, declaration: ir.DeclarationSpec, mapping: ir.BoolMapping | None
    ) -> None:
        expression = declaration.default_clause
        if expression is None:
            return

        if is_member_reference(expression, declaration.type_name):
            member = expression.rsplit(".", 1)[1]
            if declaration.variant(member) is None:
                names = " or ".join(v.identifier for v in declaration.variants)
                raise make_emission_error(
                    f"Default {expression!r} is not a member of {declaration.type_name} "
                    f"(expected {names})",
                    file=declaration.file,
                    line=declaration.line,
                    column=declaration.column,
                    declaration=declaration.type_name,
                )
        elif mapping is None and is_bool_literal(expression):
            raise make_emission_error(
                f"Default {expression} needs a bool conversion, but "
                f"{declaration.type_name} has no discriminants; assign `true`/`false` "
                "to the variants or default to a member",
                file=declaration.file,
                line=declaration.line,
                column=declaration.column,
                declaration=declaration.type_name,
            )

    def _collision(self, declaration: ir.DeclarationSpec, variant: ir.VariantSpec, message: str):
        return make_emission_error(
            message,
            file=declaration.file,
            line=variant.line or declaration.line,
            column=variant.column or declaration.column,
            declaration=declaration.type_name,
        )

    # === Sections ===

    def _generate_class_header(
        self, declaration: ir.DeclarationSpec, mapping: ir.BoolMapping | None
    ) -> str:
        """Decorators, class line and docstring."""
        lines = [f"@{attribute}" for attribute in declaration.attributes]
        lines.append(f"class {declaration.type_name}(enum.Enum):")

        first, second = declaration.variants
        if mapping is not None:
            summary = f"{mapping.true_variant} (True) / {mapping.false_variant} (False)"
        else:
            summary = f"{first.identifier} / {second.identifier}"
        lines.append(f'{INDENT}"""Two-state type: {summary}."""')
        lines.append("")
        return "\n".join(lines)

    def _generate_members(self, declaration: ir.DeclarationSpec) -> str:
        lines = []
        for variant in declaration.variants:
            for attribute in variant.attributes:
                lines.append(f"{INDENT}# @{attribute}")
            lines.append(f'{INDENT}{variant.identifier} = "{variant.identifier}"')
        return "\n".join(lines) + "\n"

    def _generate_predicates(self, declaration: ir.DeclarationSpec) -> str:
        name = declaration.type_name
        blocks = []
        for variant in declaration.variants:
            blocks.append(
                f"{INDENT}def {accessor_name(variant.identifier)}(self) -> bool:\n"
                f"{INDENT * 2}return self is {name}.{variant.identifier}\n"
            )
        return "\n".join(blocks)

    def _generate_conversions(
        self, declaration: ir.DeclarationSpec, mapping: ir.BoolMapping
    ) -> str:
        name = declaration.type_name
        true_member = f"{name}.{mapping.true_variant}"
        lines = [
            f"{INDENT}def to_bool(self) -> bool:",
            f"{INDENT * 2}return self is {true_member}",
            "",
            f"{INDENT}def __bool__(self) -> bool:",
            f"{INDENT * 2}return self.to_bool()",
            "",
            f"{INDENT}@classmethod",
            f"{INDENT}def from_bool(cls, value: bool) -> {name}:",
            f"{INDENT * 2}if not isinstance(value, bool):",
            f"{INDENT * 3}raise TypeError(",
            f'{INDENT * 4}f"{name}.from_bool() expects a bool, got {{type(value).__name__}}"',
            f"{INDENT * 3})",
            f"{INDENT * 2}return cls.{mapping.true_variant} if value "
            f"else cls.{mapping.false_variant}",
        ]
        return "\n".join(lines) + "\n"

    def _generate_default(
        self, declaration: ir.DeclarationSpec, mapping: ir.BoolMapping | None
    ) -> str:
        name = declaration.type_name
        lines = [
            f"{INDENT}@classmethod",
            f"{INDENT}def default(cls) -> {name}:",
            f"{INDENT * 2}value = {declaration.default_clause}",
            f"{INDENT * 2}if isinstance(value, cls):",
            f"{INDENT * 3}return value",
        ]
        if mapping is not None:
            lines.append(f"{INDENT * 2}return cls.from_bool(value)")
        else:
            lines.extend(
                [
                    f"{INDENT * 2}raise TypeError(",
                    f'{INDENT * 3}f"{name}.default() must produce a {name} member, '
                    f'got {{value!r}}"',
                    f"{INDENT * 2})",
                ]
            )
        return "\n".join(lines) + "\n"
