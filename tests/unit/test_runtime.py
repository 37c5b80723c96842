"""Tests for in-process builders."""

import pytest

from twostate import custom_bool, define, yes_no
from twostate.core.errors import EmissionError, GrammarError
from twostate.core.manifest import GeneratorConfig


class TestYesNo:
    """Tests for yes_no function."""

    def test_basic(self):
        ClearFirst = yes_no("ClearFirst")
        assert [m.name for m in ClearFirst] == ["Yes", "No"]
        assert ClearFirst.Yes.is_yes()
        assert ClearFirst.from_bool(False) is ClearFirst.No
        assert not hasattr(ClearFirst, "default")

    @pytest.mark.parametrize("default,expected", [(True, "Yes"), (False, "No")])
    def test_bool_default(self, default, expected):
        Flag = yes_no("Flag", default=default)
        assert Flag.default() is Flag[expected]

    def test_expression_default(self):
        Flag = yes_no("Flag", default="Self.No")
        assert Flag.default() is Flag.No

    def test_module(self):
        assert yes_no("Flag", module="myapp.flags").__module__ == "myapp.flags"

    def test_independent_classes(self):
        assert yes_no("Flag") is not yes_no("Flag")

    def test_invalid_name(self):
        with pytest.raises(ValueError, match="not a valid type name"):
            yes_no("class")

    def test_invalid_default(self):
        with pytest.raises(GrammarError, match="Invalid default expression '3 <'") as exc_info:
            yes_no("Flag", default="3 <")
        assert exc_info.value.context.declaration == "Flag"

    def test_default_sees_namespace(self):
        Flag = yes_no("Flag", default="VERBOSE", namespace={"VERBOSE": False})
        assert Flag.default() is Flag.No

    def test_default_without_namespace_name(self):
        Flag = yes_no("Flag", default="VERBOSE")
        with pytest.raises(NameError):
            Flag.default()

    def test_name_shadowing_builtin(self):
        with pytest.raises(EmissionError, match="would shadow"):
            yes_no("bool")


class TestCustomBool:
    """Tests for custom_bool function."""

    def test_with_conversion(self):
        Answer = custom_bool("Answer", "NuhUh", "YuhHuh", true="YuhHuh")
        assert [m.name for m in Answer] == ["NuhUh", "YuhHuh"]
        assert Answer.YuhHuh.to_bool() is True
        assert Answer.from_bool(False) is Answer.NuhUh
        assert Answer.NuhUh.is_nuh_uh()

    def test_without_conversion(self):
        Overwrite = custom_bool("Overwrite", "Replace", "Keep", default="Self.Keep")
        assert not hasattr(Overwrite, "to_bool")
        assert Overwrite.default() is Overwrite.Keep

    def test_true_must_name_a_variant(self):
        with pytest.raises(ValueError, match="must name one of the variants"):
            custom_bool("Answer", "NuhUh", "YuhHuh", true="Maybe")

    def test_invalid_variant(self):
        with pytest.raises(ValueError, match="not a valid variant name"):
            custom_bool("Answer", "None", "Some")

    def test_collision(self):
        with pytest.raises(EmissionError, match="declared twice"):
            custom_bool("Answer", "Same", "Same")

    def test_bool_default_needs_conversion(self):
        with pytest.raises(EmissionError, match="needs a bool conversion"):
            custom_bool("Overwrite", "Replace", "Keep", default=True)

    def test_invalid_default(self):
        with pytest.raises(GrammarError):
            custom_bool("Answer", "NuhUh", "YuhHuh", true="YuhHuh", default="(")

    def test_default_sees_namespace(self):
        settings = {"overwrite": True}
        Answer = custom_bool(
            "Answer",
            "NuhUh",
            "YuhHuh",
            true="YuhHuh",
            default="settings['overwrite']",
            namespace={"settings": settings},
        )
        assert Answer.default() is Answer.YuhHuh
        settings["overwrite"] = False
        assert Answer.default() is Answer.NuhUh


class TestDefine:
    """Tests for define function."""

    def test_returns_types_in_order(self):
        types = define("pub enum B;\nenum A { X, Y }")
        assert list(types) == ["B", "A"]

    def test_types_share_a_module(self):
        types = define(
            "enum Mode { Fast = true, Safe = false }\n"
            "enum Other { A = true, B = false, default = Mode.Fast.to_bool() }"
        )
        assert types["Other"].default() is types["Other"].A

    def test_grammar_error(self):
        with pytest.raises(GrammarError):
            define("enum X { A }")

    def test_default_sees_namespace(self):
        types = define("enum X { default = FLAG }", namespace={"FLAG": True})
        assert types["X"].default() is types["X"].Yes

    def test_decorator_from_namespace(self):
        registry: list[tuple[str, type]] = []

        def register(group: str):
            def decorate(cls):
                registry.append((group, cls))
                return cls

            return decorate

        types = define('@register("flags")\npub enum Z;', namespace={"register": register})
        assert registry == [("flags", types["Z"])]

    def test_namespace_does_not_override_module_name(self):
        types = define("enum X;", module="myapp.flags", namespace={"__name__": "other"})
        assert types["X"].__module__ == "myapp.flags"

    def test_configured_imports(self):
        config = GeneratorConfig(imports=["from operator import not_"])
        types = define("enum X { default = not_(false) }", config=config)
        assert types["X"].default() is types["X"].Yes
