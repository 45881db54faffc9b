"""Tests for the Python introspection provider."""

import logging

import pytest
from wrapscaffold.base import SignatureUnavailable, TargetNotFound
from wrapscaffold.introspection import (
    PythonIntrospectionProvider,
    UnsupportedDefault,
    split_target,
    to_r_literal,
)
from wrapscaffold.models import ParameterSpec


@pytest.fixture
def python_provider():
    return PythonIntrospectionProvider()


class TestSplitTarget:
    """Tests for access path splitting."""

    def test_dotted(self):
        assert split_target("pkg.mod.func") == ["pkg", "mod", "func"]

    def test_dollar(self):
        assert split_target("tf$nn$top_k") == ["tf", "nn", "top_k"]

    def test_mixed_and_empty_segments(self):
        assert split_target("tf$nn.top_k.") == ["tf", "nn", "top_k"]


class TestToRLiteral:
    """Tests for Python default -> R literal conversion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "NULL"),
            (True, "TRUE"),
            (False, "FALSE"),
            (1, "1L"),
            (2**31 - 1, "2147483647L"),
            (2**31, "2147483648"),
            (-(10**10), "-10000000000"),
            (-3, "-3L"),
            (0.5, "0.5"),
            (float("inf"), "Inf"),
            (float("-inf"), "-Inf"),
            (float("nan"), "NaN"),
            ("relu", '"relu"'),
            ('say "hi"', '"say \\"hi\\""'),
            ((2, 3), "list(2L, 3L)"),
            ([], "list()"),
            ({"mode": "fast"}, 'list("mode" = "fast")'),
        ],
    )
    def test_converts(self, value, expected):
        assert to_r_literal(value) == expected

    def test_rejects_objects(self):
        with pytest.raises(UnsupportedDefault):
            to_r_literal(object())

    def test_rejects_non_string_dict_keys(self):
        with pytest.raises(UnsupportedDefault):
            to_r_literal({1: "a"})


class TestResolve:
    """Tests for target resolution."""

    def test_resolves_module_attribute(self, python_provider):
        from tests import targets

        assert python_provider.resolve("tests.targets.top_k") is targets.top_k

    def test_resolves_dollar_path(self, python_provider):
        from tests import targets

        assert python_provider.resolve("tests$targets$Layer$call") is targets.Layer.call

    def test_resolves_alias(self):
        from tests import targets

        provider = PythonIntrospectionProvider(aliases={"tt": "tests.targets"})
        assert provider.resolve("tt$top_k") is targets.top_k

    def test_missing_module(self, python_provider):
        with pytest.raises(TargetNotFound) as exc_info:
            python_provider.resolve("no_such_package_xyz.func")
        assert exc_info.value.target == "no_such_package_xyz.func"

    def test_missing_attribute(self, python_provider):
        with pytest.raises(TargetNotFound, match="no attribute path"):
            python_provider.resolve("tests.targets.missing")

    def test_empty_reference(self, python_provider):
        with pytest.raises(TargetNotFound):
            python_provider.resolve("")


class TestDescribe:
    """Tests for PythonIntrospectionProvider.describe()"""

    def test_function(self, python_provider):
        params, doc = python_provider.describe("tests.targets.top_k")

        assert params == [
            ParameterSpec("input"),
            ParameterSpec("k", True, "1L"),
            ParameterSpec("sorted", True, "TRUE"),
            ParameterSpec("name", True, "NULL"),
        ]
        assert doc.startswith("Finds values and indices of the k largest entries.")
        assert "Args:" in doc

    def test_undocumented_function(self, python_provider):
        params, doc = python_provider.describe("tests.targets.undocumented")
        assert [p.name for p in params] == ["a", "b"]
        assert params[1].default_literal == "2L"
        assert doc == ""

    def test_class_uses_constructor(self, python_provider):
        params, doc = python_provider.describe("tests.targets.Layer")

        assert params == [
            ParameterSpec("units"),
            ParameterSpec("activation", True, '"relu"'),
        ]
        assert doc.startswith("A processing layer.\n\nCreate the layer.")
        assert "units: Number of units." in doc

    def test_unbound_method_skips_self(self, python_provider):
        params, doc = python_provider.describe("tests.targets.Layer.call")
        assert [p.name for p in params] == ["inputs", "training"]
        assert params[1].default_literal == "FALSE"
        assert doc == "Run the layer."

    def test_variadics_collapse(self, python_provider):
        params, _ = python_provider.describe("tests.targets.with_kwargs")

        assert [p.name for p in params] == ["x", "...", "scale"]
        assert params[1].doc_aliases == ("args", "kwargs")
        assert params[1].has_default is False
        assert params[2].default_literal == "1.5"

    def test_defaults_of_several_kinds(self, python_provider, caplog):
        with caplog.at_level(logging.WARNING, logger="wrapscaffold.introspection"):
            params, _ = python_provider.describe("tests.targets.odd_defaults")

        literals = {p.name: p.default_literal for p in params}
        assert literals == {
            "label": '"a \\"quoted\\" label"',
            "shape": "list(2L, 3L)",
            "opts": 'list("mode" = "fast")',
            "sentinel": "NULL",
            "ratio": "Inf",
        }
        assert "default for 'sentinel' emitted as NULL" in caplog.text

    def test_variadic_only_is_unavailable(self, python_provider):
        with pytest.raises(SignatureUnavailable) as exc_info:
            python_provider.describe("tests.targets.variadic_only")
        assert exc_info.value.doc == "Accepts anything."

    def test_non_callable_is_not_found(self, python_provider):
        with pytest.raises(TargetNotFound, match="non-callable"):
            python_provider.describe("tests.targets.CONSTANT")

    def test_preserves_declared_order(self, python_provider):
        params, _ = python_provider.describe("tests.targets.odd_defaults")
        assert [p.name for p in params] == [
            "label",
            "shape",
            "opts",
            "sentinel",
            "ratio",
        ]


class TestImportFailures:
    """Tests for targets whose modules exist but fail to import."""

    def test_missing_dependency_is_reported(self, python_provider):
        with pytest.raises(TargetNotFound, match="Failed to import") as exc_info:
            python_provider.resolve("tests.targets_missing_dependency.run")
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)
        assert "wrapscaffold_absent_dependency" in str(exc_info.value)

    def test_error_at_import_is_not_found(self, python_provider):
        with pytest.raises(TargetNotFound, match="RuntimeError") as exc_info:
            python_provider.describe("tests.targets_failing.run")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_skipped_prefixes_are_logged(self, python_provider, caplog):
        with caplog.at_level(logging.DEBUG, logger="wrapscaffold.introspection"):
            python_provider.resolve("tests.targets.top_k")
        assert "tests.targets.top_k is not a module" in caplog.text
