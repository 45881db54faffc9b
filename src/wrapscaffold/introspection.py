"""Introspection provider for Python callables.

Resolves a dotted (or reticulate-style ``$``) access path, reads the
callable's signature with ``inspect`` and converts parameter defaults to
R literals.
"""

from __future__ import annotations

import importlib
import inspect
import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from .base import IntrospectionProvider, SignatureUnavailable, TargetNotFound
from .models import VARIADIC_NAME, ParameterSpec

log = logging.getLogger(__name__)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

_R_INT_MAX = 2**31 - 1


class UnsupportedDefault(ValueError):
    """A default value with no R literal equivalent."""


def split_target(target: str) -> list[str]:
    """Split an access path on '.' or '$' into its segments."""
    return [part for part in target.replace("$", ".").split(".") if part]


def to_r_literal(value: Any) -> str:
    """Convert a Python default value to R source text.

    Raises:
        UnsupportedDefault: If the value has no literal form in R.
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        if abs(value) > _R_INT_MAX:
            # Outside R's integer range; R parses a plain literal as double
            return str(value)
        return f"{value}L"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Inf" if value > 0 else "-Inf"
        return repr(value)
    if isinstance(value, str):
        # JSON string escapes are valid R string escapes
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return f"list({', '.join(to_r_literal(v) for v in value)})"
    if isinstance(value, dict):
        items = []
        for key, v in value.items():
            if not isinstance(key, str):
                raise UnsupportedDefault(f"dict key {key!r} is not a string")
            items.append(f"{json.dumps(key)} = {to_r_literal(v)}")
        return f"list({', '.join(items)})"
    raise UnsupportedDefault(f"no R literal for {type(value).__name__}")


class PythonIntrospectionProvider(IntrospectionProvider):
    """Describe importable Python callables.

    Example:
        provider = PythonIntrospectionProvider(aliases={"np": "numpy"})
        params, doc = provider.describe("np$linalg$norm")
    """

    def __init__(self, aliases: Mapping[str, str] | None = None):
        """Initialize the provider.

        Args:
            aliases: Leading segment replacements (e.g. {"tf": "tensorflow"})
        """
        self.aliases = dict(aliases or {})

    def resolve(self, target: str) -> Any:
        """Import the longest module prefix and walk the remaining attributes."""
        parts = split_target(target)
        if parts and parts[0] in self.aliases:
            parts = split_target(self.aliases[parts[0]]) + parts[1:]
        if not parts:
            raise TargetNotFound(f"Empty target reference: {target!r}", target)

        obj = None
        consumed = 0
        for i in range(len(parts), 0, -1):
            module_name = ".".join(parts[:i])
            try:
                obj = importlib.import_module(module_name)
            except Exception as e:
                if isinstance(e, ImportError) and _is_missing(e, module_name):
                    log.debug(f"{module_name} is not a module: {e}")
                    continue
                raise TargetNotFound(
                    f"Failed to import {module_name}: {e.__class__.__name__}: {e}",
                    target,
                ) from e
            consumed = i
            break

        if obj is None:
            raise TargetNotFound(f"Cannot import any module from {target!r}", target)

        for attr in parts[consumed:]:
            try:
                obj = getattr(obj, attr)
            except AttributeError as e:
                raise TargetNotFound(
                    f"{target!r} has no attribute path {'.'.join(parts[consumed:])!r}",
                    target,
                ) from e

        return obj

    def describe(self, target: str) -> tuple[list[ParameterSpec], str]:
        obj = self.resolve(target)
        if not callable(obj):
            raise TargetNotFound(
                f"{target!r} resolved to a non-callable {type(obj).__name__}", target
            )

        doc = _read_doc(obj)

        try:
            sig = inspect.signature(obj)
        except (ValueError, TypeError) as e:
            raise SignatureUnavailable(
                f"No signature available for {target!r}: {e}", target, doc=doc
            ) from e

        params = list(sig.parameters.values())
        # Unbound methods accessed through their class still list self/cls
        if (
            params
            and params[0].name in ("self", "cls")
            and inspect.isfunction(obj)
            and "." in obj.__qualname__
        ):
            params = params[1:]

        if params and all(p.kind in _VARIADIC_KINDS for p in params):
            raise SignatureUnavailable(
                f"{target!r} only accepts variadic arguments", target, doc=doc
            )

        return _to_specs(target, params), doc


def _is_missing(e: ImportError, module_name: str) -> bool:
    """True when module_name itself (or a parent) does not exist.

    Any other ImportError comes from inside a module that does exist.
    """
    missing = getattr(e, "name", None)
    if not isinstance(e, ModuleNotFoundError) or not missing:
        return False
    return module_name == missing or module_name.startswith(f"{missing}.")


def _read_doc(obj: Any) -> str:
    """Read documentation, appending a distinct __init__ docstring for classes."""
    doc = inspect.getdoc(obj) or ""
    if inspect.isclass(obj):
        init = obj.__dict__.get("__init__")
        init_doc = inspect.getdoc(init) if init is not None else None
        if init_doc and init_doc != doc and init_doc != inspect.getdoc(object.__init__):
            doc = f"{doc}\n\n{init_doc}" if doc else init_doc
    return doc


def _to_specs(target: str, params: list[inspect.Parameter]) -> list[ParameterSpec]:
    specs: list[ParameterSpec] = []
    variadic_at: int | None = None
    variadic_names: list[str] = []

    for p in params:
        if p.kind in _VARIADIC_KINDS:
            # *args and **kwargs collapse into one R "..."
            if variadic_at is None:
                variadic_at = len(specs)
            variadic_names.append(p.name)
            continue

        if p.default is inspect.Parameter.empty:
            specs.append(ParameterSpec(name=p.name))
            continue

        try:
            literal = to_r_literal(p.default)
        except UnsupportedDefault as e:
            log.warning(f"{target}: default for '{p.name}' emitted as NULL ({e})")
            literal = "NULL"
        specs.append(ParameterSpec(name=p.name, has_default=True, default_literal=literal))

    if variadic_at is not None:
        specs.insert(
            variadic_at,
            ParameterSpec(name=VARIADIC_NAME, doc_aliases=tuple(variadic_names)),
        )

    return specs
