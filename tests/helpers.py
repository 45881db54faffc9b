"""Test helpers - a deterministic introspection provider."""

from wrapscaffold.base import IntrospectionProvider, TargetNotFound
from wrapscaffold.models import ParameterSpec


class StubProvider(IntrospectionProvider):
    """
    Introspection provider backed by a fixed table of targets.

    Each entry maps a target reference to either (params, raw_doc) or an
    exception instance to raise. Unknown targets raise TargetNotFound.
    Every describe() call is recorded in `calls`.
    """

    def __init__(self, targets: dict):
        self.targets = dict(targets)
        self.calls: list[str] = []

    def describe(self, target: str) -> tuple[list[ParameterSpec], str]:
        self.calls.append(target)
        entry = self.targets.get(target)
        if entry is None:
            raise TargetNotFound(f"Unknown target: {target}", target)
        if isinstance(entry, Exception):
            raise entry
        params, doc = entry
        return list(params), doc


def param(name: str, default: str | None = None) -> ParameterSpec:
    """Shorthand for a ParameterSpec with an optional default literal."""
    if default is None:
        return ParameterSpec(name=name)
    return ParameterSpec(name=name, has_default=True, default_literal=default)
