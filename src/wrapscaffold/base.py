"""Base provider contract and exceptions for wrapscaffold.

Defines the introspection contract consumed by the scaffolding pipeline
and the error hierarchy shared by every provider implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import ParameterSpec


class ScaffoldError(Exception):
    """Base exception for wrapscaffold operations."""

    def __init__(self, message: str, target: str | None = None):
        super().__init__(message)
        self.target = target


class TargetNotFound(ScaffoldError):
    """Raised when a target reference cannot be resolved."""

    pass


class SignatureUnavailable(ScaffoldError):
    """Raised when a target exists but its parameter list cannot be determined.

    The raw documentation text is carried along so a degraded wrapper can
    still be documented.
    """

    def __init__(self, message: str, target: str | None = None, doc: str = ""):
        super().__init__(message, target)
        self.doc = doc


class IntrospectionProvider(ABC):
    """Abstract source of callable metadata.

    Implementations bridge to a foreign runtime. The pipeline depends only
    on this interface, so tests can substitute a deterministic stub.
    """

    @abstractmethod
    def describe(self, target: str) -> tuple[list[ParameterSpec], str]:
        """Describe a target callable.

        Args:
            target: Access path of the callable (e.g. 'pkg.mod.func')

        Returns:
            Tuple of (ordered parameter specs, raw documentation text)

        Raises:
            TargetNotFound: If the reference cannot be resolved.
            SignatureUnavailable: If the callable has no usable signature.
        """
        ...
