"""Documentation coverage checks for scaffolded wrappers."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DocBlock, ParameterSpec, ValidationResult


def check_doc_coverage(
    params: Sequence[ParameterSpec],
    doc: DocBlock,
    strict: bool = False,
) -> ValidationResult:
    """Check how well the parsed docs cover the declared parameters.

    Checks:
    1. Every parameter should have documentation (warning, error in strict mode)
    2. Documented names should match a declared parameter (warning)
    3. The docs should provide a title (warning)

    Args:
        params: Declared parameters
        doc: Parsed documentation
        strict: If True, undocumented parameters are errors instead of warnings

    Returns:
        ValidationResult with errors and warnings
    """
    result = ValidationResult()

    if not doc.title:
        result.warnings.append("missing title (undocumented)")

    declared = {p.name for p in params}
    for param in params:
        if not doc.param_doc(param.name):
            msg = f"{param.name}: no parameter documentation"
            if strict:
                result.errors.append(msg)
            else:
                result.warnings.append(msg)

    for name in doc.param_docs:
        if name not in declared:
            result.warnings.append(f"{name}: documented but not a declared parameter")

    return result


def compute_coverage(params: Sequence[ParameterSpec], doc: DocBlock) -> float:
    """Fraction of declared parameters with documentation (0.0 - 1.0)."""
    if not params:
        return 1.0
    documented = sum(1 for p in params if doc.param_doc(p.name))
    return documented / len(params)
