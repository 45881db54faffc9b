"""Scaffolding entry points.

Each call runs one linear pass: describe -> parse -> render -> assemble.
Nothing is cached or shared between calls.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping
from typing import TextIO

from .assembler import assemble
from .base import IntrospectionProvider, SignatureUnavailable
from .docstrings import parse_docstring
from .introspection import PythonIntrospectionProvider, split_target
from .models import DocBlock, ParameterSpec, WrapperUnit
from .options import ScaffoldOptions
from .renderer import render_parameters
from .validators import check_doc_coverage, compute_coverage

log = logging.getLogger(__name__)


def derive_name(target: str, prefix: str | None = None) -> str:
    """Derive a wrapper name from the last segment of the target reference."""
    parts = split_target(target)
    name = parts[-1].lstrip("_") if parts else ""
    if not name:
        name = "wrapper"
    return f"{prefix}_{name}" if prefix else name


def _dedupe(target: str, params: list[ParameterSpec]) -> list[ParameterSpec]:
    """Drop repeated parameter names, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[ParameterSpec] = []
    for param in params:
        if param.name in seen:
            log.warning(f"{target}: duplicate parameter '{param.name}' ignored")
            continue
        seen.add(param.name)
        unique.append(param)
    return unique


def _run(
    target: str,
    options: ScaffoldOptions,
    provider: IntrospectionProvider,
) -> WrapperUnit:
    warnings: list[str] = []

    log.debug(f"Describing {target}")
    try:
        params, raw_doc = provider.describe(target)
    except SignatureUnavailable as e:
        log.warning(f"{target}: {e}; emitting a wrapper without parameters")
        params, raw_doc = [], e.doc
        warnings.append(
            f"signature of {target} is unavailable; the wrapper declares no parameters"
        )

    params = _dedupe(target, list(params))

    aliases = {alias: p.name for p in params for alias in p.doc_aliases}
    doc = parse_docstring(raw_doc, [p.name for p in params], aliases)
    if doc.is_empty:
        log.warning(f"{target}: no documentation found")
    else:
        for msg in check_doc_coverage(params, doc).warnings:
            log.warning(f"{target}: {msg}")
    log.debug(f"{target}: parameter doc coverage {compute_coverage(params, doc):.0%}")

    rendered = render_parameters(params, doc, options.parameter_hook)

    postprocess = None
    if options.postprocess_hook is not None:
        postprocess = options.postprocess_hook()
        if not isinstance(postprocess, str):
            raise TypeError(
                f"postprocess hook returned {type(postprocess).__name__}, expected str"
            )

    name = options.generated_name or derive_name(target, options.prefix)
    unit = assemble(
        target,
        name,
        params,
        rendered,
        doc,
        postprocess=postprocess,
        extra_tags=options.extra_tags,
        export=options.export,
        warnings=warnings,
    )
    log.info(f"Scaffolded {name} for {target} ({len(params)} parameters)")
    return unit


def scaffold(
    target: str, *, provider: IntrospectionProvider | None = None
) -> WrapperUnit:
    """Scaffold a wrapper with default formatting and no hooks.

    Args:
        target: Access path of the callable (e.g. 'pkg.mod.func' or 'pkg$mod$func')
        provider: Introspection provider (default: PythonIntrospectionProvider)

    Returns:
        WrapperUnit with the emitted source

    Raises:
        TargetNotFound: If the target cannot be resolved.
    """
    return _run(target, ScaffoldOptions(), provider or PythonIntrospectionProvider())


def scaffold_custom(
    target: str,
    generated_name: str | None = None,
    parameter_hook: Callable[[str, DocBlock], str] | None = None,
    postprocess_hook: Callable[[], str] | None = None,
    *,
    prefix: str | None = None,
    extra_tags: Mapping[str, str] | None = None,
    export: bool = True,
    provider: IntrospectionProvider | None = None,
) -> WrapperUnit:
    """Scaffold a wrapper with caller-supplied naming and hooks.

    Exceptions raised by either hook propagate unchanged.

    Args:
        target: Access path of the callable
        generated_name: Wrapper name (default: last segment of target)
        parameter_hook: Called as hook(name, doc); returns the expression
            forwarded for that parameter
        postprocess_hook: Returns text appended after the call-through
        prefix: Prepended as 'prefix_name' to a derived name
        extra_tags: Additional roxygen tags (e.g. {"family": "nn"})
        export: Whether to emit @export
        provider: Introspection provider (default: PythonIntrospectionProvider)

    Returns:
        WrapperUnit with the emitted source

    Raises:
        TargetNotFound: If the target cannot be resolved.
        pydantic.ValidationError: If the options are invalid.
    """
    options = ScaffoldOptions(
        generated_name=generated_name,
        prefix=prefix,
        parameter_hook=parameter_hook,
        postprocess_hook=postprocess_hook,
        extra_tags=dict(extra_tags or {}),
        export=export,
    )
    return _run(target, options, provider or PythonIntrospectionProvider())


def print_wrapper(unit: WrapperUnit, file: TextIO | None = None) -> None:
    """Write a wrapper's source to stdout or the given stream."""
    print(unit.source, end="", file=file or sys.stdout)
