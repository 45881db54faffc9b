"""Template assembly: compose roxygen docs, header and call-through body."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from .config import Config
from .introspection import split_target
from .models import (
    VARIADIC_NAME,
    DocBlock,
    ParameterSpec,
    RenderedParameter,
    WrapperUnit,
)

_R_NAME = re.compile(r"^(?:[A-Za-z]|\.(?![0-9]))[A-Za-z0-9._]*$")
_R_RESERVED = frozenset(
    {
        "if",
        "else",
        "repeat",
        "while",
        "function",
        "for",
        "next",
        "break",
        "in",
        "TRUE",
        "FALSE",
        "NULL",
        "Inf",
        "NaN",
        "NA",
        "NA_integer_",
        "NA_real_",
        "NA_character_",
        "NA_complex_",
    }
)


def is_r_name(name: str) -> bool:
    """Check whether name is a syntactic, non-reserved R name."""
    return bool(_R_NAME.match(name)) and name not in _R_RESERVED


def r_symbol(name: str) -> str:
    """Backtick-quote names that are not syntactic in R."""
    if name == VARIADIC_NAME or is_r_name(name):
        return name
    return f"`{name}`"


def r_accessor(target: str) -> str:
    """Render a target reference as a reticulate-style `$` access chain."""
    return "$".join(r_symbol(part) for part in split_target(target))


def _tag_lines(tag: str, text: str) -> list[str]:
    """One roxygen tag; extra lines of text continue on their own comment lines."""
    prefix = Config.DOC_PREFIX
    text_lines = text.split("\n") if text else [""]
    lines = [f"{prefix} @{tag} {text_lines[0]}".rstrip()]
    for line in text_lines[1:]:
        lines.append(f"{prefix} {line}".rstrip())
    return lines


def _doc_block(
    params: Sequence[ParameterSpec],
    doc: DocBlock,
    extra_tags: Mapping[str, str] | None,
    export: bool,
    warnings: Sequence[str],
) -> list[str]:
    prefix = Config.DOC_PREFIX
    lines: list[str] = []

    lines.extend(_tag_lines("title", doc.title))
    lines.extend(_tag_lines("description", doc.description))
    lines.append(prefix)

    for param in params:
        lines.extend(_tag_lines(f"param {param.name}", doc.param_doc(param.name)))

    lines.extend(_tag_lines("return", doc.return_doc))

    for name, text in doc.sections.items():
        lines.extend(_tag_lines(f"section {name}:", text))

    for warning in warnings:
        lines.extend(_tag_lines("note", f"WARNING: {warning}"))

    for tag, value in (extra_tags or {}).items():
        lines.extend(_tag_lines(tag, value))

    if export:
        lines.append(f"{prefix} @export")

    return lines


def _header(name: str, params: Sequence[ParameterSpec]) -> str:
    formals = []
    for param in params:
        symbol = r_symbol(param.name)
        if param.has_default:
            formals.append(f"{symbol} = {param.default_literal}")
        else:
            formals.append(symbol)
    return f"{r_symbol(name)} <- function({', '.join(formals)}) {{"


def _call_through(target: str, rendered: Sequence[RenderedParameter]) -> list[str]:
    indent = " " * Config.INDENT
    call = r_accessor(target)

    if not rendered:
        return [f"{indent}{Config.RESULT_NAME} <- {call}()"]

    args = []
    for param in rendered:
        if param.name == VARIADIC_NAME:
            # "..." is forwarded positionally
            args.append(f"{indent * 2}{param.emitted_expression}")
            continue
        symbol = r_symbol(param.name)
        value = param.emitted_expression
        if value == param.name:
            value = symbol
        args.append(f"{indent * 2}{symbol} = {value}")

    lines = [f"{indent}{Config.RESULT_NAME} <- {call}("]
    lines.extend(f"{arg}," for arg in args[:-1])
    lines.append(args[-1])
    lines.append(f"{indent})")
    return lines


def assemble(
    target: str,
    name: str,
    params: Sequence[ParameterSpec],
    rendered: Sequence[RenderedParameter],
    doc: DocBlock,
    postprocess: str | None = None,
    extra_tags: Mapping[str, str] | None = None,
    export: bool = True,
    warnings: Sequence[str] = (),
) -> WrapperUnit:
    """Compose a WrapperUnit from parsed docs and rendered parameters.

    Pure string composition: no validation of hook-supplied text.

    Args:
        target: Target reference, emitted in `$` form in the call-through
        name: Generated R function name
        params: Declared parameters, in order
        rendered: Rendered parameters, aligned with params
        doc: Parsed documentation
        postprocess: Text appended verbatim after the call-through
        extra_tags: Additional roxygen tags (tag -> value)
        export: Whether to emit @export
        warnings: Annotations emitted as @note lines

    Returns:
        WrapperUnit holding the emitted source
    """
    if len(params) != len(rendered):
        raise ValueError(
            f"{len(params)} parameters but {len(rendered)} rendered expressions"
        )

    body = _call_through(target, rendered)
    if postprocess is not None:
        indent = " " * Config.INDENT
        for line in postprocess.split("\n"):
            body.append(f"{indent}{line}" if line.strip() else "")

    return WrapperUnit(
        name=name,
        target=target,
        doc_lines=_doc_block(params, doc, extra_tags, export, warnings),
        header=_header(name, params),
        body=body,
        warnings=list(warnings),
    )
