"""Docstring parser producing structured documentation blocks.

Understands Google-style (``Args:``) and numpy-style (``Parameters`` with a
dash underline) section headers. Parsing is total: anything it cannot
recognize ends up in the description or is left empty, never an error.
"""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Iterable, Mapping

from .models import DocBlock

log = logging.getLogger(__name__)

# Section headers, matched case-insensitively on unindented lines
PARAM_MARKERS = (
    "Args",
    "Arguments",
    "Parameters",
    "Params",
    "Keyword Args",
    "Keyword Arguments",
    "Other Parameters",
)
RETURN_MARKERS = ("Returns", "Return", "Yields")
SECTION_MARKERS = (
    "Raises",
    "Example",
    "Examples",
    "Note",
    "Notes",
    "Warning",
    "Warnings",
    "See Also",
    "References",
    "Attributes",
    "Todo",
)

_PARAMS = "params"
_RETURNS = "returns"
_OTHER = "other"

_MARKERS: dict[str, tuple[str, str]] = {}
for _kind, _names in (
    (_PARAMS, PARAM_MARKERS),
    (_RETURNS, RETURN_MARKERS),
    (_OTHER, SECTION_MARKERS),
):
    for _name in _names:
        _MARKERS[_name.lower()] = (_name, _kind)

_GOOGLE_HEADER = re.compile(r"^(?P<name>[A-Za-z][A-Za-z ]*?)\s*:\s*(?P<rest>.*)$")
_UNDERLINE = re.compile(r"^\s*-{3,}\s*$")

# "name: text", "name (type): text", "*args: text", "name : type", "name - text",
# "name  text"
_ENTRY = re.compile(
    r"^\*{0,2}(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*"
    r"(?:\((?P<type>[^)]*)\))?\s*"
    r"(?P<delim>:|\s--?\s|\s+|$)\s*(?P<text>.*)$"
)

_IGNORED = object()


class _Section:
    def __init__(self, name: str, kind: str, numpy: bool = False):
        self.name = name
        self.kind = kind
        self.numpy = numpy
        self.lines: list[str] = []


def _dedent_block(text: str) -> str:
    """Dedent a block of text, preserving relative indentation."""
    lines = text.split("\n")
    # Find minimum indentation of non-empty lines
    min_indent = float("inf")
    for line in lines:
        if line.strip():
            indent = len(line) - len(line.lstrip())
            min_indent = min(min_indent, indent)
    if min_indent == float("inf"):
        min_indent = 0
    dedented = "\n".join(
        line[int(min_indent) :] if len(line) >= min_indent else line for line in lines
    )
    return dedented.strip()


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _marker_at(
    lines: list[str], i: int, numpy_only: bool = False
) -> tuple[_Section, int, str] | None:
    """Detect a section header at lines[i].

    Inside a numpy section only underlined headers count, so entries such as
    ``params : array_like`` stay entries.

    Returns (section, lines consumed, inline text) or None.
    """
    line = lines[i]
    if not line.strip() or _indent_of(line) > 0:
        return None

    stripped = line.strip()

    # numpy: "Parameters" followed by "----------"
    if i + 1 < len(lines) and _UNDERLINE.match(lines[i + 1]):
        marker = _MARKERS.get(stripped.lower())
        if marker:
            return _Section(marker[0], marker[1], numpy=True), 2, ""

    if numpy_only:
        return None

    # Google: "Args:" on its own line; only return markers take inline text
    m = _GOOGLE_HEADER.match(stripped)
    if m:
        marker = _MARKERS.get(m.group("name").lower())
        if marker and (not m.group("rest") or marker[1] == _RETURNS):
            return _Section(marker[0], marker[1]), 1, m.group("rest")

    return None


def _split_sections(lines: list[str]) -> tuple[list[str], list[_Section]]:
    """Split cleaned docstring lines into a preamble and recognized sections."""
    preamble: list[str] = []
    sections: list[_Section] = []
    current: _Section | None = None

    i = 0
    while i < len(lines):
        in_numpy = current is not None and current.numpy
        found = _marker_at(lines, i, numpy_only=in_numpy)
        if found:
            current, consumed, inline = found
            if inline:
                current.lines.append(inline)
            sections.append(current)
            i += consumed
            continue

        if current is None:
            preamble.append(lines[i])
        else:
            current.lines.append(lines[i])
        i += 1

    return preamble, sections


def _split_preamble(preamble: list[str]) -> tuple[str, str]:
    """First non-blank line is the title, the rest is the description."""
    for i, line in enumerate(preamble):
        if line.strip():
            rest = _dedent_block("\n".join(preamble[i + 1 :]))
            # Collapse runs of blank lines to a single paragraph break
            rest = re.sub(r"\n\s*\n+", "\n\n", rest)
            return line.strip(), rest
    return "", ""


def _join(existing: str, addition: str) -> str:
    if not existing:
        return addition
    return f"{existing} {addition}"


def _match_entry(
    stripped: str, candidates: Mapping[str, str] | None
) -> tuple[str, str, str] | None:
    """Match a parameter entry line.

    Returns (token as written, parameter name, doc text) or None. With no
    candidates, any ``name:`` style entry is accepted.
    """
    m = _ENTRY.match(stripped)
    if not m:
        return None

    token = m.group("name")
    delim = m.group("delim")

    if candidates is None:
        if delim != ":":
            return None
        name = token
    else:
        name = candidates.get(token)
        if name is None:
            return None

    return token, name, m.group("text").strip()


def _parse_param_section(
    section: _Section,
    candidates: Mapping[str, str] | None,
    param_docs: dict[str, str],
    seen_tokens: set[str],
    overflow: list[str],
) -> None:
    body = [line for line in section.lines if line.strip()]
    if not body:
        return

    base_indent = min(_indent_of(line) for line in body)
    current: object = None

    for line in body:
        stripped = line.strip()

        match = None
        if _indent_of(line) == base_indent:
            match = _match_entry(stripped, candidates)

        if match is None:
            if current is _IGNORED:
                continue
            if current is None:
                overflow.append(stripped)
            else:
                param_docs[current] = _join(param_docs[current], stripped)
            continue

        token, name, text = match
        if section.numpy:
            # numpy entry lines carry the type; the prose follows on indented lines
            text = ""

        if token in seen_tokens:
            log.warning(
                f"Duplicate documentation for parameter '{token}'; keeping the first entry"
            )
            current = _IGNORED
            continue

        seen_tokens.add(token)
        # Aliases of the same parameter (e.g. *args and **kwargs) accumulate
        param_docs[name] = _join(param_docs.get(name, ""), text)
        current = name


def parse_docstring(
    raw_text: str | None,
    param_names: Iterable[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> DocBlock:
    """Parse raw documentation text into a DocBlock.

    Args:
        raw_text: Docstring as reported by introspection (may be empty)
        param_names: Declared parameter names, used to match entries in
            parameter sections. When empty, any ``name:`` entry is accepted.
        aliases: Extra names mapped to a declared parameter name
            (e.g. {"kwargs": "..."})

    Returns:
        DocBlock with whatever fields could be recognized
    """
    if not raw_text or not raw_text.strip():
        return DocBlock()

    lines = inspect.cleandoc(raw_text).split("\n")
    preamble, sections = _split_sections(lines)
    title, description = _split_preamble(preamble)

    names = list(param_names)
    candidates: dict[str, str] | None = None
    if names or aliases:
        candidates = {name: name for name in names}
        for alias, name in (aliases or {}).items():
            candidates.setdefault(alias, name)

    param_docs: dict[str, str] = {}
    seen_tokens: set[str] = set()
    overflow: list[str] = []
    returns: list[str] = []
    other: dict[str, str] = {}

    for section in sections:
        if section.kind == _PARAMS:
            _parse_param_section(section, candidates, param_docs, seen_tokens, overflow)
        elif section.kind == _RETURNS:
            text = _dedent_block("\n".join(section.lines))
            if text:
                returns.append(text)
        else:
            text = _dedent_block("\n".join(section.lines))
            if section.name in other:
                other[section.name] = f"{other[section.name]}\n{text}".strip()
            else:
                other[section.name] = text

    if overflow:
        extra = " ".join(overflow)
        description = f"{description}\n\n{extra}" if description else extra

    # Keep declared order for matched parameters
    if names:
        ordered = {name: param_docs[name] for name in names if name in param_docs}
        ordered.update((k, v) for k, v in param_docs.items() if k not in ordered)
        param_docs = ordered

    return DocBlock(
        title=title,
        description=description,
        param_docs=param_docs,
        return_doc="\n".join(returns),
        sections=other,
    )
