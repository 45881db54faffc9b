"""Data models for wrapper scaffolding."""

from __future__ import annotations

from dataclasses import dataclass, field

# R's variadic formal; *args and **kwargs collapse into it
VARIADIC_NAME = "..."


@dataclass(frozen=True)
class ParameterSpec:
    """One declared parameter of a target callable."""

    name: str  # "input" or "..." for collapsed variadics
    has_default: bool = False
    default_literal: str | None = None  # Host-language literal, e.g. "1L"
    doc_aliases: tuple[str, ...] = ()  # Other names the docs may use ("args", "kwargs")


@dataclass(frozen=True)
class DocBlock:
    """Structured documentation parsed from a raw docstring."""

    title: str = ""
    description: str = ""
    param_docs: dict[str, str] = field(default_factory=dict)  # param -> description
    return_doc: str = ""
    sections: dict[str, str] = field(default_factory=dict)  # "Raises" -> text

    def param_doc(self, name: str) -> str:
        return self.param_docs.get(name, "")

    @property
    def is_empty(self) -> bool:
        return not (
            self.title
            or self.description
            or self.param_docs
            or self.return_doc
            or self.sections
        )


@dataclass(frozen=True)
class RenderedParameter:
    """A parameter paired with the expression forwarded to the target."""

    name: str
    emitted_expression: str


@dataclass
class WrapperUnit:
    """Complete emitted source for one wrapper."""

    name: str  # Generated R function name
    target: str  # Target reference as supplied
    doc_lines: list[str] = field(default_factory=list)
    header: str = ""
    body: list[str] = field(default_factory=list)
    footer: str = "}"
    warnings: list[str] = field(default_factory=list)  # Annotated in doc_lines

    @property
    def lines(self) -> list[str]:
        return [*self.doc_lines, self.header, *self.body, self.footer]

    @property
    def source(self) -> str:
        return "\n".join(self.lines) + "\n"

    def __str__(self) -> str:
        return self.source


@dataclass
class ValidationResult:
    """Results from documentation coverage checks."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
