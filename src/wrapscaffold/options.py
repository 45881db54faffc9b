from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .assembler import is_r_name
from .models import DocBlock


class ScaffoldOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    generated_name: str | None = None
    prefix: str | None = Field(default=None, min_length=1)
    parameter_hook: Callable[[str, DocBlock], str] | None = None
    postprocess_hook: Callable[[], str] | None = None
    extra_tags: dict[str, str] = Field(default_factory=dict)
    export: bool = True

    @field_validator("generated_name")
    @classmethod
    def _syntactic_name(cls, value: str | None) -> str | None:
        if value is not None and not is_r_name(value):
            raise ValueError(f"{value!r} is not a syntactic R name")
        return value

    @field_validator("extra_tags")
    @classmethod
    def _tag_names(cls, value: dict[str, str]) -> dict[str, str]:
        for tag in value:
            if not tag or not tag.replace("_", "").isalnum():
                raise ValueError(f"invalid roxygen tag {tag!r}")
        return value
