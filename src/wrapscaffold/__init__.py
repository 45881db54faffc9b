from wrapscaffold.base import (
    IntrospectionProvider,
    ScaffoldError,
    SignatureUnavailable,
    TargetNotFound,
)
from wrapscaffold.docstrings import parse_docstring
from wrapscaffold.introspection import PythonIntrospectionProvider
from wrapscaffold.models import DocBlock, ParameterSpec, RenderedParameter, WrapperUnit
from wrapscaffold.options import ScaffoldOptions
from wrapscaffold.pipeline import print_wrapper, scaffold, scaffold_custom

__all__ = [
    "DocBlock",
    "IntrospectionProvider",
    "ParameterSpec",
    "PythonIntrospectionProvider",
    "RenderedParameter",
    "ScaffoldError",
    "ScaffoldOptions",
    "SignatureUnavailable",
    "TargetNotFound",
    "WrapperUnit",
    "parse_docstring",
    "print_wrapper",
    "scaffold",
    "scaffold_custom",
]
