"""Pytest fixtures for wrapscaffold tests."""

import pytest
from wrapscaffold.base import SignatureUnavailable

from tests.helpers import StubProvider, param

TOP_K_DOC = """Finds values and indices of the k largest entries.

Returns the k largest entries along the last dimension.

Args:
    input: 1-D or higher tensor with last dimension at least k.
    k: 0-D int32 tensor. Number of top elements
        to look for along the last dimension.

Returns:
    values: The k largest elements along each last dimensional slice.
"""


@pytest.fixture
def provider():
    """
    Stub provider with a small fixed set of targets.

    Example:
        def test_plain(provider):
            unit = scaffold("pkg.plain", provider=provider)
            assert unit.header.startswith("plain <- function(")
    """
    return StubProvider(
        {
            "tf$nn$top_k": (
                [
                    param("input"),
                    param("k", "1L"),
                    param("sorted", "TRUE"),
                    param("name", "NULL"),
                ],
                TOP_K_DOC,
            ),
            "pkg.plain": ([param("a"), param("b", "2")], ""),
            "pkg.opaque": SignatureUnavailable(
                "no signature", "pkg.opaque", doc="Opaque native callable."
            ),
            "pkg.dupes": ([param("x"), param("y"), param("x", "3L")], ""),
        }
    )
