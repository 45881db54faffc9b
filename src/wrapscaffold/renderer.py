"""Parameter rendering: decide the expression forwarded for each parameter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .models import DocBlock, ParameterSpec, RenderedParameter

log = logging.getLogger(__name__)

ParameterHook = Callable[[str, DocBlock], str]


def render_parameters(
    params: Sequence[ParameterSpec],
    doc: DocBlock,
    hook: ParameterHook | None = None,
) -> list[RenderedParameter]:
    """Render each parameter, in declared order.

    Without a hook every parameter is forwarded by its own name. With a hook,
    its return value replaces the expression verbatim. Exceptions raised by
    the hook propagate unchanged.

    Raises:
        TypeError: If the hook returns something other than a string.
    """
    rendered: list[RenderedParameter] = []

    for param in params:
        expression = param.name
        if hook is not None:
            expression = hook(param.name, doc)
            if not isinstance(expression, str):
                raise TypeError(
                    f"parameter hook returned {type(expression).__name__} "
                    f"for '{param.name}', expected str"
                )
            if expression != param.name:
                log.debug(f"Parameter '{param.name}' rewritten to {expression!r}")
        rendered.append(RenderedParameter(name=param.name, emitted_expression=expression))

    return rendered
