"""arrow_template — cursor-aware iteration for Arrow templates.

The Arrow ``<?for?>`` directive renders its block once per item and exposes
an ``iterator`` object the block can query and steer.

Quickstart:
    >>> from arrow_template import Iterator
    >>> out = []
    >>> for it, item in Iterator(["A", "B", "C", "D", "E", "F"]):
    ...     out.append(item)
    ...     it.skip()
    >>> out
    ['A', 'C', 'E']

Driving a block:
    >>> from arrow_template import ForDirective
    >>> ForDirective("word").render(
    ...     ["x", "y", "z"],
    ...     lambda scope: scope["word"] + ("" if scope["iterator"].last else ", "),
    ... )
    'x, y, z'

Cursor predicates:
    ``first``, ``last``, ``iteration``, ``even``, ``odd``, ``even_or_odd``,
    ``skipped``, ``previtem``, ``nextitem``, ``cycle(*values)``

Control requests (one wins per step, highest first):
    ``stop()`` > ``restart()`` > ``redo()`` > ``skip(n=1)``

Logging:
    Control-flow decisions are logged at DEBUG on the ``arrow_template``
    logger hierarchy. The library installs no handlers.

"""

from arrow_template.config import DEFAULT_CONFIG, IterationConfig
from arrow_template.exceptions import (
    ErrorCode,
    IterationLimitError,
    TemplateError,
    TemplateRuntimeError,
    TemplateSyntaxError,
)
from arrow_template.template import (
    ArgList,
    ControlKind,
    ControlRequest,
    Cursor,
    ForDirective,
    Iterator,
    parse_arglist,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ArgList",
    "ControlKind",
    "ControlRequest",
    "Cursor",
    "ErrorCode",
    "ForDirective",
    "IterationConfig",
    "IterationLimitError",
    "Iterator",
    "TemplateError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "__version__",
    "parse_arglist",
]
