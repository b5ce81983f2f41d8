"""Template iteration: the loop cursor and the ``for`` directive driving it."""

from arrow_template.template.for_directive import ArgList, ForDirective, parse_arglist
from arrow_template.template.iterator import (
    NO_REQUEST,
    ControlKind,
    ControlRequest,
    Cursor,
    Iterator,
)

__all__ = [
    "NO_REQUEST",
    "ArgList",
    "ControlKind",
    "ControlRequest",
    "Cursor",
    "ForDirective",
    "Iterator",
    "parse_arglist",
]
