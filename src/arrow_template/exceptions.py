"""Exceptions for the Arrow template iteration engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateSyntaxError       # Malformed ``for`` argument list
└── TemplateRuntimeError      # Render-time error with context
    └── IterationLimitError   # Traversal exceeded IterationConfig.max_steps

The iterator itself raises nothing during ordinary traversal: skipping past
either end of the sequence simply ends the loop. Errors raised inside a loop
body belong to the caller and propagate unchanged, except that the ``for``
directive wraps non-template errors in ``TemplateRuntimeError`` so the message
carries the iteration that failed.

Example:
    ```
    ARW-RUN-001: Error rendering 'for' block: division by zero
      Values:
        iteration = 3 (int)
        item = 'Clayoquot' (str)
      Hint: Check the loop body for the failing expression
    ```

"""

from __future__ import annotations

from enum import Enum
from typing import Any

from arrow_template.utils import terminal


class ErrorCode(Enum):
    """Searchable error codes for template iteration errors.

    Format: ARW-{CATEGORY}-{NUMBER}
    Categories: PAR (parser), RUN (runtime)
    """

    # Parser errors (ARW-PAR-xxx)
    INVALID_ARGLIST = "ARW-PAR-001"

    # Runtime errors (ARW-RUN-xxx)
    RUNTIME_ERROR = "ARW-RUN-001"
    ITERATION_LIMIT = "ARW-RUN-002"
    ITERATOR_BUSY = "ARW-RUN-003"

    @property
    def category(self) -> str:
        """Error category ('parser' or 'runtime')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "RUN": "runtime",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all template errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format the error as a short, human-readable summary."""
        header = str(self)
        if self.code and self.code.value not in header:
            return terminal.format_error_header(self.code.value, header)
        return header


class TemplateSyntaxError(TemplateError):
    """Malformed template source, such as a ``for`` argument list.

    When ``source`` is given the message repeats it; if ``col_offset`` is also
    given, a caret (``^``) points at the offending column.
    """

    code: ErrorCode | None = ErrorCode.INVALID_ARGLIST

    def __init__(
        self,
        message: str,
        source: str | None = None,
        col_offset: int | None = None,
    ):
        self.message = message
        self.source = source
        self.col_offset = col_offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        header = f"Syntax Error: {self.message}"
        if self.source is None:
            return header
        snippet = f"\n   |\n   | {self.source}"
        if self.col_offset is not None:
            snippet += f"\n   | {' ' * self.col_offset}^"
        return header + snippet

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.source is not None:
            parts.append(terminal.dim_text("   |"))
            parts.append(f"   | {terminal.location(self.source)}")
            if self.col_offset is not None:
                parts.append(f"   | {' ' * self.col_offset}^")
        return "\n".join(parts)


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Attributes:
        message: Error description
        values: Dict of names -> values relevant to the failure
        suggestion: Actionable fix suggestion
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        values: dict[str, Any] | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.values = values or {}
        self.suggestion = suggestion
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_values(self) -> list[str]:
        lines = ["  Values:"]
        for name, value in self.values.items():
            value_repr = repr(value)
            if len(value_repr) > 80:
                value_repr = value_repr[:77] + "..."
            lines.append(f"    {name} = {value_repr} ({type(value).__name__})")
        return lines

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.values:
            parts.extend(self._format_values())
        if self.suggestion:
            parts.append(f"\n  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def format_compact(self) -> str:
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.values:
            parts.extend(self._format_values())
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class IterationLimitError(TemplateRuntimeError):
    """A traversal emitted more steps than ``IterationConfig.max_steps`` allows.

    Usually the sign of a ``restart()`` or negative ``skip()`` issued on
    every pass through the same item.
    """

    code: ErrorCode | None = ErrorCode.ITERATION_LIMIT

    def __init__(self, max_steps: int, **kwargs: Any):
        self.max_steps = max_steps
        super().__init__(
            f"Iteration limit exceeded ({max_steps} steps)",
            suggestion="Guard restart()/skip() calls so the loop can reach the end",
            **kwargs,
        )
