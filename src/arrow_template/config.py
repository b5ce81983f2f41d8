"""Configuration for template iteration.

Example:
    >>> from arrow_template import IterationConfig, Iterator
    >>> config = IterationConfig(max_steps=1000)
    >>> iterator = Iterator(["a", "b"], config=config)

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IterationConfig:
    """Knobs shared by ``Iterator`` and ``ForDirective``.

    Attributes:
        max_steps: Ceiling on pairs emitted by one traversal. ``None`` means
            unlimited, which leaves an unconditional ``restart()`` looping
            forever.
        loop_var: Name under which ``ForDirective`` exposes the cursor to the
            loop body.
    """

    max_steps: int | None = None
    loop_var: str = "iterator"

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {self.max_steps!r}")
        if not self.loop_var.isidentifier():
            raise ValueError(f"loop_var must be an identifier, got {self.loop_var!r}")


DEFAULT_CONFIG = IterationConfig()
