"""Cursor-aware iteration for Arrow ``<?for?>`` blocks.

An ``Iterator`` walks a snapshot of a sequence and yields ``(cursor, item)``
pairs. The cursor is the iterator itself: the loop body reads positional
predicates from it and may steer the traversal.

Example:
    >>> from arrow_template import Iterator
    >>> seen = []
    >>> for it, item in Iterator("a", "b", "c", "d"):
    ...     seen.append((it.iteration, item, it.even_or_odd))
    ...     if it.first:
    ...         it.skip()
    >>> seen
    [(0, 'a', 'even'), (1, 'c', 'odd'), (2, 'd', 'even')]

Control requests are recorded, not acted on immediately: the rest of the loop
body still runs, and the request is resolved when the driver asks for the next
pair. Only one request survives a step, by precedence::

    stop > restart > redo > skip > (implicit advance by one)

"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from arrow_template.config import DEFAULT_CONFIG, IterationConfig
from arrow_template.exceptions import ErrorCode, IterationLimitError, TemplateRuntimeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ControlKind(IntEnum):
    """Kinds of control request, valued by precedence (higher wins)."""

    NONE = 0
    SKIP = 1
    REDO = 2
    RESTART = 3
    STOP = 4


@dataclass(frozen=True, slots=True)
class ControlRequest:
    """The single pending control request of the current step.

    Attributes:
        kind: What was requested.
        count: Items to bypass for ``SKIP`` (may be negative); unused otherwise.
    """

    kind: ControlKind = ControlKind.NONE
    count: int = 0

    @property
    def stride(self) -> int:
        """Positions the next advance moves by, for NONE, SKIP and REDO."""
        if self.kind is ControlKind.REDO:
            return 0
        return self.count + 1


NO_REQUEST = ControlRequest()


@runtime_checkable
class Cursor(Protocol):
    """What a loop body sees of the traversal driving it."""

    @property
    def iteration(self) -> int | None: ...

    @property
    def position(self) -> int | None: ...

    @property
    def item(self) -> Any: ...

    @property
    def length(self) -> int: ...

    @property
    def first(self) -> bool: ...

    @property
    def last(self) -> bool: ...

    @property
    def even(self) -> bool: ...

    @property
    def odd(self) -> bool: ...

    @property
    def even_or_odd(self) -> str: ...

    @property
    def skipped(self) -> bool: ...

    @property
    def previtem(self) -> Any: ...

    @property
    def nextitem(self) -> Any: ...

    def cycle(self, *values: Any) -> Any: ...

    def skip(self, n: int = 1) -> None: ...

    def redo(self) -> None: ...

    def restart(self) -> None: ...

    def stop(self) -> None: ...


def _snapshot(items: tuple[Any, ...]) -> list[Any]:
    """Collapse constructor arguments into an independent list."""
    if len(items) == 1:
        source = items[0]
        if isinstance(source, Mapping):
            return list(source.items())
        if isinstance(source, Iterable) and not isinstance(source, (str, bytes, bytearray)):
            return list(source)
    return list(items)


class Iterator(Generic[T]):
    """Iteration context for the nodes of an Arrow ``<?for?>`` block.

    Construct it with one iterable (``Iterator(rows)``) or with the items
    themselves (``Iterator("a", "b")``); a mapping contributes its
    ``(key, value)`` pairs. The items are copied, so changing the caller's
    list afterwards does not disturb a traversal.

    Properties:
        iteration: 0-based count of pairs emitted in this traversal. Keeps
            counting across ``restart()`` and ``redo()``.
        position: Index of the current item.
        item: The current item.
        length: Number of items.
        first: True until a pair has been emitted since the start or the
            last restart.
        last: True when the current item is the final one.
        even / odd / even_or_odd: Parity of ``iteration``.
        skipped: True when the advance into this step bypassed items.
        previtem / nextitem: Neighbours of the current item, or None.

    Methods:
        skip(n=1): Bypass ``n`` items after this step (negative moves back).
        redo(): Emit the current item again as a new step.
        restart(): Resume from the first item.
        stop(): End the traversal after this step.
        cycle(*values): Return values[iteration % len(values)].

    While no traversal is running every positional property is None or
    False (``even`` is True) and control requests are ignored.

    Each ``iter()`` call starts over at position 0 and iteration 0. Starting
    a new traversal retires any older one still suspended on this iterator.
    """

    __slots__ = (
        "_config",
        "_item",
        "_items",
        "_iteration",
        "_pending",
        "_position",
        "_since_restart",
        "_skipped",
        "_traversal",
    )

    def __init__(self, *items: Any, config: IterationConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self._items: list[T] = _snapshot(items)
        self._traversal = 0
        self._reset()

    def _reset(self) -> None:
        self._iteration: int | None = None
        self._position: int | None = None
        self._item: T | None = None
        self._pending = NO_REQUEST
        self._since_restart = 0
        self._skipped = False

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def __iter__(self) -> Generator[tuple[Cursor, T], None, None]:
        self._traversal += 1
        return self._traverse(self._traversal)

    def _traverse(self, token: int) -> Generator[tuple[Cursor, T], None, None]:
        if token != self._traversal:
            return
        items = self._items
        length = len(items)
        limit = self._config.max_steps

        self._reset()
        self._iteration = 0
        self._position = 0
        try:
            while 0 <= self._position < length:
                if limit is not None and self._iteration >= limit:
                    raise IterationLimitError(
                        limit,
                        values={"position": self._position, "length": length},
                    )
                self._pending = NO_REQUEST
                self._item = items[self._position]
                yield self, self._item
                if token != self._traversal:
                    # Superseded by a newer traversal of this iterator
                    return
                if not self._advance():
                    break
            logger.debug(f"Traversal finished after {self._iteration} steps over {length} items")
        finally:
            if token == self._traversal:
                self._reset()

    def _advance(self) -> bool:
        """Resolve the pending request into the next position.

        Returns False when the traversal should stop regardless of position.
        """
        request = self._pending
        self._pending = NO_REQUEST
        self._iteration += 1
        self._since_restart += 1

        if request.kind is ControlKind.STOP:
            logger.debug(f"Stop requested at position {self._position}")
            return False

        if request.kind is ControlKind.RESTART:
            logger.debug(f"Restarting at iteration {self._iteration}")
            self._position = 0
            self._since_restart = 0
            self._skipped = False
            return True

        stride = request.stride
        if request.kind is not ControlKind.NONE:
            logger.debug(
                f"Resolved {request.kind.name.lower()} at position {self._position} (stride {stride})"
            )
        self._position += stride
        self._skipped = stride > 1
        return True

    def _request(self, kind: ControlKind, count: int = 0) -> None:
        if self._iteration is None:
            logger.debug(f"Ignoring {kind.name.lower()} request: no traversal in progress")
            return
        if kind >= self._pending.kind:
            self._pending = ControlRequest(kind, count)

    # ------------------------------------------------------------------
    # Control requests
    # ------------------------------------------------------------------

    def skip(self, n: int = 1) -> None:
        """Bypass the next ``n`` items once this step ends.

        ``skip()`` on every step visits every other item; ``skip(-2)`` on the
        last item goes back and emits the final two items again. A later
        ``skip`` in the same step replaces an earlier one.
        """
        self._request(ControlKind.SKIP, n)

    def redo(self) -> None:
        """Emit the current item again as a new step. Overrides ``skip``."""
        self._request(ControlKind.REDO)

    def restart(self) -> None:
        """Go back to the first item. Overrides ``skip`` and ``redo``."""
        self._request(ControlKind.RESTART)

    def stop(self) -> None:
        """End the traversal once this step ends. Overrides everything else."""
        self._request(ControlKind.STOP)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[T]:
        """A copy of the items being iterated."""
        return list(self._items)

    @items.setter
    def items(self, items: Iterable[T]) -> None:
        if self._iteration is not None:
            raise TemplateRuntimeError(
                "Cannot replace the items of an iterator during traversal",
                values={"iteration": self._iteration},
                code=ErrorCode.ITERATOR_BUSY,
            )
        self._items = list(items)

    @property
    def config(self) -> IterationConfig:
        return self._config

    @property
    def iteration(self) -> int | None:
        """0-based count of pairs emitted so far."""
        return self._iteration

    @property
    def position(self) -> int | None:
        """Index of the current item."""
        return self._position

    @property
    def item(self) -> T | None:
        """The current item."""
        return self._item

    @property
    def length(self) -> int:
        """Number of items."""
        return len(self._items)

    @property
    def first(self) -> bool:
        """True if no pair was emitted since the start or the last restart."""
        return self._iteration is not None and self._since_restart == 0

    @property
    def last(self) -> bool:
        """True if the current item is the final one."""
        return self._position is not None and self._position == len(self._items) - 1

    @property
    def odd(self) -> bool:
        """True on odd-numbered iterations."""
        return self._iteration is not None and self._iteration % 2 == 1

    @property
    def even(self) -> bool:
        """True on even-numbered iterations."""
        return not self.odd

    @property
    def even_or_odd(self) -> str:
        """'even' or 'odd', for alternating row classes."""
        return "odd" if self.odd else "even"

    @property
    def skipped(self) -> bool:
        """True if the advance into this step bypassed one or more items."""
        return self._skipped

    @property
    def previtem(self) -> T | None:
        """Item before the current one, or None at the start."""
        if not self._position:
            return None
        return self._items[self._position - 1]

    @property
    def nextitem(self) -> T | None:
        """Item after the current one, or None at the end."""
        if self._position is None or self._position >= len(self._items) - 1:
            return None
        return self._items[self._position + 1]

    def cycle(self, *values: Any) -> Any:
        """Cycle through the given values.

        Example:
            <tr class="<?call iterator.cycle('light', 'dark') ?>">
        """
        if not values or self._iteration is None:
            return None
        return values[self._iteration % len(values)]

    def __repr__(self) -> str:
        if self._iteration is None:
            return f"<Iterator idle length={len(self._items)}>"
        return (
            f"<Iterator {self._position + 1}/{len(self._items)} "
            f"iteration={self._iteration}>"
        )
