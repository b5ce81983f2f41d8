"""Property-based tests for Iterator traversal.

Uses hypothesis to verify invariants that must hold for every sequence and
every pattern of control requests:

- Order preservation (no requests emits the items in order)
- Step counting (iteration is 0, 1, 2, ... regardless of position)
- Position transitions (each request moves the cursor as documented)
- Termination (the traversal ends exactly when the next position leaves the items)
- Precedence (stop > restart > redo > skip within a single step)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hypothesis import given, settings
from hypothesis import strategies as st

from arrow_template import Iterator

from .strategies import control_scripts, item_lists, nonempty_item_lists, request_bursts

_RANK = {"none": 0, "skip": 1, "redo": 2, "restart": 3, "stop": 4}


@dataclass(frozen=True)
class Step:
    iteration: int
    position: int
    item: Any
    first: bool
    last: bool
    skipped: bool
    even_or_odd: str
    request: tuple[Any, ...]


def _issue(cursor: Iterator[Any], request: tuple[Any, ...]) -> None:
    kind = request[0]
    if kind == "skip":
        cursor.skip(request[1])
    elif kind != "none":
        getattr(cursor, kind)()


def _next_position(position: int, request: tuple[Any, ...]) -> int:
    kind = request[0]
    if kind == "restart":
        return 0
    if kind == "redo":
        return position
    if kind == "skip":
        return position + request[1] + 1
    return position + 1


def _run(items: list[Any], script: list[tuple[Any, ...]]) -> list[Step]:
    steps = []
    for it, item in Iterator(items):
        request = script[it.iteration] if it.iteration < len(script) else ("none",)
        steps.append(
            Step(
                iteration=it.iteration,
                position=it.position,
                item=item,
                first=it.first,
                last=it.last,
                skipped=it.skipped,
                even_or_odd=it.even_or_odd,
                request=request,
            )
        )
        _issue(it, request)
    return steps


class TestTraversalProperties:
    """Invariants of traversal under arbitrary control scripts."""

    @given(items=item_lists)
    @settings(max_examples=200)
    def test_order_preservation(self, items: list[Any]) -> None:
        pairs = [(it.iteration, item) for it, item in Iterator(items)]
        assert [item for _, item in pairs] == items
        assert [n for n, _ in pairs] == list(range(len(items)))

    @given(items=item_lists, script=control_scripts)
    @settings(max_examples=200)
    def test_iteration_counts_steps(self, items: list[Any], script: list[tuple[Any, ...]]) -> None:
        steps = _run(items, script)
        assert [step.iteration for step in steps] == list(range(len(steps)))

    @given(items=item_lists, script=control_scripts)
    @settings(max_examples=200)
    def test_item_matches_position(self, items: list[Any], script: list[tuple[Any, ...]]) -> None:
        for step in _run(items, script):
            assert 0 <= step.position < len(items)
            assert step.item is items[step.position]
            assert step.last is (step.position == len(items) - 1)

    @given(items=item_lists, script=control_scripts)
    @settings(max_examples=200)
    def test_parity_tracks_steps(self, items: list[Any], script: list[tuple[Any, ...]]) -> None:
        for step in _run(items, script):
            assert step.even_or_odd == ("even" if step.iteration % 2 == 0 else "odd")

    @given(items=item_lists, script=control_scripts)
    @settings(max_examples=200)
    def test_transitions_follow_requests(self, items: list[Any], script: list[tuple[Any, ...]]) -> None:
        steps = _run(items, script)
        if steps:
            assert steps[0].first
            assert steps[0].position == 0
            assert not steps[0].skipped
        for current, following in zip(steps, steps[1:]):
            kind = current.request[0]
            assert kind != "stop"
            assert following.position == _next_position(current.position, current.request)
            assert following.first is (kind == "restart")
            assert following.skipped is (kind == "skip" and current.request[1] >= 1)

    @given(items=item_lists, script=control_scripts)
    @settings(max_examples=200)
    def test_terminates_when_next_position_leaves_items(
        self, items: list[Any], script: list[tuple[Any, ...]]
    ) -> None:
        steps = _run(items, script)
        if not items:
            assert steps == []
            return
        final = steps[-1]
        if final.request[0] != "stop":
            assert not 0 <= _next_position(final.position, final.request) < len(items)


class TestPrecedenceProperties:
    """Several requests in one step resolve to the highest-ranked one."""

    @given(items=nonempty_item_lists, burst=request_bursts)
    @settings(max_examples=300)
    def test_highest_request_wins(self, items: list[Any], burst: list[tuple[Any, ...]]) -> None:
        winner: tuple[Any, ...] = ("none",)
        for request in burst:
            if request[0] != "none" and _RANK[request[0]] >= _RANK[winner[0]]:
                winner = request

        second = None
        for it, _ in Iterator(items):
            if it.iteration == 0:
                for request in burst:
                    _issue(it, request)
            else:
                second = (it.position, it.first)
                break

        if winner[0] == "stop":
            assert second is None
            return
        expected = _next_position(0, winner)
        if 0 <= expected < len(items):
            assert second == (expected, winner[0] == "restart")
        else:
            assert second is None

    @given(counts=st.lists(st.integers(min_value=-3, max_value=6), min_size=1, max_size=5))
    @settings(max_examples=200)
    def test_last_skip_wins(self, counts: list[int]) -> None:
        items = list(range(8))
        second = None
        for it, item in Iterator(items):
            if it.iteration == 0:
                for n in counts:
                    it.skip(n)
            else:
                second = item
                break
        expected = counts[-1] + 1
        assert second == (items[expected] if 0 <= expected < len(items) else None)
