"""Carousel -- filling a fixed number of slots with restart() and skip().

A featured-items strip always shows ``SLOTS`` cards. When there are fewer
items than slots the block restarts the iterator to wrap around; hidden
items are stepped over with ``skip()``, and ``iterator.skipped`` marks the
card that follows a gap.

Run:
    python app.py
"""

from collections.abc import Mapping
from typing import Any

from arrow_template import ForDirective, IterationConfig

SLOTS = 7

products = [
    {"name": "Kettle", "hidden": False},
    {"name": "Teapot", "hidden": True},
    {"name": "Mug", "hidden": False},
    {"name": "Strainer", "hidden": False},
]

# Guards against a catalogue where every product is hidden
directive = ForDirective("product", config=IterationConfig(max_steps=100))

shown: list[str] = []


def card(scope: Mapping[str, Any]) -> str:
    it = scope["iterator"]
    product = scope["product"]
    if len(shown) >= SLOTS:
        it.stop()
        return ""
    if product["hidden"]:
        return ""
    if it.nextitem is not None and it.nextitem["hidden"]:
        it.skip()
    if it.last:
        it.restart()
    shown.append(product["name"])
    marker = "*" if it.skipped else ""
    return f"[{product['name']}{marker}]"


output = directive.render(products, card)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
