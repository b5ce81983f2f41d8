"""Striped table -- iterator.even_or_odd, iterator.first, iterator.last.

Renders request headers as table rows with alternating row classes, the way
an Arrow ``<?for name, value in request.headers_in ?>`` block does.

Run:
    python app.py
"""

from collections.abc import Mapping
from typing import Any

from arrow_template import ForDirective

headers = {
    "Host": "localhost",
    "User-Agent": "curl/8.5.0",
    "Accept": "*/*",
    "Connection": "keep-alive",
}

directive = ForDirective("name, value")


def row(scope: Mapping[str, Any]) -> str:
    it = scope["iterator"]
    classes = [f"{it.even_or_odd}-row"]
    if it.first:
        classes.append("first")
    if it.last:
        classes.append("last")
    return (
        f'  <tr class="{" ".join(classes)}">'
        f"<td>{scope['name']}</td><td>{scope['value']}</td></tr>\n"
    )


output = "<table>\n" + directive.render(headers, row) + "</table>"


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
