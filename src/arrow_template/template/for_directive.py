"""The ``for`` directive: render a block once per item of a sequence.

Syntax (in an Arrow template)::

    <?for <arglist> in <obj>?>...<?end for?>

While the block renders, the names from the argument list are bound to the
current item and the cursor is bound as ``iterator`` (see
``IterationConfig.loop_var``), so the block can ask for ``iterator.first``,
``iterator.even_or_odd`` or call ``iterator.skip()``.

This module only drives the loop. Parsing the surrounding template and
rendering the block belong to the template engine, which hands the block in
as a callable taking the block's variable scope.

Example:
    >>> from arrow_template import ForDirective
    >>> directive = ForDirective("name, value")
    >>> directive.render(
    ...     {"Host": "example.com", "Accept": "*/*"},
    ...     lambda scope: f"{scope['iterator'].even_or_odd}:{scope['name']}={scope['value']};",
    ... )
    'even:Host=example.com;odd:Accept=*/*;'

"""

from __future__ import annotations

import ast
import logging
from collections import ChainMap
from collections.abc import Callable, Generator, Mapping
from dataclasses import dataclass
from typing import Any

from arrow_template.config import DEFAULT_CONFIG, IterationConfig
from arrow_template.exceptions import TemplateError, TemplateRuntimeError, TemplateSyntaxError
from arrow_template.template.iterator import Iterator

logger = logging.getLogger(__name__)

# The argument list is parsed as the parameters of a lambda
_LAMBDA_PREFIX = "lambda "

BlockRenderer = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class ArgList:
    """Parsed argument list of a ``for`` directive.

    Attributes:
        args: Arguments as written, with sigils and defaults ("count=0", "*rest").
        pureargs: Argument names with sigils and defaults stripped.
        names: Positional names, in order.
        default_sources: ``(name, literal source)`` pairs for names with a default.
        splat: Name collecting surplus values, if any.
    """

    args: tuple[str, ...]
    pureargs: tuple[str, ...]
    names: tuple[str, ...]
    default_sources: tuple[tuple[str, str], ...] = ()
    splat: str | None = None

    @property
    def defaults(self) -> dict[str, Any]:
        """Default values keyed by name, evaluated afresh on every access.

        A mutable default such as ``tags=[]`` is a new list each time, so one
        step's changes never reach the next.
        """
        return {name: ast.literal_eval(source) for name, source in self.default_sources}


def _column(node: ast.AST) -> int:
    return max(getattr(node, "col_offset", 0) - len(_LAMBDA_PREFIX), 0)


def parse_arglist(source: str, *, reserved: frozenset[str] = frozenset()) -> ArgList:
    """Parse a ``for`` argument list such as ``"word, length=0, *rest"``.

    Args:
        source: The text between ``for`` and ``in``.
        reserved: Names the list may not bind (the loop variable).

    Raises:
        TemplateSyntaxError: If the list is empty or malformed, repeats a
            name, uses a non-literal default or binds a reserved name.
    """
    text = source.strip()
    if not text:
        raise TemplateSyntaxError("Empty argument list in 'for'", source=source)

    wrapped = f"{_LAMBDA_PREFIX}{text}: None"
    try:
        tree = ast.parse(wrapped, mode="eval")
    except SyntaxError as exc:
        column = None
        if exc.offset is not None:
            column = max(exc.offset - 1 - len(_LAMBDA_PREFIX), 0)
        raise TemplateSyntaxError(
            f"Invalid argument list in 'for': {exc.msg}", source=text, col_offset=column
        ) from exc

    lambda_node = tree.body
    if not isinstance(lambda_node, ast.Lambda):
        raise TemplateSyntaxError("Invalid argument list in 'for'", source=text)
    arguments = lambda_node.args
    if arguments.posonlyargs or arguments.kwonlyargs or arguments.kwarg:
        raise TemplateSyntaxError(
            "Only names, name=default and a single *rest are allowed in 'for'",
            source=text,
        )

    args: list[str] = []
    pureargs: list[str] = []
    default_sources: list[tuple[str, str]] = []
    seen: set[str] = set()

    def _claim(node: ast.arg) -> str:
        name = node.arg
        if name in seen:
            raise TemplateSyntaxError(
                f"Duplicate argument '{name}' in 'for'", source=text, col_offset=_column(node)
            )
        if name in reserved:
            raise TemplateSyntaxError(
                f"'{name}' is reserved for the loop iterator", source=text, col_offset=_column(node)
            )
        seen.add(name)
        pureargs.append(name)
        return name

    first_default = len(arguments.args) - len(arguments.defaults)
    for index, node in enumerate(arguments.args):
        name = _claim(node)
        if index < first_default:
            args.append(name)
            continue
        default_node = arguments.defaults[index - first_default]
        try:
            ast.literal_eval(default_node)
        except (ValueError, TypeError) as exc:
            raise TemplateSyntaxError(
                f"Default for '{name}' must be a literal",
                source=text,
                col_offset=_column(default_node),
            ) from exc
        default_source = ast.get_source_segment(wrapped, default_node)
        default_sources.append((name, default_source))
        args.append(f"{name}={default_source}")

    splat = None
    if arguments.vararg is not None:
        splat = _claim(arguments.vararg)
        args.append(f"*{splat}")

    return ArgList(
        args=tuple(args),
        pureargs=tuple(pureargs),
        names=tuple(name for name in pureargs if name != splat),
        default_sources=tuple(default_sources),
        splat=splat,
    )


class ForDirective:
    """Renders a block once per item, with the cursor in scope.

    Binding rules for each item:
        - One name and no ``*rest``: the whole item binds to it.
        - Otherwise a tuple or list item is spread over the names; missing
          values take the name's default (or None), surplus values go to
          ``*rest`` (or are dropped).
        - A non-sequence item binds to the first name.

    Mappings are iterated as ``(key, value)`` pairs, so ``"name, value"``
    walks a dict's entries.
    """

    __slots__ = ("arglist", "config")

    def __init__(self, arglist: str, *, config: IterationConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.arglist = parse_arglist(arglist, reserved=frozenset({config.loop_var}))

    @property
    def args(self) -> tuple[str, ...]:
        return self.arglist.args

    @property
    def pureargs(self) -> tuple[str, ...]:
        return self.arglist.pureargs

    def bind(self, item: Any) -> dict[str, Any]:
        """Map one item onto the argument names."""
        arglist = self.arglist
        names = arglist.names

        if len(names) == 1 and arglist.splat is None:
            values: tuple[Any, ...] = (item,)
        elif isinstance(item, (tuple, list)):
            values = tuple(item)
        else:
            values = (item,)

        defaults = arglist.defaults if len(values) < len(names) else {}
        attributes: dict[str, Any] = {}
        for index, name in enumerate(names):
            if index < len(values):
                attributes[name] = values[index]
            else:
                attributes[name] = defaults.get(name)
        if arglist.splat is not None:
            attributes[arglist.splat] = list(values[len(names):])
        return attributes

    def iter_render(
        self,
        iterable: Any,
        body: BlockRenderer,
        scope: Mapping[str, Any] | None = None,
    ) -> Generator[str, None, None]:
        """Yield the rendered block for each step of the traversal.

        Raises:
            TemplateRuntimeError: If ``body`` raises anything other than a
                ``TemplateError``; the original is chained as ``__cause__``.
        """
        iterator: Iterator[Any] = Iterator(() if iterable is None else iterable, config=self.config)
        logger.debug(f"Rendering 'for {', '.join(self.args)}' over {iterator.length} items")
        outer: Mapping[str, Any] = {} if scope is None else scope

        for cursor, item in iterator:
            attributes = self.bind(item)
            attributes[self.config.loop_var] = cursor
            try:
                piece = body(ChainMap(attributes, outer))
            except TemplateError:
                raise
            except Exception as exc:
                raise TemplateRuntimeError(
                    f"Error rendering 'for' block: {exc}",
                    values={
                        "iteration": cursor.iteration,
                        "position": cursor.position,
                        "item": item,
                    },
                    suggestion="Check the loop body for the failing expression",
                ) from exc
            yield "" if piece is None else str(piece)

    def render(
        self,
        iterable: Any,
        body: BlockRenderer,
        scope: Mapping[str, Any] | None = None,
    ) -> str:
        """Render the block for every step and join the output."""
        buf: list[str] = []
        buf.extend(self.iter_render(iterable, body, scope))
        return "".join(buf)

    def __repr__(self) -> str:
        return f"<ForDirective {', '.join(self.args)}>"
