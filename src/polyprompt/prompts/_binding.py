"""Partial binding of mustache template source.

Bound variables are substituted and everything else is left exactly as
written, so the result is still a template. Sections and inverted sections
whose name is bound are resolved now; sections for any other name keep
their tags and body, with bound variables inside them substituted.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Literal

from polyprompt.enums import TemplateEngine
from polyprompt.exceptions import TemplateRenderError

type TagKind = Literal[
    "variable",
    "raw",
    "section",
    "inverted",
    "end",
    "partial",
    "comment",
    "delimiters",
]

DEFAULT_DELIMITERS = ("{{", "}}")

_SIGILS: dict[str, TagKind] = {
    "#": "section",
    "^": "inverted",
    "/": "end",
    ">": "partial",
    "!": "comment",
    "=": "delimiters",
    "&": "raw",
    "{": "raw",
}


@dataclass(frozen=True, slots=True)
class _Tag:
    kind: TagKind
    key: str
    start: int
    end: int


@dataclass(slots=True)
class _Block:
    """A section with its nested items. The root block has no tags."""

    open: _Tag | None = None
    close: _Tag | None = None
    items: list["_Tag | _Block"] = field(default_factory=list)


def _syntax_error(message: str) -> TemplateRenderError:
    return TemplateRenderError(
        f"Failed to bind mustache template: {message}",
        engine=TemplateEngine.MUSTACHE.value,
    )


def _validate(template: str) -> None:
    from chevron import ChevronError  # noqa: PLC0415
    from chevron.tokenizer import tokenize  # noqa: PLC0415

    try:
        for _ in tokenize(template):
            pass
    except ChevronError as e:
        raise _syntax_error(str(e)) from e


def _scan(template: str) -> Iterator[_Tag]:
    """Yield tags in source order, following delimiter changes."""
    left, right = DEFAULT_DELIMITERS
    pos = 0
    while (start := template.find(left, pos)) != -1:
        close = template.find(right, start + len(left))
        if close == -1:
            msg = f"unclosed tag at offset {start}"
            raise _syntax_error(msg)

        body = template[start + len(left) : close]
        end = close + len(right)
        kind = _SIGILS.get(body[:1], "variable")
        key = (body if kind == "variable" else body[1:]).strip()

        if body.startswith("{"):
            # {{{name}}} stops at the first closing delimiter
            if key.endswith("}"):
                key = key[:-1].strip()
            elif template.startswith("}", end):
                end += 1
        elif kind == "delimiters":
            parts = key.rstrip("=").split()
            if len(parts) != 2:  # noqa: PLR2004
                msg = f"invalid delimiter tag at offset {start}"
                raise _syntax_error(msg)
            left, right = parts

        yield _Tag(kind=kind, key=key, start=start, end=end)
        pos = end


def _parse(template: str) -> _Block:
    root = _Block()
    stack = [root]
    for tag in _scan(template):
        if tag.kind in ("section", "inverted"):
            block = _Block(open=tag)
            stack[-1].items.append(block)
            stack.append(block)
        elif tag.kind == "end":
            block = stack.pop()
            if block.open is None or block.open.key != tag.key:
                msg = f"unexpected closing tag '{tag.key}' at offset {tag.start}"
                raise _syntax_error(msg)
            block.close = tag
        else:
            stack[-1].items.append(tag)

    if len(stack) > 1:
        msg = f"unclosed section '{stack[-1].open.key}'"  # pyright: ignore[reportOptionalMemberAccess]
        raise _syntax_error(msg)
    return root


def _escape(value: str) -> str:
    import chevron  # noqa: PLC0415

    # Same escaping as a full render
    return chevron.render("{{value}}", {"value": value}, partials_path=None)


class _Binder:
    def __init__(self, template: str, inputs: Mapping[str, str]) -> None:
        self._template = template
        self._inputs = inputs

    def bind(self) -> str:
        root = _parse(self._template)
        return "".join(self._emit(root, 0, len(self._template), dot=None))

    def _lookup(self, key: str, dot: str | None) -> str | None:
        if key == ".":
            return dot
        # Dotted names are resolved against nested data, which flat inputs lack
        if not key or "." in key:
            return None
        return self._inputs.get(key)

    def _raw(self, tag: _Tag) -> str:
        return self._template[tag.start : tag.end]

    def _standalone_span(self, tag: _Tag) -> tuple[int, int]:
        """Return the span removed with a tag that sits alone on its line."""
        text = self._template
        line_start = text.rfind("\n", 0, tag.start) + 1
        newline = text.find("\n", tag.end)
        line_end = len(text) if newline == -1 else newline + 1
        if text[line_start : tag.start].strip() or text[tag.end : line_end].strip():
            return tag.start, tag.end
        return line_start, line_end

    def _tag(self, tag: _Tag, dot: str | None) -> str:
        if tag.kind not in ("variable", "raw"):
            return self._raw(tag)
        value = self._lookup(tag.key, dot)
        if value is None:
            return self._raw(tag)
        return value if tag.kind == "raw" else _escape(value)

    def _delimiters(self, block: _Block) -> Iterator[str]:
        for item in block.items:
            if isinstance(item, _Block):
                yield from self._delimiters(item)
            elif item.kind == "delimiters":
                yield self._raw(item)

    def _emit(
        self, block: _Block, lo: int, hi: int, *, dot: str | None
    ) -> Iterator[str]:
        cursor = lo
        for item in block.items:
            if isinstance(item, _Tag):
                yield self._template[cursor : item.start]
                yield self._tag(item, dot)
                cursor = item.end
                continue

            opening, closing = item.open, item.close
            assert opening is not None and closing is not None  # noqa: S101
            value = self._lookup(opening.key, dot)

            if value is None:
                yield self._template[cursor : opening.end]
                yield from self._emit(item, opening.end, closing.start, dot=None)
                yield self._raw(closing)
                cursor = closing.end
                continue

            open_start, open_end = self._standalone_span(opening)
            close_start, close_end = self._standalone_span(closing)
            yield self._template[cursor:open_start]

            render_body = bool(value) == (opening.kind == "section")
            if render_body:
                inner_dot = value if opening.kind == "section" else dot
                yield from self._emit(item, open_end, close_start, dot=inner_dot)
            else:
                yield from self._delimiters(item)
            cursor = close_end

        yield self._template[cursor:hi]


def bind_mustache(template: str, inputs: Mapping[str, str]) -> str:
    """Substitute some variables into mustache source.

    Tags for names missing from inputs are kept verbatim, including their
    section blocks, so a later render with the remaining variables gives
    the same result as rendering once with all of them.

    Raises:
        TemplateRenderError: If the template has unbalanced or malformed tags.

    Example:
        bind_mustache("{{#formal}}Dear {{/formal}}{{name}}", {"name": "Ada"})
        # Returns: "{{#formal}}Dear {{/formal}}Ada"
    """
    _validate(template)
    return _Binder(template, inputs).bind()
