"""
@file: graphql.py
GraphQL literal encoding for query documents sent to Weaviate.

Every piece of caller-supplied text that ends up in a query document passes through
this module, so quotes, backslashes and newlines can never terminate a literal early.

Functions:
    quote_string: Encode text as a double-quoted GraphQL string.
    block_string: Encode text as a triple-quoted GraphQL block string.
    render_value: Encode a Python value (mapping, list, scalar, EnumValue) as a GraphQL input value.
    render_arguments: Encode an ordered argument list as '(name: value, ...)'.
    render_document: Lay out an operation root, collection field and selection set.
    validate_name, validate_selection: Check caller-supplied names and raw selections.
"""
import json
import math
import re
from typing import Any, List, Mapping, Sequence, Tuple, Union

from .exceptions import ValidationError

_NAME_RE = re.compile(r'^[_A-Za-z][_0-9A-Za-z]*$')
_NAME_PREFIX_RE = re.compile(r'[_A-Za-z][_0-9A-Za-z]*')
# Block strings cannot escape control characters other than tab and newline; '\r' is normalized away
_BLOCK_UNSAFE_RE = re.compile(r'[\x00-\x08\x0b-\x1f]')

# A selection item is either a raw field ('title', 'hasAuthor { name }') or a
# (header, children) pair rendered as a nested block.
Selection = Union[str, Tuple[str, List[Any]]]


class EnumValue(str):
    """A string rendered bare, as a GraphQL enum value (e.g. operator: Equal)."""
    __slots__ = ()

    def __repr__(self):
        return f"EnumValue({str.__repr__(self)})"


class BlockString(str):
    """A string rendered as a triple-quoted block string (used for multi-line prompts)."""
    __slots__ = ()

    def __repr__(self):
        return f"BlockString({str.__repr__(self)})"


def is_name(text: Any) -> bool:
    """Return True if text is a valid GraphQL name."""
    return isinstance(text, str) and bool(_NAME_RE.match(text))


def validate_name(text: Any, what: str) -> str:
    """Return text unchanged, or raise ValidationError if it is not a GraphQL name."""
    if not is_name(text):
        raise ValidationError(f"Invalid {what}: {text!r}")
    return text


def _block_string_end(body: str, start: int) -> int:
    """Index of the unescaped triple quote closing a block string opened before start, or -1."""
    end = body.find('"""', start)
    while end > 0 and body[end - 1] == '\\':
        end = body.find('"""', end + 3)
    return end


def _is_balanced_body(body: str) -> bool:
    """
    True if body is exactly one '{ ... }' selection body.

    Braces inside string literals are skipped. The outermost brace must close on the
    last character, so nothing can follow it; comments are rejected since they would
    hide the braces after them.
    """
    if not body.startswith("{"):
        return False
    depth = 0
    i = 0
    while i < len(body):
        if body.startswith('"""', i):
            end = _block_string_end(body, i + 3)
            if end < 0:
                return False
            i = end + 3
            continue
        char = body[i]
        if char == '"':
            i += 1
            while i < len(body) and body[i] != '"':
                if body[i] == '\n':
                    return False
                i += 2 if body[i] == '\\' else 1
            if i >= len(body):
                return False
        elif char == '#':
            return False
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0 and i != len(body) - 1:
                return False
        i += 1
    return depth == 0


def validate_selection(text: Any, what: str) -> str:
    """
    Return text unchanged if it is a single selection: a field name, optionally followed
    by one balanced '{ ... }' body (e.g. 'hasAuthor { ... on Author { name } }').

    Raises:
        ValidationError: For anything else, including text that would close the
            enclosing field and open sibling fields.
    """
    if isinstance(text, str):
        stripped = text.strip()
        match = _NAME_PREFIX_RE.match(stripped)
        if match:
            rest = stripped[match.end():].lstrip()
            if not rest or _is_balanced_body(rest):
                return text
    raise ValidationError(f"Invalid {what}: {text!r}")


def quote_string(text: str) -> str:
    """Encode text as a double-quoted GraphQL string literal."""
    return json.dumps(text, ensure_ascii=False)


def _block_string_preserves(text: str) -> bool:
    """True if block-string dedent and blank-line trimming leave text unchanged."""
    lines = text.split("\n")
    if not lines[0].strip(" \t"):
        return False
    if len(lines) > 1 and not lines[-1].strip(" \t"):
        return False
    return not any(line.startswith((" ", "\t")) for line in lines[1:])


def block_string(text: str) -> str:
    """
    Encode text as a triple-quoted GraphQL block string.

    Embedded triple quotes are escaped. Text ending in a quote or backslash gets a
    trailing newline, which block-string parsing strips again. Text the parser would not
    return verbatim falls back to a regular string literal: control characters other
    than tab and newline, indented lines after the first (common indentation is
    stripped) and leading or trailing blank lines (they are dropped).
    """
    if _BLOCK_UNSAFE_RE.search(text) or not _block_string_preserves(text):
        return quote_string(text)
    body = text.replace('"""', '\\"""')
    if body.endswith('"') or body.endswith('\\'):
        body += '\n'
    return f'"""{body}"""'


def render_float(value: float) -> str:
    if not math.isfinite(value):
        raise ValidationError(f"Non-finite number cannot be encoded: {value!r}")
    return repr(float(value))


def render_value(value: Any) -> str:
    """
    Encode a Python value as a GraphQL input value.

    Args:
        value: None, EnumValue, BlockString, bool, int, float, str, a mapping with name keys,
            or a list/tuple.

    Returns:
        str: The GraphQL literal text.
    """
    if value is None:
        return "null"
    if isinstance(value, EnumValue):
        return str(value)
    if isinstance(value, BlockString):
        return block_string(str(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return render_float(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, Mapping):
        items = ", ".join(f"{validate_name(key, 'argument name')}: {render_value(item)}" for key, item in value.items())
        return "{" + items + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    raise TypeError(f"Cannot encode {type(value).__name__} as a GraphQL value")


def render_arguments(arguments: Sequence[Tuple[str, Any]]) -> str:
    """Encode ordered (name, value) pairs as '(name: value, ...)', or '' when empty."""
    if not arguments:
        return ""
    return "(" + ", ".join(f"{name}: {render_value(value)}" for name, value in arguments) + ")"


def _render_lines(items: Sequence[Selection], level: int, indent: str) -> List[str]:
    lines = []
    pad = indent * level
    for item in items:
        if isinstance(item, str):
            lines.append(pad + item)
        else:
            header, children = item
            lines.append(pad + header + " {")
            lines.extend(_render_lines(children, level + 1, indent))
            lines.append(pad + "}")
    return lines


def render_document(operation: str, collection: str, arguments: str, selection: Sequence[Selection], indent: str = "  ") -> str:
    """
    Lay out a complete query document.

    Args:
        operation: Operation root, 'Get' or 'Aggregate'.
        collection: Collection field name.
        arguments: Pre-rendered argument list (see render_arguments).
        selection: Selection items for the collection field.
        indent: Indentation unit.

    Returns:
        str: The document text, newline-terminated.
    """
    root = (operation, [(collection + arguments, list(selection))])
    return "\n".join(["{"] + _render_lines([root], 1, indent) + ["}"]) + "\n"
