"""Pull-based JSON token reader.

The text is parsed with a Lark LALR grammar and the parse tree is flattened
into a token list by an :class:`~lark.visitors.Interpreter`. :class:`JsonReader`
is a cursor over that list.
"""

from __future__ import annotations

import enum
import json
from typing import Any

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput
from lark.visitors import Interpreter

from pyprotojson._constants import DEFAULT_MAX_DEPTH
from pyprotojson._errors import (
    ERR_MSG_INVALID_JSON,
    ERR_MSG_MAX_DEPTH_EXCEEDED,
    InvalidJSONError,
    MaxDepthExceededError,
    type_mismatch,
)

_GRAMMAR = r"""
    start: value

    ?value: object
          | array
          | STRING -> string
          | NUMBER -> number
          | "true" -> true
          | "false" -> false
          | "null" -> null

    array: "[" (value ("," value)*)? "]"
    object: "{" (pair ("," pair)*)? "}"
    pair: STRING ":" value

    STRING: /"(?:[^"\\\x00-\x1f]|\\["\\\/bfnrt]|\\u[0-9a-fA-F]{4})*"/
    NUMBER: /-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?/
    WS: /[ \t\n\r]+/

    %ignore WS
"""

_parser = Lark(_GRAMMAR, parser="lalr")


class JsonTokenType(enum.Enum):
    NONE = "none"
    START_OBJECT = "start_object"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    PROPERTY_NAME = "property_name"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


_START_TOKENS = (JsonTokenType.START_OBJECT, JsonTokenType.START_ARRAY)
_END_TOKENS = (JsonTokenType.END_OBJECT, JsonTokenType.END_ARRAY)


def _decode_string(token: Token) -> str:
    return json.loads(token)


def _decode_number(token: Token) -> int | float:
    text = str(token)
    if any(c in text for c in ".eE"):
        return float(text)
    return int(text)


class _TokenCollector(Interpreter):
    """Flattens a JSON parse tree into ``(token_type, value)`` pairs."""

    def __init__(self, max_depth: int) -> None:
        self.tokens: list[tuple[JsonTokenType, Any]] = []
        self._max_depth = max_depth
        self._depth = 0

    def _container(self, tree: Tree, start: JsonTokenType, end: JsonTokenType) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            raise MaxDepthExceededError(
                ERR_MSG_MAX_DEPTH_EXCEEDED,
                f"JSON nesting depth exceeds limit {self._max_depth}",
            )
        self.tokens.append((start, None))
        self.visit_children(tree)
        self.tokens.append((end, None))
        self._depth -= 1

    def object(self, tree: Tree) -> None:
        self._container(tree, JsonTokenType.START_OBJECT, JsonTokenType.END_OBJECT)

    def array(self, tree: Tree) -> None:
        self._container(tree, JsonTokenType.START_ARRAY, JsonTokenType.END_ARRAY)

    def pair(self, tree: Tree) -> None:
        name, value = tree.children
        self.tokens.append((JsonTokenType.PROPERTY_NAME, _decode_string(name)))
        self.visit(value)

    def string(self, tree: Tree) -> None:
        self.tokens.append((JsonTokenType.STRING, _decode_string(tree.children[0])))

    def number(self, tree: Tree) -> None:
        self.tokens.append((JsonTokenType.NUMBER, _decode_number(tree.children[0])))

    def true(self, tree: Tree) -> None:
        self.tokens.append((JsonTokenType.TRUE, True))

    def false(self, tree: Tree) -> None:
        self.tokens.append((JsonTokenType.FALSE, False))

    def null(self, tree: Tree) -> None:
        self.tokens.append((JsonTokenType.NULL, None))


def tokenize(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[tuple[JsonTokenType, Any]]:
    """Parse ``text`` into a flat token list.

    Raises:
        InvalidJSONError: If ``text`` is not a single valid JSON value.
        MaxDepthExceededError: If nesting exceeds ``max_depth``.
    """
    try:
        tree = _parser.parse(text)
    except UnexpectedInput as e:
        raise InvalidJSONError(
            ERR_MSG_INVALID_JSON,
            f"line {e.line}, column {e.column}: {e}",
            wrapped=e,
        ) from e
    collector = _TokenCollector(max_depth)
    collector.visit(tree)
    return collector.tokens


class JsonReader:
    """Cursor over the tokens of one JSON document.

    The reader starts before the first token; call :meth:`read` to advance.
    ``depth`` counts the containers enclosing the current token, so a start
    token and its matching end token report the same depth.
    """

    def __init__(self, text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._tokens = tokenize(text, max_depth)
        self._pos = -1
        self._depth = 0

    @property
    def token_type(self) -> JsonTokenType:
        if 0 <= self._pos < len(self._tokens):
            return self._tokens[self._pos][0]
        return JsonTokenType.NONE

    @property
    def value(self) -> Any:
        if 0 <= self._pos < len(self._tokens):
            return self._tokens[self._pos][1]
        return None

    @property
    def depth(self) -> int:
        return self._depth

    def read(self) -> bool:
        """Advance to the next token. Returns False once the input is exhausted."""
        if self.token_type in _START_TOKENS:
            self._depth += 1
        if self._pos < len(self._tokens):
            self._pos += 1
        if self.token_type in _END_TOKENS:
            self._depth -= 1
        return self._pos < len(self._tokens)

    def skip(self) -> None:
        """Skip the current value, including all children of a start token.

        On a property name the reader first moves to its value.
        """
        if self.token_type is JsonTokenType.PROPERTY_NAME:
            self.read()
        if self.token_type not in _START_TOKENS:
            return
        depth = self._depth
        while self.read():
            if self._depth == depth and self.token_type in _END_TOKENS:
                return

    def get_string(self) -> str:
        if self.token_type not in (JsonTokenType.STRING, JsonTokenType.PROPERTY_NAME):
            raise type_mismatch("string", f"found {self.token_type.value} token")
        return self.value

    def get_bool(self) -> bool:
        if self.token_type not in (JsonTokenType.TRUE, JsonTokenType.FALSE):
            raise type_mismatch("bool", f"found {self.token_type.value} token")
        return self.value
