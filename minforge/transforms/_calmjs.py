"""Shared helpers for engines backed by ``calmjs.parse``."""

from __future__ import annotations

import re

from calmjs.parse import es5
from calmjs.parse.exceptions import ECMARegexSyntaxError, ECMASyntaxError
from calmjs.parse.lexers.es5 import Lexer

from minforge.transforms.base import EngineSyntaxError

# calmjs reports positions as "... at <line>:<column> ..."
_POSITION = re.compile(r"\bat (\d+):(\d+)")

PARSE_ERRORS: tuple[type[Exception], ...] = (ECMASyntaxError, ECMARegexSyntaxError)


def to_engine_error(exc: Exception) -> EngineSyntaxError:
    """Convert a calmjs parse exception into an ``EngineSyntaxError``."""
    message = str(exc)
    match = _POSITION.search(message)
    if match is None:
        return EngineSyntaxError(message)
    return EngineSyntaxError(message, line=int(match.group(1)), column=int(match.group(2)))


def parse(text: str):
    """Parse ES5 *text* into a calmjs program.  Raises ``EngineSyntaxError``."""
    try:
        return es5(text)
    except PARSE_ERRORS as exc:
        raise to_engine_error(exc) from exc


def tokens(text: str):
    """Yield the ES5 lexer tokens of *text*.  Raises ``EngineSyntaxError``."""
    lexer = Lexer()
    lexer.build()
    lexer.input(text)
    while True:
        try:
            token = lexer.token()
        except PARSE_ERRORS as exc:
            raise to_engine_error(exc) from exc
        if token is None:
            return
        yield token
