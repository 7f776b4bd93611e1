"""
CSS value shape recognizers.

Each recognizer takes a single raw token and returns its canonical string,
or None when the token does not match the grammar. Shorthand expanders wrap
them with ``component()``, which also tells a missing token apart from an
invalid one.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

LENGTH_UNITS = ('in', 'cm', 'em', 'mm', 'pt', 'pc', 'px', 'ex', 'rem', 'vh', 'vw', 'ch')

CSS_WIDE_KEYWORDS = frozenset({'inherit', 'initial', 'revert', 'unset'})

_NUMBER = r'[-+]?[0-9]*\.?[0-9]+'

LENGTH_REGEX = re.compile(rf'{_NUMBER}(?:{"|".join(LENGTH_UNITS)})')
PERCENTAGE_REGEX = re.compile(rf'{_NUMBER}%')
LENIENT_INTEGER_REGEX = re.compile(r'^\s*[-+]?[0-9]')
STRICT_INTEGER_REGEX = re.compile(r'[-+]?[0-9]+')
COLOR_REGEX = re.compile(
    r'''
    (?:
        \#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})   # hex notation
      | rgba?\([^)]*\)                              # rgb() / rgba()
      | hsla?\([^)]*\)                              # hsl() / hsla()
    )
    ''',
    re.VERBOSE | re.IGNORECASE,
)
URL_REGEX = re.compile(r'url\(\s*([^)]*?)\s*\)')

# Characters that must be escaped inside an unquoted url() token
_URL_FORBIDDEN = frozenset('() \t\n\'"')

Recognizer = Callable[[str], Optional[str]]


def length(value: str) -> Optional[str]:
    """Return a length such as ``12px``; a bare ``0`` becomes ``0px``."""
    if value == '0':
        return '0px'
    if LENGTH_REGEX.fullmatch(value):
        return value
    return None


def percentage(value: str) -> Optional[str]:
    """Return a percentage such as ``50%``; a bare ``0`` becomes ``0%``."""
    if value == '0':
        return '0%'
    if PERCENTAGE_REGEX.fullmatch(value):
        return value
    return None


def measurement(value: str) -> Optional[str]:
    """Return a CSS-wide keyword, a length or a percentage."""
    lower_value = value.lower()
    if lower_value in CSS_WIDE_KEYWORDS:
        return lower_value
    return length(value) or percentage(value)


def measurement_or_auto(value: str) -> Optional[str]:
    """Like measurement() but also accepts ``auto``."""
    lower_value = value.lower()
    if lower_value == 'auto':
        return lower_value
    return measurement(value)


def integer(value: str, strict: bool = False) -> Optional[str]:
    """
    Return an integer value unchanged.

    In lenient mode anything that starts with an integer is accepted, so
    ``12px`` passes. Strict mode only accepts an optionally signed run of
    digits.

    Args:
        value: Raw token
        strict: Reject values with trailing non-digit characters

    Returns:
        The value, or None if it is not an integer
    """
    if strict:
        matched = STRICT_INTEGER_REGEX.fullmatch(value)
    else:
        matched = LENIENT_INTEGER_REGEX.match(value)
    return value if matched else None


def color(value: str) -> Optional[str]:
    """Return a hex, rgb(a) or hsl(a) color unchanged."""
    if COLOR_REGEX.fullmatch(value):
        return value
    return None


def url(value: str) -> Optional[str]:
    """
    Validate a ``url()`` token.

    ``none`` and ``inherit`` are returned lower-cased. Otherwise the value
    must be ``url(<token>)`` where the token is either quoted with matching
    quotes or unquoted, and contains no unescaped parenthesis, whitespace or
    quote character. The original value is returned, not the inner token.

    Args:
        value: Raw value

    Returns:
        The validated value, or None
    """
    if not value:
        return None

    lower_value = value.lower()
    if lower_value in ('none', 'inherit'):
        return lower_value

    match = URL_REGEX.fullmatch(value)
    if not match:
        return None

    token = match.group(1)
    if token and token[0] in ('"', "'"):
        if len(token) < 2 or token[0] != token[-1]:
            return None
        token = token[1:-1]

    escaped = False
    for char in token:
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char in _URL_FORBIDDEN:
            return None

    return value


class GrammarState(Enum):
    """Outcome of checking one positional token."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ABSENT = "absent"


@dataclass(frozen=True)
class GrammarResult:
    """A positional token's outcome and, when accepted, its canonical value."""

    state: GrammarState
    value: Optional[str] = None

    @classmethod
    def accepted(cls, value: str) -> 'GrammarResult':
        return cls(GrammarState.ACCEPTED, value)

    @classmethod
    def rejected(cls) -> 'GrammarResult':
        return cls(GrammarState.REJECTED)

    @classmethod
    def absent(cls) -> 'GrammarResult':
        return cls(GrammarState.ABSENT)

    @property
    def is_accepted(self) -> bool:
        return self.state is GrammarState.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.state is GrammarState.REJECTED

    @property
    def is_absent(self) -> bool:
        return self.state is GrammarState.ABSENT


def check(value: Optional[str], recognizer: Recognizer) -> GrammarResult:
    """Run ``recognizer`` on a possibly missing token."""
    if not value:
        return GrammarResult.absent()
    result = recognizer(value)
    if result is None:
        return GrammarResult.rejected()
    return GrammarResult.accepted(result)


def component(tokens: Sequence[str], index: int, recognizer: Recognizer) -> GrammarResult:
    """
    Check the token at ``index``.

    Args:
        tokens: Whitespace-separated tokens of a shorthand value
        index: Position of the token to check
        recognizer: Grammar for that position

    Returns:
        GrammarResult: Absent when there is no token at that position
    """
    value = tokens[index] if index < len(tokens) else None
    return check(value, recognizer)
