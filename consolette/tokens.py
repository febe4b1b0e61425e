"""
Token classification.

One raw token is classified against the option definitions of the running command, in
this order:

1. "--" exactly                                    -> SEPARATOR
2. "--" prefix and longer than 2                   -> LONG_OPTION when its name (text
   before "=") names a defined option, UNDEFINED_OPTION otherwise
3. "-" prefix and longer than 1                    -> SHORT_CLUSTER when its first letter
   is a defined shortcut, UNDEFINED_OPTION (for that letter) otherwise
4. anything else                                   -> POSITIONAL
"""
from enum import Enum
from typing import NamedTuple

from .names import SEPARATOR


class TokenKind(Enum):
    SEPARATOR = "separator"
    LONG_OPTION = "long-option"
    SHORT_CLUSTER = "short-cluster"
    UNDEFINED_OPTION = "undefined-option"
    POSITIONAL = "positional"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    option: object = None
    # inline "--name=value" text, None when the token has no "="
    value: str | None = None


def is_long_option(token, /):
    return token.startswith("--") and len(token) > 2


def is_short_cluster(token, /):
    return token.startswith("-") and not is_long_option(token) and len(token) > 1 and token != SEPARATOR


def looks_like_option(token, /):
    """
    Whether a token would be read as an option or a shortcut cluster.

    The bare separator does not look like an option: an option expecting a value
    takes it literally.
    """
    return is_long_option(token) or is_short_cluster(token)


def find_shortcut(options, letter, /):
    for option in options:
        if option.shortcut == letter:
            return option
    return None


def classify(token, options, /):
    if token == SEPARATOR:
        return Token(TokenKind.SEPARATOR, token)

    if is_long_option(token):
        name, equals, value = token.partition("=")
        for option in options:
            if option.matches(name):
                return Token(TokenKind.LONG_OPTION, token, option, value if equals else None)
        return Token(TokenKind.UNDEFINED_OPTION, token)

    if is_short_cluster(token):
        if (option := find_shortcut(options, token[1])) is None:
            return Token(TokenKind.UNDEFINED_OPTION, token[:2])
        return Token(TokenKind.SHORT_CLUSTER, token, option)

    return Token(TokenKind.POSITIONAL, token)


__all__ = (
    "TokenKind",
    "Token",
    "classify",
    "looks_like_option",
)
