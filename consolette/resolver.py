"""
Command name resolution: typed name -> one registered command name.

1. exact match short-circuits everything else.
2. otherwise every ":"-separated segment of the typed name becomes a literal prefix of
   the corresponding segment of a registered name ("a:b" matches "abc:bar" but not
   "abc" nor "abc:bar:baz"); matching is anchored at both ends.
3. zero matches -> CommandNotFoundError, one -> resolved, more -> AmbiguousCommandError
   carrying the typed name and the sorted candidates.
"""
import logging
import re

from .faults import AmbiguousCommandError, CommandNotFoundError
from .names import NAMESPACE_SEPARATOR

logger = logging.getLogger(__name__)


def pattern(name, /):
    """
    Compile the partial-name pattern of a typed command name.
    """
    return re.compile(NAMESPACE_SEPARATOR.join(
        f"{re.escape(segment)}[^{NAMESPACE_SEPARATOR}]*?" for segment in name.split(NAMESPACE_SEPARATOR)
    ))


def matches(name, commands, /):
    """
    Registered names matching the typed `name` partially, in sorted order.
    """
    compiled = pattern(name)
    return sorted(candidate for candidate in commands if compiled.fullmatch(candidate))


def find(name, commands, /):
    """
    Resolve a typed command name against registered names.

    Parameters
    - name: str, the name as typed.
    - commands: Iterable[str] or Mapping[str, ...] of registered names.

    Returns
    - str: the registered name.

    Raises
    - CommandNotFoundError, AmbiguousCommandError.
    """
    if name in commands:
        return name

    match candidates := matches(name, commands):
        case []:
            raise CommandNotFoundError(
                f"Command \"{name}\" is not defined. Run \"list\" to show available commands.",
                name=name,
            )
        case [candidate]:
            logger.debug("resolved %r to %r", name, candidate)
            return candidate
        case _:
            raise AmbiguousCommandError(
                f"Command \"{name}\" is ambiguous.\n\nDid you mean one of these?\n"
                + "\n".join(f"    {candidate}" for candidate in candidates),
                name=name,
                candidates=tuple(candidates),
            )


__all__ = (
    "find",
)
