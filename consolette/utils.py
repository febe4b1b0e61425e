"""
Small helpers shared by definitions, values, commands and rendering.

- Unset: the "nothing declared" sentinel. It is falsey and prints as "Unset", but
  unlike None it never stands for a resolved value (None is the value of an optional
  argument nobody passed).
- coalesce(value, default): swap Unset for a default, keep None/""/() as given.
- rename("name"): give generated callables readable names for tracebacks.
- mirror("attr"): read-only property over self._attr, handing out frozen containers.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Definitions use it for "no default": an optional argument declared without a
    default resolves to None (unset), while one declared with default=None is
    rejected as ambiguous. A single instance, Unset, is exposed.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns the given object unless it is Unset, in which case default is returned.
    Falsey values like None, "" or () are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator giving a generated callable a stable __name__/__qualname__, so
    tracebacks show "__repr__" or "command" instead of "wrapper".
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    match object:
        case str():
            return object
        case Mapping():
            return MappingProxyType({key: _freeze(value) for key, value in object.items()})
        case Sequence():
            return tuple(_freeze(item) for item in object)
        case Set():
            return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property over the private "_<name>" field; containers come back frozen
    (tuple, MappingProxyType, frozenset), so definitions cannot be edited in place.

        arguments = mirror("arguments")
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, f"_{name}"))

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
