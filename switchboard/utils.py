"""
Switchboard utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the catalog, the parser and the formatter.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided", distinct from None.
- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving None/0/"".
- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated accessors.
- mirror("attr")
  • Read-only property over a private backing field (self._attr); containers
    are handed out as fresh copies so callers cannot mutate declarations.
- pluralize(word, count)
  • Minimal English plural used by fault messages ("option" / "options").
- strip_leading_hyphens(text) / strip_quotes(text)
  • Token normalization used by every name lookup and value feed.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> strip_leading_hyphens("--verbose")
    'verbose'
    >>> strip_quotes('"foo bar"')
    'foo bar'
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process-wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    """

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

    Falsey values like None, 0 or "" are preserved; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values.

    - Sequence (non-string, non-tuple): new list, elements processed.
    - Mapping: new dict with the original keys.
    - Set: new set.
    - Anything else (tuples included) is returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str | tuple):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set) and not isinstance(object, frozenset):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance and returns a fresh copy for
    mutable containers.

    Example
    - Given self._values, declare values = mirror("values").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(word, count=2, /):
    """
    Return `word` unchanged for a count of one, its plural otherwise.

    Only the regular English rules needed by messages are covered:
    s/sh/ch/x/z take "es", consonant + y takes "ies", everything else "s".
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() argument must be a string")
    if count == 1 or not word:
        return word
    lower = word.lower()
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    return word + "s"


def strip_leading_hyphens(text, /):
    """
    remove one leading "--" or "-" from text (None passes through).
    """
    if text is None:
        return None
    if text.startswith("--"):
        return text[2:]
    if text.startswith("-"):
        return text[1:]
    return text


def strip_quotes(text, /):
    """
    remove one layer of surrounding double quotes.

    the quotes are kept when the inner text itself holds a double quote,
    so '"foo" and "bar"' is returned untouched.
    """
    if len(text) > 1 and text.startswith('"') and text.endswith('"') and '"' not in text[1:-1]:
        return text[1:-1]
    return text


__all__ = (
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "strip_leading_hyphens",
    "strip_quotes",
)
