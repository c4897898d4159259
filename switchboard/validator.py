"""
Option name validation.

A short option name is either a single character or a run of identifier
characters. Single characters additionally accept "?" and "@", so "-?" can be
declared as a help switch. Long names are not validated here.
"""
import re

_SPECIAL = frozenset("?@")
_IDENTIFIER = re.compile(r"[\w$]+")


def validate_option(name, /):
    """
    check that `name` is a legal short option name.

    None is accepted (an option declared by its long name only).
    raises ValueError otherwise.
    """
    if name is None:
        return
    if not isinstance(name, str):
        raise TypeError("validate_option() argument must be a string")
    if len(name) == 1:
        if not (_IDENTIFIER.fullmatch(name) or name in _SPECIAL):
            raise ValueError(f"Illegal option name '{name}'")
    elif not _IDENTIFIER.fullmatch(name):
        raise ValueError(f"Illegal option name '{name}'")


__all__ = ("validate_option",)
