"""
Value kinds and string-to-value conversion.

ValueKind is a closed set: every option declares one kind and every kind has
exactly one conversion in create_value(). The enum values are the pattern
codes used by parse_pattern() ("%" for numbers, "/" for URLs, ...); FLAG has
no code.

Kinds without a conversion (DATE, FILES) raise UnsupportedValueKind instead
of silently yielding nothing.
"""
import builtins
import importlib
from enum import Enum
from pathlib import Path
from urllib.parse import urlsplit

from .faults import InvalidValueException, UnsupportedValueKind


class ValueKind(Enum):
    FLAG = None
    STRING = ":"
    OBJECT = "@"
    NUMBER = "%"
    CLASS = "+"
    DATE = "#"
    EXISTING_FILE = "<"
    FILE = ">"
    FILES = "*"
    URL = "/"

    @classmethod
    def codes(cls):
        """
        every pattern character that names a kind.
        """
        return frozenset(kind.value for kind in cls if kind.value is not None)


def _resolve(path, /):
    """
    import the attribute named by a dotted path; bare names are builtins.
    """
    module, _, name = path.rpartition(".")
    if not name:
        raise InvalidValueException("Unable to find the class: %s" % path, value=path, kind=ValueKind.CLASS)
    try:
        namespace = importlib.import_module(module) if module else builtins
        return getattr(namespace, name)
    except (ImportError, AttributeError, ValueError):
        raise InvalidValueException("Unable to find the class: %s" % path, value=path, kind=ValueKind.CLASS) from None


def create_class(text, /):
    return _resolve(text)


def create_object(text, /):
    """
    instantiate the class named by `text` with no arguments.
    """
    cls = _resolve(text)
    if not isinstance(cls, type):
        raise InvalidValueException("%s is not a class" % text, value=text, kind=ValueKind.OBJECT)
    try:
        return cls()
    except Exception as exception:
        raise InvalidValueException(
            "Unable to create an instance of: %s" % text, value=text, kind=ValueKind.OBJECT
        ) from exception


def create_number(text, /):
    """
    a float when the text holds a decimal point, an int otherwise.
    """
    try:
        return float(text) if "." in text else int(text)
    except ValueError:
        raise InvalidValueException("Unable to parse the number: %s" % text, value=text, kind=ValueKind.NUMBER) from None


def create_url(text, /):
    parts = urlsplit(text)
    if not parts.scheme:
        raise InvalidValueException("Unable to parse the URL: %s" % text, value=text, kind=ValueKind.URL)
    return parts


def create_file(text, /):
    return Path(text)


def create_existing_file(text, /):
    path = Path(text)
    if not path.exists():
        raise InvalidValueException("Unable to find file: %s" % text, value=text, kind=ValueKind.EXISTING_FILE)
    return path


def create_value(text, kind, /):
    """
    convert `text` according to `kind`.

    raises InvalidValueException when the text does not fit the kind and
    UnsupportedValueKind for kinds without a conversion.
    """
    if not isinstance(kind, ValueKind):
        raise TypeError("create_value() second argument must be a value kind")
    match kind:
        case ValueKind.FLAG:
            return True
        case ValueKind.STRING:
            return text
        case ValueKind.OBJECT:
            return create_object(text)
        case ValueKind.NUMBER:
            return create_number(text)
        case ValueKind.CLASS:
            return create_class(text)
        case ValueKind.EXISTING_FILE:
            return create_existing_file(text)
        case ValueKind.FILE:
            return create_file(text)
        case ValueKind.URL:
            return create_url(text)
        case _:
            raise UnsupportedValueKind(kind=kind)


__all__ = (
    "ValueKind",
    "create_value",
    "create_object",
    "create_class",
    "create_number",
    "create_url",
    "create_file",
    "create_existing_file",
)
