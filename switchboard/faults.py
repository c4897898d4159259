"""
Switchboard faults (parse errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue. Codes are
  grouped by domain so messages and logs stay searchable.
- ParseException: base of every parse-time error. It carries a preformatted,
  human-readable message plus a read-only mapping of structured details
  (the offending token, the candidates, the missing items, ...).
- ConversionWarning: lenient value conversion failures, surfaced through the
  warnings module.
- trigger(): surface any fault (raise it, or render it and exit in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- UnrecognizedOptionException  token looks like an option but matches nothing
- AmbiguousOptionException     a long prefix matches several options
- MissingArgumentException     an option ran out of mandatory values
- MissingOptionException       required options/groups were never seen
- AlreadySelectedException     two members of one exclusive group were seen
- InvalidValueException        a value could not be converted to its kind
- UnsupportedValueKind         the value kind has no conversion

Integration
- The parser raises the exceptions directly; callers catch ParseException for
  generic handling, or a subclass for its structured details.
- Applications that prefer the friendly output call trigger(fault, shell=True):
  the fault is rendered on stderr through rich and the process exits with 1.
- Rendering honours the host hooks __prog__, __styles__, __codes__ and __docs__
  defined in __main__.
"""
import copy
import os
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, pluralize

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - generic (1110x)
      • PARSE_ERROR
    - option resolution (1111x)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION
    - arguments (1112x)
      • MISSING_ARGUMENT
    - requirements and groups (1113x)
      • MISSING_OPTION, ALREADY_SELECTED
    - values (1114x)
      • INVALID_VALUE, UNSUPPORTED_VALUE_KIND
    - warnings (12xxx)
      • CONVERSION_FAILED
    """
    # --- generic errors (11xxx) ---
    PARSE_ERROR                 = 11101

    # --- option resolution errors (11xxx) ---
    UNRECOGNIZED_OPTION         = 11111
    AMBIGUOUS_OPTION            = 11112

    # --- argument errors (11xxx) ---
    MISSING_ARGUMENT            = 11121

    # --- requirement errors (11xxx) ---
    MISSING_OPTION              = 11131
    ALREADY_SELECTED            = 11132

    # --- value errors (11xxx) ---
    INVALID_VALUE               = 11141
    UNSUPPORTED_VALUE_KIND      = 11142

    # --- warnings (12xxx) ---
    CONVERSION_FAILED           = 12141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.

    layout: "[ prog — code | Title ]", the message, then " → hint". fancy
    mode wraps message and hint in a panel titled with the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", True)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", options.get("prog") or os.path.basename(sys.argv[0]) or "python")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(options.get("code", fault.code).normalize(), "code"),
        " | ",
        text(options.get("title", fault.title).title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint", fault.hint), "hint"))
    body = [message, hint]
    if (docs := options.get("docs", getdoc(fault.code))) is not None:
        body.append(text(docs, "docs"))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*body), title=header, title_align="left", width=width)

    return Group(header, *body)


def _detail(name, /):
    """
    read-only accessor for one structured detail of a fault.
    """
    return property(lambda self: self.options.get(name))


class ParseException(Exception):
    """
    base class of every parse-time error.

    the message is preformatted for humans (e.g. "Missing required options: b, c").
    subclasses that know how to word their message accept it as optional and
    build it from their details.
    """
    code = FaultCode.PARSE_ERROR
    title = "parse error"
    hint = "check the command line against the usage"

    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
        "docs": "#6B6F7A italic",
    }

    def __init__(self, message=Unset, /, **options):
        if message is Unset:
            message = self.describe(options)
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @classmethod
    def describe(cls, options, /):
        """
        word the message from the structured details.
        """
        raise TypeError(f"{cls.__name__}() missing required message")

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, self.palette)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionException(ParseException):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"
    hint = "check the spelling, or pass '--' before positional arguments"

    option = _detail("option")

    @classmethod
    def describe(cls, options, /):
        return "Unrecognized option: %s" % options["option"]


class AmbiguousOptionException(UnrecognizedOptionException):
    """
    a long option prefix that matches more than one declared long name.

    details: option (the prefix as typed), matching (the candidate names).
    """
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"
    hint = "type more of the option name"

    matching = _detail("matching")

    def __init__(self, message=Unset, /, **options):
        options["matching"] = tuple(options.get("matching", ()))
        super().__init__(message, **options)

    @classmethod
    def describe(cls, options, /):
        return "Ambiguous option: '%s'  (could be: %s)" % (
            options["option"],
            ", ".join("'%s'" % name for name in options["matching"]),
        )


class MissingArgumentException(ParseException):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"
    hint = "give the option its value"

    option = _detail("option")

    @classmethod
    def describe(cls, options, /):
        return "Missing argument for option: %s" % options["option"].key


class MissingOptionException(ParseException):
    """
    required options or groups that the command line never mentioned.

    details: missing, in pending order; option keys are strings, groups are
    OptionGroup objects rendered with str().
    """
    code = FaultCode.MISSING_OPTION
    title = "missing option"
    hint = "add the required options"

    missing = _detail("missing")

    def __init__(self, message=Unset, /, **options):
        options["missing"] = tuple(options.get("missing", ()))
        super().__init__(message, **options)

    @classmethod
    def describe(cls, options, /):
        missing = options["missing"]
        return "Missing required %s: %s" % (pluralize("option", len(missing)), ", ".join(map(str, missing)))


class AlreadySelectedException(ParseException):
    """
    a second member of a mutually exclusive group was given.

    details: group (the working group, holding the earlier selection) and
    option (the rejected declaration).
    """
    code = FaultCode.ALREADY_SELECTED
    title = "conflicting options"
    hint = "use only one option of the group"

    group = _detail("group")
    option = _detail("option")

    @property
    def selected(self):
        return self.group.selected if self.group is not None else None

    @classmethod
    def describe(cls, options, /):
        return "The option '%s' was specified but an option from this group has already been selected: '%s'" % (
            options["option"].key,
            options["group"].selected,
        )


class InvalidValueException(ParseException):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"
    hint = "check the value format"

    value = _detail("value")
    kind = _detail("kind")


class UnsupportedValueKind(ParseException):
    code = FaultCode.UNSUPPORTED_VALUE_KIND
    title = "unsupported value kind"
    hint = "declare the option with a supported value kind"

    kind = _detail("kind")

    @classmethod
    def describe(cls, options, /):
        return "Not yet implemented: %s values" % options["kind"].name.lower()


class ConversionWarning(Warning):
    """
    a value that could not be converted where the caller asked for leniency.
    """
    code = FaultCode.CONVERSION_FAILED
    title = "conversion failed"
    hint = "the value is ignored"

    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
        "docs": "#6B6F7A italic",
    }

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("ConversionWarning() message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, self.palette)

    def __trigger__(self):
        if not self.options.get("shell", False):
            # __trigger__ <- trigger <- library call <- user code
            return warnings.warn(self, stacklevel=4)
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods.
    - options are merged into the fault via copy.replace() before triggering.
    - errors are raised unless shell=True, in which case they are rendered on
      stderr and the process exits with status 1. warnings go through the
      warnings module unless shell=True.

    typical options
    - shell, fancy, colorful, ratio, prog, title, hint, docs.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode. returns None when no documentation is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseException",
    "UnrecognizedOptionException",
    "AmbiguousOptionException",
    "MissingArgumentException",
    "MissingOptionException",
    "AlreadySelectedException",
    "InvalidValueException",
    "UnsupportedValueKind",
    "ConversionWarning",
    "trigger",
    "getdoc",
)
