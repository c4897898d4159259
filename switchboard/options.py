"""
Option declarations, mutually exclusive groups and the option catalog.

Scope
- Option: an immutable declaration of one command-line switch (names, arity,
  value separator, required/optional-argument flags, value kind, help text).
  Nothing in a parse ever writes to it; accumulated values live in the
  per-parse match records of switchboard.commandline.
- Builder: a value-type fluent builder returned by Option.builder(). Every
  step returns a new builder, so chains never share state.
- OptionGroup: a set of options of which at most one may be given.
- Options: the catalog, indexed by key and by long name, with the ordered
  list of required items (option keys and required groups).

Naming
- key: the short name when there is one, otherwise the long name.
- every lookup accepts names with or without their leading "-" / "--".

Examples
    >>> options = (
    ...     Options()
    ...     .add_option("a", "all", False, "do not ignore entries")
    ...     .add_option(Option.builder("b").long_opt("block-size").has_arg().build())
    ... )
    >>> options.get_matching_options("--bl")
    ['block-size']
"""
import copy
import functools
import operator

from .faults import AlreadySelectedException
from .utils import Unset, coalesce, mirror, strip_leading_hyphens
from .validator import validate_option
from .values import ValueKind

UNINITIALIZED = -1
UNLIMITED_VALUES = -2


class Option:
    """
    Declaration of one command-line option.

    Positional forms
    - Option(opt)
    - Option(opt, description)
    - Option(opt, has_arg, description)
    - Option(opt, long_opt, has_arg, description)

    Keywords
    - opt / long_opt: short and long names; at least one is required. The
      short name is checked by validate_option().
    - has_arg: shorthand for args=1.
    - args: UNINITIALIZED (no value), a positive count, or UNLIMITED_VALUES.
    - optional_arg: the value may be omitted. An option without arity gets one.
    - value_separator: single character splitting one token into values.
    - required, description, arg_name, kind (ValueKind).

    Properties
    - The names listed in __introspectable__ are exposed read-only.
    """

    __introspectable__ = (
        "opt",
        "long_opt",
        "description",
        "arg_name",
        "args",
        "optional_arg",
        "required",
        "value_separator",
        "kind",
    )

    opt = mirror("opt")
    long_opt = mirror("long_opt")
    description = mirror("description")
    arg_name = mirror("arg_name")
    args = mirror("args")
    optional_arg = mirror("optional_arg")
    required = mirror("required")
    value_separator = mirror("value_separator")
    kind = mirror("kind")

    def __init__(self, *parameters, **metadata):
        match len(parameters):
            case 0:
                positional = {}
            case 1:
                positional = dict(zip(("opt",), parameters))
            case 2:
                positional = dict(zip(("opt", "description"), parameters))
            case 3:
                positional = dict(zip(("opt", "has_arg", "description"), parameters))
            case 4:
                positional = dict(zip(("opt", "long_opt", "has_arg", "description"), parameters))
            case _:
                raise TypeError("Option() takes 0 to 4 positional arguments but %d were given" % len(parameters))
        if overlap := positional.keys() & metadata.keys():
            raise TypeError("Option() got multiple values for %s" % ", ".join(map(repr, sorted(overlap))))
        self._setup(**positional, **metadata)

    def _setup(
            self,
            opt=None,
            long_opt=None,
            has_arg=False,
            description=None,
            *,
            arg_name=None,
            args=Unset,
            optional_arg=False,
            required=False,
            value_separator=None,
            kind=ValueKind.STRING,
    ):
        validate_option(opt)
        if opt is None and long_opt is None:
            raise ValueError("Either opt or long_opt must be specified")
        if long_opt is not None and (not isinstance(long_opt, str) or not long_opt):
            raise ValueError("long_opt must be a non-empty string")
        args = coalesce(args, 1 if has_arg else UNINITIALIZED)
        if not isinstance(args, int) or isinstance(args, bool) or args < UNLIMITED_VALUES:
            raise ValueError("args must be a count, UNINITIALIZED or UNLIMITED_VALUES")
        if optional_arg and args == UNINITIALIZED:
            args = 1
        if value_separator is not None and (not isinstance(value_separator, str) or len(value_separator) != 1):
            raise ValueError("value_separator must be a single character")
        if not isinstance(kind, ValueKind):
            raise TypeError("kind must be a value kind")

        self._opt = opt
        self._long_opt = long_opt
        self._description = description
        self._arg_name = arg_name
        self._args = args
        self._optional_arg = bool(optional_arg)
        self._required = bool(required)
        self._value_separator = value_separator
        self._kind = kind

    @staticmethod
    def builder(opt=None, /):
        """
        start a fresh builder, optionally with the short name.
        """
        return Builder(opt=opt)

    @property
    def key(self):
        return self._opt if self._opt is not None else self._long_opt

    def has_arg(self):
        return self._args > 0 or self._args == UNLIMITED_VALUES

    def has_args(self):
        return self._args > 1 or self._args == UNLIMITED_VALUES

    def has_long_opt(self):
        return self._long_opt is not None

    def has_arg_name(self):
        return bool(self._arg_name)

    def has_value_separator(self):
        return self._value_separator is not None

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._opt, self._long_opt) == (other._opt, other._long_opt)

    def __hash__(self):
        return hash((self._opt, self._long_opt))

    def __replace__(self, *unused, **changes):
        assert not unused, "positional arguments are not allowed"
        return type(self)(**{name: getattr(self, "_" + name) for name in self.__introspectable__} | changes)

    def __repr__(self):
        return f"option({", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class Builder:
    """
    fluent, immutable builder for Option.

    each step returns a new builder; build() validates and returns the Option.

        Option.builder("o").long_opt("output").has_arg().arg_name("file").build()
    """

    def __init__(self, **metadata):
        validate_option(metadata.get("opt"))
        self._metadata = metadata

    def _with(self, **changes):
        return type(self)(**self._metadata | changes)

    def long_opt(self, name, /):
        return self._with(long_opt=name)

    def desc(self, text, /):
        return self._with(description=text)

    def arg_name(self, name, /):
        return self._with(arg_name=name)

    def required(self, flag=True, /):
        return self._with(required=flag)

    def optional_arg(self, flag=True, /):
        return self._with(optional_arg=flag)

    def has_arg(self, flag=True, /):
        return self._with(args=1 if flag else UNINITIALIZED)

    def has_args(self):
        return self._with(args=UNLIMITED_VALUES)

    def number_of_args(self, count, /):
        return self._with(args=count)

    def value_separator(self, separator="=", /):
        return self._with(value_separator=separator)

    def kind(self, kind, /):
        return self._with(kind=kind)

    def build(self):
        if self._metadata.get("opt") is None and self._metadata.get("long_opt") is None:
            raise ValueError("Either opt or long_opt must be specified")
        return Option(**self._metadata)

    def __repr__(self):
        return "builder(%s)" % ", ".join("%s=%r" % item for item in self._metadata.items())


class OptionGroup:
    """
    A set of mutually exclusive options.

    At most one member may be selected per parse; a required group needs
    exactly one. The catalog's groups are templates: the parser selects
    members on its own copies (copy.replace(group, selected=None)), so a group
    declared once can serve any number of parses.
    """

    def __init__(self, *options, required=False):
        self._options = {}
        self._selected = None
        self._required = bool(required)
        for option in options:
            self.add_option(option)

    selected = mirror("selected")
    required = mirror("required")

    @property
    def names(self):
        return list(self._options)

    @property
    def options(self):
        return list(self._options.values())

    def add_option(self, option, /):
        if not isinstance(option, Option):
            raise TypeError("add_option() argument must be an option")
        self._options[option.key] = option
        return self

    def set_required(self, flag, /):
        self._required = bool(flag)

    def set_selected(self, option, /):
        """
        record `option` as the selected member.

        None clears the selection and re-selecting the same member is a no-op.
        raises AlreadySelectedException when another member holds the selection.
        """
        if option is None:
            self._selected = None
            return
        if self._selected is None or self._selected == option.key:
            self._selected = option.key
        else:
            raise AlreadySelectedException(group=self, option=option)

    def __replace__(self, *unused, **changes):
        assert not unused, "positional arguments are not allowed"
        group = type(self)(*self._options.values(), required=changes.pop("required", self._required))
        group._selected = changes.pop("selected", self._selected)
        if changes:
            raise TypeError("unexpected group fields: %s" % ", ".join(map(repr, changes)))
        return group

    def __str__(self):
        parts = []
        for option in self._options.values():
            part = "-" + option.opt if option.opt is not None else "--" + option.long_opt
            if option.description is not None:
                part += " " + option.description
            parts.append(part)
        return "[" + ", ".join(parts) + "]"

    def __repr__(self):
        return "option-group(names=%r, required=%r, selected=%r)" % (self.names, self._required, self._selected)


class Options:
    """
    The option catalog.

    - add_option() inserts or replaces declarations by key ("last one wins").
    - add_option_group() registers every member (with its own required flag
      cleared; the group carries the requirement) and records membership.
    - required_options lists the pending items of a fresh parse: option keys
      (str) and required OptionGroup objects, in insertion order.

    Parsing never mutates a catalog.
    """

    def __init__(self):
        self._short = {}
        self._long = {}
        self._required = []
        self._groups = {}

    def add_option_group(self, group, /):
        if not isinstance(group, OptionGroup):
            raise TypeError("add_option_group() argument must be an option group")
        if group.required:
            self._required.append(group)
        for option in group.options:
            option = copy.replace(option, required=False)
            self.add_option(option)
            self._groups[option.key] = group
        return self

    def add_option(self, *parameters, **metadata):
        """
        add an Option instance, or build one from Option() arguments.

            options.add_option(option)
            options.add_option("v", "verbose", False, "print more")
        """
        if len(parameters) == 1 and not metadata and isinstance(parameters[0], Option):
            option, = parameters
        else:
            option = Option(*parameters, **metadata)
        key = option.key
        if option.has_long_opt():
            self._long[option.long_opt] = option
        if option.required:
            if key in self._required:
                self._required.remove(key)
            self._required.append(key)
        self._short[key] = option
        return self

    def get_options(self):
        return self.help_options()

    def help_options(self):
        """
        the declarations in catalog order, as listed by HelpFormatter.
        """
        return list(self._short.values())

    @property
    def required_options(self):
        return tuple(self._required)

    def get_option(self, name, /):
        """
        the declaration for a short or long name, or None.
        """
        name = strip_leading_hyphens(name)
        if name in self._short:
            return self._short[name]
        return self._long.get(name)

    def get_matching_options(self, prefix, /):
        """
        long names starting with `prefix`; an exact long name wins outright.
        """
        prefix = strip_leading_hyphens(prefix)
        if prefix in self._long:
            return [prefix]
        return [name for name in self._long if name.startswith(prefix)]

    def has_option(self, name, /):
        name = strip_leading_hyphens(name)
        return name in self._short or name in self._long

    def has_long_option(self, name, /):
        return strip_leading_hyphens(name) in self._long

    def has_short_option(self, name, /):
        return strip_leading_hyphens(name) in self._short

    def get_option_group(self, option, /):
        return self._groups.get(option.key)

    def get_option_groups(self):
        groups = []
        for group in self._groups.values():
            if not any(group is known for known in groups):
                groups.append(group)
        return groups

    def __contains__(self, name):
        return isinstance(name, str) and self.has_option(name)

    def __iter__(self):
        return iter(self.get_options())

    def __len__(self):
        return len(self._short)

    def __repr__(self):
        return "options(short=%r, long=%r)" % (list(self._short), list(self._long))


__all__ = (
    "UNINITIALIZED",
    "UNLIMITED_VALUES",
    "Option",
    "Builder",
    "OptionGroup",
    "Options",
)
