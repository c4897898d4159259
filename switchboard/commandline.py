"""
Parse results.

Scope
- ParsedOption: one occurrence of a declared option in a parse, holding the
  values accumulated for it. Declarations stay untouched; every match owns
  its own value list.
- CommandLine: the ordered matches plus the leftover positional arguments,
  with lookups by short or long name.

Lookups
- names are accepted with or without leading hyphens and are case-sensitive.
- an option given several times yields several matches; value queries
  concatenate them in command-line order.
"""
import functools
import operator

from .faults import ConversionWarning, ParseException, trigger
from .options import UNLIMITED_VALUES
from .utils import mirror, strip_leading_hyphens
from .values import create_value


class ParsedOption:
    """
    A matched option and its accumulated values.

    The value count never exceeds a finite arity; add_value() splits on the
    declared separator and keeps the tail whole once one slot remains.
    """

    def __init__(self, option, /):
        self._option = option
        self._values = []

    option = mirror("option")
    values = mirror("values")

    @property
    def key(self):
        return self._option.key

    @property
    def opt(self):
        return self._option.opt

    @property
    def long_opt(self):
        return self._option.long_opt

    @property
    def value(self):
        return self._values[0] if self._values else None

    def matches(self, name, /):
        name = strip_leading_hyphens(name)
        return name == self._option.opt or name == self._option.long_opt

    def accepts_arg(self):
        option = self._option
        if not option.has_arg():
            return False
        return option.args == UNLIMITED_VALUES or len(self._values) < option.args

    def requires_arg(self):
        option = self._option
        if option.optional_arg:
            return False
        if option.args == UNLIMITED_VALUES:
            return not self._values
        return self.accepts_arg()

    def add_value(self, value, /):
        """
        feed one command-line value, splitting it on the value separator.
        """
        option = self._option
        if option.has_value_separator():
            separator = option.value_separator
            index = value.find(separator)
            while index != -1:
                if len(self._values) == option.args - 1:
                    break
                self._add(value[:index])
                value = value[index + 1:]
                index = value.find(separator)
        self._add(value)

    def _add(self, value):
        if not self.accepts_arg():
            raise RuntimeError("Cannot add value, list full.")
        self._values.append(value)

    def __repr__(self):
        return f"parsed-option({", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))})"

    def __rich_repr__(self):
        yield "key", self.key
        yield "values", self.values


class CommandLine:
    """
    The outcome of one parse.

    Built by the parser through _add_option() and _add_arg(); read-only for
    everybody else.
    """

    def __init__(self):
        self._args = []
        self._options = []
        self._groups = {}

    def _add_option(self, match, /):
        self._options.append(match)

    def _add_arg(self, arg, /):
        self._args.append(arg)

    def _resolve(self, name):
        for match in self._options:
            if match.matches(name):
                return match
        return None

    def has_option(self, name, /):
        return self._resolve(name) is not None

    def get_option_values(self, name, /):
        """
        every value given to the option, in order, or None when there is none.
        """
        values = [value for match in self._options if match.matches(name) for value in match.values]
        return values or None

    def get_option_value(self, name, default=None, /):
        values = self.get_option_values(name)
        return values[0] if values is not None else default

    def get_option_properties(self, name, /):
        """
        read the option's values as key/value pairs.

        `-Dkey=value` gives {"key": "value"}; a key without value maps to "true".
        """
        properties = {}
        for match in self._options:
            if not match.matches(name):
                continue
            values = match.values
            for index in range(0, len(values), 2):
                if index + 1 < len(values):
                    properties[values[index]] = values[index + 1]
                else:
                    properties[values[index]] = "true"
        return properties

    def get_parsed_option_value(self, name, /):
        """
        the first value converted through the option's value kind, or None.

        raises InvalidValueException / UnsupportedValueKind on failure.
        """
        match = self._resolve(name)
        if match is None or (value := self.get_option_value(name)) is None:
            return None
        return create_value(value, match.option.kind)

    def get_option_object(self, name, /):
        """
        lenient form of get_parsed_option_value(): a failed conversion emits a
        ConversionWarning and yields None.
        """
        try:
            return self.get_parsed_option_value(name)
        except ParseException as exception:
            trigger(ConversionWarning(
                "Exception found converting %s to desired type: %s" % (name, exception.message),
                option=name,
            ))
            return None

    def get_selected(self, group, /):
        """
        key of the member selected from `group` in this parse, or None.
        """
        working = self._groups.get(group)
        return working.selected if working is not None else None

    def get_args(self):
        return list(self._args)

    def get_arg_list(self):
        return self._args

    def get_options(self):
        return tuple(self._options)

    def __contains__(self, name):
        return isinstance(name, str) and self.has_option(name)

    def __iter__(self):
        return iter(tuple(self._options))

    def __repr__(self):
        return "command-line(options=%r, args=%r)" % (list(self._options), self._args)

    def __rich_repr__(self):
        yield "options", list(self._options)
        yield "args", list(self._args)


__all__ = (
    "ParsedOption",
    "CommandLine",
)
