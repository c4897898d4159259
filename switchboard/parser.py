"""
The default command-line parser.

Scope
- DefaultParser.parse() / parse(): walk an argument vector against an Options
  catalog and build a CommandLine.

Accepted forms
- long options: --L, --L=V, --L V, -L, -L=V, -L V, and unique prefixes of L.
- short options: -S, -SV, -S V, -S=V, bursts -S1S2S3 and -S1S2V.
- long-prefix values: -Xmx512m when "Xmx" is a long option taking a value.
- property style: -Dkey=value, -Dflag for options with two or more values.
- "--" ends option processing; "-" alone is positional.
- a token parsing as a number is a value, even when it starts with "-".

Parse state
- every call works on its own _ParseState: the match still accepting values,
  the skip latch, the pending required items and private copies of the
  catalog's groups. Catalogs and parsers can therefore be reused freely.

Finalization
- pending mandatory value -> MissingArgumentException
- property overrides are applied to options the command line did not give
- pending required options/groups -> MissingOptionException

Any fault aborts the parse; no partial CommandLine is returned.
"""
import copy
import re

from .commandline import CommandLine, ParsedOption
from .faults import (
    AmbiguousOptionException,
    MissingArgumentException,
    MissingOptionException,
    UnrecognizedOptionException,
)
from .options import UNLIMITED_VALUES
from .utils import strip_leading_hyphens, strip_quotes

_TRUTHY = frozenset(("yes", "true", "1"))
_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


class _ParseState:
    def __init__(self, options, stop_at_non_option):
        self.options = options
        self.stop_at_non_option = stop_at_non_option
        self.skip_parsing = False
        self.current = None
        self.current_token = None
        self.expected = list(options.required_options)
        self.cmd = CommandLine()
        self.groups = {group: copy.replace(group, selected=None) for group in options.get_option_groups()}
        self.cmd._groups = self.groups

    def run(self, arguments, properties):
        for token in arguments:
            self.handle_token(token)
        self.check_required_args()
        if properties is not None:
            self.handle_properties(properties)
        self.check_required_options()
        return self.cmd

    # classification

    def handle_token(self, token):
        self.current_token = token
        if self.skip_parsing:
            self.cmd._add_arg(token)
        elif token == "--":
            self.skip_parsing = True
        elif self.current is not None and self.current.accepts_arg() and self.is_argument(token):
            self.current.add_value(strip_quotes(token))
        elif token.startswith("--"):
            self.handle_long_option(token)
        elif token.startswith("-") and token != "-":
            self.handle_short_and_long_option(token)
        else:
            self.handle_unknown_token(token)

        if self.current is not None and not self.current.accepts_arg():
            self.current = None

    def is_argument(self, token):
        return not self.is_option(token) or self.is_negative_number(token)

    @staticmethod
    def is_negative_number(token):
        return _NUMBER.fullmatch(token) is not None

    def is_option(self, token):
        return self.is_long_option(token) or self.is_short_option(token)

    def is_short_option(self, token):
        return token.startswith("-") and len(token) >= 2 and self.options.has_short_option(token[1:2])

    def is_long_option(self, token):
        if not token.startswith("-") or len(token) == 1:
            return False
        name = token.partition("=")[0]
        if self.options.get_matching_options(name):
            return True
        return self.get_long_prefix(token) is not None and not token.startswith("--")

    def is_property_option(self, token):
        option = self.options.get_option(token[:1])
        return option is not None and (option.args >= 2 or option.args == UNLIMITED_VALUES)

    def get_long_prefix(self, token):
        """
        longest declared long name that is a strict prefix of the stripped
        token, scanning lengths len - 2 down to 2.
        """
        text = strip_leading_hyphens(token)
        for index in range(len(text) - 2, 1, -1):
            prefix = text[:index]
            if self.options.has_long_option(prefix):
                return prefix
        return None

    # long options

    def handle_long_option(self, token):
        if "=" not in token:
            self.handle_long_option_without_equal(token)
        else:
            self.handle_long_option_with_equal(token)

    def handle_long_option_without_equal(self, token):
        matching = self.options.get_matching_options(token)
        if not matching:
            self.handle_unknown_token(self.current_token)
        elif len(matching) > 1:
            raise AmbiguousOptionException(option=token, matching=matching)
        else:
            self.handle_option(self.options.get_option(matching[0]))

    def handle_long_option_with_equal(self, token):
        name, _, value = token.partition("=")
        matching = self.options.get_matching_options(name)
        if not matching:
            self.handle_unknown_token(self.current_token)
        elif len(matching) > 1:
            raise AmbiguousOptionException(option=name, matching=matching)
        else:
            option = self.options.get_option(matching[0])
            if option.has_arg():
                self.handle_option(option)
                self.current.add_value(value)
                self.current = None
            else:
                self.handle_unknown_token(self.current_token)

    # short options

    def handle_short_and_long_option(self, token):
        text = strip_leading_hyphens(token)
        options = self.options

        if len(text) == 1:
            if options.has_short_option(text):
                self.handle_option(options.get_option(text))
            else:
                self.handle_unknown_token(token)
        elif "=" not in token:
            if options.has_short_option(text):
                self.handle_option(options.get_option(text))
            elif options.get_matching_options(text):
                self.handle_long_option_without_equal(token)
            elif (prefix := self.get_long_prefix(text)) is not None and options.get_option(prefix).has_arg():
                self.handle_option(options.get_option(prefix))
                self.current.add_value(text[len(prefix):])
                self.current = None
            elif self.is_property_option(text):
                self.handle_option(options.get_option(text[0]))
                self.current.add_value(text[1:])
                self.current = None
            else:
                self.handle_concatenated_options(token)
        else:
            name, _, value = text.partition("=")
            if len(name) == 1:
                option = options.get_option(name)
                if option is not None and option.has_arg():
                    self.handle_option(option)
                    self.current.add_value(value)
                    self.current = None
                else:
                    self.handle_unknown_token(token)
            elif self.is_property_option(name):
                self.handle_option(options.get_option(name[0]))
                self.current.add_value(name[1:])
                self.current.add_value(value)
                self.current = None
            else:
                self.handle_long_option_with_equal(token)

    def handle_concatenated_options(self, token):
        for index in range(1, len(token)):
            char = token[index]
            if self.options.has_option(char):
                self.handle_option(self.options.get_option(char))
                if self.current is not None and len(token) != index + 1:
                    self.current.add_value(token[index + 1:])
                    break
            else:
                self.handle_unknown_token(token[index:] if self.stop_at_non_option and index > 1 else token)
                break

    # everything else

    def handle_unknown_token(self, token):
        if token.startswith("-") and len(token) > 1 and not self.stop_at_non_option:
            raise UnrecognizedOptionException(option=token)
        self.cmd._add_arg(token)
        if self.stop_at_non_option:
            self.skip_parsing = True

    def handle_option(self, option):
        self.check_required_args()
        match = ParsedOption(option)
        self.update_required_options(option)
        self.cmd._add_option(match)
        self.current = match if option.has_arg() else None

    def update_required_options(self, option):
        if option.required:
            self.discard(option.key)
        if (group := self.options.get_option_group(option)) is not None:
            if group.required:
                self.discard(group)
            self.groups[group].set_selected(option)

    def discard(self, item):
        for index, pending in enumerate(self.expected):
            if pending is item or (isinstance(pending, str) and pending == item):
                del self.expected[index]
                return

    # finalization

    def check_required_args(self):
        if self.current is not None and self.current.requires_arg():
            raise MissingArgumentException(option=self.current.option)

    def handle_properties(self, properties):
        for name, value in properties.items():
            option = self.options.get_option(name)
            if option is None:
                raise UnrecognizedOptionException("Default option wasn't defined", option=name)
            group = self.options.get_option_group(option)
            selected = group is not None and self.groups[group].selected is not None
            if self.cmd.has_option(name) or selected:
                continue
            value = str(value)
            if option.has_arg():
                self.handle_option(option)
                if not self.current.values:
                    self.current.add_value(value)
            elif value.lower() in _TRUTHY:
                self.handle_option(option)
            self.current = None

    def check_required_options(self):
        if self.expected:
            raise MissingOptionException(missing=self.expected)


class DefaultParser:
    """
    Parser for every option form described in this module.

    Instances hold no parse state; one parser can serve any number of
    sequential or concurrent parses.

        cmd = DefaultParser().parse(options, ["-v", "--output", "out.txt", "src"])
    """

    def parse(self, options, arguments, properties=None, stop_at_non_option=False):
        """
        parse `arguments` against `options`.

        parameters
        - options: the Options catalog.
        - arguments: the argument strings, without the program name (None for none).
        - properties: optional name -> value mapping applied to options that
          the arguments do not mention. A bool in this position is taken as
          stop_at_non_option.
        - stop_at_non_option: the first token that is not a declared option
          ends option processing; it and every later token become positional.

        raises ParseException subclasses on malformed input.
        """
        if isinstance(arguments, str):
            raise TypeError("parse() arguments must be a sequence of strings, not a string")
        if isinstance(properties, bool):
            properties, stop_at_non_option = None, properties
        return _ParseState(options, stop_at_non_option).run(list(arguments or ()), properties)


def parse(options, arguments, properties=None, stop_at_non_option=False):
    """
    shortcut for DefaultParser().parse(...).
    """
    return DefaultParser().parse(options, arguments, properties, stop_at_non_option)


__all__ = (
    "DefaultParser",
    "parse",
)
