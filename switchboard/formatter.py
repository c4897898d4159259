"""
Usage and help text rendering.

Scope
- HelpFormatter renders an Options catalog as a usage line and a two-column
  option listing, wrapping everything to a fixed width:

    usage: ls [-a] [-b <arg>] [-c | -d]
    header text
     -a,--all           do not ignore entries
     -b,--block <arg>   scale sizes by SIZE
        --color         colorize the output
    footer text

- render_*() methods return plain strings; print_*() methods write them
  through a rich Console (stdout, or `file` when given). With colorful=True the
  usage prefix and the option names are highlighted; consoles that are not
  terminals receive plain text either way.

Settings (constructor keywords, also plain attributes)
- width, left_padding, desc_padding, syntax_prefix, newline, opt_prefix,
  long_opt_prefix, long_opt_separator, arg_name, sort_key, colorful.
- sort_key orders the options (case-insensitive key by default); None keeps
  declaration order.
"""
import re

from rich.console import Console
from rich.text import Text

DEFAULT_WIDTH = 74
DEFAULT_LEFT_PAD = 1
DEFAULT_DESC_PAD = 3
DEFAULT_SYNTAX_PREFIX = "usage: "
DEFAULT_OPT_PREFIX = "-"
DEFAULT_LONG_OPT_PREFIX = "--"
DEFAULT_LONG_OPT_SEPARATOR = " "
DEFAULT_ARG_NAME = "arg"


def _key_order(option):
    return option.key.lower()


class HelpFormatter:
    def __init__(
            self,
            *,
            width=DEFAULT_WIDTH,
            left_padding=DEFAULT_LEFT_PAD,
            desc_padding=DEFAULT_DESC_PAD,
            syntax_prefix=DEFAULT_SYNTAX_PREFIX,
            newline="\n",
            opt_prefix=DEFAULT_OPT_PREFIX,
            long_opt_prefix=DEFAULT_LONG_OPT_PREFIX,
            long_opt_separator=DEFAULT_LONG_OPT_SEPARATOR,
            arg_name=DEFAULT_ARG_NAME,
            sort_key=_key_order,
            colorful=False,
    ):
        self.width = width
        self.left_padding = left_padding
        self.desc_padding = desc_padding
        self.syntax_prefix = syntax_prefix
        self.newline = newline
        self.opt_prefix = opt_prefix
        self.long_opt_prefix = long_opt_prefix
        self.long_opt_separator = long_opt_separator
        self.arg_name = arg_name
        self.sort_key = sort_key
        self.colorful = colorful

    def _sorted(self, options):
        options = list(options)
        if self.sort_key is not None:
            options.sort(key=self.sort_key)
        return options

    # rendering

    def render_help(
            self,
            cmd_line_syntax,
            options,
            header=None,
            footer=None,
            *,
            auto_usage=False,
            width=None,
            left_pad=None,
            desc_pad=None,
    ):
        """
        usage, header, options and footer, each ending with a newline.

        raises ValueError when cmd_line_syntax is empty.
        """
        if not cmd_line_syntax:
            raise ValueError("cmd_line_syntax not provided")
        width = self.width if width is None else width
        left_pad = self.left_padding if left_pad is None else left_pad
        desc_pad = self.desc_padding if desc_pad is None else desc_pad

        blocks = [self.render_usage(cmd_line_syntax, options if auto_usage else None, width)]
        if header is not None and header.strip():
            blocks.append(self.render_wrapped_text_block(width, 0, header))
        blocks.append(self.render_options(options, width, left_pad, desc_pad))
        if footer is not None and footer.strip():
            blocks.append(self.render_wrapped_text_block(width, 0, footer))
        return "".join(block + self.newline for block in blocks)

    def render_usage(self, app, options=None, width=None):
        """
        the usage line: the syntax as given, or generated from `options`.

        generated usage brackets optional options ([-a], [-b <arg>]) and lists
        group members separated by " | "; required ones stand bare.
        """
        width = self.width if width is None else width
        if options is None:
            tab_stop = len(self.syntax_prefix) + app.find(" ") + 1
            return self.render_wrapped_text_block(width, tab_stop, self.syntax_prefix + app)

        clauses = []
        processed = []
        for option in self._sorted(options.help_options()):
            group = options.get_option_group(option)
            if group is None:
                clauses.append(self._usage_option(option, option.required))
            elif not any(group is known for known in processed):
                processed.append(group)
                clauses.append(self._usage_group(group))
        text = self.syntax_prefix + app + " " + " ".join(clauses)
        return self.render_wrapped_text_block(width, text.find(" ") + 1, text)

    def _usage_group(self, group):
        clause = " | ".join(self._usage_option(option, True) for option in self._sorted(group.options))
        return clause if group.required else "[" + clause + "]"

    def _usage_option(self, option, required):
        if option.opt is not None:
            clause = "-" + option.opt
        else:
            clause = "--" + option.long_opt
        if option.has_arg() and (option.arg_name is None or option.arg_name != ""):
            clause += self.long_opt_separator if option.opt is None else " "
            clause += "<" + (option.arg_name if option.arg_name is not None else self.arg_name) + ">"
        return clause if required else "[" + clause + "]"

    def render_options(self, options, width=None, left_pad=None, desc_pad=None):
        """
        the option listing: names padded to a common column, then the
        description wrapped under that column.
        """
        width = self.width if width is None else width
        left_pad = self.left_padding if left_pad is None else left_pad
        desc_pad = self.desc_padding if desc_pad is None else desc_pad
        lpad = self.create_padding(left_pad)
        dpad = self.create_padding(desc_pad)

        listed = self._sorted(options.help_options())
        prefixes = []
        for option in listed:
            if option.opt is None:
                prefix = lpad + "   " + self.long_opt_prefix + option.long_opt
            else:
                prefix = lpad + self.opt_prefix + option.opt
                if option.has_long_opt():
                    prefix += "," + self.long_opt_prefix + option.long_opt
            if option.has_arg():
                if option.arg_name == "":
                    prefix += " "
                else:
                    prefix += self.long_opt_separator if option.has_long_opt() else " "
                    prefix += "<" + (option.arg_name if option.arg_name is not None else self.arg_name) + ">"
            prefixes.append(prefix)
        longest = max(map(len, prefixes), default=0)

        lines = []
        for option, prefix in zip(listed, prefixes):
            line = prefix.ljust(longest) + dpad
            if option.description is not None:
                line += option.description
            lines.append(self.render_wrapped_text(width, longest + desc_pad, line))
        return self.newline.join(lines)

    def render_wrapped_text_block(self, width, next_line_tab_stop, text):
        """
        wrap every line of a multi-line text on its own.
        """
        return self.newline.join(
            self.render_wrapped_text(width, next_line_tab_stop, line) for line in text.splitlines()
        )

    def render_wrapped_text(self, width, next_line_tab_stop, text):
        """
        wrap one line at `width`, indenting continuation lines by
        `next_line_tab_stop` spaces (1 when the stop is not below the width).
        """
        pos = self.find_wrap_pos(text, width, 0)
        if pos == -1:
            return self.rtrim(text)
        parts = [self.rtrim(text[:pos]) + self.newline]

        if next_line_tab_stop >= width:
            next_line_tab_stop = 1
        padding = self.create_padding(next_line_tab_stop)

        while True:
            text = padding + text[pos:].strip()
            pos = self.find_wrap_pos(text, width, 0)
            if pos == -1:
                parts.append(text)
                return "".join(parts)
            if len(text) > width and pos == next_line_tab_stop - 1:
                pos = width
            parts.append(self.rtrim(text[:pos]) + self.newline)

    @staticmethod
    def find_wrap_pos(text, width, start_pos):
        """
        position to break `text` at so the line fits `width`, or -1 when the
        rest fits.

        an explicit newline or tab within the width wins; otherwise the last
        blank before start_pos + width, otherwise a hard cut at the width.
        """
        pos = text.find("\n", start_pos)
        if pos != -1 and pos <= width:
            return pos + 1
        pos = text.find("\t", start_pos)
        if pos != -1 and pos <= width:
            return pos + 1
        if start_pos + width >= len(text):
            return -1

        pos = start_pos + width
        while pos >= start_pos and text[pos] not in " \n\r":
            pos -= 1
        if pos > start_pos:
            return pos

        pos = start_pos + width
        return -1 if pos == len(text) else pos

    @staticmethod
    def create_padding(length):
        return " " * length

    @staticmethod
    def rtrim(text):
        if not text:
            return text
        return text.rstrip()

    # printing

    def _console(self, file):
        return Console(file=file, highlight=False, markup=False, emoji=False)

    def _emit(self, text, file):
        rendered = Text(text, end="")
        if self.colorful:
            rendered.highlight_regex(r"^" + re.escape(self.syntax_prefix), "bold")
            rendered.highlight_regex(r"(?<![\w-])--?[\w?@$][\w$-]*", "cyan")
            rendered.highlight_regex(r"<[^>\s]+>", "italic")
        self._console(file).print(rendered, end="", soft_wrap=True)

    def print_help(self, cmd_line_syntax, options, header=None, footer=None, *, auto_usage=False, file=None, **pads):
        """
        print render_help(...) to stdout or `file`.
        """
        self._emit(self.render_help(cmd_line_syntax, options, header, footer, auto_usage=auto_usage, **pads), file)

    def print_usage(self, app, options=None, *, width=None, file=None):
        self._emit(self.render_usage(app, options, width) + self.newline, file)

    def print_options(self, options, *, width=None, left_pad=None, desc_pad=None, file=None):
        self._emit(self.render_options(options, width, left_pad, desc_pad) + self.newline, file)

    def print_wrapped(self, text, *, width=None, next_line_tab_stop=0, file=None):
        width = self.width if width is None else width
        self._emit(self.render_wrapped_text_block(width, next_line_tab_stop, text) + self.newline, file)


__all__ = (
    "HelpFormatter",
    "DEFAULT_WIDTH",
    "DEFAULT_LEFT_PAD",
    "DEFAULT_DESC_PAD",
    "DEFAULT_SYNTAX_PREFIX",
    "DEFAULT_OPT_PREFIX",
    "DEFAULT_LONG_OPT_PREFIX",
    "DEFAULT_LONG_OPT_SEPARATOR",
    "DEFAULT_ARG_NAME",
)
