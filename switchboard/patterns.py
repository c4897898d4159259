"""
Build an option catalog from a one-line pattern.

Every character names a short option. It may be followed by a value code,
which gives the option one argument of that kind, and by "!", which makes the
pending option required:

    a     -a flag
    b@    -b <class name>, instantiated with no arguments
    c>    -c <file>
    d+    -d <class name>
    e%    -e <number>
    f/    -f <url>
    g:    -g <string>
    h<    -h <existing file>
    i#    -i <date>        (no conversion)
    j*    -j <files>       (no conversion)

    >>> options = parse_pattern("vp:!f/")
    >>> options.get_option("f").kind
    <ValueKind.URL: '/'>
"""
from .options import Option, Options
from .values import ValueKind


def is_value_code(char, /):
    return char == "!" or char in ValueKind.codes()


def get_value_kind(char, /):
    """
    the ValueKind a pattern code stands for, or None.
    """
    if char in ValueKind.codes():
        return ValueKind(char)
    return None


def parse_pattern(pattern, /):
    options = Options()
    opt = None
    required = False
    kind = None

    def flush():
        options.add_option(
            Option.builder(opt)
            .has_arg(kind is not None)
            .required(required)
            .kind(kind if kind is not None else ValueKind.FLAG)
            .build()
        )

    for char in pattern:
        if not is_value_code(char):
            if opt is not None:
                flush()
                required = False
                kind = None
            opt = char
        elif char == "!":
            required = True
        else:
            kind = get_value_kind(char)

    if opt is not None:
        flush()

    return options


__all__ = (
    "parse_pattern",
    "is_value_code",
    "get_value_kind",
)
