import sys

from rich.pretty import pprint

from switchboard import *

__prog__ = "main.py"

options = (
    Options()
    .add_option("h", "help", False, "print this message")
    .add_option("d", "debug", False, "turn on debug output")
    .add_option(Option.builder("o").long_opt("output").has_arg().arg_name("file").desc("write here").build())
    .add_option(Option.builder("D").value_separator().number_of_args(2).arg_name("key=value").desc("define a property").build())
    .add_option_group(OptionGroup(
        Option(long_opt="fast", description="favour speed"),
        Option(long_opt="small", description="favour size"),
    ))
)


if __name__ == '__main__':
    try:
        cmd = parse(options, sys.argv[1:])
    except ParseException as exception:
        trigger(exception, shell=True)
    if cmd.has_option("help"):
        HelpFormatter(colorful=True).print_help(__prog__, options, auto_usage=True)
    else:
        pprint(cmd)
        pprint(cmd.get_option_properties("D"))
