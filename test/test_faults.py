"""
Fault behavioral tests.

Scope
- Message wording and structured details of every parse error.
- copy.replace() and trigger(): raise, shell rendering and exit, warnings.
- Rich rendering: header, message and hint, fancy panels, host hooks.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes to a recording Console over io.StringIO.
"""
import copy
import io
import sys
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from switchboard import (
    AlreadySelectedException,
    AmbiguousOptionException,
    ConversionWarning,
    FaultCode,
    InvalidValueException,
    MissingArgumentException,
    MissingOptionException,
    Option,
    OptionGroup,
    ParseException,
    UnrecognizedOptionException,
    UnsupportedValueKind,
    ValueKind,
    faults,
    getdoc,
    trigger,
)


def _render(renderable):
    stream = io.StringIO()
    Console(file=stream, width=120, color_system=None).print(renderable)
    return stream.getvalue()


class TestMessages(TestCase):

    def testParseExceptionNeedsMessage(self):
        with self.assertRaises(TypeError):
            ParseException()
        self.assertEqual(str(ParseException("plain")), "plain")

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            ParseException(42)

    def testUnrecognized(self):
        exception = UnrecognizedOptionException(option="-x")
        self.assertEqual(exception.message, "Unrecognized option: -x")
        self.assertEqual(exception.option, "-x")
        self.assertIs(exception.code, FaultCode.UNRECOGNIZED_OPTION)

    def testUnrecognizedCustomMessage(self):
        exception = UnrecognizedOptionException("Default option wasn't defined", option="x")
        self.assertEqual(str(exception), "Default option wasn't defined")
        self.assertEqual(exception.option, "x")

    def testAmbiguous(self):
        exception = AmbiguousOptionException(option="--ver", matching=["version", "verbose"])
        self.assertEqual(str(exception), "Ambiguous option: '--ver'  (could be: 'version', 'verbose')")
        self.assertEqual(exception.matching, ("version", "verbose"))
        self.assertIsInstance(exception, UnrecognizedOptionException)

    def testMissingArgument(self):
        option = Option(long_opt="output", has_arg=True)
        exception = MissingArgumentException(option=option)
        self.assertEqual(str(exception), "Missing argument for option: output")
        self.assertIs(exception.option, option)

    def testMissingOption(self):
        self.assertEqual(str(MissingOptionException(missing=["b"])), "Missing required option: b")
        self.assertEqual(str(MissingOptionException(missing=["b", "c"])), "Missing required options: b, c")

    def testMissingGroup(self):
        group = OptionGroup(Option("a", "first"), Option(long_opt="bee"))
        exception = MissingOptionException(missing=[group, "c"])
        self.assertEqual(str(exception), "Missing required options: [-a first, --bee], c")
        self.assertEqual(exception.missing, (group, "c"))

    def testAlreadySelected(self):
        group = OptionGroup(Option("a"), Option("b"))
        group.set_selected(Option("a"))
        exception = AlreadySelectedException(group=group, option=Option("b"))
        self.assertEqual(exception.selected, "a")
        self.assertEqual(
            str(exception),
            "The option 'b' was specified but an option from this group has already been selected: 'a'",
        )

    def testInvalidValue(self):
        exception = InvalidValueException("Unable to parse the number: x", value="x", kind=ValueKind.NUMBER)
        self.assertEqual(exception.value, "x")
        self.assertIs(exception.kind, ValueKind.NUMBER)
        with self.assertRaises(TypeError):
            InvalidValueException(value="x")

    def testUnsupportedKind(self):
        self.assertEqual(str(UnsupportedValueKind(kind=ValueKind.DATE)), "Not yet implemented: date values")

    def testMissingDetailIsNone(self):
        self.assertIsNone(UnrecognizedOptionException("custom").option)

    def testDetailsAreReadOnly(self):
        exception = UnrecognizedOptionException(option="-x")
        with self.assertRaises(TypeError):
            exception.options["option"] = "-y"


class TestReplaceAndTrigger(TestCase):

    def testReplaceKeepsMessage(self):
        exception = UnrecognizedOptionException(option="-x")
        other = copy.replace(exception, hint="try -y")
        self.assertIsNot(other, exception)
        self.assertEqual(other.message, "Unrecognized option: -x")
        self.assertEqual(other.options["hint"], "try -y")
        self.assertNotIn("hint", exception.options)

    def testTriggerRaises(self):
        with self.assertRaises(MissingOptionException) as context:
            trigger(MissingOptionException(missing=["b"]))
        self.assertEqual(context.exception.missing, ("b",))

    def testTriggerShellExits(self):
        stream = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=stream, width=120, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(UnrecognizedOptionException(option="-x"), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 1)
        output = stream.getvalue()
        self.assertIn("[ tool — 11111 | Unrecognized Option ]", output)
        self.assertIn("Unrecognized option: -x", output)

    def testTriggerRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))

    def testTriggerWarning(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(ConversionWarning("could not convert", option="n"))
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, ConversionWarning)
        self.assertEqual(str(caught[0].message), "could not convert")

    def testTriggerWarningShell(self):
        stream = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=stream, width=120, color_system=None)):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                trigger(ConversionWarning("could not convert"), shell=True, prog="tool")
        self.assertIn("[ tool — 12141 | Conversion Failed ]", stream.getvalue())


class TestRendering(TestCase):

    def testPlainLayout(self):
        exception = copy.replace(MissingOptionException(missing=["b"]), prog="tool")
        self.assertEqual(
            _render(exception),
            "[ tool — 11131 | Missing Option ]\n"
            "Missing required option: b\n"
            " → add the required options\n",
        )

    def testOverrides(self):
        exception = copy.replace(
            UnrecognizedOptionException(option="-x"),
            prog="tool",
            title="bad switch",
            hint="see --help",
            docs="https://example.org/switches",
        )
        output = _render(exception)
        self.assertIn("[ tool — 11111 | Bad Switch ]", output)
        self.assertIn(" → see --help", output)
        self.assertIn("https://example.org/switches", output)

    def testFancyPanel(self):
        exception = copy.replace(UnrecognizedOptionException(option="-x"), prog="tool", fancy=True)
        output = _render(exception)
        self.assertIn("╭", output)
        self.assertIn("Unrecognized option: -x", output)

    def testHostHooks(self):
        main = sys.modules["__main__"]
        with (
            mock.patch.object(main, "__prog__", "host", create=True),
            mock.patch.object(main, "__codes__", {FaultCode.MISSING_OPTION: "E-REQ"}, create=True),
            mock.patch.object(main, "__docs__", {FaultCode.MISSING_OPTION: "see the manual"}, create=True),
        ):
            output = _render(MissingOptionException(missing=["b"]))
            self.assertEqual(FaultCode.MISSING_OPTION.normalize(), "E-REQ")
            self.assertEqual(getdoc(FaultCode.MISSING_OPTION), "see the manual")
        self.assertIn("[ host — E-REQ | Missing Option ]", output)
        self.assertIn("see the manual", output)


class TestCodes(TestCase):

    def testNormalizeDefault(self):
        self.assertEqual(FaultCode.AMBIGUOUS_OPTION.normalize(), "11112")

    def testGetdocDefault(self):
        self.assertIsNone(getdoc(FaultCode.PARSE_ERROR))

    def testGetdocRejectsIntegers(self):
        with self.assertRaises(TypeError):
            getdoc(11101)

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


if __name__ == "__main__":
    unittest.main()
