"""
Utility helper tests.

Scope
- Unset/coalesce sentinel semantics.
- rename() in both forms, mirror() read-only copies.
- pluralize(), strip_leading_hyphens(), strip_quotes().

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from switchboard.utils import Unset, UnsetType, coalesce, mirror, pluralize, rename, strip_leading_hyphens, strip_quotes


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestRename(TestCase):

    def testDirect(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")
        self.assertEqual(function.__qualname__, "named")

    def testDecorator(self):
        @rename("other")
        def function():
            pass

        self.assertEqual(function.__name__, "other")

    def testInvalid(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(len, 1)
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    class Holder:
        items = mirror("items")
        name = mirror("name")
        pair = mirror("pair")

        def __init__(self):
            self._items = [1, [2, 3]]
            self._name = "holder"
            self._pair = (1, 2)

    def testReadOnly(self):
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.name = "other"

    def testContainersAreCopied(self):
        holder = self.Holder()
        items = holder.items
        items[1].append(4)
        items.append(5)
        self.assertEqual(holder.items, [1, [2, 3]])

    def testImmutablesAreShared(self):
        holder = self.Holder()
        self.assertIs(holder.pair, holder._pair)
        self.assertEqual(holder.name, "holder")

    def testPropertyName(self):
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testArgumentMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestText(TestCase):

    def testPluralize(self):
        self.assertEqual(pluralize("option", 1), "option")
        self.assertEqual(pluralize("option", 2), "options")
        self.assertEqual(pluralize("option"), "options")
        self.assertEqual(pluralize("option", 0), "options")
        self.assertEqual(pluralize("box"), "boxes")
        self.assertEqual(pluralize("entry"), "entries")
        self.assertEqual(pluralize("key"), "keys")

    def testStripLeadingHyphens(self):
        self.assertEqual(strip_leading_hyphens("--verbose"), "verbose")
        self.assertEqual(strip_leading_hyphens("-v"), "v")
        self.assertEqual(strip_leading_hyphens("---x"), "-x")
        self.assertEqual(strip_leading_hyphens("plain"), "plain")
        self.assertIsNone(strip_leading_hyphens(None))

    def testStripQuotes(self):
        self.assertEqual(strip_quotes('"foo bar"'), "foo bar")
        self.assertEqual(strip_quotes('"foo" "bar"'), '"foo" "bar"')
        self.assertEqual(strip_quotes('"'), '"')
        self.assertEqual(strip_quotes('""'), "")
        self.assertEqual(strip_quotes("'single'"), "'single'")
        self.assertEqual(strip_quotes('"open'), '"open')


if __name__ == "__main__":
    unittest.main()
