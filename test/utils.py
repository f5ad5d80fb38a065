"""
Tests for the shared helpers.

Scope
- Unset is a falsy singleton distinct from None, usable in isinstance unions.
- coalesce() only replaces Unset.
- mirror() exposes copies of container state.
- pluralize() covers the regular English rules used in messages.
"""
import unittest
from unittest import TestCase

from argtable.utils import Unset, UnsetType, coalesce, mirror, pluralize, rename


class Holder:
    items = mirror("items")

    def __init__(self):
        self._items = {"a": [1, 2]}


class UtilsTest(TestCase):
    """Behavioral tests for argtable.utils."""

    def testUnset(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsInstance(Unset, str | Unset)
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIs(coalesce(False, True), False)
        self.assertEqual(coalesce("", "fallback"), "")

    def testMirrorCopies(self):
        holder = Holder()
        holder.items["a"].append(3)
        self.assertEqual(holder.items, {"a": [1, 2]})
        with self.assertRaises(AttributeError):
            holder.items = {}

    def testRename(self):
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "x")

    def testPluralize(self):
        self.assertEqual(pluralize("argument", 1), "argument")
        self.assertEqual(pluralize("argument", 0), "arguments")
        self.assertEqual(pluralize("box", 2), "boxes")
        self.assertEqual(pluralize("entry", 2), "entries")
        self.assertEqual(pluralize("key", 2), "keys")


if __name__ == '__main__':
    unittest.main()
