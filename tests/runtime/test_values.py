import dataclasses
import math
import unittest

from tinylang.runtime.values import BoolVal, NullVal, NumberVal, ObjectVal, mk_bool, mk_null, mk_number


class ValuesTestCase(unittest.TestCase):

    def test_constructors(self):
        self.assertEqual(NullVal(), mk_null())
        self.assertEqual(NumberVal(0.0), mk_number())
        self.assertEqual(NumberVal(3.0), mk_number(3))
        self.assertEqual(BoolVal(False), mk_bool())
        self.assertEqual(BoolVal(True), mk_bool(True))

    def test_type_tags(self):
        cases = {"null": mk_null(), "number": mk_number(1), "boolean": mk_bool(True), "object": ObjectVal({})}
        for expected, value in cases.items():
            self.assertEqual(expected, value.type)

    def test_str(self):
        cases = {
            "null": mk_null(),
            "14": mk_number(14),
            "-3": mk_number(-3),
            "2.5": mk_number(2.5),
            "inf": mk_number(math.inf),
            "-inf": mk_number(-math.inf),
            "nan": mk_number(math.nan),
            "true": mk_bool(True),
            "false": mk_bool(False),
            "{}": ObjectVal({}),
            "{ a: 1, b: { c: true } }": ObjectVal({"a": mk_number(1), "b": ObjectVal({"c": mk_bool(True)})}),
        }
        for expected, value in cases.items():
            self.assertEqual(expected, str(value))

    def test_frozen(self):
        value = mk_number(1)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            value.value = 2.0

    def test_object_is_immutable(self):
        source = {"a": mk_number(1)}
        obj = ObjectVal(source)
        source["a"] = mk_number(2)
        source["b"] = mk_null()

        self.assertEqual((("a", mk_number(1)),), obj.properties)
        self.assertEqual(mk_number(1), obj.get("a"))
        self.assertIsNone(obj.get("b"))
        with self.assertRaises(TypeError):
            obj.properties["a"] = mk_number(3)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            obj.properties = ()

    def test_object_is_hashable(self):
        first = ObjectVal({"a": mk_number(1), "b": ObjectVal({"c": mk_bool(True)})})
        second = ObjectVal([("a", mk_number(1)), ("b", ObjectVal({"c": mk_bool(True)}))])

        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(1, len({first, second}))

    def test_object_repeated_name(self):
        obj = ObjectVal([("a", mk_number(1)), ("b", mk_number(2)), ("a", mk_number(3))])
        self.assertEqual((("a", mk_number(3)), ("b", mk_number(2))), obj.properties)
        self.assertEqual("{ a: 3, b: 2 }", str(obj))


if __name__ == '__main__':
    unittest.main()
