import unittest

from cmm.lang.symbol import INT64_MAX, INT64_MIN, UNIT, Error, Integer, SymbolTable, Unit, to_int64
from cmm.lang.token import Token, TokenType


class SymbolTestCase(unittest.TestCase):

    def test_rendering(self):
        cases = {
            Integer(42): ("INTEGER", "42"),
            Integer(-7): ("INTEGER", "-7"),
            Error("Couldn't find identifier: x"): ("ERROR", "ERROR: Couldn't find identifier: x"),
            Unit(): ("UNIT", ""),
        }
        for case, (type_tag, rendered) in cases.items():
            self.assertEqual(type_tag, case.type, case)
            self.assertEqual(rendered, str(case), case)

    def test_equality(self):
        self.assertEqual(Integer(1), Integer(1))
        self.assertNotEqual(Integer(1), Integer(0))
        self.assertNotEqual(Integer(1), Error("1"))
        self.assertEqual(UNIT, Unit())
        self.assertEqual(Error("oops", Token(TokenType.IDENTIFIER, "a")), Error("oops"))

    def test_to_int64(self):
        cases = {
            0: 0,
            INT64_MAX: INT64_MAX,
            INT64_MIN: INT64_MIN,
            INT64_MAX + 1: INT64_MIN,
            INT64_MIN - 1: INT64_MAX,
            2 ** 64 + 5: 5,
            INT64_MAX * INT64_MAX: 1,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, to_int64(case), case)


class SymbolTableTestCase(unittest.TestCase):

    def test_get_set(self):
        symbol_table = SymbolTable()
        self.assertIsNone(symbol_table.get("x"))
        self.assertNotIn("x", symbol_table)

        self.assertEqual(Integer(1), symbol_table.set("x", Integer(1)))
        self.assertEqual(Integer(2), symbol_table.set("x", Integer(2)))  # last write wins

        self.assertIn("x", symbol_table)
        self.assertEqual(Integer(2), symbol_table.get("x"))
        self.assertEqual(1, len(symbol_table))
        self.assertEqual([("x", Integer(2))], list(symbol_table.items()))


if __name__ == '__main__':
    unittest.main()
