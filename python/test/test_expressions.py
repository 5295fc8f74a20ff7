# coding:utf-8
'''
CASE / OVER reflow and alias alignment.
'''

import unittest
from tsqlfmt import expressions
from tsqlfmt.config import LocalConfig
from tsqlfmt.sql import Item


class Test(unittest.TestCase):

    def test_case(self):
        self.assertEqual(expressions.reflow_case("CASE WHEN a = 1 THEN 'x' ELSE 'y' END AS k"),
"""CASE
    WHEN a = 1
        THEN 'x'
    ELSE 'y'
END AS k""")

    def test_case_prefix(self):
        self.assertEqual(expressions.reflow_case("1 + CASE x WHEN 1 THEN 2 END", indent_size=2),
"""1 + CASE x
  WHEN 1
    THEN 2
END""")

    def test_nested_case(self):
        self.assertEqual(
            expressions.reflow_case("CASE WHEN a = 1 THEN CASE WHEN b = 1 THEN 1 END END"),
"""CASE
    WHEN a = 1
        THEN CASE WHEN b = 1 THEN 1 END
END""")

    def test_case_unchanged(self):
        for text in ("a + b",
                     "CASE WHEN a = 1 THEN 2",
                     "CASE WHEN a = 1 -- c\nTHEN 2 END",
                     "f(CASE WHEN a = 1 THEN 2 END)"):
            self.assertEqual(expressions.reflow_case(text), text)

    def test_window(self):
        self.assertEqual(
            expressions.reflow_window("SUM(x) OVER (PARTITION BY a, b ORDER BY c ROWS UNBOUNDED PRECEDING) AS s"),
"""SUM(x)
    OVER (
        PARTITION BY a, b
        ORDER BY c
        ROWS UNBOUNDED PRECEDING
    ) AS s""")

    def test_window_plain_content(self):
        self.assertEqual(expressions.reflow_window("COUNT(*) OVER (w)"),
"""COUNT(*)
    OVER (
        w
    )""")

    def test_window_unchanged(self):
        for text in ("a",
                     "OVER (ORDER BY a)",
                     "SUM(x) OVER (ORDER BY a -- c\n)",
                     "SUM(x) OVER (ORDER BY a",
                     "SUM(x) OVER (ORDER BY a) FROM t"):
            self.assertEqual(expressions.reflow_window(text), text)

    def test_reflow_prefers_case(self):
        text = "CASE WHEN a = 1 THEN 1 END + SUM(x) OVER (ORDER BY a)"
        self.assertEqual(expressions.reflow(text), expressions.reflow_case(text))

    def test_align_aliases(self):
        items = [Item("a AS x", None), Item("bbb AS y", "-- c"), Item("c", None),
                 Item("CASE\nEND AS z", None)]
        self.assertEqual(expressions.align_aliases(items), [
            Item("a   AS x", None), Item("bbb AS y", "-- c"), Item("c", None),
            Item("CASE\nEND AS z", None)])

    def test_align_aliases_single(self):
        items = [Item("a AS x", None), Item("b", None)]
        self.assertEqual(expressions.align_aliases(items), items)

    def test_reflow_select_items(self):
        items = [Item("a AS x", None), Item("bbb AS y", None)]
        local_config = LocalConfig().set_align_aliases(False)
        self.assertEqual(expressions.reflow_select_items(items, local_config), items)
        self.assertEqual(expressions.reflow_select_items(items, LocalConfig())[0].text, "a   AS x")


if __name__ == "__main__":
    unittest.main()
