# coding:utf-8
'''
Clause extraction and item splitting.
'''

import unittest
from tsqlfmt import grouping
from tsqlfmt.exceptions import ClauseShapeError
from tsqlfmt.sql import ClauseKind, FromPartKind, Item


class Test(unittest.TestCase):

    def test_extract(self):
        components = grouping.extract_components(
            "SELECT a, b FROM t WHERE x = 1 GROUP BY a HAVING COUNT(*) > 1 ORDER BY a")
        self.assertEqual(components.select, "a, b")
        self.assertEqual(components.from_, "t")
        self.assertEqual(components.where, "x = 1")
        self.assertEqual(components.group_by, "a")
        self.assertEqual(components.having, "COUNT(*) > 1")
        self.assertEqual(components.order_by, "a")
        self.assertEqual([kind for kind, _, _ in components.clauses()], [
            ClauseKind.select, ClauseKind.from_, ClauseKind.where,
            ClauseKind.group_by, ClauseKind.having, ClauseKind.order_by])

    def test_extract_absent_clauses(self):
        components = grouping.extract_components("select 1")
        self.assertEqual(components.select, "1")
        self.assertEqual(components.from_, None)
        self.assertEqual(components.order_by, None)

    def test_order_by_inside_over(self):
        components = grouping.extract_components(
            "SELECT ROW_NUMBER() OVER (ORDER BY a) AS r FROM t ORDER BY b")
        self.assertEqual(components.select, "ROW_NUMBER() OVER (ORDER BY a) AS r")
        self.assertEqual(components.from_, "t")
        self.assertEqual(components.order_by, "b")

    def test_subquery(self):
        components = grouping.extract_components(
            "SELECT a FROM (SELECT a FROM u WHERE b = 1) x WHERE a = 2")
        self.assertEqual(components.from_, "(SELECT a FROM u WHERE b = 1) x")
        self.assertEqual(components.where, "a = 2")

    def test_keywords_in_quotes_and_comments(self):
        components = grouping.extract_components(
            "SELECT 'from', [where] -- from\nFROM t")
        self.assertEqual(components.select, "'from', [where] -- from")
        self.assertEqual(components.from_, "t")

    def test_keywords_as_written(self):
        components = grouping.extract_components("select top 10 a from t order   by a")
        self.assertEqual(components.keywords[ClauseKind.select], "select top 10")
        self.assertEqual(components.select, "a")
        self.assertEqual(components.keywords[ClauseKind.order_by], "order by")

        components = grouping.extract_components("SELECT DISTINCT TOP (5) PERCENT a FROM t")
        self.assertEqual(components.keywords[ClauseKind.select], "SELECT DISTINCT TOP (5) PERCENT")
        self.assertEqual(components.select, "a")

    def test_out_of_order_keyword(self):
        components = grouping.extract_components("SELECT a FROM t WHERE b = 1 FROM u")
        self.assertEqual(components.where, "b = 1 FROM u")

    def test_preamble(self):
        components = grouping.extract_components("-- head\n/* more */\nSELECT a")
        self.assertEqual(components.preamble, "-- head\n/* more */")

    def test_shape_errors(self):
        self.assertRaises(ClauseShapeError, grouping.extract_components, "UPDATE t SET a = 1")
        self.assertRaises(ClauseShapeError, grouping.extract_components, "x SELECT a")
        self.assertRaises(ClauseShapeError, grouping.extract_components, "SELECT a INTO #t FROM u")

    def test_split_terminator(self):
        self.assertEqual(grouping.split_terminator("SELECT a"), ("SELECT a", None))
        self.assertEqual(grouping.split_terminator("SELECT a ; -- done"), ("SELECT a", " -- done"))
        self.assertEqual(grouping.split_terminator("SELECT ';'"), ("SELECT ';'", None))
        self.assertRaises(ClauseShapeError, grouping.split_terminator, "SELECT 1; SELECT 2")
        self.assertRaises(ClauseShapeError, grouping.split_terminator, "SELECT 1; SELECT 2;")

    def test_attach_terminator(self):
        self.assertEqual(grouping.attach_terminator("SELECT a", None), "SELECT a")
        self.assertEqual(grouping.attach_terminator("SELECT a", ""), "SELECT a;")
        self.assertEqual(grouping.attach_terminator("SELECT a -- x", " -- done"), "SELECT a -- x\n; -- done")
        self.assertEqual(grouping.attach_terminator("SELECT a FROM t /* x */", ""), "SELECT a FROM t /* x */;")
        self.assertEqual(grouping.attach_terminator("SELECT a", "\n-- done"), "SELECT a;\n-- done")

    def test_set_operations(self):
        parts, operators = grouping.split_set_operations(
            "SELECT a FROM t UNION ALL SELECT a FROM (SELECT a FROM v UNION SELECT 1) x EXCEPT SELECT 2")
        self.assertEqual(parts, [
            "SELECT a FROM t",
            "SELECT a FROM (SELECT a FROM v UNION SELECT 1) x",
            "SELECT 2",
        ])
        self.assertEqual(operators, ["UNION ALL", "EXCEPT"])

    def test_split_cte(self):
        parts = grouping.split_cte(";WITH a AS (SELECT 1 AS n), b AS (SELECT n FROM a) SELECT n FROM b")
        self.assertEqual(parts.keyword, ";WITH")
        self.assertEqual(parts.preamble, "")
        self.assertEqual([(d.name, d.keyword, d.body) for d in parts.definitions], [
            ("a", "AS", "SELECT 1 AS n"),
            ("b", "AS", "SELECT n FROM a"),
        ])
        self.assertEqual(parts.main, "SELECT n FROM b")

    def test_split_cte_columns(self):
        parts = grouping.split_cte("-- c\nWITH a (x, y) AS (SELECT 1, 2)\nSELECT x FROM a")
        self.assertEqual(parts.preamble, "-- c")
        self.assertEqual(parts.definitions[0].name, "a (x, y)")

    def test_split_cte_errors(self):
        self.assertRaises(ClauseShapeError, grouping.split_cte, "WITH a (SELECT 1) SELECT 1")
        self.assertRaises(ClauseShapeError, grouping.split_cte, "WITH a AS SELECT 1")
        self.assertRaises(ClauseShapeError, grouping.split_cte,
                          "WITH a AS (SELECT 1) -- c\n, b AS (SELECT 2) SELECT 1")

    def test_split_items(self):
        self.assertEqual(grouping.split_items("a, f(b, c), 'x,y' AS z"), [
            Item("a", None), Item("f(b, c)", None), Item("'x,y' AS z", None)])
        self.assertEqual(grouping.split_items(""), [])

    def test_comma_comment(self):
        self.assertEqual(grouping.split_items("a, -- note\n    b"), [
            Item("a", "-- note"), Item("b", None)])
        self.assertEqual(grouping.split_items("a -- note\n, b"), [
            Item("a", "-- note"), Item("b", None)])
        self.assertEqual(grouping.split_items("a, /* c */ b"), [
            Item("a", None), Item("/* c */ b", None)])
        self.assertEqual(grouping.split_items("a, -- one\n-- two\nb"), [
            Item("a -- one\n-- two", None), Item("b", None)])

    def test_item_comment(self):
        self.assertEqual(Item.parse("  a  +  b   -- c "), Item("a + b", "-- c"))
        self.assertEqual(Item.parse("a\n-- c"), Item("a\n-- c", None))
        self.assertEqual(Item.parse("-- c"), Item("-- c", None))
        self.assertEqual(Item.parse("a /* c */"), Item("a", "/* c */"))

    def test_split_conditions(self):
        items = grouping.split_conditions(
            "a BETWEEN 1 AND 2 AND (b = 1 OR c = 2) OR d BETWEEN x AND y")
        self.assertEqual([item.text for item in items], [
            "a BETWEEN 1 AND 2",
            "AND (b = 1 OR c = 2)",
            "OR d BETWEEN x AND y",
        ])

    def test_split_conditions_comments(self):
        items = grouping.split_conditions("a = 1 -- one\nAND b = 2 -- two")
        self.assertEqual(items, [Item("a = 1", "-- one"), Item("AND b = 2", "-- two")])

    def test_parse_from(self):
        parts = grouping.parse_from(
            "t LEFT OUTER JOIN u ON u.id = t.id AND u.x = 1 CROSS APPLY f(t.id) AS x "
            "inner join v on (v.id = t.id)")
        self.assertEqual([part.kind for part in parts], [
            FromPartKind.table, FromPartKind.join, FromPartKind.join, FromPartKind.join])
        self.assertEqual(parts[0].table, Item("t", None))
        self.assertEqual(parts[1].join_type, "LEFT OUTER JOIN")
        self.assertEqual(parts[1].table, Item("u", None))
        self.assertEqual(parts[1].conditions, [Item("u.id = t.id", None), Item("AND u.x = 1", None)])
        self.assertEqual(parts[2].join_type, "CROSS APPLY")
        self.assertEqual(parts[2].table, Item("f(t.id) AS x", None))
        self.assertEqual(parts[2].conditions, [])
        self.assertEqual(parts[3].join_type, "inner join")
        self.assertEqual(parts[3].on_keyword, "on")
        self.assertEqual(parts[3].conditions, [Item("(v.id = t.id)", None)])

    def test_parse_from_subquery(self):
        parts = grouping.parse_from("(SELECT a FROM u JOIN w ON 1 = 1) x JOIN y ON y.a = x.a")
        self.assertEqual(len(parts), 2)
        self.assertEqual(parts[0].table.text, "(SELECT a FROM u JOIN w ON 1 = 1) x")


if __name__ == "__main__":
    unittest.main()
