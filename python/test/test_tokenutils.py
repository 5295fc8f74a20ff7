# coding:utf-8
'''
Lexical scanning helpers.
'''

import re
import unittest
from tsqlfmt import tokenutils as tu


class Test(unittest.TestCase):

    def test_segments(self):
        segments = tu.iter_segments("a 'x--y' -- c\n/* d */ [e f]")
        self.assertEqual([seg.kind for seg in segments], [
            tu.SegmentKind.code,
            tu.SegmentKind.quoted,
            tu.SegmentKind.code,
            tu.SegmentKind.line_comment,
            tu.SegmentKind.code,
            tu.SegmentKind.block_comment,
            tu.SegmentKind.code,
            tu.SegmentKind.quoted,
        ])
        self.assertEqual(segments[1].text, "'x--y'")
        self.assertEqual(segments[3].text, "-- c")
        self.assertEqual(segments[7].text, "[e f]")

    def test_line_breaks(self):
        self.assertEqual(tu.normalize_line_breaks("a\r\n'x\r\ny' -- c\r\n/* d\r\n*/\r\n"),
                         "a\n'x\r\ny' -- c\n/* d\r\n*/\n")
        self.assertEqual(tu.line_break("'a\r\n' b\nc"), "\n")
        self.assertEqual(tu.line_break("a -- x\r\nb"), "\r\n")
        self.assertEqual(tu.line_break("a"), "\n")
        self.assertEqual(tu.convert_line_breaks("a\n'x\ny'\nb", "\r\n"), "a\r\n'x\ny'\r\nb")
        self.assertEqual(tu.convert_line_breaks("a\nb", "\n"), "a\nb")

    def test_doubled_quote(self):
        segments = tu.iter_segments("'it''s' a")
        self.assertEqual(segments[0].text, "'it'")
        self.assertEqual(segments[1].text, "'s'")
        self.assertEqual(tu.code_text("'it''s' a"), "        a")

    def test_backslash_escape(self):
        self.assertEqual(tu.iter_segments("'a\\'b' c", escape=True)[0].text, "'a\\'b'")
        self.assertEqual(tu.iter_segments("'a\\'b' c")[0].text, "'a\\'")

    def test_scanner_carries_state(self):
        scanner = tu.Scanner()
        scanner.feed("select 'abc")
        self.assertTrue(scanner.is_open())
        segments = scanner.feed("def' from (")
        self.assertEqual(segments[0].kind, tu.SegmentKind.quoted)
        self.assertEqual(segments[0].text, "def'")
        self.assertFalse(scanner.is_open())
        self.assertTrue(scanner.is_nested())
        self.assertEqual(scanner.depth, 1)
        scanner.feed("x)")
        self.assertFalse(scanner.is_nested())

    def test_scanner_case_depth(self):
        scanner = tu.Scanner()
        scanner.feed("SELECT CASE WHEN a = 1")
        self.assertEqual(scanner.case_depth, 1)
        self.assertTrue(scanner.is_nested())
        scanner.feed("END AS k, t.end")
        self.assertEqual(scanner.case_depth, 0)

    def test_scanner_depth_floor(self):
        scanner = tu.Scanner()
        scanner.feed("a))")
        self.assertEqual(scanner.depth, 0)

    def test_unterminated(self):
        self.assertEqual(tu.find_unterminated("select a /* open"), 9)
        self.assertEqual(tu.find_unterminated("select 'a"), 7)
        self.assertEqual(tu.find_unterminated("select 'a' /* x */"), None)

    def test_line_code(self):
        self.assertEqual(tu.line_code(tu.iter_segments("  select 'from' -- where")), "select ''")
        self.assertEqual(tu.line_code(tu.iter_segments("-- only")), "")

    def test_first_code(self):
        lines = ["", "-- c", "/* a", "b */", "  from t"]
        self.assertEqual(tu.first_code(lines), "from t")
        self.assertEqual(tu.first_code(["-- c"]), None)

    def test_find_top_level(self):
        text = "a, f(b, c), 'd, e' -- f, g\n, h"
        found = tu.find_top_level(text, re.compile(","))
        self.assertEqual([match.start for match in found], [1, 10, 27])

    def test_find_top_level_keyword(self):
        text = "ROW_NUMBER() OVER (ORDER BY a) AS r ORDER BY b"
        found = tu.find_top_level(text, tu.keyword_pattern("ORDER BY"))
        self.assertEqual(len(found), 1)
        self.assertEqual(found[0].text, "ORDER BY")
        self.assertEqual(found[0].start, 36)

    def test_keyword_pattern(self):
        pattern = tu.keyword_pattern("GROUP BY")
        self.assertTrue(pattern.search("x group\n  by y"))
        self.assertFalse(pattern.search("t.group by"))
        self.assertFalse(pattern.search("@group by"))
        self.assertFalse(pattern.search("groups by"))

    def test_matching_paren(self):
        text = "f(a, (b), ')') + 1"
        self.assertEqual(tu.find_matching_paren(text, 1), 13)
        self.assertEqual(tu.find_matching_paren("f(a", 1), -1)
        self.assertTrue(tu.is_balanced(text))
        self.assertFalse(tu.is_balanced("(a"))
        self.assertFalse(tu.is_balanced(")a("))

    def test_collapse_whitespace(self):
        self.assertEqual(tu.collapse_whitespace("  a \n  b\t c  "), "a b c")
        self.assertEqual(tu.collapse_whitespace("a  'x  y'"), "a 'x  y'")
        self.assertEqual(tu.collapse_whitespace("a -- c\n   b"), "a -- c\nb")
        self.assertEqual(tu.collapse_whitespace("a\n  /* c */  b"), "a\n/* c */ b")

    def test_append_after_code(self):
        self.assertEqual(tu.append_after_code("a -- c", ","), "a, -- c")
        self.assertEqual(tu.append_after_code("f(x) /* c */", ","), "f(x), /* c */")
        self.assertEqual(tu.append_after_code("'x'", ";"), "'x';")

    def test_token_signature(self):
        self.assertTrue(tu.same_tokens("SELECT a, b FROM t", "SELECT a\n     , b\n  FROM t"))
        self.assertTrue(tu.same_tokens("ORDER BY a", "ORDER  BY a"))
        self.assertFalse(tu.same_tokens("SELECT a, b FROM t", "SELECT a FROM t"))
        self.assertFalse(tu.same_tokens("SELECT 'a b'", "SELECT 'a  b'"))

    def test_words(self):
        self.assertEqual(tu.startswith_word("select a", ("INSERT", "SELECT")), "SELECT")
        self.assertEqual(tu.startswith_word("selection", "SELECT"), None)
        self.assertTrue(tu.contains_word("declare c cursor for", "CURSOR"))
        self.assertFalse(tu.contains_word("cursors", "CURSOR"))


if __name__ == "__main__":
    unittest.main()
