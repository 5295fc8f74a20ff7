# coding:utf-8
'''
Block segmenter.

Cuts a script into classified blocks with one forward pass over its lines.
No grammar is involved: a statement ends at a ``;`` or right before a line
that starts another statement, and a scanner carried from line to line keeps
quoted literals, block comments, parentheses and CASE ... END in one block.
'''
import re
from itertools import islice
from tsqlfmt import keywords
from tsqlfmt import tokenutils as tu
from tsqlfmt.sql import Block, BlockKind


_CTE_START = re.compile(r";?\s*WITH(?![\w@#$])(?!\s*\()", re.IGNORECASE)
_TABLE_HINT = re.compile(r"WITH\s*\(", re.IGNORECASE)
_PAGING = re.compile(r"FETCH\s+(?:FIRST|NEXT)\s+\S+\s+ROWS?(?![\w@#$])", re.IGNORECASE)
_DROP_TABLE = re.compile(r"DROP\s+TABLE(?![\w@#$])", re.IGNORECASE)
_INTO_TEMP = re.compile(r"(?<![\w@#$.])INTO\s+[#@]", re.IGNORECASE)
_CURSOR_DEFINITION = re.compile(r"(?<![\w@#$.])CURSOR(?![\w@#$]).*(?<![\w@#$.])FOR(?![\w@#$])",
                                re.IGNORECASE)
# a line ending like this always goes on
_OPEN_ENDING = re.compile(
    r"(?:(?<![\w@#$.])(?:AS|FOR|UNION|ALL|EXCEPT|INTERSECT)|[,(])$", re.IGNORECASE)

_MAIN_QUERY = tu.keyword_pattern("SELECT", "INSERT", "UPDATE", "DELETE", "MERGE")
_ROW_SOURCE = tu.keyword_pattern("SELECT", "VALUES", "EXEC", "EXECUTE")

# leading comments waiting for the code of their statement
_PENDING = "pending"


def classify(code):
    """
        Block kind of a statement whose first code line is ``code``
    """
    if _CTE_START.match(code):
        return BlockKind.cte_statement
    if tu.contains_word(code, "CURSOR") or tu.startswith_word(code, keywords.CURSOR_STARTS):
        return BlockKind.cursor_statement
    if tu.startswith_word(code, "DECLARE"):
        return BlockKind.declare_group
    if tu.startswith_word(code, "SELECT") and not tu.contains_word(code, ("INTO", "WITH")):
        return BlockKind.simple_select
    if tu.contains_word(code, keywords.COMPLEX_MARKERS) \
            or _DROP_TABLE.match(code) or _INTO_TEMP.search(code):
        return BlockKind.complex_statement
    return BlockKind.generic_statement


def starts_statement(code):
    """
        True when a line whose code is ``code`` begins a new top-level statement
    """
    if code.startswith(";"):
        code = code[1:].lstrip()
    if _TABLE_HINT.match(code) or _PAGING.match(code):
        return False
    return tu.startswith_word(code, keywords.STATEMENT_STARTS) is not None


class BlockSegmenter(object):
    """
        Splits script text into an ordered list of ``Block``
    """

    def __init__(self, local_config):
        self.escape = local_config.escape_sequence_u005c
        self.policy = local_config.comment_policy

    def segment(self, text):
        text = tu.normalize_line_breaks(text, self.escape)
        if text.endswith("\n"):
            text = text[:-2] if text.endswith("\r\n") else text[:-1]
        return _Segmentation(self, text.split("\n")).run()


class _Segmentation(object):

    __slots__ = ('segmenter', 'lines', 'blocks', 'acc', 'kind', 'scanner')

    def __init__(self, segmenter, lines):
        self.segmenter = segmenter
        self.lines = lines
        self.blocks = []
        self.acc = []
        self.kind = None
        self.scanner = tu.Scanner(segmenter.escape)

    def run(self):
        for index, line in enumerate(self.lines):
            self._process_line(index, line)

        if self.acc and self.scanner.is_open():
            # unterminated literal or comment: keep the rest as it is
            self.kind = BlockKind.generic_statement
            self._flush(keep_tail=True)
        else:
            self._flush()
        return self.blocks

    def _process_line(self, index, line):
        was_open = self.scanner.is_open()
        segments = self.scanner.feed(line)
        code = tu.line_code(segments)

        if was_open:
            self._continue_open(index, line, code)
            return

        if not line.strip():
            if self.acc:
                self.acc.append(line)
            return

        if not code:
            lead = next(seg for seg in segments if seg.is_comment())
            self._comment_line(index, line, lead)
            return

        if not self._in_statement():
            if self.kind is BlockKind.line_comment_group:
                self._flush()
            self.kind = classify(code)
        self.acc.append(line)
        self._check_end(index, code)

    def _continue_open(self, index, line, code):
        self.acc.append(line)
        if self.scanner.is_open():
            return
        if self.kind is BlockKind.comment:
            if not code:
                self._flush()
                return
            # code after the closer turns the comment into a statement
            self.kind = classify(code)
        elif self.kind is _PENDING:
            if not code:
                return
            self.kind = classify(code)
        elif not code:
            return
        self._check_end(index, code)

    def _comment_line(self, index, line, lead):
        if self._in_statement():
            following = islice(self.lines, index + 1, None)
            if self.segmenter.policy.is_part_of_statement("\n".join(self.acc), following):
                self.acc.append(line)
                return
            self._flush()

        if lead.kind is tu.SegmentKind.block_comment:
            if self.kind is _PENDING:
                self.acc.append(line)
                return
            self._flush()
            self.kind = BlockKind.comment
            self.acc.append(line)
            if not self.scanner.is_open():
                self._flush()
            return

        if self.kind is None:
            following = islice(self.lines, index + 1, None)
            if self.segmenter.policy.is_part_of_statement("", following):
                self.kind = _PENDING
            else:
                self.kind = BlockKind.line_comment_group
        self.acc.append(line)

    def _in_statement(self):
        return isinstance(self.kind, BlockKind) and not self.kind.is_comment()

    def _check_end(self, index, code):
        if self.scanner.is_nested():
            return
        if code.endswith(";"):
            self._flush()
            return
        if _OPEN_ENDING.search(code):
            return
        following = tu.first_code(islice(self.lines, index + 1, None), self.segmenter.escape)
        if following is None or self._suppressed(code, following):
            return
        if starts_statement(following):
            self._flush()

    def _suppressed(self, code, following):
        kind = self.kind
        if kind is BlockKind.declare_group:
            return tu.startswith_word(following, "DECLARE") is not None \
                and not tu.contains_word(following, "CURSOR")
        if kind is BlockKind.cursor_statement:
            if _CURSOR_DEFINITION.search(code) and tu.startswith_word(following, "SELECT"):
                return True
            return tu.startswith_word(following, "FROM") is not None

        text = tu.code_text("\n".join(self.acc), self.segmenter.escape)
        if kind is BlockKind.cte_statement:
            # still between the definitions and the main query
            return not tu.find_top_level(text, _MAIN_QUERY)
        if tu.startswith_word(text.strip(), "INSERT") and not tu.find_top_level(text, _ROW_SOURCE):
            return tu.startswith_word(following, ("SELECT", "WITH", "EXEC", "EXECUTE")) is not None
        return False

    def _flush(self, keep_tail=False):
        lines = self.acc
        if not keep_tail:
            while lines and not lines[-1].strip():
                lines = lines[:-1]
            lines = lines[:-1] + [line.rstrip() for line in lines[-1:]]
        content = "\n".join(lines)
        kind = self.kind
        if kind is _PENDING:
            kind = BlockKind.line_comment_group
        if content.strip():
            self.blocks.append(Block(kind, content))
        self.acc = []
        self.kind = None


def segment(text, local_config):
    return BlockSegmenter(local_config).segment(text)
