# coding:utf-8
'''
Text filters applied to a block before and after layout.
'''
import re
from tsqlfmt import keywords
from tsqlfmt import tokenutils as tu
from tsqlfmt.config import CaseMode


_WORD = re.compile(r"(?<![\w@#$.])[A-Za-z_]\w*")
_CALL = re.compile(r"\s*\(")

# text right before a data type
_TYPE_LEAD = re.compile(
    r"(?:@[\w@#$]+\s+(?:AS\s+)?"
    r"|(?<![\w@#$.])(?:TRY_CONVERT|CONVERT)\s*\(\s*"
    r"|(?<![\w@#$.])RETURNS\s+"
    r"|(?<![\w@#$.])(?:ADD|ALTER\s+COLUMN)\s+\S+\s+)$",
    re.IGNORECASE)
_AS_LEAD = re.compile(r"(?<![\w@#$.])AS\s+$", re.IGNORECASE)
_CAST_CALL = re.compile(r"(?<![\w@#$.])(?:TRY_CAST|CAST)\s*$", re.IGNORECASE)
_TABLE_CALL = re.compile(r"(?<![\w@#$.])TABLE(?:\s+\S+)?\s*$", re.IGNORECASE)
_COLUMN_LEAD = re.compile(r"[(,]\s*(?:\[[^\]]*\]|\"[^\"]*\"|[\w@#$]+)\s+$")
_LOOK_BEHIND = 200


def _to_case(word, mode):
    if mode is CaseMode.upper:
        return word.upper()
    if mode is CaseMode.lower:
        return word.lower()
    return word


class KeywordCaseFilter(object):
    """
        Keyword / function / data type casing.
        Function names are cased when a ``(`` follows, data types only
        where a type can appear.

        Only code is touched: quoted literals, bracketed identifiers and
        comments are copied as they are, and so is everything after a quote
        or comment that is never closed. Qualified names (``t.name``),
        variables (``@name``) and temp tables (``#name``) keep their case.
    """

    def __init__(self, local_config):
        self.local_config = local_config
        self.reserved_words = keywords.KEYWORDS
        if local_config.input_reserved_words:
            self.reserved_words = keywords.KEYWORDS | local_config.input_reserved_words

    def is_active(self):
        cfg = self.local_config
        return not (cfg.keyword_case is CaseMode.preserve
                    and cfg.function_case is CaseMode.preserve
                    and cfg.data_type_case is CaseMode.preserve)

    def process(self, text):
        if not self.is_active():
            return text
        # same offsets as text, literals and comments blanked
        code = tu.code_text(text, self.local_config.escape_sequence_u005c)
        out = []
        last = 0
        for match in _WORD.finditer(code):
            out.append(text[last:match.start()])
            out.append(self._case_word(code, text, match))
            last = match.end()
        out.append(text[last:])
        return "".join(out)

    def _case_word(self, code, text, match):
        word = match.group()
        upper = word.upper()
        if upper in self.reserved_words:
            return _to_case(word, self.local_config.keyword_case)
        if upper in keywords.FUNCTIONS and _CALL.match(code, match.end()):
            return _to_case(word, self.local_config.function_case)
        if upper in keywords.DATA_TYPES and is_type_position(code, text, match.start(), match.end()):
            return _to_case(word, self.local_config.data_type_case)
        return word


def is_type_position(code, text, start, end):
    """
        True when the word at code[start:end] is where a data type goes:
        ``VARCHAR(10)``, ``DECLARE @a INT``, ``CAST(x AS INT)``,
        ``CONVERT(INT, x)``, ``RETURNS INT``, ``ADD c INT`` or a column of
        ``CREATE TABLE t (c INT)``. A column or alias named like a type
        is not one.
    """
    if _CALL.match(code, end):
        return True
    before = code[max(0, start - _LOOK_BEHIND):start]
    if _TYPE_LEAD.search(before):
        return True
    open_index = _enclosing_paren(code, start)
    if open_index < 0:
        return False
    call = code[max(0, open_index - _LOOK_BEHIND):open_index]
    if _AS_LEAD.search(before) and _CAST_CALL.search(call):
        return True
    return bool(_TABLE_CALL.search(call)
                and _COLUMN_LEAD.search(text[max(0, start - _LOOK_BEHIND):start]))


def _enclosing_paren(code, pos):
    depth = 0
    for index in range(pos - 1, -1, -1):
        char = code[index]
        if char == ')':
            depth += 1
        elif char == '(':
            if not depth:
                return index
            depth -= 1
    return -1


def apply_case(text, local_config):
    return KeywordCaseFilter(local_config).process(text)


class TrailingWhitespaceFilter(object):
    """
        Strip trailing whitespace from lines that do not end inside a
        quoted literal or block comment
    """

    def __init__(self, local_config):
        self.escape = local_config.escape_sequence_u005c

    def process(self, text):
        scanner = tu.Scanner(self.escape)
        lines = []
        for line in text.split("\n"):
            scanner.feed(line + "\n")
            lines.append(line if scanner.is_open() else line.rstrip())
        return "\n".join(lines)
