# coding:utf-8
'''
Value types passed between the segmenter, the splitter and the layouts.
'''
from collections import namedtuple
from enum import Enum
from tsqlfmt import tokenutils as tu


class BlockKind(Enum):
    comment = 'Comment'
    line_comment_group = 'LineCommentGroup'
    cte_statement = 'CteStatement'
    simple_select = 'SimpleSelect'
    cursor_statement = 'CursorStatement'
    declare_group = 'DeclareGroup'
    complex_statement = 'ComplexStatement'
    generic_statement = 'GenericStatement'

    def is_comment(self):
        return self in (BlockKind.comment, BlockKind.line_comment_group)


class Block(namedtuple('Block', 'kind content')):
    """
        A classified, contiguous span of the script
    """
    __slots__ = ()

    def is_comment(self):
        return self.kind.is_comment()

    def lines(self):
        return self.content.split("\n")


class BlockResult(namedtuple('BlockResult', 'block text error')):
    """
        Rendering of one block. ``error`` holds the exception that made the
        block fall back to its original text, or None.
    """
    __slots__ = ()

    @property
    def fallback(self):
        return self.error is not None


class ClauseKind(Enum):
    select = 'SELECT'
    from_ = 'FROM'
    where = 'WHERE'
    group_by = 'GROUP BY'
    having = 'HAVING'
    order_by = 'ORDER BY'

    @classmethod
    def of(cls, keyword):
        return cls(" ".join(keyword.upper().split()))


CLAUSE_ORDER = (
    ClauseKind.select, ClauseKind.from_, ClauseKind.where,
    ClauseKind.group_by, ClauseKind.having, ClauseKind.order_by,
)


class StatementComponents(object):
    """
        Top-level clause bodies of one SELECT. Absent clauses are None.
        ``keywords`` maps each present clause to its keyword as written
        (``SELECT TOP 10``, ``ORDER BY``), ``preamble`` holds comments
        written before SELECT.
    """

    __slots__ = ('preamble', 'keywords', 'bodies')

    def __init__(self, preamble, keywords, bodies):
        self.preamble = preamble
        self.keywords = keywords
        self.bodies = bodies

    def __getattr__(self, name):
        try:
            kind = ClauseKind[name]
        except KeyError:
            raise AttributeError(name)
        return self.bodies.get(kind)

    def clauses(self):
        """
            present clauses in statement order: (kind, keyword, body)
        """
        for kind in CLAUSE_ORDER:
            if kind in self.bodies:
                yield kind, self.keywords[kind], self.bodies[kind]


class Item(namedtuple('Item', 'text comment')):
    """
        A column, predicate or order term, with the comment written after
        it on the same line
    """
    __slots__ = ()

    @classmethod
    def parse(cls, raw, escape=False):
        text = tu.collapse_whitespace(raw, escape)
        segments = tu.iter_segments(text, escape)
        if len(segments) < 2 or not segments[-1].is_comment():
            return cls(text, None)
        last = segments[-1]
        head = text[:last.start]
        if "\n" in head[len(head.rstrip()):] or not tu.code_text(head, escape).strip():
            return cls(text, None)
        return cls(head.rstrip(), last.text)

    def with_text(self, text):
        return self._replace(text=text)

    def is_multiline(self):
        return "\n" in self.text


class FromPartKind(Enum):
    table = 'From'
    join = 'Join'


class FromTable(namedtuple('FromTable', 'table')):
    __slots__ = ()
    kind = FromPartKind.table


class Join(namedtuple('Join', 'join_type table conditions on_keyword')):
    __slots__ = ()
    kind = FromPartKind.join

    def __new__(cls, join_type, table, conditions, on_keyword='ON'):
        return super(Join, cls).__new__(cls, join_type, table, conditions, on_keyword)
