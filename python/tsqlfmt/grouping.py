# coding:utf-8
'''
Clause extraction and item splitting.

All matching is done on code at parenthesis depth 0, so a subquery or an
``OVER (ORDER BY ...)`` never opens a clause of the outer statement, and a
comma or AND inside parentheses, quotes or comments never splits an item.
'''
import re
from collections import namedtuple
from tsqlfmt import tokenutils as tu
from tsqlfmt.exceptions import ClauseShapeError
from tsqlfmt.sql import (CLAUSE_ORDER, ClauseKind, FromTable, Item, Join,
                         StatementComponents)


_CLAUSE = tu.keyword_pattern("SELECT", "FROM", "WHERE", "GROUP BY", "HAVING", "ORDER BY")
_SELECT_MODIFIER = re.compile(
    r"(?:DISTINCT|ALL)(?![\w@#$])"
    r"|TOP\s*(?:\([^()'\"]*\)|\d+)(?:\s+PERCENT)?(?:\s+WITH\s+TIES)?(?![\w@#$])",
    re.IGNORECASE)
_INTO = tu.keyword_pattern("INTO")
_SEMICOLON = re.compile(r";")
_SET_OPERATOR = tu.keyword_pattern("UNION ALL", "UNION", "EXCEPT", "INTERSECT")
_WITH = tu.keyword_pattern("WITH")
_AS = tu.keyword_pattern("AS")
_COMMA = re.compile(r",")
_CONDITION = tu.keyword_pattern("BETWEEN", "AND", "OR")
_JOIN = tu.keyword_pattern(
    "INNER JOIN", "CROSS JOIN", "LEFT OUTER JOIN", "RIGHT OUTER JOIN", "FULL OUTER JOIN",
    "LEFT JOIN", "RIGHT JOIN", "FULL JOIN", "JOIN", "CROSS APPLY", "OUTER APPLY")
_ON = tu.keyword_pattern("ON")


CteDefinition = namedtuple('CteDefinition', 'name keyword body')
CteParts = namedtuple('CteParts', 'preamble keyword definitions main')


def _words(text):
    return " ".join(text.split())


def extract_components(text, escape=False):
    """
        Split one SELECT into its top-level clauses.

        A clause keyword only opens a clause when it comes later in
        SELECT / FROM / WHERE / GROUP BY / HAVING / ORDER BY order than the
        clause it interrupts; any other occurrence is kept as text of the
        current clause.
    """
    matches = tu.find_top_level(text, _CLAUSE, escape)
    if not matches or ClauseKind.of(matches[0].text) is not ClauseKind.select:
        raise ClauseShapeError("statement does not start with SELECT")

    preamble = text[:matches[0].start]
    if tu.code_text(preamble, escape).strip():
        raise ClauseShapeError("unexpected text before SELECT: %r" % preamble.strip())

    accepted = []
    for match in matches:
        kind = ClauseKind.of(match.text)
        if not accepted or CLAUSE_ORDER.index(kind) > CLAUSE_ORDER.index(accepted[-1][0]):
            accepted.append((kind, match))

    keywords = {}
    bodies = {}
    for index, (kind, match) in enumerate(accepted):
        end = accepted[index + 1][1].start if index + 1 < len(accepted) else len(text)
        keywords[kind] = _words(match.text)
        bodies[kind] = text[match.end:end].strip()

    keyword, body = _split_select_modifiers(keywords[ClauseKind.select], bodies[ClauseKind.select])
    if tu.find_top_level(body, _INTO, escape):
        raise ClauseShapeError("SELECT ... INTO is not reformatted")
    keywords[ClauseKind.select] = keyword
    bodies[ClauseKind.select] = body

    return StatementComponents(preamble.strip(), keywords, bodies)


def _split_select_modifiers(keyword, body):
    match = _SELECT_MODIFIER.match(body)
    while match:
        keyword += " " + _words(match.group())
        body = body[match.end():].lstrip()
        match = _SELECT_MODIFIER.match(body)
    return keyword, body


def split_terminator(text, escape=False):
    """
        Separate a final ``;`` from the statement.
        Returns (statement, tail) where tail is the text after the ``;``
        (comments only), or None when the statement has no terminator.
    """
    found = [
        match for match in tu.find_top_level(text, _SEMICOLON, escape)
        if tu.code_text(text[:match.start], escape).strip()
    ]
    if not found:
        return text, None
    last = found[-1]
    tail = text[last.end:]
    if len(found) > 1 or tu.code_text(tail, escape).strip():
        raise ClauseShapeError("more than one statement")
    return text[:last.start].rstrip(), tail


def attach_terminator(rendered, tail, escape=False):
    """
        Put the ``;`` and the comments after it back at the end of rendered.
        A ``;`` that followed a line comment goes on its own line.
    """
    if tail is None:
        return rendered
    last = [seg for seg in tu.iter_segments(rendered, escape) if seg.text.strip()][-1:]
    if last and last[0].kind is tu.SegmentKind.line_comment:
        rendered += "\n;"
    else:
        rendered += ";"
    comments = tu.collapse_whitespace(tail, escape)
    if comments:
        leading = tail[:len(tail) - len(tail.lstrip())]
        rendered += ("\n" if "\n" in leading else " ") + comments
    return rendered


def split_set_operations(text, escape=False):
    """
        Split at top-level UNION [ALL] / EXCEPT / INTERSECT.
        Returns (parts, operators) with len(parts) == len(operators) + 1.
    """
    parts = []
    operators = []
    start = 0
    for match in tu.find_top_level(text, _SET_OPERATOR, escape):
        parts.append(text[start:match.start].strip())
        operators.append(_words(match.text))
        start = match.end
    parts.append(text[start:].strip())
    return parts, operators


def split_cte(text, escape=False):
    """
        Split ``[;]WITH name AS (query), ... main`` into its definitions and
        the main statement
    """
    found = tu.find_top_level(text, _WITH, escape)
    if not found:
        raise ClauseShapeError("WITH not found")
    with_match = found[0]
    head = text[:with_match.start]
    head_code = tu.code_text(head, escape)
    keyword = _words(with_match.text)
    preamble = head
    if head_code.strip() == ";":
        index = head_code.index(";")
        preamble = head[:index] + head[index + 1:]
        keyword = ";" + keyword
    elif head_code.strip():
        raise ClauseShapeError("unexpected text before WITH: %r" % head.strip())

    as_matches = tu.find_top_level(text, _AS, escape)
    definitions = []
    pos = with_match.end
    while True:
        as_match = next((match for match in as_matches if match.start >= pos), None)
        if as_match is None:
            raise ClauseShapeError("WITH definition without AS")
        name = text[pos:as_match.start]
        if not name.strip() or tu.has_comment(name, escape):
            raise ClauseShapeError("unexpected WITH definition name: %r" % name)
        rest = text[as_match.end:]
        open_index = as_match.end + len(rest) - len(rest.lstrip())
        if text[open_index:open_index + 1] != "(":
            raise ClauseShapeError("WITH definition without parenthesis")
        close_index = tu.find_matching_paren(text, open_index, escape)
        if close_index < 0:
            raise ClauseShapeError("unbalanced WITH definition")
        definitions.append(CteDefinition(
            _words(name), _words(as_match.text), text[open_index + 1:close_index].strip()))

        rest = text[close_index + 1:]
        following = rest.lstrip()
        if following.startswith(("--", "/*")):
            raise ClauseShapeError("comment between WITH definitions")
        if not following.startswith(","):
            break
        pos = close_index + 1 + len(rest) - len(following) + 1

    return CteParts(preamble.strip(), keyword, definitions, rest.strip())


def _moved_comments_end(text, pos, escape):
    """
        End of the comments right after a splitting comma that end their
        line; they stay with the item before the comma
    """
    rest = text[pos:]
    end = pos
    for seg in tu.iter_segments(rest, escape):
        if seg.is_code():
            if seg.text.strip():
                break
            continue
        if not seg.is_comment():
            break
        seg_end = seg.start + len(seg.text)
        after = rest[seg_end:]
        if seg.kind is tu.SegmentKind.line_comment \
                or not after.strip() \
                or after.lstrip(" \t")[:1] in ("\r", "\n"):
            end = pos + seg_end
        else:
            break
    return end


def split_items(text, escape=False):
    """
        Comma separated list to items.
        ``a, -- note`` keeps the note with ``a``.
    """
    if not text or not text.strip():
        return []
    pieces = []
    start = 0
    for comma in tu.find_top_level(text, _COMMA, escape):
        if comma.start < start:
            continue
        end = _moved_comments_end(text, comma.end, escape)
        pieces.append(text[start:comma.start] + text[comma.end:end])
        start = end
    pieces.append(text[start:])
    return [Item.parse(piece, escape) for piece in pieces if piece.strip()]


def split_conditions(text, escape=False):
    """
        AND / OR separated predicate to items. Every item after the first
        starts with its operator; the AND of ``BETWEEN x AND y`` never splits.
    """
    if not text or not text.strip():
        return []
    starts = [0]
    in_between = False
    for match in tu.find_top_level(text, _CONDITION, escape):
        word = match.text.upper()
        if word == "BETWEEN":
            in_between = True
        elif word == "AND" and in_between:
            in_between = False
        else:
            starts.append(match.start)
    starts.append(len(text))
    pieces = [text[begin:end] for begin, end in zip(starts, starts[1:])]
    return [Item.parse(piece, escape) for piece in pieces if piece.strip()]


def parse_from(text, escape=False):
    """
        FROM body to FromTable followed by one Join per top-level join keyword
    """
    joins = tu.find_top_level(text, _JOIN, escape)
    first_end = joins[0].start if joins else len(text)
    parts = [FromTable(Item.parse(text[:first_end], escape))]
    for index, join in enumerate(joins):
        end = joins[index + 1].start if index + 1 < len(joins) else len(text)
        body = text[join.end:end]
        found = tu.find_top_level(body, _ON, escape)
        if not found:
            parts.append(Join(_words(join.text), Item.parse(body, escape), []))
            continue
        on = found[0]
        parts.append(Join(
            _words(join.text),
            Item.parse(body[:on.start], escape),
            split_conditions(body[on.end:], escape),
            on.text))
    return parts
