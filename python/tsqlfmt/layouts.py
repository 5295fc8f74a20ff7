# coding:utf-8
'''
Clause layouts.

A layout turns one clause (its keyword as written plus its items) into
output lines. Three layouts are available:

legacy
    keyword on its own line, items under a fixed indent of 4::

        SELECT
              a
            , b
        FROM t
            INNER JOIN u
                ON u.id = t.id

river
    clause keywords after SELECT start on the river column, separators are
    right aligned so the item text of one clause lines up::

        SELECT a
             , b
              FROM t
              INNER JOIN u
                  ON u.id = t.id
                 AND u.k = 1
              WHERE a = 1
                AND b = 2

indent
    keyword on its own line, every item indented by ``indent_size``
'''
import re
from tsqlfmt import tokenutils as tu
from tsqlfmt.config import CommaPosition, LayoutMode
from tsqlfmt.sql import ClauseKind, FromPartKind


_OPERATOR = re.compile(r"(AND|OR)(?![\w@#$])\s*", re.IGNORECASE)


def indent_block(text, prefix, escape=False, dedent=False):
    """
        Prefix every line of text that does not start inside a quoted
        literal or block comment. With dedent, existing indentation of
        those lines is dropped first.
    """
    scanner = tu.Scanner(escape)
    lines = []
    for line in text.split("\n"):
        starts_open = scanner.is_open()
        scanner.feed(line + "\n")
        if not starts_open:
            if dedent:
                line = line.lstrip()
            if line:
                line = prefix + line
        lines.append(line)
    return "\n".join(lines)


class Layout(object):
    """
        Base of the layouts. Subclasses render comma lists, AND / OR
        condition lists and FROM / JOIN parts.
    """

    def __init__(self, local_config):
        self.local_config = local_config
        self.escape = local_config.escape_sequence_u005c
        self.comma_before = local_config.comma_position is CommaPosition.before

    def render_clause(self, clause, keyword, items):
        if clause is ClauseKind.from_:
            return self.render_from(keyword, items)
        if clause in (ClauseKind.where, ClauseKind.having):
            return self.render_conditions(clause, keyword, items)
        return self.render_list(clause, keyword, items)

    def render_list(self, clause, keyword, items):
        raise NotImplementedError()

    def render_conditions(self, clause, keyword, items):
        raise NotImplementedError()

    def render_from(self, keyword, parts):
        raise NotImplementedError()

    def place(self, lead, text):
        """
            lead + first line of text; the other lines continue under the
            column where the text started
        """
        column = " " * len(lead)
        scanner = tu.Scanner(self.escape)
        lines = []
        for index, line in enumerate(text.split("\n")):
            starts_open = scanner.is_open()
            scanner.feed(line + "\n")
            if index == 0:
                line = lead + line
            elif line and not starts_open:
                line = column + line
            if not scanner.is_open():
                line = line.rstrip()
            lines.append(line)
        return lines

    def item_text(self, item, comma=False):
        text = item.text
        if comma:
            text = tu.append_after_code(text, ",", self.escape)
        if item.comment:
            text += " " + item.comment
        return text

    def comma_list(self, items, first_lead, next_lead):
        lines = []
        for index, item in enumerate(items):
            last = index == len(items) - 1
            text = self.item_text(item, comma=not (self.comma_before or last))
            lines.extend(self.place(first_lead if index == 0 else next_lead, text))
        return lines


def split_operator(text):
    """
        'AND x = 1' -> ('AND', 'x = 1')
    """
    match = _OPERATOR.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end():]


class IndentLayout(Layout):

    def indent(self):
        return self.local_config.indent_size

    def first_item_lead(self):
        return " " * self.indent()

    def render_list(self, clause, keyword, items):
        indent = " " * self.indent()
        next_lead = indent + ", " if self.comma_before else indent
        if not items:
            return [keyword]
        if clause is ClauseKind.select and not self.local_config.newline_after_select:
            return self.comma_list(items, keyword + " ", next_lead)
        return [keyword] + self.comma_list(items, self.first_item_lead(), next_lead)

    def render_conditions(self, clause, keyword, items):
        indent = " " * self.indent()
        lines = [keyword]
        for item in items:
            lines.extend(self.place(indent, self.item_text(item)))
        return lines

    def render_from(self, keyword, parts):
        indent = " " * self.indent()
        lines = []
        for part in parts:
            if part.kind is FromPartKind.table:
                lines.extend(self.from_table_lines(keyword, part.table))
                continue
            lines.extend(self.place(indent + part.join_type + " ", self.item_text(part.table)))
            for index, condition in enumerate(part.conditions):
                lead = indent * 2
                if index == 0:
                    lead += part.on_keyword + " "
                lines.extend(self.place(lead, self.item_text(condition)))
        return lines

    def from_table_lines(self, keyword, table):
        if not table.text:
            return [keyword]
        return [keyword] + self.place(" " * self.indent(), self.item_text(table))


class LegacyLayout(IndentLayout):
    """
        Fixed indent of 4; with leading commas the first item is pushed
        right so it lines up with the items after ``, ``.
        The first table stays on the FROM line.
    """

    def indent(self):
        return 4

    def first_item_lead(self):
        if self.comma_before and self.local_config.align_commas:
            return " " * 6
        return " " * 4

    def from_table_lines(self, keyword, table):
        if not table.text:
            return [keyword]
        return self.place(keyword + " ", self.item_text(table))


class RiverLayout(Layout):
    """
        SELECT starts at column 0, every other clause keyword at the river
        column. ON sits one indent right of the river.
    """

    def __init__(self, local_config):
        super(RiverLayout, self).__init__(local_config)
        self.river = local_config.river_column - 1

    def base(self, clause):
        return 0 if clause is ClauseKind.select else self.river

    def render_list(self, clause, keyword, items):
        head = " " * self.base(clause) + keyword
        if not items:
            return [head]
        column = len(head) + 1
        if self.comma_before:
            next_lead = " " * max(column - 2, 0) + ", "
        else:
            next_lead = " " * column
        return self.comma_list(items, head + " ", next_lead)

    def render_conditions(self, clause, keyword, items):
        head = " " * self.base(clause) + keyword
        if not items:
            return [head]
        return self.condition_lines(head + " ", items)

    def condition_lines(self, first_lead, items):
        column = len(first_lead)
        lines = []
        for index, item in enumerate(items):
            text = self.item_text(item)
            if index == 0:
                lines.extend(self.place(first_lead, text))
                continue
            operator, rest = split_operator(text)
            if operator is None:
                lines.extend(self.place(" " * column, text))
            else:
                lead = " " * max(column - 1 - len(operator), 0) + operator + " "
                lines.extend(self.place(lead, rest))
        return lines

    def render_from(self, keyword, parts):
        river = " " * self.river
        on_lead = " " * (self.river + self.local_config.indent_size)
        lines = []
        for part in parts:
            if part.kind is FromPartKind.table:
                if part.table.text:
                    lines.extend(self.place(river + keyword + " ", self.item_text(part.table)))
                else:
                    lines.append(river + keyword)
                continue
            lines.extend(self.place(river + part.join_type + " ", self.item_text(part.table)))
            if part.conditions:
                lines.extend(self.condition_lines(on_lead + part.on_keyword + " ", part.conditions))
        return lines


_LAYOUTS = {
    LayoutMode.legacy: LegacyLayout,
    LayoutMode.river: RiverLayout,
    LayoutMode.indent: IndentLayout,
}


def get_layout(local_config):
    return _LAYOUTS[local_config.layout](local_config)
