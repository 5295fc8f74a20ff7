# coding:utf-8
'''
Block formatter.

Segments a script, renders every block by its kind and joins the blocks
back together. A block that can not be rendered safely falls back to its
original text with only keyword casing applied.
'''
import logging
from itertools import chain
from tsqlfmt import expressions, filters, grouping, layouts
from tsqlfmt import tokenutils as tu
from tsqlfmt.exceptions import ClauseShapeError, SqlFormatterException, TokenMismatchError
from tsqlfmt.segmenter import BlockSegmenter
from tsqlfmt.sql import BlockKind, BlockResult, ClauseKind

logger = logging.getLogger(__name__)


class SqlFormatter(object):
    """
        Formats T-SQL scripts with one LocalConfig
    """

    def __init__(self, local_config):
        self.local_config = local_config
        self.escape = local_config.escape_sequence_u005c
        self.segmenter = BlockSegmenter(local_config)
        self.layout = layouts.get_layout(local_config)
        self.preprocess = [filters.KeywordCaseFilter(local_config)]
        self.postprocess = [filters.TrailingWhitespaceFilter(local_config)]
        self.renderers = {
            BlockKind.comment: self.render_comment,
            BlockKind.line_comment_group: self.render_comment,
            BlockKind.simple_select: self.render_select_statement,
            BlockKind.cte_statement: self.render_cte_statement,
            BlockKind.cursor_statement: self.render_passthrough,
            BlockKind.declare_group: self.render_passthrough,
            BlockKind.complex_statement: self.render_passthrough,
            BlockKind.generic_statement: self.render_passthrough,
        }
        self._render_block = SqlFormatterException.to_wrap_try_except(self._render_block, 0)

    def format(self, sql):
        return self.render(sql, self.format_blocks(sql))

    def render(self, sql, results):
        """
            Output text of sql from its block results
        """
        if not sql.strip():
            return sql
        newline = tu.line_break(sql, self.escape)
        text = tu.convert_line_breaks(self.join(results), newline, self.escape)
        if sql.endswith("\r\n"):
            text += "\r\n"
        elif sql.endswith("\n"):
            text += "\n"
        return text

    def format_blocks(self, sql):
        results = []
        for index, block in enumerate(self.segmenter.segment(sql)):
            try:
                results.append(BlockResult(block, self._render_block(block), None))
            except SqlFormatterException as ex:
                logger.debug("block %d (%s) kept as written: %s", index, block.kind.value, ex.message)
                results.append(BlockResult(block, self.fallback(block), ex))
        return results

    def _render_block(self, block):
        return self.renderers[block.kind](block.content)

    def fallback(self, block):
        try:
            return self.render_passthrough(block.content)
        except Exception:  # pylint: disable=broad-except
            logger.exception("casing failed, block kept as written")
            return block.content

    def join(self, results):
        blocks = [result.block for result in results]
        pieces = []
        for index, result in enumerate(results):
            if index:
                pieces.append("\n" * (self.blank_lines(blocks, index) + 1))
            pieces.append(result.text)
        return "".join(pieces)

    def blank_lines(self, blocks, index):
        """
            Blank lines between blocks[index - 1] and blocks[index]
        """
        previous = blocks[index - 1]
        current = blocks[index]
        if not previous.is_comment() and not current.is_comment():
            return self.local_config.lines_between_queries
        if previous.is_comment() and current.is_comment():
            return 1
        comment_index = index - 1 if previous.is_comment() else index
        following = chain.from_iterable(block.lines() for block in blocks[comment_index + 1:])
        if self.local_config.comment_policy.is_standalone(following):
            return self.local_config.lines_between_queries
        return 1

    def preprocess_text(self, text):
        for stream_filter in self.preprocess:
            text = stream_filter.process(text)
        return text

    def postprocess_text(self, text):
        for stream_filter in self.postprocess:
            text = stream_filter.process(text)
        return text

    def render_comment(self, content):
        return content

    def render_passthrough(self, content):
        return self.postprocess_text(self.preprocess_text(content))

    def render_select_statement(self, content):
        cased = self.preprocess_text(content)
        body, tail = grouping.split_terminator(cased, self.escape)
        rendered = grouping.attach_terminator(self.render_query(body), tail, self.escape)
        self.verify(cased, rendered)
        return self.postprocess_text(rendered)

    def render_cte_statement(self, content):
        cased = self.preprocess_text(content)
        body, tail = grouping.split_terminator(cased, self.escape)
        self.check_shape(body)
        parts = grouping.split_cte(body, self.escape)
        indent = " " * self.local_config.indent_size
        comma_before = self.layout.comma_before

        lines = self.preamble_lines(parts.preamble)
        for index, definition in enumerate(parts.definitions):
            head = "%s %s (" % (definition.name, definition.keyword)
            if index == 0:
                self.join_line(lines, [parts.keyword + " " + head])
            else:
                lines.append(", " + head if comma_before else head)
            if self.is_select(definition.body):
                lines.append(layouts.indent_block(self.render_query(definition.body), indent, self.escape))
            else:
                lines.append(layouts.indent_block(definition.body, indent, self.escape, dedent=True))
            last = index == len(parts.definitions) - 1
            lines.append(")" if last or comma_before else "),")
        if parts.main:
            lines.append(self.render_query(parts.main) if self.is_select(parts.main) else parts.main)

        rendered = grouping.attach_terminator("\n".join(lines), tail, self.escape)
        self.verify(cased, rendered)
        return self.postprocess_text(rendered)

    def is_select(self, text):
        return tu.startswith_word(tu.code_text(text, self.escape).strip(), "SELECT") is not None

    def render_query(self, text):
        """
            SELECT, or SELECTs joined by UNION [ALL] / EXCEPT / INTERSECT
        """
        self.check_shape(text)
        parts, operators = grouping.split_set_operations(text, self.escape)
        lines = [self.render_select(parts[0])]
        for operator, part in zip(operators, parts[1:]):
            lines.append(operator)
            lines.append(self.render_select(part))
        return "\n".join(lines)

    def render_select(self, text):
        components = grouping.extract_components(text, self.escape)
        lines = self.preamble_lines(components.preamble)
        for clause, keyword, body in components.clauses():
            clause_lines = self.layout.render_clause(clause, keyword, self.clause_items(clause, body))
            if clause is ClauseKind.select or not self.newline_before(clause):
                self.join_line(lines, clause_lines)
            else:
                lines.extend(clause_lines)
        return "\n".join(lines)

    def preamble_lines(self, preamble):
        if not preamble:
            return []
        return tu.collapse_whitespace(preamble, self.escape).split("\n")

    def join_line(self, lines, new_lines):
        """
            Continue the last of lines with the first of new_lines, unless
            that line ends in a line comment
        """
        if lines and not tu.has_line_comment(lines[-1], self.escape):
            lines[-1] = lines[-1] + " " + new_lines[0].lstrip()
            new_lines = new_lines[1:]
        lines.extend(new_lines)

    def clause_items(self, clause, body):
        if clause is ClauseKind.from_:
            return grouping.parse_from(body, self.escape)
        if clause in (ClauseKind.where, ClauseKind.having):
            return grouping.split_conditions(body, self.escape)
        items = grouping.split_items(body, self.escape)
        if clause is ClauseKind.select:
            items = expressions.reflow_select_items(items, self.local_config)
        return items

    def newline_before(self, clause):
        cfg = self.local_config
        return {
            ClauseKind.from_: cfg.newline_before_from,
            ClauseKind.where: cfg.newline_before_where,
            ClauseKind.group_by: cfg.newline_before_group_by,
            ClauseKind.order_by: cfg.newline_before_order_by,
        }.get(clause, True)

    def check_shape(self, text):
        if tu.find_unterminated(text, self.escape) is not None:
            raise ClauseShapeError("unterminated literal or comment")
        if not tu.is_balanced(text, self.escape):
            raise ClauseShapeError("unbalanced parentheses")

    def verify(self, before, after):
        expected = tu.token_signature(before)
        actual = tu.token_signature(after)
        if expected != actual:
            raise TokenMismatchError(
                list((expected - actual).elements()), list((actual - expected).elements()))
