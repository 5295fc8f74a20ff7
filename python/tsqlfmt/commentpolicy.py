# coding:utf-8
'''
Comment attachment policies.

A policy decides whether a comment line belongs to the statement being
collected or stands on its own. The segmenter asks while splitting blocks,
the joiner asks again to choose the spacing around comment blocks.
'''
from tsqlfmt import keywords
from tsqlfmt import tokenutils as tu


# pylint: disable=unused-argument
class CommentPolicy(object):
    """
        Every comment stands on its own
    """

    def is_part_of_statement(self, statement_text, following_lines):
        return False

    def is_standalone(self, following_lines):
        return True

    def __eq__(self, other):
        return type(self) is type(other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(type(self))
# pylint: enable=unused-argument


class LexicalCommentPolicy(CommentPolicy):
    """
        Lexical look-around heuristic.

        A comment belongs to the statement when the collected text already
        holds a statement keyword, or when the next code line continues a
        statement. It stands on its own when the next code line starts a new
        statement, or when no code follows at all.
    """

    CONTINUATION = 'continuation'
    NEW_STATEMENT = 'new_statement'
    OTHER = 'other'

    def __init__(self, escape=False):
        self.escape = escape

    def is_part_of_statement(self, statement_text, following_lines):
        if statement_text.strip() and tu.contains_word(
                tu.code_text(statement_text, self.escape), keywords.STATEMENT_WORDS):
            return True
        return self.classify_next(following_lines) in (self.CONTINUATION, self.OTHER)

    def is_standalone(self, following_lines):
        return self.classify_next(following_lines) in (self.NEW_STATEMENT, None)

    def classify_next(self, following_lines):
        """
            classify the first code found in following_lines
        """
        code = tu.first_code(following_lines, self.escape)
        if code is None:
            return None
        if tu.startswith_word(code, keywords.CONTINUATION_STARTS) \
                or tu.contains_word(code, ("THEN", "ELSE")) \
                or "," in code:
            return self.CONTINUATION
        if tu.startswith_word(code, keywords.NEW_STATEMENT_STARTS):
            return self.NEW_STATEMENT
        return self.OTHER
