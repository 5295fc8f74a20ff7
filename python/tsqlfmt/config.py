# coding:utf-8
'''
Formatter settings.
'''
from enum import Enum
from tsqlfmt.commentpolicy import LexicalCommentPolicy


class CaseMode(Enum):
    upper = 'upper'
    lower = 'lower'
    preserve = 'preserve'


class CommaPosition(Enum):
    before = 'before'
    after = 'after'


class LayoutMode(Enum):
    legacy = 'legacy'
    river = 'river'
    indent = 'indent'


# editor setting name -> setter
_SETTING_KEYS = (
    ('keywordCase', 'set_keyword_case'),
    ('functionCase', 'set_function_case'),
    ('dataTypeCase', 'set_data_type_case'),
    ('indentSize', 'set_indent_size'),
    ('commaPosition', 'set_comma_position'),
    ('alignCommas', 'set_align_commas'),
    ('alignAliases', 'set_align_aliases'),
    ('newlineAfterSelect', 'set_newline_after_select'),
    ('newlineBeforeFrom', 'set_newline_before_from'),
    ('newlineBeforeWhere', 'set_newline_before_where'),
    ('newlineBeforeGroupBy', 'set_newline_before_group_by'),
    ('newlineBeforeOrderBy', 'set_newline_before_order_by'),
    ('linesBetweenQueries', 'set_lines_between_queries'),
    ('riverColumn', 'set_river_column'),
)


class LocalConfig(object):
    """
        Settings for one format call.

        The record never changes once built; every ``set_*`` method returns
        a modified copy so calls can be chained::

            LocalConfig().set_layout('indent').set_indent_size(2)
    """

    __slots__ = (
        'keyword_case', 'function_case', 'data_type_case',
        'indent_size', 'comma_position', 'align_commas', 'align_aliases',
        'newline_after_select', 'newline_before_from', 'newline_before_where',
        'newline_before_group_by', 'newline_before_order_by',
        'lines_between_queries', 'layout', 'river_column',
        'escape_sequence_u005c', 'input_reserved_words', 'comment_policy',
    )

    def __init__(self):
        init = super(LocalConfig, self).__setattr__
        init('keyword_case', CaseMode.upper)
        init('function_case', CaseMode.upper)
        init('data_type_case', CaseMode.upper)
        init('indent_size', 4)
        init('comma_position', CommaPosition.before)
        init('align_commas', True)
        init('align_aliases', True)
        init('newline_after_select', True)
        init('newline_before_from', True)
        init('newline_before_where', True)
        init('newline_before_group_by', True)
        init('newline_before_order_by', True)
        init('lines_between_queries', 2)
        init('layout', LayoutMode.river)
        init('river_column', 7)
        init('escape_sequence_u005c', False)  # backslash escapes in literals
        init('input_reserved_words', None)
        init('comment_policy', LexicalCommentPolicy())

    def __setattr__(self, name, value):
        raise AttributeError("LocalConfig is read-only, use set_%s()" % name)

    def __eq__(self, other):
        if not isinstance(other, LocalConfig):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return "LocalConfig(%s)" % ", ".join(
            "%s=%r" % (name, getattr(self, name)) for name in self.__slots__
        )

    def _replace(self, **changes):
        copied = LocalConfig.__new__(LocalConfig)
        init = super(LocalConfig, copied).__setattr__
        for name in self.__slots__:
            init(name, changes.pop(name, getattr(self, name)))
        if changes:
            raise TypeError("unknown settings: %s" % ", ".join(sorted(changes)))
        return copied

    def set_keyword_case(self, mode):
        return self._replace(keyword_case=CaseMode(mode))

    def set_function_case(self, mode):
        return self._replace(function_case=CaseMode(mode))

    def set_data_type_case(self, mode):
        return self._replace(data_type_case=CaseMode(mode))

    def set_uppercase(self, uppercase):
        """
            True: upper case keywords, functions and data types.
            False: leave every word as written.
        """
        mode = CaseMode.upper if uppercase else CaseMode.preserve
        return self._replace(keyword_case=mode, function_case=mode, data_type_case=mode)

    def set_indent_size(self, indent_size):
        return self._replace(indent_size=_non_negative('indent_size', indent_size))

    def set_comma_position(self, position):
        return self._replace(comma_position=CommaPosition(position))

    def set_align_commas(self, align):
        return self._replace(align_commas=bool(align))

    def set_align_aliases(self, align):
        return self._replace(align_aliases=bool(align))

    def set_newline_after_select(self, newline):
        return self._replace(newline_after_select=bool(newline))

    def set_newline_before_from(self, newline):
        return self._replace(newline_before_from=bool(newline))

    def set_newline_before_where(self, newline):
        return self._replace(newline_before_where=bool(newline))

    def set_newline_before_group_by(self, newline):
        return self._replace(newline_before_group_by=bool(newline))

    def set_newline_before_order_by(self, newline):
        return self._replace(newline_before_order_by=bool(newline))

    def set_lines_between_queries(self, lines):
        return self._replace(lines_between_queries=_non_negative('lines_between_queries', lines))

    def set_layout(self, layout):
        return self._replace(layout=LayoutMode(layout))

    def set_river_column(self, column):
        if int(column) < 1:
            raise ValueError("river_column must be 1 or more: %r" % (column,))
        return self._replace(river_column=int(column))

    def set_escape_sequence_u005c(self, escape_sequence):
        return self._replace(escape_sequence_u005c=bool(escape_sequence))

    def set_input_reserved_words(self, input_reserved_words):
        words = None
        if input_reserved_words:
            words = frozenset(word.strip().upper() for word in input_reserved_words if word.strip())
        return self._replace(input_reserved_words=words or None)

    def set_comment_policy(self, comment_policy):
        return self._replace(comment_policy=comment_policy)

    @classmethod
    def from_settings(cls, settings):
        """
            Build a config from editor settings (camelCase keys).
            Missing keys keep their defaults.
        """
        local_config = cls()
        for key, setter in _SETTING_KEYS:
            if key in settings:
                local_config = getattr(local_config, setter)(settings[key])

        # river wins over indent when both are switched on
        if settings.get('useRiverFormatting', True):
            local_config = local_config.set_layout(LayoutMode.river)
        elif settings.get('useIndentFormatting', False):
            local_config = local_config.set_layout(LayoutMode.indent)
        else:
            local_config = local_config.set_layout(LayoutMode.legacy)
        return local_config


def _non_negative(name, value):
    value = int(value)
    if value < 0:
        raise ValueError("%s must not be negative: %r" % (name, value))
    return value
