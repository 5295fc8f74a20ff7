# coding:utf-8
'''
T-SQL formatter.

Reformats the SELECT statements of a T-SQL script and leaves everything
else as written, apart from keyword casing.
'''


__version__ = '0.1.0'

import logging
from tsqlfmt.config import LocalConfig
from tsqlfmt.formatter import SqlFormatter

logger = logging.getLogger(__name__)


def format_sql(sql, local_config=LocalConfig()):
    """
        Formatted sql. Never raises: on any failure the input comes back
        unchanged.
    """
    if not sql or not sql.strip():
        return sql
    try:
        return SqlFormatter(local_config).format(sql)
    except Exception:  # pylint: disable=broad-except
        logger.exception("formatting failed, input returned unchanged")
        return sql


def format_blocks(sql, local_config=LocalConfig()):
    """
        BlockResult of every block of sql, in document order
    """
    return SqlFormatter(local_config).format_blocks(sql)
