# coding:utf-8
'''
Fixed word tables used for casing and statement recognition.
'''

KEYWORDS = frozenset((
    'SELECT', 'FROM', 'WHERE', 'INSERT', 'UPDATE', 'DELETE', 'CREATE', 'ALTER', 'DROP',
    'TABLE', 'INDEX', 'VIEW', 'PROCEDURE', 'FUNCTION', 'TRIGGER', 'DATABASE', 'SCHEMA',
    'JOIN', 'INNER', 'LEFT', 'RIGHT', 'FULL', 'OUTER', 'CROSS', 'APPLY', 'ON', 'AS',
    'GROUP', 'BY', 'ORDER', 'HAVING', 'UNION', 'ALL', 'DISTINCT', 'TOP', 'PERCENT', 'TIES',
    'EXCEPT', 'INTERSECT',
    'INTO', 'VALUES', 'SET', 'CASE', 'WHEN', 'THEN', 'ELSE', 'END',
    'IF', 'WHILE', 'FOR', 'DECLARE', 'BEGIN', 'TRY', 'CATCH', 'RETURN',
    'AND', 'OR', 'NOT', 'IN', 'EXISTS', 'BETWEEN', 'LIKE', 'IS', 'NULL',
    'PRIMARY', 'KEY', 'FOREIGN', 'REFERENCES', 'CONSTRAINT', 'UNIQUE', 'CHECK',
    'DEFAULT', 'IDENTITY', 'AUTO_INCREMENT', 'WITH', 'CTE', 'RECURSIVE',
    'OVER', 'PARTITION', 'ROWS', 'RANGE', 'PRECEDING', 'FOLLOWING', 'UNBOUNDED',
    'ASC', 'DESC', 'EXEC', 'EXECUTE', 'PRINT', 'TRUNCATE', 'MERGE', 'USING', 'MATCHED',
    'OUTPUT', 'ADD', 'COLUMN', 'RETURNS',
    'CURSOR', 'OPEN', 'FETCH', 'NEXT', 'CLOSE', 'DEALLOCATE',
))

# only cased when followed by "("
FUNCTIONS = frozenset((
    'ABS', 'AVG', 'CAST', 'CEILING', 'CHARINDEX', 'COALESCE', 'CONCAT', 'CONVERT', 'COUNT',
    'COUNT_BIG', 'CUME_DIST', 'DATEADD', 'DATEDIFF', 'DATENAME', 'DATEPART', 'DAY',
    'DENSE_RANK', 'EOMONTH', 'FIRST_VALUE', 'FLOOR', 'FORMAT', 'GETDATE', 'GETUTCDATE',
    'IIF', 'ISNULL', 'LAG', 'LAST_VALUE', 'LEAD', 'LEFT', 'LEN', 'LOWER', 'LTRIM', 'MAX',
    'MIN', 'MONTH', 'NEWID', 'NTILE', 'NULLIF', 'PERCENT_RANK', 'RANK', 'REPLACE',
    'REPLICATE', 'RIGHT', 'ROUND', 'ROW_NUMBER', 'RTRIM', 'STDEV', 'STRING_AGG', 'STUFF',
    'SUBSTRING', 'SUM', 'SYSDATETIME', 'TRIM', 'TRY_CAST', 'TRY_CONVERT', 'UPPER', 'VAR',
    'YEAR',
))

# only cased where a type can appear
DATA_TYPES = frozenset((
    'BIGINT', 'BINARY', 'BIT', 'CHAR', 'DATE', 'DATETIME', 'DATETIME2', 'DATETIMEOFFSET',
    'DECIMAL', 'FLOAT', 'IMAGE', 'INT', 'INTEGER', 'MONEY', 'NCHAR', 'NTEXT', 'NUMERIC',
    'NVARCHAR', 'REAL', 'SMALLDATETIME', 'SMALLINT', 'SMALLMONEY', 'SQL_VARIANT', 'TEXT',
    'TIME', 'TINYINT', 'UNIQUEIDENTIFIER', 'VARBINARY', 'VARCHAR', 'XML',
))

# words that begin a new top-level statement at the start of a line
STATEMENT_STARTS = (
    'SELECT', 'WITH', 'INSERT', 'UPDATE', 'DELETE', 'CREATE', 'ALTER', 'DROP', 'DECLARE',
    'OPEN', 'FETCH', 'CLOSE', 'DEALLOCATE', 'WHILE', 'BEGIN', 'END',
    'IF', 'ELSE', 'EXEC', 'EXECUTE', 'PRINT', 'GO', 'TRUNCATE', 'MERGE', 'USE',
)

CURSOR_STARTS = ('OPEN', 'FETCH', 'CLOSE', 'DEALLOCATE')

COMPLEX_MARKERS = ('CREATE', 'ALTER', 'INSERT', 'UPDATE', 'DELETE')

# comment attachment vocabularies
STATEMENT_WORDS = ('SELECT', 'INSERT', 'UPDATE', 'DELETE', 'CREATE', 'ALTER', 'WITH', 'DECLARE')

CONTINUATION_STARTS = (
    'CASE', 'WHEN', 'FROM', 'WHERE', 'JOIN', 'INNER', 'LEFT', 'RIGHT', 'GROUP', 'ORDER',
    'HAVING', 'UNION', 'END',
)

NEW_STATEMENT_STARTS = ('SELECT', 'INSERT', 'UPDATE', 'DELETE', 'CREATE', 'ALTER', 'DROP', 'WITH')
