# coding:utf-8
'''
Formatter errors.
'''
import traceback


class SqlFormatterException(Exception):
    '''
        Wraps any error raised while a block was being formatted
    '''

    def __init__(self, block, ex, trace):
        super(SqlFormatterException, self).__init__(str(ex))
        self.block = block
        self.e = ex
        self.trace = str(trace)
        self.message = str(ex)

    def __str__(self, *args):
        return self.message \
                + "\nblock:" + str(getattr(self.block, "content", self.block)) \
                + "\ntrace:" + self.trace \
                + "\noriginal:" + repr(self.e)

    @staticmethod
    def to_wrap_try_except(fnc, block_arg_index):
        def call(*args):
            try:
                return fnc(*args)
            except Exception as ex:
                if not isinstance(ex, SqlFormatterException):
                    raise SqlFormatterException(args[block_arg_index], ex, traceback.format_exc())
                raise
        return call


class ClauseShapeError(ValueError):
    '''
        The statement does not have a shape the clause formatter handles
        (text before SELECT, a second statement, a malformed WITH list)
    '''


class TokenMismatchError(ValueError):
    '''
        The rendered text lost or gained a token
    '''

    def __init__(self, missing, added):
        super(TokenMismatchError, self).__init__(
            "token mismatch: missing %r, added %r" % (sorted(missing), sorted(added))
        )
        self.missing = missing
        self.added = added
