from kappa import LispValue


class TailCall:
    """Request from a builtin to apply `fn` to an already evaluated argument list.

    The evaluator consumes it in its apply step instead of recursing.
    """

    __slots__ = ("fn", "args")

    def __init__(self, fn: LispValue, args: LispValue):
        self.fn = fn
        self.args = args
