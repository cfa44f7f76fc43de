from __future__ import annotations


class NilType:
    """The empty list and the only false value. There is exactly one instance."""

    __slots__ = ()
    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "NIL"
    def __bool__(self): return False

    def __copy__(self): return self
    def __deepcopy__(self, memo): return self
    def __reduce__(self): return (NilType, ())


Nil = NilType()
