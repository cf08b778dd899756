from __future__ import annotations


class NilType:
    """The unit value. Only equal to itself, falsey, and never a number."""

    __slots__ = ()

    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
