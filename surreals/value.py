"""Public handle for a value living in an Arena."""

from functools import total_ordering

from surreals.ordering import Comparison


@total_ordering
class Surreal:
    """
    An (arena, identity) pair.

    Arena identities are canonical (no two are equal as numbers), so equality
    and hashing use the identity directly. Ordering always goes through the
    arena's recursive rule.
    """

    __slots__ = ('arena', 'index')

    def __init__(self, arena, index):
        self.arena = arena
        self.index = index

    @classmethod
    def zero(cls, arena):
        return cls(arena, 0)

    @classmethod
    def from_options(cls, arena, left=None, right=None):
        """Intern {left | right} where left/right are Surreal or None."""
        for side in (left, right):
            if side is not None and side.arena is not arena:
                raise ValueError("Surreal options belong to a different arena")
        idx = arena.intern(
            left.index if left is not None else None,
            right.index if right is not None else None,
        )
        return cls(arena, idx)

    def _check_same_arena(self, other):
        if not isinstance(other, Surreal):
            return NotImplemented
        if other.arena is not self.arena:
            raise ValueError("Cannot compare surreals from different arenas")
        return None

    @property
    def left(self):
        e = self.arena.entry(self.index)
        return None if e.left is None else Surreal(self.arena, e.left)

    @property
    def right(self):
        e = self.arena.entry(self.index)
        return None if e.right is None else Surreal(self.arena, e.right)

    def birthday(self):
        return self.arena.birthday(self.index)

    def compare(self, other):
        """Return Comparison.LESS / EQUAL / GREATER of self against other."""
        if self._check_same_arena(other) is NotImplemented:
            raise TypeError(f"Cannot compare Surreal with {type(other).__name__}")
        return self.arena.compare(self.index, other.index)

    def approximate_real(self):
        """Float for display only; not authoritative for order or identity."""
        return self.arena.approximate_real(self.index)

    def __eq__(self, other):
        if not isinstance(other, Surreal):
            return NotImplemented
        return self.arena is other.arena and self.index == other.index

    def __hash__(self):
        return hash((id(self.arena), self.index))

    def __lt__(self, other):
        if self._check_same_arena(other) is NotImplemented:
            return NotImplemented
        return self.arena.less_than(self.index, other.index)

    def __le__(self, other):
        if self._check_same_arena(other) is NotImplemented:
            return NotImplemented
        return self.arena.le(self.index, other.index)

    def __repr__(self):
        return f"Surreal(#{self.index}, ~{self.approximate_real():g})"
