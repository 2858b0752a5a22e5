"""
Canonical arena of surreal numbers, grown one day at a time.

The arena stores every value constructed so far as an immutable Entry and
hands out its index as the value's identity. New entries only appear through
`advance_generation`, which inserts a value between every adjacent pair of
the sorted frontier plus one below and one above it. `intern` folds an
arbitrary {left | right} construction into the unique existing identity it
is equal to, growing the arena until that value has been born.

An Arena is an ordinary object: construct one and pass it to whatever needs
it. All mutation and ordering reads are serialised under a single lock.
"""

import threading
from dataclasses import dataclass
from typing import Optional

from surreals import ordering
from surreals.errors import ArenaInvariantViolation


@dataclass(frozen=True)
class Entry:
    """{left | right}; day is None for a candidate not yet in the arena."""
    left: Optional[int] = None
    right: Optional[int] = None
    day: Optional[int] = None


class Arena:
    """Append-only table of surreal numbers organised by birthday."""

    def __init__(self):
        self._lock = threading.RLock()
        self.seed()

    def seed(self):
        """Reset to day 0: a single entry, zero = {|}."""
        with self._lock:
            self._entries = [Entry(None, None, 0)]
            self._frontier = [0]
            self._day = 0
            self._le_cache = {}
            self._interned = {(None, None): 0}
            self._approx = {0: 0.0}

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def __len__(self):
        return len(self._entries)

    @property
    def day(self):
        return self._day

    @property
    def lock(self):
        return self._lock

    def entry(self, index):
        return self._entries[index]

    def birthday(self, index):
        return self._entries[index].day

    def frontier(self):
        """Sorted copy of every identity materialised so far, least first."""
        with self._lock:
            return list(self._frontier)

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def advance_generation(self):
        """Materialise the next day and return its new identities."""
        with self._lock:
            day = self._day + 1
            old = self._frontier
            new_frontier = []
            added = []

            def _append(left, right):
                self._entries.append(Entry(left, right, day))
                idx = len(self._entries) - 1
                added.append(idx)
                return idx

            new_frontier.append(_append(None, old[0]))
            for a, b in zip(old, old[1:]):
                new_frontier.append(a)
                new_frontier.append(_append(a, b))
            new_frontier.append(old[-1])
            new_frontier.append(_append(old[-1], None))

            self._frontier = new_frontier
            self._day = day
            return added

    # ------------------------------------------------------------------
    # Ordering over stored identities and candidates
    # ------------------------------------------------------------------

    def le(self, a, b):
        with self._lock:
            return ordering.le(self._entries, a, b, self._le_cache)

    def less_than(self, a, b):
        with self._lock:
            return ordering.less_than(self._entries, a, b, self._le_cache)

    def equal(self, a, b):
        with self._lock:
            return ordering.equal(self._entries, a, b, self._le_cache)

    def compare(self, a, b):
        with self._lock:
            return ordering.compare(self._entries, a, b, self._le_cache)

    # ------------------------------------------------------------------
    # Interning
    # ------------------------------------------------------------------

    def _check_operand(self, x, side):
        if x is None:
            return
        if not isinstance(x, int) or not 0 <= x < len(self._entries):
            raise ArenaInvariantViolation(
                f"{side} operand {x!r} is not an identity in this arena "
                f"(size {len(self._entries)})"
            )

    def intern(self, left, right):
        """
        Return the identity equal to the construction {left | right}.

        Parameters:
            left: identity of the left option, or None
            right: identity of the right option, or None

        Returns:
            int identity of an existing (possibly newly grown) entry.

        Raises:
            ArenaInvariantViolation: unknown or inverted operands, or growth
            passed the value's birthday without a match.
        """
        with self._lock:
            self._check_operand(left, 'left')
            self._check_operand(right, 'right')

            memo = self._interned.get((left, right))
            if memo is not None:
                return memo

            if left is not None and right is not None and self.le(right, left):
                raise ArenaInvariantViolation(
                    f"cannot intern {{{left} | {right}}}: right <= left"
                )

            # The simplest number strictly between values born by day n is
            # born by day n+1.
            operand_days = [self._entries[x].day for x in (left, right) if x is not None]
            last_day = max(operand_days, default=0) + 1

            candidate = Entry(left, right)
            start = 0
            while True:
                for idx in range(start, len(self._entries)):
                    if ordering.equal(self._entries, candidate, idx, self._le_cache):
                        self._interned[(left, right)] = idx
                        return idx
                if self._day >= last_day:
                    raise ArenaInvariantViolation(
                        f"no value equal to {{{left} | {right}}} by day {self._day}"
                    )
                start = len(self._entries)
                self.advance_generation()

    # ------------------------------------------------------------------
    # Display only
    # ------------------------------------------------------------------

    def approximate_real(self, index):
        """
        Advisory float for display. Never used for ordering or identity.

        Exact for entries produced by advance_generation: {a|} is a+1,
        {|b} is b-1 and {a|b} is the midpoint of its frontier neighbours.
        """
        with self._lock:
            cached = self._approx.get(index)
            if cached is not None:
                return cached
            e = self._entries[index]
            if e.left is None and e.right is None:
                value = 0.0
            elif e.right is None:
                value = self.approximate_real(e.left) + 1.0
            elif e.left is None:
                value = self.approximate_real(e.right) - 1.0
            else:
                value = (self.approximate_real(e.left) + self.approximate_real(e.right)) / 2.0
            self._approx[index] = value
            return value
