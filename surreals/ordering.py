"""
Recursive ordering of surreal numbers stored in an arena.

Every entry is a pair {left | right} of earlier entries (or None). Conway's
rule gives the "less than or equal" relation:

    le(a, b)  <=>  (a.left is None  or not le(b, a.left))
              and  (b.right is None or not le(b.right, a))

and everything else is derived from it:

    equal(a, b)     = le(a, b) and le(b, a)
    less_than(a, b) = le(a, b) and not le(b, a)

Operands are either stored identities (ints indexing into `entries`) or an
unstored candidate Entry, so the same routine serves the intern scan before
an identity exists. Only identity/identity results are memoised.
"""

from enum import IntEnum


class Comparison(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _resolve(entries, x):
    """Return the Entry for an identity, or x itself if it is a candidate."""
    if isinstance(x, int):
        return entries[x]
    return x


def le(entries, a, b, cache=None):
    """
    Conway's a <= b over arena contents.

    Parameters:
        entries: sequence of Entry, indexed by identity
        a, b: identities (int) or candidate Entry objects
        cache: optional dict memoising (int, int) -> bool

    Returns:
        bool
    """
    key = None
    if cache is not None and isinstance(a, int) and isinstance(b, int):
        if a == b:
            return True
        key = (a, b)
        hit = cache.get(key)
        if hit is not None:
            return hit

    ea = _resolve(entries, a)
    eb = _resolve(entries, b)

    result = (
        (ea.left is None or not le(entries, b, ea.left, cache))
        and (eb.right is None or not le(entries, eb.right, a, cache))
    )

    if key is not None:
        cache[key] = result
    return result


def equal(entries, a, b, cache=None):
    return le(entries, a, b, cache) and le(entries, b, a, cache)


def less_than(entries, a, b, cache=None):
    """Strict a < b."""
    return le(entries, a, b, cache) and not le(entries, b, a, cache)


def compare(entries, a, b, cache=None):
    """Three-way comparison of a against b."""
    a_le_b = le(entries, a, b, cache)
    b_le_a = le(entries, b, a, cache)
    if a_le_b and b_le_a:
        return Comparison.EQUAL
    if a_le_b:
        return Comparison.LESS
    return Comparison.GREATER
