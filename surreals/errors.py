"""Errors raised by the surreal arena."""


class ArenaInvariantViolation(RuntimeError):
    """An intern request could not be matched to any constructible value.

    Raised when the operands are unknown identities, when they are inverted
    (right <= left), or when growth passes the day on which the requested
    value must have been born without finding it.
    """
