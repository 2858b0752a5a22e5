"""Errors raised by the position model."""


class InvalidPosition(ValueError):
    """A node is unreachable from ground, or the graph is malformed."""


class InvalidMove(ValueError):
    """The edge handle is not present in the position."""
