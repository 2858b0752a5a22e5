"""
Surreal numbers as a growing, canonical arena.

Values are built by Conway's construction {L | R}, interned so that every
number has exactly one identity, and ordered purely by the recursive rule.
"""

from surreals.arena import Arena, Entry
from surreals.errors import ArenaInvariantViolation
from surreals.ordering import Comparison
from surreals.value import Surreal

__all__ = ['Arena', 'Entry', 'ArenaInvariantViolation', 'Comparison', 'Surreal']
