"""Pure governance math - no I/O, no database, easily testable."""

from helpers import formulas, jitter, sections

__all__ = [
    "formulas",
    "jitter",
    "sections",
]
