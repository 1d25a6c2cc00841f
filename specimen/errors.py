"""
Error types raised at the engine boundary.

Everything inside the engine is total; these are only raised when a caller
hands in something that breaks the input contract (bad genome, malformed
rule record).
"""

from typing import List, Optional


class SpecimenError(Exception):
    """Base class for all specimen engine errors."""


class InvalidInputError(SpecimenError, ValueError):
    """Caller contract violation."""


class InvalidGenomeError(InvalidInputError):
    """Genome has the wrong length or contains foreign symbols."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        base = super().__str__()
        if self.errors:
            return f"{base}: {'; '.join(self.errors)}"
        return base


class InvalidRuleError(InvalidInputError):
    """Ability or ability rule record is malformed."""


__all__ = [
    'SpecimenError',
    'InvalidInputError',
    'InvalidGenomeError',
    'InvalidRuleError',
]
