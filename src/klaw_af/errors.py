"""Error types: dual struct+exception for structured and raise-based code."""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    'TypeMismatch',
    'TypeMismatchError',
]


class TypeMismatch(msgspec.Struct, frozen=True, gc=False):
    """Input or callable has the wrong shape - struct variant."""

    message: str
    operation: str | None = None

    def to_exception(self) -> TypeMismatchError:
        """Convert to exception for raise-based code."""
        return TypeMismatchError(self.message, self.operation)


class TypeMismatchError(TypeError):
    """Input or callable has the wrong shape - exception variant.

    Raised inside a pipeline stage, so it surfaces when the stage is awaited
    rather than from the chaining call itself.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.message = message
        self.operation = operation
        super().__init__(message)

    def to_struct(self) -> TypeMismatch:
        """Convert to struct for structured code."""
        return TypeMismatch(self.message, self.operation)

    @classmethod
    def for_shape(cls, operation: str, received: Any, *, text: bool = False) -> TypeMismatchError:
        """Build the error for a value that is not an eligible collection.

        Args:
            operation: Name of the operation that rejected the value.
            received: The rejected value, rendered with str().
            text: Whether the operation advertises text sequences as acceptable.
        """
        shapes = 'an Array, String, or array-like Object' if text else 'an Array or array-like Object'
        return cls(f'{operation} cannot be called on {received}, only on {shapes}', operation)

    @classmethod
    def for_callable(cls, value: Any, operation: str | None = None) -> TypeMismatchError:
        """Build the error for a callback that cannot be invoked by operation."""
        return cls(f'{value} is not a function', operation)
