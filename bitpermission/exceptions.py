"""
Exceptions raised by BitPermission.

Each error also derives from the builtin exception a caller would
naturally catch for it (ValueError / TypeError).
"""


class BitPermissionError(Exception):
    """Base class for all BitPermission errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(BitPermissionError, ValueError):
    """Raised when a catalogue or registry is built from invalid input."""


class NullReferenceError(BitPermissionError, TypeError):
    """Raised when a required value is missing (None)."""


class MalformedBitmaskError(BitPermissionError, ValueError):
    """Raised when bitmask text is not a valid radix-32 integer."""


class MalformedWireFormatError(BitPermissionError, ValueError):
    """Raised when a serialized BitPermission violates the domain@revision format."""
