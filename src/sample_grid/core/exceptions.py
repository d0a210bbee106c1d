"""Exception types raised by the sample grid core."""

from typing import Optional


class SampleGridError(Exception):
    """Base class for all sample grid failures."""


class MalformedMapError(SampleGridError, ValueError):
    """Map text, map file or belief matrix cannot be turned into a grid."""


class OutOfBoundsError(SampleGridError, IndexError):
    """A coordinate (or rectangle) falls outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int,
                 message: Optional[str] = None):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        if message is None:
            message = f"Cell ({x}, {y}) is outside a {width}x{height} grid"
        super().__init__(message)


class DegenerateUpdateError(SampleGridError, ArithmeticError):
    """Kalman update with zero covariance and zero measurement noise (0/0 gain)."""
