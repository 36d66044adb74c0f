"""
Engine Errors
=============

Exception types raised by the orbital engine.
"""


class OrbitSimError(Exception):
    """Base class for all engine errors."""


class DegenerateStateError(OrbitSimError, ValueError):
    """
    A vector required a direction but had zero length.

    Raised instead of letting NaN propagate through gravity, thrust
    or circularization math.
    """

    def __init__(self, quantity: str, magnitude: float = 0.0):
        self.quantity = quantity
        self.magnitude = magnitude
        super().__init__(
            f"Cannot take direction of zero-length {quantity} "
            f"(|{quantity}| = {magnitude:.3e})"
        )


class ManeuverRejectedError(OrbitSimError):
    """A maneuver command was refused; raised on demand from a result."""

    def __init__(self, maneuver: str, reason: str):
        self.maneuver = maneuver
        self.reason = reason
        super().__init__(f"{maneuver} rejected: {reason}")
