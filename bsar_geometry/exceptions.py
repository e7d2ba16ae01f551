# -*- coding: utf-8 -*-
"""
Exceptions - Hard failures raised by the BSAR geometry engine.

Only ill-posed inputs abort a computation. Degenerate but meaningful
results (no line of sight, infinite resolution, Doppler aliasing) are
reported as flags on the returned structures instead.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""


class BSARError(Exception):
    """Base class for errors raised by bsar_geometry."""


class InvalidCoordinate(BSARError, ValueError):
    """Geodetic latitude or longitude outside its valid range."""


class DegenerateGeometry(BSARError, ValueError):
    """
    Ill-posed bistatic triangle.

    Raised when the transmitter and receiver coincide (zero baseline) or
    when the ground point coincides with one of the platforms.
    """


__all__ = [
    "BSARError",
    "InvalidCoordinate",
    "DegenerateGeometry",
]
