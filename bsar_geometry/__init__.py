# -*- coding: utf-8 -*-
"""
bsar-geometry - Bistatic SAR acquisition geometry engine.

Computes, for a transmitter and a receiver flying straight level tracks
over a local tangent plane, the bistatic range, angle and bisector at a
ground point, the iso-range / iso-Doppler ground loci, and the range,
cross-range and Doppler performance of the configuration.

Modules
-------
geometry : Reference frames, trajectories, bistatic solver and resolution
io : YAML scenario files
snapshot : Immutable per-instant geometry snapshots
utils : Constants and helper functions
exceptions : Error hierarchy
logging_config : Console / file logging setup

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

__version__ = "0.1.0"

from bsar_geometry import geometry, io, utils, snapshot
from bsar_geometry.exceptions import BSARError, InvalidCoordinate, DegenerateGeometry

__all__ = [
    "geometry",
    "io",
    "snapshot",
    "utils",
    "BSARError",
    "InvalidCoordinate",
    "DegenerateGeometry",
    "__version__",
]
