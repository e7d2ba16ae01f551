# -*- coding: utf-8 -*-
"""
Antenna Beam Footprint - Half-power beam cone intersected with the ground.

The half-power beam of a platform antenna is modelled as an elliptical cone
around the boresight, with half-angles of half the azimuth and elevation
beamwidths. Edge rays of the cone

    d(θ) = x + tan(θaz / 2) cos(θ) y + tan(θel / 2) sin(θ) z

are intersected with the ground plane, where x is the boresight, y the
horizontal axis to its right and z the axis completing the beam frame
upwards. The intersection is an ellipse as long as the whole beam points
below the horizon, i.e. depression > θel / 2.

The footprint only depends on the platform motion and pointing: a straight,
level platform with a fixed antenna drags the same footprint along its
ground track.

Dependencies
------------
numpy - Vector operations

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Optional

# Third-party
import numpy as np

# Internal
from bsar_geometry.geometry.trajectory import PlatformConfig, boresight_direction, state_at
from bsar_geometry.utils.constants import DEGENERACY_TOLERANCE

logger = logging.getLogger(__name__)


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True, eq=False)
class BeamFootprint:
    """
    Ground area illuminated by the half-power beam of one platform.

    Attributes
    ----------
    time : float
        Simulation time (seconds).
    center : np.ndarray
        Boresight intersection with the ground, shape (3,).
    polygon : np.ndarray
        Footprint outline on the ground, shape (N, 3).
    range_min, range_center, range_max : float
        Slant range from the platform to the nearest illuminated point, to
        the beam centre and to the farthest illuminated point (meters).
    incidence_min, incidence_center, incidence_max : float
        Local incidence angle on the flat ground at those points (radians).
    ground_range_swath : float
        Ground range extent of the footprint from the platform nadir
        (meters).
    area : float
        Footprint area (square meters).
    illumination_time : float
        Time a ground point at the beam centre stays inside the footprint
        (seconds); inf for a platform at rest.
    ground_angular_velocity : float
        Rate of rotation of the ground line of sight from the beam centre
        to the platform (radians/second).
    """
    time: float
    center: np.ndarray
    polygon: np.ndarray
    range_min: float
    range_center: float
    range_max: float
    incidence_min: float
    incidence_center: float
    incidence_max: float
    ground_range_swath: float
    area: float
    illumination_time: float
    ground_angular_velocity: float

    def __post_init__(self):
        for name in ('center', 'polygon'):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.setflags(write=False)
            object.__setattr__(self, name, array)

    @property
    def max_ground_coordinate(self) -> float:
        """Largest |east| or |north| coordinate of the outline (meters)."""
        return float(np.max(np.abs(self.polygon[:, :2])))


# ===================================================================
# Helper Functions
# ===================================================================

def _beam_axes(config: PlatformConfig):
    """Boresight, right horizontal axis and upward axis of the beam frame."""
    x = boresight_direction(config)
    azimuth = math.radians(config.heading + config.squint)
    y = np.array([math.cos(azimuth), -math.sin(azimuth), 0.0])
    z = np.cross(y, x)
    return x, y, z


def _polygon_area(points: np.ndarray) -> float:
    e, n = points[:, 0], points[:, 1]
    return 0.5 * abs(float(np.dot(e, np.roll(n, -1)) - np.dot(n, np.roll(e, -1))))


def _chord_length(points: np.ndarray, origin: np.ndarray, direction: np.ndarray) -> float:
    """Length of the chord of a convex outline along `direction` through `origin`."""
    normal = np.array([-direction[1], direction[0]])
    rel = points[:, :2] - origin[:2]
    along = rel @ direction
    across = rel @ normal
    along_next = np.roll(along, -1)
    across_next = np.roll(across, -1)

    crossing = (across <= 0.0) != (across_next <= 0.0)
    if np.count_nonzero(crossing) < 2:
        return 0.0
    frac = across[crossing] / (across[crossing] - across_next[crossing])
    hits = along[crossing] + frac * (along_next[crossing] - along[crossing])
    return float(hits.max() - hits.min())


# ===================================================================
# Footprint
# ===================================================================

def beam_footprint(
    config: PlatformConfig,
    t: float,
    ground_altitude: float = 0.0,
    n_points: int = 360
) -> Optional[BeamFootprint]:
    """
    Half-power beam footprint of a platform on the ground plane.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion, pointing and beamwidths.
    t : float
        Simulation time (seconds).
    ground_altitude : float
        Height of the ground plane (meters). Default 0.
    n_points : int
        Number of outline points. Default 360.

    Returns
    -------
    BeamFootprint or None
        None when the platform is not above the ground plane or when part
        of the beam reaches the horizon (unbounded footprint).
    """
    if n_points < 3:
        raise ValueError(f"n_points must be >= 3, got {n_points}")

    state = state_at(config, t)
    height = state.position[2] - ground_altitude
    if height <= 0.0:
        logger.debug("Platform at %.1f m is not above ground plane %.1f m",
                     state.position[2], ground_altitude)
        return None

    half_el = 0.5 * config.elevation_beamwidth
    if config.depression - half_el <= 0.0:
        logger.warning(
            "Beam footprint is unbounded: depression %.2f deg within half the "
            "elevation beamwidth %.2f deg", config.depression, config.elevation_beamwidth
        )
        return None

    x, y, z = _beam_axes(config)
    tan_az = math.tan(math.radians(0.5 * config.azimuth_beamwidth))
    tan_el = math.tan(math.radians(half_el))

    theta = np.linspace(0.0, 2.0 * np.pi, n_points, endpoint=False)
    rays = (x[np.newaxis, :]
            + (tan_az * np.cos(theta))[:, np.newaxis] * y[np.newaxis, :]
            + (tan_el * np.sin(theta))[:, np.newaxis] * z[np.newaxis, :])
    scale = height / -rays[:, 2]
    polygon = state.position[np.newaxis, :] + scale[:, np.newaxis] * rays
    polygon[:, 2] = ground_altitude

    sin_dep = math.sin(math.radians(config.depression))
    center = state.position + (height / sin_dep) * x
    center[2] = ground_altitude

    # Range and incidence grow with the distance from nadir
    edge_ranges = scale * np.linalg.norm(rays, axis=1)
    range_center = height / sin_dep
    range_max = float(edge_ranges.max())
    nadir_inside = config.depression + half_el >= 90.0
    range_min = height if nadir_inside else float(edge_ranges.min())

    def incidence(slant_range):
        return math.acos(min(1.0, height / slant_range))

    def ground_range(slant_range):
        return math.sqrt(max(slant_range ** 2 - height ** 2, 0.0))

    velocity = state.velocity[:2]
    speed = float(np.linalg.norm(velocity))
    if speed > 0.0:
        illumination_time = _chord_length(polygon, center, velocity / speed) / speed
    else:
        illumination_time = math.inf

    line_of_sight = state.position[:2] - center[:2]
    ground_range_center = float(np.linalg.norm(line_of_sight))
    if ground_range_center > DEGENERACY_TOLERANCE:
        v_perp = abs(velocity[0] * line_of_sight[1] - velocity[1] * line_of_sight[0])
        ground_angular_velocity = v_perp / ground_range_center ** 2
    else:
        ground_angular_velocity = math.inf if speed > 0.0 else 0.0

    footprint = BeamFootprint(
        time=float(t),
        center=center,
        polygon=polygon,
        range_min=range_min,
        range_center=range_center,
        range_max=range_max,
        incidence_min=incidence(range_min),
        incidence_center=incidence(range_center),
        incidence_max=incidence(range_max),
        ground_range_swath=ground_range(range_max) - ground_range(range_min),
        area=_polygon_area(polygon),
        illumination_time=illumination_time,
        ground_angular_velocity=ground_angular_velocity,
    )

    logger.debug("Beam footprint at t=%.3f s: %.1f m ground swath, %.3g m2",
                 t, footprint.ground_range_swath, footprint.area)
    return footprint


__all__ = [
    "BeamFootprint",
    "beam_footprint",
]
