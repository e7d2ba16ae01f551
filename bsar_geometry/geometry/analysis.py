# -*- coding: utf-8 -*-
"""
Platform Look Geometry - Per-leg geometry between one platform and a ground point.

Computes the monostatic look parameters of each leg of a bistatic
configuration (transmitter -> ground point, ground point -> receiver):
slant and ground range, grazing and incidence angles, look azimuth,
Doppler cone angle, ground-plane squint, range rate and the angular
velocity of the line of sight as seen from the ground point.

The ground is the horizontal plane of the local East-North-Up frame.

Conventions
-----------
- All output angles are in radians
- Look azimuth: 0 = north, π/2 = east, measured clockwise, direction from
  the platform towards the ground point
- Squint: signed ground-plane angle from the velocity to the look direction,
  clockwise positive (+π/2 is right-looking broadside)
- Right = +1 for right-looking, -1 for left-looking, 0 when undefined

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from dataclasses import dataclass

# Third-party
import numpy as np

#: Up unit vector of the local frame (ground plane normal)
UP = np.array([0.0, 0.0, 1.0])


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class LegGeometry:
    """
    Look geometry of one platform towards a ground point.

    Attributes
    ----------
    slant_range : float
        Platform to ground point distance (meters).
    ground_range : float
        Horizontal distance from the platform nadir to the ground point (meters).
    height : float
        Platform height above the ground point (meters).
    grazing : float
        Angle between the line of sight and the ground plane.
    incidence : float
        Angle between the line of sight and the vertical (π/2 - grazing).
    look_azimuth : float
        Azimuth of the look direction in [0, 2π).
    doppler_cone : float
        Angle between the velocity and the platform -> point vector
        (NaN for a stationary platform).
    squint : float
        Signed ground-plane angle from velocity to look direction
        (NaN for a stationary platform or a point at nadir).
    range_rate : float
        Time derivative of the slant range (meters/second).
    angular_velocity : float
        Rotation rate of the line of sight seen from the ground point (rad/s).
    right : int
        +1 right-looking, -1 left-looking, 0 undefined.
    """
    slant_range: float
    ground_range: float
    height: float
    grazing: float
    incidence: float
    look_azimuth: float
    doppler_cone: float
    squint: float
    range_rate: float
    angular_velocity: float
    right: int


# ===================================================================
# Helper Functions
# ===================================================================

def _project_onto_plane(vector: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """
    Project vector onto plane defined by normal.

    Parameters
    ----------
    vector : np.ndarray
        Vector to project, shape (3,) or (N, 3).
    normal : np.ndarray
        Plane normal vector, shape (3,).

    Returns
    -------
    np.ndarray
        Projected vector, same shape as input vector.
    """
    normal_unit = normal / np.linalg.norm(normal)
    if vector.ndim == 1:
        return vector - np.dot(vector, normal_unit) * normal_unit
    dots = vector @ normal_unit
    return vector - dots[:, np.newaxis] * normal_unit


def _perpendicular_component(vector: np.ndarray, unit: np.ndarray) -> np.ndarray:
    """Component of vector perpendicular to a unit direction."""
    return vector - np.dot(vector, unit) * unit


# ===================================================================
# Leg Geometry Computation
# ===================================================================

def compute_leg_geometry(
    position: np.ndarray,
    velocity: np.ndarray,
    target: np.ndarray
) -> LegGeometry:
    """
    Compute the look geometry of a platform towards a ground point.

    Parameters
    ----------
    position : np.ndarray
        Platform position in the local frame (meters), shape (3,).
    velocity : np.ndarray
        Platform velocity in the local frame (meters/second), shape (3,).
    target : np.ndarray
        Ground point in the local frame (meters), shape (3,).

    Returns
    -------
    LegGeometry

    Raises
    ------
    ValueError
        If an input is not shape (3,) or the point coincides with the platform.

    Examples
    --------
    >>> # Platform at 8 km flying north, point 8 km to the east
    >>> leg = compute_leg_geometry(
    ...     np.array([0.0, 0.0, 8000.0]),
    ...     np.array([0.0, 200.0, 0.0]),
    ...     np.array([8000.0, 0.0, 0.0]))
    >>> round(float(np.degrees(leg.grazing)), 6)
    45.0
    >>> leg.right
    1
    """
    position = np.asarray(position, dtype=np.float64)
    velocity = np.asarray(velocity, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)

    if position.shape != (3,) or velocity.shape != (3,) or target.shape != (3,):
        raise ValueError(
            f"position, velocity, and target must be 1D arrays of shape (3,). "
            f"Got shapes: position={position.shape}, velocity={velocity.shape}, "
            f"target={target.shape}"
        )

    # Line of sight, platform -> point
    R = target - position
    R_mag = np.linalg.norm(R)
    if R_mag == 0.0:
        raise ValueError("target coincides with the platform position")
    R_unit = R / R_mag

    # Ground plane quantities
    G = _project_onto_plane(R, UP)
    G_mag = np.linalg.norm(G)
    height = float(-np.dot(R, UP))

    grazing = float(np.arcsin(np.clip(-np.dot(R_unit, UP), -1.0, 1.0)))
    incidence = 0.5 * np.pi - grazing

    if G_mag > 0.0:
        look_azimuth = float(np.arctan2(G[0], G[1]) % (2.0 * np.pi))
    else:
        look_azimuth = 0.0  # Nadir, undefined

    # === Velocity dependent quantities ===
    V_mag = np.linalg.norm(velocity)
    range_rate = float(np.dot(velocity, -R_unit))
    angular_velocity = float(np.linalg.norm(_perpendicular_component(velocity, R_unit)) / R_mag)

    if V_mag > 0.0:
        TRAJ_unit = velocity / V_mag
        doppler_cone = float(np.arccos(np.clip(np.dot(TRAJ_unit, R_unit), -1.0, 1.0)))
    else:
        doppler_cone = float('nan')

    VG = _project_onto_plane(velocity, UP)
    if np.linalg.norm(VG) > 0.0 and G_mag > 0.0:
        # Clockwise seen from above: negate the Up component of the cross product
        squint = float(np.arctan2(-np.cross(VG, G)[2], np.dot(VG, G)))
    else:
        squint = float('nan')

    if np.isnan(squint) or squint == 0.0 or abs(squint) == np.pi:
        right = 0
    elif squint > 0:
        right = 1
    else:
        right = -1

    return LegGeometry(
        slant_range=float(R_mag),
        ground_range=float(G_mag),
        height=height,
        grazing=grazing,
        incidence=float(incidence),
        look_azimuth=look_azimuth,
        doppler_cone=doppler_cone,
        squint=squint,
        range_rate=range_rate,
        angular_velocity=angular_velocity,
        right=right,
    )


__all__ = [
    "LegGeometry",
    "compute_leg_geometry",
]
