# -*- coding: utf-8 -*-
"""
Bistatic Geometry Solver - Bistatic range, angle, bisector and ground loci.

Combines a transmitter and a receiver state to describe the bistatic
triangle formed with a ground point, and computes the ground-plane loci of
constant bistatic range (iso-range) and constant bistatic Doppler
(iso-Doppler).

Iso-range loci
--------------
The surface of constant bistatic range is an ellipsoid of revolution with
foci at the transmitter and receiver. Its intersection with the ground
plane is a true ellipse centred between the ground projections of the two
platforms only when both platforms fly at the same altitude. With unequal
altitudes the cut is no longer that ellipse, so the contour is computed
numerically: rays are swept around the point of minimum bistatic range and
the range equation is solved along each ray. The bistatic range is convex
on the plane, so every ray crosses a level exactly once.

Iso-Doppler loci
----------------
Curves of constant bistatic Doppler have no closed form in general. They
are traced by scanning transects perpendicular to the local Doppler
gradient, bracketing sign changes of (Doppler - level) and refining each
root. When both platforms share position and velocity (monostatic-like),
the closed-form hyperbola of the monostatic Doppler cone is used.

Dependencies
------------
numpy - Vector operations
scipy.optimize - Root finding along rays and transects

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
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

# Third-party
import numpy as np
from scipy import optimize

# Internal
from bsar_geometry.exceptions import DegenerateGeometry
from bsar_geometry.geometry.analysis import LegGeometry, compute_leg_geometry
from bsar_geometry.geometry.coordinates import LocalFrame, local_points_to_geodetic
from bsar_geometry.geometry.trajectory import PlatformState
from bsar_geometry.utils.constants import (
    BASELINE_TOLERANCE_M,
    DEGENERACY_TOLERANCE,
    radio_horizon_distance,
)

logger = logging.getLogger(__name__)

#: Absolute tolerance of the contour root finding (meters)
CONTOUR_XTOL_M = 1.0e-6

#: Extent of the default swath relative to the farthest beam footprint point
SWATH_EXTENT_FACTOR = 2.1


# ===================================================================
# Data Structures
# ===================================================================

def _freeze(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class BistaticGeometry:
    """
    Bistatic triangle transmitter - ground point - receiver.

    Attributes
    ----------
    tx_position, tx_velocity : np.ndarray
        Transmitter state in the local frame, shape (3,).
    rx_position, rx_velocity : np.ndarray
        Receiver state in the local frame, shape (3,).
    target : np.ndarray
        Ground point in the local frame, shape (3,).
    tx_range : float
        Transmitter to ground point distance (meters).
    rx_range : float
        Ground point to receiver distance (meters).
    bistatic_range : float
        tx_range + rx_range (meters).
    baseline : float
        Direct transmitter to receiver distance (meters).
    bistatic_angle : float
        Angle at the ground point between the look directions to the
        transmitter and to the receiver (radians), in [0, π).
    bisector : np.ndarray
        Unit bisector of the two look directions, shape (3,). Zero vector
        when the look directions are opposite.
    bisector_sum : np.ndarray
        Un-normalised sum of the ground point -> platform unit vectors,
        shape (3,); its norm is 2 cos(β/2).
    bisector_rate : np.ndarray
        Time derivative of bisector_sum (1/s), shape (3,).
    range_rate : float
        Time derivative of the bistatic range (meters/second).
    tx_leg, rx_leg : LegGeometry
        Look geometry of each platform towards the ground point.
    no_line_of_sight : bool
        True when either platform cannot see the ground point. The
        geometry is still mathematically defined.
    """
    tx_position: np.ndarray
    tx_velocity: np.ndarray
    rx_position: np.ndarray
    rx_velocity: np.ndarray
    target: np.ndarray
    tx_range: float
    rx_range: float
    bistatic_range: float
    baseline: float
    bistatic_angle: float
    bisector: np.ndarray
    bisector_sum: np.ndarray
    bisector_rate: np.ndarray
    range_rate: float
    tx_leg: LegGeometry
    rx_leg: LegGeometry
    no_line_of_sight: bool

    def __post_init__(self):
        for name in ('tx_position', 'tx_velocity', 'rx_position', 'rx_velocity',
                     'target', 'bisector', 'bisector_sum', 'bisector_rate'):
            object.__setattr__(self, name, _freeze(getattr(self, name)))

    @property
    def bistatic_angle_deg(self) -> float:
        return math.degrees(self.bistatic_angle)


@dataclass(frozen=True, eq=False)
class GroundSwath:
    """
    Sampled ground loci around a bistatic configuration.

    Attributes
    ----------
    center : np.ndarray
        Ground point of minimum bistatic range, shape (3,).
    extent : float
        Side of the square ground area the loci are computed for (meters).
    iso_range_levels : np.ndarray
        Bistatic range of each iso-range contour (meters), shape (L,).
    iso_range_contours : tuple of np.ndarray
        Closed iso-range contours, each of shape (N, 3).
    iso_doppler_levels : np.ndarray
        Bistatic Doppler of each iso-Doppler contour (Hz), shape (M,).
        Empty when no wavelength was given.
    iso_doppler_contours : tuple of np.ndarray
        Iso-Doppler contour points, each of shape (K, 3).
    footprint : np.ndarray
        Outermost iso-range contour contained in the square area, shape (N, 3);
        boundary of the resolvable region. Empty (0, 3) when none fits.
    footprint_geodetic : np.ndarray
        Footprint as rows of [latitude, longitude, altitude], shape (N, 3).
    beam_footprints : tuple of np.ndarray
        Half-power beam footprint outlines the extent was sized on, each of
        shape (K, 3). Empty when none were given.
    """
    center: np.ndarray
    extent: float
    iso_range_levels: np.ndarray
    iso_range_contours: Tuple[np.ndarray, ...]
    iso_doppler_levels: np.ndarray = field(default_factory=lambda: np.zeros(0))
    iso_doppler_contours: Tuple[np.ndarray, ...] = ()
    footprint: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    footprint_geodetic: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    beam_footprints: Tuple[np.ndarray, ...] = ()

    def __post_init__(self):
        for name in ('center', 'iso_range_levels', 'iso_doppler_levels',
                     'footprint', 'footprint_geodetic'):
            object.__setattr__(self, name, _freeze(getattr(self, name)))
        object.__setattr__(self, 'iso_range_contours',
                           tuple(_freeze(c) for c in self.iso_range_contours))
        object.__setattr__(self, 'iso_doppler_contours',
                           tuple(_freeze(c) for c in self.iso_doppler_contours))
        object.__setattr__(self, 'beam_footprints',
                           tuple(_freeze(p) for p in self.beam_footprints))


# ===================================================================
# Helper Functions
# ===================================================================

def _as_point(target: np.ndarray) -> np.ndarray:
    target = np.asarray(target, dtype=np.float64)
    if target.shape != (3,):
        raise ValueError(f"target must be shape (3,), got {target.shape}")
    if not np.all(np.isfinite(target)):
        raise ValueError(f"target must be finite, got {target}")
    return target


def _as_points(points: np.ndarray) -> np.ndarray:
    points = np.asarray(points, dtype=np.float64)
    if points.shape == (3,):
        return points[np.newaxis, :]
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"Invalid points shape {points.shape}. Expected (3,) or (N, 3)")
    return points


def _perpendicular_rate(velocity: np.ndarray, unit: np.ndarray, distance: float) -> np.ndarray:
    """Time derivative of a unit line-of-sight vector due to platform motion."""
    return (velocity - np.dot(velocity, unit) * unit) / distance


def _has_line_of_sight(position: np.ndarray, target: np.ndarray) -> bool:
    """
    Visibility of a ground point from a platform.

    The platform must be above the point and the point within the
    4/3 Earth radio horizon of the platform.
    """
    height = position[2] - target[2]
    if height <= 0.0:
        return False
    ground_distance = math.hypot(position[0] - target[0], position[1] - target[1])
    return ground_distance <= radio_horizon_distance(height)


# ===================================================================
# Bistatic Triangle
# ===================================================================

def solve(
    tx_state: PlatformState,
    rx_state: PlatformState,
    target: np.ndarray,
    allow_monostatic: bool = False
) -> BistaticGeometry:
    """
    Solve the bistatic triangle for one ground point.

    Parameters
    ----------
    tx_state : PlatformState
        Transmitter state.
    rx_state : PlatformState
        Receiver state.
    target : np.ndarray
        Ground point in the local frame (meters), shape (3,).
    allow_monostatic : bool
        Accept coincident transmitter and receiver (monostatic limit).
        Default False.

    Returns
    -------
    BistaticGeometry

    Raises
    ------
    DegenerateGeometry
        If transmitter and receiver coincide (unless allow_monostatic), or
        the ground point coincides with either platform.

    Notes
    -----
    - Bistatic range = |Tx - P| + |P - Rx|, symmetric in Tx/Rx
    - Bistatic angle β = acos(û_T · û_R), with the dot product clipped to
      [-1, 1] before acos
    - Bisector = normalised (û_T + û_R)
    """
    target = _as_point(target)
    tx = tx_state.position
    rx = rx_state.position

    baseline = float(np.linalg.norm(tx - rx))
    if baseline <= BASELINE_TOLERANCE_M and not allow_monostatic:
        raise DegenerateGeometry(
            f"transmitter and receiver coincide (baseline {baseline:.3e} m); "
            f"bistatic angle is undefined"
        )

    # Ground point -> platform look vectors
    A = tx - target
    B = rx - target
    A_mag = float(np.linalg.norm(A))
    B_mag = float(np.linalg.norm(B))
    if A_mag <= BASELINE_TOLERANCE_M or B_mag <= BASELINE_TOLERANCE_M:
        raise DegenerateGeometry("ground point coincides with a platform position")
    A_unit = A / A_mag
    B_unit = B / B_mag

    bistatic_angle = float(np.arccos(np.clip(np.dot(A_unit, B_unit), -1.0, 1.0)))

    # Bisector and its first time derivative
    beta = A_unit + B_unit
    beta_mag = np.linalg.norm(beta)
    if beta_mag > DEGENERACY_TOLERANCE:
        bisector = beta / beta_mag
    else:
        bisector = np.zeros(3)
    dbeta = (_perpendicular_rate(tx_state.velocity, A_unit, A_mag) +
             _perpendicular_rate(rx_state.velocity, B_unit, B_mag))

    range_rate = float(np.dot(tx_state.velocity, A_unit) + np.dot(rx_state.velocity, B_unit))

    no_line_of_sight = not (_has_line_of_sight(tx, target) and _has_line_of_sight(rx, target))
    if no_line_of_sight:
        logger.warning("Ground point %s is not visible from both platforms", target)

    geometry = BistaticGeometry(
        tx_position=tx,
        tx_velocity=tx_state.velocity,
        rx_position=rx,
        rx_velocity=rx_state.velocity,
        target=target,
        tx_range=A_mag,
        rx_range=B_mag,
        bistatic_range=A_mag + B_mag,
        baseline=baseline,
        bistatic_angle=bistatic_angle,
        bisector=bisector,
        bisector_sum=beta,
        bisector_rate=dbeta,
        range_rate=range_rate,
        tx_leg=compute_leg_geometry(tx, tx_state.velocity, target),
        rx_leg=compute_leg_geometry(rx, rx_state.velocity, target),
        no_line_of_sight=no_line_of_sight,
    )
    logger.debug("Bistatic range %.3f m, angle %.3f deg",
                 geometry.bistatic_range, geometry.bistatic_angle_deg)
    return geometry


# ===================================================================
# Sampled Fields
# ===================================================================

def bistatic_range_field(
    tx_state: PlatformState,
    rx_state: PlatformState,
    points: np.ndarray
) -> np.ndarray:
    """
    Bistatic range at many points.

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    points : np.ndarray
        Points in the local frame, shape (3,) or (N, 3).

    Returns
    -------
    np.ndarray
        Bistatic range in meters, shape (N,).
    """
    points = _as_points(points)
    return (np.linalg.norm(points - tx_state.position, axis=1) +
            np.linalg.norm(points - rx_state.position, axis=1))


def bistatic_doppler(
    tx_state: PlatformState,
    rx_state: PlatformState,
    points: np.ndarray,
    wavelength: float
) -> np.ndarray:
    """
    Bistatic Doppler frequency of stationary points.

    f_D = (v_T · û_TP + v_R · û_RP) / λ, where û_TP and û_RP are the unit
    vectors from each platform to the point. This equals minus the rate of
    change of the bistatic range divided by the wavelength.

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    points : np.ndarray
        Points in the local frame, shape (3,) or (N, 3).
    wavelength : float
        Radar wavelength (meters).

    Returns
    -------
    np.ndarray
        Doppler frequency in Hz, shape (N,). NaN where a point coincides
        with a platform.
    """
    points = _as_points(points)
    TP = points - tx_state.position
    RP = points - rx_state.position
    TP_mag = np.linalg.norm(TP, axis=1)
    RP_mag = np.linalg.norm(RP, axis=1)
    with np.errstate(divide='ignore', invalid='ignore'):
        doppler = ((TP @ tx_state.velocity) / TP_mag +
                   (RP @ rx_state.velocity) / RP_mag) / wavelength
    return doppler


def minimum_range_point(
    tx_state: PlatformState,
    rx_state: PlatformState,
    ground_altitude: float = 0.0
) -> np.ndarray:
    """
    Ground point of minimum bistatic range.

    With both platforms on the same side of the ground plane the minimum is
    where the line from the transmitter to the mirror image of the receiver
    crosses the plane (equal grazing angles). Otherwise the direct
    transmitter-receiver segment crosses the plane.

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    ground_altitude : float
        Height of the ground plane (meters). Default 0.

    Returns
    -------
    np.ndarray
        Ground point, shape (3,).
    """
    tx = tx_state.position
    rx = rx_state.position
    h_tx = tx[2] - ground_altitude
    h_rx = rx[2] - ground_altitude

    if h_tx * h_rx > 0.0:
        frac = abs(h_tx) / (abs(h_tx) + abs(h_rx))
    elif h_tx != h_rx:
        frac = h_tx / (h_tx - h_rx)
    else:
        frac = 0.5  # Both platforms on the plane

    point = tx + frac * (rx - tx)
    point[2] = ground_altitude
    return point


# ===================================================================
# Iso-Range
# ===================================================================

def iso_range_contour(
    tx_state: PlatformState,
    rx_state: PlatformState,
    bistatic_range: float,
    ground_altitude: float = 0.0,
    n_rays: int = 360
) -> np.ndarray:
    """
    Ground points of constant bistatic range.

    Rays are swept around the minimum range point; along each ray the
    range equation is solved with Brent's method. The contour is closed
    (the last point connects to the first).

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    bistatic_range : float
        Requested bistatic range (meters).
    ground_altitude : float
        Height of the ground plane (meters). Default 0.
    n_rays : int
        Number of rays (contour points). Default 360.

    Returns
    -------
    np.ndarray
        Contour points, shape (n_rays, 3). Shape (1, 3) when the level is
        the minimum range and (0, 3) when it is below it.
    """
    if n_rays < 3:
        raise ValueError(f"n_rays must be >= 3, got {n_rays}")

    center = minimum_range_point(tx_state, rx_state, ground_altitude)
    tx = tx_state.position
    rx = rx_state.position
    range_min = float(np.linalg.norm(tx - center) + np.linalg.norm(rx - center))

    tol = DEGENERACY_TOLERANCE * max(range_min, 1.0)
    if bistatic_range < range_min - tol:
        return np.zeros((0, 3))
    if bistatic_range <= range_min + tol:
        return center[np.newaxis, :]

    # f(P) >= 2|P - center| - f(center), so this offset always overshoots
    s_max = 0.5 * (bistatic_range + range_min)

    angles = np.linspace(0.0, 2.0 * np.pi, n_rays, endpoint=False)
    contour = np.empty((n_rays, 3))
    for i, theta in enumerate(angles):
        direction = np.array([np.sin(theta), np.cos(theta), 0.0])

        def excess(s):
            p = center + s * direction
            return np.linalg.norm(tx - p) + np.linalg.norm(rx - p) - bistatic_range

        s = optimize.brentq(excess, 0.0, s_max, xtol=CONTOUR_XTOL_M)
        contour[i] = center + s * direction

    return contour


# ===================================================================
# Iso-Doppler
# ===================================================================

def _doppler_gradient_axis(
    tx_state: PlatformState,
    rx_state: PlatformState,
    center: np.ndarray,
    wavelength: float,
    step: float
) -> np.ndarray:
    """Unit ground-plane direction of steepest Doppler change at center."""
    east = np.array([step, 0.0, 0.0])
    north = np.array([0.0, step, 0.0])
    f = bistatic_doppler(tx_state, rx_state,
                         np.array([center + east, center - east,
                                   center + north, center - north]),
                         wavelength)
    gradient = np.array([f[0] - f[1], f[2] - f[3], 0.0])
    norm = np.linalg.norm(gradient)
    if not np.isfinite(norm) or norm == 0.0:
        return np.array([1.0, 0.0, 0.0])
    return gradient / norm


def _monostatic_iso_doppler(
    state: PlatformState,
    doppler: float,
    wavelength: float,
    center: np.ndarray,
    extent: float,
    n_lines: int
) -> np.ndarray:
    """
    Closed-form iso-Doppler for a monostatic platform in level flight.

    The Doppler cone v̂·û = f λ / 2V cut by the ground plane is the
    hyperbola branch a = c sqrt(q² + h²) / sqrt(1 - c²), with a and q the
    along-track and cross-track offsets from the nadir point.
    """
    ground_velocity = state.velocity.copy()
    ground_velocity[2] = 0.0
    speed = np.linalg.norm(ground_velocity)
    if speed == 0.0:
        return np.zeros((0, 3))

    cos_cone = doppler * wavelength / (2.0 * speed)
    if abs(cos_cone) >= 1.0:
        return np.zeros((0, 3))

    along = ground_velocity / speed
    cross = np.array([along[1], -along[0], 0.0])  # Right of track
    nadir = np.array([state.position[0], state.position[1], center[2]])
    height = state.position[2] - center[2]

    q0 = np.dot(center - nadir, cross)
    q = q0 + np.linspace(-0.5 * extent, 0.5 * extent, n_lines)
    a = cos_cone * np.sqrt(q * q + height * height) / np.sqrt(1.0 - cos_cone * cos_cone)

    return nadir[np.newaxis, :] + a[:, np.newaxis] * along + q[:, np.newaxis] * cross


def iso_doppler_contour(
    tx_state: PlatformState,
    rx_state: PlatformState,
    doppler: float,
    wavelength: float,
    center: np.ndarray,
    extent: float,
    n_lines: int = 201,
    n_samples: int = 401
) -> np.ndarray:
    """
    Ground points of constant bistatic Doppler.

    Transects perpendicular to the Doppler gradient at `center` are sampled
    across a square of side `extent`; each sign change of
    (Doppler - level) between samples is refined with Brent's method.

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    doppler : float
        Requested Doppler frequency (Hz).
    wavelength : float
        Radar wavelength (meters).
    center : np.ndarray
        Centre of the square ground area (meters), shape (3,). Its height
        defines the ground plane.
    extent : float
        Side of the square ground area (meters).
    n_lines : int
        Number of transects. Default 201.
    n_samples : int
        Samples per transect used to bracket roots. Default 401.

    Returns
    -------
    np.ndarray
        Contour points, shape (K, 3), ordered transect by transect. May
        contain several branches; empty (0, 3) when the level is not reached.
    """
    center = _as_point(center)
    if extent <= 0.0:
        raise ValueError(f"extent must be > 0, got {extent}")
    if n_lines < 2 or n_samples < 2:
        raise ValueError(f"n_lines and n_samples must be >= 2, got {n_lines}, {n_samples}")

    same_position = np.linalg.norm(tx_state.position - rx_state.position) <= BASELINE_TOLERANCE_M
    same_velocity = np.linalg.norm(tx_state.velocity - rx_state.velocity) <= BASELINE_TOLERANCE_M
    if same_position and same_velocity and tx_state.velocity[2] == 0.0:
        return _monostatic_iso_doppler(tx_state, doppler, wavelength, center, extent, n_lines)

    u = _doppler_gradient_axis(tx_state, rx_state, center, wavelength, 1.0e-4 * extent)
    p = np.array([-u[1], u[0], 0.0])

    offsets = np.linspace(-0.5 * extent, 0.5 * extent, n_lines)
    s = np.linspace(-0.5 * extent, 0.5 * extent, n_samples)

    # (n_lines, n_samples, 3) sample grid
    grid = (center[np.newaxis, np.newaxis, :] +
            s[np.newaxis, :, np.newaxis] * u[np.newaxis, np.newaxis, :] +
            offsets[:, np.newaxis, np.newaxis] * p[np.newaxis, np.newaxis, :])
    excess = bistatic_doppler(tx_state, rx_state, grid.reshape(-1, 3), wavelength) - doppler
    excess = excess.reshape(n_lines, n_samples)

    points = []
    for i, v in enumerate(offsets):
        row = excess[i]
        origin = center + v * p
        exact = np.flatnonzero(row == 0.0)
        crossing = np.flatnonzero(row[:-1] * row[1:] < 0.0)

        def residual(x):
            return bistatic_doppler(tx_state, rx_state, origin + x * u, wavelength)[0] - doppler

        roots = [s[j] for j in exact]
        for j in crossing:
            roots.append(optimize.brentq(residual, s[j], s[j + 1], xtol=CONTOUR_XTOL_M))
        for root in sorted(roots):
            points.append(origin + root * u)

    if not points:
        return np.zeros((0, 3))
    return np.array(points)


# ===================================================================
# Ground Swath
# ===================================================================

def ground_swath(
    tx_state: PlatformState,
    rx_state: PlatformState,
    frame: LocalFrame,
    ground_altitude: float = 0.0,
    wavelength: Optional[float] = None,
    n_levels: int = 10,
    extent: Optional[float] = None,
    n_rays: int = 360,
    n_lines: int = 201,
    n_samples: int = 401,
    beam_footprints: Sequence[np.ndarray] = ()
) -> GroundSwath:
    """
    Iso-range and iso-Doppler loci over a square ground area.

    Parameters
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver states.
    frame : LocalFrame
        Local frame, used to express the footprint geodetically.
    ground_altitude : float
        Height of the ground plane (meters). Default 0.
    wavelength : float, optional
        Radar wavelength (meters). Iso-Doppler loci are only computed
        when given.
    n_levels : int
        Number of iso-range (and iso-Doppler) levels. Default 10.
    extent : float, optional
        Side of the square ground area centred on the minimum range point
        (meters). Default: 2.1 times the largest east or north offset of
        the beam footprint outlines from that point, or of the platform
        nadirs when no outline is given.
    n_rays : int
        Points per iso-range contour. Default 360.
    n_lines, n_samples : int
        Iso-Doppler transect sampling. Defaults 201 and 401.
    beam_footprints : sequence of np.ndarray
        Beam footprint outlines, each of shape (K, 3), e.g.
        `BeamFootprint.polygon` of both platforms.

    Returns
    -------
    GroundSwath

    Notes
    -----
    Range levels are evenly spaced between the minimum range rounded up to
    the meter and the largest range over the square rounded down to the
    meter; when the square spans less than a meter of range the levels
    are spread over the exact range interval instead. Doppler levels are
    evenly spaced strictly inside the Doppler interval spanned by the
    square. Every level and every ray is independent, so callers may split
    the work across workers.
    """
    if n_levels < 2:
        raise ValueError(f"n_levels must be >= 2, got {n_levels}")

    center = minimum_range_point(tx_state, rx_state, ground_altitude)

    outlines = tuple(_as_points(p) for p in beam_footprints if len(p))
    if extent is None:
        if outlines:
            reach = max(float(np.max(np.abs(p[:, :2] - center[:2]))) for p in outlines)
        else:
            reach = max(
                np.linalg.norm(tx_state.position[:2] - center[:2]),
                np.linalg.norm(rx_state.position[:2] - center[:2]),
            )
            if reach == 0.0:
                reach = max(abs(tx_state.position[2] - ground_altitude),
                            abs(rx_state.position[2] - ground_altitude))
        extent = max(SWATH_EXTENT_FACTOR * reach, 1.0)
    elif extent <= 0.0:
        raise ValueError(f"extent must be > 0, got {extent}")

    half = 0.5 * extent
    corners = center + np.array([
        [-half, -half, 0.0],
        [half, -half, 0.0],
        [half, half, 0.0],
        [-half, half, 0.0],
    ])

    # Convex field: minimum at center, maximum at a corner of the square
    range_min = float(bistatic_range_field(tx_state, rx_state, center)[0])
    range_max = float(np.max(bistatic_range_field(tx_state, rx_state, corners)))
    low, high = math.ceil(range_min), math.floor(range_max)
    if high <= low:
        low, high = range_min, range_max
    range_levels = np.linspace(low, high, n_levels)

    range_contours = [
        iso_range_contour(tx_state, rx_state, level, ground_altitude, n_rays)
        for level in range_levels
    ]

    footprint = np.zeros((0, 3))
    for contour in reversed(range_contours):
        if contour.shape[0] > 1 and np.all(np.abs(contour[:, :2] - center[:2]) <= half):
            footprint = contour
            break
    footprint_geodetic = local_points_to_geodetic(footprint, frame)

    doppler_levels = np.zeros(0)
    doppler_contours = []
    if wavelength is not None:
        axis = np.linspace(-half, half, 51)
        ee, nn = np.meshgrid(axis, axis)
        samples = np.column_stack([
            center[0] + ee.ravel(),
            center[1] + nn.ravel(),
            np.full(ee.size, ground_altitude),
        ])
        doppler = bistatic_doppler(tx_state, rx_state, samples, wavelength)
        doppler = doppler[np.isfinite(doppler)]
        if doppler.size and np.ptp(doppler) > 0.0:
            doppler_levels = np.linspace(doppler.min(), doppler.max(), n_levels + 2)[1:-1]
            doppler_contours = [
                iso_doppler_contour(tx_state, rx_state, level, wavelength, center,
                                    extent, n_lines, n_samples)
                for level in doppler_levels
            ]

    logger.debug("Ground swath: extent %.1f m, %d range levels, %d Doppler levels",
                 extent, len(range_levels), len(doppler_levels))

    return GroundSwath(
        center=center,
        extent=float(extent),
        iso_range_levels=range_levels,
        iso_range_contours=tuple(range_contours),
        iso_doppler_levels=doppler_levels,
        iso_doppler_contours=tuple(doppler_contours),
        footprint=footprint,
        footprint_geodetic=footprint_geodetic,
        beam_footprints=outlines,
    )


__all__ = [
    "BistaticGeometry",
    "GroundSwath",
    "solve",
    "bistatic_range_field",
    "bistatic_doppler",
    "minimum_range_point",
    "iso_range_contour",
    "iso_doppler_contour",
    "ground_swath",
]
