# -*- coding: utf-8 -*-
"""
Reference Frames - Geodetic, ECF and local East-North-Up (ENU) coordinates.

All bistatic geometry is evaluated in a local ENU tangent frame attached to
a fixed geodetic origin. Conversions between geodetic coordinates and the
local frame go through exact WGS-84 ECF transforms, so the round trip
geodetic -> local -> geodetic is exact to numerical precision (well under
1 mm for ranges up to 500 km).

The engine then treats the local frame as flat: the ground is the plane
z = ground altitude and Earth curvature is neglected beyond this
tangent-plane approximation. Full ellipsoidal SAR geometry is out of scope.

Reference
---------
Zhu, J. "Conversion of Earth-centered, Earth-fixed coordinates to geodetic
coordinates." IEEE Transactions on Aerospace and Electronic Systems,
30(3), 1994.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import math
from dataclasses import dataclass, field
from typing import Tuple, Union

# Third-party
import numpy as np

# Internal
from bsar_geometry.exceptions import InvalidCoordinate
from bsar_geometry.utils.constants import WGS84_A, WGS84_B, WGS84_E2


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class GeodeticPoint:
    """
    Point on (or above) the WGS-84 ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in degrees, within [-90, 90].
    longitude : float
        Longitude in degrees, within [-180, 180].
    altitude : float
        Height above the ellipsoid in meters.

    Raises
    ------
    InvalidCoordinate
        If latitude or longitude is out of range or not finite.
    """
    latitude: float
    longitude: float
    altitude: float = 0.0

    def __post_init__(self):
        lat = float(self.latitude)
        lon = float(self.longitude)
        alt = float(self.altitude)
        if not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
            raise InvalidCoordinate(f"latitude must be within [-90, 90], got {self.latitude}")
        if not math.isfinite(lon) or not -180.0 <= lon <= 180.0:
            raise InvalidCoordinate(f"longitude must be within [-180, 180], got {self.longitude}")
        if not math.isfinite(alt):
            raise InvalidCoordinate(f"altitude must be finite, got {self.altitude}")
        object.__setattr__(self, 'latitude', lat)
        object.__setattr__(self, 'longitude', lon)
        object.__setattr__(self, 'altitude', alt)

    def as_array(self) -> np.ndarray:
        """Return [latitude, longitude, altitude] as a float array."""
        return np.array([self.latitude, self.longitude, self.altitude])


@dataclass(frozen=True)
class LocalFrame:
    """
    Local East-North-Up tangent frame fixed for a session.

    Attributes
    ----------
    origin : GeodeticPoint
        Geodetic origin of the frame.
    origin_ecf : np.ndarray
        Origin in ECF coordinates (meters), shape (3,). Derived.
    rotation : np.ndarray
        ECF -> ENU rotation matrix, shape (3, 3). Rows are the East, North
        and Up unit vectors expressed in ECF. Derived.
    """
    origin: GeodeticPoint = field(default_factory=lambda: GeodeticPoint(0.0, 0.0, 0.0))
    origin_ecf: np.ndarray = field(init=False, repr=False, compare=False)
    rotation: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.origin, GeodeticPoint):
            raise TypeError(
                f"origin must be a GeodeticPoint, got {type(self.origin).__name__}"
            )
        x, y, z = geodetic_to_ecf(
            self.origin.latitude, self.origin.longitude, self.origin.altitude
        )
        origin_ecf = np.array([float(x), float(y), float(z)])
        rotation = enu_rotation_matrix(self.origin.latitude, self.origin.longitude)
        origin_ecf.setflags(write=False)
        rotation.setflags(write=False)
        object.__setattr__(self, 'origin_ecf', origin_ecf)
        object.__setattr__(self, 'rotation', rotation)


# ===================================================================
# ECF <-> Geodetic
# ===================================================================

def geodetic_to_ecf(
    lat: Union[float, np.ndarray],
    lon: Union[float, np.ndarray],
    alt: Union[float, np.ndarray]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert geodetic coordinates to ECF (Earth Centered Fixed).

    Parameters
    ----------
    lat : float or np.ndarray
        Geodetic latitude in degrees.
    lon : float or np.ndarray
        Longitude in degrees.
    alt : float or np.ndarray
        Height above the WGS-84 ellipsoid in meters.

    Returns
    -------
    x, y, z : np.ndarray
        ECF coordinates in meters.
    """
    lat_rad = np.radians(np.asarray(lat, dtype=np.float64))
    lon_rad = np.radians(np.asarray(lon, dtype=np.float64))
    alt = np.asarray(alt, dtype=np.float64)

    sin_lat = np.sin(lat_rad)
    cos_lat = np.cos(lat_rad)

    # Prime vertical radius of curvature
    nu = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)

    x = (nu + alt) * cos_lat * np.cos(lon_rad)
    y = (nu + alt) * cos_lat * np.sin(lon_rad)
    z = ((1.0 - WGS84_E2) * nu + alt) * sin_lat

    return x, y, z


def ecf_to_geodetic(
    x: Union[float, np.ndarray],
    y: Union[float, np.ndarray],
    z: Union[float, np.ndarray]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert ECF coordinates to geodetic, closed form (Zhu, 1994).

    Parameters
    ----------
    x, y, z : float or np.ndarray
        ECF coordinates in meters.

    Returns
    -------
    lat : np.ndarray
        Geodetic latitude in degrees.
    lon : np.ndarray
        Longitude in degrees.
    alt : np.ndarray
        Height above the WGS-84 ellipsoid in meters.

    Notes
    -----
    Points too close to the Earth centre to have a unique solution
    (deeper than ~6300 km) return NaN.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)

    a = WGS84_A
    b = WGS84_B
    e2 = WGS84_E2
    e4 = e2 * e2
    ome2 = 1.0 - e2
    a2 = a * a
    b2 = b * b
    e_b2 = (a2 - b2) / b2

    z2 = z * z
    r2 = x * x + y * y
    r = np.sqrt(r2)

    with np.errstate(divide='ignore', invalid='ignore'):
        F = 54.0 * b2 * z2
        G = r2 + ome2 * z2 - e2 * (a2 - b2)
        c = e4 * F * r2 / (G * G * G)
        s = np.cbrt(1.0 + c + np.sqrt(c * c + 2.0 * c))
        k = s + 1.0 / s + 1.0
        P = F / (3.0 * k * k * G * G)
        Q = np.sqrt(1.0 + 2.0 * e4 * P)
        r0 = (-P * e2 * r / (1.0 + Q) +
              np.sqrt(np.abs(0.5 * a2 * (1.0 + 1.0 / Q) -
                             P * ome2 * z2 / (Q * (1.0 + Q)) -
                             0.5 * P * r2)))
        t = r - e2 * r0
        U = np.sqrt(t * t + z2)
        V = np.sqrt(t * t + ome2 * z2)
        z0 = b2 * z / (a * V)

        lat = np.degrees(np.arctan2(z + e_b2 * z0, r))
        lon = np.degrees(np.arctan2(y, x))
        alt = U * (1.0 - b2 / (a * V))

    valid = (a * r) ** 2 + (b * z) ** 2 > (a2 - b2) ** 2
    lat = np.where(valid, lat, np.nan)
    lon = np.where(valid, lon, np.nan)
    alt = np.where(valid, alt, np.nan)

    return lat, lon, alt


# ===================================================================
# ECF <-> ENU
# ===================================================================

def enu_rotation_matrix(lat: float, lon: float) -> np.ndarray:
    """
    ECF -> ENU rotation matrix at a geodetic latitude and longitude.

    Parameters
    ----------
    lat : float
        Geodetic latitude in degrees.
    lon : float
        Longitude in degrees.

    Returns
    -------
    np.ndarray
        3x3 matrix whose rows are the East, North and Up unit vectors.
    """
    lat_rad = math.radians(lat)
    lon_rad = math.radians(lon)
    slat, clat = math.sin(lat_rad), math.cos(lat_rad)
    slon, clon = math.sin(lon_rad), math.cos(lon_rad)

    return np.array([
        [-slon, clon, 0.0],                   # East
        [-slat * clon, -slat * slon, clat],   # North
        [clat * clon, clat * slon, slat],     # Up
    ])


def ecf_to_enu(
    ecf_value: np.ndarray,
    frame: LocalFrame,
    is_position: bool = True
) -> np.ndarray:
    """
    Express ECF coordinates in a local ENU frame.

    Parameters
    ----------
    ecf_value : np.ndarray
        ECF coordinates, shape (3,) or (N, 3).
    frame : LocalFrame
        Target local frame.
    is_position : bool
        If True (default), subtract the frame origin before rotation.
        If False, only rotate (direction/velocity vector).

    Returns
    -------
    np.ndarray
        ENU coordinates, same shape as ecf_value.
    """
    ecf_value = np.asarray(ecf_value, dtype=np.float64)
    if is_position:
        ecf_value = ecf_value - frame.origin_ecf
    return ecf_value @ frame.rotation.T


def enu_to_ecf(
    enu_value: np.ndarray,
    frame: LocalFrame,
    is_position: bool = True
) -> np.ndarray:
    """
    Express local ENU coordinates in ECF.

    Parameters
    ----------
    enu_value : np.ndarray
        ENU coordinates, shape (3,) or (N, 3).
    frame : LocalFrame
        Source local frame.
    is_position : bool
        If True (default), add the frame origin after rotation.
        If False, only rotate (direction/velocity vector).

    Returns
    -------
    np.ndarray
        ECF coordinates, same shape as enu_value.
    """
    ecf_value = np.asarray(enu_value, dtype=np.float64) @ frame.rotation
    if is_position:
        ecf_value = ecf_value + frame.origin_ecf
    return ecf_value


# ===================================================================
# Geodetic <-> Local
# ===================================================================

def geodetic_to_local(point: GeodeticPoint, frame: LocalFrame) -> np.ndarray:
    """
    Convert a geodetic point to local ENU coordinates.

    Parameters
    ----------
    point : GeodeticPoint
        Point to convert.
    frame : LocalFrame
        Local tangent frame.

    Returns
    -------
    np.ndarray
        (east, north, up) in meters, shape (3,).
    """
    x, y, z = geodetic_to_ecf(point.latitude, point.longitude, point.altitude)
    return ecf_to_enu(np.array([float(x), float(y), float(z)]), frame)


def local_to_geodetic(enu: np.ndarray, frame: LocalFrame) -> GeodeticPoint:
    """
    Convert local ENU coordinates to a geodetic point.

    Parameters
    ----------
    enu : np.ndarray
        (east, north, up) in meters, shape (3,).
    frame : LocalFrame
        Local tangent frame.

    Returns
    -------
    GeodeticPoint

    Raises
    ------
    InvalidCoordinate
        If enu is not a finite 3-vector or maps to no valid geodetic point.
    """
    enu = np.asarray(enu, dtype=np.float64)
    if enu.shape != (3,) or not np.all(np.isfinite(enu)):
        raise InvalidCoordinate(f"local position must be a finite 3-vector, got {enu!r}")

    lat, lon, alt = ecf_to_geodetic(*enu_to_ecf(enu, frame))
    return GeodeticPoint(float(lat), float(lon), float(alt))


def local_points_to_geodetic(points: np.ndarray, frame: LocalFrame) -> np.ndarray:
    """
    Convert many local ENU points to geodetic coordinates.

    Parameters
    ----------
    points : np.ndarray
        ENU points in meters, shape (N, 3).
    frame : LocalFrame
        Local tangent frame.

    Returns
    -------
    np.ndarray
        Rows of [latitude, longitude, altitude], shape (N, 3).
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    ecf = enu_to_ecf(points, frame)
    lat, lon, alt = ecf_to_geodetic(ecf[:, 0], ecf[:, 1], ecf[:, 2])
    return np.column_stack([lat, lon, alt])


# ===================================================================
# ENU <-> NED
# ===================================================================

def enu_to_ned(value: np.ndarray) -> np.ndarray:
    """
    Swap East/North and negate Up. Works for points and vectors.

    Parameters
    ----------
    value : np.ndarray
        ENU coordinates, shape (3,) or (N, 3).

    Returns
    -------
    np.ndarray
        NED coordinates, same shape.
    """
    value = np.asarray(value, dtype=np.float64)
    return value[..., [1, 0, 2]] * np.array([1.0, 1.0, -1.0])


def ned_to_enu(value: np.ndarray) -> np.ndarray:
    """NED -> ENU. The ENU/NED swap is its own inverse."""
    return enu_to_ned(value)


# ===================================================================
# Degrees Minutes Seconds
# ===================================================================

def dd_to_dms(dd: float) -> Tuple[float, float, float]:
    """
    Convert decimal degrees to (degrees, minutes, seconds).

    The sign is carried by the degrees term; minutes and seconds are
    non-negative. Values in (-1, 0) therefore lose their sign.
    """
    d = math.trunc(dd)
    m_full = abs(dd - d) * 60.0
    m = math.trunc(m_full)
    s = (m_full - m) * 60.0
    return float(d), float(m), s


def dms_to_dd(d: float, m: float, s: float) -> float:
    """Convert (degrees, minutes, seconds) to decimal degrees."""
    frac = (m + s / 60.0) / 60.0
    if d < 0.0:
        return -(-d + frac)
    return d + frac


__all__ = [
    "GeodeticPoint",
    "LocalFrame",
    "geodetic_to_ecf",
    "ecf_to_geodetic",
    "enu_rotation_matrix",
    "ecf_to_enu",
    "enu_to_ecf",
    "geodetic_to_local",
    "local_to_geodetic",
    "local_points_to_geodetic",
    "enu_to_ned",
    "ned_to_enu",
    "dd_to_dms",
    "dms_to_dd",
]
