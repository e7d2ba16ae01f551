# -*- coding: utf-8 -*-
"""
Physical Constants - Physical, geodetic and numerical constants for BSAR geometry.

Provides commonly used constants including:
- Speed of light
- WGS-84 ellipsoid parameters
- Impulse response width of the sinc pulse at half power
- Radio horizon model
- Tolerances used to detect degenerate bistatic configurations

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

import math

# ===================================================================
# Physical Constants
# ===================================================================

#: Speed of light in vacuum (meters per second)
#: Exact value as defined by SI units (CODATA)
SPEED_OF_LIGHT = 299792458.0  # m/s

#: Speed of light divided by 2 (two-way monostatic propagation)
TWO_WAY_SPEED_OF_LIGHT = SPEED_OF_LIGHT / 2.0  # m/s

# ===================================================================
# WGS-84 Ellipsoid Parameters
# ===================================================================

#: WGS-84 semi-major axis (equatorial radius) in meters
WGS84_A = 6378137.0  # m

#: WGS-84 first flattening
WGS84_F = 1.0 / 298.257223563

#: WGS-84 semi-minor axis (polar radius) in meters
WGS84_B = (1.0 - WGS84_F) * WGS84_A  # ~6356752.314245 m

#: WGS-84 first eccentricity squared (e² = f(2 - f))
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)  # ~0.00669437999014

# ===================================================================
# Resolution Constants
# ===================================================================

#: Width of the squared normalized sinc function at half power.
#: Twice the positive solution of sinc²(x) = 1/2.
SINC_WIDTH_AT_HALF_POWER = 0.885892941378904715150369091935531

#: Square of SINC_WIDTH_AT_HALF_POWER
SINC_WIDTH_AT_HALF_POWER_SQUARED = 0.784806303584967506070224247343716

# ===================================================================
# Propagation
# ===================================================================

#: Effective Earth radius factor for standard atmospheric refraction
EFFECTIVE_EARTH_RADIUS_FACTOR = 4.0 / 3.0

# ===================================================================
# Numerical Tolerances
# ===================================================================

#: Tx/Rx separation below which the baseline is considered zero (meters)
BASELINE_TOLERANCE_M = 1.0e-6

#: Relative threshold under which a resolution denominator is treated as zero
DEGENERACY_TOLERANCE = 1.0e-9

# ===================================================================
# Helper Functions
# ===================================================================

def wavelength_from_frequency(frequency_hz: float) -> float:
    """
    Compute wavelength from frequency.

    Parameters
    ----------
    frequency_hz : float
        Electromagnetic frequency in Hertz.

    Returns
    -------
    float
        Wavelength in meters.

    Examples
    --------
    >>> # X-band at 10 GHz
    >>> wavelength_from_frequency(10e9)
    0.0299792458
    """
    return SPEED_OF_LIGHT / frequency_hz


def frequency_from_wavelength(wavelength_m: float) -> float:
    """
    Compute frequency from wavelength.

    Parameters
    ----------
    wavelength_m : float
        Wavelength in meters.

    Returns
    -------
    float
        Frequency in Hertz.
    """
    return SPEED_OF_LIGHT / wavelength_m


def monostatic_range_resolution(bandwidth_hz: float) -> float:
    """
    Classical monostatic slant range resolution c / (2B).

    Parameters
    ----------
    bandwidth_hz : float
        Transmitted bandwidth in Hertz.

    Returns
    -------
    float
        Range resolution in meters.

    Examples
    --------
    >>> # 100 MHz bandwidth
    >>> monostatic_range_resolution(100e6)
    1.49896229
    """
    return TWO_WAY_SPEED_OF_LIGHT / bandwidth_hz


def radio_horizon_distance(height_m: float) -> float:
    """
    Distance to the radio horizon of an antenna at the given height.

    Uses the 4/3 effective Earth radius model, d = sqrt(2 k R h).

    Parameters
    ----------
    height_m : float
        Antenna height above the surface in meters. Non-positive heights
        have no horizon beyond their own position.

    Returns
    -------
    float
        Ground distance to the horizon in meters.
    """
    if height_m <= 0.0:
        return 0.0
    return math.sqrt(2.0 * EFFECTIVE_EARTH_RADIUS_FACTOR * WGS84_A * height_m)


__all__ = [
    # Physical constants
    'SPEED_OF_LIGHT',
    'TWO_WAY_SPEED_OF_LIGHT',
    # WGS-84 parameters
    'WGS84_A',
    'WGS84_B',
    'WGS84_F',
    'WGS84_E2',
    # Resolution
    'SINC_WIDTH_AT_HALF_POWER',
    'SINC_WIDTH_AT_HALF_POWER_SQUARED',
    # Propagation
    'EFFECTIVE_EARTH_RADIUS_FACTOR',
    # Tolerances
    'BASELINE_TOLERANCE_M',
    'DEGENERACY_TOLERANCE',
    # Helper functions
    'wavelength_from_frequency',
    'frequency_from_wavelength',
    'monostatic_range_resolution',
    'radio_horizon_distance',
]
