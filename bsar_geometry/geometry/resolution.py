# -*- coding: utf-8 -*-
"""
Bistatic Resolution - Range / cross-range resolution and Doppler ambiguity.

The bistatic range gradient at a ground point is minus the bisector sum
β = û_T + û_R (unit vectors from the point towards each platform), and the
Doppler gradient is β̇ / λ. A resolution cell therefore spans c / (B |β|)
along the bisector and λ / (T |β̇|) along its rate:

    range resolution        = k c / (2 B cos(β/2))      since |β| = 2 cos(β/2)
    cross-range resolution  = k λ / (2 ω T)             with ω = |β̇| / 2

where k is the impulse response width factor (1 for the nominal width,
SINC_WIDTH_AT_HALF_POWER for the -3 dB width). Ground resolutions use the
projections βg and β̇g of both vectors onto the ground plane and the ground
cell area is k² λ c / (B T |βg × β̇g|).

In the monostatic limit β = 0 and the range resolution reduces to c / 2B.

Degenerate results (β → 180°, vanishing angular velocity) are reported as
math.inf and flagged on the returned cell; they never raise.

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
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np

# Internal
from bsar_geometry.geometry.analysis import UP, _project_onto_plane
from bsar_geometry.geometry.bistatic import BistaticGeometry
from bsar_geometry.utils.constants import (
    DEGENERACY_TOLERANCE,
    SPEED_OF_LIGHT,
    wavelength_from_frequency,
)

logger = logging.getLogger(__name__)


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class RadarParameters:
    """
    Radar waveform and processing parameters.

    Attributes
    ----------
    wavelength : float
        Carrier wavelength (meters).
    bandwidth : float
        Transmitted bandwidth (Hz).
    integration_time : float, optional
        Coherent integration time (seconds). When None, the time giving
        square resolution cells is used.
    prf : float, optional
        Pulse repetition frequency (Hz). Enables the ambiguity metrics.
    impulse_width_factor : float
        Impulse response width factor applied to every resolution.
        Default 1.0.
    ground_resolution : bool
        Square the ground cell (True, default) or the slant cell (False)
        when the integration time is computed.
    """
    wavelength: float
    bandwidth: float
    integration_time: Optional[float] = None
    prf: Optional[float] = None
    impulse_width_factor: float = 1.0
    ground_resolution: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'ground_resolution', bool(self.ground_resolution))
        for name in ('wavelength', 'bandwidth', 'impulse_width_factor'):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be positive and finite, got {getattr(self, name)}")
            object.__setattr__(self, name, value)
        for name in ('integration_time', 'prf'):
            if getattr(self, name) is None:
                continue
            value = float(getattr(self, name))
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be positive and finite, got {getattr(self, name)}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_frequency(cls, frequency: float, bandwidth: float, **kwargs) -> 'RadarParameters':
        """
        Build parameters from a carrier frequency in Hz.

        Examples
        --------
        >>> params = RadarParameters.from_frequency(10e9, 100e6)
        >>> round(params.wavelength, 5)
        0.02998
        """
        frequency = float(frequency)
        if not math.isfinite(frequency) or frequency <= 0.0:
            raise ValueError(f"frequency must be positive and finite, got {frequency}")
        return cls(wavelength=wavelength_from_frequency(frequency), bandwidth=bandwidth, **kwargs)

    @property
    def frequency(self) -> float:
        return SPEED_OF_LIGHT / self.wavelength


@dataclass(frozen=True)
class DopplerAmbiguity:
    """
    Doppler history of a ground point and its sampling by the PRF.

    Attributes
    ----------
    doppler_centroid : float
        Bistatic Doppler frequency of the point (Hz).
    doppler_rate : float
        Azimuth chirp rate (Hz/s).
    doppler_bandwidth : float
        Processed Doppler bandwidth T |rate| (Hz).
    unambiguous_interval : tuple of float, optional
        (low, high) Doppler interval of width PRF centred on the centroid.
        None without a PRF.
    unambiguous_range : float, optional
        Unambiguous bistatic range c / PRF (meters). None without a PRF.
    doppler_ambiguous : bool
        True when the processed bandwidth exceeds the PRF.
    """
    doppler_centroid: float
    doppler_rate: float
    doppler_bandwidth: float
    unambiguous_interval: Optional[Tuple[float, float]] = None
    unambiguous_range: Optional[float] = None
    doppler_ambiguous: bool = False


@dataclass(frozen=True)
class ResolutionCell:
    """
    Bistatic resolution cell at a ground point.

    Attributes
    ----------
    range_resolution : float
        Slant bistatic range resolution (meters), inf when degenerate.
    cross_range_resolution : float
        Slant cross-range resolution (meters), inf when degenerate.
    ground_range_resolution : float
        Range resolution projected on the ground (meters).
    ground_cross_range_resolution : float
        Cross-range resolution projected on the ground (meters).
    area : float
        Ground area of the resolution cell (square meters).
    orientation : float
        Azimuth of the ground range axis (radians, clockwise from north).
    angular_velocity : float
        Half the magnitude of the bisector sum rate (rad/s).
    integration_time : float
        Integration time used (seconds).
    range_degenerate : bool
        Slant or ground range resolution undefined (β → 180°).
    cross_range_degenerate : bool
        Slant or ground cross-range resolution undefined (no rotation of the
        bisector, or no usable integration time).
    ambiguity : DopplerAmbiguity
        Doppler metrics at the same point.
    """
    range_resolution: float
    cross_range_resolution: float
    ground_range_resolution: float
    ground_cross_range_resolution: float
    area: float
    orientation: float
    angular_velocity: float
    integration_time: float
    range_degenerate: bool
    cross_range_degenerate: bool
    ambiguity: DopplerAmbiguity

    @property
    def degenerate(self) -> bool:
        return self.range_degenerate or self.cross_range_degenerate


# ===================================================================
# Helper Functions
# ===================================================================

def _ground_vectors(geometry: BistaticGeometry) -> Tuple[np.ndarray, np.ndarray]:
    """Bisector sum and its rate projected onto the ground plane."""
    return (_project_onto_plane(geometry.bisector_sum, UP),
            _project_onto_plane(geometry.bisector_rate, UP))


def _square_time(scale: float, beta: np.ndarray, dbeta: np.ndarray) -> float:
    dbeta_mag = float(np.linalg.norm(dbeta))
    if dbeta_mag <= DEGENERACY_TOLERANCE:
        return math.inf
    return scale * float(np.linalg.norm(beta)) / dbeta_mag


def square_cell_integration_time(
    geometry: BistaticGeometry,
    radar_params: RadarParameters,
    ground: Optional[bool] = None
) -> float:
    """
    Integration time giving equal range and cross-range resolution.

    Ground cell:  T = (B λ / c) |βg| / |β̇g|
    Slant cell:   T = (B λ / c) |β| / |β̇|

    Parameters
    ----------
    geometry : BistaticGeometry
        Solved bistatic geometry.
    radar_params : RadarParameters
        Radar parameters.
    ground : bool, optional
        Square the ground cell instead of the slant cell. Defaults to
        `radar_params.ground_resolution`.

    Returns
    -------
    float
        Integration time in seconds; inf when the bisector does not rotate.

    Notes
    -----
    When the ground cell has no finite positive square time (bisector
    vertical, or a ground bisector that does not rotate) the slant cell
    time is returned instead.
    """
    if ground is None:
        ground = radar_params.ground_resolution
    scale = radar_params.bandwidth * radar_params.wavelength / SPEED_OF_LIGHT

    if ground:
        beta_g, dbeta_g = _ground_vectors(geometry)
        T = _square_time(scale, beta_g, dbeta_g)
        if 0.0 < T < math.inf:
            return T
        logger.debug("No square ground cell at %s, squaring the slant cell", geometry.target)
    return _square_time(scale, geometry.bisector_sum, geometry.bisector_rate)


# ===================================================================
# Doppler Ambiguity
# ===================================================================

def doppler_ambiguity(
    geometry: BistaticGeometry,
    radar_params: RadarParameters,
    integration_time: Optional[float] = None
) -> DopplerAmbiguity:
    """
    Doppler centroid, rate and PRF ambiguity at the solved ground point.

    Parameters
    ----------
    geometry : BistaticGeometry
        Solved bistatic geometry.
    radar_params : RadarParameters
        Radar parameters; the PRF enables the ambiguity metrics.
    integration_time : float, optional
        Integration time in seconds. Defaults to the radar parameters' value,
        then to the square cell integration time.

    Returns
    -------
    DopplerAmbiguity

    Notes
    -----
    - Centroid: f_D = -(dR/dt) / λ
    - Rate: -(|v_T⊥|² / R_T + |v_R⊥|² / R_R) / λ, with v⊥ the velocity
      component perpendicular to each line of sight
    """
    wavelength = radar_params.wavelength
    if integration_time is None:
        integration_time = radar_params.integration_time
    if integration_time is None:
        integration_time = square_cell_integration_time(geometry, radar_params)

    centroid = -geometry.range_rate / wavelength

    # |v⊥|² / R = ω² R for each leg
    tx_leg = geometry.tx_leg
    rx_leg = geometry.rx_leg
    rate = -(tx_leg.angular_velocity ** 2 * tx_leg.slant_range +
             rx_leg.angular_velocity ** 2 * rx_leg.slant_range) / wavelength

    bandwidth = integration_time * abs(rate) if rate != 0.0 else 0.0

    prf = radar_params.prf
    if prf is None:
        return DopplerAmbiguity(
            doppler_centroid=centroid,
            doppler_rate=rate,
            doppler_bandwidth=bandwidth,
        )

    ambiguous = bandwidth > prf
    if ambiguous:
        logger.warning("Processed Doppler bandwidth %.1f Hz exceeds PRF %.1f Hz",
                       bandwidth, prf)

    return DopplerAmbiguity(
        doppler_centroid=centroid,
        doppler_rate=rate,
        doppler_bandwidth=bandwidth,
        unambiguous_interval=(centroid - 0.5 * prf, centroid + 0.5 * prf),
        unambiguous_range=SPEED_OF_LIGHT / prf,
        doppler_ambiguous=ambiguous,
    )


# ===================================================================
# Resolution
# ===================================================================

def resolution(geometry: BistaticGeometry, radar_params: RadarParameters) -> ResolutionCell:
    """
    Bistatic resolution cell at the solved ground point.

    Parameters
    ----------
    geometry : BistaticGeometry
        Solved bistatic geometry.
    radar_params : RadarParameters
        Radar parameters.

    Returns
    -------
    ResolutionCell
        Degenerate resolutions are math.inf and flagged.
    """
    k = radar_params.impulse_width_factor
    B = radar_params.bandwidth
    wavelength = radar_params.wavelength

    beta = geometry.bisector_sum
    dbeta = geometry.bisector_rate
    beta_g, dbeta_g = _ground_vectors(geometry)

    cos_half_beta = 0.5 * float(np.linalg.norm(beta))
    beta_g_mag = float(np.linalg.norm(beta_g))
    dbeta_g_mag = float(np.linalg.norm(dbeta_g))
    omega = 0.5 * float(np.linalg.norm(dbeta))

    if radar_params.integration_time is not None:
        T = radar_params.integration_time
    else:
        T = square_cell_integration_time(geometry, radar_params)
    time_valid = math.isfinite(T) and T > 0.0

    # === Range ===
    if cos_half_beta > DEGENERACY_TOLERANCE:
        range_res = k * SPEED_OF_LIGHT / (2.0 * B * cos_half_beta)
    else:
        range_res = math.inf
    if beta_g_mag > DEGENERACY_TOLERANCE:
        ground_range_res = k * SPEED_OF_LIGHT / (B * beta_g_mag)
        orientation = float(np.arctan2(beta_g[0], beta_g[1]) % (2.0 * np.pi))
    else:
        ground_range_res = math.inf
        orientation = 0.0
    range_degenerate = math.isinf(range_res) or math.isinf(ground_range_res)

    # === Cross-range ===
    if omega > DEGENERACY_TOLERANCE and time_valid:
        cross_res = k * wavelength / (2.0 * omega * T)
    else:
        cross_res = math.inf
    if dbeta_g_mag > DEGENERACY_TOLERANCE and time_valid:
        ground_cross_res = k * wavelength / (T * dbeta_g_mag)
    else:
        ground_cross_res = math.inf
    cross_range_degenerate = math.isinf(cross_res) or math.isinf(ground_cross_res)

    # === Cell area ===
    cross = float(np.linalg.norm(np.cross(beta_g, dbeta_g)))
    if cross > DEGENERACY_TOLERANCE ** 2 and time_valid:
        area = k * k * wavelength * SPEED_OF_LIGHT / (B * T * cross)
    else:
        area = math.inf

    if range_degenerate or cross_range_degenerate:
        logger.warning(
            "Degenerate resolution at %s (range: %s, cross-range: %s)",
            geometry.target, range_degenerate, cross_range_degenerate
        )

    return ResolutionCell(
        range_resolution=range_res,
        cross_range_resolution=cross_res,
        ground_range_resolution=ground_range_res,
        ground_cross_range_resolution=ground_cross_res,
        area=area,
        orientation=orientation,
        angular_velocity=omega,
        integration_time=T,
        range_degenerate=range_degenerate,
        cross_range_degenerate=cross_range_degenerate,
        ambiguity=doppler_ambiguity(geometry, radar_params, T),
    )


__all__ = [
    "RadarParameters",
    "DopplerAmbiguity",
    "ResolutionCell",
    "square_cell_integration_time",
    "doppler_ambiguity",
    "resolution",
]
