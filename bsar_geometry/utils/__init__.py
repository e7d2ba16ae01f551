# -*- coding: utf-8 -*-
"""
Utilities - Constants and helper functions.

Physical constants, WGS-84 parameters, impulse response widths and
tolerances used by the bistatic geometry engine.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_geometry.utils.constants import (
    SPEED_OF_LIGHT,
    TWO_WAY_SPEED_OF_LIGHT,
    WGS84_A,
    WGS84_F,
    WGS84_B,
    WGS84_E2,
    SINC_WIDTH_AT_HALF_POWER,
    SINC_WIDTH_AT_HALF_POWER_SQUARED,
    EFFECTIVE_EARTH_RADIUS_FACTOR,
    BASELINE_TOLERANCE_M,
    DEGENERACY_TOLERANCE,
    wavelength_from_frequency,
    frequency_from_wavelength,
    monostatic_range_resolution,
    radio_horizon_distance,
)

__all__ = [
    "SPEED_OF_LIGHT",
    "TWO_WAY_SPEED_OF_LIGHT",
    "WGS84_A",
    "WGS84_F",
    "WGS84_B",
    "WGS84_E2",
    "SINC_WIDTH_AT_HALF_POWER",
    "SINC_WIDTH_AT_HALF_POWER_SQUARED",
    "EFFECTIVE_EARTH_RADIUS_FACTOR",
    "BASELINE_TOLERANCE_M",
    "DEGENERACY_TOLERANCE",
    "wavelength_from_frequency",
    "frequency_from_wavelength",
    "monostatic_range_resolution",
    "radio_horizon_distance",
]
