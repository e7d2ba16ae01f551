# -*- coding: utf-8 -*-
"""
Tests for bistatic resolution and Doppler ambiguity.

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

import logging
import math

import numpy as np
import pytest

from bsar_geometry.geometry.bistatic import solve
from bsar_geometry.geometry.resolution import (
    RadarParameters,
    ResolutionCell,
    DopplerAmbiguity,
    square_cell_integration_time,
    doppler_ambiguity,
    resolution,
)
from bsar_geometry.geometry.trajectory import PlatformState
from bsar_geometry.utils.constants import (
    SINC_WIDTH_AT_HALF_POWER,
    SINC_WIDTH_AT_HALF_POWER_SQUARED,
    SPEED_OF_LIGHT,
)


@pytest.fixture
def tx():
    return PlatformState(time=0.0, position=[0.0, 0.0, 8000.0], velocity=[0.0, 200.0, 0.0])


@pytest.fixture
def rx():
    return PlatformState(time=0.0, position=[50000.0, 0.0, 6000.0], velocity=[0.0, 180.0, 0.0])


@pytest.fixture
def target():
    return np.array([25000.0, 10000.0, 0.0])


@pytest.fixture
def geometry(tx, rx, target):
    return solve(tx, rx, target)


@pytest.fixture
def radar():
    return RadarParameters(wavelength=0.03, bandwidth=100e6, integration_time=1.0)


class TestRadarParameters:
    def test_defaults(self):
        p = RadarParameters(0.03, 100e6)
        assert p.integration_time is None
        assert p.prf is None
        assert p.impulse_width_factor == 1.0

    @pytest.mark.parametrize("kwargs", [
        dict(wavelength=0.0, bandwidth=1e8),
        dict(wavelength=0.03, bandwidth=-1e8),
        dict(wavelength=0.03, bandwidth=1e8, integration_time=0.0),
        dict(wavelength=0.03, bandwidth=1e8, prf=-100.0),
        dict(wavelength=0.03, bandwidth=1e8, impulse_width_factor=float('nan')),
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RadarParameters(**kwargs)

    def test_from_frequency(self):
        p = RadarParameters.from_frequency(10e9, 100e6, prf=1500.0)
        assert abs(p.wavelength - 0.0299792458) < 1e-15
        assert abs(p.frequency - 10e9) < 1e-3
        assert p.prf == 1500.0

    def test_from_frequency_invalid(self):
        with pytest.raises(ValueError):
            RadarParameters.from_frequency(0.0, 100e6)


class TestRangeResolution:
    def test_monostatic_limit(self, tx, target, radar):
        """β = 0 gives c / 2B."""
        g = solve(tx, tx, target, allow_monostatic=True)
        cell = resolution(g, radar)
        assert np.isclose(cell.range_resolution, SPEED_OF_LIGHT / (2.0 * 100e6), rtol=1e-12)
        assert cell.range_degenerate is False

    def test_bistatic_formula(self, geometry, radar):
        cell = resolution(geometry, radar)
        expected = SPEED_OF_LIGHT / (2.0 * 100e6 * np.cos(geometry.bistatic_angle / 2.0))
        assert np.isclose(cell.range_resolution, expected, rtol=1e-9)
        # Bistatic resolution is always coarser than the monostatic one
        assert cell.range_resolution > SPEED_OF_LIGHT / (2.0 * 100e6)

    def test_monotonic_in_bandwidth(self, geometry):
        values = [
            resolution(geometry, RadarParameters(0.03, b, 1.0)).range_resolution
            for b in (25e6, 50e6, 100e6, 200e6, 400e6)
        ]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_impulse_width_factor(self, geometry, radar):
        nominal = resolution(geometry, radar)
        wide = resolution(geometry, RadarParameters(0.03, 100e6, 1.0,
                                                    impulse_width_factor=SINC_WIDTH_AT_HALF_POWER))
        assert np.isclose(wide.range_resolution,
                          SINC_WIDTH_AT_HALF_POWER * nominal.range_resolution)
        assert np.isclose(wide.area, SINC_WIDTH_AT_HALF_POWER_SQUARED * nominal.area)

    def test_ground_coarser_than_slant(self, geometry, radar):
        cell = resolution(geometry, radar)
        assert cell.ground_range_resolution >= cell.range_resolution

    def test_forward_scatter_degenerate(self, radar, caplog):
        """β → 180°: range resolution is infinite and flagged."""
        tx = PlatformState(time=0.0, position=[0.0, 0.0, 1000.0], velocity=[0.0, 100.0, 0.0])
        rx = PlatformState(time=0.0, position=[0.0, 0.0, -1000.0], velocity=[0.0, 100.0, 0.0])
        g = solve(tx, rx, np.zeros(3))
        with caplog.at_level(logging.WARNING, logger="bsar_geometry"):
            cell = resolution(g, radar)
        assert math.isinf(cell.range_resolution)
        assert cell.range_degenerate is True
        assert cell.degenerate is True
        assert "Degenerate resolution" in caplog.text


class TestCrossRangeResolution:
    def test_monostatic_broadside(self, radar):
        """Monostatic broadside: λ R / (2 v T)."""
        state = PlatformState(time=0.0, position=[0.0, 0.0, 8000.0], velocity=[0.0, 200.0, 0.0])
        target = np.array([8000.0, 0.0, 0.0])
        g = solve(state, state, target, allow_monostatic=True)
        cell = resolution(g, radar)
        R = 8000.0 * np.sqrt(2.0)
        assert np.isclose(cell.angular_velocity, 200.0 / R)
        assert np.isclose(cell.cross_range_resolution, 0.03 * R / (2.0 * 200.0 * 1.0))

    def test_longer_integration_finer(self, geometry):
        short = resolution(geometry, RadarParameters(0.03, 100e6, 0.5))
        long = resolution(geometry, RadarParameters(0.03, 100e6, 2.0))
        assert np.isclose(short.cross_range_resolution, 4.0 * long.cross_range_resolution)

    def test_stationary_platforms_degenerate(self, target, radar):
        """No motion: ω = 0, cross-range resolution infinite and flagged."""
        tx = PlatformState(time=0.0, position=[0.0, 0.0, 8000.0], velocity=np.zeros(3))
        rx = PlatformState(time=0.0, position=[50000.0, 0.0, 6000.0], velocity=np.zeros(3))
        cell = resolution(solve(tx, rx, target), radar)
        assert math.isinf(cell.cross_range_resolution)
        assert cell.cross_range_degenerate is True
        assert cell.range_degenerate is False
        assert math.isfinite(cell.range_resolution)
        assert math.isinf(cell.area)


class TestSquareCell:
    def test_auto_integration_time(self, geometry):
        radar = RadarParameters(0.03, 100e6)
        cell = resolution(geometry, radar)
        T = square_cell_integration_time(geometry, radar)
        assert T > 0.0 and math.isfinite(T)
        assert cell.integration_time == T
        assert np.isclose(cell.ground_range_resolution, cell.ground_cross_range_resolution)

    def test_slant_square_cell(self, geometry):
        radar = RadarParameters(0.03, 100e6, ground_resolution=False)
        cell = resolution(geometry, radar)
        assert np.isclose(cell.cross_range_resolution, cell.range_resolution)
        assert cell.integration_time == square_cell_integration_time(geometry, radar, ground=False)
        assert cell.integration_time != square_cell_integration_time(geometry, radar, ground=True)

    def test_vertical_bisector_uses_slant_cell(self):
        """Monostatic target at nadir: no ground cell, cross-range still resolved."""
        state = PlatformState(time=0.0, position=[0.0, 0.0, 8000.0], velocity=[0.0, 200.0, 0.0])
        geometry = solve(state, state, np.zeros(3), allow_monostatic=True)
        radar = RadarParameters(0.03, 100e6)
        cell = resolution(geometry, radar)
        assert np.isclose(cell.angular_velocity, 0.025)
        assert np.isclose(cell.integration_time,
                          square_cell_integration_time(geometry, radar, ground=False))
        assert cell.integration_time > 0.0
        assert not cell.cross_range_degenerate
        assert np.isclose(cell.cross_range_resolution, SPEED_OF_LIGHT / 2e8)
        assert math.isinf(cell.ground_range_resolution)
        assert cell.range_degenerate

    def test_area_bounds(self, geometry, radar):
        cell = resolution(geometry, radar)
        product = cell.ground_range_resolution * cell.ground_cross_range_resolution
        assert cell.area >= product * (1.0 - 1e-12)

    def test_orientation_range(self, geometry, radar):
        cell = resolution(geometry, radar)
        assert 0.0 <= cell.orientation < 2.0 * np.pi

    def test_returns_dataclass(self, geometry, radar):
        cell = resolution(geometry, radar)
        assert isinstance(cell, ResolutionCell)
        assert isinstance(cell.ambiguity, DopplerAmbiguity)


class TestDopplerAmbiguity:
    def test_centroid(self, geometry, radar):
        amb = doppler_ambiguity(geometry, radar)
        assert np.isclose(amb.doppler_centroid, -geometry.range_rate / 0.03)

    def test_rate(self, tx, rx, target, geometry, radar):
        expected = 0.0
        for state in (tx, rx):
            u = (target - state.position) / np.linalg.norm(target - state.position)
            v_perp = state.velocity - np.dot(state.velocity, u) * u
            expected -= np.dot(v_perp, v_perp) / np.linalg.norm(target - state.position)
        expected /= 0.03
        amb = doppler_ambiguity(geometry, radar)
        assert np.isclose(amb.doppler_rate, expected)
        assert amb.doppler_rate < 0.0

    def test_bandwidth(self, geometry, radar):
        amb = doppler_ambiguity(geometry, radar, integration_time=2.0)
        assert np.isclose(amb.doppler_bandwidth, 2.0 * abs(amb.doppler_rate))

    def test_no_prf(self, geometry, radar):
        amb = doppler_ambiguity(geometry, radar)
        assert amb.unambiguous_interval is None
        assert amb.unambiguous_range is None
        assert amb.doppler_ambiguous is False

    def test_unambiguous(self, geometry):
        radar = RadarParameters(0.03, 100e6, 1.0, prf=2000.0)
        amb = doppler_ambiguity(geometry, radar)
        low, high = amb.unambiguous_interval
        assert np.isclose(high - low, 2000.0)
        assert np.isclose(0.5 * (low + high), amb.doppler_centroid)
        assert np.isclose(amb.unambiguous_range, SPEED_OF_LIGHT / 2000.0)
        assert amb.doppler_ambiguous is False

    def test_ambiguous(self, geometry, caplog):
        radar = RadarParameters(0.03, 100e6, 10.0, prf=1.0)
        with caplog.at_level(logging.WARNING, logger="bsar_geometry"):
            amb = doppler_ambiguity(geometry, radar)
        assert amb.doppler_ambiguous is True
        assert "exceeds PRF" in caplog.text

    def test_cell_carries_ambiguity(self, geometry):
        radar = RadarParameters(0.03, 100e6, 1.0, prf=2000.0)
        cell = resolution(geometry, radar)
        direct = doppler_ambiguity(geometry, radar, cell.integration_time)
        assert cell.ambiguity == direct
