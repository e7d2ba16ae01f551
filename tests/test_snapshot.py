# -*- coding: utf-8 -*-
"""
Tests for geometry snapshot publishing.

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

import numpy as np
import pytest

from bsar_geometry.exceptions import DegenerateGeometry, InvalidCoordinate
from bsar_geometry.geometry.coordinates import (
    GeodeticPoint,
    LocalFrame,
    ecf_to_enu,
    geodetic_to_local,
)
from bsar_geometry.geometry.footprint import BeamFootprint
from bsar_geometry.geometry.resolution import RadarParameters
from bsar_geometry.geometry.trajectory import PlatformConfig, beam_center
from bsar_geometry.io.scenario import Scenario
from bsar_geometry.snapshot import (
    GeometrySnapshot,
    SnapshotSeries,
    default_target,
    publish,
    publish_series,
    publish_scenario,
    publish_scenario_series,
)


@pytest.fixture
def tx_config():
    return PlatformConfig(altitude=8000.0, ground_speed=200.0, heading=0.0)


@pytest.fixture
def rx_config():
    return PlatformConfig(altitude=6000.0, ground_speed=180.0, heading=0.0,
                          start_east=50000.0, squint=-90.0)


@pytest.fixture
def frame():
    return LocalFrame(GeodeticPoint(48.0, 11.0, 500.0))


@pytest.fixture
def radar():
    return RadarParameters(wavelength=0.03, bandwidth=100e6, integration_time=1.0, prf=2000.0)


class TestPublish:
    def test_fully_populated(self, tx_config, rx_config, frame, radar):
        snap = publish(10.0, tx_config, rx_config, frame, radar,
                       target=np.array([25000.0, 10000.0, 0.0]))
        assert isinstance(snap, GeometrySnapshot)
        assert snap.time == 10.0
        np.testing.assert_allclose(snap.tx_state.position, [0.0, 2000.0, 8000.0])
        np.testing.assert_allclose(snap.rx_state.position, [50000.0, 1800.0, 6000.0])
        np.testing.assert_allclose(snap.geometry.target, [25000.0, 10000.0, 0.0])
        assert snap.resolution.range_resolution > 0.0
        assert snap.swath is None
        assert snap.no_line_of_sight is False

    def test_default_target_beam_center(self, tx_config, rx_config, frame, radar):
        """Right-looking at 45° depression: one altitude east of the nadir."""
        snap = publish(5.0, tx_config, rx_config, frame, radar)
        np.testing.assert_allclose(snap.geometry.target, beam_center(tx_config, 5.0),
                                   atol=1e-9)
        np.testing.assert_allclose(snap.geometry.target, [8000.0, 1000.0, 0.0], atol=1e-6)

    def test_squint_moves_default_target(self, tx_config, rx_config, frame, radar):
        left = PlatformConfig(altitude=8000.0, ground_speed=200.0, heading=0.0,
                              squint=-90.0, depression=10.0)
        right = publish(0.0, tx_config, rx_config, frame, radar)
        moved = publish(0.0, left, rx_config, frame, radar)
        np.testing.assert_allclose(moved.geometry.target,
                                   [-8000.0 / np.tan(np.radians(10.0)), 0.0, 0.0], atol=1e-6)
        assert moved.geometry.bistatic_range > right.geometry.bistatic_range

    def test_default_target_function(self, tx_config, rx_config):
        target = default_target(tx_config, rx_config, 0.0, 250.0)
        np.testing.assert_allclose(target, [7750.0, 0.0, 250.0], atol=1e-6)

    def test_default_target_fallback_midpoint(self, tx_config, rx_config):
        """Transmitter below the ground plane: no beam centre."""
        target = default_target(tx_config, rx_config, 0.0, 9000.0)
        np.testing.assert_allclose(target, [25000.0, 0.0, 9000.0])

    def test_beam_footprints(self, tx_config, rx_config, frame, radar):
        snap = publish(2.0, tx_config, rx_config, frame, radar)
        assert isinstance(snap.tx_footprint, BeamFootprint)
        assert isinstance(snap.rx_footprint, BeamFootprint)
        np.testing.assert_allclose(snap.tx_footprint.center, beam_center(tx_config, 2.0))
        np.testing.assert_allclose(snap.rx_footprint.center, beam_center(rx_config, 2.0))

    def test_unbounded_footprint(self, tx_config, frame, radar):
        rx_config = PlatformConfig(altitude=6000.0, ground_speed=180.0, start_east=50000.0,
                                   squint=-90.0, depression=3.0)
        snap = publish(0.0, tx_config, rx_config, frame, radar)
        assert snap.rx_footprint is None
        assert snap.tx_footprint is not None

    def test_geodetic_target(self, tx_config, rx_config, frame, radar):
        point = GeodeticPoint(48.05, 11.3, 500.0)
        snap = publish(0.0, tx_config, rx_config, frame, radar, target=point)
        np.testing.assert_allclose(snap.geometry.target, geodetic_to_local(point, frame))
        assert abs(snap.target_geodetic.latitude - 48.05) < 1e-9
        assert abs(snap.target_geodetic.longitude - 11.3) < 1e-9

    def test_target_geodetic_origin(self, tx_config, rx_config, frame, radar):
        snap = publish(0.0, tx_config, rx_config, frame, radar, target=np.zeros(3))
        assert abs(snap.target_geodetic.latitude - 48.0) < 1e-9
        assert abs(snap.target_geodetic.altitude - 500.0) < 1e-3

    def test_with_swath(self, tx_config, rx_config, frame, radar):
        snap = publish(0.0, tx_config, rx_config, frame, radar, swath=True)
        assert snap.swath is not None
        assert len(snap.swath.iso_range_contours) > 0
        assert len(snap.swath.iso_doppler_contours) > 0
        assert len(snap.swath.beam_footprints) == 2
        half = 0.5 * snap.swath.extent
        for outline in (snap.tx_footprint.polygon, snap.rx_footprint.polygon):
            assert np.all(np.abs(outline[:, :2] - snap.swath.center[:2]) < half)

    def test_immutable(self, tx_config, rx_config, frame, radar):
        snap = publish(0.0, tx_config, rx_config, frame, radar)
        with pytest.raises(AttributeError):
            snap.time = 1.0
        with pytest.raises(ValueError):
            snap.tx_state.position[0] = 1.0
        with pytest.raises(ValueError):
            snap.geometry.target[0] = 1.0

    def test_independent_of_previous_calls(self, tx_config, rx_config, frame, radar):
        first = publish(3.0, tx_config, rx_config, frame, radar)
        publish(100.0, tx_config, rx_config, frame, radar)
        again = publish(3.0, tx_config, rx_config, frame, radar)
        assert first.geometry.bistatic_range == again.geometry.bistatic_range


class TestPublishErrors:
    def test_degenerate_propagates(self, tx_config, frame, radar):
        with pytest.raises(DegenerateGeometry):
            publish(0.0, tx_config, tx_config, frame, radar)

    def test_monostatic_allowed(self, tx_config, frame, radar):
        snap = publish(0.0, tx_config, tx_config, frame, radar,
                       target=np.array([8000.0, 0.0, 0.0]), allow_monostatic=True)
        assert snap.geometry.bistatic_angle < 1e-7

    def test_target_without_geodetic_position(self, tx_config, rx_config, frame, radar):
        """The Earth centre has no geodetic coordinates."""
        centre = ecf_to_enu(np.zeros(3), frame)
        with pytest.raises(InvalidCoordinate):
            publish(0.0, tx_config, rx_config, frame, radar, target=centre)

    def test_non_finite_target(self, tx_config, rx_config, frame, radar):
        with pytest.raises(ValueError):
            publish(0.0, tx_config, rx_config, frame, radar,
                    target=np.array([np.nan, 0.0, 0.0]))

    def test_bad_target_shape(self, tx_config, rx_config, frame, radar):
        with pytest.raises(ValueError):
            publish(0.0, tx_config, rx_config, frame, radar, target=[1.0, 2.0])


class TestPublishSeries:
    def test_series(self, tx_config, rx_config, frame, radar):
        times = np.arange(0.0, 5.0, 1.0)
        series = publish_series(times, tx_config, rx_config, frame, radar,
                                target=np.array([25000.0, 10000.0, 0.0]))
        assert isinstance(series, SnapshotSeries)
        assert len(series) == 5
        assert len(series.snapshots) == 5
        np.testing.assert_array_equal(series.times, times)
        for i, snap in enumerate(series.snapshots):
            assert series.bistatic_range[i] == snap.geometry.bistatic_range
            assert series.bistatic_angle[i] == snap.geometry.bistatic_angle_deg
        assert series.no_line_of_sight.dtype == bool
        assert not series.degenerate.any()

    def test_fixed_target_range_decreases_while_approaching(self, tx_config, rx_config,
                                                            frame, radar):
        series = publish_series([0.0, 10.0, 20.0], tx_config, rx_config, frame, radar,
                                target=np.array([25000.0, 10000.0, 0.0]))
        assert np.all(np.diff(series.bistatic_range) < 0.0)
        assert np.all(series.doppler_centroid > 0.0)

    def test_series_read_only(self, tx_config, rx_config, frame, radar):
        series = publish_series([0.0, 1.0], tx_config, rx_config, frame, radar)
        with pytest.raises(ValueError):
            series.bistatic_range[0] = 0.0

    def test_series_raises_on_failure(self, tx_config, frame, radar):
        with pytest.raises(DegenerateGeometry):
            publish_series([0.0, 1.0], tx_config, tx_config, frame, radar)


class TestPublishScenario:
    @pytest.fixture
    def scenario(self, tx_config, rx_config, frame, radar):
        return Scenario(tx=tx_config, rx=rx_config, radar=radar, frame=frame,
                        start_time=0.0, stop_time=2.0, time_step=0.5)

    def test_snapshot(self, scenario):
        snap = publish_scenario(scenario, 1.0)
        np.testing.assert_allclose(snap.tx_state.position, [0.0, 200.0, 8000.0])

    def test_series(self, scenario):
        series = publish_scenario_series(scenario)
        np.testing.assert_allclose(series.times, [0.0, 0.5, 1.0, 1.5, 2.0])
