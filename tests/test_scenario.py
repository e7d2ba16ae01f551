# -*- coding: utf-8 -*-
"""
Tests for YAML scenario files.

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
import yaml

from bsar_geometry.exceptions import InvalidCoordinate
from bsar_geometry.geometry.coordinates import GeodeticPoint, LocalFrame
from bsar_geometry.geometry.resolution import RadarParameters
from bsar_geometry.geometry.trajectory import PlatformConfig
from bsar_geometry.io.scenario import (
    Scenario,
    scenario_from_dict,
    scenario_to_dict,
    load_scenario,
    save_scenario,
)

SCENARIO_YAML = """
frame:
  latitude: 48.0
  longitude: 11.0
  altitude: 500.0
tx:
  altitude: 8000.0
  ground_speed: 200.0
  heading: 0.0
  squint: 90.0
  azimuth_beamwidth: 3.0
  elevation_beamwidth: 8.0
rx:
  altitude: 6000.0
  ground_speed: 180.0
  start_east: 50000.0
  squint: -90.0
radar:
  frequency: 9.65e+9
  bandwidth: 1.0e+8
  prf: 2000.0
time:
  start: 0.0
  stop: 60.0
  step: 1.0
"""


@pytest.fixture
def scenario_dict():
    return yaml.safe_load(SCENARIO_YAML)


@pytest.fixture
def scenario():
    return Scenario(
        tx=PlatformConfig(altitude=8000.0, ground_speed=200.0),
        rx=PlatformConfig(altitude=6000.0, ground_speed=180.0, heading=15.0,
                          start_east=50000.0, squint=-90.0, depression=30.0),
        radar=RadarParameters(wavelength=0.031, bandwidth=150e6, prf=1800.0),
        frame=LocalFrame(GeodeticPoint(-33.9, 151.2, 40.0)),
        start_time=-10.0,
        stop_time=10.0,
        time_step=0.5,
    )


class TestScenarioFromDict:
    def test_parse(self, scenario_dict):
        s = scenario_from_dict(scenario_dict)
        assert s.tx.altitude == 8000.0
        assert s.rx.start_east == 50000.0
        assert s.rx.squint == -90.0
        assert s.rx.heading == 0.0  # default
        assert s.tx.elevation_beamwidth == 8.0
        assert s.rx.azimuth_beamwidth == 5.0
        assert s.radar.ground_resolution is True
        assert s.frame.origin == GeodeticPoint(48.0, 11.0, 500.0)
        assert abs(s.radar.frequency - 9.65e9) < 1e-2
        assert s.radar.bandwidth == 1.0e8
        assert s.radar.integration_time is None
        assert s.stop_time == 60.0

    def test_times(self, scenario_dict):
        times = scenario_from_dict(scenario_dict).times()
        assert times.size == 61
        assert times[0] == 0.0
        assert np.isclose(times[-1], 60.0)

    def test_optional_sections(self):
        s = scenario_from_dict({
            'tx': {'altitude': 5000.0, 'ground_speed': 100.0},
            'rx': {'altitude': 5000.0, 'ground_speed': 100.0, 'start_east': 1000.0},
            'radar': {'wavelength': 0.03, 'bandwidth': 5e7},
        })
        assert s.frame.origin == GeodeticPoint(0.0, 0.0, 0.0)
        assert s.start_time == 0.0
        assert s.stop_time == 0.0
        assert s.times().size == 1

    def test_unknown_key(self, scenario_dict):
        scenario_dict['tx']['colour'] = 'red'
        with pytest.raises(ValueError, match="colour"):
            scenario_from_dict(scenario_dict)

    def test_unknown_section(self, scenario_dict):
        scenario_dict['antenna'] = {}
        with pytest.raises(ValueError, match="antenna"):
            scenario_from_dict(scenario_dict)

    def test_missing_section(self, scenario_dict):
        del scenario_dict['rx']
        with pytest.raises(ValueError, match="rx"):
            scenario_from_dict(scenario_dict)

    def test_missing_platform_key(self, scenario_dict):
        del scenario_dict['tx']['ground_speed']
        with pytest.raises(ValueError, match="tx.ground_speed"):
            scenario_from_dict(scenario_dict)

    def test_frequency_and_wavelength(self, scenario_dict):
        scenario_dict['radar']['wavelength'] = 0.03
        with pytest.raises(ValueError):
            scenario_from_dict(scenario_dict)

    def test_no_wavelength(self, scenario_dict):
        del scenario_dict['radar']['frequency']
        with pytest.raises(ValueError, match="wavelength"):
            scenario_from_dict(scenario_dict)

    def test_invalid_origin(self, scenario_dict):
        scenario_dict['frame']['latitude'] = 95.0
        with pytest.raises(InvalidCoordinate):
            scenario_from_dict(scenario_dict)

    def test_invalid_time_window(self, scenario_dict):
        scenario_dict['time']['stop'] = -1.0
        with pytest.raises(ValueError, match="stop_time"):
            scenario_from_dict(scenario_dict)

    def test_invalid_time_step(self, scenario_dict):
        scenario_dict['time']['step'] = 0.0
        with pytest.raises(ValueError, match="time_step"):
            scenario_from_dict(scenario_dict)

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            scenario_from_dict(['tx', 'rx'])


class TestRoundTrip:
    def test_dict_roundtrip(self, scenario):
        assert scenario_from_dict(scenario_to_dict(scenario)) == scenario

    def test_optional_radar_fields_omitted(self, scenario):
        radar = scenario_to_dict(scenario)['radar']
        assert 'integration_time' not in radar
        assert radar['prf'] == 1800.0

    def test_file_roundtrip(self, scenario, tmp_path):
        path = tmp_path / "scenario.yaml"
        save_scenario(scenario, path)
        assert load_scenario(path) == scenario

    def test_load_example(self, tmp_path):
        path = tmp_path / "example.yaml"
        path.write_text(SCENARIO_YAML, encoding='utf-8')
        s = load_scenario(str(path))
        assert s.tx.ground_speed == 200.0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding='utf-8')
        with pytest.raises(ValueError, match="empty"):
            load_scenario(path)
