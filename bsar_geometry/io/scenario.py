# -*- coding: utf-8 -*-
"""
Scenario Files - YAML description of a bistatic acquisition.

A scenario gathers everything needed to publish geometry snapshots: the
motion of the transmitter and receiver, the local frame origin, the radar
parameters and the time window of interest.

Example file::

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
      frequency: 9.65e+9       # or wavelength (meters)
      bandwidth: 1.0e+8
      prf: 2000.0
    time:
      start: 0.0
      stop: 60.0
      step: 1.0

Missing optional keys take their documented defaults; unknown keys are
rejected.

Dependencies
------------
PyYAML - safe_load / safe_dump

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import dataclasses
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

# Third-party
import numpy as np
import yaml

# Internal
from bsar_geometry.geometry.coordinates import GeodeticPoint, LocalFrame
from bsar_geometry.geometry.resolution import RadarParameters
from bsar_geometry.geometry.trajectory import PlatformConfig

logger = logging.getLogger(__name__)

_SECTIONS = ('frame', 'tx', 'rx', 'radar', 'time')
_TIME_KEYS = ('start', 'stop', 'step')


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class Scenario:
    """
    Complete bistatic acquisition description.

    Attributes
    ----------
    tx : PlatformConfig
        Transmitter motion.
    rx : PlatformConfig
        Receiver motion.
    frame : LocalFrame
        Local ENU frame. Default origin (0, 0, 0).
    radar : RadarParameters
        Radar parameters.
    start_time : float
        First snapshot time (seconds). Default 0.
    stop_time : float
        Last snapshot time (seconds), >= start_time. Default 0.
    time_step : float
        Snapshot spacing (seconds), > 0. Default 1.
    """
    tx: PlatformConfig
    rx: PlatformConfig
    radar: RadarParameters
    frame: LocalFrame = field(default_factory=LocalFrame)
    start_time: float = 0.0
    stop_time: float = 0.0
    time_step: float = 1.0

    def __post_init__(self):
        if not self.time_step > 0.0:
            raise ValueError(f"time_step must be > 0, got {self.time_step}")
        if self.stop_time < self.start_time:
            raise ValueError(
                f"stop_time ({self.stop_time}) must be >= start_time ({self.start_time})"
            )

    def times(self) -> np.ndarray:
        """Snapshot times from start to stop (inclusive) every time_step."""
        n = int(math.floor((self.stop_time - self.start_time) / self.time_step + 1e-9)) + 1
        return self.start_time + self.time_step * np.arange(n)


# ===================================================================
# Helper Functions
# ===================================================================

def _check_keys(section: str, data: Dict[str, Any], allowed) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"'{section}' must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown key(s) in '{section}': {', '.join(unknown)}")


def _platform_from_dict(section: str, data: Dict[str, Any]) -> PlatformConfig:
    _check_keys(section, data, [f.name for f in dataclasses.fields(PlatformConfig)])
    for key in ('altitude', 'ground_speed'):
        if key not in data:
            raise ValueError(f"Missing required key '{section}.{key}'")
    return PlatformConfig(**data)


def _radar_from_dict(data: Dict[str, Any]) -> RadarParameters:
    names = [f.name for f in dataclasses.fields(RadarParameters)]
    _check_keys('radar', data, names + ['frequency'])
    if 'bandwidth' not in data:
        raise ValueError("Missing required key 'radar.bandwidth'")

    data = dict(data)
    if 'frequency' in data:
        if 'wavelength' in data:
            raise ValueError("Give either 'radar.frequency' or 'radar.wavelength', not both")
        return RadarParameters.from_frequency(data.pop('frequency'), **data)
    if 'wavelength' not in data:
        raise ValueError("Missing required key 'radar.wavelength' (or 'radar.frequency')")
    return RadarParameters(**data)


# ===================================================================
# Conversion
# ===================================================================

def scenario_from_dict(data: Dict[str, Any]) -> Scenario:
    """
    Build a Scenario from a parsed YAML mapping.

    Parameters
    ----------
    data : dict
        Mapping with 'tx', 'rx', 'radar' and optional 'frame', 'time'
        sections.

    Returns
    -------
    Scenario

    Raises
    ------
    ValueError
        On missing required keys, unknown keys or invalid values.
    InvalidCoordinate
        If the frame origin is out of range.
    """
    _check_keys('scenario', data, _SECTIONS)
    for section in ('tx', 'rx', 'radar'):
        if section not in data:
            raise ValueError(f"Missing required section '{section}'")

    frame_data = data.get('frame') or {}
    _check_keys('frame', frame_data, ('latitude', 'longitude', 'altitude'))
    frame = LocalFrame(GeodeticPoint(
        frame_data.get('latitude', 0.0),
        frame_data.get('longitude', 0.0),
        frame_data.get('altitude', 0.0),
    ))

    time_data = data.get('time') or {}
    _check_keys('time', time_data, _TIME_KEYS)

    return Scenario(
        tx=_platform_from_dict('tx', data['tx']),
        rx=_platform_from_dict('rx', data['rx']),
        radar=_radar_from_dict(data['radar']),
        frame=frame,
        start_time=float(time_data.get('start', 0.0)),
        stop_time=float(time_data.get('stop', time_data.get('start', 0.0))),
        time_step=float(time_data.get('step', 1.0)),
    )


def scenario_to_dict(scenario: Scenario) -> Dict[str, Any]:
    """
    Convert a Scenario to a plain mapping suitable for YAML.

    The radar is always written with its wavelength; unset optional
    radar parameters are omitted.
    """
    radar = {k: v for k, v in dataclasses.asdict(scenario.radar).items() if v is not None}
    origin = scenario.frame.origin
    return {
        'frame': {
            'latitude': origin.latitude,
            'longitude': origin.longitude,
            'altitude': origin.altitude,
        },
        'tx': dataclasses.asdict(scenario.tx),
        'rx': dataclasses.asdict(scenario.rx),
        'radar': radar,
        'time': {
            'start': scenario.start_time,
            'stop': scenario.stop_time,
            'step': scenario.time_step,
        },
    }


# ===================================================================
# File I/O
# ===================================================================

def load_scenario(path: Union[str, Path]) -> Scenario:
    """
    Load a scenario from a YAML file.

    Parameters
    ----------
    path : str or Path
        Scenario file.

    Returns
    -------
    Scenario
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ValueError(f"Scenario file {path} is empty")
    scenario = scenario_from_dict(data)
    logger.debug("Loaded scenario from %s", path)
    return scenario


def save_scenario(scenario: Scenario, path: Union[str, Path]) -> None:
    """Write a scenario to a YAML file."""
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(scenario_to_dict(scenario), f, sort_keys=False)
    logger.debug("Saved scenario to %s", path)


__all__ = [
    "Scenario",
    "scenario_from_dict",
    "scenario_to_dict",
    "load_scenario",
    "save_scenario",
]
