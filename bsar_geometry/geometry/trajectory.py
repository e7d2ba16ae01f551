# -*- coding: utf-8 -*-
"""
Trajectory Model - Straight, level, constant-velocity platform motion.

Each platform (transmitter or receiver) flies a straight line at constant
ground speed and constant altitude in the local ENU frame:

    position(t) = start + velocity * t

The model is valid for every real time t, negative or beyond any nominal
pass duration; callers choose the time window of interest.

Conventions
-----------
- Heading is clockwise from north: 0 = north (+y), 90 = east (+x).
- Squint is the ground-plane angle from the velocity vector to the antenna
  boresight, clockwise: +90 is right-looking broadside, -90 left-looking.
- Depression is the boresight angle below the horizontal.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np

logger = logging.getLogger(__name__)


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class PlatformConfig:
    """
    Motion parameters of one platform.

    Attributes
    ----------
    altitude : float
        Altitude above the local ground plane (meters).
    ground_speed : float
        Ground speed (meters/second), non-negative.
    heading : float
        Heading in degrees, clockwise from north.
    squint : float
        Boresight angle from the velocity vector in degrees, clockwise.
        Default 90 (right-looking broadside).
    start_east : float
        East offset of the platform at t = 0 (meters).
    start_north : float
        North offset of the platform at t = 0 (meters).
    depression : float
        Boresight depression below horizontal in degrees, within (0, 90].
        Default 45.
    azimuth_beamwidth : float
        Half-power antenna beamwidth in the horizontal plane of the beam,
        degrees within (0, 90]. Default 5.
    elevation_beamwidth : float
        Half-power antenna beamwidth in the vertical plane of the beam,
        degrees within (0, 90]. Default 10.
    """
    altitude: float
    ground_speed: float
    heading: float = 0.0
    squint: float = 90.0
    start_east: float = 0.0
    start_north: float = 0.0
    depression: float = 45.0
    azimuth_beamwidth: float = 5.0
    elevation_beamwidth: float = 10.0

    def __post_init__(self):
        for name in ('altitude', 'ground_speed', 'heading', 'squint',
                     'start_east', 'start_north', 'depression',
                     'azimuth_beamwidth', 'elevation_beamwidth'):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
            object.__setattr__(self, name, value)
        if self.ground_speed < 0.0:
            raise ValueError(f"ground_speed must be >= 0, got {self.ground_speed}")
        if not 0.0 < self.depression <= 90.0:
            raise ValueError(f"depression must be within (0, 90], got {self.depression}")
        for name in ('azimuth_beamwidth', 'elevation_beamwidth'):
            if not 0.0 < getattr(self, name) <= 90.0:
                raise ValueError(f"{name} must be within (0, 90], got {getattr(self, name)}")

    @property
    def start(self) -> np.ndarray:
        """Position at t = 0 in the local frame, shape (3,)."""
        return np.array([self.start_east, self.start_north, self.altitude])


@dataclass(frozen=True, eq=False)
class PlatformState:
    """
    Instantaneous platform state in the local frame.

    Attributes
    ----------
    time : float
        Simulation time (seconds).
    position : np.ndarray
        Position (meters), shape (3,). Read-only.
    velocity : np.ndarray
        Velocity (meters/second), shape (3,). Read-only.
    """
    time: float
    position: np.ndarray
    velocity: np.ndarray

    def __post_init__(self):
        position = np.array(self.position, dtype=np.float64)
        velocity = np.array(self.velocity, dtype=np.float64)
        if position.shape != (3,) or velocity.shape != (3,):
            raise ValueError(
                f"position and velocity must be shape (3,). "
                f"Got shapes: position={position.shape}, velocity={velocity.shape}"
            )
        position.setflags(write=False)
        velocity.setflags(write=False)
        object.__setattr__(self, 'time', float(self.time))
        object.__setattr__(self, 'position', position)
        object.__setattr__(self, 'velocity', velocity)

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


# ===================================================================
# Trajectory
# ===================================================================

def velocity_vector(config: PlatformConfig) -> np.ndarray:
    """
    Constant velocity vector of a platform.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion parameters.

    Returns
    -------
    np.ndarray
        (v_east, v_north, 0) in meters/second, shape (3,).
    """
    heading = math.radians(config.heading)
    return config.ground_speed * np.array([math.sin(heading), math.cos(heading), 0.0])


def state_at(config: PlatformConfig, t: float) -> PlatformState:
    """
    Platform position and velocity at time t.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion parameters.
    t : float
        Simulation time in seconds. Any real value is accepted.

    Returns
    -------
    PlatformState
    """
    velocity = velocity_vector(config)
    return PlatformState(time=t, position=config.start + velocity * t, velocity=velocity)


def states_at(config: PlatformConfig, times: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorised platform positions and velocities.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion parameters.
    times : np.ndarray
        Simulation times in seconds, shape (N,).

    Returns
    -------
    positions : np.ndarray
        Shape (N, 3).
    velocities : np.ndarray
        Shape (N, 3).
    """
    times = np.atleast_1d(np.asarray(times, dtype=np.float64))
    velocity = velocity_vector(config)
    positions = config.start[np.newaxis, :] + times[:, np.newaxis] * velocity[np.newaxis, :]
    velocities = np.tile(velocity, (times.size, 1))
    return positions, velocities


def boresight_direction(config: PlatformConfig) -> np.ndarray:
    """
    Unit vector of the antenna boresight in the local frame.

    The boresight azimuth is heading + squint (clockwise from north) and
    it points `depression` degrees below the horizontal.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion parameters.

    Returns
    -------
    np.ndarray
        Unit vector, shape (3,).
    """
    azimuth = math.radians(config.heading + config.squint)
    depression = math.radians(config.depression)
    cos_dep = math.cos(depression)
    return np.array([
        cos_dep * math.sin(azimuth),
        cos_dep * math.cos(azimuth),
        -math.sin(depression),
    ])


def beam_center(
    config: PlatformConfig,
    t: float,
    ground_altitude: float = 0.0
) -> Optional[np.ndarray]:
    """
    Intersection of the antenna boresight with the ground plane.

    Parameters
    ----------
    config : PlatformConfig
        Platform motion parameters.
    t : float
        Simulation time in seconds.
    ground_altitude : float
        Height of the ground plane in the local frame (meters). Default 0.

    Returns
    -------
    np.ndarray or None
        Ground point, shape (3,), or None when the platform is not above
        the ground plane.
    """
    state = state_at(config, t)
    height = state.position[2] - ground_altitude
    if height <= 0.0:
        logger.debug("Platform at %.1f m is not above ground plane %.1f m",
                     state.position[2], ground_altitude)
        return None
    axis = boresight_direction(config)
    return state.position + (height / -axis[2]) * axis


__all__ = [
    "PlatformConfig",
    "PlatformState",
    "velocity_vector",
    "state_at",
    "states_at",
    "boresight_direction",
    "beam_center",
]
