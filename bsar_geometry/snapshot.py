# -*- coding: utf-8 -*-
"""
Geometry Snapshots - Immutable per-instant results for display layers.

A snapshot bundles everything a renderer needs at one simulation time:
both platform states, the solved bistatic triangle, the resolution cell,
the half-power beam footprints and, optionally, the ground swath. Snapshots are frozen and their arrays
read-only, so one instance may be shared between threads without copies.

Publishing is all or nothing: the first hard failure (invalid coordinate,
degenerate geometry) propagates and no partial snapshot is produced.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# Internal
from bsar_geometry.geometry.bistatic import BistaticGeometry, GroundSwath, ground_swath, solve
from bsar_geometry.geometry.coordinates import (
    GeodeticPoint,
    LocalFrame,
    geodetic_to_local,
    local_to_geodetic,
)
from bsar_geometry.geometry.footprint import BeamFootprint, beam_footprint
from bsar_geometry.geometry.resolution import RadarParameters, ResolutionCell, resolution
from bsar_geometry.geometry.trajectory import (
    PlatformConfig,
    PlatformState,
    beam_center,
    state_at,
)
from bsar_geometry.io.scenario import Scenario

logger = logging.getLogger(__name__)

TargetLike = Union[np.ndarray, Sequence[float], GeodeticPoint]


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True, eq=False)
class GeometrySnapshot:
    """
    Bistatic geometry at one simulation time.

    Attributes
    ----------
    time : float
        Simulation time (seconds).
    tx_state : PlatformState
        Transmitter state.
    rx_state : PlatformState
        Receiver state.
    geometry : BistaticGeometry
        Solved bistatic triangle.
    resolution : ResolutionCell
        Resolution cell and Doppler metrics at the target.
    target_geodetic : GeodeticPoint
        Target expressed geodetically.
    tx_footprint, rx_footprint : BeamFootprint, optional
        Half-power beam footprints; None when unbounded or when the
        platform is not above the ground plane.
    swath : GroundSwath, optional
        Ground loci, when requested.
    """
    time: float
    tx_state: PlatformState
    rx_state: PlatformState
    geometry: BistaticGeometry
    resolution: ResolutionCell
    target_geodetic: GeodeticPoint
    tx_footprint: Optional[BeamFootprint] = None
    rx_footprint: Optional[BeamFootprint] = None
    swath: Optional[GroundSwath] = None

    @property
    def no_line_of_sight(self) -> bool:
        return self.geometry.no_line_of_sight


@dataclass(frozen=True, eq=False)
class SnapshotSeries:
    """
    Scalar time series of a run of snapshots, for plotting.

    All arrays have shape (N,) and are read-only.
    """
    times: np.ndarray
    bistatic_range: np.ndarray
    bistatic_angle: np.ndarray  # degrees
    range_resolution: np.ndarray
    cross_range_resolution: np.ndarray
    doppler_centroid: np.ndarray
    no_line_of_sight: np.ndarray
    degenerate: np.ndarray
    snapshots: Tuple[GeometrySnapshot, ...] = ()

    def __post_init__(self):
        for name in ('times', 'bistatic_range', 'bistatic_angle', 'range_resolution',
                     'cross_range_resolution', 'doppler_centroid'):
            array = np.array(getattr(self, name), dtype=np.float64)
            array.setflags(write=False)
            object.__setattr__(self, name, array)
        for name in ('no_line_of_sight', 'degenerate'):
            array = np.array(getattr(self, name), dtype=bool)
            array.setflags(write=False)
            object.__setattr__(self, name, array)
        object.__setattr__(self, 'snapshots', tuple(self.snapshots))

    def __len__(self):
        return self.times.size


# ===================================================================
# Publishing
# ===================================================================

def default_target(
    tx_config: PlatformConfig,
    rx_config: PlatformConfig,
    t: float,
    ground_altitude: float = 0.0
) -> np.ndarray:
    """
    Ground point the geometry is evaluated at when no target is given.

    The transmitter beam centre, or the midpoint of the transmitter and
    receiver ground projections when the transmitter is not above the
    ground plane.
    """
    target = beam_center(tx_config, t, ground_altitude)
    if target is not None:
        return target
    target = 0.5 * (state_at(tx_config, t).position + state_at(rx_config, t).position)
    target[2] = ground_altitude
    return target


def _resolve_target(
    target: Optional[TargetLike],
    tx_config: PlatformConfig,
    rx_config: PlatformConfig,
    t: float,
    frame: LocalFrame,
    ground_altitude: float
) -> np.ndarray:
    if target is None:
        return default_target(tx_config, rx_config, t, ground_altitude)
    if isinstance(target, GeodeticPoint):
        return geodetic_to_local(target, frame)
    target = np.asarray(target, dtype=np.float64)
    if target.shape != (3,):
        raise ValueError(f"target must be shape (3,), got {target.shape}")
    return target


def publish(
    t: float,
    tx_config: PlatformConfig,
    rx_config: PlatformConfig,
    local_frame: LocalFrame,
    radar_params: RadarParameters,
    target: Optional[TargetLike] = None,
    swath: bool = False,
    ground_altitude: float = 0.0,
    allow_monostatic: bool = False
) -> GeometrySnapshot:
    """
    Compute the geometry snapshot at time t.

    Parameters
    ----------
    t : float
        Simulation time (seconds).
    tx_config, rx_config : PlatformConfig
        Transmitter and receiver motion.
    local_frame : LocalFrame
        Local ENU frame.
    radar_params : RadarParameters
        Radar parameters.
    target : np.ndarray or GeodeticPoint, optional
        Ground point, either local ENU (meters) or geodetic. Default: the
        transmitter beam centre at time t (see default_target).
    swath : bool
        Also compute the ground swath. Default False.
    ground_altitude : float
        Height of the ground plane (meters). Default 0.
    allow_monostatic : bool
        Accept coincident transmitter and receiver. Default False.

    Returns
    -------
    GeometrySnapshot

    Raises
    ------
    InvalidCoordinate
        If the target cannot be expressed geodetically.
    DegenerateGeometry
        If the bistatic triangle is ill-posed.
    """
    tx_state = state_at(tx_config, t)
    rx_state = state_at(rx_config, t)

    target = _resolve_target(target, tx_config, rx_config, t, local_frame, ground_altitude)
    geometry = solve(tx_state, rx_state, target, allow_monostatic=allow_monostatic)
    cell = resolution(geometry, radar_params)
    target_geodetic = local_to_geodetic(geometry.target, local_frame)

    tx_footprint = beam_footprint(tx_config, t, ground_altitude)
    rx_footprint = beam_footprint(rx_config, t, ground_altitude)

    loci = None
    if swath:
        outlines = [fp.polygon for fp in (tx_footprint, rx_footprint) if fp is not None]
        loci = ground_swath(tx_state, rx_state, local_frame,
                            ground_altitude=ground_altitude,
                            wavelength=radar_params.wavelength,
                            beam_footprints=outlines)

    logger.debug("Published snapshot t=%.3f s: range %.1f m, angle %.2f deg",
                 t, geometry.bistatic_range, geometry.bistatic_angle_deg)

    return GeometrySnapshot(
        time=float(t),
        tx_state=tx_state,
        rx_state=rx_state,
        geometry=geometry,
        resolution=cell,
        target_geodetic=target_geodetic,
        tx_footprint=tx_footprint,
        rx_footprint=rx_footprint,
        swath=loci,
    )


def publish_series(
    times: Sequence[float],
    tx_config: PlatformConfig,
    rx_config: PlatformConfig,
    local_frame: LocalFrame,
    radar_params: RadarParameters,
    target: Optional[TargetLike] = None,
    ground_altitude: float = 0.0,
    allow_monostatic: bool = False
) -> SnapshotSeries:
    """
    Publish snapshots for many times and collect their scalar series.

    Parameters are those of publish(); `times` is a sequence of simulation
    times in seconds. The first failing time aborts the whole series.

    Returns
    -------
    SnapshotSeries
    """
    times = np.atleast_1d(np.asarray(times, dtype=np.float64))
    snapshots = [
        publish(t, tx_config, rx_config, local_frame, radar_params,
                target=target, ground_altitude=ground_altitude,
                allow_monostatic=allow_monostatic)
        for t in times
    ]

    return SnapshotSeries(
        times=times,
        bistatic_range=[s.geometry.bistatic_range for s in snapshots],
        bistatic_angle=[s.geometry.bistatic_angle_deg for s in snapshots],
        range_resolution=[s.resolution.range_resolution for s in snapshots],
        cross_range_resolution=[s.resolution.cross_range_resolution for s in snapshots],
        doppler_centroid=[s.resolution.ambiguity.doppler_centroid for s in snapshots],
        no_line_of_sight=[s.geometry.no_line_of_sight for s in snapshots],
        degenerate=[s.resolution.degenerate for s in snapshots],
        snapshots=snapshots,
    )


def publish_scenario(
    scenario: Scenario,
    t: float,
    target: Optional[TargetLike] = None,
    swath: bool = False,
    ground_altitude: float = 0.0
) -> GeometrySnapshot:
    """Publish the snapshot of a loaded scenario at time t."""
    return publish(t, scenario.tx, scenario.rx, scenario.frame, scenario.radar,
                   target=target, swath=swath, ground_altitude=ground_altitude)


def publish_scenario_series(
    scenario: Scenario,
    target: Optional[TargetLike] = None,
    ground_altitude: float = 0.0
) -> SnapshotSeries:
    """Publish the snapshots of a loaded scenario over its time window."""
    return publish_series(scenario.times(), scenario.tx, scenario.rx, scenario.frame,
                          scenario.radar, target=target, ground_altitude=ground_altitude)


__all__ = [
    "GeometrySnapshot",
    "SnapshotSeries",
    "default_target",
    "publish",
    "publish_series",
    "publish_scenario",
    "publish_scenario_series",
]
