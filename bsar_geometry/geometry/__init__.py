# -*- coding: utf-8 -*-
"""
Bistatic Geometry - Frames, trajectories, bistatic solver and resolution.

Provides:
- Geodetic / ECF / local ENU conversions and the session reference frame
- Straight-line constant-velocity platform trajectories
- Half-power antenna beam footprints on the ground
- Per-platform look geometry (grazing, squint, Doppler cone)
- Bistatic range, angle, bisector and iso-range / iso-Doppler ground loci
- Bistatic range and cross-range resolution, Doppler ambiguity

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_geometry.geometry.coordinates import (
    GeodeticPoint,
    LocalFrame,
    geodetic_to_ecf,
    ecf_to_geodetic,
    enu_rotation_matrix,
    ecf_to_enu,
    enu_to_ecf,
    geodetic_to_local,
    local_to_geodetic,
    local_points_to_geodetic,
    enu_to_ned,
    ned_to_enu,
    dd_to_dms,
    dms_to_dd,
)

from bsar_geometry.geometry.trajectory import (
    PlatformConfig,
    PlatformState,
    velocity_vector,
    state_at,
    states_at,
    boresight_direction,
    beam_center,
)

from bsar_geometry.geometry.footprint import (
    BeamFootprint,
    beam_footprint,
)

from bsar_geometry.geometry.analysis import (
    LegGeometry,
    compute_leg_geometry,
)

from bsar_geometry.geometry.bistatic import (
    BistaticGeometry,
    GroundSwath,
    solve,
    bistatic_range_field,
    bistatic_doppler,
    minimum_range_point,
    iso_range_contour,
    iso_doppler_contour,
    ground_swath,
)

from bsar_geometry.geometry.resolution import (
    RadarParameters,
    DopplerAmbiguity,
    ResolutionCell,
    square_cell_integration_time,
    doppler_ambiguity,
    resolution,
)

__all__ = [
    # Coordinates
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
    # Trajectory
    "PlatformConfig",
    "PlatformState",
    "velocity_vector",
    "state_at",
    "states_at",
    "boresight_direction",
    "beam_center",
    # Footprint
    "BeamFootprint",
    "beam_footprint",
    # Analysis
    "LegGeometry",
    "compute_leg_geometry",
    # Bistatic
    "BistaticGeometry",
    "GroundSwath",
    "solve",
    "bistatic_range_field",
    "bistatic_doppler",
    "minimum_range_point",
    "iso_range_contour",
    "iso_doppler_contour",
    "ground_swath",
    # Resolution
    "RadarParameters",
    "DopplerAmbiguity",
    "ResolutionCell",
    "square_cell_integration_time",
    "doppler_ambiguity",
    "resolution",
]
