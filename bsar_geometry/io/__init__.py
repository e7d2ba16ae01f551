# -*- coding: utf-8 -*-
"""
Scenario I/O - YAML scenario readers and writers.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_geometry.io.scenario import (
    Scenario,
    scenario_from_dict,
    scenario_to_dict,
    load_scenario,
    save_scenario,
)

__all__ = [
    "Scenario",
    "scenario_from_dict",
    "scenario_to_dict",
    "load_scenario",
    "save_scenario",
]
