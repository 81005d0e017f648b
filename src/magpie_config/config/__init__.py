"""
Experiment Configuration Module

Defines the configuration record, named profiles and their loaders.
"""

from .loader import dumps, load_config, load_from_environment, loads, save_config
from .paths import PathManager
from .profiles import CONFIG_PROFILES, get_profile, list_available_profiles
from .record import ExperimentConfig, ExperimentMode, StimuliConfig

__all__ = [
    "CONFIG_PROFILES",
    "ExperimentConfig",
    "ExperimentMode",
    "PathManager",
    "StimuliConfig",
    "dumps",
    "get_profile",
    "list_available_profiles",
    "load_config",
    "load_from_environment",
    "loads",
    "save_config",
]
