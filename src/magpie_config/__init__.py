# src/magpie_config/__init__.py
from .config import (
    CONFIG_PROFILES,
    ExperimentConfig,
    ExperimentMode,
    StimuliConfig,
    get_profile,
    load_config,
    load_from_environment,
)
from .errors import ConfigurationError

__version__ = "0.1.0"
