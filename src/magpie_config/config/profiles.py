"""
Configuration Profiles

Named experiment configurations, one per deployment environment. A profile is
selected at deploy time (``MAGPIE_PROFILE`` or the CLI) instead of keeping one
copy of ``magpie.config.js`` per environment.

AVAILABLE PROFILES:
debug        local testing, results are not stored as participant data
directLink   participant-facing deployment shared via a direct link
production   participant-facing deployment against the production backend

HOW TO ADD A PROFILE
--------------------
Add an ``ExperimentConfig`` to ``CONFIG_PROFILES``. ``socket_url`` may be left
out, it is then derived from ``server_url`` as ``wss://<host>/socket``.
"""

from typing import Dict, List

from .record import ExperimentConfig, ExperimentMode, StimuliConfig

DEFAULT_PROFILE = "debug"

_SHARED = dict(
    completion_url="https://...",
    contact_email="exprag@gmail.com",
    language="en",
    stimuli=StimuliConfig(main="stimuli/vignettes.csv"),
)

CONFIG_PROFILES: Dict[str, ExperimentConfig] = {
    "debug": ExperimentConfig(
        experiment_id="9",
        server_url="https://magpie-cogsciprag.fly.dev",
        mode=ExperimentMode.DEBUG,
        **_SHARED,
    ),
    "directLink": ExperimentConfig(
        experiment_id="43",
        server_url="https://magpie-cogsciprag.fly.dev",
        socket_url="wss://magpie-cogsciprag.fly.dev/socket",
        mode=ExperimentMode.DIRECT_LINK,
        **_SHARED,
    ),
    # results server moved, the socket endpoint stayed on fly.dev
    "production": ExperimentConfig(
        experiment_id="44",
        server_url="https://magpie-cogsciprag.herokuapp.com",
        socket_url="wss://magpie-cogsciprag.fly.dev/socket",
        mode=ExperimentMode.DIRECT_LINK,
        **_SHARED,
    ),
}


def get_profile(profile_name: str) -> ExperimentConfig:
    """
    Get a configuration profile by name.

    Args:
        profile_name: Name of the profile

    Returns:
        ExperimentConfig object

    Raises:
        ValueError: If profile name not found
    """
    if profile_name not in CONFIG_PROFILES:
        available = list(CONFIG_PROFILES.keys())
        raise ValueError(f"Unknown profile '{profile_name}'. Available: {available}")

    return CONFIG_PROFILES[profile_name]


def list_available_profiles() -> List[str]:
    """List all available profile names."""
    return list(CONFIG_PROFILES.keys())


def print_profile_summary():
    """Print a summary of all available profiles."""
    print("Available Profiles:")
    print("=" * 50)

    for name, config in CONFIG_PROFILES.items():
        print(f"\n{name}:")
        print(f"  Experiment ID: {config.experiment_id}")
        print(f"  Mode: {config.mode}")
        print(f"  Server: {config.server_url}")
        print(f"  Socket: {config.socket_url}")
        print(f"  Language: {config.language}")
        print(f"  Stimuli: {config.stimuli.main}")
