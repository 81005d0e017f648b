"""
Pytest configuration and shared fixtures for magpie_config tests.
"""

import pandas as pd
import pytest

from magpie_config.config.loader import ENV_VARS, PROFILE_ENV_VAR

MAGPIE_CONFIG_JS = """export default {
  experimentId: '43',
  serverUrl: 'https://magpie-cogsciprag.fly.dev',
  socketUrl: 'wss://magpie-cogsciprag.fly.dev/socket',
  completionUrl: 'https://...',
  contactEmail: 'exprag@gmail.com',
  mode: 'directLink',
  language: 'en',
  stimuli: {
    main: 'stimuli/vignettes.csv'
  }
};
"""


@pytest.fixture
def sample_config_dict():
    """Serialized form of the directLink deployment."""
    return {
        "experimentId": "43",
        "serverUrl": "https://magpie-cogsciprag.fly.dev",
        "socketUrl": "wss://magpie-cogsciprag.fly.dev/socket",
        "completionUrl": "https://...",
        "contactEmail": "exprag@gmail.com",
        "mode": "directLink",
        "language": "en",
        "stimuli": {"main": "stimuli/vignettes.csv"},
    }


@pytest.fixture
def magpie_config_js():
    return MAGPIE_CONFIG_JS


@pytest.fixture
def experiment_root(tmp_path):
    """Experiment directory with a small stimuli/vignettes.csv."""
    stimuli_dir = tmp_path / "stimuli"
    stimuli_dir.mkdir()
    pd.DataFrame(
        [
            {"id": 1, "domain": "economy", "vignette": "Interest rates rise."},
            {"id": 2, "domain": "sociology", "vignette": "Urbanization increases."},
            {"id": 3, "domain": "weather", "vignette": "Ozone levels drop."},
        ]
    ).to_csv(stimuli_dir / "vignettes.csv", index=False)
    return tmp_path


@pytest.fixture(autouse=True)
def clean_magpie_env(monkeypatch):
    """Keep MAGPIE_* variables from the developer's shell out of the tests."""
    for var in list(ENV_VARS) + [PROFILE_ENV_VAR]:
        monkeypatch.delenv(var, raising=False)
