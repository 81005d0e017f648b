"""
Unit tests for the named configuration profiles.
"""

import pytest

from magpie_config.config.profiles import (
    CONFIG_PROFILES,
    DEFAULT_PROFILE,
    get_profile,
    list_available_profiles,
    print_profile_summary,
)
from magpie_config.config.record import ExperimentMode


@pytest.mark.parametrize("name", list(CONFIG_PROFILES))
def test_every_field_non_empty(name):
    for key, value in get_profile(name).flatten().items():
        assert isinstance(value, str) and value.strip(), f"{name}.{key} is empty"


@pytest.mark.parametrize("name", list(CONFIG_PROFILES))
def test_mode_and_language(name):
    config = get_profile(name)
    assert config.mode in {"debug", "directLink"}
    assert config.language == "en"


def test_debug_profile():
    config = get_profile("debug")
    assert config.experiment_id == "9"
    assert config.mode is ExperimentMode.DEBUG
    assert config.stimuli.main == "stimuli/vignettes.csv"
    assert config.socket_url == "wss://magpie-cogsciprag.fly.dev/socket"


def test_direct_link_profile_matches_deployed_module(sample_config_dict):
    assert get_profile("directLink").to_dict() == sample_config_dict


def test_socket_shares_server_host_for_fly_profiles():
    shared = [name for name, c in CONFIG_PROFILES.items() if c.server_host == c.socket_host]
    assert sorted(shared) == ["debug", "directLink"]


def test_experiment_ids_unique():
    ids = [c.experiment_id for c in CONFIG_PROFILES.values()]
    assert len(ids) == len(set(ids))


def test_unknown_profile():
    with pytest.raises(ValueError, match="Available"):
        get_profile("staging")


def test_listing():
    assert list_available_profiles() == ["debug", "directLink", "production"]
    assert DEFAULT_PROFILE in list_available_profiles()


def test_print_summary(capsys):
    print_profile_summary()
    out = capsys.readouterr().out
    for name in CONFIG_PROFILES:
        assert f"{name}:" in out
    assert "Mode: directLink" in out
