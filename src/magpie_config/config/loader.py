"""
Configuration loader for magpie experiments.

Reads and writes experiment configurations as YAML, JSON or the framework's
own ``magpie.config.js`` module, and applies overrides from the environment.

Design principles:
- Single source of truth: every loaded mapping is validated into an ExperimentConfig
- Deploy-time selection: profiles plus MAGPIE_* environment overrides (and .env files)
- Clear error messages: failures name the file and the offending field
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import load_dotenv

from ..errors import ConfigurationError
from .js_module import parse_js_module, render_js_module
from .profiles import DEFAULT_PROFILE, get_profile
from .record import ExperimentConfig

logger = logging.getLogger(__name__)

SUFFIX_FORMATS: Dict[str, str] = {
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".js": "js",
    ".mjs": "js",
}
FORMATS = ("yaml", "json", "js")

PROFILE_ENV_VAR = "MAGPIE_PROFILE"
ENV_VARS: Dict[str, str] = {
    "MAGPIE_EXPERIMENT_ID": "experimentId",
    "MAGPIE_SERVER_URL": "serverUrl",
    "MAGPIE_SOCKET_URL": "socketUrl",
    "MAGPIE_COMPLETION_URL": "completionUrl",
    "MAGPIE_CONTACT_EMAIL": "contactEmail",
    "MAGPIE_MODE": "mode",
    "MAGPIE_LANGUAGE": "language",
    "MAGPIE_STIMULI_MAIN": "stimuli.main",
}


def format_for_path(path: Union[str, Path]) -> str:
    """Serialization format implied by a file suffix."""
    suffix = Path(path).suffix.lower()
    if suffix not in SUFFIX_FORMATS:
        raise ConfigurationError(
            f"Cannot infer configuration format from '{path}'. "
            f"Supported suffixes: {sorted(SUFFIX_FORMATS)}"
        )
    return SUFFIX_FORMATS[suffix]


def _check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise ConfigurationError(f"Unknown format '{fmt}'. Available: {list(FORMATS)}")
    return fmt


def dumps(config: ExperimentConfig, fmt: str = "yaml") -> str:
    """Serialize a configuration to text."""
    data = config.to_dict()
    fmt = _check_format(fmt)
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "js":
        return render_js_module(data)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def parse_text(text: str, fmt: str = "yaml") -> Dict[str, Any]:
    """Parse configuration text into a raw (unvalidated) mapping."""
    fmt = _check_format(fmt)
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "js":
            data = parse_js_module(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid {fmt.upper()} configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    return data


def apply_overrides(data: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``data`` with ``overrides`` applied.

    Override keys are serialized (camelCase) keys; nested entries use dotted
    keys, e.g. ``{"stimuli.main": "stimuli/other.csv"}``. Overriding
    ``serverUrl`` without ``socketUrl`` drops the socket URL so that it is
    derived again from the new server.
    """
    merged: Dict[str, Any] = {
        k: dict(v) if isinstance(v, Mapping) else v for k, v in data.items()
    }
    for key, value in overrides.items():
        if "." in key:
            parent, child = key.split(".", 1)
            section = merged.setdefault(parent, {})
            if not isinstance(section, dict):
                raise ConfigurationError(f"cannot set '{key}': '{parent}' is not a mapping")
            section[child] = value
        else:
            merged[key] = value
    if "serverUrl" in overrides and "socketUrl" not in overrides:
        merged.pop("socketUrl", None)
    return merged


def loads(
    text: str, fmt: str = "yaml", overrides: Optional[Mapping[str, Any]] = None
) -> ExperimentConfig:
    """Parse and validate configuration text."""
    data = parse_text(text, fmt)
    if overrides:
        data = apply_overrides(data, overrides)
    return ExperimentConfig.from_dict(data)


def load_config(
    path: Union[str, Path], overrides: Optional[Mapping[str, Any]] = None
) -> ExperimentConfig:
    """
    Load and validate an experiment configuration file.

    Args:
        path: YAML (.yaml/.yml), JSON (.json) or JS module (.js/.mjs) file
        overrides: Optional serialized-key overrides applied before validation

    Returns:
        Validated ExperimentConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file can't be parsed or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    fmt = format_for_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid UTF-8: {e}") from e

    try:
        config = loads(text, fmt, overrides)
    except ConfigurationError as e:
        raise ConfigurationError(f"Configuration validation failed for {path}:\n{e}") from e

    logger.info(
        f"Loaded experiment {config.experiment_id} ({config.mode}) from {path}"
    )
    return config


def save_config(
    config: ExperimentConfig, path: Union[str, Path], fmt: Optional[str] = None
) -> Path:
    """Write a configuration to ``path``; the format defaults to the one implied by the suffix."""
    path = Path(path)
    fmt = fmt or format_for_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(config, fmt))
    logger.info(f"Saved experiment {config.experiment_id} as {fmt} to {path}")
    return path


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect MAGPIE_* overrides from the environment (empty values are ignored)."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for var, key in ENV_VARS.items():
        value = environ.get(var)
        if value:
            overrides[key] = value
    return overrides


def load_from_environment(
    profile: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
    dotenv_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExperimentConfig:
    """
    Build the configuration for this deployment.

    Loads a ``.env`` file (python-dotenv; existing variables win), selects the
    profile from ``profile``, ``MAGPIE_PROFILE`` or the default (or loads
    ``path`` instead), and applies the MAGPIE_* overrides on top of it.

    Args:
        profile: Profile name; overrides MAGPIE_PROFILE
        path: Config file to start from instead of a profile
        dotenv_path: Explicit .env file; default is python-dotenv's search
        environ: Mapping to read instead of os.environ (no .env loading)
    """
    if environ is None:
        load_dotenv(dotenv_path=dotenv_path)
        environ = os.environ

    overrides = env_overrides(environ)
    if path is not None:
        if profile is not None:
            raise ValueError("Pass either a profile or a config file, not both")
        if overrides:
            logger.info(f"Applying environment overrides to {path}: {sorted(overrides)}")
        return load_config(path, overrides=overrides)

    profile_name = profile or environ.get(PROFILE_ENV_VAR) or DEFAULT_PROFILE
    base = get_profile(profile_name)
    if not overrides:
        logger.debug(f"Using profile '{profile_name}' without overrides")
        return base

    logger.info(
        f"Applying environment overrides to profile '{profile_name}': {sorted(overrides)}"
    )
    return ExperimentConfig.from_dict(apply_overrides(base.to_dict(), overrides))


__all__ = [
    "ENV_VARS",
    "FORMATS",
    "PROFILE_ENV_VAR",
    "apply_overrides",
    "dumps",
    "env_overrides",
    "format_for_path",
    "load_config",
    "load_from_environment",
    "loads",
    "parse_text",
    "save_config",
]
