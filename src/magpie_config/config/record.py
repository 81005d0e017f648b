"""
Experiment Configuration Record

Defines the immutable deployment configuration consumed by a magpie experiment.
A record holds the experiment ID, the result server and socket URLs, the
completion URL, a contact address, the run mode, the language and the path of
the main stimuli file.

Records serialize to the same camelCase shape the framework reads from
``magpie.config.js``::

    {
        "experimentId": "43",
        "serverUrl": "https://magpie-cogsciprag.fly.dev",
        "socketUrl": "wss://magpie-cogsciprag.fly.dev/socket",
        "completionUrl": "https://...",
        "contactEmail": "exprag@gmail.com",
        "mode": "directLink",
        "language": "en",
        "stimuli": {"main": "stimuli/vignettes.csv"},
    }
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlsplit

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

SOCKET_PATH = "/socket"

# Python attribute -> serialized (camelCase) key
FIELD_KEYS: Dict[str, str] = {
    "experiment_id": "experimentId",
    "server_url": "serverUrl",
    "socket_url": "socketUrl",
    "completion_url": "completionUrl",
    "contact_email": "contactEmail",
    "mode": "mode",
    "language": "language",
}
STIMULI_KEYS: Dict[str, str] = {"main": "main"}


class ExperimentMode(str, Enum):
    """Run mode understood by the experiment runtime."""

    DEBUG = "debug"
    DIRECT_LINK = "directLink"

    @classmethod
    def parse(cls, value: Union["ExperimentMode", str]) -> "ExperimentMode":
        if isinstance(value, cls):
            return value
        for mode in cls:
            if mode.value == value:
                return mode
        raise ConfigurationError(
            f"unknown mode {value!r}, expected one of {cls.tokens()}", field="mode"
        )

    @classmethod
    def tokens(cls) -> List[str]:
        return [mode.value for mode in cls]

    def __str__(self) -> str:
        return self.value


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(
            f"expected a string, got {type(value).__name__}", field=name
        )
    if not value.strip():
        raise ConfigurationError("must not be empty", field=name)
    return value


def _require_url(value: str, name: str, schemes: tuple) -> None:
    parts = urlsplit(value)
    if parts.scheme not in schemes:
        raise ConfigurationError(
            f"scheme must be one of {list(schemes)}, got {value!r}", field=name
        )
    if not parts.hostname:
        raise ConfigurationError(f"missing host in {value!r}", field=name)


@dataclass(frozen=True)
class StimuliConfig:
    """Stimulus files referenced by the experiment, relative to the experiment root."""

    main: str

    def __post_init__(self):
        _require_text(self.main, "stimuli.main")
        if PurePosixPath(self.main).is_absolute() or PureWindowsPath(self.main).is_absolute():
            raise ConfigurationError(
                f"must be a relative path, got {self.main!r}", field="stimuli.main"
            )

    def to_dict(self) -> Dict[str, str]:
        return {STIMULI_KEYS[f.name]: getattr(self, f.name) for f in dataclasses.fields(self)}


@dataclass(frozen=True)
class ExperimentConfig:
    """
    Deployment configuration for one experiment instance.

    ``socket_url`` may be omitted, in which case it is derived from
    ``server_url`` (see :meth:`derive_socket_url`). ``mode`` accepts either an
    :class:`ExperimentMode` or its token, and ``stimuli`` either a
    :class:`StimuliConfig` or a mapping with a ``main`` entry.
    """

    experiment_id: str
    server_url: str
    completion_url: str
    contact_email: str
    mode: ExperimentMode
    language: str
    stimuli: StimuliConfig
    socket_url: Optional[str] = field(default=None)

    def __post_init__(self):
        for attr in ("experiment_id", "server_url", "completion_url", "contact_email", "language"):
            _require_text(getattr(self, attr), FIELD_KEYS[attr])
        _require_url(self.server_url, "serverUrl", ("http", "https"))

        # frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "mode", ExperimentMode.parse(self.mode))
        if isinstance(self.stimuli, Mapping):
            if "main" not in self.stimuli:
                raise ConfigurationError("missing required entry", field="stimuli.main")
            object.__setattr__(self, "stimuli", StimuliConfig(main=self.stimuli["main"]))
        elif not isinstance(self.stimuli, StimuliConfig):
            raise ConfigurationError(
                f"expected a mapping, got {type(self.stimuli).__name__}", field="stimuli"
            )

        if self.socket_url is None:
            derived = self.derive_socket_url(self.server_url)
            logger.debug(f"Derived socketUrl {derived} from serverUrl {self.server_url}")
            object.__setattr__(self, "socket_url", derived)
        else:
            _require_text(self.socket_url, "socketUrl")
            _require_url(self.socket_url, "socketUrl", ("ws", "wss"))
            if self.socket_host != self.server_host:
                logger.info(
                    f"Experiment {self.experiment_id}: socketUrl host {self.socket_host} "
                    f"differs from serverUrl host {self.server_host}"
                )

    @staticmethod
    def derive_socket_url(server_url: str) -> str:
        """Secure WebSocket URL on the same host (and port) as ``server_url``."""
        _require_url(server_url, "serverUrl", ("http", "https"))
        return f"wss://{urlsplit(server_url).netloc}{SOCKET_PATH}"

    @property
    def server_host(self) -> str:
        return urlsplit(self.server_url).hostname or ""

    @property
    def socket_host(self) -> str:
        return urlsplit(self.socket_url).hostname or ""

    @property
    def is_debug(self) -> bool:
        return self.mode is ExperimentMode.DEBUG

    def to_dict(self) -> Dict[str, Any]:
        """Serialized camelCase form, in the key order the framework uses."""
        data: Dict[str, Any] = {}
        for attr in FIELD_KEYS:
            value = getattr(self, attr)
            data[FIELD_KEYS[attr]] = value.value if isinstance(value, ExperimentMode) else value
        data["stimuli"] = self.stimuli.to_dict()
        return data

    def flatten(self) -> Dict[str, str]:
        """Dotted-key view, e.g. ``{"stimuli.main": "stimuli/vignettes.csv"}``."""
        flat: Dict[str, str] = {}
        for key, value in self.to_dict().items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    flat[f"{key}.{sub_key}"] = sub_value
            else:
                flat[key] = value
        return flat

    def get(self, key: str) -> str:
        """Look up a field by its serialized or dotted key."""
        flat = self.flatten()
        if key not in flat:
            raise KeyError(f"Unknown configuration key '{key}'. Available: {list(flat)}")
        return flat[key]

    def replace(self, **changes: Any) -> "ExperimentConfig":
        """Return a new record with ``changes`` applied (Python attribute names)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperimentConfig":
        """Validate a camelCase mapping and build a record from it."""
        from pydantic import ValidationError

        from .validation import validate_config_dict

        try:
            model = validate_config_dict(data)
        except ValidationError as e:
            raise ConfigurationError(f"invalid experiment configuration:\n{e}") from e

        return cls(
            experiment_id=model.experimentId,
            server_url=model.serverUrl,
            socket_url=model.socketUrl,
            completion_url=model.completionUrl,
            contact_email=model.contactEmail,
            mode=model.mode,
            language=model.language,
            stimuli=StimuliConfig(main=model.stimuli.main),
        )


__all__ = [
    "ExperimentMode",
    "StimuliConfig",
    "ExperimentConfig",
    "FIELD_KEYS",
    "SOCKET_PATH",
]
