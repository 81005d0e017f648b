"""Pydantic models for validating raw configuration mappings.

These mirror the camelCase serialized form of
:class:`magpie_config.config.record.ExperimentConfig`. Validation is applied at
IO boundaries only (files, environment, CLI input); records built in Python
are checked by the dataclass itself.

- validate_config_dict(data) -> ExperimentConfigModel (raises on error)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .record import ExperimentMode


def _non_empty(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v


class StimuliModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    main: str

    @field_validator("main")
    @classmethod
    def _check_main(cls, v: str):
        return _non_empty(v)


class ExperimentConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    experimentId: str
    serverUrl: str
    socketUrl: Optional[str] = None
    completionUrl: str
    contactEmail: str
    mode: str
    language: str
    stimuli: StimuliModel

    @field_validator(
        "experimentId", "serverUrl", "completionUrl", "contactEmail", "language"
    )
    @classmethod
    def _check_non_empty(cls, v: str):
        return _non_empty(v)

    @field_validator("socketUrl")
    @classmethod
    def _check_socket(cls, v: Optional[str]):
        if v is not None:
            _non_empty(v)
        return v

    @field_validator("mode")
    @classmethod
    def _check_mode(cls, v: str):
        if v not in ExperimentMode.tokens():
            raise ValueError(f"unknown mode {v!r}, expected one of {ExperimentMode.tokens()}")
        return v


def validate_config_dict(data: Mapping[str, Any]) -> ExperimentConfigModel:
    if not isinstance(data, Mapping):
        raise TypeError(
            f"Expected a mapping for experiment configuration, got {type(data).__name__}"
        )
    return ExperimentConfigModel.model_validate(dict(data))


__all__ = [
    "ExperimentConfigModel",
    "StimuliModel",
    "validate_config_dict",
]
