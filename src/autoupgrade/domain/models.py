"""Core domain models for the upgrade handoff.

- UpgradeConfiguration: caller-supplied settings for the update collaborator
- CapturedConfiguration: read-only copy of the settings inside an envelope
- HandoffEnvelope: snapshot passed from the managed process to the updater
"""

import shlex
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

ENVELOPE_SCHEMA_VERSION = 1


class UpgradeConfiguration(BaseModel):
    """Settings handed to the update-detection collaborator.

    Only ``target_folder`` is interpreted by the handoff itself; the rest is
    consumed by whichever capability the caller plugs in. ``settings`` only
    takes JSON values so it crosses the process boundary unchanged.
    """

    target_folder: str = ""
    current_version: str = "0.0.0"
    feed_url: str | None = None
    channel: str = "stable"
    allow_prerelease: bool = False
    settings: dict[str, JsonValue] = Field(default_factory=dict)


class CapturedConfiguration(UpgradeConfiguration):
    """UpgradeConfiguration as frozen into a HandoffEnvelope."""

    model_config = ConfigDict(frozen=True)


class HandoffEnvelope(BaseModel):
    """Everything the updater needs to relaunch the managed executable."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = ENVELOPE_SCHEMA_VERSION
    config: CapturedConfiguration
    managed_executable: str
    interpreter: str | None = None
    managed_arguments: str = ""

    @field_validator("config", mode="before")
    @classmethod
    def _freeze_config(cls, value: Any) -> Any:
        # Copy mutable configurations instead of sharing them
        if isinstance(value, UpgradeConfiguration) and not isinstance(value, CapturedConfiguration):
            return value.model_dump()
        return value

    @classmethod
    def capture(
        cls,
        config: UpgradeConfiguration,
        managed_executable: str,
        arguments: list[str],
        interpreter: str | None = None,
    ) -> "HandoffEnvelope":
        """Build an envelope from a live argument list.

        The configuration is copied into a frozen CapturedConfiguration, so
        later changes by the caller do not leak into the snapshot.
        """
        return cls(
            config=config,
            managed_executable=managed_executable,
            interpreter=interpreter,
            managed_arguments=shlex.join(arguments),
        )

    @property
    def argument_list(self) -> list[str]:
        """Original arguments split back into a list, quoting preserved."""
        return shlex.split(self.managed_arguments)
