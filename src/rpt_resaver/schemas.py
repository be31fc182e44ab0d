"""Pydantic schemas for runtime validation of resave inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, SecretStr


class ConnectionDescriptor(BaseModel):
    """Database login applied to every table of every report in a run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    server_name: str
    database_name: str
    user_id: str
    password: SecretStr


class ResaveRunConfig(BaseModel):
    """Validated input for a batch resave run.

    Field order matches the order in which the CLI collects the values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_dir: Path
    destination_dir: Path
    server_name: str
    database_name: str
    user_id: str
    password: SecretStr

    @property
    def connection(self) -> ConnectionDescriptor:
        """Return the connection descriptor for this run."""
        return ConnectionDescriptor(
            server_name=self.server_name,
            database_name=self.database_name,
            user_id=self.user_id,
            password=self.password,
        )
