"""Immutable request models shared between CLI, orchestration and client layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from xpisubmit.types import ClientClassLike, SystemProcessLike


class ErrorMode(Enum):
    """How submission exceptions are surfaced to the caller."""

    TERMINATE = "terminate"
    PROPAGATE = "propagate"


@dataclass(frozen=True, slots=True)
class SubmissionRequest:
    """All inputs required to submit one package for signing."""

    api_key: str | None
    api_secret: str | None
    version: str | None
    xpi_path: str | None
    id: str | None = None
    channel: str | None = None
    verbose: bool = False
    api_proxy: str | None = None
    api_request_config: Mapping[str, Any] | None = None
    api_jwt_expires_in: int | None = None
    api_url_prefix: str | None = None
    client_class: ClientClassLike | None = None

    def to_client_config(self) -> ClientConfig:
        """Return the configuration handed to the client constructor."""
        return ClientConfig(
            api_key=self.api_key,
            api_secret=self.api_secret,
            debug_logging=self.verbose,
            proxy_server=self.api_proxy,
            request_config=self.api_request_config,
            api_jwt_expires_in=self.api_jwt_expires_in,
            api_url_prefix=self.api_url_prefix,
        )

    def to_client_submit_request(self) -> ClientSubmitRequest:
        """Return the payload handed to ``client.submit``."""
        return ClientSubmitRequest(
            xpi_path=self.xpi_path,
            version=self.version,
            guid=self.id,
            channel=self.channel,
        )


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Constructor arguments for a signing client."""

    api_key: str
    api_secret: str
    debug_logging: bool = False
    proxy_server: str | None = None
    request_config: Mapping[str, Any] | None = None
    api_jwt_expires_in: int | None = None
    api_url_prefix: str | None = None


@dataclass(frozen=True, slots=True)
class ClientSubmitRequest:
    """Package description passed to the client's submit operation."""

    xpi_path: str
    version: str
    guid: str | None = None
    channel: str | None = None


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Outcome reported by a signing client."""

    success: bool
    id: str | None = None
    download_url: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class OrchestratorRuntimeConfig:
    """Process-level collaborators for one orchestration run."""

    system_process: SystemProcessLike
    error_mode: ErrorMode = ErrorMode.TERMINATE

    @classmethod
    def from_flag(cls, system_process: SystemProcessLike, *, throw_error: bool) -> OrchestratorRuntimeConfig:
        """Build a runtime config from the boolean ``throw_error`` form."""
        mode = ErrorMode.PROPAGATE if throw_error else ErrorMode.TERMINATE
        return cls(system_process=system_process, error_mode=mode)
