"""Typed protocol contracts shared across runtime components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, MutableMapping, Protocol

if TYPE_CHECKING:
    from xpisubmit.domain.requests import ClientConfig, ClientSubmitRequest, SubmissionResult


class SystemProcessLike(Protocol):
    """Minimal process contract used to report the final exit code."""

    def exit(self, code: int) -> Any:
        """Terminate, or signal termination of, the host process."""


class SubmitClientLike(Protocol):
    """Signing client instance contract used by the orchestrator."""

    async def submit(self, request: ClientSubmitRequest) -> SubmissionResult:
        """Upload the package and report whether signing succeeded."""


class ClientClassLike(Protocol):
    """Client type contract: constructing it yields a submit-capable client."""

    def __call__(self, config: ClientConfig) -> SubmitClientLike:
        """Create a client for the given configuration."""


class ResponseLike(Protocol):
    """Minimal HTTP response contract used by the AMO client."""

    status_code: int
    text: str

    def json(self) -> Any:
        """Decode the JSON response body."""


class SessionLike(Protocol):
    """Minimal HTTP session contract used by the AMO client."""

    headers: MutableMapping[str, str]
    proxies: MutableMapping[str, str]

    def request(self, method: str, url: str, **kwargs: Any) -> ResponseLike:
        """Perform an HTTP request and return a response object."""

    def close(self) -> None:
        """Release pooled connections."""
