import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from requests import Session

from xpisubmit.amo.auth import JWTAuth
from xpisubmit.config import CLIENT_SETTINGS, DEFAULT_API_URL_PREFIX, DEFAULT_CHANNEL, parse_setting
from xpisubmit.domain.requests import ClientConfig, ClientSubmitRequest, SubmissionResult
from xpisubmit.errors import APIResponseError, SubmissionTimeoutError, XpiFileError
from xpisubmit.types import ResponseLike, SessionLike

log = logging.getLogger(__name__)


def _summarize_validation(upload: Mapping[str, Any]) -> str:
    """Build a one-line summary of the validation messages of an upload."""
    validation = upload.get("validation") or {}
    messages = validation.get("messages") or []
    errors = [message for message in messages if message.get("type") == "error"]
    if not errors:
        return "Validation failed"
    details = "; ".join(message.get("message", "") for message in errors)
    return f"Validation failed with {len(errors)} error(s): {details}"


class AMOClient:
    """
    Client for the addons.mozilla.org signing API.

    Uploads a package, waits for the server-side validation to finish and
    creates a new version (or a new add-on when no GUID is given) from the
    upload. The blocking HTTP work runs in a worker thread so that ``submit``
    can be awaited.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[SessionLike] = None,
        poll_interval: Optional[float] = None,
        validation_timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.auth = JWTAuth(config.api_key, config.api_secret, config.api_jwt_expires_in)
        self.api_url_prefix = (config.api_url_prefix or DEFAULT_API_URL_PREFIX).rstrip("/")
        self.request_config = dict(config.request_config or {})
        if poll_interval is None:
            poll_interval = parse_setting(
                "XPISUBMIT_POLL_INTERVAL", CLIENT_SETTINGS["poll_interval"], float
            )
        if validation_timeout is None:
            validation_timeout = parse_setting(
                "XPISUBMIT_VALIDATION_TIMEOUT", CLIENT_SETTINGS["validation_timeout"], float
            )
        self.poll_interval = poll_interval
        self.validation_timeout = validation_timeout
        self._sleep = sleep
        self._clock = clock

        # Sessions passed in by the caller stay open; our own is closed after submit.
        self._owns_session = session is None
        self.session = session if session is not None else Session()
        self.session.headers.update({"User-Agent": CLIENT_SETTINGS["user_agent"]})
        if config.proxy_server:
            self.session.proxies.update({"http": config.proxy_server, "https": config.proxy_server})

        self.debug_logging = config.debug_logging

    def debug(self, *args: Any) -> None:
        """Log a debug message when debug logging is enabled."""
        if self.debug_logging:
            log.debug("[AMOClient] %s", " ".join(str(arg) for arg in args))

    async def submit(self, request: ClientSubmitRequest) -> SubmissionResult:
        """Upload, validate and sign one package."""
        return await asyncio.to_thread(self._submit, request)

    def _submit(self, request: ClientSubmitRequest) -> SubmissionResult:
        try:
            return self._sign(request)
        finally:
            if self._owns_session:
                self.session.close()

    def _sign(self, request: ClientSubmitRequest) -> SubmissionResult:
        xpi_path = Path(request.xpi_path)
        if not xpi_path.is_file():
            raise XpiFileError(f"Package file does not exist: {xpi_path}")

        upload = self._upload(xpi_path, request.channel or DEFAULT_CHANNEL)
        upload = self._wait_for_validation(upload)

        reported_version = upload.get("version")
        if reported_version and reported_version != request.version:
            log.warning(
                "Package reports version %s but %s was requested", reported_version, request.version
            )

        if not upload.get("valid"):
            return SubmissionResult(success=False, id=request.guid, error=_summarize_validation(upload))

        created = self._create_version(upload["uuid"], request.guid)
        return self._build_result(created, request.guid)

    def _url(self, path: str) -> str:
        """Construct the full URL for an API path."""
        return f"{self.api_url_prefix}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Perform one authenticated request and decode its JSON body."""
        url = self._url(path)
        options = {**self.request_config, **kwargs}
        options["headers"] = {**self.request_config.get("headers", {}), **self.auth.header()}

        self.debug(method, url)
        response: ResponseLike = self.session.request(method, url, **options)
        self.debug("->", response.status_code)
        if response.status_code >= 400:
            raise APIResponseError(response.status_code, response.text, url)
        return response.json()

    def _upload(self, xpi_path: Path, channel: str) -> Mapping[str, Any]:
        log.info("Uploading %s to the %s channel", xpi_path.name, channel)
        with xpi_path.open("rb") as upload_file:
            return self._request(
                "POST",
                "addons/upload/",
                files={"upload": (xpi_path.name, upload_file)},
                data={"channel": channel},
            )

    def _wait_for_validation(self, upload: Mapping[str, Any]) -> Mapping[str, Any]:
        """Poll the upload until the server has processed it."""
        deadline = self._clock() + self.validation_timeout
        while not upload.get("processed"):
            if self._clock() >= deadline:
                raise SubmissionTimeoutError(
                    f"Validation of upload {upload.get('uuid')} did not finish "
                    f"within {self.validation_timeout} seconds"
                )
            self.debug("waiting for validation of", upload.get("uuid"))
            self._sleep(self.poll_interval)
            upload = self._request("GET", f"addons/upload/{upload['uuid']}/")
        log.info("Validation %s", "passed" if upload.get("valid") else "failed")
        return upload

    def _create_version(self, upload_uuid: str, guid: Optional[str]) -> Mapping[str, Any]:
        if guid:
            return self._request("POST", f"addons/addon/{guid}/versions/", json={"upload": upload_uuid})
        # Without a GUID the service derives one from the package manifest.
        return self._request("POST", "addons/addon/", json={"version": {"upload": upload_uuid}})

    @staticmethod
    def _build_result(created: Mapping[str, Any], guid: Optional[str]) -> SubmissionResult:
        # Add-on creation nests the version; version creation returns it directly.
        version = created.get("version")
        if not isinstance(version, Mapping):
            version = created
        file_info = version.get("file") or {}
        return SubmissionResult(
            success=True,
            id=created.get("guid", guid),
            download_url=file_info.get("url"),
        )
