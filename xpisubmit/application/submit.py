"""Submission orchestration: validate, delegate to the signing client, map the outcome to an exit code."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from xpisubmit.amo.client import AMOClient
from xpisubmit.cli.exit_codes import SUBMISSION_FAILURE, SUCCESS
from xpisubmit.domain.requests import (
    ErrorMode,
    OrchestratorRuntimeConfig,
    SubmissionRequest,
    SubmissionResult,
)
from xpisubmit.errors import ValidationError

log = logging.getLogger(__name__)

# Checked in this order; the first empty one is reported.
REQUIRED_FIELDS = (
    ("apiKey", "api_key"),
    ("apiSecret", "api_secret"),
    ("version", "version"),
    ("xpiPath", "xpi_path"),
)


@dataclass(frozen=True, slots=True)
class Ok:
    """Submission call returned a result."""

    result: SubmissionResult


@dataclass(frozen=True, slots=True)
class Err:
    """Submission call raised."""

    error: Exception


def validate_request(request: SubmissionRequest) -> None:
    """Raise ``ValidationError`` for the first empty required argument."""
    for field_name, attribute in REQUIRED_FIELDS:
        if not getattr(request, attribute):
            raise ValidationError(field_name)


async def _run_submission(request: SubmissionRequest) -> Ok | Err:
    """Instantiate the client and await its submission, capturing any error."""
    client_class = request.client_class or AMOClient
    try:
        client = client_class(request.to_client_config())
        result = await client.submit(request.to_client_submit_request())
    except Exception as exc:
        return Err(exc)
    return Ok(result)


def resolve_exit_code(outcome: Ok | Err, error_mode: ErrorMode) -> int:
    """
    Map a submission outcome to a process exit code.

    In ``PROPAGATE`` mode a captured error is re-raised instead of being
    mapped, so no exit code is produced.
    """
    match outcome:
        case Ok(result=result) if result.success:
            log.info("SUCCESS")
            return SUCCESS
        case Ok(result=result):
            # Only ``success`` is guaranteed on results from other backends.
            error = getattr(result, "error", None)
            log.error("FAIL%s", f": {error}" if error else "")
            return SUBMISSION_FAILURE
        case Err(error=error) if error_mode is ErrorMode.PROPAGATE:
            raise error
        case Err(error=error):
            log.error("Failed to submit add-on", exc_info=error)
            return SUBMISSION_FAILURE
    raise TypeError(f"Unexpected submission outcome: {outcome!r}")


async def submit_addon_and_exit(
    request: SubmissionRequest,
    runtime_config: OrchestratorRuntimeConfig,
) -> None:
    """
    Submit one package for signing and report the outcome through ``exit``.

    Parameters:
        request (SubmissionRequest): Submission arguments and the client type to use.
        runtime_config (OrchestratorRuntimeConfig): Exit mechanism and error mode.

    Raises:
        ValidationError: A required argument is empty. Raised regardless of the
            error mode, and ``exit`` is not called.
        Exception: Whatever the client raised, when the error mode is ``PROPAGATE``.
    """
    validate_request(request)

    log.info("Submitting %s (version %s)", request.xpi_path, request.version)
    outcome = await _run_submission(request)
    code = resolve_exit_code(outcome, runtime_config.error_mode)
    runtime_config.system_process.exit(code)
