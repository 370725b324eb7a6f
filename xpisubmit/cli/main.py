import asyncio
import logging
import sys
from typing import Optional

import click

from xpisubmit import __version__ as about
from xpisubmit.amo.client import AMOClient
from xpisubmit.application.submit import submit_addon_and_exit
from xpisubmit.cli.config import setup_logging
from xpisubmit.cli.exit_codes import USER_ERROR
from xpisubmit.domain.requests import ErrorMode, OrchestratorRuntimeConfig, SubmissionRequest
from xpisubmit.errors import ValidationError

# Get a logger for this module.
log = logging.getLogger(__name__)

# Define an epilog message with examples.
EPILOG = f"""
Examples:

{click.style('• submit a new version of an existing add-on for unlisted signing', fg="green")}

    $ xpisubmit --api-key user:123:456 --api-secret s3cr3t --id my-addon@example.com
    --addon-version 1.0.1 --xpi-path dist/my-addon-1.0.1.xpi

{click.style('• submit a new listed add-on and let AMO derive the id from the manifest', fg="green")}

    $ xpisubmit --addon-version 0.1.0 --xpi-path my-addon.xpi --channel listed
"""


class UsageError(click.UsageError):
    """Usage error reported with the CLI's user-error exit code."""

    exit_code = USER_ERROR


def build_submission_request(
        *,
        api_key: Optional[str],
        api_secret: Optional[str],
        addon_id: Optional[str],
        addon_version: Optional[str],
        xpi_path: Optional[str],
        channel: Optional[str],
        api_url_prefix: Optional[str],
        api_proxy: Optional[str],
        timeout: Optional[float],
        api_jwt_expires_in: Optional[int],
        verbose: bool,
) -> SubmissionRequest:
    """Translate parsed command-line values into a submission request."""
    request_config = {"timeout": timeout} if timeout is not None else None
    return SubmissionRequest(
        api_key=api_key,
        api_secret=api_secret,
        id=addon_id,
        version=addon_version,
        xpi_path=xpi_path,
        channel=channel,
        verbose=verbose,
        api_proxy=api_proxy,
        api_request_config=request_config,
        api_jwt_expires_in=api_jwt_expires_in,
        api_url_prefix=api_url_prefix,
        client_class=AMOClient,
    )


@click.command(
    help=about.__description__,
    epilog=EPILOG,
)
@click.version_option(
    about.__version__,
    prog_name=about.__title__,
    message="%(prog)s, version %(version)s\nCheck {url} for more info".format(url=about.__url__),
)
@click.option(
    "--api-key",
    metavar="<key>",
    help="API key (JWT issuer) from addons.mozilla.org",
    envvar="AMO_API_KEY",
)
@click.option(
    "--api-secret",
    metavar="<secret>",
    help="API secret (JWT secret) from addons.mozilla.org",
    envvar="AMO_API_SECRET",
)
@click.option(
    "--id",
    "addon_id",
    metavar="<guid>",
    help="Add-on identifier; omit to let the service derive it from the manifest",
    envvar="XPISUBMIT_ID",
)
@click.option(
    "--addon-version",
    metavar="<version>",
    help="Version of the add-on being submitted",
    envvar="XPISUBMIT_ADDON_VERSION",
)
@click.option(
    "--xpi-path",
    type=click.Path(dir_okay=False),
    metavar="<file>",
    help="Path to the .xpi package",
    envvar="XPISUBMIT_XPI_PATH",
)
@click.option(
    "--channel",
    type=click.Choice(["listed", "unlisted"], case_sensitive=False),
    help="Release channel  [default: unlisted]",
    envvar="XPISUBMIT_CHANNEL",
)
@click.option(
    "--api-url-prefix",
    metavar="<url>",
    help="Signing API base URL",
    envvar="AMO_API_URL_PREFIX",
)
@click.option(
    "--api-proxy",
    metavar="<url>",
    help="Proxy server used for all API requests",
    envvar="AMO_API_PROXY",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    metavar="<seconds>",
    help="Per-request network timeout",
    envvar="XPISUBMIT_TIMEOUT",
)
@click.option(
    "--api-jwt-expires-in",
    type=click.IntRange(min=1),
    metavar="<seconds>",
    help="Lifetime of the generated authentication token",
    envvar="AMO_API_JWT_EXPIRES_IN",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging",
    envvar="XPISUBMIT_VERBOSE",
)
def main(
        api_key: Optional[str],
        api_secret: Optional[str],
        addon_id: Optional[str],
        addon_version: Optional[str],
        xpi_path: Optional[str],
        channel: Optional[str],
        api_url_prefix: Optional[str],
        api_proxy: Optional[str],
        timeout: Optional[float],
        api_jwt_expires_in: Optional[int],
        verbose: bool,
):
    """
    Main entry point for the submission CLI.

    Builds a submission request from the parsed options and runs it in
    terminate mode: the process exits with 0 when the package was signed and
    with 1 when the submission failed or raised. Empty required arguments are
    reported as a usage error.
    """
    setup_logging(level=logging.DEBUG if verbose else logging.INFO)
    click.echo(click.style(about.__intro__, fg="blue"))

    request = build_submission_request(
        api_key=api_key,
        api_secret=api_secret,
        addon_id=addon_id,
        addon_version=addon_version,
        xpi_path=xpi_path,
        channel=channel,
        api_url_prefix=api_url_prefix,
        api_proxy=api_proxy,
        timeout=timeout,
        api_jwt_expires_in=api_jwt_expires_in,
        verbose=verbose,
    )
    runtime_config = OrchestratorRuntimeConfig(system_process=sys, error_mode=ErrorMode.TERMINATE)

    try:
        asyncio.run(submit_addon_and_exit(request, runtime_config))
    except ValidationError as exc:
        raise UsageError(str(exc)) from exc


if __name__ == "__main__":
    main(prog_name=about.__title__)
