import os
from typing import Callable, TypeVar

from dotenv import load_dotenv

from xpisubmit.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

T = TypeVar("T")

DEFAULT_API_URL_PREFIX = os.getenv("AMO_API_URL_PREFIX", "https://addons.mozilla.org/api/v5")

# AMO rejects tokens that live longer than five minutes.
DEFAULT_JWT_EXPIRES_IN = os.getenv("AMO_API_JWT_EXPIRES_IN", "300")

DEFAULT_CHANNEL = os.getenv("XPISUBMIT_CHANNEL", "unlisted")

CLIENT_SETTINGS = {
    "poll_interval": os.getenv("XPISUBMIT_POLL_INTERVAL", "1.0"),
    "validation_timeout": os.getenv("XPISUBMIT_VALIDATION_TIMEOUT", "300"),
    "user_agent": os.getenv("XPISUBMIT_USER_AGENT", "xpisubmit"),
}


def parse_setting(name: str, value: str, convert: Callable[[str], T]) -> T:
    """
    Convert a raw setting value, naming the setting when it is malformed.

    Parameters:
        name (str): Environment variable the value came from.
        value (str): Raw value.
        convert (Callable): Conversion such as ``int`` or ``float``.

    Returns:
        The converted value.
    """
    try:
        return convert(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from exc
