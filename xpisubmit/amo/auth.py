"""JWT authorization headers for the AMO API."""

from __future__ import annotations

import time
import uuid

import jwt

from xpisubmit.config import DEFAULT_JWT_EXPIRES_IN, parse_setting


class JWTAuth:
    """Issue short-lived HS256 tokens signed with the API secret."""

    def __init__(self, api_key: str, api_secret: str, expires_in: int | None = None) -> None:
        if expires_in is None:
            expires_in = parse_setting("AMO_API_JWT_EXPIRES_IN", DEFAULT_JWT_EXPIRES_IN, int)
        if expires_in <= 0:
            raise ValueError(f"JWT lifetime must be positive, got {expires_in}")
        self.api_key = api_key
        self.api_secret = api_secret
        self.expires_in = expires_in

    def claims(self, now: int | None = None) -> dict:
        """Return the claim set for a token issued at ``now``."""
        issued_at = int(time.time()) if now is None else now
        return {
            "iss": self.api_key,
            "jti": uuid.uuid4().hex,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }

    def token(self, now: int | None = None) -> str:
        """Encode a fresh token."""
        return jwt.encode(self.claims(now), self.api_secret, algorithm="HS256")

    def header(self, now: int | None = None) -> dict[str, str]:
        """Return the ``Authorization`` header for one request."""
        return {"Authorization": f"JWT {self.token(now)}"}
