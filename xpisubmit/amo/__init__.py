from .auth import JWTAuth
from .client import AMOClient

__all__ = ["AMOClient", "JWTAuth"]
