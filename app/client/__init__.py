"""Python client for the Daylog API with token lifecycle handling."""

from app.client.api import ApiClient, ApiError, UnauthorizedError
from app.client.session import AuthSession
from app.client.token_store import FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "UnauthorizedError",
    "AuthSession",
    "TokenStore",
    "FileTokenStore",
    "MemoryTokenStore",
]
