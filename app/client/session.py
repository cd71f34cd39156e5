"""Client-side token lifecycle: bootstrap, sign in/out, forced logout on 401."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from app.client.api import ApiClient, ApiError, UnauthorizedError
from app.client.token_store import TokenStore

logger = logging.getLogger("daylog.client")

T = TypeVar("T")


class AuthSession:
    """Owns the cached token and user profile for one client.

    The token is opaque here: validity is whatever the server says it is.
    Signing out never contacts the server, so a discarded token stays valid
    until it expires.
    """

    def __init__(
        self,
        api: ApiClient,
        store: TokenStore,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.api = api
        self.store = store
        self.on_unauthorized = on_unauthorized
        self.is_loading = False
        self.token: str | None = None
        self.user: dict | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def bootstrap(self) -> bool:
        """Restore a stored token at startup and check it against /me.

        Any failure clears the stored token. Returns True if a session was restored.
        """
        self.is_loading = True
        try:
            token = self.store.load()
            if not token:
                return False
            self.api.token = token
            try:
                user = self.api.me()
            except (ApiError, httpx.HTTPError) as e:
                logger.warning("Stored token rejected during bootstrap: %s", e)
                self._clear()
                return False
            self.token = token
            self.user = user
            return True
        finally:
            self.is_loading = False

    def sign_in(self, email: str, password: str) -> dict:
        """Log in, then cache the token in memory and in the store."""
        data = self.api.login(email, password)
        self.store.save(data["token"])
        self.token = data["token"]
        self.api.token = self.token
        self.user = data["user"]
        return self.user

    def sign_up(self, email: str, password: str, user_name: str | None = None) -> dict:
        """Create the account and sign straight in."""
        self.api.signup(email, password, user_name)
        return self.sign_in(email, password)

    def sign_out(self) -> None:
        """Forget the token locally. No request is sent."""
        self._clear()

    def refresh_user(self) -> dict:
        self.user = self.call(self.api.me)
        return self.user

    def call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run an authenticated request. A 401 prompts the user, signs out, and re-raises."""
        try:
            return fn(*args, **kwargs)
        except UnauthorizedError:
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            self.sign_out()
            raise

    def _clear(self) -> None:
        self.store.clear()
        self.token = None
        self.user = None
        self.api.token = None
