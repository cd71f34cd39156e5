"""HTTP client for the Daylog REST API."""

from typing import Any, BinaryIO

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"


class ApiError(Exception):
    """Request failed. message is what the server reported, or a generic description."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ApiError):
    """The server rejected the bearer token (HTTP 401)."""


class ApiClient:
    """Thin wrapper over httpx that attaches the bearer token and unwraps JSON."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: str | None = None, http: httpx.Client | None = None):
        self._http = http or httpx.Client(base_url=base_url, timeout=10.0)
        self.token = token

    def close(self) -> None:
        self._http.close()

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self._http.request(method, path, headers=headers, **kwargs)

        try:
            data = response.json()
        except ValueError:
            raise ApiError(
                f"Unexpected response from server (status {response.status_code})", response.status_code
            ) from None

        if response.status_code == 401:
            raise UnauthorizedError(_message(data, "Not authenticated"), 401)
        if response.is_error:
            raise ApiError(_message(data, "Request failed"), response.status_code)
        return data

    # --- auth ---

    def signup(self, email: str, password: str, user_name: str | None = None) -> dict:
        payload = {"email": email, "password": password, "user_name": user_name}
        return self.request("POST", "/api/auth/signup", json=payload)

    def login(self, email: str, password: str) -> dict:
        return self.request("POST", "/api/auth/login", json={"email": email, "password": password})

    def me(self) -> dict:
        return self.request("GET", "/api/auth/me")["user"]

    def update_profile(self, user_name: str | None = None, avatar: tuple[str, BinaryIO, str] | None = None) -> dict:
        data = {"user_name": user_name} if user_name else {}
        files = {"avatar": avatar} if avatar else None
        return self.request("PUT", "/api/users/profile", data=data, files=files)["user"]

    # --- categories ---

    def list_categories(self) -> list[dict]:
        return self.request("GET", "/api/categories")["categories"]

    def create_category(self, name: str, icon: str, color: str) -> dict:
        return self.request("POST", "/api/categories", json={"name": name, "icon": icon, "color": color})["category"]

    def update_category(self, category_id: int, name: str, icon: str, color: str) -> dict:
        payload = {"name": name, "icon": icon, "color": color}
        return self.request("PUT", f"/api/categories/{category_id}", json=payload)["category"]

    def delete_category(self, category_id: int) -> None:
        self.request("DELETE", f"/api/categories/{category_id}")

    # --- records ---

    def list_records(self, category_id: int | None = None) -> list[dict]:
        params = {"category_id": category_id} if category_id is not None else None
        return self.request("GET", "/api/records", params=params)

    def get_record(self, record_id: int) -> dict:
        return self.request("GET", f"/api/records/{record_id}")

    def create_record(
        self,
        date_logged: str,
        title: str | None = None,
        description: str | None = None,
        category_id: int | None = None,
        image: tuple[str, BinaryIO, str] | None = None,
    ) -> dict:
        fields = {"date_logged": date_logged, "title": title, "description": description, "category_id": category_id}
        data = {key: str(value) for key, value in fields.items() if value is not None}
        files = {"image": image} if image else None
        return self.request("POST", "/api/records", data=data, files=files)

    def update_record(self, record_id: int, image: tuple[str, BinaryIO, str] | None = None, **fields: Any) -> dict:
        data = {key: "" if value is None else str(value) for key, value in fields.items()}
        files = {"image": image} if image else None
        return self.request("PUT", f"/api/records/{record_id}", data=data, files=files)["record"]

    def delete_record(self, record_id: int) -> None:
        self.request("DELETE", f"/api/records/{record_id}")

    def record_stats(self) -> dict:
        return self.request("GET", "/api/records/stats")


def _message(data: Any, default: str) -> str:
    if isinstance(data, dict):
        return data.get("message") or default
    return default
