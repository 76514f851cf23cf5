import logging
from typing import Any, Dict, List, Optional

import httpx

# Configure module logger
logger = logging.getLogger(__name__)


class FitClubClientError(Exception):
    """Base exception for FitClub client errors."""
    pass


class NotAuthenticatedError(FitClubClientError):
    """Raised when a protected call is made without a session token."""
    pass


class ApiError(FitClubClientError):
    """Raised for any non-2xx response; ``message`` is the server's ``error`` field."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class FitClubClient:
    """
    Client for the FitClub HTTP API.

    Keeps the current session token, attaches it to every protected request
    and turns error responses into ``ApiError``.
    """

    API_PREFIX = "/api"

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the client.

        Args:
            base_url: Server root, ignored when ``http`` is given.
            token: Bearer token of an existing session.
            http: Preconfigured ``httpx.Client`` (e.g. FastAPI's TestClient).
            timeout: Request timeout in seconds for the default client.
        """
        self.token = token
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "FitClubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for authenticated requests."""
        if not self.token:
            raise NotAuthenticatedError("User not authenticated")
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        if response.is_success:
            return response.json()
        try:
            body = response.json()
            message = (body.get("error") if isinstance(body, dict) else None) or "Request failed"
        except ValueError:
            message = response.text or "Request failed"
        logger.debug("API error %s: %s", response.status_code, message)
        raise ApiError(response.status_code, message)

    def request(self, method: str, path: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        """Unauthenticated request, used for sign-up and sign-in."""
        response = self._http.request(method, f"{self.API_PREFIX}{path}", json=json_data)
        return self._parse(response)

    def fetch_with_auth(self, method: str, path: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute an authenticated request and return the parsed JSON body.

        Raises:
            NotAuthenticatedError: no token is set.
            ApiError: the server answered with a non-2xx status.
        """
        headers = self._get_headers()
        response = self._http.request(method, f"{self.API_PREFIX}{path}", headers=headers, json=json_data)
        return self._parse(response)

    # --- auth -----------------------------------------------------------

    def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        payload = {"email": email, "password": password}
        if display_name:
            payload["displayName"] = display_name
        return self.request("POST", "/auth/signup", payload)["userId"]

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Sign in and keep the returned access token for later calls."""
        data = self.request("POST", "/auth/signin", {"email": email, "password": password})
        self.token = data["accessToken"]
        return data

    def sign_out(self) -> None:
        try:
            self.fetch_with_auth("POST", "/auth/signout")
        finally:
            self.token = None

    # --- workouts ---------------------------------------------------------

    def create_workout(
        self,
        name: str,
        type: str,
        duration: int,
        calories: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> str:
        payload: Dict[str, Any] = {"name": name, "type": type, "duration": duration}
        if calories is not None:
            payload["calories"] = calories
        if notes is not None:
            payload["notes"] = notes
        return self.fetch_with_auth("POST", "/workouts", payload)["workoutId"]

    def get_workouts(self) -> List[Dict[str, Any]]:
        return self.fetch_with_auth("GET", "/workouts")["workouts"]

    def get_workout(self, workout_id: str) -> Dict[str, Any]:
        return self.fetch_with_auth("GET", f"/workouts/{workout_id}")

    def update_workout(self, workout_id: str, **fields: Any) -> None:
        self.fetch_with_auth("PUT", f"/workouts/{workout_id}", fields)

    def delete_workout(self, workout_id: str) -> None:
        self.fetch_with_auth("DELETE", f"/workouts/{workout_id}")

    def get_workout_stats(self) -> Dict[str, Any]:
        return self.fetch_with_auth("GET", "/workouts/stats")

    # --- profile ----------------------------------------------------------

    def get_profile(self) -> Dict[str, Any]:
        return self.fetch_with_auth("GET", "/users/me")

    def update_profile(self, user_id: str, display_name: str) -> Dict[str, Any]:
        return self.fetch_with_auth("PUT", f"/users/{user_id}", {"displayName": display_name})
