"""
PuttLog API Client
===================

What:  Async HTTP client for the PuttLog API, covering what the mobile
       screens do besides rendering: normalize typed counts, pre-check them,
       call the endpoints, and turn stepper presses into partial updates.
How:   Wraps an httpx.AsyncClient. Every request carries the caller's owner
       id in the identity header. Failed responses are raised as the same
       exception types the backend uses (ValidationError, NotFoundError) or
       ApiError for anything else. Nothing is retried.

Example:
    client = PuttLogClient.create("http://localhost:4000", owner_id="user_123")
    session = await client.create_session("Tuesday greens", "2024-05-14")
    putt = await client.add_putt(session.id, "3", "10", "7")
    putt = await client.adjust_putt(session.id, putt, "increment_makes")
    await client.close()
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx

from puttlog.exceptions import ApiError, NotFoundError, ValidationError
from puttlog.schemas.session import PuttResponse, SessionDetail, SessionSummary
from puttlog.services.normalize import normalize_count
from puttlog.services.putt_service import validate_counts, validate_distance
from puttlog.services.steppers import STEPPERS

CountInput = Union[str, int, None]


@dataclass
class PuttLogClient:
    """HTTPX-backed PuttLog API client for one caller."""

    base_url: str
    owner_id: str
    http_client: httpx.AsyncClient
    identity_header: str = "x-user-id"
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, owner_id: str, **kwargs: Any) -> "PuttLogClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            owner_id=owner_id,
            http_client=httpx.AsyncClient(),
            **kwargs,
        )

    # ── Transport ─────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        resource: str = "resource",
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            headers={self.identity_header: self.owner_id},
            json=json,
            timeout=self.timeout,
        )
        if response.is_success:
            return response

        message = _error_message(response)
        if response.status_code == 400:
            raise ValidationError(message=message)
        if response.status_code == 404:
            raise NotFoundError(resource=resource, context={"server_message": message})
        raise ApiError(status_code=response.status_code, message=message)

    # ── Sessions ──────────────────────────────────────────────────────────

    async def list_sessions(self) -> List[SessionSummary]:
        response = await self._request("GET", "/sessions")
        return [SessionSummary.model_validate(item) for item in response.json()]

    async def create_session(self, name: str, date: str) -> SessionSummary:
        """Create a session; the name is sent trimmed, so a blank name is rejected."""
        response = await self._request("POST", "/sessions", json={"name": name.strip(), "date": date})
        return SessionSummary.model_validate(response.json())

    async def get_session(self, session_id: int) -> SessionDetail:
        response = await self._request("GET", f"/sessions/{session_id}", resource="session")
        return SessionDetail.model_validate(response.json())

    async def delete_session(self, session_id: int) -> None:
        await self._request("DELETE", f"/sessions/{session_id}", resource="session")

    # ── Putt records ──────────────────────────────────────────────────────

    async def add_putt(
        self,
        session_id: int,
        distance_m: CountInput,
        attempts: CountInput,
        makes: CountInput,
    ) -> PuttResponse:
        """
        Add a distance record from typed input.

        Values are normalized to digit-only integers and checked locally
        before the request; the server checks them again.
        """
        distance = normalize_count(distance_m)
        attempts_count = normalize_count(attempts)
        makes_count = normalize_count(makes)
        validate_distance(distance)
        validate_counts(attempts_count, makes_count)

        response = await self._request(
            "POST",
            f"/sessions/{session_id}/putts",
            resource="session",
            json={"distance_m": distance, "attempts": attempts_count, "makes": makes_count},
        )
        return PuttResponse.model_validate(response.json())

    async def update_putt(
        self,
        session_id: int,
        putt_id: int,
        attempts: Optional[int] = None,
        makes: Optional[int] = None,
    ) -> PuttResponse:
        body: Dict[str, int] = {}
        if attempts is not None:
            body["attempts"] = attempts
        if makes is not None:
            body["makes"] = makes

        response = await self._request(
            "PATCH",
            f"/sessions/{session_id}/putts/{putt_id}",
            resource="putt record",
            json=body,
        )
        return PuttResponse.model_validate(response.json())

    async def adjust_putt(self, session_id: int, row: PuttResponse, action: str) -> PuttResponse:
        """
        Apply a stepper press to a row.

        Args:
            action: increment_attempts, decrement_attempts,
                    increment_makes or decrement_makes
        """
        try:
            stepper = STEPPERS[action]
        except KeyError:
            raise ValueError(f"Unknown stepper action '{action}'. Must be one of: {sorted(STEPPERS)}")
        return await self.update_putt(session_id, row.id, **stepper(row))

    async def delete_putt(self, session_id: int, putt_id: int) -> None:
        await self._request(
            "DELETE", f"/sessions/{session_id}/putts/{putt_id}", resource="session"
        )

    # ── Misc ──────────────────────────────────────────────────────────────

    async def health(self) -> Dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or f"HTTP {response.status_code}"
