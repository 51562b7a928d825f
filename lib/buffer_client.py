# =============================================================================
# lib/buffer_client.py - Buffer API Client
# =============================================================================
# Thin httpx wrapper around the Buffer v1 REST API used to schedule and
# publish social media posts. Only HTTP concerns live here; syncing results
# back into social_posts is done by core/services/social_media_service.py.
#
# Buffer authenticates with an `access_token` parameter and accepts
# form-encoded POST bodies (array params use the `key[]` convention).
#
# Usage:
#   from lib.buffer_client import BufferClient
#   with BufferClient() as buffer:
#       profiles = buffer.get_profiles()
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class BufferClientError(ApplicationError):
    """Error talking to the Buffer API."""

    status_code = 502

    def __init__(self, message: str, code: str = "BUFFER_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class BufferClient:
    """
    Buffer API client.

    Args:
        access_token: Buffer access token (default: settings.BUFFER_API_KEY)
        base_url: API root (default: settings.BUFFER_API_URL)
        http_client: Optional preconfigured httpx.Client (used by tests)

    Raises:
        BufferClientError: If no access token is configured
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.access_token = access_token or settings.BUFFER_API_KEY
        if not self.access_token:
            raise BufferClientError(
                message="Buffer API key is not configured",
                code="BUFFER_NOT_CONFIGURED",
                suggestion="Set BUFFER_API_KEY in your .env file",
            )
        self.base_url = (base_url or settings.BUFFER_API_URL).rstrip("/")
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(timeout=15.0)

    def close(self) -> None:
        """Close the connection pool if this client created it."""
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "BufferClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            response = self.http.request(
                method,
                url,
                params={"access_token": self.access_token},
                data=data,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Buffer {method} {path} returned {e.response.status_code}")
            raise BufferClientError(
                message=f"Buffer API returned {e.response.status_code}",
                code="BUFFER_HTTP_ERROR",
                suggestion="Check that the Buffer access token is still valid",
                details={"path": path, "status_code": e.response.status_code}
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Buffer {method} {path} failed: {e}")
            raise BufferClientError(
                message=f"Buffer request failed: {e}",
                code="BUFFER_REQUEST_FAILED",
                details={"path": path}
            )

        # Write endpoints report failures in the body with HTTP 200
        if isinstance(payload, dict) and payload.get("success") is False:
            raise BufferClientError(
                message=payload.get("message") or "Unknown error from Buffer API",
                code="BUFFER_REJECTED",
                details={"path": path}
            )
        return payload

    @staticmethod
    def _update_fields(
        text: str,
        media_urls: list[str] | None,
        scheduled_at: datetime | str | None,
    ) -> dict[str, Any]:
        fields: dict[str, Any] = {"text": text}
        if media_urls:
            fields["media[link]"] = media_urls[0]
            fields["media[description]"] = text
        if scheduled_at:
            if isinstance(scheduled_at, datetime):
                scheduled_at = scheduled_at.isoformat()
            fields["scheduled_at"] = scheduled_at
        return fields

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def get_profiles(self) -> list[dict[str, Any]]:
        """List the social profiles connected to the Buffer account."""
        return self._request("GET", "profiles.json")

    def create_update(
        self,
        text: str,
        profile_ids: list[str],
        media_urls: list[str] | None = None,
        scheduled_at: datetime | str | None = None,
    ) -> dict[str, Any]:
        """
        Queue a new update.

        Returns:
            Buffer response dict; `update_id` holds the new update's ID
        """
        data = self._update_fields(text, media_urls, scheduled_at)
        data["profile_ids[]"] = list(profile_ids)
        result = self._request("POST", "updates/create.json", data=data)

        # Newer responses return a list of updates instead of update_id
        if not result.get("update_id") and result.get("updates"):
            result["update_id"] = result["updates"][0].get("id")
        return result

    def get_update(self, update_id: str) -> dict[str, Any]:
        """Fetch a single update, including its current status."""
        return self._request("GET", f"updates/{update_id}.json")

    def edit_update(
        self,
        update_id: str,
        text: str,
        media_urls: list[str] | None = None,
        scheduled_at: datetime | str | None = None,
    ) -> dict[str, Any]:
        """Replace the text, media or schedule of an existing update."""
        data = self._update_fields(text, media_urls, scheduled_at)
        return self._request("POST", f"updates/{update_id}/update.json", data=data)

    def destroy_update(self, update_id: str) -> dict[str, Any]:
        """Delete an update from the Buffer queue."""
        return self._request("POST", f"updates/{update_id}/destroy.json")

    def get_interactions(self, update_id: str) -> dict[str, Any]:
        """Fetch interaction counts (likes, shares, clicks...) for a sent update."""
        return self._request("GET", f"updates/{update_id}/interactions.json")
