"""Async HTTP client for the feedback REST API."""

import logging

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class FeedbackApiError(Exception):
    """The server rejected a submission with field-level messages."""

    def __init__(self, errors: list[dict]) -> None:
        self.errors = errors
        super().__init__("; ".join(e.get("message", str(e)) for e in errors))


def _error_messages(resp: httpx.Response) -> list[dict]:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), list):
        return body["error"]
    return [{"field": "body", "message": resp.text or "Bad request"}]


class FeedbackApiClient:
    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self._base_url = (base_url or settings.feedback_api_url).rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout)

    async def _get(self, path: str, time_range: str | None = None) -> dict | list:
        params = {"timeRange": time_range} if time_range else None
        resp = await self._client.get(f"{self._base_url}{path}", params=params)
        resp.raise_for_status()
        return resp.json()

    # ── Submissions ─────────────────────────────────────────────────
    async def submit_feedback(self, feedback: dict) -> dict:
        resp = await self._client.post(f"{self._base_url}/api/feedback", json=feedback)
        if resp.status_code == 400:
            errors = _error_messages(resp)
            logger.warning("Feedback rejected: %s", errors)
            raise FeedbackApiError(errors)
        resp.raise_for_status()
        return resp.json()

    async def get_feedback(self, time_range: str | None = None) -> list[dict]:
        return await self._get("/api/feedback", time_range)

    # ── Analytics ───────────────────────────────────────────────────
    async def get_feedback_stats(self, time_range: str | None = None) -> dict:
        return await self._get("/api/feedback/stats", time_range)

    async def get_event_type_stats(self) -> list[dict]:
        return await self._get("/api/feedback/stats/event-types")

    async def get_trends(self, time_range: str | None = None) -> list[dict]:
        return await self._get("/api/feedback/stats/trends", time_range)

    async def close(self) -> None:
        await self._client.aclose()
