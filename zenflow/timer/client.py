"""
zenflow.timer.client — HTTP client for the feedback API
========================================================
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class FeedbackClientError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _strip_identifier(data: dict) -> dict:
    return {k: v for k, v in data.items() if k != "_id"}


class FeedbackClient:
    """Thin synchronous wrapper over ``/api/feedback``.

    Usage::

        with FeedbackClient("http://localhost:8000") as api:
            counts = api.send_feedback("Breathing", is_like=True)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"), timeout=timeout, transport=transport
        )

    def __enter__(self) -> FeedbackClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise FeedbackClientError(f"Feedback API unreachable: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code >= 400:
            message = body.get("error") if isinstance(body, dict) else None
            raise FeedbackClientError(
                message or f"Feedback API returned {resp.status_code}",
                status_code=resp.status_code,
            )
        if not isinstance(body, dict):
            raise FeedbackClientError("Feedback API returned a non-object body")
        return _strip_identifier(body)

    def get_feedback(self) -> dict[str, dict[str, int]]:
        return self._request("GET", "/api/feedback")

    def send_feedback(self, type_name: str, is_like: bool) -> dict[str, dict[str, int]]:
        return self._request(
            "POST", "/api/feedback", json={"typeName": type_name, "isLike": is_like}
        )
