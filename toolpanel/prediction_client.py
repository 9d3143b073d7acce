"""HTTP client for the remote prediction endpoint."""

from __future__ import annotations

import json
from typing import Any
from urllib import error, request
from urllib.parse import urlparse

from toolpanel.errors import PredictionError

ALLOWED_SCHEMES = {"http", "https"}


def validate_endpoint(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Prediction endpoint must use http(s), got {parsed.scheme or 'missing'}")
    if not parsed.hostname:
        raise ValueError("Prediction endpoint is missing a hostname.")
    if parsed.username or parsed.password:
        raise ValueError("Prediction endpoint must not embed credentials.")


def build_prediction_payload(question: str, session_id: str) -> dict[str, Any]:
    return {"question": question, "overrideConfig": {"sessionId": session_id}}


class PredictionClient:
    """Blocking JSON POST client; callers run :meth:`predict` off the event loop."""

    def __init__(self, endpoint: str, *, timeout_s: float = 30.0) -> None:
        validate_endpoint(endpoint)
        self.endpoint = endpoint
        self.timeout_s = timeout_s

    def predict(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the decoded response body.

        Raises:
            PredictionError: on transport failure, a non-2xx status, or a body
                that is not a JSON object with a string ``text`` field.
        """

        data = json.dumps(payload).encode("utf-8")
        req = request.Request(
            self.endpoint,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout_s) as response:
                body = response.read().decode("utf-8")
        except error.HTTPError as exc:
            raise PredictionError(f"Prediction endpoint returned HTTP {exc.code}") from exc
        except (error.URLError, OSError) as exc:
            raise PredictionError(f"Prediction request failed: {exc}") from exc

        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as exc:
            raise PredictionError(f"Prediction response is not JSON: {exc}") from exc
        if not isinstance(decoded, dict) or not isinstance(decoded.get("text"), str):
            raise PredictionError("Prediction response is missing a text field")
        return decoded
