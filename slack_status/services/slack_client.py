"""Slack profile API client.

Thin wrapper around httpx for users.profile.set and users.profile.get.
Failures raise RemoteError, never typer.Exit, so the client is reusable
outside the CLI. No retries: one call, one outcome.
"""

import logging

import httpx

from slack_status.errors import RemoteError
from slack_status.services.protocol import RemoteStatus
from slack_status.utils.redaction import redact_for_logging, sanitize_error_message

logger = logging.getLogger(__name__)

SLACK_API_URL = "https://slack.com/api"

# Slack "error" values meaning the token itself is unusable.
_AUTH_ERRORS = frozenset({
    "not_authed", "invalid_auth", "account_inactive",
    "token_revoked", "token_expired", "missing_scope",
})


class SlackProfileClient:
    """ProfileClient implementation backed by the Slack Web API."""

    def __init__(
        self,
        base_url: str = SLACK_API_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the HTTP client.

        Args:
            base_url: Slack Web API base URL.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests).
        """
        self._base_url = base_url
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _call(self, method: str, token: str, payload: dict | None = None) -> dict:
        """Call a Web API method and return its body.

        Args:
            method: Slack method name, e.g. "users.profile.set".
            token: Bearer token.
            payload: JSON body; the call is a GET when None.

        Raises:
            RemoteError: On transport failure, non-2xx status, or "ok": false.
        """
        headers = {"Authorization": f"Bearer {token}"}
        try:
            if payload is None:
                resp = self._client.get(f"/{method}", headers=headers)
            else:
                resp = self._client.post(f"/{method}", headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise RemoteError(
                "E-4001", method=method,
                detail=sanitize_error_message(f"{type(e).__name__}: {e}"),
            ) from e

        logger.debug("%s request headers: %s", method, redact_for_logging(headers))
        logger.debug("%s -> HTTP %d", method, resp.status_code)

        if resp.status_code >= 400:
            raise RemoteError(
                "E-4001", method=method,
                detail=f"HTTP {resp.status_code} {sanitize_error_message(resp.text[:200])}",
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise RemoteError("E-4001", method=method, detail="response is not JSON") from e
        if not isinstance(body, dict):
            raise RemoteError("E-4001", method=method, detail="response is not a JSON object")

        if not body.get("ok"):
            error = body.get("error", "unknown_error")
            code = "E-4003" if error in _AUTH_ERRORS else "E-4002"
            raise RemoteError(code, method=method, error=error)

        for warning in body.get("response_metadata", {}).get("warnings", []):
            logger.warning("Slack %s warning: %s", method, warning)

        return body

    def set_status(self, text: str, emoji: str, expiration: int, token: str) -> None:
        """Set the profile status via POST users.profile.set.

        Args:
            text: Status text.
            emoji: Status emoji, e.g. ":house:".
            expiration: Unix timestamp, 0 for never.
            token: Bearer token.
        """
        logger.info("Updating Slack status...")
        self._call(
            "users.profile.set",
            token,
            {
                "profile": {
                    "status_text": text,
                    "status_emoji": emoji,
                    "status_expiration": expiration,
                },
            },
        )

    def get_status(self, token: str) -> RemoteStatus | None:
        """Fetch the profile status via GET users.profile.get."""
        logger.info("Requesting Slack status...")
        body = self._call("users.profile.get", token)
        return RemoteStatus.from_api(body.get("profile") or {})
