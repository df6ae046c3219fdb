"""User Directory Client - fetches raw user records from the remote directory.

Invariants:
    - Transport errors, timeouts, non-2xx responses and malformed payloads
      all map to UserDirectoryError with a human-readable message
    - Non-2xx responses produce the message "HTTP <status>"
    - Never returns partial data: either the full user list or an exception

Design Decisions:
    - No retry here: retrying a failed load is a presentation concern (reload endpoint)
    - Transport injectable so tests use httpx.MockTransport instead of the network
"""

import logging
from typing import Any

import httpx

from app.core.errors import ErrorContext, UserDirectoryError

logger = logging.getLogger(__name__)


class UserDirectoryClient:
    """Async client for a dummyjson-style /users endpoint."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_users(self) -> list[dict[str, Any]]:
        """GET the directory and return its "users" list."""
        context = ErrorContext(board="users", debug_info={"url": self.url})
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise UserDirectoryError(
                f"HTTP {e.response.status_code}", context=context,
            )
        except httpx.TimeoutException:
            raise UserDirectoryError(
                f"Timed out after {self.timeout_seconds}s", context=context,
            )
        except httpx.HTTPError as e:
            raise UserDirectoryError(
                str(e) or type(e).__name__, context=context,
            )
        except ValueError as e:
            raise UserDirectoryError(f"Invalid JSON: {e}", context=context)

        users = payload.get("users") if isinstance(payload, dict) else None
        if not isinstance(users, list):
            raise UserDirectoryError(
                "Malformed response: missing 'users' list", context=context,
            )
        logger.info("Fetched %d users", len(users), extra={"board": "users"})
        return users
