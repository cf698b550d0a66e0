"""Async client for the GhostMail temporary-email HTTP API.

Every endpoint takes the API key as the last path segment and answers
``{"status": "success", "data": ...}``. Anything else (transport error,
non-2xx, bad JSON, non-success status) is reported as ``None`` so callers
can show a single "try again" notice.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from ghostmail.provider.models import Mailbox, RawMessage

DEFAULT_BASE_URL = "https://ghostmail.one/api"


class GhostmailClient:
    """Thin wrapper over the provider endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GhostmailClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # -- endpoints -----------------------------------------------------------

    async def get_domains(self) -> list[str] | None:
        data = await self._request("GET", "domains")
        if data is None:
            return None
        domains = data.get("domains") if isinstance(data, dict) else None
        if isinstance(domains, Mapping):
            return [str(d) for d in domains.values()]
        if isinstance(domains, list):
            return [str(d) for d in domains]
        logger.warning("Provider returned no domain list")
        return None

    async def create_email(self) -> Mailbox | None:
        return self._mailbox(await self._request("POST", "email/create"))

    async def change_email(self, token: str, username: str, domain: str) -> Mailbox | None:
        return self._mailbox(await self._request("POST", "email/change", token, username, domain))

    async def delete_email(self, token: str) -> bool:
        return await self._request("POST", "email/delete", token) is not None

    async def get_messages(self, token: str) -> list[RawMessage] | None:
        data = await self._request("GET", "messages", token)
        if not isinstance(data, dict):
            return None
        return [RawMessage.from_dict(m) for m in data.get("messages") or [] if isinstance(m, dict)]

    async def get_message(self, message_id: str) -> RawMessage | None:
        data = await self._request("GET", "message", message_id)
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            return None
        return RawMessage.from_dict(data[0])

    async def delete_message(self, message_id: str) -> bool:
        return await self._request("POST", "message/delete", message_id) is not None

    # -- internals -----------------------------------------------------------

    def _mailbox(self, data: Any) -> Mailbox | None:
        if not isinstance(data, dict):
            return None
        try:
            return Mailbox.from_dict(data)
        except KeyError as e:
            logger.warning(f"Provider mailbox payload missing {e}")
            return None

    async def _request(self, method: str, endpoint: str, *segments: str) -> Any:
        """Call ``{base_url}/{endpoint}/{segments...}/{api_key}`` and return ``data``.

        Only *endpoint* is logged; segments carry mailbox tokens.

        Returns ``{}`` for a success response without data, ``None`` on failure.
        """
        parts = [endpoint, *(quote(str(s), safe="") for s in segments), self.api_key]
        url = f"{self.base_url}/" + "/".join(parts)
        try:
            response = await self._client.request(method, url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Provider {method} /{endpoint} failed with status {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Provider {method} /{endpoint} failed: {type(e).__name__}")
            return None
        except ValueError:
            logger.warning(f"Provider {method} /{endpoint} returned invalid JSON")
            return None

        if not isinstance(payload, dict) or payload.get("status") != "success":
            status = payload.get("status") if isinstance(payload, dict) else None
            logger.warning(f"Provider {method} /{endpoint} returned status {status!r}")
            return None
        data = payload.get("data")
        return {} if data is None else data
