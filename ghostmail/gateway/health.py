"""Minimal async HTTP health endpoint for hosting platforms.

Uses raw ``asyncio.start_server``, no extra dependencies. Answers
``GET /`` and ``GET /health``; anything else gets a 404.
"""

import asyncio
import json
import time

from loguru import logger

_PATHS = {"/", "/health"}


class HealthServer:
    """Lightweight TCP server reporting whether the bot loop is alive.

    The gateway loop calls :meth:`heartbeat` every second. If no heartbeat
    arrives within *stale_after* seconds the endpoint returns 503.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 18791, stale_after: int = 120, mode: str = "polling"):
        self.host = host
        self.port = port
        self.stale_after = stale_after
        self.mode = mode
        self._start_time = time.monotonic()
        self._last_heartbeat = time.monotonic()
        self._server: asyncio.AbstractServer | None = None

    # -- public API ----------------------------------------------------------

    def heartbeat(self) -> None:
        """Record that the event-loop is alive."""
        self._last_heartbeat = time.monotonic()

    @property
    def is_healthy(self) -> bool:
        return (time.monotonic() - self._last_heartbeat) < self.stale_after

    @property
    def uptime(self) -> int:
        return int(time.monotonic() - self._start_time)

    async def start(self) -> None:
        self._start_time = time.monotonic()
        self._last_heartbeat = time.monotonic()
        self._server = await asyncio.start_server(self._handle, self.host, self.port)
        logger.info(f"Health endpoint listening on {self.host}:{self.port}")

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

    # -- internals -----------------------------------------------------------

    def _response(self, path: str) -> tuple[int, str, dict]:
        if path not in _PATHS:
            return 404, "Not Found", {"status": "not_found"}
        if self.is_healthy:
            return 200, "OK", {"status": "ok", "uptime": self.uptime, "mode": self.mode}
        return 503, "Service Unavailable", {"status": "unhealthy", "uptime": self.uptime, "mode": self.mode}

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            data = await asyncio.wait_for(reader.read(4096), timeout=5.0)
        except (asyncio.TimeoutError, ConnectionError):
            writer.close()
            return

        if not data or not data.startswith(b"GET"):
            writer.close()
            return

        request_line = data.split(b"\r\n", 1)[0].decode("latin-1")
        parts = request_line.split(" ")
        path = parts[1].split("?", 1)[0] if len(parts) > 1 else "/"

        status_code, reason, payload = self._response(path)
        body_bytes = json.dumps(payload).encode()
        response = (
            f"HTTP/1.1 {status_code} {reason}\r\n"
            f"Content-Type: application/json\r\n"
            f"Content-Length: {len(body_bytes)}\r\n"
            f"Connection: close\r\n"
            f"\r\n"
        ).encode() + body_bytes
        try:
            writer.write(response)
            await writer.drain()
        except ConnectionError:
            pass
        finally:
            writer.close()
