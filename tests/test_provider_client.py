"""Tests for ghostmail.provider.client using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from ghostmail.provider.client import GhostmailClient
from ghostmail.provider.models import Mailbox, RawMessage


def _client(handler) -> GhostmailClient:
    return GhostmailClient("KEY", base_url="https://api.test/api/", transport=httpx.MockTransport(handler))


def _ok(data) -> httpx.Response:
    return httpx.Response(200, json={"status": "success", "data": data})


class Recorder:
    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

class TestEndpoints:
    async def test_get_domains_from_mapping(self):
        rec = Recorder(_ok({"domains": {"1": "mail.com", "2": "temp.org"}}))
        async with _client(rec) as client:
            assert await client.get_domains() == ["mail.com", "temp.org"]

        request = rec.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/api/domains/KEY"

    async def test_get_domains_from_list(self):
        async with _client(Recorder(_ok({"domains": ["x.io"]}))) as client:
            assert await client.get_domains() == ["x.io"]

    async def test_get_domains_missing_list(self):
        async with _client(Recorder(_ok({}))) as client:
            assert await client.get_domains() is None

    async def test_create_email(self):
        rec = Recorder(_ok({"email": "a@mail.com", "email_token": "TOK", "deleted_in": "2030-01-01"}))
        async with _client(rec) as client:
            mailbox = await client.create_email()

        assert mailbox == Mailbox(email="a@mail.com", token="TOK", expires_at="2030-01-01")
        assert rec.requests[0].method == "POST"
        assert rec.requests[0].url.path == "/api/email/create/KEY"

    async def test_create_email_incomplete_payload(self):
        async with _client(Recorder(_ok({"email": "a@mail.com"}))) as client:
            assert await client.create_email() is None

    async def test_change_email_path(self):
        rec = Recorder(_ok({"email": "john@mail.com", "email_token": "NEW"}))
        async with _client(rec) as client:
            mailbox = await client.change_email("TOK", "john", "mail.com")

        assert mailbox.token == "NEW"
        assert rec.requests[0].url.path == "/api/email/change/TOK/john/mail.com/KEY"

    async def test_delete_email(self):
        rec = Recorder(_ok(None))
        async with _client(rec) as client:
            assert await client.delete_email("TOK") is True
        assert rec.requests[0].url.path == "/api/email/delete/TOK/KEY"

    async def test_get_messages(self):
        payload = {"messages": [
            {"id": 1, "from": "Alice", "from_email": "a@x.com", "subject": "Hi",
             "content": "<p>x</p>", "receivedAt": "2024-01-01", "is_seen": 1,
             "attachments": [{"file": "f.pdf"}]},
        ]}
        rec = Recorder(_ok(payload))
        async with _client(rec) as client:
            messages = await client.get_messages("TOK")

        assert rec.requests[0].url.path == "/api/messages/TOK/KEY"
        assert len(messages) == 1
        message = messages[0]
        assert isinstance(message, RawMessage)
        assert message.id == "1"
        assert message.sender == "Alice"
        assert message.sender_email == "a@x.com"
        assert message.received_at == "2024-01-01"
        assert message.is_seen is True
        assert message.attachments[0].file == "f.pdf"

    async def test_get_messages_empty(self):
        async with _client(Recorder(_ok({"messages": []}))) as client:
            assert await client.get_messages("TOK") == []

    async def test_get_message_reads_first_item(self):
        rec = Recorder(_ok([{"id": "m1", "subject": ""}]))
        async with _client(rec) as client:
            message = await client.get_message("m1")

        assert rec.requests[0].url.path == "/api/message/m1/KEY"
        assert message.id == "m1"
        assert message.subject is None

    async def test_get_message_empty_list(self):
        async with _client(Recorder(_ok([]))) as client:
            assert await client.get_message("m1") is None

    async def test_delete_message(self):
        rec = Recorder(_ok(None))
        async with _client(rec) as client:
            assert await client.delete_message("m1") is True
        assert rec.requests[0].method == "POST"
        assert rec.requests[0].url.path == "/api/message/delete/m1/KEY"

    async def test_segments_are_quoted(self):
        rec = Recorder(_ok(None))
        async with _client(rec) as client:
            await client.delete_message("a/b")
        assert rec.requests[0].url.raw_path == b"/api/message/delete/a%2Fb/KEY"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    @pytest.mark.parametrize("status, kwargs", [
        (200, {"json": {"status": "error", "message": "nope"}}),
        (500, {"json": {"status": "success", "data": {}}}),
        (200, {"content": b"<html>not json</html>"}),
        (200, {"json": ["unexpected"]}),
    ])
    async def test_bad_responses_return_none(self, status, kwargs):
        async with _client(lambda request: httpx.Response(status, **kwargs)) as client:
            assert await client.get_messages("TOK") is None
            assert await client.delete_email("TOK") is False

    async def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        async with _client(handler) as client:
            assert await client.create_email() is None
            assert await client.delete_message("m1") is False
