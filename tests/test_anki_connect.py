"""Tests for the AnkiConnect client against a mocked transport."""

from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import patch

import httpx
import pytest

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.exceptions import AnkiConnectError
from javadoc2anki.schemas import NoteRequest

URL = "http://anki.test:8765"


class FakeAnki:
    """Records AnkiConnect calls and answers from a table of results."""

    def __init__(self, results: dict[str, Any] | None = None) -> None:
        self.results = results or {}
        self.calls: list[dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)
        result = self.results.get(payload["action"])
        if isinstance(result, Exception):
            return httpx.Response(200, json={"result": None, "error": str(result)})
        if callable(result):
            result = result(payload.get("params", {}))
        return httpx.Response(200, json={"result": result, "error": None})

    def actions(self) -> list[str]:
        return [call["action"] for call in self.calls]

    def params(self, action: str) -> dict[str, Any]:
        return next(call["params"] for call in self.calls if call["action"] == action)


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> AnkiConnectClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AnkiConnectClient(URL, client=http_client)


def _request() -> NoteRequest:
    return NoteRequest(
        deck_name="src::util",
        front="Strings",
        back="# Strings\nHelpers.\n",
        tags=["src", "util", "Strings"],
        source_path="/project/src/util/Strings.java",
    )


class TestInvoke:
    """Tests for the request envelope."""

    @pytest.mark.asyncio
    async def test_sends_action_version_and_params(self) -> None:
        fake = FakeAnki({"createDeck": 1})

        await _client(fake).create_deck("Java")

        assert fake.calls == [{"action": "createDeck", "version": 6, "params": {"deck": "Java"}}]

    @pytest.mark.asyncio
    async def test_omits_params_when_empty(self) -> None:
        fake = FakeAnki({"version": 6})

        assert await _client(fake).invoke("version") == 6
        assert fake.calls == [{"action": "version", "version": 6}]

    @pytest.mark.asyncio
    async def test_error_field_raises(self) -> None:
        fake = FakeAnki({"deleteNotes": RuntimeError("collection is not available")})

        with pytest.raises(AnkiConnectError, match="collection is not available"):
            await _client(fake).delete_note(1)

    @pytest.mark.asyncio
    async def test_malformed_answer_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(AnkiConnectError, match="Unexpected AnkiConnect response"):
            await _client(handler).invoke("version")


class TestAvailability:
    """Tests for is_available."""

    @pytest.mark.asyncio
    async def test_available(self) -> None:
        assert await _client(FakeAnki({"version": 6})).is_available()

    @pytest.mark.asyncio
    async def test_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with patch("javadoc2anki.http_utils.JAVADOC2ANKI_REQUEST_BACKOFF_S", 0.0):
            assert not await _client(handler).is_available()


class TestNotes:
    """Tests for note operations."""

    @pytest.mark.asyncio
    async def test_add_note_creates_deck_then_note(self) -> None:
        fake = FakeAnki({"createDeck": 1, "addNote": 1496198395707})

        note_id = await _client(fake).add_note(_request())

        assert note_id == 1496198395707
        assert fake.actions() == ["createDeck", "addNote"]
        note = fake.params("addNote")["note"]
        assert note["deckName"] == "src::util"
        assert note["modelName"] == "Markdown Basic"
        assert note["fields"] == {"Front": "Strings", "Back": "# Strings\nHelpers.\n"}
        assert note["tags"] == ["src", "util", "Strings", "Javadoc2Anki"]
        assert note["options"]["allowDuplicate"] is False
        assert note["options"]["duplicateScope"] == "deck"

    @pytest.mark.asyncio
    async def test_add_note_without_id_raises(self) -> None:
        fake = FakeAnki({"createDeck": 1, "addNote": None})

        with pytest.raises(AnkiConnectError, match="did not create a note"):
            await _client(fake).add_note(_request())

    @pytest.mark.asyncio
    async def test_note_exists(self) -> None:
        fake = FakeAnki({"notesInfo": lambda params: [{"noteId": params["notes"][0], "cards": [1]}]})

        assert await _client(fake).note_exists(5)
        assert fake.params("notesInfo") == {"notes": [5]}

    @pytest.mark.asyncio
    async def test_unknown_note_does_not_exist(self) -> None:
        assert not await _client(FakeAnki({"notesInfo": [{}]})).note_exists(5)

    @pytest.mark.asyncio
    async def test_delete_note(self) -> None:
        fake = FakeAnki({"deleteNotes": None})

        await _client(fake).delete_note(9)

        assert fake.params("deleteNotes") == {"notes": [9]}

    @pytest.mark.asyncio
    async def test_update_fields_sends_only_given_fields(self) -> None:
        fake = FakeAnki({"updateNoteFields": None})

        await _client(fake).update_note_fields(9, front="Renamed")

        assert fake.params("updateNoteFields") == {"note": {"id": 9, "fields": {"Front": "Renamed"}}}

    @pytest.mark.asyncio
    async def test_update_fields_without_fields_is_noop(self) -> None:
        fake = FakeAnki()

        await _client(fake).update_note_fields(9)

        assert fake.calls == []

    @pytest.mark.asyncio
    async def test_update_deck_and_tags(self) -> None:
        fake = FakeAnki(
            {
                "notesInfo": [{"noteId": 9, "cards": [11, 12]}],
                "createDeck": 1,
                "changeDeck": None,
                "updateNoteTags": None,
            }
        )

        await _client(fake).update_note_deck_and_tags(9, "lib::io", ["lib", "io", "Reader"])

        assert fake.actions() == ["notesInfo", "createDeck", "changeDeck", "updateNoteTags"]
        assert fake.params("changeDeck") == {"cards": [11, 12], "deck": "lib::io"}
        assert fake.params("updateNoteTags") == {"note": 9, "tags": ["lib", "io", "Reader", "Javadoc2Anki"]}

    @pytest.mark.asyncio
    async def test_update_deck_of_missing_note_raises(self) -> None:
        fake = FakeAnki({"notesInfo": [{}]})

        with pytest.raises(AnkiConnectError, match="does not exist"):
            await _client(fake).update_note_deck_and_tags(9, "lib", ["lib"])


class TestClientLifecycle:
    """Tests for connection ownership."""

    @pytest.mark.asyncio
    async def test_context_manager_owns_its_client(self) -> None:
        anki = AnkiConnectClient(URL)

        async with anki as entered:
            assert entered is anki
            assert anki._client is not None

        assert anki._client is None

    @pytest.mark.asyncio
    async def test_borrowed_client_is_not_closed(self) -> None:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(FakeAnki()))

        async with AnkiConnectClient(URL, client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()
