"""Client for the AnkiConnect JSON API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from javadoc2anki.config import (
    JAVADOC2ANKI_ANKI_CONNECT_URL,
    JAVADOC2ANKI_ANKI_CONNECT_VERSION,
    JAVADOC2ANKI_NOTE_MODEL,
    JAVADOC2ANKI_NOTE_TAG,
    JAVADOC2ANKI_REQUEST_TIMEOUT_S,
    JAVADOC2ANKI_USER_AGENT,
)
from javadoc2anki.exceptions import AnkiConnectError
from javadoc2anki.http_utils import post_json_with_retries
from javadoc2anki.schemas import NoteRequest

logger = logging.getLogger(__name__)


class AnkiConnectClient:
    """Async AnkiConnect client.

    Every call posts ``{"action", "version", "params"}`` and unwraps the
    ``result`` of the answer. A non-null ``error`` raises
    :class:`AnkiConnectError`.

    Usage::

        async with AnkiConnectClient() as anki:
            if await anki.is_available():
                note_id = await anki.add_note(request)
    """

    def __init__(
        self,
        url: str = JAVADOC2ANKI_ANKI_CONNECT_URL,
        *,
        version: int = JAVADOC2ANKI_ANKI_CONNECT_VERSION,
        note_model: str = JAVADOC2ANKI_NOTE_MODEL,
        note_tag: str = JAVADOC2ANKI_NOTE_TAG,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.version = version
        self.note_model = note_model
        self.note_tag = note_tag
        self._client = client
        self._owns_client = False

    async def __aenter__(self) -> AnkiConnectClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(JAVADOC2ANKI_REQUEST_TIMEOUT_S),
                headers={"User-Agent": JAVADOC2ANKI_USER_AGENT},
            )
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def invoke(self, action: str, **params: Any) -> Any:
        """Run one AnkiConnect action and return its ``result``."""
        payload: dict[str, Any] = {"action": action, "version": self.version}
        if params:
            payload["params"] = params

        response = await post_json_with_retries(self.url, payload, client=self._client)
        if not isinstance(response, dict) or "result" not in response or "error" not in response:
            raise AnkiConnectError(f"Unexpected AnkiConnect response to '{action}': {response!r}")
        if response["error"] is not None:
            raise AnkiConnectError(f"AnkiConnect '{action}' failed: {response['error']}")
        return response["result"]

    async def is_available(self) -> bool:
        """Return True if AnkiConnect answers."""
        try:
            await self.invoke("version")
        except AnkiConnectError as exc:
            logger.warning("AnkiConnect is not available at %s: %s", self.url, exc)
            return False
        return True

    async def note_exists(self, note_id: int) -> bool:
        info = await self.invoke("notesInfo", notes=[note_id])
        # Unknown ids come back as empty objects.
        return bool(info and info[0])

    async def create_deck(self, deck_name: str) -> None:
        """Create ``deck_name`` unless it already exists."""
        await self.invoke("createDeck", deck=deck_name)

    async def add_note(self, request: NoteRequest) -> int:
        """Add a note for one source file and return its id.

        The deck is created first. Duplicates of the same front within the
        deck are rejected by Anki.
        """
        await self.create_deck(request.deck_name)
        note = {
            "deckName": request.deck_name,
            "modelName": self.note_model,
            "fields": {"Front": request.front, "Back": request.back},
            "tags": self._tags(request.tags),
            "options": {
                "allowDuplicate": False,
                "duplicateScope": "deck",
                "duplicateScopeOptions": {"deckName": request.deck_name, "checkChildren": False},
            },
        }
        note_id = await self.invoke("addNote", note=note)
        if note_id is None:
            raise AnkiConnectError(f"AnkiConnect did not create a note for {request.source_path}")
        logger.info("Added note %s for %s", note_id, request.source_path)
        return int(note_id)

    async def delete_note(self, note_id: int) -> None:
        await self.invoke("deleteNotes", notes=[note_id])

    async def update_note_fields(
        self, note_id: int, *, front: str | None = None, back: str | None = None
    ) -> None:
        """Replace the given fields of a note; omitted fields are left alone."""
        fields: dict[str, str] = {}
        if front is not None:
            fields["Front"] = front
        if back is not None:
            fields["Back"] = back
        if not fields:
            return
        await self.invoke("updateNoteFields", note={"id": note_id, "fields": fields})

    async def update_note_deck_and_tags(self, note_id: int, deck_name: str, tags: list[str]) -> None:
        """Move every card of a note to ``deck_name`` and replace its tags."""
        info = await self.invoke("notesInfo", notes=[note_id])
        if not info or not info[0]:
            raise AnkiConnectError(f"Note {note_id} does not exist")

        await self.create_deck(deck_name)
        cards = info[0].get("cards", [])
        if cards:
            await self.invoke("changeDeck", cards=cards, deck=deck_name)
        await self.invoke("updateNoteTags", note=note_id, tags=self._tags(tags))

    def _tags(self, tags: list[str]) -> list[str]:
        return [*tags, self.note_tag]
