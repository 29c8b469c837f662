"""FastAPI application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from javadoc2anki.anki_connect import AnkiConnectClient
from javadoc2anki.config import JAVADOC2ANKI_STATUS_DB_PATH
from javadoc2anki.status_store import FileStatusStore
from javadoc2anki.utils.logging_config import get_logger
from server.routers import events, extract, sync
from server.server_config import PROJECT_ROOT

logger = get_logger(__name__)


def create_app(
    *,
    project_root: Path = PROJECT_ROOT,
    store: FileStatusStore | None = None,
    anki: AnkiConnectClient | None = None,
) -> FastAPI:
    """Build the application.

    Parameters
    ----------
    project_root : Path
        Root that relative request paths, deck names and tags are resolved against.
    store : FileStatusStore | None
        Status store to use. If None, one is opened under ``project_root`` for
        the lifetime of the app.
    anki : AnkiConnectClient | None
        AnkiConnect client to use. If None, a pooled client is opened for the
        lifetime of the app.

    Returns
    -------
    FastAPI
        The configured application.

    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned_store = None
        if store is None:
            db_path = JAVADOC2ANKI_STATUS_DB_PATH
            if not db_path.is_absolute():
                db_path = project_root / db_path
            owned_store = FileStatusStore(db_path)
        app.state.store = store or owned_store

        try:
            client_context = AnkiConnectClient() if anki is None else _borrowed(anki)
            async with client_context as client:
                app.state.anki = client
                logger.info("Server started", extra={"project_root": str(project_root)})
                yield
        finally:
            if owned_store is not None:
                owned_store.close()

    app = FastAPI(title="javadoc2anki", lifespan=lifespan)
    app.state.project_root = project_root.resolve()
    app.include_router(extract.router)
    app.include_router(sync.router)
    app.include_router(events.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


@asynccontextmanager
async def _borrowed(anki: AnkiConnectClient) -> AsyncIterator[AnkiConnectClient]:
    # The caller owns the client and closes it.
    yield anki


app = create_app()
