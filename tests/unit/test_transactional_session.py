"""get_db_transactional: callbacks queued with after_commit run only after a commit."""

from contextlib import asynccontextmanager

import pytest

from app.infrastructure.persistence import database


class _RecordingSession:
    def __init__(self, events: list[str]) -> None:
        self.events = events
        self.info: dict = {}

    async def __aenter__(self) -> "_RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.events.append("close")

    @asynccontextmanager
    async def begin(self):
        try:
            yield
        except BaseException:
            self.events.append("rollback")
            raise
        self.events.append("commit")


@pytest.fixture
def events(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    recorded: list[str] = []
    monkeypatch.setattr(database, "_ensure_engine", lambda: None)
    monkeypatch.setattr(database, "AsyncSessionLocal", lambda: _RecordingSession(recorded))
    return recorded


async def test_callbacks_run_after_commit(events: list[str]) -> None:
    sessions = database.get_db_transactional()
    session = await anext(sessions)

    async def invalidate() -> None:
        events.append("invalidate")

    database.after_commit(session, invalidate)
    assert events == []

    with pytest.raises(StopAsyncIteration):
        await anext(sessions)

    assert events == ["commit", "invalidate", "close"]


async def test_callbacks_dropped_on_rollback(events: list[str]) -> None:
    sessions = database.get_db_transactional()
    session = await anext(sessions)

    async def invalidate() -> None:
        events.append("invalidate")

    database.after_commit(session, invalidate)

    with pytest.raises(RuntimeError):
        await sessions.athrow(RuntimeError("store write failed"))

    assert events == ["rollback", "close"]
