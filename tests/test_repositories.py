"""Tests for the Supabase repositories with a mocked client."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from study_planner.infra.supabase.errors import StoreError
from study_planner.infra.supabase.repositories import (
    StudySessionRepository,
    SubjectRepository,
    TaskRepository,
)


def run(coro):
    """Run an async function in a fresh event loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def response(data):
    return MagicMock(data=data)


SESSION_ROW = {
    "id": "s-1",
    "task_id": "t-1",
    "start_time": "2026-10-18T09:00:00+00:00",
    "end_time": None,
    "duration": None,
    "notes": None,
    "created_at": "2026-10-18T09:00:00+00:00",
}

SESSION_ROW_WITH_TASK = {
    **SESSION_ROW,
    "tasks": {
        "id": "t-1",
        "title": "Integrals",
        "subject_id": "sub-1",
        "subjects": {"id": "sub-1", "name": "Maths", "color": "#3b82f6"},
    },
}


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def session_repo(client):
    return StudySessionRepository(client, max_retries=3, retry_delay=0)


# ---- Study sessions ----

class TestCreateSession:
    def test_inserts_and_rereads_with_task(self, client, session_repo):
        table = client.table.return_value
        table.insert.return_value.execute.return_value = response([SESSION_ROW])
        table.select.return_value.eq.return_value.execute.return_value = response([SESSION_ROW_WITH_TASK])

        session = run(session_repo.create_session("t-1"))

        client.table.assert_called_with("study_sessions")
        payload = table.insert.call_args[0][0]
        assert payload["task_id"] == "t-1"
        assert "start_time" in payload
        assert session.id == "s-1"
        assert session.is_open
        assert session.tasks.subjects.name == "Maths"

    def test_retries_then_succeeds(self, client, session_repo):
        table = client.table.return_value
        table.insert.return_value.execute.side_effect = [
            ConnectionError("network"),
            ConnectionError("network"),
            response([SESSION_ROW]),
        ]
        table.select.return_value.eq.return_value.execute.return_value = response([SESSION_ROW])

        session = run(session_repo.create_session("t-1"))

        assert session.id == "s-1"
        assert table.insert.return_value.execute.call_count == 3

    def test_exhausted_retries_raise_store_error(self, client, session_repo):
        execute = client.table.return_value.insert.return_value.execute
        execute.side_effect = ConnectionError("network down")

        with pytest.raises(StoreError) as excinfo:
            run(session_repo.create_session("t-1"))

        assert execute.call_count == 4
        assert isinstance(excinfo.value.cause, ConnectionError)

    def test_empty_insert_response_raises_store_error(self, client, session_repo):
        client.table.return_value.insert.return_value.execute.return_value = response([])

        with pytest.raises(StoreError):
            run(session_repo.create_session("t-1"))


class TestFinalizeSession:
    def test_writes_end_time_duration_and_notes(self, client, session_repo):
        closed = {**SESSION_ROW, "end_time": "2026-10-18T09:25:00+00:00", "duration": 1500, "notes": "done"}
        table = client.table.return_value
        table.update.return_value.eq.return_value.execute.return_value = response([closed])
        table.select.return_value.eq.return_value.execute.return_value = response([closed])

        session = run(session_repo.finalize_session("s-1", 1500, "done"))

        payload = table.update.call_args[0][0]
        assert payload["duration"] == 1500
        assert payload["notes"] == "done"
        assert payload["end_time"] is not None
        table.update.return_value.eq.assert_called_with("id", "s-1")
        assert session.duration == 1500
        assert not session.is_open

    def test_unknown_session_raises_store_error(self, client, session_repo):
        client.table.return_value.update.return_value.eq.return_value.execute.return_value = response([])

        with pytest.raises(StoreError):
            run(session_repo.finalize_session("missing", 10))

    def test_negative_duration_is_rejected(self, session_repo):
        with pytest.raises(ValueError):
            run(session_repo.finalize_session("s-1", -1))


class TestSessionQueries:
    def test_find_recent_orders_newest_first(self, client, session_repo):
        query = client.table.return_value.select.return_value
        query.order.return_value.limit.return_value.execute.return_value = response([SESSION_ROW])

        sessions = run(session_repo.find_recent(10))

        query.order.assert_called_with("start_time", desc=True)
        query.order.return_value.limit.assert_called_with(10)
        assert [s.id for s in sessions] == ["s-1"]

    def test_find_completed_since_filters_open_sessions(self, client, session_repo):
        query = client.table.return_value.select.return_value
        gte = query.gte.return_value
        gte.not_.is_.return_value.order.return_value.execute.return_value = response([])
        since = datetime(2026, 9, 18, tzinfo=timezone.utc)

        assert run(session_repo.find_completed_since(since)) == []

        query.gte.assert_called_with("start_time", since.isoformat())
        gte.not_.is_.assert_called_with("duration", "null")


# ---- Subjects / tasks ----

class TestSubjectRepository:
    def test_find_by_name(self, client):
        repo = SubjectRepository(client, retry_delay=0)
        rows = [{"id": "sub-1", "name": "Maths", "color": "#fff", "created_at": None}]
        client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = response(rows)

        subject = run(repo.find_by_name("Maths"))

        assert subject.id == "sub-1"

    def test_find_by_name_missing(self, client):
        repo = SubjectRepository(client, retry_delay=0)
        client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.return_value = response([])

        assert run(repo.find_by_name("History")) is None


class TestTaskRepository:
    def test_find_lessons_distinct_and_sorted(self, client):
        repo = TaskRepository(client, retry_delay=0)
        query = client.table.return_value.select.return_value
        query.not_.is_.return_value.neq.return_value.execute.return_value = response([
            {"lesson": "Vectors"},
            {"lesson": "Algebra"},
            {"lesson": "Vectors"},
            {"lesson": None},
        ])

        assert run(repo.find_lessons()) == ["Algebra", "Vectors"]
        client.table.return_value.select.assert_called_with("lesson")

    def test_find_lessons_for_subject(self, client):
        repo = TaskRepository(client, retry_delay=0)
        query = client.table.return_value.select.return_value
        query.eq.return_value.not_.is_.return_value.neq.return_value.execute.return_value = response([
            {"lesson": "Limits"},
        ])

        assert run(repo.find_lessons("sub-1")) == ["Limits"]
        query.eq.assert_called_with("subject_id", "sub-1")
