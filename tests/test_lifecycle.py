"""Start/stop behaviour of the database resource and the blog server."""

from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from apps.blog.main import create_app
from apps.blog.server import BlogServer
from apps.shared.database import Base, Database


@pytest.fixture
def unreachable_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'missing-dir' / 'blog.db'}"


def test_database_start_stop_repeatedly(database_url):
    db = Database()

    for _ in range(3):
        db.start(database_url)
        assert db.is_started
        with db.session() as session:
            assert session.bind is not None
        db.stop()
        assert not db.is_started


def test_database_start_twice_raises(database):
    with pytest.raises(RuntimeError, match="already started"):
        database.start(database.url)


def test_database_stop_when_stopped_is_noop():
    Database().stop()


def test_database_unreachable_fails_fast(unreachable_url):
    db = Database()

    with pytest.raises(OperationalError):
        db.start(unreachable_url)

    assert not db.is_started


def test_session_requires_started_database():
    with pytest.raises(RuntimeError, match="not started"):
        with Database().session():
            pass


def test_app_lifespan_starts_and_stops_own_database(database_url, monkeypatch):
    monkeypatch.setattr("apps.blog.main.DATABASE_URL", database_url)
    db = Database()

    with TestClient(create_app(db)) as client:
        assert db.is_started
        assert client.get("/blogs").json() == {"blogs": []}
        Base.metadata.drop_all(bind=db.engine)

    assert not db.is_started


def test_app_lifespan_leaves_started_database_alone(database):
    with TestClient(create_app(database)):
        pass

    assert database.is_started


def test_server_start_stop_repeatedly(database_url):
    server = BlogServer(host="127.0.0.1")

    for _ in range(2):
        server.start(database_url, port=0)
        try:
            assert server.is_running
            assert server.database.is_started
            http = httpx.Client(base_url=f"http://127.0.0.1:{server.port}", trust_env=False)
            resp = http.post(
                "/blogs",
                json={"title": "A", "author": {"firstName": "J", "lastName": "D"}, "content": "hi"},
            )
            assert resp.status_code == 201
            resp = http.get("/blogs")
            assert resp.status_code == 200
            assert len(resp.json()["blogs"]) == 1
            http.close()
            Base.metadata.drop_all(bind=server.database.engine)
        finally:
            server.stop()

        assert not server.is_running
        assert not server.database.is_started


def test_server_does_not_listen_without_database(unreachable_url):
    server = BlogServer(host="127.0.0.1")

    with pytest.raises(OperationalError):
        server.start(unreachable_url, port=0)

    assert not server.is_running
    assert server.port is None


def test_server_stop_surfaces_database_release_error(database_url):
    server = BlogServer(host="127.0.0.1")
    server.start(database_url, port=0)
    Base.metadata.drop_all(bind=server.database.engine)

    with patch.object(Database, "stop", side_effect=RuntimeError("release failed")):
        with pytest.raises(RuntimeError, match="release failed"):
            server.stop()

    # The listener is closed even though the database release failed
    assert not server.is_running
    server.database.stop()
