"""Shared fixtures for the Blog API tests."""

import random
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from apps.blog.collection import BlogCollection
from apps.blog.main import create_app
from apps.blog.schemas import BlogPostCreate
from apps.shared.config import TEST_DATABASE_URL
from apps.shared.database import Base, Database

FIRST_NAMES = ["Ada", "Grace", "Linus", "Margaret", "Guido", "Barbara", "Ken", "Frances"]
LAST_NAMES = ["Lovelace", "Hopper", "Torvalds", "Hamilton", "van Rossum", "Liskov", "Thompson", "Allen"]
WORDS = ["python", "sqlite", "deploy", "cache", "schema", "thread", "socket", "parser", "index"]


def generate_blog_data() -> dict:
    """Random request body for POST /blogs."""
    return {
        "title": f"{random.choice(WORDS).title()} notes {uuid4().hex[:6]}",
        "author": {
            "firstName": random.choice(FIRST_NAMES),
            "lastName": random.choice(LAST_NAMES),
        },
        "content": " ".join(random.choices(WORDS, k=12)),
    }


def seed_blog_data(database: Database, count: int = 10) -> list[str]:
    """Insert `count` generated posts directly into the store. Returns their ids."""
    with database.session() as db:
        blogs = BlogCollection(db)
        return [blogs.create(BlogPostCreate(**generate_blog_data())).id for _ in range(count)]


def count_blogs(database: Database) -> int:
    with database.session() as db:
        return BlogCollection(db).count()


@pytest.fixture
def database_url(tmp_path) -> str:
    return TEST_DATABASE_URL or f"sqlite:///{tmp_path / 'blog-test.db'}"


@pytest.fixture
def database(database_url):
    db = Database()
    db.start(database_url)
    yield db
    if db.is_started:
        Base.metadata.drop_all(bind=db.engine)
        db.stop()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def seeded(database) -> list[str]:
    return seed_blog_data(database, 10)
