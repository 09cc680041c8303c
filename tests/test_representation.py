from datetime import datetime, timedelta, timezone

from apps.blog.models import BlogPost
from apps.blog.representation import api_repr, full_name


def test_full_name():
    assert full_name({"firstName": "Ada", "lastName": "Lovelace"}) == "Ada Lovelace"


def test_api_repr_flattens_author():
    created = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    post = BlogPost(
        id="abc123",
        title="Hello",
        author={"firstName": "Grace", "lastName": "Hopper"},
        content="Body",
        created=created,
    )

    assert api_repr(post) == {
        "id": "abc123",
        "title": "Hello",
        "author": "Grace Hopper",
        "content": "Body",
        "created": created,
    }


def test_api_repr_treats_naive_timestamps_as_utc():
    post = BlogPost(
        id="abc123",
        title="Hello",
        author={"firstName": "Grace", "lastName": "Hopper"},
        content="Body",
        created=datetime(2024, 3, 1, 12, 30),
    )

    assert api_repr(post)["created"] == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def test_api_repr_converts_offsets_to_utc():
    oslo = timezone(timedelta(hours=1))
    post = BlogPost(
        id="abc123",
        title="Hello",
        author={"firstName": "Grace", "lastName": "Hopper"},
        content="Body",
        created=datetime(2024, 3, 1, 13, 30, tzinfo=oslo),
    )

    created = api_repr(post)["created"]
    assert created.utcoffset() == timedelta(0)
    assert created.hour == 12
