"""Service test fixtures — registry with standard declarations + scripted remote client.

Invariants:
    - Every test gets a fresh registry and a fresh MockRemoteClient
    - Author declares: profile (one), posts (many), avatar_image (one, custom keys)
    - Remote data: profiles for authors 1, 2 and 7; posts for authors 1 and 2
"""

import pytest

from remote_association.core.association_registry import AssociationRegistry
from remote_association.services.batch_resolver import BatchResolver
from remote_association.services.singular_resolver import SingularResolver

from tests.services.mock_remote_client import Author, MockRemoteClient, remote


@pytest.fixture
def registry():
    reg = AssociationRegistry()
    reg.has_one_remote(Author, "profile")
    reg.has_many_remote(Author, "posts")
    reg.has_one_remote(
        Author, "avatar_image",
        class_name="Image", primary_key="handle", foreign_key="owner_handle",
    )
    reg.freeze()
    return reg


@pytest.fixture
def profiles():
    return [
        remote(id=101, author_id=1, bio="first"),
        remote(id=102, author_id=2, bio="second"),
        remote(id=107, author_id=7, bio="seventh"),
    ]


@pytest.fixture
def posts():
    return [
        remote(id=201, author_id=1, title="a"),
        remote(id=202, author_id=1, title="b"),
        remote(id=203, author_id=2, title="c"),
    ]


@pytest.fixture
def client(profiles, posts):
    return MockRemoteClient({
        "Profile": profiles,
        "Post": posts,
        "Image": [remote(id=301, owner_handle="author-1")],
    })


@pytest.fixture
def singular(registry, client):
    return SingularResolver(registry, client)


@pytest.fixture
def batch(registry, client):
    return BatchResolver(registry, client)
