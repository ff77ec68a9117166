"""Singular Resolver — lazy fetch, memoization and not-found handling.

Tests cover:
    - First access calls the client with (target_type, scope, {foreign_key: pk})
    - Second access returns the identical object without another call
    - Not-found memoizes None (ONE) / [] (MANY) and never raises
    - Other remote failures propagate and memoize nothing
    - Setter overwrites the slot without a remote call
"""

import pytest

from remote_association.core.association_state import state_of
from remote_association.core.errors import (
    AssociationNotFoundError, RemoteAPIError,
)

from tests.services.mock_remote_client import Author, GuestAuthor


@pytest.mark.asyncio
async def test_resolves_profile_with_default_options(singular, client, profiles):
    author = Author(7)
    profile = await singular.resolve(author, "profile")
    assert profile is profiles[2]
    assert len(client.calls) == 1
    call = client.calls[0]
    assert call.target_type == "Profile"
    assert call.scope == "first"
    assert call.params == {"author_id": 7}


@pytest.mark.asyncio
async def test_second_access_is_memoized(singular, client):
    author = Author(7)
    first = await singular.resolve(author, "profile")
    second = await singular.resolve(author, "profile")
    assert first is second
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_singular_slot_never_holds_a_sequence(singular):
    author = Author(1)
    profile = await singular.resolve(author, "profile")
    assert not isinstance(profile, list)
    assert state_of(author).get("profile") is profile


@pytest.mark.asyncio
async def test_missing_match_yields_none(singular, client):
    author = Author(99)
    assert await singular.resolve(author, "profile") is None
    assert await singular.resolve(author, "profile") is None
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_many_returns_full_list(singular, client, posts):
    author = Author(1)
    result = await singular.resolve(author, "posts")
    assert result == [posts[0], posts[1]]
    assert client.calls[0].scope == "all"
    assert client.calls[0].target_type == "Post"


@pytest.mark.asyncio
async def test_many_without_matches_is_empty_list(singular):
    assert await singular.resolve(Author(42), "posts") == []


@pytest.mark.asyncio
async def test_not_found_is_memoized_as_none(singular, client):
    client.not_found.add("Profile")
    author = Author(7)
    assert await singular.resolve(author, "profile") is None
    assert await singular.resolve(author, "profile") is None
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_not_found_on_many_is_memoized_as_empty_list(singular, client):
    client.not_found.add("Post")
    author = Author(1)
    assert await singular.resolve(author, "posts") == []
    assert await singular.resolve(author, "posts") == []
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_other_remote_errors_propagate_and_are_not_memoized(singular, client):
    client.errors["Profile"] = RemoteAPIError("boom", "server_error", status_code=500)
    author = Author(7)
    with pytest.raises(RemoteAPIError):
        await singular.resolve(author, "profile")
    assert not state_of(author).is_resolved("profile")

    del client.errors["Profile"]
    assert await singular.resolve(author, "profile") is not None
    assert len(client.calls) == 2


@pytest.mark.asyncio
async def test_custom_keys_and_class_name(singular, client):
    author = Author(1)
    image = await singular.resolve(author, "avatar_image")
    assert image.id == 301
    assert client.calls[0].target_type == "Image"
    assert client.calls[0].params == {"owner_handle": "author-1"}


@pytest.mark.asyncio
async def test_inherited_declaration_resolves_for_subclass(singular, profiles):
    guest = GuestAuthor(2)
    assert await singular.resolve(guest, "profile") is profiles[1]


@pytest.mark.asyncio
async def test_unknown_association_raises(singular, client):
    with pytest.raises(AssociationNotFoundError, match="avatar"):
        await singular.resolve(Author(1), "avatar")
    assert client.calls == []


@pytest.mark.asyncio
async def test_prefetched_slot_skips_fetch(singular, client):
    author = Author(7)
    state = state_of(author)
    state.values["profile"] = None
    state.mark_prefetched("profile")
    assert await singular.resolve(author, "profile") is None
    assert client.calls == []


@pytest.mark.asyncio
async def test_assign_overwrites_without_remote_call(singular, client, profiles):
    author = Author(7)
    singular.assign(author, "profile", profiles[0])
    assert await singular.resolve(author, "profile") is profiles[0]
    assert client.calls == []


def test_assign_rejects_undeclared_name(singular):
    with pytest.raises(AssociationNotFoundError):
        singular.assign(Author(1), "nope", object())


@pytest.mark.asyncio
async def test_reset_forces_refetch(singular, client):
    author = Author(7)
    await singular.resolve(author, "profile")
    singular.reset(author, "profile")
    await singular.resolve(author, "profile")
    assert len(client.calls) == 2
