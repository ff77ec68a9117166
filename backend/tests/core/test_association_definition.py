"""Association Definition — option validation and defaulting.

Tests:
    - Every field defaulted when options are omitted
    - Scope default depends on cardinality (first for ONE, all for MANY)
    - Explicit options override defaults; enum scopes accepted
    - Unknown or blank options raise InvalidAssociationOptionsError
"""

import pytest

from remote_association.core.association_definition import (
    AssociationOptions, build_definition,
)
from remote_association.core.domain_types import Cardinality, Scope
from remote_association.core.errors import InvalidAssociationOptionsError


class Author:
    pass


class BlogAuthor:
    pass


def test_defaults_for_singular_association():
    d = build_definition(Author, "profile")
    assert d.name == "profile"
    assert d.local_type is Author
    assert d.target_type == "Profile"
    assert d.primary_key == "id"
    assert d.foreign_key == "author_id"
    assert d.scope == "first"
    assert d.cardinality is Cardinality.ONE
    assert d.is_singular


def test_defaults_for_many_association():
    d = build_definition(BlogAuthor, "comments", cardinality=Cardinality.MANY)
    assert d.target_type == "Comment"
    assert d.foreign_key == "blog_author_id"
    assert d.scope == "all"
    assert not d.is_singular


def test_cardinality_accepts_raw_token():
    assert build_definition(Author, "posts", cardinality="many").cardinality is Cardinality.MANY


def test_explicit_options_override_defaults():
    d = build_definition(Author, "profile", {
        "class_name": "SocialProfile",
        "primary_key": "uuid",
        "foreign_key": "owner_uuid",
        "scope": "me",
    })
    assert d.target_type == "SocialProfile"
    assert d.primary_key == "uuid"
    assert d.foreign_key == "owner_uuid"
    assert d.scope == "me"


def test_enum_scope_is_stored_as_token():
    d = build_definition(Author, "profile", {"scope": Scope.LAST})
    assert d.scope == "last"


def test_accepts_options_model():
    d = build_definition(Author, "profile", AssociationOptions(foreign_key="writer_id"))
    assert d.foreign_key == "writer_id"


def test_build_params_maps_foreign_key_to_keys():
    d = build_definition(Author, "profile")
    assert d.build_params(7) == {"author_id": 7}
    assert d.build_params([1, 2]) == {"author_id": [1, 2]}


def test_unknown_option_rejected():
    with pytest.raises(InvalidAssociationOptionsError) as exc_info:
        build_definition(Author, "profile", {"dependent": "destroy"})
    assert exc_info.value.field == "dependent"
    assert exc_info.value.context.association == "profile"


def test_blank_option_rejected():
    with pytest.raises(InvalidAssociationOptionsError) as exc_info:
        build_definition(Author, "profile", {"foreign_key": "  "})
    assert exc_info.value.field == "foreign_key"


def test_invalid_name_rejected():
    with pytest.raises(InvalidAssociationOptionsError):
        build_definition(Author, "not a name")


def test_definition_is_immutable():
    d = build_definition(Author, "profile")
    with pytest.raises(AttributeError):
        d.scope = "all"
