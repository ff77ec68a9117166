"""Naming Conventions — default class, key and collection names for associations.

Invariants:
    - Pure string functions, no IO, deterministic
    - classify("profiles") == classify("profile") == "Profile"
    - foreign_key("BlogAuthor") == "blog_author_id"
    - collection_name("SocialProfile") == "social_profiles"

Design Decisions:
    - Regular English inflection only: irregular plurals are expected to be
      spelled out via the class_name option rather than guessed here
    - Dotted names are reduced to their last segment ("pkg.models.Author" -> "Author")
"""

import re

from remote_association.core.domain_types import FOREIGN_KEY_SUFFIX

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")
_VOWELS = "aeiou"


def demodulize(name: str) -> str:
    """Strip any module/namespace prefix."""
    return re.split(r"\.|::", name)[-1]


def underscore(name: str) -> str:
    """CamelCase -> snake_case."""
    word = demodulize(name)
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def camelize(name: str) -> str:
    """snake_case -> CamelCase."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def singularize(word: str) -> str:
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("sses", "shes", "ches", "xes", "zes")):
        return word[:-2]
    if word.endswith("ss") or not word.endswith("s"):
        return word
    return word[:-1]


def pluralize(word: str) -> str:
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(_SIBILANT_ENDINGS):
        return word + "es"
    return word + "s"


def classify(association_name: str) -> str:
    """Association name -> remote class name ("social_profiles" -> "SocialProfile")."""
    return camelize(singularize(association_name))


def foreign_key(type_name: str) -> str:
    """Local type name -> default foreign key ("Author" -> "author_id")."""
    return underscore(type_name) + FOREIGN_KEY_SUFFIX


def collection_name(type_name: str) -> str:
    """Remote type name -> resource collection ("Profile" -> "profiles")."""
    return pluralize(underscore(type_name))
