"""
Naming conventions for derived entities and edges.

Table names are normalised to snake_case, singularised for entity and
edge names, and camel-cased for entity type names. Only the last
underscore-separated word is inflected (``group_members`` -> ``group_member``).
"""

from __future__ import annotations

import re
from typing import Tuple

IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
    "ox": "oxen",
}
IRREGULAR_SINGULARS = {v: k for k, v in IRREGULAR_PLURALS.items()}

UNCOUNTABLE = {
    "data",
    "metadata",
    "equipment",
    "information",
    "news",
    "series",
    "species",
    "sheep",
    "fish",
    "media",
}

# Singulars ending in -ie, so "-ies" does not become "-y"
IE_WORDS = {
    "movie",
    "cookie",
    "tie",
    "pie",
    "lie",
    "calorie",
    "rookie",
    "zombie",
    "selfie",
    "hoodie",
    "genie",
    "brownie",
    "smoothie",
    "prairie",
    "sortie",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def snake_case(name: str) -> str:
    """``UserAccounts`` / ``USER_ACCOUNTS`` / ``user-accounts`` -> ``user_accounts``."""
    if not name.isupper():
        name = _CAMEL_BOUNDARY.sub("_", name)
    name = re.sub(r"[\s\-]+", "_", name)
    return name.lower()


def camelize(name: str) -> str:
    """``group_member`` -> ``GroupMember``."""
    return "".join(part[:1].upper() + part[1:] for part in snake_case(name).split("_") if part)


def _split_last(word: str) -> Tuple[str, str]:
    head, sep, last = word.rpartition("_")
    return head + sep, last


def singularize(word: str) -> str:
    """Return the singular form of the last word of a snake_case name."""
    head, last = _split_last(word)
    if last in UNCOUNTABLE:
        return word
    if last in IRREGULAR_SINGULARS:
        return head + IRREGULAR_SINGULARS[last]

    # Plural -> singular, mirrors pluralize() below
    if last.endswith("ies") and last[:-1] in IE_WORDS:
        last = last[:-1]
    elif last.endswith("ies") and len(last) > 3:
        last = last[:-3] + "y"
    elif last.endswith("sses"):
        last = last[:-2]
    elif last.endswith(("xes", "ches", "shes", "zzes")):
        last = last[:-2]
    elif last.endswith(("tuses", "puses", "nuses", "ruses", "buses")):
        last = last[:-2]
    elif last.endswith(("ss", "us", "is")):
        pass
    elif last.endswith("s") and len(last) > 1:
        last = last[:-1]
    return head + last


def pluralize(word: str) -> str:
    """Return the plural form of the last word of a snake_case name."""
    head, last = _split_last(word)
    if last in UNCOUNTABLE:
        return word
    if last in IRREGULAR_PLURALS:
        return head + IRREGULAR_PLURALS[last]

    if last.endswith("y") and len(last) > 1 and last[-2] not in "aeiou":
        last = last[:-1] + "ies"
    elif last.endswith(("s", "x", "z", "ch", "sh")):
        last = last + "es"
    else:
        last = last + "s"
    return head + last


def table_singular(table_name: str) -> str:
    """Singular snake_case name of a table, used as the edge name base."""
    return singularize(snake_case(table_name))


def entity_name(table_name: str) -> str:
    """Camel-cased singular entity name for a table: ``user_groups`` -> ``UserGroup``."""
    return camelize(table_singular(table_name))


def self_reference_names(
    singular: str,
    child_many: bool,
    parent_many: bool = False,
) -> Tuple[str, str]:
    """
    Return the (child, parent) edge names for a self-referencing relation.

    The TO side is prefixed ``child_`` and the FROM side ``parent_``; each
    side is plural when it holds many entities.

    The builder gives the ``parent_`` edge a ``ref`` to the ``child_`` edge
    for every cardinality, M2M included. Schemas written by hand often leave
    the ref off the self-referencing M2M inverse (``parent_users``); both
    spellings describe the same relation.

    Examples:
        >>> self_reference_names("node", child_many=False)
        ('child_node', 'parent_node')
        >>> self_reference_names("node", child_many=True)
        ('child_nodes', 'parent_node')
        >>> self_reference_names("user", child_many=True, parent_many=True)
        ('child_users', 'parent_users')
    """
    child = pluralize(singular) if child_many else singular
    parent = pluralize(singular) if parent_many else singular
    return f"child_{child}", f"parent_{parent}"
