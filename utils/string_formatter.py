"""
Module: string_formatter.py
Description:
    String helpers used when building tracker requests.
    - remove_spaces: strips every whitespace character
    - truncate_query: MAL search query sanitizer (no whitespace, at most 64 chars)
    - convert_enum_to_string: renders enum members as `list_updated_at`-style tokens

Usage:
    Imported by other modules; not intended to be executed directly.
"""

import re

# MAL rejects search queries longer than this
MAL_QUERY_MAX_LENGTH = 64

_WHITESPACE_RE = re.compile(r"\s+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def remove_spaces(s):
    return _WHITESPACE_RE.sub("", s or "")


def truncate_query(query: str, max_length: int = MAL_QUERY_MAX_LENGTH) -> str:
    """Remove whitespace, then cut to `max_length` characters."""
    query = remove_spaces(query)
    if len(query) > max_length:
        query = query[:max_length]
    return query


def convert_enum_to_string(separator, member):
    """
    Split an enum member name on its word boundaries and join with `separator`.

    Works for both `ListUpdatedAt` and `LIST_UPDATED_AT` style names:
        convert_enum_to_string("_", Sort.ListUpdatedAt) -> "list_updated_at"
    """
    name = _CAMEL_BOUNDARY_RE.sub("_", member.name)
    words = [w for w in name.split("_") if w]
    return separator.join(words).lower()
