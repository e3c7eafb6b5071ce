"""
Module: url_builder.py
Description:
    Builds request URLs from a base endpoint and ordered query parameters.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
from urllib.parse import urlencode


@dataclass
class UrlBuilder:
    """
    Base endpoint plus an ordered list of query parameters.

    Parameters keep their insertion order in the built URL; values are
    percent-encoded, commas are left as-is so `fields=a,b` stays readable.
    """

    base: str
    parameters: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, key: str, value) -> "UrlBuilder":
        self.parameters.append((key, str(value)))
        return self

    def build(self) -> str:
        if not self.parameters:
            return self.base
        return f"{self.base}?{urlencode(self.parameters, safe=',')}"
