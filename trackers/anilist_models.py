"""
Module: anilist_models.py
Description:
    AniList GraphQL payloads (media, viewer, list entries) as frozen dataclasses.

Usage:
    Imported by other modules; not intended to be executed directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class AniListStatus(Enum):
    CURRENT = "CURRENT"
    PLANNING = "PLANNING"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"
    PAUSED = "PAUSED"
    REPEATING = "REPEATING"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


@dataclass(frozen=True)
class AniListTitle:
    romaji: Optional[str] = None
    english: Optional[str] = None
    native: Optional[str] = None

    @property
    def preferred(self) -> str:
        return self.english or self.romaji or self.native or "Unknown"


@dataclass(frozen=True)
class AniListMedia:
    id: int
    id_mal: Optional[int] = None
    title: AniListTitle = AniListTitle()
    episodes: Optional[int] = None
    format: Optional[str] = None
    status: Optional[str] = None
    season_year: Optional[int] = None
    synonyms: Tuple[str, ...] = ()
    site_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AniListMedia":
        title = data.get("title") or {}
        return cls(
            id=data["id"],
            id_mal=data.get("idMal"),
            title=AniListTitle(
                romaji=title.get("romaji"),
                english=title.get("english"),
                native=title.get("native"),
            ),
            episodes=data.get("episodes"),
            format=data.get("format"),
            status=data.get("status"),
            season_year=data.get("seasonYear"),
            synonyms=tuple(data.get("synonyms") or ()),
            site_url=data.get("siteUrl"),
        )


@dataclass(frozen=True)
class AniListUser:
    id: int
    name: str
    avatar: Optional[str] = None
    site_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AniListUser":
        return cls(
            id=data["id"],
            name=data["name"],
            avatar=(data.get("avatar") or {}).get("large"),
            site_url=data.get("siteUrl"),
        )


@dataclass(frozen=True)
class AniListMediaListEntry:
    id: int
    media_id: int
    status: Optional[AniListStatus] = None
    progress: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AniListMediaListEntry":
        status = data.get("status")
        return cls(
            id=data["id"],
            media_id=data["mediaId"],
            status=AniListStatus(status) if status else None,
            progress=data.get("progress") or 0,
        )
