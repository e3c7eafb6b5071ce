"""
Module: mal_models.py
Description:
    MyAnimeList API v2 payloads as frozen dataclasses, built with `from_dict`
    from the decoded JSON. Enum fields are parsed case-insensitively.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * None
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Status(Enum):
    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class Sort(Enum):
    LIST_SCORE = "list_score"
    LIST_UPDATED_AT = "list_updated_at"
    ANIME_TITLE = "anime_title"
    ANIME_START_DATE = "anime_start_date"
    ANIME_ID = "anime_id"


def parse_status(value) -> Optional[Status]:
    return Status(value) if value else None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # fromisoformat only learned the "Z" suffix in 3.11
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class User:
    id: int
    name: str
    location: Optional[str] = None
    joined_at: Optional[datetime] = None
    picture: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            name=data["name"],
            location=data.get("location"),
            joined_at=parse_datetime(data.get("joined_at")),
            picture=data.get("picture"),
        )


@dataclass(frozen=True)
class ListStatus:
    status: Optional[Status] = None
    score: int = 0
    num_episodes_watched: int = 0
    is_rewatching: bool = False
    num_times_rewatched: int = 0
    start_date: Optional[str] = None
    finish_date: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListStatus":
        return cls(
            status=parse_status(data.get("status")),
            score=data.get("score", 0),
            num_episodes_watched=data.get("num_episodes_watched", 0),
            is_rewatching=data.get("is_rewatching", False),
            num_times_rewatched=data.get("num_times_rewatched", 0),
            start_date=data.get("start_date"),
            finish_date=data.get("finish_date"),
            updated_at=parse_datetime(data.get("updated_at")),
        )


@dataclass(frozen=True)
class Picture:
    medium: Optional[str] = None
    large: Optional[str] = None


@dataclass(frozen=True)
class AlternativeTitles:
    synonyms: Tuple[str, ...] = ()
    en: Optional[str] = None
    ja: Optional[str] = None


@dataclass(frozen=True)
class RelatedAnime:
    anime: "Anime"
    relation_type: Optional[str] = None
    relation_type_formatted: Optional[str] = None


@dataclass(frozen=True)
class Anime:
    id: int
    title: str
    main_picture: Optional[Picture] = None
    alternative_titles: Optional[AlternativeTitles] = None
    num_episodes: int = 0
    media_type: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    my_list_status: Optional[ListStatus] = None
    related_anime: Tuple[RelatedAnime, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Anime":
        picture = data.get("main_picture")
        titles = data.get("alternative_titles")
        list_status = data.get("my_list_status")
        return cls(
            id=data["id"],
            title=data["title"],
            main_picture=Picture(medium=picture.get("medium"), large=picture.get("large"))
            if picture
            else None,
            alternative_titles=AlternativeTitles(
                synonyms=tuple(titles.get("synonyms") or ()),
                en=titles.get("en") or None,
                ja=titles.get("ja") or None,
            )
            if titles
            else None,
            num_episodes=data.get("num_episodes") or 0,
            media_type=data.get("media_type"),
            status=data.get("status"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            my_list_status=ListStatus.from_dict(list_status) if list_status else None,
            related_anime=tuple(
                RelatedAnime(
                    anime=Anime.from_dict(related["node"]),
                    relation_type=related.get("relation_type"),
                    relation_type_formatted=related.get("relation_type_formatted"),
                )
                for related in data.get("related_anime") or ()
            ),
        )


@dataclass(frozen=True)
class Paging:
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Paging":
        data = data or {}
        return cls(next=data.get("next"), previous=data.get("previous"))


@dataclass(frozen=True)
class UserAnimeListData:
    anime: Anime
    list_status: Optional[ListStatus] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserAnimeListData":
        list_status = data.get("list_status")
        return cls(
            anime=Anime.from_dict(data["node"]),
            list_status=ListStatus.from_dict(list_status) if list_status else None,
        )


@dataclass(frozen=True)
class UserAnimeList:
    data: Tuple[UserAnimeListData, ...] = ()
    paging: Paging = field(default_factory=Paging)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserAnimeList":
        return cls(
            data=tuple(UserAnimeListData.from_dict(item) for item in data.get("data") or ()),
            paging=Paging.from_dict(data.get("paging")),
        )


@dataclass(frozen=True)
class SearchAnimeResponse:
    data: Tuple[Anime, ...] = ()
    paging: Paging = field(default_factory=Paging)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchAnimeResponse":
        return cls(
            data=tuple(Anime.from_dict(item["node"]) for item in data.get("data") or ()),
            paging=Paging.from_dict(data.get("paging")),
        )


@dataclass(frozen=True)
class UpdateAnimeStatusResponse:
    status: Optional[Status] = None
    score: int = 0
    num_episodes_watched: int = 0
    is_rewatching: bool = False
    updated_at: Optional[datetime] = None
    num_times_rewatched: int = 0
    start_date: Optional[str] = None
    finish_date: Optional[str] = None
    priority: int = 0
    rewatch_value: int = 0
    tags: Tuple[str, ...] = ()
    comments: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpdateAnimeStatusResponse":
        return cls(
            status=parse_status(data.get("status")),
            score=data.get("score", 0),
            num_episodes_watched=data.get("num_episodes_watched", 0),
            is_rewatching=data.get("is_rewatching", False),
            updated_at=parse_datetime(data.get("updated_at")),
            num_times_rewatched=data.get("num_times_rewatched", 0),
            start_date=data.get("start_date"),
            finish_date=data.get("finish_date"),
            priority=data.get("priority", 0),
            rewatch_value=data.get("rewatch_value", 0),
            tags=tuple(data.get("tags") or ()),
            comments=data.get("comments") or "",
        )
