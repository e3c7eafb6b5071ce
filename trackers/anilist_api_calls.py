"""
Module: anilist_api_calls.py
Description:
    AniList integration on top of the GraphQL wrapper: public anime search and
    lookup, plus the viewer's profile and list-progress updates.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env` (through `utils/env.py`).
    - Required/used env vars:
        * ANILIST_ACCESS_TOKEN (viewer and update calls only)
        * ANILIST_API_URL
"""

from __future__ import annotations
import logging
from typing import List, Optional

from trackers.anilist_models import AniListMedia, AniListMediaListEntry, AniListStatus, AniListUser
from trackers.auth_api_call import DECODE_ERRORS, ApiName
from trackers.graphql_api_call import GraphQlApiCall

logger = logging.getLogger(__name__)

MEDIA_FIELDS = """
      id
      idMal
      title {
        romaji
        english
        native
      }
      episodes
      format
      status
      seasonYear
      synonyms
      siteUrl
"""

SEARCH_QUERY = """
query ($search: String, $perPage: Int) {
  Page(page: 1, perPage: $perPage) {
    media(search: $search, type: ANIME) {%s    }
  }
}
""" % MEDIA_FIELDS

ANIME_QUERY = """
query ($id: Int) {
  Media(id: $id, type: ANIME) {%s  }
}
""" % MEDIA_FIELDS

VIEWER_QUERY = """
query {
  Viewer {
    id
    name
    avatar {
      large
    }
    siteUrl
  }
}
"""

SAVE_ENTRY_MUTATION = """
mutation ($mediaId: Int, $progress: Int, $status: MediaListStatus) {
  SaveMediaListEntry(mediaId: $mediaId, progress: $progress, status: $status) {
    id
    mediaId
    status
    progress
  }
}
"""


class AniListApiCalls(GraphQlApiCall):
    def __init__(self, **kwargs) -> None:
        super().__init__(ApiName.ANILIST, **kwargs)

    def search_anime(self, title: str, per_page: int = 10) -> Optional[List[AniListMedia]]:
        """
        Search AniList by title. Public data, no token needed.
        """
        logger.info("(AniList) Starting search for anime '%s'...", title)
        media = self.deserialize_request(
            SEARCH_QUERY,
            {"search": title, "perPage": per_page},
            parser=lambda data: [AniListMedia.from_dict(m) for m in data["Page"]["media"]],
        )
        if media is not None:
            logger.info("(AniList) Search complete")
        return media

    def get_anime(self, anime_id: int) -> Optional[AniListMedia]:
        logger.info("(AniList) Retrieving anime %s...", anime_id)
        return self.deserialize_request(
            ANIME_QUERY,
            {"id": anime_id},
            parser=lambda data: AniListMedia.from_dict(data["Media"]) if data.get("Media") else None,
        )

    def get_user_information(self) -> Optional[AniListUser]:
        """The user owning the access token."""
        try:
            response = self.authenticated_request(VIEWER_QUERY)
            if response is None:
                return None
            return self.parse_graphql_data(
                response, ApiName.ANILIST, lambda data: AniListUser.from_dict(data["Viewer"])
            )
        except DECODE_ERRORS as e:
            logger.error("(AniList) Error retrieving user information: %s", e)
            return None

    def update_anime_progress(
        self,
        media_id: int,
        progress: int,
        status: Optional[AniListStatus] = None,
    ) -> Optional[AniListMediaListEntry]:
        variables = {"mediaId": media_id, "progress": progress}
        if status is not None:
            variables["status"] = status.value

        logger.info("(AniList) Updating progress of %s to %s...", media_id, progress)
        try:
            response = self.authenticated_request(SAVE_ENTRY_MUTATION, variables=variables)
            if response is None:
                return None
            entry = self.parse_graphql_data(
                response,
                ApiName.ANILIST,
                lambda data: AniListMediaListEntry.from_dict(data["SaveMediaListEntry"]),
            )
        except DECODE_ERRORS as e:
            logger.error("(AniList) Error updating anime progress: %s", e)
            return None

        logger.info("(AniList) Update complete")
        return entry
