"""
Module: mal_api_calls.py
Description:
    MyAnimeList API v2 client: user info, anime search and lookup, the paginated
    user anime list and list-status updates.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env` (through `utils/env.py`).
    - Required/used env vars:
        * MAL_ACCESS_TOKEN
        * MAL_API_URL
        * PAGE_DELAY
    Every call logs and returns None (or an empty list for the anime list)
    when the request or the decoding fails.
"""

from __future__ import annotations
import logging
import threading
from datetime import date
from typing import Iterable, List, Optional

import requests

from trackers.auth_api_call import DECODE_ERRORS, ApiName, AuthApiCall, CallType
from trackers.mal_models import (
    Anime,
    SearchAnimeResponse,
    Sort,
    Status,
    UpdateAnimeStatusResponse,
    User,
    UserAnimeList,
    UserAnimeListData,
)
from utils.env import MAL_API_URL, PAGE_DELAY
from utils.string_formatter import convert_enum_to_string, truncate_query
from utils.url_builder import UrlBuilder

logger = logging.getLogger(__name__)


class MalApiCalls(AuthApiCall):
    def __init__(self, *, api_url: str = MAL_API_URL, page_delay: float = PAGE_DELAY, **kwargs) -> None:
        super().__init__(ApiName.MAL, **kwargs)
        self.api_url = api_url.rstrip("/")
        self.page_delay = page_delay
        self._interrupt = threading.Event()

    def close(self) -> None:
        # Wake up any list retrieval waiting between pages
        self._interrupt.set()
        super().close()

    def _get(self, url: str) -> Optional[requests.Response]:
        return self.authenticated_api_call(ApiName.MAL, CallType.GET, url)

    def get_user_information(self) -> Optional[User]:
        """Get the authenticated user's information."""
        url = UrlBuilder(base=f"{self.api_url}/users/@me")
        try:
            response = self._get(url.build())
            if response is None:
                return None
            return User.from_dict(response.json())
        except DECODE_ERRORS as e:
            logger.error("(MAL) Error retrieving user information: %s", e)
            return None

    def search_anime(
        self,
        query: Optional[str],
        fields: Optional[Iterable[str]] = None,
        update_nsfw: bool = False,
    ) -> Optional[List[Anime]]:
        """
        Search the MAL database for anime.

        Args:
            query: Search by title. Whitespace is removed and the result cut to
                64 characters, MAL rejects longer queries.
            fields: The fields you would like returned.
            update_nsfw: True to include NSFW anime.

        Returns:
            List of anime, or None if the search failed.
        """
        url = UrlBuilder(base=f"{self.api_url}/anime")
        if query is not None:
            url.add("q", truncate_query(query))
            if update_nsfw:
                url.add("nsfw", "true")

        if fields is not None:
            url.add("fields", ",".join(fields))

        built_url = url.build()
        logger.info("(MAL) Starting search for anime (GET %s)...", built_url)
        try:
            response = self._get(built_url)
            if response is None:
                return None
            search_response = SearchAnimeResponse.from_dict(response.json())
        except DECODE_ERRORS as e:
            logger.error("(MAL) Error searching for anime: %s", e)
            return None

        logger.info("(MAL) Search complete")
        return list(search_response.data)

    def get_anime(self, anime_id: int, fields: Optional[Iterable[str]] = None) -> Optional[Anime]:
        """Get an anime from the MAL database."""
        url = UrlBuilder(base=f"{self.api_url}/anime/{anime_id}")
        if fields is not None:
            url.add("fields", ",".join(fields))

        built_url = url.build()
        logger.info("(MAL) Retrieving an anime from MAL (GET %s)...", built_url)
        try:
            response = self._get(built_url)
            if response is None:
                return None
            anime = Anime.from_dict(response.json())
        except DECODE_ERRORS as e:
            logger.error("(MAL) Error retrieving anime %s: %s", anime_id, e)
            return None

        logger.info("(MAL) Anime retrieval complete")
        return anime

    def get_user_anime_list(
        self,
        status: Optional[Status] = None,
        sort: Optional[Sort] = None,
        id_search: Optional[int] = None,
    ) -> List[UserAnimeListData]:
        """
        Get the user's anime list, following pagination until the last page.

        With `id_search`, stop at the first page holding that anime and return
        it as a single-element list. Pages are not kept while searching, so an
        anime that is not on the list gives an empty list.
        """
        url = UrlBuilder(base=f"{self.api_url}/users/@me/animelist")
        url.add("fields", "list_status,num_episodes")
        if status is not None:
            url.add("status", status.value)
        if sort is not None:
            url.add("sort", convert_enum_to_string("_", sort))

        built_url = url.build()
        collected: List[UserAnimeListData] = []
        while True:
            logger.info("(MAL) Getting user anime list (GET %s)...", built_url)
            try:
                response = self._get(built_url)
                if response is None:
                    break
                page = UserAnimeList.from_dict(response.json())
            except DECODE_ERRORS as e:
                logger.error("(MAL) Error retrieving user anime list: %s", e)
                break

            if not page.data:
                break

            if id_search is not None:
                found = next((item for item in page.data if item.anime.id == id_search), None)
                if found is not None:
                    logger.info("(MAL) Found anime %s on user anime list", id_search)
                    return [found]
            else:
                collected.extend(page.data)

            if page.paging.next is None:
                break

            built_url = page.paging.next
            logger.info("(MAL) Additional pages found; waiting %s seconds before calling again...", self.page_delay)
            if self._interrupt.wait(self.page_delay):
                logger.info("(MAL) Client closed; stopping pagination")
                break

        if id_search is not None:
            logger.info("(MAL) Anime %s not found on user anime list", id_search)
            return []

        logger.info("(MAL) Got user anime list")
        return collected

    def update_anime_status(
        self,
        anime_id: int,
        number_of_watched_episodes: int,
        status: Optional[Status] = None,
        is_rewatching: Optional[bool] = None,
        number_of_times_rewatched: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Optional[UpdateAnimeStatusResponse]:
        """
        Update the user's list status for an anime.

        Watched episodes and the rewatching flag are always sent; the other
        fields only when given. Dates are sent as YYYY-MM-DD.
        """
        url = UrlBuilder(base=f"{self.api_url}/anime/{anime_id}/my_list_status")

        body = [("num_watched_episodes", str(number_of_watched_episodes))]
        if status is not None:
            body.append(("status", status.value))
        body.append(("is_rewatching", "true" if is_rewatching else "false"))
        if number_of_times_rewatched is not None:
            body.append(("num_times_rewatched", str(number_of_times_rewatched)))
        if start_date is not None:
            body.append(("start_date", start_date.strftime("%Y-%m-%d")))
        if end_date is not None:
            body.append(("finish_date", end_date.strftime("%Y-%m-%d")))

        built_url = url.build()
        logger.info("(MAL) Updating anime status (PUT %s)...", built_url)
        try:
            response = self.authenticated_api_call(ApiName.MAL, CallType.PUT, built_url, data=body)
            if response is None:
                return None
            update_response = UpdateAnimeStatusResponse.from_dict(response.json())
        except DECODE_ERRORS as e:
            logger.error("(MAL) Error updating anime status: %s", e)
            return None

        logger.info("(MAL) Update complete")
        return update_response
