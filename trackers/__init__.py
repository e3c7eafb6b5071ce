"""
Module: __init__.py
Description:
    Tracker API clients for AniSync (MyAnimeList REST, AniList/Annict GraphQL).

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * None
"""

from trackers.auth_api_call import ApiName, ProviderConfigurationError, TrackerError
from trackers.anilist_api_calls import AniListApiCalls
from trackers.mal_api_calls import MalApiCalls

__all__ = [
    "AniListApiCalls",
    "ApiName",
    "MalApiCalls",
    "ProviderConfigurationError",
    "TrackerError",
]
