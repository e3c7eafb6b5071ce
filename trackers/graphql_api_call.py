"""
Module: graphql_api_call.py
Description:
    GraphQL call wrapper for AniList and Annict: serializes `{query, variables}`
    bodies, resolves the endpoint per provider and decodes the `data` payload.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env` (through `utils/env.py`).
    - Required/used env vars:
        * ANILIST_API_URL
        * ANNICT_API_URL
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from trackers.auth_api_call import (
    DECODE_ERRORS,
    ApiName,
    AuthApiCall,
    CallType,
    ProviderConfigurationError,
)
from utils.env import ANILIST_API_URL, ANNICT_API_URL

logger = logging.getLogger(__name__)

T = TypeVar("T")

GRAPHQL_URLS: Dict[ApiName, str] = {
    ApiName.ANILIST: ANILIST_API_URL,
    ApiName.ANNICT: ANNICT_API_URL,
}


def graphql_url(provider: ApiName) -> str:
    """Endpoint for `provider`; raises ProviderConfigurationError when it has none."""
    try:
        return GRAPHQL_URLS[provider]
    except KeyError:
        raise ProviderConfigurationError(f"No GraphQL endpoint configured for provider {provider!r}") from None


class GraphQlApiCall(AuthApiCall):
    def authenticated_request(
        self,
        query: str,
        provider: Optional[ApiName] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Optional[requests.Response]:
        """POST a GraphQL query with the provider's token; the response on success, otherwise None."""
        provider = provider or self.provider
        url = graphql_url(provider)
        response = self.authenticated_api_call(
            provider,
            CallType.POST,
            url,
            json_body={"query": query, "variables": variables},
        )
        return response if response is not None and response.ok else None

    def deserialize_request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        parser: Optional[Callable[[Dict[str, Any]], T]] = None,
        provider: Optional[ApiName] = None,
    ) -> Optional[T]:
        """
        Unauthenticated GraphQL POST, for public data.

        The JSON `data` object is passed to `parser` (returned as-is when no
        parser is given). Any failure yields None.
        """
        provider = provider or self.provider
        url = graphql_url(provider)
        try:
            response = self.session.post(
                url,
                json={"query": query, "variables": variables},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            if not response.ok:
                logger.error("(%s) GraphQL request returned %s", provider.label, response.status_code)
                return None
            return self.parse_graphql_data(response, provider, parser)
        except DECODE_ERRORS as e:
            logger.error("(%s) GraphQL request failed: %s", provider.label, e)
            return None

    @staticmethod
    def parse_graphql_data(
        response: requests.Response,
        provider: ApiName,
        parser: Optional[Callable[[Dict[str, Any]], T]] = None,
    ):
        payload = response.json()
        if not isinstance(payload, dict):
            raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
        data = payload.get("data")
        if payload.get("errors"):
            messages = "; ".join(
                err.get("message", "?") if isinstance(err, dict) else str(err) for err in payload["errors"]
            )
            logger.error("(%s) GraphQL errors: %s", provider.label, messages)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise TypeError(f"expected `data` to be a JSON object, got {type(data).__name__}")
        return parser(data) if parser else data
