"""
Module: auth_api_call.py
Description:
    Authenticated call dispatcher shared by every tracker client: attaches the
    provider's bearer token, performs the HTTP call and reports failures as None.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env` (through `utils/env.py`).
    - Required/used env vars:
        * MAL_ACCESS_TOKEN / ANILIST_ACCESS_TOKEN / ANNICT_ACCESS_TOKEN
        * REQUEST_TIMEOUT
    Obtaining and refreshing tokens is not handled here.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

import requests

from utils.env import REQUEST_TIMEOUT, get_access_token

logger = logging.getLogger(__name__)


class ApiName(Enum):
    MAL = "mal"
    ANILIST = "anilist"
    ANNICT = "annict"

    @property
    def label(self) -> str:
        return {"mal": "MAL", "anilist": "AniList", "annict": "Annict"}[self.value]


class CallType(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class TrackerError(RuntimeError):
    """Base error for tracker API access."""


class ProviderConfigurationError(TrackerError):
    """A provider has no endpoint configured for the requested call."""


# Failures of a call or of decoding its payload; clients turn these into None
DECODE_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, AttributeError)


class AuthApiCall:
    """
    Base class for tracker clients.

    Attributes:
        provider: The provider this client talks to by default.
        session: requests session used for every call.
        timeout: Per-request HTTP timeout in seconds.
        token_getter: Callable returning the access token for a provider.
    """

    def __init__(
        self,
        provider: ApiName,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        token_getter: Optional[Callable[[ApiName], Optional[str]]] = None,
        access_tokens: Optional[Mapping[ApiName, str]] = None,
    ) -> None:
        self.provider = provider
        self.session = session or requests.Session()
        self.timeout = timeout
        if access_tokens is not None:
            self.token_getter = access_tokens.get
        else:
            self.token_getter = token_getter or get_access_token

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def authenticated_api_call(
        self,
        provider: ApiName,
        call_type: CallType,
        url: str,
        data: Any = None,
        json_body: Any = None,
    ) -> Optional[requests.Response]:
        """
        Perform `call_type` on `url` with the provider's bearer token attached.

        `data` is sent form-encoded, `json_body` as JSON. Returns the response on
        a 2xx status, otherwise None (missing token, network error or error status).
        """
        token = self.token_getter(provider)
        if not token:
            logger.error("(%s) No access token available; cannot call %s", provider.label, url)
            return None

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        try:
            response = self.session.request(
                call_type.value,
                url,
                headers=headers,
                data=data,
                json=json_body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("(%s) Request failed (%s %s): %s", provider.label, call_type.value, url, e)
            return None

        if not response.ok:
            logger.error(
                "(%s) %s %s returned %s: %s",
                provider.label,
                call_type.value,
                url,
                response.status_code,
                response.text[:200],
            )
            return None
        return response
