import pytest

from trackers.anilist_api_calls import AniListApiCalls
from trackers.auth_api_call import ApiName
from trackers.mal_api_calls import MalApiCalls

MAL_URL = "https://api.myanimelist.net/v2"


@pytest.fixture
def mal():
    client = MalApiCalls(api_url=MAL_URL, access_tokens={ApiName.MAL: "mal-token"}, page_delay=0)
    yield client
    client.close()


@pytest.fixture
def anilist():
    client = AniListApiCalls(access_tokens={ApiName.ANILIST: "anilist-token"})
    yield client
    client.close()
