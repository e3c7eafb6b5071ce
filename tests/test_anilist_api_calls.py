import pytest
import requests
import requests_mock

from trackers.anilist_models import AniListStatus
from trackers.auth_api_call import ApiName
from trackers.graphql_api_call import GRAPHQL_URLS

ANILIST_URL = GRAPHQL_URLS[ApiName.ANILIST]

MEDIA = {
    "id": 1,
    "idMal": 1,
    "title": {"romaji": "Cowboy Bebop", "english": "Cowboy Bebop", "native": "カウボーイビバップ"},
    "episodes": 26,
    "format": "TV",
    "status": "FINISHED",
    "seasonYear": 1998,
    "synonyms": ["CB"],
    "siteUrl": "https://anilist.co/anime/1",
}


def test_search_anime(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"Page": {"media": [MEDIA, dict(MEDIA, id=5, title={"romaji": "Tengoku no Tobira"})]}}})
        results = anilist.search_anime("bebop", per_page=5)

        assert mocker.last_request.json()["variables"] == {"search": "bebop", "perPage": 5}
        assert "Authorization" not in mocker.last_request.headers

    assert [media.id for media in results] == [1, 5]
    assert results[0].id_mal == 1
    assert results[0].synonyms == ("CB",)
    assert results[1].title.preferred == "Tengoku no Tobira"


def test_get_anime_missing_media_returns_none(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"Media": None}})
        assert anilist.get_anime(999999) is None

        mocker.post(ANILIST_URL, json={"data": {"Media": MEDIA}})
        assert anilist.get_anime(1).episodes == 26


def test_get_user_information(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(
            ANILIST_URL,
            json={"data": {"Viewer": {"id": 9, "name": "faye", "avatar": {"large": "a.png"}, "siteUrl": None}}},
        )
        user = anilist.get_user_information()
        assert mocker.last_request.headers["Authorization"] == "Bearer anilist-token"

    assert user.name == "faye"
    assert user.avatar == "a.png"


def test_get_user_information_failure_returns_none(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, status_code=401, json={"errors": [{"message": "Invalid token"}]})
        assert anilist.get_user_information() is None

        mocker.post(ANILIST_URL, json={"data": {"Viewer": {"name": "no id"}}})
        assert anilist.get_user_information() is None


def test_update_anime_progress(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(
            ANILIST_URL,
            json={"data": {"SaveMediaListEntry": {"id": 77, "mediaId": 1, "status": "current", "progress": 4}}},
        )
        entry = anilist.update_anime_progress(1, 4, status=AniListStatus.CURRENT)
        variables = mocker.last_request.json()["variables"]

    assert variables == {"mediaId": 1, "progress": 4, "status": "CURRENT"}
    assert entry.status is AniListStatus.CURRENT
    assert entry.progress == 4


def test_update_anime_progress_without_status(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"SaveMediaListEntry": {"id": 77, "mediaId": 1, "progress": 2}}})
        entry = anilist.update_anime_progress(1, 2)
        assert "status" not in mocker.last_request.json()["variables"]

    assert entry.status is None


FAILURES = [
    {"status_code": 500},
    {"status_code": 404, "json": {"errors": [{"message": "Not Found."}], "data": None}},
    {"exc": requests.ConnectionError},
    {"json": ["unexpected"]},
    {"json": {"data": ["unexpected"]}},
    {"json": {"errors": ["plain string error"], "data": None}},
]


@pytest.mark.parametrize("mock_kwargs", FAILURES)
def test_search_anime_failures_return_none(anilist, mock_kwargs):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, **mock_kwargs)
        assert anilist.search_anime("bebop") is None


@pytest.mark.parametrize("mock_kwargs", FAILURES)
def test_get_anime_failures_return_none(anilist, mock_kwargs):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, **mock_kwargs)
        assert anilist.get_anime(1) is None


@pytest.mark.parametrize("mock_kwargs", FAILURES)
def test_get_user_information_failures_return_none(anilist, mock_kwargs):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, **mock_kwargs)
        assert anilist.get_user_information() is None


@pytest.mark.parametrize("mock_kwargs", FAILURES)
def test_update_anime_progress_failures_return_none(anilist, mock_kwargs):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, **mock_kwargs)
        assert anilist.update_anime_progress(1, 3) is None


def test_media_with_flat_title_returns_none(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"Page": {"media": [dict(MEDIA, title="flat string")]}}})
        assert anilist.search_anime("bebop") is None

        mocker.post(ANILIST_URL, json={"data": {"Media": dict(MEDIA, title="flat string")}})
        assert anilist.get_anime(1) is None


def test_update_anime_progress_with_wrong_entry_shape_returns_none(anilist):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"SaveMediaListEntry": "saved"}})
        assert anilist.update_anime_progress(1, 3) is None
