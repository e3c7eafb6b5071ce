import pytest
import requests_mock

from trackers.auth_api_call import ApiName, ProviderConfigurationError
from trackers.graphql_api_call import GRAPHQL_URLS, GraphQlApiCall, graphql_url

ANILIST_URL = GRAPHQL_URLS[ApiName.ANILIST]
ANNICT_URL = GRAPHQL_URLS[ApiName.ANNICT]
QUERY = "query ($id: Int) { Media(id: $id) { id } }"


@pytest.fixture
def client():
    client = GraphQlApiCall(
        ApiName.ANILIST,
        access_tokens={ApiName.ANILIST: "anilist-token", ApiName.ANNICT: "annict-token"},
    )
    yield client
    client.close()


def test_default_endpoints():
    assert graphql_url(ApiName.ANILIST) == "https://graphql.anilist.co"
    assert graphql_url(ApiName.ANNICT) == "https://api.annict.com/graphql"


def test_authenticated_request_posts_query_and_variables(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"Media": {"id": 1}}})
        response = client.authenticated_request(QUERY, variables={"id": 1})

        request = mocker.last_request
        assert request.json() == {"query": QUERY, "variables": {"id": 1}}
        assert request.headers["Authorization"] == "Bearer anilist-token"

    assert response.json()["data"]["Media"]["id"] == 1


def test_authenticated_request_resolves_provider_endpoint(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANNICT_URL, json={"data": {}})
        assert client.authenticated_request(QUERY, ApiName.ANNICT) is not None
        assert mocker.last_request.headers["Authorization"] == "Bearer annict-token"


def test_authenticated_request_failure_returns_none(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, status_code=400, json={"errors": [{"message": "bad"}]})
        assert client.authenticated_request(QUERY) is None


def test_unsupported_provider_fails_before_any_request(client):
    with requests_mock.Mocker() as mocker:
        with pytest.raises(ProviderConfigurationError):
            client.authenticated_request(QUERY, ApiName.MAL)
        with pytest.raises(ProviderConfigurationError):
            client.deserialize_request(QUERY, provider=ApiName.MAL)
        assert mocker.call_count == 0


def test_deserialize_request_is_unauthenticated_and_parses_data(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json={"data": {"Media": {"id": 7}}})
        media_id = client.deserialize_request(QUERY, {"id": 7}, parser=lambda data: data["Media"]["id"])

        assert "Authorization" not in mocker.last_request.headers
        assert mocker.last_request.json()["variables"] == {"id": 7}

    assert media_id == 7


def test_deserialize_request_follows_provider(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANNICT_URL, json={"data": {"viewer": None}})
        mocker.post(ANILIST_URL, json={"data": {"wrong": True}})

        assert client.deserialize_request(QUERY, provider=ApiName.ANNICT) == {"viewer": None}
        assert mocker.last_request.url == ANNICT_URL


@pytest.mark.parametrize(
    "mock_kwargs",
    [
        {"status_code": 500},
        {"text": "not json"},
        {"json": {"data": None, "errors": [{"message": "Not Found."}]}},
        {"json": {"data": {"Media": None}}},
        {"json": ["unexpected"]},
        {"json": {"data": "unexpected"}},
    ],
)
def test_deserialize_request_failures_return_none(client, mock_kwargs):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, **mock_kwargs)
        assert client.deserialize_request(QUERY, parser=lambda data: data["Media"]["id"]) is None


def test_authenticated_request_returns_raw_response_for_any_json(client):
    with requests_mock.Mocker() as mocker:
        mocker.post(ANILIST_URL, json=["unexpected"])
        response = client.authenticated_request(QUERY)

    assert response is not None
    with pytest.raises(TypeError):
        GraphQlApiCall.parse_graphql_data(response, ApiName.ANILIST)
