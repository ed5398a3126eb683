from unittest.mock import MagicMock

import pytest
import requests

from logo_picker.client import ApiClient, ApiError
from logo_picker.quiz import BrandCard


def make_response(status_code=200, payload=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_list_brands_builds_query_and_parses_cards(session):
    session.request.return_value = make_response(
        payload=[
            {
                "id": 1,
                "name": "Ford",
                "slug": "ford",
                "imageUrl": "https://cdn.example/ford.png",
                "difficulty": "easy",
                "hasText": True,
            }
        ]
    )
    client = ApiClient("http://api.test/", timeout=2, session=session)

    brands = client.list_brands("easy", 5)

    assert brands == [BrandCard(1, "Ford", "ford", "https://cdn.example/ford.png", "easy", True)]
    session.request.assert_called_once_with(
        "GET", "http://api.test/api/brands", timeout=2, params={"limit": 5, "difficulty": "easy"}
    )


def test_list_brands_without_filter_omits_difficulty(session):
    session.request.return_value = make_response(payload=[])
    ApiClient("http://api.test", session=session).list_brands(None, 10)
    assert session.request.call_args.kwargs["params"] == {"limit": 10}


def test_submit_score_posts_camel_case_body(session):
    session.request.return_value = make_response(
        201, {"id": 3, "playerName": "AA", "score": 10, "difficulty": "hard"}
    )
    created = ApiClient("http://api.test", session=session).submit_score("AA", 10, "hard")

    assert created["id"] == 3
    assert session.request.call_args.kwargs["json"] == {
        "playerName": "AA",
        "score": 10,
        "difficulty": "hard",
    }


def test_server_message_is_surfaced(session):
    session.request.return_value = make_response(400, {"message": "playerName: too short"})
    with pytest.raises(ApiError) as excinfo:
        ApiClient("http://api.test", session=session).submit_score("", 1, "easy")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "playerName: too short"


def test_non_json_error_uses_status(session):
    session.request.return_value = make_response(503, json_error=True)
    with pytest.raises(ApiError) as excinfo:
        ApiClient("http://api.test", session=session).list_scores()
    assert excinfo.value.status_code == 503
    assert "503" in excinfo.value.message


def test_connection_failure_is_api_error(session):
    session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(ApiError) as excinfo:
        ApiClient("http://api.test", session=session).list_scores()
    assert excinfo.value.status_code is None


def test_logo_url():
    client = ApiClient("http://api.test/", session=MagicMock())
    assert client.logo_url(7, 15) == "http://api.test/api/brands/7/logo?blur=15"
