"""Tests for the Serper search client."""

from unittest.mock import MagicMock

import pytest
import requests

from reelmaker.errors import ConfigurationError, ProviderError
from reelmaker.services.search import SerperClient


def _response(ok=True, status_code=200, reason="OK", payload=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestSerperClient:
    """Web search against a stubbed HTTP session."""

    def test_results_get_positions(self, session):
        session.post.return_value = _response(payload={
            "organic": [
                {"title": "First", "link": "https://a.com", "snippet": "A"},
                "junk",
                {"title": "Second", "link": "https://b.com"},
            ]
        })
        client = SerperClient(api_key="secret", session=session)

        results = client.search("trending sounds")

        assert [r.position for r in results] == [1, 2]
        assert results[0].title == "First"
        assert results[1].snippet == ""

    def test_request_shape(self, session):
        session.post.return_value = _response(payload={"organic": []})
        client = SerperClient(api_key="secret", num_results=3, session=session)

        client.search("latest memes")

        args, kwargs = session.post.call_args
        assert args[0] == "https://google.serper.dev/search"
        assert kwargs["json"] == {"q": "latest memes", "num": 3}
        assert kwargs["headers"]["X-API-KEY"] == "secret"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_missing_organic_section(self, session):
        session.post.return_value = _response(payload={"knowledgeGraph": {}})

        assert SerperClient(api_key="secret", session=session).search("q") == []

    def test_non_ok_status(self, session):
        session.post.return_value = _response(ok=False, status_code=403, reason="Forbidden")
        client = SerperClient(api_key="secret", session=session)

        with pytest.raises(ProviderError) as exc_info:
            client.search("news")

        assert exc_info.value.provider == "serper"
        assert "403" in exc_info.value.message

    def test_connection_failure(self, session):
        session.post.side_effect = requests.ConnectionError("no route to host")
        client = SerperClient(api_key="secret", session=session)

        with pytest.raises(ProviderError):
            client.search("news")

    def test_invalid_json(self, session):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        session.post.return_value = response

        with pytest.raises(ProviderError):
            SerperClient(api_key="secret", session=session).search("news")

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_query(self, session, query):
        with pytest.raises(ValueError):
            SerperClient(api_key="secret", session=session).search(query)
        session.post.assert_not_called()

    def test_missing_key(self, monkeypatch):
        from reelmaker.config import config

        monkeypatch.setattr(config, "serper_api_key", "")

        with pytest.raises(ConfigurationError):
            SerperClient()
