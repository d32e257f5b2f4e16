from unittest.mock import MagicMock

import pytest
import requests

from briefing_agent.services.tool_router_service import (
    INVALID_INPUT_RESULT,
    TOOL_ERROR_RESULT,
    UNKNOWN_TOOL_RESULT,
    ToolRouter,
    is_failure_result,
)
from conftest import make_http_response, make_requests_response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def router(registry, session):
    return ToolRouter(registry, base_url="http://localhost:4000/", session=session, timeout=5)


class TestToolRouter:
    def test_posts_input_to_resolved_route(self, router, session):
        session.post.return_value = make_http_response(200, {"result": [{"title": "X"}]})

        result = router.invoke("fetchNews", {"query": "AI"})

        assert result == [{"title": "X"}]
        args, kwargs = session.post.call_args
        assert args[0] == "http://localhost:4000/fetch-news"
        assert kwargs["json"] == {"query": "AI"}
        assert kwargs["timeout"] == 5

    @pytest.mark.parametrize(
        "payload",
        ["Email sent to a@example.com", {"summary": "text"}, [], None, 3],
    )
    def test_result_is_passed_through_verbatim(self, router, session, payload):
        session.post.return_value = make_http_response(200, {"result": payload})
        assert router.invoke("sendEmail", {"to": ["a@b.c"], "subject": "s", "text": "t"}) == payload

    def test_unknown_tool_returns_sentinel_without_network(self, router, session):
        assert router.invoke("launchRockets", {}) == UNKNOWN_TOOL_RESULT
        session.post.assert_not_called()

    def test_invalid_input_returns_sentinel_without_network(self, router, session):
        assert router.invoke("fetchNews", {"topic": "AI"}) == INVALID_INPUT_RESULT
        assert router.invoke("fetchNews", "AI") == INVALID_INPUT_RESULT
        session.post.assert_not_called()

    def test_transport_error_returns_sentinel(self, router, session):
        session.post.side_effect = requests.ConnectionError("connection refused")
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_timeout_returns_sentinel(self, router, session):
        session.post.side_effect = requests.Timeout("read timed out")
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_non_2xx_returns_sentinel(self, router, session):
        session.post.return_value = make_http_response(500, {"error": "Failed to fetch news"})
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_redirect_status_returns_sentinel(self, router, session):
        session.post.return_value = make_requests_response(300, {"result": "stale"})
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_non_json_body_returns_sentinel(self, router, session):
        session.post.return_value = make_http_response(200, text="<html>oops</html>")
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_body_without_result_returns_sentinel(self, router, session):
        session.post.return_value = make_http_response(200, {"data": []})
        assert router.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT

    def test_repeated_calls_give_same_shape(self, router, session):
        session.post.side_effect = [
            make_http_response(200, {"result": [{"title": "A"}]}),
            make_http_response(200, {"result": [{"title": "B"}, {"title": "C"}]}),
        ]
        first = router.invoke("fetchNews", {"query": "AI"})
        second = router.invoke("fetchNews", {"query": "AI"})
        assert type(first) is type(second) is list
        assert all(set(item) == {"title"} for item in first + second)

    def test_unreachable_endpoint_returns_sentinel(self, registry):
        real = ToolRouter(registry, base_url="http://127.0.0.1:9", timeout=2)
        try:
            assert real.invoke("fetchNews", {"query": "AI"}) == TOOL_ERROR_RESULT
        finally:
            real.close()


def test_is_failure_result():
    assert is_failure_result(TOOL_ERROR_RESULT)
    assert is_failure_result(UNKNOWN_TOOL_RESULT)
    assert not is_failure_result("Email sent to a@example.com")
    assert not is_failure_result([TOOL_ERROR_RESULT])
