"""Tests for the default delegate hooks."""

from __future__ import annotations

import httpx
import pytest

from typed_apiclient import (
    APIClient,
    APIClientDelegate,
    Configuration,
    DefaultAPIClientDelegate,
    UnacceptableStatusCodeError,
)


@pytest.fixture
def client() -> APIClient:
    return APIClient(Configuration(host="api.github.com"))


class TestDefaults:
    def test_will_send_request_returns_request_unchanged(self, client: APIClient) -> None:
        request = httpx.Request("GET", "https://api.github.com/user", headers={"Accept": "application/json"})
        result = DefaultAPIClientDelegate().will_send_request(client, request)
        assert result is request
        assert dict(result.headers) == dict(request.headers)

    @pytest.mark.asyncio
    async def test_should_retry_is_false(self, client: APIClient) -> None:
        delegate = DefaultAPIClientDelegate()
        assert await delegate.should_retry(client, RuntimeError("boom")) is False
        assert await delegate.should_retry(client, UnacceptableStatusCodeError(401)) is False

    @pytest.mark.parametrize("status_code", [301, 400, 401, 404, 500, 503])
    def test_invalid_response_maps_to_status_code_error(self, client: APIClient, status_code: int) -> None:
        response = httpx.Response(status_code, content=b"nope")
        error = DefaultAPIClientDelegate().did_receive_invalid_response(client, response, b"nope")
        assert isinstance(error, UnacceptableStatusCodeError)
        assert error.status_code == status_code
        assert str(error) == f"Unacceptable status code: {status_code}"


class TestPartialOverride:
    @pytest.mark.asyncio
    async def test_overriding_one_hook_keeps_other_defaults(self, client: APIClient) -> None:
        class HeaderOnly(APIClientDelegate):
            def will_send_request(self, client, request):
                request.headers["X-Request-Id"] = "abc"
                return request

        delegate = HeaderOnly()
        request = delegate.will_send_request(client, httpx.Request("GET", "https://api.github.com/user"))
        assert request.headers["x-request-id"] == "abc"
        assert await delegate.should_retry(client, RuntimeError()) is False
        error = delegate.did_receive_invalid_response(client, httpx.Response(418), b"")
        assert isinstance(error, UnacceptableStatusCodeError)
