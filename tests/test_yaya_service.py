"""Tests for the signed YaYa Wallet API client."""

import base64
import hashlib
import hmac
import json
from unittest import mock

import pytest
import requests

from app.shared.yaya_service import (
    FIND_BY_USER_ENDPOINT,
    SEARCH_ENDPOINT,
    YaYaAPI,
    YaYaAPIError,
)
from tests.conftest import make_settings


def make_response(status_code: int, content: bytes, url: str = "https://yaya.test/") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.encoding = "utf-8"
    response.url = url
    return response


class TestSignRequest:
    def setup_method(self):
        self.client = YaYaAPI(make_settings())

    def test_signature_is_base64_hmac_sha256_of_prehash(self):
        timestamp, signature = self.client.sign_request("get", "/api/en/transaction/find-by-user", "", "1700000000000")

        expected = base64.b64encode(
            hmac.new(
                b"test-secret",
                b"1700000000000GET/api/en/transaction/find-by-user",
                hashlib.sha256,
            ).digest()
        ).decode()
        assert timestamp == "1700000000000"
        assert signature == expected

    def test_same_inputs_give_same_signature(self):
        first = self.client.sign_request("POST", SEARCH_ENDPOINT, '{"query":"x"}', "123")
        second = self.client.sign_request("POST", SEARCH_ENDPOINT, '{"query":"x"}', "123")
        assert first == second

    def test_changing_any_input_changes_signature(self):
        _, base = self.client.sign_request("POST", SEARCH_ENDPOINT, '{"query":"x"}', "123")
        variants = [
            self.client.sign_request("GET", SEARCH_ENDPOINT, '{"query":"x"}', "123"),
            self.client.sign_request("POST", FIND_BY_USER_ENDPOINT, '{"query":"x"}', "123"),
            self.client.sign_request("POST", SEARCH_ENDPOINT, '{"query":"y"}', "123"),
            self.client.sign_request("POST", SEARCH_ENDPOINT, '{"query":"x"}', "124"),
        ]
        for _, signature in variants:
            assert signature != base

    def test_different_secret_changes_signature(self):
        other = YaYaAPI(make_settings(yaya_api_secret="another-secret"))
        assert (
            other.sign_request("GET", SEARCH_ENDPOINT, "", "1")[1]
            != self.client.sign_request("GET", SEARCH_ENDPOINT, "", "1")[1]
        )

    def test_default_timestamp_is_milliseconds(self):
        with mock.patch("app.shared.yaya_service.time.time", return_value=1700000000.5):
            timestamp, _ = self.client.sign_request("GET", SEARCH_ENDPOINT)
        assert timestamp == "1700000000500"


class TestRequest:
    def setup_method(self):
        self.client = YaYaAPI(make_settings())

    def test_get_sends_signed_headers_and_page_param(self):
        payload = {"data": [], "lastPage": 1}
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.return_value = make_response(200, json.dumps(payload).encode())
            result = self.client.find_by_user(page=3)

        assert result == payload
        args, kwargs = request.call_args
        assert args == ("GET", "https://yaya.test/api/en/transaction/find-by-user")
        assert kwargs["params"] == {"page": 3}
        assert kwargs["data"] is None

        headers = kwargs["headers"]
        assert headers["YAYA-API-KEY"] == "test-key"
        # query string is not part of the signed path
        _, expected = self.client.sign_request("GET", FIND_BY_USER_ENDPOINT, "", headers["YAYA-API-TIMESTAMP"])
        assert headers["YAYA-API-SIGN"] == expected

    def test_post_body_is_exactly_what_was_signed(self):
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.return_value = make_response(200, b'{"data": []}')
            self.client.search("coffee")

        _, kwargs = request.call_args
        body = kwargs["data"].decode("utf-8")
        assert body == '{"query":"coffee"}'

        headers = kwargs["headers"]
        _, expected = self.client.sign_request("POST", SEARCH_ENDPOINT, body, headers["YAYA-API-TIMESTAMP"])
        assert headers["YAYA-API-SIGN"] == expected

    def test_http_error_carries_upstream_body(self):
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.return_value = make_response(401, b'{"error": "Invalid signature"}')
            with pytest.raises(YaYaAPIError) as excinfo:
                self.client.find_by_user()

        assert excinfo.value.status_code == 401
        assert excinfo.value.details == {"error": "Invalid signature"}

    def test_http_error_with_text_body(self):
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.return_value = make_response(502, b"Bad Gateway")
            with pytest.raises(YaYaAPIError) as excinfo:
                self.client.search("x")

        assert excinfo.value.status_code == 502
        assert excinfo.value.details == "Bad Gateway"

    def test_network_error_carries_message(self):
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.side_effect = requests.ConnectionError("connection refused")
            with pytest.raises(YaYaAPIError) as excinfo:
                self.client.find_by_user()

        assert excinfo.value.status_code is None
        assert "connection refused" in excinfo.value.details

    def test_no_retry_on_failure(self):
        with mock.patch("app.shared.yaya_service.requests.request") as request:
            request.side_effect = requests.Timeout("timed out")
            with pytest.raises(YaYaAPIError):
                self.client.find_by_user()
        assert request.call_count == 1
