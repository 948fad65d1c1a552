"""Tests for API request logger."""

from unittest.mock import MagicMock, patch

import pytest

from blindroute.adapters.api_request_logger import (
    REDACTED,
    log_api_request,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given BLINDROUTE_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("BLINDROUTE_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("True", True), ("false", False)])
    def test_when_env_set_then_parses_flag(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        """Given BLINDROUTE_LOG_REQUESTS set, when checking, then the flag is honoured case-insensitively."""
        monkeypatch.setenv("BLINDROUTE_LOG_REQUESTS", value)

        assert should_log_requests() is expected


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=False)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given logging disabled, when calling log_api_request, then does not log."""
        log_api_request("GET", "http://ws.bus.go.kr/api/rest/buspos/getBusPosByVehId")

        mock_logger.info.assert_not_called()

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=True)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_logging_enabled_then_service_key_is_redacted(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given a serviceKey query parameter, when logging, then the key never appears."""
        log_api_request(
            "GET",
            "http://ws.bus.go.kr/api/rest/stationinfo/getStationByUid",
            params={"serviceKey": "secret-service-key", "arsId": "22009", "resultType": "json"},
        )

        mock_logger.info.assert_called_once()
        message = mock_logger.info.call_args[0][0]
        assert "GET http://ws.bus.go.kr/api/rest/stationinfo/getStationByUid?" in message
        assert "arsId=22009" in message
        assert f"serviceKey={REDACTED}" in message
        assert "secret-service-key" not in message

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=True)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_url_has_existing_params_then_appends_params(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given URL with existing params, when adding more params, then appends with '&'."""
        log_api_request("GET", "https://example.com/api?existing=1", params={"new": 2})

        assert "https://example.com/api?existing=1&new=2" in mock_logger.info.call_args[0][0]

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=True)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_logging_with_app_key_header_then_redacts_it(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given an appKey header, when logging, then redacts the value but keeps other headers."""
        log_api_request(
            "POST",
            "https://apis.openapi.sk.com/transit/routes",
            headers={"appKey": "tmap-secret", "accept": "application/json"},
        )

        message = mock_logger.info.call_args[0][0]
        assert "Headers:" in message
        assert "appKey" in message
        assert REDACTED in message
        assert "tmap-secret" not in message
        assert "application/json" in message

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=True)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_logging_with_dict_payload_then_keeps_korean_text(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given a dict payload with Korean text, when logging, then it is written unescaped."""
        log_api_request("POST", "https://example.com/api", payload={"stSrch": "강남역", "count": 10})

        message = mock_logger.info.call_args[0][0]
        assert "Payload:" in message
        assert "강남역" in message
        assert '"count": 10' in message

    @patch("blindroute.adapters.api_request_logger.should_log_requests", return_value=True)
    @patch("blindroute.adapters.api_request_logger.logger")
    def test_when_logging_with_string_payload_then_logs_as_string(
        self, mock_logger: MagicMock, _mock_should_log: MagicMock
    ) -> None:
        """Given string payload, when logging, then logs as-is."""
        log_api_request("POST", "https://example.com/api", payload="raw body")

        assert "Payload: raw body" in mock_logger.info.call_args[0][0]
