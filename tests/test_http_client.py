"""
Test suite for HTTPClient component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
from unittest.mock import Mock, patch
import requests

from deezer_adapter.http_client import HTTPClient, APIRequest
from deezer_adapter.exceptions import (
    DeezerErrorResponse,
    DeezerForbiddenError,
    DeezerHTTPError,
    DeezerMalformedResponseError,
    DeezerNetworkError,
    DeezerNotFoundError,
    DeezerQuotaExceededError,
    DeezerRetryableException,
    DeezerRetryableHTTPError,
)


def build_response(status_code=200, body=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = body if body is not None else {}
    return response


def build_session(*responses):
    session = Mock()
    session.get.side_effect = list(responses)
    return session


class TestHTTPClient:
    """Test suite for HTTPClient API communication functionality"""

    @patch('requests.Session')
    def test_make_request_with_successful_response_returns_parsed_json(self, mock_session_class,
                                                                      rate_limit_tracker):
        """
        Test that a 2xx JSON response is returned as decoded data
        """
        # Arrange
        mock_session_class.return_value = build_session(
            build_response(body={'id': 302127, 'type': 'album', 'title': 'Discovery'})
        )
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act
        result = http_client.make_request(APIRequest(path='album/302127'))

        # Assert
        assert result == {'id': 302127, 'type': 'album', 'title': 'Discovery'}

    @patch('requests.Session')
    def test_make_request_with_parameters_sends_encoded_query_and_headers(self, mock_session_class,
                                                                         rate_limit_tracker):
        """
        Test that the URL, query parameters and merged headers reach the session
        """
        # Arrange
        session = build_session(build_response(body={'data': []}))
        mock_session_class.return_value = session
        http_client = HTTPClient(headers={'Accept-Language': 'fr'},
                                 rate_limit_tracker=rate_limit_tracker)
        api_request = APIRequest(path='search', parameters={'q': 'daft punk', 'index': 25, 'strict': None})

        # Act
        http_client.make_request(api_request)

        # Assert
        session.get.assert_called_once_with(
            'https://api.deezer.com/search',
            params={'q': 'daft punk', 'index': '25'},
            headers={'Accept': 'application/json', 'Accept-Language': 'fr'},
            timeout=10.0
        )

    @pytest.mark.parametrize("status_code,expected_error", [
        (403, DeezerForbiddenError),
        (404, DeezerNotFoundError),
        (500, DeezerHTTPError),
    ])
    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_non_retryable_status_raises_without_retry(
            self, mock_session_class, mock_sleep, status_code, expected_error, rate_limit_tracker):
        """
        Test that non-retryable HTTP errors are raised on the first attempt
        """
        # Arrange
        session = build_session(build_response(status_code=status_code, reason="Error"))
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(expected_error) as exc_info:
            http_client.make_request(APIRequest(path='album/0'))

        assert exc_info.value.status_code == status_code
        assert not isinstance(exc_info.value, DeezerRetryableException)
        assert session.get.call_count == 1
        mock_sleep.assert_not_called()

    @patch('random.random', return_value=0.0)
    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_persistent_gateway_error_retries_then_raises_last_error(
            self, mock_session_class, mock_sleep, mock_random, rate_limit_tracker):
        """
        Test that a 503 is attempted three times with exponential backoff between attempts
        """
        # Arrange
        session = build_session(*[build_response(status_code=503, reason="Service Unavailable")
                                  for _ in range(3)])
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerRetryableHTTPError) as exc_info:
            http_client.make_request(APIRequest(path='album/302127'))

        assert exc_info.value.status_code == 503
        assert session.get.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [pytest.approx(1.5), pytest.approx(3.0)]

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_transient_error_recovers_on_retry(self, mock_session_class, mock_sleep,
                                                                rate_limit_tracker):
        """
        Test that a request succeeding after a gateway error returns the later body
        """
        # Arrange
        session = build_session(
            build_response(status_code=502, reason="Bad Gateway"),
            build_response(body={'id': 27, 'type': 'artist'})
        )
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act
        result = http_client.make_request(APIRequest(path='artist/27'))

        # Assert
        assert result == {'id': 27, 'type': 'artist'}
        assert session.get.call_count == 2
        assert mock_sleep.call_count == 1

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_functional_error_body_raises_error_response(self, mock_session_class,
                                                                          mock_sleep, rate_limit_tracker):
        """
        Test that an error object in a 200 body is raised once with its details
        """
        # Arrange
        body = {'error': {'type': 'DataException', 'message': 'no data', 'code': 800}}
        session = build_session(build_response(body=body))
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerErrorResponse) as exc_info:
            http_client.make_request(APIRequest(path='album/0'))

        assert exc_info.value.error_type == 'DataException'
        assert exc_info.value.code == 800
        assert str(exc_info.value) == 'no data'
        assert session.get.call_count == 1
        mock_sleep.assert_not_called()

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_quota_error_body_retries_as_quota_exceeded(self, mock_session_class,
                                                                         mock_sleep, rate_limit_tracker):
        """
        Test that the quota error message is mapped to a retryable quota error
        """
        # Arrange
        body = {'error': {'type': 'Exception', 'message': 'Quota limit exceeded', 'code': 4}}
        session = build_session(*[build_response(body=body) for _ in range(3)])
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerQuotaExceededError):
            http_client.make_request(APIRequest(path='chart/0'))

        assert session.get.call_count == 3
        assert mock_sleep.call_count == 2

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_too_many_requests_status_raises_quota_exceeded(self, mock_session_class,
                                                                             mock_sleep, rate_limit_tracker):
        """
        Test that HTTP 429 is treated as quota exhaustion
        """
        # Arrange
        session = build_session(*[build_response(status_code=429, reason="Too Many Requests")
                                  for _ in range(3)])
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerQuotaExceededError):
            http_client.make_request(APIRequest(path='chart/0'))

        assert session.get.call_count == 3

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_connection_failure_raises_network_error(self, mock_session_class,
                                                                      mock_sleep, rate_limit_tracker):
        """
        Test that transport failures are wrapped and retried
        """
        # Arrange
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
        mock_session_class.return_value = session
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerNetworkError) as exc_info:
            http_client.make_request(APIRequest(path='album/302127'))

        assert isinstance(exc_info.value.original_error, requests.exceptions.ConnectionError)
        assert session.get.call_count == 3

    @patch('requests.Session')
    def test_make_request_with_non_json_body_raises_malformed_response(self, mock_session_class,
                                                                      rate_limit_tracker):
        """
        Test that a 2xx response without a JSON body is rejected
        """
        # Arrange
        response = build_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_session_class.return_value = build_session(response)
        http_client = HTTPClient(rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        with pytest.raises(DeezerMalformedResponseError):
            http_client.make_request(APIRequest(path='album/302127'))

    @patch('time.sleep')
    @patch('requests.Session')
    def test_make_request_with_retries_acquires_rate_limit_slot_per_attempt(self, mock_session_class,
                                                                           mock_sleep):
        """
        Test that every physical attempt passes through the rate limiter
        """
        # Arrange
        tracker = Mock()
        tracker.acquire.return_value = 0.0
        mock_session_class.return_value = build_session(
            *[build_response(status_code=504, reason="Gateway Timeout") for _ in range(3)]
        )
        http_client = HTTPClient(rate_limit_tracker=tracker)

        # Act
        with pytest.raises(DeezerRetryableHTTPError):
            http_client.make_request(APIRequest(path='album/302127'))

        # Assert
        assert tracker.acquire.call_count == 3

    @pytest.mark.parametrize("attempt", [0, 1, 2])
    @pytest.mark.parametrize("random_value", [0.0, 0.5, 0.999999])
    def test_compute_backoff_with_attempt_stays_within_jitter_bounds(self, attempt, random_value,
                                                                    rate_limit_tracker):
        """
        Test that the delay is base * 2^attempt scaled into [0.75, 1.25)
        """
        # Arrange
        http_client = HTTPClient(base_delay=2.0, rate_limit_tracker=rate_limit_tracker)

        # Act
        with patch('random.random', return_value=random_value):
            delay = http_client.compute_backoff(attempt)

        # Assert
        nominal = 2.0 * (2 ** attempt)
        assert nominal * 0.75 <= delay < nominal * 1.25

    def test_encode_parameters_with_mixed_values_stringifies_and_drops_none(self):
        """
        Test that query parameters are flattened to strings
        """
        # Act
        encoded = HTTPClient.encode_parameters({'index': 0, 'strict': True, 'order': None, 'q': 'x'})

        # Assert
        assert encoded == {'index': '0', 'strict': 'true', 'q': 'x'}

    def test_build_url_with_leading_slash_joins_single_separator(self, rate_limit_tracker):
        """
        Test that paths are joined onto the base URL without doubled slashes
        """
        # Arrange
        http_client = HTTPClient(base_url='https://api.deezer.com/', rate_limit_tracker=rate_limit_tracker)

        # Act & Assert
        assert http_client.build_url('/album/1') == 'https://api.deezer.com/album/1'

    def test_init_with_zero_attempts_raises_value_error(self, rate_limit_tracker):
        """
        Test that at least one attempt is required
        """
        # Act & Assert
        with pytest.raises(ValueError):
            HTTPClient(max_attempts=0, rate_limit_tracker=rate_limit_tracker)
