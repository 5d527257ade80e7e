"""
Exceptions module defining the error taxonomy raised by the Deezer adapter
"""

from typing import Any, Dict, Optional


QUOTA_EXCEEDED_MESSAGE = "Quota limit exceeded"

# Gateway failures worth retrying; 429 is handled as quota exhaustion
RETRYABLE_STATUS_CODES = {502, 503, 504}


class DeezerAPIException(Exception):
    """Base class for all errors raised by the Deezer adapter"""
    pass


class DeezerRetryableException(DeezerAPIException):
    """A request failing with this error might succeed if retried"""
    pass


class DeezerQuotaExceededError(DeezerRetryableException):
    """Raised when the service rejects a request because the quota is spent"""

    def __init__(self, message: str = QUOTA_EXCEEDED_MESSAGE):
        super().__init__(message)


class DeezerNetworkError(DeezerRetryableException):
    """Raised when the HTTP call fails before a response is received"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


class DeezerHTTPError(DeezerAPIException):
    """Wraps a non-2xx HTTP response"""

    def __init__(self, status_code: int, reason: str = "", url: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(_status_message("HTTP", status_code, reason))

    @classmethod
    def from_status(cls, status_code: int, reason: str = "",
                    url: Optional[str] = None) -> DeezerAPIException:
        """
        Build the most specific error for an HTTP status code

        Args:
            status_code: HTTP status of the failed response
            reason: Reason phrase returned by the server
            url: Requested URL, kept for diagnostics

        Returns:
            Typed exception instance matching the status code
        """
        if status_code in RETRYABLE_STATUS_CODES:
            return DeezerRetryableHTTPError(status_code, reason, url)
        if status_code == 403:
            return DeezerForbiddenError(status_code, reason, url)
        if status_code == 404:
            return DeezerNotFoundError(status_code, reason, url)
        if status_code == 429:
            return DeezerQuotaExceededError()
        return cls(status_code, reason, url)


class DeezerRetryableHTTPError(DeezerRetryableException, DeezerHTTPError):
    """An HTTP error caused by a potentially temporary gateway issue"""

    def __init__(self, status_code: int, reason: str = "", url: Optional[str] = None):
        DeezerHTTPError.__init__(self, status_code, reason, url)
        self.args = (_status_message("Retryable HTTP", status_code, reason),)


class DeezerForbiddenError(DeezerHTTPError):
    """HTTP 403, permission denied"""
    pass


class DeezerNotFoundError(DeezerHTTPError):
    """HTTP 404, resource does not exist"""
    pass


class DeezerErrorResponse(DeezerAPIException):
    """A functional error returned in the body of a successful response"""

    def __init__(self, error: Dict[str, Any]):
        self.error_type = error.get('type')
        self.code = error.get('code')
        self.error_message = error.get('message') or "Unknown API error"
        super().__init__(self.error_message)

    @classmethod
    def from_body(cls, error: Dict[str, Any]) -> DeezerAPIException:
        """Map an ``error`` object to quota-exceeded or a functional error"""
        if error.get('message') == QUOTA_EXCEEDED_MESSAGE:
            return DeezerQuotaExceededError()
        return cls(error)


class DeezerMalformedResponseError(DeezerAPIException):
    """Raised when a successful response does not carry a JSON body"""
    pass


class DeezerUnknownResource(DeezerAPIException):
    """Raised when a payload cannot be mapped to a resource type"""
    pass


class DeezerFieldNotAvailable(DeezerAPIException):
    """Raised when a field is neither loaded nor obtainable by a full fetch"""

    def __init__(self, field_name: str, resource_class: str, resource_id: Any):
        self.field_name = field_name
        self.resource_class = resource_class
        self.resource_id = resource_id
        super().__init__(
            f"Field '{field_name}' is not available on {resource_class} with id {resource_id}"
        )


class DeezerIndexOutOfBounds(DeezerAPIException, IndexError):
    """Raised when a paginated list is indexed beyond its extent"""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Index {index} is out of bounds")


def _status_message(prefix: str, status_code: int, reason: str) -> str:
    if reason:
        return f"{prefix} {status_code}: {reason}"
    return f"{prefix} {status_code}"
