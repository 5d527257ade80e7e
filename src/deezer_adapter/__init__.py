"""
Deezer API adapter package
Provides a typed, rate limited client for the public Deezer catalogue API
"""

from .config_loader import ClientConfig, ConfigLoader, ConfigurationError, configure_logging
from .rate_limit_tracker import RateLimitTracker, get_default_tracker
from .http_client import HTTPClient, APIRequest
from .pagination import PaginatedList, PageEnvelope, CursorPagination, SequenceState
from .payload_processor import PayloadProcessor
from .client import DeezerClient
from .exceptions import (
    DeezerAPIException,
    DeezerRetryableException,
    DeezerQuotaExceededError,
    DeezerNetworkError,
    DeezerHTTPError,
    DeezerRetryableHTTPError,
    DeezerForbiddenError,
    DeezerNotFoundError,
    DeezerErrorResponse,
    DeezerMalformedResponseError,
    DeezerUnknownResource,
    DeezerFieldNotAvailable,
    DeezerIndexOutOfBounds,
)
from .resources import (
    Resource,
    Album,
    Artist,
    Chart,
    Editorial,
    Episode,
    Genre,
    Playlist,
    Podcast,
    Radio,
    Track,
    User,
)

__all__ = [
    'DeezerClient',
    'ClientConfig',
    'ConfigLoader',
    'ConfigurationError',
    'configure_logging',
    'RateLimitTracker',
    'get_default_tracker',
    'HTTPClient',
    'APIRequest',
    'PaginatedList',
    'PageEnvelope',
    'CursorPagination',
    'SequenceState',
    'PayloadProcessor',
    'DeezerAPIException',
    'DeezerRetryableException',
    'DeezerQuotaExceededError',
    'DeezerNetworkError',
    'DeezerHTTPError',
    'DeezerRetryableHTTPError',
    'DeezerForbiddenError',
    'DeezerNotFoundError',
    'DeezerErrorResponse',
    'DeezerMalformedResponseError',
    'DeezerUnknownResource',
    'DeezerFieldNotAvailable',
    'DeezerIndexOutOfBounds',
    'Resource',
    'Album',
    'Artist',
    'Chart',
    'Editorial',
    'Episode',
    'Genre',
    'Playlist',
    'Podcast',
    'Radio',
    'Track',
    'User'
]
