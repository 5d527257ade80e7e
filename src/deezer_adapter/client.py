"""
DeezerClient module providing the entry point to the Deezer public API
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config_loader import ClientConfig, ConfigLoader, configure_logging
from .http_client import APIRequest, HTTPClient
from .pagination import PaginatedList
from .payload_processor import PayloadProcessor
from .rate_limit_tracker import RateLimitTracker, get_default_tracker
from .resources import (
    Album,
    Artist,
    Chart,
    Editorial,
    Episode,
    Genre,
    Playlist,
    Podcast,
    Radio,
    Resource,
    Track,
    User,
)


class DeezerClient:
    """
    A client to retrieve resources from the public Deezer API

    Every request goes through a single HTTPClient, which applies the shared
    rate limit and retries transient failures, and every response is turned
    into resources by a PayloadProcessor bound to this client.

    Example:
        client = DeezerClient(headers={'Accept-Language': 'fr'})
        album = client.get_album(302127)
        for track in album.get_tracks():
            print(track.title)
    """

    def __init__(self, headers: Optional[Dict[str, str]] = None,
                 config: Optional[ClientConfig] = None,
                 http_client: Optional[HTTPClient] = None,
                 rate_limit_tracker: Optional[RateLimitTracker] = None):
        """
        Initialize the client

        Args:
            headers: Extra HTTP headers sent with every request (e.g. Accept-Language)
            config: Client configuration, defaults to the public service settings
                with any DEEZER_* environment variables applied
            http_client: Pre-built transport, mainly for testing
            rate_limit_tracker: Tracker to use instead of the process-wide one
        """
        self.config = config or ConfigLoader.load_environment_config()
        self.logger = logging.getLogger(__name__)

        if http_client is None:
            if rate_limit_tracker is None:
                rate_limit_tracker = self._tracker_for(self.config)
            http_client = HTTPClient(
                base_url=self.config.base_url,
                headers={**self.config.headers, **(headers or {})},
                timeout_seconds=self.config.timeout_seconds,
                max_attempts=self.config.retries.max_attempts,
                base_delay=self.config.retries.base_delay_seconds,
                rate_limit_tracker=rate_limit_tracker,
            )
        self.http_client = http_client
        self.processor = PayloadProcessor(self)

    @classmethod
    def from_config_file(cls, config_path: Path, **kwargs) -> "DeezerClient":
        """
        Build a client from a TOML configuration file

        The [logging] table, when present, is applied to the package logger.

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            Configured DeezerClient
        """
        config = ConfigLoader.load_toml_config(Path(config_path))
        if config.logging:
            configure_logging(config.logging)
        return cls(config=config, **kwargs)

    @staticmethod
    def _tracker_for(config: ClientConfig) -> RateLimitTracker:
        tracker = get_default_tracker()
        limits = config.rate_limits
        if (limits.max_requests, limits.window_seconds) == (tracker.max_requests, tracker.window_seconds):
            return tracker
        return RateLimitTracker(max_requests=limits.max_requests,
                                window_seconds=limits.window_seconds)

    def close(self) -> None:
        self.http_client.close()

    def __enter__(self) -> "DeezerClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def request(self, method: str, path: str, paginate_list: bool = False,
                parent: Optional[Resource] = None,
                resource_type: Optional[type] = None,
                resource_id: Any = None,
                params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make a request to the API and materialize the response

        Args:
            method: HTTP method
            path: Path relative to the base URL, e.g. 'album/302127'
            paginate_list: Return a PageEnvelope for paged payloads
            parent: Resource to attach as back-reference on the results
            resource_type: Class to use when the payload carries no type
            resource_id: Synthetic id for payloads that carry none
            params: Query parameters

        Returns:
            A Resource, a list of resources, or a PageEnvelope

        Raises:
            DeezerAPIException: Any transport, service or materialization failure
        """
        payload = self.http_client.make_request(
            APIRequest(path=path, parameters=params or {}, method=method)
        )
        return self.processor.process(
            payload,
            paginate_list=paginate_list,
            parent=parent,
            resource_type=resource_type,
            resource_id=resource_id,
        )

    def get_paginated_list(self, path: str,
                           params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Lazy list over a paged collection endpoint"""
        return PaginatedList(self, path, params=params)

    def get_album(self, album_id: int) -> Album:
        return self.request("GET", f"album/{album_id}")

    def get_artist(self, artist_id: int) -> Artist:
        return self.request("GET", f"artist/{artist_id}")

    def get_chart(self, genre_id: int = 0) -> Chart:
        """
        Overall charts for tracks, albums, artists, playlists and podcasts

        Args:
            genre_id: Genre to chart, 0 for all genres

        Returns:
            Chart whose id is the genre id
        """
        return self.request("GET", f"chart/{genre_id}", resource_type=Chart, resource_id=genre_id)

    def get_tracks_chart(self, genre_id: int = 0) -> List[Track]:
        return self.request("GET", f"chart/{genre_id}/tracks")

    def get_albums_chart(self, genre_id: int = 0) -> List[Album]:
        return self.request("GET", f"chart/{genre_id}/albums")

    def get_artists_chart(self, genre_id: int = 0) -> List[Artist]:
        return self.request("GET", f"chart/{genre_id}/artists")

    def get_playlists_chart(self, genre_id: int = 0) -> List[Playlist]:
        return self.request("GET", f"chart/{genre_id}/playlists")

    def get_podcasts_chart(self, genre_id: int = 0) -> List[Podcast]:
        return self.request("GET", f"chart/{genre_id}/podcasts")

    def get_editorial(self, editorial_id: int) -> Editorial:
        return self.request("GET", f"editorial/{editorial_id}")

    def list_editorials(self) -> PaginatedList:
        return self.get_paginated_list("editorial")

    def get_episode(self, episode_id: int) -> Episode:
        return self.request("GET", f"episode/{episode_id}")

    def get_genre(self, genre_id: int) -> Genre:
        return self.request("GET", f"genre/{genre_id}")

    def list_genres(self) -> List[Genre]:
        return self.request("GET", "genre")

    def get_playlist(self, playlist_id: int) -> Playlist:
        return self.request("GET", f"playlist/{playlist_id}")

    def get_podcast(self, podcast_id: int) -> Podcast:
        return self.request("GET", f"podcast/{podcast_id}")

    def get_radio(self, radio_id: int) -> Radio:
        return self.request("GET", f"radio/{radio_id}")

    def list_radios(self) -> List[Radio]:
        return self.request("GET", "radio")

    def get_radio_top(self) -> PaginatedList:
        return self.get_paginated_list("radio/top")

    def get_track(self, track_id: int) -> Track:
        return self.request("GET", f"track/{track_id}")

    def get_user(self, user_id: int) -> User:
        return self.request("GET", f"user/{user_id}")

    def get_user_flow(self, user_id: int, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Tracks of the user's personal flow"""
        return self.get_paginated_list(f"user/{user_id}/flow", params=params)

    def get_user_albums(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/albums")

    def get_user_artists(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/artists")

    def get_user_followers(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/followers")

    def get_user_followings(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/followings")

    def get_user_tracks(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/tracks")

    def get_user_playlists(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/playlists")

    def get_user_podcasts(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/podcasts")

    def get_user_radios(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/radios")

    def get_user_charts(self, user_id: int) -> PaginatedList:
        return self.get_paginated_list(f"user/{user_id}/charts")

    def search(self, query: str = "", strict: Optional[bool] = None,
               ordering: Optional[str] = None,
               artist: Optional[str] = None,
               album: Optional[str] = None,
               track: Optional[str] = None,
               label: Optional[str] = None,
               dur_min: Optional[int] = None,
               dur_max: Optional[int] = None,
               bpm_min: Optional[int] = None,
               bpm_max: Optional[int] = None) -> PaginatedList:
        """
        Search tracks

        Advanced search terms can be written into the query directly or
        passed as keyword arguments, which become field:"value" terms.

        Args:
            query: Free text query, sent as the q parameter
            strict: Disable fuzzy matching
            ordering: Result ordering as accepted by the service (e.g. 'RANKING')

        Returns:
            PaginatedList of Track instances
        """
        advanced_params = {
            'artist': artist,
            'album': album,
            'track': track,
            'label': label,
            'dur_min': dur_min,
            'dur_max': dur_max,
            'bpm_min': bpm_min,
            'bpm_max': bpm_max,
        }
        return self._search("", query, strict, ordering, advanced_params)

    def search_albums(self, query: str = "", strict: Optional[bool] = None,
                      ordering: Optional[str] = None) -> PaginatedList:
        return self._search("album", query, strict, ordering)

    def search_artists(self, query: str = "", strict: Optional[bool] = None,
                       ordering: Optional[str] = None) -> PaginatedList:
        return self._search("artist", query, strict, ordering)

    def search_playlists(self, query: str = "", strict: Optional[bool] = None,
                         ordering: Optional[str] = None) -> PaginatedList:
        return self._search("playlist", query, strict, ordering)

    def _search(self, path: str, query: str = "", strict: Optional[bool] = None,
                ordering: Optional[str] = None,
                advanced_params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        params: Dict[str, Any] = {'q': self.build_search_query(query, advanced_params)}
        if strict is True:
            params['strict'] = 'on'
        if ordering:
            params['ordering'] = ordering
        return self.get_paginated_list(f"search/{path}" if path else "search", params=params)

    @staticmethod
    def build_search_query(query: str = "", advanced_params: Optional[Dict[str, Any]] = None) -> str:
        """
        Join a free text query and advanced terms into one q parameter

        Args:
            query: Free text part of the query
            advanced_params: Field names mapped to values, None values are skipped

        Returns:
            Query string such as 'eminem artist:"Eminem" dur_min:"300"'
        """
        query_parts = [query] if query else []
        for name, value in (advanced_params or {}).items():
            if value is not None:
                query_parts.append(f'{name}:"{value}"')
        return " ".join(query_parts)
