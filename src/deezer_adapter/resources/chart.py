"""
Chart resource
"""

from typing import Any, Dict, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import register_resource


@register_resource("chart")
class Chart(Resource):
    """
    To work with Deezer chart objects

    Chart payloads carry neither 'type' nor 'id': the client requests them
    with Chart as explicit type and the genre id as synthetic id. Fields are
    tracks, albums, artists, playlists and podcasts, each a list.
    """

    def get_tracks(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('tracks', params=params)

    def get_albums(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('albums', params=params)

    def get_artists(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('artists', params=params)

    def get_playlists(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('playlists', params=params)

    def get_podcasts(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('podcasts', params=params)
