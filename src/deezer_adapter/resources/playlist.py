"""
Playlist resource
"""

from typing import Any, Dict, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import register_resource


@register_resource("playlist")
class Playlist(Resource):
    """To work with Deezer playlist objects"""

    def get_tracks(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('tracks', params=params)

    def get_fans(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('fans', params=params)

    def get_creator(self):
        """Fetch the full user who created the playlist"""
        creator = self.ensure_field('creator')
        return self.client.get_user(creator.id)
