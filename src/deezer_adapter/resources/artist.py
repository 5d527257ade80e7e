"""
Artist resource
"""

from typing import Any, Dict, List, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import register_resource


@register_resource("artist")
class Artist(Resource):
    """
    To work with Deezer artist objects

    Notable fields: name, picture, nb_album, nb_fan, radio, tracklist.
    """

    def get_top(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Top tracks of the artist as a PaginatedList of Track"""
        return self.get_paginated_list('top', params=params)

    def get_related(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Related artists as a PaginatedList of Artist"""
        return self.get_paginated_list('related', params=params)

    def get_radio(self, params: Optional[Dict[str, Any]] = None) -> List[Resource]:
        """
        Tracks of the artist's radio

        The radio's tracks feature other artists, so this artist is not
        attached to them as parent.
        """
        return self.get_relation('radio', params=params, fwd_parent=False)

    def get_albums(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('albums', params=params)

    def get_playlists(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('playlists', params=params)
