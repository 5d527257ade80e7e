"""
Album resource
"""

from typing import Any, Dict, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import decode_date, register_resource, resource_list_decoder


@register_resource("album", decoders={
    'release_date': decode_date,
    'contributors': resource_list_decoder("artist"),
})
class Album(Resource):
    """
    To work with Deezer album objects

    Notable fields: title, cover, genres (list of Genre), release_date
    (datetime), contributors (list of Artist), artist, tracks.
    """

    def get_artist(self):
        """
        Fetch the full artist of the album

        Returns:
            Artist instance
        """
        artist = self.ensure_field('artist')
        return self.client.get_artist(artist.id)

    def get_tracks(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """
        Get the tracks of the album

        Returns:
            PaginatedList of Track instances, each pointing back at this album
        """
        return self.get_paginated_list('tracks', params=params)
