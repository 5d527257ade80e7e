"""
User resource
"""

from typing import Any, Dict, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import decode_date, register_resource


@register_resource("user", decoders={
    'birthday': decode_date,
    'inscription_date': decode_date,
})
class User(Resource):
    """To work with Deezer user objects"""

    def get_albums(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Favourite albums of the user"""
        return self.get_paginated_list('albums', params=params)

    def get_artists(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Favourite artists of the user"""
        return self.get_paginated_list('artists', params=params)

    def get_followers(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('followers', params=params)

    def get_followings(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('followings', params=params)

    def get_playlists(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Public playlists of the user"""
        return self.get_paginated_list('playlists', params=params)

    def get_tracks(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Favourite tracks of the user"""
        return self.get_paginated_list('tracks', params=params)
