"""
Genre resource
"""

from typing import Any, Dict, List, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import register_resource


@register_resource("genre")
class Genre(Resource):
    """To work with Deezer genre objects"""

    def get_artists(self, params: Optional[Dict[str, Any]] = None) -> List[Resource]:
        """All artists of the genre"""
        return self.get_relation('artists', params=params)

    def get_podcasts(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        return self.get_paginated_list('podcasts', params=params)

    def get_radios(self, params: Optional[Dict[str, Any]] = None) -> List[Resource]:
        """All radios of the genre"""
        return self.get_relation('radios', params=params)
