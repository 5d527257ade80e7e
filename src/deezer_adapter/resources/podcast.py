"""
Podcast resource
"""

from typing import Any, Dict, Optional

from ..pagination import PaginatedList
from .base import Resource
from .registry import register_resource


@register_resource("podcast")
class Podcast(Resource):
    """To work with Deezer podcast objects"""

    def get_episodes(self, params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """Episodes of the podcast, each pointing back at this podcast"""
        return self.get_paginated_list('episodes', params=params)
