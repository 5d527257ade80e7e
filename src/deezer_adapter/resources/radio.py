"""
Radio resource
"""

from typing import Any, Dict, List, Optional

from .base import Resource
from .registry import register_resource


@register_resource("radio")
class Radio(Resource):
    """To work with Deezer radio objects"""

    def get_tracks(self, params: Optional[Dict[str, Any]] = None) -> List[Resource]:
        """First tracks of the radio"""
        return self.get_relation('tracks', params=params, fwd_parent=False)
