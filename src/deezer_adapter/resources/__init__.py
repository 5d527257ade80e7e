"""
Deezer resource types, registered with the resource registry on import
"""

from .base import Resource
from .registry import RESOURCE_REGISTRY, ResourceRegistry, register_resource
from .album import Album
from .artist import Artist
from .chart import Chart
from .editorial import Editorial
from .episode import Episode
from .genre import Genre
from .playlist import Playlist
from .podcast import Podcast
from .radio import Radio
from .track import Track
from .user import User

# Search results are typed item by item; a 'search' object itself is never built
RESOURCE_REGISTRY.register("search", None)

__all__ = [
    'Resource',
    'ResourceRegistry',
    'RESOURCE_REGISTRY',
    'register_resource',
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
