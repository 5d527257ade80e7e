"""
Episode resource
"""

from .base import Resource
from .registry import decode_date, register_resource


@register_resource("episode", decoders={'release_date': decode_date})
class Episode(Resource):
    """To work with Deezer podcast episode objects"""

    def get_podcast(self):
        """Fetch the full podcast the episode belongs to"""
        podcast = self.ensure_field('podcast')
        return self.client.get_podcast(podcast.id)
