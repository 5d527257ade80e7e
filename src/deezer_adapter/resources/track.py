"""
Track resource
"""

from .base import Resource
from .registry import decode_date, register_resource, resource_list_decoder


@register_resource("track", decoders={
    'release_date': decode_date,
    'contributors': resource_list_decoder("artist"),
})
class Track(Resource):
    """
    To work with Deezer track objects

    Tracks listed through an album carry that album as back-reference in
    their 'album' field when the payload does not embed one.
    """

    def get_artist(self):
        """Fetch the full artist of the track"""
        artist = self.ensure_field('artist')
        return self.client.get_artist(artist.id)

    def get_album(self):
        """Fetch the full album of the track"""
        album = self.ensure_field('album')
        return self.client.get_album(album.id)
