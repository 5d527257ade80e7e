"""
Test suite for PayloadProcessor component
Following TDD approach with AAA pattern and descriptive naming
"""

from datetime import datetime, timezone

import pytest
from unittest.mock import Mock

from deezer_adapter.exceptions import DeezerUnknownResource
from deezer_adapter.pagination import PageEnvelope
from deezer_adapter.payload_processor import PayloadProcessor
from deezer_adapter.resources import Album, Artist, Chart, Genre, Resource, Track


@pytest.fixture
def processor():
    return PayloadProcessor(Mock())


class TestPayloadProcessor:
    """Test suite for PayloadProcessor materialization functionality"""

    def test_process_with_registered_type_returns_matching_resource(self, processor):
        """
        Test that the 'type' discriminator selects the registered class
        """
        # Arrange
        payload = {'id': 302127, 'type': 'album', 'title': 'Discovery'}

        # Act
        result = processor.process(payload)

        # Assert
        assert isinstance(result, Album)
        assert result.id == 302127
        assert result.title == 'Discovery'
        assert result.client is processor.client

    def test_process_with_list_payload_returns_list_of_resources(self, processor):
        """
        Test that a top-level array is materialized element by element
        """
        # Arrange
        payload = [{'id': 1, 'type': 'genre', 'name': 'Pop'}, {'id': 2, 'type': 'genre', 'name': 'Rock'}]

        # Act
        result = processor.process(payload)

        # Assert
        assert [type(item) for item in result] == [Genre, Genre]
        assert [item.name for item in result] == ['Pop', 'Rock']

    def test_process_with_page_payload_returns_plain_list_by_default(self, processor):
        """
        Test that a page envelope collapses to its data when not paginating
        """
        # Arrange
        payload = {'data': [{'id': 3135556, 'type': 'track'}], 'total': 1}

        # Act
        result = processor.process(payload)

        # Assert
        assert isinstance(result, list)
        assert isinstance(result[0], Track)

    def test_process_with_page_payload_and_paginate_list_returns_envelope(self, processor):
        """
        Test that paginated requests keep total and cursor links
        """
        # Arrange
        payload = {
            'data': [{'id': 3135556, 'type': 'track'}],
            'total': 40,
            'next': 'https://api.deezer.com/album/302127/tracks?index=25',
        }

        # Act
        result = processor.process(payload, paginate_list=True)

        # Assert
        assert isinstance(result, PageEnvelope)
        assert result.total == 40
        assert result.next == 'https://api.deezer.com/album/302127/tracks?index=25'
        assert result.prev is None
        assert isinstance(result.data[0], Track)

    def test_process_with_unregistered_type_returns_generic_resource(self, processor):
        """
        Test that an unknown but present 'type' falls back to Resource
        """
        # Arrange
        payload = {'id': 9, 'type': 'livestream', 'title': 'Live'}

        # Act
        result = processor.process(payload)

        # Assert
        assert type(result) is Resource
        assert result.title == 'Live'

    def test_process_with_id_but_no_type_returns_generic_resource(self, processor):
        """
        Test that an id-bearing payload without type or override is a generic Resource
        """
        # Act
        result = processor.process({'id': 5, 'name': 'untyped'})

        # Assert
        assert type(result) is Resource
        assert result.id == 5

    def test_process_with_override_and_synthetic_zero_id_assigns_id(self, processor):
        """
        Test that an untyped, id-less payload uses the override and the synthetic id 0
        """
        # Arrange
        payload = {'tracks': [], 'albums': []}

        # Act
        result = processor.process(payload, resource_type=Chart, resource_id=0)

        # Assert
        assert isinstance(result, Chart)
        assert result.id == 0
        assert result.type == 'chart'

    def test_process_with_payload_id_zero_keeps_payload_id(self, processor):
        """
        Test that an id of 0 counts as present and is not replaced
        """
        # Act
        result = processor.process({'id': 0, 'type': 'genre', 'name': 'All'}, resource_id=42)

        # Assert
        assert result.id == 0

    def test_process_without_type_id_or_override_raises_unknown_resource(self, processor):
        """
        Test that an unresolvable payload is rejected
        """
        # Act & Assert
        with pytest.raises(DeezerUnknownResource):
            processor.process({'name': 'mystery'})

    def test_process_with_search_type_raises_unknown_resource(self, processor):
        """
        Test that a type registered without a class cannot be instantiated
        """
        # Act & Assert
        with pytest.raises(DeezerUnknownResource):
            processor.process({'id': 1, 'type': 'search'})

    def test_process_with_scalar_payload_raises_unknown_resource(self, processor):
        """
        Test that scalars are not accepted as payloads
        """
        # Act & Assert
        with pytest.raises(DeezerUnknownResource):
            processor.process("unexpected")

    def test_process_with_nested_typed_objects_materializes_them(self, processor):
        """
        Test that embedded typed objects and embedded pages become resources
        """
        # Arrange
        payload = {
            'id': 302127,
            'type': 'album',
            'artist': {'id': 27, 'name': 'Daft Punk', 'type': 'artist'},
            'genres': {'data': [{'id': 113, 'name': 'Dance', 'type': 'genre'}]},
        }

        # Act
        result = processor.process(payload)

        # Assert
        assert isinstance(result.artist, Artist)
        assert result.artist.name == 'Daft Punk'
        assert [type(genre) for genre in result.genres] == [Genre]

    def test_process_with_registered_decoders_parses_dates_and_contributors(self, processor):
        """
        Test that per-field decoders run during construction
        """
        # Arrange
        payload = {
            'id': 302127,
            'type': 'album',
            'release_date': '2001-03-07',
            'contributors': [{'id': 27, 'name': 'Daft Punk', 'type': 'artist'}],
        }

        # Act
        result = processor.process(payload)

        # Assert
        assert result.release_date == datetime(2001, 3, 7, tzinfo=timezone.utc)
        assert isinstance(result.contributors[0], Artist)

    def test_process_with_parent_attaches_back_reference(self, processor):
        """
        Test that children requested through a parent point back at it
        """
        # Arrange
        album = processor.process({'id': 302127, 'type': 'album'})
        payload = {'data': [{'id': 3135556, 'type': 'track'}, {'id': 3135557, 'type': 'track'}]}

        # Act
        tracks = processor.process(payload, parent=album)

        # Assert
        assert all(track.album is album for track in tracks)
        assert 'album' in tracks[0].fields

    def test_process_with_parent_and_embedded_field_keeps_embedded_value(self, processor):
        """
        Test that an embedded object wins over the parent back-reference
        """
        # Arrange
        artist = processor.process({'id': 27, 'type': 'artist'})
        payload = {'id': 3135556, 'type': 'track', 'artist': {'id': 1, 'type': 'artist', 'name': 'Other'}}

        # Act
        track = processor.process(payload, parent=artist)

        # Assert
        assert track.artist is not artist
        assert track.artist.id == 1

    def test_process_with_parent_attaches_back_reference_to_nested_objects(self, processor):
        """
        Test that objects embedded in a child also point back at the request parent
        """
        # Arrange
        album = processor.process({'id': 1, 'type': 'album'})
        payload = {'data': [{'id': 3135556, 'type': 'track',
                             'artist': {'id': 27, 'type': 'artist', 'name': 'Daft Punk'}}]}

        # Act
        tracks = processor.process(payload, parent=album)

        # Assert
        assert tracks[0].album is album
        assert tracks[0].artist.album is album
        assert tracks[0].artist.fields == ['id', 'type', 'name', 'album']
        assert tracks[0].artist.as_dict()['album'] == {'id': 1, 'type': 'album'}

    def test_process_with_track_embedded_in_album_links_back_to_equivalent_album(self, processor):
        """
        Test that a track embedded in an album carries an album with the same id
        """
        # Arrange
        payload = {
            'id': 302127,
            'type': 'album',
            'tracks': {'data': [{'id': 3135556, 'type': 'track',
                                 'album': {'id': 302127, 'type': 'album'}}]},
        }

        # Act
        album = processor.process(payload)

        # Assert
        assert album.tracks[0].album.id == album.id
        assert isinstance(album.tracks[0].album, Album)
