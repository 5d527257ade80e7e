"""
Resource module defining the base class shared by every Deezer domain type
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Set, TYPE_CHECKING

from ..dates import format_date
from ..exceptions import DeezerFieldNotAvailable
from ..pagination import PaginatedList
from .registry import RESOURCE_REGISTRY

if TYPE_CHECKING:
    from ..client import DeezerClient


class Resource:
    """
    Base class for all Deezer resources

    Instances are built from a JSON mapping: every field present in the
    mapping becomes an attribute, after the decoder registered for that
    (type, field) pair has been applied. The list of field names seen at
    construction time is kept so partial objects can be completed later
    and serialized back without picking up unrelated attributes.

    A field named after a parent resource's type (e.g. ``album`` on a track
    fetched through an album) may hold a back-reference to that parent. The
    parent is not owned by this object and is never re-fetched through it.
    """

    type: Optional[str] = None
    id: Any = None

    def __init__(self, client: "DeezerClient", json: Dict[str, Any],
                 envelopes: Optional[Dict[str, Dict[str, Any]]] = None):
        self.client = client
        self._fetched = False
        # Metadata (total, next...) of fields that arrived as {"data": [...]} pages
        self._envelopes: Dict[str, Dict[str, Any]] = dict(envelopes or {})
        type_name = type(self).type

        decoded: Dict[str, Any] = {}
        for field_name, value in json.items():
            decoder = RESOURCE_REGISTRY.decoder_for(type_name, field_name)
            decoded[field_name] = decoder(client, value) if decoder else value

        self._fields: List[str] = list(decoded)
        for field_name, value in decoded.items():
            setattr(self, field_name, value)

    def __repr__(self) -> str:
        name = getattr(self, 'name', None) or getattr(self, 'title', None)
        if name:
            return f"<{type(self).__name__}: {self.id} {name!r}>"
        return f"<{type(self).__name__}: {self.id}>"

    @property
    def fields(self) -> List[str]:
        """Names of the fields currently loaded on this instance"""
        return list(self._fields)

    @property
    def fetched(self) -> bool:
        """True once the full record has been fetched for this instance"""
        return self._fetched

    def as_dict(self) -> Dict[str, Any]:
        """
        Serialize the loaded fields to plain JSON-compatible values

        Returns:
            Mapping with nested resources serialized recursively and dates
            rendered back to the service's string format
        """
        return self._serialize(set())

    def _serialize(self, in_progress: Set[int]) -> Dict[str, Any]:
        in_progress = in_progress | {id(self)}
        serialized = {}
        for field_name in self._fields:
            value = _serialize_value(getattr(self, field_name), in_progress)
            if field_name in self._envelopes and isinstance(value, list):
                value = {'data': value, **self._envelopes[field_name]}
            serialized[field_name] = value
        return serialized

    def get_relation(self, relation: str, resource_type: Optional[type] = None,
                     params: Optional[Dict[str, Any]] = None, fwd_parent: bool = True) -> Any:
        """
        Fetch a relation of this resource as a plain (non-paginated) result

        Args:
            relation: Relation name appended to the resource path
            resource_type: Class to use when the payload carries no type
            params: Extra query parameters
            fwd_parent: Whether to attach this resource as parent of the results

        Returns:
            Materialized resource or list of resources
        """
        return self.client.request(
            "GET",
            f"{self.type}/{self.id}/{relation}",
            parent=self if fwd_parent else None,
            resource_type=resource_type,
            params=params,
        )

    def get_paginated_list(self, relation: str,
                           params: Optional[Dict[str, Any]] = None) -> PaginatedList:
        """
        Build a lazy paginated list over a relation of this resource

        Args:
            relation: Relation name appended to the resource path
            params: Extra query parameters for the first page

        Returns:
            PaginatedList yielding related resources with this resource as parent
        """
        return PaginatedList(
            self.client,
            f"{self.type}/{self.id}/{relation}",
            parent=self,
            params=params,
        )

    def ensure_field(self, field_name: str) -> Any:
        """
        Return a field, completing this instance with a full fetch if needed

        The full record is fetched at most once per instance. Fields already
        loaded locally are kept; only missing ones are copied over.

        Args:
            field_name: Name of the field to return

        Returns:
            The field value

        Raises:
            DeezerFieldNotAvailable: If the field is absent even after completion
        """
        if field_name in self._fields:
            return getattr(self, field_name)

        if not self._fetched:
            full_resource = self.get()
            full_envelopes = getattr(full_resource, '_envelopes', {})
            for name in getattr(full_resource, '_fields', []):
                if name not in self._fields:
                    setattr(self, name, getattr(full_resource, name))
                    self._fields.append(name)
                    if name in full_envelopes:
                        self._envelopes[name] = full_envelopes[name]

            if field_name in self._fields:
                return getattr(self, field_name)

        raise DeezerFieldNotAvailable(field_name, type(self).__name__, self.id)

    def get(self) -> "Resource":
        """
        Fetch the full record of this resource

        Returns:
            A new, fully populated instance of the same resource
        """
        full_resource = self.client.request("GET", f"{self.type}/{self.id}")
        self._fetched = True
        return full_resource


def _serialize_value(value: Any, in_progress: Set[int]) -> Any:
    if isinstance(value, Resource):
        if id(value) in in_progress:
            # Cycle through a back-reference, emit a stub instead of recursing
            return {'id': value.id, 'type': value.type}
        return value._serialize(in_progress)
    if isinstance(value, list):
        return [_serialize_value(item, in_progress) for item in value]
    if isinstance(value, datetime):
        return format_date(value)
    return value
