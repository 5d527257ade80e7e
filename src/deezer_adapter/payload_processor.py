"""
PayloadProcessor module for materializing raw JSON payloads into typed resources
"""

import json
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from .exceptions import DeezerUnknownResource
from .pagination import PageEnvelope
from .resources.base import Resource
from .resources.registry import RESOURCE_REGISTRY, ResourceRegistry

if TYPE_CHECKING:
    from .client import DeezerClient


class PayloadProcessor:
    """Recursively converts JSON payloads into resources, lists or page envelopes"""

    def __init__(self, client: "DeezerClient", registry: Optional[ResourceRegistry] = None):
        self.client = client
        self.registry = registry or RESOURCE_REGISTRY
        self.logger = logging.getLogger(__name__)

    def process(self, item: Any, paginate_list: bool = False,
                parent: Optional[Resource] = None,
                resource_type: Optional[type] = None,
                resource_id: Any = None) -> Any:
        """
        Materialize one payload

        Args:
            item: Decoded JSON payload
            paginate_list: Return a PageEnvelope for paged payloads instead of a list
            parent: Resource the payload was requested through, attached as back-reference
            resource_type: Class to use when the payload carries no 'type'
            resource_id: Synthetic id used only when the payload has none

        Returns:
            A Resource, a list of resources, or a PageEnvelope

        Raises:
            DeezerUnknownResource: If no resource class can be resolved
        """
        if isinstance(item, list):
            return [self._process_child(value, parent) for value in item]

        if not isinstance(item, dict):
            raise DeezerUnknownResource(f"Unable to materialize non-object payload: {item!r}")

        if self.is_page(item):
            parsed_data = [self._process_child(value, parent) for value in item['data']]
            if not paginate_list:
                return parsed_data
            return PageEnvelope(
                data=parsed_data,
                total=item.get('total'),
                next=item.get('next'),
                prev=item.get('prev'),
            )

        result: Dict[str, Any] = {}
        envelopes: Dict[str, Dict[str, Any]] = {}
        for key, value in item.items():
            if isinstance(value, dict) and ('type' in value or 'data' in value):
                if self.is_page(value):
                    envelopes[key] = {k: v for k, v in value.items() if k != 'data'}
                # Nested objects share the request's parent, like the items of a page
                value = self.process(value, parent=parent)
            result[key] = value

        if parent is not None and parent.type and parent.type not in result:
            # Embedded data wins over the synthetic back-reference
            result[parent.type] = parent

        if result.get('id') is None and resource_id is not None:
            result['id'] = resource_id

        resource_class = self.resolve_class(result, resource_type)
        return resource_class(self.client, result, envelopes=envelopes)

    @staticmethod
    def is_page(item: Dict[str, Any]) -> bool:
        """A payload is a page envelope when its 'data' field is a list"""
        return isinstance(item.get('data'), list)

    def resolve_class(self, result: Dict[str, Any], resource_type: Optional[type] = None) -> type:
        """
        Choose the class to instantiate for an object payload

        Resolution order: registered 'type', then the generic Resource for an
        unregistered 'type' or an id-bearing payload without override, then
        the explicit override.

        Args:
            result: Object payload after nested materialization
            resource_type: Explicit override supplied by the caller

        Returns:
            Resource subclass

        Raises:
            DeezerUnknownResource: If nothing resolves, or the type maps to no class
        """
        type_name = result.get('type')

        if type_name is not None and self.registry.is_registered(type_name):
            resource_class = self.registry.resolve(type_name)
            if resource_class is None:
                raise DeezerUnknownResource(
                    f"Type '{type_name}' has no resource class for {self._describe(result)}"
                )
            return resource_class

        if type_name is not None or (resource_type is None and result.get('id') is not None):
            if type_name is not None:
                self.logger.debug(f"Unregistered resource type '{type_name}', using generic Resource")
            return Resource

        if resource_type is not None:
            return resource_type

        raise DeezerUnknownResource(f"Unable to find resource type for {self._describe(result)}")

    def _process_child(self, value: Any, parent: Optional[Resource]) -> Any:
        if isinstance(value, (dict, list)):
            return self.process(value, parent=parent)
        return value

    @staticmethod
    def _describe(result: Dict[str, Any]) -> str:
        plain = {k: v for k, v in result.items() if not isinstance(v, (Resource, list))}
        return json.dumps(plain, default=str)
